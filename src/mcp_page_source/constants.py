"""
Global constants and configuration defaults.
No dependencies - safe to import from anywhere.
"""

import os

# ============================================================================
# Browser Timeouts
# ============================================================================

DOCUMENT_READY_TIMEOUT_SECS = float(os.getenv("MPS_DOCUMENT_READY_TIMEOUT", "10"))
"""Seconds to wait for document.readyState to leave 'loading'."""


# ============================================================================
# Rendering Configuration
# ============================================================================

JSON_INDENT = 2
"""Indentation of the JSON text returned by the tools."""

DEFAULT_FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"
"""Content type assumed for a request body when the request carries none."""


__all__ = [
    "DOCUMENT_READY_TIMEOUT_SECS",
    "JSON_INDENT",
    "DEFAULT_FORM_CONTENT_TYPE",
]
