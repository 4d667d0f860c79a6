# mcp_page_source/decorators/__init__.py
#
# Re-exports decorators from their respective modules.

from .ensure import ensure_driver_ready
from .locking import exclusive_browser_access
from .envelope import tool_envelope

__all__ = [
    "ensure_driver_ready",
    "exclusive_browser_access",
    "tool_envelope",
]
