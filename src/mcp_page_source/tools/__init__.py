# mcp_page_source/tools/__init__.py
"""
MCP tool implementations - async wrappers that return JSON responses.

This package contains high-level tool implementations that:
- Read the browser session from the shared context
- Call the actions that do the work
- Return JSON-serialized (or plain text) responses
"""

from .browser_management import (
    start_browser,
    navigate_to_url,
    close_browser,
)

from .html_source import (
    get_html_source,
)

from .network import (
    get_request_info,
    network_requests,
)

__all__ = [
    # Browser management
    'start_browser',
    'navigate_to_url',
    'close_browser',
    # Page source
    'get_html_source',
    # Network
    'get_request_info',
    'network_requests',
]
