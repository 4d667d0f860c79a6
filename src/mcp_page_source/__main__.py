#region Overview
"""
## Feature Highlights

* **Filtered, resumable HTML source:** `get_html_source` serializes the live
  document and filters it in a fixed order: tag exclusion, region selection
  (CSS selector, head or body), comment stripping, then compression or
  pretty-printing. The result is cut into a character window with
  `offset` / `max_length`; `hasMore` tells the agent whether to ask for the
  next window at `offset + actualLength`.

* **Presets:** `minimal`, `structure` and `content` are shorthands for common
  option bundles. A preset overrides only the options it names; the
  selector, head/body switches and the window stay the caller's.

* **Replayable request info:** `get_request_info` rebuilds the request that
  loaded the current page, with the cookies that apply to its host, and
  renders it as a curl command. Pass `reload=True` to capture the real
  headers and body from a fresh reload.

* **Request log:** `network_requests` lists every request made since the
  page loaded.

## Known Limitations

* `exclude_tags` (and every preset but `full`) REMOVES the elements from the
  live page. Later calls will not see them until the page is reloaded.
* Comment stripping is a shortest-match pattern. A literal `-->` inside a
  script string ends the match early.
* The curl command does not escape single quotes inside values.
"""
#endregion

#region Imports
import os
import logging
from typing import List, Optional
from mcp.server.fastmcp import FastMCP
#endregion

#region Import from your package
import mcp_page_source as MPS
from mcp_page_source.decorators import (
    tool_envelope,
    exclusive_browser_access,
    ensure_driver_ready,
)
from mcp_page_source.tools import browser_management, html_source, network
#endregion

#region Logger
logger = logging.getLogger(__name__)
#endregion

#region FastMCP Initialization
mcp = FastMCP("mcp_page_source")
#endregion

#region Tools -- Browser
@mcp.tool()
@tool_envelope
@exclusive_browser_access
async def mcp_page_source__start_browser() -> str:
    """
    Attach to the configured Chrome (or launch one) and use its current tab.

    Call this once before any other tool.

    Returns:
        str: JSON with {"ok", "session", "debugger", "url", "title"}.
    """
    return await browser_management.start_browser()


@mcp.tool()
@tool_envelope
@exclusive_browser_access
@ensure_driver_ready
async def mcp_page_source__navigate_to_url(url: str) -> str:
    """
    Navigate the current tab to the given URL.

    Waits until the new document is parsed.

    Args:
        url: Absolute URL to navigate to (e.g., "https://example.com").

    Returns:
        str: JSON with {"ok", "url", "title"}.

    Raises:
        TimeoutException: If the page does not load within MPS_PAGE_LOAD_TIMEOUT.
    """
    return await browser_management.navigate_to_url(url=url)


@mcp.tool()
@tool_envelope
@exclusive_browser_access
async def mcp_page_source__close_browser() -> str:
    """
    End the browser session of this server.

    When attached to a running Chrome, only the automation session ends.
    """
    return await browser_management.close_browser()
#endregion

#region Tools -- Page Source
@mcp.tool()
@tool_envelope
@exclusive_browser_access
@ensure_driver_ready
async def mcp_page_source__get_html_source(
    compress: bool = False,
    exclude_tags: Optional[List[str]] = None,
    include_comments: bool = False,
    pretty_print: bool = False,
    selector: Optional[str] = None,
    max_length: Optional[int] = None,
    offset: int = 0,
    head_only: bool = False,
    body_only: bool = False,
    preset: Optional[str] = None,
) -> str:
    """
    Get the HTML source of the current page with optional filtering and compression.

    Args:
        compress: Minify HTML by removing whitespace between tags and collapsing
            other whitespace. Wins over pretty_print when both are set.
        exclude_tags: Tag names to remove (e.g., ["script", "style", "noscript"]).
            WARNING: removal happens on the live page and persists for later calls.
        include_comments: Keep HTML comments (default: False).
        pretty_print: Put every tag on its own line (ignored when compress=True).
        selector: CSS selector; return only the outer HTML of all matches,
            newline-joined. A selector with no match returns an HTML comment
            saying so.
        max_length: Maximum number of characters to return.
        offset: Starting character position in the filtered HTML. Negative
            values are treated as 0.
        head_only: Return only the <head> section.
        body_only: Return only the <body> section.
        preset: One of {"full", "minimal", "structure", "content"}.
            - minimal: drop script/style/noscript, compress, no comments
            - structure: drop script/style, compress
            - content: drop script/style/meta/link, compress
            Unknown names behave like "full".

    Returns:
        str: JSON {"content", "totalLength", "hasMore", "actualOffset", "actualLength"}.

    Notes:
        - **Pagination Strategy for Large Pages:**
          1. First call: set max_length (e.g. 20000), no offset.
          2. While `hasMore` is true, call again with
             offset = actualOffset + actualLength and the same filters.
          Without max_length, `hasMore` is always false.
        - Filters apply before the window is cut, so keep them identical
          across paginated calls.
    """
    return await html_source.get_html_source(
        compress=compress,
        exclude_tags=exclude_tags,
        include_comments=include_comments,
        pretty_print=pretty_print,
        selector=selector,
        max_length=max_length,
        offset=offset,
        head_only=head_only,
        body_only=body_only,
        preset=preset,
    )
#endregion

#region Tools -- Network
@mcp.tool()
@tool_envelope
@exclusive_browser_access
@ensure_driver_ready
async def mcp_page_source__get_request_info(reload: bool = False) -> str:
    """
    Return the HTTP request information needed to recreate the current page request with curl.

    Args:
        reload: Reload the page first and capture the real document request
            (method, headers, body). Without it, the request is reconstructed
            as a plain GET of the current URL.

    Returns:
        str: JSON {"url", "method", "headers", "cookies", "timestamp",
        "postData"?, "curlCommand"}.

    Notes:
        - Cookies are those of the browser whose domain applies to the URL's host.
        - The curl command is a debugging aid: values are single-quoted but
          embedded single quotes are not escaped.
    """
    return await network.get_request_info(reload=reload)


@mcp.tool()
@tool_envelope
@exclusive_browser_access
@ensure_driver_ready
async def mcp_page_source__network_requests() -> str:
    """
    Return all network requests since loading the page.

    Returns:
        str: One line per request, `[METHOD] url => [status] statusText`;
        the response part is missing while no response has arrived.
    """
    return await network.network_requests()
#endregion


def main() -> None:
    # stdout carries the MCP stdio transport; logs go to stderr.
    logging.basicConfig(
        level=os.getenv("MPS_LOG_LEVEL", "WARNING").upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.warning(f"mcp_page_source from: {getattr(MPS, '__file__', '<namespace>')}")
    mcp.run()


if __name__ == "__main__":
    main()
