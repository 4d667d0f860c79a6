"""Request info and network log tool implementations."""

import json

from ..constants import JSON_INDENT
from ..context import get_context
from ..browser.network import render_request
from ..actions.request_info import get_request_info as _get_request_info_action


async def get_request_info(reload: bool = False) -> str:
    """
    Describe the current page's request, with a ready-made curl command.

    Returns:
        JSON string: {"url", "method", "headers", "cookies", "timestamp",
        "postData"?, "curlCommand"}
    """
    ctx = get_context()
    info = _get_request_info_action(ctx.page, reload=bool(reload))
    return json.dumps(info, indent=JSON_INDENT, ensure_ascii=False)


async def network_requests() -> str:
    """
    List the requests made since the page loaded, one per line.

    Returns:
        Plain text, ``[METHOD] url => [status] statusText`` per line.
    """
    ctx = get_context()
    recorder = ctx.page.network
    recorder.pump()
    return "\n".join(render_request(event) for event in recorder.requests())


__all__ = ['get_request_info', 'network_requests']
