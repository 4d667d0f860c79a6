"""Browser lifecycle tool implementations."""

import json

from ..context import get_context
from ..browser.driver import _ensure_driver, close_driver
from ..actions import navigation
from ..utils.diagnostics import collect_diagnostics

import logging
logger = logging.getLogger(__name__)


async def start_browser() -> str:
    """
    Attach to (or launch) Chrome and wrap its current tab.

    Returns:
        JSON string with session info, or an error with diagnostics.
    """
    ctx = get_context()

    try:
        _ensure_driver()
    except Exception as e:
        logger.error(f"Browser start failed: {e}")
        return json.dumps({
            "ok": False,
            "error": "driver_not_initialized",
            "driver_initialized": ctx.is_driver_initialized(),
            "debugger": ctx.get_debugger_address(),
            "diagnostics": {"summary": collect_diagnostics(None, e, ctx.config)},
            "message": f"Failed to attach/launch Chrome: {e}",
        })

    meta = navigation.get_current_page_meta()
    return json.dumps({
        "ok": True,
        "session": "ready",
        "debugger": ctx.get_debugger_address(),
        "url": meta.get("url"),
        "title": meta.get("title"),
    })


async def navigate_to_url(url: str) -> str:
    """Navigate the tab and return JSON with the resulting URL and title."""
    result = navigation.navigate_to_url(url)
    return json.dumps({"action": "navigate", "requested_url": url, **result})


async def close_browser() -> str:
    """End the WebDriver session."""
    closed = close_driver()
    return json.dumps({"ok": True, "closed": closed})


__all__ = ['start_browser', 'navigate_to_url', 'close_browser']
