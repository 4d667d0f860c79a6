# mcp_page_source/decorators/ensure.py
import json
import inspect
import functools


def _not_ready_payload():
    """Return the JSON error for a missing session, or None when the page is ready."""
    from mcp_page_source.context import get_context  # resolved at call time for test resets

    ctx = get_context()
    if ctx.is_page_ready():
        return None
    return json.dumps({
        "ok": False,
        "error": "browser_not_started",
        "message": "Browser session not started. Please call 'start_browser' first before using browser actions.",
    })


def ensure_driver_ready(_func=None):
    """
    Refuse to run a tool until start_browser has attached a driver and a page.
    Does not start the browser itself.
    """
    def decorator(fn):
        if inspect.iscoroutinefunction(fn):
            @functools.wraps(fn)
            async def wrapper(*args, **kwargs):
                payload = _not_ready_payload()
                if payload is not None:
                    return payload
                return await fn(*args, **kwargs)
            return wrapper
        else:
            @functools.wraps(fn)
            def wrapper(*args, **kwargs):
                payload = _not_ready_payload()
                if payload is not None:
                    return payload
                return fn(*args, **kwargs)
            return wrapper
    return decorator if _func is None else decorator(_func)
