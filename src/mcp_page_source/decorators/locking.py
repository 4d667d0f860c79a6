# mcp_page_source/decorators/locking.py

"""
Every tool that reads or mutates the tab runs under one in-process asyncio
lock. The request recorder's listener window and the destructive tag
exclusion both rely on this: no two browser tools interleave their page I/O.
"""

import json
import inspect
import functools
import threading


__all__ = [
    "exclusive_browser_access",
]

# Sync tools cannot await the asyncio lock; they share this one instead.
_SYNC_LOCK = threading.Lock()

_CONFIG_VARIABLES = {
    "attach": ["CHROME_REMOTE_DEBUG_PORT", "CHROME_REMOTE_DEBUG_HOST"],
    "launch": ["CHROME_EXECUTABLE_PATH", "CHROME_PROFILE_USER_DATA_DIR", "CHROME_PROFILE_NAME", "MPS_HEADLESS"],
    "optional": ["MPS_PAGE_LOAD_TIMEOUT"],
}


def _config_error():
    """JSON error naming the bad environment variable, or None when the configuration parses."""
    from mcp_page_source.config.environment import get_env_config

    try:
        get_env_config()
    except EnvironmentError as e:
        return json.dumps({
            "ok": False,
            "error": "invalid_configuration",
            "message": f"Browser configuration error: {e}",
            "details": _CONFIG_VARIABLES,
        })
    return None


def exclusive_browser_access(_func=None):
    """
    Refuse to run on an invalid configuration; otherwise run the tool
    while holding the browser lock. Errors release the lock and propagate.
    """

    def decorator(func):
        if inspect.iscoroutinefunction(func):
            @functools.wraps(func)
            async def wrapper(*args, **kwargs):
                error = _config_error()
                if error:
                    return error

                from mcp_page_source.context import get_context

                async with get_context().get_intra_process_lock():
                    return await func(*args, **kwargs)
            return wrapper

        @functools.wraps(func)
        def wrapper(*args, **kwargs):
            error = _config_error()
            if error:
                return error
            with _SYNC_LOCK:
                return func(*args, **kwargs)
        return wrapper

    return decorator if _func is None else decorator(_func)
