# mcp_page_source/decorators/envelope.py

import os
import json
import asyncio
import inspect
import datetime
import functools
import traceback
from typing import Any, Callable

import logging
logger = logging.getLogger(__name__)


__all__ = [
    "tool_envelope",
]


def _as_text(value: Any) -> str:
    """Tool results travel as text: strings pass, bytes decode, anything else becomes JSON."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, bytes):
        return value.decode("utf-8", "replace")
    try:
        return json.dumps(value, ensure_ascii=False, default=lambda o: getattr(o, "__dict__", repr(o)))
    except (TypeError, ValueError):
        return str(value)


def _wants_traceback() -> bool:
    return os.getenv("MPS_TOOL_ERRORS_TRACEBACK", "1").strip().lower() not in ("0", "false", "no")


def _failure(tool: str, err: Exception) -> str:
    logger.warning(f"{tool} failed: {err.__class__.__name__}: {err}")
    error = {"type": err.__class__.__name__, "message": str(err)}
    if _wants_traceback():
        error["traceback"] = traceback.format_exc()
    return json.dumps(
        {
            "ok": False,
            "tool": tool,
            "summary": f"{err.__class__.__name__}: {err}",
            "error": error,
            "timestamp": datetime.datetime.now(datetime.timezone.utc).isoformat(),
        },
        ensure_ascii=False,
    )


def tool_envelope(func: Callable):
    """
    Outermost wrapper of every MCP tool, sync or async.

    A result is returned as text. An exception is caught, logged and turned
    into ``{"ok": false, "tool", "summary", "error": {...}, "timestamp"}``;
    ``MPS_TOOL_ERRORS_TRACEBACK=0`` leaves the traceback out. Task
    cancellation is not an error and propagates.
    """
    tool = func.__name__

    if inspect.iscoroutinefunction(func):
        @functools.wraps(func)
        async def wrapper(*args, **kwargs):
            try:
                result = await func(*args, **kwargs)
            except asyncio.CancelledError:
                raise
            except Exception as e:
                return _failure(tool, e)
            return _as_text(result)
        return wrapper

    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            return _failure(tool, e)
        return _as_text(result)
    return wrapper
