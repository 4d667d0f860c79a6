# tests/tests_decorators/test_decorators.py
import json
import asyncio
import pytest

from mcp_page_source.context import reset_context
from mcp_page_source.decorators import (
    tool_envelope, exclusive_browser_access,
)

## We DO NOT want to use pytest-asyncio.
## Instead, use event_loop.run_until_complete()!


@pytest.fixture(scope="function")
def event_loop():
    loop = asyncio.new_event_loop()
    asyncio.set_event_loop(loop)
    yield loop
    loop.close()


@pytest.fixture(autouse=True)
def fresh_context(monkeypatch):
    for name in ("CHROME_REMOTE_DEBUG_PORT", "MPS_HEADLESS", "MPS_PAGE_LOAD_TIMEOUT", "MPS_TOOL_ERRORS_TRACEBACK"):
        monkeypatch.delenv(name, raising=False)
    reset_context()
    yield
    reset_context()


# ------------------------------
# tool_envelope tests
# ------------------------------

def test_tool_envelope_normalizes_sync_success_and_values():
    # None -> ""
    @tool_envelope
    def f_none():
        return None

    # dict -> json string
    @tool_envelope
    def f_dict():
        return {"a": 1}

    # bytes -> decoded
    @tool_envelope
    def f_bytes():
        return b"hello"

    class O:
        def __repr__(self):
            return "<O>"

    @tool_envelope
    def f_obj():
        return O()

    assert f_none() == ""
    assert json.loads(f_dict()) == {"a": 1}
    assert f_bytes() == "hello"
    assert isinstance(f_obj(), str)


def test_tool_envelope_passes_plain_text_through():
    @tool_envelope
    def f():
        return "[GET] https://example.com/ => [200] OK"

    assert f() == "[GET] https://example.com/ => [200] OK"


def test_tool_envelope_error_payload_includes_traceback_by_default():
    @tool_envelope
    def f_fail():
        raise ValueError("boom")

    payload = json.loads(f_fail())
    assert payload["ok"] is False
    assert payload["summary"] == "ValueError: boom"
    assert payload["tool"] == "f_fail"
    assert payload["error"]["type"] == "ValueError"
    assert "Traceback" in payload["error"]["traceback"]
    assert "timestamp" in payload


def test_tool_envelope_error_payload_without_traceback_when_disabled(monkeypatch):
    monkeypatch.setenv("MPS_TOOL_ERRORS_TRACEBACK", "0")

    @tool_envelope
    def f_fail():
        raise RuntimeError("err")

    payload = json.loads(f_fail())
    assert payload["ok"] is False
    assert payload["error"]["type"] == "RuntimeError"
    assert "traceback" not in payload["error"]


def test_tool_envelope_async_cancelled_error_propagates(event_loop):
    @tool_envelope
    async def f_cancel():
        raise asyncio.CancelledError()

    async def test_logic():
        with pytest.raises(asyncio.CancelledError):
            await f_cancel()

    event_loop.run_until_complete(test_logic())


def test_tool_envelope_normalizes_async_return(event_loop):
    @tool_envelope
    async def f():
        return {"msg": "ok"}

    async def test_logic():
        out = await f()
        assert isinstance(out, str)
        assert json.loads(out) == {"msg": "ok"}

    event_loop.run_until_complete(test_logic())


def test_tool_envelope_async_error_becomes_payload(event_loop):
    @tool_envelope
    async def f():
        raise TimeoutError("page did not load")

    out = event_loop.run_until_complete(f())
    assert json.loads(out)["error"]["type"] == "TimeoutError"


def test_tool_envelope_bytes_decoding_fallback():
    bad_bytes = b"\xff\xfe\xfa"  # invalid UTF-8

    @tool_envelope
    def f():
        return bad_bytes

    s = f()
    assert isinstance(s, str)
    assert len(s) > 0  # replaced chars


# ------------------------------
# exclusive_browser_access tests
# ------------------------------

def test_exclusive_browser_access_reports_bad_configuration(monkeypatch, event_loop):
    monkeypatch.setenv("CHROME_REMOTE_DEBUG_PORT", "not-a-port")
    ran = {"x": False}

    @exclusive_browser_access
    async def f():
        ran["x"] = True
        return "OK"

    payload = json.loads(event_loop.run_until_complete(f()))
    assert payload["ok"] is False
    assert payload["error"] == "invalid_configuration"
    assert "CHROME_REMOTE_DEBUG_PORT" in payload["message"]
    assert ran["x"] is False


def test_exclusive_browser_access_serializes_concurrent_calls(event_loop):
    running = {"flag": False, "overlap": False}

    @exclusive_browser_access
    async def f():
        if running["flag"]:
            running["overlap"] = True
        running["flag"] = True
        await asyncio.sleep(0.05)
        running["flag"] = False
        return "done"

    async def test_logic():
        # Launch two concurrent calls; in-process lock should serialize
        res = await asyncio.gather(f(), f())
        assert res == ["done", "done"]
        assert running["overlap"] is False

    event_loop.run_until_complete(test_logic())


def test_exclusive_browser_access_releases_the_lock_on_error(event_loop):
    @exclusive_browser_access
    async def f(fail):
        if fail:
            raise RuntimeError("reload failed")
        return "ok"

    async def test_logic():
        with pytest.raises(RuntimeError):
            await f(True)
        assert await f(False) == "ok"

    event_loop.run_until_complete(test_logic())


def test_exclusive_browser_access_sync_function():
    @exclusive_browser_access
    def f(x):
        return x * 2

    assert f(21) == 42
