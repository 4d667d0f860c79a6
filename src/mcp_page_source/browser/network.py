"""Outbound request stream of the driven tab, read from the Chrome performance log.

Chromedriver records DevTools events when the session is created with
``goog:loggingPrefs = {"performance": "ALL"}``. Reading the log drains it, so
the NetworkRecorder must be the only consumer. Each ``pump()`` turns the new
``Network.requestWillBeSent`` / ``Network.responseReceived`` entries into
RequestEvent objects, keeps them for the life of the current page, and hands
every new request to the attached listeners.
"""

import json
import contextlib
from dataclasses import dataclass, field
from typing import Callable, Dict, Iterator, List, Optional

from selenium.common.exceptions import WebDriverException

import logging
logger = logging.getLogger(__name__)


@dataclass
class RequestEvent:
    """One outbound request and, once it arrived, its response line."""
    request_id: str
    method: str
    url: str
    resource_type: str
    headers: Dict[str, str] = field(default_factory=dict)
    post_data: Optional[str] = None
    frame_id: Optional[str] = None
    status: Optional[int] = None
    status_text: Optional[str] = None

    @property
    def has_response(self) -> bool:
        return self.status is not None


RequestListener = Callable[[RequestEvent], None]


def render_request(event: RequestEvent) -> str:
    """Render ``[METHOD] url`` plus `` => [status] statusText`` once a response is known."""
    parts = [f"[{event.method.upper()}] {event.url}"]
    if event.has_response:
        parts.append(f"=> [{event.status}] {event.status_text or ''}")
    return " ".join(parts)


def _decode_entry(entry: dict) -> Optional[dict]:
    try:
        outer = json.loads(entry.get("message") or "{}")
    except (TypeError, ValueError):
        logger.debug(f"Skipping unparsable performance log entry: {entry!r}")
        return None
    message = outer.get("message")
    return message if isinstance(message, dict) else None


class NetworkRecorder:
    """
    Request log and listener registry for one tab.

    Not reentrant: listeners are plain list entries, and two overlapping
    subscriptions would both see each other's requests. Callers serialize
    through exclusive_browser_access.
    """

    def __init__(self, driver):
        self._driver = driver
        self._listeners: List[RequestListener] = []
        self._events: List[RequestEvent] = []
        self._by_id: Dict[str, RequestEvent] = {}
        self._main_frame_id: Optional[str] = None

    # ------------------------------------------------------------------
    # Listener registry
    # ------------------------------------------------------------------
    def on(self, listener: RequestListener) -> None:
        self._listeners.append(listener)

    def off(self, listener: RequestListener) -> None:
        with contextlib.suppress(ValueError):
            self._listeners.remove(listener)

    @property
    def listener_count(self) -> int:
        return len(self._listeners)

    # ------------------------------------------------------------------
    # Request log
    # ------------------------------------------------------------------
    def requests(self) -> List[RequestEvent]:
        """Requests recorded since the current page started loading, in capture order."""
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()
        self._by_id.clear()

    def main_frame_id(self) -> Optional[str]:
        if self._main_frame_id is None:
            try:
                tree = self._driver.execute_cdp_cmd("Page.getFrameTree", {}) or {}
                self._main_frame_id = ((tree.get("frameTree") or {}).get("frame") or {}).get("id")
            except WebDriverException as e:
                logger.debug(f"Could not resolve main frame id (non-critical): {e}")
        return self._main_frame_id

    def pump(self) -> int:
        """
        Drain the performance log and dispatch what it holds.

        Returns:
            Number of new requests seen.
        """
        seen = 0
        for entry in self._driver.get_log("performance") or []:
            message = _decode_entry(entry)
            if message is None:
                continue
            method = message.get("method")
            params = message.get("params") or {}
            if method == "Network.requestWillBeSent":
                self._on_request(params)
                seen += 1
            elif method == "Network.responseReceived":
                self._on_response(params)
        return seen

    def _on_request(self, params: dict) -> None:
        request_id = params.get("requestId") or ""
        redirect = params.get("redirectResponse")
        if redirect and request_id in self._by_id:
            # Chrome reuses the request id for each hop of a redirect chain.
            self._apply_response(self._by_id[request_id], redirect)

        request = params.get("request") or {}
        event = RequestEvent(
            request_id=request_id,
            method=(request.get("method") or "GET").upper(),
            url=(request.get("url") or "") + (request.get("urlFragment") or ""),
            resource_type=(params.get("type") or "other").lower(),
            headers={str(k): str(v) for k, v in (request.get("headers") or {}).items()},
            post_data=request.get("postData"),
            frame_id=params.get("frameId"),
        )

        if (
            event.resource_type == "document"
            and not redirect
            and event.frame_id is not None
            and event.frame_id == self.main_frame_id()
        ):
            self.clear()

        self._events.append(event)
        self._by_id[request_id] = event
        for listener in list(self._listeners):
            listener(event)

    def _on_response(self, params: dict) -> None:
        event = self._by_id.get(params.get("requestId") or "")
        if event is not None:
            self._apply_response(event, params.get("response") or {})

    @staticmethod
    def _apply_response(event: RequestEvent, response: dict) -> None:
        status = response.get("status")
        event.status = int(status) if status is not None else None
        event.status_text = response.get("statusText") or ""


@contextlib.contextmanager
def subscribed(recorder: NetworkRecorder, listener: RequestListener) -> Iterator[NetworkRecorder]:
    """
    Attach ``listener`` for the body of the ``with`` block only.

    Events already sitting in the log are dispatched before the listener is
    attached, so it sees only requests made inside the block. The listener is
    detached exactly once on every exit path.
    """
    recorder.pump()
    recorder.on(listener)
    try:
        yield recorder
    finally:
        recorder.off(listener)


__all__ = [
    "RequestEvent",
    "RequestListener",
    "NetworkRecorder",
    "render_request",
    "subscribed",
]
