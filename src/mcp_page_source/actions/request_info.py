"""Reconstruct the tab's top-level navigation request."""

import datetime
from dataclasses import dataclass, field
from typing import Dict, Optional

from ..browser.network import RequestEvent, subscribed
from .cookies import match_cookies
from .curl import PostData, build_curl_command, find_header

import logging
logger = logging.getLogger(__name__)


@dataclass
class RequestSnapshot:
    url: str
    method: str = "GET"
    headers: Dict[str, str] = field(default_factory=dict)
    post_data: Optional[str] = None


def _snapshot_from_url(url: str) -> RequestSnapshot:
    return RequestSnapshot(url=url, method="GET", headers={}, post_data=None)


def capture_request_snapshot(page, reload: bool = False) -> RequestSnapshot:
    """
    Capture the request that loaded the current page.

    Args:
        page: Page adapter with ``url``, ``reload()`` and a ``network`` recorder.
        reload: If True, reload the page and record the first document request
            the reload sends. If False, no request is made: the snapshot is
            the current URL with method GET, no headers and no body.

    Returns:
        RequestSnapshot

    Raises:
        Whatever the reload raises (timeouts, lost window). The request
        listener is detached before the error leaves this function.

    Notes:
        - Not reentrant per tab. Callers hold exclusive_browser_access.
        - If the reload produced no document request (e.g. served from a
          service worker without a network hop), the no-reload snapshot is used.
    """
    if not reload:
        return _snapshot_from_url(page.url)

    captured: Dict[str, RequestEvent] = {}

    def _capture(event: RequestEvent) -> None:
        if event.resource_type == "document" and "event" not in captured:
            captured["event"] = event

    with subscribed(page.network, _capture):
        page.reload()
        page.network.pump()

    event = captured.get("event")
    if event is None:
        logger.debug("Reload produced no document request; falling back to the current URL")
        return _snapshot_from_url(page.url)

    return RequestSnapshot(
        url=event.url,
        method=event.method,
        headers=dict(event.headers),
        post_data=event.post_data,
    )


def _timestamp() -> str:
    now = datetime.datetime.now(datetime.timezone.utc)
    return now.isoformat(timespec="milliseconds").replace("+00:00", "Z")


def get_request_info(page, reload: bool = False) -> dict:
    """
    Everything needed to replay the current page's request with curl.

    Returns:
        dict with keys ``url, method, headers, cookies, timestamp``,
        ``postData`` when the request carried a body, and ``curlCommand``.
        When cookies match and the request sent no cookie header, ``headers``
        carries a ``Cookie`` entry built from them.
    """
    snapshot = capture_request_snapshot(page, reload=reload)
    url = snapshot.url or page.url

    cookies = match_cookies(url, page.cookies())

    headers = dict(snapshot.headers)
    if cookies and find_header(snapshot.headers, "cookie") is None:
        headers["Cookie"] = "; ".join(f"{c.name}={c.value}" for c in cookies)

    response = {
        "url": url,
        "method": snapshot.method or "GET",
        "headers": headers,
        "cookies": [c.to_dict() for c in cookies],
        "timestamp": _timestamp(),
    }

    post_data = None
    if snapshot.post_data:
        post_data = PostData.from_body(snapshot.post_data, find_header(snapshot.headers, "content-type"))
        response["postData"] = post_data.to_dict()

    response["curlCommand"] = build_curl_command(
        url=url,
        method=response["method"],
        headers=snapshot.headers,
        cookies=cookies,
        post_data=post_data,
    )
    return response


__all__ = [
    "RequestSnapshot",
    "capture_request_snapshot",
    "get_request_info",
]
