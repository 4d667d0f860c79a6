"""Page adapter: the DOM, cookie and request primitives the tools need, over Selenium."""

from typing import List, Optional

from selenium.common.exceptions import JavascriptException, WebDriverException
from selenium.webdriver.support.ui import WebDriverWait

from ..constants import DOCUMENT_READY_TIMEOUT_SECS
from ..utils.retry import retry_op
from .network import NetworkRecorder

import logging
logger = logging.getLogger(__name__)


_SERIALIZE_DOCUMENT_JS = """
const dt = document.doctype;
const prefix = dt ? new XMLSerializer().serializeToString(dt) : '';
const root = document.documentElement;
return prefix + (root ? root.outerHTML : '');
"""

_REMOVE_ELEMENTS_JS = """
const elements = document.querySelectorAll(arguments[0]);
elements.forEach(el => el.remove());
return elements.length;
"""

_OUTER_HTML_ALL_JS = """
return Array.from(document.querySelectorAll(arguments[0])).map(el => el.outerHTML).join('\\n');
"""

_OUTER_HTML_FIRST_JS = """
const el = document.querySelector(arguments[0]);
return el ? el.outerHTML : null;
"""


class SeleniumPage:
    """
    The driven tab, seen through the handful of operations the extraction and
    request tools are written against. Tests substitute an in-memory page with
    the same methods.
    """

    def __init__(self, driver, page_load_timeout: Optional[float] = None):
        self.driver = driver
        self.page_load_timeout = page_load_timeout
        self.network = NetworkRecorder(driver)

    @property
    def url(self) -> str:
        return self.driver.current_url or ""

    @property
    def title(self) -> str:
        return self.driver.title or ""

    def _wait_document_ready(self, timeout: float = DOCUMENT_READY_TIMEOUT_SECS) -> None:
        WebDriverWait(self.driver, timeout).until(
            lambda d: d.execute_script("return document.readyState") in ("interactive", "complete")
        )

    # ------------------------------------------------------------------
    # Document
    # ------------------------------------------------------------------
    def content(self) -> str:
        """Serialize the current document, doctype included."""
        html = retry_op(fn=lambda: self.driver.execute_script(_SERIALIZE_DOCUMENT_JS))
        return html or ""

    def remove_elements(self, tag: str) -> int:
        """Remove every element matching ``tag`` from the live document. Returns how many went."""
        try:
            removed = self.driver.execute_script(_REMOVE_ELEMENTS_JS, tag)
        except JavascriptException as e:
            # Not a valid tag selector; nothing can match it.
            logger.debug(f"Skipping exclusion of {tag!r}: {e}")
            return 0
        return int(removed or 0)

    def outer_html_all(self, selector: str) -> str:
        """Outer markup of every match of ``selector``, newline-joined; empty when none match."""
        try:
            return self.driver.execute_script(_OUTER_HTML_ALL_JS, selector) or ""
        except JavascriptException as e:
            logger.debug(f"Selector {selector!r} could not be evaluated: {e}")
            return ""

    def outer_html(self, tag: str) -> Optional[str]:
        """Outer markup of the first ``tag`` element, or None."""
        return self.driver.execute_script(_OUTER_HTML_FIRST_JS, tag)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def goto(self, url: str) -> None:
        if self.page_load_timeout:
            self.driver.set_page_load_timeout(self.page_load_timeout)
        self.driver.get(url)
        self._wait_document_ready()

    def reload(self) -> None:
        """Reload and wait until the DOM is parsed. Driver failures propagate."""
        if self.page_load_timeout:
            self.driver.set_page_load_timeout(self.page_load_timeout)
        self.driver.refresh()
        self._wait_document_ready()

    # ------------------------------------------------------------------
    # Cookies
    # ------------------------------------------------------------------
    def cookies(self) -> List[dict]:
        """Every cookie the browsing context holds, regardless of the page's own domain."""
        def _read():
            try:
                result = self.driver.execute_cdp_cmd("Storage.getCookies", {}) or {}
            except WebDriverException:
                # Older Chrome builds only know the Network domain call.
                result = self.driver.execute_cdp_cmd("Network.getAllCookies", {}) or {}
            return list(result.get("cookies") or [])
        return retry_op(fn=_read)


__all__ = ["SeleniumPage"]
