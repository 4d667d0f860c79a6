"""WebDriver creation and teardown."""

from typing import Optional
from selenium import webdriver
from selenium.common.exceptions import WebDriverException

import logging
logger = logging.getLogger(__name__)

from ..context import get_context
from .page import SeleniumPage


def build_chrome_options(config: dict):
    """
    Chrome options for this server.

    Performance logging is always on: it is the request stream the network
    tools read. The eager load strategy returns from get()/refresh() once the
    DOM is parsed.
    """
    from selenium.webdriver.chrome.options import Options

    options = Options()
    options.page_load_strategy = "eager"
    options.set_capability("goog:loggingPrefs", {"performance": "ALL"})

    if config.get("debugger_port") is not None:
        options.add_experimental_option(
            "debuggerAddress", f"{config.get('debugger_host') or '127.0.0.1'}:{config['debugger_port']}"
        )
        return options

    chrome_path = config.get("chrome_path")
    if chrome_path:
        options.binary_location = chrome_path
    user_data_dir = config.get("user_data_dir")
    if user_data_dir:
        options.add_argument(f"--user-data-dir={user_data_dir}")
        options.add_argument(f"--profile-directory={config.get('profile_name') or 'Default'}")
    if config.get("headless"):
        options.add_argument("--headless=new")
    return options


def create_webdriver(config: dict) -> webdriver.Chrome:
    options = build_chrome_options(config)
    driver = webdriver.Chrome(options=options)
    timeout = config.get("page_load_timeout")
    if timeout:
        driver.set_page_load_timeout(timeout)
    return driver


def _ensure_driver() -> None:
    """Attach to (or launch) Chrome and wrap the current tab, if not done yet."""
    ctx = get_context()

    if ctx.driver is not None and ctx.page is not None:
        return

    if ctx.driver is None:
        ctx.driver = create_webdriver(ctx.config)
        address = ctx.get_debugger_address()
        logger.info(f"WebDriver ready ({'attached to ' + address if address else 'launched'})")

    ctx.page = SeleniumPage(ctx.driver, page_load_timeout=ctx.config.get("page_load_timeout"))


def close_driver() -> bool:
    """
    Quit the WebDriver session and forget it.

    When attached to a user's Chrome, only the chromedriver session ends;
    quitting an attached session does not close the user's browser.
    """
    ctx = get_context()
    driver: Optional[webdriver.Chrome] = ctx.driver
    if driver is None:
        return False
    try:
        driver.quit()
    except WebDriverException as e:
        logger.debug(f"driver.quit() failed (non-critical): {e}")
    finally:
        ctx.reset_session_state()
    return True


__all__ = [
    "build_chrome_options",
    "create_webdriver",
    "_ensure_driver",
    "close_driver",
]
