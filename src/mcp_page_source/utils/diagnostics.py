"""Human-readable report of the browser setup, attached to start failures."""

import sys
import platform
from typing import List, Optional, Tuple
from selenium.common.exceptions import WebDriverException
import selenium

from ..context import get_context
from ..config.environment import is_attach_mode


def _format(rows: List[Tuple[str, object]]) -> str:
    width = max(len(label) for label, _ in rows)
    return "\n".join(f"{label.ljust(width)} : {value}" for label, value in rows)


def _browser_rows(driver) -> List[Tuple[str, object]]:
    try:
        product = (driver.execute_cdp_cmd("Browser.getVersion", {}) or {}).get("product", "<unknown>")
    except WebDriverException:
        product = "<unknown>"
    caps = getattr(driver, "capabilities", None) or {}
    chromedriver = (caps.get("chrome") or {}).get("chromedriverVersion") or caps.get("browserVersion") or "<unknown>"
    return [("Browser", product), ("Chromedriver", chromedriver)]


def collect_diagnostics(driver=None, exc: Optional[Exception] = None, config: Optional[dict] = None) -> str:
    """
    Describe the environment a start attempt ran in.

    ``driver`` and ``config`` default to the ones in the shared context.
    """
    ctx = get_context()
    driver = driver if driver is not None else ctx.driver
    config = config if config is not None else ctx.config

    rows: List[Tuple[str, object]] = [
        ("Platform", f"{platform.system()} {platform.release()}"),
        ("Python", sys.version.split()[0]),
        ("Selenium", getattr(selenium, "__version__", "?")),
    ]
    if is_attach_mode(config):
        rows.append(("Attach to", f"{config.get('debugger_host')}:{config.get('debugger_port')}"))
    else:
        rows += [
            ("Chrome binary", config.get("chrome_path") or "<chromedriver default>"),
            ("User data dir", config.get("user_data_dir") or "<temporary profile>"),
            ("Headless", bool(config.get("headless"))),
        ]
    rows.append(("Session", "open" if driver is not None else "none"))
    if driver is not None:
        rows += _browser_rows(driver)
    if exc is not None:
        rows.append(("Error", f"{type(exc).__name__}: {exc}"))

    return _format(rows)


__all__ = ['collect_diagnostics']
