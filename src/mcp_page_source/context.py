"""
The one browser session this server process drives.

Tools and decorators read the session through ``get_context()`` at call
time, never at import, so tests can swap it with ``reset_context()``. The
object itself does no locking; ``exclusive_browser_access`` serializes the
tools that use it.
"""

from typing import Optional
from selenium import webdriver
from dataclasses import dataclass, field
import asyncio


@dataclass
class BrowserContext:
    """
    driver: the Selenium session, None until start_browser
    page: SeleniumPage over the driver's current tab (or a test double)
    config: result of get_env_config(), empty if the environment was invalid
    intra_process_lock: created on first use, inside the running event loop
    """

    driver: Optional[webdriver.Chrome] = None
    page: Optional[object] = None
    config: dict = field(default_factory=dict)
    intra_process_lock: Optional[asyncio.Lock] = None

    def is_driver_initialized(self) -> bool:
        return self.driver is not None

    def is_page_ready(self) -> bool:
        """Both a session and a page adapter over it exist."""
        return self.driver is not None and self.page is not None

    def get_debugger_address(self) -> Optional[str]:
        """``host:port`` of the Chrome being attached to; None in launch mode."""
        port = self.config.get("debugger_port")
        if port is None:
            return None
        return f"{self.config.get('debugger_host') or '127.0.0.1'}:{port}"

    def reset_session_state(self) -> None:
        self.driver = None
        self.page = None

    def get_intra_process_lock(self) -> asyncio.Lock:
        if self.intra_process_lock is None:
            self.intra_process_lock = asyncio.Lock()
        return self.intra_process_lock


_global_context: Optional[BrowserContext] = None


def get_context() -> BrowserContext:
    """Return the process-wide context, creating it from the environment on first use."""
    global _global_context

    if _global_context is None:
        from .config.environment import get_env_config

        try:
            config = get_env_config()
        except EnvironmentError:
            # exclusive_browser_access reports the bad variable to the caller.
            config = {}
        _global_context = BrowserContext(config=config)

    return _global_context


def reset_context() -> None:
    """Forget the current context. Tests use this; tools call close_browser instead."""
    global _global_context
    _global_context = None


__all__ = [
    "BrowserContext",
    "get_context",
    "reset_context",
]
