"""Environment configuration and validation."""

import os
from typing import Optional

from dotenv import load_dotenv, find_dotenv

import logging
logger = logging.getLogger(__name__)

load_dotenv(find_dotenv(filename=".env", usecwd=True), override=False)


_TRUE_VALUES = ("1", "true", "yes", "on")
_FALSE_VALUES = ("0", "false", "no", "off", "")


def _env_flag(name: str, default: bool = False) -> bool:
    raw = (os.getenv(name) or "").strip().lower()
    if not raw:
        return default
    if raw in _TRUE_VALUES:
        return True
    if raw in _FALSE_VALUES:
        return False
    raise EnvironmentError(f"{name} must be one of {_TRUE_VALUES + _FALSE_VALUES[:-1]}, got {raw!r}.")


def _env_port(name: str) -> Optional[int]:
    raw = (os.getenv(name) or "").strip()
    if not raw:
        return None
    if not raw.isdigit() or not (0 < int(raw) < 65536):
        raise EnvironmentError(f"{name} must be a TCP port number, got {raw!r}.")
    return int(raw)


def get_env_config() -> dict:
    """
    Read environment variables and validate them.

    The server either attaches to a Chrome that already listens for remote
    debugging, or launches its own through chromedriver.

    Attach:     CHROME_REMOTE_DEBUG_PORT (required to attach)
                CHROME_REMOTE_DEBUG_HOST (default '127.0.0.1')
    Launch:     CHROME_EXECUTABLE_PATH (default: whatever chromedriver finds)
                CHROME_PROFILE_USER_DATA_DIR
                CHROME_PROFILE_NAME (default 'Default', only with a user data dir)
                MPS_HEADLESS (default 0)
    Both:       MPS_PAGE_LOAD_TIMEOUT (seconds, default 30)
    """
    debugger_port = _env_port("CHROME_REMOTE_DEBUG_PORT")
    debugger_host = (os.getenv("CHROME_REMOTE_DEBUG_HOST") or "").strip() or "127.0.0.1"

    chrome_path = (os.getenv("CHROME_EXECUTABLE_PATH") or "").strip() or None
    user_data_dir = (os.getenv("CHROME_PROFILE_USER_DATA_DIR") or "").strip() or None
    profile_name = (os.getenv("CHROME_PROFILE_NAME") or "Default").strip() or "Default"

    timeout_env = (os.getenv("MPS_PAGE_LOAD_TIMEOUT") or "").strip()
    if timeout_env and not timeout_env.isdigit():
        raise EnvironmentError(f"MPS_PAGE_LOAD_TIMEOUT must be a whole number of seconds, got {timeout_env!r}.")
    page_load_timeout = int(timeout_env) if timeout_env else 30

    headless = _env_flag("MPS_HEADLESS", default=False)

    if debugger_port is not None and (chrome_path or user_data_dir):
        logger.debug("CHROME_REMOTE_DEBUG_PORT is set; launch settings are ignored while attaching.")

    return {
        "debugger_host": debugger_host,
        "debugger_port": debugger_port,
        "chrome_path": chrome_path,
        "user_data_dir": user_data_dir,
        "profile_name": profile_name,
        "headless": headless,
        "page_load_timeout": page_load_timeout,
    }


def is_attach_mode(config: Optional[dict] = None) -> bool:
    """True when the configuration points at an already running debuggable Chrome."""
    if config is None:
        config = get_env_config()
    return config.get("debugger_port") is not None


__all__ = [
    "get_env_config",
    "is_attach_mode",
]
