"""Configuration management for browser automation."""

from .environment import (
    get_env_config,
    is_attach_mode,
)

__all__ = [
    "get_env_config",
    "is_attach_mode",
]
