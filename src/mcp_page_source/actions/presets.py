"""Extraction options and the named presets that expand into them."""

import dataclasses
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

import logging
logger = logging.getLogger(__name__)


class Preset:
    FULL = "full"
    MINIMAL = "minimal"
    STRUCTURE = "structure"
    CONTENT = "content"

    ALL = (FULL, MINIMAL, STRUCTURE, CONTENT)


@dataclass
class ExtractionOptions:
    compress: bool = False
    exclude_tags: Optional[List[str]] = None
    include_comments: bool = False
    pretty_print: bool = False
    selector: Optional[str] = None
    max_length: Optional[int] = None
    offset: int = 0
    head_only: bool = False
    body_only: bool = False
    preset: Optional[str] = None


# Preset -> the option fields it forces. Fields not listed keep the caller's value.
PRESET_OVERRIDES: Dict[str, Dict[str, Any]] = {
    Preset.FULL: {},
    Preset.MINIMAL: {
        "exclude_tags": ["script", "style", "noscript"],
        "compress": True,
        "include_comments": False,
    },
    Preset.STRUCTURE: {
        "exclude_tags": ["script", "style"],
        "compress": True,
    },
    Preset.CONTENT: {
        "exclude_tags": ["script", "style", "meta", "link"],
        "compress": True,
    },
}


def resolve_preset(options: ExtractionOptions) -> ExtractionOptions:
    """
    Expand ``options.preset`` into concrete options.

    A preset overrides exactly the fields listed for it in PRESET_OVERRIDES
    and passes every other field through. ``full``, no preset, and unknown
    preset names all leave the options as given.

    Returns:
        A new ExtractionOptions; the input is not modified.
    """
    preset = options.preset
    if preset is not None and preset not in PRESET_OVERRIDES:
        logger.debug(f"Unknown preset {preset!r}; treating it as {Preset.FULL!r}")
        preset = Preset.FULL

    overrides = PRESET_OVERRIDES.get(preset or Preset.FULL, {})
    forced = {key: list(value) if isinstance(value, list) else value for key, value in overrides.items()}
    return dataclasses.replace(options, **forced)


__all__ = [
    "Preset",
    "ExtractionOptions",
    "PRESET_OVERRIDES",
    "resolve_preset",
]
