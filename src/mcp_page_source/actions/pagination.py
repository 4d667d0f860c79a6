"""Character windows over the filtered page text."""

from dataclasses import dataclass
from typing import Optional


@dataclass
class ExtractionResult:
    content: str
    total_length: int
    has_more: bool
    actual_offset: int
    actual_length: int

    def to_dict(self) -> dict:
        return {
            "content": self.content,
            "totalLength": self.total_length,
            "hasMore": self.has_more,
            "actualOffset": self.actual_offset,
            "actualLength": self.actual_length,
        }


def paginate(text: str, offset: Optional[int] = 0, max_length: Optional[int] = None) -> ExtractionResult:
    """
    Cut a window out of ``text``.

    Args:
        text: The fully filtered page text.
        offset: First character of the window. Negative values are clamped to 0.
        max_length: Window size. Negative values are clamped to 0. When omitted
            the window runs to the end of the text and ``has_more`` is False,
            however much text the offset skipped.

    Returns:
        ExtractionResult. ``actual_offset`` is the offset actually used: the
        clamped request, capped at ``total_length`` so that
        ``actual_offset + actual_length <= total_length`` always holds.

    Notes:
        - Advancing ``offset`` by ``actual_length`` while ``has_more`` is True
          walks the text without gaps or overlaps.
        - Lengths are counted in Python code points.
    """
    total_length = len(text)
    start = min(max(0, int(offset or 0)), total_length)

    if max_length is not None:
        end = min(start + max(0, int(max_length)), total_length)
        content = text[start:end]
        has_more = end < total_length
    else:
        content = text[start:] if start > 0 else text
        has_more = False

    return ExtractionResult(
        content=content,
        total_length=total_length,
        has_more=has_more,
        actual_offset=start,
        actual_length=len(content),
    )


__all__ = ["ExtractionResult", "paginate"]
