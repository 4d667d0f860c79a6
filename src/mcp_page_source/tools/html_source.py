"""HTML source tool implementation."""

import json
from typing import List, Optional

from ..constants import JSON_INDENT
from ..context import get_context
from ..actions.presets import ExtractionOptions
from ..actions.html_source import get_html_source as _get_html_source_action


async def get_html_source(
    compress: bool = False,
    exclude_tags: Optional[List[str]] = None,
    include_comments: bool = False,
    pretty_print: bool = False,
    selector: Optional[str] = None,
    max_length: Optional[int] = None,
    offset: Optional[int] = 0,
    head_only: bool = False,
    body_only: bool = False,
    preset: Optional[str] = None,
) -> str:
    """
    Filter the current page's HTML and return one window of it.

    Returns:
        JSON string: {"content", "totalLength", "hasMore", "actualOffset", "actualLength"}
    """
    ctx = get_context()
    options = ExtractionOptions(
        compress=bool(compress),
        exclude_tags=list(exclude_tags) if exclude_tags else None,
        include_comments=bool(include_comments),
        pretty_print=bool(pretty_print),
        selector=selector or None,
        max_length=max_length,
        offset=offset or 0,
        head_only=bool(head_only),
        body_only=bool(body_only),
        preset=preset,
    )
    result = _get_html_source_action(ctx.page, options)
    return json.dumps(result.to_dict(), indent=JSON_INDENT, ensure_ascii=False)


__all__ = ['get_html_source']
