"""HTML source extraction: filter the live document, then window the result."""

import re

from .presets import ExtractionOptions, resolve_preset
from .pagination import ExtractionResult, paginate

import logging
logger = logging.getLogger(__name__)


# Shortest match between a literal '<!--' and the nearest literal '-->'.
# A '-->' inside a script string ends the match early; that text is then
# left in the output. Nothing here tries to parse around it.
COMMENT_PAT = re.compile(r"<!--.*?-->", re.S)
# Python `\s` also covers \x1c-\x1f and misses \ufeff, and `$` under re.M
# ends lines only at \n, not at \u2028 or \u2029. Browser regexes differ on
# those characters; the difference is accepted.
BETWEEN_TAGS_WS_PAT = re.compile(r">\s+<")
WS_RUN_PAT = re.compile(r"\s+")
ADJACENT_TAGS_PAT = re.compile(r"><")
LINE_EDGE_WS_PAT = re.compile(r"^\s+|\s+$", re.M)


def selector_placeholder(selector: str) -> str:
    return f'<!-- Selector "{selector}" not found -->'


def section_placeholder(tag: str) -> str:
    return f"<!-- No <{tag}> section found -->"


def strip_comments(html: str) -> str:
    return COMMENT_PAT.sub("", html)


def compress_html(html: str) -> str:
    """Drop whitespace between tags, collapse other whitespace runs to one space, trim."""
    html = BETWEEN_TAGS_WS_PAT.sub("><", html)
    html = WS_RUN_PAT.sub(" ", html)
    return html.strip()


def pretty_print_html(html: str) -> str:
    """Break the line between every pair of adjacent tags and trim each line."""
    html = ADJACENT_TAGS_PAT.sub(">\n<", html)
    return LINE_EDGE_WS_PAT.sub("", html)


def _exclude_tags(page, tags) -> None:
    # Destructive: the elements leave the live page, not a copy of it.
    for tag in tags:
        removed = page.remove_elements(tag)
        logger.debug(f"Removed {removed} <{tag}> element(s) from the live document")


def _select_region(page, options: ExtractionOptions, html: str) -> str:
    if options.selector:
        return page.outer_html_all(options.selector) or selector_placeholder(options.selector)
    if options.head_only:
        return page.outer_html("head") or section_placeholder("head")
    if options.body_only:
        return page.outer_html("body") or section_placeholder("body")
    return html


def extract_content(page, options: ExtractionOptions) -> str:
    """
    Run the filtering stages, in order, over the page's current document.

    Stages:
        1. Tag exclusion (``exclude_tags``): remove every matching element from
           the live page, then serialize the document again. A tag with no
           matches is skipped silently.
        2. Region selection, first match wins: ``selector`` (all matches,
           newline-joined), ``head_only``, ``body_only``, else the whole
           document. A miss yields an HTML comment naming it, never an error.
        3. Comment stripping, unless ``include_comments``.
        4. Compression, if ``compress``.
        5. Pretty-printing, if ``pretty_print`` and not ``compress``.

    Args:
        page: Page adapter (SeleniumPage or a test double with the same methods).
        options: Effective options; presets must already be resolved.

    Returns:
        The fully filtered text.
    """
    html = page.content()

    if options.exclude_tags:
        _exclude_tags(page, options.exclude_tags)
        html = page.content()

    html = _select_region(page, options, html)

    if not options.include_comments:
        html = strip_comments(html)

    if options.compress:
        html = compress_html(html)
    elif options.pretty_print:
        html = pretty_print_html(html)

    return html


def get_html_source(page, options: ExtractionOptions) -> ExtractionResult:
    """Resolve the preset, filter the document and return the requested window."""
    effective = resolve_preset(options)
    text = extract_content(page, effective)
    return paginate(text, offset=effective.offset, max_length=effective.max_length)


__all__ = [
    "COMMENT_PAT",
    "selector_placeholder",
    "section_placeholder",
    "strip_comments",
    "compress_html",
    "pretty_print_html",
    "extract_content",
    "get_html_source",
]
