"""Filtering stages and the full get_html_source pipeline over a FakePage."""

import pytest

from mcp_page_source.actions.html_source import (
    compress_html,
    extract_content,
    get_html_source,
    pretty_print_html,
    section_placeholder,
    selector_placeholder,
    strip_comments,
)
from mcp_page_source.actions.presets import ExtractionOptions, Preset

from _utils import FakePage


PAGE = """<!DOCTYPE html>
<html>
  <head>
    <title>Shop</title>
    <meta name="description" content="things">
    <link rel="stylesheet" href="/s.css">
    <style>body { color: red; }</style>
    <script>var a = 1;</script>
  </head>
  <body>
    <!-- banner -->
    <div class="content">
      <p>First   paragraph</p>
    </div>
    <noscript>enable js</noscript>
    <div class="content"><p>Second</p></div>
    <script src="/app.js"></script>
  </body>
</html>
"""


@pytest.fixture
def page():
    return FakePage(PAGE)


# ---------------------------------------------------------------------------
# Individual stages
# ---------------------------------------------------------------------------
def test_strip_comments_removes_all_comments():
    assert strip_comments("<p>a<!-- x -->b<!--\nmulti\nline--></p>") == "<p>ab</p>"


def test_strip_comments_is_not_script_aware():
    html = '<script>var s = "<!--";</script><p>kept</p><!-- c -->'
    # The opener inside the script string pairs with the real comment's closer.
    assert strip_comments(html) == '<script>var s = "'


def test_compress_output_has_no_newlines_and_is_idempotent():
    html = "<div>\n  <p>a   b</p>\n\t<span> c </span>\n</div>\n"
    once = compress_html(html)
    assert "\n" not in once
    assert once == "<div><p>a b</p><span> c </span></div>"
    assert compress_html(once) == once


def test_pretty_print_puts_adjacent_tags_on_separate_lines():
    assert pretty_print_html("<div><p>a</p></div>") == "<div>\n<p>a</p>\n</div>"
    assert pretty_print_html("  <a></a>  ") == "<a>\n</a>"


def test_compress_wins_over_pretty_print(page):
    both = extract_content(page, ExtractionOptions(compress=True, pretty_print=True))
    only = extract_content(FakePage(PAGE), ExtractionOptions(compress=True))
    assert both == only
    assert "\n" not in both


def test_comments_kept_when_requested(page):
    assert "<!-- banner -->" in extract_content(page, ExtractionOptions(include_comments=True))
    assert "banner" not in extract_content(page, ExtractionOptions())


# ---------------------------------------------------------------------------
# Region selection
# ---------------------------------------------------------------------------
def test_selector_joins_all_matches_with_newlines(page):
    text = extract_content(page, ExtractionOptions(selector=".content"))
    parts = text.split('\n<div class="content">')
    assert len(parts) == 2
    assert "First   paragraph" in parts[0]
    assert "<p>Second</p>" in parts[1]
    assert "<title>" not in text


def test_selector_without_match_returns_placeholder(page):
    result = get_html_source(page, ExtractionOptions(selector="#missing", include_comments=True))
    assert result.content == selector_placeholder("#missing")
    assert result.content == '<!-- Selector "#missing" not found -->'


def test_selector_placeholder_is_a_comment_and_gets_stripped(page):
    result = get_html_source(page, ExtractionOptions(selector="#missing"))
    assert result.content == ""
    assert result.total_length == 0


def test_selector_wins_over_head_and_body(page):
    text = extract_content(page, ExtractionOptions(selector="title", head_only=True, body_only=True))
    assert text == "<title>Shop</title>"


def test_head_only_and_body_only(page):
    head = extract_content(page, ExtractionOptions(head_only=True, body_only=True))
    assert head.startswith("<head>") and head.endswith("</head>")

    body = extract_content(page, ExtractionOptions(body_only=True))
    assert body.startswith("<body>") and body.endswith("</body>")
    assert "<title>" not in body


def test_missing_sections_yield_placeholders():
    bare = FakePage("<p>fragment</p>")
    assert extract_content(bare, ExtractionOptions(head_only=True, include_comments=True)) == section_placeholder("head")
    assert extract_content(bare, ExtractionOptions(body_only=True, include_comments=True)) == "<!-- No <body> section found -->"


# ---------------------------------------------------------------------------
# Tag exclusion
# ---------------------------------------------------------------------------
def test_exclude_tags_is_destructive_and_persists(page):
    first = extract_content(page, ExtractionOptions(exclude_tags=["script"]))
    assert "<script" not in first
    assert page.removed == ["script"]

    # A later call without exclusion still sees the page minus the scripts.
    later = extract_content(page, ExtractionOptions())
    assert "<script" not in later
    assert "<style>" in later


def test_exclude_unknown_tag_is_silent(page):
    text = extract_content(page, ExtractionOptions(exclude_tags=["marquee"]))
    assert "<div" in text


# ---------------------------------------------------------------------------
# Full pipeline with presets and pagination
# ---------------------------------------------------------------------------
def test_minimal_preset(page):
    result = get_html_source(page, ExtractionOptions(preset=Preset.MINIMAL, include_comments=True))
    for tag in ("<script", "<style", "<noscript"):
        assert tag not in result.content
    assert "<!--" not in result.content
    assert "\n" not in result.content
    assert "<link" in result.content
    assert result.has_more is False


def test_content_preset_drops_meta_and_link(page):
    result = get_html_source(page, ExtractionOptions(preset=Preset.CONTENT))
    assert "<meta" not in result.content
    assert "<link" not in result.content
    assert "<noscript>" in result.content


def test_selector_with_structure_preset(page):
    result = get_html_source(page, ExtractionOptions(preset=Preset.STRUCTURE, selector=".content"))
    assert result.content == '<div class="content"><p>First paragraph</p></div><div class="content"><p>Second</p></div>'


def test_paginated_reads_cover_the_filtered_text(page):
    whole = get_html_source(page, ExtractionOptions(preset=Preset.MINIMAL)).content
    assert len(whole) > 50

    first = get_html_source(page, ExtractionOptions(preset=Preset.MINIMAL, max_length=50))
    assert first.actual_length == 50
    assert first.has_more is True
    assert first.total_length == len(whole)

    second = get_html_source(
        page,
        ExtractionOptions(preset=Preset.MINIMAL, max_length=50, offset=first.actual_offset + first.actual_length),
    )
    assert second.actual_offset == 50
    assert first.content + second.content == whole[:100]


def test_single_match_selector_leaves_siblings_out():
    page = FakePage(
        "<html><body><h1>Title</h1><p>Outside</p>"
        '<div class="content">Target content</div></body></html>'
    )
    result = get_html_source(page, ExtractionOptions(selector=".content"))
    assert result.content == '<div class="content">Target content</div>'
    assert "<h1>" not in result.content
    assert "Outside" not in result.content


def test_whitespace_set_is_python_unicode_whitespace():
    # \x1f counts as whitespace, a byte order mark does not.
    assert compress_html("<a>\x1f</a>") == "<a></a>"
    assert compress_html("<a>\ufeff</a>") == "<a>\ufeff</a>"
