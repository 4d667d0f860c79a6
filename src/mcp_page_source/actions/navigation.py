"""Navigation of the driven tab."""

from ..context import get_context


def navigate_to_url(url: str) -> dict:
    """Navigate to URL and report where the tab ended up."""
    ctx = get_context()
    if not ctx.page:
        return {"ok": False, "error": "No page available"}
    ctx.page.goto(url)
    return {"ok": True, "url": ctx.page.url, "title": ctx.page.title}


def get_current_page_meta() -> dict:
    """Get current page metadata."""
    ctx = get_context()
    if not ctx.page:
        return {"ok": False, "error": "No page available"}
    return {"ok": True, "url": ctx.page.url, "title": ctx.page.title}


__all__ = [
    'navigate_to_url',
    'get_current_page_meta',
]
