"""Cookie domain matching against a request URL."""

import pytest

from mcp_page_source.actions.cookies import CookieRecord, cookie_matches_host, match_cookies

from _utils import cookie


@pytest.mark.parametrize(
    "domain, host, expected",
    [
        ("example.com", "example.com", True),
        (".example.com", "example.com", True),
        (".example.com", "a.example.com", True),
        ("example.com", "a.b.example.com", True),
        ("EXAMPLE.com", "Example.COM", True),
        (".example.com", "badexample.com", False),
        ("example.com", "badexample.com", False),
        ("a.example.com", "example.com", False),
        ("other.org", "example.com", False),
        ("", "example.com", False),
    ],
)
def test_cookie_matches_host(domain, host, expected):
    assert cookie_matches_host(domain, host) is expected


def test_match_cookies_keeps_jar_order_and_shapes_records():
    jar = [
        cookie("sid", "abc", ".example.com", http_only=True, secure=True),
        cookie("foreign", "x", "other.org"),
        cookie("pref", "dark", "shop.example.com", path="/cart"),
    ]
    matched = match_cookies("https://shop.example.com/cart?x=1", jar)
    assert [c.name for c in matched] == ["sid", "pref"]
    assert matched[0].to_dict() == {
        "name": "sid",
        "value": "abc",
        "domain": ".example.com",
        "path": "/",
        "httpOnly": True,
        "secure": True,
    }


def test_match_cookies_ignores_path_and_secure_flag():
    jar = [cookie("s", "1", "example.com", path="/admin", secure=True)]
    assert len(match_cookies("http://example.com/", jar)) == 1


def test_match_cookies_with_unparsable_url_is_empty():
    assert match_cookies("about:blank", [cookie("a", "1", "example.com")]) == []
    assert match_cookies("", [cookie("a", "1", "example.com")]) == []


def test_from_browser_tolerates_missing_fields():
    record = CookieRecord.from_browser({"name": "n", "value": "v", "domain": "d"})
    assert record.path == "/"
    assert record.http_only is False
    assert record.secure is False
