"""Cookie jar filtering for a request URL."""

from dataclasses import dataclass
from typing import Iterable, List, Optional
from urllib.parse import urlsplit


@dataclass
class CookieRecord:
    name: str
    value: str
    domain: str
    path: str = "/"
    http_only: bool = False
    secure: bool = False

    @classmethod
    def from_browser(cls, cookie: dict) -> "CookieRecord":
        """Build from a CDP / WebDriver cookie dict."""
        return cls(
            name=str(cookie.get("name", "")),
            value=str(cookie.get("value", "")),
            domain=str(cookie.get("domain", "")),
            path=str(cookie.get("path") or "/"),
            http_only=bool(cookie.get("httpOnly", False)),
            secure=bool(cookie.get("secure", False)),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "value": self.value,
            "domain": self.domain,
            "path": self.path,
            "httpOnly": self.http_only,
            "secure": self.secure,
        }


def _hostname(url: str) -> Optional[str]:
    try:
        return urlsplit(url).hostname
    except ValueError:
        return None


def cookie_matches_host(cookie_domain: str, hostname: str) -> bool:
    """
    Domain rule: exact match on the raw domain, or a dot-boundary suffix match.

    ``.example.com`` and ``example.com`` both match ``example.com`` and
    ``a.example.com``; neither matches ``badexample.com``.
    """
    if not cookie_domain or not hostname:
        return False
    domain = cookie_domain.lower()
    host = hostname.lower()
    if host == domain:
        return True
    dotted = domain if domain.startswith(".") else "." + domain
    return ("." + host).endswith(dotted)


def match_cookies(url: str, jar: Iterable[dict]) -> List[CookieRecord]:
    """Cookies from ``jar`` that apply to ``url``'s host, in jar order."""
    hostname = _hostname(url)
    if not hostname:
        return []
    return [
        CookieRecord.from_browser(cookie)
        for cookie in jar
        if cookie_matches_host(str(cookie.get("domain", "")), hostname)
    ]


__all__ = [
    "CookieRecord",
    "cookie_matches_host",
    "match_cookies",
]
