"""Request body parsing and curl command synthesis."""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence
from urllib.parse import parse_qsl, quote

from ..constants import DEFAULT_FORM_CONTENT_TYPE
from .cookies import CookieRecord


RAW_FIELD = "raw"

# Headers curl recomputes (content-length) or that the cookie jar supplies.
SKIPPED_HEADERS = ("cookie", "content-length")

# The characters JavaScript's encodeURIComponent leaves alone, besides alphanumerics.
_URI_COMPONENT_SAFE = "-_.!~*'()"


def find_header(headers: Dict[str, str], name: str) -> Optional[str]:
    """Case-insensitive header lookup."""
    wanted = name.lower()
    for key, value in headers.items():
        if key.lower() == wanted:
            return value
    return None


def is_form_content_type(content_type: Optional[str]) -> bool:
    return not content_type or DEFAULT_FORM_CONTENT_TYPE in content_type.lower()


def parse_post_data(body: str, content_type: Optional[str] = None) -> List[Dict[str, str]]:
    """
    Split a request body into ordered ``{"name", "value"}`` fields.

    Form-encoded bodies (or bodies without a content type) decode as
    ``key=value&...`` pairs, ``+`` as space, blank values kept. Any other
    content type yields a single ``{"name": "raw", "value": body}`` field.
    """
    if is_form_content_type(content_type):
        return [{"name": name, "value": value} for name, value in parse_qsl(body, keep_blank_values=True)]
    return [{"name": RAW_FIELD, "value": body}]


@dataclass
class PostData:
    content_type: str
    params: List[Dict[str, str]] = field(default_factory=list)

    @classmethod
    def from_body(cls, body: str, content_type: Optional[str] = None) -> "PostData":
        return cls(
            content_type=content_type or DEFAULT_FORM_CONTENT_TYPE,
            params=parse_post_data(body, content_type),
        )

    @property
    def is_raw(self) -> bool:
        """True when the body was kept verbatim as the synthetic ``raw`` field."""
        return not is_form_content_type(self.content_type)

    def to_dict(self) -> dict:
        return {"contentType": self.content_type, "params": [dict(p) for p in self.params]}


def _encode_component(value: str) -> str:
    return quote(value, safe=_URI_COMPONENT_SAFE)


def build_curl_command(
    url: str,
    method: str,
    headers: Dict[str, str],
    cookies: Sequence[CookieRecord] = (),
    post_data: Optional[PostData] = None,
) -> str:
    """
    Render the request as one ``curl`` command line.

    Values are wrapped in single quotes as they are; a single quote inside a
    header, cookie or body value is NOT escaped, so such a command needs
    hand-editing before a shell will run it. It is a debugging aid, not a
    safe shell invocation.
    """
    parts = ["curl"]

    if method.upper() != "GET":
        parts += ["-X", method]

    parts.append(f"'{url}'")

    for key, value in headers.items():
        if key.lower() in SKIPPED_HEADERS:
            continue
        parts += ["-H", f"'{key}: {value}'"]

    if cookies and find_header(headers, "cookie") is None:
        cookie_string = "; ".join(f"{c.name}={c.value}" for c in cookies)
        parts += ["-H", f"'Cookie: {cookie_string}'"]

    if post_data is not None:
        if post_data.is_raw:
            raw = post_data.params[0]["value"] if post_data.params else ""
            parts += ["-d", f"'{raw}'"]
        else:
            data = "&".join(
                f"{_encode_component(p['name'])}={_encode_component(p['value'])}" for p in post_data.params
            )
            parts += ["-d", f"'{data}'"]

    return " ".join(parts)


__all__ = [
    "RAW_FIELD",
    "SKIPPED_HEADERS",
    "find_header",
    "is_form_content_type",
    "parse_post_data",
    "PostData",
    "build_curl_command",
]
