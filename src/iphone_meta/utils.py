"""Helpers for reading and editing WSGI and ASGI header lists."""

from __future__ import annotations

from typing import Optional, TypeVar, Union

from .constants import HTML_CONTENT_TYPE_PREFIX
from .types import RawHeaders

H = TypeVar("H", str, bytes)

CONTENT_TYPE = "content-type"
CONTENT_LENGTH = "content-length"

# Besides 1xx, these statuses never carry content.
BODYLESS_STATUSES = frozenset({204, 304})


def _as_text(value: Union[str, bytes]) -> str:
    if isinstance(value, bytes):
        return value.decode("latin-1")
    return value


def header_value(headers: RawHeaders, name: str) -> Optional[str]:
    """Return the first value of header *name* (case-insensitive), or ``None``."""

    wanted = name.lower()
    for key, value in headers:
        if _as_text(key).lower() == wanted:
            return _as_text(value)
    return None


def is_html_content_type(value: Optional[str]) -> bool:
    """Literal, case-sensitive ``text/html`` prefix match; charset is not parsed."""

    return value is not None and value.startswith(HTML_CONTENT_TYPE_PREFIX)


def wsgi_status_code(status: str) -> int:
    return int(status.split(" ", 1)[0])


def response_has_body(method: Optional[str], status_code: int) -> bool:
    """Return whether a response to *method* with *status_code* can carry a body."""

    if method is not None and method.upper() == "HEAD":
        return False
    return status_code >= 200 and status_code not in BODYLESS_STATUSES


def without_header(headers: list[tuple[H, H]], name: str) -> list[tuple[H, H]]:
    wanted = name.lower()
    return [(key, value) for key, value in headers if _as_text(key).lower() != wanted]


__all__ = [
    "BODYLESS_STATUSES",
    "CONTENT_LENGTH",
    "CONTENT_TYPE",
    "header_value",
    "is_html_content_type",
    "response_has_body",
    "without_header",
    "wsgi_status_code",
]
