"""WSGI middleware that rewrites HTML responses for the iPhone."""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable, Optional, Protocol

from .config import IPhoneConfig
from .rewriter import ResponseRewriter
from .types import BodyFilter, HeaderList, RawHeaders
from .utils import CONTENT_LENGTH, response_has_body, without_header, wsgi_status_code

LOGGER = logging.getLogger(__name__)

StartResponse = Callable[..., Callable[[bytes], Any]]
WSGIApplication = Callable[[dict, StartResponse], Iterable[bytes]]


class BodyRewriter(Protocol):
    """Decide from the response headers whether, and how, to rewrite the body."""

    config: IPhoneConfig

    def body_filter(self, headers: RawHeaders) -> Optional[BodyFilter]:  # pragma: no cover - protocol
        ...


def drain(result: Iterable[bytes]) -> list[bytes]:
    """Consume a WSGI response iterable, always calling its ``close()``."""

    try:
        return list(result)
    finally:
        close = getattr(result, "close", None)
        if close is not None:
            close()


class IPhoneMiddleware:
    """Wrap a WSGI application and rewrite its ``text/html`` responses.

    Options are either an :class:`IPhoneConfig` or the equivalent keyword
    arguments::

        app = IPhoneMiddleware(app, tidy=True, manifest="app.manifest", icon="icon.png")

    Non-HTML responses stream through untouched, as do responses that carry
    no body (HEAD requests, 1xx, 204 and 304). HTML responses are buffered
    in full, rewritten, and sent with a recomputed ``Content-Length``; an
    empty HTML body keeps its original headers.
    """

    def __init__(
        self,
        app: WSGIApplication,
        config: Optional[IPhoneConfig] = None,
        *,
        rewriter: Optional[BodyRewriter] = None,
        **options: Any,
    ) -> None:
        self.app = app
        self.rewriter = rewriter if rewriter is not None else ResponseRewriter(config, **options)

    @property
    def config(self) -> IPhoneConfig:
        return self.rewriter.config

    def __call__(self, environ: dict, start_response: StartResponse) -> Iterable[bytes]:
        captured: dict[str, Any] = {}
        written: list[bytes] = []
        method = environ.get("REQUEST_METHOD")

        def capture_start_response(status: str, headers: HeaderList, exc_info=None):
            body_filter = self.rewriter.body_filter(headers)
            if body_filter is not None and not response_has_body(method, wsgi_status_code(status)):
                body_filter = None
            if body_filter is None:
                captured["passthrough"] = True
                return start_response(status, headers, exc_info)
            captured.update(
                status=status,
                headers=list(headers),
                exc_info=exc_info,
                body_filter=body_filter,
            )
            return written.append

        result = self.app(environ, capture_start_response)
        if captured.get("passthrough"):
            return result

        # Generator apps only call start_response once iterated.
        chunks = drain(result)
        if "body_filter" not in captured:
            return chunks

        original = b"".join([*written, *chunks])
        if not original:
            start_response(captured["status"], captured["headers"], captured["exc_info"])
            return chunks

        body = captured["body_filter"](original)
        LOGGER.debug("Rewrote HTML response body (%d -> %d bytes)", len(original), len(body))
        headers = without_header(captured["headers"], CONTENT_LENGTH)
        headers.append(("Content-Length", str(len(body))))
        start_response(captured["status"], headers, captured["exc_info"])
        return [body]


__all__ = ["BodyRewriter", "IPhoneMiddleware", "drain"]
