"""ASGI flavour of the iPhone middleware."""

from __future__ import annotations

from typing import Any, Awaitable, Callable, Optional

import anyio.to_thread

from .config import IPhoneConfig
from .middleware import BodyRewriter
from .rewriter import ResponseRewriter
from .types import BodyFilter, Message, Scope
from .utils import CONTENT_LENGTH, response_has_body, without_header

Receive = Callable[[], Awaitable[Message]]
Send = Callable[[Message], Awaitable[None]]
ASGIApplication = Callable[[Scope, Receive, Send], Awaitable[None]]


class AsyncIPhoneMiddleware:
    """Rewrite ``text/html`` responses of an ASGI application.

    Only ``http`` scopes are inspected. HEAD requests and 1xx, 204 and 304
    responses pass through, as do empty bodies. HTML bodies are collected
    until the final ``http.response.body`` message, rewritten on a worker
    thread and sent as a single message with a recomputed ``content-length``.
    """

    def __init__(
        self,
        app: ASGIApplication,
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

    async def __call__(self, scope: Scope, receive: Receive, send: Send) -> None:
        if scope["type"] != "http":
            await self.app(scope, receive, send)
            return

        start_message: Optional[Message] = None
        body_filter: Optional[BodyFilter] = None
        chunks: list[bytes] = []
        method = scope.get("method")

        async def intercepting_send(message: Message) -> None:
            nonlocal start_message, body_filter
            if message["type"] == "http.response.start":
                body_filter = self.rewriter.body_filter(message.get("headers", []))
                if body_filter is not None and not response_has_body(method, int(message["status"])):
                    body_filter = None
                if body_filter is None:
                    await send(message)
                else:
                    start_message = message
                return

            if body_filter is None or start_message is None or message["type"] != "http.response.body":
                await send(message)
                return

            chunks.append(message.get("body", b""))
            if message.get("more_body", False):
                return

            original = b"".join(chunks)
            if not original:
                await send(start_message)
                await send(message)
                return

            body = await anyio.to_thread.run_sync(body_filter, original)
            headers = without_header(list(start_message.get("headers", [])), CONTENT_LENGTH)
            headers.append((b"content-length", str(len(body)).encode("latin-1")))
            await send({**start_message, "headers": headers})
            await send({"type": "http.response.body", "body": body, "more_body": False})

        await self.app(scope, receive, intercepting_send)


__all__ = ["AsyncIPhoneMiddleware"]
