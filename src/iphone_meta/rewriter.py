"""Response rewriting shared by the WSGI and ASGI middleware."""

from __future__ import annotations

import logging
from typing import Any, Optional

from .config import IPhoneConfig
from .constants import (
    BODY_ENCODING,
    FALLBACK_BODY_ENCODING,
    META_STATUS_BAR_STYLE,
    META_VIEWPORT,
    META_WEB_APP_CAPABLE,
    REL_STARTUP_IMAGE,
    REL_TOUCH_ICON,
)
from .dom import (
    create_element,
    existing_rels,
    head_element,
    parse_document,
    root_element,
    serialize,
    tidy_markup,
)
from .manifest import write_manifest
from .types import Body, BodyFilter, RawHeaders, TagSpec
from .utils import CONTENT_TYPE, header_value, is_html_content_type

LOGGER = logging.getLogger(__name__)


class ResponseRewriter:
    """Inject iPhone web app metadata into HTML documents.

    Construction resolves the configuration and, when a manifest is
    configured, writes it from the current working directory before the
    instance is returned. A failure there raises
    :class:`~iphone_meta.manifest.ManifestError`.
    """

    def __init__(self, config: Optional[IPhoneConfig] = None, **options: Any) -> None:
        if config is not None and options:
            raise TypeError("pass either a config object or keyword options, not both")
        self.config = config if config is not None else IPhoneConfig(**options)
        self._meta_tags = self._build_meta_tags()
        self._link_tags = self._build_link_tags()
        if self.config.wants_manifest:
            write_manifest(self.config.manifest, exclude=[__file__])

    # ------------------------------------------------------------------
    # Response classification
    # ------------------------------------------------------------------
    def is_html(self, headers: RawHeaders) -> bool:
        return is_html_content_type(header_value(headers, CONTENT_TYPE))

    def body_filter(self, headers: RawHeaders) -> Optional[BodyFilter]:
        """Return the body transform for a response with *headers*, or ``None`` to pass through."""

        if self.is_html(headers):
            return self.filter
        LOGGER.debug("Passing through response with content type %r", header_value(headers, CONTENT_TYPE))
        return None

    # ------------------------------------------------------------------
    # Filtering
    # ------------------------------------------------------------------
    def filter(self, chunk: Body) -> Body:
        """Rewrite a complete HTML body.

        ``bytes`` are decoded as UTF-8, or as Latin-1 when they are not valid
        UTF-8, and the result is encoded back with the same codec; ``str`` in
        gives ``str`` out. Bodies the parser rejects are returned unchanged.
        """

        encoding: Optional[str] = None
        if isinstance(chunk, bytes):
            encoding = BODY_ENCODING
            try:
                markup = chunk.decode(encoding)
            except UnicodeDecodeError:
                LOGGER.debug("HTML body is not valid %s, decoding as %s", encoding, FALLBACK_BODY_ENCODING)
                encoding = FALLBACK_BODY_ENCODING
                markup = chunk.decode(encoding)
        else:
            markup = chunk

        html = self.filter_markup(markup)
        if html is None:
            return chunk
        if encoding is not None:
            return html.encode(encoding, errors="xmlcharrefreplace")
        return html

    def filter_markup(self, markup: str) -> Optional[str]:
        """Return the rewritten document, or ``None`` if *markup* should be left alone."""

        document = parse_document(markup)
        if document is None:
            return None

        head = head_element(document)
        if head is None:
            LOGGER.warning("HTML response has no <head> element, leaving it untouched")
            return None

        if self.config.manifest:
            root = root_element(document)
            if root is not None:
                root["manifest"] = self.config.manifest

        # Always appended, even when the page already declares them.
        for tag_spec in self._meta_tags:
            head.append(create_element(document, tag_spec.tag, tag_spec.attributes))

        present = existing_rels(head)
        for tag_spec in self._link_tags:
            if tag_spec.rel in present:
                LOGGER.warning("%s link already exists", tag_spec.rel)
                continue
            head.append(create_element(document, tag_spec.tag, tag_spec.attributes))

        html = serialize(document)
        if self.config.tidy:
            html = tidy_markup(html)
        return html

    # ------------------------------------------------------------------
    # Tag specs
    # ------------------------------------------------------------------
    def _build_meta_tags(self) -> tuple[TagSpec, ...]:
        return (
            TagSpec(tag="meta", attributes=(("name", META_VIEWPORT), ("content", self.config.viewport))),
            TagSpec(tag="meta", attributes=(("name", META_WEB_APP_CAPABLE), ("content", "yes"))),
            TagSpec(
                tag="meta",
                attributes=(("name", META_STATUS_BAR_STYLE), ("content", self.config.statusbar)),
            ),
        )

    def _build_link_tags(self) -> tuple[TagSpec, ...]:
        links: list[TagSpec] = []
        if self.config.icon:
            links.append(TagSpec(tag="link", attributes=(("rel", REL_TOUCH_ICON), ("href", self.config.icon))))
        if self.config.startup_image:
            links.append(
                TagSpec(tag="link", attributes=(("rel", REL_STARTUP_IMAGE), ("href", self.config.startup_image)))
            )
        return tuple(links)

    @property
    def meta_tags(self) -> tuple[TagSpec, ...]:
        return self._meta_tags

    @property
    def link_tags(self) -> tuple[TagSpec, ...]:
        return self._link_tags


__all__ = ["ResponseRewriter"]
