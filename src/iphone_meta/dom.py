"""Thin helpers over BeautifulSoup for the handful of DOM operations we need."""

from __future__ import annotations

import logging
from typing import Optional

from bs4 import BeautifulSoup, ParserRejectedMarkup
from bs4.element import Tag

from .types import Attributes

LOGGER = logging.getLogger(__name__)

# html5lib fills in implied <html>, <head> and <body> elements.
PARSER = "html5lib"


def parse_document(markup: str) -> Optional[BeautifulSoup]:
    """Parse *markup* into a document, or return ``None`` if the parser rejects it."""

    try:
        return BeautifulSoup(markup, PARSER)
    except ParserRejectedMarkup as exc:
        LOGGER.warning("Unable to parse HTML body, leaving it untouched: %s", exc)
        return None


def create_element(document: BeautifulSoup, tag: str, attributes: Attributes) -> Tag:
    """Create an unattached *tag* element with *attributes* set in the order given."""

    element = document.new_tag(tag)
    for name, value in attributes:
        element[name] = value
    return element


def root_element(document: BeautifulSoup) -> Optional[Tag]:
    return document.find("html")


def head_element(document: BeautifulSoup) -> Optional[Tag]:
    return document.find("head")


def existing_rels(head: Tag) -> set[str]:
    """Collect the ``rel`` values of the ``<link>`` elements already inside *head*.

    Each value is kept whole: ``rel="icon apple-touch-icon"`` yields
    ``"icon apple-touch-icon"``, not its separate tokens.
    """

    rels: set[str] = set()
    for link in head.find_all("link"):
        value = link.get("rel")
        if not value:
            continue
        rels.add(value if isinstance(value, str) else " ".join(value))
    return rels


def serialize(document: BeautifulSoup) -> str:
    return str(document)


def tidy_markup(markup: str) -> str:
    """Re-indent *markup* one element per line.

    The output is HTML (not XHTML), indented automatically and carries no
    generator marker.
    """

    return BeautifulSoup(markup, PARSER).prettify()


__all__ = [
    "create_element",
    "existing_rels",
    "head_element",
    "parse_document",
    "root_element",
    "serialize",
    "tidy_markup",
]
