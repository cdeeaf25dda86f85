"""Common data types used across the iphone_meta package."""

from __future__ import annotations

from typing import Callable, Iterable, MutableMapping, Optional, Sequence, Union

from pydantic import BaseModel, ConfigDict, Field

HeaderName = str
HeaderValue = str
HeaderTuple = tuple[HeaderName, HeaderValue]
HeaderList = list[HeaderTuple]
RawHeaders = Iterable[tuple[Union[str, bytes], Union[str, bytes]]]

Body = Union[str, bytes]
BodyFilter = Callable[[Body], Body]

AttributePair = tuple[str, str]
Attributes = Sequence[AttributePair]

# ASGI plumbing
Scope = MutableMapping[str, object]
Message = MutableMapping[str, object]


class TagSpec(BaseModel):
    """An element to be created in ``<head>``, with attributes in insertion order."""

    model_config = ConfigDict(frozen=True)

    tag: str = Field(..., description="Element name, e.g. 'meta' or 'link'.")
    attributes: tuple[AttributePair, ...] = Field(default_factory=tuple)

    def get(self, name: str) -> Optional[str]:
        """Return the value of attribute *name*, if set."""

        for key, value in self.attributes:
            if key == name:
                return value
        return None

    @property
    def rel(self) -> Optional[str]:
        return self.get("rel")


__all__ = [
    "AttributePair",
    "Attributes",
    "Body",
    "BodyFilter",
    "HeaderList",
    "HeaderName",
    "HeaderTuple",
    "HeaderValue",
    "Message",
    "RawHeaders",
    "Scope",
    "TagSpec",
]
