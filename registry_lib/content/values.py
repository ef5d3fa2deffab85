"""Immutable content values, one class per ItemType.

A value is validated when it is created and cannot change afterwards, so
any instance that exists is known to be well-formed for its type.
"""
from __future__ import annotations
from dataclasses import dataclass
from typing import ClassVar, Dict, Type, Union

from registry_lib.errors import InvalidContentError
from .kinds import ItemType
from .validators import get_validator


@dataclass(frozen=True)
class ContentValue:
    raw: str

    kind: ClassVar[ItemType]
    # JSON and XML reject blank input before the format check runs
    allow_blank: ClassVar[bool] = False

    def __post_init__(self) -> None:
        label = self.kind.label
        if self.raw is None:
            raise InvalidContentError(f"{label} content cannot be None.")
        if not isinstance(self.raw, str):
            raise InvalidContentError(
                f"{label} content must be a string, got {type(self.raw).__name__}."
            )
        if not self.allow_blank and not self.raw.strip():
            raise InvalidContentError(f"{label} content cannot be empty.")
        if not self.is_valid():
            raise InvalidContentError(f"Invalid {label} format.")

    def raw_content(self) -> str:
        return self.raw

    def is_valid(self) -> bool:
        return get_validator(self.kind).validate(self.raw)


@dataclass(frozen=True)
class JsonContent(ContentValue):
    kind: ClassVar[ItemType] = ItemType.JSON


@dataclass(frozen=True)
class XmlContent(ContentValue):
    kind: ClassVar[ItemType] = ItemType.XML


@dataclass(frozen=True)
class TextContent(ContentValue):
    kind: ClassVar[ItemType] = ItemType.TEXT
    allow_blank: ClassVar[bool] = True


_CONTENT_CLASSES: Dict[ItemType, Type[ContentValue]] = {
    ItemType.JSON: JsonContent,
    ItemType.XML: XmlContent,
    ItemType.TEXT: TextContent,
}


def create_content(kind: Union[ItemType, int, str], raw: str) -> ContentValue:
    """Build the content value matching `kind`.

    Raises UnsupportedContentTypeError for an unknown kind and
    InvalidContentError when `raw` does not satisfy the kind's format.
    """
    return _CONTENT_CLASSES[ItemType.parse(kind)](raw)
