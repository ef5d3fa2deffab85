from __future__ import annotations
from enum import IntEnum
from typing import Union

from registry_lib.errors import UnsupportedContentTypeError


class ItemType(IntEnum):
    """Closed set of content formats the registry accepts.

    The integer values are written to disk by the file backend and must not
    be renumbered.
    """

    JSON = 1
    XML = 2
    TEXT = 3

    @property
    def label(self) -> str:
        return "Text" if self is ItemType.TEXT else self.name

    @classmethod
    def parse(cls, value: Union["ItemType", int, str]) -> "ItemType":
        """Resolve an ItemType from an enum member, its code or its name.

        Raises UnsupportedContentTypeError for anything outside the set.
        """
        if isinstance(value, cls):
            return value
        # bool is an int subclass; True must not silently become JSON
        if isinstance(value, int) and not isinstance(value, bool):
            try:
                return cls(value)
            except ValueError:
                raise UnsupportedContentTypeError(f"Unsupported item type: {value}") from None
        if isinstance(value, str):
            text = value.strip()
            if text.isascii() and text.isdigit():
                return cls.parse(int(text))
            try:
                return cls[text.upper()]
            except KeyError:
                raise UnsupportedContentTypeError(f"Unsupported item type: {value!r}") from None
        raise UnsupportedContentTypeError(f"Unsupported item type: {value!r}")
