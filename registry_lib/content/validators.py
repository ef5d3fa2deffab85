"""Format validators for raw content strings.

The checks are deliberately shallow: only the outermost characters of the
trimmed text are inspected. ``"{not json}"`` is valid JSON content here.
"""
from __future__ import annotations
from typing import Dict, Optional, Protocol, Union, runtime_checkable

from .kinds import ItemType


@runtime_checkable
class ContentValidator(Protocol):
    """Boolean format check usable before a content value is constructed."""

    def validate(self, content: Optional[str]) -> bool: ...


class JsonContentValidator:
    def validate(self, content: Optional[str]) -> bool:
        if not isinstance(content, str) or not content.strip():
            return False
        trimmed = content.strip()
        return (trimmed.startswith("{") and trimmed.endswith("}")) or (
            trimmed.startswith("[") and trimmed.endswith("]")
        )


class XmlContentValidator:
    def validate(self, content: Optional[str]) -> bool:
        if not isinstance(content, str) or not content.strip():
            return False
        trimmed = content.strip()
        return trimmed.startswith("<") and trimmed.endswith(">")


class TextContentValidator:
    """Any string is valid text, including the empty string."""

    def validate(self, content: Optional[str]) -> bool:
        return isinstance(content, str)


_VALIDATORS: Dict[ItemType, ContentValidator] = {
    ItemType.JSON: JsonContentValidator(),
    ItemType.XML: XmlContentValidator(),
    ItemType.TEXT: TextContentValidator(),
}


def get_validator(kind: Union[ItemType, int, str]) -> ContentValidator:
    """Return the shared validator for `kind`.

    Raises UnsupportedContentTypeError when `kind` is not a known type.
    """
    return _VALIDATORS[ItemType.parse(kind)]
