"""Content values and validators for the supported formats."""

from .kinds import ItemType
from .validators import (
    ContentValidator,
    JsonContentValidator,
    XmlContentValidator,
    TextContentValidator,
    get_validator,
)
from .values import ContentValue, JsonContent, XmlContent, TextContent, create_content

__all__ = [
    "ItemType",
    "ContentValidator",
    "JsonContentValidator",
    "XmlContentValidator",
    "TextContentValidator",
    "get_validator",
    "ContentValue",
    "JsonContent",
    "XmlContent",
    "TextContent",
    "create_content",
]
