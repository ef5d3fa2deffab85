"""Typed content registry: validated JSON/XML/text values behind a pluggable storage backend."""

from .content import ItemType, JsonContent, XmlContent, TextContent, create_content
from .models import RepositoryItem
from .registry import ContentRegistry

__all__ = [
    "ItemType",
    "JsonContent",
    "XmlContent",
    "TextContent",
    "create_content",
    "RepositoryItem",
    "ContentRegistry",
]
