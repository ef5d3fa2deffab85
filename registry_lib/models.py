from __future__ import annotations
from dataclasses import dataclass

from registry_lib.content import ContentValue
from registry_lib.errors import InvalidArgumentError


@dataclass(frozen=True)
class RepositoryItem:
    """A named content value; the unit a storage backend persists."""

    name: str
    content: ContentValue

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidArgumentError("Name cannot be None or empty.")
        if self.content is None:
            raise InvalidArgumentError("Content cannot be None.")
