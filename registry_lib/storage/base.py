"""Storage backend interface definitions.

Defines the StorageBackend abstract class the registry persists items
through. Every implementation must honour the same contract so backends can
be swapped without touching the registry.
"""
from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Optional

from registry_lib.errors import InvalidArgumentError
from registry_lib.models import RepositoryItem


def normalize_key(key: str) -> str:
    """Return the lookup form of `key`.

    Keys are case-insensitive in every backend, so they are case-folded
    before any lookup. A None or blank key raises InvalidArgumentError.
    """
    if not isinstance(key, str) or not key.strip():
        raise InvalidArgumentError("Key cannot be None or empty.")
    return key.casefold()


class StorageBackend(ABC):
    """Abstract storage backend.

    Implementations must be thread-safe. The ``try_*`` methods report
    ordinary failures (missing key, collision) through their return value;
    a blank key is a caller error and raises InvalidArgumentError.
    """

    @abstractmethod
    def initialize(self) -> None:
        """Prepare persistent resources. Called once, before any other method."""

    @abstractmethod
    def try_add(self, key: str, item: RepositoryItem) -> bool:
        """Store `item` under `key` unless the key is taken.

        Returns False on a collision or when the item could not be stored.
        Never overwrites an existing entry.
        """

    @abstractmethod
    def try_get(self, key: str) -> Optional[RepositoryItem]:
        """Return the item stored under `key`, or None if absent or unreadable."""

    @abstractmethod
    def try_remove(self, key: str) -> bool:
        """Delete the entry for `key`. Return True only if one was removed."""

    @abstractmethod
    def contains_key(self, key: str) -> bool:
        """Return True if an entry exists for `key`."""
