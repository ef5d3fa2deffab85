"""Simple memory-backed storage backend

Items live in a dict keyed by the case-folded item name. Nothing survives
the process.
"""
from typing import Dict, Optional, Tuple

from registry_lib.errors import InvalidArgumentError
from registry_lib.models import RepositoryItem
from .base import StorageBackend, normalize_key


class MemoryStorage(StorageBackend):
    def __init__(self) -> None:
        # Every entry is a fresh 1-tuple so `setdefault(...) is slot` tells
        # our insert apart from an existing entry, even for the same item.
        self._store: Dict[str, Tuple[RepositoryItem]] = {}

    def initialize(self) -> None:
        return

    def try_add(self, key: str, item: RepositoryItem) -> bool:
        k = normalize_key(key)
        if item is None:
            raise InvalidArgumentError("Item cannot be None.")
        slot = (item,)
        return self._store.setdefault(k, slot) is slot

    def try_get(self, key: str) -> Optional[RepositoryItem]:
        slot = self._store.get(normalize_key(key))
        return slot[0] if slot is not None else None

    def try_remove(self, key: str) -> bool:
        return self._store.pop(normalize_key(key), None) is not None

    def contains_key(self, key: str) -> bool:
        return normalize_key(key) in self._store

    def __len__(self) -> int:
        return len(self._store)
