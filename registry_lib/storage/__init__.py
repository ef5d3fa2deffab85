"""Storage abstraction package for the content registry."""
from __future__ import annotations
from pathlib import Path
from typing import Optional, Union

from .base import StorageBackend, normalize_key
from .interfaces import StorageProtocol
from .memory_backend import MemoryStorage
from .file_backend import FileStorageBackend, StoredItemRecord, sanitize_key
from .serializer import (
    Serializer,
    JSONSerializer,
    YAMLSerializer,
    EncryptedSerializer,
    create_serializer,
)

BACKENDS = ("memory", "file")


def create_storage(
    backend: str = "memory",
    *,
    data_dir: Union[str, Path, None] = None,
    serializer: str = "json",
    password: Optional[str] = None,
    key: Optional[bytes] = None,
) -> StorageBackend:
    """Build a storage backend by name.

    `data_dir`, `serializer`, `password` and `key` only apply to the file
    backend. Raises ValueError for an unknown backend or serializer name.
    """
    name = (backend or "memory").lower()
    if name == "memory":
        return MemoryStorage()
    if name == "file":
        return FileStorageBackend(
            data_dir=data_dir if data_dir is not None else "./data/registry",
            serializer=create_serializer(serializer, password=password, key=key),
        )
    raise ValueError(f"Unknown storage backend: {backend!r} (expected one of {', '.join(BACKENDS)})")


__all__ = [
    "StorageBackend",
    "StorageProtocol",
    "MemoryStorage",
    "FileStorageBackend",
    "StoredItemRecord",
    "Serializer",
    "JSONSerializer",
    "YAMLSerializer",
    "EncryptedSerializer",
    "create_serializer",
    "create_storage",
    "normalize_key",
    "sanitize_key",
    "BACKENDS",
]
