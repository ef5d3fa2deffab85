"""ContentRegistry: the public entry point for storing typed content.

The registry owns one storage backend and adds the lifecycle and
uniqueness rules on top of it:

- `initialize()` must be called exactly once before anything else.
- `register` never overwrites; a taken name raises ItemAlreadyExistsError.

The existence check in `register` and the backend's `try_add` are two
separate steps. Two callers registering the same name at once can both
pass the check; the backend's atomic `try_add` then lets only one of them
in and the other gets RegistrationFailedError. The stored value is never
replaced either way.
"""
from __future__ import annotations
import logging
import threading
from typing import Optional

from registry_lib.content import ContentValue
from registry_lib.errors import (
    AlreadyInitializedError,
    InvalidArgumentError,
    InvalidContentError,
    ItemAlreadyExistsError,
    ItemNotFoundError,
    NotInitializedError,
    RegistrationFailedError,
)
from registry_lib.models import RepositoryItem
from registry_lib.storage.interfaces import StorageProtocol
from registry_lib.storage.memory_backend import MemoryStorage

logger = logging.getLogger(__name__)


class ContentRegistry:
    def __init__(self, storage: Optional[StorageProtocol] = None) -> None:
        """Create a registry over `storage` (an in-memory backend by default)."""
        self._storage: StorageProtocol = storage if storage is not None else MemoryStorage()
        self._initialized = False
        self._init_lock = threading.Lock()

    @property
    def initialized(self) -> bool:
        return self._initialized

    @property
    def storage(self) -> StorageProtocol:
        return self._storage

    def initialize(self) -> None:
        """Prepare the backend for use. Raises AlreadyInitializedError on a second call."""
        with self._init_lock:
            if self._initialized:
                raise AlreadyInitializedError("Repository has already been initialized.")
            self._storage.initialize()
            self._initialized = True
        logger.info("Registry initialized with %s", type(self._storage).__name__)

    def register(self, name: str, content: ContentValue) -> None:
        self._ensure_initialized()
        self._validate_name(name)

        if content is None:
            raise InvalidArgumentError("Content cannot be None.")
        if not content.is_valid():
            raise InvalidContentError(f"Invalid {content.kind.label} content format.")

        if self._storage.contains_key(name):
            raise ItemAlreadyExistsError(f"Item '{name}' already exists and cannot be overwritten.")

        item = RepositoryItem(name, content)
        if not self._storage.try_add(name, item):
            raise RegistrationFailedError(f"Failed to register item '{name}'.")
        logger.info("Registered %s item '%s'", content.kind.label, name)

    def retrieve(self, name: str) -> ContentValue:
        self._ensure_initialized()
        self._validate_name(name)

        item = self._storage.try_get(name)
        if item is None:
            raise ItemNotFoundError(f"Item '{name}' not found in repository.")
        logger.debug("Retrieved item '%s'", name)
        return item.content

    def deregister(self, name: str) -> None:
        self._ensure_initialized()
        self._validate_name(name)

        if not self._storage.try_remove(name):
            raise ItemNotFoundError(f"Item '{name}' not found in repository or could not be removed.")
        logger.info("Deregistered item '%s'", name)

    def contains(self, name: str) -> bool:
        """Return True if `name` is registered. Blank names are never registered."""
        self._ensure_initialized()

        if not isinstance(name, str) or not name.strip():
            return False
        return self._storage.contains_key(name)

    def _ensure_initialized(self) -> None:
        if not self._initialized:
            raise NotInitializedError(
                "Repository must be initialized before use. Call initialize() first."
            )

    @staticmethod
    def _validate_name(name: str) -> None:
        if not isinstance(name, str) or not name.strip():
            raise InvalidArgumentError("Item name cannot be None or empty.")
