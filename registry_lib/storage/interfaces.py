from typing import Optional, Protocol, runtime_checkable

from registry_lib.models import RepositoryItem


@runtime_checkable
class StorageProtocol(Protocol):
    """Storage backend protocol mirroring `registry_lib.storage.StorageBackend`.

    Implementations should follow the semantics documented on the abstract
    base class in `registry_lib.storage.base` (None for missing items,
    InvalidArgumentError for blank keys, thread-safety, etc.).
    """

    def initialize(self) -> None: ...

    def try_add(self, key: str, item: RepositoryItem) -> bool: ...

    def try_get(self, key: str) -> Optional[RepositoryItem]: ...

    def try_remove(self, key: str) -> bool: ...

    def contains_key(self, key: str) -> bool: ...
