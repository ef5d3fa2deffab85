"""File-backed storage backend.

Each item is written to its own file, `<data_dir>/<sanitized-key><ext>`,
holding a flat record with the fields ``name``, ``content`` and ``type``.
The serializer decides the on-disk encoding (JSON by default) and the
extension. Writes go to a temporary file which then replaces the target.

All operations on one backend instance run under a single lock, so the
backend is safe to share between threads at the cost of serializing I/O.
A record that cannot be read back is treated as missing rather than
raised, so one damaged file does not break the rest of the store.
"""
from __future__ import annotations
import logging
import os
import re
import threading
from pathlib import Path
from typing import Optional, Union

import yaml
from pydantic import AliasChoices, BaseModel, ConfigDict, Field

from registry_lib.content import ItemType, create_content
from registry_lib.errors import InvalidArgumentError
from registry_lib.models import RepositoryItem
from .base import StorageBackend, normalize_key
from .serializer import JSONSerializer, Serializer

logger = logging.getLogger(__name__)

# Characters not allowed in a file name on Windows or POSIX, plus control chars.
_ILLEGAL_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*\x00-\x1f]')

# Failures while reading/writing a record that are reported, not raised.
_RECORD_ERRORS = (OSError, ValueError, KeyError, TypeError, yaml.YAMLError)


class StoredItemRecord(BaseModel):
    """On-disk shape of one repository item.

    Older data files used PascalCase field names; both spellings are read.
    `type` is the integer ItemType code, although a name such as "JSON" is
    tolerated on read.
    """

    model_config = ConfigDict(populate_by_name=True)

    name: str = Field(validation_alias=AliasChoices("name", "Name"))
    content: str = Field(validation_alias=AliasChoices("content", "Content"))
    type: Union[int, str] = Field(validation_alias=AliasChoices("type", "Type"))

    @classmethod
    def from_item(cls, item: RepositoryItem) -> "StoredItemRecord":
        return cls(name=item.name, content=item.content.raw_content(), type=int(item.content.kind))


def sanitize_key(key: str) -> str:
    """Map `key` to a file stem: case-folded, illegal characters replaced by `_`.

    Distinct keys may map to the same stem; such keys share one file.
    """
    return _ILLEGAL_FILENAME_CHARS.sub("_", normalize_key(key))


class FileStorageBackend(StorageBackend):
    def __init__(
        self,
        data_dir: Union[str, Path] = "./data/registry",
        serializer: Optional[Serializer] = None,
    ) -> None:
        if data_dir is None or not str(data_dir).strip():
            raise InvalidArgumentError("Storage directory cannot be None or empty.")
        self.data_dir = Path(data_dir)
        self.serializer = serializer or JSONSerializer()
        self._lock = threading.Lock()

    def initialize(self) -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        logger.debug("File storage ready at %s", self.data_dir)

    def path_for(self, key: str) -> Path:
        return self.data_dir / f"{sanitize_key(key)}{self.serializer.file_extension}"

    def _write(self, path: Path, payload: bytes) -> None:
        tmp = path.with_name(path.name + ".tmp")
        try:
            with open(tmp, "wb") as f:
                f.write(payload)
                f.flush()
                os.fsync(f.fileno())
            tmp.replace(path)
        except OSError:
            tmp.unlink(missing_ok=True)
            raise

    def _exists(self, path: Path) -> bool:
        # Path.exists() raises on some errors (e.g. ENAMETOOLONG) before 3.12
        try:
            return path.exists()
        except OSError:
            logger.warning("Cannot stat %s", path, exc_info=True)
            return False

    def try_add(self, key: str, item: RepositoryItem) -> bool:
        path = self.path_for(key)
        if item is None:
            raise InvalidArgumentError("Item cannot be None.")

        with self._lock:
            try:
                if path.exists():
                    return False
                record = StoredItemRecord.from_item(item)
                self._write(path, self.serializer.dump(record.model_dump()))
            except _RECORD_ERRORS:
                logger.warning("Failed to store item %r at %s", key, path, exc_info=True)
                return False
            logger.debug("Stored item %r at %s", key, path)
            return True

    def try_get(self, key: str) -> Optional[RepositoryItem]:
        path = self.path_for(key)

        with self._lock:
            try:
                if not path.exists():
                    return None
                data = self.serializer.load(path.read_bytes())
                record = StoredItemRecord.model_validate(data)
            except _RECORD_ERRORS:
                logger.warning("Unreadable record for %r at %s", key, path, exc_info=True)
                return None

            # An unknown type tag means the data does not belong to this
            # version; UnsupportedContentTypeError propagates to the caller.
            kind = ItemType.parse(record.type)
            try:
                content = create_content(kind, record.content)
                return RepositoryItem(record.name, content)
            except InvalidArgumentError:
                logger.warning("Invalid %s content in %s", kind.label, path, exc_info=True)
                return None

    def try_remove(self, key: str) -> bool:
        path = self.path_for(key)

        with self._lock:
            try:
                if not path.exists():
                    return False
                path.unlink()
            except OSError:
                logger.warning("Failed to delete %s", path, exc_info=True)
                return False
            logger.debug("Removed item %r (%s)", key, path)
            return True

    def contains_key(self, key: str) -> bool:
        path = self.path_for(key)
        with self._lock:
            return self._exists(path)
