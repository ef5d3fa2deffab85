from typing import Any, Optional, Protocol
import base64
import json
import os

import yaml
from cryptography.fernet import Fernet, InvalidToken
from cryptography.hazmat.primitives import hashes
from cryptography.hazmat.primitives.kdf.pbkdf2 import PBKDF2HMAC


class Serializer(Protocol):
    """Serialize/deserialize item records for backends that store bytes.

    Implementations should be symmetric: `dump` -> bytes, `load` <- bytes.
    `file_extension` names the files the file backend writes with it.
    """

    file_extension: str

    def dump(self, value: Any) -> bytes: ...

    def load(self, data: bytes) -> Any: ...


class JSONSerializer:
    """Default serializer: indented UTF-8 JSON, readable and diffable on disk."""

    file_extension = ".json"

    def dump(self, value: Any) -> bytes:
        return json.dumps(value, indent=2, ensure_ascii=False).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return json.loads(data.decode("utf-8"))


class YAMLSerializer:
    """Serializer using YAML (text). Only safe loading is supported."""

    file_extension = ".yaml"

    def dump(self, value: Any) -> bytes:
        return yaml.safe_dump(value, sort_keys=False, allow_unicode=True).encode("utf-8")

    def load(self, data: bytes) -> Any:
        return yaml.safe_load(data.decode("utf-8"))


class EncryptedSerializer:
    """Serializer that encrypts payloads using Fernet (symmetric, authenticated).

    Notes:
    - Provide either `key` (a Fernet key) or `password`. With a password each
      payload carries a random salt and the PBKDF2 iteration count so the
      loader can derive the same key.
    - `base_serializer` defaults to JSON and produces the plaintext that gets
      encrypted.
    - A payload that fails to decrypt (wrong key, tampered file) raises
      ValueError like any other undecodable record.
    """

    file_extension = ".enc"

    def __init__(
        self,
        *,
        key: Optional[bytes] = None,
        password: Optional[str] = None,
        iterations: int = 390000,
        base_serializer: Optional[Serializer] = None,
    ) -> None:
        if key is None and password is None:
            raise ValueError("EncryptedSerializer requires either `key` or `password`")
        self._key = key
        self._password = password
        self._iterations = iterations
        self.base_serializer = base_serializer or JSONSerializer()

    def _derive_key(self, password: str, salt: bytes, iterations: int) -> bytes:
        kdf = PBKDF2HMAC(
            algorithm=hashes.SHA256(),
            length=32,
            salt=salt,
            iterations=iterations,
        )
        return base64.urlsafe_b64encode(kdf.derive(password.encode("utf-8")))

    def dump(self, value: Any) -> bytes:
        """Serialize and encrypt value, returning a framed JSON blob."""
        inner = self.base_serializer.dump(value)

        if self._password is not None:
            salt = os.urandom(16)
            key = self._derive_key(self._password, salt, self._iterations)
            ct = Fernet(key).encrypt(inner)
            frame = {
                "v": 1,
                "mode": "password",
                "kdf": "pbkdf2",
                "iterations": self._iterations,
                "salt": base64.urlsafe_b64encode(salt).decode("ascii"),
                "ct": base64.urlsafe_b64encode(ct).decode("ascii"),
            }
        else:
            ct = Fernet(self._key).encrypt(inner)
            frame = {"v": 1, "mode": "key", "ct": base64.urlsafe_b64encode(ct).decode("ascii")}
        return json.dumps(frame).encode("utf-8")

    def load(self, data: bytes) -> Any:
        """Parse framed blob, derive key if needed, decrypt and deserialize."""
        frame = json.loads(data.decode("utf-8"))
        if not isinstance(frame, dict):
            raise ValueError("unknown frame format")
        mode = frame.get("mode")
        if mode == "password":
            if self._password is None:
                raise ValueError("serializer was not configured with a password")
            salt = base64.urlsafe_b64decode(frame["salt"].encode("ascii"))
            iterations = frame.get("iterations", self._iterations)
            key = self._derive_key(self._password, salt, iterations)
        elif mode == "key":
            if self._key is None:
                raise ValueError("serializer was not configured with a key")
            key = self._key
        else:
            raise ValueError("unknown frame format")

        ct = base64.urlsafe_b64decode(frame["ct"].encode("ascii"))
        try:
            pt = Fernet(key).decrypt(ct)
        except InvalidToken as e:
            raise ValueError("payload could not be decrypted") from e
        return self.base_serializer.load(pt)


SERIALIZERS = ("json", "yaml", "encrypted")


def create_serializer(
    name: str = "json", *, password: Optional[str] = None, key: Optional[bytes] = None
) -> Serializer:
    """Return a serializer by name. Raises ValueError for an unknown name."""
    name = (name or "json").lower()
    if name == "json":
        return JSONSerializer()
    if name == "yaml":
        return YAMLSerializer()
    if name == "encrypted":
        return EncryptedSerializer(key=key, password=password)
    raise ValueError(f"Unknown serializer: {name!r} (expected one of {', '.join(SERIALIZERS)})")
