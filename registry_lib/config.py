"""Registry configuration loaded from a YAML file.

Example ``registry.yml``::

    backend: file
    data_dir: ./data/registry
    serializer: json
    log_level: INFO

A missing file yields the defaults. The encryption password may be kept
out of the file and supplied through ``REGISTRY_ENCRYPTION_PASSWORD``.
"""
from __future__ import annotations
import logging
import os
from dataclasses import dataclass, asdict, replace
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml

from registry_lib.registry import ContentRegistry
from registry_lib.storage import BACKENDS, create_storage
from registry_lib.storage.serializer import SERIALIZERS

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path("data/config/registry.yml")
DEFAULT_DATA_DIR = "./data/registry"
PASSWORD_ENV_VAR = "REGISTRY_ENCRYPTION_PASSWORD"


@dataclass
class RegistryConfig:
    backend: str = "file"
    data_dir: str = DEFAULT_DATA_DIR
    serializer: str = "json"
    password: Optional[str] = None
    log_level: str = "WARNING"

    def __post_init__(self) -> None:
        self.backend = str(self.backend).lower()
        self.serializer = str(self.serializer).lower()
        if self.backend not in BACKENDS:
            raise ValueError(f"invalid config: unknown backend {self.backend!r}")
        if self.serializer not in SERIALIZERS:
            raise ValueError(f"invalid config: unknown serializer {self.serializer!r}")

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        # never echo secrets back into a written config
        data.pop("password", None)
        return data


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> RegistryConfig:
    """Load a RegistryConfig from `path` (YAML), applying non-None `overrides`.

    Raises ValueError when the file cannot be parsed or is not a mapping.
    """
    cfg_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    data: Dict[str, Any] = {}
    if cfg_path.exists():
        try:
            with cfg_path.open("r", encoding="utf-8") as f:
                loaded = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"invalid config format: parse error in {cfg_path}") from e
        if loaded is None:
            loaded = {}
        if not isinstance(loaded, dict):
            raise ValueError("invalid config format: expected mapping")
        data = loaded
        logger.debug("Loaded registry config from %s", cfg_path)
    elif path is not None:
        logger.info("Config file %s not found; using defaults", cfg_path)

    known = {k: data[k] for k in ("backend", "data_dir", "serializer", "password", "log_level") if k in data}
    cfg = RegistryConfig(**known)

    changes = {k: v for k, v in overrides.items() if v is not None}
    if changes:
        cfg = replace(cfg, **changes)
    if cfg.password is None and os.environ.get(PASSWORD_ENV_VAR):
        cfg = replace(cfg, password=os.environ[PASSWORD_ENV_VAR])
    return cfg


def build_registry(cfg: RegistryConfig) -> ContentRegistry:
    """Create an uninitialized ContentRegistry over the backend `cfg` describes."""
    storage = create_storage(
        cfg.backend,
        data_dir=cfg.data_dir,
        serializer=cfg.serializer,
        password=cfg.password,
    )
    logger.debug("Built %s storage (serializer=%s)", cfg.backend, cfg.serializer)
    return ContentRegistry(storage)
