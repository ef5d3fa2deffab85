from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import yaml

LOG_FORMAT = '%(asctime)s %(levelname)s [%(name)s]: %(message)s'


def configure_logging(config_path: Optional[Path] = None, level: Optional[str] = None) -> logging.Logger:
    """Configure root logging for the registry tools.

    The level comes from `level` when given, otherwise from the ``log_level``
    entry of the YAML config at `config_path`, otherwise WARNING. Existing
    root handlers are replaced so repeated calls do not duplicate output.
    Returns a module logger for the caller.
    """
    default_level = logging.WARNING
    lvl_name = level

    cfg_path = config_path or Path('data/config/registry.yml')
    if lvl_name is None and cfg_path.exists():
        try:
            with cfg_path.open('r', encoding='utf-8') as _f:
                _cfg = yaml.safe_load(_f) or {}
            if isinstance(_cfg, dict):
                lvl_name = _cfg.get('log_level')
        except (OSError, yaml.YAMLError):
            # If config parse fails, fall back to the default level
            lvl_name = None

    if isinstance(lvl_name, str):
        numeric = getattr(logging, lvl_name.upper(), None)
        if isinstance(numeric, int):
            default_level = numeric

    for handler in logging.root.handlers[:]:
        logging.root.removeHandler(handler)
    logging.basicConfig(level=default_level, format=LOG_FORMAT)
    logger = logging.getLogger(__name__)
    logger.debug("Log level set to %s", logging.getLevelName(default_level))
    return logger
