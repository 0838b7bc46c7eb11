from __future__ import annotations
import logging
from pathlib import Path
from typing import Any, Dict

import yaml

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "configs/config.yaml"


def load_cfg(path: str | Path = DEFAULT_CONFIG_PATH) -> Dict[str, Any]:
    """Read the YAML config. A missing file means built-in defaults (empty mapping)."""
    p = Path(path)
    if not p.exists():
        logger.info("config %s not found, using defaults", p)
        return {}
    with open(p, "r", encoding="utf-8") as f:
        cfg = yaml.safe_load(f) or {}
    if not isinstance(cfg, dict):
        raise ValueError(f"Config {p} must be a mapping, got {type(cfg).__name__}")
    return cfg
