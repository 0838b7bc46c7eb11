from __future__ import annotations
from typing import Any, Dict

from .base import FormatterService
from .black_api import BlackApiService

STABLE_URL = "https://black-api-stable.now.sh"
MASTER_URL = "https://black-api-master.now.sh"

DEFAULT_DEPLOYMENTS: Dict[str, Dict[str, Any]] = {
    "stable": {"type": "black_api", "base_url": STABLE_URL},
    "master": {"type": "black_api", "base_url": MASTER_URL},
}


def build_service(name: str, d: Dict[str, Any], timeout_s: int = 30) -> FormatterService:
    dtype = d.get("type", "black_api")
    if dtype == "black_api":
        return BlackApiService(
            name=name,
            base_url=d["base_url"],
            time_out_s=int(d.get("time_out_s", timeout_s)),
        )
    raise ValueError(f"Unknown deployment type: {dtype}")


def build_registry(cfg: Dict[str, Any] | None = None) -> Dict[str, FormatterService]:
    """version tag -> service, in config order"""
    cfg = cfg or {}
    deployments = cfg.get("deployments") or DEFAULT_DEPLOYMENTS
    timeout_s = int((cfg.get("http") or {}).get("timeout_s", 30))
    if not isinstance(deployments, dict):
        raise ValueError("'deployments' must be a mapping of version tag to deployment config")
    return {name: build_service(name, d, timeout_s) for name, d in deployments.items()}
