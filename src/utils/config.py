from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class APIConfig:
    url: str
    timeout_seconds: float


def _project_root() -> Path:
    # .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def load_api_config(path: str | None = None) -> APIConfig:
    """
    Load countries endpoint config from YAML, then apply env overrides.

    Precedence (file):
    - explicit `path`
    - env `COUNTRIES_API_CONFIG`
    - project default `config/api.yaml`

    Env overrides (after the file): COUNTRIES_API_URL, COUNTRIES_API_TIMEOUT_SECONDS
    """
    load_dotenv()
    cfg_path = Path(path or os.getenv("COUNTRIES_API_CONFIG") or (_project_root() / "config" / "api.yaml"))
    cfg = load_yaml(cfg_path)
    api = cfg.get("api") or {}

    url = os.getenv("COUNTRIES_API_URL") or api.get("url")
    timeout_raw = os.getenv("COUNTRIES_API_TIMEOUT_SECONDS") or api.get("timeout_seconds")

    if not url:
        raise ValueError(f"Missing api.url in {cfg_path}")
    if timeout_raw is None:
        raise ValueError(f"Missing api.timeout_seconds in {cfg_path}")

    try:
        timeout_seconds = float(timeout_raw)
    except (TypeError, ValueError):
        raise ValueError(f"Invalid api.timeout_seconds={timeout_raw!r} in {cfg_path}")
    if timeout_seconds <= 0:
        raise ValueError(f"api.timeout_seconds must be > 0 in {cfg_path}")

    return APIConfig(url=str(url), timeout_seconds=timeout_seconds)


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}
