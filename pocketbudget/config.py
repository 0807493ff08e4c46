"""Runtime settings for the PocketBudget API, read from the environment."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Mapping, Optional

logger = logging.getLogger(__name__)

TRUTHY = {"1", "true", "yes", "on"}


def _env_int(env: Mapping[str, str], name: str, default: int) -> int:
    raw = env.get(name)
    if raw is None or not raw.strip():
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning("Invalid integer for %s=%r, using default=%d", name, raw, default)
        return default


def _split_origins(raw: Optional[str]) -> List[str]:
    if not raw:
        return []
    return [origin.strip() for origin in raw.split(",") if origin.strip()]


@dataclass
class Settings:
    """Application configuration."""

    data_dir: Path = Path("data")
    host: str = "127.0.0.1"
    port: int = 5000
    env: str = "prod"
    allowed_origins: List[str] = field(default_factory=list)
    enforce_balance: bool = False
    log_level: str = "INFO"

    @property
    def is_development(self) -> bool:
        return self.env in {"dev", "development"}

    @classmethod
    def from_env(cls, env: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if env is None else env
        return cls(
            data_dir=Path(env.get("POCKETBUDGET_DATA_DIR") or "data"),
            host=env.get("POCKETBUDGET_HOST") or "127.0.0.1",
            port=_env_int(env, "PORT", 5000),
            env=(env.get("POCKETBUDGET_ENV") or "prod").strip().lower(),
            allowed_origins=_split_origins(env.get("POCKETBUDGET_ALLOWED_ORIGINS")),
            enforce_balance=(env.get("POCKETBUDGET_ENFORCE_BALANCE") or "").strip().lower() in TRUTHY,
            log_level=(env.get("POCKETBUDGET_LOG_LEVEL") or "INFO").strip().upper(),
        )
