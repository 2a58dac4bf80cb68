"""Runtime settings read from the environment."""

from __future__ import annotations

from dataclasses import dataclass
import os
from pathlib import Path
from typing import Mapping, Optional

ENV_PREFIX = "WAREHOUSE_PLANNER_"
DEFAULT_SLOT = "warehousePlan"
DEFAULT_STORE_PATH = Path("~/.warehouse_planner/plans.json")

_LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _parse_yes_no(value: str) -> bool:
    return value.strip().lower() in {"y", "yes", "true", "1"}


@dataclass(frozen=True)
class Settings:
    store_path: Path = DEFAULT_STORE_PATH.expanduser()
    slot: str = DEFAULT_SLOT
    log_level: str = "INFO"
    log_json: bool = False

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Settings":
        env = os.environ if environ is None else environ
        store_path = Path(
            env.get(f"{ENV_PREFIX}STORE", str(DEFAULT_STORE_PATH))
        ).expanduser()
        slot = env.get(f"{ENV_PREFIX}SLOT", "").strip() or DEFAULT_SLOT
        log_level = env.get(f"{ENV_PREFIX}LOG_LEVEL", "INFO").strip().upper()
        if log_level not in _LOG_LEVELS:
            valid = ", ".join(_LOG_LEVELS)
            raise ValueError(f"Unsupported log level '{log_level}'. Valid values: {valid}.")
        log_json = _parse_yes_no(env.get(f"{ENV_PREFIX}LOG_JSON", "no"))
        return cls(
            store_path=store_path,
            slot=slot,
            log_level=log_level,
            log_json=log_json,
        )
