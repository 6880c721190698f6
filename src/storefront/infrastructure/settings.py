"""Runtime settings, read from the environment.

    STOREFRONT_DATA_DIR            where store.json lives (default: <repo>/data)
    STOREFRONT_RESTOCK_ON_CANCEL   return stock when an order is cancelled
    STOREFRONT_COMMIT_TIMEOUT      seconds to wait for the commit lock
    STOREFRONT_STALE_LOCK_AFTER    age in seconds after which a commit lock is
                                   considered abandoned and removed
    STOREFRONT_LOG_LEVEL           overrides the per-environment default
    STOREFRONT_ENV                 development | test | staging | production
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass
from pathlib import Path

# When installed in editable mode the project root is the repo root.
_DEFAULT_DATA_DIR = Path(__file__).resolve().parents[3] / "data"

_LEVEL_BY_ENV = {
    "production": "INFO",
    "staging": "INFO",
    "development": "DEBUG",
    "test": "WARNING",
}

_TRUTHY = {"1", "true", "yes", "on"}
_FALSY = {"0", "false", "no", "off", ""}


@dataclass(frozen=True)
class Settings:
    data_dir: Path = _DEFAULT_DATA_DIR
    restock_on_cancel: bool = False
    commit_timeout: float = 5.0
    stale_lock_after: float = 30.0
    env: str = "development"
    log_level: str = "DEBUG"

    @property
    def store_path(self) -> Path:
        return self.data_dir / "store.json"

    @staticmethod
    def from_env(environ: Mapping[str, str] | None = None) -> Settings:
        environ = os.environ if environ is None else environ
        env = environ.get("STOREFRONT_ENV", "development").strip().lower()
        return Settings(
            data_dir=Path(environ.get("STOREFRONT_DATA_DIR", str(_DEFAULT_DATA_DIR))),
            restock_on_cancel=_parse_bool(
                "STOREFRONT_RESTOCK_ON_CANCEL",
                environ.get("STOREFRONT_RESTOCK_ON_CANCEL", "false"),
            ),
            commit_timeout=_parse_float(
                "STOREFRONT_COMMIT_TIMEOUT",
                environ.get("STOREFRONT_COMMIT_TIMEOUT", "5.0"),
            ),
            stale_lock_after=_parse_float(
                "STOREFRONT_STALE_LOCK_AFTER",
                environ.get("STOREFRONT_STALE_LOCK_AFTER", "30.0"),
            ),
            env=env,
            log_level=environ.get("STOREFRONT_LOG_LEVEL", _LEVEL_BY_ENV.get(env, "INFO")).upper(),
        )


def _parse_bool(name: str, raw: str) -> bool:
    value = raw.strip().lower()
    if value in _TRUTHY:
        return True
    if value in _FALSY:
        return False
    raise ValueError(f"{name} must be a boolean, got {raw!r}")


def _parse_float(name: str, raw: str) -> float:
    try:
        value = float(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be a number, got {raw!r}") from exc
    if value <= 0:
        raise ValueError(f"{name} must be positive, got {raw!r}")
    return value
