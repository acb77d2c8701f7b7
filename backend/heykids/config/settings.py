from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

# The project .env wins over the shell so edits to it always take effect.
load_dotenv(override=True)

_TRUE = {"1", "true", "yes", "y", "on"}
_FALSE = {"0", "false", "no", "n", "off"}

STORAGE_BACKENDS = ("memory", "file")


def _get_env_str(key: str, default: str) -> str:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip()


def _get_env_bool(key: str, default: bool) -> bool:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    value = raw.strip().lower()
    if value in _TRUE:
        return True
    if value in _FALSE:
        return False
    raise ValueError(f"environment variable {key} must be a boolean, got {raw!r}")


def _get_env_path(key: str, default: Path) -> Path:
    raw = os.getenv(key)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw.strip()).expanduser()


# ===== paths =====

HEYKIDS_PACKAGE_DIR = Path(__file__).resolve().parent.parent  # backend/heykids/
_BACKEND_DIR = HEYKIDS_PACKAGE_DIR.parent

# Repo checkout: runtime data under <repo>/files; installed package: under cwd.
if _BACKEND_DIR.name == "backend":
    PROJECT_ROOT = _BACKEND_DIR.parent
else:
    PROJECT_ROOT = Path.cwd()

DEFAULT_DATA_DIR = PROJECT_ROOT / "files"
DEFAULT_CATALOG_PATH = HEYKIDS_PACKAGE_DIR / "infrastructure" / "catalog" / "movies.yaml"


@dataclass(frozen=True)
class Settings:
    storage_backend: str = "memory"
    data_dir: Path = DEFAULT_DATA_DIR
    catalog_path: Path = DEFAULT_CATALOG_PATH
    validate_watchlist_ids: bool = False
    raise_on_save_error: bool = False
    log_level: str = "INFO"


def load_settings() -> Settings:
    """Read settings from the environment. Malformed values raise ``ValueError``."""
    backend = _get_env_str("HEYKIDS_STORAGE_BACKEND", "memory").lower()
    if backend not in STORAGE_BACKENDS:
        raise ValueError(
            f"environment variable HEYKIDS_STORAGE_BACKEND must be one of {STORAGE_BACKENDS}, got {backend!r}"
        )
    level = _get_env_str("HEYKIDS_LOG_LEVEL", "INFO").upper()
    if not isinstance(logging.getLevelName(level), int):
        raise ValueError(f"environment variable HEYKIDS_LOG_LEVEL is not a log level: {level!r}")
    return Settings(
        storage_backend=backend,
        data_dir=_get_env_path("HEYKIDS_DATA_DIR", DEFAULT_DATA_DIR),
        catalog_path=_get_env_path("HEYKIDS_CATALOG_PATH", DEFAULT_CATALOG_PATH),
        validate_watchlist_ids=_get_env_bool("HEYKIDS_VALIDATE_WATCHLIST_IDS", False),
        raise_on_save_error=_get_env_bool("HEYKIDS_RAISE_ON_SAVE_ERROR", False),
        log_level=level,
    )


_SETTINGS: Optional[Settings] = None


def get_settings(reload: bool = False) -> Settings:
    global _SETTINGS
    if _SETTINGS is None or reload:
        _SETTINGS = load_settings()
    return _SETTINGS
