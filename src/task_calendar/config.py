# src/task_calendar/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app.
- Nothing is required at import time; every value has a default.
- Optional config_local.py for safe local overrides.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

ENV_PREFIX = "TASKCAL"

STORE_SQLITE = "sqlite"
STORE_HTTP = "http"
_STORE_KINDS = (STORE_SQLITE, STORE_HTTP)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


def _load_dotenv_if_available() -> None:
    """Load .env locally if python-dotenv is installed. Safe no-op otherwise."""
    try:
        from dotenv import load_dotenv  # type: ignore
    except ImportError:
        return
    load_dotenv(override=False)


_load_dotenv_if_available()


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in {"1", "true", "yes", "y", "on"}


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def _store_kind(raw: object) -> str:
    """Normalise a store backend name; unknown values fall back to sqlite."""
    kind = str(raw).strip().lower()
    return kind if kind in _STORE_KINDS else STORE_SQLITE


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str

    # ---- Task store ----
    store_kind: str
    tasks_db_path: Path
    api_base_url: str
    api_timeout_seconds: float

    # ---- Local data paths (ignored by git) ----
    data_dir: Path

    # ---- Behaviour ----
    follow_selection: bool

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "task-calendar").strip() or "task-calendar"
        log_level = _env(_k("LOG_LEVEL"), "INFO")

        store_kind = _store_kind(_env(_k("STORE"), STORE_SQLITE))

        data_dir = _env_path(_k("DATA_DIR"), Path(".local/task-calendar"))
        tasks_db_path = _env_path(_k("TASKS_DB_PATH"), data_dir / "tasks.sqlite3")

        api_base_url = _env(_k("API_BASE_URL"), "http://localhost:8000/api").strip()
        api_timeout_seconds = max(0.1, _env_float(_k("API_TIMEOUT_SECONDS"), 10.0))

        follow_selection = _env_bool(_k("FOLLOW_SELECTION"), True)

        return Settings(
            app_name=app_name,
            log_level=log_level,
            store_kind=store_kind,
            tasks_db_path=tasks_db_path,
            api_base_url=api_base_url,
            api_timeout_seconds=api_timeout_seconds,
            data_dir=data_dir,
            follow_selection=follow_selection,
        )


SETTINGS = Settings.from_env()

# ---- Optional local overrides (never committed) ----
try:
    import config_local as _config_local  # type: ignore
except ImportError:
    _config_local = None

if _config_local is not None:
    # Simple overrides for selected names. Keep it explicit.
    if hasattr(_config_local, "STORE"):
        object.__setattr__(SETTINGS, "store_kind", _store_kind(_config_local.STORE))
    if hasattr(_config_local, "API_BASE_URL"):
        object.__setattr__(SETTINGS, "api_base_url", str(_config_local.API_BASE_URL))
    if hasattr(_config_local, "FOLLOW_SELECTION"):
        object.__setattr__(SETTINGS, "follow_selection", bool(_config_local.FOLLOW_SELECTION))


def get_settings() -> Settings:
    return SETTINGS
