from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def _env_path(name: str) -> Path | None:
    raw = (os.getenv(name) or "").strip()
    return Path(raw).expanduser() if raw else None


@dataclass(frozen=True)
class Settings:
    # Storage; None means data/database.json under the project root
    db_path: Path | None

    # Debug
    debug_reset_db: bool
    log_operations: bool


def get_settings(*, env_file: str | None = "local.env") -> Settings:
    if env_file:
        load_dotenv(env_file)

    db_path = _env_path("CHIRPY_DB_PATH")

    # Mirrors the server's --debug flag: start from an empty database.
    debug_reset_db = _env_bool("CHIRPY_DEBUG_RESET_DB", False)
    log_operations = _env_bool("CHIRPY_LOG_OPERATIONS", True)

    return Settings(
        db_path=db_path,
        debug_reset_db=debug_reset_db,
        log_operations=log_operations,
    )
