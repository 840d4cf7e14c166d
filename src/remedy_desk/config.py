# src/remedy_desk/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- Malformed values fall back to defaults instead of failing at startup.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

ENV_PREFIX = "REMEDY"

load_dotenv(override=False)


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


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


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path
    log_file: Path

    # ---- Tasks ----
    seed_enabled: bool
    agent_label: str
    agent_delay_seconds: float

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "remedy-desk").strip() or "remedy-desk"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/remedy_desk"))

        log_file = _env_path(_k("LOG_FILE"), data_dir / "remedy_desk.log")

        seed_enabled = _env_bool(_k("SEED_ENABLED"), True)
        agent_label = _env(_k("AGENT_LABEL"), "AI Agent").strip() or "AI Agent"
        agent_delay_seconds = max(0.0, _env_float(_k("AGENT_DELAY_SECONDS"), 0.5))

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            log_file=log_file,
            seed_enabled=seed_enabled,
            agent_label=agent_label,
            agent_delay_seconds=agent_delay_seconds,
        )


SETTINGS = Settings.from_env()


def get_settings() -> Settings:
    return SETTINGS
