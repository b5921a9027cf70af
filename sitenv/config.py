"""Configuration helpers for the environment loader."""
from __future__ import annotations

import os
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path


_DEFAULT_DOTENV_DIR = Path(os.getenv("SITENV_DOTENV_DIR") or Path.cwd() / "dotenv")


@dataclass
class Settings:
    """Centralized environment-driven configuration.

    ``dotenv_dir`` holds the layered ``app*.env`` and ``site*.env`` files while
    ``root_dir`` holds the project's ``.env`` and ``.env.local`` files. By
    default the dotenv directory lives directly inside the project root.
    """

    dotenv_dir: Path = _DEFAULT_DOTENV_DIR
    root_dir: Path = Path(os.getenv("SITENV_ROOT_DIR") or _DEFAULT_DOTENV_DIR.parent)
    env_id_variable: str = os.getenv("SITENV_ENV_ID_VARIABLE", "PHAPP_ENV")
    log_level: str = os.getenv("LOG_LEVEL", "WARNING")


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached settings instance to avoid repeated environment reads."""

    return Settings()


settings = get_settings()
