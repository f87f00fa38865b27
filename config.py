from __future__ import annotations

import os
from dataclasses import dataclass, field
from functools import lru_cache
from pathlib import Path

from appdirs import user_log_dir
from dotenv import load_dotenv


@dataclass
class Settings:
    database_url: str = ""
    log_dir: str = field(default_factory=lambda: user_log_dir("project_dashboard"))
    log_level: str = "INFO"
    detailed_logging: bool = False
    manager_email: str | None = None
    manager_password: str | None = None
    manager_name: str = "Manager"
    recent_projects_limit: int = 6


def _env_flag(name: str) -> bool:
    return os.getenv(name, "0").lower() in {"1", "true", "yes", "on"}


@lru_cache()
def get_settings() -> Settings:
    dotenv_path = Path(__file__).resolve().parent / ".env"
    load_dotenv(dotenv_path)

    recent_limit = os.getenv("RECENT_PROJECTS_LIMIT", "").strip()
    return Settings(
        database_url=os.getenv("DATABASE_URL", ""),
        log_dir=os.getenv("LOG_DIR") or user_log_dir("project_dashboard"),
        log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        detailed_logging=_env_flag("DETAILED_LOGGING"),
        manager_email=os.getenv("MANAGER_EMAIL") or None,
        manager_password=os.getenv("MANAGER_PASSWORD") or None,
        manager_name=os.getenv("MANAGER_NAME", "Manager"),
        recent_projects_limit=int(recent_limit) if recent_limit else 6,
    )
