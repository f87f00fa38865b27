"""Подключение Peewee-Proxy :data:`db` к базе из ``DATABASE_URL``.

Вызывайте :func:`init_from_env` в начале entry-point'а, до первого запроса.
"""

from __future__ import annotations

import logging
import os

from peewee import Database
from playhouse.db_url import connect

from .db import db
from .models import (
    CommentTask,
    Lead,
    Project,
    ProjectEmployee,
    Stage,
    User,
)

logger = logging.getLogger(__name__)

# порядок важен: таблицы со ссылками создаются после своих целей
ALL_MODELS = [User, Project, ProjectEmployee, Stage, CommentTask, Lead]

_DEFAULT_ENV = "DATABASE_URL"


def build_database(url: str) -> Database:
    """``sqlite:///path.db``, ``sqlite:///:memory:`` или ``postgres://...``."""
    if url.startswith("sqlite"):
        return connect(url, pragmas={"foreign_keys": 1})
    return connect(url)


def init_from_env(database_url: str | None = None, env_var: str = _DEFAULT_ENV) -> None:
    """Инициализирует :data:`db` и создаёт недостающие таблицы.

    Повторный вызов ничего не делает.
    """
    if getattr(db, "obj", None):
        return

    url = database_url or os.getenv(env_var)
    if not url:
        raise RuntimeError(f"{env_var} is not set")

    database = build_database(url)
    db.initialize(database)
    database.create_tables(ALL_MODELS, safe=True)
    logger.info("База данных подключена: %s", type(database).__name__)
