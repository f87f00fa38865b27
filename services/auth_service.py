"""Текущая сессия пользователя."""

from __future__ import annotations

import logging

from services.repository import DataRepository
from services.users.dto import UserDTO

logger = logging.getLogger(__name__)


class AuthSession:
    """Хранит вошедшего пользователя; используется только для проверки ролей."""

    def __init__(self, repository: DataRepository, user: UserDTO | None = None):
        self._repository = repository
        self._user = user

    @property
    def user(self) -> UserDTO | None:
        return self._user

    @property
    def role(self) -> str | None:
        return self._user.role if self._user else None

    @property
    def is_manager(self) -> bool:
        return bool(self._user and self._user.is_manager)

    def sign_in(self, email: str, password: str) -> UserDTO | None:
        user = self._repository.authenticate(email, password)
        if user is not None:
            logger.info("Вход выполнен: %s (%s)", user.email, user.role)
        self._user = user
        return user

    def sign_out(self) -> None:
        if self._user is not None:
            logger.info("Выход: %s", self._user.email)
        self._user = None
