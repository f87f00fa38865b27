"""Сборка зависимостей дашборда: хранилище, контекст данных, сессия."""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any

from config import Settings, get_settings
from core.data_context import DataContext
from services.auth_service import AuthSession
from services.repository import DataRepository, PeeweeRepository

Factory = Callable[["AppContext"], Any]

DEFAULT_FACTORIES: dict[str, Factory] = {
    "repository": lambda ctx: PeeweeRepository(),
    "data_context": lambda ctx: DataContext(ctx.repository),
    "auth_session": lambda ctx: AuthSession(ctx.repository),
}


class AppContext:
    """Зависимости создаются при первом обращении и затем переиспользуются.

    ``override`` возвращает новый контекст: подменённые объекты берутся как
    есть, зависящие от них создаются заново.
    """

    def __init__(
        self,
        settings: Settings,
        factories: Mapping[str, Factory] | None = None,
        *,
        overrides: Mapping[str, Any] | None = None,
    ) -> None:
        self._settings = settings
        self._factories = dict(DEFAULT_FACTORIES)
        if factories:
            self._factories.update(factories)
        self._instances: dict[str, Any] = dict(overrides or {})

    @property
    def settings(self) -> Settings:
        return self._settings

    @property
    def repository(self) -> DataRepository:
        return self._resolve("repository")

    @property
    def data_context(self) -> DataContext:
        return self._resolve("data_context")

    @property
    def auth_session(self) -> AuthSession:
        return self._resolve("auth_session")

    def override(self, **deps: Any) -> "AppContext":
        settings = deps.pop("settings", self._settings)
        unknown = set(deps) - set(self._factories)
        if unknown:
            names = ", ".join(sorted(unknown))
            raise ValueError(f"Неизвестные зависимости для переопределения: {names}")
        return AppContext(settings, self._factories, overrides=deps)

    def _resolve(self, name: str) -> Any:
        if name not in self._instances:
            self._instances[name] = self._factories[name](self)
        return self._instances[name]


_app_context: AppContext | None = None


def build_context(settings: Settings) -> AppContext:
    return AppContext(settings)


def get_app_context() -> AppContext:
    """Получить (или создать) общий контекст приложения."""
    global _app_context
    if _app_context is None:
        _app_context = build_context(get_settings())
    return _app_context


__all__ = ["AppContext", "DEFAULT_FACTORIES", "build_context", "get_app_context"]
