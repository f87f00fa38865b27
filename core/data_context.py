"""Общий снимок данных дашборда и операции записи через хранилище."""

from __future__ import annotations

import logging
from typing import Callable

from services.leads.dto import LeadDTO, LeadFields
from services.projects.dto import (
    CommentTaskDTO,
    ProjectDTO,
    ProjectPayload,
    StageDTO,
)
from services.repository import DataRepository
from services.users.dto import NewAccount, UserDTO

logger = logging.getLogger(__name__)

Listener = Callable[[str], None]

COLLECTIONS = ("projects", "stages", "comment_tasks", "leads", "users")


class DataContext:
    """Единственный владелец коллекций после обращения к хранилищу.

    Операции записи не меняют коллекции локально: после успешного вызова
    хранилища соответствующая коллекция перечитывается целиком. Ошибки
    самой записи пробрасываются вызывающему коду; сбой последующего
    перечитывания или подписчика только логируется, запись уже выполнена.
    """

    def __init__(self, repository: DataRepository, *, autoload: bool = True):
        self._repository = repository
        self._projects: list[ProjectDTO] = []
        self._stages: list[StageDTO] = []
        self._comment_tasks: list[CommentTaskDTO] = []
        self._leads: list[LeadDTO] = []
        self._users: list[UserDTO] = []
        self._listeners: list[Listener] = []
        if autoload:
            self.refresh()

    # --- Чтение ----------------------------------------------------------
    @property
    def repository(self) -> DataRepository:
        return self._repository

    @property
    def projects(self) -> list[ProjectDTO]:
        return list(self._projects)

    @property
    def stages(self) -> list[StageDTO]:
        return list(self._stages)

    @property
    def comment_tasks(self) -> list[CommentTaskDTO]:
        return list(self._comment_tasks)

    @property
    def leads(self) -> list[LeadDTO]:
        return list(self._leads)

    @property
    def users(self) -> list[UserDTO]:
        return list(self._users)

    # --- Подписки --------------------------------------------------------
    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Подписаться на обновление коллекций; возвращает функцию отписки."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _notify(self, collection: str) -> None:
        for listener in list(self._listeners):
            listener(collection)

    # --- Обновление ------------------------------------------------------
    def refresh(self) -> None:
        for name in COLLECTIONS:
            self._reload(name)

    def _reload(self, collection: str) -> None:
        loaders = {
            "projects": self._repository.list_projects,
            "stages": self._repository.list_stages,
            "comment_tasks": self._repository.list_comment_tasks,
            "leads": self._repository.list_leads,
            "users": self._repository.list_users,
        }
        setattr(self, f"_{collection}", list(loaders[collection]()))
        logger.debug("Перечитана коллекция %s", collection)
        self._notify(collection)

    def refresh_projects(self) -> None:
        self._reload("projects")

    def refresh_leads(self) -> None:
        self._reload("leads")

    def refresh_users(self) -> None:
        self._reload("users")

    def _reload_after_write(self, collection: str) -> None:
        try:
            self._reload(collection)
        except Exception:  # noqa: BLE001
            logger.exception("Не удалось обновить коллекцию %s после записи", collection)

    # --- Запись ----------------------------------------------------------
    def create_project(self, payload: ProjectPayload) -> ProjectDTO:
        project = self._repository.create_project(payload)
        self._reload_after_write("projects")
        return project

    def update_project(self, project_id: str, payload: ProjectPayload) -> ProjectDTO:
        project = self._repository.update_project(project_id, payload)
        self._reload_after_write("projects")
        return project

    def create_lead(self, fields: LeadFields) -> LeadDTO:
        lead = self._repository.create_lead(fields)
        self._reload_after_write("leads")
        return lead

    def update_lead(self, lead_id: str, fields: LeadFields) -> LeadDTO:
        lead = self._repository.update_lead(lead_id, fields)
        self._reload_after_write("leads")
        return lead

    def delete_lead(self, lead_id: str) -> None:
        self._repository.delete_lead(lead_id)
        self._reload_after_write("leads")

    def create_user_account(self, account: NewAccount) -> bool:
        user = self._repository.create_user_account(account)
        self._reload_after_write("users")
        return user is not None


__all__ = ["DataContext"]
