"""Интерфейс хранилища данных дашборда и его реализация на Peewee."""

from __future__ import annotations

import functools
import logging
from abc import ABC, abstractmethod

from peewee import PeeweeException

from database.db import db
from services.leads import lead_service
from services.leads.dto import LeadDTO, LeadFields
from services.projects import project_service
from services.projects.dto import (
    CommentTaskDTO,
    ProjectDTO,
    ProjectPayload,
    StageDTO,
)
from services.users import user_service
from services.users.dto import NewAccount, UserDTO

logger = logging.getLogger(__name__)


class RepositoryError(RuntimeError):
    """Сбой хранилища (соединение, ограничения целостности и т.п.)."""


class DataRepository(ABC):
    """Операции чтения и записи, которые дашборд делегирует хранилищу."""

    @abstractmethod
    def list_projects(self) -> list[ProjectDTO]: ...

    @abstractmethod
    def list_stages(self) -> list[StageDTO]: ...

    @abstractmethod
    def list_comment_tasks(self) -> list[CommentTaskDTO]: ...

    @abstractmethod
    def list_leads(self) -> list[LeadDTO]: ...

    @abstractmethod
    def list_users(self) -> list[UserDTO]: ...

    @abstractmethod
    def create_project(self, payload: ProjectPayload) -> ProjectDTO: ...

    @abstractmethod
    def update_project(self, project_id: str, payload: ProjectPayload) -> ProjectDTO: ...

    @abstractmethod
    def create_lead(self, fields: LeadFields) -> LeadDTO: ...

    @abstractmethod
    def update_lead(self, lead_id: str, fields: LeadFields) -> LeadDTO: ...

    @abstractmethod
    def delete_lead(self, lead_id: str) -> None: ...

    @abstractmethod
    def create_user_account(self, account: NewAccount) -> UserDTO: ...

    @abstractmethod
    def authenticate(self, email: str, password: str) -> UserDTO | None: ...


def _wrap_db_errors(func):
    @functools.wraps(func)
    def wrapper(*args, **kwargs):
        try:
            return func(*args, **kwargs)
        except PeeweeException as exc:
            logger.exception("Ошибка хранилища в %s", func.__name__)
            raise RepositoryError(str(exc)) from exc

    return wrapper


class PeeweeRepository(DataRepository):
    """Хранилище поверх инициализированного :data:`database.db.db`."""

    @_wrap_db_errors
    def list_projects(self) -> list[ProjectDTO]:
        return project_service.get_projects_dto()

    @_wrap_db_errors
    def list_stages(self) -> list[StageDTO]:
        return project_service.get_stages_dto()

    @_wrap_db_errors
    def list_comment_tasks(self) -> list[CommentTaskDTO]:
        return project_service.get_comment_tasks_dto()

    @_wrap_db_errors
    def list_leads(self) -> list[LeadDTO]:
        return lead_service.get_leads_dto()

    @_wrap_db_errors
    def list_users(self) -> list[UserDTO]:
        return user_service.get_users_dto()

    @_wrap_db_errors
    def create_project(self, payload: ProjectPayload) -> ProjectDTO:
        return project_service.create_project_from_payload(payload)

    @_wrap_db_errors
    def update_project(self, project_id: str, payload: ProjectPayload) -> ProjectDTO:
        return project_service.update_project_from_payload(project_id, payload)

    @_wrap_db_errors
    def create_lead(self, fields: LeadFields) -> LeadDTO:
        return lead_service.create_lead(fields)

    @_wrap_db_errors
    def update_lead(self, lead_id: str, fields: LeadFields) -> LeadDTO:
        return lead_service.update_lead(lead_id, fields)

    @_wrap_db_errors
    def delete_lead(self, lead_id: str) -> None:
        lead_service.delete_lead(lead_id)

    @_wrap_db_errors
    def create_user_account(self, account: NewAccount) -> UserDTO:
        with db.atomic():
            return user_service.create_user_account(**account.to_payload())

    @_wrap_db_errors
    def authenticate(self, email: str, password: str) -> UserDTO | None:
        return user_service.authenticate_user(email, password)


__all__ = ["DataRepository", "PeeweeRepository", "RepositoryError"]
