"""Состояние формы создания/редактирования проекта."""

from __future__ import annotations

import logging
from typing import Callable, Iterable, Protocol

from database.models import ProjectPriority, ProjectStatus, UserRole
from services.result import OperationResult
from services.users.dto import UserDTO
from .dto import ProjectDTO, ProjectPayload, format_deadline

logger = logging.getLogger(__name__)

SAVE_ERROR_MESSAGE = "Failed to save project. Please try again."
REQUIRED_FIELDS_MESSAGE = "Title, client and deadline are required."

CreatedCallback = Callable[[ProjectPayload], object]


class ProjectWriter(Protocol):
    def create_project(self, payload: ProjectPayload) -> ProjectDTO: ...

    def update_project(self, project_id: str, payload: ProjectPayload) -> ProjectDTO: ...


def derive_default_client(users: Iterable[UserDTO]) -> UserDTO | None:
    """Первый пользователь с ролью клиента в порядке списка."""
    for user in users:
        if user.role == UserRole.CLIENT.value:
            return user
    return None


class ProjectFormState:
    """Поля формы проекта и её отправка через контекст данных.

    Клиент по умолчанию выбирается только при создании состояния и при
    явном :meth:`reset`; обновление списка пользователей его не меняет.
    """

    def __init__(
        self,
        users: Iterable[UserDTO],
        project: ProjectDTO | None = None,
        *,
        viewer: UserDTO | None = None,
    ):
        self._users: list[UserDTO] = list(users)
        self.project = project
        self.viewer = viewer
        self.is_open = True
        self.submitting = False
        self._seed()

    @classmethod
    def new(cls, users: Iterable[UserDTO], *, viewer: UserDTO | None = None) -> "ProjectFormState":
        return cls(users, None, viewer=viewer)

    @classmethod
    def for_project(
        cls,
        project: ProjectDTO,
        users: Iterable[UserDTO],
        *,
        viewer: UserDTO | None = None,
    ) -> "ProjectFormState":
        return cls(users, project, viewer=viewer)

    # ------------------------------------------------------------------
    # Инициализация
    # ------------------------------------------------------------------
    def _seed(self) -> None:
        project = self.project
        if project is not None:
            self.title = project.title or ""
            self.description = project.description or ""
            self.client_id = project.client_id or ""
            self.client_name = project.client_name or ""
            self.deadline = format_deadline(project.deadline)
            self.assigned_employees = list(project.assigned_employees)
            self.priority = project.priority or ProjectPriority.MEDIUM.value
        else:
            self.title = ""
            self.description = ""
            self.client_id = ""
            self.client_name = ""
            self.deadline = ""
            self.assigned_employees = []
            self.priority = ProjectPriority.MEDIUM.value

        if not self.client_id:
            default = derive_default_client(self._users)
            if default is not None:
                self.client_id = default.id
                self.client_name = default.name

    def reset(self) -> None:
        """Вернуть поля к исходным значениям и заново выбрать клиента."""
        self._seed()

    # ------------------------------------------------------------------
    # Списки выбора
    # ------------------------------------------------------------------
    @property
    def users(self) -> list[UserDTO]:
        return list(self._users)

    def set_users(self, users: Iterable[UserDTO]) -> None:
        self._users = list(users)

    @property
    def clients(self) -> list[UserDTO]:
        return [u for u in self._users if u.role == UserRole.CLIENT.value]

    @property
    def employees(self) -> list[UserDTO]:
        return [u for u in self._users if u.role == UserRole.EMPLOYEE.value]

    @property
    def is_editing(self) -> bool:
        return self.project is not None

    @property
    def show_employee_section(self) -> bool:
        return bool(self.viewer and self.viewer.is_manager)

    # ------------------------------------------------------------------
    # Изменение полей
    # ------------------------------------------------------------------
    def select_client(self, client_id: str) -> None:
        selected = next((c for c in self.clients if c.id == client_id), None)
        self.client_id = client_id or ""
        self.client_name = selected.name if selected else ""

    def toggle_employee(self, employee_id: str) -> None:
        if employee_id in self.assigned_employees:
            self.assigned_employees = [
                e for e in self.assigned_employees if e != employee_id
            ]
        else:
            self.assigned_employees = [*self.assigned_employees, employee_id]

    def is_assigned(self, employee_id: str) -> bool:
        return employee_id in self.assigned_employees

    @property
    def can_submit(self) -> bool:
        if self.submitting:
            return False
        return bool(self.title and self.client_id and self.deadline)

    # ------------------------------------------------------------------
    # Отправка
    # ------------------------------------------------------------------
    def build_payload(self) -> ProjectPayload:
        if self.project is not None:
            status = self.project.status
            progress = self.project.progress_percentage
        else:
            status = ProjectStatus.ACTIVE.value
            progress = 0
        return ProjectPayload(
            title=self.title,
            description=self.description,
            client_id=self.client_id,
            client_name=self.client_name,
            deadline=self.deadline,
            assigned_employees=tuple(self.assigned_employees),
            priority=self.priority,
            status=status,
            progress_percentage=progress,
        )

    def submit(
        self,
        writer: ProjectWriter,
        on_created: CreatedCallback | None = None,
    ) -> OperationResult:
        """Создать или обновить проект.

        При редактировании выполняется только обновление. При создании после
        успешного сохранения вызывается ``on_created`` (если передан). При
        ошибке форма остаётся открытой с прежними значениями.
        """
        if not self.can_submit:
            return OperationResult.failure(REQUIRED_FIELDS_MESSAGE)

        payload = self.build_payload()
        self.submitting = True
        try:
            if self.project is not None:
                saved = writer.update_project(self.project.id, payload)
            else:
                saved = writer.create_project(payload)
        except Exception:  # noqa: BLE001
            logger.exception("❌ Ошибка при сохранении проекта")
            return OperationResult.failure(SAVE_ERROR_MESSAGE)
        finally:
            self.submitting = False

        self.is_open = False
        if self.project is None and on_created is not None:
            try:
                on_created(payload)
            except Exception:  # noqa: BLE001
                logger.exception("Обработчик создания проекта завершился с ошибкой")
        return OperationResult.success(value=saved)

    def close(self) -> None:
        self.is_open = False
