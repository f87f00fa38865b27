"""Контроллер дашборда менеджера: представления, фильтры, лиды, пользователи."""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable

from config import get_settings
from core.data_context import DataContext
from database.models import CommentTaskStatus, UserRole
from services.auth_service import AuthSession
from services.leads.dto import LeadDTO, LeadFields
from services.leads.lead_service import parse_amount
from services.projects.dto import CommentTaskDTO, ProjectDTO, StageDTO
from services.projects.project_form import ProjectFormState
from services.result import OperationResult
from services.users.dto import UserDTO, account_for_role
from .filters import ALL, ProjectFilter
from .stats import ProjectStats, compute_stats

logger = logging.getLogger(__name__)

DELETE_LEAD_PROMPT = "Are you sure you want to delete this lead?"
LEAD_SAVE_ERROR = "Failed to save lead. Please try again."
LEAD_AMOUNT_ERROR = "Invalid amount. Use digits or an expression like 10*500."
LEAD_DELETE_ERROR = "Failed to delete lead. Please try again."
USER_CREATE_ERROR = "Failed to create user. Please try again."

PROJECT_DETAIL_TABS = ("brochure", "stages", "storage", "comments", "documents")

Confirm = Callable[[str], bool]


class DashboardView(str, Enum):
    DASHBOARD = "dashboard"
    PROJECTS = "projects"
    EMPLOYEES = "employees"
    LEADS = "leads"


@dataclass
class UserAccountForm:
    role: str = UserRole.EMPLOYEE.value
    email: str = ""
    password: str = ""
    full_name: str = ""

    def clear(self) -> None:
        self.email = ""
        self.password = ""
        self.full_name = ""


class DashboardController:
    """Состояние дашборда поверх :class:`DataContext`.

    Все производные списки вычисляются заново при каждом обращении.
    Переключение представления не сбрасывает поиск и фильтры.
    """

    def __init__(
        self,
        context: DataContext,
        auth: AuthSession,
        *,
        recent_limit: int | None = None,
    ):
        self.context = context
        self.auth = auth
        self.recent_limit = (
            recent_limit if recent_limit is not None else get_settings().recent_projects_limit
        )
        self.active_view = DashboardView.DASHBOARD
        self.project_filter = ProjectFilter()

        # проект
        self.project_form: ProjectFormState | None = None
        self.selected_project: ProjectDTO | None = None
        self.show_project_detail = False
        self.project_detail_tab = PROJECT_DETAIL_TABS[0]

        # лиды
        self.is_lead_modal_open = False
        self.editing_lead: LeadDTO | None = None
        self.lead_form = LeadFields()

        # пользователи
        self.is_user_modal_open = False
        self.user_form = UserAccountForm()
        self.creating_user = False

    # ------------------------------------------------------------------
    # Представления
    # ------------------------------------------------------------------
    def set_active_view(self, view: DashboardView | str) -> None:
        self.active_view = DashboardView(view)

    # ------------------------------------------------------------------
    # Производные данные
    # ------------------------------------------------------------------
    @property
    def projects(self) -> list[ProjectDTO]:
        return self.context.projects

    @property
    def stats(self) -> ProjectStats:
        return compute_stats(self.context.projects)

    @property
    def recent_projects(self) -> list[ProjectDTO]:
        return self.context.projects[: self.recent_limit]

    @property
    def filtered_projects(self) -> list[ProjectDTO]:
        return [p for p in self.context.projects if self.project_filter.matches(p)]

    @property
    def open_tasks(self) -> list[CommentTaskDTO]:
        return [
            t for t in self.context.comment_tasks
            if t.status != CommentTaskStatus.DONE.value
        ]

    @property
    def users(self) -> list[UserDTO]:
        return self.context.users

    @property
    def employees(self) -> list[UserDTO]:
        return [u for u in self.context.users if u.role == UserRole.EMPLOYEE.value]

    @property
    def clients(self) -> list[UserDTO]:
        return [u for u in self.context.users if u.role == UserRole.CLIENT.value]

    @property
    def leads(self) -> list[LeadDTO]:
        return self.context.leads

    def assigned_employee_names(self, project: ProjectDTO) -> list[str]:
        # порядок как в списке пользователей
        return [u.name for u in self.context.users if u.id in project.assigned_employees]

    # ------------------------------------------------------------------
    # Фильтры
    # ------------------------------------------------------------------
    def set_search_text(self, text: str) -> None:
        self.project_filter = self.project_filter.with_changes(search_text=text or "")

    def set_status_filter(self, status: str) -> None:
        self.project_filter = self.project_filter.with_changes(status=status or ALL)

    def set_employee_filter(self, employee_id: str) -> None:
        self.project_filter = self.project_filter.with_changes(employee_id=employee_id or ALL)

    def set_priority_filter(self, priority: str) -> None:
        self.project_filter = self.project_filter.with_changes(priority=priority or ALL)

    # ------------------------------------------------------------------
    # Проекты
    # ------------------------------------------------------------------
    @property
    def can_create_project(self) -> bool:
        return self.auth.is_manager

    @property
    def is_project_modal_open(self) -> bool:
        return self.project_form is not None and self.project_form.is_open

    def open_project_modal(self, project: ProjectDTO | None = None) -> ProjectFormState | None:
        if not self.auth.is_manager:
            logger.warning("Форма проекта доступна только менеджеру")
            return None
        users = self.context.users
        if project is None:
            self.project_form = ProjectFormState.new(users, viewer=self.auth.user)
        else:
            self.project_form = ProjectFormState.for_project(
                project, users, viewer=self.auth.user
            )
        return self.project_form

    def submit_project_form(self) -> OperationResult:
        form = self.project_form
        if form is None:
            return OperationResult.failure("Project form is not open")
        result = form.submit(self.context, on_created=self._on_project_created)
        if result.ok:
            self.close_project_modal()
            if self.selected_project is not None and result.value is not None:
                if self.selected_project.id == result.value.id:
                    self.selected_project = result.value
        return result

    def _on_project_created(self, payload) -> None:
        logger.info("Проект «%s» создан, список обновлён", payload.title)
        self.close_project_modal()

    def close_project_modal(self) -> None:
        if self.project_form is not None:
            self.project_form.close()
        self.project_form = None

    # ------------------------------------------------------------------
    # Карточка проекта
    # ------------------------------------------------------------------
    def open_project(self, project: ProjectDTO) -> None:
        self.selected_project = project
        self.show_project_detail = True
        self.project_detail_tab = PROJECT_DETAIL_TABS[0]

    def select_detail_tab(self, tab: str) -> None:
        if tab not in PROJECT_DETAIL_TABS:
            raise ValueError(f"Неизвестная вкладка: {tab}")
        self.project_detail_tab = tab

    def close_project_detail(self) -> None:
        self.show_project_detail = False
        self.selected_project = None

    @property
    def selected_project_stages(self) -> list[StageDTO]:
        if self.selected_project is None:
            return []
        return [s for s in self.context.stages if s.project_id == self.selected_project.id]

    @property
    def selected_project_tasks(self) -> list[CommentTaskDTO]:
        if self.selected_project is None:
            return []
        return [
            t for t in self.context.comment_tasks
            if t.project_id == self.selected_project.id
        ]

    # ------------------------------------------------------------------
    # Лиды
    # ------------------------------------------------------------------
    def open_new_lead(self) -> None:
        self.editing_lead = None
        self.lead_form = LeadFields()
        self.is_lead_modal_open = True

    def edit_lead(self, lead: LeadDTO) -> None:
        self.editing_lead = lead
        self.lead_form = LeadFields.from_lead(lead)
        self.is_lead_modal_open = True

    def set_lead_fields(self, **changes) -> OperationResult:
        if "estimated_amount" in changes:
            try:
                changes["estimated_amount"] = parse_amount(changes["estimated_amount"])
            except ValueError as exc:
                logger.warning("Сумма лида отклонена: %s", exc)
                return OperationResult.failure(LEAD_AMOUNT_ERROR)
        self.lead_form = replace(self.lead_form, **changes)
        return OperationResult.success()

    def close_lead_modal(self) -> None:
        self.is_lead_modal_open = False
        self.editing_lead = None
        self.lead_form = LeadFields()

    def submit_lead(self) -> OperationResult:
        """Создать лид или обновить редактируемый всеми полями формы."""
        try:
            if self.editing_lead is not None:
                saved = self.context.update_lead(self.editing_lead.id, self.lead_form)
            else:
                saved = self.context.create_lead(self.lead_form)
        except Exception:  # noqa: BLE001
            logger.exception("❌ Ошибка при сохранении лида")
            return OperationResult.failure(LEAD_SAVE_ERROR)
        self.close_lead_modal()
        return OperationResult.success(value=saved)

    def delete_lead(self, lead_id: str, confirm: Confirm) -> OperationResult:
        """Удалить лид только после утвердительного ответа ``confirm``."""
        if not confirm(DELETE_LEAD_PROMPT):
            return OperationResult.failure("")
        try:
            self.context.delete_lead(lead_id)
        except Exception:  # noqa: BLE001
            logger.exception("❌ Ошибка при удалении лида id=%s", lead_id)
            return OperationResult.failure(LEAD_DELETE_ERROR)
        return OperationResult.success()

    # ------------------------------------------------------------------
    # Пользователи
    # ------------------------------------------------------------------
    def open_user_modal(self, role: str) -> None:
        if role not in (UserRole.EMPLOYEE.value, UserRole.CLIENT.value):
            raise ValueError(f"Нельзя создать пользователя с ролью {role}")
        self.user_form = UserAccountForm(role=role)
        self.is_user_modal_open = True

    def close_user_modal(self) -> None:
        self.is_user_modal_open = False

    def set_user_fields(self, **changes) -> None:
        changes.pop("role", None)
        for key, value in changes.items():
            setattr(self.user_form, key, value)

    def submit_user(self) -> OperationResult:
        form = self.user_form
        self.creating_user = True
        try:
            account = account_for_role(
                form.role,
                email=form.email,
                password=form.password,
                full_name=form.full_name,
            )
            created = self.context.create_user_account(account)
        except Exception:  # noqa: BLE001
            logger.exception("❌ Ошибка при создании пользователя")
            return OperationResult.failure(USER_CREATE_ERROR)
        finally:
            self.creating_user = False

        if not created:
            return OperationResult.failure(USER_CREATE_ERROR)
        self.is_user_modal_open = False
        form.clear()
        return OperationResult.success(f"{account.label} created")

    def refresh_users(self) -> None:
        self.context.refresh_users()
