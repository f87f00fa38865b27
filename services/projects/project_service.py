"""Сервисный модуль для управления проектами."""

import logging
from collections import defaultdict
from datetime import date, datetime
from typing import Iterable

from peewee import ModelSelect

from database.db import db
from database.models import (
    CommentTask,
    Project,
    ProjectEmployee,
    ProjectPriority,
    ProjectStatus,
    Stage,
)
from .dto import (
    CommentTaskDTO,
    ProjectDTO,
    ProjectPayload,
    StageDTO,
    format_deadline,
)

logger = logging.getLogger(__name__)

PROJECT_PRIORITIES = {p.value for p in ProjectPriority}
PROJECT_STATUSES = {s.value for s in ProjectStatus}


class ProjectNotFoundError(LookupError):
    """Проект с запрошенным идентификатором не найден."""


# ──────────────────────────── Получение ─────────────────────────────


def get_all_projects() -> ModelSelect:
    """Все проекты, новые первыми."""
    return Project.select().order_by(Project.created_at.desc(), Project.title.asc())


def _employee_ids_by_project(project_ids: Iterable[str]) -> dict[str, list[str]]:
    ids = list(project_ids)
    result: dict[str, list[str]] = defaultdict(list)
    if not ids:
        return result
    links = (
        ProjectEmployee.select(ProjectEmployee.project, ProjectEmployee.employee)
        .where(ProjectEmployee.project.in_(ids))
        .order_by(ProjectEmployee.position.asc())
    )
    for link in links:
        result[link.project_id].append(link.employee_id)
    return result


def get_projects_dto() -> list[ProjectDTO]:
    projects = list(get_all_projects())
    employees = _employee_ids_by_project(p.id for p in projects)
    dtos = []
    for project in projects:
        project._employee_ids = employees.get(project.id, [])
        dtos.append(ProjectDTO.from_model(project))
    return dtos


def get_project_by_id(project_id: str) -> Project | None:
    return Project.get_or_none(Project.id == project_id)


# ──────────────────────────── Изменение ─────────────────────────────


def _validate_payload(payload: ProjectPayload) -> dict:
    data = payload.to_payload()
    title = (data.get("title") or "").strip()
    if not title:
        raise ValueError("Поле 'title' обязательно")
    if data["priority"] not in PROJECT_PRIORITIES:
        raise ValueError(f"Недопустимый приоритет: {data['priority']}")
    if data["status"] not in PROJECT_STATUSES:
        raise ValueError(f"Недопустимый статус: {data['status']}")
    progress = int(data["progress_percentage"])
    if not 0 <= progress <= 100:
        raise ValueError("progress_percentage должен быть в диапазоне 0–100")
    deadline_text = format_deadline(data.get("deadline"))
    if not deadline_text:
        raise ValueError("Поле 'deadline' обязательно")

    data["title"] = title
    data["deadline"] = date.fromisoformat(deadline_text)
    data["progress_percentage"] = progress
    return data


def _set_employees(project: Project, employee_ids: Iterable[str]) -> None:
    ProjectEmployee.delete().where(ProjectEmployee.project == project).execute()
    seen: set[str] = set()
    position = 0
    for employee_id in employee_ids:
        if employee_id in seen:
            continue
        seen.add(employee_id)
        ProjectEmployee.create(project=project, employee=employee_id, position=position)
        position += 1


def create_project_from_payload(payload: ProjectPayload) -> ProjectDTO:
    """Создать проект; идентификатор и отметки времени назначает хранилище."""
    data = _validate_payload(payload)
    employees = data.pop("assigned_employees")
    client_id = data.pop("client_id") or None
    now = datetime.now()
    with db.atomic():
        project = Project.create(
            client=client_id, created_at=now, updated_at=now, **data
        )
        _set_employees(project, employees)
    logger.info("✅ Создан проект id=%s: %s", project.id, project.title)
    return ProjectDTO.from_model(project)


def update_project_from_payload(project_id: str, payload: ProjectPayload) -> ProjectDTO:
    """Заменить все поля проекта значениями из ``payload``."""
    project = get_project_by_id(project_id)
    if project is None:
        raise ProjectNotFoundError(f"Проект id={project_id} не найден")

    data = _validate_payload(payload)
    employees = data.pop("assigned_employees")
    project.client = data.pop("client_id") or None
    for key, value in data.items():
        setattr(project, key, value)
    project.updated_at = datetime.now()
    with db.atomic():
        project.save()
        _set_employees(project, employees)
    logger.info("✏️ Обновлён проект id=%s", project.id)
    return ProjectDTO.from_model(project)


# ──────────────────────────── Этапы и задачи ─────────────────────────────


def get_stages_dto() -> list[StageDTO]:
    query = Stage.select().order_by(Stage.project, Stage.position.asc())
    return [
        StageDTO(
            id=s.id,
            project_id=s.project_id,
            name=s.name,
            position=s.position,
            status=s.status,
        )
        for s in query
    ]


def get_comment_tasks_dto() -> list[CommentTaskDTO]:
    query = CommentTask.select().order_by(CommentTask.created_at.asc())
    return [
        CommentTaskDTO(id=t.id, project_id=t.project_id, title=t.title, status=t.status)
        for t in query
    ]

