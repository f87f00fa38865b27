"""DTO проектов и полезная нагрузка для создания/обновления."""

from __future__ import annotations

from dataclasses import asdict, dataclass, field
from datetime import date, datetime

from database.models import Project, ProjectEmployee, ProjectPriority, ProjectStatus

__all__ = [
    "ProjectDTO",
    "ProjectPayload",
    "StageDTO",
    "CommentTaskDTO",
    "format_deadline",
]


def format_deadline(value: date | datetime | str | None) -> str:
    """Привести дедлайн к строке ``YYYY-MM-DD``.

    Принимает ``date``, ``datetime`` и ISO-строки (в том числе с временем и
    часовым поясом). Пустое значение превращается в пустую строку.
    """
    if value is None or value == "":
        return ""
    if isinstance(value, datetime):
        return value.date().isoformat()
    if isinstance(value, date):
        return value.isoformat()
    text = str(value).strip()
    if not text:
        return ""
    normalized = text.replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalized).date().isoformat()
    except ValueError:
        return date.fromisoformat(text[:10]).isoformat()


@dataclass
class ProjectDTO:
    id: str
    title: str
    description: str
    client_id: str
    client_name: str
    deadline: date
    assigned_employees: list[str] = field(default_factory=list)
    priority: str = ProjectPriority.MEDIUM.value
    status: str = ProjectStatus.ACTIVE.value
    progress_percentage: int = 0
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def from_model(cls, project: Project) -> "ProjectDTO":
        employees = getattr(project, "_employee_ids", None)
        if employees is None:
            employees = [
                link.employee_id
                for link in project.employee_links.order_by(ProjectEmployee.position)
            ]
        return cls(
            id=project.id,
            title=project.title,
            description=project.description or "",
            client_id=project.client_id or "",
            client_name=project.client_name or "",
            deadline=project.deadline,
            assigned_employees=list(employees),
            priority=project.priority,
            status=project.status,
            progress_percentage=project.progress_percentage,
            created_at=project.created_at,
            updated_at=project.updated_at,
        )


@dataclass(frozen=True)
class ProjectPayload:
    """Полный набор полей проекта: обновление заменяет все поля целиком."""

    title: str
    description: str
    client_id: str
    client_name: str
    deadline: str
    assigned_employees: tuple[str, ...] = ()
    priority: str = ProjectPriority.MEDIUM.value
    status: str = ProjectStatus.ACTIVE.value
    progress_percentage: int = 0

    def to_payload(self) -> dict:
        payload = asdict(self)
        payload["assigned_employees"] = list(self.assigned_employees)
        return payload


@dataclass
class StageDTO:
    id: str
    project_id: str
    name: str
    position: int
    status: str


@dataclass
class CommentTaskDTO:
    id: str
    project_id: str
    title: str
    status: str
