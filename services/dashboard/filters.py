"""Фильтрация списка проектов по поиску, статусу, сотруднику и приоритету."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Iterable

from services.projects.dto import ProjectDTO

ALL = "all"


@dataclass(frozen=True)
class ProjectFilter:
    search_text: str = ""
    status: str = ALL
    employee_id: str = ALL
    priority: str = ALL

    def matches_search(self, project: ProjectDTO) -> bool:
        needle = self.search_text.lower()
        return (
            needle in (project.title or "").lower()
            or needle in (project.description or "").lower()
        )

    def matches_status(self, project: ProjectDTO) -> bool:
        return self.status == ALL or project.status == self.status

    def matches_employee(self, project: ProjectDTO) -> bool:
        return self.employee_id == ALL or self.employee_id in project.assigned_employees

    def matches_priority(self, project: ProjectDTO) -> bool:
        return self.priority == ALL or project.priority == self.priority

    def matches(self, project: ProjectDTO) -> bool:
        return (
            self.matches_search(project)
            and self.matches_status(project)
            and self.matches_employee(project)
            and self.matches_priority(project)
        )

    def with_changes(self, **changes) -> "ProjectFilter":
        return replace(self, **changes)


def filter_projects(
    projects: Iterable[ProjectDTO],
    search_text: str = "",
    status: str = ALL,
    employee_id: str = ALL,
    priority: str = ALL,
) -> list[ProjectDTO]:
    """Проекты, удовлетворяющие всем четырём условиям одновременно."""
    flt = ProjectFilter(
        search_text=search_text or "",
        status=status or ALL,
        employee_id=employee_id or ALL,
        priority=priority or ALL,
    )
    return [p for p in projects if flt.matches(p)]
