"""Сводная статистика по проектам для карточек дашборда."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Iterable

from database.models import ProjectStatus
from services.projects.dto import ProjectDTO


@dataclass(frozen=True)
class ProjectStats:
    total: int = 0
    active: int = 0
    completed: int = 0
    avg_progress: int = 0


def round_half_up(value: float) -> int:
    """Округление до ближайшего целого, половины вверх (2.5 → 3)."""
    return int(math.floor(value + 0.5))


def compute_stats(projects: Iterable[ProjectDTO]) -> ProjectStats:
    """Вернуть количество проектов по статусам и средний прогресс.

    Для пустой коллекции средний прогресс равен 0.
    """
    items = list(projects)
    total = len(items)
    if not total:
        return ProjectStats()
    active = sum(1 for p in items if p.status == ProjectStatus.ACTIVE.value)
    completed = sum(1 for p in items if p.status == ProjectStatus.COMPLETED.value)
    mean = sum(p.progress_percentage for p in items) / total
    return ProjectStats(
        total=total,
        active=active,
        completed=completed,
        avg_progress=round_half_up(mean),
    )
