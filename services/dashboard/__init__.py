"""Подмодуль логики дашборда: статистика, фильтры и контроллер."""

from .filters import ALL, ProjectFilter, filter_projects
from .stats import ProjectStats, compute_stats

__all__ = [
    "ALL",
    "ProjectFilter",
    "ProjectStats",
    "compute_stats",
    "filter_projects",
]
