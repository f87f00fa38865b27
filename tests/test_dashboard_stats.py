import pytest

from services.dashboard.stats import ProjectStats, compute_stats, round_half_up


def test_empty_collection_gives_zero_stats():
    stats = compute_stats([])
    assert stats == ProjectStats(total=0, active=0, completed=0, avg_progress=0)


def test_counts_by_status(project_factory):
    projects = [
        project_factory("A", status="active", progress_percentage=10),
        project_factory("B", status="active", progress_percentage=20),
        project_factory("C", status="completed", progress_percentage=100),
        project_factory("D", status="on_hold", progress_percentage=30),
    ]
    stats = compute_stats(projects)
    assert stats.total == 4
    assert stats.active == 2
    assert stats.completed == 1
    assert stats.avg_progress == 40


def test_average_rounds_half_up(project_factory):
    # (0 + 25) / 2 = 12.5
    projects = [
        project_factory("A", progress_percentage=0),
        project_factory("B", progress_percentage=25),
    ]
    assert compute_stats(projects).avg_progress == 13


def test_average_rounds_down_below_half(project_factory):
    # (10 + 10 + 11) / 3 = 10.33
    projects = [
        project_factory("A", progress_percentage=10),
        project_factory("B", progress_percentage=10),
        project_factory("C", progress_percentage=11),
    ]
    assert compute_stats(projects).avg_progress == 10


@pytest.mark.parametrize(
    "value, expected",
    [(0.5, 1), (1.5, 2), (2.5, 3), (2.49, 2), (99.5, 100), (0, 0)],
)
def test_round_half_up(value, expected):
    assert round_half_up(value) == expected
