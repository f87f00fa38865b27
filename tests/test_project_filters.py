import pytest

from services.dashboard.filters import ALL, ProjectFilter, filter_projects


@pytest.fixture
def catalog(project_factory):
    return [
        project_factory(
            "Website Redesign",
            description="New landing page",
            status="active",
            priority="high",
            assigned_employees=["e1", "e2"],
        ),
        project_factory(
            "Mobile App",
            description="iOS and Android WEBSITE companion",
            status="completed",
            priority="medium",
            assigned_employees=["e2"],
        ),
        project_factory(
            "Data Warehouse",
            description="ETL",
            status="on_hold",
            priority="low",
            assigned_employees=[],
        ),
    ]


def _titles(projects):
    return [p.title for p in projects]


def test_defaults_return_everything(catalog):
    assert filter_projects(catalog) == catalog


def test_search_is_case_insensitive_over_title_and_description(catalog):
    assert _titles(filter_projects(catalog, search_text="website")) == [
        "Website Redesign",
        "Mobile App",
    ]


def test_search_without_match_returns_empty(catalog):
    assert filter_projects(catalog, search_text="blockchain") == []


def test_status_filter(catalog):
    assert _titles(filter_projects(catalog, status="on_hold")) == ["Data Warehouse"]


def test_employee_filter(catalog):
    assert _titles(filter_projects(catalog, employee_id="e2")) == [
        "Website Redesign",
        "Mobile App",
    ]
    assert filter_projects(catalog, employee_id="nobody") == []


def test_priority_filter(catalog):
    assert _titles(filter_projects(catalog, priority="low")) == ["Data Warehouse"]


def test_all_four_predicates_must_hold(catalog):
    result = filter_projects(
        catalog, search_text="web", status="active", employee_id="e2", priority="high"
    )
    assert _titles(result) == ["Website Redesign"]

    # три условия из четырёх: проект не попадает
    result = filter_projects(
        catalog, search_text="web", status="active", employee_id="e2", priority="low"
    )
    assert result == []


@pytest.mark.parametrize(
    "flt, matched",
    [
        (ProjectFilter(), 4),
        (ProjectFilter(search_text="zzz"), 3),
        (ProjectFilter(search_text="zzz", status="completed"), 2),
        (ProjectFilter(search_text="zzz", status="completed", employee_id="x"), 1),
        (
            ProjectFilter(
                search_text="zzz", status="completed", employee_id="x", priority="low"
            ),
            0,
        ),
    ],
)
def test_inclusion_requires_every_predicate(project_factory, flt, matched):
    project = project_factory("Website", priority="high", assigned_employees=["e1"])
    predicates = [
        flt.matches_search(project),
        flt.matches_status(project),
        flt.matches_employee(project),
        flt.matches_priority(project),
    ]
    assert sum(predicates) == matched
    assert flt.matches(project) is (matched == 4)


def test_with_changes_keeps_other_fields():
    flt = ProjectFilter(search_text="web", status="active")
    changed = flt.with_changes(priority="high")
    assert changed == ProjectFilter(search_text="web", status="active", priority="high")
    assert flt.priority == ALL
