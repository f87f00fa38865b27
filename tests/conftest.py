import datetime
import os
import uuid
from dataclasses import replace
from decimal import Decimal

import pytest
from PySide6.QtWidgets import QApplication

from core.data_context import DataContext
from services.auth_service import AuthSession
from services.leads.dto import LeadDTO, LeadFields
from services.projects.dto import CommentTaskDTO, ProjectDTO, ProjectPayload, StageDTO
from services.repository import DataRepository, RepositoryError
from services.users.dto import UserDTO


@pytest.fixture(scope="session")
def qapp():
    os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")
    app = QApplication.instance()
    if app is None:
        app = QApplication([])
    yield app


@pytest.fixture(autouse=True)
def isolated_ui_settings(tmp_path, monkeypatch):
    from ui import settings as ui_settings

    monkeypatch.setattr(ui_settings, "SETTINGS_PATH", tmp_path / "ui_settings.json")
    monkeypatch.setattr(ui_settings, "_CACHE", None)


def _new_id() -> str:
    return uuid.uuid4().hex


def make_user(name: str, role: str, email: str | None = None) -> UserDTO:
    return UserDTO(
        id=_new_id(),
        name=name,
        email=email or f"{name.lower().replace(' ', '.')}@example.com",
        role=role,
    )


def make_project(title: str = "Website", **kwargs) -> ProjectDTO:
    params = {
        "id": _new_id(),
        "title": title,
        "description": "",
        "client_id": "",
        "client_name": "",
        "deadline": datetime.date(2030, 1, 31),
    }
    params.update(kwargs)
    return ProjectDTO(**params)


class StubRepository(DataRepository):
    """Хранилище в памяти, записывающее все вызовы записи."""

    def __init__(self, *, users=(), projects=(), leads=(), stages=(), tasks=()):
        self.users: list[UserDTO] = list(users)
        self.projects: list[ProjectDTO] = list(projects)
        self.leads: list[LeadDTO] = list(leads)
        self.stages: list[StageDTO] = list(stages)
        self.tasks: list[CommentTaskDTO] = list(tasks)
        self.calls: list[tuple] = []
        self.fail_on: set[str] = set()
        self.passwords: dict[str, str] = {}

    def _record(self, name: str, *args):
        self.calls.append((name, *args))
        if name in self.fail_on:
            raise RepositoryError(f"{name} failed")

    def calls_named(self, name: str) -> list[tuple]:
        return [call for call in self.calls if call[0] == name]

    # чтение
    def list_projects(self):
        return list(self.projects)

    def list_stages(self):
        return list(self.stages)

    def list_comment_tasks(self):
        return list(self.tasks)

    def list_leads(self):
        return list(self.leads)

    def list_users(self):
        return list(self.users)

    # запись
    def create_project(self, payload: ProjectPayload) -> ProjectDTO:
        self._record("create_project", payload)
        project = make_project(
            payload.title,
            description=payload.description,
            client_id=payload.client_id,
            client_name=payload.client_name,
            deadline=datetime.date.fromisoformat(payload.deadline),
            assigned_employees=list(payload.assigned_employees),
            priority=payload.priority,
            status=payload.status,
            progress_percentage=payload.progress_percentage,
        )
        self.projects.insert(0, project)
        return project

    def update_project(self, project_id: str, payload: ProjectPayload) -> ProjectDTO:
        self._record("update_project", project_id, payload)
        for idx, project in enumerate(self.projects):
            if project.id == project_id:
                updated = replace(
                    project,
                    title=payload.title,
                    description=payload.description,
                    client_id=payload.client_id,
                    client_name=payload.client_name,
                    deadline=datetime.date.fromisoformat(payload.deadline),
                    assigned_employees=list(payload.assigned_employees),
                    priority=payload.priority,
                    status=payload.status,
                    progress_percentage=payload.progress_percentage,
                )
                self.projects[idx] = updated
                return updated
        raise LookupError(project_id)

    def create_lead(self, fields: LeadFields) -> LeadDTO:
        self._record("create_lead", fields)
        lead = LeadDTO(id=_new_id(), **fields.to_payload())
        self.leads.append(lead)
        return lead

    def update_lead(self, lead_id: str, fields: LeadFields) -> LeadDTO:
        self._record("update_lead", lead_id, fields)
        for idx, lead in enumerate(self.leads):
            if lead.id == lead_id:
                self.leads[idx] = replace(lead, **fields.to_payload())
                return self.leads[idx]
        raise LookupError(lead_id)

    def delete_lead(self, lead_id: str) -> None:
        self._record("delete_lead", lead_id)
        self.leads = [lead for lead in self.leads if lead.id != lead_id]

    def create_user_account(self, account) -> UserDTO:
        self._record("create_user_account", account)
        user = make_user(account.full_name, account.role, email=account.email)
        self.users.append(user)
        self.passwords[user.email] = account.password
        return user

    def authenticate(self, email: str, password: str):
        for user in self.users:
            if user.email == email and self.passwords.get(email) == password:
                return user
        return None


@pytest.fixture
def manager():
    return make_user("Mia Manager", "manager")


@pytest.fixture
def employees():
    return [make_user("Eve Employee", "employee"), make_user("Ed Engineer", "employee")]


@pytest.fixture
def clients():
    return [make_user("Acme Corp", "client"), make_user("Globex", "client")]


@pytest.fixture
def stub_repository(manager, employees, clients):
    return StubRepository(users=[manager, *employees, *clients])


@pytest.fixture
def data_context(stub_repository):
    return DataContext(stub_repository)


@pytest.fixture
def manager_session(stub_repository, manager):
    return AuthSession(stub_repository, user=manager)


@pytest.fixture
def sample_lead():
    return LeadDTO(
        id=_new_id(),
        name="Initech",
        contact_info="bill@initech.com",
        estimated_amount=Decimal("1500.00"),
        notes="Met at expo",
    )


@pytest.fixture
def user_factory():
    return make_user


@pytest.fixture
def project_factory():
    return make_project


@pytest.fixture
def repository_factory():
    return StubRepository
