import datetime
from decimal import Decimal

import pytest
from PySide6.QtCore import QDate, Qt

from core.data_context import DataContext
from services.auth_service import AuthSession
from services.dashboard.controller import DashboardController, DashboardView
from ui.forms.lead_form import LeadForm
from ui.forms.project_form import ProjectForm
from ui.forms.user_form import UserAccountForm
from ui.main_window import MainWindow
from ui.views.lead_table_view import LeadTableView
from ui.views.project_table_view import ProjectTableView


@pytest.fixture
def no_message_boxes(monkeypatch):
    shown = []
    for target in (
        "ui.forms.project_form.show_error",
        "ui.forms.lead_form.show_error",
        "ui.forms.user_form.show_error",
        "ui.forms.user_form.show_info",
        "ui.main_window.show_error",
        "ui.views.lead_table_view.show_result",
    ):
        monkeypatch.setattr(target, lambda *a, **k: shown.append(a))
    return shown


@pytest.fixture
def controller(data_context, manager_session):
    return DashboardController(data_context, manager_session, recent_limit=6)


def test_project_form_enables_save_when_required_fields_set(
    qapp, controller, stub_repository, employees, no_message_boxes
):
    controller.open_project_modal()
    form = ProjectForm(controller)

    assert form.employee_list is not None
    assert form.employee_list.count() == len(employees)
    assert not form.save_btn.isEnabled()

    form.title_edit.setText("Website")
    assert not form.save_btn.isEnabled()
    form.deadline_edit.setDate(QDate(2030, 1, 31))
    assert form.save_btn.isEnabled()

    form.employee_list.item(0).setCheckState(Qt.Checked)
    form.save()

    (call,) = stub_repository.calls_named("create_project")
    payload = call[1]
    assert payload.title == "Website"
    assert payload.deadline == "2030-01-31"
    assert payload.assigned_employees == (employees[0].id,)
    assert controller.is_project_modal_open is False
    assert no_message_boxes == []


def test_project_form_keeps_early_deadline_on_edit(
    qapp, repository_factory, manager, clients, project_factory, no_message_boxes
):
    project = project_factory(
        "Archive", client_id=clients[0].id, deadline=datetime.date(2000, 1, 1)
    )
    repo = repository_factory(users=[manager, *clients], projects=[project])
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    ctrl.open_project_modal(project)
    form = ProjectForm(ctrl)

    assert form.deadline_edit.date() == QDate(2000, 1, 1)
    assert form.save_btn.isEnabled()
    form.save()

    (call,) = repo.calls_named("update_project")
    assert call[2].deadline == "2000-01-01"


def test_project_form_without_clients_stays_disabled(
    qapp, repository_factory, manager, employees, no_message_boxes
):
    repo = repository_factory(users=[manager, *employees])
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    ctrl.open_project_modal()
    form = ProjectForm(ctrl)
    form.title_edit.setText("Website")
    form.deadline_edit.setDate(QDate(2030, 1, 31))
    assert form.client_combo.currentData() == ""
    assert not form.save_btn.isEnabled()


def test_project_table_filters(qapp, repository_factory, manager, employees, project_factory):
    projects = [
        project_factory("Website", priority="high", assigned_employees=[employees[0].id]),
        project_factory("Mobile", priority="low"),
    ]
    repo = repository_factory(users=[manager, *employees], projects=projects)
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    view = ProjectTableView(ctrl)
    assert view.table.rowCount() == 2

    view.search_edit.setText("web")
    assert view.table.rowCount() == 1
    assert view.table.item(0, 0).text() == "Website"

    view.search_edit.setText("")
    view.priority_combo.setCurrentIndex(view.priority_combo.findData("low"))
    assert view.table.rowCount() == 1
    assert view.table.item(0, 0).text() == "Mobile"


def test_lead_form_edit_updates_amount(qapp, repository_factory, manager, sample_lead, no_message_boxes):
    repo = repository_factory(users=[manager], leads=[sample_lead])
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    ctrl.edit_lead(sample_lead)
    form = LeadForm(ctrl)
    form.amount_edit.setText("2 000")
    form.save()

    (call,) = repo.calls_named("update_lead")
    assert call[2].estimated_amount == Decimal("2000")
    assert call[2].notes == "Met at expo"


def test_lead_form_rejects_invalid_amount(qapp, repository_factory, manager, no_message_boxes):
    repo = repository_factory(users=[manager])
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    ctrl.open_new_lead()
    form = LeadForm(ctrl)
    form.name_edit.setText("Acme")
    form.amount_edit.setText("1/0")
    form.save()

    assert repo.calls_named("create_lead") == []
    assert ctrl.is_lead_modal_open
    assert len(no_message_boxes) == 1


def test_lead_table_delete_declined(qapp, repository_factory, manager, sample_lead, no_message_boxes):
    repo = repository_factory(users=[manager], leads=[sample_lead])
    ctrl = DashboardController(DataContext(repo), AuthSession(repo, user=manager))
    view = LeadTableView(ctrl, confirm_func=lambda _text: False)
    view.table.setCurrentCell(0, 0)
    view.delete_selected()
    assert repo.calls_named("delete_lead") == []


def test_user_form_creates_employee(qapp, controller, stub_repository, no_message_boxes):
    controller.open_user_modal("employee")
    form = UserAccountForm(controller)
    assert not form.create_btn.isEnabled()
    form.full_name_edit.setText("New Person")
    form.email_edit.setText("new@example.com")
    form.password_edit.setText("pw")
    assert form.create_btn.isEnabled()

    form.save()

    assert len(stub_repository.calls_named("create_user_account")) == 1
    assert controller.is_user_modal_open is False


def test_main_window_tabs_switch_views(qapp, controller, data_context):
    window = MainWindow(controller, data_context)
    window.tab_widget.setCurrentIndex(3)
    assert controller.active_view is DashboardView.LEADS
    window.tab_widget.setCurrentIndex(1)
    assert controller.active_view is DashboardView.PROJECTS
    assert window.status_bar.currentMessage() == "Projects: 0"
    assert window.project_tab.new_btn.isEnabled()
    window.close()


def test_new_project_hidden_for_employee(qapp, data_context, stub_repository, employees):
    ctrl = DashboardController(data_context, AuthSession(stub_repository, user=employees[0]))
    view = ProjectTableView(ctrl)
    assert not view.new_btn.isEnabled()


def test_login_dialog_remembers_email(qapp, repository_factory, user_factory):
    from ui import settings as ui_settings
    from ui.forms.login_dialog import LoginDialog

    user = user_factory("Mia", "manager", email="mia@example.com")
    repo = repository_factory(users=[user])
    repo.passwords["mia@example.com"] = "pw"
    session = AuthSession(repo)

    dlg = LoginDialog(session)
    dlg.email_edit.setText("mia@example.com")
    dlg.password_edit.setText("bad")
    dlg.sign_in()
    assert session.user is None
    assert dlg.error_label.text()
    assert dlg.password_edit.text() == ""

    dlg.password_edit.setText("pw")
    dlg.sign_in()
    assert session.is_manager
    assert ui_settings.get_last_login() == "mia@example.com"
