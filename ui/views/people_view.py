from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from database.models import UserRole
from services.dashboard.controller import DashboardController
from ui.common.styled_widgets import styled_button


def _make_table() -> QTableWidget:
    table = QTableWidget(0, 2)
    table.setHorizontalHeaderLabels(["Name", "Email"])
    table.setEditTriggers(QAbstractItemView.NoEditTriggers)
    table.horizontalHeader().setStretchLastSection(True)
    table.verticalHeader().setVisible(False)
    return table


def _fill(table: QTableWidget, users) -> None:
    table.setRowCount(len(users))
    for row, user in enumerate(users):
        table.setItem(row, 0, QTableWidgetItem(user.name))
        table.setItem(row, 1, QTableWidgetItem(user.email))


class PeopleView(QWidget):
    """Сотрудники и клиенты с кнопками добавления."""

    add_user_requested = Signal(str)

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        layout = QVBoxLayout(self)

        bar = QHBoxLayout()
        bar.addWidget(QLabel("<h2>Team & Clients</h2>"), 1)
        self.add_employee_btn = styled_button("Add Employee", icon="➕")
        self.add_client_btn = styled_button("Add Client", icon="➕")
        for btn in (self.add_employee_btn, self.add_client_btn):
            btn.setVisible(controller.can_create_project)
            bar.addWidget(btn)
        layout.addLayout(bar)

        layout.addWidget(QLabel("<b>Employees</b>"))
        self.employee_table = _make_table()
        layout.addWidget(self.employee_table)
        layout.addWidget(QLabel("<b>Clients</b>"))
        self.client_table = _make_table()
        layout.addWidget(self.client_table)

        self.add_employee_btn.clicked.connect(
            lambda: self.add_user_requested.emit(UserRole.EMPLOYEE.value)
        )
        self.add_client_btn.clicked.connect(
            lambda: self.add_user_requested.emit(UserRole.CLIENT.value)
        )
        self.refresh()

    def refresh(self):
        _fill(self.employee_table, self.controller.employees)
        _fill(self.client_table, self.controller.clients)
