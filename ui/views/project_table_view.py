import logging

from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QComboBox,
    QHBoxLayout,
    QHeaderView,
    QLineEdit,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from database.models import ProjectPriority, ProjectStatus
from services.dashboard.controller import DashboardController
from services.dashboard.filters import ALL
from services.projects.dto import format_deadline
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)

COLUMNS = ["Title", "Client", "Status", "Priority", "Progress", "Deadline", "Team"]

STATUS_OPTIONS = [
    (ALL, "All Statuses"),
    (ProjectStatus.ACTIVE.value, "Active"),
    (ProjectStatus.COMPLETED.value, "Completed"),
    (ProjectStatus.ON_HOLD.value, "On Hold"),
]

PRIORITY_OPTIONS = [
    (ALL, "All Priorities"),
    (ProjectPriority.HIGH.value, "High"),
    (ProjectPriority.MEDIUM.value, "Medium"),
    (ProjectPriority.LOW.value, "Low"),
]


class ProjectTableView(QWidget):
    """Таблица проектов с поиском и фильтрами по статусу, сотруднику, приоритету."""

    project_activated = Signal(object)
    new_project_requested = Signal()
    edit_project_requested = Signal(object)

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        layout = QVBoxLayout(self)

        bar = QHBoxLayout()
        self.search_edit = QLineEdit()
        self.search_edit.setPlaceholderText("Search projects...")
        self.search_edit.setText(controller.project_filter.search_text)
        bar.addWidget(self.search_edit, 2)

        self.status_combo = QComboBox()
        for value, label in STATUS_OPTIONS:
            self.status_combo.addItem(label, value)
        bar.addWidget(self.status_combo)

        self.employee_combo = QComboBox()
        bar.addWidget(self.employee_combo)

        self.priority_combo = QComboBox()
        for value, label in PRIORITY_OPTIONS:
            self.priority_combo.addItem(label, value)
        bar.addWidget(self.priority_combo)

        self.new_btn = styled_button("New Project", icon="➕", shortcut="Ctrl+N", role="primary")
        self.new_btn.setEnabled(controller.can_create_project)
        self.new_btn.setVisible(controller.can_create_project)
        bar.addWidget(self.new_btn)
        self.edit_btn = styled_button("Edit", icon="✏️")
        self.edit_btn.setVisible(controller.can_create_project)
        bar.addWidget(self.edit_btn)
        layout.addLayout(bar)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.horizontalHeader().setSectionResizeMode(0, QHeaderView.Stretch)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table)

        self.search_edit.textChanged.connect(self._on_search_changed)
        self.status_combo.currentIndexChanged.connect(self._on_status_changed)
        self.employee_combo.currentIndexChanged.connect(self._on_employee_changed)
        self.priority_combo.currentIndexChanged.connect(self._on_priority_changed)
        self.table.cellDoubleClicked.connect(self._on_row_activated)
        self.new_btn.clicked.connect(self.new_project_requested.emit)
        self.edit_btn.clicked.connect(self._on_edit_clicked)

        self.refresh()

    # ------------------------------------------------------------------
    # Фильтры
    # ------------------------------------------------------------------
    def _on_search_changed(self, text: str):
        self.controller.set_search_text(text)
        self._fill_table()

    def _on_status_changed(self, _index: int):
        self.controller.set_status_filter(self.status_combo.currentData())
        self._fill_table()

    def _on_employee_changed(self, _index: int):
        value = self.employee_combo.currentData()
        if value is None:
            return
        self.controller.set_employee_filter(value)
        self._fill_table()

    def _on_priority_changed(self, _index: int):
        self.controller.set_priority_filter(self.priority_combo.currentData())
        self._fill_table()

    def _fill_employee_combo(self):
        current = self.controller.project_filter.employee_id
        self.employee_combo.blockSignals(True)
        self.employee_combo.clear()
        self.employee_combo.addItem("All Employees", ALL)
        for employee in self.controller.employees:
            self.employee_combo.addItem(employee.name, employee.id)
        idx = self.employee_combo.findData(current)
        self.employee_combo.setCurrentIndex(max(idx, 0))
        self.employee_combo.blockSignals(False)

    # ------------------------------------------------------------------
    # Таблица
    # ------------------------------------------------------------------
    def refresh(self):
        self._fill_employee_combo()
        self._fill_table()

    def _fill_table(self):
        projects = self.controller.filtered_projects
        self.table.setRowCount(len(projects))
        for row, project in enumerate(projects):
            values = [
                project.title,
                project.client_name,
                project.status,
                project.priority,
                f"{project.progress_percentage}%",
                format_deadline(project.deadline),
                ", ".join(self.controller.assigned_employee_names(project)),
            ]
            for col, value in enumerate(values):
                item = QTableWidgetItem(value)
                if col == 0:
                    item.setData(Qt.UserRole, project)
                self.table.setItem(row, col, item)
        logger.debug("Проектов в таблице: %d", len(projects))

    def selected_project(self):
        row = self.table.currentRow()
        if row < 0:
            return None
        item = self.table.item(row, 0)
        return item.data(Qt.UserRole) if item else None

    def _on_row_activated(self, row: int, _col: int):
        item = self.table.item(row, 0)
        if item is not None:
            self.project_activated.emit(item.data(Qt.UserRole))

    def _on_edit_clicked(self):
        project = self.selected_project()
        if project is not None:
            self.edit_project_requested.emit(project)
