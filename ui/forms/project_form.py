import logging

from PySide6.QtCore import QDate, Qt
from PySide6.QtWidgets import (
    QComboBox,
    QDateEdit,
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QListWidget,
    QListWidgetItem,
    QPlainTextEdit,
    QVBoxLayout,
)

from database.models import ProjectPriority
from services.dashboard.controller import DashboardController
from services.projects.project_form import ProjectFormState
from ui.common.message_boxes import show_error
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)

# наименьшая дата QDateEdit, отображается как «—» и означает «срок не задан»
EMPTY_DATE = QDate(1752, 9, 14)

PRIORITY_LABELS = {
    ProjectPriority.LOW.value: "Low Priority",
    ProjectPriority.MEDIUM.value: "Medium Priority",
    ProjectPriority.HIGH.value: "High Priority",
}


class ProjectForm(QDialog):
    """Диалог создания и редактирования проекта поверх :class:`ProjectFormState`."""

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        self.state: ProjectFormState = controller.project_form
        if self.state is None:
            raise RuntimeError("Project form state is not initialised")

        self.setWindowTitle("Edit Project" if self.state.is_editing else "Create New Project")
        self.setMinimumWidth(560)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        layout.addLayout(form)

        self.title_edit = QLineEdit(self.state.title)
        form.addRow("Project Title:", self.title_edit)

        self.description_edit = QPlainTextEdit(self.state.description)
        self.description_edit.setFixedHeight(90)
        form.addRow("Description:", self.description_edit)

        self.client_combo = QComboBox()
        self.client_combo.addItem("Select a client", "")
        for client in self.state.clients:
            self.client_combo.addItem(f"{client.name} ({client.email})", client.id)
        idx = self.client_combo.findData(self.state.client_id)
        self.client_combo.setCurrentIndex(max(idx, 0))
        form.addRow("Client:", self.client_combo)

        self.deadline_edit = QDateEdit()
        self.deadline_edit.setCalendarPopup(True)
        self.deadline_edit.setDisplayFormat("yyyy-MM-dd")
        self.deadline_edit.setMinimumDate(EMPTY_DATE)
        self.deadline_edit.setSpecialValueText("—")
        if self.state.deadline:
            self.deadline_edit.setDate(QDate.fromString(self.state.deadline, "yyyy-MM-dd"))
        else:
            self.deadline_edit.setDate(EMPTY_DATE)
        form.addRow("Deadline:", self.deadline_edit)

        self.employee_list: QListWidget | None = None
        if self.state.show_employee_section:
            self.employee_list = QListWidget()
            self.employee_list.setMaximumHeight(160)
            for employee in self.state.employees:
                item = QListWidgetItem(f"{employee.name} ({employee.email})")
                item.setData(Qt.UserRole, employee.id)
                item.setFlags(item.flags() | Qt.ItemIsUserCheckable)
                item.setCheckState(
                    Qt.Checked if self.state.is_assigned(employee.id) else Qt.Unchecked
                )
                self.employee_list.addItem(item)
            form.addRow("Assign Employees:", self.employee_list)

        self.priority_combo = QComboBox()
        for value, label in PRIORITY_LABELS.items():
            self.priority_combo.addItem(label, value)
        self.priority_combo.setCurrentIndex(
            max(self.priority_combo.findData(self.state.priority), 0)
        )
        form.addRow("Project Priority:", self.priority_combo)

        self.hint_label = QLabel()
        self.hint_label.setStyleSheet("color: gray")
        layout.addWidget(self.hint_label)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = styled_button("Cancel", shortcut="Esc")
        self.save_btn = styled_button(
            "Update Project" if self.state.is_editing else "Create Project",
            role="primary",
            shortcut="Ctrl+S",
        )
        self.save_btn.setDefault(True)
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.save_btn)
        layout.addLayout(btns)

        self.title_edit.textChanged.connect(self._on_title_changed)
        self.description_edit.textChanged.connect(self._on_description_changed)
        self.client_combo.currentIndexChanged.connect(self._on_client_changed)
        self.deadline_edit.dateChanged.connect(self._on_deadline_changed)
        self.priority_combo.currentIndexChanged.connect(self._on_priority_changed)
        if self.employee_list is not None:
            self.employee_list.itemChanged.connect(self._on_employee_toggled)
        self.cancel_btn.clicked.connect(self.reject)
        self.save_btn.clicked.connect(self.save)

        self._update_save_enabled()

    # ------------------------------------------------------------------
    # Синхронизация виджетов с состоянием
    # ------------------------------------------------------------------
    def _on_title_changed(self, text: str):
        self.state.title = text
        self._update_save_enabled()

    def _on_description_changed(self):
        self.state.description = self.description_edit.toPlainText()

    def _on_client_changed(self, _index: int):
        self.state.select_client(self.client_combo.currentData() or "")
        self._update_save_enabled()

    def _on_deadline_changed(self, qdate: QDate):
        self.state.deadline = "" if qdate == EMPTY_DATE else qdate.toString("yyyy-MM-dd")
        self._update_save_enabled()

    def _on_priority_changed(self, _index: int):
        self.state.priority = self.priority_combo.currentData()

    def _on_employee_toggled(self, item: QListWidgetItem):
        employee_id = item.data(Qt.UserRole)
        checked = item.checkState() == Qt.Checked
        if checked != self.state.is_assigned(employee_id):
            self.state.toggle_employee(employee_id)

    def _update_save_enabled(self):
        self.save_btn.setEnabled(self.state.can_submit)
        if self.state.can_submit:
            self.hint_label.clear()
        else:
            self.hint_label.setText("Title, client and deadline are required")

    # ------------------------------------------------------------------
    # Сохранение
    # ------------------------------------------------------------------
    def save(self):
        self.save_btn.setEnabled(False)
        result = self.controller.submit_project_form()
        if result.ok:
            self.saved_instance = result.value
            self.accept()
            return
        show_error(result.message)
        self._update_save_enabled()

    def reject(self):
        self.controller.close_project_modal()
        super().reject()
