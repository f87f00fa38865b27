from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QVBoxLayout,
)

from database.models import UserRole
from services.dashboard.controller import DashboardController
from ui.common.message_boxes import show_error, show_info
from ui.common.styled_widgets import styled_button


class UserAccountForm(QDialog):
    """Диалог создания сотрудника или клиента; роль задаётся при открытии."""

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        form_state = controller.user_form
        role_label = "Employee" if form_state.role == UserRole.EMPLOYEE.value else "Client"
        self.setWindowTitle(f"Add {role_label}")
        self.setMinimumWidth(380)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        layout.addLayout(form)

        self.full_name_edit = QLineEdit(form_state.full_name)
        self.email_edit = QLineEdit(form_state.email)
        self.password_edit = QLineEdit(form_state.password)
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Full Name:", self.full_name_edit)
        form.addRow("Email:", self.email_edit)
        form.addRow("Password:", self.password_edit)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = styled_button("Cancel", shortcut="Esc")
        self.create_btn = styled_button("Create", role="primary")
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.create_btn)
        layout.addLayout(btns)

        for edit in (self.full_name_edit, self.email_edit, self.password_edit):
            edit.textChanged.connect(self._update_create_enabled)
        self.cancel_btn.clicked.connect(self.reject)
        self.create_btn.clicked.connect(self.save)
        self._update_create_enabled()

    def _update_create_enabled(self, *_):
        filled = all(
            edit.text().strip()
            for edit in (self.full_name_edit, self.email_edit, self.password_edit)
        )
        self.create_btn.setEnabled(filled and not self.controller.creating_user)

    def save(self):
        self.controller.set_user_fields(
            full_name=self.full_name_edit.text(),
            email=self.email_edit.text(),
            password=self.password_edit.text(),
        )
        self.create_btn.setText("Creating...")
        self.create_btn.setEnabled(False)
        result = self.controller.submit_user()
        self.create_btn.setText("Create")
        if result.ok:
            show_info(result.message)
            self.accept()
            return
        show_error(result.message)
        self._update_create_enabled()

    def reject(self):
        self.controller.close_user_modal()
        super().reject()
