import logging

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLabel,
    QLineEdit,
    QVBoxLayout,
)

from services.auth_service import AuthSession
from ui import settings as ui_settings
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)


class LoginDialog(QDialog):
    """Вход в приложение по email и паролю."""

    def __init__(self, auth: AuthSession, parent=None):
        super().__init__(parent)
        self.auth = auth
        self.setWindowTitle("Sign in")
        self.setMinimumWidth(340)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        layout.addLayout(form)
        self.email_edit = QLineEdit(ui_settings.get_last_login())
        self.password_edit = QLineEdit()
        self.password_edit.setEchoMode(QLineEdit.Password)
        form.addRow("Email:", self.email_edit)
        form.addRow("Password:", self.password_edit)

        self.error_label = QLabel()
        self.error_label.setStyleSheet("color: #b00020")
        layout.addWidget(self.error_label)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = styled_button("Cancel")
        self.login_btn = styled_button("Sign in", role="primary")
        self.login_btn.setDefault(True)
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.login_btn)
        layout.addLayout(btns)

        self.cancel_btn.clicked.connect(self.reject)
        self.login_btn.clicked.connect(self.sign_in)

    def sign_in(self):
        email = self.email_edit.text().strip()
        user = self.auth.sign_in(email, self.password_edit.text())
        if user is None:
            self.error_label.setText("Invalid email or password")
            self.password_edit.clear()
            return
        ui_settings.set_last_login(email)
        self.accept()
