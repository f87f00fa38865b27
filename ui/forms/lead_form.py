import logging

from PySide6.QtWidgets import (
    QDialog,
    QFormLayout,
    QHBoxLayout,
    QLineEdit,
    QPlainTextEdit,
    QVBoxLayout,
)

from services.dashboard.controller import DashboardController
from ui.common.message_boxes import show_error
from ui.common.styled_widgets import styled_button

logger = logging.getLogger(__name__)


class LeadForm(QDialog):
    """Форма лида: создание, если лид не редактируется, иначе обновление."""

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        fields = controller.lead_form
        editing = controller.editing_lead is not None
        self.setWindowTitle("Edit Lead" if editing else "Add Lead")
        self.setMinimumWidth(420)

        layout = QVBoxLayout(self)
        form = QFormLayout()
        layout.addLayout(form)

        self.name_edit = QLineEdit(fields.name)
        self.contact_edit = QLineEdit(fields.contact_info)
        self.amount_edit = QLineEdit(str(fields.estimated_amount))
        self.notes_edit = QPlainTextEdit(fields.notes)
        form.addRow("Name:", self.name_edit)
        form.addRow("Contact Info:", self.contact_edit)
        form.addRow("Estimated Amount:", self.amount_edit)
        form.addRow("Notes:", self.notes_edit)

        btns = QHBoxLayout()
        btns.addStretch()
        self.cancel_btn = styled_button("Cancel", shortcut="Esc")
        self.save_btn = styled_button(
            "Update Lead" if editing else "Add Lead", role="primary", shortcut="Ctrl+S"
        )
        btns.addWidget(self.cancel_btn)
        btns.addWidget(self.save_btn)
        layout.addLayout(btns)

        self.name_edit.textChanged.connect(self._update_save_enabled)
        self.cancel_btn.clicked.connect(self.reject)
        self.save_btn.clicked.connect(self.save)
        self._update_save_enabled()

    def _update_save_enabled(self, *_):
        self.save_btn.setEnabled(bool(self.name_edit.text().strip()))

    def collect_data(self) -> dict:
        return {
            "name": self.name_edit.text().strip(),
            "contact_info": self.contact_edit.text().strip(),
            "estimated_amount": self.amount_edit.text(),
            "notes": self.notes_edit.toPlainText(),
        }

    def save(self):
        result = self.controller.set_lead_fields(**self.collect_data())
        if not result.ok:
            show_error(result.message)
            return
        result = self.controller.submit_lead()
        if result.ok:
            self.accept()
        else:
            show_error(result.message)

    def reject(self):
        self.controller.close_lead_modal()
        super().reject()
