from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QAbstractItemView,
    QHBoxLayout,
    QLabel,
    QTableWidget,
    QTableWidgetItem,
    QVBoxLayout,
    QWidget,
)

from services.dashboard.controller import DashboardController
from ui.common.message_boxes import confirm, show_result
from ui.common.styled_widgets import styled_button

COLUMNS = ["Name", "Contact", "Estimated Amount", "Notes"]


class LeadTableView(QWidget):
    """Список лидов с добавлением, редактированием и удалением."""

    lead_form_requested = Signal()

    def __init__(self, controller: DashboardController, parent=None, *, confirm_func=confirm):
        super().__init__(parent)
        self.controller = controller
        self._confirm = confirm_func
        layout = QVBoxLayout(self)

        bar = QHBoxLayout()
        bar.addWidget(QLabel("<h2>Leads</h2>"), 1)
        self.add_btn = styled_button("Add Lead", icon="➕", shortcut="Ctrl+L", role="primary")
        self.edit_btn = styled_button("Edit", icon="✏️")
        self.delete_btn = styled_button("Delete", icon="🗑️", shortcut="Del", role="danger")
        for btn in (self.add_btn, self.edit_btn, self.delete_btn):
            bar.addWidget(btn)
        layout.addLayout(bar)

        self.table = QTableWidget(0, len(COLUMNS))
        self.table.setHorizontalHeaderLabels(COLUMNS)
        self.table.setEditTriggers(QAbstractItemView.NoEditTriggers)
        self.table.setSelectionBehavior(QAbstractItemView.SelectRows)
        self.table.setSelectionMode(QAbstractItemView.SingleSelection)
        self.table.horizontalHeader().setStretchLastSection(True)
        self.table.verticalHeader().setVisible(False)
        layout.addWidget(self.table)

        self.add_btn.clicked.connect(self.add_lead)
        self.edit_btn.clicked.connect(self.edit_selected)
        self.delete_btn.clicked.connect(self.delete_selected)
        self.table.cellDoubleClicked.connect(lambda *_: self.edit_selected())
        self.refresh()

    def refresh(self):
        leads = self.controller.leads
        self.table.setRowCount(len(leads))
        for row, lead in enumerate(leads):
            values = [lead.name, lead.contact_info, f"{lead.estimated_amount:,.2f}", lead.notes]
            for col, value in enumerate(values):
                item = QTableWidgetItem(value)
                if col == 0:
                    item.setData(Qt.UserRole, lead)
                self.table.setItem(row, col, item)

    def selected_lead(self):
        row = self.table.currentRow()
        if row < 0:
            return None
        item = self.table.item(row, 0)
        return item.data(Qt.UserRole) if item else None

    def add_lead(self):
        self.controller.open_new_lead()
        self.lead_form_requested.emit()

    def edit_selected(self):
        lead = self.selected_lead()
        if lead is None:
            return
        self.controller.edit_lead(lead)
        self.lead_form_requested.emit()

    def delete_selected(self):
        lead = self.selected_lead()
        if lead is None:
            return
        show_result(self.controller.delete_lead(lead.id, self._confirm))
