from PySide6.QtCore import Signal
from PySide6.QtWidgets import (
    QHBoxLayout,
    QLabel,
    QListWidget,
    QProgressBar,
    QTabWidget,
    QVBoxLayout,
    QWidget,
)

from services.dashboard.controller import PROJECT_DETAIL_TABS, DashboardController
from services.projects.dto import format_deadline
from ui.common.styled_widgets import styled_button

TAB_TITLES = {
    "brochure": "Brochure",
    "stages": "Stages",
    "storage": "Storage",
    "comments": "Comments & Tasks",
    "documents": "Documents",
}


class ProjectDetailView(QWidget):
    """Карточка выбранного проекта с вкладками."""

    back_requested = Signal()

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        layout = QVBoxLayout(self)

        header = QHBoxLayout()
        self.back_btn = styled_button("Back", icon="←", shortcut="Esc")
        header.addWidget(self.back_btn)
        self.title_label = QLabel()
        header.addWidget(self.title_label, 1)
        layout.addLayout(header)

        self.info_label = QLabel()
        self.info_label.setWordWrap(True)
        layout.addWidget(self.info_label)
        self.progress = QProgressBar()
        self.progress.setRange(0, 100)
        layout.addWidget(self.progress)

        self.tabs = QTabWidget()
        self.brochure_label = QLabel()
        self.brochure_label.setWordWrap(True)
        self.stages_list = QListWidget()
        self.tasks_list = QListWidget()
        pages = {
            "brochure": self.brochure_label,
            "stages": self.stages_list,
            "storage": QLabel("No files uploaded"),
            "comments": self.tasks_list,
            "documents": QLabel("No documents"),
        }
        for key in PROJECT_DETAIL_TABS:
            self.tabs.addTab(pages[key], TAB_TITLES[key])
        layout.addWidget(self.tabs)

        self.back_btn.clicked.connect(self.back_requested.emit)
        self.tabs.currentChanged.connect(self._on_tab_changed)

    def _on_tab_changed(self, index: int):
        if 0 <= index < len(PROJECT_DETAIL_TABS):
            self.controller.select_detail_tab(PROJECT_DETAIL_TABS[index])

    def refresh(self):
        project = self.controller.selected_project
        if project is None:
            return
        self.title_label.setText(f"<h2>{project.title}</h2>")
        team = ", ".join(self.controller.assigned_employee_names(project)) or "—"
        self.info_label.setText(
            f"Client: {project.client_name or '—'}<br>"
            f"Deadline: {format_deadline(project.deadline) or '—'}<br>"
            f"Status: {project.status} · Priority: {project.priority}<br>"
            f"Team: {team}"
        )
        self.progress.setValue(project.progress_percentage)
        self.brochure_label.setText(project.description or "No description")

        self.stages_list.clear()
        for stage in self.controller.selected_project_stages:
            self.stages_list.addItem(f"{stage.position + 1}. {stage.name} [{stage.status}]")

        self.tasks_list.clear()
        for task in self.controller.selected_project_tasks:
            self.tasks_list.addItem(f"{task.title} [{task.status}]")

        self.tabs.blockSignals(True)
        self.tabs.setCurrentIndex(PROJECT_DETAIL_TABS.index(self.controller.project_detail_tab))
        self.tabs.blockSignals(False)
