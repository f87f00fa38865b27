from PySide6.QtCore import Qt, Signal
from PySide6.QtWidgets import (
    QGridLayout,
    QHBoxLayout,
    QLabel,
    QListWidget,
    QListWidgetItem,
    QVBoxLayout,
    QWidget,
)

from services.dashboard.controller import DashboardController
from services.projects.dto import format_deadline
from ui.common.styled_widgets import StatCard


class DashboardTab(QWidget):
    """Стартовая страница: сводка, последние проекты и открытые задачи."""

    project_activated = Signal(object)

    def __init__(self, controller: DashboardController, parent=None):
        super().__init__(parent)
        self.controller = controller
        layout = QVBoxLayout(self)
        layout.addWidget(QLabel("<h2>Dashboard</h2>"))

        cards = QGridLayout()
        self.total_card = StatCard("Total Projects")
        self.active_card = StatCard("Active Projects")
        self.completed_card = StatCard("Completed")
        self.progress_card = StatCard("Avg. Progress")
        for col, card in enumerate(
            (self.total_card, self.active_card, self.completed_card, self.progress_card)
        ):
            cards.addWidget(card, 0, col)
        layout.addLayout(cards)

        lists = QHBoxLayout()
        recent_box = QVBoxLayout()
        recent_box.addWidget(QLabel("<b>Recent Projects</b>"))
        self.recent_list = QListWidget()
        self.recent_list.itemDoubleClicked.connect(self._on_recent_activated)
        recent_box.addWidget(self.recent_list)
        lists.addLayout(recent_box)

        tasks_box = QVBoxLayout()
        tasks_box.addWidget(QLabel("<b>Open Tasks</b>"))
        self.tasks_list = QListWidget()
        tasks_box.addWidget(self.tasks_list)
        lists.addLayout(tasks_box)
        layout.addLayout(lists)

        self.refresh()

    def refresh(self):
        stats = self.controller.stats
        self.total_card.set_value(stats.total)
        self.active_card.set_value(stats.active)
        self.completed_card.set_value(stats.completed)
        self.progress_card.set_value(f"{stats.avg_progress}%")

        self.recent_list.clear()
        for project in self.controller.recent_projects:
            text = (
                f"{project.title} · {project.client_name or '—'} · "
                f"{project.progress_percentage}% · {format_deadline(project.deadline)}"
            )
            item = QListWidgetItem(text)
            item.setData(Qt.UserRole, project)
            self.recent_list.addItem(item)
        if not self.controller.recent_projects:
            self.recent_list.addItem("No projects yet")

        titles = {p.id: p.title for p in self.controller.projects}
        self.tasks_list.clear()
        for task in self.controller.open_tasks:
            project_title = titles.get(task.project_id, "")
            self.tasks_list.addItem(f"{task.title} ({project_title})" if project_title else task.title)

    def _on_recent_activated(self, item: QListWidgetItem):
        project = item.data(Qt.UserRole)
        if project is not None:
            self.project_activated.emit(project)
