import base64
import logging

from PySide6.QtCore import Qt
from PySide6.QtWidgets import (
    QMainWindow,
    QStackedWidget,
    QStatusBar,
    QTabWidget,
)

from core.data_context import DataContext
from services.dashboard.controller import DashboardController, DashboardView
from ui import settings as ui_settings
from ui.common.message_boxes import show_error
from ui.forms.lead_form import LeadForm
from ui.forms.project_form import ProjectForm
from ui.forms.user_form import UserAccountForm
from ui.views.dashboard_tab import DashboardTab
from ui.views.lead_table_view import LeadTableView
from ui.views.people_view import PeopleView
from ui.views.project_detail_view import ProjectDetailView
from ui.views.project_table_view import ProjectTableView

logger = logging.getLogger(__name__)

TAB_VIEWS = [
    DashboardView.DASHBOARD,
    DashboardView.PROJECTS,
    DashboardView.EMPLOYEES,
    DashboardView.LEADS,
]

MAIN_PAGE = 0
DETAIL_PAGE = 1


def apply_main_window_settings(settings: dict, tab_widget, restore_geometry) -> None:
    geom = settings.get("geometry")
    if geom:
        try:
            restore_geometry(base64.b64decode(geom))
        except (TypeError, ValueError):
            logger.exception("Не удалось восстановить геометрию окна")
    idx = settings.get("last_tab")
    if isinstance(idx, int) and 0 <= idx < tab_widget.count():
        tab_widget.setCurrentIndex(idx)


class MainWindow(QMainWindow):
    def __init__(self, controller: DashboardController, context: DataContext):
        super().__init__()
        self.controller = controller
        self.context = context
        user = controller.auth.user
        title = "Project Dashboard"
        if user is not None:
            title = f"{title} · {user.name} ({user.role})"
        self.setWindowTitle(title)
        self.resize(1280, 800)
        self.setMinimumSize(800, 600)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)

        self.stack = QStackedWidget(self)
        self.setCentralWidget(self.stack)
        self.init_tabs()

        self.detail_view = ProjectDetailView(controller, parent=self)
        self.detail_view.back_requested.connect(self.close_project_detail)
        self.stack.addWidget(self.tab_widget)
        self.stack.addWidget(self.detail_view)

        self._unsubscribe = context.subscribe(self.on_data_changed)
        self._load_settings()
        self.on_tab_changed(self.tab_widget.currentIndex())

    def init_tabs(self):
        self.tab_widget = QTabWidget(self)
        self.dashboard_tab = DashboardTab(self.controller)
        self.project_tab = ProjectTableView(self.controller)
        self.people_tab = PeopleView(self.controller)
        self.lead_tab = LeadTableView(self.controller)

        self.tab_widget.addTab(self.dashboard_tab, "Dashboard")
        self.tab_widget.addTab(self.project_tab, "Projects")
        self.tab_widget.addTab(self.people_tab, "Employees")
        self.tab_widget.addTab(self.lead_tab, "Leads")
        self.tab_widget.currentChanged.connect(self.on_tab_changed)

        self.dashboard_tab.project_activated.connect(self.open_project_detail)
        self.project_tab.project_activated.connect(self.open_project_detail)
        self.project_tab.new_project_requested.connect(lambda: self.open_project_form())
        self.project_tab.edit_project_requested.connect(self.open_project_form)
        self.people_tab.add_user_requested.connect(self.open_user_form)
        self.lead_tab.lead_form_requested.connect(self.open_lead_form)

    def _load_settings(self):
        st = ui_settings.get_window_settings("MainWindow")
        apply_main_window_settings(st, self.tab_widget, self.restoreGeometry)
        if st.get("open_maximized"):
            self.setWindowState(self.windowState() | Qt.WindowMaximized)

    # ------------------------------------------------------------------
    # Навигация
    # ------------------------------------------------------------------
    def on_tab_changed(self, index: int):
        if 0 <= index < len(TAB_VIEWS):
            self.controller.set_active_view(TAB_VIEWS[index])
        self.status_bar.showMessage(f"Projects: {len(self.controller.filtered_projects)}")

    def open_project_detail(self, project):
        self.controller.open_project(project)
        self.detail_view.refresh()
        self.stack.setCurrentIndex(DETAIL_PAGE)

    def close_project_detail(self):
        self.controller.close_project_detail()
        self.stack.setCurrentIndex(MAIN_PAGE)

    def on_data_changed(self, collection: str):
        logger.debug("Обновление представлений: %s", collection)
        self.dashboard_tab.refresh()
        self.project_tab.refresh()
        self.people_tab.refresh()
        self.lead_tab.refresh()
        if self.controller.show_project_detail:
            self.detail_view.refresh()

    # ------------------------------------------------------------------
    # Диалоги
    # ------------------------------------------------------------------
    def open_project_form(self, project=None):
        if self.controller.open_project_modal(project) is None:
            show_error("Only managers can create projects")
            return
        dlg = ProjectForm(self.controller, parent=self)
        if dlg.exec():
            self.status_bar.showMessage("Project saved", 5000)

    def open_lead_form(self):
        dlg = LeadForm(self.controller, parent=self)
        if dlg.exec():
            self.status_bar.showMessage("Lead saved", 5000)

    def open_user_form(self, role: str):
        self.controller.open_user_modal(role)
        dlg = UserAccountForm(self.controller, parent=self)
        dlg.exec()

    def closeEvent(self, event):
        self._unsubscribe()
        st = ui_settings.get_window_settings("MainWindow")
        st.update(
            {
                "geometry": base64.b64encode(bytes(self.saveGeometry())).decode("ascii"),
                "last_tab": self.tab_widget.currentIndex(),
                "open_maximized": bool(self.windowState() & Qt.WindowMaximized),
            }
        )
        ui_settings.set_window_settings("MainWindow", st)
        super().closeEvent(event)
