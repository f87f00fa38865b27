import logging
import sys
from pathlib import Path

from PySide6.QtWidgets import QApplication, QDialog

from config import Settings, get_settings
from core.app_context import get_app_context
from database.init import init_from_env
from services.dashboard.controller import DashboardController
from services.users import user_service as us
from ui.forms.login_dialog import LoginDialog
from ui.main_window import MainWindow
from utils.logging_config import setup_logging

__all__ = ["main"]


def main(settings: Settings | None = None) -> int:
    """Запускает настольное приложение дашборда проектов."""

    settings = settings or get_settings()
    if not settings.database_url:
        raise RuntimeError("DATABASE_URL не задан в .env")

    init_from_env(settings.database_url)
    setup_logging(settings)
    logger = logging.getLogger(__name__)

    # ───── Проверка и подготовка окружения ─────
    us.ensure_manager_from_env(settings)

    # ───── GUI ─────
    app = QApplication.instance() or QApplication(sys.argv)

    style_path = Path(__file__).resolve().parent / "resources" / "style.qss"
    try:
        with style_path.open("r", encoding="utf-8") as f:
            app.setStyleSheet(f.read())
    except OSError as e:
        logger.warning("Не удалось загрузить стиль: %s", e)

    context = get_app_context()
    auth = context.auth_session

    login = LoginDialog(auth)
    if login.exec() != QDialog.Accepted:
        logger.info("Вход отменён")
        return 0

    data_context = context.data_context
    controller = DashboardController(
        data_context, auth, recent_limit=settings.recent_projects_limit
    )
    window = MainWindow(controller, data_context)
    window.show()
    return app.exec()


if __name__ == "__main__":
    raise SystemExit(main())
