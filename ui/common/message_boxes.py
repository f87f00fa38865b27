import logging

from PySide6.QtWidgets import QMessageBox

from services.result import OperationResult

logger = logging.getLogger(__name__)


def confirm(text: str, title="Confirmation") -> bool:
    return (
        QMessageBox.question(
            None,
            title,
            text,
            QMessageBox.Yes | QMessageBox.No,
            QMessageBox.No,
        )
        == QMessageBox.Yes
    )


def show_error(message: str, title="Error"):
    logger.error("❌ UI ошибка: %s", message)
    QMessageBox.critical(None, title, message)


def show_info(message: str, title="Information"):
    logger.info("ℹ️ UI: %s", message)
    QMessageBox.information(None, title, message)


def show_result(result: OperationResult) -> bool:
    """Показать сообщение результата операции; пустые сообщения пропускаются."""
    if result.ok:
        if result.message:
            show_info(result.message)
    elif result.message:
        show_error(result.message)
    return result.ok
