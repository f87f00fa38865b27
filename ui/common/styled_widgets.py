from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence
from PySide6.QtWidgets import QFrame, QLabel, QPushButton, QVBoxLayout


def styled_button(
    label: str, icon: str = "", tooltip: str = "", shortcut: str = "", role: str = None
) -> QPushButton:
    """
    Создаёт кнопку с иконкой, подсказкой и шорткатом.

    Parameters
    ----------
    label : str
        Текст кнопки
    icon : str
        Эмоджи перед текстом
    tooltip : str
        Всплывающая подсказка
    shortcut : str
        Горячая клавиша, например: "Ctrl+N"
    role : str
        Визуальная роль ("primary", "danger")
    """
    btn = QPushButton(f"{icon} {label}".strip())
    if shortcut:
        btn.setShortcut(QKeySequence(shortcut))
        tooltip = f"{tooltip} ({shortcut})".strip() if tooltip else shortcut
    if tooltip:
        btn.setToolTip(tooltip)
    if role:
        btn.setProperty("role", role)
    btn.setMinimumHeight(30)
    return btn


class StatCard(QFrame):
    """Карточка со значением для сводки дашборда."""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        self.setFrameShape(QFrame.StyledPanel)
        layout = QVBoxLayout(self)
        self.title_label = QLabel(title)
        self.value_label = QLabel("0")
        self.value_label.setAlignment(Qt.AlignLeft | Qt.AlignVCenter)
        self.value_label.setStyleSheet("font-size: 20pt; font-weight: bold")
        layout.addWidget(self.title_label)
        layout.addWidget(self.value_label)

    def set_value(self, value) -> None:
        self.value_label.setText(str(value))
