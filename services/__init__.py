"""Пакет прикладных сервисов дашборда.

Подмодули не импортируются на уровне пакета, чтобы ``import services`` не
тянул peewee-модели и PySide6. Импортируйте нужное напрямую, например:
    from services.projects import project_service as ps
    from services.dashboard.controller import DashboardController
"""

__all__: list[str] = []
