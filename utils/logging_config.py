"""Логирование дашборда: файл с ротацией, консоль и фильтр SQL peewee."""

import logging
from logging.handlers import RotatingFileHandler
from pathlib import Path

from config import Settings, get_settings

LOG_FILE_NAME = "dashboard.log"
LOG_FORMAT = "%(asctime)s | %(levelname)-8s | %(name)s │ %(message)s"

# библиотеки, которые слишком болтливы на DEBUG
QUIET_LOGGERS = ("passlib", "PySide6")


class PeeweeFilter(logging.Filter):
    """Скрывает SELECT-запросы peewee."""

    def filter(self, record: logging.LogRecord) -> bool:
        msg = getattr(record, "sql", None)
        if msg is None:
            msg = record.getMessage()
        return not str(msg).lstrip().upper().startswith("SELECT")


def log_file_path(settings: Settings) -> Path:
    return Path(settings.log_dir).expanduser() / LOG_FILE_NAME


def configure_peewee_logger(detailed: bool) -> logging.Logger:
    """Оставить на логгере peewee не более одного :class:`PeeweeFilter`."""
    peewee_logger = logging.getLogger("peewee")
    for flt in [f for f in peewee_logger.filters if isinstance(f, PeeweeFilter)]:
        peewee_logger.removeFilter(flt)
    if not detailed:
        peewee_logger.addFilter(PeeweeFilter())
    return peewee_logger


def setup_logging(settings: Settings | None = None) -> Path:
    """Настроить корневой логгер и вернуть путь к файлу журнала."""
    settings = settings or get_settings()
    path = log_file_path(settings)
    path.parent.mkdir(parents=True, exist_ok=True)

    level = logging.DEBUG if settings.detailed_logging else getattr(
        logging, settings.log_level.upper(), logging.INFO
    )
    fmt = logging.Formatter(LOG_FORMAT, datefmt="%Y-%m-%d %H:%M:%S")

    file_h = RotatingFileHandler(
        path,
        maxBytes=2_000_000,  # 2 MB
        backupCount=3,
        encoding="utf-8",
    )
    console_h = logging.StreamHandler()
    for handler in (file_h, console_h):
        handler.setFormatter(fmt)
        handler.setLevel(level)

    logging.basicConfig(level=level, handlers=[file_h, console_h], force=True)

    configure_peewee_logger(settings.detailed_logging)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.INFO))

    logging.getLogger(__name__).debug("Журнал: %s", path)
    return path
