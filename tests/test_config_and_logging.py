import logging

import pytest

from config import Settings, get_settings
from utils.logging_config import PeeweeFilter, configure_peewee_logger, setup_logging


@pytest.fixture
def fresh_settings(monkeypatch):
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()


def test_settings_from_environment(monkeypatch, tmp_path, fresh_settings):
    monkeypatch.setenv("DATABASE_URL", "sqlite:///:memory:")
    monkeypatch.setenv("LOG_DIR", str(tmp_path))
    monkeypatch.setenv("LOG_LEVEL", "debug")
    monkeypatch.setenv("DETAILED_LOGGING", "yes")
    monkeypatch.setenv("MANAGER_EMAIL", "boss@example.com")
    monkeypatch.setenv("MANAGER_PASSWORD", "pw")
    monkeypatch.setenv("RECENT_PROJECTS_LIMIT", "4")

    settings = get_settings()

    assert settings.database_url == "sqlite:///:memory:"
    assert settings.log_dir == str(tmp_path)
    assert settings.log_level == "DEBUG"
    assert settings.detailed_logging is True
    assert settings.manager_email == "boss@example.com"
    assert settings.recent_projects_limit == 4
    assert get_settings() is settings


def test_settings_defaults(monkeypatch, fresh_settings):
    for name in ("LOG_DIR", "DETAILED_LOGGING", "MANAGER_EMAIL", "RECENT_PROJECTS_LIMIT"):
        monkeypatch.delenv(name, raising=False)
    settings = get_settings()
    assert settings.detailed_logging is False
    assert settings.manager_email is None
    assert settings.recent_projects_limit == 6
    assert "project_dashboard" in settings.log_dir


def _record(msg, **extra):
    record = logging.LogRecord("peewee", logging.DEBUG, __file__, 1, msg, None, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_peewee_filter_hides_select():
    flt = PeeweeFilter()
    assert flt.filter(_record("SELECT * FROM project")) is False
    assert flt.filter(_record("INSERT INTO project")) is True
    assert flt.filter(_record("query", sql="  SELECT 1")) is False


@pytest.fixture
def restore_root_logger():
    root = logging.getLogger()
    previous = root.handlers[:]
    level = root.level
    yield
    for handler in root.handlers:
        if handler not in previous:
            handler.close()
    root.handlers = previous
    root.setLevel(level)
    configure_peewee_logger(detailed=True)


def test_setup_logging_writes_dashboard_log(tmp_path, restore_root_logger):
    path = setup_logging(Settings(log_dir=str(tmp_path / "logs"), log_level="info"))
    logging.getLogger("tests").info("hello dashboard")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert path == tmp_path / "logs" / "dashboard.log"
    assert "hello dashboard" in path.read_text(encoding="utf-8")


def test_detailed_logging_removes_select_filter(tmp_path, restore_root_logger):
    peewee_logger = logging.getLogger("peewee")

    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=False))
    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=False))
    assert sum(isinstance(f, PeeweeFilter) for f in peewee_logger.filters) == 1

    setup_logging(Settings(log_dir=str(tmp_path), detailed_logging=True))
    assert not any(isinstance(f, PeeweeFilter) for f in peewee_logger.filters)
    assert logging.getLogger().level == logging.DEBUG
