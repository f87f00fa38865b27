"""Локальные настройки интерфейса (геометрия окон, последний логин) в JSON."""

import copy
import json
import logging
from pathlib import Path

logger = logging.getLogger(__name__)

SETTINGS_PATH = Path.home() / ".project_dashboard" / "ui_settings.json"
_CACHE: dict | None = None


def _read() -> dict:
    global _CACHE
    if _CACHE is None:
        _CACHE = {}
        try:
            _CACHE = json.loads(SETTINGS_PATH.read_text(encoding="utf-8"))
        except FileNotFoundError:
            pass
        except (OSError, ValueError):
            logger.exception("Файл настроек интерфейса повреждён: %s", SETTINGS_PATH)
    return copy.deepcopy(_CACHE)


def _update(section: str, key: str, value) -> None:
    global _CACHE
    data = _read()
    data.setdefault(section, {})[key] = value
    _CACHE = data
    try:
        SETTINGS_PATH.parent.mkdir(parents=True, exist_ok=True)
        SETTINGS_PATH.write_text(
            json.dumps(data, ensure_ascii=False, indent=2), encoding="utf-8"
        )
    except OSError:
        logger.exception("Не удалось записать настройки интерфейса")


def get_window_settings(name: str) -> dict:
    return _read().get("windows", {}).get(name, {})


def set_window_settings(name: str, settings: dict) -> None:
    _update("windows", name, settings)


def get_last_login() -> str:
    """Email последнего успешного входа, подставляется в окно логина."""
    return _read().get("app", {}).get("last_login", "")


def set_last_login(email: str) -> None:
    _update("app", "last_login", email)
