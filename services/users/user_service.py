"""Сервисный модуль для работы с пользователями."""

import logging

from passlib.context import CryptContext
from peewee import ModelSelect

from config import Settings, get_settings
from database.models import User, UserRole
from services.validators import is_valid_email
from .dto import UserDTO

logger = logging.getLogger(__name__)

_pwd_context = CryptContext(schemes=["pbkdf2_sha256"], deprecated="auto")

USER_ROLES = {role.value for role in UserRole}


class DuplicateEmailError(ValueError):
    """Raised when an account with the same email already exists."""

    def __init__(self, email: str):
        super().__init__(f"User with email {email} already exists")
        self.email = email


def hash_password(password: str) -> str:
    return _pwd_context.hash(password)


def verify_password(password: str, hashed: str) -> bool:
    try:
        return _pwd_context.verify(password, hashed)
    except ValueError:
        logger.warning("Unrecognized password hash format")
        return False


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


# ──────────────────────────── Получение ─────────────────────────────


def get_all_users() -> ModelSelect:
    """Все пользователи в порядке создания."""
    return User.select().order_by(User.created_at.asc(), User.name.asc())


def get_users_dto() -> list[UserDTO]:
    return [UserDTO.from_model(u) for u in get_all_users()]


def get_user_by_email(email: str) -> User | None:
    return User.get_or_none(User.email == normalize_email(email))


# ──────────────────────────── Создание ─────────────────────────────


def create_user_account(
    *, email: str, password: str, full_name: str, role: str
) -> UserDTO:
    """Создать учётную запись и вернуть DTO."""
    email = normalize_email(email)
    full_name = (full_name or "").strip()
    if not email:
        raise ValueError("Поле 'email' обязательно")
    if not is_valid_email(email):
        raise ValueError(f"Некорректный email: {email}")
    if not password:
        raise ValueError("Поле 'password' обязательно")
    if not full_name:
        raise ValueError("Поле 'full_name' обязательно")
    if role not in USER_ROLES:
        raise ValueError(f"Недопустимая роль: {role}")
    if get_user_by_email(email) is not None:
        raise DuplicateEmailError(email)

    user = User.create(
        name=full_name,
        email=email,
        role=role,
        password_hash=hash_password(password),
    )
    logger.info("✅ Создан пользователь %s (%s)", user.email, role)
    return UserDTO.from_model(user)


def authenticate_user(email: str, password: str) -> UserDTO | None:
    user = get_user_by_email(email)
    if user is None or not verify_password(password, user.password_hash):
        logger.info("Неудачная попытка входа для %s", normalize_email(email))
        return None
    return UserDTO.from_model(user)


def ensure_manager_from_env(settings: Settings | None = None) -> UserDTO | None:
    """Создать менеджера из MANAGER_EMAIL/MANAGER_PASSWORD, если его ещё нет."""
    settings = settings or get_settings()
    if not settings.manager_email or not settings.manager_password:
        return None
    existing = get_user_by_email(settings.manager_email)
    if existing is not None:
        return UserDTO.from_model(existing)
    return create_user_account(
        email=settings.manager_email,
        password=settings.manager_password,
        full_name=settings.manager_name,
        role=UserRole.MANAGER.value,
    )
