from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar, Union

from database.models import User, UserRole


@dataclass
class UserDTO:
    id: str
    name: str
    email: str
    role: str
    created_at: datetime | None = None

    @classmethod
    def from_model(cls, user: User) -> "UserDTO":
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            created_at=user.created_at,
        )

    @property
    def is_manager(self) -> bool:
        return self.role == UserRole.MANAGER.value


@dataclass(frozen=True)
class EmployeeAccount:
    """Заявка на создание учётной записи сотрудника."""

    role: ClassVar[str] = UserRole.EMPLOYEE.value
    label: ClassVar[str] = "Employee"

    email: str
    password: str
    full_name: str

    def to_payload(self) -> dict:
        return {
            "email": self.email.strip(),
            "password": self.password,
            "full_name": self.full_name.strip(),
            "role": self.role,
        }


@dataclass(frozen=True)
class ClientAccount:
    """Заявка на создание учётной записи клиента."""

    role: ClassVar[str] = UserRole.CLIENT.value
    label: ClassVar[str] = "Client"

    email: str
    password: str
    full_name: str

    def to_payload(self) -> dict:
        return {
            "email": self.email.strip(),
            "password": self.password,
            "full_name": self.full_name.strip(),
            "role": self.role,
        }


NewAccount = Union[EmployeeAccount, ClientAccount]

ACCOUNT_TYPES: dict[str, type] = {
    EmployeeAccount.role: EmployeeAccount,
    ClientAccount.role: ClientAccount,
}


def account_for_role(role: str, *, email: str, password: str, full_name: str) -> NewAccount:
    """Собрать заявку нужного типа по роли ``employee`` или ``client``."""
    try:
        account_cls = ACCOUNT_TYPES[role]
    except KeyError:
        raise ValueError(f"Unsupported account role: {role!r}") from None
    return account_cls(email=email, password=password, full_name=full_name)
