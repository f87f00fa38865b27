from .dto import (
    ClientAccount,
    EmployeeAccount,
    NewAccount,
    UserDTO,
    account_for_role,
)

__all__ = [
    "ClientAccount",
    "EmployeeAccount",
    "NewAccount",
    "UserDTO",
    "account_for_role",
]
