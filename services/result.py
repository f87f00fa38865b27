"""Результат операции для передачи из логики в слой представления."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class OperationResult:
    ok: bool
    message: str = ""
    value: Any = None

    @classmethod
    def success(cls, message: str = "", value: Any = None) -> "OperationResult":
        return cls(True, message, value)

    @classmethod
    def failure(cls, message: str) -> "OperationResult":
        return cls(False, message)

    def __bool__(self) -> bool:
        return self.ok


__all__ = ["OperationResult"]
