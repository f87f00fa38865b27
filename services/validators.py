"""Валидаторы и нормализаторы входных данных."""

import ast
import operator as op
import re

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def is_valid_email(email: str) -> bool:
    """Простейшая проверка формата адреса ``user@host.tld``."""
    return bool(_EMAIL_RE.match((email or "").strip()))


def normalize_number(value: str | int | float | None) -> str | None:
    """Нормализует строку с числом и поддерживает простые выражения.

    Удаляет пробелы и буквы, заменяет запятую на точку. Можно вводить
    простые выражения вроде ``10*500`` или ``5000+1000``; процент ``10%``
    интерпретируется как ``10/100``.
    """

    if value is None:
        return None

    text = str(value)
    text = re.sub(r"\s+", "", text)
    text = text.replace(" ", "")
    text = text.replace(",", ".")
    text = re.sub(r"[a-zA-Zа-яА-Я$€₽]+", "", text)
    text = text.rstrip(".")

    if text == "":
        return text

    expr = re.sub(r"(\d+(?:\.\d+)?)%", r"(\1/100)", text)

    allowed = {
        ast.Add: op.add,
        ast.Sub: op.sub,
        ast.Mult: op.mul,
        ast.Div: op.truediv,
    }

    def _eval(n):
        if isinstance(n, ast.Constant) and isinstance(n.value, (int, float)):
            return n.value
        if isinstance(n, ast.UnaryOp) and isinstance(n.op, ast.USub):
            return -_eval(n.operand)
        if isinstance(n, ast.BinOp) and type(n.op) in allowed:
            return allowed[type(n.op)](_eval(n.left), _eval(n.right))
        raise ValueError("Недопустимое выражение")

    try:
        result = _eval(ast.parse(expr, mode="eval").body)
    except (SyntaxError, ValueError, ZeroDivisionError):
        return text
    if isinstance(result, float) and result.is_integer():
        result = int(result)
    return str(result)
