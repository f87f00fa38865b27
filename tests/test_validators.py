import datetime

import pytest

from services.projects.dto import format_deadline
from services.result import OperationResult
from services.validators import is_valid_email, normalize_number


@pytest.mark.parametrize(
    "raw, expected",
    [
        ("1 000", "1000"),
        ("1000,50", "1000.5"),
        ("10*500", "5000"),
        ("5000+1000", "6000"),
        ("10%", "0.1"),
        ("1500 ₽", "1500"),
        ("", ""),
        (None, None),
    ],
)
def test_normalize_number(raw, expected):
    assert normalize_number(raw) == expected


def test_normalize_number_returns_text_on_garbage():
    assert normalize_number("12**") == "12**"


@pytest.mark.parametrize(
    "email, ok",
    [("a@b.co", True), (" user@example.com ", True), ("a@b", False), ("", False), (None, False)],
)
def test_is_valid_email(email, ok):
    assert is_valid_email(email) is ok


@pytest.mark.parametrize(
    "value, expected",
    [
        (datetime.date(2030, 1, 2), "2030-01-02"),
        (datetime.datetime(2030, 1, 2, 23, 59), "2030-01-02"),
        ("2030-01-02T10:00:00Z", "2030-01-02"),
        ("2030-01-02", "2030-01-02"),
        ("", ""),
        (None, ""),
    ],
)
def test_format_deadline(value, expected):
    assert format_deadline(value) == expected


def test_operation_result_truthiness():
    assert OperationResult.success("done")
    assert not OperationResult.failure("nope")
    assert OperationResult.success(value=5).value == 5
