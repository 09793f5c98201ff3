import re

from flask import request

from qr_library.errors import ValidationError

# db.Integer columns are 32-bit on SQL Server; SQLite overflows past 64-bit
INT_MIN = -(2 ** 31)
INT_MAX = 2 ** 31 - 1

EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def in_int_range(value) -> bool:
    return INT_MIN <= value <= INT_MAX


def is_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)


def as_int(value):
    """int or numeric string within the column range -> int; anything else -> None."""
    if isinstance(value, str) and re.fullmatch(r"-?\d+", value.strip()):
        value = int(value.strip())
    if not is_int(value) or not in_int_range(value):
        return None
    return value


def json_body() -> dict:
    """Request body as a JSON object; arrays, scalars and broken JSON are rejected."""
    data = request.get_json(silent=True)
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def optional_str(data: dict, key: str) -> str:
    value = data.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ValidationError(f"{key} must be a string")
    return value.strip()
