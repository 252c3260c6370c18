"""Simple (argument-less) types.

Numeric types accept numbers and numeric strings (``"1.00"``); ``bool`` values
are never numbers. Failures read ``does not satisfy <TYPE>``.
"""
from __future__ import annotations
from datetime import datetime
from typing import Any
import re

from .base import as_integer, as_number, type_rule

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_YMD_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_MDY_RE = re.compile(r"^\d{1,2}/\d{1,2}/\d{4}$")
_TIME_RE = re.compile(r"^(\d{1,2}):(\d{2}):(\d{2})$")
_HHMM_RE = re.compile(r"^(\d{1,2}):(\d{2})$")

BOOL_WORDS = {"0", "1", "true", "false", "yes", "no", "y", "n", "on", "off"}


def is_bool(value: Any) -> bool:
    if isinstance(value, bool):
        return True
    if isinstance(value, int):
        return value in (0, 1)
    return isinstance(value, str) and value.lower() in BOOL_WORDS


def is_float(value: Any) -> bool:
    return as_number(value) is not None


def is_integer(value: Any) -> bool:
    return as_integer(value) is not None


def is_positive(value: Any) -> bool:
    number = as_number(value)
    return number is not None and number > 0


def is_negative(value: Any) -> bool:
    number = as_number(value)
    return number is not None and number < 0


def _integer_between(value: Any, low: int, high: int) -> bool:
    number = as_integer(value)
    return number is not None and low <= number <= high


def is_id(value: Any) -> bool:
    number = as_integer(value)
    return number is not None and number > 0


def is_email(value: Any) -> bool:
    return isinstance(value, str) and bool(_EMAIL_RE.fullmatch(value))


def _is_date(value: Any, pattern: re.Pattern, date_format: str) -> bool:
    if not isinstance(value, str) or not pattern.fullmatch(value):
        return False
    try:
        datetime.strptime(value, date_format)
    except ValueError:
        return False
    return True


def is_ymd(value: Any) -> bool:
    return _is_date(value, _YMD_RE, "%Y-%m-%d")


def is_mdy(value: Any) -> bool:
    return _is_date(value, _MDY_RE, "%m/%d/%Y")


def is_time(value: Any) -> bool:
    match = isinstance(value, str) and _TIME_RE.fullmatch(value)
    if not match:
        return False
    hours, minutes, seconds = (int(part) for part in match.groups())
    return hours < 24 and minutes < 60 and seconds < 60


def is_hhmm(value: Any) -> bool:
    match = isinstance(value, str) and _HHMM_RE.fullmatch(value)
    if not match:
        return False
    hours, minutes = (int(part) for part in match.groups())
    return hours < 24 and minutes < 60


def is_timestamp(value: Any) -> bool:
    number = as_number(value)
    return number is not None and number >= 0


def is_msec(value: Any) -> bool:
    number = as_integer(value)
    return number is not None and number >= 0


SIMPLE_TYPES = {
    "bool": is_bool,
    "float": is_float,
    "int": is_integer,
    "integer": is_integer,
    "positive": is_positive,
    "negative": is_negative,
    "id": is_id,
    "email": is_email,
    "year": lambda value: _integer_between(value, 1970, 3000),
    "week": lambda value: _integer_between(value, 1, 53),
    "month": lambda value: _integer_between(value, 1, 12),
    "day": lambda value: _integer_between(value, 1, 31),
    "ymd": is_ymd,
    "mdy": is_mdy,
    "time": is_time,
    "hhmm": is_hhmm,
    "timestamp": is_timestamp,
    "msec": is_msec,
}


def register(registry) -> None:
    registry.register_type({name: type_rule(name, predicate) for name, predicate in SIMPLE_TYPES.items()})
