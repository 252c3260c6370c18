"""Bundled converters. ``None`` passes through every converter unchanged."""
from __future__ import annotations
from datetime import date, datetime, timezone
from typing import Any

from ..errors import RuleViolation, StructuralError
from .base import as_number

TRUE_WORDS = {"1", "true", "t", "yes", "y", "on"}
FALSE_WORDS = {"0", "false", "f", "no", "n", "off", ""}

DATE_FORMATS = ("%m/%d/%Y", "%Y-%m-%d", "%Y-%m-%d %H:%M:%S", "%Y-%m-%dT%H:%M:%S")


def assume_true(value: Any, argument: Any = None) -> Any:
    """Everything is True unless it is an explicit false flag."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() not in FALSE_WORDS
    if isinstance(value, (int, float)):
        return value != 0
    return True


def assume_false(value: Any, argument: Any = None) -> Any:
    """Everything is False unless it is an explicit true flag."""
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, str):
        return value.strip().lower() in TRUE_WORDS
    if isinstance(value, (int, float)):
        return value != 0
    return False


def trim(value: Any, argument: Any = None) -> Any:
    """Strip surrounding whitespace, or the characters given as argument."""
    if argument is not None and not isinstance(argument, str):
        raise StructuralError("rule trim requires a string of characters to strip")
    if isinstance(value, str):
        return value.strip(argument)
    return value


def lowercase(value: Any, argument: Any = None) -> Any:
    if isinstance(value, str):
        return value.lower()
    return value


def to_int(value: Any, argument: Any = None) -> Any:
    """Convert to int; the argument is the base used for strings (default 10)."""
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuleViolation("cannot be converted to INT")
    try:
        if isinstance(value, str):
            return int(value.strip(), argument or 10)
        if isinstance(value, float) and not value.is_integer():
            raise ValueError(value)
        return int(value)
    except (TypeError, ValueError, OverflowError):
        raise RuleViolation("cannot be converted to INT")


def to_float(value: Any, argument: Any = None) -> Any:
    if value is None:
        return None
    if isinstance(value, bool):
        raise RuleViolation("cannot be converted to FLOAT")
    try:
        return float(value)
    except (TypeError, ValueError):
        raise RuleViolation("cannot be converted to FLOAT")


def _date_formats(argument: Any) -> tuple:
    if argument is None:
        return DATE_FORMATS
    if isinstance(argument, str):
        return (argument,)
    if isinstance(argument, (list, tuple)) and argument and all(isinstance(f, str) for f in argument):
        return tuple(argument)
    raise StructuralError("rule to_msec requires a date format or a list of formats")


def _datetime_msec(moment: datetime) -> int:
    if moment.tzinfo is None:
        moment = moment.replace(tzinfo=timezone.utc)
    return int(round(moment.timestamp() * 1000))


def to_msec(value: Any, argument: Any = None) -> Any:
    """
    Convert a date or a timestamp in seconds to epoch milliseconds.

    Strings are parsed with the format(s) given as argument, or with
    ``DATE_FORMATS``; naive dates are UTC. Anything else is returned
    unchanged and left to the declared types.
    """
    formats = _date_formats(argument)
    if value is None or isinstance(value, bool):
        return value
    if isinstance(value, datetime):
        return _datetime_msec(value)
    if isinstance(value, date):
        return _datetime_msec(datetime(value.year, value.month, value.day))

    number = as_number(value.strip() if isinstance(value, str) else value)
    if number is not None:
        try:
            return int(round(number * 1000))
        except (OverflowError, ValueError):
            # inf, nan
            return value

    if isinstance(value, str):
        for date_format in formats:
            try:
                return _datetime_msec(datetime.strptime(value.strip(), date_format))
            except ValueError:
                continue
    return value


CONVERTERS = {
    "assume_true": assume_true,
    "assume_false": assume_false,
    "trim": trim,
    "lowercase": lowercase,
    "to_int": to_int,
    "to_float": to_float,
    "to_msec": to_msec,
}


def register(registry) -> None:
    registry.register_converter(CONVERTERS)
