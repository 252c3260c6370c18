"""Helpers shared by the bundled rule sets."""
from __future__ import annotations
from decimal import Decimal, InvalidOperation
from typing import Any, Callable, Optional, Union
import re

from ..errors import RuleViolation, StructuralError

Number = Union[int, float, Decimal]

_NUMBER_RE = re.compile(r"^[+-]?(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?$")
_INTEGER_RE = re.compile(r"^[+-]?\d+$")


def fail(rule_name: str) -> RuleViolation:
    """Standard type failure, e.g. ``does not satisfy POSITIVE``."""
    return RuleViolation(f"does not satisfy {rule_name.upper()}")


def as_number(value: Any) -> Optional[Number]:
    """Numeric value of ``value``, accepting numeric strings; None if not a number."""
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float, Decimal)):
        return value
    if isinstance(value, str) and _NUMBER_RE.fullmatch(value):
        try:
            return Decimal(value)
        except InvalidOperation:
            return None
    return None


def as_integer(value: Any) -> Optional[int]:
    """Integer value of ``value``, accepting integer strings; None otherwise."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER_RE.fullmatch(value):
        return int(value)
    return None


def type_rule(name: str, predicate: Callable[[Any], bool]) -> Callable[[Any, Any], None]:
    """Build a type callback from a predicate on the value."""
    def check(value: Any, argument: Any = None) -> None:
        if not predicate(value):
            raise fail(name)

    check.__name__ = f"check_{name}"
    check.__doc__ = f"Type rule {name!r}."
    return check


def require_argument(rule_name: str, argument: Any) -> Any:
    if argument is None:
        raise StructuralError(f"rule {rule_name} requires a parameter")
    return argument
