"""Types taking one argument, e.g. ``("min", 1)`` or ``{"one_of": ["add", "drop"]}``.

Using one of these without an argument is a structural error.
"""
from __future__ import annotations
from typing import Any
import re

from ..errors import StructuralError
from .base import as_number, fail, require_argument


def _bound(rule_name: str, argument: Any):
    bound = as_number(require_argument(rule_name, argument))
    if bound is None:
        raise StructuralError(f"rule {rule_name} requires a numeric parameter")
    return bound


def check_min(value: Any, argument: Any = None) -> None:
    bound = _bound("min", argument)
    number = as_number(value)
    if number is None or number < bound:
        raise fail("min")


def check_max(value: Any, argument: Any = None) -> None:
    bound = _bound("max", argument)
    number = as_number(value)
    if number is None or number > bound:
        raise fail("max")


def check_one_of(value: Any, argument: Any = None) -> None:
    choices = require_argument("one_of", argument)
    if not isinstance(choices, (list, tuple, set, frozenset)):
        raise StructuralError("rule one_of requires a list of choices")
    try:
        found = value in choices
    except TypeError:
        # unhashable value against a set
        found = False
    if not found:
        raise fail("one_of")


def check_regexp(value: Any, argument: Any = None) -> None:
    pattern = require_argument("regexp", argument)
    try:
        pattern = re.compile(pattern)
    except (re.error, TypeError) as e:
        raise StructuralError(f"rule regexp has an invalid pattern: {e}")
    if isinstance(value, bool) or not isinstance(value, (str, int, float)):
        raise fail("regexp")
    if not pattern.search(str(value)):
        raise fail("regexp")


def check_instance_of(value: Any, argument: Any = None) -> None:
    classes = require_argument("instance_of", argument)
    try:
        matches = isinstance(value, classes)
    except TypeError:
        raise StructuralError("rule instance_of requires a class or a tuple of classes")
    if not matches:
        raise fail("instance_of")


def check_length(value: Any, argument: Any = None) -> None:
    """``length`` takes an exact length or a ``[min, max]`` pair; max may be None."""
    spec = require_argument("length", argument)
    if isinstance(spec, int) and not isinstance(spec, bool):
        low = high = spec
    elif isinstance(spec, (list, tuple)) and len(spec) == 2:
        low, high = spec
    else:
        raise StructuralError("rule length requires a length or a [min, max] pair")
    for bound in (low, high):
        if bound is not None and (isinstance(bound, bool) or not isinstance(bound, int)):
            raise StructuralError("rule length bounds must be integers or None")

    try:
        size = len(value)
    except TypeError:
        raise fail("length")
    if (low is not None and size < low) or (high is not None and size > high):
        raise fail("length")


PARAMETRIZED_TYPES = {
    "min": check_min,
    "max": check_max,
    "one_of": check_one_of,
    "regexp": check_regexp,
    "instance_of": check_instance_of,
    "length": check_length,
}


def register(registry) -> None:
    registry.register_type(PARAMETRIZED_TYPES)
