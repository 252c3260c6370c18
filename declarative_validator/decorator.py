"""Decorator validating function arguments against declarative rules."""
from __future__ import annotations
from functools import wraps
from typing import Any, Callable, Optional
import inspect

from .errors import StructuralError
from .registry import RuleRegistry
from .validator import Validator


def validate_call(*definitions: Any, registry: Optional[RuleRegistry] = None) -> Callable:
    """
    Validate the named arguments of every call before running the function.

    The function receives the validated (possibly converted) values.

        @validate_call("week", ["required", "week"], "limit", ["optional", {"default": 10}])
        def schedule(week, limit=None):
            ...

    Args:
        *definitions: Alternating parameter names and rule definitions
        registry: Registry to validate against (default registry if None)

    Raises:
        StructuralError: At decoration time, if a name is not a parameter of
            the function or the definitions are not name/rule pairs
    """
    if len(definitions) % 2:
        raise StructuralError("rules definitions should be name/rule pairs")

    names = list(definitions[::2])
    validator = Validator(registry)

    def decorator(func: Callable) -> Callable:
        signature = inspect.signature(func)
        unknown = [name for name in names if name not in signature.parameters]
        if unknown:
            raise StructuralError(
                f"{func.__name__}() has no parameter(s): {', '.join(map(str, unknown))}"
            )

        @wraps(func)
        def wrapper(*args, **kwargs):
            bound = signature.bind(*args, **kwargs)
            values = [bound.arguments.get(name) for name in names]
            validated = validator.validate(values, list(definitions))
            for name, value in zip(names, validated):
                # keep the function's own default for omitted arguments
                if value is None and name not in bound.arguments:
                    continue
                bound.arguments[name] = value
            return func(*bound.args, **bound.kwargs)

        wrapper.__validation_rules__ = list(definitions)
        return wrapper
    return decorator
