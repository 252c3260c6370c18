"""Per-parameter rule execution: constraints, converters, types.

Each step works on the mappings of a NormalizedRules instance and removes the
built-in entries it resolves. Rule callbacks signal failure by raising
``ValueError`` (usually ``RuleViolation``); misuse of the built-ins raises
``StructuralError``.
"""
from __future__ import annotations
from typing import Any, Dict, Optional

from .errors import RuleViolation, StructuralError
from .registry import RuleRegistry


def _callback(registry: RuleRegistry, name: str):
    return registry.lookup(name).callback


def check_constraints(value: Any, constraints: Dict[str, Any], registry: RuleRegistry) -> bool:
    """
    Resolve required/optional status and run custom constraints.

    Constraints run in declaration order. An optional parameter is not
    checked any further.

    Returns:
        True if the parameter is optional
    """
    is_required = "required" in constraints
    is_optional = "optional" in constraints

    if is_required and is_optional:
        raise StructuralError("both required and optional are specified")

    if is_optional:
        del constraints["optional"]
        return True

    constraints.pop("required", None)

    if value is None:
        raise RuleViolation("parameter is required")

    for name, argument in constraints.items():
        _callback(registry, name)(value, argument)

    return False


def run_converters(
    value: Any,
    converters: Dict[str, Any],
    is_optional: bool,
    registry: RuleRegistry,
) -> Any:
    """
    Apply ``default`` and then at most one custom converter.

    Returns:
        Converted value
    """
    if "default" in converters:
        if not is_optional:
            raise StructuralError('"default" specified without "optional"')
        default = converters.pop("default")
        if value is None:
            value = default

    if len(converters) > 1:
        raise StructuralError('there is more than one converter, except "default"')

    for name, argument in converters.items():
        value = _callback(registry, name)(value, argument)

    return value


def check_types(value: Any, types: Dict[str, Any], registry: RuleRegistry) -> None:
    """
    Check ``value`` against declared types; any single match is enough.

    Types are tried in declaration order. ``any`` and ``string`` accept
    everything.

    Raises:
        ValueError: The only declared type's own error, or
            "does not satisfy any type" when several were declared
    """
    if not types or "any" in types or "string" in types:
        return

    saved_error: Optional[ValueError] = None
    for name, argument in types.items():
        try:
            _callback(registry, name)(value, argument)
        except ValueError as e:
            saved_error = e
        else:
            return

    if len(types) == 1:
        raise saved_error
    raise RuleViolation("does not satisfy any type")
