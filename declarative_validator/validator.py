"""Validation of ordered parameter lists against declarative rules.

    age, email, limit = validate(
        [age, email, limit],
        [
            "age", ["required", "positive"],
            "email", "email",
            "limit", ["optional", {"default": 10}, "int"],
        ],
    )

Every parameter is checked; failures are collected and raised together as
``ValidationFailed``, one line per failing parameter. A malformed rule
definition fails only its own parameter. A malformed call (values and
definitions that do not line up) raises ``StructuralError`` immediately.
"""
from __future__ import annotations
from typing import Any, List, Optional, Sequence, Tuple

from .config_manager import MessagesConfig, get_config_manager
from .errors import ErrorType, ParameterError, StructuralError, ValidationFailed
from .logging_config import get_logger, log_with_context
from .normalizer import normalize_rules
from .pipeline import check_constraints, check_types, run_converters
from .registry import RuleRegistry, get_default_registry

logger = get_logger(__name__)


def stringify_value(value: Any, messages: Optional[MessagesConfig] = None) -> str:
    """Render a raw value for error messages."""
    if messages is None:
        messages = get_config_manager().config.messages

    if value is None:
        return messages.undefined_placeholder
    text = value if isinstance(value, str) else str(value)
    if text == "":
        return messages.empty_placeholder
    return "".join(
        char if char.isprintable() else messages.nonprintable_replacement
        for char in text
    )


def _check_call_shape(values: Any, definitions: Any, extra: tuple) -> None:
    if not isinstance(values, (list, tuple)):
        raise StructuralError('invalid "params"')

    if not isinstance(definitions, (list, tuple)):
        raise StructuralError("invalid rules definitions")

    if len(values) * 2 != len(definitions):
        raise StructuralError("count of params does not match count of rules definitions")

    if extra:
        raise StructuralError("extra parameters")


def _requests(values: Sequence[Any], definitions: Sequence[Any]) -> List[Tuple[Any, Any, Any]]:
    return [
        (definitions[2 * index], value, definitions[2 * index + 1])
        for index, value in enumerate(values)
    ]


def _validate_parameter(value: Any, rules: Any, registry: RuleRegistry) -> Any:
    normalized = normalize_rules(rules, registry)
    is_optional = check_constraints(value, normalized.constraints, registry)
    value = run_converters(value, normalized.converters, is_optional, registry)
    if value is not None and not is_optional:
        check_types(value, normalized.types, registry)
    return value


class Validator:
    """Validates parameter lists against one registry."""

    def __init__(
        self,
        registry: Optional[RuleRegistry] = None,
        messages: Optional[MessagesConfig] = None,
    ):
        self._registry = registry
        self._messages = messages

    @property
    def registry(self) -> RuleRegistry:
        if self._registry is None:
            return get_default_registry()
        return self._registry

    @property
    def messages(self) -> MessagesConfig:
        if self._messages is None:
            return get_config_manager().config.messages
        return self._messages

    def validate(self, values: Sequence[Any], definitions: Sequence[Any], *extra: Any) -> List[Any]:
        """
        Validate ``values`` against ``definitions``.

        Args:
            values: Parameter values, in order
            definitions: Alternating parameter names and rule definitions,
                twice as long as ``values``

        Returns:
            Validated (and possibly converted) values, in input order

        Raises:
            StructuralError: Malformed call
            ValidationFailed: One or more parameters failed their rules or
                have malformed rule definitions
        """
        _check_call_shape(values, definitions, extra)

        registry = self.registry
        errors: List[ParameterError] = []
        output: List[Any] = []

        for name, value, rules in _requests(values, definitions):
            try:
                output.append(_validate_parameter(value, rules, registry))
            except StructuralError as e:
                logger.warning(f"Invalid rule definition for '{name}': {e.message}")
                errors.append(ParameterError(
                    str(name), stringify_value(value, self.messages), e.message,
                    kind=ErrorType.STRUCTURAL,
                ))
                output.append(None)
            except ValueError as e:
                errors.append(ParameterError(str(name), stringify_value(value, self.messages), str(e)))
                output.append(None)

        if errors:
            log_with_context(
                logger, "debug", "Parameter validation failed",
                failed_parameters=[error.parameter_name for error in errors],
                total_parameters=len(output),
            )
            raise ValidationFailed(errors, output)

        return output


def validate(
    values: Sequence[Any],
    definitions: Sequence[Any],
    *extra: Any,
    registry: Optional[RuleRegistry] = None,
) -> List[Any]:
    """
    Validate ``values`` against ``definitions`` using ``registry``
    (the default registry when not given).

    See ``Validator.validate``.
    """
    return Validator(registry).validate(values, definitions, *extra)
