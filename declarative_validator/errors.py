"""
Error types and error handling utilities for the declarative validator.

Two tiers of failure are distinguished:

- Structural errors: the call itself is malformed (values and definitions
  do not line up). These abort the whole ``validate`` call.
- Parameter errors: a parameter does not satisfy its rules, or its rule
  definition is malformed (unknown rule, arity violation, conflicting
  ``required``/``optional``...). These are collected per parameter and raised
  together as ``ValidationFailed``; ``ParameterError.kind`` tells them apart.
"""

import logging
from functools import wraps
from typing import Any, Dict, List, Optional, Callable


logger = logging.getLogger(__name__)


class ErrorType:
    """Standard error type constants."""
    STRUCTURAL = "structural_error"
    REGISTRATION = "registration_error"
    VALIDATION = "validation_error"


class DeclarativeValidatorError(Exception):
    """Base class for all errors raised by the validator."""

    error_type = ErrorType.STRUCTURAL


class StructuralError(DeclarativeValidatorError):
    """Malformed call shape or rule definition."""

    error_type = ErrorType.STRUCTURAL

    def __init__(self, message: str, parameter_name: Optional[str] = None):
        self.message = message
        self.parameter_name = parameter_name
        if parameter_name is not None:
            message = f"{parameter_name}: {message}"
        super().__init__(message)


class RegistrationError(StructuralError):
    """Rule could not be registered (empty name, duplicate, bad callback)."""

    error_type = ErrorType.REGISTRATION


class RuleViolation(ValueError):
    """
    Raised by rule callbacks when a value does not satisfy the rule.

    Any ``ValueError`` raised by a callback is treated the same way; this
    subclass only exists so plugins can be explicit about it.
    """

    @property
    def message(self) -> str:
        return str(self)


class ParameterError:
    """
    A single failing parameter.

    ``kind`` is ``ErrorType.VALIDATION`` when the value broke a rule and
    ``ErrorType.STRUCTURAL`` when the parameter's rule definition is malformed.
    """

    def __init__(
        self,
        parameter_name: str,
        stringified_value: str,
        message: str,
        kind: str = ErrorType.VALIDATION,
    ):
        self.parameter_name = parameter_name
        self.stringified_value = stringified_value
        self.message = message
        self.kind = kind

    @property
    def is_structural(self) -> bool:
        return self.kind == ErrorType.STRUCTURAL

    def __str__(self) -> str:
        return f"{self.parameter_name}: {self.stringified_value} {self.message}"

    def __repr__(self) -> str:
        return (
            f"ParameterError(parameter_name={self.parameter_name!r}, "
            f"stringified_value={self.stringified_value!r}, message={self.message!r}, "
            f"kind={self.kind!r})"
        )

    def to_dict(self) -> Dict[str, str]:
        return {
            "parameter": self.parameter_name,
            "value": self.stringified_value,
            "message": self.message,
            "kind": self.kind,
        }


class ValidationFailed(DeclarativeValidatorError):
    """
    Aggregated failure of one or more parameters.

    Attributes:
        errors: ParameterError for every failing parameter, in input order
        values: Output sequence with ``None`` in place of failing parameters
    """

    error_type = ErrorType.VALIDATION

    def __init__(self, errors: List[ParameterError], values: Optional[List[Any]] = None):
        self.errors = list(errors)
        self.values = list(values) if values is not None else []
        super().__init__("\n".join(str(error) for error in self.errors))

    @property
    def parameter_names(self) -> List[str]:
        return [error.parameter_name for error in self.errors]


def create_error_response(
    error_message: str,
    error_type: str = ErrorType.VALIDATION,
    data: Optional[Dict[str, Any]] = None,
    success: bool = False
) -> Dict[str, Any]:
    """
    Create a standardized error response.

    Args:
        error_message: Human-readable error description
        error_type: Type of error (see ErrorType constants)
        data: Additional data to include in response

    Returns:
        Standardized error response dictionary
    """
    response = {
        "success": success,
        "error": error_message,
        "error_type": error_type
    }

    if data:
        response.update(data)

    if not success:
        logger.debug(f"Error ({error_type}): {error_message}")

    return response


def create_success_response(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    Create a standardized success response.

    Args:
        data: Data to include in response

    Returns:
        Standardized success response dictionary
    """
    response = {
        "success": True,
        "error": None,
        "error_type": None
    }
    response.update(data)
    return response


def handle_validation_errors(
    default_data: Optional[Dict[str, Any]] = None,
    operation_name: str = "operation"
) -> Callable:
    """
    Decorator converting validator exceptions into error responses.

    ``ValidationFailed`` responses carry the per-parameter breakdown under
    ``"parameters"``. Exceptions not raised by the validator propagate.

    Args:
        default_data: Default data structure to return on errors
        operation_name: Name of the operation for error messages

    Returns:
        Decorator function
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Dict[str, Any]:
            try:
                return func(*args, **kwargs)

            except ValidationFailed as e:
                data = dict(default_data or {})
                data["parameters"] = [error.to_dict() for error in e.errors]
                return create_error_response(
                    f"Invalid parameters for {operation_name}:\n{e}",
                    e.error_type,
                    data
                )

            except StructuralError as e:
                return create_error_response(
                    f"Invalid rule definitions for {operation_name}: {e}",
                    e.error_type,
                    default_data or {}
                )

        return wrapper
    return decorator
