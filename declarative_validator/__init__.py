"""
Declarative Validator Package

Validates ordered parameter lists against declarative, pluggable rules
(constraints, converters, types) and reports every failing parameter at once.
"""

from .errors import (
    DeclarativeValidatorError,
    ErrorType,
    ParameterError,
    RegistrationError,
    RuleViolation,
    StructuralError,
    ValidationFailed,
    create_error_response,
    create_success_response,
    handle_validation_errors,
)
from .registry import (
    RuleKind,
    RuleRegistry,
    create_registry,
    get_default_registry,
    register_constraint,
    register_converter,
    register_type,
)
from .validator import Validator, validate
from .decorator import validate_call

__version__ = "0.3.0"
__all__ = [
    "validate",
    "validate_call",
    "Validator",
    "register_constraint",
    "register_converter",
    "register_type",
    "RuleKind",
    "RuleRegistry",
    "create_registry",
    "get_default_registry",
    "DeclarativeValidatorError",
    "ErrorType",
    "ParameterError",
    "RegistrationError",
    "RuleViolation",
    "StructuralError",
    "ValidationFailed",
    "create_error_response",
    "create_success_response",
    "handle_validation_errors",
]
