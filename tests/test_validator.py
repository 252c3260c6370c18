"""
Tests for validating whole parameter lists.
"""

import re
import pytest

from declarative_validator import (
    ErrorType,
    RuleViolation,
    StructuralError,
    ValidationFailed,
    Validator,
    validate,
)
from declarative_validator.config_manager import MessagesConfig
from declarative_validator.validator import stringify_value


def even(value, argument=None):
    if int(value) % 2:
        raise RuleViolation("is not even")


class TestCallShape:
    """Test structural checks on the call itself."""

    def test_values_not_a_list(self, registry):
        with pytest.raises(StructuralError, match='invalid "params"'):
            validate("abc", ["p", "any"], registry=registry)

    def test_definitions_not_a_list(self, registry):
        with pytest.raises(StructuralError, match="invalid rules definitions"):
            validate([1], {"p": "any"}, registry=registry)

    def test_count_mismatch(self, registry):
        with pytest.raises(StructuralError, match="count of params does not match"):
            validate([1, 2], ["p", "any"], registry=registry)

    def test_extra_parameters(self, registry):
        with pytest.raises(StructuralError, match="extra parameters"):
            validate([1], ["p", "any"], "surplus", registry=registry)

    def test_tuples_accepted(self, registry):
        assert validate((1, 2), ("a", "int", "b", "int"), registry=registry) == [1, 2]

    def test_empty(self, registry):
        assert validate([], [], registry=registry) == []


class TestSuccessfulValidation:
    """Test the values returned on success."""

    def test_same_length_and_order(self, registry):
        values = [1, "x", 2.5]
        definitions = ["a", "int", "b", "string", "c", "float"]
        assert validate(values, definitions, registry=registry) == values

    def test_input_not_modified(self, registry):
        values = [None]
        definitions = ["p", ["optional", {"default": 3}]]
        assert validate(values, definitions, registry=registry) == [3]
        assert values == [None]
        assert definitions == ["p", ["optional", {"default": 3}]]

    def test_optional_missing_value(self, registry):
        assert validate([None], ["p", ["optional", "positive"]], registry=registry) == [None]

    def test_optional_value_is_not_type_checked(self, registry):
        assert validate([-5], ["p", ["optional", "positive"]], registry=registry) == [-5]

    def test_default_value(self, registry):
        assert validate([None], ["p", ["optional", {"default": 10}, "int"]], registry=registry) == [10]

    def test_converter_doubles_value(self, registry):
        registry.register_converter("double", lambda value, argument: value * 2)
        assert validate([5], ["p", "double"], registry=registry) == [10]

    def test_converted_value_is_type_checked(self, registry):
        assert validate([" 12 "], ["p", ["to_int", "positive"]], registry=registry) == [12]

    def test_type_or_semantics(self, registry):
        assert validate([-3], ["p", ["positive", "negative"]], registry=registry) == [-3]

    def test_positive_scenario(self, registry):
        values = [1, 10, "1.00"]
        definitions = ["a", "positive", "b", "positive", "c", "positive"]
        assert validate(values, definitions, registry=registry) == values

    def test_default_registry_used(self):
        assert validate([5], ["p", ["required", "positive"]]) == [5]


class TestFailedValidation:
    """Test aggregated per-parameter errors."""

    def test_required_missing(self, registry):
        with pytest.raises(ValidationFailed) as exc_info:
            validate([None], ["p", "required"], registry=registry)
        assert str(exc_info.value) == "p: <None> parameter is required"
        assert exc_info.value.parameter_names == ["p"]

    def test_required_is_default(self, registry):
        with pytest.raises(ValidationFailed, match="parameter is required"):
            validate([None], ["p", "positive"], registry=registry)

    def test_positive_scenario(self, registry):
        definitions = [
            "param_positive_01", ["required", "positive"],
            "param_positive_02", ["required", "positive"],
            "param_positive_03", ["required", "positive"],
        ]
        with pytest.raises(ValidationFailed) as exc_info:
            validate([0, -1, ""], definitions, registry=registry)

        lines = str(exc_info.value).splitlines()
        assert lines == [
            "param_positive_01: 0 does not satisfy POSITIVE",
            "param_positive_02: -1 does not satisfy POSITIVE",
            "param_positive_03: empty string does not satisfy POSITIVE",
        ]

    def test_every_failure_reported(self, registry):
        values = [1, -1, None, 3, "abc"]
        definitions = [
            "ok", "int",
            "neg", "positive",
            "missing", "int",
            "fine", ["optional", "int"],
            "word", "int",
        ]
        with pytest.raises(ValidationFailed) as exc_info:
            validate(values, definitions, registry=registry)

        error = exc_info.value
        assert error.parameter_names == ["neg", "missing", "word"]
        assert len(str(error).splitlines()) == 3
        for line in str(error).splitlines():
            assert re.match(r"^\w+: .+ .+$", line)

    def test_partial_values_on_error(self, registry):
        with pytest.raises(ValidationFailed) as exc_info:
            validate([1, -1, "7"], ["a", "int", "b", "positive", "c", "to_int"], registry=registry)
        assert exc_info.value.values == [1, None, 7]

    def test_constraint_message(self, registry):
        registry.register_constraint("even", even)
        with pytest.raises(ValidationFailed) as exc_info:
            validate([3], ["p", ["required", "even"]], registry=registry)
        assert str(exc_info.value) == "p: 3 is not even"
        assert validate([4], ["p", ["required", "even"]], registry=registry) == [4]

    def test_single_type_message(self, registry):
        with pytest.raises(ValidationFailed, match="^p: x does not satisfy INT$"):
            validate(["x"], ["p", "int"], registry=registry)

    def test_several_types_message(self, registry):
        with pytest.raises(ValidationFailed, match="^p: 0 does not satisfy any type$"):
            validate([0], ["p", ["positive", "negative"]], registry=registry)

    def test_original_value_reported_after_conversion(self, registry):
        with pytest.raises(ValidationFailed, match="^p: -4 does not satisfy POSITIVE$"):
            validate(["-4"], ["p", ["to_int", "positive"]], registry=registry)

    def test_converter_failure(self, registry):
        with pytest.raises(ValidationFailed, match="^p: abc cannot be converted to INT$"):
            validate(["abc"], ["p", "to_int"], registry=registry)

    def test_non_printable_characters(self, registry):
        with pytest.raises(ValidationFailed) as exc_info:
            validate(["a\nb\tc"], ["p", "int"], registry=registry)
        assert str(exc_info.value) == "p: a.b.c does not satisfy INT"



class TestStructuralFailures:
    """Test that a malformed rule definition fails only its own parameter."""

    def test_required_and_optional(self, registry):
        for value, shown in ((None, "<None>"), (1, "1")):
            with pytest.raises(ValidationFailed) as exc_info:
                validate([value], ["p", ["required", "optional"]], registry=registry)
            (error,) = exc_info.value.errors
            assert str(error) == f"p: {shown} both required and optional are specified"
            assert error.kind == ErrorType.STRUCTURAL
            assert error.is_structural

    def test_default_without_optional(self, registry):
        with pytest.raises(ValidationFailed, match='p: 1 "default" specified without "optional"'):
            validate([1], ["p", {"default": 1}], registry=registry)

    def test_unregistered_rule(self, registry):
        with pytest.raises(ValidationFailed, match="^p: 1 rule nonexistent is not registered$"):
            validate([1], ["p", "nonexistent"], registry=registry)

    def test_structural_and_validation_errors_aggregated(self, registry):
        with pytest.raises(ValidationFailed) as exc_info:
            validate([1, None], ["a", "nonexistent", "b", "int"], registry=registry)

        failure = exc_info.value
        assert str(failure).splitlines() == [
            "a: 1 rule nonexistent is not registered",
            "b: <None> parameter is required",
        ]
        assert [error.kind for error in failure.errors] == [ErrorType.STRUCTURAL, ErrorType.VALIDATION]
        assert failure.values == [None, None]

    def test_other_parameters_still_converted(self, registry):
        with pytest.raises(ValidationFailed) as exc_info:
            validate(
                [-1, " X ", "7"],
                ["a", "positive", "b", ["trim", "lowercase"], "c", "to_int"],
                registry=registry,
            )

        failure = exc_info.value
        assert failure.parameter_names == ["a", "b"]
        assert failure.errors[0].kind == ErrorType.VALIDATION
        assert failure.errors[1].kind == ErrorType.STRUCTURAL
        assert "more than one converter" in failure.errors[1].message
        assert failure.values == [None, None, 7]

    def test_missing_rule_argument(self, registry):
        with pytest.raises(ValidationFailed, match="p: 1 rule min requires a parameter"):
            validate([1], ["p", "min"], registry=registry)

    def test_call_shape_still_raises(self, registry):
        with pytest.raises(StructuralError, match="count of params"):
            validate([1, 2], ["a", "nonexistent"], registry=registry)

    def test_custom_rule_structural_error(self, registry):
        def needs_argument(value, argument=None):
            if argument is None:
                raise StructuralError("rule needs_argument requires a parameter")

        registry.register_type({"needs_argument": needs_argument})
        with pytest.raises(ValidationFailed) as exc_info:
            validate([1], ["p", "needs_argument"], registry=registry)
        assert exc_info.value.errors[0].is_structural

    def test_other_callback_exceptions_propagate(self, registry):
        def broken(value, argument=None):
            raise TypeError("plugin bug")

        registry.register_type({"broken": broken})
        with pytest.raises(TypeError, match="plugin bug"):
            validate([1], ["p", "broken"], registry=registry)

class TestStringifyValue:
    """Test rendering of values in messages."""

    def test_placeholders(self):
        messages = MessagesConfig()
        assert stringify_value(None, messages) == "<None>"
        assert stringify_value("", messages) == "empty string"
        assert stringify_value(12, messages) == "12"
        assert stringify_value("\x00x\x7f", messages) == ".x."

    def test_custom_placeholders(self, registry):
        messages = MessagesConfig(undefined_placeholder="<undef>", nonprintable_replacement="?")
        validator = Validator(registry, messages)
        with pytest.raises(ValidationFailed, match="^p: <undef> parameter is required$"):
            validator.validate([None], ["p", "int"])
        assert stringify_value("a\nb", messages) == "a?b"

    def test_placeholders_from_environment(self, monkeypatch):
        monkeypatch.setenv("DECLARATIVE_VALIDATOR_EMPTY_PLACEHOLDER", "<empty>")
        assert stringify_value("") == "<empty>"
