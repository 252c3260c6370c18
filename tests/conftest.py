"""Shared fixtures for the validator tests."""

import re
import pytest

from declarative_validator import ValidationFailed, create_registry, validate
from declarative_validator.config_manager import set_config_manager
from declarative_validator.registry import set_default_registry
from declarative_validator.rules import BUNDLED_RULE_SETS


@pytest.fixture
def registry():
    """Isolated registry with every bundled rule set."""
    return create_registry(list(BUNDLED_RULE_SETS))


@pytest.fixture
def bare_registry():
    """Isolated registry with the built-in rules only."""
    return create_registry()


@pytest.fixture(autouse=True)
def reset_globals():
    """Let each test build the default registry and configuration from scratch."""
    yield
    set_default_registry(None)
    set_config_manager(None)


def _type_name(type_spec):
    if isinstance(type_spec, dict):
        return next(iter(type_spec))
    if isinstance(type_spec, (list, tuple)):
        return type_spec[0]
    return type_spec


@pytest.fixture
def check_type_validation(registry):
    """
    Check a type against good and bad values.

    - ``optional`` plus the type accepts None
    - good values are returned unchanged
    - every bad value gets its own ``<param>: ... does not satisfy <TYPE>`` line
    """
    def check(type_spec, good, bad):
        type_name = _type_name(type_spec)

        result = validate([None], [f"param_{type_name}_0", ["optional", type_spec]], registry=registry)
        assert result == [None]

        names = [f"param_{type_name}_{index:02d}" for index in range(1, len(good) + 1)]
        definitions = [item for name in names for item in (name, type_spec)]
        assert validate(list(good), definitions, registry=registry) == list(good)

        names = [f"param_{type_name}_{index:02d}" for index in range(1, len(bad) + 1)]
        definitions = [item for name in names for item in (name, type_spec)]
        with pytest.raises(ValidationFailed) as exc_info:
            validate(list(bad), definitions, registry=registry)

        error_text = str(exc_info.value)
        assert len(error_text.splitlines()) == len(bad)
        for name in names:
            pattern = rf"^{name}: .* does not satisfy {type_name.upper()}"
            assert re.search(pattern, error_text, re.MULTILINE), f"no message about {name}"

    return check
