"""Bundled rule sets.

Each rule set is a module exposing ``register(registry)``.
"""
from typing import Callable, Dict, Iterable

from ..errors import RegistrationError
from . import converters, parametrized_types, simple_types

BUNDLED_RULE_SETS: Dict[str, Callable] = {
    "simple_types": simple_types.register,
    "parametrized_types": parametrized_types.register,
    "converters": converters.register,
}


def load_rule_sets(registry, names: Iterable[str]) -> None:
    """Register the named bundled rule sets into ``registry``."""
    names = list(names)
    unknown = [name for name in names if name not in BUNDLED_RULE_SETS]
    if unknown:
        raise RegistrationError(f"Unknown rule set(s): {', '.join(unknown)}")
    for name in names:
        BUNDLED_RULE_SETS[name](registry)
