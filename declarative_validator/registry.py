"""Rule registry for the declarative validator.

Every rule name is registered once, under exactly one kind (constraint,
converter or type), and bound to a callback. Names are unique across kinds.

The engine handles the built-in rules inline; they are registered so that
rule definitions can refer to them like any other rule.
"""
from __future__ import annotations
from enum import Enum
from typing import Any, Callable, Dict, List, Mapping, Optional, Union
import threading
import logging

from .errors import RegistrationError, RuleViolation

logger = logging.getLogger(__name__)

RuleCallback = Callable[[Any, Any], Any]


class RuleKind(str, Enum):
    CONSTRAINT = "constraint"
    CONVERTER = "converter"
    TYPE = "type"


class RegisteredRule:
    """A registered rule name bound to its kind and callback."""

    __slots__ = ("name", "kind", "callback")

    def __init__(self, name: str, kind: RuleKind, callback: Optional[RuleCallback]):
        self.name = name
        self.kind = kind
        self.callback = callback

    def __repr__(self) -> str:
        return f"RegisteredRule(name={self.name!r}, kind={self.kind.value!r})"


def _not_empty(value: Any, _argument: Any = None) -> None:
    if value == "":
        raise RuleViolation("is empty")
    if isinstance(value, (list, tuple, dict, set, frozenset)) and not value:
        raise RuleViolation("is empty")


def _pass(value: Any, _argument: Any = None) -> None:
    return None


# required/optional/default are resolved by the pipeline itself and have no callback
BUILTIN_RULES: Dict[str, tuple] = {
    "required": (RuleKind.CONSTRAINT, None),
    "optional": (RuleKind.CONSTRAINT, None),
    "not_empty": (RuleKind.CONSTRAINT, _not_empty),
    "default": (RuleKind.CONVERTER, None),
    "any": (RuleKind.TYPE, _pass),
    "string": (RuleKind.TYPE, _pass),
}


class RuleRegistry:
    """
    Name -> rule table.

    Registration is serialized with a lock. Lookups take no lock; populate the
    registry before handing it to concurrent ``validate`` callers.
    """

    def __init__(self):
        self._lock = threading.RLock()
        self._rules: Dict[str, RegisteredRule] = {}
        for name, (kind, callback) in BUILTIN_RULES.items():
            self._rules[name] = RegisteredRule(name, kind, callback)

    def register(
        self,
        kind: Union[RuleKind, str],
        rules: Union[str, Mapping[str, RuleCallback]],
        callback: Optional[RuleCallback] = None,
    ) -> None:
        """
        Register one or more rules of the given kind.

        Args:
            kind: Rule kind (constraint, converter, type)
            rules: Rule name, or a mapping of several names to callbacks
            callback: Callback when ``rules`` is a single name

        Raises:
            RegistrationError: Unknown kind, empty name, non-callable callback,
                or a name already registered under any kind. Nothing from the
                batch is registered in that case.
        """
        try:
            kind = RuleKind(kind)
        except ValueError:
            raise RegistrationError(f"Can't register rule of kind <{kind}>")

        if isinstance(rules, Mapping):
            if callback is not None:
                raise RegistrationError("callback must be given inside the mapping")
            pairs = list(rules.items())
        else:
            pairs = [(rules, callback)]

        if not pairs:
            raise RegistrationError("Can't register an empty set of rules")

        with self._lock:
            seen = set()
            for name, code in pairs:
                if name is None or not isinstance(name, str) or not name:
                    raise RegistrationError("Can't register rule without name")
                if name in self._rules or name in seen:
                    raise RegistrationError(f"Rule <{name}> already registered")
                if not callable(code):
                    raise RegistrationError(f"Rule <{name}> callback is not callable")
                seen.add(name)

            for name, code in pairs:
                self._rules[name] = RegisteredRule(name, kind, code)
                logger.debug(f"Registered {kind.value} rule '{name}'")

    def register_constraint(self, rules, callback: Optional[RuleCallback] = None) -> None:
        self.register(RuleKind.CONSTRAINT, rules, callback)

    def register_converter(self, rules, callback: Optional[RuleCallback] = None) -> None:
        self.register(RuleKind.CONVERTER, rules, callback)

    def register_type(self, rules, callback: Optional[RuleCallback] = None) -> None:
        self.register(RuleKind.TYPE, rules, callback)

    def lookup(self, name: Any) -> Optional[RegisteredRule]:
        """Return the registered rule for ``name``, or None if not registered."""
        if not isinstance(name, str):
            return None
        return self._rules.get(name)

    def names(self, kind: Optional[Union[RuleKind, str]] = None) -> List[str]:
        """Registered names in registration order, optionally filtered by kind."""
        if kind is None:
            return list(self._rules)
        kind = RuleKind(kind)
        return [name for name, rule in self._rules.items() if rule.kind is kind]

    def __contains__(self, name: Any) -> bool:
        return self.lookup(name) is not None

    def __len__(self) -> int:
        return len(self._rules)


def create_registry(rule_sets: Optional[List[str]] = None) -> RuleRegistry:
    """
    Create an isolated registry with the built-ins and the given bundled rule sets.

    Args:
        rule_sets: Names from ``rules.BUNDLED_RULE_SETS``; None loads none
    """
    registry = RuleRegistry()
    if rule_sets:
        from .rules import load_rule_sets
        load_rule_sets(registry, rule_sets)
    return registry


# Global registry instance
_default_registry: Optional[RuleRegistry] = None
_default_registry_lock = threading.Lock()


def get_default_registry() -> RuleRegistry:
    """Get the process-wide registry, building it on first use from configuration."""
    global _default_registry
    if _default_registry is None:
        with _default_registry_lock:
            if _default_registry is None:
                from .config_manager import get_config_manager
                rules_config = get_config_manager().config.rules
                rule_sets = rules_config.rule_sets if rules_config.load_bundled else None
                _default_registry = create_registry(rule_sets)
                logger.debug(f"Default registry initialized with {len(_default_registry)} rules")
    return _default_registry


def set_default_registry(registry: Optional[RuleRegistry]) -> None:
    """Replace the process-wide registry; None makes the next access rebuild it."""
    global _default_registry
    with _default_registry_lock:
        _default_registry = registry


def register_constraint(rules, callback: Optional[RuleCallback] = None) -> None:
    get_default_registry().register_constraint(rules, callback)


def register_converter(rules, callback: Optional[RuleCallback] = None) -> None:
    get_default_registry().register_converter(rules, callback)


def register_type(rules, callback: Optional[RuleCallback] = None) -> None:
    get_default_registry().register_type(rules, callback)
