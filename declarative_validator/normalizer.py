"""Normalization of raw rule definitions.

A rule definition for one parameter may be:

- a rule name: ``"positive"``
- a parametrized rule: ``("min", 5)`` or ``{"min": 5}``
- a list mixing both: ``["required", "int", ("min", 5), {"max": 10}]``

Only a ``list`` is treated as a list of rules; a top-level tuple is a single
parametrized rule. Rule arguments are kept as given, no conversion happens here.
"""
from __future__ import annotations
from typing import Any, Dict, List, NamedTuple, Union

from .errors import StructuralError
from .registry import RuleKind, RuleRegistry


class BareRule(NamedTuple):
    name: str


class ParametrizedRule(NamedTuple):
    name: str
    argument: Any


RuleRef = Union[BareRule, ParametrizedRule]


class NormalizedRules:
    """Rules of one parameter split by kind; each maps name -> argument (None if bare)."""

    __slots__ = ("types", "converters", "constraints")

    def __init__(self):
        self.types: Dict[str, Any] = {}
        self.converters: Dict[str, Any] = {}
        self.constraints: Dict[str, Any] = {}

    def for_kind(self, kind: RuleKind) -> Dict[str, Any]:
        if kind is RuleKind.TYPE:
            return self.types
        if kind is RuleKind.CONVERTER:
            return self.converters
        return self.constraints

    def __repr__(self) -> str:
        return (
            f"NormalizedRules(types={self.types!r}, converters={self.converters!r}, "
            f"constraints={self.constraints!r})"
        )


def parse_rule_entry(entry: Any, registry: RuleRegistry) -> RuleRef:
    """
    Turn one entry of a rule definition into a BareRule or ParametrizedRule.

    Raises:
        StructuralError: Bad shape, unregistered name or too many arguments
    """
    if isinstance(entry, (list, tuple)):
        if not entry:
            raise StructuralError("empty rule definition")
        name, arguments = entry[0], tuple(entry[1:])
    elif isinstance(entry, dict):
        if len(entry) != 1:
            raise StructuralError("hash rule should have exactly one key/value pair")
        ((name, argument),) = entry.items()
        arguments = (argument,)
    elif isinstance(entry, str):
        name, arguments = entry, ()
    else:
        raise StructuralError(f"rule definition can't be {type(entry).__name__}")

    if not isinstance(name, str):
        raise StructuralError(f"rule name must be a string, got {type(name).__name__}")

    if registry.lookup(name) is None:
        raise StructuralError(f"rule {name} is not registered")

    if len(arguments) > 1:
        raise StructuralError(f"rule {name} can accept not more than one parameter")

    if arguments:
        return ParametrizedRule(name, arguments[0])
    return BareRule(name)


def parse_rules(rules: Any, registry: RuleRegistry) -> List[RuleRef]:
    if not isinstance(rules, list):
        rules = [rules]
    return [parse_rule_entry(entry, registry) for entry in rules]


def normalize_rules(rules: Any, registry: RuleRegistry) -> NormalizedRules:
    """
    Split a raw rule definition into types, converters and constraints.

    A name given twice keeps its first position and the last argument.

    Args:
        rules: Raw rule definition of one parameter
        registry: Registry used to resolve rule names

    Returns:
        NormalizedRules for the parameter
    """
    normalized = NormalizedRules()
    for ref in parse_rules(rules, registry):
        kind = registry.lookup(ref.name).kind
        argument = ref.argument if isinstance(ref, ParametrizedRule) else None
        normalized.for_kind(kind)[ref.name] = argument
    return normalized
