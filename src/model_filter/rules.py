"""
Filter rules.

A rule tells the engine how one form field turns into a query condition.
Rules are usually written in their compact tuple form, ``(kind, target)``,
with the target column defaulting to the form field name:

    >>> rules = parse_rules({
    ...     "id": ("primary",),
    ...     "status": ("in", "status"),
    ...     "created_from": ("from", "created_at"),
    ...     "created_to": ("to", "created_at"),
    ...     "subject": ("like",),
    ...     "priority": ("equals",),
    ... })
    >>> rules.get("created_from")
    From(target='created_at')

Kinds:
- primary: Bypasses all other rules when its field has a value
- in: The submitted value is already a list
- from: ``column >= <day> 00:00:00``
- to: ``column <= <day> 23:59:59``
- like: ``column LIKE '<value>%'``
- equals: ``column = <value>`` (also used for unknown kinds)

Rule sets can also be kept in TOML:

    [rules]
    id = ["primary"]
    status = ["in", "status"]
    created_from = ["from", "created_at"]
"""

from __future__ import annotations

import tomllib
from collections.abc import Iterator, Mapping, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import Any, ClassVar

from model_filter.errors import ConfigurationError


@dataclass(frozen=True)
class Rule:
    """Base rule. ``target`` is the query column, ``None`` means the field name."""

    target: str | None = None

    kind: ClassVar[str] = ""

    def column(self, field_name: str) -> str:
        """Resolve the query column for a form field."""
        return self.target or field_name

    def to_tuple(self) -> tuple[str, ...]:
        """Compact tuple form, ``(kind,)`` or ``(kind, target)``."""
        if self.target is None:
            return (self.kind,)
        return (self.kind, self.target)


@dataclass(frozen=True)
class Primary(Rule):
    """Equality on the field that short-circuits every other rule."""

    kind: ClassVar[str] = "primary"


@dataclass(frozen=True)
class In(Rule):
    """Membership in the submitted list."""

    kind: ClassVar[str] = "in"


@dataclass(frozen=True)
class From(Rule):
    """Lower bound at the start of the submitted day."""

    kind: ClassVar[str] = "from"


@dataclass(frozen=True)
class To(Rule):
    """Upper bound at the end of the submitted day."""

    kind: ClassVar[str] = "to"


@dataclass(frozen=True)
class Like(Rule):
    """Prefix match."""

    kind: ClassVar[str] = "like"


@dataclass(frozen=True)
class Equals(Rule):
    """Plain equality."""

    kind: ClassVar[str] = "equals"


RULE_TYPES: dict[str, type[Rule]] = {
    rule_type.kind: rule_type for rule_type in (Primary, In, From, To, Like, Equals)
}


def parse_rule(definition: Any, *, strict: bool = False) -> Rule:
    """Build a rule from its compact form.

    Args:
        definition: A Rule, a kind string, or a ``(kind, target?)`` sequence
        strict: Reject unknown kinds instead of treating them as equality

    Returns:
        Rule instance

    Raises:
        ConfigurationError: If the definition is malformed, or the kind is
            unknown and ``strict`` is set
    """
    if isinstance(definition, Rule):
        return definition

    if isinstance(definition, str):
        kind, target = definition, None
    elif isinstance(definition, Sequence) and 1 <= len(definition) <= 2:
        kind = definition[0]
        target = definition[1] if len(definition) == 2 else None
    else:
        raise ConfigurationError(f"Invalid rule definition: {definition!r}")

    if target is not None and not isinstance(target, str):
        raise ConfigurationError(f"Rule target must be a string, got {target!r}")
    if target == "":
        target = None

    rule_type = RULE_TYPES.get(str(kind).lower())
    if rule_type is None:
        if strict:
            available = ", ".join(RULE_TYPES)
            raise ConfigurationError(f"Unknown rule kind: {kind!r}. Available: {available}")
        rule_type = Equals

    return rule_type(target)


class RuleSet:
    """Ordered mapping of form field name to rule."""

    def __init__(self, rules: Mapping[str, Rule] | None = None):
        self._rules: dict[str, Rule] = dict(rules or {})

    def __iter__(self) -> Iterator[tuple[str, Rule]]:
        return iter(self._rules.items())

    def __len__(self) -> int:
        return len(self._rules)

    def __contains__(self, field_name: object) -> bool:
        return field_name in self._rules

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RuleSet):
            return NotImplemented
        return list(self) == list(other)

    def __repr__(self) -> str:
        return f"RuleSet({self._rules!r})"

    def get(self, field_name: str) -> Rule | None:
        return self._rules.get(field_name)

    def add(self, field_name: str, rule: Rule) -> RuleSet:
        """Add or replace a rule (fluent interface)."""
        self._rules[field_name] = rule
        return self

    def fields(self) -> list[str]:
        return list(self._rules)

    def primary(self) -> list[str]:
        """Fields with a primary rule, in definition order."""
        return [name for name, rule in self._rules.items() if isinstance(rule, Primary)]

    def evaluation_order(self) -> list[tuple[str, Rule]]:
        """Rules in the order the engine applies them: primary rules first."""
        rules = list(self._rules.items())
        return [item for item in rules if isinstance(item[1], Primary)] + [
            item for item in rules if not isinstance(item[1], Primary)
        ]

    def to_mapping(self) -> dict[str, list[str]]:
        """Serialize to the compact form used in TOML and JSON."""
        return {name: list(rule.to_tuple()) for name, rule in self._rules.items()}


def parse_rules(rules: Mapping[str, Any] | RuleSet, *, strict: bool = False) -> RuleSet:
    """Build a RuleSet from a mapping of field name to rule definition.

    Args:
        rules: Mapping in insertion order, or an existing RuleSet
        strict: Reject unknown rule kinds

    Returns:
        RuleSet preserving the mapping's order
    """
    if isinstance(rules, RuleSet):
        return rules
    if not isinstance(rules, Mapping):
        raise ConfigurationError(f"Rules must be a mapping, got {type(rules).__name__}")

    return RuleSet({name: parse_rule(definition, strict=strict) for name, definition in rules.items()})


def load_rules(path: str | Path, *, strict: bool = False) -> RuleSet:
    """Load a rule set from the ``[rules]`` table of a TOML file.

    Raises:
        ConfigurationError: If the file cannot be read or has no rules table
    """
    path = Path(path)
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigurationError(f"Cannot read rules file {path}: {e}") from e

    rules = data.get("rules")
    if not isinstance(rules, dict):
        raise ConfigurationError(f"No [rules] table in {path}")

    return parse_rules(rules, strict=strict)
