"""Rule model: field rules, rule sets and the names they are built from.

A :class:`FieldRule` keeps its members in declaration order, since members are
evaluated in that order. Field rules and rule sets are immutable; merging a
custom-rule bundle produces a new :class:`FieldRule`.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from .exceptions import RuleDefinitionError


class RuleName(Enum):
    """Recognized field-rule members.

    Member names in rule definitions are matched case-insensitively
    (``dataType``, ``datatype`` and ``DATATYPE`` are the same member).
    """

    DATA_TYPE = "datatype"
    LIST = "list"
    LEN = "len"
    RANGE = "range"
    REGEX = "regex"
    REQUIRED = "required"
    CUSTOM = "custom"
    MESSAGE = "message"

    @classmethod
    def lookup(cls, name: Any) -> RuleName | None:
        """Find the member for a declared name, or None if it is not recognized."""
        if not isinstance(name, str):
            return None
        try:
            return cls(name.lower())
        except ValueError:
            return None


class DataType(Enum):
    """Data types accepted by the ``dataType`` member."""

    STRING = "string"
    NUMBER = "number"
    DATE = "date"
    BOOLEAN = "boolean"
    OBJECT = "object"
    ARRAY = "array"

    @classmethod
    def parse(cls, name: Any) -> DataType | None:
        if not isinstance(name, str):
            return None
        try:
            return cls(name.lower())
        except ValueError:
            return None


@dataclass(frozen=True)
class FieldRule:
    """Constraints declared for one field.

    Members are stored as ``(name, parameter)`` pairs in declaration order.
    Names are kept exactly as declared; ``message[<name>]`` lookups use the
    declared spelling.
    """

    members: tuple[tuple[str, Any], ...] = ()

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any] | FieldRule) -> FieldRule:
        """Create a field rule from a mapping.

        Args:
            data: Mapping of member name to parameter

        Returns:
            FieldRule instance

        Raises:
            RuleDefinitionError: If ``data`` is not a mapping
        """
        if isinstance(data, FieldRule):
            return data
        if not isinstance(data, Mapping):
            raise RuleDefinitionError(
                "Field rule must be a mapping of rule names to parameters",
                context={"type": type(data).__name__},
            )
        return cls(members=tuple(data.items()))

    def __iter__(self) -> Iterator[tuple[str, Any]]:
        return iter(self.members)

    def __len__(self) -> int:
        return len(self.members)

    def __contains__(self, name: object) -> bool:
        return any(member == name for member, _ in self.members)

    def get(self, name: str, default: Any = None) -> Any:
        """Get a member parameter by its exact declared name."""
        for member, param in self.members:
            if member == name:
                return param
        return default

    @property
    def custom(self) -> str | None:
        """Name of the referenced custom-rule bundle, if any."""
        name = self.get("custom")
        return name if name else None

    @property
    def required(self) -> bool:
        return bool(self.get("required", False))

    @property
    def messages(self) -> Mapping[str, Any]:
        messages = self.get("message")
        return messages if isinstance(messages, Mapping) else {}

    def message_for(self, name: str) -> str | None:
        """Template configured for a member, falling back to ``message.custom``."""
        messages = self.messages
        template = messages.get(name)
        if isinstance(template, str):
            return template
        template = messages.get("custom")
        if isinstance(template, str):
            return template
        return None

    def merged_over(self, bundle: FieldRule) -> FieldRule:
        """Layer this rule's members over a custom-rule bundle.

        Same-named members take this rule's parameter. Bundle members keep
        their position; members only this rule declares follow them. Neither
        rule is modified.

        Args:
            bundle: Custom-rule bundle providing defaults

        Returns:
            New merged FieldRule
        """
        own = dict(self.members)
        merged = [(name, own.pop(name, param)) for name, param in bundle.members]
        merged.extend((name, param) for name, param in self.members if name in own)
        return FieldRule(members=tuple(merged))

    def to_dict(self) -> dict[str, Any]:
        return dict(self.members)


class RuleSet(Mapping[str, FieldRule]):
    """Ordered, read-only mapping of field name to :class:`FieldRule`.

    Entries whose definition is ``None`` are dropped; such fields are
    unrestricted.
    """

    def __init__(self, rules: Mapping[str, Any] | None = None):
        """Initialize the rule set.

        Args:
            rules: Mapping of field name to FieldRule or rule mapping

        Raises:
            RuleDefinitionError: If ``rules`` or one of its entries is not a mapping
        """
        if rules is not None and not isinstance(rules, Mapping):
            raise RuleDefinitionError(
                "Rule set must be a mapping of field names to rules",
                context={"type": type(rules).__name__},
            )
        self._rules: dict[str, FieldRule] = {}
        for name, rule in (rules or {}).items():
            if rule is None:
                continue
            try:
                self._rules[name] = FieldRule.from_mapping(rule)
            except RuleDefinitionError as e:
                raise RuleDefinitionError(
                    f"Invalid rule for field '{name}'",
                    context={"field": name, **e.context},
                ) from e

    def __getitem__(self, key: str) -> FieldRule:
        return self._rules[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._rules)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleSet({list(self._rules)})"

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return {name: rule.to_dict() for name, rule in self._rules.items()}
