"""Record evaluation: allowlist, per-field rules and required fields."""

from __future__ import annotations

import logging
from collections.abc import Mapping, Sequence
from typing import Any

from .dispatch import RuleDispatcher, required_message
from .exceptions import RuleDefinitionError
from .formatter import render_message
from .registry import CustomRuleRegistry
from .result import ValidationOutcome
from .rules import FieldRule

logger = logging.getLogger(__name__)


def not_allowed_message(field: str) -> str:
    return f"'{field}' is not a valid field for this request"


class RecordEvaluator:
    """Evaluates a record against a rule set and reports the first failure.

    Fields are visited in the record's own order, and each field's rule
    members in declaration order. Rule-set fields missing from the record are
    then checked for ``required``. Evaluation stops at the first failure.
    """

    def __init__(
        self,
        registry: CustomRuleRegistry | None = None,
        dispatcher: RuleDispatcher | None = None,
    ):
        """Initialize the evaluator.

        Args:
            registry: Custom-rule registry used to resolve ``custom`` members
            dispatcher: Pre-built dispatcher (takes precedence over registry)
        """
        self.dispatcher = dispatcher or RuleDispatcher(registry)

    def evaluate(
        self,
        record: Mapping[str, Any],
        rule_set: Mapping[str, Any],
        allowed_fields: Sequence[str] | None = None,
    ) -> ValidationOutcome:
        """Validate a record.

        Args:
            record: Mapping of field name to value
            rule_set: Mapping of field name to FieldRule or rule mapping
            allowed_fields: Optional allowlist of field names; ignored when empty

        Returns:
            ValidationOutcome for the whole record
        """
        if not isinstance(record, Mapping) or not isinstance(rule_set, Mapping):
            logger.error(
                "evaluate: 'record' and 'rule_set' are required and must both be mappings "
                f"(got {type(record).__name__} and {type(rule_set).__name__})"
            )
            return ValidationOutcome.config_error()

        allowlist = None
        if isinstance(allowed_fields, (list, tuple)) and len(allowed_fields) > 0:
            allowlist = allowed_fields

        unseen = dict.fromkeys(rule_set)

        for key, value in record.items():
            if allowlist is not None and key not in allowlist:
                logger.debug(f"Field '{key}' is not in the allowed fields")
                return ValidationOutcome.failure(not_allowed_message(key), key)

            rule = self._effective_rule(key, rule_set.get(key))
            if isinstance(rule, ValidationOutcome):
                return rule
            if rule is None:
                continue

            outcome = self.dispatcher.apply(key, rule, value)
            if not outcome.valid:
                return outcome

            unseen.pop(key, None)

        for key in unseen:
            rule = self._missing_field_rule(key, rule_set.get(key))
            if isinstance(rule, ValidationOutcome):
                return rule
            if rule is None or not rule.required:
                continue

            message = required_message(key)
            template = rule.message_for("required")
            if template is not None:
                message = render_message(template, key, None, "required", rule.get("required"))
            logger.debug(f"Required field '{key}' is missing")
            return ValidationOutcome.failure(message, key, "required")

        return ValidationOutcome.success()

    def _effective_rule(self, field: str, definition: Any) -> FieldRule | ValidationOutcome | None:
        """Convert a rule definition and merge its custom bundle.

        Returns None for fields without a rule, and a configuration-error
        outcome for malformed definitions or unknown custom bundles.
        """
        if definition is None:
            return None

        try:
            rule = FieldRule.from_mapping(definition)
        except RuleDefinitionError:
            logger.error(
                f"Rule for field '{field}' must be a mapping, got {type(definition).__name__}"
            )
            return ValidationOutcome.config_error(field)

        resolved = self.dispatcher.resolve(field, rule)
        if resolved is None:
            return ValidationOutcome.config_error(field, "custom")
        return resolved

    def _missing_field_rule(self, field: str, definition: Any) -> FieldRule | ValidationOutcome | None:
        """Rule of a field absent from the record, for the required check.

        Only a field whose own rule declares ``required`` can fail here: a
        malformed definition is skipped, and an unknown custom bundle is a
        configuration error only when the field itself is required.
        """
        if definition is None:
            return None

        try:
            rule = FieldRule.from_mapping(definition)
        except RuleDefinitionError:
            return None

        if rule.custom is None:
            return rule

        if isinstance(rule.custom, str) and self.dispatcher.registry.has(rule.custom):
            return self.dispatcher.resolve(field, rule)

        if rule.required:
            logger.error(f"There is no custom rule named '{rule.custom}' (field '{field}')")
            return ValidationOutcome.config_error(field, "custom")
        return None
