"""Rule dispatch: from field-rule members to primitive validators."""

from __future__ import annotations

import logging
from typing import Any

from .formatter import render_message
from .registry import CustomRuleRegistry
from .result import ValidationOutcome
from .rules import FieldRule, RuleName
from .validators import (
    check_data_type,
    check_length,
    check_list,
    check_range,
    check_regex,
)
from .values import FieldValue

logger = logging.getLogger(__name__)


def required_message(field: str) -> str:
    return f"Field '{field}' must have a value assigned"


class RuleDispatcher:
    """Applies the members of a field rule to a value, in declaration order.

    Custom-rule bundles referenced through ``custom`` are looked up in the
    injected registry and merged beneath the field's own members.
    """

    def __init__(self, registry: CustomRuleRegistry | None = None):
        """Initialize the dispatcher.

        Args:
            registry: Custom-rule registry; an empty one is used if omitted
        """
        self.registry = registry if registry is not None else CustomRuleRegistry().freeze()

    def resolve(self, field: str, rule: FieldRule) -> FieldRule | None:
        """Merge the rule's custom bundle beneath it.

        Args:
            field: Field name (for diagnostics)
            rule: Field rule as declared in the rule set

        Returns:
            The effective rule, or None if the referenced bundle is unknown
        """
        name = rule.custom
        if name is None:
            return rule

        bundle = self.registry.get_optional(name) if isinstance(name, str) else None
        if bundle is None:
            logger.error(f"There is no custom rule named '{name}' (field '{field}')")
            return None

        return rule.merged_over(bundle)

    def apply(self, field: str, rule: FieldRule, value: Any) -> ValidationOutcome:
        """Run every recognized member of an effective rule against a value.

        Stops at the first failing member. Data failures get the member's
        ``message`` template (or ``message.custom``) when one is declared;
        configuration errors are returned unchanged.

        Args:
            field: Field name
            rule: Effective (already merged) field rule
            value: Field value

        Returns:
            ValidationOutcome for the field
        """
        field_value = FieldValue.of(value)

        for name, param in rule:
            outcome = self.check(RuleName.lookup(name), param, field, field_value)
            if outcome is None or outcome.valid:
                continue

            outcome = outcome.with_rule(name)
            if outcome.is_configuration_error:
                return outcome

            template = rule.message_for(name)
            if template is not None:
                outcome = outcome.with_message(
                    render_message(template, field, value, name, param)
                )

            logger.debug(f"Field '{field}' failed rule '{name}': {outcome.message}")
            return outcome

        return ValidationOutcome.success(field)

    def check(
        self,
        rule_name: RuleName | None,
        param: Any,
        field: str,
        value: FieldValue,
    ) -> ValidationOutcome | None:
        """Invoke the validator for one member.

        Returns:
            The validator's outcome, or None for members that are not checks
            (``required``, ``custom``, ``message`` and unrecognized names)
        """
        if rule_name is RuleName.LIST:
            return check_list(param, field, value)
        elif rule_name is RuleName.DATA_TYPE:
            return check_data_type(param, field, value)
        elif rule_name is RuleName.LEN:
            return check_length(param, field, value)
        elif rule_name is RuleName.RANGE:
            return check_range(param, field, value)
        elif rule_name is RuleName.REGEX:
            return check_regex(param, field, value)
        return None
