"""Public entry point of the validation engine.

Example:
    ```python
    from fieldrules import validate

    outcome = validate(
        {"age": 15},
        {"age": {"dataType": "number", "range": {"min": 18, "max": 65}}},
    )
    outcome.valid    # False
    outcome.message  # 'age must be greater than or equal to 18'
    ```
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Mapping, Sequence
from typing import Any

from .evaluator import RecordEvaluator
from .registry import CustomRuleRegistry
from .result import UNKNOWN_ERROR_MESSAGE, ValidationOutcome
from .settings import Settings

logger = logging.getLogger(__name__)


class Validator:
    """Validates records against rule sets.

    Wraps a :class:`RecordEvaluator` in a failure boundary: no exception
    raised while evaluating reaches the caller. Instances hold no per-call
    state and can be shared between threads.
    """

    def __init__(
        self,
        registry: CustomRuleRegistry | None = None,
        unknown_error_message: str = UNKNOWN_ERROR_MESSAGE,
    ):
        """Initialize the validator.

        Args:
            registry: Custom-rule registry, loaded and frozen by the caller
            unknown_error_message: Message returned for unexpected faults
        """
        self.registry = registry if registry is not None else CustomRuleRegistry().freeze()
        self.unknown_error_message = unknown_error_message
        self.evaluator = RecordEvaluator(self.registry)

    @classmethod
    def from_settings(cls, settings: Settings) -> Validator:
        """Create a validator, loading the custom-rule registry named in settings."""
        registry = None
        if settings.custom_rules_path:
            registry = CustomRuleRegistry.from_file(
                settings.custom_rules_path, section=settings.custom_rules_section
            )
        return cls(registry, unknown_error_message=settings.unknown_error_message)

    def validate(
        self,
        record: Mapping[str, Any],
        rule_set: Mapping[str, Any],
        allowed_fields: Sequence[str] | None = None,
    ) -> ValidationOutcome:
        """Validate a record against a rule set.

        Args:
            record: Mapping of field name to value
            rule_set: Mapping of field name to rule
            allowed_fields: Optional allowlist of field names

        Returns:
            ValidationOutcome; ``message`` is "Ok" when valid
        """
        try:
            return self.evaluator.evaluate(record, rule_set, allowed_fields)
        except Exception:
            logger.exception("Unexpected error while validating data")
            return ValidationOutcome.internal_error(self.unknown_error_message)


_default_validator: Validator | None = None
_default_lock = threading.Lock()


def get_default_validator() -> Validator:
    """Get the process-wide validator, building it from the environment once."""
    global _default_validator
    if _default_validator is None:
        with _default_lock:
            if _default_validator is None:
                _default_validator = Validator.from_settings(Settings.from_env())
    return _default_validator


def reset_default_validator() -> None:
    """Discard the process-wide validator so the next call rebuilds it."""
    global _default_validator
    with _default_lock:
        _default_validator = None


def validate(
    record: Mapping[str, Any],
    rule_set: Mapping[str, Any],
    allowed_fields: Sequence[str] | None = None,
) -> ValidationOutcome:
    """Validate a record with the process-wide validator.

    Never raises: unexpected faults, including a custom-rule file that cannot
    be loaded, are reported as a generic validation failure.
    """
    try:
        validator = get_default_validator()
    except Exception:
        logger.exception("Failed to initialize the default validator")
        return ValidationOutcome.internal_error()
    return validator.validate(record, rule_set, allowed_fields)
