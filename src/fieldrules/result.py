"""Validation outcome type shared by every validation step.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

OK_MESSAGE = "Ok"
UNKNOWN_ERROR_MESSAGE = "An unknown error occurred while attempting to validate the data."


class OutcomeKind(Enum):
    """Classifies why an outcome was produced.

    Attributes:
        OK: Validation passed
        DATA: The caller's data violated a rule (reportable message)
        CONFIGURATION: A rule definition is malformed (no reportable message)
        INTERNAL: An unexpected fault was caught at the entry point
    """

    OK = "ok"
    DATA = "data"
    CONFIGURATION = "configuration"
    INTERNAL = "internal"


@dataclass(frozen=True)
class ValidationOutcome:
    """Result of a validator, of a field, or of a whole record.

    Only ``valid`` and ``message`` form the contract callers may depend on.
    ``message`` is ``"Ok"`` on success, the failure message on a data failure,
    and ``None`` for configuration errors. ``field``, ``rule`` and ``kind`` are
    diagnostic extras.
    """

    valid: bool
    message: str | None = OK_MESSAGE
    field: str | None = None
    rule: str | None = None
    kind: OutcomeKind = OutcomeKind.OK

    def __bool__(self) -> bool:
        """Allow 'if outcome:' usage to check validity."""
        return self.valid

    @property
    def is_configuration_error(self) -> bool:
        return self.kind is OutcomeKind.CONFIGURATION

    def with_message(self, message: str) -> ValidationOutcome:
        """Return a copy carrying a different message."""
        return ValidationOutcome(
            valid=self.valid,
            message=message,
            field=self.field,
            rule=self.rule,
            kind=self.kind,
        )

    def with_rule(self, rule: str) -> ValidationOutcome:
        """Return a copy attributed to the given rule member name."""
        return ValidationOutcome(
            valid=self.valid,
            message=self.message,
            field=self.field,
            rule=rule,
            kind=self.kind,
        )

    def to_dict(self) -> dict[str, Any]:
        """Return the ``{valid, message}`` contract as a plain dictionary."""
        return {"valid": self.valid, "message": self.message}

    @classmethod
    def success(cls, field: str | None = None) -> ValidationOutcome:
        """Create a successful outcome.

        Args:
            field: Optional name of the field that passed

        Returns:
            Successful ValidationOutcome
        """
        return cls(valid=True, message=OK_MESSAGE, field=field)

    @classmethod
    def failure(
        cls,
        message: str,
        field: str | None = None,
        rule: str | None = None,
    ) -> ValidationOutcome:
        """Create a data validation failure.

        Args:
            message: End-user facing error message
            field: Name of the offending field
            rule: Name of the rule member that failed

        Returns:
            Failed ValidationOutcome
        """
        return cls(
            valid=False,
            message=message,
            field=field,
            rule=rule,
            kind=OutcomeKind.DATA,
        )

    @classmethod
    def config_error(
        cls,
        field: str | None = None,
        rule: str | None = None,
    ) -> ValidationOutcome:
        """Create a configuration-error outcome (no reportable message)."""
        return cls(
            valid=False,
            message=None,
            field=field,
            rule=rule,
            kind=OutcomeKind.CONFIGURATION,
        )

    @classmethod
    def internal_error(cls, message: str = UNKNOWN_ERROR_MESSAGE) -> ValidationOutcome:
        """Create the generic outcome used when an unexpected fault is caught."""
        return cls(valid=False, message=message, kind=OutcomeKind.INTERNAL)
