"""Exception hierarchy for fieldrules.

The validators themselves never raise: data problems and rule-definition
problems are both reported through :class:`~fieldrules.result.ValidationOutcome`.
These exceptions are used by the layers around the engine (rule construction,
the custom-rule registry, file loading and settings) and support optional
context data for rich error information.

Example:
    ```python
    from fieldrules.exceptions import NotFoundError

    raise NotFoundError(
        "Custom rule not found",
        context={"name": "cpf", "registry": "custom_rules"}
    )
    ```
"""

from typing import Any, Dict


class FieldRulesError(Exception):
    """Base exception for fieldrules.

    Attributes:
        context: Dictionary containing contextual information about the error
        details: Alias for context

    Args:
        message: Human-readable error message
        context: Optional dictionary with error context (field names, keys, etc.)
        details: Alternative to context (both are supported)
    """

    def __init__(
        self,
        message: str,
        context: Dict[str, Any] | None = None,
        details: Dict[str, Any] | None = None,
    ):
        super().__init__(message)
        # Details takes precedence if both are provided
        self.context = details or context or {}
        self.details = self.context


class ConfigurationError(FieldRulesError):
    """Raised when configuration is invalid or missing.

    Covers settings that cannot be interpreted and rule definitions that are
    malformed at construction time.
    """

    pass


class RuleDefinitionError(ConfigurationError):
    """Raised when a rule set or field rule cannot be built.

    Example:
        ```python
        raise RuleDefinitionError(
            "Field rule must be a mapping",
            context={"field": "age", "type": "list"}
        )
        ```
    """

    pass


class NotFoundError(FieldRulesError):
    """Raised when a requested item (such as a custom-rule bundle) is not found."""

    pass


class OperationError(FieldRulesError):
    """Raised when an operation is not allowed in the current state.

    The custom-rule registry raises this for duplicate registrations and for
    registrations attempted after it has been frozen.
    """

    pass


class LoaderError(ConfigurationError):
    """Raised when a rule or settings file cannot be read or parsed."""

    pass


__all__ = [
    "FieldRulesError",
    "ConfigurationError",
    "RuleDefinitionError",
    "NotFoundError",
    "OperationError",
    "LoaderError",
]
