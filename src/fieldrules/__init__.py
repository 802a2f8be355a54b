"""fieldrules - declarative field validation.

Validates a record (a mapping of field names to values) against a rule set
and reports the first failure as a human-readable message.

- **Engine**: ``validate`` and ``Validator`` (failure boundary)
- **Rules**: ``FieldRule``, ``RuleSet``, ``RuleName``, ``DataType``
- **Custom rules**: ``CustomRuleRegistry`` of named, reusable rule bundles
- **Results**: ``ValidationOutcome`` with ``valid`` and ``message``

Example:
    ```python
    from fieldrules import validate

    validate({"role": "admin"}, {"role": {"list": ["user", "admin"]}}).to_dict()
    # {'valid': True, 'message': 'Ok'}
    ```
"""

from .dispatch import RuleDispatcher
from .engine import Validator, get_default_validator, reset_default_validator, validate
from .evaluator import RecordEvaluator
from .exceptions import (
    ConfigurationError,
    FieldRulesError,
    LoaderError,
    NotFoundError,
    OperationError,
    RuleDefinitionError,
)
from .formatter import render_message
from .loader import load_mapping, load_rule_set
from .registry import CustomRuleRegistry
from .result import OK_MESSAGE, UNKNOWN_ERROR_MESSAGE, OutcomeKind, ValidationOutcome
from .rules import DataType, FieldRule, RuleName, RuleSet
from .settings import Settings
from .values import FieldValue, ValueKind

__version__ = "0.1.0"

__all__ = [
    # Engine
    "validate",
    "Validator",
    "get_default_validator",
    "reset_default_validator",
    "RecordEvaluator",
    "RuleDispatcher",
    # Results
    "ValidationOutcome",
    "OutcomeKind",
    "OK_MESSAGE",
    "UNKNOWN_ERROR_MESSAGE",
    # Rules
    "FieldRule",
    "RuleSet",
    "RuleName",
    "DataType",
    "CustomRuleRegistry",
    # Values
    "FieldValue",
    "ValueKind",
    # Messages
    "render_message",
    # Loading and settings
    "load_mapping",
    "load_rule_set",
    "Settings",
    # Exceptions
    "FieldRulesError",
    "ConfigurationError",
    "RuleDefinitionError",
    "NotFoundError",
    "OperationError",
    "LoaderError",
]
