"""Shared fixtures for fieldrules tests."""

import pytest

from fieldrules import CustomRuleRegistry, Validator, reset_default_validator


@pytest.fixture
def custom_bundles():
    """Custom-rule bundle definitions as they would appear in a rules file."""
    return {
        "cpf": {
            "dataType": "string",
            "regex": r"^\d{11}$",
            "message": {"regex": "{field} must contain exactly 11 digits"},
        },
        "percentage": {
            "dataType": "number",
            "range": {"min": 0, "max": 100},
        },
        "short_code": {
            "dataType": "string",
            "len": {"min": 2, "max": 4},
        },
    }


@pytest.fixture
def registry(custom_bundles):
    """Frozen registry loaded from the bundle definitions."""
    return CustomRuleRegistry.from_mapping(custom_bundles)


@pytest.fixture
def validator(registry):
    """Validator using the test registry."""
    return Validator(registry)


@pytest.fixture(autouse=True)
def clean_default_validator(monkeypatch):
    """Keep the process-wide validator isolated from the environment."""
    for key in (
        "FIELDRULES_CUSTOM_RULES_PATH",
        "FIELDRULES_CUSTOM_RULES_SECTION",
        "FIELDRULES_UNKNOWN_ERROR_MESSAGE",
    ):
        monkeypatch.delenv(key, raising=False)
    reset_default_validator()
    yield
    reset_default_validator()
