"""Tests for the public entry point."""

import logging
from collections.abc import Mapping
from concurrent.futures import ThreadPoolExecutor

from fieldrules import (
    Settings,
    ValidationOutcome,
    Validator,
    get_default_validator,
    validate,
)
from fieldrules.result import UNKNOWN_ERROR_MESSAGE, OutcomeKind


class ExplodingRecord(Mapping):
    """Mapping whose iteration fails, to exercise the failure boundary."""

    def __getitem__(self, key):
        raise KeyError(key)

    def __iter__(self):
        raise RuntimeError("storage went away")

    def __len__(self):
        return 1


class TestValidate:
    """Test module-level validate with the default validator."""

    def test_range_example(self):
        """Test a number below the configured range."""
        outcome = validate(
            {"age": 15}, {"age": {"dataType": "number", "range": {"min": 18, "max": 65}}}
        )
        assert outcome.to_dict() == {
            "valid": False,
            "message": "age must be greater than or equal to 18",
        }

    def test_required_example(self):
        """Test a missing required field."""
        outcome = validate({}, {"name": {"required": True}})
        assert outcome.to_dict() == {
            "valid": False,
            "message": "Field 'name' must have a value assigned",
        }

    def test_list_example(self):
        """Test a value from the allowed list."""
        outcome = validate({"role": "admin"}, {"role": {"list": ["user", "admin"]}})
        assert outcome.to_dict() == {"valid": True, "message": "Ok"}
        assert bool(outcome) is True

    def test_allowed_fields(self):
        """Test the allowlist argument is passed through."""
        outcome = validate({"role": "admin", "debug": True}, {}, ["role"])
        assert outcome.message == "'debug' is not a valid field for this request"

    def test_missing_arguments(self):
        """Test missing record or rule set fails without raising."""
        outcome = validate(None, None)
        assert outcome.valid is False
        assert outcome.message is None

    def test_unexpected_fault_is_contained(self, caplog):
        """Test unexpected exceptions become the generic failure."""
        with caplog.at_level(logging.ERROR):
            outcome = validate(ExplodingRecord(), {"a": {"required": True}})
        assert outcome.valid is False
        assert outcome.message == UNKNOWN_ERROR_MESSAGE
        assert outcome.kind is OutcomeKind.INTERNAL
        assert "storage went away" in caplog.text

    def test_default_validator_built_once(self):
        """Test the process-wide validator is reused."""
        assert get_default_validator() is get_default_validator()

    def test_default_validator_uses_environment(self, monkeypatch, tmp_path):
        """Test the custom-rule file named in the environment is loaded."""
        path = tmp_path / "custom.yaml"
        path.write_text("zip:\n  regex: '^[0-9]{5}$'\n")
        monkeypatch.setenv("FIELDRULES_CUSTOM_RULES_PATH", str(path))

        assert validate({"zip": "12345"}, {"zip": {"custom": "zip"}}).valid is True
        assert validate({"zip": "1234"}, {"zip": {"custom": "zip"}}).valid is False

    def test_default_validator_with_broken_file(self, monkeypatch, tmp_path):
        """Test a custom-rule file that cannot be loaded yields the generic failure."""
        monkeypatch.setenv("FIELDRULES_CUSTOM_RULES_PATH", str(tmp_path / "missing.yaml"))

        outcome = validate({"a": 1}, {})

        assert outcome.valid is False
        assert outcome.message == UNKNOWN_ERROR_MESSAGE


class TestValidator:
    """Test Validator instances."""

    def test_injected_registry(self, validator):
        """Test bundles come from the injected registry."""
        outcome = validator.validate({"share": 120}, {"share": {"custom": "percentage"}})
        assert outcome.message == "share must be less than or equal to 100"

    def test_custom_unknown_error_message(self, monkeypatch):
        """Test the generic message can be configured."""
        validator = Validator(unknown_error_message="Validation failed")

        def boom(*args, **kwargs):
            raise ValueError("bad")

        monkeypatch.setattr(validator.evaluator, "evaluate", boom)

        outcome = validator.validate({}, {})
        assert outcome == ValidationOutcome.internal_error("Validation failed")

    def test_from_settings(self, tmp_path):
        """Test building a validator from settings."""
        path = tmp_path / "custom.json"
        path.write_text('{"bundles": {"flag": {"dataType": "boolean"}}}')
        settings = Settings(custom_rules_path=str(path), custom_rules_section="bundles")

        validator = Validator.from_settings(settings)

        assert validator.registry.list_keys() == ["flag"]
        assert validator.validate({"on": "yes"}, {"on": {"custom": "flag"}}).valid is False

    def test_from_settings_without_rules(self):
        """Test a validator without a custom-rule file has an empty registry."""
        validator = Validator.from_settings(Settings())
        assert validator.registry.count() == 0
        assert validator.registry.frozen is True

    def test_concurrent_calls(self, validator):
        """Test independent calls from several threads."""
        rules = {"age": {"dataType": "number", "range": {"min": 18, "max": 65}}}

        def run(age):
            return validator.validate({"age": age}, rules).valid

        ages = list(range(0, 100))
        with ThreadPoolExecutor(max_workers=8) as pool:
            results = list(pool.map(run, ages))

        assert results == [18 <= age <= 65 for age in ages]
