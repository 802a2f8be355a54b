"""Tests for the custom-rule registry."""

import json
from threading import Thread

import pytest

from fieldrules.exceptions import (
    LoaderError,
    NotFoundError,
    OperationError,
    RuleDefinitionError,
)
from fieldrules.registry import CustomRuleRegistry
from fieldrules.rules import FieldRule


class TestCustomRuleRegistry:
    """Test registration and lookup."""

    def test_register_and_get(self):
        """Test registering a bundle."""
        registry = CustomRuleRegistry("test")
        registry.register("cpf", {"dataType": "string"})

        assert registry.name == "test"
        assert registry.count() == 1
        assert registry.has("cpf")
        assert "cpf" in registry
        assert isinstance(registry.get("cpf"), FieldRule)
        assert list(registry) == ["cpf"]

    def test_get_unknown_raises(self):
        """Test exact-name lookup of an unknown bundle."""
        registry = CustomRuleRegistry()
        registry.register("cpf", {"dataType": "string"})

        with pytest.raises(NotFoundError) as exc_info:
            registry.get("CPF")

        assert exc_info.value.context["available_keys"] == ["cpf"]
        assert registry.get_optional("CPF") is None

    def test_register_duplicate_raises_error(self):
        """Test duplicate names are rejected."""
        registry = CustomRuleRegistry()
        registry.register("cpf", {"dataType": "string"})

        with pytest.raises(OperationError) as exc_info:
            registry.register("cpf", {"dataType": "number"})

        assert "already registered" in str(exc_info.value)

    def test_register_duplicate_with_overwrite(self):
        """Test overwriting with allow_overwrite."""
        registry = CustomRuleRegistry()
        registry.register("cpf", {"dataType": "string"})
        registry.register("cpf", {"dataType": "number"}, allow_overwrite=True)

        assert registry.get("cpf").get("dataType") == "number"

    def test_register_non_mapping(self):
        """Test bundles must be mappings."""
        with pytest.raises(RuleDefinitionError):
            CustomRuleRegistry().register("cpf", "string")

    def test_frozen_registry_rejects_registration(self):
        """Test a frozen registry is read-only."""
        registry = CustomRuleRegistry.from_mapping({"cpf": {"dataType": "string"}})

        assert registry.frozen is True
        with pytest.raises(OperationError):
            registry.register("other", {"dataType": "number"})

    def test_registered_bundle_is_isolated_from_source(self):
        """Test later edits to the source mapping do not leak into the registry."""
        source = {"len": {"min": 1, "max": 5}}
        registry = CustomRuleRegistry.from_mapping({"code": source})

        source["len"]["max"] = 99

        assert registry.get("code").get("len") == {"min": 1, "max": 5}

    def test_concurrent_reads(self, registry):
        """Test lookups from several threads."""
        results = []

        def read():
            for _ in range(100):
                results.append(registry.get("cpf").get("dataType"))

        threads = [Thread(target=read) for _ in range(4)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert results == ["string"] * 400


class TestRegistryFromFile:
    """Test loading bundles from files."""

    def test_from_yaml(self, tmp_path):
        """Test loading a YAML bundle file."""
        path = tmp_path / "custom_rules.yaml"
        path.write_text(
            "cpf:\n"
            "  dataType: string\n"
            "  regex: '^\\d{11}$'\n"
            "percentage:\n"
            "  range: {min: 0, max: 100}\n"
        )

        registry = CustomRuleRegistry.from_file(path)

        assert registry.list_keys() == ["cpf", "percentage"]
        assert registry.get("cpf").get("regex") == r"^\d{11}$"
        assert registry.frozen is True

    def test_from_json_section(self, tmp_path):
        """Test loading a section of a JSON file."""
        path = tmp_path / "rules.json"
        path.write_text(json.dumps({"bundles": {"flag": {"dataType": "boolean"}}}))

        registry = CustomRuleRegistry.from_file(path, section="bundles")

        assert registry.list_keys() == ["flag"]

    def test_missing_file(self, tmp_path):
        """Test a missing file raises LoaderError."""
        with pytest.raises(LoaderError):
            CustomRuleRegistry.from_file(tmp_path / "nope.yaml")
