"""Registry of named custom-rule bundles.

A custom-rule bundle is a field rule defined once and referenced from rule sets
by name through the ``custom`` member. The registry is filled when the process
starts, then frozen; after that it is read-only and safe to share between
threads.

Example:
    ```python
    from fieldrules.registry import CustomRuleRegistry

    registry = CustomRuleRegistry.from_mapping({
        "cpf": {"dataType": "string", "regex": r"^\\d{11}$"},
    })
    registry.get("cpf")   # FieldRule(...)
    registry.frozen       # True
    ```
"""

import copy
import logging
import threading
from collections.abc import Mapping
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from .exceptions import NotFoundError, OperationError, RuleDefinitionError
from .loader import load_mapping
from .rules import FieldRule

logger = logging.getLogger(__name__)


class CustomRuleRegistry:
    """Thread-safe, freezable registry of custom-rule bundles.

    Attributes:
        name: Name of the registry (for logging/debugging)

    Args:
        name: Name for this registry instance
    """

    def __init__(self, name: str = "custom_rules"):
        self._name = name
        self._items: Dict[str, FieldRule] = {}
        self._lock = threading.RLock()
        self._frozen = False

    @property
    def name(self) -> str:
        """Get registry name."""
        return self._name

    @property
    def frozen(self) -> bool:
        """True once the registry no longer accepts registrations."""
        return self._frozen

    def register(
        self,
        key: str,
        bundle: Union[Mapping[str, Any], FieldRule],
        allow_overwrite: bool = False,
    ) -> None:
        """Register a bundle by name.

        The bundle is copied, so later changes to the caller's mapping do not
        leak into the registry.

        Args:
            key: Bundle name referenced by ``custom`` members
            bundle: Field rule or mapping of rule members
            allow_overwrite: Whether to allow overwriting existing bundles

        Raises:
            OperationError: If the registry is frozen, or the name is already
                registered and allow_overwrite is False
            RuleDefinitionError: If the bundle is not a mapping
        """
        if isinstance(bundle, FieldRule):
            rule = FieldRule(members=copy.deepcopy(bundle.members))
        elif isinstance(bundle, Mapping):
            rule = FieldRule.from_mapping(copy.deepcopy(dict(bundle)))
        else:
            raise RuleDefinitionError(
                f"Custom rule '{key}' must be a mapping of rule names to parameters",
                context={"key": key, "registry": self._name, "type": type(bundle).__name__},
            )

        with self._lock:
            if self._frozen:
                raise OperationError(
                    f"Registry {self._name} is frozen; cannot register '{key}'",
                    context={"key": key, "registry": self._name},
                )
            if not allow_overwrite and key in self._items:
                raise OperationError(
                    f"Custom rule '{key}' already registered in {self._name}",
                    context={"key": key, "registry": self._name},
                )
            self._items[key] = rule

        logger.debug(f"Registered custom rule '{key}' in {self._name}")

    def freeze(self) -> "CustomRuleRegistry":
        """Stop accepting registrations. Returns self for chaining."""
        with self._lock:
            self._frozen = True
        return self

    def get(self, key: str) -> FieldRule:
        """Get a bundle by exact name.

        Raises:
            NotFoundError: If no bundle has that name
        """
        with self._lock:
            if key not in self._items:
                raise NotFoundError(
                    f"Custom rule not found: {key}",
                    context={
                        "key": key,
                        "registry": self._name,
                        "available_keys": list(self._items.keys()),
                    },
                )
            return self._items[key]

    def get_optional(self, key: str) -> FieldRule | None:
        """Get a bundle by exact name, or None if it is not registered."""
        with self._lock:
            return self._items.get(key)

    def has(self, key: str) -> bool:
        with self._lock:
            return key in self._items

    def list_keys(self) -> List[str]:
        with self._lock:
            return list(self._items.keys())

    def count(self) -> int:
        with self._lock:
            return len(self._items)

    def __len__(self) -> int:
        return self.count()

    def __contains__(self, key: str) -> bool:
        return self.has(key)

    def __iter__(self) -> Iterator[str]:
        return iter(self.list_keys())

    def __repr__(self) -> str:
        return f"CustomRuleRegistry(name={self._name!r}, items={self.count()}, frozen={self._frozen})"

    @classmethod
    def from_mapping(
        cls,
        bundles: Mapping[str, Any],
        name: str = "custom_rules",
        freeze: bool = True,
    ) -> "CustomRuleRegistry":
        """Build a registry from a mapping of bundle name to bundle.

        Args:
            bundles: Mapping of bundle name to rule mapping
            name: Registry name
            freeze: Freeze the registry once loaded

        Returns:
            CustomRuleRegistry instance
        """
        registry = cls(name)
        for key, bundle in bundles.items():
            registry.register(key, bundle)
        if freeze:
            registry.freeze()
        return registry

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        section: str | None = None,
        name: str = "custom_rules",
    ) -> "CustomRuleRegistry":
        """Build a frozen registry from a YAML or JSON file.

        Example file:
            ```yaml
            cpf:
              dataType: string
              regex: "^\\\\d{11}$"
              message:
                regex: "{field} must contain 11 digits"
            ```
        """
        bundles = load_mapping(path, section)
        registry = cls.from_mapping(bundles, name=name)
        logger.info(f"Loaded {registry.count()} custom rules from {path}")
        return registry
