"""Loading rule definitions from YAML and JSON files."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Union

import yaml  # type: ignore[import-untyped]

from .exceptions import LoaderError
from .rules import RuleSet

logger = logging.getLogger(__name__)


def load_mapping(path: Union[str, Path], section: str | None = None) -> Dict[str, Any]:
    """Load a mapping from a YAML or JSON file.

    Args:
        path: Path to a ``.yaml``, ``.yml`` or ``.json`` file
        section: Optional top-level key to return instead of the whole document

    Returns:
        The loaded mapping (empty for an empty file)

    Raises:
        LoaderError: If the file is missing, unsupported, unparseable or does
            not contain a mapping
    """
    path = Path(path).resolve()

    if not path.exists():
        raise LoaderError(f"Rule file not found: {path}", context={"path": str(path)})

    suffix = path.suffix.lower()
    try:
        with open(path, encoding="utf-8") as f:
            if suffix in [".yaml", ".yml"]:
                data = yaml.safe_load(f)
            elif suffix == ".json":
                data = json.load(f)
            else:
                raise LoaderError(
                    f"Unsupported file format: {suffix}", context={"path": str(path)}
                )
    except (yaml.YAMLError, json.JSONDecodeError, UnicodeDecodeError) as e:
        raise LoaderError(
            f"Failed to parse rule file {path}: {e}", context={"path": str(path)}
        ) from e

    data = data or {}
    if section is not None:
        data = (data.get(section) or {}) if isinstance(data, dict) else data

    if not isinstance(data, dict):
        raise LoaderError(
            f"Rule file {path} must contain a mapping",
            context={"path": str(path), "section": section, "type": type(data).__name__},
        )

    logger.debug(f"Loaded {len(data)} entries from {path}")
    return data


def load_rule_set(path: Union[str, Path], section: str | None = None) -> RuleSet:
    """Load a rule set (field name -> rule) from a YAML or JSON file.

    Example file:
        ```yaml
        age:
          dataType: number
          range: {min: 18, max: 65}
        role:
          list: [user, admin]
          message:
            list: "{field} must be one of {list}"
        ```
    """
    return RuleSet(load_mapping(path, section))
