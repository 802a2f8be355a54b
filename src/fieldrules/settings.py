"""Engine settings from environment variables or a settings file.

Environment variable format:
    FIELDRULES_<SETTING>

Examples:
    - FIELDRULES_CUSTOM_RULES_PATH=/etc/app/custom_rules.yaml
    - FIELDRULES_CUSTOM_RULES_SECTION=bundles
    - FIELDRULES_UNKNOWN_ERROR_MESSAGE="Validation failed"
"""

import logging
import os
from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, Mapping, Union

from .exceptions import ConfigurationError
from .loader import load_mapping
from .result import UNKNOWN_ERROR_MESSAGE

logger = logging.getLogger(__name__)

ENV_PREFIX = "FIELDRULES_"


@dataclass(frozen=True)
class Settings:
    """Process-wide engine settings.

    Attributes:
        custom_rules_path: YAML/JSON file holding the custom-rule bundles
        custom_rules_section: Optional top-level key of that file to read
        unknown_error_message: Message returned when an unexpected fault is caught
    """

    custom_rules_path: str | None = None
    custom_rules_section: str | None = None
    unknown_error_message: str = UNKNOWN_ERROR_MESSAGE

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Settings":
        """Create settings from a dictionary, rejecting unknown keys.

        Raises:
            ConfigurationError: If a key is not a known setting
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigurationError(
                f"Unknown settings: {', '.join(unknown)}",
                context={"unknown": unknown, "known": sorted(known)},
            )
        return cls(**dict(data))

    @classmethod
    def from_env(
        cls,
        environ: Mapping[str, str] | None = None,
        prefix: str = ENV_PREFIX,
    ) -> "Settings":
        """Create settings from ``FIELDRULES_``-prefixed environment variables.

        Variables that do not name a setting are ignored.

        Args:
            environ: Environment mapping (defaults to ``os.environ``)
            prefix: Variable prefix
        """
        environ = os.environ if environ is None else environ
        known = {f.name for f in fields(cls)}
        values: Dict[str, Any] = {}

        for key, value in environ.items():
            if not key.startswith(prefix):
                continue
            name = key[len(prefix):].lower()
            if name in known:
                values[name] = value
            else:
                logger.debug(f"Ignoring unknown environment setting {key}")

        return cls(**values)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "Settings":
        """Create settings from the ``settings`` section of a YAML/JSON file.

        A relative ``custom_rules_path`` is resolved against the file's directory.
        """
        data = dict(load_mapping(path, section="settings"))
        rules_path = data.get("custom_rules_path")
        if rules_path and not Path(rules_path).is_absolute():
            data["custom_rules_path"] = str(Path(path).resolve().parent / rules_path)
        return cls.from_dict(data)
