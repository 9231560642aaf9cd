"""
Validator settings.

Settings hold the per-validator switches that are usually shared across an
application: message language, catalog directory, label prefixing, early
abort and strict (no extra fields) mode.
"""

from __future__ import annotations

from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict


class ValidatorSettings(BaseModel):
    """Configuration for Validator instances.

    Can be created from dict or YAML with partial overrides. Unknown keys are
    ignored so one application config file can carry other sections too.

    Examples:
        # All defaults
        settings = ValidatorSettings()

        # Partial override from dict
        settings = ValidatorSettings.from_dict({"lang": "de", "strict": True})

        # From YAML file
        settings = ValidatorSettings.from_yaml("validation.yaml")
    """

    model_config = ConfigDict(extra="ignore")

    lang: str | None = None
    lang_dir: str | None = None
    prepend_labels: bool = True
    stop_on_first_fail: bool = False
    strict: bool = False

    @classmethod
    def from_dict(cls, config: dict[str, Any]) -> ValidatorSettings:
        """
        Create settings from a dict, only overriding specified values.

        Params:
            config: Dictionary with partial overrides

        Returns:
            ValidatorSettings with the overrides applied
        """
        return cls.model_validate(config)

    @classmethod
    def from_yaml(cls, yaml_path: str | Path) -> ValidatorSettings:
        """
        Create settings from a YAML file.

        Example YAML:
            lang: fr
            prepend_labels: false
            stop_on_first_fail: true
        """
        import yaml

        path = Path(yaml_path)
        with path.open(encoding="utf-8") as f:
            config = yaml.safe_load(f) or {}

        return cls.from_dict(config)
