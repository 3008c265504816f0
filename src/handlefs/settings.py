"""Storage settings loaded from YAML or JSON files.

Example ``storage.yaml``::

    root: ./data
    aliases:
      uploads: user/uploads
      cache: var/cache

A relative ``root`` is resolved against the directory of the settings file.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

YAML_SUFFIXES = {".yaml", ".yml"}
JSON_SUFFIXES = {".json"}


class StorageSettings(BaseModel):
    """Root directory and alias table for a Storage."""

    model_config = ConfigDict(extra="forbid")

    root: str
    aliases: dict[str, str] = Field(default_factory=dict)

    @field_validator("aliases")
    @classmethod
    def _check_tokens(cls, value: dict[str, str]) -> dict[str, str]:
        for token in value:
            if not token or "{" in token or "}" in token:
                raise ValueError(f"Invalid alias token: {token!r}")
        return value

    @classmethod
    def from_file(cls, path: Path) -> StorageSettings:
        """Load settings from a YAML or JSON file.

        Args:
            path: Path to a ``.yaml``, ``.yml`` or ``.json`` file.

        Returns:
            Parsed StorageSettings.

        Raises:
            FileNotFoundError: If the file doesn't exist.
            ValueError: If the format is unsupported or the content is not a mapping.
            pydantic.ValidationError: If fields are missing or invalid.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")

        suffix = path.suffix.lower()
        if suffix in YAML_SUFFIXES:
            try:
                data: Any = yaml.safe_load(path.read_text()) or {}
            except yaml.YAMLError as e:
                raise ValueError(f"Invalid YAML in {path}: {e}") from e
        elif suffix in JSON_SUFFIXES:
            data = json.loads(path.read_text())
        else:
            raise ValueError(f"Unsupported settings format: {path.suffix or path.name}")

        if not isinstance(data, dict):
            raise ValueError(f"Settings in {path} must be a mapping")

        root = data.get("root")
        if isinstance(root, str) and not Path(root).is_absolute():
            data["root"] = str((path.parent / root).resolve())

        return cls.model_validate(data)
