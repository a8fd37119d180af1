"""Base models for the secretenv project."""

from pathlib import Path
from typing import Self

import yaml
from pydantic import BaseModel


class BaseConfig(BaseModel):
    """A base configuration for a secretenv run."""

    @classmethod
    def from_manifest(cls, manifest_path: Path | str) -> Self:
        """Load the configuration from a YAML manifest file."""
        with open(manifest_path) as f:
            manifest = yaml.safe_load(f)
        return cls.model_validate(manifest or {})
