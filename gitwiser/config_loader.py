"""
gitwiser Configuration

Optional per-repository settings in `.gitwiser.yaml`:

    authors:
      threshold: 75              # 0-100, percent confidence needed to merge
      prefer_human_canonical: true
      max_display_clusters: 20

A missing file means defaults. Command-line flags win over the file.
"""

from __future__ import annotations

from pathlib import Path

import yaml
from loguru import logger
from pydantic import BaseModel, ConfigDict, Field, ValidationError

CONFIG_FILE = ".gitwiser.yaml"


class ConfigError(Exception):
    pass


class AuthorsConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    threshold: int = Field(default=70, ge=0, le=100)
    prefer_human_canonical: bool = False
    max_display_clusters: int = Field(default=10, ge=1)

    @property
    def min_confidence(self) -> float:
        return self.threshold / 100


class GitWiserConfig(BaseModel):
    model_config = ConfigDict(extra="forbid")

    authors: AuthorsConfig = Field(default_factory=AuthorsConfig)


def load_config(repo_path: Path) -> GitWiserConfig:
    config_path = repo_path / CONFIG_FILE
    if not config_path.is_file():
        logger.debug(f"[CONFIG] No {CONFIG_FILE} in {repo_path}, using defaults")
        return GitWiserConfig()

    try:
        data = yaml.safe_load(config_path.read_text()) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read {config_path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a mapping at the top level")

    try:
        config = GitWiserConfig(**data)
    except ValidationError as e:
        raise ConfigError(f"Invalid {config_path}:\n{e}") from e

    logger.debug(f"[CONFIG] Loaded {config_path}")
    return config
