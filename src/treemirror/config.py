# src/treemirror/config.py: Pydantic models for configuration.
# This module defines the schema for the 'mirrors.yaml' configuration file:
# a list of named source/destination pairs plus defaults for the manifest file
# name and filtering. It loads the file with PyYAML, validates it with
# Pydantic, and resolves each mirror's effective settings.

from __future__ import annotations

import os
import yaml
from pathlib import Path
from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator
from typing import List, Literal, Optional

from .filters import FilterPredicate, build_filter
from .mirror import DEFAULT_MANIFEST_FILE
from .util.paths import get_xdg_config_home, expand_path
from .util.errors import ConfigError

CONFIG_ENV_VAR = "TREEMIRROR_CONFIG"

# --- Pydantic Models for Configuration Schema ---

class Defaults(BaseModel):
    manifest_file: str = DEFAULT_MANIFEST_FILE
    include_hidden: bool = False
    exclude: List[str] = Field(default_factory=list)

    @field_validator("manifest_file")
    @classmethod
    def _plain_name(cls, value: str) -> str:
        if not value or "/" in value or "\\" in value or value in (".", ".."):
            raise ValueError("manifest_file must be a plain file name")
        return value

class LoggingConfig(BaseModel):
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"

class Mirror(BaseModel):
    name: str
    source: Path
    destination: Path
    exclude: Optional[List[str]] = None
    include_hidden: Optional[bool] = None

    @field_validator("source", "destination", mode="before")
    @classmethod
    def _expand(cls, value):
        return expand_path(value)

class Config(BaseModel):
    version: Literal[1]
    defaults: Defaults = Field(default_factory=Defaults)
    mirrors: List[Mirror] = Field(default_factory=list)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)

    @model_validator(mode="after")
    def _unique_names(self) -> Config:
        seen = set()
        for mirror in self.mirrors:
            if mirror.name in seen:
                raise ValueError(f"Duplicate mirror name: {mirror.name}")
            seen.add(mirror.name)
        return self

    def get_mirror(self, name: str) -> Mirror:
        for mirror in self.mirrors:
            if mirror.name == name:
                return mirror
        raise ConfigError(f"Mirror '{name}' not found in configuration.")

    def filter_for(self, mirror: Mirror) -> FilterPredicate:
        """Build the filter for a mirror, falling back to the defaults."""
        exclude = mirror.exclude if mirror.exclude is not None else self.defaults.exclude
        include_hidden = (
            mirror.include_hidden
            if mirror.include_hidden is not None
            else self.defaults.include_hidden
        )
        return build_filter(exclude, include_hidden)


# --- Configuration Loading ---

def default_config_path() -> Path:
    """The config path: $TREEMIRROR_CONFIG if set, else the XDG config dir."""
    override = os.environ.get(CONFIG_ENV_VAR)
    if override:
        return expand_path(override)
    return get_xdg_config_home() / "mirrors.yaml"

def load_config(config_path: Optional[Path] = None) -> Config:
    """
    Loads, validates, and returns the configuration.
    """
    config_path = Path(config_path) if config_path else default_config_path()
    if not config_path.is_file():
        raise ConfigError(
            f"Configuration file not found. Please create it at '{config_path}'."
        )

    try:
        with open(config_path, "r") as f:
            raw_config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigError(f"Error parsing YAML configuration: {e}")

    if not isinstance(raw_config, dict):
        raise ConfigError(f"Configuration at '{config_path}' must be a mapping.")

    try:
        config = Config.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigError(f"Configuration validation failed: {e}")

    return config
