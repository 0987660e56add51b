import argparse
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)

from .constants import DefaultConfig
from .domain.models import LayoutOptions
from .exceptions import ConfigurationError


logger = logging.getLogger(__name__)


# --- Pydantic Model for Configuration Schema ---


class GeneratorSettings(BaseModel):
    """Validated settings shared by the path resolver, materializer and patcher."""

    model_config = ConfigDict(extra="ignore")

    base_path: str = Field(
        DefaultConfig.BASE_PATH,
        min_length=1,
        description="Root of the monorepo that holds packages/ and modules/.",
    )
    templates_path: Optional[str] = Field(
        None,
        description="Directory with one template tree per location. "
        "Defaults to <base_path>/tools/templates/module.",
    )
    old: bool = Field(
        False, description="Generate modules in the legacy per-package layout."
    )
    export_file_name: Optional[str] = Field(
        None,
        description="Aggregator file name. Defaults to index.js inside a modules "
        "directory and modules.js next to the package sources.",
    )
    formatter: Optional[List[str]] = Field(
        None,
        description="Command run on an aggregator file after an entry is removed, "
        "e.g. ['prettier', '--write']. The file path is appended.",
    )
    dependency_version: str = Field(
        DefaultConfig.DEPENDENCY_VERSION,
        min_length=1,
        description="Version range written to package.json for new-layout modules.",
    )

    @field_validator("export_file_name")
    @classmethod
    def check_plain_file_name(cls, v: Optional[str]) -> Optional[str]:
        if v is None:
            return v
        if not v.strip():
            raise ValueError("export_file_name cannot be empty")
        if "/" in v or "\\" in v:
            raise ValueError(f"'{v}' must be a file name, not a path")
        return v

    @field_validator("formatter", mode="before")
    @classmethod
    def check_formatter_command(cls, v):
        """Accept a command string or a list of arguments."""
        if v is None:
            return None
        if isinstance(v, str):
            v = v.split()
        if not isinstance(v, list) or not all(isinstance(item, str) for item in v):
            raise ValueError("formatter must be a command string or a list of strings")
        return v or None

    @model_validator(mode="after")
    def default_templates_path(self) -> "GeneratorSettings":
        if self.templates_path is None:
            self.templates_path = str(Path(self.base_path) / DefaultConfig.TEMPLATES_DIR)
        return self

    @property
    def layout(self) -> LayoutOptions:
        return LayoutOptions(old=self.old)


def _format_validation_error(error: ValidationError) -> List[str]:
    """Format every pydantic error as 'location: message'."""
    lines = []
    for item in error.errors():
        loc_parts = [str(loc_item) for loc_item in item.get("loc", ())]
        loc_str = " -> ".join(loc_parts) if loc_parts else "Top Level"
        lines.append(f"{loc_str}: {item.get('msg', 'Unknown error')}")
    return lines


def _read_yaml(config_path: str) -> Dict[str, Any]:
    config_file = Path(config_path)
    if not config_file.is_file():
        raise ConfigurationError(
            f"Configuration file not found: {config_path}",
            config_file=config_path,
            context={"resolved_path": str(config_file.resolve())},
        )

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(
            f"Invalid YAML configuration: {e}", config_file=config_path
        ) from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigurationError(
            "Configuration file must contain a dictionary",
            config_file=config_path,
            context={"loaded_type": type(data).__name__},
        )
    logger.debug(f"Loaded configuration from {config_path}")
    return data


def load_config(
    config_path: Optional[str] = None, cli_args: Optional[argparse.Namespace] = None
) -> GeneratorSettings:
    """
    Load settings from a YAML file, overlay CLI arguments and validate.

    Only CLI arguments that were actually given (not None) override the
    file.

    Raises:
        ConfigurationError: If the file cannot be read or validation fails
    """
    raw_config: Dict[str, Any] = {}

    if config_path:
        raw_config.update(_read_yaml(config_path))

    if cli_args is not None:
        overridden_keys = set()
        for key, value in vars(cli_args).items():
            if value is not None and key in GeneratorSettings.model_fields:
                raw_config[key] = value
                overridden_keys.add(key)
        if overridden_keys:
            logger.debug(f"Overridden config keys from CLI arguments: {overridden_keys}")

    try:
        settings = GeneratorSettings.model_validate(raw_config)
    except ValidationError as e:
        raise ConfigurationError(
            "Configuration validation failed",
            config_file=config_path,
            context={"errors": "; ".join(_format_validation_error(e))},
        ) from e

    logger.debug(f"Effective configuration: {settings}")
    return settings
