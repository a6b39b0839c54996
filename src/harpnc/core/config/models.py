# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Codec configuration model.

Contains HarpncConfig, the settings shared by import, export and the CLI:
container format, atomic writes, text encoding and logging level.
"""

import codecs
from pathlib import Path
from typing import Any, Dict, Literal, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from harpnc.core.constants import SUPPORTED_NETCDF_FORMATS
from harpnc.core.exceptions import ConfigurationError

# Shared by all config models
FROZEN_CONFIG = ConfigDict(extra='allow', populate_by_name=True, frozen=True)


class HarpncConfig(BaseModel):
    """Settings for reading and writing HARP netCDF products"""
    model_config = FROZEN_CONFIG

    netcdf_format: str = Field(default='NETCDF3_CLASSIC', alias='NETCDF_FORMAT')
    atomic_write: bool = Field(default=True, alias='ATOMIC_WRITE')
    string_encoding: str = Field(default='utf-8', alias='STRING_ENCODING')
    log_level: Literal['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'] = Field(default='INFO', alias='LOG_LEVEL')

    @field_validator('netcdf_format')
    @classmethod
    def validate_netcdf_format(cls, v):
        """Restrict export to formats that hold the six element types natively"""
        v = str(v).upper()
        if v not in SUPPORTED_NETCDF_FORMATS:
            raise ValueError(
                f"netcdf_format must be one of {', '.join(SUPPORTED_NETCDF_FORMATS)}, got {v}"
            )
        return v

    @field_validator('string_encoding')
    @classmethod
    def validate_string_encoding(cls, v):
        """Ensure the encoding is known to the codecs registry"""
        try:
            codecs.lookup(v)
        except LookupError as e:
            raise ValueError(f"unknown string encoding '{v}'") from e
        return v

    @field_validator('log_level', mode='before')
    @classmethod
    def normalize_log_level(cls, v):
        """Accept lower-case level names"""
        return v.upper() if isinstance(v, str) else v

    @classmethod
    def default(cls) -> 'HarpncConfig':
        """Return a configuration holding only defaults."""
        return cls()

    @classmethod
    def _to_aliases(cls, values: Dict[str, Any]) -> Dict[str, Any]:
        """Rename field-name keys to their upper-case aliases so merged sources cannot disagree."""
        aliases = {name: info.alias for name, info in cls.model_fields.items() if info.alias}
        return {aliases.get(key, key): value for key, value in values.items()}

    @classmethod
    def from_dict(cls, values: Dict[str, Any]) -> 'HarpncConfig':
        """
        Build a validated configuration from a flat mapping.

        Keys may be either the upper-case aliases (``NETCDF_FORMAT``) or the
        field names (``netcdf_format``).

        Raises:
            ConfigurationError: If a value fails validation
        """
        try:
            return cls.model_validate(values)
        except ValidationError as e:
            raise ConfigurationError(f"Invalid harpnc configuration: {_format_validation_error(e)}") from e

    @classmethod
    def from_file(
        cls,
        path: Union[str, Path],
        overrides: Optional[Dict[str, Any]] = None,
    ) -> 'HarpncConfig':
        """
        Load configuration from a YAML file.

        Priority (highest first): ``overrides``, file content, defaults.

        Args:
            path: Path to configuration YAML file
            overrides: Dictionary of CLI/programmatic overrides

        Returns:
            Validated HarpncConfig instance

        Raises:
            ConfigurationError: If the file cannot be parsed or is invalid
            FileNotFoundError: If config file is missing
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Configuration file not found: {path}")

        try:
            with open(path, "r") as f:
                file_config = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ConfigurationError(f"Cannot parse configuration file {path}: {e}") from e

        if not isinstance(file_config, dict):
            raise ConfigurationError(
                f"Configuration file {path} must contain a mapping, got {type(file_config).__name__}"
            )

        if overrides:
            file_config = {**cls._to_aliases(file_config), **cls._to_aliases(overrides)}

        return cls.from_dict(file_config)


def _format_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one readable line."""
    parts = []
    for item in error.errors():
        location = '.'.join(str(part) for part in item.get('loc', ()))
        parts.append(f"{location}: {item.get('msg')}" if location else str(item.get('msg')))
    return '; '.join(parts)


def resolve_config(config: Optional[HarpncConfig]) -> HarpncConfig:
    """Return ``config`` or the default configuration when it is None."""
    return config if config is not None else HarpncConfig.default()
