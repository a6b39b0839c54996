# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""Core components: error taxonomy, convention constants and configuration."""

from .config import HarpncConfig
from .constants import FormatVersion, GlobalAttributes, VariableAttributes, MAX_NUM_DIMS
from .exceptions import (
    ConfigurationError,
    ContainerError,
    DimensionConflictError,
    HarpError,
    InvalidArgumentError,
    OutOfMemoryError,
    ProductStructureError,
    UnsupportedProductError,
    UnsupportedVersionError,
)

__all__ = [
    'HarpncConfig',
    'FormatVersion',
    'GlobalAttributes',
    'VariableAttributes',
    'MAX_NUM_DIMS',
    'HarpError',
    'InvalidArgumentError',
    'ContainerError',
    'UnsupportedProductError',
    'UnsupportedVersionError',
    'ProductStructureError',
    'DimensionConflictError',
    'OutOfMemoryError',
    'ConfigurationError',
]
