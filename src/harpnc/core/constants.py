# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
On-disk convention constants for harpnc.

Centralizes the names and version numbers of the HARP netCDF convention
so the reader, the writer and the tests agree on a single source of truth.
"""


class FormatVersion:
    """Version of the HARP netCDF convention written by this library."""

    FAMILY = "HARP"
    """Family token of the ``Conventions`` attribute."""

    MAJOR = 1
    """Major version; files with a larger major are rejected."""

    MINOR = 0
    """Minor version; files with the same major and a larger minor are rejected."""

    @classmethod
    def convention(cls) -> str:
        """Return the ``Conventions`` text written on export (``HARP-1.0``)."""
        return f"{cls.FAMILY}-{cls.MAJOR}.{cls.MINOR}"


class GlobalAttributes:
    """Names of the global (product level) attributes."""

    CONVENTIONS = "Conventions"
    DATETIME_START = "datetime_start"
    DATETIME_STOP = "datetime_stop"
    SOURCE_PRODUCT = "source_product"
    HISTORY = "history"


class VariableAttributes:
    """Names of the per-variable attributes."""

    DESCRIPTION = "description"
    UNITS = "units"
    VALID_MIN = "valid_min"
    VALID_MAX = "valid_max"


MAX_NUM_DIMS = 8
"""Maximum number of dimensions of an in-memory variable."""

INDEPENDENT_DIMENSION_PREFIX = "independent_"
"""Prefix of on-disk names of independent dimensions (``independent_<length>``)."""

DATETIME_VARIABLE = "datetime"
DATETIME_START_VARIABLE = "datetime_start"
DATETIME_STOP_VARIABLE = "datetime_stop"

SUPPORTED_NETCDF_FORMATS = ("NETCDF3_CLASSIC", "NETCDF3_64BIT_OFFSET", "NETCDF4_CLASSIC")
