# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""HARP netCDF codec: type mapping, dimensions, text packing, attributes and transcoding."""

from .convention import check_convention, parse_convention, verify_product
from .dimensions import DimensionEntry, DimensionTable
from .transcoder import (
    GlobalMetadata,
    ProductTranscoder,
    export_product,
    import_product,
    read_global_metadata,
)

__all__ = [
    'DimensionEntry',
    'DimensionTable',
    'GlobalMetadata',
    'ProductTranscoder',
    'check_convention',
    'parse_convention',
    'verify_product',
    'export_product',
    'import_product',
    'read_global_metadata',
]
