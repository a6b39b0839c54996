# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""In-memory product model: products, variables and their types."""

from .product import Product
from .types import DataType, DimensionType
from .variable import Variable, new_variable

__all__ = ['Product', 'Variable', 'new_variable', 'DataType', 'DimensionType']
