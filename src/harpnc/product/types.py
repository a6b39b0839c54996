# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Element and dimension types of the in-memory product model.

- DataType: the six primitive element types a variable can hold
- DimensionType: the semantic role of an axis (named kinds and ``independent``)
"""

from enum import Enum

import numpy as np


class DataType(Enum):
    """Primitive element type of a variable."""
    INT8 = 'int8'
    INT16 = 'int16'
    INT32 = 'int32'
    FLOAT = 'float'
    DOUBLE = 'double'
    STRING = 'string'

    @property
    def dtype(self) -> np.dtype:
        """numpy dtype used for payloads of this type (``object`` for text)."""
        return _NUMPY_DTYPES[self]

    @property
    def is_numeric(self) -> bool:
        return self is not DataType.STRING

    @property
    def is_integer(self) -> bool:
        return self in (DataType.INT8, DataType.INT16, DataType.INT32)

    def unbounded_min(self):
        """
        Sentinel meaning "no lower bound" for ``valid_min``.

        Integer types use the smallest representable value, floating-point
        types use negative infinity. Text has no valid range.
        """
        if self is DataType.STRING:
            return None
        if self.is_integer:
            return self.dtype.type(np.iinfo(self.dtype).min)
        return self.dtype.type(-np.inf)

    def unbounded_max(self):
        """Sentinel meaning "no upper bound" for ``valid_max``."""
        if self is DataType.STRING:
            return None
        if self.is_integer:
            return self.dtype.type(np.iinfo(self.dtype).max)
        return self.dtype.type(np.inf)

    def is_unbounded_min(self, value) -> bool:
        """True when ``value`` equals the "no lower bound" sentinel."""
        return value is None or value == self.unbounded_min()

    def is_unbounded_max(self, value) -> bool:
        """True when ``value`` equals the "no upper bound" sentinel."""
        return value is None or value == self.unbounded_max()


_NUMPY_DTYPES = {
    DataType.INT8: np.dtype(np.int8),
    DataType.INT16: np.dtype(np.int16),
    DataType.INT32: np.dtype(np.int32),
    DataType.FLOAT: np.dtype(np.float32),
    DataType.DOUBLE: np.dtype(np.float64),
    DataType.STRING: np.dtype(object),
}


class DimensionType(Enum):
    """
    Semantic role of a dimension.

    At most one dimension of each named kind exists per product. The
    ``INDEPENDENT`` kind is identified by its length alone.
    """
    INDEPENDENT = 'independent'
    TIME = 'time'
    LATITUDE = 'latitude'
    LONGITUDE = 'longitude'
    VERTICAL = 'vertical'
    SPECTRAL = 'spectral'

    @classmethod
    def parse(cls, name: str) -> 'DimensionType':
        """
        Map a dimension type name to its member.

        Raises:
            ValueError: If ``name`` is not a known dimension type
        """
        try:
            return cls(name)
        except ValueError:
            raise ValueError(f"invalid dimension type '{name}'") from None
