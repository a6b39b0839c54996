# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Mapping between in-memory element types and netCDF element types.

    int8   <-> byte   (``i1``)
    int16  <-> short  (``i2``)
    int32  <-> int    (``i4``)
    float  <-> float  (``f4``)
    double <-> double (``f8``)
    string <-> char   (``S1``, fixed-width character rows)

Both directions are total over the six supported types and are each
other's inverse. Anything else reaching :func:`to_container` or
:func:`to_domain` is a programming error and raises ``AssertionError``;
callers screen file input with :func:`is_supported_container_type` first.
"""

from typing import Any, Optional

import numpy as np

from harpnc.product.types import DataType

_TO_CONTAINER = {
    DataType.INT8: 'i1',
    DataType.INT16: 'i2',
    DataType.INT32: 'i4',
    DataType.FLOAT: 'f4',
    DataType.DOUBLE: 'f8',
    DataType.STRING: 'S1',
}

_TO_DOMAIN = {code: data_type for data_type, code in _TO_CONTAINER.items()}


def container_type_code(container_type: Any) -> Optional[str]:
    """
    Normalize a netCDF element type to its byte-order free numpy code.

    Accepts numpy dtypes, dtype strings and numpy scalar types. Returns
    ``None`` for types numpy cannot describe (e.g. netCDF VLEN types).
    """
    try:
        dtype = np.dtype(container_type)
    except TypeError:
        return None
    return dtype.str[1:]


def is_supported_container_type(container_type: Any) -> bool:
    """True if the netCDF element type maps onto one of the six element types."""
    return container_type_code(container_type) in _TO_DOMAIN


def to_container(data_type: DataType) -> str:
    """Return the netCDF type code used to store elements of ``data_type``."""
    try:
        return _TO_CONTAINER[data_type]
    except KeyError:
        raise AssertionError(f"unsupported data type {data_type!r}") from None


def to_domain(container_type: Any) -> DataType:
    """Return the element type for a netCDF element type."""
    code = container_type_code(container_type)
    try:
        return _TO_DOMAIN[code]
    except KeyError:
        raise AssertionError(f"unsupported netCDF data type {container_type!r}") from None
