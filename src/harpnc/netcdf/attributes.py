# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Reading and writing of optional scalar and text attributes.

The target is any netCDF4 object carrying attributes: a ``Dataset`` for
global attributes or a ``Variable`` for per-variable ones. Readers
return ``None`` when an attribute is absent and raise
:class:`ProductStructureError` when it is present but malformed, so
callers can tell "not there" from "wrong".
"""

from typing import Any, Optional

import numpy as np

from harpnc.core.exceptions import ProductStructureError, container_error, error_context
from harpnc.product.types import DataType

from .type_codec import is_supported_container_type, to_domain


def has_attribute(target, name: str) -> bool:
    """True if ``target`` carries an attribute called ``name``."""
    with error_context():
        return name in target.ncattrs()


def _get_attribute(target, name: str):
    # netCDF4 reports a missing attribute as AttributeError
    with error_context():
        try:
            return target.getncattr(name)
        except AttributeError as e:
            raise container_error(e) from e


def read_optional_text(target, name: str) -> Optional[str]:
    """
    Read a text attribute.

    Returns:
        The text up to its first NUL character, or None if absent

    Raises:
        ProductStructureError: If the attribute is not text
        ContainerError: If the netCDF library fails to read it
    """
    if not has_attribute(target, name):
        return None
    value = _get_attribute(target, name)
    if isinstance(value, bytes):
        try:
            value = value.decode('utf-8')
        except UnicodeDecodeError:
            raise ProductStructureError(f"attribute '{name}' has invalid text encoding") from None
    if not isinstance(value, str):
        raise ProductStructureError(f"attribute '{name}' has invalid type")
    return value.split('\x00', 1)[0]


def read_optional_scalar(target, name: str, expected_type: Optional[DataType] = None) -> Optional[Any]:
    """
    Read a single-element numeric attribute.

    Args:
        target: netCDF4 Dataset or Variable
        name: Attribute name
        expected_type: Element type the attribute must have on disk;
            None accepts any of the numeric element types

    Returns:
        The value as a numpy scalar of the attribute's type, or None if absent

    Raises:
        ProductStructureError: If the attribute is text, has an unsupported
            or unexpected element type, or holds more than one element
        ContainerError: If the netCDF library fails to read it
    """
    if not has_attribute(target, name):
        return None
    value = _get_attribute(target, name)
    if isinstance(value, (str, bytes)):
        raise ProductStructureError(f"attribute '{name}' has invalid type")

    values = np.asarray(value)
    if values.size != 1:
        raise ProductStructureError(f"attribute '{name}' has invalid format")
    if not is_supported_container_type(values.dtype):
        raise ProductStructureError(f"attribute '{name}' has invalid type")
    data_type = to_domain(values.dtype)
    if data_type is DataType.STRING or (expected_type is not None and data_type is not expected_type):
        raise ProductStructureError(f"attribute '{name}' has invalid type")
    return data_type.dtype.type(values.reshape(-1)[0])


def write_text(target, name: str, value: str) -> None:
    """Write a text attribute (stored as netCDF ``char``)."""
    with error_context(f" (attribute '{name}')"):
        target.setncattr(name, str(value))


def write_scalar(target, name: str, data_type: DataType, value) -> None:
    """Write a single-element attribute stored with the netCDF type of ``data_type``."""
    if not data_type.is_numeric:
        raise AssertionError(f"cannot write scalar attribute '{name}' of type {data_type.value}")
    with error_context(f" (attribute '{name}')"):
        target.setncattr(name, data_type.dtype.type(value))
