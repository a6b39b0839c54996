# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Packing of text arrays into fixed-width netCDF character rows.

netCDF classic files have no variable-length strings. A text array of
``n`` values is stored as an ``n x row_width`` block of chars, where
``row_width`` is the longest encoded value (at least 1). Short rows are
zero padded; on read every row ends at its first NUL byte or at
``row_width``.
"""

from typing import Iterable, List, Sequence, Tuple

import numpy as np

from harpnc.core.exceptions import InvalidArgumentError, ProductStructureError, require


def _encode_all(values: Iterable[str], encoding: str) -> List[bytes]:
    encoded = []
    for value in values:
        try:
            encoded.append(value.encode(encoding))
        except UnicodeEncodeError:
            raise InvalidArgumentError(f"text value {value!r} cannot be encoded as {encoding}") from None
    return encoded


def pack(values: Sequence[str], n: int = None, encoding: str = 'utf-8') -> Tuple[bytes, int]:
    """
    Pack text values into one rectangular char buffer.

    Args:
        values: The text values, in storage order
        n: Number of rows; defaults to ``len(values)``
        encoding: Text encoding used for the bytes on disk

    Returns:
        ``(buffer, row_width)`` where ``buffer`` holds ``n * row_width`` bytes
    """
    encoded = _encode_all(values, encoding)
    if n is None:
        n = len(encoded)
    require(len(encoded) == n, f"expected {n} text values, got {len(encoded)}")

    width = max((len(value) for value in encoded), default=0) or 1
    buffer = bytearray(n * width)
    for i, value in enumerate(encoded):
        buffer[i * width:i * width + len(value)] = value
    return bytes(buffer), width


def unpack(buffer: bytes, n: int, width: int, encoding: str = 'utf-8') -> List[str]:
    """
    Split a rectangular char buffer into ``n`` text values.

    Raises:
        ProductStructureError: If the buffer size does not match
            ``n * width`` or a row is not valid text in ``encoding``
    """
    buffer = bytes(buffer)
    if len(buffer) != n * width:
        raise ProductStructureError(
            f"text buffer holds {len(buffer)} bytes, expected {n} rows of {width}"
        )
    values = []
    for i in range(n):
        row = buffer[i * width:(i + 1) * width]
        end = row.find(b'\x00')
        if end >= 0:
            row = row[:end]
        try:
            values.append(row.decode(encoding))
        except UnicodeDecodeError as e:
            raise ProductStructureError(f"text value {i} is not valid {encoding}: {e}") from None
    return values


def pack_array(values: np.ndarray, encoding: str = 'utf-8') -> np.ndarray:
    """
    Pack a text array into a char array with one extra trailing axis.

    The result has dtype ``S1`` and shape ``values.shape + (row_width,)``,
    ready to be assigned to a netCDF char variable.
    """
    flat = np.asarray(values, dtype=object).ravel()
    buffer, width = pack(flat.tolist(), flat.size, encoding)
    return np.frombuffer(buffer, dtype='S1').reshape(np.shape(values) + (width,))


def unpack_array(chars: np.ndarray, shape: tuple, encoding: str = 'utf-8') -> np.ndarray:
    """
    Convert a char array read from netCDF into an ``object`` array of ``str``.

    The trailing axis of ``chars`` is the row width; ``shape`` is the
    shape of the resulting text array.
    """
    chars = np.ascontiguousarray(chars, dtype='S1')
    width = chars.shape[-1] if chars.ndim > 0 else 1
    n = int(np.prod(shape, dtype=np.int64))
    values = np.empty(n, dtype=object)
    values[:] = unpack(chars.tobytes(), n, width, encoding)
    return values.reshape(shape)
