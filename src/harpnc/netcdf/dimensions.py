# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Per-call registry of the distinct dimensions used by a product.

A variable lists its own (kind, length) axes, a netCDF file holds one
shared pool of dimensions. The table reconciles the two: every distinct
dimension gets a dense position in first-use order, which is also its
netCDF dimension id.

Identity rules:
- a named kind (time, latitude, ...) has at most one entry; using it again
  with another length is a conflict
- the independent kind is identified by its length, one entry per length
"""

from dataclasses import dataclass
from typing import Iterator, List, Optional

from harpnc.core.constants import INDEPENDENT_DIMENSION_PREFIX
from harpnc.core.exceptions import DimensionConflictError, ProductStructureError
from harpnc.product.types import DimensionType


@dataclass(frozen=True)
class DimensionEntry:
    """One distinct dimension: its position, kind and length."""
    index: int
    dimension_type: DimensionType
    length: int

    @property
    def netcdf_name(self) -> str:
        """On-disk name: the kind name, or ``independent_<length>``."""
        return dimension_name(self.dimension_type, self.length)


def dimension_name(dimension_type: DimensionType, length: int) -> str:
    """Return the netCDF dimension name for a (kind, length) pair."""
    if dimension_type is DimensionType.INDEPENDENT:
        return f"{INDEPENDENT_DIMENSION_PREFIX}{length}"
    return dimension_type.value


def parse_dimension_name(name: str) -> DimensionType:
    """
    Return the kind encoded in a netCDF dimension name.

    ``independent_<digits>`` is the independent kind; any other name must
    be a named kind. The length in an independent name is not used.

    Raises:
        ProductStructureError: If the name is neither
    """
    if name.startswith(INDEPENDENT_DIMENSION_PREFIX):
        suffix = name[len(INDEPENDENT_DIMENSION_PREFIX):]
        if suffix.isdigit() and suffix.isascii():
            return DimensionType.INDEPENDENT
    try:
        dimension_type = DimensionType.parse(name)
    except ValueError:
        dimension_type = None
    if dimension_type is None or dimension_type is DimensionType.INDEPENDENT:
        raise ProductStructureError(f"unsupported dimension '{name}'")
    return dimension_type


class DimensionTable:
    """Dense, ordered registry of distinct dimensions for one import or export."""

    def __init__(self) -> None:
        self._entries: List[DimensionEntry] = []

    def find(self, dimension_type: DimensionType, length: int) -> Optional[int]:
        """
        Return the position of the matching entry, or None.

        Independent dimensions match on length, named kinds on kind alone.
        """
        for entry in self._entries:
            if dimension_type is DimensionType.INDEPENDENT:
                if entry.dimension_type is DimensionType.INDEPENDENT and entry.length == length:
                    return entry.index
            elif entry.dimension_type is dimension_type:
                return entry.index
        return None

    def intern(self, dimension_type: DimensionType, length: int) -> int:
        """
        Return the position of the dimension, adding it when it is new.

        Raises:
            DimensionConflictError: If a named kind is already registered
                with a different length
        """
        index = self.find(dimension_type, length)
        if index is not None:
            existing = self._entries[index]
            if existing.length != length:
                raise DimensionConflictError(
                    f"duplicate dimensions with name '{dimension_type.value}' and different sizes "
                    f"'{existing.length}' '{length}'",
                    dimension_type=dimension_type,
                    existing_length=existing.length,
                    length=length,
                )
            return index

        index = len(self._entries)
        self._entries.append(DimensionEntry(index, dimension_type, int(length)))
        return index

    def resolve(self, index: int) -> DimensionEntry:
        """
        Return the entry at a position.

        Raises:
            ProductStructureError: If no dimension has this position
        """
        if not 0 <= index < len(self._entries):
            raise ProductStructureError(f"invalid dimension id {index}")
        return self._entries[index]

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[DimensionEntry]:
        return iter(self._entries)
