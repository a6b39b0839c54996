# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Operation taxonomy for products read and written by harpnc.

Each operation kind is its own frozen dataclass carrying strongly typed
arguments; ``Operation`` is the union of all kinds and ``OperationType``
names them. Constructors validate their arguments and raise
:class:`InvalidArgumentError`. Executing operations is done elsewhere.

Example:
    >>> op = ComparisonFilter('pressure', ComparisonOperator.GT, 100.0, unit='hPa')
    >>> op.kind
    <OperationType.FILTER_COMPARISON: 'filter_comparison'>
    >>> op.variable_name, op.is_dimension_filter
    ('pressure', True)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import ClassVar, Optional, Tuple, Union

from harpnc.core.constants import MAX_NUM_DIMS
from harpnc.core.exceptions import InvalidArgumentError, require
from harpnc.product.types import DimensionType


class OperationType(Enum):
    """Closed set of operation kinds."""
    FILTER_COLLOCATION = 'filter_collocation'
    FILTER_COMPARISON = 'filter_comparison'
    FILTER_STRING_COMPARISON = 'filter_string_comparison'
    FILTER_BIT_MASK = 'filter_bit_mask'
    FILTER_MEMBERSHIP = 'filter_membership'
    FILTER_STRING_MEMBERSHIP = 'filter_string_membership'
    FILTER_VALID_RANGE = 'filter_valid_range'
    FILTER_LONGITUDE_RANGE = 'filter_longitude_range'
    FILTER_POINT_DISTANCE = 'filter_point_distance'
    FILTER_AREA_MASK_COVERS_POINT = 'filter_area_mask_covers_point'
    FILTER_AREA_MASK_COVERS_AREA = 'filter_area_mask_covers_area'
    FILTER_AREA_MASK_INTERSECTS_AREA = 'filter_area_mask_intersects_area'
    DERIVE_VARIABLE = 'derive_variable'
    KEEP_VARIABLE = 'keep_variable'
    EXCLUDE_VARIABLE = 'exclude_variable'
    REGRID = 'regrid'

    @property
    def is_dimension_filter(self) -> bool:
        return self.value.startswith('filter_')


class CollocationSide(Enum):
    LEFT = 'left'
    RIGHT = 'right'


class ComparisonOperator(Enum):
    EQ = '=='
    NE = '!='
    LT = '<'
    LE = '<='
    GT = '>'
    GE = '>='


class BitMaskOperator(Enum):
    ANY = 'any'
    NONE = 'none'


class MembershipOperator(Enum):
    IN = 'in'
    NOT_IN = 'not in'


def _require_name(value: str, what: str) -> None:
    require(isinstance(value, str) and value != '', f"{what} is empty")


def _enum(enum_cls, value):
    try:
        return enum_cls(value)
    except ValueError:
        raise InvalidArgumentError(f"invalid {enum_cls.__name__} '{value}'") from None


class _OperationBase:
    """Behaviour shared by every operation kind."""

    kind: ClassVar[OperationType]

    @property
    def variable_name(self) -> Optional[str]:
        """The single variable the operation targets, or None for kinds without one."""
        return None

    @property
    def is_dimension_filter(self) -> bool:
        return self.kind.is_dimension_filter


class _VariableOperation(_OperationBase):
    """Operations that target one variable by name."""

    @property
    def variable_name(self) -> Optional[str]:
        return self.variable


# ---------------------------------------------------------------------------
# Filters
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CollocationFilter(_OperationBase):
    """Keep samples listed in a collocation result file."""
    kind: ClassVar[OperationType] = OperationType.FILTER_COLLOCATION
    filename: str
    side: CollocationSide = CollocationSide.LEFT

    def __post_init__(self):
        _require_name(self.filename, "collocation filename")
        object.__setattr__(self, 'side', _enum(CollocationSide, self.side))


@dataclass(frozen=True)
class ComparisonFilter(_VariableOperation):
    """Compare a numeric variable against a value, optionally in a given unit."""
    kind: ClassVar[OperationType] = OperationType.FILTER_COMPARISON
    variable: str
    operator: ComparisonOperator
    value: float
    unit: Optional[str] = None

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'operator', _enum(ComparisonOperator, self.operator))
        object.__setattr__(self, 'value', float(self.value))


@dataclass(frozen=True)
class StringComparisonFilter(_VariableOperation):
    """Compare a text variable against a text value."""
    kind: ClassVar[OperationType] = OperationType.FILTER_STRING_COMPARISON
    variable: str
    operator: ComparisonOperator
    value: str

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'operator', _enum(ComparisonOperator, self.operator))
        require(isinstance(self.value, str), "string comparison value must be text")


@dataclass(frozen=True)
class BitMaskFilter(_VariableOperation):
    """Test an integer variable against a 32-bit mask."""
    kind: ClassVar[OperationType] = OperationType.FILTER_BIT_MASK
    variable: str
    operator: BitMaskOperator
    bit_mask: int

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'operator', _enum(BitMaskOperator, self.operator))
        require(0 <= int(self.bit_mask) <= 0xFFFFFFFF, f"bit mask {self.bit_mask} does not fit in 32 bits")


@dataclass(frozen=True)
class MembershipFilter(_VariableOperation):
    """Test a numeric variable for (non-)membership of a value list."""
    kind: ClassVar[OperationType] = OperationType.FILTER_MEMBERSHIP
    variable: str
    operator: MembershipOperator
    values: Tuple[float, ...]
    unit: Optional[str] = None

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'operator', _enum(MembershipOperator, self.operator))
        object.__setattr__(self, 'values', tuple(float(v) for v in self.values))
        require(len(self.values) > 0, "membership filter needs at least one value")


@dataclass(frozen=True)
class StringMembershipFilter(_VariableOperation):
    """Test a text variable for (non-)membership of a value list."""
    kind: ClassVar[OperationType] = OperationType.FILTER_STRING_MEMBERSHIP
    variable: str
    operator: MembershipOperator
    values: Tuple[str, ...]

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'operator', _enum(MembershipOperator, self.operator))
        object.__setattr__(self, 'values', tuple(self.values))
        require(len(self.values) > 0, "membership filter needs at least one value")
        require(all(isinstance(v, str) for v in self.values), "string membership values must be text")


@dataclass(frozen=True)
class ValidRangeFilter(_VariableOperation):
    """Keep samples inside a variable's valid_min/valid_max."""
    kind: ClassVar[OperationType] = OperationType.FILTER_VALID_RANGE
    variable: str

    def __post_init__(self):
        _require_name(self.variable, "variable name")


@dataclass(frozen=True)
class LongitudeRangeFilter(_OperationBase):
    kind: ClassVar[OperationType] = OperationType.FILTER_LONGITUDE_RANGE
    min: float
    max: float
    min_unit: Optional[str] = None
    max_unit: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, 'min', float(self.min))
        object.__setattr__(self, 'max', float(self.max))


@dataclass(frozen=True)
class PointDistanceFilter(_OperationBase):
    """Keep samples within a distance of a point."""
    kind: ClassVar[OperationType] = OperationType.FILTER_POINT_DISTANCE
    longitude: float
    latitude: float
    distance: float
    longitude_unit: Optional[str] = None
    latitude_unit: Optional[str] = None
    distance_unit: Optional[str] = None

    def __post_init__(self):
        require(float(self.distance) >= 0, f"distance must be non-negative, got {self.distance}")


@dataclass(frozen=True)
class AreaMaskCoversPointFilter(_OperationBase):
    kind: ClassVar[OperationType] = OperationType.FILTER_AREA_MASK_COVERS_POINT
    filename: str

    def __post_init__(self):
        _require_name(self.filename, "area mask filename")


@dataclass(frozen=True)
class AreaMaskCoversAreaFilter(_OperationBase):
    kind: ClassVar[OperationType] = OperationType.FILTER_AREA_MASK_COVERS_AREA
    filename: str

    def __post_init__(self):
        _require_name(self.filename, "area mask filename")


@dataclass(frozen=True)
class AreaMaskIntersectsAreaFilter(_OperationBase):
    kind: ClassVar[OperationType] = OperationType.FILTER_AREA_MASK_INTERSECTS_AREA
    filename: str
    min_percentage: float = 0.0

    def __post_init__(self):
        _require_name(self.filename, "area mask filename")
        require(0.0 <= float(self.min_percentage) <= 100.0,
                f"minimum percentage must be in [0, 100], got {self.min_percentage}")


# ---------------------------------------------------------------------------
# Variable operations
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class VariableDerivation(_VariableOperation):
    """Derive a variable with the given dimension kinds and unit."""
    kind: ClassVar[OperationType] = OperationType.DERIVE_VARIABLE
    variable: str
    dimension_type: Tuple[DimensionType, ...] = ()
    unit: Optional[str] = None

    def __post_init__(self):
        _require_name(self.variable, "variable name")
        object.__setattr__(self, 'dimension_type', tuple(_enum(DimensionType, t) for t in self.dimension_type))
        require(len(self.dimension_type) <= MAX_NUM_DIMS,
                f"derived variable has {len(self.dimension_type)} dimensions (maximum is {MAX_NUM_DIMS})")


@dataclass(frozen=True)
class VariableInclusion(_OperationBase):
    """Keep only the named variables."""
    kind: ClassVar[OperationType] = OperationType.KEEP_VARIABLE
    variables: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'variables', tuple(self.variables))
        for name in self.variables:
            _require_name(name, "variable name")


@dataclass(frozen=True)
class VariableExclusion(_OperationBase):
    """Remove the named variables."""
    kind: ClassVar[OperationType] = OperationType.EXCLUDE_VARIABLE
    variables: Tuple[str, ...] = field(default_factory=tuple)

    def __post_init__(self):
        object.__setattr__(self, 'variables', tuple(self.variables))
        for name in self.variables:
            _require_name(name, "variable name")


@dataclass(frozen=True)
class Regrid(_OperationBase):
    kind: ClassVar[OperationType] = OperationType.REGRID
    grid_filename: str

    def __post_init__(self):
        _require_name(self.grid_filename, "grid filename")


Operation = Union[
    CollocationFilter,
    ComparisonFilter,
    StringComparisonFilter,
    BitMaskFilter,
    MembershipFilter,
    StringMembershipFilter,
    ValidRangeFilter,
    LongitudeRangeFilter,
    PointDistanceFilter,
    AreaMaskCoversPointFilter,
    AreaMaskCoversAreaFilter,
    AreaMaskIntersectsAreaFilter,
    VariableDerivation,
    VariableInclusion,
    VariableExclusion,
    Regrid,
]
