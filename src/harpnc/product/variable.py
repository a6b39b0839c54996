# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
In-memory variable: a named, typed, multi-dimensional array plus metadata.

The payload is a numpy array shaped by the dimension lengths. Numeric
payloads use the dtype of the variable's DataType; text payloads are
``object`` arrays holding one independently owned ``str`` per element.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence

import numpy as np

from harpnc.core.constants import MAX_NUM_DIMS
from harpnc.core.exceptions import InvalidArgumentError, require

from .types import DataType, DimensionType

_NAME_PATTERN = re.compile(r'^[A-Za-z][A-Za-z0-9_]*$')


@dataclass(eq=False)
class Variable:
    """A named, typed array with an ordered list of (kind, length) dimensions.

    Attributes:
        name: Name of the variable, unique within its product.
        data_type: Element type of the payload.
        dimension_type: Kind of each dimension, outermost first.
        dimension: Length of each dimension, outermost first.
        data: Payload; ``None`` allocates a zero (or empty string) filled array.
        description: Optional free text description.
        unit: Optional unit text.
        valid_min: Lower bound of valid values; defaults to the type's
            "no bound" sentinel. Always ``None`` for text.
        valid_max: Upper bound of valid values; see ``valid_min``.
    """
    name: str
    data_type: DataType
    dimension_type: List[DimensionType] = field(default_factory=list)
    dimension: List[int] = field(default_factory=list)
    data: Any = None
    description: Optional[str] = None
    unit: Optional[str] = None
    valid_min: Any = None
    valid_max: Any = None

    def __post_init__(self):
        """Validate the definition and coerce the payload to its dtype and shape."""
        require(isinstance(self.name, str) and _NAME_PATTERN.match(self.name) is not None,
                f"invalid variable name '{self.name}'")
        try:
            self.data_type = DataType(self.data_type)
            self.dimension_type = [DimensionType(t) for t in self.dimension_type]
        except ValueError as e:
            raise InvalidArgumentError(f"variable '{self.name}': {e}") from None
        self.dimension = [int(length) for length in self.dimension]
        require(len(self.dimension_type) == len(self.dimension),
                f"variable '{self.name}' has {len(self.dimension_type)} dimension types "
                f"but {len(self.dimension)} dimension lengths")
        require(len(self.dimension) <= MAX_NUM_DIMS,
                f"variable '{self.name}' has {len(self.dimension)} dimensions "
                f"(maximum is {MAX_NUM_DIMS})")
        for length in self.dimension:
            require(length >= 0, f"variable '{self.name}' has negative dimension length {length}")

        self.data = self._coerce_data(self.data)

        if self.data_type is DataType.STRING:
            require(self.valid_min is None and self.valid_max is None,
                    f"variable '{self.name}' of type string cannot have a valid range")
        else:
            self.valid_min = self._coerce_bound(self.valid_min, self.data_type.unbounded_min())
            self.valid_max = self._coerce_bound(self.valid_max, self.data_type.unbounded_max())

    def _coerce_bound(self, value, default):
        if value is None:
            return default
        try:
            bound = self.data_type.dtype.type(value)
        except (OverflowError, TypeError, ValueError):
            bound = None
        require(bound is not None and (not self.data_type.is_integer or bound == value),
                f"variable '{self.name}' has valid range bound {value!r} "
                f"not representable as {self.data_type.value}")
        return bound

    def _coerce_data(self, data) -> np.ndarray:
        shape = self.shape
        if self.data_type is DataType.STRING:
            if data is None:
                values = np.full(shape, '', dtype=object)
                return values
            values = np.asarray(data, dtype=object)
            require(values.size == self.num_elements,
                    f"variable '{self.name}' has {values.size} elements, expected {self.num_elements}")
            values = values.reshape(shape)
            for value in values.flat:
                require(isinstance(value, str),
                        f"variable '{self.name}' of type string holds non-text value {value!r}")
            return values

        dtype = self.data_type.dtype
        if data is None:
            return np.zeros(shape, dtype=dtype)
        values = np.asarray(data)
        if values.dtype != dtype:
            # integer targets must hold every value exactly; float targets round
            try:
                with np.errstate(invalid='ignore', over='ignore'):
                    converted = values.astype(dtype)
                exact = not self.data_type.is_integer or bool(np.array_equal(converted, values))
            except (OverflowError, TypeError, ValueError) as e:
                raise InvalidArgumentError(
                    f"variable '{self.name}' payload cannot be converted to {self.data_type.value}: {e}"
                ) from None
            require(exact, f"variable '{self.name}' holds values not representable as {self.data_type.value}")
            values = converted
        require(values.size == self.num_elements,
                f"variable '{self.name}' has {values.size} elements, expected {self.num_elements}")
        return values.reshape(shape)

    @property
    def num_dimensions(self) -> int:
        return len(self.dimension)

    @property
    def shape(self) -> tuple:
        return tuple(self.dimension)

    @property
    def num_elements(self) -> int:
        return math.prod(self.dimension)

    def has_dimension_type(self, dimension_type: DimensionType) -> bool:
        """True if any dimension of the variable has the given kind."""
        return dimension_type in self.dimension_type

    def dimensions(self) -> List[tuple]:
        """Return the dimension list as ``(kind, length)`` pairs."""
        return list(zip(self.dimension_type, self.dimension))

    def max_string_length(self, encoding: str = 'utf-8') -> int:
        """
        Length in bytes of the longest encoded text value (0 when all are empty).

        Raises:
            InvalidArgumentError: If the variable is not of type string or a
                value cannot be encoded with ``encoding``
        """
        require(self.data_type is DataType.STRING, f"variable '{self.name}' is not of type string")
        try:
            return max((len(value.encode(encoding)) for value in self.data.flat), default=0)
        except UnicodeEncodeError as e:
            raise InvalidArgumentError(
                f"variable '{self.name}' holds text that cannot be encoded as {encoding}: {e.object!r}"
            ) from None

    def __eq__(self, other) -> bool:
        """
        Structural equality: name, type, dimensions, metadata and payload.

        Floating-point payloads and bounds compare bit-exact, so NaN equals NaN.
        """
        if not isinstance(other, Variable):
            return NotImplemented
        if (self.name != other.name or self.data_type is not other.data_type
                or self.dimension_type != other.dimension_type or self.dimension != other.dimension
                or self.description != other.description or self.unit != other.unit):
            return False
        if self.data_type is DataType.STRING:
            return self.data.ravel().tolist() == other.data.ravel().tolist()
        return (_bit_equal(self.data, other.data)
                and _bit_equal(np.asarray(self.valid_min), np.asarray(other.valid_min))
                and _bit_equal(np.asarray(self.valid_max), np.asarray(other.valid_max)))

    __hash__ = None

    def __repr__(self) -> str:
        dims = ', '.join(f"{t.value}={n}" for t, n in zip(self.dimension_type, self.dimension))
        return f"Variable(name={self.name!r}, data_type={self.data_type.value}, dimensions=[{dims}])"


def _bit_equal(a: np.ndarray, b: np.ndarray) -> bool:
    if a.dtype != b.dtype or a.shape != b.shape:
        return False
    return a.tobytes() == b.tobytes()


def new_variable(
    name: str,
    data_type: DataType,
    dimensions: Sequence[tuple] = (),
    data=None,
    **kwargs,
) -> Variable:
    """Create a variable from a sequence of ``(kind, length)`` pairs."""
    dimension_type = [kind for kind, _ in dimensions]
    dimension = [length for _, length in dimensions]
    return Variable(name, data_type, dimension_type, dimension, data, **kwargs)
