# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
In-memory product: an ordered sequence of variables plus global metadata.

Variable order is definition order and is preserved on export and import.
"""

import logging
import math
import warnings
from typing import Iterable, Iterator, List, Optional, Tuple

import numpy as np

from harpnc.core.constants import DATETIME_START_VARIABLE, DATETIME_STOP_VARIABLE, DATETIME_VARIABLE
from harpnc.core.exceptions import InvalidArgumentError, require

from .variable import Variable

logger = logging.getLogger(__name__)


class Product:
    """One self-describing data record: ordered variables and global metadata.

    Parameters
    ----------
    variables : iterable of Variable, optional
        Initial variables, added in order.
    source_product : str, optional
        Name of the product this one was derived from.
    history : str, optional
        Processing history text.
    """

    def __init__(
        self,
        variables: Optional[Iterable[Variable]] = None,
        source_product: Optional[str] = None,
        history: Optional[str] = None,
    ) -> None:
        self._variables: List[Variable] = []
        self.source_product = source_product
        self.history = history
        for variable in variables or ():
            self.add_variable(variable)

    # ------------------------------------------------------------------
    # Variable management
    # ------------------------------------------------------------------

    def add_variable(self, variable: Variable) -> None:
        """
        Append a variable.

        Raises:
            InvalidArgumentError: If the product already holds a variable with this name
        """
        require(isinstance(variable, Variable), f"expected a Variable, got {type(variable).__name__}")
        require(not self.has_variable(variable.name),
                f"product already contains a variable named '{variable.name}'")
        self._variables.append(variable)

    def has_variable(self, name: str) -> bool:
        return any(variable.name == name for variable in self._variables)

    def get_variable(self, name: str) -> Variable:
        """
        Return the variable with the given name.

        Raises:
            InvalidArgumentError: If no such variable exists
        """
        for variable in self._variables:
            if variable.name == name:
                return variable
        raise InvalidArgumentError(f"variable '{name}' does not exist")

    def remove_variable(self, name: str) -> Variable:
        """Remove and return the variable with the given name."""
        variable = self.get_variable(name)
        self._variables.remove(variable)
        return variable

    @property
    def variables(self) -> List[Variable]:
        """Variables in definition order (a copy of the internal list)."""
        return list(self._variables)

    @property
    def variable_names(self) -> List[str]:
        return [variable.name for variable in self._variables]

    def __iter__(self) -> Iterator[Variable]:
        return iter(self._variables)

    def __len__(self) -> int:
        return len(self._variables)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Product):
            return NotImplemented
        return (self.source_product == other.source_product
                and self.history == other.history
                and self._variables == other._variables)

    __hash__ = None

    def __repr__(self) -> str:
        return f"Product(variables={self.variable_names!r}, source_product={self.source_product!r})"

    # ------------------------------------------------------------------
    # Derived metadata
    # ------------------------------------------------------------------

    def get_datetime_range(self) -> Tuple[float, float]:
        """Return ``(datetime_start, datetime_stop)`` derived from the variables.

        The ``datetime`` variable gives both bounds. Without it, the start
        comes from ``datetime_start`` and the stop from ``datetime_stop``.
        A bound that cannot be derived (no variable, text-typed variable or
        only NaN values) is NaN.
        """
        if self.has_variable(DATETIME_VARIABLE):
            values = self._datetime_values(DATETIME_VARIABLE)
            return _nan_reduce(np.nanmin, values), _nan_reduce(np.nanmax, values)

        start = math.nan
        stop = math.nan
        if self.has_variable(DATETIME_START_VARIABLE):
            start = _nan_reduce(np.nanmin, self._datetime_values(DATETIME_START_VARIABLE))
        if self.has_variable(DATETIME_STOP_VARIABLE):
            stop = _nan_reduce(np.nanmax, self._datetime_values(DATETIME_STOP_VARIABLE))
        if math.isnan(start) and math.isnan(stop):
            logger.debug("No datetime information in product; datetime range is undefined")
        return start, stop

    def _datetime_values(self, name: str) -> np.ndarray:
        variable = self.get_variable(name)
        if not variable.data_type.is_numeric:
            logger.debug("Variable '%s' is not numeric; ignored for datetime range", name)
            return np.empty(0)
        return np.asarray(variable.data, dtype=np.float64).ravel()


def _nan_reduce(func, values: np.ndarray) -> float:
    if values.size == 0 or np.all(np.isnan(values)):
        return math.nan
    with warnings.catch_warnings():
        warnings.simplefilter('ignore', RuntimeWarning)
        return float(func(values))
