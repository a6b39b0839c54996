# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Import and export of products in the HARP netCDF convention.

Export runs the container's two-phase write discipline explicitly:

1. definition phase: declare every distinct dimension, then every variable
   with its attributes, then the product attributes
2. seal: end the definition phase; defining a variable afterwards is an
   internal error (netCDF4 returns to data mode on its own)
3. data phase: write each variable's payload in definition order

Import is a single pass: check the convention, read the dimensions in file
order into a :class:`DimensionTable`, then read each variable (definition,
payload, attributes) and finally the product attributes.

Either call fully succeeds or raises a :class:`HarpError`; a partially
built product is never handed back, and with ``atomic_write`` enabled a
failed export leaves no file behind.
"""

import logging
import os
import uuid
from contextlib import contextmanager
from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Union

import netCDF4
import numpy as np

from harpnc.core.config import HarpncConfig, resolve_config
from harpnc.core.constants import MAX_NUM_DIMS, FormatVersion, GlobalAttributes, VariableAttributes
from harpnc.core.exceptions import (
    InvalidArgumentError,
    ProductStructureError,
    context_annotation,
    error_context,
    require,
)
from harpnc.product import DataType, DimensionType, Product, Variable

from . import attributes, strings
from .convention import verify_product
from .dimensions import DimensionTable, parse_dimension_name
from .type_codec import is_supported_container_type, to_container, to_domain

logger = logging.getLogger(__name__)

PathLike = Union[str, os.PathLike]


@dataclass(frozen=True)
class GlobalMetadata:
    """Global attributes returned by :func:`read_global_metadata`.

    Attributes:
        datetime_start: Start of the product's time range, if present.
        datetime_stop: End of the product's time range, if present.
        source_product: Name of the source product, if present.
    """
    datetime_start: Optional[float] = None
    datetime_stop: Optional[float] = None
    source_product: Optional[str] = None


def _require_path(path: Optional[PathLike]) -> Path:
    require(path is not None and str(path) != '', "filename is empty")
    return Path(path)


def _variable_context(name: str) -> str:
    return f" (variable '{name}')"


@contextmanager
def open_dataset(path: PathLike, mode: str = 'r', netcdf_format: Optional[str] = None) -> Iterator[netCDF4.Dataset]:
    """
    Open a netCDF dataset for the duration of one transcoding call.

    Automatic masking, scaling and char-to-string conversion are disabled
    so payloads are read and written raw. The dataset is closed on every
    exit path; a close failure is reported only when the body succeeded.

    Raises:
        ContainerError: If the file cannot be opened or closed
    """
    with error_context():
        if mode == 'r':
            dataset = netCDF4.Dataset(str(path), 'r')
        else:
            dataset = netCDF4.Dataset(str(path), mode, clobber=True, format=netcdf_format)
    try:
        with error_context():
            dataset.set_auto_maskandscale(False)
            dataset.set_auto_chartostring(False)
        yield dataset
    except BaseException:
        try:
            dataset.close()
        except (OSError, RuntimeError) as close_error:
            logger.debug("Ignoring close failure after earlier error: %s", close_error)
        raise
    else:
        with error_context():
            dataset.close()


class ProductTranscoder:
    """Read and write products in the HARP netCDF convention.

    Parameters
    ----------
    config : HarpncConfig, optional
        Codec settings; defaults are used when omitted.
    """

    def __init__(self, config: Optional[HarpncConfig] = None) -> None:
        self.config = resolve_config(config)
        self.encoding = self.config.string_encoding
        self._sealed = False

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def import_product(self, path: PathLike) -> Product:
        """Read the product stored in ``path``."""
        path = _require_path(path)
        with open_dataset(path, 'r') as dataset:
            verify_product(dataset)
            product = Product()
            self._read_product(dataset, product)

        logger.info("Imported %d variables from %s", len(product), path)
        return product

    def export_product(self, path: PathLike, product: Product) -> None:
        """Write ``product`` to ``path``, replacing any existing file."""
        path = _require_path(path)
        require(isinstance(product, Product), f"expected a Product, got {type(product).__name__}")

        target = path
        if self.config.atomic_write:
            target = path.with_name(f".{path.name}.{uuid.uuid4().hex}.tmp")

        try:
            with open_dataset(target, 'w', self.config.netcdf_format) as dataset:
                self._write_product(dataset, product)
            if target != path:
                with error_context():
                    os.replace(target, path)
        except BaseException:
            if target != path:
                target.unlink(missing_ok=True)
            raise

        logger.info("Exported %d variables to %s (%s)", len(product), path, self.config.netcdf_format)

    def read_global_metadata(self, path: PathLike) -> GlobalMetadata:
        """Check the convention of ``path`` and read only its global time range and source product."""
        path = _require_path(path)
        with open_dataset(path, 'r') as dataset:
            verify_product(dataset)
            datetime_start = attributes.read_optional_scalar(
                dataset, GlobalAttributes.DATETIME_START, DataType.DOUBLE)
            datetime_stop = attributes.read_optional_scalar(
                dataset, GlobalAttributes.DATETIME_STOP, DataType.DOUBLE)
            source_product = attributes.read_optional_text(dataset, GlobalAttributes.SOURCE_PRODUCT)

        return GlobalMetadata(
            datetime_start=float(datetime_start) if datetime_start is not None else None,
            datetime_stop=float(datetime_stop) if datetime_stop is not None else None,
            source_product=source_product,
        )

    # ------------------------------------------------------------------
    # Import
    # ------------------------------------------------------------------

    def _read_product(self, dataset: netCDF4.Dataset, product: Product) -> None:
        table = DimensionTable()
        positions = self._read_dimensions(dataset, table)

        with error_context():
            nc_variables = list(dataset.variables.values())
        for nc_var in nc_variables:
            product.add_variable(self._read_variable(nc_var, table, positions))

        product.source_product = attributes.read_optional_text(dataset, GlobalAttributes.SOURCE_PRODUCT)
        product.history = attributes.read_optional_text(dataset, GlobalAttributes.HISTORY)

    def _read_dimensions(self, dataset: netCDF4.Dataset, table: DimensionTable) -> Dict[str, int]:
        """Intern every file dimension at its own position; return name -> position."""
        with error_context():
            file_dimensions = [(name, len(dim)) for name, dim in dataset.dimensions.items()]

        positions = {}
        for index, (name, length) in enumerate(file_dimensions):
            dimension_type = parse_dimension_name(name)
            if table.intern(dimension_type, length) != index:
                raise ProductStructureError(f"duplicate dimensions with name '{name}'")
            positions[name] = index

        logger.debug("Read %d dimensions", len(table))
        return positions

    def _read_variable(self, nc_var, table: DimensionTable, positions: Dict[str, int]) -> Variable:
        with error_context():
            name = nc_var.name
        with context_annotation(_variable_context(name)):
            with error_context():
                nc_var.set_auto_maskandscale(False)
                nc_var.set_auto_chartostring(False)
                container_type = nc_var.dtype
                dimension_names = nc_var.dimensions

            if not is_supported_container_type(container_type):
                raise ProductStructureError(f"unsupported data type '{container_type}'")
            data_type = to_domain(container_type)

            entries = [table.resolve(positions[dim_name]) for dim_name in dimension_names]
            num_dimensions = len(entries)
            if data_type is DataType.STRING and num_dimensions > 0:
                num_dimensions -= 1
            if num_dimensions > MAX_NUM_DIMS:
                raise ProductStructureError(
                    f"variable has {num_dimensions} dimensions (maximum is {MAX_NUM_DIMS})")

            dimension_type = [entry.dimension_type for entry in entries[:num_dimensions]]
            dimension = [entry.length for entry in entries[:num_dimensions]]
            raw = self._get_values(nc_var)

            if data_type is DataType.STRING:
                data = strings.unpack_array(raw, tuple(dimension), self.encoding)
            else:
                data = raw

            try:
                variable = Variable(name, data_type, dimension_type, dimension, data)
            except InvalidArgumentError as e:
                raise ProductStructureError(str(e)) from e

            variable.description = attributes.read_optional_text(nc_var, VariableAttributes.DESCRIPTION)
            variable.unit = attributes.read_optional_text(nc_var, VariableAttributes.UNITS)
            valid_min = attributes.read_optional_scalar(nc_var, VariableAttributes.VALID_MIN, data_type)
            if valid_min is not None:
                variable.valid_min = valid_min
            valid_max = attributes.read_optional_scalar(nc_var, VariableAttributes.VALID_MAX, data_type)
            if valid_max is not None:
                variable.valid_max = valid_max

        logger.debug("Read variable '%s' (%s, %s)", name, data_type.value, dimension)
        return variable

    @staticmethod
    def _get_values(nc_var) -> np.ndarray:
        with error_context():
            if nc_var.ndim == 0:
                return np.asarray(nc_var.getValue())
            return np.asarray(nc_var[:])

    # ------------------------------------------------------------------
    # Export
    # ------------------------------------------------------------------

    def _write_product(self, dataset: netCDF4.Dataset, product: Product) -> None:
        self._sealed = False
        attributes.write_text(dataset, GlobalAttributes.CONVENTIONS, FormatVersion.convention())

        datetime_start, datetime_stop = product.get_datetime_range()
        attributes.write_scalar(dataset, GlobalAttributes.DATETIME_START, DataType.DOUBLE, datetime_start)
        attributes.write_scalar(dataset, GlobalAttributes.DATETIME_STOP, DataType.DOUBLE, datetime_stop)

        table, string_lengths = self._build_dimension_table(product)
        self._write_dimensions(dataset, table)

        for variable in product:
            self._write_variable_definition(dataset, variable, table, string_lengths.get(variable.name))

        if product.source_product is not None:
            attributes.write_text(dataset, GlobalAttributes.SOURCE_PRODUCT, product.source_product)
        if product.history is not None:
            attributes.write_text(dataset, GlobalAttributes.HISTORY, product.history)

        self._seal_definitions()

        for variable in product:
            self._write_variable_data(dataset, variable)

    def _build_dimension_table(self, product: Product):
        """Collect the distinct dimensions of all variables, text length axes included."""
        table = DimensionTable()
        string_lengths: Dict[str, int] = {}
        for variable in product:
            with context_annotation(_variable_context(variable.name)):
                for dimension_type, length in variable.dimensions():
                    table.intern(dimension_type, length)
                if variable.data_type is DataType.STRING:
                    length = max(variable.max_string_length(self.encoding), 1)
                    table.intern(DimensionType.INDEPENDENT, length)
                    string_lengths[variable.name] = length

        logger.debug("Dimension table holds %d distinct dimensions", len(table))
        return table, string_lengths

    @staticmethod
    def _write_dimensions(dataset: netCDF4.Dataset, table: DimensionTable) -> None:
        for entry in table:
            # length 0 is the unlimited dimension; the container allows at most one
            with error_context():
                dataset.createDimension(entry.netcdf_name, entry.length or None)

    def _write_variable_definition(self, dataset: netCDF4.Dataset, variable: Variable,
                                   table: DimensionTable, string_length: Optional[int]) -> None:
        require(not self._sealed, f"variable '{variable.name}' defined after the definition phase",
                AssertionError)
        dimension_names: List[str] = [
            table.resolve(table.find(dimension_type, length)).netcdf_name
            for dimension_type, length in variable.dimensions()
        ]
        if variable.data_type is DataType.STRING:
            dimension_names.append(table.resolve(table.find(DimensionType.INDEPENDENT, string_length)).netcdf_name)

        with context_annotation(_variable_context(variable.name)):
            with error_context():
                nc_var = dataset.createVariable(variable.name, to_container(variable.data_type),
                                                tuple(dimension_names))
                nc_var.set_auto_maskandscale(False)
                nc_var.set_auto_chartostring(False)

            if variable.description is not None:
                attributes.write_text(nc_var, VariableAttributes.DESCRIPTION, variable.description)
            if variable.unit is not None:
                attributes.write_text(nc_var, VariableAttributes.UNITS, variable.unit)
            if variable.data_type is not DataType.STRING:
                if not variable.data_type.is_unbounded_min(variable.valid_min):
                    attributes.write_scalar(nc_var, VariableAttributes.VALID_MIN,
                                            variable.data_type, variable.valid_min)
                if not variable.data_type.is_unbounded_max(variable.valid_max):
                    attributes.write_scalar(nc_var, VariableAttributes.VALID_MAX,
                                            variable.data_type, variable.valid_max)

    def _seal_definitions(self) -> None:
        """End the definition phase; no variable may be defined afterwards."""
        self._sealed = True
        logger.debug("Definitions sealed")

    def _write_variable_data(self, dataset: netCDF4.Dataset, variable: Variable) -> None:
        require(self._sealed, f"variable '{variable.name}' written before the definition phase ended",
                AssertionError)
        if variable.num_elements == 0:
            logger.debug("Variable '%s' has no elements; nothing to write", variable.name)
            return

        with context_annotation(_variable_context(variable.name)):
            values = self._payload(variable)
            if variable.data_type is DataType.STRING:
                values = strings.pack_array(values, self.encoding)
            with error_context():
                nc_var = dataset.variables[variable.name]
                if nc_var.ndim == 0:
                    nc_var.assignValue(values)
                else:
                    nc_var[:] = values
        logger.debug("Wrote variable '%s'", variable.name)

    @staticmethod
    def _payload(variable: Variable) -> np.ndarray:
        """Return the payload in its declared dtype and shape."""
        values = np.asarray(variable.data, dtype=variable.data_type.dtype)
        require(values.size == variable.num_elements,
                f"variable '{variable.name}' has {values.size} elements, expected {variable.num_elements}")
        return values.reshape(variable.shape)


# =============================================================================
# Module-level API
# =============================================================================

def import_product(path: PathLike, config: Optional[HarpncConfig] = None) -> Product:
    """Read a product from a HARP netCDF file."""
    return ProductTranscoder(config).import_product(path)


def export_product(path: PathLike, product: Product, config: Optional[HarpncConfig] = None) -> None:
    """Write a product to a HARP netCDF file."""
    ProductTranscoder(config).export_product(path, product)


def read_global_metadata(path: PathLike, config: Optional[HarpncConfig] = None) -> GlobalMetadata:
    """Read ``datetime_start``, ``datetime_stop`` and ``source_product`` without loading variables."""
    return ProductTranscoder(config).read_global_metadata(path)
