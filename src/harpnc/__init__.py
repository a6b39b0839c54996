# src/harpnc/__init__.py
try:
    from .harpnc_version import __version__
except ImportError:
    try:
        from importlib.metadata import version, PackageNotFoundError
        __version__ = version("harpnc")
    except (ImportError, PackageNotFoundError):
        __version__ = "0.0.0"

from .core.config import HarpncConfig
from .core.exceptions import (
    ConfigurationError,
    ContainerError,
    DimensionConflictError,
    HarpError,
    InvalidArgumentError,
    OutOfMemoryError,
    ProductStructureError,
    UnsupportedProductError,
    UnsupportedVersionError,
)
from .netcdf import GlobalMetadata, export_product, import_product, read_global_metadata
from .product import DataType, DimensionType, Product, Variable

__all__ = [
    "__version__",
    "import_product",
    "export_product",
    "read_global_metadata",
    "GlobalMetadata",
    "Product",
    "Variable",
    "DataType",
    "DimensionType",
    "HarpncConfig",
    "HarpError",
    "InvalidArgumentError",
    "ContainerError",
    "UnsupportedProductError",
    "UnsupportedVersionError",
    "ProductStructureError",
    "DimensionConflictError",
    "OutOfMemoryError",
    "ConfigurationError",
]
