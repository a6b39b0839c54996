# SPDX-License-Identifier: GPL-3.0-or-later
# Copyright (C) 2015-2026 HARPNC Team

"""
Custom exception hierarchy for harpnc.

This module defines a hierarchy of exceptions that provide clear, specific
error types for the different ways an import or export can fail. Every
error is raised at the point of failure, may be annotated with context
(variable or attribute name) while it unwinds, and reaches the caller
exactly once.
"""

from contextlib import contextmanager
from typing import Optional


class HarpError(Exception):
    """
    Base exception for all harpnc-specific errors.

    Context added while the error unwinds is kept in ``context`` and
    appended to the message, so ``str(error)`` reads as a single cause
    chain, e.g. ``attribute 'units' has invalid type (variable 'pressure')``.
    """

    def __init__(self, message: str = ""):
        super().__init__(message)
        self.message = message
        self.context = []

    def add_context(self, text: str) -> "HarpError":
        """Append context text to the error message and return the error."""
        self.context.append(text)
        return self

    def __str__(self) -> str:
        return self.message + "".join(self.context)


class InvalidArgumentError(HarpError):
    """
    Invalid input handed to the library by the caller.

    Raised when:
    - A path is None or empty
    - A variable has a bad name, shape or payload size
    - A product holds two variables with the same name
    """
    pass


class ContainerError(HarpError):
    """
    Failure reported by the underlying netCDF library.

    The library's status (errno when the failure carries one) and message
    are kept verbatim; the original exception is chained as ``__cause__``.
    """

    def __init__(self, message: str = "", status: Optional[int] = None):
        super().__init__(message)
        self.status = status


class UnsupportedProductError(HarpError):
    """
    The file is not a product this library can read.

    Raised when:
    - The ``Conventions`` global attribute is missing
    - The ``Conventions`` text does not have the ``HARP-<major>.<minor>`` shape
    """
    pass


class UnsupportedVersionError(UnsupportedProductError):
    """The file declares a format version newer than the supported one."""

    def __init__(self, message: str = "", major: Optional[int] = None, minor: Optional[int] = None):
        super().__init__(message)
        self.major = major
        self.minor = minor


class ProductStructureError(HarpError):
    """
    The file or product violates the structural rules of the convention.

    Raised when:
    - An attribute has the wrong type or element count
    - A dimension is declared twice or has an unsupported name
    - A variable uses an element type outside the supported set
    """
    pass


class DimensionConflictError(ProductStructureError):
    """A named dimension kind is used with two different extents."""

    def __init__(self, message: str = "", dimension_type=None,
                 existing_length: Optional[int] = None, length: Optional[int] = None):
        super().__init__(message)
        self.dimension_type = dimension_type
        self.existing_length = existing_length
        self.length = length


class OutOfMemoryError(HarpError):
    """Allocation of a payload buffer failed."""
    pass


class ConfigurationError(HarpError):
    """
    Configuration-related errors.

    Raised when the configuration file cannot be parsed or holds values
    that fail validation.
    """
    pass


# =============================================================================
# Validation Helpers
# =============================================================================

# Exceptions the netCDF4 bindings raise for library-level failures.
CONTAINER_EXCEPTIONS = (OSError, RuntimeError, KeyError, IndexError, ValueError, TypeError)


def require(condition: bool, message: str, error_type: type = None) -> None:
    """
    Validate a condition, raising an exception if it fails.

    This replaces assert statements with proper validation that cannot be
    disabled with python -O.

    Args:
        condition: The condition that must be True
        message: Error message if condition is False
        error_type: Exception type to raise (default: InvalidArgumentError)

    Example:
        >>> require(len(name) > 0, "variable name is empty")
        >>> require(width > 0, "row width must be positive", ProductStructureError)
    """
    if error_type is None:
        error_type = InvalidArgumentError
    if not condition:
        raise error_type(message)


def container_error(exc: BaseException) -> ContainerError:
    """Wrap a netCDF library exception, keeping its status and message."""
    status = getattr(exc, 'errno', None)
    message = getattr(exc, 'strerror', None) or str(exc) or type(exc).__name__
    filename = getattr(exc, 'filename', None)
    if filename:
        if isinstance(filename, bytes):
            filename = filename.decode(errors='replace')
        message = f"{message}: '{filename}'"
    error = ContainerError(message, status=status)
    error.__cause__ = exc
    return error


@contextmanager
def context_annotation(context: Optional[str] = None):
    """
    Append ``context`` to every :class:`HarpError` leaving the body.

    Memory exhaustion is reported as :class:`OutOfMemoryError`. Other
    exceptions pass through unchanged, so use this around code of this
    package and :func:`error_context` around netCDF library calls.

    Example:
        >>> with context_annotation(f" (variable '{name}')"):
        ...     width = variable.max_string_length(encoding)
    """
    try:
        yield
    except HarpError as e:
        if context:
            e.add_context(context)
        raise
    except MemoryError as e:
        error = OutOfMemoryError(f"out of memory ({e})" if str(e) else "out of memory")
        if context:
            error.add_context(context)
        raise error from e


@contextmanager
def error_context(context: Optional[str] = None):
    """
    Context manager for standardized error handling around netCDF calls.

    Library exceptions raised in the body are converted to
    :class:`ContainerError`; everything else is handled as in
    :func:`context_annotation`. Keep the body to library calls only.

    Args:
        context: Text appended to the error, e.g. ``" (variable 'x')"``.

    Example:
        >>> with error_context(f" (attribute '{name}')"):
        ...     nc_var.setncattr(name, value)
    """
    with context_annotation(context):
        try:
            yield
        except CONTAINER_EXCEPTIONS as e:
            raise container_error(e) from e


# =============================================================================
# Public API
# =============================================================================

__all__ = [
    # Base
    'HarpError',
    # Domain exceptions
    'InvalidArgumentError',
    'ContainerError',
    'UnsupportedProductError',
    'UnsupportedVersionError',
    'ProductStructureError',
    'DimensionConflictError',
    'OutOfMemoryError',
    'ConfigurationError',
    # Helpers
    'require',
    'container_error',
    'context_annotation',
    'error_context',
]
