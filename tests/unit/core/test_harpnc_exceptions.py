"""Regression tests for the harpnc exception hierarchy and error helpers."""

import errno

import pytest

from harpnc.core.exceptions import (
    ConfigurationError,
    ContainerError,
    DimensionConflictError,
    HarpError,
    InvalidArgumentError,
    OutOfMemoryError,
    ProductStructureError,
    UnsupportedProductError,
    UnsupportedVersionError,
    context_annotation,
    error_context,
    require,
)

pytestmark = [pytest.mark.unit]


class TestHierarchyRoots:
    """All custom exceptions must be rooted under HarpError."""

    @pytest.mark.parametrize("exc_cls", [
        InvalidArgumentError,
        ContainerError,
        UnsupportedProductError,
        UnsupportedVersionError,
        ProductStructureError,
        DimensionConflictError,
        OutOfMemoryError,
        ConfigurationError,
    ])
    def test_all_exceptions_subclass_harp_error(self, exc_cls):
        assert issubclass(exc_cls, HarpError), (
            f"{exc_cls.__name__} is not a subclass of HarpError"
        )

    def test_unsupported_version_is_unsupported_product(self):
        assert issubclass(UnsupportedVersionError, UnsupportedProductError)

    def test_dimension_conflict_is_structure_error(self):
        assert issubclass(DimensionConflictError, ProductStructureError)


class TestContext:
    """Context annotations are appended in unwinding order."""

    def test_add_context_extends_message(self):
        error = ProductStructureError("attribute 'units' has invalid type")
        error.add_context(" (variable 'pressure')")
        assert str(error) == "attribute 'units' has invalid type (variable 'pressure')"

    def test_error_context_annotates_harp_errors(self):
        with pytest.raises(ProductStructureError, match=r"bad \(variable 'x'\)"):
            with error_context(" (variable 'x')"):
                raise ProductStructureError("bad")

    def test_error_context_wraps_library_errors(self):
        with pytest.raises(ContainerError) as exc_info:
            with error_context():
                raise OSError(errno.ENOENT, "No such file or directory", b"/missing.nc")
        assert exc_info.value.status == errno.ENOENT
        assert "No such file or directory" in str(exc_info.value)
        assert "/missing.nc" in str(exc_info.value)
        assert isinstance(exc_info.value.__cause__, OSError)

    def test_error_context_wraps_runtime_error_verbatim(self):
        with pytest.raises(ContainerError, match="NetCDF: Not a valid ID"):
            with error_context():
                raise RuntimeError("NetCDF: Not a valid ID")

    def test_error_context_maps_memory_error(self):
        with pytest.raises(OutOfMemoryError):
            with error_context():
                raise MemoryError()

    def test_assertion_errors_pass_through(self):
        with pytest.raises(AssertionError):
            with error_context(" (variable 'x')"):
                raise AssertionError("internal")


class TestContextAnnotation:
    """context_annotation adds context without converting foreign errors."""

    def test_harp_error_gets_context(self):
        with pytest.raises(InvalidArgumentError) as exc_info:
            with context_annotation(" (variable 'x')"):
                raise InvalidArgumentError("bad value")
        assert str(exc_info.value) == "bad value (variable 'x')"

    def test_foreign_errors_pass_through(self):
        with pytest.raises(ValueError) as exc_info:
            with context_annotation(" (variable 'x')"):
                raise ValueError("not a container failure")
        assert not isinstance(exc_info.value, ContainerError)

    def test_memory_error_still_mapped(self):
        with pytest.raises(OutOfMemoryError, match="variable 'x'"):
            with context_annotation(" (variable 'x')"):
                raise MemoryError()


class TestRequire:

    def test_passes_when_true(self):
        require(True, "never raised")

    def test_default_error_type(self):
        with pytest.raises(InvalidArgumentError, match="filename is empty"):
            require(False, "filename is empty")

    def test_custom_error_type(self):
        with pytest.raises(ProductStructureError):
            require(False, "bad", ProductStructureError)
