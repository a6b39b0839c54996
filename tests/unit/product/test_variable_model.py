"""Tests for the in-memory Variable model."""

import numpy as np
import pytest

from harpnc.core.exceptions import InvalidArgumentError
from harpnc.product import DataType, DimensionType, Variable, new_variable

pytestmark = [pytest.mark.unit]

T = DimensionType


class TestConstruction:
    """Definition checks and payload coercion."""

    def test_numeric_payload_takes_declared_dtype(self):
        variable = Variable("flag", DataType.INT8, [T.TIME], [3], [1, 2, 3])
        assert variable.data.dtype == np.int8
        assert variable.shape == (3,)

    def test_payload_is_reshaped(self):
        variable = Variable("grid", DataType.INT32, [T.LATITUDE, T.LONGITUDE], [2, 3], range(6))
        assert variable.data.shape == (2, 3)
        assert variable.data[1, 0] == 3

    def test_missing_payload_is_zero_filled(self):
        variable = Variable("x", DataType.FLOAT, [T.TIME], [4])
        assert variable.data.dtype == np.float32
        assert not variable.data.any()

    def test_missing_text_payload_is_empty_strings(self):
        variable = Variable("names", DataType.STRING, [T.TIME], [2])
        assert variable.data.tolist() == ["", ""]

    def test_scalar_variable(self):
        variable = Variable("altitude", DataType.DOUBLE, [], [], 12.5)
        assert variable.num_dimensions == 0
        assert variable.num_elements == 1
        assert variable.data.shape == ()

    def test_string_enum_values_are_accepted(self):
        variable = Variable("x", "double", ["time"], [2])
        assert variable.data_type is DataType.DOUBLE
        assert variable.dimension_type == [T.TIME]

    @pytest.mark.parametrize("name", ["", "1abc", "with space", "a-b", None])
    def test_invalid_names(self, name):
        with pytest.raises(InvalidArgumentError, match="invalid variable name"):
            Variable(name, DataType.DOUBLE)

    def test_unknown_data_type(self):
        with pytest.raises(InvalidArgumentError, match="variable 'x'"):
            Variable("x", "int64")

    def test_unknown_dimension_type(self):
        with pytest.raises(InvalidArgumentError, match="invalid dimension type|'x'"):
            Variable("x", DataType.DOUBLE, ["depth"], [2])

    def test_mismatched_dimension_lists(self):
        with pytest.raises(InvalidArgumentError, match="dimension types"):
            Variable("x", DataType.DOUBLE, [T.TIME, T.LATITUDE], [2])

    def test_too_many_dimensions(self):
        with pytest.raises(InvalidArgumentError, match="maximum is 8"):
            Variable("x", DataType.INT8, [T.INDEPENDENT] * 9, [1] * 9)

    def test_negative_length(self):
        with pytest.raises(InvalidArgumentError, match="negative"):
            Variable("x", DataType.INT8, [T.TIME], [-1])

    def test_wrong_payload_size(self):
        with pytest.raises(InvalidArgumentError, match="has 2 elements, expected 3"):
            Variable("x", DataType.DOUBLE, [T.TIME], [3], [1.0, 2.0])

    def test_text_payload_must_hold_str(self):
        with pytest.raises(InvalidArgumentError, match="non-text"):
            Variable("x", DataType.STRING, [T.TIME], [2], ["a", 3])

    def test_text_cannot_have_valid_range(self):
        with pytest.raises(InvalidArgumentError, match="valid range"):
            Variable("x", DataType.STRING, [T.TIME], [1], ["a"], valid_min=0)

    def test_integer_payload_out_of_range(self):
        with pytest.raises(InvalidArgumentError, match="not representable as int8"):
            Variable("x", DataType.INT8, [T.TIME], [1], [300])

    def test_integer_payload_with_fraction(self):
        with pytest.raises(InvalidArgumentError, match="not representable"):
            Variable("x", DataType.INT8, [T.TIME], [1], [1.5])

    def test_integral_float_payload_is_accepted(self):
        variable = Variable("x", DataType.INT8, [T.TIME], [1], [2.0])
        assert variable.data.dtype == np.int8
        assert variable.data[0] == 2

    def test_float_payload_may_round(self):
        variable = Variable("x", DataType.FLOAT, [T.TIME], [1], [0.1])
        assert variable.data.dtype == np.float32


class TestValidRange:
    """Default bounds are the type's "no bound" sentinels."""

    @pytest.mark.parametrize("data_type,low,high", [
        (DataType.INT8, -128, 127),
        (DataType.INT16, -32768, 32767),
        (DataType.INT32, -2147483648, 2147483647),
        (DataType.FLOAT, -np.inf, np.inf),
        (DataType.DOUBLE, -np.inf, np.inf),
    ])
    def test_default_bounds(self, data_type, low, high):
        variable = Variable("x", data_type)
        assert variable.valid_min == low
        assert variable.valid_max == high
        assert data_type.is_unbounded_min(variable.valid_min)
        assert data_type.is_unbounded_max(variable.valid_max)

    def test_explicit_bounds_take_variable_type(self):
        variable = Variable("x", DataType.INT16, valid_min=-5, valid_max=5)
        assert isinstance(variable.valid_min, np.int16)
        assert not DataType.INT16.is_unbounded_min(variable.valid_min)

    def test_explicit_bound_out_of_range(self):
        with pytest.raises(InvalidArgumentError, match="valid range bound 300"):
            Variable("x", DataType.INT8, valid_min=300)

    def test_text_has_no_bounds(self):
        variable = Variable("x", DataType.STRING)
        assert variable.valid_min is None and variable.valid_max is None


class TestHelpers:

    def test_dimensions_pairs(self):
        variable = new_variable("x", DataType.INT8, [(T.TIME, 2), (T.INDEPENDENT, 3)])
        assert variable.dimensions() == [(T.TIME, 2), (T.INDEPENDENT, 3)]
        assert variable.has_dimension_type(T.INDEPENDENT)
        assert not variable.has_dimension_type(T.LATITUDE)

    def test_max_string_length_counts_encoded_bytes(self):
        variable = Variable("x", DataType.STRING, [T.TIME], [3], ["a", "été", ""])
        assert variable.max_string_length() == 5
        assert variable.max_string_length("latin-1") == 3

    def test_max_string_length_of_all_empty(self):
        variable = Variable("x", DataType.STRING, [T.TIME], [2], ["", ""])
        assert variable.max_string_length() == 0

    def test_max_string_length_rejects_numeric(self):
        with pytest.raises(InvalidArgumentError):
            Variable("x", DataType.DOUBLE).max_string_length()

    def test_max_string_length_rejects_unencodable_text(self):
        variable = Variable("x", DataType.STRING, [T.TIME], [1], ["€"])
        with pytest.raises(InvalidArgumentError, match="cannot be encoded as latin-1"):
            variable.max_string_length("latin-1")


class TestEquality:

    def test_nan_payloads_compare_equal(self):
        a = Variable("x", DataType.DOUBLE, [T.TIME], [2], [np.nan, 1.0])
        b = Variable("x", DataType.DOUBLE, [T.TIME], [2], [np.nan, 1.0])
        assert a == b

    def test_signed_zero_is_significant(self):
        a = Variable("x", DataType.DOUBLE, [T.TIME], [1], [0.0])
        b = Variable("x", DataType.DOUBLE, [T.TIME], [1], [-0.0])
        assert a != b

    def test_metadata_is_compared(self):
        a = Variable("x", DataType.DOUBLE, unit="K")
        b = Variable("x", DataType.DOUBLE, unit="degC")
        assert a != b

    def test_text_payloads(self):
        a = Variable("x", DataType.STRING, [T.TIME], [2], ["a", "b"])
        b = Variable("x", DataType.STRING, [T.TIME], [2], ["a", "b"])
        c = Variable("x", DataType.STRING, [T.TIME], [2], ["a", "c"])
        assert a == b
        assert a != c

    def test_variables_are_unhashable(self):
        with pytest.raises(TypeError):
            hash(Variable("x", DataType.INT8))
