"""Tests for Arrow to Polars column converters."""

from decimal import Decimal

import polars as pl
import pyarrow as pa
import pytest

from duckdb_polars.core.exceptions import PolarsConversionError
from duckdb_polars.core.type_mapping import (
    DEFAULT_REGISTRY,
    ConverterRegistry,
    DictionaryConverter,
    ListConverter,
    MapConverter,
    PrimitiveConverter,
    StringConverter,
    StructConverter,
    TemporalConverter,
)


class TestConverterRegistry:
    """Tests for type support of the default registry."""

    @pytest.mark.parametrize(
        "arrow_type",
        [
            pa.null(),
            pa.bool_(),
            pa.int8(),
            pa.uint64(),
            pa.float32(),
            pa.float64(),
            pa.decimal128(18, 3),
            pa.date32(),
            pa.timestamp("us"),
            pa.timestamp("ns", tz="UTC"),
            pa.time64("us"),
            pa.duration("ms"),
            pa.string(),
            pa.large_string(),
            pa.binary(),
            pa.list_(pa.string()),
            pa.large_list(pa.int64()),
            pa.list_(pa.int32(), 3),
            pa.struct([("float", pa.float64()), ("mixed", pa.list_(pa.string()))]),
            pa.dictionary(pa.int8(), pa.string()),
            pa.map_(pa.string(), pa.int64()),
        ],
    )
    def test_supported_types(self, arrow_type):
        """Test that common DuckDB result types are supported."""
        assert DEFAULT_REGISTRY.supports(arrow_type)

    @pytest.mark.parametrize(
        "arrow_type",
        [
            pa.month_day_nano_interval(),
            pa.decimal256(60, 2),
            pa.sparse_union([pa.field("i", pa.int64()), pa.field("s", pa.string())]),
            pa.list_(pa.month_day_nano_interval()),
            pa.struct([("ok", pa.int64()), ("bad", pa.month_day_nano_interval())]),
            pa.map_(pa.string(), pa.month_day_nano_interval()),
        ],
    )
    def test_unsupported_types(self, arrow_type):
        """Test that types Polars cannot hold are rejected, also when nested."""
        assert not DEFAULT_REGISTRY.supports(arrow_type)

    def test_find_returns_family_converter(self):
        """Test that each family is handled by its own converter."""
        assert isinstance(DEFAULT_REGISTRY.find(pa.int64()), PrimitiveConverter)
        assert isinstance(DEFAULT_REGISTRY.find(pa.string()), StringConverter)
        assert isinstance(DEFAULT_REGISTRY.find(pa.date32()), TemporalConverter)
        assert isinstance(DEFAULT_REGISTRY.find(pa.list_(pa.int64())), ListConverter)
        assert isinstance(
            DEFAULT_REGISTRY.find(pa.struct([("a", pa.int64())])), StructConverter
        )
        assert isinstance(
            DEFAULT_REGISTRY.find(pa.dictionary(pa.int32(), pa.string())),
            DictionaryConverter,
        )
        assert isinstance(
            DEFAULT_REGISTRY.find(pa.map_(pa.string(), pa.string())), MapConverter
        )

    def test_normalize_unsupported_raises(self):
        """Test that normalizing an unsupported array raises a conversion error."""
        array = pa.array(
            [pa.MonthDayNano([1, 2, 3])], type=pa.month_day_nano_interval()
        )

        with pytest.raises(PolarsConversionError) as exc_info:
            DEFAULT_REGISTRY.normalize(array)

        assert "month_day_nano_interval" in str(exc_info.value)
        assert str(exc_info.value).startswith("Polars error:")

    def test_empty_registry_supports_nothing(self):
        """Test that a registry without converters rejects every type."""
        registry = ConverterRegistry()
        assert not registry.supports(pa.int64())
        assert registry.converters == []

    def test_register_first_takes_precedence(self):
        """Test registering a custom converter ahead of the built-in ones."""

        class Decimal256Converter:
            def accepts(self, arrow_type):
                return pa.types.is_decimal256(arrow_type)

            def normalize(self, array):
                return array.cast(pa.decimal128(array.type.precision, array.type.scale))

        registry = ConverterRegistry.default()
        registry.register(Decimal256Converter(), first=True)

        array = pa.array([Decimal("1.23"), None], type=pa.decimal256(10, 2))
        series = registry.to_series("amount", array)

        assert isinstance(registry.converters[0], Decimal256Converter)
        assert series.name == "amount"
        assert series.to_list() == [Decimal("1.23"), None]


class TestNormalize:
    """Tests for array normalization and series construction."""

    def test_primitive_is_not_rewritten(self):
        """Test that plain arrays are handed over unchanged."""
        array = pa.array([1, 2, 3], type=pa.int64())
        assert DEFAULT_REGISTRY.normalize(array) is array

    def test_nested_without_rewrite_is_not_rebuilt(self):
        """Test that nested arrays of plain types are handed over unchanged."""
        array = pa.array([{"a": [1, 2]}, {"a": None}])
        assert DEFAULT_REGISTRY.normalize(array) is array

    def test_integer_types_preserved(self):
        """Test that integer widths survive conversion."""
        series = DEFAULT_REGISTRY.to_series("x", pa.array([1, None], type=pa.int16()))
        assert series.dtype == pl.Int16
        assert series.to_list() == [1, None]

    def test_string_dictionary_becomes_categorical(self):
        """Test that string dictionaries are kept encoded."""
        array = pa.array(["a", "b", "a"]).dictionary_encode()
        series = DEFAULT_REGISTRY.to_series("cat", array)

        assert series.dtype == pl.Categorical
        assert series.to_list() == ["a", "b", "a"]

    def test_integer_dictionary_is_decoded(self):
        """Test that non-string dictionaries are decoded to plain arrays."""
        array = pa.array([1, 2, 1], type=pa.int64()).dictionary_encode()
        normalized = DEFAULT_REGISTRY.normalize(array)

        assert normalized.type == pa.int64()
        assert DEFAULT_REGISTRY.to_series("n", array).to_list() == [1, 2, 1]

    def test_list_of_dictionary_is_rebuilt(self):
        """Test that list children are normalized recursively."""
        values = pa.array([1, 2, 1], type=pa.int64()).dictionary_encode()
        array = pa.ListArray.from_arrays(pa.array([0, 2, 3], type=pa.int32()), values)

        normalized = DEFAULT_REGISTRY.normalize(array)
        series = DEFAULT_REGISTRY.to_series("lists", array)

        assert normalized.type == pa.list_(pa.int64())
        assert series.to_list() == [[1, 2], [1]]

    def test_struct_with_dictionary_field_is_rebuilt(self):
        """Test that struct fields are normalized recursively."""
        array = pa.StructArray.from_arrays(
            [
                pa.array([1, 2], type=pa.int64()),
                pa.array([5, 5], type=pa.int64()).dictionary_encode(),
            ],
            names=["x", "y"],
        )
        series = DEFAULT_REGISTRY.to_series("s", array)

        assert series.to_list() == [{"x": 1, "y": 5}, {"x": 2, "y": 5}]

    def test_map_becomes_list_of_structs(self):
        """Test that maps are reinterpreted as key/value struct lists."""
        array = pa.array(
            [[("a", 1), ("b", 2)], None, []],
            type=pa.map_(pa.string(), pa.int64()),
        )

        normalized = DEFAULT_REGISTRY.normalize(array)
        series = DEFAULT_REGISTRY.to_series("m", array)

        assert pa.types.is_list(normalized.type)
        assert [f.name for f in normalized.type.value_type] == ["key", "value"]
        assert series.to_list() == [
            [{"key": "a", "value": 1}, {"key": "b", "value": 2}],
            None,
            [],
        ]

    def test_nested_list_of_strings_values(self):
        """Test that list of strings values are preserved row by row."""
        array = pa.array([["a", "b", "c"], ["d"], None])
        series = DEFAULT_REGISTRY.to_series("str_list", array)

        assert series.dtype == pl.List(pl.String)
        assert series.to_list() == [["a", "b", "c"], ["d"], None]


class TestSlicedNested:
    """Tests for nested arrays that are slices of a larger array."""

    def test_sliced_map(self):
        """Test that a sliced map with nulls keeps only its own entries."""
        array = pa.array(
            [[("a", 1)], None, [("b", 2), ("c", 3)], []],
            type=pa.map_(pa.string(), pa.int64()),
        ).slice(1)

        series = DEFAULT_REGISTRY.to_series("m", array)

        assert series.to_list() == [
            None,
            [{"key": "b", "value": 2}, {"key": "c", "value": 3}],
            [],
        ]

    def test_sliced_map_without_nulls(self):
        """Test a sliced map whose first offset is not zero."""
        array = pa.array(
            [[("a", 1), ("b", 2)], [("c", 3)]],
            type=pa.map_(pa.string(), pa.int64()),
        ).slice(1, 1)

        series = DEFAULT_REGISTRY.to_series("m", array)

        assert series.to_list() == [[{"key": "c", "value": 3}]]

    def test_sliced_list_of_half_floats(self):
        """Test that a sliced list of float16 is widened without losing its offset."""
        values = pa.array([1.0, 2.5, -1.0], type=pa.float32()).cast(pa.float16())
        array = pa.ListArray.from_arrays(
            pa.array([0, 1, 3, 3], type=pa.int32()),
            values,
            mask=pa.array([False, False, False, True]),
        ).slice(1)

        series = DEFAULT_REGISTRY.to_series("halves", array)

        assert series.dtype == pl.List(pl.Float32)
        assert series.to_list() == [[2.5, -1.0], None]

    def test_sliced_large_list_of_dictionary(self):
        """Test that a sliced large list of integer dictionaries is decoded."""
        values = pa.array([7, 8, 7, 9]).dictionary_encode()
        array = pa.LargeListArray.from_arrays(
            pa.array([0, 2, 2, 4], type=pa.int64()),
            values,
            mask=pa.array([False, True, False]),
        ).slice(1)

        series = DEFAULT_REGISTRY.to_series("codes", array)

        assert series.dtype == pl.List(pl.Int64)
        assert series.to_list() == [None, [7, 9]]

    def test_empty_slice(self):
        """Test that an empty slice of a map converts to an empty series."""
        array = pa.array(
            [[("a", 1)]], type=pa.map_(pa.string(), pa.int64())
        ).slice(1)

        series = DEFAULT_REGISTRY.to_series("m", array)

        assert series.len() == 0
