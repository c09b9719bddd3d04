"""Column converters between Arrow arrays and Polars series.

Each converter covers one family of Arrow types. A converter states whether it
accepts a type and rewrites an array of that type into a layout Polars can
ingest directly. For most types that rewrite is the identity, so the Arrow
buffers are handed to Polars without copying. Nested converters normalize their
children through the registry, which makes the set of supported types exactly
the closure of the registered families.
"""

from typing import Iterable, Optional, Protocol

import polars as pl
import pyarrow as pa
import pyarrow.compute as pc

from duckdb_polars.core.exceptions import PolarsConversionError


class ColumnConverter(Protocol):
    """Protocol for a per-type-family Arrow to Polars column converter."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        """Return True if arrays of ``arrow_type`` can be converted."""
        ...

    def normalize(self, array: pa.Array) -> pa.Array:
        """Return an array with the same values in a layout Polars ingests.

        Must return ``array`` itself when no rewrite is needed.
        """
        ...


class NullConverter:
    """All-null columns."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return pa.types.is_null(arrow_type)

    def normalize(self, array: pa.Array) -> pa.Array:
        return array


class PrimitiveConverter:
    """Booleans, integers and floats.

    Half floats are widened to float32, which Polars can store.
    """

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return (
            pa.types.is_boolean(arrow_type)
            or pa.types.is_integer(arrow_type)
            or pa.types.is_floating(arrow_type)
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        if pa.types.is_float16(array.type):
            return array.cast(pa.float32())
        return array


class DecimalConverter:
    """128-bit decimals."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return pa.types.is_decimal128(arrow_type)

    def normalize(self, array: pa.Array) -> pa.Array:
        return array


class TemporalConverter:
    """Dates, timestamps, times of day and durations."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return (
            pa.types.is_date(arrow_type)
            or pa.types.is_timestamp(arrow_type)
            or pa.types.is_time(arrow_type)
            or pa.types.is_duration(arrow_type)
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        return array


class StringConverter:
    """Strings and binaries in every offset width."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return (
            pa.types.is_string(arrow_type)
            or pa.types.is_large_string(arrow_type)
            or pa.types.is_string_view(arrow_type)
            or pa.types.is_binary(arrow_type)
            or pa.types.is_large_binary(arrow_type)
            or pa.types.is_binary_view(arrow_type)
            or pa.types.is_fixed_size_binary(arrow_type)
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        return array


def _rebased_offsets_and_values(array: pa.Array) -> tuple[pa.Array, pa.Array]:
    """Offsets starting at zero and the matching slice of the child values.

    A sliced list array shares its parent's offsets and child buffers. Arrow
    cannot rebuild a list with a validity mask from sliced offsets, so the
    offsets are rebased onto a fresh array and the child values cut to the
    referenced range.
    """
    offsets_type = pa.int64() if pa.types.is_large_list(array.type) else pa.int32()
    if len(array) == 0:
        return pa.array([0], type=offsets_type), array.values.slice(0, 0)

    offsets = array.offsets
    start = offsets[0].as_py()
    end = offsets[-1].as_py()
    rebased = pc.subtract(offsets, pa.scalar(start, type=offsets.type))
    return rebased, array.values.slice(start, end - start)


class _NestedConverter:
    """Base for converters whose support depends on their child types."""

    def __init__(self, registry: "ConverterRegistry"):
        self._registry = registry


class DictionaryConverter(_NestedConverter):
    """Dictionary-encoded columns, e.g. DuckDB ENUMs.

    String dictionaries become Polars categoricals as they are. Dictionaries
    of any other value type are decoded first.
    """

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return pa.types.is_dictionary(arrow_type) and self._registry.supports(
            arrow_type.value_type
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        value_type = array.type.value_type
        if pa.types.is_string(value_type) or pa.types.is_large_string(value_type):
            return array
        return self._registry.normalize(array.dictionary_decode())


class ListConverter(_NestedConverter):
    """Variable and fixed size lists."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return (
            pa.types.is_list(arrow_type)
            or pa.types.is_large_list(arrow_type)
            or pa.types.is_fixed_size_list(arrow_type)
        ) and self._registry.supports(arrow_type.value_type)

    def normalize(self, array: pa.Array) -> pa.Array:
        list_type = array.type
        if pa.types.is_fixed_size_list(list_type):
            size = list_type.list_size
            raw = array.values.slice(array.offset * size, len(array) * size)
            offsets = None
        else:
            offsets, raw = _rebased_offsets_and_values(array)

        values = self._registry.normalize(raw)
        if values is raw:
            return array

        value_field = list_type.value_field.with_type(values.type)
        mask = array.is_null()
        if pa.types.is_fixed_size_list(list_type):
            return pa.FixedSizeListArray.from_arrays(
                values, type=pa.list_(value_field, list_type.list_size), mask=mask
            )
        if pa.types.is_large_list(list_type):
            return pa.LargeListArray.from_arrays(
                offsets, values, type=pa.large_list(value_field), mask=mask
            )
        return pa.ListArray.from_arrays(
            offsets, values, type=pa.list_(value_field), mask=mask
        )


class MapConverter(_NestedConverter):
    """Maps, reinterpreted as lists of key/value structs.

    A map has the same physical layout as a list of structs, so the entries
    array is reused as it is.
    """

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return (
            pa.types.is_map(arrow_type)
            and self._registry.supports(arrow_type.key_type)
            and self._registry.supports(arrow_type.item_type)
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        offsets, entries = _rebased_offsets_and_values(array)
        as_list = pa.ListArray.from_arrays(
            offsets,
            entries,
            type=pa.list_(pa.field("entries", entries.type, nullable=False)),
            mask=array.is_null(),
        )
        return self._registry.normalize(as_list)


class StructConverter(_NestedConverter):
    """Structs, supported when every field type is."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        if not pa.types.is_struct(arrow_type):
            return False
        return all(
            self._registry.supports(arrow_type.field(i).type)
            for i in range(arrow_type.num_fields)
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        children = array.flatten()
        normalized = [self._registry.normalize(child) for child in children]
        if all(new is old for new, old in zip(normalized, children)):
            return array

        struct_type = array.type
        fields = [
            struct_type.field(i).with_type(child.type)
            for i, child in enumerate(normalized)
        ]
        return pa.StructArray.from_arrays(normalized, fields=fields, mask=array.is_null())


class ExtensionConverter(_NestedConverter):
    """Extension types, converted through their storage array."""

    def accepts(self, arrow_type: pa.DataType) -> bool:
        return isinstance(arrow_type, pa.BaseExtensionType) and self._registry.supports(
            arrow_type.storage_type
        )

    def normalize(self, array: pa.Array) -> pa.Array:
        return self._registry.normalize(array.storage)


class ConverterRegistry:
    """Ordered collection of column converters.

    The first converter accepting a type handles it. Types no converter
    accepts (intervals, unions, 256-bit decimals, ...) are rejected.
    """

    def __init__(self, converters: Optional[Iterable[ColumnConverter]] = None):
        self._converters: list[ColumnConverter] = list(converters or [])

    @classmethod
    def default(cls) -> "ConverterRegistry":
        """Build a registry with every built-in converter."""
        registry = cls()
        registry.register(ExtensionConverter(registry))
        registry.register(DictionaryConverter(registry))
        registry.register(MapConverter(registry))
        registry.register(ListConverter(registry))
        registry.register(StructConverter(registry))
        registry.register(NullConverter())
        registry.register(PrimitiveConverter())
        registry.register(DecimalConverter())
        registry.register(TemporalConverter())
        registry.register(StringConverter())
        return registry

    @property
    def converters(self) -> list[ColumnConverter]:
        return list(self._converters)

    def register(self, converter: ColumnConverter, first: bool = False) -> None:
        """Add a converter.

        Args:
            converter: Converter to add
            first: If True, the converter takes precedence over existing ones
        """
        if first:
            self._converters.insert(0, converter)
        else:
            self._converters.append(converter)

    def find(self, arrow_type: pa.DataType) -> Optional[ColumnConverter]:
        for converter in self._converters:
            if converter.accepts(arrow_type):
                return converter
        return None

    def supports(self, arrow_type: pa.DataType) -> bool:
        return self.find(arrow_type) is not None

    def normalize(self, array: pa.Array) -> pa.Array:
        """Rewrite ``array`` into a layout Polars ingests.

        Raises:
            PolarsConversionError: If the array's type is not supported
        """
        converter = self.find(array.type)
        if converter is None:
            raise PolarsConversionError(
                f"Arrow type {array.type} cannot be represented as a Polars column",
                context={"arrow_type": str(array.type)},
            )
        return converter.normalize(array)

    def to_series(self, name: str, array: pa.Array) -> pl.Series:
        """Build a named Polars series from an Arrow array."""
        return pl.Series(name, self.normalize(array))


DEFAULT_REGISTRY = ConverterRegistry.default()
