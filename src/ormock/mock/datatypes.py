"""Column data-type placeholders.

Data types are tagged variants: a ``DataType`` is its ``DataTypeKind`` plus
whatever arguments it was called with. They carry no behavior of their own;
rendering is a free function dispatching on the tag.

Usage:
    from ormock.mock.datatypes import STRING, DECIMAL, format_data_type

    format_data_type(STRING)          # 'VARCHAR(255)'
    format_data_type(STRING(64))      # 'VARCHAR(64)'
    format_data_type(DECIMAL(10, 2))  # 'DECIMAL(10,2)'
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from typing import Any

from ormock.contracts.enums import DataTypeKind


@dataclass(frozen=True, slots=True)
class DataType:
    """A data type placeholder, optionally parameterized.

    Calling a data type returns a copy with the given arguments, so both
    ``STRING`` and ``STRING(64)`` work in model definitions.
    """

    kind: DataTypeKind
    args: tuple[Any, ...] = ()

    def __call__(self, *args: Any) -> DataType:
        return replace(self, args=args)

    @property
    def key(self) -> str:
        return self.kind.value

    def __str__(self) -> str:
        return format_data_type(self)


def _sized(sql_name: str, default: int | None = None) -> Callable[[tuple[Any, ...]], str]:
    def render(args: tuple[Any, ...]) -> str:
        size = args[0] if args else default
        return sql_name if size is None else f"{sql_name}({size})"

    return render


def _precision(sql_name: str) -> Callable[[tuple[Any, ...]], str]:
    def render(args: tuple[Any, ...]) -> str:
        if not args:
            return sql_name
        return f"{sql_name}({','.join(str(a) for a in args)})"

    return render


def _enum(args: tuple[Any, ...]) -> str:
    values = args[0] if len(args) == 1 and isinstance(args[0], list | tuple) else args
    return "ENUM(" + ",".join(f"'{v}'" for v in values) + ")"


def _array(args: tuple[Any, ...]) -> str:
    if not args:
        return "ARRAY"
    inner = args[0]
    inner_text = format_data_type(inner) if isinstance(inner, DataType) else str(inner)
    return f"ARRAY({inner_text})"


def _range(args: tuple[Any, ...]) -> str:
    if not args:
        return "RANGE"
    inner = args[0]
    inner_text = format_data_type(inner) if isinstance(inner, DataType) else str(inner)
    return f"RANGE({inner_text})"


def _fixed(sql_name: str) -> Callable[[tuple[Any, ...]], str]:
    return lambda _args: sql_name


_RENDERERS: dict[DataTypeKind, Callable[[tuple[Any, ...]], str]] = {
    DataTypeKind.STRING: _sized("VARCHAR", 255),
    DataTypeKind.CHAR: _sized("CHAR", 255),
    DataTypeKind.TEXT: _fixed("TEXT"),
    DataTypeKind.INTEGER: _sized("INTEGER"),
    DataTypeKind.BIGINT: _sized("BIGINT"),
    DataTypeKind.FLOAT: _precision("FLOAT"),
    DataTypeKind.REAL: _precision("REAL"),
    DataTypeKind.DOUBLE: _precision("DOUBLE PRECISION"),
    DataTypeKind.DECIMAL: _precision("DECIMAL"),
    DataTypeKind.BOOLEAN: _fixed("TINYINT(1)"),
    DataTypeKind.TIME: _fixed("TIME"),
    DataTypeKind.DATE: _fixed("DATETIME"),
    DataTypeKind.DATEONLY: _fixed("DATE"),
    DataTypeKind.HSTORE: _fixed("HSTORE"),
    DataTypeKind.JSON: _fixed("JSON"),
    DataTypeKind.JSONB: _fixed("JSONB"),
    DataTypeKind.NOW: _fixed("NOW"),
    DataTypeKind.BLOB: _fixed("BLOB"),
    DataTypeKind.RANGE: _range,
    DataTypeKind.UUID: _fixed("UUID"),
    DataTypeKind.UUIDV1: _fixed("UUIDV1"),
    DataTypeKind.UUIDV4: _fixed("UUIDV4"),
    DataTypeKind.VIRTUAL: _fixed("VIRTUAL"),
    DataTypeKind.ENUM: _enum,
    DataTypeKind.ARRAY: _array,
    DataTypeKind.GEOMETRY: _fixed("GEOMETRY"),
    DataTypeKind.GEOGRAPHY: _fixed("GEOGRAPHY"),
}


def format_data_type(data_type: DataType) -> str:
    """Render a SQL-like name for a data type."""
    return _RENDERERS[data_type.kind](data_type.args)


STRING = DataType(DataTypeKind.STRING)
CHAR = DataType(DataTypeKind.CHAR)
TEXT = DataType(DataTypeKind.TEXT)
INTEGER = DataType(DataTypeKind.INTEGER)
BIGINT = DataType(DataTypeKind.BIGINT)
FLOAT = DataType(DataTypeKind.FLOAT)
REAL = DataType(DataTypeKind.REAL)
DOUBLE = DataType(DataTypeKind.DOUBLE)
DECIMAL = DataType(DataTypeKind.DECIMAL)
BOOLEAN = DataType(DataTypeKind.BOOLEAN)
TIME = DataType(DataTypeKind.TIME)
DATE = DataType(DataTypeKind.DATE)
DATEONLY = DataType(DataTypeKind.DATEONLY)
HSTORE = DataType(DataTypeKind.HSTORE)
JSON = DataType(DataTypeKind.JSON)
JSONB = DataType(DataTypeKind.JSONB)
NOW = DataType(DataTypeKind.NOW)
BLOB = DataType(DataTypeKind.BLOB)
RANGE = DataType(DataTypeKind.RANGE)
UUID = DataType(DataTypeKind.UUID)
UUIDV1 = DataType(DataTypeKind.UUIDV1)
UUIDV4 = DataType(DataTypeKind.UUIDV4)
VIRTUAL = DataType(DataTypeKind.VIRTUAL)
ENUM = DataType(DataTypeKind.ENUM)
ARRAY = DataType(DataTypeKind.ARRAY)
GEOMETRY = DataType(DataTypeKind.GEOMETRY)
GEOGRAPHY = DataType(DataTypeKind.GEOGRAPHY)

DATA_TYPES: dict[str, DataType] = {kind.value: DataType(kind) for kind in DataTypeKind}
