"""
Conversion of engine values to display strings.

Each result column carries a DuckDB type name. The name is mapped to a
LogicalType, and the LogicalType selects the converter used for every cell
of that column. Output is locale-free and follows the Arrow display rules
the desktop front end was built against.
"""

import datetime as dt
import math
from collections.abc import Callable
from decimal import Decimal
from typing import Any

import numpy as np

from .models import ColumnInfo, LogicalType

DEFAULT_NULL_TEXT = ""

_TYPE_MAP: dict[str, LogicalType] = {
    "TINYINT": LogicalType.INT,
    "SMALLINT": LogicalType.INT,
    "INTEGER": LogicalType.INT,
    "BIGINT": LogicalType.INT,
    "HUGEINT": LogicalType.INT,
    "UTINYINT": LogicalType.INT,
    "USMALLINT": LogicalType.INT,
    "UINTEGER": LogicalType.INT,
    "UBIGINT": LogicalType.INT,
    "UHUGEINT": LogicalType.INT,
    "FLOAT": LogicalType.FLOAT,
    "DOUBLE": LogicalType.FLOAT,
    "DECIMAL": LogicalType.FLOAT,
    "VARCHAR": LogicalType.TEXT,
    "ENUM": LogicalType.TEXT,
    "BOOLEAN": LogicalType.BOOL,
    "DATE": LogicalType.DATE,
    "TIMESTAMP": LogicalType.TIMESTAMP,
    "TIMESTAMP_S": LogicalType.TIMESTAMP,
    "TIMESTAMP_MS": LogicalType.TIMESTAMP,
    "TIMESTAMP_NS": LogicalType.TIMESTAMP,
    "TIMESTAMP WITH TIME ZONE": LogicalType.TIMESTAMP,
    "TIMESTAMPTZ": LogicalType.TIMESTAMP,
    "NULL": LogicalType.NULL,
}


def to_logical_type(engine_type: str) -> LogicalType:
    """
    Map a DuckDB type name to its LogicalType.

    Args:
        engine_type: Type name as reported by DuckDB, e.g. "DECIMAL(18,3)"

    Returns:
        The matching LogicalType, or LogicalType.OTHER for nested and
        unrecognised types
    """
    name = engine_type.strip().upper()
    # INTEGER[] and INTEGER[3] are lists and arrays, not integers
    if name.endswith("]"):
        return LogicalType.OTHER
    base = name.split("(", 1)[0].strip()
    return _TYPE_MAP.get(base, LogicalType.OTHER)


def _format_int(value: Any) -> str:
    return format(value, "d")


def _format_float(value: Any) -> str:
    if isinstance(value, Decimal):
        return format(value, "f")
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return repr(float(value))


def _format_float32(value: Any) -> str:
    # Shortest text that round-trips as a 32-bit float, not as the widened double
    if math.isnan(value) or math.isinf(value):
        return _format_float(value)
    return str(np.float32(value))


def _format_text(value: Any) -> str:
    return value if isinstance(value, str) else str(value)


def _format_bool(value: Any) -> str:
    if not isinstance(value, bool):
        raise TypeError(f"expected bool, got {type(value).__name__}")
    return "true" if value else "false"


def _format_date(value: Any) -> str:
    if not isinstance(value, dt.date):
        raise TypeError(f"expected date, got {type(value).__name__}")
    return value.isoformat()


def _format_timestamp(value: Any) -> str:
    if not isinstance(value, dt.datetime):
        raise TypeError(f"expected datetime, got {type(value).__name__}")
    return value.isoformat()


def _format_other(value: Any) -> str:
    if isinstance(value, (bytes, bytearray, memoryview)):
        return bytes(value).hex()
    return str(value)


CONVERTERS: dict[LogicalType, Callable[[Any], str]] = {
    LogicalType.INT: _format_int,
    LogicalType.FLOAT: _format_float,
    LogicalType.TEXT: _format_text,
    LogicalType.BOOL: _format_bool,
    LogicalType.DATE: _format_date,
    LogicalType.TIMESTAMP: _format_timestamp,
    # only reached for a non-NULL value in a NULL-typed column
    LogicalType.NULL: _format_other,
    LogicalType.OTHER: _format_other,
}


def format_value(value: Any, logical_type: LogicalType, null_text: str = DEFAULT_NULL_TEXT) -> str:
    """
    Convert a single engine value to its display string.

    Args:
        value: Python value fetched from the engine
        logical_type: Type of the column the value belongs to
        null_text: Text used for NULL values

    Returns:
        Display string

    Raises:
        TypeError, ValueError: If the value does not fit the column type
    """
    if value is None:
        return null_text
    return CONVERTERS[logical_type](value)


# Engine types whose values need a different converter than their LogicalType's
ENGINE_TYPE_CONVERTERS: dict[str, Callable[[Any], str]] = {
    "FLOAT": _format_float32,
    "REAL": _format_float32,
    "FLOAT4": _format_float32,
}


def column_formatter(column: ColumnInfo, null_text: str = DEFAULT_NULL_TEXT) -> Callable[[Any], str]:
    """Return a cell converter bound to a column's type."""
    converter = ENGINE_TYPE_CONVERTERS.get(column.engine_type.strip().upper(), CONVERTERS[column.type])

    def _format(value: Any) -> str:
        if value is None:
            return null_text
        return converter(value)

    return _format
