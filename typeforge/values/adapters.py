"""Adapters from decoded Python objects and tabular records to raw values."""

from __future__ import annotations

from collections.abc import Collection, Iterable, Iterator, Mapping
from datetime import date, datetime, time
from decimal import Decimal
from typing import Any

from typeforge.errors import MalformedInputError
from typeforge.values.types import RawArray, RawBool, RawNull, RawNumber, RawObject, RawString, RawValue


def from_python(value: Any) -> RawValue:
    """Convert a json/yaml-decoded Python object into a raw value tree."""

    if value is None:
        return RawNull()
    if isinstance(value, bool):
        return RawBool(value)
    if isinstance(value, int):
        return RawNumber(value)
    if isinstance(value, float):
        return RawNumber(value)
    if isinstance(value, Decimal):
        return RawNumber(_decimal_to_number(value))
    if isinstance(value, str):
        return RawString(value)
    # datetime is a subclass of date; both render as ISO text for the detectors.
    if isinstance(value, (datetime, date, time)):
        return RawString(value.isoformat())
    if isinstance(value, Mapping):
        return RawObject(tuple((str(key), from_python(item)) for key, item in value.items()))
    if isinstance(value, (list, tuple)):
        return RawArray(tuple(from_python(item) for item in value))
    raise MalformedInputError(f"Unsupported sample value type: {type(value).__name__}")


def from_records(
    rows: Iterable[Mapping[str, str | None]],
    *,
    numeric_columns: Collection[str] = (),
) -> Iterator[RawObject]:
    """Yield one raw object per tabular record.

    Cells are presented as strings unless their column is listed in
    ``numeric_columns``, in which case they are parsed as numbers.
    """

    for row_number, row in enumerate(rows, start=1):
        fields: list[tuple[str, RawValue]] = []
        for column, cell in row.items():
            if column is None:
                raise MalformedInputError(f"Record {row_number} has more cells than header columns")
            fields.append((column, _cell_value(column, cell, numeric_columns, row_number)))
        yield RawObject(tuple(fields))


def _cell_value(
    column: str,
    cell: str | None,
    numeric_columns: Collection[str],
    row_number: int,
) -> RawValue:
    if cell is None:
        return RawNull()
    if column not in numeric_columns:
        return RawString(cell)
    text = cell.strip()
    if not text:
        return RawNull()
    try:
        return RawNumber(int(text))
    except ValueError:
        pass
    try:
        return RawNumber(float(text))
    except ValueError as exc:
        raise MalformedInputError(
            f"Record {row_number} column {column!r} is not numeric: {cell!r}"
        ) from exc


def _decimal_to_number(value: Decimal) -> int | float:
    if not value.is_finite():
        raise MalformedInputError(f"Non-finite number is not representable: {value}")
    exponent = value.as_tuple().exponent
    if isinstance(exponent, int) and exponent >= 0:
        return int(value)
    return float(value)
