"""
Row projection - resolve requested columns against a raw record and coerce
each value to the kind the caller declared

Resolution is a fixed two-step lookup for flat names (top-level key, then
the ``properties`` bag) and a strict walk for dotted paths. Any failing
column fails the whole row.
"""

import json
import math
from decimal import Decimal
from typing import Any, Dict, List, Sequence

from crmstream.core.errors import CoercionError, ColumnNotFoundError
from crmstream.core.types import Cell, Column, ColumnKind, parse_rfc3339

PROPERTIES_KEY = "properties"

_MISSING = object()


def _lookup(value: Any, key: str) -> Any:
    if isinstance(value, dict) and key in value:
        return value[key]
    return _MISSING


def resolve(record: Dict[str, Any], column: Column) -> Any:
    """
    Find the value a column refers to in a record

    Args:
        record: Raw record as returned by the API
        column: Column to resolve

    Returns:
        The resolved value, which may be None for JSON nulls

    Raises:
        ColumnNotFoundError: If the column does not resolve

    Examples:
        >>> resolve({"properties": {"industry": "Tech"}}, Column.parse("industry:string"))
        'Tech'
        >>> resolve({"properties": {"email": "a@b.com"}}, Column.parse("properties.email:string"))
        'a@b.com'
    """
    if column.is_path:
        current = record
        for part in column.path:
            current = _lookup(current, part)
            if current is _MISSING:
                raise ColumnNotFoundError(column.name)
        return current

    value = _lookup(record, column.name)
    if value is _MISSING:
        value = _lookup(_lookup(record, PROPERTIES_KEY), column.name)
    if value is _MISSING:
        raise ColumnNotFoundError(column.name)
    return value


def _is_number(value: Any) -> bool:
    # bool is an int subclass but not a JSON number
    if isinstance(value, bool):
        return False
    if isinstance(value, float):
        return math.isfinite(value)
    return isinstance(value, int)


def to_decimal_text(value: float | int) -> str:
    """Render a number in plain decimal notation, never in exponent form"""
    if isinstance(value, int):
        return str(value)
    return format(Decimal(repr(value)), "f")


def to_json_text(value: Any) -> str:
    """Serialize a value to compact JSON with sorted keys"""
    return json.dumps(value, separators=(",", ":"), sort_keys=True, ensure_ascii=False)


def coerce(value: Any, column: Column) -> Cell:
    """
    Convert a resolved value to the column's declared kind

    Raises:
        CoercionError: If the value is incompatible with the kind
    """
    kind = column.kind

    if kind == ColumnKind.BOOLEAN:
        if isinstance(value, bool):
            return Cell(ColumnKind.BOOLEAN, value)
    elif kind == ColumnKind.STRING:
        if isinstance(value, str):
            return Cell(ColumnKind.STRING, value)
    elif kind == ColumnKind.TIMESTAMP:
        timestamp = parse_rfc3339(value) if isinstance(value, str) else None
        if timestamp is not None:
            return Cell(ColumnKind.TIMESTAMP, timestamp)
    elif kind == ColumnKind.JSON:
        return Cell(ColumnKind.JSON, to_json_text(value))
    elif _is_number(value):
        # Numeric remote fields are served as their decimal text
        return Cell(ColumnKind.STRING, to_decimal_text(value))

    raise CoercionError(column.name, kind)


def project(record: Dict[str, Any], columns: Sequence[Column]) -> List[Cell]:
    """
    Produce one typed row from a record, one cell per column in order

    Raises:
        ColumnNotFoundError: If any column does not resolve
        CoercionError: If any value cannot be coerced
    """
    return [coerce(resolve(record, column), column) for column in columns]
