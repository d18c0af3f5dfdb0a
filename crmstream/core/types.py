"""Type system for CRMStream.

This module provides the column kinds a caller can declare, the column
descriptor and typed cell produced for every row, and the RFC3339 parser
used for timestamp columns.
"""

import re
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Sequence


class ColumnKind(Enum):
    """Target kinds a caller can declare for a column."""

    # Kinds with a dedicated coercion rule
    BOOLEAN = "BOOLEAN"
    STRING = "STRING"
    TIMESTAMP = "TIMESTAMP"
    JSON = "JSON"

    # Everything else is served as numeric text
    INTEGER = "INTEGER"
    FLOAT = "FLOAT"
    DECIMAL = "DECIMAL"
    DATE = "DATE"
    TIMESTAMPTZ = "TIMESTAMPTZ"
    UUID = "UUID"

    def __str__(self) -> str:
        return self.value

    def has_dedicated_coercion(self) -> bool:
        """Check if kind has its own coercion rule instead of the numeric-as-string one."""
        return self in (ColumnKind.BOOLEAN, ColumnKind.STRING, ColumnKind.TIMESTAMP, ColumnKind.JSON)

    @classmethod
    def from_name(cls, name: str) -> "ColumnKind":
        """Look up a kind by name, case-insensitively.

        Raises:
            ValueError: If no kind has that name
        """
        try:
            return cls(name.strip().upper())
        except ValueError:
            available = ", ".join(kind.value.lower() for kind in cls)
            raise ValueError(f"Unknown column kind: {name}. Available kinds: {available}") from None


@dataclass(frozen=True)
class Column:
    """A caller-declared output column: a name (flat or dotted path) and a kind."""

    name: str
    kind: ColumnKind

    PATH_SEPARATOR = "."

    @property
    def is_path(self) -> bool:
        return self.PATH_SEPARATOR in self.name

    @property
    def path(self) -> list[str]:
        return self.name.split(self.PATH_SEPARATOR)

    @staticmethod
    def parse(spec: str) -> "Column":
        """Parse a ``name[:kind]`` column spec.

        The kind is optional and defaults to JSON, which accepts any value.

        Examples:
            >>> Column.parse("properties.email:string")
            Column(name='properties.email', kind=<ColumnKind.STRING: 'STRING'>)
            >>> Column.parse("archived:boolean").kind
            <ColumnKind.BOOLEAN: 'BOOLEAN'>
        """
        name, sep, kind = spec.rpartition(":")
        if not sep:
            name, kind = spec, "json"
        name = name.strip()
        if not name:
            raise ValueError(f"Column spec has no name: '{spec}'")
        return Column(name, ColumnKind.from_name(kind))

    def __str__(self) -> str:
        return f"{self.name}:{self.kind.value.lower()}"


@dataclass(frozen=True)
class Cell:
    """One coerced output value tagged with its kind."""

    kind: ColumnKind
    value: Any


class Schema:
    """Schema of a scan: ordered column names and their declared kinds."""

    def __init__(self, columns: dict[str, ColumnKind]):
        """Initialize schema.

        Args:
            columns: Dictionary mapping column names to kinds
        """
        self.columns = columns

    def __getitem__(self, column: str) -> ColumnKind:
        return self.columns[column]

    def __contains__(self, column: str) -> bool:
        return column in self.columns

    def __len__(self) -> int:
        return len(self.columns)

    def __repr__(self) -> str:
        cols = ", ".join(f"{name}: {kind}" for name, kind in self.columns.items())
        return f"Schema({cols})"

    def get_column_names(self) -> list[str]:
        """Get list of column names."""
        return list(self.columns.keys())

    def get_column_kind(self, column: str) -> ColumnKind | None:
        """Get kind of a column, or None if column doesn't exist."""
        return self.columns.get(column)

    @staticmethod
    def from_columns(columns: Sequence[Column]) -> "Schema":
        """Build a schema from column descriptors, keeping their order."""
        return Schema({column.name: column.kind for column in columns})

    def to_dict(self) -> dict[str, str]:
        """Convert schema to dictionary."""
        return {name: kind.value for name, kind in self.columns.items()}


_RFC3339_PATTERN = re.compile(
    r"^\d{4}-\d{2}-\d{2}[Tt ]\d{2}:\d{2}:\d{2}(\.\d+)?([Zz]|[+-]\d{2}:\d{2})$"
)


def parse_rfc3339(value: str) -> datetime | None:
    """Parse an RFC3339 timestamp.

    The offset is mandatory, so the result is always timezone-aware.

    Args:
        value: String to parse

    Returns:
        datetime object if successful, None otherwise

    Examples:
        >>> parse_rfc3339("2024-01-15T10:30:00Z")
        datetime.datetime(2024, 1, 15, 10, 30, tzinfo=datetime.timezone.utc)
        >>> parse_rfc3339("not-a-date") is None
        True
    """
    if not isinstance(value, str):
        return None

    if not _RFC3339_PATTERN.match(value):
        return None

    # fromisoformat wants an upper-case separator and a numeric offset
    normalized = value.upper().replace("Z", "+00:00")
    try:
        return datetime.fromisoformat(normalized)
    except ValueError:
        return None
