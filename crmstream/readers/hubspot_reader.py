"""
HubSpot Reader - stream typed rows out of a CRM object collection

Wraps a ScanSession: every call to read_lazy() opens a scan, pulls rows
until the scan is exhausted (or the limit is hit) and closes it again.
"""

from __future__ import annotations

from typing import Any, Dict, Iterator, List, Optional, Sequence, Union

from crmstream.core.session import ScanSession
from crmstream.core.transport import HTTPTransport
from crmstream.core.types import Column, Schema
from crmstream.readers.base import BaseReader

ColumnSpec = Union[str, Column]


def to_columns(specs: Sequence[ColumnSpec]) -> List[Column]:
    """Turn ``name:kind`` strings (or Column objects) into Columns"""
    columns = [spec if isinstance(spec, Column) else Column.parse(spec) for spec in specs]
    seen = set()
    for column in columns:
        if column.name in seen:
            raise ValueError(f"Duplicate column name: {column.name}")
        seen.add(column.name)
    return columns


class HubSpotReader(BaseReader):
    """
    Read contacts, companies or deals as typed rows

    Example:
        reader = HubSpotReader("contacts", api_key="pat-123",
                               columns=["id:string", "properties.email:string"])
        for row in reader.read_lazy():
            print(row["properties.email"])
    """

    def __init__(
        self,
        object: str,
        api_key: str,
        columns: Sequence[ColumnSpec],
        base_url: Optional[str] = None,
        transport: Optional[HTTPTransport] = None,
    ):
        """
        Initialize HubSpot reader

        Args:
            object: Object collection to scan (contacts, companies, deals)
            api_key: Private app token
            columns: Column specs (``name:kind``) or Column objects
            base_url: API root (default: https://api.hubapi.com)
            transport: HTTP transport override
        """
        self.object = object
        self.columns = to_columns(columns)
        self.limit: Optional[int] = None

        server_options = {"api_key": api_key}
        if base_url:
            server_options["base_url"] = base_url

        self.session = ScanSession(transport=transport)
        self.session.initialize(server_options)

    def supports_column_selection(self) -> bool:
        return True

    def set_columns(self, columns: List[str]) -> None:
        """Keep only the named columns, in the requested order"""
        by_name = {column.name: column for column in self.columns}
        missing = [name for name in columns if name not in by_name]
        if missing:
            raise ValueError(f"Columns not declared for this reader: {', '.join(missing)}")
        self.columns = [by_name[name] for name in columns]

    def supports_limit(self) -> bool:
        return True

    def set_limit(self, limit: int) -> None:
        self.limit = limit

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """Run one scan, yielding each row as ``{column name: value}``"""
        try:
            self.session.open_scan({"object": self.object}, self.columns)
            rows_yielded = 0
            while self.limit is None or rows_yielded < self.limit:
                cells = self.session.pull_row()
                if cells is None:
                    break
                yield {column.name: cell.value for column, cell in zip(self.columns, cells)}
                rows_yielded += 1
        finally:
            self.session.close_scan()

    def get_schema(self) -> Schema:
        return Schema.from_columns(self.columns)

    def __repr__(self) -> str:
        return f"HubSpotReader({self.object!r}, columns={[str(c) for c in self.columns]})"
