"""
Main Query API - user-facing interface for CRMStream

This is the primary entry point for users. It provides a simple,
fluent API for scanning CRM object collections.

Example:
    >>> from crmstream import query
    >>> rows = query("contacts", api_key="pat-123").select(
    ...     "id:string", "properties.email:string", "createdAt:timestamp"
    ... ).limit(10)
    >>> for row in rows:
    ...     print(row)
"""

from typing import Any, Dict, Iterator, List, Optional

from crmstream.core.transport import HTTPTransport
from crmstream.core.types import Schema
from crmstream.readers.hubspot_reader import ColumnSpec, HubSpotReader


class Query:
    """
    Main query builder class

    Each builder call returns a new Query; nothing touches the network until
    the query is iterated.
    """

    def __init__(
        self,
        object: str,
        api_key: str,
        base_url: Optional[str] = None,
        transport: Optional[HTTPTransport] = None,
        columns: Optional[List[ColumnSpec]] = None,
        row_limit: Optional[int] = None,
    ):
        """
        Initialize query against one object collection

        Args:
            object: Object collection (contacts, companies, deals)
            api_key: Private app token
            base_url: API root override
            transport: HTTP transport override
        """
        self.object = object
        self.api_key = api_key
        self.base_url = base_url
        self.transport = transport
        self.columns = list(columns or [])
        self.row_limit = row_limit

    def _copy(self, **changes) -> "Query":
        params = {
            "object": self.object,
            "api_key": self.api_key,
            "base_url": self.base_url,
            "transport": self.transport,
            "columns": self.columns,
            "row_limit": self.row_limit,
        }
        params.update(changes)
        return Query(**params)

    def select(self, *columns: ColumnSpec) -> "Query":
        """
        Choose output columns

        Args:
            *columns: ``name:kind`` specs or Column objects

        Example:
            >>> query("deals", api_key=key).select("properties.amount:decimal")
        """
        return self._copy(columns=self.columns + list(columns))

    def limit(self, n: int) -> "Query":
        """Stop after ``n`` rows"""
        if n < 0:
            raise ValueError(f"Limit must be non-negative, got {n}")
        return self._copy(row_limit=n)

    def reader(self) -> HubSpotReader:
        """Build the reader this query runs"""
        if not self.columns:
            raise ValueError("No columns selected. Call select() first.")

        reader = HubSpotReader(
            self.object,
            api_key=self.api_key,
            columns=self.columns,
            base_url=self.base_url,
            transport=self.transport,
        )
        if self.row_limit is not None:
            reader.set_limit(self.row_limit)
        return reader

    def schema(self) -> Schema:
        """Schema of the rows this query yields"""
        return self.reader().get_schema()

    def __iter__(self) -> Iterator[Dict[str, Any]]:
        return self.reader().read_lazy()

    def to_list(self) -> List[Dict[str, Any]]:
        """Run the query and materialize all rows"""
        return list(self)

    def __repr__(self) -> str:
        return f"Query({self.object!r}, columns={self.columns!r}, limit={self.row_limit})"


def query(object: str, api_key: str, base_url: Optional[str] = None, transport: Optional[HTTPTransport] = None) -> Query:
    """
    Create a query against a CRM object collection

    Args:
        object: Object collection (contacts, companies, deals)
        api_key: Private app token
        base_url: API root override
        transport: HTTP transport override

    Returns:
        Query builder
    """
    return Query(object, api_key=api_key, base_url=base_url, transport=transport)
