"""
Base reader interface for all data sources

All readers implement this interface to provide a consistent API
for the query layer.
"""

from typing import Any, Dict, Iterator, List, Optional

from crmstream.core.types import Schema


class BaseReader:
    """
    Base class for all data source readers

    Readers are responsible for:
    1. Reading data from a source
    2. Yielding rows as dictionaries (lazy evaluation)
    3. Optionally supporting column pruning
    4. Optionally supporting early termination with a limit
    """

    def read_lazy(self) -> Iterator[Dict[str, Any]]:
        """
        Yield rows as dictionaries

        This is the core method that all readers must implement.
        It should yield one row at a time rather than loading all data
        into memory.

        Yields:
            Dictionary representing one row of data

        Example:
            {'email': 'alice@example.com', 'createdate': datetime(...)}
        """
        raise NotImplementedError("Subclasses must implement read_lazy()")

    def supports_column_selection(self) -> bool:
        """
        Does this reader support column pruning?

        Returns:
            True if column selection is supported
        """
        return False

    def set_columns(self, columns: List[str]) -> None:
        """
        Set which columns to read (column pruning)

        Args:
            columns: List of column names to read

        Note:
            Only called if supports_column_selection() returns True
        """
        pass

    def supports_limit(self) -> bool:
        """
        Does this reader support early termination with LIMIT?

        Returns:
            True if limit pushdown is supported
        """
        return False

    def set_limit(self, limit: int) -> None:
        """
        Set maximum number of rows to read (limit pushdown)

        Args:
            limit: Maximum number of rows to yield

        Note:
            Only called if supports_limit() returns True
            Reader should stop yielding rows after 'limit' rows
        """
        pass

    def get_schema(self) -> Optional[Schema]:
        """
        Get schema information (column names and kinds)

        Returns:
            Schema object, or None if the reader cannot describe its columns
        """
        return None

    def __iter__(self):
        """Allow readers to be used directly in for loops"""
        return self.read_lazy()
