"""
Scan session - the lifecycle surface a host drives

A host calls ``initialize`` once with connection options, then for every
scan ``open_scan`` -> ``pull_row``* -> [``restart_scan`` -> ``pull_row``*]
-> ``close_scan``. One session holds at most one live scan. Calls are
expected to be serialized by the host; there is no locking.

Example:
    >>> session = ScanSession()
    >>> session.initialize({"api_key": "pat-123"})
    >>> session.open_scan({"object": "contacts"}, [Column.parse("email:string")])
    >>> while (row := session.pull_row()) is not None:
    ...     print(row[0].value)
    >>> session.close_scan()
"""

from __future__ import annotations

import logging
from typing import Any, List, Mapping, Optional, Sequence

from crmstream.core.errors import ReadOnlyError, ScanStateError
from crmstream.core.options import Options, OptionsType
from crmstream.core.paginator import DEFAULT_BASE_URL, Paginator
from crmstream.core.projector import project
from crmstream.core.transport import HTTPTransport
from crmstream.core.types import Cell, Column

logger = logging.getLogger(__name__)


class ScanSession:
    """Scan engine state for one host connection"""

    HOST_VERSION_REQUIREMENT = "^0.1.0"

    def __init__(self, transport: Optional[HTTPTransport] = None):
        """
        Args:
            transport: HTTP transport used for page fetches (default: httpx)
        """
        self.transport = transport
        self.host_version_requirement: Optional[str] = None
        self.api_key: Optional[str] = None
        self.base_url = DEFAULT_BASE_URL
        self.paginator: Optional[Paginator] = None
        self.columns: List[Column] = []

    def report_info(self, message: str) -> None:
        """Emit an informational message"""
        logger.info(message)

    @property
    def is_open(self) -> bool:
        return self.paginator is not None and self.paginator.selector is not None

    def initialize(self, server_options: Mapping[str, Any]) -> None:
        """
        Read connection options

        Raises:
            ConfigurationError: If ``api_key`` is missing
        """
        opts = Options(server_options, OptionsType.SERVER)
        self.host_version_requirement = self.HOST_VERSION_REQUIREMENT
        self.api_key = opts.require("api_key")
        self.base_url = opts.get("base_url", DEFAULT_BASE_URL).rstrip("/")
        self.paginator = None

    def open_scan(self, table_options: Mapping[str, Any], columns: Sequence[Column]) -> None:
        """
        Start a scan and fetch its first page

        Args:
            table_options: Scan options, must contain ``object``
            columns: Columns every pulled row populates, in order

        Raises:
            ConfigurationError: If ``object`` is missing
            UnsupportedSelectorError: If ``object`` is not a known object type
            TransportError, ParseError: If the first fetch fails
        """
        if self.api_key is None:
            raise ScanStateError("Session is not initialized")

        selector = Options(table_options, OptionsType.TABLE).require("object")
        self.close_scan()

        # Only a scan whose first page arrived becomes the live scan
        paginator = Paginator(self.api_key, self.base_url, self.transport)
        paginator.open(selector)
        self.paginator = paginator
        self.columns = list(columns)
        self.report_info(f"Initial fetch complete. Row count: {paginator.buffered_count}")

    def _require_open(self) -> Paginator:
        if not self.is_open:
            raise ScanStateError("No scan is open")
        return self.paginator

    def pull_row(self) -> Optional[List[Cell]]:
        """
        Return the next typed row, or None once the scan is exhausted

        Raises:
            ColumnNotFoundError, CoercionError: If the record does not fit the columns
            TransportError, ParseError: If fetching the next page fails
        """
        paginator = self._require_open()
        try:
            record = next(paginator)
        except StopIteration:
            return None
        return project(record, self.columns)

    def restart_scan(self) -> None:
        """Rewind the scan to its first record without re-fetching"""
        self._require_open().restart()

    def close_scan(self) -> None:
        """Release buffered records and the cursor"""
        if self.paginator is not None:
            self.paginator.close()
        self.paginator = None
        self.columns = []

    def begin_write(self, *args, **kwargs) -> None:
        raise ReadOnlyError()

    def insert(self, *args, **kwargs) -> None:
        raise ReadOnlyError()

    def update(self, *args, **kwargs) -> None:
        raise ReadOnlyError()

    def delete(self, *args, **kwargs) -> None:
        raise ReadOnlyError()

    def end_write(self, *args, **kwargs) -> None:
        raise ReadOnlyError()
