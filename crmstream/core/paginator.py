"""
Paginator - drives cursor-based pagination against the CRM objects API

Fetched records are buffered for the whole scan. Pages are appended, never
replaced, so a restart can replay everything fetched so far without going
back to the network.
"""

from __future__ import annotations

import json
import logging
import math
from enum import Enum
from typing import Any, Dict, Iterator, List, Optional
from urllib.parse import quote

from crmstream.core.errors import ParseError, ScanStateError, UnsupportedSelectorError
from crmstream.core.transport import HTTPTransport, Request

logger = logging.getLogger(__name__)

Record = Dict[str, Any]

DEFAULT_BASE_URL = "https://api.hubapi.com"
PAGE_SIZE = 100

ENDPOINTS = {
    "contacts": "/crm/v3/objects/contacts",
    "companies": "/crm/v3/objects/companies",
    "deals": "/crm/v3/objects/deals",
}


def endpoint_for(selector: str) -> str:
    """
    Map an object selector to its endpoint path

    Raises:
        UnsupportedSelectorError: If the selector is not one of ENDPOINTS
    """
    try:
        return ENDPOINTS[selector]
    except KeyError:
        raise UnsupportedSelectorError(selector) from None


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant {name}")


def _finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"number out of range: {text}")
    return value


class PaginatorState(Enum):
    IDLE = "idle"
    FETCHING = "fetching"
    READY = "ready"


class Paginator:
    """
    Owns the pagination cursor and the buffer of raw records

    Iterating a paginator yields buffered records one at a time and fetches
    the next page only once the buffer is exhausted and the API reported
    more pages.

    Example:
        paginator = Paginator(api_key="pat-123")
        paginator.open("contacts")
        for record in paginator:
            print(record["id"])
        paginator.close()
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_BASE_URL,
        transport: Optional[HTTPTransport] = None,
    ):
        """
        Initialize paginator

        Args:
            api_key: Bearer token sent with every request
            base_url: API root, without trailing slash
            transport: Object with a ``send(Request) -> Response`` method
        """
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.transport = transport or HTTPTransport()

        self.selector: Optional[str] = None
        self.state = PaginatorState.IDLE
        self._reset()

    def _reset(self) -> None:
        self.records: List[Record] = []
        self.index = 0
        self.after: Optional[str] = None
        self.has_more = False

    def open(self, selector: str) -> None:
        """
        Start a scan of ``selector`` and fetch its first page

        The selector is validated before any request is made.
        """
        endpoint_for(selector)

        self.selector = selector
        self._reset()
        self.fetch()

    def build_url(self) -> str:
        """Build the URL of the next page for the current selector and cursor"""
        url = f"{self.base_url}{endpoint_for(self.selector)}?limit={PAGE_SIZE}"
        if self.after is not None:
            url += f"&after={quote(self.after, safe='')}"
        return url

    def fetch(self) -> int:
        """
        Fetch one page and append its results to the buffer

        Returns:
            Number of records appended

        Raises:
            TransportError: If the request fails
            ParseError: If the body is not valid JSON
        """
        if self.selector is None:
            raise ScanStateError("Paginator is not open")

        request = Request(
            method="GET",
            url=self.build_url(),
            headers=[
                ("authorization", f"Bearer {self.api_key}"),
                ("content-type", "application/json"),
            ],
        )

        self.state = PaginatorState.FETCHING
        logger.debug("Fetching %s", request.url)
        try:
            response = self.transport.send(request)
            try:
                body = json.loads(response.body, parse_constant=_reject_constant, parse_float=_finite_float)
            except ValueError as e:
                raise ParseError(f"Invalid JSON response from {request.url}: {e}") from e
        finally:
            self.state = PaginatorState.READY

        if not isinstance(body, dict):
            self.has_more = False
            return 0

        # No paging envelope or no "next" descriptor means this was the last page
        paging = body.get("paging")
        next_page = paging.get("next") if isinstance(paging, dict) else None
        self.has_more = next_page is not None
        if self.has_more:
            after = next_page.get("after") if isinstance(next_page, dict) else None
            self.after = str(after) if after is not None else None

        results = body.get("results")
        if not isinstance(results, list):
            return 0

        self.records.extend(results)
        return len(results)

    def __iter__(self) -> Iterator[Record]:
        return self

    def __next__(self) -> Record:
        """
        Return the next buffered record, fetching one more page if needed

        Raises:
            StopIteration: When the scan is exhausted
        """
        if self.index >= len(self.records):
            if not self.has_more:
                raise StopIteration
            self.fetch()
            if self.index >= len(self.records):
                raise StopIteration

        record = self.records[self.index]
        self.index += 1
        return record

    def restart(self) -> None:
        """Rewind to the first buffered record without re-fetching"""
        self.index = 0

    def close(self) -> None:
        """Drop the buffer and cursor and return to idle"""
        self._reset()
        self.selector = None
        self.state = PaginatorState.IDLE

    @property
    def buffered_count(self) -> int:
        """Number of records fetched so far"""
        return len(self.records)

    def __repr__(self) -> str:
        return f"Paginator({self.selector!r}, {self.state.value}, {self.index}/{len(self.records)})"
