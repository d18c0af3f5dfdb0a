"""
HTTP transport - the request/response primitive the paginator talks to

Uses httpx with its default redirect and timeout behaviour; this layer adds
no retry policy. Any failure, including a non-2xx status, becomes a
TransportError carrying the underlying message.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import List, Tuple

import httpx

from crmstream.core.errors import TransportError

logger = logging.getLogger(__name__)


@dataclass
class Request:
    """An outgoing HTTP request"""

    method: str
    url: str
    headers: List[Tuple[str, str]] = field(default_factory=list)
    body: str = ""


@dataclass
class Response:
    """A successful HTTP response"""

    status_code: int
    body: str


class HTTPTransport:
    """
    Send requests with httpx

    Example:
        transport = HTTPTransport()
        response = transport.send(Request("GET", "https://api.hubapi.com/crm/v3/objects/deals"))
    """

    def send(self, request: Request) -> Response:
        """
        Issue a request and return its response

        Raises:
            TransportError: On network failure or non-success status
        """
        try:
            response = httpx.request(
                request.method,
                request.url,
                headers=request.headers,
                content=request.body or None,
            )
            response.raise_for_status()
        except httpx.HTTPError as e:
            raise TransportError(f"Request to {request.url} failed: {e}") from e

        logger.debug("%s %s -> %s", request.method, request.url, response.status_code)
        return Response(status_code=response.status_code, body=response.text)
