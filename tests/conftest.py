"""
Pytest configuration and shared fixtures
"""

import json

import pytest

from crmstream.core.errors import TransportError
from crmstream.core.transport import Response


class FakeTransport:
    """In-memory transport that serves queued pages and records requests"""

    def __init__(self, pages=None):
        self.pages = list(pages or [])
        self.requests = []

    def queue(self, body, status_code=200):
        self.pages.append((body, status_code))

    def send(self, request):
        self.requests.append(request)
        if not self.pages:
            raise TransportError(f"No response queued for {request.url}")
        body, status_code = self.pages.pop(0)
        if isinstance(body, Exception):
            raise body
        if not isinstance(body, str):
            body = json.dumps(body)
        return Response(status_code=status_code, body=body)


def page(records, after=None):
    """Build a response body with an optional next-page cursor"""
    body = {"results": records}
    if after is not None:
        body["paging"] = {"next": {"after": after, "link": f"https://api.hubapi.com/next?after={after}"}}
    return body


@pytest.fixture
def transport():
    """Empty fake transport"""
    return FakeTransport()


@pytest.fixture
def contacts():
    """Sample contact records as the objects API returns them"""
    return [
        {
            "id": "1",
            "createdAt": "2024-01-15T10:30:00.000Z",
            "archived": False,
            "properties": {"email": "alice@example.com", "firstname": "Alice", "num_notes": 3},
        },
        {
            "id": "2",
            "createdAt": "2024-02-01T08:00:00Z",
            "archived": False,
            "properties": {"email": "bob@example.com", "firstname": "Bob", "num_notes": 0},
        },
        {
            "id": "3",
            "createdAt": "2024-03-10T17:45:12+02:00",
            "archived": True,
            "properties": {"email": "charlie@example.com", "firstname": "Charlie", "num_notes": 12},
        },
    ]


@pytest.fixture
def make_page():
    """Factory for response bodies"""
    return page


@pytest.fixture
def make_transport():
    """Factory for fake transports preloaded with pages"""
    return FakeTransport
