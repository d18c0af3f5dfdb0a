"""
Tests for the fluent query API
"""

import pytest

from crmstream import query
from crmstream.core.errors import UnsupportedSelectorError
from crmstream.core.types import Column, ColumnKind


class TestQuery:
    """Test the query builder"""

    def test_select_and_iterate(self, transport, make_page, contacts):
        transport.queue(make_page(contacts))
        q = query("contacts", api_key="pat-123", transport=transport).select("id:string", "email:string")

        rows = q.to_list()

        assert rows[1] == {"id": "2", "email": "bob@example.com"}

    def test_builder_is_immutable(self, transport):
        base = query("contacts", api_key="pat-123", transport=transport)
        selected = base.select("id:string")
        assert base.columns == []
        assert selected.columns == ["id:string"]

    def test_select_accepts_columns(self, transport, make_page, contacts):
        transport.queue(make_page(contacts))
        q = query("contacts", api_key="k", transport=transport).select(Column("archived", ColumnKind.BOOLEAN))
        assert [row["archived"] for row in q] == [False, False, True]

    def test_limit(self, transport, make_page, contacts):
        transport.queue(make_page(contacts))
        rows = query("contacts", api_key="k", transport=transport).select("id:string").limit(1).to_list()
        assert rows == [{"id": "1"}]

    def test_negative_limit(self, transport):
        with pytest.raises(ValueError, match="non-negative"):
            query("contacts", api_key="k", transport=transport).limit(-1)

    def test_duplicate_columns(self, transport):
        q = query("contacts", api_key="k", transport=transport).select("id:string").select("id:json")
        with pytest.raises(ValueError, match="Duplicate column name"):
            q.to_list()
        assert transport.requests == []

    def test_no_columns(self, transport):
        with pytest.raises(ValueError, match="No columns selected"):
            query("contacts", api_key="k", transport=transport).to_list()

    def test_unsupported_object(self, transport):
        q = query("tickets", api_key="k", transport=transport).select("id:string")
        with pytest.raises(UnsupportedSelectorError):
            q.to_list()
        assert transport.requests == []

    def test_schema(self, transport):
        schema = query("deals", api_key="k", transport=transport).select("amount:decimal").schema()
        assert schema.to_dict() == {"amount": "DECIMAL"}
