#!/usr/bin/env python3
"""
Example demonstrating column resolution and coercion in CRMStream

Runs offline against records shaped like the CRM objects API returns them.
"""

from crmstream.core.errors import CRMStreamError
from crmstream.core.projector import project
from crmstream.core.types import Column

records = [
    {
        "id": "501",
        "name": "Acme",
        "createdAt": "2024-01-15T10:30:00.000Z",
        "archived": False,
        "properties": {"name": "Acme Props", "industry": "Tech", "numberofemployees": 120},
    },
    {
        "id": "502",
        "createdAt": "yesterday",
        "archived": False,
        "properties": {"name": "Globex", "industry": "Energy", "numberofemployees": 8},
    },
]

columns = [
    Column.parse("id:string"),
    Column.parse("name:string"),  # top-level key wins over properties.name
    Column.parse("industry:string"),  # found in the properties bag
    Column.parse("properties.numberofemployees:integer"),  # served as text
    Column.parse("createdAt:timestamp"),
    Column.parse("properties"),  # json
]

print("Columns:", ", ".join(str(c) for c in columns))
print()

for record in records:
    try:
        cells = project(record, columns)
    except CRMStreamError as e:
        # The whole row fails, not just the bad column
        print(f"Record {record['id']}: {e}")
        continue
    for column, cell in zip(columns, cells):
        print(f"  {column.name:<32} {cell.kind.value:<10} {cell.value!r}")
    print()
