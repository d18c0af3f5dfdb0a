"""
CRMStream - typed row streams over a CRM's REST API

This package adapts paginated CRM object collections (contacts, companies,
deals) into rows whose columns are requested by name and declared kind.
"""

__version__ = "0.1.0"

# Main API
from crmstream.core.query import query
from crmstream.core.session import ScanSession
from crmstream.core.types import Cell, Column, ColumnKind

__all__ = ["__version__", "query", "ScanSession", "Column", "ColumnKind", "Cell"]
