"""
JSON formatter for machine-readable output
"""

import json
from datetime import datetime
from typing import Any

from crmstream.cli.formatters.base import BaseFormatter


class JSONFormatter(BaseFormatter):
    """Format results as JSON"""

    def format(self, results: list[dict[str, Any]], **kwargs) -> str:
        """
        Format results as JSON

        JSON-kind cells already hold JSON text and are embedded as parsed
        values when 'embed_json' is set.

        Args:
            results: List of row dictionaries
            **kwargs: Options like 'compact', 'indent', 'embed_json'

        Returns:
            JSON string
        """

        def default(val):
            if isinstance(val, datetime):
                return val.isoformat()
            return str(val)

        rows = results
        json_columns = kwargs.get("json_columns") or ()
        if kwargs.get("embed_json") and json_columns:
            rows = [
                {k: json.loads(v) if k in json_columns and isinstance(v, str) else v for k, v in row.items()}
                for row in results
            ]

        if kwargs.get("compact", False):
            return json.dumps(rows, separators=(",", ":"), default=default)
        else:
            indent = kwargs.get("indent", 2)
            return json.dumps(rows, indent=indent, default=default)
