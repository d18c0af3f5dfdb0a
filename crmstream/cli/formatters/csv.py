"""
CSV formatter for Unix-friendly output
"""

import csv
import io
from typing import Any, Dict, List

from crmstream.cli.formatters.base import BaseFormatter


class CSVFormatter(BaseFormatter):
    """Format results as CSV"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format results as CSV

        Args:
            results: List of row dictionaries
            **kwargs: Options like 'delimiter', 'quote_all'

        Returns:
            CSV string
        """
        if not results:
            return ""

        columns = list(results[0].keys())

        output = io.StringIO()
        writer = csv.DictWriter(
            output,
            fieldnames=columns,
            delimiter=kwargs.get("delimiter", ","),
            quoting=csv.QUOTE_MINIMAL if not kwargs.get("quote_all") else csv.QUOTE_ALL,
        )

        writer.writeheader()
        for row in results:
            writer.writerow({k: self.to_text(v) for k, v in row.items()})

        return output.getvalue()
