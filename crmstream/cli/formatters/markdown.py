"""
Markdown formatter for documentation and sharing
"""

from typing import Any

from crmstream.cli.formatters.base import BaseFormatter


class MarkdownFormatter(BaseFormatter):
    """Format results as a Markdown table"""

    def format(self, results: list[dict[str, Any]], **kwargs) -> str:
        """
        Format results as a Markdown table

        Args:
            results: List of row dictionaries
            **kwargs: Options like 'show_footer'

        Returns:
            Markdown formatted table string
        """
        if not results:
            return "_No results found._"

        columns = list(results[0].keys())

        header = "| " + " | ".join(columns) + " |"
        separator = "| " + " | ".join(":---" for _ in columns) + " |"

        data_rows = []
        for row in results:
            # Pipes would end the cell early
            values = [self.to_text(row[col]).replace("|", "\\|") for col in columns]
            data_rows.append("| " + " | ".join(values) + " |")

        output = "\n".join([header, separator] + data_rows)

        if kwargs.get("show_footer", True):
            row_count = len(results)
            output += f"\n\n_{row_count} row{'s' if row_count != 1 else ''}_"

        return output
