"""
Rich table formatter for terminal output
"""

from typing import Any, Dict, List

from rich import box
from rich.console import Console
from rich.table import Table

from crmstream.cli.formatters.base import BaseFormatter


class TableFormatter(BaseFormatter):
    """Format results as a Rich table"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format results as a Rich table

        Args:
            results: List of row dictionaries
            **kwargs: Options like 'no_color', 'show_footer', 'max_width'

        Returns:
            Formatted table string
        """
        if not results:
            return "No results found."

        console = Console(force_terminal=not kwargs.get("no_color", False))
        columns = list(results[0].keys())

        # Narrow terminal or many columns: aggressive truncation
        if console.width < 80 or len(columns) > 8:
            table = Table(show_header=True, header_style="bold magenta", box=box.SIMPLE)
            max_col_width = kwargs.get("max_width", 15)
            wrap = False
        else:
            table = Table(show_header=True, header_style="bold magenta")
            max_col_width = kwargs.get("max_width", 30)
            wrap = True

        for col in columns:
            table.add_column(
                col, style="cyan", overflow="ellipsis", max_width=max_col_width, no_wrap=not wrap
            )

        for row in results:
            table.add_row(*(self.to_text(row[col]) for col in columns))

        with console.capture() as capture:
            console.print(table)
        output = capture.get()

        if kwargs.get("show_footer", True):
            row_count = len(results)
            with console.capture() as capture:
                console.print(f"[dim]{row_count} row{'s' if row_count != 1 else ''}[/dim]")
            output += capture.get()

        return output
