"""
Base formatter interface for CLI output

All formatters must implement the format() method.
"""

from datetime import datetime
from typing import Any, Dict, List


class BaseFormatter:
    """Base class for all output formatters"""

    def format(self, results: List[Dict[str, Any]], **kwargs) -> str:
        """
        Format scan results for output

        Args:
            results: List of row dictionaries
            **kwargs: Additional formatter-specific options

        Returns:
            Formatted string ready for output
        """
        raise NotImplementedError("Formatters must implement format() method")

    def get_name(self) -> str:
        """Get formatter name"""
        return self.__class__.__name__.replace("Formatter", "").lower()

    @staticmethod
    def to_text(value: Any) -> str:
        """Render a cell value as display text"""
        if isinstance(value, datetime):
            return value.isoformat()
        return str(value)
