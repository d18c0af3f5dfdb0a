"""
Option retrieval for the two configuration scopes

Connection-level options (``api_key``, ``base_url``) are read once by
``ScanSession.initialize``; scan-level options (``object``) are read by
every ``ScanSession.open_scan``.
"""

from enum import Enum
from typing import Any, Mapping, Optional

from crmstream.core.errors import ConfigurationError


class OptionsType(Enum):
    """Scope an option set belongs to"""

    SERVER = "server"
    TABLE = "table"


class Options:
    """
    Read-only view over a mapping of option values

    Example:
        >>> opts = Options({"api_key": "pat-123"}, OptionsType.SERVER)
        >>> opts.require("api_key")
        'pat-123'
    """

    def __init__(self, values: Optional[Mapping[str, Any]] = None, scope: OptionsType = OptionsType.TABLE):
        self.values = dict(values or {})
        self.scope = scope

    def require(self, key: str) -> str:
        """
        Get a required option

        Raises:
            ConfigurationError: If the option is absent or empty
        """
        value = self.values.get(key)
        if value is None or value == "":
            raise ConfigurationError(key)
        return str(value)

    def get(self, key: str, default: Optional[str] = None) -> Optional[str]:
        """Get an optional option, falling back to ``default``"""
        value = self.values.get(key)
        if value is None or value == "":
            return default
        return str(value)

    def __repr__(self) -> str:
        # Values include the api key
        return f"Options({self.scope.value}: {', '.join(sorted(self.values))})"
