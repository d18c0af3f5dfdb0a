"""
Errors raised by the scan engine

Every error is terminal to the operation that raised it: a bad page fails
the whole scan and a bad column fails the whole row.
"""

from crmstream.core.types import ColumnKind


class CRMStreamError(Exception):
    """Base class for all CRMStream errors"""


class ConfigurationError(CRMStreamError):
    """A required option is missing"""

    def __init__(self, option: str):
        self.option = option
        super().__init__(f"required option '{option}' is not specified")


class UnsupportedSelectorError(CRMStreamError):
    """The requested object type has no known endpoint"""

    def __init__(self, selector: str):
        self.selector = selector
        super().__init__(f"Unsupported object type: {selector}")


class TransportError(CRMStreamError):
    """The request failed or the API answered with a non-success status"""


class ParseError(CRMStreamError):
    """The response body is not valid JSON"""


class ColumnNotFoundError(CRMStreamError):
    """A requested column does not resolve against a record"""

    def __init__(self, column: str):
        self.column = column
        super().__init__(f"source column '{column}' not found")


class CoercionError(CRMStreamError):
    """A resolved value cannot be converted to the declared kind"""

    def __init__(self, column: str, kind: ColumnKind):
        self.column = column
        self.kind = kind
        super().__init__(f"cannot convert column '{column}' to type {kind}")


class ReadOnlyError(CRMStreamError):
    """A write-path call was made against the read-only adapter"""

    MESSAGE = "This adapter is read-only"

    def __init__(self):
        super().__init__(self.MESSAGE)


class ScanStateError(CRMStreamError):
    """A lifecycle call was made in the wrong state"""
