"""Exception types raised by the evaluator, the cache and the transport."""
from typing import Any, Optional


class PermissionConfigError(LookupError):
    """An unknown category, action or endpoint, or an invalid matrix/route table.

    This is a programming error: the permission keys are a closed set, so
    a lookup outside it is never treated as a deny.
    """


class TransportError(Exception):
    """The upstream backend failed or could not be reached."""

    def __init__(self, message: str, status_code: Optional[int] = None, data: Any = None):
        super().__init__(message)
        self.message = message
        self.status_code = status_code
        self.data = data


class ReferenceDataLoadError(TransportError):
    """The upstream answered a reference-data load with ``success: false``."""
