"""Error types raised by DocTracker.

Every error carries a ``status_code`` so an outer API layer can map it to a
client (4xx) or server (5xx) response without inspecting messages.
"""

from typing import Optional


class DocTrackerError(Exception):
    """Base class for all DocTracker errors."""

    status_code = 500
    default_message = "An internal error occurred"

    def __init__(self, message: Optional[str] = None):
        super().__init__(message or self.default_message)
        self.message = message or self.default_message


class InvalidRangeError(DocTrackerError, ValueError):
    """Unrecognised range token."""

    status_code = 400
    default_message = "Invalid time range. Use 24h, 1w, or 1m"

    def __init__(self, range_token: Optional[str] = None):
        super().__init__()
        self.range_token = range_token


class CalculationError(DocTrackerError):
    """Unexpected failure while fetching, folding or deriving statistics."""

    status_code = 500
    default_message = "Error calculating productivity metrics"


class EntryValidationError(DocTrackerError, ValueError):
    """Entry payload is missing required fields."""

    status_code = 400
    default_message = "Date, dayType, and rows are required"


class EntryNotFoundError(DocTrackerError, LookupError):
    """No entry with the requested ID."""

    status_code = 404
    default_message = "Entry not found"


class UnauthorizedEntryError(DocTrackerError):
    """The acting user does not own the entry."""

    status_code = 403
    default_message = "Unauthorized to access this entry"
