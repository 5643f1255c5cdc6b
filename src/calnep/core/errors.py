class CalnepError(Exception):
    """Base error."""

class InvalidFormatError(CalnepError, ValueError):
    """Raised when a date string cannot be split or parsed."""

class InvalidDateError(CalnepError, ValueError):
    """Raised when year/month/day do not name a real Bikram Sambat date."""

class OutOfRangeError(InvalidDateError):
    """Raised when a date falls outside the years covered by the conversion table."""

class TableError(CalnepError):
    """Raised when conversion table data is malformed."""
