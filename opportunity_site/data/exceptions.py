"""Exceptions raised by listing data sources."""


class DataSourceError(Exception):
    """Base exception for all data source errors.

    The repository layer catches this and degrades to empty data, so no
    data source error escapes a public repository operation.
    """

    def __init__(self, message: str, location: str = "") -> None:
        """Initialize with the file path or URL that failed.

        Args:
            message: Human-readable error message
            location: File path or URL involved
        """
        super().__init__(message)
        self.location = location


class DataSourceNotFoundError(DataSourceError):
    """The requested file or URL does not exist (HTTP 404 or missing file)."""

    pass


class DataSourceFormatError(DataSourceError):
    """The content was read but is not valid JSON of the expected shape."""

    pass


class DataSourceHTTPError(DataSourceError):
    """HTTP request failed, timed out, or returned a non-404 error status."""

    def __init__(self, message: str, location: str = "", status_code: int = 0) -> None:
        """Initialize HTTP error with status code.

        Args:
            message: Human-readable error message
            location: URL that failed
            status_code: HTTP status code (0 for connection errors and timeouts)
        """
        super().__init__(message, location)
        self.status_code = status_code
