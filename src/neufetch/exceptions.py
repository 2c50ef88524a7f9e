"""
Custom exceptions for neufetch.

Version lookups recover from network failures on their own; everything else
below propagates to the caller and aborts the running operation.
"""


class NeufetchError(Exception):
    """
    Base exception for all neufetch errors.

    Catch this to handle every application-specific failure at once.
    """

    def __init__(self, message: str, details: str | None = None) -> None:
        """
        Initialize the exception.

        Args:
            message: The primary error message.
            details: Optional additional context about the error.
        """
        self.message = message
        self.details = details
        super().__init__(message)

    def __str__(self) -> str:
        if self.details:
            return f"{self.message} - {self.details}"
        return self.message


# =============================================================================
# Configuration Errors
# =============================================================================


class ConfigurationError(NeufetchError):
    """
    Exception raised when configuration is invalid or missing.

    This includes:
    - Missing project configuration file
    - Configuration values of the wrong type
    - Configuration file parsing errors
    """

    pass


class ConfigFileError(ConfigurationError):
    """Exception raised when a configuration file cannot be read or written."""

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


# =============================================================================
# Download Errors
# =============================================================================


class DownloadError(NeufetchError):
    """
    Base exception for download-related errors.

    Attributes:
        url: The URL that was being downloaded when the error occurred.
    """

    def __init__(
        self,
        message: str,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.url = url


class NetworkError(DownloadError):
    """
    Exception raised for transport-level download failures.

    This includes connection errors, DNS failures, proxy errors and
    SSL/TLS errors.
    """

    pass


class HTTPError(DownloadError):
    """
    Exception raised when a download answers with an HTTP error status.

    Attributes:
        status_code: The HTTP status code returned by the server.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        url: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, url, details)
        self.status_code = status_code


# =============================================================================
# File System Errors
# =============================================================================


class FileSystemError(NeufetchError):
    """
    Exception raised for file system-related errors.

    Attributes:
        path: The file path that caused the error.
    """

    def __init__(
        self,
        message: str,
        path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.path = path


# =============================================================================
# Validation Errors
# =============================================================================


class ValidationError(NeufetchError):
    """
    Exception raised when user input fails validation.

    Attributes:
        field: The name of the field that failed validation.
        value: The value that failed validation.
    """

    def __init__(
        self,
        message: str,
        field: str | None = None,
        value: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.field = field
        self.value = value


# =============================================================================
# Archive Errors
# =============================================================================


class ArchiveError(NeufetchError):
    """
    Exception raised for archive-related errors.

    Attributes:
        archive_path: Path to the problematic archive.
    """

    def __init__(
        self,
        message: str,
        archive_path: str | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.archive_path = archive_path


class ExtractionError(ArchiveError):
    """Exception raised when archive extraction fails."""

    pass


# =============================================================================
# API Errors
# =============================================================================


class APIError(NeufetchError):
    """
    Exception raised for API-related errors.

    Attributes:
        endpoint: The API endpoint that was accessed.
        status_code: The HTTP status code returned.
    """

    def __init__(
        self,
        message: str,
        endpoint: str | None = None,
        status_code: int | None = None,
        details: str | None = None,
    ) -> None:
        super().__init__(message, details)
        self.endpoint = endpoint
        self.status_code = status_code


class ReleaseLookupError(APIError):
    """Exception raised when the releases API answers with an unreadable body."""

    pass
