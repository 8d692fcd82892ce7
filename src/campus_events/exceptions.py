"""Custom exceptions for Campus Events."""


class CampusEventsError(Exception):
    """Base exception for all Campus Events errors."""


class ConfigurationError(CampusEventsError):
    """Exception raised for configuration related errors."""


class SheetsAPIError(CampusEventsError):
    """Exception raised for Google Sheets API related errors."""


class ClassifierError(CampusEventsError):
    """Exception raised when the remote classifier fails.

    Raised directly for failures that should not be retried (bad request,
    missing credentials, unexpected SDK errors).
    """


class ClassifierTransportError(ClassifierError):
    """The classification request itself failed.

    Attributes:
        status: HTTP status code returned by the service, or None when the
            request never produced a response (connection error, timeout).
    """

    def __init__(self, message: str, status: int | None = None) -> None:
        super().__init__(message)
        self.status = status

    @property
    def is_rate_limited(self) -> bool:
        return self.status == 429

    @property
    def is_server_error(self) -> bool:
        return self.status is not None and 500 <= self.status < 600


class MalformedOutputError(ClassifierError):
    """The service answered, but not with a valid classification."""
