"""Error taxonomy shared by the orchestrator, the proxy and the persistence layer."""


class WebsiteBioError(Exception):
    """Base class for errors surfaced to the user as a single message."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ValidationError(WebsiteBioError):
    """User-friendly validation error.

    Raised when user input fails validation. The message is intended to be
    displayed directly to the user and no network call has been made.
    """


class ApiError(WebsiteBioError):
    """The image API answered with an error status or an unusable body.

    Attributes:
        status_code: Upstream HTTP status for non-2xx answers, ``None`` when
            the status was 2xx but the body was malformed.
    """

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class TransportError(WebsiteBioError):
    """The image API could not be reached."""


class PersistenceWarning(UserWarning):
    """Local storage could not be read or written. Never fatal."""
