"""Application errors.

Every failure a service, the query builder or the auth layer detects is raised
as an ``AppError`` subclass. Each one carries an ``ErrorKind`` tag, an HTTP
status code and a client-safe message. The error translator in
``devcamper.errors`` is the only place that turns them into responses:
{"success": false, "error": "..."}.
"""

from enum import StrEnum


class ErrorKind(StrEnum):
    NOT_FOUND = "not_found"
    BAD_IDENTIFIER = "bad_identifier"
    VALIDATION_FAILED = "validation_failed"
    DUPLICATE_KEY = "duplicate_key"
    UNAUTHORIZED = "unauthorized"
    UPSTREAM = "upstream"
    HTTP = "http"
    UNKNOWN = "unknown"


class AppError(Exception):
    """Base class for all application errors."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = 500
    headers: dict[str, str] | None = None

    def __init__(self, message: str, status_code: int | None = None) -> None:
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(message)


class NotFoundError(AppError):
    """Raised when a well-formed identifier matches no row."""

    kind = ErrorKind.NOT_FOUND
    status_code = 404

    @classmethod
    def for_resource(cls, resource: str, identifier: object) -> "NotFoundError":
        return cls(f"{resource} not found with id: {identifier}")


class BadIdentifierError(AppError):
    """Raised when a path identifier is not a 24-character hex string."""

    kind = ErrorKind.BAD_IDENTIFIER
    status_code = 404

    def __init__(self, value: object) -> None:
        self.value = value
        super().__init__(f"Resource not found with id: {value}")


class ValidationFailedError(AppError):
    """Raised when input breaks one or more field rules.

    Holds every individual message; the client sees them joined.
    """

    kind = ErrorKind.VALIDATION_FAILED
    status_code = 400

    def __init__(self, messages: str | list[str]) -> None:
        self.messages = [messages] if isinstance(messages, str) else list(messages)
        super().__init__(", ".join(self.messages))


class DuplicateKeyError(AppError):
    """Raised when an insert or update violates a uniqueness constraint."""

    kind = ErrorKind.DUPLICATE_KEY
    status_code = 400

    def __init__(self) -> None:
        super().__init__("Duplicate field value entered")


class UnauthorizedError(AppError):
    kind = ErrorKind.UNAUTHORIZED
    status_code = 401
    headers = {"WWW-Authenticate": "Bearer"}

    def __init__(self) -> None:
        super().__init__("Not authorized to access this route")


class GeocoderError(AppError):
    """Raised when the geocoding provider rejects or fails a lookup."""

    kind = ErrorKind.UPSTREAM
    status_code = 502


class HTTPError(AppError):
    """A framework-level HTTP failure such as an unknown route or method."""

    kind = ErrorKind.HTTP


class ServerError(AppError):
    def __init__(self) -> None:
        super().__init__("Server Error")
