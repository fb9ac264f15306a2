"""Error types raised by the directory API.

Each class fixes the HTTP status and the `type` string sent back in the
`{type, message}` error body; handlers in core.exception_handlers do the
conversion. Domain errors (user not found, duplicate email, ...) live in
the user package and subclass these.
"""


class AppException(Exception):
    """Root of every error the API reports to clients.

    Subclasses override `status_code` and `error_type`; `message` is the
    human-readable text shown in the client notification.
    """

    status_code: int = 500
    error_type: str = "internal_error"

    def __init__(self, message: str = "An unexpected error occurred"):
        self.message = message
        super().__init__(message)


# Client input problems (400). Duplicate data is reported the same way, so
# ConflictError shares the status.
class ValidationError(AppException):
    """Request fields are missing or malformed."""

    status_code = 400
    error_type = "validation_error"

    def __init__(self, message: str = "Validation failed"):
        super().__init__(message)


class ConflictError(AppException):
    """Request collides with data already stored."""

    status_code = 400
    error_type = "conflict"

    def __init__(self, message: str = "Resource conflict"):
        super().__init__(message)


class NotFoundError(AppException):
    status_code = 404
    error_type = "not_found"

    def __init__(self, message: str = "Resource not found"):
        super().__init__(message)


class InternalError(AppException):
    """Database or other server-side failure."""

    status_code = 500
    error_type = "internal_error"

    def __init__(self, message: str = "Internal server error."):
        super().__init__(message)


class StorageError(InternalError):
    """A profile picture could not be written to the image store."""

    error_type = "storage_error"

    def __init__(self, message: str = "Failed to store profile picture"):
        super().__init__(message)
