"""Directory client exceptions.

Failures are classified by where they originated so the view can show the
matching notification.
"""

from enum import Enum


class FailureKind(str, Enum):
    """Where a failed request broke down.

    - server: the API answered with an error status
    - no_response: the request was sent but nothing came back
    - request: the request could not be built locally
    """

    server = "server"
    no_response = "no_response"
    request = "request"


class DirectoryClientError(Exception):
    """Base exception for directory client failures."""

    def __init__(self, message: str = "Directory request failed"):
        self.message = message
        super().__init__(message)


class RequestFailedError(DirectoryClientError):
    """Raised when a call to the directory API fails."""

    def __init__(
        self,
        kind: FailureKind,
        message: str,
        status_code: int | None = None,
        error_type: str | None = None,
    ):
        self.kind = kind
        self.status_code = status_code
        self.error_type = error_type
        super().__init__(message)

    @property
    def user_message(self) -> str:
        """Notification text for the user."""
        if self.kind is FailureKind.server:
            return f"Error from server: {self.status_code} - {self.message}"
        if self.kind is FailureKind.no_response:
            return "No response from the server"
        return f"Error setting up the request: {self.message}"


class FormValidationError(DirectoryClientError):
    """Raised when form input fails local validation.

    `errors` maps each offending field to its message.
    """

    def __init__(self, errors: dict[str, str]):
        self.errors = errors
        super().__init__("; ".join(f"{k}: {v}" for k, v in errors.items()))
