"""User domain exceptions.

User-related exceptions for not found, malformed id, bad image and
duplicate email scenarios.
"""

from peopledir.core.exceptions import ConflictError, NotFoundError, ValidationError


class UserNotFoundError(NotFoundError):
    """Raised when user cannot be found."""

    error_type = "user_not_found"

    def __init__(self, message: str = "User not found."):
        super().__init__(message)


class InvalidUserIdError(ValidationError):
    """Raised when a user id is not a well-formed identifier."""

    error_type = "invalid_user_id"

    def __init__(self, message: str = "Invalid user ID."):
        super().__init__(message)


class InvalidImageError(ValidationError):
    """Raised when an uploaded profile picture is not an acceptable image."""

    error_type = "invalid_image"

    def __init__(self, message: str = "Profile picture must be an image."):
        super().__init__(message)


class EmailExistsError(ConflictError):
    """Raised when another record already uses the email."""

    error_type = "email_exists"

    def __init__(self, message: str = "User with this email already exists."):
        super().__init__(message)
