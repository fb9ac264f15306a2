"""User service.

Business rules for the directory's mutation API: required-field and id
validation, email uniqueness, and profile picture handling. Routes stay thin
and delegate here.
"""

import logging
import uuid
from collections.abc import Sequence

from peopledir.core.exceptions import AppException, StorageError
from peopledir.services.image_storage import ImageStorage, UploadedImage, validate_image
from peopledir.user.exceptions import (
    EmailExistsError,
    InvalidUserIdError,
    UserNotFoundError,
)
from peopledir.user.models import User
from peopledir.user.repository import UserRepositoryProtocol
from peopledir.user.schemas import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


def parse_user_id(raw: str | uuid.UUID) -> uuid.UUID:
    """Parse a user id, raising InvalidUserIdError when malformed."""
    if isinstance(raw, uuid.UUID):
        return raw
    try:
        return uuid.UUID(str(raw).strip())
    except ValueError as e:
        raise InvalidUserIdError() from e


class UserService:
    """List, create, update and delete user records."""

    def __init__(
        self,
        users: UserRepositoryProtocol,
        images: ImageStorage,
        max_image_bytes: int,
    ):
        self._users = users
        self._images = images
        self._max_image_bytes = max_image_bytes

    def list_users(self) -> Sequence[User]:
        return self._users.list()

    def create_user(
        self, data: UserCreate, image: UploadedImage | None = None
    ) -> User:
        """Create a record; the email must not be used by any other record.

        A picture stored for a record that then fails to insert is removed
        again.
        """
        if image is not None:
            validate_image(image, self._max_image_bytes)

        if self._users.find_by_email(data.email) is not None:
            raise EmailExistsError()

        user = User(
            **data.model_dump(exclude={"teams"}),
            teams=[team.value for team in data.teams],
        )
        new_pic = self._images.store(image) if image is not None else None
        user.profile_pic = new_pic

        try:
            user = self._users.insert(user)
        except AppException:
            self._discard_image(new_pic)
            raise
        logger.info("Created user %s", user.id, extra={"user_id": str(user.id)})
        return user

    def update_user(
        self,
        user_id: str | uuid.UUID,
        data: UserUpdate,
        image: UploadedImage | None = None,
    ) -> User:
        """Apply an edit to an existing record.

        Optional fields left unset keep their stored value. A new image
        replaces the stored picture, and the previous one is removed once the
        edit is committed.
        """
        parsed_id = parse_user_id(user_id)
        existing = self._users.find_by_id(parsed_id)
        if existing is None:
            raise UserNotFoundError()
        previous_pic = existing.profile_pic

        if self._users.find_by_email(data.email, exclude_id=parsed_id) is not None:
            raise EmailExistsError("Email already in use.")

        if image is not None:
            validate_image(image, self._max_image_bytes)

        patch = data.model_dump(exclude_unset=True, exclude={"teams"})
        patch["teams"] = [team.value for team in data.teams]
        new_pic = self._images.store(image) if image is not None else None
        if new_pic is not None:
            patch["profile_pic"] = new_pic

        try:
            user = self._users.update(parsed_id, patch)
            if user is None:
                # Deleted between lookup and update.
                raise UserNotFoundError()
        except AppException:
            self._discard_image(new_pic)
            raise

        if new_pic is not None:
            self._discard_image(previous_pic)
        logger.info("Updated user %s", user.id, extra={"user_id": str(user.id)})
        return user

    def delete_user(self, user_id: str | uuid.UUID) -> None:
        """Delete a record and the picture it referenced."""
        parsed_id = parse_user_id(user_id)
        existing = self._users.find_by_id(parsed_id)
        if existing is None:
            raise UserNotFoundError()
        previous_pic = existing.profile_pic

        if not self._users.delete(parsed_id):
            raise UserNotFoundError()
        self._discard_image(previous_pic)
        logger.info("Deleted user %s", parsed_id, extra={"user_id": str(parsed_id)})

    def _discard_image(self, url: str | None) -> None:
        """Remove a stored picture that no record refers to any more.

        A failed removal only leaves an orphaned file; it is logged and does
        not change the outcome of the request.
        """
        if not url:
            return
        try:
            self._images.delete(url)
        except StorageError as e:
            logger.warning("Could not remove profile picture %s: %s", url, e)
