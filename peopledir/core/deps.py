"""Centralized dependency type aliases for FastAPI routes.

Import all dependencies from this single module:
    from peopledir.core.deps import SessionDep, SettingsDep, UserServiceDep
"""

from typing import Annotated

from fastapi import Depends
from sqlmodel import Session

from peopledir.core.settings import Settings, get_settings
from peopledir.db.engine import get_session
from peopledir.services.image_storage import ImageStorage, get_image_storage
from peopledir.user.repository import UserRepository
from peopledir.user.service import UserService

# Database session
SessionDep = Annotated[Session, Depends(get_session)]

# Application settings
SettingsDep = Annotated[Settings, Depends(get_settings)]

# Profile picture storage backend
ImageStorageDep = Annotated[ImageStorage, Depends(get_image_storage)]


def get_user_service(
    session: SessionDep, images: ImageStorageDep, settings: SettingsDep
) -> UserService:
    """Build a UserService bound to the request's database session."""
    return UserService(UserRepository(session), images, settings.max_image_bytes)


# User business logic
UserServiceDep = Annotated[UserService, Depends(get_user_service)]
