"""Application services layer.

Services encapsulate external integrations, keeping route handlers thin
and focused on HTTP concerns.
"""

from peopledir.core.exceptions import StorageError
from peopledir.services.image_storage import (
    FirebaseImageStorage,
    ImageStorage,
    LocalImageStorage,
    UploadedImage,
    get_image_storage,
    validate_image,
)

__all__ = [
    "FirebaseImageStorage",
    "ImageStorage",
    "LocalImageStorage",
    "StorageError",
    "UploadedImage",
    "get_image_storage",
    "validate_image",
]
