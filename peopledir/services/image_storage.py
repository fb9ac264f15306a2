"""Profile picture storage.

Uploaded images are written to an external store and only the returned URL
is kept on the user record. Two backends are provided: the local upload
directory (served by the app under the uploads prefix) and Firebase Cloud
Storage.
"""

import logging
import mimetypes
import uuid
from dataclasses import dataclass
from functools import lru_cache
from pathlib import Path
from typing import Protocol
from urllib.parse import unquote, urlparse

from firebase_admin import storage
from google.api_core.exceptions import NotFound

from peopledir.core.exceptions import StorageError
from peopledir.core.settings import get_settings
from peopledir.user.exceptions import InvalidImageError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class UploadedImage:
    """Raw image upload taken from a multipart request."""

    data: bytes
    filename: str | None = None
    content_type: str | None = None

    @property
    def extension(self) -> str:
        """File extension (with dot) derived from the filename or content type."""
        if self.filename:
            suffix = Path(self.filename).suffix.lower()
            if suffix[1:].isalnum():
                return suffix
        if self.content_type:
            return mimetypes.guess_extension(self.content_type) or ""
        return ""


def validate_image(image: UploadedImage, max_bytes: int) -> None:
    """Reject uploads that are not images or exceed the size limit."""
    if not (image.content_type or "").startswith("image/"):
        raise InvalidImageError()
    if len(image.data) > max_bytes:
        raise InvalidImageError(
            f"Profile picture must not exceed {max_bytes} bytes."
        )


class ImageStorage(Protocol):
    """Stores images and hands back URL references to them."""

    def store(self, image: UploadedImage) -> str: ...

    def delete(self, url: str) -> bool:
        """Remove a previously stored image.

        Returns False when the URL was not issued by this store or the image
        is already gone.
        """
        ...


class LocalImageStorage:
    """Writes images into a local directory served under base_url."""

    def __init__(self, directory: Path, base_url: str):
        self.directory = directory
        self.base_url = base_url.rstrip("/")

    def store(self, image: UploadedImage) -> str:
        name = f"{uuid.uuid4().hex}{image.extension}"
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
            (self.directory / name).write_bytes(image.data)
        except OSError as e:
            raise StorageError("Failed to store profile picture") from e
        logger.debug("Stored profile picture %s", name)
        return f"{self.base_url}/{name}"

    def delete(self, url: str) -> bool:
        prefix = f"{self.base_url}/"
        name = url[len(prefix) :] if url.startswith(prefix) else ""
        # Only plain file names directly under the upload directory.
        if not name or Path(name).name != name:
            return False
        path = self.directory / name
        try:
            if not path.is_file():
                return False
            path.unlink(missing_ok=True)
        except OSError as e:
            raise StorageError("Failed to remove profile picture") from e
        logger.debug("Removed profile picture %s", name)
        return True


class FirebaseImageStorage:
    """Uploads images to a Firebase Cloud Storage bucket as public blobs.

    Requires the Firebase app to be initialized (see core.firebase).
    """

    def __init__(self, bucket_name: str | None = None, folder: str = "profile-pics"):
        self.bucket_name = bucket_name
        self.folder = folder.strip("/")

    def store(self, image: UploadedImage) -> str:
        path = f"{self.folder}/{uuid.uuid4().hex}{image.extension}"
        try:
            blob = storage.bucket(self.bucket_name).blob(path)
            blob.upload_from_string(image.data, content_type=image.content_type)
            blob.make_public()
        except Exception as e:
            raise StorageError("Failed to store profile picture") from e
        logger.debug("Uploaded profile picture %s", path)
        return blob.public_url

    def delete(self, url: str) -> bool:
        try:
            bucket = storage.bucket(self.bucket_name)
            # Public URLs look like https://storage.googleapis.com/<bucket>/<path>
            prefix = f"/{bucket.name}/{self.folder}/"
            url_path = unquote(urlparse(url).path)
            if not url_path.startswith(prefix):
                return False
            bucket.blob(url_path[len(f"/{bucket.name}/") :]).delete()
        except NotFound:
            return False
        except Exception as e:
            raise StorageError("Failed to remove profile picture") from e
        logger.debug("Removed profile picture %s", url_path)
        return True


@lru_cache
def get_image_storage() -> ImageStorage:
    """Get the configured image storage backend (cached)."""
    settings = get_settings()
    if settings.image_storage_backend == "firebase":
        return FirebaseImageStorage(settings.firebase_storage_bucket)
    return LocalImageStorage(settings.upload_dir, settings.uploads_base_url)
