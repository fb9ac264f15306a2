"""Typed configuration for the directory API.

Values come from environment variables (or a local .env file); field names
can be used directly when constructing Settings in tests.
"""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

ImageBackend = Literal["local", "firebase"]


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        populate_by_name=True,
    )

    env_name: str = Field(default="development", alias="ENV_NAME")

    database_url: str = Field(
        default="sqlite:///./peopledir.db", alias="DATABASE_URL"
    )

    # Comma-separated list; "*" allows any origin.
    cors_origins: str = Field(default="*", alias="CORS_ORIGINS")

    # Profile pictures: stored on local disk and served by the app, or
    # uploaded to a Firebase Cloud Storage bucket.
    image_storage_backend: ImageBackend = Field(
        default="local", alias="IMAGE_STORAGE_BACKEND"
    )
    upload_dir: Path = Field(default=Path("uploads"), alias="UPLOAD_DIR")
    uploads_url_prefix: str = Field(default="/uploads", alias="UPLOADS_URL_PREFIX")
    public_base_url: str | None = Field(default=None, alias="PUBLIC_BASE_URL")
    firebase_storage_bucket: str | None = Field(
        default=None, alias="FIREBASE_STORAGE_BUCKET"
    )
    max_image_bytes: int = Field(
        default=5 * 1024 * 1024, alias="MAX_IMAGE_BYTES", ge=1
    )

    @field_validator("uploads_url_prefix")
    @classmethod
    def _normalize_prefix(cls, value: str) -> str:
        """Always a single leading slash and no trailing slash."""
        return "/" + value.strip().strip("/")

    @computed_field
    @property
    def cors_origins_list(self) -> list[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]

    @computed_field
    @property
    def uploads_base_url(self) -> str:
        """Prefix stored in profile_pic for locally saved pictures.

        Absolute when PUBLIC_BASE_URL is set, otherwise relative to the API.
        """
        if self.public_base_url:
            return self.public_base_url.rstrip("/") + self.uploads_url_prefix
        return self.uploads_url_prefix


@lru_cache
def get_settings() -> Settings:
    """Settings loaded once per process."""
    return Settings()
