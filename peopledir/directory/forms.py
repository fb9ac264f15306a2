"""Create and edit forms for user records.

The forms reuse the API schemas so both sides apply the same field rules,
and know how to turn themselves into multipart form fields.
"""

import uuid
from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any, Self

from pydantic import ValidationError

from peopledir.directory.errors import FormValidationError
from peopledir.user.schemas import UserCreate, UserRead, UserUpdate

IMAGE_FIELD = "profile_pic"


@dataclass(frozen=True)
class ProfilePicture:
    """Image file chosen in a form."""

    filename: str
    data: bytes
    content_type: str = "application/octet-stream"

    def as_file(self) -> tuple[str, bytes, str]:
        return (self.filename, self.data, self.content_type)


def _field_errors(exc: ValidationError) -> dict[str, str]:
    errors: dict[str, str] = {}
    for error in exc.errors():
        field = ".".join(str(loc) for loc in error["loc"]) or "__root__"
        errors.setdefault(field, error["msg"])
    return errors


def _encode(fields: dict[str, Any]) -> dict[str, str | list[str]]:
    encoded: dict[str, str | list[str]] = {}
    for key, value in fields.items():
        if value is None:
            continue
        if key == "teams":
            # An empty selection is sent as one blank value so the field
            # is still present.
            encoded[key] = [str(team) for team in value] or [""]
        else:
            encoded[key] = str(value)
    return encoded


class _FormMixin:
    @classmethod
    def parse(cls, data: Mapping[str, Any]) -> Self:
        """Validate raw input, raising FormValidationError with field messages."""
        try:
            return cls.model_validate(dict(data))  # type: ignore[attr-defined]
        except ValidationError as e:
            raise FormValidationError(_field_errors(e)) from e


class CreateUserForm(_FormMixin, UserCreate):
    """Add-user form: every field required, at least one team."""

    def to_form_data(self) -> dict[str, str | list[str]]:
        return _encode(self.model_dump(mode="json"))


class EditUserForm(_FormMixin, UserUpdate):
    """Edit-user form for an existing record; teams may be empty."""

    id: uuid.UUID

    @classmethod
    def from_user(cls, user: UserRead) -> Self:
        """Pre-fill the form with a record's current values."""
        return cls(
            id=user.id,
            name=user.name,
            email=user.email,
            role=user.role,
            status=user.status,
            teams=list(user.teams),
        )

    def to_form_data(self) -> dict[str, str | list[str]]:
        return _encode(self.model_dump(mode="json", exclude_none=True))
