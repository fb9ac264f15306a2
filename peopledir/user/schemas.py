"""User domain schemas.

Request and response schemas for user operations.

Notes:
- UserCreate and UserUpdate carry the field rules shared by the API and the
  directory forms; the two differ only in which fields are required.
- Teams arrive either as repeated form fields or as one comma-joined value.
"""

import uuid
from datetime import UTC, date, datetime
from typing import Annotated, Any

from pydantic import (
    EmailStr,
    Field,
    StringConstraints,
    field_serializer,
    field_validator,
)
from sqlmodel import SQLModel

from peopledir.user.models import (
    MIN_CONTACT_NUMBER,
    Gender,
    Nationality,
    Role,
    Team,
    UserStatus,
)

NameStr = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
ContactNumber = Annotated[int, Field(ge=MIN_CONTACT_NUMBER)]


def split_teams(value: Any) -> Any:
    """Normalize team input to a de-duplicated list of stripped names.

    Accepts a single string ("Technology,Design") or a list whose items
    may themselves be comma-joined. Order of first appearance is kept.
    """
    if value is None:
        return value
    items = [value] if isinstance(value, str) else value
    if not isinstance(items, list | tuple | set):
        return value

    teams: list[Any] = []
    for item in items:
        parts = item.split(",") if isinstance(item, str) else [item]
        for part in parts:
            if isinstance(part, str):
                part = part.strip()
                if not part:
                    continue
            if part not in teams:
                teams.append(part)
    return teams


def _blank_to_none(value: Any) -> Any:
    if isinstance(value, str) and not value.strip():
        return None
    return value


class UserCreate(SQLModel):
    """Schema for creating a user record.

    Every field except status, date_of_birth and the picture is required.
    """

    name: NameStr
    email: EmailStr
    work_email: EmailStr
    gender: Gender
    nationality: Nationality
    contact: ContactNumber
    role: Role
    teams: list[Team] = Field(min_length=1)
    status: UserStatus = UserStatus.active
    date_of_birth: date | None = None

    @field_validator("teams", mode="before")
    @classmethod
    def _split_teams(cls, value: Any) -> Any:
        return split_teams(value)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return _blank_to_none(value)


class UserUpdate(SQLModel):
    """Schema for editing a user record.

    name, email, role, status and teams are required; teams may be empty.
    The remaining fields are applied only when provided.
    """

    name: NameStr
    email: EmailStr
    role: Role
    status: UserStatus
    teams: list[Team]
    work_email: EmailStr | None = None
    gender: Gender | None = None
    nationality: Nationality | None = None
    contact: ContactNumber | None = None
    date_of_birth: date | None = None

    @field_validator("teams", mode="before")
    @classmethod
    def _split_teams(cls, value: Any) -> Any:
        return split_teams(value)

    @field_validator("date_of_birth", mode="before")
    @classmethod
    def _blank_date(cls, value: Any) -> Any:
        return _blank_to_none(value)


class UserDeleteRequest(SQLModel):
    """Request body for deleting a user.

    The id is kept as a string so a malformed value is reported as an
    invalid user ID instead of a generic validation error.
    """

    id: str


class UserRead(SQLModel):
    """Response schema for a user record."""

    id: uuid.UUID
    name: str
    email: EmailStr
    work_email: EmailStr
    gender: Gender
    nationality: Nationality
    contact: int
    role: Role
    teams: list[Team]
    status: UserStatus
    date_of_birth: date | None = None
    profile_pic: str | None = None
    created_at: datetime
    updated_at: datetime

    @field_serializer("created_at", "updated_at")
    def serialize_datetime(self, value: datetime) -> str:
        """Format datetime as ISO 8601 string in UTC.

        Converts datetime to UTC timezone and formats with Z suffix
        (e.g. 2026-01-19T12:34:56Z).
        """
        # Convert to UTC if timezone-aware, otherwise assume UTC
        if value.tzinfo is not None:
            utc_value = value.astimezone(UTC)
        else:
            # Naive datetime - assume it's already UTC (from TimestampMixin)
            utc_value = value.replace(tzinfo=UTC)

        # Normalize to whole seconds and format with Z suffix
        return utc_value.replace(microsecond=0).isoformat().replace("+00:00", "Z")


class MessageResponse(SQLModel):
    message: str


class UserResponse(MessageResponse):
    user: UserRead


class UserListResponse(MessageResponse):
    users: list[UserRead]
