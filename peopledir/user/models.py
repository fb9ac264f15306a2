"""User domain models.

SQLModel table definition for User plus the fixed enumerations a record
draws its role, teams, status, gender and nationality from.
"""

import uuid
from datetime import date
from enum import Enum

from pydantic import EmailStr
from sqlalchemy import JSON, BigInteger, Column
from sqlmodel import Field, SQLModel

from peopledir.core.mixins import TimestampMixin

# Smallest accepted contact number (ten digits).
MIN_CONTACT_NUMBER = 1_000_000_000


class UserStatus(str, Enum):
    """Availability status shown in the directory."""

    active = "Active"
    inactive = "Inactive"
    do_not_disturb = "Do Not Disturb"


class Role(str, Enum):
    frontend_developer = "Frontend Developer"
    backend_developer = "Backend Developer"
    product_designer = "Product Designer"
    product_manager = "Product Manager"


class Team(str, Enum):
    technology = "Technology"
    product = "Product"
    marketing = "Marketing"
    design = "Design"


class Gender(str, Enum):
    male = "Male"
    female = "Female"
    other = "Other"


class Nationality(str, Enum):
    american = "American"
    australian = "Australian"
    british = "British"
    canadian = "Canadian"
    chinese = "Chinese"
    french = "French"
    german = "German"
    indian = "Indian"
    japanese = "Japanese"
    russian = "Russian"
    south_african = "South African"
    spanish = "Spanish"


class User(TimestampMixin, SQLModel, table=True):
    """User (employee) database model.

    Team memberships are stored as a JSON list of team values.
    """

    __tablename__: str = "users"

    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    name: str = Field(max_length=255)
    email: EmailStr = Field(index=True, unique=True, max_length=255)
    work_email: EmailStr = Field(max_length=255)
    gender: Gender
    nationality: Nationality
    contact: int = Field(sa_type=BigInteger)
    role: Role
    teams: list[str] = Field(
        default_factory=list, sa_column=Column(JSON, nullable=False)
    )
    status: UserStatus = Field(default=UserStatus.active)
    date_of_birth: date | None = Field(default=None)
    profile_pic: str | None = Field(default=None, max_length=2048)
