"""User persistence.

Thin repository over a SQLModel session. The service layer depends on
UserRepositoryProtocol; UserRepository is the database-backed implementation.
"""

import uuid
from collections.abc import Sequence
from typing import Any, Protocol

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlmodel import Session, select

from peopledir.core.exceptions import InternalError
from peopledir.user.exceptions import EmailExistsError
from peopledir.user.models import User


class UserRepositoryProtocol(Protocol):
    """Persistence operations the user service relies on."""

    def list(self) -> Sequence[User]:
        """Return every stored user."""
        ...

    def find_by_email(
        self, email: str, *, exclude_id: uuid.UUID | None = None
    ) -> User | None:
        """Return the user with this email, optionally ignoring one id."""
        ...

    def find_by_id(self, user_id: uuid.UUID) -> User | None:
        """Return the user with this id, if any."""
        ...

    def insert(self, user: User) -> User:
        """Persist a new user and return it refreshed."""
        ...

    def update(self, user_id: uuid.UUID, patch: dict[str, Any]) -> User | None:
        """Apply field updates; None when the user does not exist."""
        ...

    def delete(self, user_id: uuid.UUID) -> bool:
        """Remove a user; False when the user does not exist."""
        ...


class UserRepository:
    """SQLModel-backed user repository."""

    def __init__(self, session: Session):
        self._session = session

    def list(self) -> Sequence[User]:
        return self._session.exec(select(User)).all()

    def find_by_email(
        self, email: str, *, exclude_id: uuid.UUID | None = None
    ) -> User | None:
        statement = select(User).where(User.email == email)
        if exclude_id is not None:
            statement = statement.where(User.id != exclude_id)
        return self._session.exec(statement).first()

    def find_by_id(self, user_id: uuid.UUID) -> User | None:
        return self._session.get(User, user_id)

    def insert(self, user: User) -> User:
        self._session.add(user)
        self._commit()
        self._session.refresh(user)
        return user

    def update(self, user_id: uuid.UUID, patch: dict[str, Any]) -> User | None:
        user = self.find_by_id(user_id)
        if user is None:
            return None
        for key, value in patch.items():
            setattr(user, key, value)
        self._session.add(user)
        self._commit()
        self._session.refresh(user)
        return user

    def delete(self, user_id: uuid.UUID) -> bool:
        user = self.find_by_id(user_id)
        if user is None:
            return False
        self._session.delete(user)
        self._commit()
        return True

    def _commit(self) -> None:
        """Commit the session, translating database failures.

        The unique index on email turns a concurrent duplicate insert into an
        IntegrityError; it is reported like the service-level email check.
        """
        try:
            self._session.commit()
        except IntegrityError as e:
            self._session.rollback()
            raise EmailExistsError() from e
        except SQLAlchemyError as e:
            self._session.rollback()
            raise InternalError("Internal server error.") from e
