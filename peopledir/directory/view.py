"""People directory view.

Holds the full record list and the table state, and exposes the current
page. Mutations go through the API and are followed by a full reload of the
record list; local records are never patched.
"""

import logging
import uuid
from dataclasses import dataclass

from peopledir.directory.client import DirectoryClient
from peopledir.directory.errors import DirectoryClientError, RequestFailedError
from peopledir.directory.forms import CreateUserForm, EditUserForm, ProfilePicture
from peopledir.directory.view_model import DirectoryPage, DirectoryState, derive
from peopledir.user.schemas import UserRead

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SubmitOutcome:
    """Result of a create, edit or delete action, ready to notify the user."""

    ok: bool
    message: str
    user: UserRead | None = None
    error: RequestFailedError | None = None

    @classmethod
    def failed(cls, error: RequestFailedError) -> "SubmitOutcome":
        return cls(ok=False, message=error.user_message, error=error)


class DirectoryView:
    def __init__(self, client: DirectoryClient, state: DirectoryState | None = None):
        self.client = client
        self.state = state or DirectoryState()
        self.records: list[UserRead] = []
        self.load_error: DirectoryClientError | None = None

    @property
    def page(self) -> DirectoryPage:
        """Rows for the current state; recomputed on every access."""
        return derive(self.records, self.state)

    async def load(self) -> DirectoryPage:
        """Fetch the full record list and return the current page.

        Raises RequestFailedError when the list cannot be fetched; the
        previously loaded records are kept in that case.
        """
        self.records = await self.client.fetch_users()
        self.load_error = None
        return self.page

    async def create(
        self, form: CreateUserForm, picture: ProfilePicture | None = None
    ) -> SubmitOutcome:
        try:
            user = await self.client.add_user(form, picture)
        except RequestFailedError as e:
            logger.info("Adding user failed: %s", e.user_message)
            return SubmitOutcome.failed(e)
        await self._reload()
        return SubmitOutcome(ok=True, message="User added successfully", user=user)

    async def edit(
        self, form: EditUserForm, picture: ProfilePicture | None = None
    ) -> SubmitOutcome:
        try:
            user = await self.client.edit_user(form, picture)
        except RequestFailedError as e:
            logger.info("Editing user failed: %s", e.user_message)
            return SubmitOutcome.failed(e)
        await self._reload()
        return SubmitOutcome(ok=True, message="User edited successfully", user=user)

    async def delete(self, user_id: uuid.UUID | str) -> SubmitOutcome:
        try:
            await self.client.delete_user(user_id)
        except RequestFailedError as e:
            logger.info("Deleting user failed: %s", e.user_message)
            return SubmitOutcome.failed(e)
        await self._reload()
        return SubmitOutcome(ok=True, message="User deleted successfully")

    async def _reload(self) -> None:
        """Refetch after a successful mutation.

        A failed refetch does not undo the mutation's outcome; the error is
        kept on load_error and the stale list stays in place.
        """
        try:
            await self.load()
        except DirectoryClientError as e:
            logger.warning("Reload after mutation failed: %s", e.message)
            self.load_error = e
