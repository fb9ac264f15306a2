"""Async HTTP client for the directory API.

Every call is a single POST with no retries. Failures are raised as
RequestFailedError classified by FailureKind.
"""

import logging
import uuid
from typing import Any

import httpx

from peopledir.core.constants import UserPaths
from peopledir.core.http import create_http_client
from peopledir.directory.errors import FailureKind, RequestFailedError
from peopledir.directory.forms import (
    IMAGE_FIELD,
    CreateUserForm,
    EditUserForm,
    ProfilePicture,
)
from peopledir.user.schemas import UserRead

logger = logging.getLogger(__name__)

DEFAULT_BASE_URL = "http://localhost:8000"


def _error_message(response: httpx.Response) -> tuple[str, str | None]:
    """Extract (message, error type) from an error response."""
    try:
        body = response.json()
    except ValueError:
        return response.reason_phrase or response.text, None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"]), body.get("type")
    return response.reason_phrase or response.text, None


class DirectoryClient:
    """Client for the fetch/add/edit/delete user endpoints.

    Usage:
        async with DirectoryClient("http://localhost:8000") as client:
            users = await client.fetch_users()
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        *,
        http_client: httpx.AsyncClient | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self._owns_client = http_client is None
        self._http = http_client or create_http_client(
            base_url=base_url, transport=transport
        )

    async def __aenter__(self) -> "DirectoryClient":
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        if self._owns_client:
            await self._http.aclose()

    async def fetch_users(self) -> list[UserRead]:
        body = await self._post(UserPaths.FETCH)
        return [UserRead.model_validate(user) for user in body.get("users", [])]

    async def add_user(
        self, form: CreateUserForm, picture: ProfilePicture | None = None
    ) -> UserRead:
        body = await self._post(
            UserPaths.ADD, data=form.to_form_data(), files=self._files(picture)
        )
        return UserRead.model_validate(body["user"])

    async def edit_user(
        self, form: EditUserForm, picture: ProfilePicture | None = None
    ) -> UserRead:
        body = await self._post(
            UserPaths.EDIT, data=form.to_form_data(), files=self._files(picture)
        )
        return UserRead.model_validate(body["user"])

    async def delete_user(self, user_id: uuid.UUID | str) -> str:
        body = await self._post(UserPaths.DELETE, json={"id": str(user_id)})
        return str(body.get("message", ""))

    @staticmethod
    def _files(
        picture: ProfilePicture | None,
    ) -> dict[str, tuple[str, bytes, str]] | None:
        return {IMAGE_FIELD: picture.as_file()} if picture else None

    async def _post(self, path: str, **kwargs: Any) -> dict[str, Any]:
        try:
            request = self._http.build_request("POST", path, **kwargs)
        except (httpx.InvalidURL, TypeError, ValueError) as e:
            raise RequestFailedError(FailureKind.request, str(e)) from e

        try:
            response = await self._http.send(request)
        except httpx.UnsupportedProtocol as e:
            raise RequestFailedError(FailureKind.request, str(e)) from e
        except httpx.RequestError as e:
            logger.warning("No response from %s: %s", request.url, e)
            raise RequestFailedError(FailureKind.no_response, str(e)) from e

        if response.is_error:
            message, error_type = _error_message(response)
            raise RequestFailedError(
                FailureKind.server,
                message,
                status_code=response.status_code,
                error_type=error_type,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RequestFailedError(
                FailureKind.server,
                "Invalid response body",
                status_code=response.status_code,
            ) from e
        if not isinstance(body, dict):
            raise RequestFailedError(
                FailureKind.server,
                "Invalid response body",
                status_code=response.status_code,
            )
        return body
