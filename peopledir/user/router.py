"""User domain router.

Directory endpoints for listing, creating, editing and deleting user records.
Create and edit take multipart form fields plus an optional `profile_pic`
file; delete takes a JSON body with the record id.
"""

from typing import Any, TypeVar

from fastapi import APIRouter, Request
from pydantic import ValidationError as PydanticValidationError
from sqlmodel import SQLModel
from starlette.datastructures import FormData, UploadFile

from peopledir.core.constants import CommonResponses, Routes, UserPaths
from peopledir.core.deps import UserServiceDep
from peopledir.core.exception_handlers import format_validation_errors
from peopledir.core.exceptions import ValidationError
from peopledir.services.image_storage import UploadedImage
from peopledir.user.schemas import (
    MessageResponse,
    UserCreate,
    UserDeleteRequest,
    UserListResponse,
    UserRead,
    UserResponse,
    UserUpdate,
)
from peopledir.user.service import parse_user_id

router = APIRouter(
    prefix=Routes.USER.prefix,
    tags=[Routes.USER.tag],
    responses={**CommonResponses.BAD_REQUEST, **CommonResponses.INTERNAL_ERROR},
)

IMAGE_FIELD = "profile_pic"

T = TypeVar("T", bound=SQLModel)


def _form_fields(form: FormData, schema: type[SQLModel]) -> dict[str, Any]:
    """Collect the schema's fields present in the form.

    Teams may repeat, so all of its values are kept.
    """
    fields: dict[str, Any] = {}
    for name in schema.model_fields:
        if name not in form:
            continue
        fields[name] = form.getlist(name) if name == "teams" else form.get(name)
    return fields


def _validate(schema: type[T], fields: dict[str, Any]) -> T:
    try:
        return schema.model_validate(fields)
    except PydanticValidationError as e:
        raise ValidationError(format_validation_errors(e.errors())) from e


async def _form_image(form: FormData) -> UploadedImage | None:
    """Return the uploaded picture, or None when no file was sent."""
    upload = form.get(IMAGE_FIELD)
    if not isinstance(upload, UploadFile) or not upload.filename:
        return None
    data = await upload.read()
    if not data:
        return None
    return UploadedImage(
        data=data, filename=upload.filename, content_type=upload.content_type
    )


@router.post(UserPaths.FETCH, response_model=UserListResponse)
async def fetch_users(service: UserServiceDep):
    """List all users. Filtering and pagination happen in the client."""
    users = service.list_users()
    return UserListResponse(
        message="Users fetched successfully.",
        users=[UserRead.model_validate(user) for user in users],
    )


@router.post(UserPaths.ADD, response_model=UserResponse)
async def add_user(request: Request, service: UserServiceDep):
    """Create a user from multipart form fields and an optional picture."""
    async with request.form() as form:
        data = _validate(UserCreate, _form_fields(form, UserCreate))
        image = await _form_image(form)

    user = service.create_user(data, image)
    return UserResponse(
        message="User created successfully.", user=UserRead.model_validate(user)
    )


@router.post(
    UserPaths.EDIT,
    response_model=UserResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def edit_user(request: Request, service: UserServiceDep):
    """Edit a user identified by the `id` form field."""
    async with request.form() as form:
        raw_id = form.get("id")
        user_id = parse_user_id(raw_id if isinstance(raw_id, str) else "")
        data = _validate(UserUpdate, _form_fields(form, UserUpdate))
        image = await _form_image(form)

    user = service.update_user(user_id, data, image)
    return UserResponse(
        message="User updated successfully.", user=UserRead.model_validate(user)
    )


@router.post(
    UserPaths.DELETE,
    response_model=MessageResponse,
    responses={**CommonResponses.NOT_FOUND},
)
async def delete_user(payload: UserDeleteRequest, service: UserServiceDep):
    """Delete a user by id. Deletion is permanent."""
    service.delete_user(payload.id)
    return MessageResponse(message="User deleted successfully.")
