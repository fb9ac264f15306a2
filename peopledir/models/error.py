"""Error body returned by every failing directory endpoint."""

from pydantic import BaseModel, Field


class ErrorResponse(BaseModel):
    type: str = Field(
        description="Machine-readable error code",
        examples=["email_exists", "invalid_user_id", "validation_error"],
    )
    message: str = Field(
        description="Text shown to the user",
        examples=["User with this email already exists."],
    )
