"""Test data builders shared across test modules."""

from peopledir.user.models import Gender, Nationality, Role, Team, User, UserStatus


def make_user(**overrides) -> User:
    """Build an unsaved User with valid defaults."""
    fields = {
        "name": "Test User",
        "email": "test@example.com",
        "work_email": "test@work.example.com",
        "gender": Gender.other,
        "nationality": Nationality.british,
        "contact": 1234567890,
        "role": Role.product_manager,
        "teams": [Team.product.value],
        "status": UserStatus.active,
    }
    fields.update(overrides)
    return User(**fields)


def user_form(**overrides) -> dict[str, object]:
    """Multipart form fields for a valid add-user request.

    Passing None for a field leaves it out of the form.
    """
    fields: dict[str, object] = {
        "name": "New Person",
        "email": "new@example.com",
        "work_email": "new@work.example.com",
        "gender": "Female",
        "nationality": "Canadian",
        "contact": "9876543210",
        "role": "Frontend Developer",
        "teams": ["Technology", "Design"],
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}


def edit_form(user_id, **overrides) -> dict[str, object]:
    """Form fields for a valid edit-user request."""
    fields: dict[str, object] = {
        "id": str(user_id),
        "name": "A2",
        "email": "a@x.com",
        "role": "Product Designer",
        "status": "Active",
        "teams": ["Design"],
    }
    fields.update(overrides)
    return {key: value for key, value in fields.items() if value is not None}
