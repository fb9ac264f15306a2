"""
App-wide constants for route configuration.

This module provides a single source of truth for route paths, tags,
and common response definitions for API routes.
"""

from dataclasses import dataclass
from typing import Any

from peopledir.models.error import ErrorResponse


@dataclass(frozen=True)
class RouteConfig:
    """Configuration for a route group."""

    prefix: str
    tag: str


class Routes:
    """Route configurations for all API endpoints."""

    # The directory client calls the user endpoints at the root path.
    USER = RouteConfig(prefix="", tag="users")
    HEALTH = RouteConfig(prefix="/health", tag="health")


class UserPaths:
    """Paths of the user mutation endpoints (shared by router and client)."""

    FETCH = "/fetch-users"
    ADD = "/add-user"
    EDIT = "/edit-user"
    DELETE = "/delete-user"


# Common response definitions for reuse across routers
# Use these when configuring APIRouter or individual endpoints
class CommonResponses:
    """Standard HTTP error response definitions for OpenAPI documentation."""

    BAD_REQUEST: dict[int, dict[str, Any]] = {
        400: {
            "model": ErrorResponse,
            "description": "Invalid request data or email already in use",
        }
    }
    NOT_FOUND: dict[int, dict[str, Any]] = {
        404: {"model": ErrorResponse, "description": "Resource not found"}
    }
    INTERNAL_ERROR: dict[int, dict[str, Any]] = {
        500: {
            "model": ErrorResponse,
            "description": "Unexpected server error",
        }
    }
