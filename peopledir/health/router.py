"""Health domain router.

Reports database connectivity and whether the profile picture store is
usable, for monitoring and load balancers.
"""

import logging
import os

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError
from sqlmodel import Session

from peopledir.core.constants import Routes
from peopledir.core.deps import SessionDep, SettingsDep
from peopledir.core.settings import Settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix=Routes.HEALTH.prefix, tags=[Routes.HEALTH.tag])


def _check_database(session: Session) -> str:
    try:
        session.exec(text("SELECT 1"))
    except SQLAlchemyError as e:
        logger.warning("Database health check failed: %s", e)
        return "error"
    return "ok"


def _check_storage(settings: Settings) -> str:
    # Firebase is not probed; credentials are checked on first upload.
    if settings.image_storage_backend != "local":
        return "ok"
    directory = settings.upload_dir
    if directory.is_dir() and os.access(directory, os.W_OK):
        return "ok"
    logger.warning("Upload directory %s is not writable", directory)
    return "error"


@router.get("")
async def health(session: SessionDep, settings: SettingsDep):
    """Health check with database and image storage verification."""
    checks = {
        "database": _check_database(session),
        "storage": _check_storage(settings),
    }
    healthy = all(result == "ok" for result in checks.values())
    body = {
        "status": "ok" if healthy else "unhealthy",
        **checks,
        "storage_backend": settings.image_storage_backend,
    }
    if not healthy:
        return JSONResponse(status_code=503, content=body)
    return body
