from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.staticfiles import StaticFiles

from peopledir.core.cors import add_cors_middleware
from peopledir.core.exception_handlers import register_exception_handlers
from peopledir.core.firebase import init_firebase
from peopledir.core.logging import configure_logging
from peopledir.core.request_logging import add_request_logging_middleware
from peopledir.core.settings import get_settings
from peopledir.db.engine import init_db
from peopledir.router import api_router

configure_logging()


@asynccontextmanager
async def lifespan(_: FastAPI):
    settings = get_settings()
    init_db()
    if settings.image_storage_backend == "firebase":
        init_firebase(settings.firebase_storage_bucket)
    else:
        settings.upload_dir.mkdir(parents=True, exist_ok=True)
    yield


app = FastAPI(title="People Directory", version="0.1.0", lifespan=lifespan)

app.include_router(api_router)

add_request_logging_middleware(app)
add_cors_middleware(app)
register_exception_handlers(app)

# Locally stored profile pictures
_settings = get_settings()
if _settings.image_storage_backend == "local":
    app.mount(
        _settings.uploads_url_prefix,
        StaticFiles(directory=_settings.upload_dir, check_dir=False),
        name="uploads",
    )
