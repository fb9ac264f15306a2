"""CORS for the browser-based directory client.

Every directory endpoint is a POST (plus GET for health and uploaded
pictures), and there are no cookies or auth headers to forward.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from peopledir.core.settings import get_settings

ALLOWED_METHODS = ["GET", "POST"]


def add_cors_middleware(app: FastAPI) -> None:
    origins = get_settings().cors_origins_list

    app.add_middleware(
        CORSMiddleware,
        allow_origins=origins,
        allow_credentials=False,
        allow_methods=ALLOWED_METHODS,
        allow_headers=["Content-Type", "Accept"],
    )
