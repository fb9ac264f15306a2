"""Firebase Admin SDK setup for the Cloud Storage picture backend.

Credentials come from GOOGLE_APPLICATION_CREDENTIALS or the runtime's
default service account.
"""

import logging

from firebase_admin import get_app, initialize_app

logger = logging.getLogger(__name__)


def init_firebase(storage_bucket: str | None = None) -> None:
    """Initialize the default Firebase app once; later calls are no-ops.

    `storage_bucket` becomes the default bucket for firebase_admin.storage.
    """
    try:
        get_app()
    except ValueError:
        options = {"storageBucket": storage_bucket} if storage_bucket else None
        initialize_app(options=options)
        logger.info("Initialized Firebase app (bucket=%s)", storage_bucket or "default")
