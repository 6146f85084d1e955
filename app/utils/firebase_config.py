"""
Firebase Admin credentials loading and app initialisation.

FIREBASE_CREDENTIALS holds the service-account JSON inline (minified on one
line) so the key file never has to live inside the project. As a fallback,
FIREBASE_SERVICE_ACCOUNT_PATH may point at the downloaded key file.
"""

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional

import firebase_admin
from firebase_admin import credentials

logger = logging.getLogger(__name__)

_init_lock = threading.Lock()


def get_firebase_credentials() -> Optional[credentials.Certificate]:
    """
    Return a ``credentials.Certificate`` built from FIREBASE_CREDENTIALS, or
    from the key file at FIREBASE_SERVICE_ACCOUNT_PATH.

    Returns:
        credentials.Certificate, or None when nothing usable is configured.
    """
    json_str = os.getenv("FIREBASE_CREDENTIALS", "").strip()
    if json_str:
        try:
            return credentials.Certificate(json.loads(json_str))
        except json.JSONDecodeError as e:
            logger.error(f"FIREBASE_CREDENTIALS: invalid JSON ({e})")
            return None

    key_path = os.getenv("FIREBASE_SERVICE_ACCOUNT_PATH", "").strip()
    if key_path:
        path = Path(key_path)
        if not path.is_file():
            logger.warning(
                f"Service account key not found at {path}. Download it from "
                "Firebase Console > Project Settings > Service Accounts."
            )
            return None
        return credentials.Certificate(str(path))

    return None


def get_firebase_app() -> Optional[firebase_admin.App]:
    """
    Return the default Firebase app, initialising it on first use.

    The storage bucket (FIREBASE_STORAGE_BUCKET) is attached at init time so
    the auth and storage helpers share one app. Returns None when no
    credentials are available.
    """
    with _init_lock:
        if firebase_admin._apps:
            return firebase_admin.get_app()

        cred = get_firebase_credentials()
        if cred is None:
            return None

        options = {}
        bucket_name = os.getenv("FIREBASE_STORAGE_BUCKET")
        if bucket_name:
            options["storageBucket"] = bucket_name

        app = firebase_admin.initialize_app(cred, options or None)
        logger.info("Firebase Admin SDK initialized")
        return app
