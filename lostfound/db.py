from __future__ import annotations

import json

import firebase_admin
from firebase_admin import credentials, firestore

from .config import settings


def init_app() -> firebase_admin.App:
    """Return the default firebase app, initializing it on first use."""
    try:
        return firebase_admin.get_app()
    except ValueError:
        pass

    if not settings.firebase_service_account_json:
        raise RuntimeError("FIREBASE_SERVICE_ACCOUNT_JSON is not set")
    service_account = json.loads(settings.firebase_service_account_json)
    return firebase_admin.initialize_app(credentials.Certificate(service_account))


def get_client():
    return firestore.client(app=init_app())
