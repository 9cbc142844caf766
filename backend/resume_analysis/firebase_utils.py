"""
Firebase Admin SDK helpers for verifying client ID tokens.
"""
import logging
import os
from typing import Optional

import firebase_admin
from firebase_admin import auth, credentials
from django.conf import settings

logger = logging.getLogger(__name__)

_app = None


def initialize_firebase() -> Optional[firebase_admin.App]:
    """
    Initialize the Firebase Admin SDK once per process.

    Returns:
        Firebase app instance or None if credentials are not configured
    """
    global _app

    if _app is not None:
        return _app

    cred_path = getattr(settings, 'FIREBASE_CREDENTIALS', '') or os.environ.get('FIREBASE_CREDENTIALS')
    if not cred_path:
        logger.warning("FIREBASE_CREDENTIALS is not set")
        return None
    if not os.path.exists(cred_path):
        logger.error(f"Firebase credentials file not found at: {cred_path}")
        return None

    try:
        _app = firebase_admin.initialize_app(credentials.Certificate(cred_path))
    except (ValueError, OSError) as e:
        logger.error(f"Failed to initialize Firebase: {e}")
        return None
    logger.info("Firebase Admin SDK initialized successfully")
    return _app


def verify_firebase_token(id_token: str) -> Optional[dict]:
    """
    Verify a Firebase ID token.

    Returns:
        Decoded token claims or None if verification fails
    """
    if initialize_firebase() is None:
        return None

    try:
        return auth.verify_id_token(id_token)
    except (ValueError, auth.InvalidIdTokenError, auth.ExpiredIdTokenError,
            auth.RevokedIdTokenError, auth.CertificateFetchError) as e:
        logger.warning(f"Token verification failed: {e}")
        return None
