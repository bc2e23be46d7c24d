"""Client factories for the GUI layer.

The app shell builds each client once at startup and hands it to the
controllers that need it.
"""

from __future__ import annotations

from typing import Optional

from cargopro.api_client import ObjectsApiClient
from cargopro.config import Settings, get_settings
from cargopro.identity import FirebasePhoneIdentityProvider, IdentityProvider
from gui.utils.logging import log


def get_api_client(settings: Optional[Settings] = None) -> ObjectsApiClient:
    """Return an objects API client."""

    settings = settings or get_settings()
    return ObjectsApiClient(
        base_url=settings.api_base_url, timeout=settings.request_timeout
    )


def get_identity_provider(settings: Optional[Settings] = None) -> Optional[IdentityProvider]:
    """Return the phone identity provider.

    Returns None when no Firebase key is configured; only the development
    bypass number can sign in then.
    """

    settings = settings or get_settings()
    if not settings.firebase_api_key:
        log("FIREBASE_WEB_API_KEY not set; only the development sign-in is available")
        return None
    return FirebasePhoneIdentityProvider(
        api_key=settings.firebase_api_key, base_url=settings.identity_base_url
    )
