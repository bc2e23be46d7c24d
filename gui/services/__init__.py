from . import clients  # noqa: F401

from .clients import get_api_client, get_identity_provider

__all__ = ["get_api_client", "get_identity_provider"]
