"""
CargoPro Objects - REST object browser with phone OTP sign-in.

Lists, creates, edits and deletes objects on the restful-api.dev demo API.
"""

__version__ = "1.0.0"

# Only import the light core by default
from .models.schemas import ObjectRecord, is_reserved_id, is_user_created
from .api_client import ObjectsApiClient

__all__ = [
    "ObjectRecord",
    "ObjectsApiClient",
    "is_reserved_id",
    "is_user_created",
]
