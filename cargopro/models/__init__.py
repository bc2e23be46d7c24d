"""Data schemas and payload helpers."""
from .schemas import ObjectRecord, RESERVED_MAX_ID, is_reserved_id, is_user_created
from .payload import (
    EXAMPLE_PAYLOAD_HINT,
    format_payload,
    is_valid_payload_text,
    parse_payload,
)

__all__ = [
    "ObjectRecord",
    "RESERVED_MAX_ID",
    "is_reserved_id",
    "is_user_created",
    "EXAMPLE_PAYLOAD_HINT",
    "format_payload",
    "is_valid_payload_text",
    "parse_payload",
]
