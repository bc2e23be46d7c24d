"""Helpers for the free-form JSON payload edited in object forms.

All helpers are pure and fail closed: text that does not parse to a JSON
object is treated as invalid.
"""
import json
from typing import Any, Dict, Optional

EXAMPLE_PAYLOAD_HINT = '{\n  "color": "Silver",\n  "capacity": "512 GB",\n  "price": 2399\n}'


def parse_payload(text: str) -> Optional[Dict[str, Any]]:
    """Return the JSON object in ``text``, or None when blank or not an object."""
    if not text or not text.strip():
        return None
    try:
        decoded = json.loads(text)
    except ValueError:
        return None
    if not isinstance(decoded, dict):
        return None
    return decoded


def is_valid_payload_text(text: str) -> bool:
    """Blank text is valid (no payload); anything else must be a JSON object."""
    if not text or not text.strip():
        return True
    return parse_payload(text) is not None


def format_payload(data: Optional[Dict[str, Any]]) -> str:
    """Pretty-print a payload with two-space indentation."""
    if not data:
        return "{}"
    return json.dumps(data, indent=2, ensure_ascii=False)
