"""Pydantic schemas for objects exchanged with the REST API.

These schemas act as contracts at ingress points so we fail fast when
the API payload changes shape. Example API object:

    {"id": "7", "name": "Apple MacBook Pro 16", "data": {"year": 2019}}
"""
import re
from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, field_validator

# Objects 1..13 are seeded by the server and cannot be modified by clients
RESERVED_MAX_ID = 13

_NUMERIC_ID = re.compile(r"[0-9]+")


def is_reserved_id(object_id: Optional[str], max_id: int = RESERVED_MAX_ID) -> bool:
    """True for numeric ids in the inclusive range [1, max_id]."""
    if object_id is None or not _NUMERIC_ID.fullmatch(object_id):
        return False
    return 1 <= int(object_id) <= max_id


def is_user_created(object_id: Optional[str], max_id: int = RESERVED_MAX_ID) -> bool:
    """True for ids this client may edit or delete."""
    return object_id is not None and not is_reserved_id(object_id, max_id)


class ObjectRecord(BaseModel):
    """One object from the collection endpoint.

    ``id`` is absent until the server assigns one on creation.
    """

    model_config = ConfigDict(frozen=True)

    id: Optional[str] = None
    name: str
    data: Optional[Dict[str, Any]] = None

    @field_validator("id", mode="before")
    @classmethod
    def id_as_string(cls, v: Any) -> Optional[str]:
        # The API uses numeric ids for seeded objects and strings for the rest
        if v is None:
            return None
        return str(v)

    @field_validator("name")
    @classmethod
    def name_nonempty(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("Object name cannot be empty")
        return v

    @classmethod
    def from_api(cls, payload: Any) -> "ObjectRecord":
        """Validate one object from an API response body."""
        return cls.model_validate(payload)

    def to_request_body(self) -> Dict[str, Any]:
        """Body for POST/PUT. The API takes the id from the URL, never the body."""
        body: Dict[str, Any] = {"name": self.name}
        if self.data:
            body["data"] = self.data
        return body

    def copy_with(self, **changes: Any) -> "ObjectRecord":
        return self.model_copy(update=changes)

    @property
    def is_reserved(self) -> bool:
        return is_reserved_id(self.id)

    @property
    def is_valid(self) -> bool:
        return bool(self.name and self.name.strip())

    @property
    def data_string(self) -> str:
        """One-line summary of the payload for list rows."""
        if not self.data:
            return "No additional data"
        return ", ".join(f"{key}: {value}" for key, value in self.data.items())
