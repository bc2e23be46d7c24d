"""Add / edit object form."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass, field
from typing import Dict, List, Optional

from cargopro.models.payload import (
    EXAMPLE_PAYLOAD_HINT,
    format_payload,
    is_valid_payload_text,
    parse_payload,
)
from cargopro.models.schemas import ObjectRecord
from gui.controllers.object_controller import ObjectController
from gui.views.base import BaseView


def validate_name(value: str) -> Optional[str]:
    if not value or not value.strip():
        return "Please enter an object name"
    if len(value.strip()) < 2:
        return "Name must be at least 2 characters long"
    return None


def validate_payload(value: str) -> Optional[str]:
    if not is_valid_payload_text(value):
        return "Please enter valid JSON format"
    return None


@dataclass
class ObjectFormView(BaseView):
    """Creates a new object, or edits ``editing`` when given."""

    objects: Optional[ObjectController] = None
    editing: Optional[ObjectRecord] = None
    name: str = "object_form"
    name_text: str = ""
    payload_text: str = ""
    errors: Dict[str, str] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.editing is not None:
            self.name_text = self.editing.name
            self.payload_text = format_payload(self.editing.data) if self.editing.data else ""

    @property
    def payload_hint(self) -> str:
        return EXAMPLE_PAYLOAD_HINT

    @property
    def is_busy(self) -> bool:
        return self.objects.is_updating if self.editing else self.objects.is_creating

    def validate(self) -> bool:
        self.errors = {}
        name_error = validate_name(self.name_text)
        if name_error:
            self.errors["name"] = name_error
        payload_error = validate_payload(self.payload_text)
        if payload_error:
            self.errors["data"] = payload_error
        return not self.errors

    def submit(self) -> Optional[Future]:
        """Start the create or update. None when busy or the fields are invalid."""
        if self.is_busy or not self.validate():
            return None
        record = ObjectRecord(name=self.name_text.strip(), data=parse_payload(self.payload_text))
        if self.editing is not None:
            return self.submit_task(self.objects.update_object, self.editing.id, record)
        return self.submit_task(self.objects.create_object, record)

    def render(self) -> List[str]:
        title = "Edit Object" if self.editing else "Add Object"
        lines = [title, f"Name: {self.name_text}", f"Data: {self.payload_text or '(none)'}"]
        lines.extend(f"! {message}" for message in self.errors.values())
        return lines
