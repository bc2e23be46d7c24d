"""Single object view with edit/delete actions for user-created objects."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import List, Optional

from cargopro.models.payload import format_payload
from cargopro.models.schemas import ObjectRecord
from gui.controllers.object_controller import ObjectController
from gui.views.base import BaseView


@dataclass
class ObjectDetailView(BaseView):
    objects: Optional[ObjectController] = None
    initial: Optional[ObjectRecord] = None
    name: str = "object_detail"

    def __post_init__(self) -> None:
        if self.initial is not None:
            self.objects.set_selected_object(self.initial)

    @property
    def record(self) -> Optional[ObjectRecord]:
        return self.objects.selected_object or self.initial

    @property
    def can_modify(self) -> bool:
        record = self.record
        return bool(record and record.id and self.objects.is_user_created(record.id))

    def reload(self) -> Optional[Future]:
        if self.record is None or not self.record.id:
            return None
        return self.submit_task(self.objects.select_object, self.record.id)

    def delete(self) -> Optional[Future]:
        """Start the delete; None when the object is read-only."""
        if not self.can_modify:
            return None
        return self.submit_task(self.objects.delete_object, self.record.id)

    def render(self) -> List[str]:
        if self.objects.is_loading_detail:
            return ["Loading object..."]
        record = self.record
        if record is None:
            return ["Object not found"]
        if self.objects.detail_error_message:
            return [record.name, f"! {self.objects.detail_error_message}", "[reload] Try again"]
        field_count = len(record.data or {})
        lines = [
            record.name,
            f"ID: {record.id}",
            f"{field_count} fields",
            format_payload(record.data),
        ]
        if self.can_modify:
            lines.append("[edit] Edit   [delete] Delete")
        else:
            lines.append("Reserved object (read-only)")
        return lines
