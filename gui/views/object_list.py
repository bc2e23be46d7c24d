"""Paginated object list view."""

from __future__ import annotations

from concurrent.futures import Future
from dataclasses import dataclass
from typing import List, Optional

from gui.controllers.object_controller import ObjectController
from gui.views.base import BaseView


@dataclass
class ObjectListView(BaseView):
    objects: Optional[ObjectController] = None
    name: str = "objects"

    def on_scroll_end(self) -> None:
        """Infinite scroll: ask for the next page when the last row is visible."""
        if self.objects.has_more_data and not self.objects.is_loading_more:
            self.objects.load_more_objects()

    def previous_page(self) -> None:
        if self.objects.current_page > 1:
            self.objects.go_to_page(self.objects.current_page - 1)

    def next_page(self) -> None:
        if self.objects.has_more_data:
            self.objects.go_to_page(self.objects.current_page + 1)

    def refresh(self) -> Future:
        """Pull-to-refresh (also the error state's retry)."""
        return self.submit_task(self.objects.refresh_objects)

    def render(self) -> List[str]:
        c = self.objects
        if c.is_loading:
            return ["Loading objects..."]
        if c.has_error and not c.objects:
            return ["Error", c.error_message, "[retry] Try again"]
        if c.is_empty:
            return ["No objects found", "[add] Add Object", "[refresh] Refresh"]

        lines = []
        for record in c.objects:
            tag = "" if c.is_user_created(record.id) else " (reserved)"
            lines.append(f"#{record.id} {record.name}{tag} - {record.data_string}")
        lines.append(f"Page {c.current_page}/{c.total_pages} - {c.object_count_text}")
        return lines
