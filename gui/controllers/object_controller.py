"""Object list controller: the merged, paginated, optimistically mutated collection.

The list endpoint only returns the server-seeded objects (ids 1-13). Objects
created by this client are never listed, so the controller keeps them in a
side list and prepends them (most recent first) on every fetch. Pagination is
client-side over the merged list.
"""

from __future__ import annotations

import math
from typing import Callable, List, Optional

from cargopro.api_client import ObjectsApiClient
from cargopro.errors import ApiError, PolicyViolation, StateInconsistency
from cargopro.models.schemas import RESERVED_MAX_ID, ObjectRecord, is_reserved_id
from cargopro.utils.logger import get_logger
from gui.state import Notice, Observable, rollback_on_error

logger = get_logger(__name__)

DEFAULT_PAGE_SIZE = 10


class ObjectController(Observable):
    """
    Owns the object collection state and its mutation lifecycle.

    Phase flags (``is_loading``, ``is_creating`` ...) are advisory: callers
    should not start a second operation of the same kind while one is in
    flight. Operations never raise; failures end up in ``error_message``.
    """

    def __init__(
        self,
        api: ObjectsApiClient,
        page_size: int = DEFAULT_PAGE_SIZE,
        reserved_max_id: int = RESERVED_MAX_ID,
        notifier: Optional[Callable[[Notice], None]] = None,
        auto_fetch: bool = True,
    ):
        super().__init__()
        self._api = api
        self._reserved_max_id = reserved_max_id
        self._notifier = notifier
        self._auto_fetch = auto_fetch

        self._objects: List[ObjectRecord] = []
        self._all_objects: List[ObjectRecord] = []
        self._user_created: List[ObjectRecord] = []
        self._selected: Optional[ObjectRecord] = None

        self._is_loading = False
        self._is_loading_more = False
        self._is_creating = False
        self._is_updating = False
        self._is_deleting = False
        self._has_error = False
        self._error_message = ""
        self.last_error: Optional[ApiError] = None

        # Detail fetches report separately from the list
        self._is_loading_detail = False
        self._detail_error_message = ""

        self._current_page = 1
        self._page_size = page_size if page_size > 0 else DEFAULT_PAGE_SIZE
        self._total_objects = 0
        self._has_more_data = True

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def objects(self) -> List[ObjectRecord]:
        """Objects on the current page."""
        return list(self._objects)

    @property
    def all_objects(self) -> List[ObjectRecord]:
        return list(self._all_objects)

    @property
    def user_created_objects(self) -> List[ObjectRecord]:
        return list(self._user_created)

    @property
    def selected_object(self) -> Optional[ObjectRecord]:
        return self._selected

    @property
    def is_loading(self) -> bool:
        return self._is_loading

    @property
    def is_loading_more(self) -> bool:
        return self._is_loading_more

    @property
    def is_creating(self) -> bool:
        return self._is_creating

    @property
    def is_updating(self) -> bool:
        return self._is_updating

    @property
    def is_deleting(self) -> bool:
        return self._is_deleting

    @property
    def has_error(self) -> bool:
        return self._has_error

    @property
    def error_message(self) -> str:
        return self._error_message

    @property
    def is_loading_detail(self) -> bool:
        return self._is_loading_detail

    @property
    def detail_error_message(self) -> str:
        return self._detail_error_message

    @property
    def is_empty(self) -> bool:
        return not self._objects and not self._is_loading

    @property
    def current_page(self) -> int:
        return self._current_page

    @property
    def page_size(self) -> int:
        return self._page_size

    @property
    def total_objects(self) -> int:
        return self._total_objects

    @property
    def total_pages(self) -> int:
        return math.ceil(self._total_objects / self._page_size)

    @property
    def has_more_data(self) -> bool:
        return self._has_more_data

    @property
    def object_count_text(self) -> str:
        count = len(self._objects)
        if count == 0:
            return "No objects"
        if count == 1:
            return "1 object"
        return f"{count} objects"

    def is_user_created(self, object_id: str) -> bool:
        """True when ``object_id`` may be edited or deleted by this client."""
        return not is_reserved_id(object_id, self._reserved_max_id)

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _notify(self, title: str, message: str, level: str = "info") -> None:
        if self._notifier is not None:
            self._notifier(Notice(title, message, level))

    def _set_error(self, message: str, error: Optional[ApiError] = None) -> None:
        self._has_error = True
        self._error_message = message
        self.last_error = error

    def _report_failure(self, title: str, exc: Exception) -> None:
        if isinstance(exc, ApiError):
            logger.warning("❌ %s - %s", title, exc.message)
            self._set_error(exc.user_message, exc)
            self._notify(title, exc.user_message, "error")
        else:
            logger.error("❌ %s - unexpected error: %s", title, exc, exc_info=True)
            self._set_error("Unexpected error occurred")
            self._notify(title, "Unexpected error occurred", "error")

    def _apply_pagination(self) -> None:
        start = (self._current_page - 1) * self._page_size
        end = min(start + self._page_size, len(self._all_objects))
        if start < len(self._all_objects):
            self._objects = self._all_objects[start:end]
        else:
            self._objects = []
        self._has_more_data = end < len(self._all_objects)

    def _refresh_window(self) -> None:
        """Recount after an in-place edit of the merged list and re-slice."""
        self._total_objects = len(self._all_objects)
        last_page = max(1, self.total_pages)
        if self._current_page > last_page:
            self._current_page = last_page
        self._apply_pagination()

    def _reset_pagination(self) -> None:
        self._current_page = 1
        self._has_more_data = True
        self._total_objects = 0
        self._all_objects = []

    def _snapshot_pagination(self) -> Callable[[], None]:
        """Capture the merged list and page; the returned callable restores them."""
        all_objects = list(self._all_objects)
        total, page, has_more = self._total_objects, self._current_page, self._has_more_data

        def restore() -> None:
            self._all_objects = all_objects
            self._total_objects = total
            self._current_page = page
            self._has_more_data = has_more
            self._apply_pagination()

        return restore

    @staticmethod
    def _index_of(records: List[ObjectRecord], object_id: str) -> int:
        for i, record in enumerate(records):
            if record.id == object_id:
                return i
        return -1

    # ------------------------------------------------------------------
    # Lifecycle / fetching
    # ------------------------------------------------------------------
    def on_init(self) -> None:
        logger.info(
            "🔧 ObjectController: initializing (user-created: %s)", len(self._user_created)
        )
        if self._auto_fetch:
            self.fetch_objects()

    def fetch_objects(self, show_loading: bool = True) -> None:
        """Fetch reserved objects and merge the locally created ones in front.

        On failure the previous merged list, page and window come back, so
        the rows on screen stay usable.
        """
        if show_loading:
            self._is_loading = True
        self._has_error = False
        self._error_message = ""
        restore = self._snapshot_pagination()
        self._reset_pagination()
        self._changed()

        try:
            with rollback_on_error(restore):
                fetched = self._api.list_objects()
            combined = [*self._user_created, *fetched]
            self._all_objects = combined
            self._total_objects = len(combined)
            self._apply_pagination()
            logger.info(
                "✅ Fetched %s reserved + %s user-created = %s objects",
                len(fetched),
                len(self._user_created),
                len(combined),
            )
        except Exception as exc:
            self._report_failure("Error Loading Objects", exc)
        finally:
            if show_loading:
                self._is_loading = False
            self._changed()

    def refresh_objects(self) -> None:
        """Pull-to-refresh: start again from page 1 without the loading spinner."""
        logger.info("🔄 ObjectController: refreshing objects")
        self.fetch_objects(show_loading=False)

    def clear_error(self) -> None:
        self._has_error = False
        self._error_message = ""
        self.last_error = None
        self._changed()

    # ------------------------------------------------------------------
    # Pagination (client-side, no network)
    # ------------------------------------------------------------------
    def load_more_objects(self) -> None:
        if self._is_loading_more or not self._has_more_data:
            return
        self._is_loading_more = True
        self._changed()
        try:
            self._current_page += 1
            self._apply_pagination()
            logger.debug("Loaded page %s (%s shown)", self._current_page, len(self._objects))
        finally:
            self._is_loading_more = False
            self._changed()

    def go_to_page(self, page_number: int) -> None:
        if page_number < 1 or page_number > self.total_pages:
            return
        self._current_page = page_number
        self._apply_pagination()
        self._changed()

    def change_page_size(self, new_page_size: int) -> None:
        if new_page_size <= 0 or new_page_size == self._page_size:
            return
        logger.info("Page size %s -> %s", self._page_size, new_page_size)
        self._page_size = new_page_size
        self._current_page = 1
        self._apply_pagination()
        self._changed()

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def create_object(self, record: ObjectRecord) -> bool:
        """Create ``record`` on the server and rebuild the merged list."""
        self._is_creating = True
        self._has_error = False
        self._error_message = ""
        self._changed()
        try:
            created = self._api.create_object(record)
            # The list endpoint never returns it, so remember it locally
            self._user_created.insert(0, created)
            self._all_objects.insert(0, created)
            self._refresh_window()
            logger.info(
                "📝 Stored user-created object %s (%s tracked)",
                created.id,
                len(self._user_created),
            )
            self._notify("Created! ✅", f'"{created.name}" added successfully', "success")
            self.fetch_objects(show_loading=False)
            return True
        except Exception as exc:
            self._report_failure("Creation Failed", exc)
            return False
        finally:
            self._is_creating = False
            self._changed()

    def update_object(self, object_id: str, record: ObjectRecord) -> bool:
        """Replace a user-created object. Reserved objects are rejected locally."""
        if not self.is_user_created(object_id):
            logger.warning("❌ Cannot update reserved object %s", object_id)
            self._report_failure(
                "Update Not Allowed",
                PolicyViolation(
                    f"Reserved objects (ID 1-{self._reserved_max_id}) cannot be modified"
                ),
            )
            self._changed()
            return False

        self._is_updating = True
        self._changed()
        try:
            updated = self._api.update_object(object_id, record)

            user_index = self._index_of(self._user_created, object_id)
            if user_index != -1:
                self._user_created[user_index] = updated
            index = self._index_of(self._all_objects, object_id)
            if index != -1:
                self._all_objects[index] = updated
            if self._selected is not None and self._selected.id == object_id:
                self._selected = updated
            self._refresh_window()

            logger.info('✅ Updated "%s"', updated.name)
            self._notify("Updated ✅", f'"{updated.name}" saved', "success")
            return True
        except Exception as exc:
            self._report_failure("Update Failed", exc)
            return False
        finally:
            self._is_updating = False
            self._changed()

    def delete_object(self, object_id: str) -> bool:
        """Remove the object locally first, then on the server; undo on failure."""
        if not self.is_user_created(object_id):
            logger.warning("❌ Cannot delete reserved object %s", object_id)
            self._report_failure(
                "Delete Not Allowed",
                PolicyViolation(
                    f"Reserved objects (ID 1-{self._reserved_max_id}) cannot be deleted"
                ),
            )
            self._changed()
            return False

        self._is_deleting = True
        self._changed()
        try:
            index = self._index_of(self._all_objects, object_id)
            if index == -1:
                raise StateInconsistency()
            user_index = self._index_of(self._user_created, object_id)
            target = self._all_objects[index]
            previous_selection = self._selected
            previous_page = self._current_page

            self._all_objects.pop(index)
            if user_index != -1:
                self._user_created.pop(user_index)
            if self._selected is not None and self._selected.id == object_id:
                self._selected = None
            self._refresh_window()
            self._changed()

            def undo() -> None:
                self._all_objects.insert(index, target)
                if user_index != -1:
                    self._user_created.insert(user_index, target)
                self._selected = previous_selection
                self._current_page = previous_page
                self._refresh_window()
                logger.info("↩️ Restored %s after failed delete", object_id)

            with rollback_on_error(undo):
                self._api.delete_object(object_id)

            logger.info('✅ Deleted "%s"', target.name)
            self._notify("Deleted ✅", f'"{target.name}" removed', "success")
            return True
        except Exception as exc:
            self._report_failure("Deletion Failed", exc)
            return False
        finally:
            self._is_deleting = False
            self._changed()

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------
    def select_object(self, object_id: str) -> None:
        """Fetch one object from the server and make it the selection.

        Uses ``is_loading_detail`` / ``detail_error_message``; the list's
        loading and error state are left alone.
        """
        self._is_loading_detail = True
        self._detail_error_message = ""
        self._changed()
        try:
            self._selected = self._api.get_object(object_id)
            logger.info('✅ Selected object "%s"', self._selected.name)
        except ApiError as exc:
            logger.warning("❌ Failed to load object %s - %s", object_id, exc.message)
            self.last_error = exc
            self._detail_error_message = exc.user_message
            self._notify("Error", exc.user_message, "error")
        except Exception as exc:
            logger.error("❌ Failed to load object details: %s", exc, exc_info=True)
            self._detail_error_message = "Failed to load object details"
            self._notify("Error", "Failed to load object details", "error")
        finally:
            self._is_loading_detail = False
            self._changed()

    def set_selected_object(self, record: ObjectRecord) -> None:
        self._selected = record
        self._changed()

    def clear_selection(self) -> None:
        self._selected = None
        self._changed()
