"""Dashboard Controller — imperative shell around the pure dashboard reducer.

Invariants:
    - self.state only changes through dispatch() → core.dashboard_state.reduce()
    - Filter changes (and clears) trigger exactly one list fetch each
    - A failed list fetch degrades to an empty record list, never raises
    - submit() validates required fields locally before any round trip
    - Successful mutations re-fetch the full list
    - In-flight requests are not cancelled or sequenced
"""

import logging
import mimetypes
from collections.abc import Mapping
from typing import Any

from employee_directory.config import Settings, get_settings
from employee_directory.core.dashboard_state import (
    DUPLICATE_ID_MESSAGE,
    REQUIRED_FIELDS_MESSAGE,
    SAVE_FAILED_MESSAGE,
    AttachmentLoaded,
    DashboardState,
    DashboardView,
    EditRequested,
    FilterChanged,
    FiltersCleared,
    FormCancelled,
    FormFieldChanged,
    RecordDeleted,
    RecordsFailed,
    RecordsLoaded,
    SearchChanged,
    SortRequested,
    SubmitRejected,
    SubmitStarted,
    SubmitSucceeded,
    ThemeToggled,
    build_view,
    reduce,
    to_data_url,
)
from employee_directory.core.domain_types import AttachmentKind
from employee_directory.core.errors import DirectoryAPIError
from employee_directory.infrastructure.directory_client import DirectoryClient

logger = logging.getLogger(__name__)


class DashboardController:
    """Holds dashboard state and performs the round trips user actions need."""

    def __init__(
        self, client: DirectoryClient, state: DashboardState | None = None,
    ):
        self.client = client
        self.state = state or DashboardState()

    @classmethod
    def from_settings(cls, settings: Settings | None = None) -> "DashboardController":
        settings = settings or get_settings()
        client = DirectoryClient(
            settings.directory_api_url,
            timeout_seconds=settings.directory_timeout_seconds,
        )
        return cls(client, DashboardState(dark_mode=settings.dashboard_dark_mode))

    async def aclose(self) -> None:
        await self.client.aclose()

    def dispatch(self, action: object) -> DashboardState:
        self.state = reduce(self.state, action)
        return self.state

    def view(self) -> DashboardView:
        return build_view(self.state)

    # ─── Fetch ───────────────────────────────────────────────────

    async def refresh(self) -> None:
        """Re-fetch the list for the current filters."""
        try:
            records = await self.client.list_employees(self.state.filters.as_params())
        except DirectoryAPIError as e:
            logger.error(f"Error fetching employees: {e.message}")
            self.dispatch(RecordsFailed())
            return
        self.dispatch(RecordsLoaded(tuple(records)))

    async def change_filter(self, field: str, value: str) -> None:
        self.dispatch(FilterChanged(field, value))
        await self.refresh()

    async def clear_filters(self) -> None:
        self.dispatch(FiltersCleared())
        await self.refresh()

    # ─── Local view state ────────────────────────────────────────

    def search(self, query: str) -> None:
        self.dispatch(SearchChanged(query))

    def sort_by(self, column: str) -> None:
        self.dispatch(SortRequested(column))

    def toggle_theme(self) -> None:
        self.dispatch(ThemeToggled())

    def change_field(self, field: str, value: str) -> None:
        self.dispatch(FormFieldChanged(field, value))

    def attach(
        self,
        kind: AttachmentKind,
        filename: str,
        content: bytes,
        mime_type: str | None = None,
    ) -> None:
        """Load a file into the form as an inline data URL."""
        mime_type = mime_type or mimetypes.guess_type(filename)[0] or "application/octet-stream"
        self.dispatch(AttachmentLoaded(kind, to_data_url(content, mime_type), filename))

    def edit(self, record: Mapping[str, Any]) -> None:
        self.dispatch(EditRequested(record))

    def cancel(self) -> None:
        self.dispatch(FormCancelled())

    # ─── Mutations ───────────────────────────────────────────────

    async def submit(self) -> bool:
        """Create or update from the form. Returns True on success."""
        self.dispatch(SubmitStarted())
        form = self.state.form
        if form.missing_fields():
            self.dispatch(SubmitRejected(REQUIRED_FIELDS_MESSAGE))
            return False

        try:
            if self.state.is_editing:
                await self.client.update_employee(form.id, form.to_payload())
            else:
                await self.client.add_employee(form.to_payload())
        except DirectoryAPIError as e:
            logger.error(
                f"Error submitting form: {e.message}",
                extra={"employee_id": form.id, "error_code": e.error_code},
            )
            message = DUPLICATE_ID_MESSAGE if e.is_duplicate_identifier else SAVE_FAILED_MESSAGE
            self.dispatch(SubmitRejected(message))
            return False

        await self.refresh()
        self.dispatch(SubmitSucceeded())
        return True

    async def delete(self, employee_id: str) -> bool:
        """Delete by business id. The caller is responsible for confirming with the user."""
        try:
            await self.client.delete_employee(employee_id)
        except DirectoryAPIError as e:
            logger.error(
                f"Error deleting employee: {e.message}",
                extra={"employee_id": employee_id},
            )
            return False
        await self.refresh()
        self.dispatch(RecordDeleted(employee_id))
        return True
