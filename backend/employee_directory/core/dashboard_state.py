"""Dashboard State — immutable view state and the single reducer that advances it.

Invariants:
    - DashboardState is frozen; reduce() always returns a new instance
    - reduce() is pure: no IO, no clock, no logging
    - EDIT mode locks the form's id field; CREATE is the default mode
    - Entering EDIT clears the form error and loads every non-internal record field
    - Successful submit, cancel, and deleting the record being edited all return to CREATE

Design Decisions:
    - One action class per user intent, dispatched through a type-keyed handler table
    - Department aggregation runs over the fetched set, rows over the searched + sorted set
"""

import base64
from collections.abc import Callable
from dataclasses import dataclass, field, fields, replace
from typing import Any, ClassVar

from employee_directory.core.domain_types import (
    DEPARTMENT_OPTIONS,
    GENDER_OPTIONS,
    TABLE_COLUMNS,
    AttachmentKind,
    FormMode,
)
from employee_directory.core.record_derivation import (
    Record,
    SortConfig,
    build_pie_data,
    department_colors,
    department_counts,
    is_sortable,
    next_sort_config,
    search_records,
    sort_records,
)

REQUIRED_FIELDS_MESSAGE = "All fields (except files) are required."
DUPLICATE_ID_MESSAGE = "An employee with this ID already exists."
SAVE_FAILED_MESSAGE = "An error occurred while saving."


# ─── State ───────────────────────────────────────────────────────

@dataclass(frozen=True)
class FilterState:
    department: str = ""
    gender: str = ""
    start_date: str = ""
    end_date: str = ""

    WIRE_NAMES: ClassVar[dict[str, str]] = {
        "department": "department",
        "gender": "gender",
        "start_date": "startDate",
        "end_date": "endDate",
    }

    def as_params(self) -> dict[str, str]:
        """Query parameters for the list endpoint."""
        return {wire: getattr(self, attr) for attr, wire in self.WIRE_NAMES.items()}


@dataclass(frozen=True)
class EmployeeForm:
    """Form buffer. Values are kept as entered; dates as YYYY-MM-DD strings."""
    id: str = ""
    name: str = ""
    email: str = ""
    position: str = ""
    department: str = ""
    gender: str = ""
    date_of_joining: str = ""
    photo: str = ""
    resume: str = ""
    resume_name: str = ""
    # display only, never sent
    photo_name: str = ""

    REQUIRED_FIELDS: ClassVar[tuple[str, ...]] = (
        "id", "name", "email", "position", "department", "gender", "date_of_joining",
    )
    WIRE_NAMES: ClassVar[dict[str, str]] = {
        "id": "id",
        "name": "name",
        "email": "email",
        "position": "position",
        "department": "department",
        "gender": "gender",
        "date_of_joining": "dateOfJoining",
        "photo": "photo",
        "resume": "resume",
        "resume_name": "resumeName",
    }

    def missing_fields(self) -> list[str]:
        return [f for f in self.REQUIRED_FIELDS if not getattr(self, f)]

    def to_payload(self) -> dict[str, str]:
        """Wire body for add/update. Empty attachment fields are left out."""
        payload = {}
        for attr, wire in self.WIRE_NAMES.items():
            value = getattr(self, attr)
            if value or attr in self.REQUIRED_FIELDS:
                payload[wire] = value
        return payload

    @classmethod
    def from_record(cls, record: Record) -> "EmployeeForm":
        values: dict[str, str] = {}
        for attr, wire in cls.WIRE_NAMES.items():
            raw = record.get(wire)
            values[attr] = "" if raw is None else str(raw)
        values["date_of_joining"] = values["date_of_joining"][:10]
        return cls(**values)


@dataclass(frozen=True)
class DashboardState:
    records: tuple[Record, ...] = ()
    filters: FilterState = field(default_factory=FilterState)
    search_query: str = ""
    sort: SortConfig = field(default_factory=SortConfig)
    form: EmployeeForm = field(default_factory=EmployeeForm)
    mode: FormMode = FormMode.CREATE
    form_error: str = ""
    dark_mode: bool = False

    @property
    def is_editing(self) -> bool:
        return self.mode is FormMode.EDIT


# ─── Actions ─────────────────────────────────────────────────────

@dataclass(frozen=True)
class RecordsLoaded:
    records: tuple[Record, ...]


@dataclass(frozen=True)
class RecordsFailed:
    pass


@dataclass(frozen=True)
class FilterChanged:
    field: str
    value: str


@dataclass(frozen=True)
class FiltersCleared:
    pass


@dataclass(frozen=True)
class SearchChanged:
    query: str


@dataclass(frozen=True)
class SortRequested:
    key: str


@dataclass(frozen=True)
class FormFieldChanged:
    field: str
    value: str


@dataclass(frozen=True)
class AttachmentLoaded:
    kind: AttachmentKind
    data_url: str
    filename: str


@dataclass(frozen=True)
class EditRequested:
    record: Record


@dataclass(frozen=True)
class FormCancelled:
    pass


@dataclass(frozen=True)
class SubmitStarted:
    pass


@dataclass(frozen=True)
class SubmitRejected:
    message: str


@dataclass(frozen=True)
class SubmitSucceeded:
    pass


@dataclass(frozen=True)
class RecordDeleted:
    employee_id: str


@dataclass(frozen=True)
class ThemeToggled:
    pass


# ─── Reducer ─────────────────────────────────────────────────────

_Handler = Callable[[DashboardState, Any], DashboardState]
_HANDLERS: dict[type, _Handler] = {}


def _handles(action_type: type) -> Callable[[_Handler], _Handler]:
    def register(fn: _Handler) -> _Handler:
        _HANDLERS[action_type] = fn
        return fn
    return register


def reduce(state: DashboardState, action: object) -> DashboardState:
    """Advance state by one action. Unknown action types raise TypeError."""
    handler = _HANDLERS.get(type(action))
    if handler is None:
        raise TypeError(f"Unknown dashboard action: {type(action).__name__}")
    return handler(state, action)


def _reset_form(state: DashboardState) -> DashboardState:
    return replace(state, form=EmployeeForm(), mode=FormMode.CREATE, form_error="")


@_handles(RecordsLoaded)
def _records_loaded(state: DashboardState, action: RecordsLoaded) -> DashboardState:
    return replace(state, records=tuple(action.records))


@_handles(RecordsFailed)
def _records_failed(state: DashboardState, action: RecordsFailed) -> DashboardState:
    return replace(state, records=())


@_handles(FilterChanged)
def _filter_changed(state: DashboardState, action: FilterChanged) -> DashboardState:
    attr = _filter_attr(action.field)
    return replace(state, filters=replace(state.filters, **{attr: action.value}))


def _filter_attr(name: str) -> str:
    if name in FilterState.WIRE_NAMES:
        return name
    for attr, wire in FilterState.WIRE_NAMES.items():
        if wire == name:
            return attr
    raise ValueError(f"Unknown filter field: {name}")


@_handles(FiltersCleared)
def _filters_cleared(state: DashboardState, action: FiltersCleared) -> DashboardState:
    return replace(state, filters=FilterState())


@_handles(SearchChanged)
def _search_changed(state: DashboardState, action: SearchChanged) -> DashboardState:
    return replace(state, search_query=action.query)


@_handles(SortRequested)
def _sort_requested(state: DashboardState, action: SortRequested) -> DashboardState:
    return replace(state, sort=next_sort_config(state.sort, action.key))


@_handles(FormFieldChanged)
def _form_field_changed(state: DashboardState, action: FormFieldChanged) -> DashboardState:
    if action.field not in {f.name for f in fields(EmployeeForm)}:
        raise ValueError(f"Unknown form field: {action.field}")
    if action.field == "id" and state.is_editing:
        return state
    return replace(state, form=replace(state.form, **{action.field: action.value}))


@_handles(AttachmentLoaded)
def _attachment_loaded(state: DashboardState, action: AttachmentLoaded) -> DashboardState:
    if action.kind is AttachmentKind.PHOTO:
        form = replace(state.form, photo=action.data_url, photo_name=action.filename)
    else:
        form = replace(state.form, resume=action.data_url, resume_name=action.filename)
    return replace(state, form=form)


@_handles(EditRequested)
def _edit_requested(state: DashboardState, action: EditRequested) -> DashboardState:
    return replace(
        state,
        form=EmployeeForm.from_record(action.record),
        mode=FormMode.EDIT,
        form_error="",
    )


@_handles(FormCancelled)
def _form_cancelled(state: DashboardState, action: FormCancelled) -> DashboardState:
    return _reset_form(state)


@_handles(SubmitStarted)
def _submit_started(state: DashboardState, action: SubmitStarted) -> DashboardState:
    return replace(state, form_error="")


@_handles(SubmitRejected)
def _submit_rejected(state: DashboardState, action: SubmitRejected) -> DashboardState:
    return replace(state, form_error=action.message)


@_handles(SubmitSucceeded)
def _submit_succeeded(state: DashboardState, action: SubmitSucceeded) -> DashboardState:
    return _reset_form(state)


@_handles(RecordDeleted)
def _record_deleted(state: DashboardState, action: RecordDeleted) -> DashboardState:
    if state.form.id == action.employee_id:
        return _reset_form(state)
    return state


@_handles(ThemeToggled)
def _theme_toggled(state: DashboardState, action: ThemeToggled) -> DashboardState:
    return replace(state, dark_mode=not state.dark_mode)


# ─── View ────────────────────────────────────────────────────────

@dataclass(frozen=True)
class DashboardView:
    rows: list[Record]
    department_counts: dict[str, int]
    department_colors: dict[str, str]
    pie_data: dict
    mode: FormMode
    form: EmployeeForm
    form_error: str
    sort: SortConfig
    columns: tuple[str, ...] = TABLE_COLUMNS
    department_options: tuple[str, ...] = DEPARTMENT_OPTIONS
    gender_options: tuple[str, ...] = GENDER_OPTIONS

    @property
    def is_empty(self) -> bool:
        return not self.rows

    @property
    def id_locked(self) -> bool:
        return self.mode is FormMode.EDIT

    def sort_indicator(self, column: str) -> str | None:
        """Arrow direction shown next to the active sortable column, if any."""
        if column != self.sort.key or not is_sortable(column):
            return None
        return self.sort.direction.value


def build_view(state: DashboardState) -> DashboardView:
    """Derive everything the dashboard renders from state alone."""
    counts = department_counts(state.records)
    colors = department_colors(counts)
    rows = sort_records(search_records(state.records, state.search_query), state.sort)
    return DashboardView(
        rows=rows,
        department_counts=counts,
        department_colors=colors,
        pie_data=build_pie_data(counts, colors, state.dark_mode),
        mode=state.mode,
        form=state.form,
        form_error=state.form_error,
        sort=state.sort,
    )


def to_data_url(content: bytes, mime_type: str) -> str:
    """Inline an uploaded file the way the browser's FileReader does."""
    encoded = base64.b64encode(content).decode("ascii")
    return f"data:{mime_type};base64,{encoded}"
