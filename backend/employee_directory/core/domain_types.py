"""Domain Types — identity types, enums and fixed vocabularies shared by service and dashboard.

Invariants:
    - EmployeeId is the business identifier, never the internal storage key
    - NON_SORTABLE_COLUMNS is the single source of truth for unsortable table columns
    - DEPARTMENT_PALETTE order defines cyclic colour assignment

Design Decisions:
    - NewType over wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

EmployeeId = NewType("EmployeeId", str)


# ─── Enums ───────────────────────────────────────────────────────

class SortDirection(str, Enum):
    ASC = "asc"
    DESC = "desc"


class FormMode(str, Enum):
    """Dashboard form modes. CREATE leaves id editable, EDIT locks it."""
    CREATE = "create"
    EDIT = "edit"


class AttachmentKind(str, Enum):
    PHOTO = "photo"
    RESUME = "resume"


# ─── Vocabularies ────────────────────────────────────────────────

# Offered by the dashboard form; the service accepts any non-empty string.
DEPARTMENT_OPTIONS: tuple[str, ...] = ("Product", "Marketing", "Design", "HR", "Developer")
GENDER_OPTIONS: tuple[str, ...] = ("Male", "Female", "Other")

TABLE_COLUMNS: tuple[str, ...] = (
    "photo", "id", "name", "email", "position",
    "department", "gender", "dateOfJoining", "resume", "actions",
)
NON_SORTABLE_COLUMNS: frozenset[str] = frozenset({"photo", "resume", "actions"})

DEPARTMENT_PALETTE: tuple[str, ...] = (
    "#0d6efd", "#198754", "#ffc107", "#dc3545", "#6f42c1", "#0dcaf0",
)
