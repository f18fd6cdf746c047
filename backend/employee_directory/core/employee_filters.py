"""Employee Filters — pure normalisation of list-query parameters into a filter value.

Invariants:
    - Empty or absent department/gender impose no constraint
    - The join-date range applies only when BOTH bounds parse into calendar dates
    - An invalid or one-sided range is dropped, never raised
    - Bounds are inclusive; a start after the end is kept as given (empty result)

Design Decisions:
    - Pure function returning a frozen value: the service layer owns the SQL translation
    - Datetime inputs contribute their date part only (join date is a calendar date)
"""

from dataclasses import dataclass
from datetime import date, datetime

SLASH_DATE_FORMAT = "%Y/%m/%d"


@dataclass(frozen=True)
class EmployeeFilter:
    """Normalised list filter. None means unconstrained."""
    department: str | None = None
    gender: str | None = None
    joined_from: date | None = None
    joined_to: date | None = None

    @property
    def has_date_range(self) -> bool:
        return self.joined_from is not None and self.joined_to is not None

    @property
    def is_unconstrained(self) -> bool:
        return not (self.department or self.gender or self.has_date_range)


def parse_filter_date(raw: str | None) -> date | None:
    """Parse an ISO date or datetime, or a YYYY/MM/DD date. Returns None when unparseable.

    Locale forms such as "01/15/2024" or "Jan 15 2024" are not accepted.
    """
    if not raw or not raw.strip():
        return None
    value = raw.strip()
    try:
        return date.fromisoformat(value)
    except ValueError:
        pass
    try:
        # fromisoformat only learned the trailing "Z" in 3.11
        return datetime.fromisoformat(value.replace("Z", "+00:00")).date()
    except ValueError:
        pass
    try:
        return datetime.strptime(value, SLASH_DATE_FORMAT).date()
    except ValueError:
        return None


def build_employee_filter(
    department: str | None = None,
    gender: str | None = None,
    start_date: str | None = None,
    end_date: str | None = None,
) -> EmployeeFilter:
    """Build the list filter from raw query parameters. Pure, never raises."""
    joined_from = joined_to = None
    if start_date and end_date:
        start = parse_filter_date(start_date)
        end = parse_filter_date(end_date)
        if start is not None and end is not None:
            joined_from, joined_to = start, end

    return EmployeeFilter(
        department=department or None,
        gender=gender or None,
        joined_from=joined_from,
        joined_to=joined_to,
    )


def describe_filter(criteria: EmployeeFilter) -> dict:
    """Flat, JSON-safe view of the filter for structured logs."""
    return {
        "department": criteria.department,
        "gender": criteria.gender,
        "joined_from": criteria.joined_from.isoformat() if criteria.joined_from else None,
        "joined_to": criteria.joined_to.isoformat() if criteria.joined_to else None,
    }
