"""Record Derivation — search, sort and department aggregation over fetched records.

Invariants:
    - Every function is pure: input records are never mutated, new lists are returned
    - Search is a case-insensitive substring match on name, id and email (any-of)
    - Sort compares lower-cased string forms; missing values compare as ""
    - Sorting is stable in both directions
    - Department colours are assigned cyclically from DEPARTMENT_PALETTE in first-seen order

Design Decisions:
    - Records stay as wire-format mappings (camelCase keys), exactly what the API returns
"""

from collections.abc import Iterable, Mapping, Sequence
from dataclasses import dataclass
from typing import Any

from employee_directory.core.domain_types import (
    DEPARTMENT_PALETTE,
    NON_SORTABLE_COLUMNS,
    SortDirection,
)

Record = Mapping[str, Any]

SEARCH_FIELDS: tuple[str, ...] = ("name", "id", "email")

CHART_BORDER_DARK = "#212529"
CHART_BORDER_LIGHT = "#fff"
CHART_BORDER_WIDTH = 4


@dataclass(frozen=True)
class SortConfig:
    key: str | None = "name"
    direction: SortDirection = SortDirection.ASC


def _folded(value: Any) -> str:
    if value is None:
        return ""
    return str(value).lower()


# ─── Search ──────────────────────────────────────────────────────

def matches_query(record: Record, query: str) -> bool:
    needle = query.lower()
    return any(needle in _folded(record.get(f)) for f in SEARCH_FIELDS)


def search_records(records: Iterable[Record], query: str) -> list[Record]:
    """Narrow records by free text. Empty query keeps everything."""
    if not query:
        return list(records)
    return [r for r in records if matches_query(r, query)]


# ─── Sort ────────────────────────────────────────────────────────

def is_sortable(key: str) -> bool:
    return key not in NON_SORTABLE_COLUMNS


def next_sort_config(current: SortConfig, key: str) -> SortConfig:
    """Column selection: same key while ascending flips to descending, anything else resets to ascending."""
    if not is_sortable(key):
        return current
    if current.key == key and current.direction is SortDirection.ASC:
        return SortConfig(key=key, direction=SortDirection.DESC)
    return SortConfig(key=key, direction=SortDirection.ASC)


def sort_records(records: Iterable[Record], config: SortConfig) -> list[Record]:
    if not config.key:
        return list(records)
    key = config.key
    return sorted(
        records,
        key=lambda r: _folded(r.get(key)),
        reverse=config.direction is SortDirection.DESC,
    )


# ─── Aggregation ─────────────────────────────────────────────────

def department_counts(records: Iterable[Record]) -> dict[str, int]:
    """Count records per department, keyed in first-seen order."""
    counts: dict[str, int] = {}
    for record in records:
        dept = record.get("department")
        counts[dept] = counts.get(dept, 0) + 1
    return counts


def department_colors(
    departments: Iterable[str], palette: Sequence[str] = DEPARTMENT_PALETTE,
) -> dict[str, str]:
    colors: dict[str, str] = {}
    for dept in departments:
        if dept not in colors:
            colors[dept] = palette[len(colors) % len(palette)]
    return colors


def build_pie_data(
    counts: Mapping[str, int], colors: Mapping[str, str], dark_mode: bool = False,
) -> dict:
    """Chart.js-shaped pie payload for the department summary."""
    labels = list(counts)
    return {
        "labels": labels,
        "datasets": [
            {
                "data": [counts[d] for d in labels],
                "backgroundColor": [colors[d] for d in labels],
                "borderColor": CHART_BORDER_DARK if dark_mode else CHART_BORDER_LIGHT,
                "borderWidth": CHART_BORDER_WIDTH,
            },
        ],
    }
