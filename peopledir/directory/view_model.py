"""Directory view model.

Derives the rows shown in the people table from the full record list and
the current table state. Stages run in a fixed order:

    search -> role filter -> team filter -> sort -> paginate

Records may be pydantic models (e.g. UserRead) or plain mappings. Enum
values are compared by their value text.

Page index policy: any change to the search term, the role or team
selection, or the page size moves the view back to the first page.
"""

from __future__ import annotations

import math
from collections.abc import Collection, Iterable, Mapping, Sequence
from dataclasses import dataclass, field, replace
from datetime import date, datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel

DEFAULT_PAGE_SIZE = 10


class SortDirection(str, Enum):
    asc = "asc"
    desc = "desc"


@dataclass(frozen=True)
class SortSpec:
    """Active sort column and direction."""

    column: str
    direction: SortDirection = SortDirection.asc

    @property
    def descending(self) -> bool:
        return self.direction is SortDirection.desc

    def toggled(self) -> SortSpec:
        direction = SortDirection.asc if self.descending else SortDirection.desc
        return replace(self, direction=direction)


def next_sort(current: SortSpec | None, column: str) -> SortSpec:
    """Sort spec after clicking a column header.

    Clicking the active column toggles its direction; any other column
    becomes active in ascending order.
    """
    if current is not None and current.column == column:
        return current.toggled()
    return SortSpec(column=column)


def _fields(record: Any) -> dict[str, Any]:
    if isinstance(record, BaseModel):
        return {name: getattr(record, name) for name in type(record).model_fields}
    if isinstance(record, Mapping):
        return dict(record)
    raise TypeError(f"Unsupported record type: {type(record).__name__}")


def _text(value: Any) -> Any:
    """Enum members become their value; everything else is unchanged."""
    return value.value if isinstance(value, Enum) else value


def string_values(record: Any) -> list[str]:
    """Values of the record's string-valued fields (enum values included)."""
    values = []
    for value in _fields(record).values():
        value = _text(value)
        if isinstance(value, str):
            values.append(value)
    return values


def search_records(records: Iterable[Any], term: str) -> list[Any]:
    """Keep records where any string field contains term, ignoring case."""
    records = list(records)
    needle = term.casefold()
    if not needle:
        return records
    return [
        record
        for record in records
        if any(needle in value.casefold() for value in string_values(record))
    ]


def _selection(values: Collection[Any]) -> set[Any]:
    return {_text(value) for value in values}


def filter_by_role(records: Iterable[Any], roles: Collection[Any]) -> list[Any]:
    """Keep records whose role is selected; an empty selection keeps all."""
    records = list(records)
    if not roles:
        return records
    selected = _selection(roles)
    return [r for r in records if _text(_fields(r).get("role")) in selected]


def filter_by_teams(records: Iterable[Any], teams: Collection[Any]) -> list[Any]:
    """Keep records in at least one selected team; an empty selection keeps all."""
    records = list(records)
    if not teams:
        return records
    selected = _selection(teams)
    return [
        r
        for r in records
        if selected.intersection(_text(t) for t in _fields(r).get("teams") or ())
    ]


def _sort_key(value: Any) -> Any:
    value = _text(value)
    if isinstance(value, str):
        return value.casefold()
    if isinstance(value, list | tuple | set | frozenset):
        return ", ".join(str(_text(item)) for item in value).casefold()
    if isinstance(value, date | datetime | int | float):
        return value
    return str(value)


def sort_records(records: Iterable[Any], sort: SortSpec | None) -> list[Any]:
    """Stable sort by one column; records missing the value go last."""
    records = list(records)
    if sort is None:
        return records

    present = []
    missing = []
    for record in records:
        value = _fields(record).get(sort.column)
        if value is None:
            missing.append(record)
        else:
            present.append((_sort_key(value), record))

    # sorted() with reverse=True keeps equal items in their original order.
    present.sort(key=lambda pair: pair[0], reverse=sort.descending)
    return [record for _, record in present] + missing


def page_count(total: int, page_size: int) -> int:
    if page_size < 1:
        raise ValueError("page_size must be positive")
    return math.ceil(total / page_size)


def clamp_page(page_index: int, pages: int) -> int:
    return min(max(page_index, 0), max(pages - 1, 0))


@dataclass(frozen=True)
class DirectoryPage:
    """One page of derived rows plus the numbers a pager needs."""

    rows: list[Any]
    page_index: int
    page_count: int
    page_size: int
    total: int

    @property
    def has_previous(self) -> bool:
        return self.page_index > 0

    @property
    def has_next(self) -> bool:
        return self.page_index + 1 < self.page_count


def paginate(records: Sequence[Any], page_index: int, page_size: int) -> DirectoryPage:
    pages = page_count(len(records), page_size)
    index = clamp_page(page_index, pages)
    start = index * page_size
    return DirectoryPage(
        rows=list(records[start : start + page_size]),
        page_index=index,
        page_count=pages,
        page_size=page_size,
        total=len(records),
    )


@dataclass
class DirectoryState:
    """Table state controlled by the user."""

    search: str = ""
    roles: frozenset[str] = field(default_factory=frozenset)
    teams: frozenset[str] = field(default_factory=frozenset)
    sort: SortSpec | None = None
    page_index: int = 0
    page_size: int = DEFAULT_PAGE_SIZE

    def __post_init__(self) -> None:
        if self.page_size < 1:
            raise ValueError("page_size must be positive")
        self.roles = frozenset(_selection(self.roles))
        self.teams = frozenset(_selection(self.teams))

    def set_search(self, term: str) -> None:
        if term != self.search:
            self.search = term
            self.page_index = 0

    def set_roles(self, roles: Iterable[Any]) -> None:
        selected = frozenset(_selection(list(roles)))
        if selected != self.roles:
            self.roles = selected
            self.page_index = 0

    def toggle_role(self, role: Any) -> None:
        self.set_roles(self.roles ^ {_text(role)})

    def set_teams(self, teams: Iterable[Any]) -> None:
        selected = frozenset(_selection(list(teams)))
        if selected != self.teams:
            self.teams = selected
            self.page_index = 0

    def toggle_team(self, team: Any) -> None:
        self.set_teams(self.teams ^ {_text(team)})

    def clear_filters(self) -> None:
        self.set_search("")
        self.set_roles(())
        self.set_teams(())

    def sort_by(self, column: str) -> None:
        self.sort = next_sort(self.sort, column)

    def clear_sort(self) -> None:
        self.sort = None

    def set_page_size(self, page_size: int) -> None:
        if page_size < 1:
            raise ValueError("page_size must be positive")
        if page_size != self.page_size:
            self.page_size = page_size
            self.page_index = 0

    def go_to_page(self, page_index: int) -> None:
        self.page_index = max(page_index, 0)

    def next_page(self) -> None:
        self.go_to_page(self.page_index + 1)

    def previous_page(self) -> None:
        self.go_to_page(self.page_index - 1)


def filter_records(records: Iterable[Any], state: DirectoryState) -> list[Any]:
    """Search, role filter and team filter, in that order."""
    matched = search_records(records, state.search)
    matched = filter_by_role(matched, state.roles)
    return filter_by_teams(matched, state.teams)


def derive(records: Iterable[Any], state: DirectoryState) -> DirectoryPage:
    """Run the full pipeline and clamp the state's page index in place."""
    rows = sort_records(filter_records(records, state), state.sort)
    page = paginate(rows, state.page_index, state.page_size)
    state.page_index = page.page_index
    return page
