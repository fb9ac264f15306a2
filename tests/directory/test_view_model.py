"""Tests for the directory view model pipeline."""

import math
import uuid
from datetime import UTC, datetime

import pytest
from hypothesis import given
from hypothesis import strategies as st

from peopledir.directory.view_model import (
    DirectoryState,
    SortDirection,
    SortSpec,
    derive,
    filter_by_role,
    filter_by_teams,
    next_sort,
    page_count,
    paginate,
    search_records,
    sort_records,
)
from peopledir.user.models import Role, Team
from peopledir.user.schemas import UserRead

ROLES = [role.value for role in Role]
TEAMS = [team.value for team in Team]

A = {"name": "A", "email": "a@x.com", "role": "Product Designer", "teams": ["Design"]}
B = {
    "name": "B",
    "email": "b@x.com",
    "role": "Backend Developer",
    "teams": ["Design", "Technology"],
}

records_strategy = st.lists(
    st.fixed_dictionaries(
        {
            "name": st.text(max_size=8),
            "email": st.text(max_size=8),
            "role": st.sampled_from(ROLES),
            "teams": st.lists(st.sampled_from(TEAMS), unique=True, max_size=3),
        }
    ),
    max_size=30,
)


SEARCHABLE_KEYS = ("name", "email", "role")


def _contains(record, term: str) -> bool:
    # Only the string-valued keys of the generated records; teams is a list.
    needle = term.casefold()
    return any(needle in record[key].casefold() for key in SEARCHABLE_KEYS)


# --- search / filters ---


@given(records_strategy, st.text(max_size=3))
def test_search_keeps_exactly_matching_records(records, term):
    result = search_records(records, term)

    assert all(_contains(r, term) for r in result)
    assert len(result) == sum(1 for r in records if _contains(r, term))


def test_search_is_case_insensitive():
    assert search_records([A, B], "A@X") == [A]


def test_search_empty_term_keeps_all():
    assert search_records([A, B], "") == [A, B]


@given(records_strategy, st.sets(st.sampled_from(ROLES)))
def test_role_filter(records, roles):
    result = filter_by_role(records, roles)

    if roles:
        assert all(r["role"] in roles for r in result)
        assert len(result) == sum(1 for r in records if r["role"] in roles)
    else:
        assert result == records


@given(records_strategy, st.sets(st.sampled_from(TEAMS)))
def test_team_filter(records, teams):
    result = filter_by_teams(records, teams)

    if teams:
        assert all(set(r["teams"]) & teams for r in result)
        assert len(result) == sum(1 for r in records if set(r["teams"]) & teams)
    else:
        assert result == records


def test_filters_accept_enum_members():
    assert filter_by_role([A, B], [Role.backend_developer]) == [B]
    assert filter_by_teams([A, B], [Team.technology]) == [B]


def test_directory_scenario():
    """Search, team and role filters against the two-record directory."""
    state = DirectoryState()
    state.set_search("a@x")
    assert derive([A, B], state).rows == [A]

    state = DirectoryState(teams=frozenset({"Technology"}))
    assert derive([A, B], state).rows == [B]

    state = DirectoryState(roles=frozenset({"Product Designer"}))
    assert derive([A, B], state).rows == [A]


def test_pipeline_works_on_user_read_records():
    now = datetime.now(UTC)
    users = [
        UserRead(
            id=uuid.uuid4(),
            created_at=now,
            updated_at=now,
            work_email=f"{r['name'].lower()}.work@x.com",
            gender="Other",
            nationality="British",
            contact=1234567890,
            status="Active",
            **r,
        )
        for r in (A, B)
    ]

    state = DirectoryState(teams=frozenset({Team.technology}))

    assert [u.name for u in derive(users, state).rows] == ["B"]


# --- sorting ---


def test_next_sort_toggles_same_column():
    first = next_sort(None, "name")
    second = next_sort(first, "name")

    assert first == SortSpec("name", SortDirection.asc)
    assert second.descending
    assert next_sort(second, "name") == first
    assert next_sort(second, "email") == SortSpec("email")


@given(records_strategy)
def test_sort_toggle_reverses_order_of_distinct_keys(records):
    asc = sort_records(records, SortSpec("role"))
    desc = sort_records(records, SortSpec("role").toggled())

    assert [r["role"] for r in desc] == [r["role"] for r in reversed(asc)]


def test_sort_is_stable():
    c = {**A, "name": "C"}
    result = sort_records([A, B, c], SortSpec("role"))

    assert result == [B, A, c]
    assert sort_records([A, B, c], SortSpec("role").toggled()) == [A, c, B]


def test_sort_missing_values_last():
    no_name = {**B, "name": None}

    assert sort_records([no_name, A], SortSpec("name")) == [A, no_name]
    assert sort_records([no_name, A], SortSpec("name").toggled()) == [A, no_name]


def test_sort_none_keeps_order():
    assert sort_records([B, A], None) == [B, A]


# --- pagination ---


@given(st.integers(min_value=0, max_value=500), st.integers(min_value=1, max_value=50))
def test_page_count(total, size):
    assert page_count(total, size) == math.ceil(total / size)


def test_page_count_rejects_non_positive_size():
    with pytest.raises(ValueError):
        page_count(10, 0)


@given(st.lists(st.integers(), max_size=60), st.integers(min_value=1, max_value=12))
def test_pages_cover_records_in_order(records, size):
    pages = page_count(len(records), size)
    rows = []
    for index in range(pages):
        page = paginate(records, index, size)
        assert 0 < len(page.rows) <= size
        rows.extend(page.rows)

    assert rows == records


def test_paginate_clamps_index():
    page = paginate(list(range(25)), 7, 10)

    assert page.page_index == 2
    assert page.rows == [20, 21, 22, 23, 24]
    assert page.has_previous
    assert not page.has_next


def test_paginate_empty():
    page = paginate([], 3, 10)

    assert page.page_index == 0
    assert page.page_count == 0
    assert page.rows == []
    assert not page.has_previous
    assert not page.has_next


# --- state ---


def test_filter_changes_reset_page_index():
    state = DirectoryState(page_index=3)
    state.set_search("a")
    assert state.page_index == 0

    state.go_to_page(2)
    state.toggle_role(Role.product_manager)
    assert state.roles == {"Product Manager"}
    assert state.page_index == 0

    state.go_to_page(2)
    state.toggle_team("Design")
    assert state.page_index == 0

    state.go_to_page(2)
    state.set_page_size(25)
    assert state.page_index == 0


def test_unchanged_filters_keep_page_index():
    state = DirectoryState(search="a", page_index=2)
    state.set_search("a")
    state.set_roles([])
    state.set_page_size(10)

    assert state.page_index == 2


def test_sort_change_keeps_page_index():
    state = DirectoryState(page_index=1)
    state.sort_by("name")

    assert state.page_index == 1
    assert state.sort == SortSpec("name")


def test_toggle_twice_clears_selection():
    state = DirectoryState()
    state.toggle_team(Team.design)
    state.toggle_team(Team.design)

    assert state.teams == frozenset()


def test_clear_filters():
    state = DirectoryState(search="x", roles={"Backend Developer"}, teams={"Design"})
    state.clear_filters()

    assert (state.search, state.roles, state.teams) == ("", frozenset(), frozenset())


def test_page_navigation_is_clamped_by_derive():
    records = [{"name": str(i)} for i in range(15)]
    state = DirectoryState(page_size=10)

    state.previous_page()
    assert state.page_index == 0

    state.next_page()
    state.next_page()
    page = derive(records, state)
    assert page.page_index == 1
    assert state.page_index == 1
    assert len(page.rows) == 5


def test_derive_clamps_after_records_shrink():
    state = DirectoryState(page_size=1, page_index=1)
    assert derive([A, B], state).rows == [B]

    assert derive([A], state).rows == [A]
    assert state.page_index == 0


def test_state_rejects_non_positive_page_size():
    with pytest.raises(ValueError):
        DirectoryState(page_size=0)
    with pytest.raises(ValueError):
        DirectoryState().set_page_size(0)
