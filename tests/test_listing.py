"""
Unit tests for list view search, filter and sort.
"""
import uuid
from datetime import datetime, timezone

import pytest

from storerate.core.listing import (
    STORE_SORT_KEYS,
    USER_SORT_KEYS,
    filter_stores,
    filter_users,
    next_sorts,
    search_stores_by,
    sort_records,
    toggle_sort,
)
from storerate.models.store import Store
from storerate.models.user import Role, User
from storerate.schemas.listing import SortConfig


def make_user(name, email, address, role, day):
    return User(
        id=uuid.uuid4(),
        name=name,
        email=email,
        address=address,
        role=role,
        created_at=datetime(2024, 1, day, tzinfo=timezone.utc),
    )


def make_store(name, email, address, average=None, total=None):
    return Store(
        id=uuid.uuid4(),
        name=name,
        email=email,
        address=address,
        average_rating=average,
        total_ratings=total,
    )


@pytest.fixture
def users():
    return [
        make_user("Charlie Brown", "charlie@peanuts.com", "Birchwood Lane", Role.USER, 3),
        make_user("alice Admin", "alice@corp.com", "Oak Street", Role.ADMIN, 1),
        make_user("Bob Baker", "bob@bakery.com", "Main Street", Role.STORE_OWNER, 2),
        make_user("Dana Street", "dana@corp.com", "Hill Road", Role.USER, 4),
    ]


@pytest.fixture
def stores():
    return [
        make_store("Corner Bakery", "hello@bakery.com", "1 Main Street", 4.5, 2),
        make_store("Book Nook", "books@nook.com", "9 Elm Avenue", None, 0),
        make_store("Main Street Deli", "deli@food.com", "3 Harbor Road", 3.0, 5),
    ]


class TestFilterUsers:
    """Search and role filter for the user management list."""

    def test_search_is_case_insensitive_over_name_email_address(self, users):
        result = filter_users(users, "STREET")
        assert {u.name for u in result} == {"alice Admin", "Bob Baker", "Dana Street"}
        for u in result:
            assert any("street" in f.lower() for f in (u.name, u.email, u.address))

    def test_role_filter_narrows_search(self, users):
        result = filter_users(users, "street", "user")
        assert [u.name for u in result] == ["Dana Street"]
        assert all(u.role == Role.USER for u in result)

    def test_all_keeps_every_role(self, users):
        assert filter_users(users, "", "all") == users

    def test_missing_address_does_not_break_search(self):
        user = make_user("Eve", "eve@example.com", None, Role.USER, 5)
        assert filter_users([user], "eve") == [user]
        assert filter_users([user], "lane") == []


class TestFilterStores:
    def test_search_over_name_email_address(self, stores):
        assert [s.name for s in filter_stores(stores, "main street")] == [
            "Corner Bakery",
            "Main Street Deli",
        ]
        assert [s.name for s in filter_stores(stores, "NOOK")] == ["Book Nook"]

    def test_directory_search_uses_one_field(self, stores):
        assert [s.name for s in search_stores_by(stores, "main", "name")] == ["Main Street Deli"]
        assert [s.name for s in search_stores_by(stores, "main", "address")] == ["Corner Bakery"]

    def test_directory_empty_search_returns_everything(self, stores):
        assert search_stores_by(stores, "", "address") == stores


class TestSort:
    def test_ascending_is_non_decreasing(self, users):
        result = sort_records(users, SortConfig(key="email"), USER_SORT_KEYS)
        emails = [u.email for u in result]
        assert emails == sorted(emails)

    def test_descending_reverses_ascending(self, users):
        asc = sort_records(users, SortConfig(key="created_at", direction="asc"), USER_SORT_KEYS)
        desc = sort_records(users, SortConfig(key="created_at", direction="desc"), USER_SORT_KEYS)
        assert desc == list(reversed(asc))

    def test_sort_is_idempotent(self, stores):
        sort = SortConfig(key="average_rating", direction="desc")
        once = sort_records(stores, sort, STORE_SORT_KEYS)
        assert sort_records(once, sort, STORE_SORT_KEYS) == once

    def test_missing_ratings_sort_first(self, stores):
        result = sort_records(stores, SortConfig(key="average_rating"), STORE_SORT_KEYS)
        assert [s.name for s in result] == ["Book Nook", "Main Street Deli", "Corner Bakery"]

    def test_string_sort_is_case_sensitive(self, users):
        result = sort_records(users, SortConfig(key="name"), USER_SORT_KEYS)
        assert result[-1].name == "alice Admin"

    def test_ties_keep_incoming_order(self, users):
        result = sort_records(users, SortConfig(key="role"), USER_SORT_KEYS)
        user_names = [u.name for u in result if u.role == Role.USER]
        assert user_names == ["Charlie Brown", "Dana Street"]

    def test_no_sort_returns_input_order(self, users):
        assert sort_records(users, None, USER_SORT_KEYS) == users

    def test_unknown_key_rejected(self, users):
        with pytest.raises(ValueError):
            sort_records(users, SortConfig(key="password"), USER_SORT_KEYS)


class TestToggleSort:
    def test_first_click_sorts_ascending(self):
        assert toggle_sort(None, "name") == SortConfig(key="name", direction="asc")

    def test_same_column_flips_to_descending(self):
        current = SortConfig(key="name", direction="asc")
        assert toggle_sort(current, "name") == SortConfig(key="name", direction="desc")

    def test_descending_column_goes_back_to_ascending(self):
        current = SortConfig(key="name", direction="desc")
        assert toggle_sort(current, "name").direction == "asc"

    def test_other_column_resets_to_ascending(self):
        current = SortConfig(key="name", direction="desc")
        assert toggle_sort(current, "email") == SortConfig(key="email", direction="asc")

    def test_next_sorts_covers_every_column(self):
        current = SortConfig(key="email", direction="asc")
        hints = next_sorts(current, USER_SORT_KEYS)
        assert set(hints) == set(USER_SORT_KEYS)
        assert hints["email"].direction == "desc"
        assert hints["name"].direction == "asc"
