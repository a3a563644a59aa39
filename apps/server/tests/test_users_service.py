"""Tests for the user service helpers."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from marketplace.models.user import UserRole
from marketplace.services.exceptions import (
    AccountDeactivatedError,
    AccountSuspendedError,
    InvalidCredentialsError,
    UserEmailAlreadyExistsError,
)
from marketplace.services.users import (
    authenticate_user,
    create_user,
    ensure_admin_user,
    get_paginated_users,
    get_user_by_email,
    get_user_by_id,
)


def test_create_user_normalizes_email_and_hashes_password(db_session) -> None:
    user = create_user(db_session, "  New.User@Example.com ", "password123", full_name="New User")

    assert user.email == "new.user@example.com"
    assert user.role is UserRole.RENTER
    assert user.hashed_password != "password123"
    assert get_user_by_email(db_session, "NEW.USER@example.com").id == user.id


def test_create_user_rejects_duplicate_email(db_session) -> None:
    create_user(db_session, "dup@example.com", "password123")

    with pytest.raises(UserEmailAlreadyExistsError):
        create_user(db_session, "DUP@example.com", "password123")


def test_get_user_by_id_ignores_malformed_ids(db_session, renter_user) -> None:
    assert get_user_by_id(db_session, renter_user.id).email == "renter@example.com"
    assert get_user_by_id(db_session, str(renter_user.id)).id == renter_user.id
    assert get_user_by_id(db_session, "nope") is None


def test_ensure_admin_user_creates_account(db_session) -> None:
    user, created = ensure_admin_user(db_session, "ops@example.com", "password123", full_name="Ops")

    assert created is True
    assert user.role is UserRole.ADMIN
    assert user.full_name == "Ops"


def test_ensure_admin_user_promotes_existing_account(db_session, renter_user) -> None:
    user, created = ensure_admin_user(db_session, "renter@example.com")

    assert created is False
    assert user.id == renter_user.id
    assert user.role is UserRole.ADMIN


def test_ensure_admin_user_requires_password_for_new_account(db_session) -> None:
    with pytest.raises(ValueError):
        ensure_admin_user(db_session, "nobody@example.com")


def test_authenticate_user_records_login_time(db_session, make_user) -> None:
    make_user("login@example.com", password="password123")

    user = authenticate_user(db_session, "login@example.com", "password123")

    assert user.last_login_at is not None


@pytest.mark.parametrize(
    ("kwargs", "error"),
    [
        ({"is_active": False}, AccountDeactivatedError),
        ({"is_suspended": True}, AccountSuspendedError),
    ],
)
def test_authenticate_user_rejects_blocked_accounts(db_session, make_user, kwargs, error) -> None:
    make_user("blocked@example.com", password="password123", **kwargs)

    with pytest.raises(error):
        authenticate_user(db_session, "blocked@example.com", "password123")


def test_authenticate_user_rejects_bad_credentials(db_session, make_user) -> None:
    make_user("someone@example.com", password="password123")

    with pytest.raises(InvalidCredentialsError):
        authenticate_user(db_session, "someone@example.com", "nope")
    with pytest.raises(InvalidCredentialsError):
        authenticate_user(db_session, "missing@example.com", "password123")


def test_get_paginated_users_orders_and_pages(db_session, make_user) -> None:
    base = datetime(2025, 1, 1, tzinfo=timezone.utc)
    for index in range(3):
        user = make_user(f"user{index}@example.com")
        user.created_at = base + timedelta(hours=index)
    db_session.commit()

    first_page, total = get_paginated_users(db_session, page=1, limit=2)
    second_page, _ = get_paginated_users(db_session, page=2, limit=2)

    assert total == 3
    assert [u.email for u in first_page] == ["user2@example.com", "user1@example.com"]
    assert [u.email for u in second_page] == ["user0@example.com"]


def test_get_paginated_users_search_matches_full_name(db_session, make_user) -> None:
    make_user("a@example.com", full_name="Grace Hopper")
    make_user("b@example.com", full_name="Ada Lovelace")

    users, total = get_paginated_users(db_session, search="hopper")

    assert total == 1
    assert users[0].email == "a@example.com"
