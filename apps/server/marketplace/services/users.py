"""Repository helpers for interacting with user records."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from marketplace.core.security import get_password_hash, verify_password
from marketplace.db.repositories import UserRepository
from marketplace.models.user import User, UserRole
from marketplace.services.exceptions import (
    AccountDeactivatedError,
    AccountSuspendedError,
    InvalidCredentialsError,
    UserEmailAlreadyExistsError,
)

logger = logging.getLogger(__name__)


def _normalize_email(email: str) -> str:
    return email.strip().lower()


def get_user_by_email(db: Session, email: str) -> Optional[User]:
    """Fetch a user by email address."""

    return UserRepository(db).get_by_email(_normalize_email(email))


def get_user_by_id(db: Session, user_id: UUID | str) -> Optional[User]:
    """Fetch a user by id; malformed ids return ``None``."""

    return UserRepository(db).get(user_id)


def create_user(
    db: Session,
    email: str,
    password: str,
    *,
    role: UserRole = UserRole.RENTER,
    full_name: Optional[str] = None,
) -> User:
    """Create a new user with hashed password handling duplicates gracefully."""

    normalized_email = _normalize_email(email)
    if get_user_by_email(db, normalized_email) is not None:
        raise UserEmailAlreadyExistsError(normalized_email)

    user = User(
        email=normalized_email,
        full_name=full_name,
        hashed_password=get_password_hash(password),
        role=role,
    )
    db.add(user)
    try:
        db.commit()
    except IntegrityError as exc:
        db.rollback()
        raise UserEmailAlreadyExistsError(normalized_email) from exc

    db.refresh(user)
    return user


def ensure_admin_user(
    db: Session,
    email: str,
    password: Optional[str] = None,
    *,
    full_name: Optional[str] = None,
) -> tuple[User, bool]:
    """Promote an existing account to admin, or create one.

    Returns the user and whether it was newly created. A password is only
    required when the account does not exist yet.
    """

    user = get_user_by_email(db, email)
    if user is None:
        if not password:
            raise ValueError("A password is required to create a new admin account.")
        return create_user(db, email, password, role=UserRole.ADMIN, full_name=full_name), True

    user.role = UserRole.ADMIN
    db.commit()
    db.refresh(user)
    return user, False


def authenticate_user(db: Session, email: str, password: str) -> User:
    """Check credentials and account state, recording the login time."""

    user = get_user_by_email(db, email)
    if user is None or not verify_password(password, user.hashed_password):
        raise InvalidCredentialsError()

    if not user.is_active:
        raise AccountDeactivatedError()

    if user.is_suspended:
        logger.info("Rejected login for suspended user %s", user.id)
        raise AccountSuspendedError()

    user.last_login_at = datetime.now(timezone.utc)
    db.commit()
    db.refresh(user)
    return user


def get_paginated_users(
    db: Session,
    page: int = 1,
    limit: int = 20,
    search: Optional[str] = None,
    role: Optional[UserRole] = None,
    status: Optional[str] = None,
) -> tuple[List[User], int]:
    """
    Get one page of users, newest first, with optional filters.

    Args:
        db: Database session
        page: 1-based page number
        limit: Maximum number of records to return
        search: Optional search string matched against email and full name
        role: Optional role to filter by
        status: Optional account state ('active', 'suspended' or 'inactive')

    Returns:
        Tuple of (list of users, total count)
    """
    offset = (max(page, 1) - 1) * limit
    return UserRepository(db).list_paginated(
        offset=offset,
        limit=limit,
        search=search,
        role=role,
        status=status,
    )


__all__ = [
    "authenticate_user",
    "create_user",
    "ensure_admin_user",
    "get_paginated_users",
    "get_user_by_email",
    "get_user_by_id",
]
