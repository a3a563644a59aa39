"""Shared pytest fixtures for server tests."""

from __future__ import annotations

import asyncio
from collections.abc import Callable, Generator
from typing import Optional

import httpx
import pytest
from sqlalchemy import create_engine
from sqlalchemy.dialects.postgresql import UUID
from sqlalchemy.ext.compiler import compiles
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

import main
from marketplace.api.routes.auth import limiter
from marketplace.core.security import get_password_hash
from marketplace.db.base import Base
from marketplace.db.session import get_db
from marketplace.models.user import User, UserRole
from marketplace.services.sessions import SessionPrincipal, issue_session_token


@compiles(UUID, "sqlite")
def compile_uuid_sqlite(_element, _compiler, **_kw) -> str:
    """Render UUID columns as TEXT for the SQLite test database."""

    return "TEXT"


TEST_DATABASE_URL = "sqlite+pysqlite:///:memory:"

test_engine = create_engine(
    TEST_DATABASE_URL,
    future=True,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(
    bind=test_engine,
    autocommit=False,
    autoflush=False,
    future=True,
)

Base.metadata.create_all(bind=test_engine)


class SyncASGITestClient:
    """Synchronous wrapper around httpx.AsyncClient for ASGI apps."""

    def __init__(self, app) -> None:
        transport = httpx.ASGITransport(app=app)
        self._client = httpx.AsyncClient(transport=transport, base_url="http://testserver")

    def request(self, method: str, url: str, **kwargs) -> httpx.Response:
        return asyncio.run(self._client.request(method, url, **kwargs))

    def get(self, url: str, **kwargs) -> httpx.Response:
        return self.request("GET", url, **kwargs)

    def post(self, url: str, **kwargs) -> httpx.Response:
        return self.request("POST", url, **kwargs)

    def patch(self, url: str, **kwargs) -> httpx.Response:
        return self.request("PATCH", url, **kwargs)

    def __enter__(self) -> "SyncASGITestClient":
        return self

    def __exit__(self, exc_type, exc, traceback) -> None:
        asyncio.run(self._client.aclose())


@pytest.fixture(autouse=True)
def verify_connection_tracker(monkeypatch: pytest.MonkeyPatch) -> Generator[dict[str, int], None, None]:
    """Track how many times the startup connection verifier is called."""

    tracker = {"calls": 0, "migrations": 0}

    def fake_verify_connection() -> None:
        tracker["calls"] += 1

    def fake_run_migrations() -> None:
        tracker["migrations"] += 1

    monkeypatch.setattr(main, "verify_connection", fake_verify_connection)
    monkeypatch.setattr(main, "run_migrations", fake_run_migrations)
    yield tracker


@pytest.fixture(autouse=True)
def reset_rate_limits() -> Generator[None, None, None]:
    """Start every test with empty rate limit counters."""

    limiter.reset()
    yield
    limiter.reset()


@pytest.fixture()
def db_session() -> Generator[Session, None, None]:
    """Provide a clean database session for each test."""

    Base.metadata.drop_all(bind=test_engine)
    Base.metadata.create_all(bind=test_engine)
    session: Session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def session_factory() -> sessionmaker:
    """Session factory bound to the test database, for code that opens its own sessions."""

    return TestingSessionLocal


@pytest.fixture(autouse=True)
def override_get_db(db_session: Session) -> Generator[None, None, None]:
    """Override the FastAPI dependency to use the test session."""

    def _get_db() -> Generator[Session, None, None]:
        try:
            yield db_session
        finally:
            pass

    main.app.dependency_overrides[get_db] = _get_db
    yield
    main.app.dependency_overrides.pop(get_db, None)


@pytest.fixture()
def client() -> Generator[SyncASGITestClient, None, None]:
    """Synchronous test client backed by httpx's ASGI transport."""

    with SyncASGITestClient(main.app) as test_client:
        yield test_client


@pytest.fixture()
def make_user(db_session: Session) -> Callable[..., User]:
    """Factory persisting users; passwords are only hashed when given."""

    def _make_user(
        email: str,
        *,
        role: UserRole = UserRole.RENTER,
        password: Optional[str] = None,
        full_name: Optional[str] = None,
        is_active: bool = True,
        is_suspended: bool = False,
    ) -> User:
        user = User(
            email=email,
            full_name=full_name,
            hashed_password=get_password_hash(password) if password else None,
            role=role,
            is_active=is_active,
            is_suspended=is_suspended,
        )
        db_session.add(user)
        db_session.commit()
        db_session.refresh(user)
        return user

    return _make_user


@pytest.fixture()
def admin_user(make_user) -> User:
    return make_user("admin@example.com", role=UserRole.ADMIN, full_name="Site Admin")


@pytest.fixture()
def other_admin(make_user) -> User:
    return make_user("second-admin@example.com", role=UserRole.ADMIN)


@pytest.fixture()
def renter_user(make_user) -> User:
    return make_user("renter@example.com", role=UserRole.RENTER, full_name="Rita Renter")


@pytest.fixture()
def admin_principal(admin_user: User) -> SessionPrincipal:
    return SessionPrincipal(user_id=admin_user.id, role=UserRole.ADMIN)


@pytest.fixture()
def admin_token(admin_user: User) -> str:
    return issue_session_token(admin_user)


@pytest.fixture()
def renter_token(renter_user: User) -> str:
    return issue_session_token(renter_user)


def auth_headers(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def admin_headers(admin_token: str) -> dict[str, str]:
    return auth_headers(admin_token)


@pytest.fixture()
def renter_headers(renter_token: str) -> dict[str, str]:
    return auth_headers(renter_token)
