from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError

from marketplace.db import session


def test_get_db_yields_session_and_closes(monkeypatch):
    closed = False

    class DummySession:
        def close(self):
            nonlocal closed
            closed = True

    monkeypatch.setattr(session, "SessionLocal", lambda: DummySession())

    generator = session.get_db()
    produced_session = next(generator)
    assert isinstance(produced_session, DummySession)

    with pytest.raises(StopIteration):
        next(generator)

    assert closed, "Session should be closed after generator exits"


def test_verify_connection_executes_health_query(monkeypatch):
    executed = SimpleNamespace(value=False)

    class DummyConnection:
        def execute(self, statement):
            executed.value = True
            assert "SELECT 1" in str(statement)

    class DummyConnectionManager:
        def __enter__(self):
            return DummyConnection()

        def __exit__(self, *exc):
            return False

    class DummyEngine:
        def connect(self):
            return DummyConnectionManager()

    monkeypatch.setattr(session, "engine", DummyEngine())

    session.verify_connection()

    assert executed.value is True


def test_verify_connection_retries_then_succeeds(monkeypatch):
    attempts = SimpleNamespace(count=0)
    sleeps = []

    class FlakyEngine:
        def connect(self):
            attempts.count += 1
            if attempts.count < 3:
                raise OperationalError("SELECT 1", {}, Exception("not ready"))
            return DummyConnectionManager()

    class DummyConnectionManager:
        def __enter__(self):
            return SimpleNamespace(execute=lambda statement: None)

        def __exit__(self, *exc):
            return False

    monkeypatch.setattr(session, "engine", FlakyEngine())
    monkeypatch.setattr(session.time, "sleep", sleeps.append)

    session.verify_connection(max_attempts=5, delay_seconds=0.5)

    assert attempts.count == 3
    assert sleeps == [0.5, 1.0]


def test_verify_connection_raises_after_max_attempts(monkeypatch):
    class DeadEngine:
        def connect(self):
            raise OperationalError("SELECT 1", {}, Exception("down"))

    monkeypatch.setattr(session, "engine", DeadEngine())
    monkeypatch.setattr(session.time, "sleep", lambda _seconds: None)

    with pytest.raises(OperationalError):
        session.verify_connection(max_attempts=2, delay_seconds=0)


def test_verify_connection_defaults_come_from_settings(monkeypatch):
    attempts = SimpleNamespace(count=0)
    sleeps = []

    class DeadEngine:
        def connect(self):
            attempts.count += 1
            raise OperationalError("SELECT 1", {}, Exception("down"))

    monkeypatch.setattr(session, "engine", DeadEngine())
    monkeypatch.setattr(session.time, "sleep", sleeps.append)
    monkeypatch.setattr(session.settings, "db_connect_max_attempts", 3)
    monkeypatch.setattr(session.settings, "db_connect_retry_delay", 2.0)

    with pytest.raises(OperationalError):
        session.verify_connection()

    assert attempts.count == 3
    assert sleeps == [2.0, 4.0]


def test_session_scope_closes_session(monkeypatch):
    closed = SimpleNamespace(value=False)

    class DummySession:
        def close(self):
            closed.value = True

    monkeypatch.setattr(session, "SessionLocal", lambda: DummySession())

    with session.session_scope() as produced_session:
        assert isinstance(produced_session, DummySession)
        assert closed.value is False

    assert closed.value is True
