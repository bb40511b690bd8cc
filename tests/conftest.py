# tests/conftest.py
"""
Shared fixtures for the Booking and Ledger services.

- Both services run against one in-memory SQLite engine (StaticPool, so every
  session sees the same database) injected through dependency_overrides.
- The Booking service's collaborators (Ledger HTTP client, RabbitMQ publisher)
  are replaced by recorders, so tests can assert what would have been sent.
"""

import os

# Must be set before the service modules create their engines at import time.
os.environ["DATABASE_URL"] = "sqlite://"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.pool import StaticPool
from sqlmodel import Session, SQLModel, create_engine

from services.booking import api as booking_api
from services.booking.app import app as booking_app
from services.booking.models import Booking
from services.ledger import app as ledger_module


@pytest.fixture
def engine():
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    SQLModel.metadata.create_all(engine)
    yield engine
    engine.dispose()


@pytest.fixture
def session(engine):
    with Session(engine) as s:
        yield s


def _session_override(engine):
    def get_session():
        with Session(engine) as s:
            yield s
    return get_session


@pytest.fixture
def ledger_calls(monkeypatch):
    """Records consume_credit calls instead of hitting the Ledger over HTTP."""
    calls = []

    def fake_consume(booking, method):
        calls.append({"booking_id": booking.id, "teacher_id": booking.teacher_id, "method": method})
        return {"hoursCredited": booking.duration / 60, "newBalance": 10.0}

    monkeypatch.setattr(booking_api, "consume_credit_safely", fake_consume)
    return calls


@pytest.fixture
def events(monkeypatch):
    """Records published events instead of talking to RabbitMQ."""
    published = []

    def fake_publish(event_type, payload):
        published.append((event_type, payload))
        return True

    monkeypatch.setattr(booking_api, "publish_event_safely", fake_publish)
    return published


@pytest.fixture
def client(engine, ledger_calls, events):
    booking_app.dependency_overrides[booking_api.get_session] = _session_override(engine)
    yield TestClient(booking_app)
    booking_app.dependency_overrides.clear()


@pytest.fixture
def ledger_client(engine):
    ledger_module.app.dependency_overrides[ledger_module.get_session] = _session_override(engine)
    yield TestClient(ledger_module.app)
    ledger_module.app.dependency_overrides.clear()


@pytest.fixture
def make_booking(session):
    """Insert a booking; defaults describe a PAID class between T1 and S1."""

    def _make(**overrides):
        fields = {
            "teacher_id": "T1",
            "student_id": "S1",
            "franchise_id": "F1",
            "status": "PAID",
            "status_canonical": "PAID",
            "duration": 60,
        }
        fields.update(overrides)
        b = Booking(**fields)
        session.add(b)
        session.commit()
        session.refresh(b)
        return b

    return _make