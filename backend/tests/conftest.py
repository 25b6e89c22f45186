# Set test environment before any application or db imports.
import os

os.environ["TESTING"] = "true"
os.environ["TESTING_DATABASE_URL"] = "sqlite:///:memory:"
os.environ["STOP_CHARGING_DELAY_S"] = "0"

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from db import engine as app_engine
from db import get_db
from main import app
from models import Base
from models.charging_event import ChargingEvent  # noqa: F401 - register with Base
from models.charging_session import ChargingSession  # noqa: F401
from models.command import Command  # noqa: F401
from models.station import Station  # noqa: F401
from models.station_charger import StationCharger  # noqa: F401
from models.system_log import SystemLog  # noqa: F401


@pytest.fixture(scope="session")
def engine():
    """One in-memory engine per test run; create tables once."""
    Base.metadata.create_all(app_engine)
    return app_engine


@pytest.fixture
def db_session(engine):
    """Function-scoped session inside an outer transaction that is rolled back after the test.

    Repository commits only release a SAVEPOINT, so nothing a test writes survives it.
    """
    connection = engine.connect()
    trans = connection.begin()
    session = Session(bind=connection, join_transaction_mode="create_savepoint")
    try:
        yield session
    finally:
        session.close()
        if trans.is_active:
            trans.rollback()
        connection.close()


def _override_get_db(session):
    """Return a generator that yields the given session (for dependency override)."""
    def override():
        yield session
    return override


@pytest.fixture(autouse=True)
def reset_app_state():
    """Fresh caches and simulators per test so state never leaks between tests."""
    app.state.command_cache.clear()
    app.state.simple_command_cache.clear()
    app.state.simulators.clear()
    yield
    app.state.simulators.clear()


@pytest.fixture
def client(db_session):
    """API test client; overrides get_db to use the test db_session, cleared on teardown."""
    app.dependency_overrides[get_db] = _override_get_db(db_session)
    try:
        with TestClient(app) as c:
            yield c
    finally:
        app.dependency_overrides.clear()
