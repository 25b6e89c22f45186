"""Engine and sessions for the charging database (SQLite by default, any SQLAlchemy URL via DATABASE_URL)."""
from collections.abc import Generator

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.engine import make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from utils.config import DATABASE_URL, TESTING

PRODUCTION_SQLITE_FILE = "charging.db"


def check_test_url(url: str) -> None:
    """Under TESTING the URL must be in-memory or name a test database."""
    database = make_url(url).database or ""
    if database.endswith(PRODUCTION_SQLITE_FILE) or (database != ":memory:" and "test" not in database.lower()):
        raise RuntimeError(
            f"Refusing to run tests against {url!r}. Set TESTING_DATABASE_URL to sqlite:///:memory: "
            "or a URL whose database name contains 'test'."
        )


def build_engine(url: str) -> Engine:
    parsed = make_url(url)
    if parsed.get_backend_name() != "sqlite":
        return create_engine(url, pool_pre_ping=True)

    kw: dict = {"connect_args": {"check_same_thread": False}}
    if parsed.database in (None, "", ":memory:"):
        # Every session must see the same in-memory database.
        kw["poolclass"] = StaticPool
    engine = create_engine(url, **kw)

    @event.listens_for(engine, "connect")
    def _sqlite_connect(dbapi_conn, connection_record):
        # Station chargers are deleted with their station.
        dbapi_conn.execute("PRAGMA foreign_keys=ON")
        # pysqlite defers BEGIN on its own; take over so SAVEPOINTs nest inside a real transaction.
        dbapi_conn.isolation_level = None

    @event.listens_for(engine, "begin")
    def _sqlite_begin(conn):
        conn.exec_driver_sql("BEGIN")

    return engine


if TESTING:
    check_test_url(DATABASE_URL)

engine = build_engine(DATABASE_URL)
SessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def get_db() -> Generator[Session, None, None]:
    """Request-scoped session, closed when the response is sent."""
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()
