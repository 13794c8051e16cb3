"""Engine and session construction. No module-level engine; the app factory owns both."""

from sqlalchemy import Engine, create_engine, event
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from dashboard.core.config import Settings


def _is_sqlite(url: str) -> bool:
    return url.startswith("sqlite://")


def _is_sqlite_memory(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def _enable_sqlite_foreign_keys(dbapi_connection, _connection_record) -> None:
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(settings: Settings) -> Engine:
    """Create an engine for DATABASE_URL (SQLite gets FK enforcement and thread-safe connect args)."""
    url = settings.DATABASE_URL
    if not _is_sqlite(url):
        return create_engine(url, pool_pre_ping=True, echo=settings.DEBUG)

    kwargs: dict = {"connect_args": {"check_same_thread": False}, "echo": settings.DEBUG}
    if _is_sqlite_memory(url):
        # One shared connection so every thread sees the same in-memory database.
        kwargs["poolclass"] = StaticPool
    engine = create_engine(url, **kwargs)
    event.listen(engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def build_session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)
