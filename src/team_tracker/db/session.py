"""Engine, session factory and the unit-of-work boundary."""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from pathlib import Path
from typing import Any, Iterator

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.exc import IntegrityError, OperationalError, SQLAlchemyError
from sqlalchemy.exc import TimeoutError as PoolTimeoutError
from sqlalchemy.orm import Session, sessionmaker

from ..config import settings
from ..errors import Conflict, InternalError, StorageTimeout, TrackerError
from .models import Base

logger = logging.getLogger(__name__)

# Driver messages that mean "gave up waiting" rather than "broken".
_TIMEOUT_MARKERS = (
    "database is locked",
    "database table is locked",
    "canceling statement due to statement timeout",
    "timeout expired",
)

_engine: Engine | None = None
_session_factory: sessionmaker[Session] | None = None
_write_gate = threading.Lock()


def _connect_args(backend: str, timeout: float) -> dict[str, Any]:
    if backend == "sqlite":
        return {"check_same_thread": False, "timeout": timeout}
    if backend == "postgresql":
        return {
            "connect_timeout": max(1, int(timeout)),
            "options": f"-c statement_timeout={int(timeout * 1000)}",
        }
    return {}


def _install_sqlite_transactions(engine: Engine) -> None:
    """Have SQLAlchemy emit BEGIN itself so a unit of work reads one consistent snapshot."""

    @event.listens_for(engine, "connect")
    def _on_connect(dbapi_connection, connection_record) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.execute("PRAGMA journal_mode=WAL")
        cursor.close()

    @event.listens_for(engine, "begin")
    def _on_begin(connection) -> None:
        connection.exec_driver_sql("BEGIN")


def configure_database(url: str | None = None, *, timeout: float | None = None) -> Engine:
    """(Re)create the process-wide engine and session factory."""
    global _engine, _session_factory

    dispose_database()
    database_url = url or settings.database_url
    wait_seconds = timeout if timeout is not None else settings.db_timeout_seconds

    parsed = make_url(database_url)
    backend = parsed.get_backend_name()
    engine_kwargs: dict[str, Any] = {"connect_args": _connect_args(backend, wait_seconds)}
    if backend == "sqlite":
        if parsed.database and parsed.database != ":memory:":
            Path(parsed.database).expanduser().parent.mkdir(parents=True, exist_ok=True)
    else:
        engine_kwargs["pool_timeout"] = wait_seconds
        engine_kwargs["pool_pre_ping"] = True

    engine = create_engine(database_url, **engine_kwargs)
    if backend == "sqlite":
        _install_sqlite_transactions(engine)

    _engine = engine
    _session_factory = sessionmaker(
        bind=engine,
        autoflush=False,
        expire_on_commit=False,
        class_=Session,
    )
    logger.info("Database configured (%s)", parsed.render_as_string(hide_password=True))
    return engine


def get_engine() -> Engine:
    if _engine is None:
        return configure_database()
    return _engine


def init_database() -> None:
    """Create any missing tables."""
    Base.metadata.create_all(get_engine())


def dispose_database() -> None:
    global _engine, _session_factory

    if _engine is not None:
        _engine.dispose()
    _engine = None
    _session_factory = None


def translate_storage_error(exc: SQLAlchemyError) -> TrackerError:
    """Map a SQLAlchemy failure onto the domain error taxonomy."""
    if isinstance(exc, PoolTimeoutError):
        logger.warning("Timed out waiting for a database connection: %s", exc)
        return StorageTimeout("Timed out waiting for a database connection.")
    if isinstance(exc, OperationalError):
        message = str(exc.orig).lower()
        if any(marker in message for marker in _TIMEOUT_MARKERS):
            logger.warning("Database wait exceeded its deadline: %s", exc.orig)
            return StorageTimeout("The database did not respond within the configured timeout.")
    if isinstance(exc, IntegrityError):
        logger.warning("Integrity violation: %s", exc.orig)
        return Conflict("The change conflicts with existing records.")
    logger.error("Unexpected storage failure: %s", exc)
    return InternalError("Unexpected storage failure.")


@contextmanager
def unit_of_work(*, write: bool = False) -> Iterator[Session]:
    """Yield a session scoped to one transaction.

    Write units pass through the process-wide write gate, so mutations are
    serialised, and commit on success. Read units see one snapshot and are
    rolled back on exit. Any failure rolls back everything done inside the
    block before the error propagates.

    Raises:
        StorageTimeout: the write gate or the database did not answer in time.
        Conflict: the commit violated a uniqueness or foreign-key rule.
        InternalError: any other storage failure.
    """
    if _session_factory is None:
        configure_database()
    assert _session_factory is not None

    if write and not _write_gate.acquire(timeout=settings.lock_timeout_seconds):
        logger.warning("Write gate not acquired within %.1fs", settings.lock_timeout_seconds)
        raise StorageTimeout("Timed out waiting for concurrent updates to finish; retry the request.")

    session = _session_factory()
    try:
        yield session
        if write:
            session.commit()
    except TrackerError:
        session.rollback()
        raise
    except SQLAlchemyError as exc:
        session.rollback()
        raise translate_storage_error(exc) from exc
    except Exception:
        session.rollback()
        raise
    finally:
        session.close()
        if write:
            _write_gate.release()


__all__ = [
    "configure_database",
    "dispose_database",
    "get_engine",
    "init_database",
    "translate_storage_error",
    "unit_of_work",
]
