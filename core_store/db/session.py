# core_store/db/session.py

from __future__ import annotations

from contextlib import contextmanager
from typing import Any, Dict, Generator, Optional

from sqlalchemy import create_engine, event
from sqlalchemy.engine import Engine, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from core_store.config import get_settings
from core_store.db.models import Base
from core_store.logging import get_logger

logger = get_logger(__name__)

# ---------------------------------------------------------------------------
# Engine / Session factory
# ---------------------------------------------------------------------------


def _enable_sqlite_foreign_keys(dbapi_connection, connection_record) -> None:
    # SQLite ships with FK enforcement off; it is a per-connection switch.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def build_engine(url: str, *, echo: bool = False) -> Engine:
    """
    Create an engine for ``url``.

    SQLite engines get foreign key enforcement on every connection and may
    be shared across threads. In-memory SQLite uses a single static
    connection so every session sees the same database.
    """
    parsed = make_url(url)
    connect_args: Dict[str, Any] = {}
    kwargs: Dict[str, Any] = {}

    is_sqlite = parsed.get_backend_name() == "sqlite"
    if is_sqlite:
        connect_args["check_same_thread"] = False
        if parsed.database in (None, "", ":memory:"):
            kwargs["poolclass"] = StaticPool

    engine = create_engine(
        url,
        echo=echo,
        connect_args=connect_args,
        **kwargs,
    )

    if is_sqlite:
        event.listen(engine, "connect", _enable_sqlite_foreign_keys)

    return engine


def build_session_factory(bind: Engine) -> sessionmaker:
    return sessionmaker(
        bind=bind,
        autoflush=False,
        autocommit=False,
        expire_on_commit=False,
        class_=Session,
    )


_settings = get_settings()

engine = build_engine(_settings.DATABASE_URL, echo=_settings.sql_echo)

SessionLocal = build_session_factory(engine)


def init_db(bind: Optional[Engine] = None) -> None:
    """
    Create every table that does not exist yet.

    This only bootstraps an empty database; it does not alter existing
    tables.
    """
    bind = bind or engine
    Base.metadata.create_all(bind=bind)
    logger.info("db_initialized", url=bind.url.render_as_string(hide_password=True))


# ---------------------------------------------------------------------------
# Session helpers
# ---------------------------------------------------------------------------


def get_db() -> Generator[Session, None, None]:
    """
    Dependency-style generator that yields a session and ensures it is
    closed afterwards. The caller owns commit/rollback.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def db_session(factory: Optional[sessionmaker] = None) -> Generator[Session, None, None]:
    """
    Context manager for scripts and background jobs.

        from core_store.db.session import db_session

        with db_session() as db:
            ...

    Commits on success, rolls back and re-raises on error.
    """
    db = (factory or SessionLocal)()
    try:
        yield db
        db.commit()
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()


__all__ = [
    "build_engine",
    "build_session_factory",
    "engine",
    "SessionLocal",
    "init_db",
    "get_db",
    "db_session",
]
