from pathlib import Path
from typing import Any, Optional

from loguru import logger
from sqlalchemy import Engine, create_engine, event, make_url
from sqlalchemy.orm import Session, sessionmaker
from sqlalchemy.pool import StaticPool

from prefcache.core.config import settings
from prefcache.core.models import Base


def _is_memory_url(url: str) -> bool:
    return url in ("sqlite://", "sqlite:///:memory:")


def create_store_engine(url: Optional[str] = None, echo: Optional[bool] = None) -> Engine:
    """Create the engine backing a preferences database.

    Args:
        url: SQLAlchemy URL (defaults to ``settings.DB_URL``).
        echo: Enable SQLAlchemy query logging (defaults to ``settings.DB_ECHO``).

    Returns:
        A synchronous engine. In-memory SQLite URLs share one connection so
        every session sees the same database.
    """
    url = url or settings.DB_URL
    echo = settings.DB_ECHO if echo is None else echo

    kwargs: dict[str, Any] = {"echo": echo}
    if url.startswith("sqlite"):
        # busy_timeout lets SQLite wait instead of failing with "database is locked"
        kwargs["connect_args"] = {"check_same_thread": False, "timeout": 30}
        if _is_memory_url(url):
            kwargs["poolclass"] = StaticPool
        else:
            database = make_url(url).database
            if database:
                Path(database).parent.mkdir(parents=True, exist_ok=True)

    engine = create_engine(url, **kwargs)

    if url.startswith("sqlite"):

        @event.listens_for(engine, "connect")
        def disable_driver_transactions(dbapi_connection: Any, connection_record: Any) -> None:
            """Leaves BEGIN to SQLAlchemy so SAVEPOINT nests inside the session transaction."""
            dbapi_connection.isolation_level = None

        @event.listens_for(engine, "begin")
        def emit_begin(conn: Any) -> None:
            conn.exec_driver_sql("BEGIN")

    if url.startswith("sqlite") and not _is_memory_url(url):

        @event.listens_for(engine, "connect")
        def set_sqlite_pragma(dbapi_connection: Any, connection_record: Any) -> None:
            """Sets WAL journaling so readers do not block the preferences writer."""
            cursor = dbapi_connection.cursor()
            cursor.execute("PRAGMA journal_mode=WAL")
            cursor.execute("PRAGMA synchronous=NORMAL")
            cursor.execute("PRAGMA busy_timeout=30000")  # 30 seconds
            cursor.close()

    return engine


def make_session_factory(engine: Engine) -> sessionmaker[Session]:
    """Session factory used by the SQL store."""
    return sessionmaker(bind=engine, expire_on_commit=False, autoflush=False)


def init_db(engine: Engine, force: bool = False) -> None:
    """Create the preferences table.

    Args:
        engine: Engine to initialize.
        force: If True, drops the existing table first. Every stored
            preference is lost.
    """
    if force:
        logger.warning("FORCED preferences initialization. Stored values will be lost.")
        Base.metadata.drop_all(engine)
    Base.metadata.create_all(engine)
    logger.debug(f"Preferences table ready on {engine.url}")
