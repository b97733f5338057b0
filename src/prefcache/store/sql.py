"""SQLAlchemy-backed preferences store.

Each write is flushed into the open database transaction so later reads in
this process see it, but it only becomes durable when ``flush`` commits.
That maps the eager-write/flush split of the preferences API onto a plain
SQL transaction.
"""

from typing import Optional

from loguru import logger
from sqlalchemy import Engine
from sqlalchemy.exc import SQLAlchemyError

from prefcache.core.db import create_store_engine, init_db, make_session_factory
from prefcache.core.models import PreferenceEntry
from prefcache.store.base import ConfigStore


class SQLStore(ConfigStore):
    """Preferences store over the ``preferences`` table.

    Usage:
        store = SQLStore()                       # settings.DB_URL
        store = SQLStore(url="sqlite://")        # throwaway in-memory DB
        store = SQLStore(engine=existing_engine) # caller owns the engine
    """

    def __init__(self, url: Optional[str] = None, engine: Optional[Engine] = None):
        self._owns_engine = engine is None
        self._engine = engine if engine is not None else create_store_engine(url)
        init_db(self._engine)
        self._session = make_session_factory(self._engine)()

    @property
    def engine(self) -> Engine:
        return self._engine

    def _get(self, path: str) -> Optional[str]:
        try:
            entry = self._session.get(PreferenceEntry, path)
        except SQLAlchemyError as e:
            logger.error(f"Failed to read preference {path}: {e}")
            return None
        return entry.value if entry is not None else None

    def _put(self, path: str, text: str) -> bool:
        # Each change gets its own savepoint; a failure undoes only that change
        try:
            with self._session.begin_nested():
                entry = self._session.get(PreferenceEntry, path)
                if entry is None:
                    self._session.add(PreferenceEntry(path=path, value=text))
                else:
                    entry.value = text
                self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to write preference {path}: {e}")
            return False
        return True

    def _remove(self, path: str) -> bool:
        try:
            with self._session.begin_nested():
                entry = self._session.get(PreferenceEntry, path)
                if entry is None:
                    return False
                self._session.delete(entry)
                self._session.flush()
        except SQLAlchemyError as e:
            logger.error(f"Failed to delete preference {path}: {e}")
            return False
        return True

    def flush(self) -> bool:
        try:
            self._session.commit()
        except SQLAlchemyError as e:
            logger.error(f"Failed to commit preferences: {e}")
            self._session.rollback()
            return False
        logger.debug("Preferences committed")
        return True

    def close(self) -> None:
        """Close the session, discarding anything not yet flushed."""
        self._session.close()
        if self._owns_engine:
            self._engine.dispose()
