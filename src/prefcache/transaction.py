"""Scoped batches of setting writes.

While a scope is active every ``Setting.write`` is staged in memory instead
of reaching the store. A ``SettingTransaction`` can commit the batch and
flush the store once; leaving any scope without a successful commit rolls
the staged values back. Nesting is not supported.

Usage:
    with SettingTransaction() as transaction:
        SampleRate.write(48000)
        Theme.write("dark")
        transaction.commit()

The active scope is held in a context variable, so a scope opened in one
thread or task does not capture writes made by another.
"""

import enum
from contextvars import ContextVar, Token
from typing import Optional

from loguru import logger

from prefcache.errors import TransactionActiveError
from prefcache.prefs import get_config
from prefcache.setting_base import TransactionalSetting

_current_scope: ContextVar[Optional["SettingScope"]] = ContextVar(
    "current_setting_scope", default=None
)


class AddResult(enum.Enum):
    """Outcome of registering a write with the active scope."""

    NOT_ADDED = "not_added"  # no pending scope: write eagerly
    ADDED = "added"  # first write in this scope: snapshot for rollback
    PREVIOUSLY_ADDED = "previously_added"  # already staged: update cache only


class SettingScope:
    """Makes temporary changes to settings, rolled back at exit."""

    def __init__(self):
        if _current_scope.get() is not None:
            raise TransactionActiveError("A setting scope is already active")
        self._pending: dict[TransactionalSetting, None] = {}
        self._written: set[TransactionalSetting] = set()
        self._committed = False
        self._token: Optional[Token] = _current_scope.set(self)
        logger.debug("Setting scope opened")

    @staticmethod
    def current() -> Optional["SettingScope"]:
        """The active scope in this context, if any."""
        return _current_scope.get()

    @staticmethod
    def add(setting: TransactionalSetting) -> AddResult:
        """Register a write of ``setting`` with the active scope."""
        scope = _current_scope.get()
        if scope is None or scope._committed:
            return AddResult.NOT_ADDED
        if setting in scope._pending:
            return AddResult.PREVIOUSLY_ADDED
        scope._pending[setting] = None
        return AddResult.ADDED

    @property
    def committed(self) -> bool:
        return self._committed

    @property
    def pending(self) -> list[TransactionalSetting]:
        return list(self._pending)

    @property
    def active(self) -> bool:
        return self._token is not None

    def close(self) -> None:
        """End the scope, rolling back unless it was committed.

        Settings that reached the store during a failed commit are
        invalidated rather than rolled back, so their next read shows what
        the store actually holds.
        """
        if self._token is None:
            return
        try:
            if not self._committed:
                for setting in self._pending:
                    if setting in self._written:
                        setting.invalidate()
                    else:
                        setting.rollback()
                if self._pending:
                    logger.info(f"Rolled back {len(self._pending)} staged setting(s)")
        finally:
            _current_scope.reset(self._token)
            self._token = None
            self._pending.clear()
            self._written.clear()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()


class SettingTransaction(SettingScope):
    """Extends SettingScope with commit, which flushes updates in a batch."""

    def commit(self) -> bool:
        """Write every staged setting, then flush the store once.

        Stops at the first setting that fails to write. Settings written
        before the failure stay in the store; they are not reverted.

        Returns:
            True if every write and the flush succeeded.
        """
        if _current_scope.get() is not self or self._committed:
            return False
        for setting in self._pending:
            if not setting.commit():
                logger.warning(f"Commit of {setting!r} failed; transaction not flushed")
                return False
            self._written.add(setting)
        config = get_config()
        if config is None or not config.flush():
            logger.warning("Preferences flush failed after commit")
            return False
        logger.info(f"Committed {len(self._pending)} setting(s)")
        self._pending.clear()
        self._written.clear()
        self._committed = True
        return True
