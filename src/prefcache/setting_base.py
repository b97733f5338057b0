"""Paths and base classes shared by every kind of setting."""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Union

from prefcache.prefs import get_config
from prefcache.store.base import ConfigStore


@dataclass(frozen=True)
class SettingPath:
    """Hierarchical key of one preference, e.g. ``/GUI/Theme``.

    Settings with equal paths alias the same stored value.
    """

    path: str

    def __post_init__(self):
        if not self.path:
            raise ValueError("setting path must not be empty")

    def __str__(self) -> str:
        return self.path


PathLike = Union[str, SettingPath, "SettingBase"]


def as_path(key: PathLike) -> SettingPath:
    """Coerce a string, path, or other setting to a SettingPath."""
    if isinstance(key, SettingPath):
        return key
    if isinstance(key, SettingBase):
        return key.path
    return SettingPath(key)


class SettingBase:
    """Holds the configuration key path of a setting."""

    def __init__(self, key: PathLike):
        self._path = as_path(key)

    @property
    def path(self) -> SettingPath:
        return self._path

    @staticmethod
    def get_config() -> Optional[ConfigStore]:
        return get_config()

    def delete(self) -> bool:
        """Delete the key if present, and return True iff it was."""
        config = self.get_config()
        return config is not None and config.delete_entry(str(self._path))

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self._path.path!r})"


class TransactionalSetting(SettingBase, ABC):
    """A setting that can take part in a SettingTransaction."""

    @abstractmethod
    def commit(self) -> bool:
        """Write the cached value to the store; True if successful."""

    @abstractmethod
    def rollback(self) -> None:
        """Restore the value held before the transaction. Never fails."""

    @abstractmethod
    def invalidate(self) -> None:
        """Forget the cached value so the next read consults the store."""
