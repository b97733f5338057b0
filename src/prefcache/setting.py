"""Typed, cached settings.

Declare a setting once, usually at module level, then read and write it
anywhere:

    SampleRate = IntSetting("/SamplingRate/DefaultProjectSampleRate", 44100)

    rate = SampleRate.read()
    SampleRate.write(48000)

Reads are served from an in-memory cache once the value is known. Writes are
eager (applied to the store but not flushed) unless a SettingScope is
active, in which case they are staged and the scope decides whether they
reach the store.
"""

from dataclasses import dataclass
from typing import Any, Callable, Generic, Optional, TypeVar

from prefcache.setting_base import PathLike, TransactionalSetting
from prefcache.transaction import AddResult, SettingScope

T = TypeVar("T")


@dataclass
class SettingCache(Generic[T]):
    """Last known value of a setting and whether it reflects the store."""

    value: Optional[T] = None
    valid: bool = False


class CachingSetting(TransactionalSetting, Generic[T]):
    """Adds an in-memory cache of a value to TransactionalSetting."""

    def __init__(self, key: PathLike):
        super().__init__(key)
        self._cache: SettingCache[T] = SettingCache()

    @property
    def cache(self) -> SettingCache[T]:
        return self._cache


class Setting(CachingSetting[T]):
    """A cached setting with a default value.

    The default is either a fixed value or a callable recomputed every time
    the default is needed, for defaults that depend on other live state.

    Args:
        key: Path, or another setting whose path is reused.
        default: Fixed default value.
        default_function: Zero-argument callable producing the default.
            Mutually exclusive with ``default``.
        value_type: Stored primitive type. Typed subclasses fix it; for a
            plain ``Setting`` it is taken from ``default`` when omitted.
    """

    value_type: Optional[type] = None

    def __init__(
        self,
        key: PathLike,
        default: Optional[T] = None,
        *,
        default_function: Optional[Callable[[], T]] = None,
        value_type: Optional[type] = None,
    ):
        super().__init__(key)
        if default is not None and default_function is not None:
            raise ValueError("pass either default or default_function, not both")
        self._default = default
        self._function = default_function
        self._previous: SettingCache[T] = SettingCache()

        if value_type is not None:
            self.value_type = value_type
        elif self.value_type is None:
            if default is None:
                raise ValueError(f"value_type is required for {self.path}")
            self.value_type = type(default)
        if self._default is None and self._function is None:
            self._default = self.value_type()

    @property
    def default(self) -> T:
        return self.get_default()

    def get_default(self) -> T:
        if self._function is not None:
            return self._function()
        return self._default

    def read(self) -> T:
        """Current value, or the default if the store does not define one."""
        return self.read_with_default(self.get_default())

    def read_with_default(self, default_value: T) -> T:
        """Read, falling back to ``default_value`` instead of the default.

        New direct use is discouraged, but legacy callers may need a
        different default without declaring another setting.

        If the store holds exactly ``default_value`` the cache stays invalid:
        that cannot be told apart from an absent key.
        """
        cache = self._cache
        if cache.valid:
            return cache.value
        config = self.get_config()
        if config is None:
            cache.valid = False
            return default_value
        stored = config.read(str(self.path), self.value_type)
        cache.value = default_value if stored is None else stored
        cache.valid = cache.value != default_value
        return cache.value

    def try_read(self) -> tuple[bool, T]:
        """Read, also reporting whether the value was defined in the store."""
        return self.try_read_with_default(self.get_default())

    def try_read_with_default(self, default_value: T) -> tuple[bool, T]:
        cache = self._cache
        if cache.valid:
            return True, cache.value
        config = self.get_config()
        if config is None:
            cache.valid = False
            return False, default_value
        stored = config.read(str(self.path), self.value_type)
        if stored is None:
            cache.valid = False
            return False, default_value
        cache.value = stored
        cache.valid = True
        return True, stored

    def write(self, value: T) -> bool:
        """Write ``value``; True if successful.

        With no active scope the store is updated immediately but not
        flushed. Inside a scope only the cache changes and the write always
        succeeds; the scope commits or rolls it back later.
        """
        result = SettingScope.add(self)
        if result is AddResult.NOT_ADDED:
            if self.get_config() is None:
                return False
            self._cache.value = value
            return self._do_write()
        if result is AddResult.ADDED:
            current = self.read()
            self._previous = SettingCache(current, self._cache.valid)
        self._cache.value = value
        self._cache.valid = True
        return True

    def reset(self) -> bool:
        """Write the default value."""
        return self.write(self.get_default())

    def delete(self) -> bool:
        self.invalidate()
        return super().delete()

    def commit(self) -> bool:
        return self._do_write()

    def rollback(self) -> None:
        self._cache.value = self._previous.value
        self._cache.valid = self._previous.valid

    def invalidate(self) -> None:
        self._cache.valid = False

    def _do_write(self) -> bool:
        # Store is not flushed here
        config = self.get_config()
        ok = config is not None and config.write(str(self.path), self._cache.value)
        self._cache.valid = ok
        return ok


class BoolSetting(Setting[bool]):
    value_type = bool

    def toggle(self) -> bool:
        """Write the negation of the current value, then return the current value."""
        value = self.read()
        if self.write(not value):
            return not value
        return value


class IntSetting(Setting[int]):
    value_type = int


class DoubleSetting(Setting[float]):
    value_type = float

    def __init__(self, key: PathLike, default: Optional[Any] = None, **kwargs):
        super().__init__(key, None if default is None else float(default), **kwargs)


class StringSetting(Setting[str]):
    value_type = str
