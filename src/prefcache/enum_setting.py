"""Enum-valued settings with migration from integer-coded preferences.

Older releases stored some choices as integer codes. An EnumSettingBase
pairs every symbol with such a code and can take over a legacy key: the
first read that finds the new key absent converts the old integer to the
matching string code, writes it under the new key and deletes the old one.
"""

import enum
from typing import Generic, Iterable, Optional, Sequence, TypeVar

from loguru import logger

from prefcache.choice import NO_DEFAULT, ChoiceSetting
from prefcache.errors import SymbolTableError
from prefcache.setting_base import PathLike, SettingBase

E = TypeVar("E", bound=enum.IntEnum)


class EnumSettingBase(ChoiceSetting):
    """ChoiceSetting with a parallel table of integer codes.

    The codes generally differ from the row positions.

    Args:
        key: Path of the preference, or another setting whose path is reused.
        symbols: The choice table, in display order.
        default_symbol: Row of the default choice, or ``NO_DEFAULT``.
        int_values: One integer code per symbol.
        old_key: Legacy path holding an integer code, migrated on first read.

    Raises:
        SymbolTableError: If the table is empty, ``int_values`` and
            ``symbols`` differ in length, or ``default_symbol`` is out of range.
    """

    def __init__(
        self,
        key: PathLike,
        symbols: Iterable,
        default_symbol: int,
        int_values: Sequence[int],
        old_key: str = "",
    ):
        super().__init__(key, symbols, default_symbol)
        self._int_values = [int(v) for v in int_values]
        self._old_key = old_key
        if not self._symbols:
            raise SymbolTableError(f"enum setting {self.key} needs at least one symbol")
        if len(self._int_values) != len(self._symbols):
            raise SymbolTableError(
                f"{len(self._int_values)} integer codes for {len(self._symbols)} symbols at {self.key}"
            )

    @property
    def old_key(self) -> str:
        return self._old_key

    @property
    def int_values(self) -> list[int]:
        return list(self._int_values)

    def read_int(self) -> int:
        return self._code_for(self.read())

    def read_int_with_default(self, default_value: int) -> int:
        """Read the integer code, falling back to ``default_value``.

        New direct use is discouraged, but legacy callers may need a default
        other than the one stored in this object.
        """
        row = self.find_int(default_value)
        if row is None:
            logger.warning(f"Default code {default_value} is not in the table for {self.key}")
            default_string = ""
        else:
            default_string = self._symbols[row].internal
        return self._code_for(self.read_with_default(default_string))

    def _code_for(self, value: str) -> int:
        row = self.find(value)
        if row is None:
            # Only reachable with no default row and nothing usable stored
            logger.warning(f"No choice resolved for {self.key}; using the first row")
            row = 0
        return self._int_values[row]

    def write_int(self, code: int) -> bool:
        """Write the choice whose integer code is ``code``; not flushed."""
        row = self.find_int(code)
        if row is None:
            logger.warning(f"Refusing unknown code {code} for {self.key}")
            return False
        return self.write(self._symbols[row].internal)

    def find_int(self, code: int) -> Optional[int]:
        """Row index of the integer ``code``, or None if it is not in the table."""
        try:
            return self._int_values.index(code)
        except ValueError:
            return None

    def migrate(self, value: str) -> str:
        """Convert the legacy integer preference, once and persistently."""
        if not self._old_key:
            return value
        config = SettingBase.get_config()
        if config is None:
            return value
        old_code = config.read(self._old_key, int)
        if old_code is None:
            return value

        row = self.find_int(old_code)
        if row is None:
            row = self._default_symbol if self._default_symbol != NO_DEFAULT else None
        if row is None:
            logger.warning(f"Legacy code {old_code} at {self._old_key} has no matching choice")
            return value

        value = self._symbols[row].internal
        if self.write(value):
            config.delete_entry(self._old_key)
            config.flush()
            logger.info(f"Migrated {self._old_key}={old_code} to {self.key}={value!r}")
        return value


class EnumSetting(EnumSettingBase, Generic[E]):
    """Adapts EnumSettingBase to a particular IntEnum type.

    Usage:
        class Quality(enum.IntEnum):
            LOW = 0
            HIGH = 4

        QualitySetting = EnumSetting(
            "/Quality/Choice",
            ["low", "high"],
            1,
            [Quality.LOW, Quality.HIGH],
            old_key="/Quality/ChoiceInt",
        )
    """

    def __init__(
        self,
        key: PathLike,
        symbols: Iterable,
        default_symbol: int,
        values: Sequence[E],
        old_key: str = "",
    ):
        super().__init__(key, symbols, default_symbol, [int(v) for v in values], old_key)
        self._enum_type: Optional[type[E]] = type(values[0]) if values else None

    def _to_enum(self, code: int) -> E:
        return self._enum_type(code) if self._enum_type is not None else code

    def read_enum(self) -> E:
        return self._to_enum(self.read_int())

    def read_enum_with_default(self, default_value: E) -> E:
        return self._to_enum(self.read_int_with_default(int(default_value)))

    def write_enum(self, value: E) -> bool:
        return self.write_int(int(value))
