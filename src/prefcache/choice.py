"""Choice-valued settings.

A ChoiceSetting stores one internal code string chosen from a fixed, ordered
table of symbols. Row order is the display order and is what the default
index refers to.
"""

from typing import Iterable, Optional, Sequence

from loguru import logger
from pydantic import BaseModel, ConfigDict, model_validator

from prefcache.errors import SymbolTableError
from prefcache.setting import Setting
from prefcache.setting_base import PathLike, SettingBase, TransactionalSetting, as_path

NO_DEFAULT = -1


class EnumValueSymbol(BaseModel):
    """One row of a choice table: the stored code and its display text.

    ``msgid`` falls back to ``internal`` when not given.
    """

    model_config = ConfigDict(frozen=True)

    internal: str = ""
    msgid: str = ""

    @model_validator(mode="before")
    @classmethod
    def _default_msgid(cls, data):
        if isinstance(data, dict) and not data.get("msgid"):
            data = {**data, "msgid": data.get("internal", "")}
        return data

    @classmethod
    def of(cls, internal: str, msgid: str = "") -> "EnumValueSymbol":
        return cls(internal=internal, msgid=msgid)

    def empty(self) -> bool:
        return not self.internal


class EnumValueSymbols(list):
    """Ordered table of EnumValueSymbol rows.

    Rows are accessed by index, and the internal codes or display texts can
    be taken as whole columns. Plain strings are accepted as rows whose code
    and display text are the same.
    """

    def __init__(self, symbols: Iterable = ()):
        super().__init__(
            s if isinstance(s, EnumValueSymbol) else EnumValueSymbol.of(s) for s in symbols
        )

    @classmethod
    def by_columns(cls, msgids: Sequence[str], internals: Sequence[str]) -> "EnumValueSymbols":
        """Build the table column-wise; both columns must have the same size."""
        if len(msgids) != len(internals):
            raise SymbolTableError(
                f"column sizes differ: {len(msgids)} msgids, {len(internals)} internals"
            )
        return cls(EnumValueSymbol.of(i, m) for m, i in zip(msgids, internals))

    def msgids(self) -> list[str]:
        return [symbol.msgid for symbol in self]

    def internals(self) -> list[str]:
        return [symbol.internal for symbol in self]


class ChoiceSetting:
    """A table of user-visible choices, a preference key, and a default row.

    Args:
        key: Path of the preference. When another transactional setting is
            passed, its path is reused and its cache is read through and
            invalidated on every write here.
        symbols: The choice table, in display order.
        default_symbol: Row of the default choice, or ``NO_DEFAULT``.

    Raises:
        SymbolTableError: If ``default_symbol`` is not a row of ``symbols``.
    """

    def __init__(
        self,
        key: PathLike,
        symbols: Iterable,
        default_symbol: int = NO_DEFAULT,
    ):
        self._key = str(as_path(key))
        self._symbols = EnumValueSymbols(symbols)
        self._other: Optional[TransactionalSetting] = (
            key if isinstance(key, TransactionalSetting) else None
        )
        self._migrated = False
        self._check_row(default_symbol)
        self._default_symbol = default_symbol

    def _check_row(self, index: int) -> None:
        if not NO_DEFAULT <= index < len(self._symbols):
            raise SymbolTableError(
                f"default row {index} out of range for {len(self._symbols)} symbols at {self._key}"
            )

    @property
    def key(self) -> str:
        return self._key

    @property
    def symbols(self) -> EnumValueSymbols:
        return EnumValueSymbols(self._symbols)

    @property
    def migrated(self) -> bool:
        return self._migrated

    def default(self) -> EnumValueSymbol:
        """The default row, or an empty symbol when there is none."""
        if 0 <= self._default_symbol < len(self._symbols):
            return self._symbols[self._default_symbol]
        return EnumValueSymbol()

    def set_default(self, index: int) -> None:
        self._check_row(index)
        self._default_symbol = index

    def read(self) -> str:
        return self.read_with_default(self.default().internal)

    def read_with_default(self, default_value: str) -> str:
        """Read the stored code, falling back to ``default_value``.

        New direct use is discouraged, but legacy callers may need a default
        other than the one stored in this object. Codes missing from the
        table (say, written by a newer release) are remapped to the default.
        """
        found, value = self._read_stored(default_value)
        # Migration waits until a store is attached
        if not found and not self._migrated and SettingBase.get_config() is not None:
            value = self.migrate(value)
            self._migrated = True

        if self.find(value) is None:
            value = default_value
        return value

    def _read_stored(self, default_value: str) -> tuple[bool, str]:
        if isinstance(self._other, Setting):
            return self._other.try_read_with_default(default_value)
        config = SettingBase.get_config()
        stored = config.read(self._key, str) if config is not None else None
        if stored is None:
            return False, default_value
        return True, stored

    def write(self, value: str) -> bool:
        """Write a code from the table; the store is not flushed.

        Returns:
            False if ``value`` is not in the table or the store write failed.
        """
        if self.find(value) is None:
            logger.warning(f"Refusing unknown choice {value!r} for {self._key}")
            return False
        config = SettingBase.get_config()
        if config is None:
            return False
        result = config.write(self._key, value)
        self._migrated = True
        if self._other is not None:
            self._other.invalidate()
        return result

    def find(self, value: str) -> Optional[int]:
        """Row index of the code ``value``, or None if it is not in the table."""
        for index, symbol in enumerate(self._symbols):
            if symbol.internal == value:
                return index
        return None

    def migrate(self, value: str) -> str:
        """Rewrite a code before it is matched against the table.

        Called at most once, when the key is absent from the store.
        """
        return value
