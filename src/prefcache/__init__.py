"""Typed, transactional preference settings over a key/value store.

Submodules:
- setting: Setting, BoolSetting, IntSetting, DoubleSetting, StringSetting
- transaction: SettingScope, SettingTransaction, AddResult
- choice: EnumValueSymbol, EnumValueSymbols, ChoiceSetting
- enum_setting: EnumSettingBase, EnumSetting
- prefs: init_preferences, finish_preferences, get_config
- store: ConfigStore, InMemoryStore, SQLStore
"""

from prefcache.choice import NO_DEFAULT, ChoiceSetting, EnumValueSymbol, EnumValueSymbols
from prefcache.enum_setting import EnumSetting, EnumSettingBase
from prefcache.errors import PreferencesError, SymbolTableError, TransactionActiveError
from prefcache.prefs import finish_preferences, get_config, init_preferences
from prefcache.setting import (
    BoolSetting,
    CachingSetting,
    DoubleSetting,
    IntSetting,
    Setting,
    SettingCache,
    StringSetting,
)
from prefcache.setting_base import SettingBase, SettingPath, TransactionalSetting
from prefcache.store import ConfigStore, InMemoryStore, SQLStore
from prefcache.transaction import AddResult, SettingScope, SettingTransaction

__all__ = [
    "NO_DEFAULT",
    "ChoiceSetting",
    "EnumValueSymbol",
    "EnumValueSymbols",
    "EnumSetting",
    "EnumSettingBase",
    "PreferencesError",
    "SymbolTableError",
    "TransactionActiveError",
    "finish_preferences",
    "get_config",
    "init_preferences",
    "BoolSetting",
    "CachingSetting",
    "DoubleSetting",
    "IntSetting",
    "Setting",
    "SettingCache",
    "StringSetting",
    "SettingBase",
    "SettingPath",
    "TransactionalSetting",
    "ConfigStore",
    "InMemoryStore",
    "SQLStore",
    "AddResult",
    "SettingScope",
    "SettingTransaction",
]
