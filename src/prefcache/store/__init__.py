"""Preference store backends.

Submodules:
- base: ConfigStore, encode_value, decode_value
- memory: InMemoryStore
- sql: SQLStore
"""

from prefcache.store.base import ConfigStore, decode_value, encode_value
from prefcache.store.memory import InMemoryStore
from prefcache.store.sql import SQLStore

__all__ = [
    "ConfigStore",
    "decode_value",
    "encode_value",
    "InMemoryStore",
    "SQLStore",
]
