import pytest

from prefcache import prefs
from prefcache.store.memory import InMemoryStore
from prefcache.transaction import SettingScope


@pytest.fixture(autouse=True)
def detached_preferences():
    """Start every test with no store attached and no open scope."""
    prefs._store = None
    yield
    scope = SettingScope.current()
    if scope is not None:
        scope.close()
    prefs._store = None


@pytest.fixture
def store():
    """Attach a fresh in-memory store."""
    memory_store = InMemoryStore()
    prefs.init_preferences(memory_store)
    yield memory_store
    prefs.finish_preferences()
