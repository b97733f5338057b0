from unittest.mock import patch

from loguru import logger

from prefcache import prefs
from prefcache.core.config import settings
from prefcache.store.memory import InMemoryStore


def test_nothing_attached_by_default():
    assert prefs.get_config() is None
    assert prefs.finish_preferences() is False


def test_init_and_finish():
    s = InMemoryStore()
    prefs.init_preferences(s)
    assert prefs.get_config() is s

    assert prefs.finish_preferences() is True
    assert s.flush_count == 1
    assert prefs.get_config() is None


def test_init_replaces_store():
    first, second = InMemoryStore(), InMemoryStore()
    prefs.init_preferences(first)
    prefs.init_preferences(second)
    assert prefs.get_config() is second
    assert first.flush_count == 0


def test_finish_reports_flush_failure():
    s = InMemoryStore()
    prefs.init_preferences(s)
    with patch.object(s, "flush", return_value=False):
        assert prefs.finish_preferences() is False
    assert prefs.get_config() is None


def test_init_logs_prefs_version():
    messages = []
    sink_id = logger.add(messages.append, level="INFO", format="{message}")
    try:
        prefs.init_preferences(InMemoryStore())
    finally:
        logger.remove(sink_id)
    assert any(settings.PREFS_VERSION in m for m in messages)
