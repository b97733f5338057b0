"""Tests for prefcache.setting."""

from unittest.mock import patch

import pytest

from prefcache.setting import (
    BoolSetting,
    DoubleSetting,
    IntSetting,
    Setting,
    StringSetting,
)
from prefcache.setting_base import SettingPath


class TestSettingPath:
    def test_str_and_equality(self):
        assert str(SettingPath("/GUI/Theme")) == "/GUI/Theme"
        assert SettingPath("/A") == SettingPath("/A")

    def test_empty_rejected(self):
        with pytest.raises(ValueError):
            SettingPath("")

    def test_setting_reuses_other_setting_path(self):
        first = IntSetting("/A/B", 1)
        second = StringSetting(first, "x")
        assert second.path == first.path


class TestDefaults:
    def test_never_written_reads_default(self, store):
        s = IntSetting("/Audio/Rate", 44100)
        assert s.read() == 44100
        assert s.read() == 44100
        assert store.snapshot() == {}

    def test_implicit_type_default(self):
        assert BoolSetting("/Flag").default is False
        assert IntSetting("/Count").default == 0
        assert StringSetting("/Name").default == ""

    def test_default_function_recomputed(self, store):
        state = {"value": 1}
        s = IntSetting("/Computed", default_function=lambda: state["value"])
        assert s.read() == 1
        state["value"] = 2
        assert s.default == 2
        assert s.read() == 2

    def test_default_and_function_exclusive(self):
        with pytest.raises(ValueError):
            IntSetting("/X", 1, default_function=lambda: 2)

    def test_generic_setting_infers_type(self, store):
        s = Setting("/Generic", 2.5)
        assert s.value_type is float
        store.write("/Generic", 4.0)
        assert s.read() == 4.0

    def test_generic_setting_needs_type(self):
        with pytest.raises(ValueError):
            Setting("/Untyped")

    def test_double_setting_coerces_default(self):
        assert DoubleSetting("/Gain", 1).default == 1.0
        assert isinstance(DoubleSetting("/Gain", 1).default, float)


class TestReadWrite:
    def test_write_then_read(self, store):
        s = StringSetting("/GUI/Theme", "light")
        assert s.write("dark") is True
        assert s.read() == "dark"
        assert store.read("/GUI/Theme", str) == "dark"

    def test_eager_write_does_not_flush(self, store):
        IntSetting("/A", 0).write(3)
        assert store.flush_count == 0

    def test_read_caches_stored_value(self, store):
        store.write("/A", 9)
        s = IntSetting("/A", 0)
        assert s.read() == 9
        assert s.cache.valid

        store.write("/A", 10)
        assert s.read() == 9  # served from cache
        s.invalidate()
        assert s.read() == 10

    def test_stored_value_equal_to_default_stays_invalid(self, store):
        store.write("/A", 5)
        s = IntSetting("/A", 5)
        assert s.read() == 5
        assert not s.cache.valid

    def test_read_with_default(self, store):
        s = IntSetting("/A", 1)
        assert s.read_with_default(7) == 7
        assert not s.cache.valid

        store.write("/A", 7)
        assert s.read_with_default(7) == 7
        assert not s.cache.valid  # indistinguishable from absent

        store.write("/A", 8)
        assert s.read_with_default(7) == 8
        assert s.cache.valid

    def test_try_read(self, store):
        s = BoolSetting("/Flag", False)
        assert s.try_read() == (False, False)
        store.write("/Flag", False)
        assert s.try_read() == (True, False)

    def test_reset_writes_default(self, store):
        s = IntSetting("/A", 3)
        s.write(10)
        assert s.reset() is True
        assert s.read() == 3
        assert store.read("/A", int) == 3

    def test_delete(self, store):
        s = IntSetting("/A", 3)
        s.write(10)
        assert s.delete() is True
        assert s.read() == 3
        assert s.delete() is False

    def test_failed_write_invalidates_cache(self, store):
        s = IntSetting("/A", 0)
        with patch.object(store, "_put", return_value=False):
            assert s.write(4) is False
        assert not s.cache.valid
        assert s.read() == 0

    def test_aliased_settings_can_disagree(self, store):
        a = IntSetting("/Shared", 0)
        b = IntSetting("/Shared", 0)
        a.write(1)
        assert b.read() == 1
        a.write(2)
        assert b.read() == 1  # stale cache; aliasing is not tracked


class TestNoStore:
    def test_read_returns_default(self):
        s = IntSetting("/A", 12)
        assert s.read() == 12
        assert not s.cache.valid

    def test_write_fails(self):
        s = IntSetting("/A", 12)
        assert s.write(1) is False
        assert s.read() == 12

    def test_delete_fails(self):
        assert IntSetting("/A", 12).delete() is False


class TestBoolSetting:
    def test_toggle(self, store):
        s = BoolSetting("/Flag", False)
        assert s.toggle() is True
        assert s.read() is True
        assert store.snapshot()["/Flag"] == "1"
        assert s.toggle() is False

    def test_toggle_without_store_keeps_value(self):
        s = BoolSetting("/Flag", True)
        assert s.toggle() is True
