from pathlib import Path

from prefcache.core.config import Settings, settings


def test_config_paths():
    """Verify that paths are correctly resolved."""
    assert isinstance(settings.BASE_DIR, Path)
    assert isinstance(settings.DATA_DIR, Path)
    assert isinstance(settings.DB_PATH, Path)
    assert settings.DB_NAME == "preferences.db"
    assert settings.DB_PATH.name == "preferences.db"


def test_db_url_is_sync_sqlite():
    """The store uses a synchronous driver."""
    assert settings.DB_URL.startswith("sqlite:///")
    assert "aiosqlite" not in settings.DB_URL
    assert settings.DB_URL.endswith("preferences.db")


def test_env_override(monkeypatch, tmp_path):
    monkeypatch.setenv("DB_NAME", "other.db")
    monkeypatch.setenv("LOG_LEVEL", "DEBUG")
    s = Settings(DATA_DIR=tmp_path)
    assert s.DB_PATH == tmp_path / "other.db"
    assert s.LOG_LEVEL == "DEBUG"


def test_prefs_version_format():
    release, _, resets = settings.PREFS_VERSION.partition("r")
    assert release.count(".") == 2
    assert resets.isdigit()
