from sqlalchemy import inspect, text

from prefcache.core.db import create_store_engine, init_db, make_session_factory
from prefcache.core.models import PreferenceEntry


def test_file_engine_uses_wal(tmp_path):
    """Verify DB connection and WAL mode on a file database."""
    engine = create_store_engine(f"sqlite:///{tmp_path / 'prefs.db'}")
    init_db(engine)

    with engine.connect() as conn:
        mode = conn.execute(text("PRAGMA journal_mode")).scalar()
        assert mode.upper() == "WAL"
        # synchronous=NORMAL is 1
        assert conn.execute(text("PRAGMA synchronous")).scalar() == 1
    engine.dispose()


def test_memory_engine_shares_connection():
    engine = create_store_engine("sqlite://")
    init_db(engine)
    Session = make_session_factory(engine)

    with Session() as session:
        session.add(PreferenceEntry(path="/A", value="1"))
        session.commit()
    with Session() as session:
        assert session.get(PreferenceEntry, "/A").value == "1"
    engine.dispose()


def test_init_db_force_drops_rows():
    engine = create_store_engine("sqlite://")
    init_db(engine)
    Session = make_session_factory(engine)
    with Session() as session:
        session.add(PreferenceEntry(path="/A", value="1"))
        session.commit()

    init_db(engine, force=True)

    assert "preferences" in inspect(engine).get_table_names()
    with Session() as session:
        assert session.get(PreferenceEntry, "/A") is None
    engine.dispose()


def test_entry_timestamps_set():
    engine = create_store_engine("sqlite://")
    init_db(engine)
    with make_session_factory(engine)() as session:
        entry = PreferenceEntry(path="/A", value="x")
        session.add(entry)
        session.commit()
        assert entry.created_at is not None
        assert entry.updated_at is not None
    engine.dispose()
