import pytest

from predictor import db_pg as db
from predictor.events import bus


@pytest.fixture
def store(tmp_path):
    """Fresh SQLite-backed store with the schema created and the round closed."""
    db.configure(f"sqlite:///{tmp_path / 'game.db'}")
    db.init_db()
    yield db
    db.get_engine().dispose()
    db._engine = None


@pytest.fixture(autouse=True)
def clean_bus():
    bus.clear()
    yield bus
    bus.clear()


@pytest.fixture
def teams(store):
    store.insert_teams([{"team_name": n} for n in ("Falcons", "Strikers", "Titans")])
    return store
