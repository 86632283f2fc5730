from datetime import datetime, timedelta, timezone

import pytest
from unittest.mock import MagicMock

from backend.database import Database
from backend.modules.garden.errors import PersistenceError
from backend.modules.garden.flower_repository import FlowerRepository
from backend.modules.garden.models import FlowerRecord


@pytest.fixture
def repository(tmp_path):
    repo = FlowerRepository(Database(db_path=str(tmp_path / "flowers.db")))
    repo.ensure_schema()
    return repo


def _record(species="rose", message="hello", **kwargs):
    return FlowerRecord(species=species, message=message, author="Ana", x=42.5, y=70.25, **kwargs)


def test_insert_assigns_id_and_timestamp(repository):
    stored = repository.insert(_record(mood="hello"))

    assert stored.id
    assert stored.created_at.tzinfo is not None
    assert repository.count() == 1


def test_round_trip_keeps_species_and_location(repository):
    record = _record(species="peony", latitude=35.68, longitude=139.69, country="Japan", city="Tokyo")
    stored = repository.insert(record)

    loaded = repository.get(stored.id)

    assert loaded.species == "peony"
    assert loaded.type == "rose"
    assert loaded.x == 42.5 and loaded.y == 70.25
    assert loaded.latitude == pytest.approx(35.68)
    assert loaded.country == "Japan"
    assert loaded.created_at == stored.created_at


def test_load_all_oldest_first(repository):
    base = datetime(2024, 5, 1, tzinfo=timezone.utc)
    repository.insert(_record(message="third", created_at=base + timedelta(seconds=2)))
    repository.insert(_record(message="first", created_at=base))
    repository.insert(_record(message="second", created_at=base + timedelta(seconds=1)))

    assert [r.message for r in repository.load_all()] == ["first", "second", "third"]


def test_get_missing_returns_none(repository):
    assert repository.get("nope") is None


def test_ensure_schema_is_idempotent(repository):
    repository.ensure_schema()
    assert repository.count() == 0


def test_database_failure_raises_persistence_error():
    database = MagicMock(use_postgres=False)
    database.format_query.side_effect = lambda q: q
    database.get_connection.side_effect = RuntimeError("disk full")

    with pytest.raises(PersistenceError):
        FlowerRepository(database).insert(_record())


def test_postgres_placeholders():
    database = Database.__new__(Database)
    database.use_postgres = True
    assert database.format_query("SELECT * FROM flowers WHERE id = ?") == "SELECT * FROM flowers WHERE id = %s"
