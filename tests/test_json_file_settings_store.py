"""Tests for the JSON file settings store."""

import json

import pytest

from personal_trainer.adapters.json_file_settings_store import JsonFileSettingsStore
from personal_trainer.errors import PersistenceError
from personal_trainer.services.store import CLIENTS_KEY, TrainerStore
from tests.conftest import make_client


def test_missing_file_reads_as_empty(tmp_path) -> None:
    store = JsonFileSettingsStore(tmp_path / "missing.json")

    assert store.get("clients") is None


def test_set_writes_all_keys(tmp_path) -> None:
    path = tmp_path / "nested" / "settings.json"
    store = JsonFileSettingsStore(path)

    store.set("clients", "[]")
    store.set("appointments", "[1]")

    assert json.loads(path.read_text()) == {"clients": "[]", "appointments": "[1]"}
    assert JsonFileSettingsStore(path).get("appointments") == "[1]"
    assert list(path.parent.glob("*.tmp")) == []


def test_corrupt_file_reads_as_empty(tmp_path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{oops")

    store = JsonFileSettingsStore(path)

    assert store.get("clients") is None
    store.set("clients", "[]")
    assert json.loads(path.read_text()) == {"clients": "[]"}


def test_write_failure_raises_persistence_error(tmp_path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory")
    store = JsonFileSettingsStore(blocker / "settings.json")

    with pytest.raises(PersistenceError):
        store.set("clients", "[]")

    assert store.get("clients") is None


def test_trainer_store_survives_restart(tmp_path) -> None:
    path = tmp_path / "trainer_data.json"
    client = make_client()
    TrainerStore(JsonFileSettingsStore(path)).add_client(client)

    restarted = TrainerStore(JsonFileSettingsStore(path))

    assert restarted.get_client(client.id) == client
    assert CLIENTS_KEY in json.loads(path.read_text())
