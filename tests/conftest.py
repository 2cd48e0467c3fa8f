"""Shared fixtures: a fresh SQLite database per test."""

import pytest

from finance_tracker.config import DatabaseSettings
from finance_tracker.services.storage import SQLiteClient, SQLiteRecordStorage


@pytest.fixture
def db_settings(tmp_path):
    return DatabaseSettings(path=str(tmp_path / "tracker.db"))


@pytest.fixture
def client(db_settings):
    client = SQLiteClient(db_settings)
    yield client
    client.dispose()


@pytest.fixture
def storage(client):
    storage = SQLiteRecordStorage(client)
    storage.create_schema()
    return storage
