"""Shared test configuration and fixtures."""

import logging
import uuid

import pytest

from app.config import ResendConfig
from db.local_store import MemoryKeyValueStore, seed_demo_data
from db.store import DataStore


class FakeRemote:
    """In-memory stand-in for SupabaseRemoteStore. Set `fail` to make every call raise."""

    def __init__(self, fail=False):
        self.fail = fail
        self.tables = {}
        self.calls = []

    def _check(self, op, *args):
        self.calls.append((op, *args))
        if self.fail:
            raise ConnectionError("supabase unreachable")

    def fetch(self, table):
        self._check("fetch", table)
        rows = self.tables.get(table, [])
        return sorted(rows, key=lambda r: r["created_at"], reverse=True)

    def insert(self, table, record):
        self._check("insert", table, record)
        record_id = f"remote-{uuid.uuid4().hex[:8]}"
        self.tables.setdefault(table, []).append({**record, "id": record_id})
        return record_id

    def update(self, table, record_id, changes):
        self._check("update", table, record_id, changes)
        for row in self.tables.get(table, []):
            if row["id"] == record_id:
                row.update(changes)
                return
        raise LookupError(record_id)

    def delete(self, table, record_id):
        self._check("delete", table, record_id)
        self.tables[table] = [r for r in self.tables.get(table, []) if r["id"] != record_id]

    def find_credentials(self, username, password):
        self._check("find_credentials", username, password)
        for row in self.tables.get("admin_credentials", []):
            if row["username"] == username and row["password"] == password:
                return row
        return None

    def upload_image(self, path, content, content_type):
        self._check("upload_image", path, content, content_type)
        return f"https://example.supabase.co/storage/v1/object/public/site/{path}"


@pytest.fixture
def local_store():
    """Empty in-memory local store."""
    return MemoryKeyValueStore()


@pytest.fixture
def seeded_local_store(local_store):
    seed_demo_data(local_store)
    return local_store


@pytest.fixture
def fake_remote():
    return FakeRemote()


@pytest.fixture
def failing_remote():
    return FakeRemote(fail=True)


@pytest.fixture
def local_only_store(seeded_local_store):
    """DataStore with no remote configured."""
    return DataStore(local=seeded_local_store)


@pytest.fixture
def resend_config():
    return ResendConfig(
        api_key="re_test_key",
        from_email="noreply@example.com",
        to_email="owner@example.com",
    )


@pytest.fixture(scope="function", autouse=True)
def reset_logging():
    """Reset logging configuration after each test."""
    yield
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        handler.close()
        root_logger.removeHandler(handler)
    root_logger.setLevel(logging.WARNING)
