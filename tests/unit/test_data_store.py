"""
Unit tests for the JSON data store and the API key service.
"""

import json

import pytest

from app.services.api_keys import ApiKeyService
from app.services.data_store import DataStore
from app.services.encryption import decrypt_api_key


@pytest.fixture
def store(tmp_path):
    return DataStore(base_path=str(tmp_path / "store"))


@pytest.fixture
def keys(store):
    return ApiKeyService(store)


class TestDataStore:
    def test_first_read_creates_empty_database(self, store):
        data = store.read()

        assert data == {"apiKeys": [], "usageLogs": []}
        assert store.db_path.exists()

    def test_missing_sections_are_filled(self, store):
        store.base_path.mkdir(parents=True)
        store.db_path.write_text(json.dumps({"apiKeys": [{"id": "k1"}]}))

        data = store.read()

        assert data["apiKeys"] == [{"id": "k1"}]
        assert data["usageLogs"] == []

    def test_write_replaces_document(self, store):
        store.write({"apiKeys": [], "usageLogs": [{"id": "u1"}]})

        assert json.loads(store.db_path.read_text())["usageLogs"] == [{"id": "u1"}]
        assert [p.name for p in store.base_path.iterdir()] == ["db.json"]

    def test_uses_configured_data_directory(self, tmp_path):
        assert DataStore().db_path == tmp_path / "data" / "db.json"

    def test_invalid_json_raises(self, store):
        store.base_path.mkdir(parents=True)
        store.db_path.write_text("{not json")

        with pytest.raises(ValueError):
            store.read()


class TestApiKeyService:
    def test_add_encrypts_key(self, keys, store):
        record = keys.add("openai", "sk-secret", "Main")

        stored = store.read()["apiKeys"][0]
        assert stored["id"] == record.id
        assert stored["platform"] == "openai"
        assert stored["keyName"] == "Main"
        assert stored["isActive"] is True
        assert "sk-secret" not in json.dumps(stored)
        assert decrypt_api_key(stored["encryptedKey"]) == "sk-secret"

    def test_get_active_skips_inactive(self, keys):
        first = keys.add("kling", "k-1")
        second = keys.add("kling", "k-2")
        keys.update(first.id, is_active=False)

        assert keys.get_active("kling").id == second.id
        assert keys.get_active("openai") is None

    def test_update(self, keys):
        record = keys.add("gemini", "g-1", "Old name")

        updated = keys.update(record.id, key_name="New name", is_active=False)

        assert updated.key_name == "New name"
        assert updated.is_active is False
        assert keys.get_all()[0].key_name == "New name"

    def test_update_unknown_key(self, keys):
        assert keys.update("missing", is_active=False) is None

    def test_delete(self, keys):
        record = keys.add("veo", "v-1")

        assert keys.delete(record.id) is True
        assert keys.get_all() == []
        assert keys.delete(record.id) is False
