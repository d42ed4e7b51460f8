"""Tests for the Supabase remote store adapter."""

from unittest.mock import MagicMock

import pytest

from db.database import RemoteRecordNotFound, SupabaseRemoteStore


@pytest.fixture
def client():
    return MagicMock()


@pytest.fixture
def remote(client):
    return SupabaseRemoteStore(client, "site-images")


def _respond(chain_end, data):
    chain_end.execute.return_value = MagicMock(data=data)


class TestSupabaseRemoteStore:
    def test_fetch_orders_by_created_at_desc(self, client, remote):
        query = client.table.return_value.select.return_value.order.return_value
        _respond(query, [{"id": "1"}])

        assert remote.fetch("services") == [{"id": "1"}]
        client.table.assert_called_with("services")
        client.table.return_value.select.assert_called_with("*")
        client.table.return_value.select.return_value.order.assert_called_with("created_at", desc=True)

    def test_fetch_none_data_is_empty(self, client, remote):
        _respond(client.table.return_value.select.return_value.order.return_value, None)
        assert remote.fetch("services") == []

    def test_insert_returns_generated_id(self, client, remote):
        _respond(client.table.return_value.insert.return_value, [{"id": 42}])

        assert remote.insert("bookings", {"name": "Dana"}) == "42"
        client.table.return_value.insert.assert_called_with({"name": "Dana"})

    def test_insert_without_data_raises(self, client, remote):
        _respond(client.table.return_value.insert.return_value, [])

        with pytest.raises(RuntimeError, match="No data returned"):
            remote.insert("bookings", {"name": "Dana"})

    def test_update_filters_by_id(self, client, remote):
        eq = client.table.return_value.update.return_value.eq
        _respond(eq.return_value, [{"id": "b1"}])

        remote.update("bookings", "b1", {"status": "confirmed"})

        client.table.return_value.update.assert_called_with({"status": "confirmed"})
        eq.assert_called_with("id", "b1")

    def test_update_missing_row_raises(self, client, remote):
        _respond(client.table.return_value.update.return_value.eq.return_value, [])

        with pytest.raises(RemoteRecordNotFound):
            remote.update("bookings", "nope", {"status": "confirmed"})

    def test_delete_filters_by_id(self, client, remote):
        remote.delete("gallery", "g1")

        client.table.return_value.delete.return_value.eq.assert_called_with("id", "g1")

    def test_find_credentials(self, client, remote):
        first_eq = client.table.return_value.select.return_value.eq
        second_eq = first_eq.return_value.eq
        _respond(second_eq.return_value.limit.return_value, [{"id": "a", "username": "u"}])

        assert remote.find_credentials("u", "p") == {"id": "a", "username": "u"}
        client.table.assert_called_with("admin_credentials")
        first_eq.assert_called_with("username", "u")
        second_eq.assert_called_with("password", "p")

    def test_find_credentials_no_match(self, client, remote):
        chain = client.table.return_value.select.return_value.eq.return_value.eq.return_value
        _respond(chain.limit.return_value, [])

        assert remote.find_credentials("u", "bad") is None

    def test_upload_image(self, client, remote):
        bucket = client.storage.from_.return_value
        bucket.get_public_url.return_value = "https://cdn/images/1_a.jpg"

        url = remote.upload_image("images/1_a.jpg", b"bytes", "image/jpeg")

        assert url == "https://cdn/images/1_a.jpg"
        client.storage.from_.assert_called_with("site-images")
        bucket.upload.assert_called_with("images/1_a.jpg", b"bytes", {"content-type": "image/jpeg"})
