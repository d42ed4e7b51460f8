# db/database.py

from __future__ import annotations

import logging
from typing import Any, Dict, List, Optional

import streamlit as st
from supabase import Client, create_client
from supabase.client import ClientOptions

logger = logging.getLogger(__name__)


@st.cache_resource(show_spinner=False)
def get_supabase_client(url: str, service_key: str, schema: str = "public") -> Client:
    """
    Returns a cached Supabase client.
    Uses the service role key because inserts from the public forms
    (bookings, reviews) need to bypass RLS.
    """
    return create_client(url, service_key, options=ClientOptions(schema=schema))


class RemoteRecordNotFound(LookupError):
    pass


class SupabaseRemoteStore:
    """Thin adapter over the Supabase tables and storage bucket used by the site."""

    def __init__(self, client: Client, storage_bucket: str):
        self.client = client
        self.storage_bucket = storage_bucket

    def fetch(self, table: str) -> List[Dict[str, Any]]:
        response = (
            self.client.table(table).select("*").order("created_at", desc=True).execute()
        )
        return list(response.data or [])

    def insert(self, table: str, record: Dict[str, Any]) -> str:
        response = self.client.table(table).insert(record).execute()
        if not response.data:
            raise RuntimeError(f"Failed to insert into {table}. No data returned.")
        return str(response.data[0]["id"])

    def update(self, table: str, record_id: str, changes: Dict[str, Any]) -> None:
        response = self.client.table(table).update(changes).eq("id", record_id).execute()
        if not response.data:
            raise RemoteRecordNotFound(f"No {table} record with id {record_id}")

    def delete(self, table: str, record_id: str) -> None:
        self.client.table(table).delete().eq("id", record_id).execute()

    def find_credentials(self, username: str, password: str) -> Optional[Dict[str, Any]]:
        response = (
            self.client.table("admin_credentials")
            .select("*")
            .eq("username", username)
            .eq("password", password)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return response.data[0]

    def upload_image(self, path: str, content: bytes, content_type: str) -> str:
        bucket = self.client.storage.from_(self.storage_bucket)
        bucket.upload(path, content, {"content-type": content_type})
        url = bucket.get_public_url(path)
        logger.info("Image uploaded to Supabase storage: %s", url)
        return url
