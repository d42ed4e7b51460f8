# db/store.py
"""
Storage facade for the site.

Every operation tries Supabase first when it is configured. Remote errors
are logged and swallowed; the local key-value store then serves the call.
Writes always go to the local store as well, so it holds a mirror of what
was sent to Supabase.
"""
from __future__ import annotations

import base64
import logging
import time
import uuid
from dataclasses import dataclass, field
from typing import Any, Dict, List, Literal, Optional

from db.database import SupabaseRemoteStore
from db.local_store import KeyValueStore
from db.models import ADMIN_CREDENTIALS, STORAGE_KEYS, utc_now_iso

logger = logging.getLogger(__name__)

Backend = Literal["remote", "local"]


class AuthenticationError(Exception):
    pass


@dataclass
class FetchResult:
    records: List[Dict[str, Any]] = field(default_factory=list)
    backend: Backend = "local"


@dataclass
class WriteResult:
    success: bool
    used_database: bool
    record_id: Optional[str] = None

    @property
    def backend(self) -> Backend:
        return "remote" if self.used_database else "local"


def _newest_first(records: List[Dict[str, Any]]) -> List[Dict[str, Any]]:
    # sorted() is stable with reverse=True, so equal timestamps keep stored order
    return sorted(records, key=lambda r: r.get("created_at") or "", reverse=True)


class DataStore:
    def __init__(self, local: KeyValueStore, remote: Optional[SupabaseRemoteStore] = None):
        self.local = local
        self.remote = remote

    @property
    def remote_configured(self) -> bool:
        return self.remote is not None

    # ---------------------- READ ----------------------

    def fetch(self, collection: str) -> FetchResult:
        if self.remote is not None:
            try:
                records = self.remote.fetch(collection)
                logger.info("Fetched %d records from Supabase %s", len(records), collection)
                return FetchResult(records=records, backend="remote")
            except Exception as e:
                logger.warning("Supabase fetch failed for %s, using local store: %s", collection, e)

        key = STORAGE_KEYS.get(collection)
        if key is None:
            logger.warning("No storage key found for collection: %s", collection)
            return FetchResult()

        records = _newest_first(self.local.read_records(key))
        logger.debug("Fetched %d records from local store for %s", len(records), collection)
        return FetchResult(records=records, backend="local")

    # ---------------------- WRITE ----------------------

    def insert(self, collection: str, record: Dict[str, Any]) -> WriteResult:
        new_item = {**record, "created_at": utc_now_iso()}
        new_item.pop("id", None)

        used_database = False
        record_id = ""
        if self.remote is not None:
            try:
                record_id = self.remote.insert(collection, new_item)
                logger.info("Inserted record into Supabase %s: %s", collection, record_id)
                used_database = True
            except Exception as e:
                logger.warning("Supabase insert failed for %s, using local store: %s", collection, e)

        record_id = record_id or str(uuid.uuid4())
        key = STORAGE_KEYS.get(collection)
        if key is not None:
            existing = self.local.read_records(key)
            existing.insert(0, {**new_item, "id": record_id})
            self.local.write_records(key, existing)
            logger.debug("Updated local store for %s", collection)

        return WriteResult(success=True, used_database=used_database, record_id=record_id)

    def update(self, collection: str, record_id: str, changes: Dict[str, Any]) -> WriteResult:
        stamped = {**changes, "updated_at": utc_now_iso()}
        stamped.pop("id", None)

        used_database = False
        if self.remote is not None:
            try:
                self.remote.update(collection, record_id, stamped)
                logger.info("Updated record in Supabase %s: %s", collection, record_id)
                used_database = True
            except Exception as e:
                logger.warning("Supabase update failed for %s, using local store: %s", collection, e)

        key = STORAGE_KEYS.get(collection)
        if key is not None:
            existing = self.local.read_records(key)
            for index, item in enumerate(existing):
                if item.get("id") == record_id:
                    existing[index] = {**item, **stamped}
                    self.local.write_records(key, existing)
                    logger.debug("Updated local store for %s: %s", collection, record_id)
                    break

        return WriteResult(success=True, used_database=used_database, record_id=record_id)

    def delete(self, collection: str, record_id: str) -> WriteResult:
        used_database = False
        if self.remote is not None:
            try:
                self.remote.delete(collection, record_id)
                logger.info("Deleted record from Supabase %s: %s", collection, record_id)
                used_database = True
            except Exception as e:
                logger.warning("Supabase delete failed for %s, using local store: %s", collection, e)

        key = STORAGE_KEYS.get(collection)
        if key is not None:
            existing = self.local.read_records(key)
            remaining = [item for item in existing if item.get("id") != record_id]
            self.local.write_records(key, remaining)
            logger.debug("Updated local store for %s (deleted): %s", collection, record_id)

        return WriteResult(success=True, used_database=used_database, record_id=record_id)

    # ---------------------- AUTH ----------------------

    def authenticate(self, username: str, password: str) -> Dict[str, Any]:
        """Plaintext credential check, Supabase first, then the local mirror."""
        try:
            if self.remote is not None:
                try:
                    user = self.remote.find_credentials(username, password)
                    if user is not None:
                        logger.info("Supabase authentication successful")
                        return user
                except Exception as e:
                    logger.warning("Supabase authentication failed, falling back to local store: %s", e)

            credentials = self.local.read_records(STORAGE_KEYS[ADMIN_CREDENTIALS])
            for cred in credentials:
                if cred.get("username") == username and cred.get("password") == password:
                    logger.info("Local store authentication successful")
                    return cred
        except Exception as e:
            raise AuthenticationError("Invalid username or password") from e

        raise AuthenticationError("Invalid username or password")

    # ---------------------- IMAGES ----------------------

    def upload_image(self, filename: str, content: bytes, content_type: str = "image/jpeg") -> str:
        """Return a URL for the image: a Supabase public URL, or a base64 data URL without a remote."""
        if not content:
            raise ValueError("No file provided")

        try:
            if self.remote is not None:
                path = f"images/{int(time.time() * 1000)}_{filename}"
                return self.remote.upload_image(path, content, content_type)
            encoded = base64.b64encode(content).decode("ascii")
            return f"data:{content_type};base64,{encoded}"
        except Exception as e:
            logger.error("Error uploading image %s: %s", filename, e)
            raise
