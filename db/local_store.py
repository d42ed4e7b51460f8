# db/local_store.py
"""
Local key-value persistence used when Supabase is unavailable, and as a
mirror of every write when it is.

Each collection lives under a fixed key (see `STORAGE_KEYS`) holding a JSON
array of records.
"""
from __future__ import annotations

import json
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Dict, List, Optional

from db.models import (
    ADMIN_CREDENTIALS,
    BOOKINGS,
    GALLERY,
    PROJECTS,
    SERVICES,
    SLIDER_IMAGES,
    STORAGE_KEYS,
    TESTIMONIALS,
    utc_now_iso,
)

logger = logging.getLogger(__name__)


class KeyValueStore(ABC):
    """String keys to string values, nothing more."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        ...

    def read_records(self, key: str) -> List[Dict[str, Any]]:
        # Malformed data is not recovered from: json errors reach the caller
        return json.loads(self.get(key) or "[]")

    def write_records(self, key: str, records: List[Dict[str, Any]]) -> None:
        self.set(key, json.dumps(records))


class MemoryKeyValueStore(KeyValueStore):
    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value

    def remove(self, key: str) -> None:
        self._data.pop(key, None)


class JsonFileKeyValueStore(KeyValueStore):
    """One `<key>.json` file per key inside `directory`."""

    def __init__(self, directory: Path | str):
        self.directory = Path(directory).expanduser()
        self.directory.mkdir(parents=True, exist_ok=True)

    def _path(self, key: str) -> Path:
        return self.directory / f"{key}.json"

    def get(self, key: str) -> Optional[str]:
        path = self._path(key)
        if not path.exists():
            return None
        return path.read_text(encoding="utf-8")

    def set(self, key: str, value: str) -> None:
        path = self._path(key)
        tmp = path.with_suffix(".json.tmp")
        tmp.write_text(value, encoding="utf-8")
        tmp.replace(path)

    def remove(self, key: str) -> None:
        self._path(key).unlink(missing_ok=True)


# ---------------------- DEMO DATA ----------------------

_PEXELS = "https://images.pexels.com/photos/{}/pexels-photo-{}.jpeg?auto=compress&cs=tinysrgb&w={}"


def _photo(photo_id: int, width: int = 800) -> str:
    return _PEXELS.format(photo_id, photo_id, width)


def _demo_data(now: str) -> Dict[str, List[Dict[str, Any]]]:
    return {
        SERVICES: [
            {
                "id": "1",
                "title": "Professional Lawn Mowing",
                "description": "Regular lawn mowing service to keep your grass healthy and well-maintained.",
                "image": _photo(1453499),
                "category": "maintenance",
                "created_at": now,
            },
            {
                "id": "2",
                "title": "Landscape Design",
                "description": "Custom landscape design services to transform your outdoor space.",
                "image": _photo(1080696),
                "category": "design",
                "created_at": now,
            },
            {
                "id": "3",
                "title": "Tree Trimming & Pruning",
                "description": "Professional tree care services to maintain healthy and beautiful trees.",
                "image": _photo(416978),
                "category": "maintenance",
                "created_at": now,
            },
        ],
        PROJECTS: [
            {
                "id": "1",
                "title": "Modern Front Yard Makeover",
                "description": "Complete transformation of a residential front yard with new landscaping.",
                "before_image": _photo(1453499),
                "after_image": _photo(1080696),
                "client_name": "John Smith",
                "created_at": now,
            },
            {
                "id": "2",
                "title": "Backyard Garden Installation",
                "description": "Beautiful garden installation with native plants and irrigation system.",
                "before_image": _photo(416978),
                "after_image": _photo(1049298),
                "client_name": "Mary Johnson",
                "created_at": now,
            },
        ],
        GALLERY: [
            {"id": "1", "image": _photo(1453499), "caption": "Beautiful lawn maintenance",
             "category": "lawn-care", "created_at": now},
            {"id": "2", "image": _photo(1080696), "caption": "Professional landscaping",
             "category": "landscaping", "created_at": now},
            {"id": "3", "image": _photo(416978), "caption": "Garden installation",
             "category": "garden", "created_at": now},
        ],
        TESTIMONIALS: [
            {"id": "1", "client_name": "Sarah Johnson",
             "review_text": "Excellent service! My lawn has never looked better.",
             "rating": 5, "status": "approved", "created_at": now},
            {"id": "2", "client_name": "Mike Davis",
             "review_text": "Professional team and great results. Highly recommended!",
             "rating": 5, "status": "approved", "created_at": now},
            {"id": "3", "client_name": "Lisa Chen",
             "review_text": "Amazing transformation of our backyard. Thank you!",
             "rating": 4, "status": "pending", "created_at": now},
        ],
        SLIDER_IMAGES: [
            {"id": "1", "image": _photo(1453499, 1920),
             "caption": "Professional Lawn Care Services", "created_at": now},
            {"id": "2", "image": _photo(1080696, 1920),
             "caption": "Beautiful Landscape Design", "created_at": now},
        ],
        ADMIN_CREDENTIALS: [
            {"id": "1", "username": "admin123", "password": "admin123", "updated_at": now},
        ],
        BOOKINGS: [],
    }


def seed_demo_data(store: KeyValueStore) -> List[str]:
    """Fill every missing collection key with demo records. Returns the keys written."""
    written = []
    for collection, records in _demo_data(utc_now_iso()).items():
        key = STORAGE_KEYS[collection]
        if store.get(key) is None:
            store.write_records(key, records)
            written.append(key)
    if written:
        logger.info("Seeded local store with demo data: %s", ", ".join(written))
    return written
