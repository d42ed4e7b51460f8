from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Mapping, Optional

import streamlit as st

from db.database import SupabaseRemoteStore, get_supabase_client
from db.local_store import JsonFileKeyValueStore, KeyValueStore, MemoryKeyValueStore, seed_demo_data
from db.store import DataStore

logger = logging.getLogger(__name__)

DEFAULT_FROM_EMAIL = "noreply@zentraholdings.com"
DEFAULT_TO_EMAIL = "admin@zentraholdings.com"


# ---------------------- DATA CLASSES ----------------------

@dataclass
class SupabaseConfig:
    url: str = ""
    service_key: str = ""
    schema: str = ""
    storage_bucket: str = ""

    @property
    def is_configured(self) -> bool:
        # All four are needed; anything less means local-only mode
        return bool(self.url and self.service_key and self.schema and self.storage_bucket)


@dataclass
class ResendConfig:
    api_key: str = ""
    from_email: str = DEFAULT_FROM_EMAIL
    to_email: str = DEFAULT_TO_EMAIL
    timeout: float = 10.0


@dataclass
class LocalStoreConfig:
    backend: str = "file"  # "file" or "memory"
    directory: Path = Path("~/.local/share/zentra")


@dataclass
class AppConfig:
    supabase: SupabaseConfig
    resend: ResendConfig
    local_store: LocalStoreConfig


# ---------------------- LOADING ----------------------

def _setting(
    section: Mapping[str, Any],
    key: str,
    environ: Mapping[str, str],
    env_var: str,
    default: str = "",
) -> str:
    value = section.get(key)
    if value in (None, ""):
        value = environ.get(env_var, default)
    return str(value or default)


def _read_secrets() -> Mapping[str, Any]:
    # st.secrets raises when no secrets.toml exists at all
    try:
        return {k: st.secrets[k] for k in st.secrets}
    except FileNotFoundError:
        return {}


def load_config(
    secrets: Optional[Mapping[str, Any]] = None,
    environ: Optional[Mapping[str, str]] = None,
) -> AppConfig:
    """
    Build the config from Streamlit secrets sections ([supabase], [resend],
    [local_store]), using environment variables for anything not set there.
    """
    if secrets is None:
        secrets = _read_secrets()
    if environ is None:
        environ = os.environ

    sb = secrets.get("supabase", {})
    supabase_cfg = SupabaseConfig(
        url=_setting(sb, "url", environ, "SUPABASE_URL"),
        service_key=_setting(sb, "service_key", environ, "SUPABASE_SERVICE_KEY"),
        schema=_setting(sb, "schema", environ, "SUPABASE_SCHEMA"),
        storage_bucket=_setting(sb, "storage_bucket", environ, "SUPABASE_STORAGE_BUCKET"),
    )

    rs = secrets.get("resend", {})
    resend_cfg = ResendConfig(
        api_key=_setting(rs, "api_key", environ, "RESEND_API_KEY"),
        from_email=_setting(rs, "from_email", environ, "RESEND_FROM_EMAIL", DEFAULT_FROM_EMAIL),
        to_email=_setting(rs, "to_email", environ, "RESEND_TO_EMAIL", DEFAULT_TO_EMAIL),
        timeout=float(_setting(rs, "timeout", environ, "RESEND_TIMEOUT", "10")),
    )

    ls = secrets.get("local_store", {})
    local_cfg = LocalStoreConfig(
        backend=_setting(ls, "backend", environ, "LOCAL_STORE_BACKEND", "file"),
        directory=Path(
            _setting(ls, "directory", environ, "LOCAL_STORE_DIR", "~/.local/share/zentra")
        ).expanduser(),
    )

    return AppConfig(supabase=supabase_cfg, resend=resend_cfg, local_store=local_cfg)


def build_local_store(cfg: LocalStoreConfig) -> KeyValueStore:
    if cfg.backend == "memory":
        return MemoryKeyValueStore()
    if cfg.backend == "file":
        return JsonFileKeyValueStore(cfg.directory)
    raise ValueError(f"Unknown local store backend: {cfg.backend!r}")


def build_data_store(cfg: AppConfig) -> DataStore:
    local = build_local_store(cfg.local_store)
    seed_demo_data(local)

    remote = None
    if cfg.supabase.is_configured:
        client = get_supabase_client(
            cfg.supabase.url, cfg.supabase.service_key, cfg.supabase.schema
        )
        remote = SupabaseRemoteStore(client, cfg.supabase.storage_bucket)
        logger.info("Supabase configured successfully")
    else:
        logger.warning("Supabase settings not found. Using local storage fallback mode.")

    return DataStore(local=local, remote=remote)
