"""Tests for configuration loading and store wiring."""

from pathlib import Path
from unittest.mock import patch

import pytest

from app.config import (
    AppConfig,
    LocalStoreConfig,
    ResendConfig,
    SupabaseConfig,
    build_data_store,
    build_local_store,
    load_config,
)
from db.local_store import JsonFileKeyValueStore, MemoryKeyValueStore

FULL_ENV = {
    "SUPABASE_URL": "https://abc.supabase.co",
    "SUPABASE_SERVICE_KEY": "service-key",
    "SUPABASE_SCHEMA": "public",
    "SUPABASE_STORAGE_BUCKET": "site-images",
}


class TestLoadConfig:
    def test_defaults_with_nothing_set(self):
        cfg = load_config(secrets={}, environ={})

        assert cfg.supabase.is_configured is False
        assert cfg.resend.api_key == ""
        assert cfg.resend.from_email == "noreply@zentraholdings.com"
        assert cfg.resend.to_email == "admin@zentraholdings.com"
        assert cfg.local_store.backend == "file"
        assert cfg.local_store.directory == Path("~/.local/share/zentra").expanduser()

    def test_environment_variables(self):
        cfg = load_config(secrets={}, environ={**FULL_ENV, "RESEND_API_KEY": "re_x", "LOCAL_STORE_BACKEND": "memory"})

        assert cfg.supabase == SupabaseConfig(
            url="https://abc.supabase.co",
            service_key="service-key",
            schema="public",
            storage_bucket="site-images",
        )
        assert cfg.supabase.is_configured is True
        assert cfg.resend.api_key == "re_x"
        assert cfg.local_store.backend == "memory"

    def test_secrets_take_precedence_over_environment(self):
        secrets = {
            "supabase": {"url": "https://from-secrets.supabase.co"},
            "resend": {"api_key": "re_secret", "to_email": "boss@example.com", "timeout": 3},
        }

        cfg = load_config(secrets=secrets, environ=FULL_ENV)

        assert cfg.supabase.url == "https://from-secrets.supabase.co"
        assert cfg.supabase.service_key == "service-key"
        assert cfg.resend.api_key == "re_secret"
        assert cfg.resend.to_email == "boss@example.com"
        assert cfg.resend.timeout == 3.0

    def test_resend_timeout_from_environment(self):
        cfg = load_config(secrets={}, environ={"RESEND_TIMEOUT": "2.5"})

        assert cfg.resend.timeout == 2.5

    def test_resend_timeout_default(self):
        assert load_config(secrets={}, environ={}).resend.timeout == 10.0

    @pytest.mark.parametrize("missing", sorted(FULL_ENV))
    def test_any_missing_supabase_setting_disables_remote(self, missing):
        env = {k: v for k, v in FULL_ENV.items() if k != missing}

        assert load_config(secrets={}, environ=env).supabase.is_configured is False


class TestBuildStores:
    def test_memory_backend(self):
        assert isinstance(build_local_store(LocalStoreConfig(backend="memory")), MemoryKeyValueStore)

    def test_file_backend(self, tmp_path):
        store = build_local_store(LocalStoreConfig(backend="file", directory=tmp_path))
        assert isinstance(store, JsonFileKeyValueStore)
        assert store.directory == tmp_path

    def test_unknown_backend(self):
        with pytest.raises(ValueError, match="Unknown local store backend"):
            build_local_store(LocalStoreConfig(backend="redis"))

    def test_data_store_without_supabase_is_local_and_seeded(self):
        cfg = AppConfig(SupabaseConfig(), ResendConfig(), LocalStoreConfig(backend="memory"))

        store = build_data_store(cfg)

        assert store.remote_configured is False
        assert store.authenticate("admin123", "admin123")["id"] == "1"

    def test_data_store_with_supabase_uses_client(self):
        cfg = AppConfig(
            SupabaseConfig("https://abc.supabase.co", "key", "public", "site-images"),
            ResendConfig(),
            LocalStoreConfig(backend="memory"),
        )

        with patch("app.config.get_supabase_client") as get_client:
            store = build_data_store(cfg)

        get_client.assert_called_once_with("https://abc.supabase.co", "key", "public")
        assert store.remote_configured is True
        assert store.remote.client is get_client.return_value
        assert store.remote.storage_bucket == "site-images"
