"""
Tests for settings resolution and storage construction
"""
import json

import pytest

from referral_tracker import dependencies
from referral_tracker.config import Settings
from referral_tracker.dependencies import build_storage, get_storage, init_storage
from referral_tracker.storage.memory import MemStorage
from referral_tracker.storage.sql import SQLStorage


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    """No REFERRAL_TRACKER_* variables, data directory in tmp"""
    for name in ("STORAGE", "PORT", "SEED", "CURRENCY", "LOG_LEVEL", "DB_ECHO"):
        monkeypatch.delenv("REFERRAL_TRACKER_" + name, raising=False)
    monkeypatch.delenv("DATABASE_URL", raising=False)
    monkeypatch.setenv("REFERRAL_TRACKER_DATA_DIR", str(tmp_path))
    return tmp_path


class TestSettings:

    def test_defaults(self, clean_env):
        settings = Settings([])

        assert settings.storage_backend == "sql"
        assert settings.port == 5001
        assert settings.seed_on_startup is False
        assert settings.currency_symbol == "₪"
        assert settings.log_level == "INFO"
        assert settings.database_url == f"sqlite:///{clean_env / 'referrals.db'}"

    def test_config_file(self, clean_env):
        (clean_env / "config.json").write_text(json.dumps({
            "storage": "memory",
            "port": 8080,
            "currency_symbol": "$",
            "seed": True,
        }))

        settings = Settings([])

        assert settings.storage_backend == "memory"
        assert settings.port == 8080
        assert settings.currency_symbol == "$"
        assert settings.seed_on_startup is True

    def test_env_overrides_config_file(self, clean_env, monkeypatch):
        (clean_env / "config.json").write_text(json.dumps({"port": 8080}))
        monkeypatch.setenv("REFERRAL_TRACKER_PORT", "9090")
        monkeypatch.setenv("REFERRAL_TRACKER_LOG_LEVEL", "debug")

        settings = Settings([])

        assert settings.port == 9090
        assert settings.log_level == "DEBUG"

    def test_flags_override_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("REFERRAL_TRACKER_PORT", "9090")
        monkeypatch.setenv("DATABASE_URL", "postgresql://db/referrals")

        settings = Settings(["--port", "7000", "--storage", "memory", "--seed",
                             "--database-url", "sqlite:///other.db"])

        assert settings.port == 7000
        assert settings.storage_backend == "memory"
        assert settings.seed_on_startup is True
        assert settings.database_url == "sqlite:///other.db"

    def test_database_url_from_env(self, clean_env, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgresql://db/referrals")

        assert Settings([]).database_url == "postgresql://db/referrals"

    def test_unknown_flags_are_ignored(self, clean_env):
        settings = Settings(["-q", "--tb=short", "tests/"])

        assert settings.port == 5001

    def test_invalid_storage_backend(self, clean_env, monkeypatch):
        monkeypatch.setenv("REFERRAL_TRACKER_STORAGE", "redis")

        with pytest.raises(ValueError):
            Settings([]).storage_backend


class TestBuildStorage:

    def test_memory_backend(self, clean_env, monkeypatch):
        monkeypatch.setenv("REFERRAL_TRACKER_CURRENCY", "€")

        storage = build_storage(Settings(["--storage", "memory"]))

        assert isinstance(storage, MemStorage)
        assert storage.currency_symbol == "€"

    def test_sqlite_file_backend(self, clean_env):
        data_dir = clean_env / "nested"

        storage = build_storage(Settings(["--data-dir", str(data_dir)]))

        assert isinstance(storage, SQLStorage)
        assert (data_dir / "referrals.db").exists()
        assert storage.get_all_positions() == []

    def test_get_storage_requires_init(self, monkeypatch):
        monkeypatch.setattr(dependencies, "_storage", None)

        with pytest.raises(RuntimeError):
            get_storage()

        storage = MemStorage()
        init_storage(storage)
        assert get_storage() is storage
