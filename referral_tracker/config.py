"""
Configuration management

Values are resolved in order: command-line flags, environment variables,
``config.json`` in the data directory, built-in defaults.
"""
import argparse
import json
import os
from pathlib import Path
from typing import List, Optional

from .constants import DEFAULT_CURRENCY_SYMBOL

DEFAULT_DATA_DIR = "~/.referral-tracker"
STORAGE_BACKENDS = ("sql", "memory")

ENV_PREFIX = "REFERRAL_TRACKER_"


def _env(name: str) -> Optional[str]:
    value = os.environ.get(ENV_PREFIX + name)
    return value if value else None


def _as_bool(value) -> bool:
    if isinstance(value, bool):
        return value
    return str(value).strip().lower() in ("1", "true", "yes", "on")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Referral Tracker API', allow_abbrev=False)
    parser.add_argument('--data-dir', default=None, help=f'Data directory (default: {DEFAULT_DATA_DIR})')
    parser.add_argument('--storage', choices=STORAGE_BACKENDS, default=None, help='Storage backend (default: sql)')
    parser.add_argument('--database-url', default=None, help='SQLAlchemy URL (default: SQLite file in the data directory)')
    parser.add_argument('--port', type=int, default=None, help='Port to run on (default: 5001)')
    parser.add_argument('--seed', action='store_true', default=None, help='Load sample data into an empty store')
    return parser


class Settings:
    """Application settings"""

    def __init__(self, argv: Optional[List[str]] = None):
        # parse_known_args so that foreign flags (e.g. pytest's) are ignored
        args, _ = build_parser().parse_known_args(argv if argv is not None else [])
        self._args = args

        data_dir = args.data_dir or _env("DATA_DIR") or DEFAULT_DATA_DIR
        self.data_dir = Path(os.path.expanduser(data_dir))
        self.config_file = self.data_dir / "config.json"
        self.data = self._load()

    def _load(self) -> dict:
        """Load configuration from file"""
        if self.config_file.exists():
            with open(self.config_file, 'r') as f:
                return json.load(f)
        return {}

    def _resolve(self, arg_value, env_name: str, key: str, default):
        if arg_value is not None:
            return arg_value
        env_value = _env(env_name)
        if env_value is not None:
            return env_value
        return self.data.get(key, default)

    @property
    def storage_backend(self) -> str:
        backend = self._resolve(self._args.storage, "STORAGE", "storage", "sql")
        if backend not in STORAGE_BACKENDS:
            raise ValueError(f"Unknown storage backend: {backend}. Must be one of: {', '.join(STORAGE_BACKENDS)}")
        return backend

    @property
    def database_url(self) -> str:
        url = self._args.database_url or os.environ.get("DATABASE_URL") or self.data.get("database_url")
        if url:
            return url
        return f"sqlite:///{self.data_dir / 'referrals.db'}"

    @property
    def port(self) -> int:
        return int(self._resolve(self._args.port, "PORT", "port", 5001))

    @property
    def seed_on_startup(self) -> bool:
        return _as_bool(self._resolve(self._args.seed, "SEED", "seed", False))

    @property
    def currency_symbol(self) -> str:
        return self._resolve(None, "CURRENCY", "currency_symbol", DEFAULT_CURRENCY_SYMBOL)

    @property
    def log_level(self) -> str:
        return str(self._resolve(None, "LOG_LEVEL", "log_level", "INFO")).upper()

    @property
    def db_echo(self) -> bool:
        return _as_bool(self._resolve(None, "DB_ECHO", "db_echo", False))
