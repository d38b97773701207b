"""
Runtime configuration from environment variables.

Environment Variables:
    PAYMENTS_STORE: Ledger backend (sqlite, memory, file) - default: sqlite
    PAYMENTS_DB_URL: SQLAlchemy URL for the sqlite backend - default: sqlite:///transactions.db
    PAYMENTS_JOURNAL_PATH: Journal file for the file backend - default: transactions.journal
    PAYMENTS_JOURNAL_FSYNC: Fsync every journal append (1/0) - default: 1
    PAYMENTS_LOG_LEVEL: DEBUG, INFO, WARNING, ERROR - default: WARNING
    PAYMENTS_LOG_FORMAT: json, text - default: json
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from .log.factory import DEFAULT_JOURNAL_PATH, STORE_KINDS
from .log.sql_store import DEFAULT_DB_URL

_TRUE = ("1", "true", "yes", "on")
_FALSE = ("0", "false", "no", "off")


@dataclass(frozen=True)
class Settings:
    store: str = "sqlite"
    db_url: str = DEFAULT_DB_URL
    journal_path: str = DEFAULT_JOURNAL_PATH
    journal_fsync: bool = True
    log_level: str = "WARNING"
    log_format: str = "json"


def _env_str(env: Mapping[str, str], key: str, default: str) -> str:
    val = env.get(key)
    if val is None or not val.strip():
        return default
    return val.strip()


def _env_bool(env: Mapping[str, str], key: str, default: bool) -> bool:
    val = env.get(key)
    if not val:
        return default
    val = val.strip().lower()
    if val in _TRUE:
        return True
    if val in _FALSE:
        return False
    raise ValueError(f"{key} must be a boolean, got {val!r}")


def load_settings(env: Optional[Mapping[str, str]] = None) -> Settings:
    """
    Build Settings from the environment.

    Raises:
        ValueError: If a variable holds an unusable value
    """
    env = os.environ if env is None else env

    store = _env_str(env, "PAYMENTS_STORE", "sqlite").lower()
    if store not in STORE_KINDS:
        raise ValueError(f"PAYMENTS_STORE must be one of {', '.join(STORE_KINDS)}, got {store!r}")

    log_format = _env_str(env, "PAYMENTS_LOG_FORMAT", "json").lower()
    if log_format not in ("json", "text"):
        raise ValueError(f"PAYMENTS_LOG_FORMAT must be json or text, got {log_format!r}")

    return Settings(
        store=store,
        db_url=_env_str(env, "PAYMENTS_DB_URL", DEFAULT_DB_URL),
        journal_path=_env_str(env, "PAYMENTS_JOURNAL_PATH", DEFAULT_JOURNAL_PATH),
        journal_fsync=_env_bool(env, "PAYMENTS_JOURNAL_FSYNC", True),
        log_level=_env_str(env, "PAYMENTS_LOG_LEVEL", "WARNING").upper(),
        log_format=log_format,
    )
