"""
Environment-driven configuration. Values are read lazily so tests and
entry points can set variables before first use.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Optional

from .models import Madhab, Strictness

logger = logging.getLogger(__name__)

_REPO_ROOT = Path(__file__).resolve().parent.parent


def get_history_path() -> Path:
    return _REPO_ROOT / "db" / "history" / "history.csv"


# --- Rule source ---
def get_rule_cache_ttl() -> float:
    return float(os.environ.get("HALAL_RULE_CACHE_TTL", "600"))


def get_db_dsn() -> Optional[str]:
    return os.environ.get("HALAL_DB_DSN", "").strip() or None


# --- OpenFoodFacts ---
def get_openfoodfacts_base_url() -> str:
    return os.environ.get(
        "OPENFOODFACTS_BASE_URL", "https://world.openfoodfacts.org/api/v2"
    ).rstrip("/")


def get_openfoodfacts_timeout() -> float:
    return float(os.environ.get("OPENFOODFACTS_TIMEOUT", "5.0"))


def get_openfoodfacts_user_agent() -> str:
    return os.environ.get("OPENFOODFACTS_USER_AGENT", "HalalEngine/1.0")


# --- Analysis defaults ---
def get_default_madhab() -> Madhab:
    return Madhab(os.environ.get("HALAL_DEFAULT_MADHAB", "general").strip().lower())


def get_default_strictness() -> Strictness:
    return Strictness(os.environ.get("HALAL_DEFAULT_STRICTNESS", "moderate").strip().lower())


def get_log_level() -> str:
    return os.environ.get("HALAL_LOG_LEVEL", "INFO").upper()


def log_config() -> None:
    logger.info(
        "CONFIG: rule_cache_ttl=%ss db=%s off_url=%s off_timeout=%ss "
        "default_madhab=%s default_strictness=%s log_level=%s",
        get_rule_cache_ttl(),
        bool(get_db_dsn()),
        get_openfoodfacts_base_url(),
        get_openfoodfacts_timeout(),
        get_default_madhab().value,
        get_default_strictness().value,
        get_log_level(),
    )
