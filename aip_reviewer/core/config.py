"""
Configuration
=============
Loads environment variables from .env file using python-dotenv.

Environment Variables:
    REVIEW_STRICT       — Promote warnings to errors (default: false)
    REVIEW_CATEGORIES   — Comma-separated categories to run (default: all)
    REVIEW_SKIP_RULES   — Comma-separated rule ids to skip (default: none)
    FIX_DRY_RUN         — Report fixes without applying them (default: false)
    LOG_LEVEL           — Logging level name for the CLI (default: INFO)

These values only seed ReviewerConfig.from_env() and the CLI defaults.
The reviewer and fixer themselves never read the environment.
"""
import os
from dotenv import load_dotenv

load_dotenv()

_TRUE_VALUES = {"1", "true", "yes", "on"}


def env_bool(name: str, default: bool = False) -> bool:
    raw = os.getenv(name)
    if raw is None:
        return default
    return raw.strip().lower() in _TRUE_VALUES


def env_list(name: str) -> list[str]:
    raw = os.getenv(name, "")
    return [item.strip() for item in raw.split(",") if item.strip()]


REVIEW_STRICT = env_bool("REVIEW_STRICT")
REVIEW_CATEGORIES: list[str] = env_list("REVIEW_CATEGORIES")
REVIEW_SKIP_RULES: list[str] = env_list("REVIEW_SKIP_RULES")
FIX_DRY_RUN = env_bool("FIX_DRY_RUN")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
