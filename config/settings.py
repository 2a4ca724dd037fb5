"""
Runtime settings for plan gating and scheduling validation.

Values are read once from the environment at import time.
"""

import os
from pathlib import Path

# Plan catalog cache lifetime (5 minutes)
PLAN_CACHE_TTL_SECONDS = int(os.getenv("AURA_PLAN_CACHE_TTL_SECONDS", "300"))

# Seed catalog shipped with the package; point elsewhere to use a deployed copy
DEFAULT_PLANS_CONFIG_PATH = Path(__file__).parent / "plans.json"
PLANS_CONFIG_PATH = Path(os.getenv("AURA_PLANS_CONFIG_PATH", str(DEFAULT_PLANS_CONFIG_PATH)))

# Locale for user-facing denial messages ("en" or "pt-BR")
SUPPORTED_LOCALES = ("en", "pt-BR")
DEFAULT_LOCALE = "en"
MESSAGE_LOCALE = os.getenv("AURA_MESSAGE_LOCALE", DEFAULT_LOCALE)

# Sentinel limit value meaning "no limit"
UNLIMITED = -1


def resolve_locale(locale: str) -> str:
    """Return a supported locale, falling back to the default."""
    if locale in SUPPORTED_LOCALES:
        return locale
    return DEFAULT_LOCALE
