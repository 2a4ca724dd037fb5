"""Configuration module for the scheduling and plan gating core."""

from config.settings import (
    MESSAGE_LOCALE,
    PLAN_CACHE_TTL_SECONDS,
    PLANS_CONFIG_PATH,
    UNLIMITED,
)

__all__ = [
    "MESSAGE_LOCALE",
    "PLAN_CACHE_TTL_SECONDS",
    "PLANS_CONFIG_PATH",
    "UNLIMITED",
]
