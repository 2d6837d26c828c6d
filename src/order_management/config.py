"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass

_TRUTHY = {"1", "true", "yes", "on"}


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError as exc:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from exc


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return raw.strip().lower() in _TRUTHY


@dataclass(frozen=True)
class Settings:
    analytics_cache_ttl_seconds: int = 300
    default_page_size: int = 10
    max_page_size: int = 100
    bulk_order_threshold: int = 10
    seed_on_startup: bool = True

    @classmethod
    def from_env(cls) -> "Settings":
        return cls(
            analytics_cache_ttl_seconds=_env_int("ANALYTICS_CACHE_TTL_SECONDS", cls.analytics_cache_ttl_seconds),
            default_page_size=_env_int("ORDERS_DEFAULT_PAGE_SIZE", cls.default_page_size),
            max_page_size=_env_int("ORDERS_MAX_PAGE_SIZE", cls.max_page_size),
            bulk_order_threshold=_env_int("ORDERS_BULK_THRESHOLD", cls.bulk_order_threshold),
            seed_on_startup=_env_bool("ORDERS_SEED_ON_STARTUP", cls.seed_on_startup),
        )
