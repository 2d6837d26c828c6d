"""Cached analytics over the order repository."""

import structlog
from protean.utils.globals import current_domain

from order_management.analytics.cache import AnalyticsCache, MemoryCache
from order_management.analytics.snapshot import AnalyticsSnapshot, compute_snapshot
from order_management.order.order import Order
from order_management.order.repository import OrderRepository

logger = structlog.get_logger(__name__)

ANALYTICS_CACHE_KEY = "order_analytics"
DEFAULT_TTL_SECONDS = 300


class AnalyticsService:
    def __init__(self, cache: AnalyticsCache | None = None, ttl_seconds: float = DEFAULT_TTL_SECONDS) -> None:
        self.cache = cache if cache is not None else MemoryCache()
        self.ttl_seconds = ttl_seconds

    def get_snapshot(self) -> tuple[AnalyticsSnapshot, bool]:
        """Current snapshot and whether it came from the cache."""
        cached = self.cache.get(ANALYTICS_CACHE_KEY)
        if cached is not None:
            logger.info("Order analytics retrieved from cache")
            return cached, True

        repo: OrderRepository = current_domain.repository_for(Order)
        orders = repo.all_orders()
        snapshot = compute_snapshot(orders)
        self.cache.set(ANALYTICS_CACHE_KEY, snapshot, self.ttl_seconds)
        logger.info("Order analytics computed", total_orders=snapshot.total_orders)
        return snapshot, False
