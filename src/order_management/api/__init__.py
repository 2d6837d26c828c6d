"""Order management API package."""

from order_management.api.routes import router

__all__ = ["router"]
