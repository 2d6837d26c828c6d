"""Order management FastAPI application.

Processes requests synchronously: every request runs inside the
``order_management`` domain context and goes through the ``OrderService``
pipelines.

Usage:
    uvicorn order_management.app:create_app --factory --host 0.0.0.0 --port 8000
"""

from uuid import uuid4

import structlog
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from order_management.api import router
from order_management.api.schemas import ApiResponse
from order_management.config import Settings
from order_management.domain import order_management
from order_management.order.service import OrderService
from order_management.seed import seed_reference_data

logger = structlog.get_logger(__name__)


def add_domain_context(app: FastAPI) -> None:
    """Push the order management domain context for each request."""

    @app.middleware("http")
    async def domain_context_middleware(request: Request, call_next):
        structlog.contextvars.bind_contextvars(request_id=uuid4().hex, method=request.method, path=request.url.path)
        try:
            with order_management.domain_context():
                response = await call_next(request)
            return response
        finally:
            structlog.contextvars.clear_contextvars()


async def _request_validation_failed(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = [f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in exc.errors()]
    body = ApiResponse(success=False, errors=errors)
    return JSONResponse(status_code=400, content=body.model_dump(mode="json"))


def create_app(settings: Settings | None = None, service: OrderService | None = None) -> FastAPI:
    settings = settings or Settings.from_env()

    order_management.init()

    app = FastAPI(
        title="Order Management API",
        description="Orders, discounts, status progression and analytics",
    )
    app.state.order_service = service or OrderService(settings=settings)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    add_domain_context(app)
    app.add_exception_handler(RequestValidationError, _request_validation_failed)
    app.include_router(router)

    @app.get("/health")
    async def health():
        return JSONResponse(content={"status": "ok", "domain": order_management.name})

    if settings.seed_on_startup:
        with order_management.domain_context():
            seed_reference_data()

    logger.info("Application started", seed_on_startup=settings.seed_on_startup)
    return app
