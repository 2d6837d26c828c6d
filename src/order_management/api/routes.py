"""FastAPI routes for the Orders API.

Routes translate HTTP to request objects, run them through the
``OrderService`` and map the ``Response`` back. The HTTP status comes from
the failure kind only.
"""

from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse

from order_management.api.schemas import (
    AnalyticsSchema,
    ApiResponse,
    CreateOrderSchema,
    OrderDetailSchema,
    OrderPageSchema,
    PlacedOrderSchema,
    StatusChangeSchema,
    StatusTransitionsSchema,
    UpdateOrderStatusSchema,
)
from order_management.order.requests import (
    CreateOrderRequest,
    GetAnalyticsRequest,
    GetOrderRequest,
    ListOrdersRequest,
    OrderItemRequest,
    UpdateOrderStatusRequest,
)
from order_management.order.service import OrderService
from order_management.order.status import TERMINAL_STATUSES, OrderStatus, parse_status, valid_transitions_from
from order_management.pipeline.response import ErrorKind, Response

_HTTP_STATUS_BY_ERROR = {
    ErrorKind.VALIDATION_FAILED: 400,
    ErrorKind.INVALID_ARGUMENT: 400,
    ErrorKind.INVALID_TRANSITION: 400,
    ErrorKind.NOT_FOUND: 404,
    ErrorKind.PERSISTENCE_FAILURE: 503,
    ErrorKind.UNEXPECTED_FAILURE: 500,
}


def get_order_service(request: Request) -> OrderService:
    return request.app.state.order_service


def _respond(result: Response, schema=None, success_status: int = 200) -> JSONResponse:
    data = None
    if result.success and result.data is not None:
        data = schema.model_validate(result.data) if schema is not None else result.data

    body = ApiResponse(
        success=result.success,
        data=data,
        message=result.message,
        errors=list(result.errors) or None,
    )
    status_code = success_status if result.success else _HTTP_STATUS_BY_ERROR[result.error]
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))


# ---------------------------------------------------------------------------
# Orders Router
# ---------------------------------------------------------------------------
router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", status_code=201)
async def create_order(body: CreateOrderSchema, service: OrderService = Depends(get_order_service)) -> JSONResponse:
    request = CreateOrderRequest(
        customer_id=body.customer_id,
        items=tuple(
            OrderItemRequest(product_id=item.product_id, quantity=item.quantity, unit_price=item.unit_price)
            for item in body.items
        ),
    )
    return _respond(service.create_order(request), PlacedOrderSchema, success_status=201)


@router.get("/analytics")
async def get_analytics(service: OrderService = Depends(get_order_service)) -> JSONResponse:
    result = service.get_analytics(GetAnalyticsRequest())
    if result.success:
        return _respond(Response.ok(AnalyticsSchema.from_snapshot(result.data), result.message))
    return _respond(result)


@router.get("/statuses/{status}/transitions")
async def get_status_transitions(status: str) -> JSONResponse:
    current = parse_status(status)
    if current is None:
        return _respond(
            Response.fail(ErrorKind.VALIDATION_FAILED, errors=["Valid order status is required"]),
        )

    transitions = [candidate.value for candidate in OrderStatus if candidate in valid_transitions_from(current)]
    data = StatusTransitionsSchema(
        status=current.value,
        valid_transitions=transitions,
        terminal=current in TERMINAL_STATUSES,
    )
    return _respond(Response.ok(data, "Valid transitions retrieved successfully"))


@router.put("/{order_id}/status")
async def update_order_status(
    order_id: str,
    body: UpdateOrderStatusSchema,
    service: OrderService = Depends(get_order_service),
) -> JSONResponse:
    request = UpdateOrderStatusRequest(order_id=order_id, new_status=body.new_status)
    return _respond(service.update_order_status(request), StatusChangeSchema)


@router.get("/{order_id}")
async def get_order(order_id: str, service: OrderService = Depends(get_order_service)) -> JSONResponse:
    return _respond(service.get_order(GetOrderRequest(order_id=order_id)), OrderDetailSchema)


@router.get("")
async def list_orders(
    page: int = 1,
    page_size: int | None = None,
    status: str | None = None,
    service: OrderService = Depends(get_order_service),
) -> JSONResponse:
    request = ListOrdersRequest(
        page=page,
        page_size=page_size if page_size is not None else service.settings.default_page_size,
        status=status,
    )
    return _respond(service.list_orders(request), OrderPageSchema)
