"""
Order Mapper

Pure conversion between the external request/response shapes and the
persisted order aggregate. No I/O.
"""

import math
import uuid
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Union

from pydantic import ValidationError

from .models import (
    Order, OrderItem, OrderItemDTO, OrderPage, OrderRequest,
    OrderResponse, OrderStatus
)
from .protocols import OrderValidationError

# Location prefixes added by FastAPI request parsing
_REQUEST_LOCATIONS = {"body", "query", "path"}


def _camel(name: str) -> str:
    head, *tail = name.split("_")
    return head + "".join(part.capitalize() for part in tail)


def format_validation_errors(errors: Iterable[Mapping[str, Any]]) -> Dict[str, str]:
    """Flatten pydantic error dicts into a field path -> message mapping"""
    result: Dict[str, str] = {}
    for error in errors:
        loc = list(error.get("loc", ()))
        if loc and loc[0] in _REQUEST_LOCATIONS:
            loc = loc[1:]
        field = ".".join(_camel(part) if isinstance(part, str) else str(part) for part in loc)
        # First message per field wins
        result.setdefault(field or "body", error.get("msg", "Invalid value"))
    return result


def parse_order_request(payload: Union[OrderRequest, Mapping[str, Any], None]) -> OrderRequest:
    """Validate a raw payload into an OrderRequest"""
    if isinstance(payload, OrderRequest):
        return payload
    if payload is None:
        raise OrderValidationError({"body": "Request body is required"})
    try:
        return OrderRequest.model_validate(payload)
    except ValidationError as e:
        raise OrderValidationError(format_validation_errors(e.errors())) from e


def parse_status(value: Union[OrderStatus, str, None]) -> OrderStatus:
    """Resolve a status value, case-insensitive for strings"""
    if isinstance(value, OrderStatus):
        return value
    if value is None:
        raise OrderValidationError({"status": "Field required"})
    try:
        return OrderStatus(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(s.value for s in OrderStatus)
        raise OrderValidationError({"status": f"Must be one of: {allowed}"})


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _next_timestamp(previous: datetime, now: Optional[datetime] = None) -> datetime:
    """A timestamp strictly after `previous`"""
    now = now or utc_now()
    if now <= previous:
        return previous + timedelta(microseconds=1)
    return now


def to_items(dtos: Sequence[OrderItemDTO]) -> List[OrderItem]:
    return [
        OrderItem(sku=d.sku, name=d.name, quantity=d.quantity, unit_price=d.unit_price)
        for d in dtos
    ]


def to_item_dtos(items: Sequence[OrderItem]) -> List[OrderItemDTO]:
    return [
        OrderItemDTO(sku=i.sku, name=i.name, quantity=i.quantity, unit_price=i.unit_price)
        for i in items
    ]


def to_entity(
    request: OrderRequest,
    status: OrderStatus,
    now: Optional[datetime] = None
) -> Order:
    """Build a new order aggregate with a fresh identifier"""
    now = now or utc_now()
    return Order(
        id=uuid.uuid4(),
        customer_name=request.customer_name,
        customer_email=request.customer_email,
        items=to_items(request.items),
        total_amount=request.total_amount,
        status=status,
        created_at=now,
        updated_at=now,
    )


def copy_to_entity(
    request: OrderRequest,
    entity: Order,
    now: Optional[datetime] = None
) -> Order:
    """Replace the mutable fields; id, created_at and status are kept"""
    return entity.model_copy(update={
        "customer_name": request.customer_name,
        "customer_email": request.customer_email,
        "items": to_items(request.items),
        "total_amount": request.total_amount,
        "updated_at": _next_timestamp(entity.updated_at, now),
    })


def with_status(entity: Order, status: OrderStatus, now: Optional[datetime] = None) -> Order:
    return entity.model_copy(update={
        "status": status,
        "updated_at": _next_timestamp(entity.updated_at, now),
    })


def to_response(entity: Order) -> OrderResponse:
    return OrderResponse(
        id=entity.id,
        customer_name=entity.customer_name,
        customer_email=entity.customer_email,
        items=to_item_dtos(entity.items),
        total_amount=entity.total_amount,
        status=entity.status,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def to_page(entities: Sequence[Order], total: int, page: int, size: int) -> OrderPage:
    total_pages = math.ceil(total / size) if size > 0 else 0
    return OrderPage(
        items=[to_response(e) for e in entities],
        total_count=total,
        page=page,
        page_size=size,
        total_pages=total_pages,
        has_next=(page + 1) * size < total,
    )
