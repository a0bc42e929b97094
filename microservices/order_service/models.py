"""
Order Service Data Models

Pydantic models for purchase order management: request payloads, the
persisted order aggregate, and response views.

External JSON uses camelCase field names; Python code uses snake_case.
Both spellings are accepted on input.
"""

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.networks import validate_email
from pydantic.alias_generators import to_camel
from typing import Optional, List, Dict, Any
from datetime import datetime
from decimal import Decimal
from enum import Enum
from uuid import UUID


class OrderStatus(str, Enum):
    """Order status enumeration"""
    CREATED = "CREATED"
    PAID = "PAID"
    SHIPPED = "SHIPPED"
    DELIVERED = "DELIVERED"
    CANCELLED = "CANCELLED"


INITIAL_ORDER_STATUS = OrderStatus.CREATED

# Matches the NUMERIC(19, 2) column holding order totals
MONEY_MAX_DIGITS = 19
MONEY_DECIMAL_PLACES = 2


class CamelModel(BaseModel):
    """Base model serializing to camelCase JSON"""
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


# Persisted Order Models

class OrderItem(BaseModel):
    """Line item embedded in an order"""
    model_config = ConfigDict(frozen=True)

    sku: str
    name: str
    quantity: int
    unit_price: Decimal


class Order(BaseModel):
    """Persisted order aggregate"""
    id: UUID
    customer_name: str
    customer_email: str
    items: List[OrderItem] = Field(default_factory=list)
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


# Request Models

class OrderItemDTO(CamelModel):
    """Order line item as exchanged over the API"""
    sku: str = Field(..., min_length=1, description="Stock keeping unit")
    name: str = Field(..., min_length=1, description="Display name")
    quantity: int = Field(..., gt=0, description="Units ordered")
    unit_price: Decimal = Field(
        ..., ge=0, max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES,
        description="Price per unit"
    )

    @field_validator('sku', 'name')
    @classmethod
    def validate_not_blank(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v


class OrderRequest(CamelModel):
    """Create or fully replace an order"""
    customer_name: str = Field(..., min_length=1, description="Customer full name")
    customer_email: str = Field(
        ..., description="Customer email address", json_schema_extra={"format": "email"}
    )
    items: List[OrderItemDTO] = Field(..., description="Order line items")
    total_amount: Decimal = Field(
        ..., ge=0, max_digits=MONEY_MAX_DIGITS, decimal_places=MONEY_DECIMAL_PLACES,
        description="Order total, stored as given"
    )

    @field_validator('customer_name')
    @classmethod
    def validate_customer_name(cls, v):
        if not v.strip():
            raise ValueError('must not be blank')
        return v

    @field_validator('customer_email')
    @classmethod
    def validate_customer_email(cls, v):
        # Validated like EmailStr but kept exactly as sent
        _, normalized = validate_email(v)
        if normalized.lower() != v.lower():
            raise ValueError('value is not a valid email address')
        return v

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "customerName": "Jane Doe",
                "customerEmail": "jane@example.com",
                "items": [
                    {"sku": "A1", "name": "Widget", "quantity": 2, "unitPrice": 9.99}
                ],
                "totalAmount": 19.98,
            }
        },
    )


class UpdateStatusRequest(CamelModel):
    """Change only the order status"""
    status: OrderStatus = Field(..., description="New order status")

    @field_validator('status', mode='before')
    @classmethod
    def normalize_status(cls, v):
        return v.strip().upper() if isinstance(v, str) else v


# Response Models

class OrderResponse(CamelModel):
    """Order response model"""
    id: UUID
    customer_name: str
    customer_email: str
    items: List[OrderItemDTO]
    total_amount: Decimal
    status: OrderStatus
    created_at: datetime
    updated_at: datetime


class OrderPage(CamelModel):
    """Paginated order list"""
    items: List[OrderResponse]
    total_count: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool


class ErrorResponse(BaseModel):
    """Error body for not-found and unexpected failures"""
    error: str


# Service Status Models

class HealthResponse(BaseModel):
    """Health check response"""
    status: str
    service: str = "order_service"
    port: int
    version: str
    database: str
    timestamp: datetime


class OrderServiceStatus(BaseModel):
    """Order service status response"""
    service: str = "order_service"
    status: str = "operational"
    port: int = 8210
    version: str = "1.0.0"
    capabilities: List[str] = Field(default_factory=list)
    routes: List[Dict[str, Any]] = Field(default_factory=list)
    routes_summary: Dict[str, Any] = Field(default_factory=dict)
    enforce_status_transitions: bool = False
    timestamp: Optional[datetime] = None
