"""
Order Microservice

Responsibilities:
- Purchase order creation, retrieval and listing
- Full order replacement and status changes
- Order deletion
"""

from fastapi import FastAPI, HTTPException, Depends, Request, Response, status, Query
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn
import logging
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from typing import Optional
from uuid import UUID

from core.config import get_settings
from core.logger import setup_service_logger

from .factory import create_order_service
from .mapper import format_validation_errors
from .models import (
    ErrorResponse, HealthResponse, OrderPage, OrderRequest, OrderResponse,
    OrderServiceStatus, UpdateStatusRequest
)
from .order_service import OrderService
from .protocols import OrderNotFoundError, OrderServiceError, OrderValidationError
from .routes_registry import SERVICE_METADATA, get_routes, get_routes_summary

# Initialize configuration
settings = get_settings()
config = settings.service

# Setup loggers (use actual service name)
logger = setup_service_logger("order_service", level=settings.logging.log_level)

# Global service instance
order_service: Optional[OrderService] = None
SERVICE_PORT = config.service_port
SERVICE_VERSION = SERVICE_METADATA["version"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifecycle management"""
    global order_service

    try:
        order_service = create_order_service(settings)
        await order_service.repository.initialize()
        logger.info(f"✅ Order service started on port {SERVICE_PORT}")
        yield
    except Exception as e:
        logger.error(f"Failed to initialize order service: {e}")
        raise
    finally:
        if order_service:
            try:
                await order_service.repository.close()
                logger.info("Order service database connections closed")
            except Exception as e:
                logger.error(f"❌ Failed to close repository: {e}")
            order_service = None


app = FastAPI(
    title="Order Service",
    description="Purchase order lifecycle management",
    version=SERVICE_VERSION,
    lifespan=lifespan,
)


# ====================
# Dependency Injection
# ====================

async def get_order_service() -> OrderService:
    """Get order service instance"""
    if not order_service:
        raise HTTPException(status_code=503, detail="Order service not initialized")
    return order_service


def _parse_order_id(order_id: str) -> UUID:
    """Identifiers are UUIDs; anything else cannot exist"""
    try:
        return UUID(order_id)
    except ValueError:
        raise OrderNotFoundError(order_id)


# ====================
# Health Check and Service Info
# ====================

@app.get("/health", response_model=HealthResponse)
async def health_check(service: OrderService = Depends(get_order_service)):
    """Basic health check"""
    result = await service.health_check()
    return HealthResponse(
        status=result["status"],
        service=SERVICE_METADATA["service_name"],
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
        database=result["database"],
        timestamp=result["timestamp"],
    )


@app.get("/status", response_model=OrderServiceStatus)
async def service_status():
    """Service metadata and route table"""
    return OrderServiceStatus(
        service=SERVICE_METADATA["service_name"],
        port=SERVICE_PORT,
        version=SERVICE_VERSION,
        capabilities=SERVICE_METADATA["capabilities"],
        routes=get_routes(),
        routes_summary=get_routes_summary(),
        enforce_status_transitions=config.enforce_status_transitions,
        timestamp=datetime.now(timezone.utc),
    )


# ====================
# Order Management
# ====================

@app.post(
    "/api/v1/orders",
    response_model=OrderResponse,
    status_code=status.HTTP_201_CREATED,
    responses={400: {"description": "Validation error"}},
)
async def create_order(
    request: OrderRequest,
    service: OrderService = Depends(get_order_service)
):
    """Create order"""
    return await service.create_order(request)


@app.get("/api/v1/orders", response_model=OrderPage)
async def list_orders(
    status_filter: Optional[str] = Query(None, alias="status", description="Exact status filter"),
    page: int = Query(0, description="Zero-based page index"),
    size: Optional[int] = Query(None, description="Page size"),
    service: OrderService = Depends(get_order_service)
):
    """List orders with pagination and optional status filter"""
    return await service.list_orders(status=status_filter, page=page, size=size)


@app.get(
    "/api/v1/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    """Get order by id"""
    return await service.get_order(_parse_order_id(order_id))


@app.put(
    "/api/v1/orders/{order_id}",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 400: {"description": "Validation error"}},
)
async def update_order(
    order_id: str,
    request: OrderRequest,
    service: OrderService = Depends(get_order_service)
):
    """Replace the whole order"""
    return await service.update_order(_parse_order_id(order_id), request)


@app.patch(
    "/api/v1/orders/{order_id}/status",
    response_model=OrderResponse,
    responses={404: {"model": ErrorResponse}, 400: {"description": "Validation error"}},
)
async def update_order_status(
    order_id: str,
    request: UpdateStatusRequest,
    service: OrderService = Depends(get_order_service)
):
    """Change only the order status"""
    return await service.update_order_status(_parse_order_id(order_id), request.status)


@app.delete(
    "/api/v1/orders/{order_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    responses={404: {"model": ErrorResponse}},
)
async def delete_order(
    order_id: str,
    service: OrderService = Depends(get_order_service)
):
    """Delete order"""
    await service.delete_order(_parse_order_id(order_id))
    return Response(status_code=status.HTTP_204_NO_CONTENT)


# ====================
# Error Handlers
# ====================

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=format_validation_errors(exc.errors())
    )


@app.exception_handler(OrderValidationError)
async def validation_error_handler(request: Request, exc: OrderValidationError):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=exc.errors
    )


@app.exception_handler(OrderNotFoundError)
async def not_found_error_handler(request: Request, exc: OrderNotFoundError):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"error": str(exc)}
    )


@app.exception_handler(OrderServiceError)
async def service_error_handler(request: Request, exc: OrderServiceError):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": str(exc)}
    )


@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    logger.error(f"Unhandled error on {request.method} {request.url.path}: {exc}")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": "Internal server error"}
    )


if __name__ == "__main__":
    uvicorn.run(
        "microservices.order_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=settings.logging.log_level.lower()
    )
