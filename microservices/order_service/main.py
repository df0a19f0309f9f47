"""
Order Microservice

Responsibilities:
- Transactional order creation (header + lines, all or nothing)
- Order queries with combinable filters
- Order status changes within the closed status set
"""

from fastapi import FastAPI, HTTPException, Depends, status, Query, Path, Body
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
import uvicorn
from contextlib import asynccontextmanager
from typing import Optional, List
from datetime import date, datetime, timezone
from decimal import Decimal

from core.config_manager import ConfigManager
from core.logger import setup_service_logger

from .models import (
    Order, OrderCreateRequest, OrderCreatedResponse, OrderFilter,
    Status, StatusUpdateRequest, StatusUpdateResponse,
)
from .order_service import OrderService
from .protocols import (
    InvalidStatusError, OrderNotFoundError, OrderServiceError,
    OrderTransactionError, OrderValidationError,
)
from .routes_registry import SERVICE_METADATA, get_routes_summary

# Initialize configuration
config_manager = ConfigManager("order_service")
config = config_manager.get_service_config()

# Setup loggers (use actual service name)
logger = setup_service_logger("order_service", level=config.log_level)

# Global service instance, set by lifespan
order_service: Optional[OrderService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    global order_service

    from core.postgres_client import PostgresClient
    from .factory import create_order_service

    db = PostgresClient("order_service", config_manager.get_infra_config())
    order_service = create_order_service(config=config_manager, db=db)
    logger.info(f"Order service started on port {config.service_port}")

    yield

    await db.close()
    order_service = None
    logger.info("Order service shutdown completed")


# Create FastAPI application
app = FastAPI(
    title="Order Service",
    description="Storefront order creation, querying and status management",
    version="1.0.0",
    lifespan=lifespan
)


# Dependency injection
def get_order_service() -> OrderService:
    """Get order service instance"""
    if not order_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Order service not initialized"
        )
    return order_service


# Health check endpoints

@app.get("/health")
async def health_check():
    """Service health check"""
    return {
        "status": "healthy",
        "service": config.service_name,
        "port": config.service_port,
        "version": SERVICE_METADATA["version"],
        "timestamp": datetime.now(timezone.utc).isoformat()
    }


@app.get("/health/detailed")
async def detailed_health_check(service: OrderService = Depends(get_order_service)):
    """Database connectivity probe"""
    health = await service.health_check()
    return {
        "service": config.service_name,
        "database": health["status"],
        "server_time": health["server_time"],
    }


@app.get("/api/v1/orders/info")
async def get_service_info():
    """Get order service information"""
    return {**SERVICE_METADATA, "routes": get_routes_summary()}


# Order endpoints

@app.post("/api/v1/orders", response_model=OrderCreatedResponse, status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreateRequest,
    service: OrderService = Depends(get_order_service)
):
    """Create an order with its line items in one transaction"""
    order_id = await service.create_order(request)
    return OrderCreatedResponse(message="Order created successfully", order_id=order_id)


@app.get("/api/v1/orders", response_model=List[Order])
async def list_orders(
    customer_id: Optional[int] = Query(None, alias="customerId", description="Filter by customer"),
    status_id: Optional[int] = Query(None, alias="statusId", description="Filter by status"),
    min_total: Optional[Decimal] = Query(None, alias="minTotal", description="Minimum total, inclusive"),
    max_total: Optional[Decimal] = Query(None, alias="maxTotal", description="Maximum total, inclusive"),
    date_from: Optional[date] = Query(None, alias="dateFrom", description="Created on or after"),
    date_to: Optional[date] = Query(None, alias="dateTo", description="Created on or before"),
    service: OrderService = Depends(get_order_service)
):
    """List orders, newest first"""
    filters = OrderFilter(
        customer_id=customer_id,
        status_id=status_id,
        min_total=min_total,
        max_total=max_total,
        date_from=date_from,
        date_to=date_to,
    )
    return await service.list_orders(filters)


@app.get("/api/v1/orders/{order_id}", response_model=Order)
async def get_order(
    order_id: int = Path(..., description="Order ID"),
    service: OrderService = Depends(get_order_service)
):
    """Get order details with items"""
    return await service.get_order(order_id)


@app.put("/api/v1/orders/{order_id}/status", response_model=StatusUpdateResponse)
async def update_order_status(
    order_id: int = Path(..., description="Order ID"),
    request: StatusUpdateRequest = Body(...),
    service: OrderService = Depends(get_order_service)
):
    """Change the status of an order"""
    await service.set_order_status(order_id, request.status_id)
    return StatusUpdateResponse(message="Order status updated successfully", order_id=order_id)


@app.get("/api/v1/order-statuses", response_model=List[Status])
async def list_order_statuses(service: OrderService = Depends(get_order_service)):
    """List the order statuses"""
    return await service.list_statuses()


# Error handlers

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_errors(exc)}
    )


@app.exception_handler(InvalidStatusError)
async def invalid_status_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderValidationError)
async def validation_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderNotFoundError)
async def not_found_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderTransactionError)
async def transaction_error_handler(request, exc):
    logger.error(f"Order transaction failed: {exc} (cause: {exc.__cause__!r})")
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)}
    )


@app.exception_handler(OrderServiceError)
async def service_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)}
    )


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the raw input values"""
    return [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in exc.errors()]


if __name__ == "__main__":
    # Print configuration summary for debugging
    config_manager.print_config_summary()

    uvicorn.run(
        "microservices.order_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
