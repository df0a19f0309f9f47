"""
Catalog Microservice

Responsibilities:
- Garment catalog (categories, sizes, colors, garments)
- Per-size stock allocation ledger
- Color variant registration with image upload
"""

import asyncio
import json
from contextlib import asynccontextmanager
from datetime import datetime, timezone
from decimal import Decimal
from typing import List, Optional

import uvicorn
from fastapi import Body, Depends, FastAPI, File, Form, HTTPException, Path, Query, UploadFile, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from core.config_manager import ConfigManager
from core.logger import setup_service_logger

from .catalog_service import CatalogService
from .models import (
    Category, Color, ColorRegistrationResponse, ColorVariant, Garment,
    GarmentCreateRequest, GarmentFilter, GarmentResponse, GarmentUpdateRequest,
    ImageFile, ImageUploadResponse, MessageResponse, Size,
    SizeRegistrationRequest, StockDetailResponse,
)
from .protocols import CatalogServiceError, CatalogValidationError, GarmentNotFoundError
from .routes_registry import SERVICE_METADATA, get_routes_summary

# Initialize configuration
config_manager = ConfigManager("catalog_service")
config = config_manager.get_service_config()

# Setup loggers
logger = setup_service_logger("catalog_service", level=config.log_level)

# Global service instance, set by lifespan
catalog_service: Optional[CatalogService] = None


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan management"""
    global catalog_service

    from core.minio_client import ObjectStorageClient
    from core.postgres_client import PostgresClient
    from .factory import create_catalog_service

    infra = config_manager.get_infra_config()
    db = PostgresClient("catalog_service", infra)
    storage = ObjectStorageClient.from_config(infra)

    try:
        await asyncio.to_thread(storage.ensure_bucket)
    except Exception as e:
        logger.warning(f"Object storage unavailable at startup: {e}. Image uploads will fail until it recovers.")

    catalog_service = create_catalog_service(config=config_manager, db=db, storage=storage)
    logger.info(f"Catalog service started on port {config.service_port}")

    yield

    await db.close()
    catalog_service = None
    logger.info("Catalog service shutdown completed")


# Create FastAPI application
app = FastAPI(
    title="Catalog Service",
    description="Garment catalog, size stock allocation and color variants",
    version="1.0.0",
    lifespan=lifespan
)


# Dependency injection
def get_catalog_service() -> CatalogService:
    """Get catalog service instance"""
    if not catalog_service:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Catalog service not initialized"
        )
    return catalog_service


async def _read_image(upload: UploadFile) -> ImageFile:
    return ImageFile(
        filename=upload.filename or "image",
        content=await upload.read(),
        content_type=upload.content_type,
    )


def _parse_color_ids(raw: Optional[str]) -> List[int]:
    """``colors`` arrives as a JSON-encoded array of color ids"""
    if not raw:
        raise CatalogValidationError("colors is required")
    try:
        color_ids = json.loads(raw)
    except json.JSONDecodeError:
        raise CatalogValidationError("colors must be a JSON array of color ids")
    if not isinstance(color_ids, list) or not all(
        isinstance(c, int) and not isinstance(c, bool) for c in color_ids
    ):
        raise CatalogValidationError("colors must be a JSON array of color ids")
    return color_ids


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
async def detailed_health_check(service: CatalogService = Depends(get_catalog_service)):
    """Database connectivity probe"""
    health = await service.health_check()
    return {
        "service": config.service_name,
        "database": health["status"],
        "server_time": health["server_time"],
    }


@app.get("/api/v1/catalog/info")
async def get_service_info():
    """Get catalog service information"""
    return {**SERVICE_METADATA, "routes": get_routes_summary()}


# Lookup endpoints

@app.get("/api/v1/categories", response_model=List[Category])
async def list_categories(service: CatalogService = Depends(get_catalog_service)):
    """List garment categories"""
    return await service.list_categories()


@app.get("/api/v1/sizes", response_model=List[Size])
async def list_sizes(service: CatalogService = Depends(get_catalog_service)):
    """List sizes"""
    return await service.list_sizes()


@app.get("/api/v1/colors", response_model=List[Color])
async def list_colors(service: CatalogService = Depends(get_catalog_service)):
    """List colors"""
    return await service.list_colors()


# Garment endpoints

@app.post("/api/v1/garments", response_model=GarmentResponse, status_code=status.HTTP_201_CREATED)
async def create_garment(
    request: GarmentCreateRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Create a garment"""
    garment = await service.create_garment(request)
    return GarmentResponse(message="Garment registered successfully", garment=garment)


@app.get("/api/v1/garments", response_model=List[Garment])
async def list_garments(
    size_id: Optional[int] = Query(None, alias="sizeId", description="Only garments registered in this size"),
    max_price: Optional[Decimal] = Query(None, alias="maxPrice", description="Maximum price, inclusive"),
    category_id: Optional[int] = Query(None, alias="categoryId", description="Filter by category"),
    service: CatalogService = Depends(get_catalog_service)
):
    """List garments"""
    filters = GarmentFilter(size_id=size_id, max_price=max_price, category_id=category_id)
    return await service.list_garments(filters)


@app.post("/api/v1/garments/upload-image", response_model=ImageUploadResponse)
async def upload_garment_image(
    image: UploadFile = File(..., description="Image file"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Upload a garment image and return its public URL"""
    url = await service.upload_image(await _read_image(image))
    return ImageUploadResponse(url=url)


@app.post("/api/v1/garments/colors", response_model=ColorRegistrationResponse)
async def register_garment_colors(
    garment_id: Optional[int] = Form(None, alias="garmentId"),
    colors: Optional[str] = Form(None, description="JSON array of color ids"),
    images: Optional[List[UploadFile]] = File(None, description="One image per color, same order"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Register color variants; partial success is reported, not failed"""
    color_ids = _parse_color_ids(colors)
    image_files = [await _read_image(upload) for upload in (images or [])]

    result = await service.register_color_variants(garment_id, color_ids, image_files)

    if result.partial:
        message = f"Registered {len(result.records)} of {len(color_ids)} color variants"
    else:
        message = "Color variants registered successfully"
    return ColorRegistrationResponse(
        message=message,
        records=result.records,
        failed_color_ids=result.failed_color_ids,
    )


@app.get("/api/v1/garments/{garment_id}", response_model=Garment)
async def get_garment(
    garment_id: int = Path(..., description="Garment ID"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Get garment details"""
    return await service.get_garment(garment_id)


@app.put("/api/v1/garments/{garment_id}", response_model=GarmentResponse)
async def update_garment(
    garment_id: int = Path(..., description="Garment ID"),
    request: GarmentUpdateRequest = Body(...),
    service: CatalogService = Depends(get_catalog_service)
):
    """Update a garment"""
    garment = await service.update_garment(garment_id, request)
    return GarmentResponse(message="Garment updated successfully", garment=garment)


@app.delete("/api/v1/garments/{garment_id}", response_model=MessageResponse)
async def delete_garment(
    garment_id: int = Path(..., description="Garment ID"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Delete a garment"""
    await service.delete_garment(garment_id)
    return MessageResponse(message="Garment deleted successfully")


@app.get("/api/v1/garments/{garment_id}/colors", response_model=List[ColorVariant])
async def list_garment_colors(
    garment_id: int = Path(..., description="Garment ID"),
    service: CatalogService = Depends(get_catalog_service)
):
    """List color variants of a garment"""
    return await service.list_color_variants(garment_id)


# Stock allocation endpoints

@app.post("/api/v1/sizes/register", response_model=MessageResponse)
async def register_sizes(
    request: SizeRegistrationRequest,
    service: CatalogService = Depends(get_catalog_service)
):
    """Register (or overwrite) per-size stock of a garment"""
    await service.register_allocations(request.garment_id, request.sizes)
    return MessageResponse(message="Sizes registered successfully")


@app.get("/api/v1/garments/{garment_id}/stock-detail", response_model=StockDetailResponse)
async def get_stock_detail(
    garment_id: int = Path(..., description="Garment ID"),
    service: CatalogService = Depends(get_catalog_service)
):
    """Stock allocation summary; 400 once the garment is fully allocated"""
    summary = await service.get_allocation_summary(garment_id)

    if summary.fully_allocated:
        detail = StockDetailResponse(
            error="No stock available to assign",
            message="All stock for this garment has been assigned to sizes",
            **summary.model_dump(),
        )
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=detail.model_dump(mode="json", by_alias=True),
        )

    return StockDetailResponse(
        message=f"{summary.stock_available} units available to assign",
        **summary.model_dump(),
    )


# Error handlers

@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": "Invalid request", "errors": jsonable_errors(exc)}
    )


@app.exception_handler(CatalogValidationError)
async def validation_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"detail": str(exc)}
    )


@app.exception_handler(GarmentNotFoundError)
async def not_found_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_404_NOT_FOUND,
        content={"detail": str(exc)}
    )


@app.exception_handler(CatalogServiceError)
async def service_error_handler(request, exc):
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)}
    )


@app.exception_handler(Exception)
async def unhandled_error_handler(request, exc):
    logger.error(f"Unhandled error on {request.url.path}: {type(exc).__name__}: {exc}")
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
        "microservices.catalog_service.main:app",
        host=config.service_host,
        port=config.service_port,
        reload=config.debug,
        log_level=config.log_level.lower()
    )
