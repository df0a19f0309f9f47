"""
Catalog Service Business Logic

Garment catalog, per-size stock allocation ledger and color variant registration.
"""

import logging
import time
import uuid
from pathlib import PurePath
from typing import List, Optional, Sequence

from .models import (
    Category, Color, ColorRegistrationResult, ColorVariant, ColorVariantRecord,
    Garment, GarmentCreateRequest, GarmentFilter, GarmentUpdateRequest,
    ImageFile, Size, SizeStockEntry, StockSummary,
)
from .protocols import (
    CatalogRepositoryProtocol,
    CatalogServiceError,
    CatalogValidationError,
    GarmentNotFoundError,
    ObjectStorageProtocol,
)

logger = logging.getLogger(__name__)

# Object keys are namespaced by the entity the image belongs to
GARMENT_IMAGE_NAMESPACE = "garments"


class CatalogService:
    """
    Catalog business logic service

    Handles garment records, the size allocation ledger and color variants.
    """

    def __init__(
        self,
        repository: CatalogRepositoryProtocol,
        storage: Optional[ObjectStorageProtocol] = None,
    ):
        """
        Initialize Catalog Service

        Args:
            repository: Catalog repository instance
            storage: Object storage for garment images (optional)
        """
        self.repository = repository
        self.storage = storage

        logger.info("CatalogService initialized")

    # ====================
    # Lookups
    # ====================

    async def list_categories(self) -> List[Category]:
        return await self.repository.list_categories()

    async def list_sizes(self) -> List[Size]:
        return await self.repository.list_sizes()

    async def list_colors(self) -> List[Color]:
        return await self.repository.list_colors()

    # ====================
    # Garments
    # ====================

    async def create_garment(self, request: GarmentCreateRequest) -> Garment:
        """Create a garment; its stock becomes the allocation ceiling"""
        garment = await self.repository.create_garment(request.model_dump())
        logger.info(f"Garment created: {garment.id} ({garment.name}, stock={garment.stock})")
        return garment

    async def get_garment(self, garment_id: int) -> Garment:
        """Get garment or raise GarmentNotFoundError"""
        garment = await self.repository.get_garment(garment_id)
        if not garment:
            raise GarmentNotFoundError(f"Garment not found: {garment_id}")
        return garment

    async def list_garments(self, filters: Optional[GarmentFilter] = None) -> List[Garment]:
        filters = filters or GarmentFilter()
        return await self.repository.list_garments(
            size_id=filters.size_id,
            max_price=filters.max_price,
            category_id=filters.category_id,
        )

    async def update_garment(self, garment_id: int, request: GarmentUpdateRequest) -> Garment:
        garment = await self.repository.update_garment(garment_id, request.model_dump())
        if not garment:
            raise GarmentNotFoundError(f"Garment not found: {garment_id}")
        logger.info(f"Garment updated: {garment_id}")
        return garment

    async def delete_garment(self, garment_id: int) -> None:
        if not await self.repository.delete_garment(garment_id):
            raise GarmentNotFoundError(f"Garment not found: {garment_id}")
        logger.info(f"Garment deleted: {garment_id}")

    async def upload_image(self, image: ImageFile) -> str:
        """Upload one garment image and return its public URL"""
        if not image.content:
            raise CatalogValidationError("image is required")
        storage = self._require_storage()
        object_key = self._generate_object_name(GARMENT_IMAGE_NAMESPACE, image.filename)
        await storage.upload(object_key, image.content, image.content_type)
        return storage.get_public_url(object_key)

    # ====================
    # Allocation Ledger
    # ====================

    async def register_allocations(
        self,
        garment_id: Optional[int],
        allocations: Sequence[SizeStockEntry],
    ) -> int:
        """
        Upsert per-size allocations of a garment.

        The total stock ceiling is NOT enforced here: allocations past the
        ceiling are accepted and only surface through get_allocation_summary.

        Returns:
            Number of (garment, size) rows written

        Raises:
            CatalogValidationError: missing garment id, empty or malformed list
            GarmentNotFoundError: garment does not exist
        """
        self._validate_allocations(garment_id, allocations)

        await self.get_garment(garment_id)
        count = await self.repository.upsert_size_allocations(garment_id, list(allocations))
        logger.info(f"Registered {len(allocations)} size allocations for garment {garment_id}")

        await self._warn_if_over_allocated(garment_id)
        return count

    async def _warn_if_over_allocated(self, garment_id: int) -> None:
        """Log over-allocation; the write above is already committed"""
        try:
            summary = await self.get_allocation_summary(garment_id)
        except Exception as e:
            logger.error(f"Could not check allocations of garment {garment_id}: {e}")
            return
        if summary.stock_available < 0:
            logger.warning(
                f"Garment {garment_id} over-allocated: assigned {summary.stock_assigned} "
                f"of {summary.stock_total}"
            )

    async def get_allocation_summary(self, garment_id: int) -> StockSummary:
        """
        Recompute how a garment's total stock is spread across sizes.

        ``stock_available`` is total minus the sum of allocations; a value
        <= 0 means the garment is fully allocated.
        """
        garment = await self.get_garment(garment_id)
        assigned_sizes = await self.repository.get_size_allocations(garment_id)
        stock_assigned = sum(size.stock for size in assigned_sizes)

        return StockSummary(
            garment_id=garment.id,
            stock_total=garment.stock,
            stock_assigned=stock_assigned,
            stock_available=garment.stock - stock_assigned,
            assigned_sizes=assigned_sizes,
        )

    # ====================
    # Variant Registrar
    # ====================

    async def register_color_variants(
        self,
        garment_id: Optional[int],
        color_ids: Sequence[int],
        images: Sequence[ImageFile],
    ) -> ColorRegistrationResult:
        """
        Attach color variants, the image at position i belongs to color i.

        Each pair is independent: a failed upload or insert is logged and
        skipped, the remaining pairs are still processed.

        Raises:
            CatalogValidationError: missing data or length mismatch (nothing persisted)
            GarmentNotFoundError: garment does not exist (nothing uploaded)
        """
        if garment_id is None:
            raise CatalogValidationError("garmentId is required")
        if not color_ids or not images:
            raise CatalogValidationError("colors and images are required")
        if len(color_ids) != len(images):
            raise CatalogValidationError(
                f"Number of colors ({len(color_ids)}) does not match number of images ({len(images)})"
            )
        await self.get_garment(garment_id)
        storage = self._require_storage()

        result = ColorRegistrationResult()
        for color_id, image in zip(color_ids, images):
            try:
                object_key = self._generate_object_name(GARMENT_IMAGE_NAMESPACE, image.filename)
                await storage.upload(object_key, image.content, image.content_type)
                image_url = storage.get_public_url(object_key)
                await self.repository.add_color_variant(garment_id, color_id, image_url)
            except Exception as e:
                logger.error(f"Skipping color {color_id} for garment {garment_id}: {e}")
                result.failed_color_ids.append(color_id)
                continue
            result.records.append(ColorVariantRecord(color_id=color_id, image_url=image_url))

        logger.info(
            f"Registered {len(result.records)}/{len(color_ids)} color variants for garment {garment_id}"
        )
        return result

    async def list_color_variants(self, garment_id: int) -> List[ColorVariant]:
        await self.get_garment(garment_id)
        return await self.repository.list_color_variants(garment_id)

    # ====================
    # Health
    # ====================

    async def health_check(self) -> dict:
        result = await self.repository.check_connection() or {}
        return {
            "status": "healthy" if result.get("healthy") else "unhealthy",
            "server_time": result.get("server_time"),
        }

    # ====================
    # Helpers
    # ====================

    def _require_storage(self) -> ObjectStorageProtocol:
        if self.storage is None:
            raise CatalogServiceError("Object storage not configured")
        return self.storage

    @staticmethod
    def _generate_object_name(namespace: str, filename: str) -> str:
        """``<namespace>/<epoch millis>-<uuid8>-<original filename>``"""
        safe_name = PurePath(filename or "image").name.replace(" ", "_")
        return f"{namespace}/{int(time.time() * 1000)}-{uuid.uuid4().hex[:8]}-{safe_name}"

    @staticmethod
    def _validate_allocations(garment_id: Optional[int], allocations: Sequence[SizeStockEntry]) -> None:
        if garment_id is None:
            raise CatalogValidationError("garmentId is required")
        if not allocations:
            raise CatalogValidationError("sizes must be a non-empty list")
        for entry in allocations:
            if not isinstance(entry.stock, int) or entry.stock < 0:
                raise CatalogValidationError(
                    f"stock for size {entry.size_id} must be a non-negative integer"
                )
