"""
Catalog Service Routes Registry

Defines all API routes of catalog_service.
Served by the service info endpoint so clients can discover the surface.
"""

from typing import Any, Dict, List


# Route definitions for catalog_service
SERVICE_ROUTES = [
    # Health & Info
    {"path": "/health", "methods": ["GET"], "auth_required": False, "description": "Health check"},
    {"path": "/health/detailed", "methods": ["GET"], "auth_required": False, "description": "Database connectivity"},
    {"path": "/api/v1/catalog/info", "methods": ["GET"], "auth_required": False, "description": "Service info"},

    # Lookups
    {"path": "/api/v1/categories", "methods": ["GET"], "auth_required": False, "description": "List categories"},
    {"path": "/api/v1/sizes", "methods": ["GET"], "auth_required": False, "description": "List sizes"},
    {"path": "/api/v1/colors", "methods": ["GET"], "auth_required": False, "description": "List colors"},

    # Garments
    {"path": "/api/v1/garments", "methods": ["GET", "POST"], "auth_required": False, "description": "List / create garments"},
    {"path": "/api/v1/garments/{garment_id}", "methods": ["GET", "PUT", "DELETE"], "auth_required": False, "description": "Garment details"},
    {"path": "/api/v1/garments/upload-image", "methods": ["POST"], "auth_required": False, "description": "Upload garment image"},

    # Stock allocation
    {"path": "/api/v1/sizes/register", "methods": ["POST"], "auth_required": False, "description": "Register size stock"},
    {"path": "/api/v1/garments/{garment_id}/stock-detail", "methods": ["GET"], "auth_required": False, "description": "Stock allocation summary"},

    # Color variants
    {"path": "/api/v1/garments/colors", "methods": ["POST"], "auth_required": False, "description": "Register color variants"},
    {"path": "/api/v1/garments/{garment_id}/colors", "methods": ["GET"], "auth_required": False, "description": "List color variants"},
]


def get_routes_summary() -> Dict[str, Any]:
    """Compact route metadata grouped by area"""
    groups: Dict[str, List[str]] = {"health": [], "lookups": [], "garments": [], "stock": [], "colors": []}

    for route in SERVICE_ROUTES:
        path = route["path"]
        if "health" in path or path.endswith("/info"):
            groups["health"].append(path)
        elif "colors" in path and "garments" in path:
            groups["colors"].append(path)
        elif "stock" in path or path.endswith("/register"):
            groups["stock"].append(path)
        elif "garments" in path:
            groups["garments"].append(path)
        else:
            groups["lookups"].append(path)

    return {
        "route_count": len(SERVICE_ROUTES),
        "base_path": "/api/v1",
        "groups": groups,
    }


# Service metadata
SERVICE_METADATA = {
    "service_name": "catalog_service",
    "version": "1.0.0",
    "tags": ["v1", "storefront", "catalog", "inventory"],
    "capabilities": [
        "garment_catalog",
        "size_allocation",
        "stock_summary",
        "color_variants",
        "image_upload",
    ],
}
