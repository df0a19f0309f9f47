"""
Order Service Routes Registry

Defines all API routes of order_service.
Served by the service info endpoint so clients can discover the surface.
"""

from typing import Any, Dict, List


# Route definitions for order_service
SERVICE_ROUTES = [
    {
        "path": "/health",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service health check"
    },
    {
        "path": "/health/detailed",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Database connectivity"
    },
    {
        "path": "/api/v1/orders/info",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Service info"
    },
    # Order Management
    {
        "path": "/api/v1/orders",
        "methods": ["GET", "POST"],
        "auth_required": False,
        "description": "List/create orders"
    },
    {
        "path": "/api/v1/orders/{order_id}",
        "methods": ["GET"],
        "auth_required": False,
        "description": "Get order with items"
    },
    {
        "path": "/api/v1/orders/{order_id}/status",
        "methods": ["PUT"],
        "auth_required": False,
        "description": "Change order status"
    },
    # Lookups
    {
        "path": "/api/v1/order-statuses",
        "methods": ["GET"],
        "auth_required": False,
        "description": "List order statuses"
    },
]


def get_routes_summary() -> Dict[str, Any]:
    """Compact route metadata grouped by area"""
    groups: Dict[str, List[str]] = {"health": [], "orders": [], "statuses": []}

    for route in SERVICE_ROUTES:
        path = route["path"]
        if "health" in path or path.endswith("/info"):
            groups["health"].append(path)
        elif "status" in path:
            groups["statuses"].append(path)
        else:
            groups["orders"].append(path)

    return {
        "route_count": len(SERVICE_ROUTES),
        "base_path": "/api/v1",
        "groups": groups,
    }


# Service metadata
SERVICE_METADATA = {
    "service_name": "order_service",
    "version": "1.0.0",
    "tags": ["v1", "storefront", "orders"],
    "capabilities": [
        "order_creation",
        "order_query",
        "order_filtering",
        "status_transition",
    ],
}
