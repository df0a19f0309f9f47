#!/usr/bin/env python3
"""Per-service HTTP configuration

Each microservice reads its own host/port, falling back to the shared
HOST/PORT variables and finally to the service's registered default port.
"""
import os
from dataclasses import dataclass

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


# Default ports per microservice
DEFAULT_PORTS = {
    "catalog_service": 8260,
    "order_service": 8210,
}


@dataclass
class ServiceConfig:
    """HTTP settings for a single microservice"""
    service_name: str
    service_host: str = "0.0.0.0"
    service_port: int = 8000
    debug: bool = False
    log_level: str = "INFO"

    @classmethod
    def from_env(cls, service_name: str) -> 'ServiceConfig':
        """Load service config; SERVICE-prefixed variables win over shared ones"""
        env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
        prefix = service_name.upper()
        default_port = DEFAULT_PORTS.get(service_name, 8000)
        return cls(
            service_name=service_name,
            service_host=os.getenv(f"{prefix}_HOST") or os.getenv("HOST", "0.0.0.0"),
            service_port=_int(os.getenv(f"{prefix}_PORT") or os.getenv("PORT", ""), default_port),
            debug=_bool(os.getenv("DEBUG", "true" if env == "development" else "false")),
            log_level=os.getenv("LOG_LEVEL", "DEBUG" if env == "development" else "INFO"),
        )
