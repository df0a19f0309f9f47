#!/usr/bin/env python3
"""Infrastructure services configuration

Endpoints of the backing stores used by the storefront services.
"""
import os
from dataclasses import dataclass
from typing import Optional

def _bool(val: str) -> bool:
    return val.lower() == "true"

def _int(val: str, default: int) -> int:
    try:
        return int(val) if val else default
    except ValueError:
        return default


@dataclass
class InfraConfig:
    """Infrastructure service endpoints"""

    # ===========================================
    # PostgreSQL (native asyncpg - port 5432)
    # ===========================================
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "storefront"
    postgres_user: str = "postgres"
    postgres_password: str = "postgres"
    postgres_pool_min: int = 1
    postgres_pool_max: int = 10

    # ===========================================
    # MinIO (native S3 - port 9000)
    # ===========================================
    minio_host: str = "localhost"
    minio_port: int = 9000
    minio_access_key: str = "minioadmin"
    minio_secret_key: str = "minioadmin"
    minio_secure: bool = False
    minio_bucket: str = "garments"
    # Base used to build public object URLs, e.g. a CDN in front of the bucket
    minio_public_url: Optional[str] = None

    @property
    def minio_endpoint(self) -> str:
        return f"{self.minio_host}:{self.minio_port}"

    @property
    def postgres_dsn(self) -> str:
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @classmethod
    def from_env(cls) -> 'InfraConfig':
        """Load infrastructure config from environment"""
        return cls(
            # PostgreSQL
            postgres_host=os.getenv("POSTGRES_HOST", "localhost"),
            postgres_port=_int(os.getenv("POSTGRES_PORT", "5432"), 5432),
            postgres_db=os.getenv("POSTGRES_DB", "storefront"),
            postgres_user=os.getenv("POSTGRES_USER", "postgres"),
            postgres_password=os.getenv("POSTGRES_PASSWORD", "postgres"),
            postgres_pool_min=_int(os.getenv("POSTGRES_POOL_MIN", "1"), 1),
            postgres_pool_max=_int(os.getenv("POSTGRES_POOL_MAX", "10"), 10),

            # MinIO
            minio_host=os.getenv("MINIO_HOST", "localhost"),
            minio_port=_int(os.getenv("MINIO_PORT", "9000"), 9000),
            minio_access_key=os.getenv("MINIO_ACCESS_KEY", "minioadmin"),
            minio_secret_key=os.getenv("MINIO_SECRET_KEY", "minioadmin"),
            minio_secure=_bool(os.getenv("MINIO_SECURE", "false")),
            minio_bucket=os.getenv("MINIO_BUCKET", "garments"),
            minio_public_url=os.getenv("MINIO_PUBLIC_URL"),
        )
