#!/usr/bin/env python3
"""Modular configuration system for the storefront services

Configuration hierarchy:
- infra_config: Backing stores (PostgreSQL, MinIO)
- service_config: Per-microservice HTTP settings
- logging_config: Logging configuration
"""
import os
from dotenv import load_dotenv
from .logging_config import LoggingConfig
from .infra_config import InfraConfig
from .service_config import ServiceConfig
from .storefront_config import StorefrontConfig

# Load environment file based on ENV
env = os.getenv("ENV") or os.getenv("ENVIRONMENT", "development")
env_files = {
    "development": "deployment/environments/dev.env",
    "dev": "deployment/environments/dev.env",
    "testing": "deployment/environments/test.env",
    "test": "deployment/environments/test.env",
    "staging": "deployment/environments/staging.env",
    "production": "deployment/environments/production.env",
}
env_file = env_files.get(env, "deployment/environments/dev.env")
load_dotenv(env_file, override=False)

# Create global settings instance
settings = StorefrontConfig.from_env()

def get_settings() -> StorefrontConfig:
    """Get global settings instance"""
    return settings

def reload_settings() -> StorefrontConfig:
    """Reload settings from environment"""
    global settings
    settings = StorefrontConfig.from_env()
    return settings

__all__ = [
    'StorefrontConfig',
    'get_settings',
    'reload_settings',
    'settings',
    'LoggingConfig',
    'InfraConfig',
    'ServiceConfig',
]
