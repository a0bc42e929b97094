#!/usr/bin/env python3
"""Modular configuration system for the order service

Configuration hierarchy:
- infra_config: PostgreSQL endpoint and pool sizing
- logging_config: Logging configuration
- service_config: HTTP binding, paging defaults, status transition policy
- settings: Combined settings object
"""
import os
from dotenv import load_dotenv

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .service_config import OrderServiceConfig
from .settings import Settings

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
settings = Settings.from_env()

def get_settings() -> Settings:
    """Get global settings instance"""
    return settings

def reload_settings() -> Settings:
    """Reload settings from environment"""
    global settings
    settings = Settings.from_env()
    return settings

__all__ = [
    'Settings',
    'get_settings',
    'reload_settings',
    'settings',
    'InfraConfig',
    'LoggingConfig',
    'OrderServiceConfig',
]
