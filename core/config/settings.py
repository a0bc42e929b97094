#!/usr/bin/env python3
"""Order platform main configuration

Combines the infrastructure, logging and service sub-configs.
"""
import os
from dataclasses import dataclass, field

from .infra_config import InfraConfig
from .logging_config import LoggingConfig
from .service_config import OrderServiceConfig


@dataclass
class Settings:
    """Top-level settings for the order service"""
    environment: str = "development"
    infra: InfraConfig = field(default_factory=InfraConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
    service: OrderServiceConfig = field(default_factory=OrderServiceConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_env(cls) -> 'Settings':
        """Load all settings from environment variables"""
        return cls(
            environment=os.getenv("ENV") or os.getenv("ENVIRONMENT", "development"),
            infra=InfraConfig.from_env(),
            logging=LoggingConfig.from_env(),
            service=OrderServiceConfig.from_env(),
        )
