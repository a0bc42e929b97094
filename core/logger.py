#!/usr/bin/env python3
"""
Service Logger Setup

Configures the standard library logging tree for a microservice process.

Usage:
    from core.logger import setup_service_logger

    logger = setup_service_logger("order_service")
    logger.info("Service starting")
"""

import logging
import sys
from logging.handlers import RotatingFileHandler
from typing import Optional

from core.config import LoggingConfig, get_settings

_configured_services = set()


def setup_service_logger(
    service_name: str,
    level: Optional[str] = None,
    config: Optional[LoggingConfig] = None,
) -> logging.Logger:
    """
    Configure root handlers once and return the service logger.

    Args:
        service_name: Logger name, usually the service package name
        level: Log level override (defaults to LoggingConfig.log_level)
        config: Logging configuration (defaults to global settings)

    Returns:
        Configured logger for the service
    """
    config = config or get_settings().logging
    log_level = (level or config.log_level or "INFO").upper()

    logger = logging.getLogger(service_name)
    logger.setLevel(log_level)

    if service_name in _configured_services:
        return logger

    formatter = logging.Formatter(config.log_format)
    root = logging.getLogger()
    root.setLevel(log_level)

    if config.enable_console:
        console_handler = logging.StreamHandler(sys.stdout)
        console_handler.setFormatter(formatter)
        root.addHandler(console_handler)

    if config.log_file:
        try:
            file_handler = RotatingFileHandler(
                config.log_file,
                maxBytes=config.log_file_max_bytes,
                backupCount=config.log_file_backup_count,
            )
            file_handler.setFormatter(formatter)
            root.addHandler(file_handler)
        except OSError as e:
            logger.warning(f"Failed to open log file {config.log_file}: {e}")

    # asyncpg and uvicorn access logs are noisy at DEBUG
    logging.getLogger("asyncpg").setLevel(max(logging.INFO, root.level))

    _configured_services.add(service_name)
    return logger
