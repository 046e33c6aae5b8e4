"""Structlog configuration for dual output: JSON files and colored console."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from core.constants import DEFAULT_LOG_FILE_PATH
from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
    mask_phone_numbers,
)

MAX_LOG_FILE_BYTES = 100 * 1024 * 1024
LOG_BACKUP_COUNT = 240


def _foreign_pre_chain(include_metadata: bool) -> list:
    """Processors applied to records from libraries that use plain logging."""
    chain = [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
    ]
    if include_metadata:
        chain += [add_service_context, add_process_info]
    return chain


def setup_logging() -> None:
    """Configure structlog with JSON file logs and colored console logs.

    File output is JSON with all metadata, rotated at 100MB. Console output
    is pretty-printed and always enabled.

    Environment Variables:
    - LOG_FILE_PATH: Path to log file (default: ./logs/checkin-notifications.log)
    - LOG_LEVEL: Logging level (default: INFO)
    - SERVICE_NAME: Service name for metadata (default: checkin-notifications)
    - ENVIRONMENT: Deployment environment (default: development)
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE_PATH)
    log_level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    logging.basicConfig(format="%(message)s", level=log_level, handlers=[])

    file_handler = logging.handlers.RotatingFileHandler(
        filename=log_file_path,
        maxBytes=MAX_LOG_FILE_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    file_handler.setLevel(log_level)
    file_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(),
            foreign_pre_chain=_foreign_pre_chain(include_metadata=True),
        )
    )

    console_handler = logging.StreamHandler()
    console_handler.setLevel(log_level)
    console_handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_foreign_pre_chain(include_metadata=False),
        )
    )

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            mask_phone_numbers,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path,
        log_level=log_level_name,
    )
