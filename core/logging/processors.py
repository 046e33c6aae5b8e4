"""Custom structlog processors for request context and service metadata."""

import os
import threading

from colorama import Fore, Style, init
from structlog.typing import EventDict, WrappedLogger

from core.constants import DEFAULT_SERVICE_NAME, PHONE_LOG_FIELDS
from core.logging.context import get_request_id


def add_request_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add the request ID set by RequestIDMiddleware, when there is one."""
    request_id = get_request_id()
    if request_id:
        event_dict["request_id"] = request_id
    return event_dict


def add_service_context(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add service_name and environment to all log events."""
    event_dict["service_name"] = os.getenv("SERVICE_NAME", DEFAULT_SERVICE_NAME)
    event_dict["environment"] = os.getenv("ENVIRONMENT", "development")
    return event_dict


def add_process_info(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Add process_id and thread_id to log events.

    Dispatch runs on worker threads, so thread_id tells concurrent sends apart.
    """
    event_dict["process_id"] = os.getpid()
    event_dict["thread_id"] = threading.get_ident()
    return event_dict


def mask_phone_numbers(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> EventDict:
    """Mask phone-valued fields that were logged unmasked.

    Values already masked (starting with ``***``) are left alone.
    """
    for key in PHONE_LOG_FIELDS.intersection(event_dict):
        value = event_dict[key]
        if isinstance(value, str) and value and not value.startswith("***"):
            event_dict[key] = f"***{value[-4:]}"
    return event_dict


LEVEL_COLORS = {
    "DEBUG": Fore.CYAN,
    "INFO": Fore.GREEN,
    "WARNING": Fore.YELLOW,
    "ERROR": Fore.RED,
    "CRITICAL": Fore.RED + Style.BRIGHT,
}

CONSOLE_HIDDEN_FIELDS = frozenset(
    {
        "level",
        "timestamp",
        "request_id",
        "logger",
        "event",
        "process_id",
        "thread_id",
        "service_name",
        "environment",
    }
)


def console_renderer(
    _logger: WrappedLogger, _method_name: str, event_dict: EventDict
) -> str:
    """Render log events as colored strings for console output.

    Format: [LEVEL] timestamp | request_id | logger_name | event key=value...
    """
    init(autoreset=True)

    level = event_dict.get("level", "INFO").upper()
    level_color = LEVEL_COLORS.get(level, Fore.WHITE)

    formatted = (
        f"{level_color}[{level:<8}]{Style.RESET_ALL} "
        f"{Fore.WHITE}{event_dict.get('timestamp', '')}{Style.RESET_ALL} | "
        f"{Fore.MAGENTA}{event_dict.get('request_id', 'no-request-id')}"
        f"{Style.RESET_ALL} | "
        f"{Fore.BLUE}{event_dict.get('logger', 'root')}{Style.RESET_ALL} | "
        f"{event_dict.get('event', '')}"
    )

    extra_fields = {
        k: v for k, v in event_dict.items() if k not in CONSOLE_HIDDEN_FIELDS
    }
    if extra_fields:
        extra_str = " ".join(f"{k}={v}" for k, v in extra_fields.items())
        formatted += f" {Fore.YELLOW}{extra_str}{Style.RESET_ALL}"

    return formatted
