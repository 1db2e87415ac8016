"""Core module exports."""

from captally.core.errors import (
    CaptallyError,
    ConfigError,
    ErrorCode,
    InternalError,
    InvocationError,
    MalformedExtension,
)
from captally.core.logging import (
    clear_run_id,
    configure_logging,
    get_logger,
    get_run_id,
    set_run_id,
)
from captally.core.progress import spinner, status

__all__ = [
    # Errors
    "CaptallyError",
    "ConfigError",
    "ErrorCode",
    "InternalError",
    "InvocationError",
    "MalformedExtension",
    # Logging
    "clear_run_id",
    "configure_logging",
    "get_logger",
    "get_run_id",
    "set_run_id",
    # Progress
    "spinner",
    "status",
]
