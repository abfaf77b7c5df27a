"""
Discovery context logger.

Provides logging interface for the discovery context with automatic [discovery] prefix.
All discovery modules should import from this module, not from utils.logger directly.
"""

from pathlib import Path
from typing import Optional

from loguru import logger

from jobscout.utils.logger import setup_logger as _setup_logger

CONTEXT_PREFIX = "[discovery]"


def setup_discovery_logger(
    log_dir: Optional[Path] = None, console_level: str = "INFO"
) -> Optional[Path]:
    """
    Setup logger for discovery context.

    Args:
        log_dir: Directory for this engine session (None for console only)
        console_level: Minimum level echoed to stderr

    Returns:
        Path to log file, or None without a log directory
    """
    return _setup_logger(context_name="discovery", log_dir=log_dir, console_level=console_level)


# Wrapper functions with automatic [discovery] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [discovery] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [discovery] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level discovery-specific logging helpers


def log_performance(operation: str, elapsed_ms: float, target_ms: float) -> None:
    """Log operation timing; a warning when the target is exceeded."""
    if elapsed_ms <= target_ms:
        _log_debug(f"{operation}: {elapsed_ms:.0f}ms (target: {target_ms:.0f}ms)")
    else:
        _log_warning(f"{operation} over target: {elapsed_ms:.0f}ms (target: {target_ms:.0f}ms)")
