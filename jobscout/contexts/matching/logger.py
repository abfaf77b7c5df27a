"""
Matching context logger.

Provides logging interface for the matching context with automatic [match] prefix.
All matching modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[match]"


# Wrapper functions with automatic [match] prefix


def _log_info(message: str) -> None:
    """Log info message with [match] prefix."""
    logger.info(f"{CONTEXT_PREFIX} {message}")


def _log_warning(message: str) -> None:
    """Log warning message with [match] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [match] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level matching-specific logging helpers


def log_ranked_job(ranked) -> None:
    """Log one ranking result at debug level."""
    job = ranked.job
    _log_debug(
        f"{job.title} at {job.company}: fit={ranked.fit_score} category={ranked.category} "
        f"score={ranked.priority_score} priority={ranked.application_priority}"
    )
    for penalty in ranked.score_breakdown.penalties:
        _log_debug(f"  penalty {penalty.code}: {penalty.amount} ({penalty.reason})")


def log_batch_ranked(count: int, elapsed_ms: float) -> None:
    """Log batch ranking size and timing."""
    _log_info(f"Ranked {count} job(s) in {elapsed_ms:.0f}ms")
