"""
Intake context logger.

Provides logging interface for the intake context with automatic [intake] prefix.
All intake modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[intake]"


# Wrapper functions with automatic [intake] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [intake] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [intake] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level intake-specific logging helpers


def log_parse_outcome(outcome) -> None:
    """
    Log a parse outcome at a level matching its kind.

    Args:
        outcome: ParsedOk, ParsedFallback or ParseRejected
    """
    if outcome.kind == "rejected":
        _log_warning(f"Posting rejected: {outcome.error.code.value}")
        return

    job = outcome.job
    summary = (
        f"{job.title} at {job.company} "
        f"(quality={job.metadata.parse_quality}, confidence={job.metadata.confidence}, "
        f"id={job.canonical_id})"
    )
    if outcome.kind == "fallback":
        _log_warning(f"Fallback parse: {outcome.reason}")
        _log_warning(f"  {summary}")
    else:
        _log_debug(f"Parsed {summary}")
        _log_debug(
            f"  {len(job.requirements.required_skills)} required skills, "
            f"{len(job.requirements.required_tools)} required tools, "
            f"{len(job.responsibilities)} responsibilities"
        )
