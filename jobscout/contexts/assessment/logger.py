"""
Assessment context logger.

Provides logging interface for the assessment context with automatic [assess] prefix.
All assessment modules should import from this module, not from utils.logger directly.
"""

from loguru import logger

CONTEXT_PREFIX = "[assess]"


# Wrapper functions with automatic [assess] prefix


def _log_warning(message: str) -> None:
    """Log warning message with [assess] prefix."""
    logger.warning(f"{CONTEXT_PREFIX} {message}")


def _log_debug(message: str) -> None:
    """Log debug message with [assess] prefix."""
    logger.debug(f"{CONTEXT_PREFIX} {message}")


# High-level assessment-specific logging helpers


def log_scam_detection(job_label: str, result) -> None:
    """
    Log a scam detection result; high risk is a warning, anything else debug.

    Args:
        job_label: Human-readable job identifier ("Title at Company")
        result: ScamDetectionResult
    """
    if result.risk_level == "high":
        _log_warning(f"High scam risk for {job_label} (score={result.score})")
        for flag in result.red_flags:
            _log_warning(f"  - {flag}")
    else:
        _log_debug(
            f"Scam risk for {job_label}: {result.risk_level} "
            f"({result.red_flag_count} flags, score={result.score})"
        )


def log_career_capital(job_label: str, result) -> None:
    """Log career capital sub-scores at debug level."""
    _log_debug(
        f"Career capital for {job_label}: {result.score} "
        f"(brand={result.brand_score}, growth={result.skill_growth_score}, "
        f"network={result.network_score}, comp={result.comp_score})"
    )
