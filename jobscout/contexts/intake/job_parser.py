"""
Job posting parser for the Intake context.

Turns a RawPosting into a ParseOutcome:
- ParseRejected when the text fails validation (nothing is extracted)
- ParsedOk when full extraction succeeds
- ParsedFallback when extraction fails for any other reason, carrying a
  minimal low-confidence ParsedJob so the posting is not lost

Also owns parse-quality assessment and canonical id generation, the sole
deduplication mechanism.
"""

import hashlib
import uuid
from collections.abc import Iterable, Mapping
from typing import Optional, Union

from jobscout.config.schema import JobDiscoveryConfig, ParsingConfig
from jobscout.contexts.intake.job_data_structure import (
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_TITLE,
    JobMetadata,
    JobRequirements,
    ParsedFallback,
    ParsedJob,
    ParsedOk,
    ParseOutcome,
    ParseQuality,
    ParseRejected,
    RawPosting,
)
from jobscout.contexts.intake.logger import log_parse_outcome
from jobscout.contexts.intake.metadata_extractor import extract_metadata
from jobscout.contexts.intake.normalizer import (
    canonicalize_url,
    normalize_for_hash,
    preprocess_posting_text,
)
from jobscout.contexts.intake.requirements_extractor import (
    extract_benefits,
    extract_requirements,
    extract_responsibilities,
)
from jobscout.contexts.intake.section_patterns import (
    has_requirements_section,
    has_responsibilities_section,
)
from jobscout.exceptions import ErrorCode, JobDiscoveryError, create_error
from jobscout.utils.text_processing import count_words

# Characters of raw text hashed into a fallback canonical id
FALLBACK_HASH_CHARS = 500
CANONICAL_HASH_LENGTH = 16

QUALITY_CONFIDENCE = {"high": 90, "medium": 70}
LOW_CONFIDENCE = 40
MINIMAL_CONFIDENCE = 20
FALLBACK_CONFIDENCE = 10
FALLBACK_EXTRACTION_CONFIDENCE = 0.1


def parse_posting(posting: RawPosting, config: JobDiscoveryConfig) -> ParseOutcome:
    """
    Parse a raw posting into a tagged outcome.

    Validation errors are never absorbed by the fallback path: they come
    back as ParseRejected so callers can surface the typed error.

    Args:
        posting: Raw posting text plus optional overrides
        config: Loaded configuration

    Returns:
        ParsedOk, ParsedFallback or ParseRejected
    """
    try:
        validate_posting_text(posting.text, config.parsing)
    except JobDiscoveryError as e:
        outcome: ParseOutcome = ParseRejected(error=e)
        log_parse_outcome(outcome)
        return outcome

    try:
        outcome = ParsedOk(job=_parse_full(posting, config))
    except Exception as e:
        # Any extraction failure degrades to a minimal record instead of failing the call
        reason = f"{type(e).__name__}: {e}"
        outcome = ParsedFallback(job=build_fallback_job(posting, reason), reason=reason)

    log_parse_outcome(outcome)
    return outcome


def validate_posting_text(text: Optional[str], parsing: ParsingConfig) -> str:
    """
    Check posting text length before any extraction runs.

    Returns:
        The trimmed text

    Raises:
        JobDiscoveryError: MISSING_JOB_DESCRIPTION, JD_TOO_SHORT or JD_TOO_LONG
    """
    if text is None or not text.strip():
        raise create_error(ErrorCode.MISSING_JOB_DESCRIPTION)

    trimmed = text.strip()
    if len(trimmed) < parsing.min_length:
        raise create_error(
            ErrorCode.JD_TOO_SHORT,
            details={"length": len(trimmed), "minLength": parsing.min_length},
        )
    if len(trimmed) > parsing.max_length:
        raise create_error(
            ErrorCode.JD_TOO_LONG,
            details={"length": len(trimmed), "maxLength": parsing.max_length},
        )
    return trimmed


def _parse_full(posting: RawPosting, config: JobDiscoveryConfig) -> ParsedJob:
    raw_text = posting.text
    text = preprocess_posting_text(raw_text)

    meta = extract_metadata(text, posting)
    requirements = extract_requirements(text, meta.title, config, raw_text=raw_text)
    responsibilities = extract_responsibilities(text, config)
    benefits = extract_benefits(text, config)

    quality, confidence = assess_parse_quality(
        text, requirements, responsibilities, config.parsing
    )

    return ParsedJob(
        job_id=str(uuid.uuid4()),
        canonical_id=generate_canonical_id(
            company=meta.company,
            title=meta.title,
            location=meta.location,
            posted_date=meta.posted_date,
            job_url=posting.job_url,
        ),
        title=meta.title,
        company=meta.company,
        location=meta.location,
        raw_text=raw_text,
        requirements=requirements,
        responsibilities=responsibilities,
        benefits=benefits,
        work_arrangement=meta.work_arrangement,
        salary_range=meta.salary_range,
        metadata=JobMetadata(
            parse_quality=quality,
            confidence=confidence,
            source=posting.source,
            posted_date=meta.posted_date,
            application_deadline=meta.application_deadline,
            company_tier=meta.company_tier,
            language=posting.language,
        ),
        job_url=posting.job_url,
    )


def build_fallback_job(posting: RawPosting, reason: Optional[str] = None) -> ParsedJob:
    """
    Minimal low-confidence record used when full extraction fails.

    Overrides are still honored; everything else is a sentinel. The
    canonical id hashes the first 500 characters of the raw text, and
    the metadata is tagged as a fallback carrying reason.
    """
    text = posting.text or ""
    return ParsedJob(
        job_id=str(uuid.uuid4()),
        canonical_id="fallback:" + _short_hash(text[:FALLBACK_HASH_CHARS]),
        title=(posting.title or "").strip() or UNKNOWN_TITLE,
        company=(posting.company or "").strip() or UNKNOWN_COMPANY,
        location=(posting.location or "").strip() or UNKNOWN_LOCATION,
        raw_text=text,
        requirements=JobRequirements(extraction_confidence=FALLBACK_EXTRACTION_CONFIDENCE),
        metadata=JobMetadata(
            parse_quality="low",
            confidence=FALLBACK_CONFIDENCE,
            source=posting.source,
            language=posting.language,
            parse_outcome="fallback",
            fallback_reason=reason,
        ),
        job_url=posting.job_url,
    )


# =============================================================================
# QUALITY
# =============================================================================


def assess_parse_quality(
    text: str,
    requirements: JobRequirements,
    responsibilities: list[str],
    parsing: ParsingConfig,
) -> tuple[ParseQuality, int]:
    """
    Three-tier parse quality with its derived confidence percentage.

    high requires every signal: word count, a requirements section, a
    responsibilities section, enough skills and enough responsibilities.
    medium needs a lower word count plus either signal of each pair.

    Returns:
        (parse_quality, confidence 0-100)
    """
    tiers = parsing.quality_thresholds
    words = count_words(text)
    has_requirements = has_requirements_section(text)
    has_responsibilities = has_responsibilities_section(text)
    skill_count = len(requirements.required_skills) + len(requirements.required_tools)
    duty_count = len(responsibilities)

    if (
        words >= tiers.high.min_words
        and has_requirements
        and has_responsibilities
        and skill_count >= tiers.high.min_skills
        and duty_count >= tiers.high.min_responsibilities
    ):
        return "high", QUALITY_CONFIDENCE["high"]

    if (
        words >= tiers.medium.min_words
        and (has_requirements or skill_count >= tiers.medium.min_skills)
        and (has_responsibilities or duty_count >= tiers.medium.min_responsibilities)
    ):
        return "medium", QUALITY_CONFIDENCE["medium"]

    return "low", LOW_CONFIDENCE if words >= tiers.low.min_words else MINIMAL_CONFIDENCE


# =============================================================================
# IDENTITY
# =============================================================================


def generate_canonical_id(
    company: str,
    title: str,
    location: str,
    posted_date: Optional[str] = None,
    job_url: Optional[str] = None,
) -> str:
    """
    Deduplication identity for a posting.

    A job URL wins: its canonical form (tracking parameters and "www."
    removed) is hashed with a "url:" prefix. Otherwise the normalized
    company, title and location plus the date-only posted date are joined
    positionally (an empty field keeps its slot) and hashed with a "hash:"
    prefix.

    Example:
        >>> generate_canonical_id("Acme Inc", "Data Engineer", "Austin, TX")
        "hash:..."  # same value for "acme inc", "DATA ENGINEER", "Austin TX"
    """
    if job_url and job_url.strip():
        return "url:" + _short_hash(canonicalize_url(job_url))

    components = [normalize_for_hash(value or "") for value in (company, title, location)]
    components.append((posted_date or "").strip()[:10])
    key = "|".join(components)
    return "hash:" + _short_hash(key)


def check_duplicate(
    canonical_id: str,
    existing_ids: Union[Iterable[str], Mapping[str, str]],
) -> tuple[bool, Optional[str]]:
    """
    Exact-match duplicate check.

    Args:
        canonical_id: Id of the incoming posting
        existing_ids: Known canonical ids, or a mapping of canonical id to
            stored job id

    Returns:
        (is_duplicate, existing job id or None)
    """
    if isinstance(existing_ids, Mapping):
        if canonical_id in existing_ids:
            return True, existing_ids[canonical_id]
        return False, None

    if canonical_id in set(existing_ids):
        return True, canonical_id
    return False, None


def _short_hash(value: str) -> str:
    return hashlib.sha256(value.encode("utf-8")).hexdigest()[:CANONICAL_HASH_LENGTH]
