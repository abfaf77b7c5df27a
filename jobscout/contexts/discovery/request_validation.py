"""
Inbound request validation for the discovery context.

Identity and description problems raise their specific error codes
(MISSING_USER_ID, MISSING_RESUME_ID, MISSING_JOB_DESCRIPTION, JD_TOO_SHORT,
JD_TOO_LONG). Every other field problem is collected and raised together
as VALIDATION_ERROR with details {"errors": [{"path", "message"}, ...]}.
Empty-string metadata values count as absent.
"""

from dataclasses import dataclass
from typing import Optional
from urllib.parse import urlparse

from jobscout.config.schema import ParsingConfig
from jobscout.contexts.intake.job_data_structure import JOB_SOURCES, RawPosting
from jobscout.contexts.intake.job_parser import validate_posting_text
from jobscout.contexts.matching.preferences import (
    CATEGORIES,
    WORK_ARRANGEMENTS,
    JobFilters,
    UserPreferences,
)
from jobscout.exceptions import ErrorCode, create_error
from jobscout.utils.timestamp import parse_date


@dataclass(frozen=True)
class JobMetadataInput:
    """Optional caller-supplied facts about a posting."""

    job_title: Optional[str] = None
    company: Optional[str] = None
    job_url: Optional[str] = None
    location: Optional[str] = None
    posted_date: Optional[str] = None
    application_deadline: Optional[str] = None
    source: Optional[str] = None


@dataclass(frozen=True)
class JobPasteRequest:
    job_description: str
    user_id: str
    resume_version_id: str
    metadata: Optional[JobMetadataInput] = None
    language: Optional[str] = None


def validate_job_paste_request(
    request: JobPasteRequest, parsing: ParsingConfig
) -> RawPosting:
    """
    Validate a paste request and convert it to a RawPosting.

    Raises:
        JobDiscoveryError: specific code for identity/description problems,
            VALIDATION_ERROR for everything else
    """
    if not (request.user_id or "").strip():
        raise create_error(ErrorCode.MISSING_USER_ID)
    if not (request.resume_version_id or "").strip():
        raise create_error(ErrorCode.MISSING_RESUME_ID)

    text = validate_posting_text(request.job_description, parsing)

    metadata = request.metadata or JobMetadataInput()
    errors = []

    job_url = _present(metadata.job_url)
    if job_url and not _is_url(job_url):
        errors.append(_issue("metadata.job_url", "Invalid url"))

    for path, value in (
        ("metadata.posted_date", metadata.posted_date),
        ("metadata.application_deadline", metadata.application_deadline),
    ):
        if _present(value) and parse_date(value) is None:
            errors.append(_issue(path, "Invalid datetime"))

    source = _present(metadata.source)
    if source and source not in JOB_SOURCES:
        errors.append(_issue("metadata.source", f"Expected one of {', '.join(JOB_SOURCES)}"))

    _raise_if_any(errors)

    return RawPosting(
        text=text,
        title=_present(metadata.job_title),
        company=_present(metadata.company),
        location=_present(metadata.location),
        job_url=job_url,
        posted_date=_present(metadata.posted_date),
        application_deadline=_present(metadata.application_deadline),
        source=source or "manual_paste",
        language=request.language,
    )


def validate_preferences(preferences: UserPreferences) -> UserPreferences:
    errors = []
    for i, arrangement in enumerate(preferences.work_arrangement):
        if arrangement not in WORK_ARRANGEMENTS:
            errors.append(
                _issue(
                    f"work_arrangement.{i}",
                    f"Expected one of {', '.join(WORK_ARRANGEMENTS)}",
                )
            )
    if preferences.salary_minimum is not None and preferences.salary_minimum < 0:
        errors.append(_issue("salary_minimum", "Must be greater than or equal to 0"))

    _raise_if_any(errors)
    return preferences


def validate_filters(filters: JobFilters) -> JobFilters:
    errors = []
    if filters.category is not None and filters.category not in CATEGORIES:
        errors.append(_issue("category", f"Expected one of {', '.join(CATEGORIES)}"))

    for path, value in (
        ("min_fit_score", filters.min_fit_score),
        ("max_fit_score", filters.max_fit_score),
    ):
        if value is not None and not 0 <= value <= 100:
            errors.append(_issue(path, "Must be between 0 and 100"))

    if (
        filters.min_fit_score is not None
        and filters.max_fit_score is not None
        and filters.min_fit_score > filters.max_fit_score
    ):
        errors.append(_issue("min_fit_score", "Must not exceed max_fit_score"))

    _raise_if_any(errors)
    return filters


def _present(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _is_url(value: str) -> bool:
    parsed = urlparse(value)
    return parsed.scheme in ("http", "https") and bool(parsed.netloc)


def _issue(path: str, message: str) -> dict[str, str]:
    return {"path": path, "message": message}


def _raise_if_any(errors: list[dict[str, str]]) -> None:
    if errors:
        raise create_error(ErrorCode.VALIDATION_ERROR, {"errors": errors})
