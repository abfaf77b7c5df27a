"""
Heuristic metadata extraction from raw job posting text.

Extracts title, company, location, work arrangement, salary and dates using
the ordered pattern lists in extraction_patterns.py. Each field is tried
most-specific pattern first; the first structurally valid match wins.
Nothing here raises on malformed text: fields with no match get the
placeholder sentinels from job_data_structure.py.
"""

import re
from dataclasses import dataclass
from datetime import datetime, timedelta

from jobscout.contexts.intake.extraction_patterns import (
    COMPANY_PATTERNS,
    DEADLINE_PATTERNS,
    ESTABLISHED_COMPANIES,
    KNOWN_CITIES,
    LOCATION_PATTERNS,
    LONG_DATE_FORMATS,
    POSTED_DATE_PATTERNS,
    SALARY_MAX_ANNUAL,
    SALARY_MIN_ANNUAL,
    SALARY_PATTERNS,
    TITLE_KEYWORDS,
    TITLE_PATTERNS,
    TOP_TIER_COMPANIES,
    UNICORN_COMPANIES,
    CompanyPatterns,
    DatePatterns,
    LocationPatterns,
    SalaryPatterns,
    WorkArrangementPatterns,
)
from jobscout.contexts.intake.job_data_structure import (
    UNKNOWN_COMPANY,
    UNKNOWN_LOCATION,
    UNKNOWN_TITLE,
    CompanyTier,
    RawPosting,
    SalaryRange,
    WorkArrangement,
)
from jobscout.contexts.intake.normalizer import clean_location, clean_title
from jobscout.utils.text_processing import first_term
from jobscout.utils.timestamp import parse_date, today

# Candidate length bounds
TITLE_MIN_LENGTH = 5
TITLE_MAX_LENGTH = 100
COMPANY_MIN_LENGTH = 2
COMPANY_MAX_LENGTH = 60
COMPANY_MAX_WORDS = 6
LOCATION_MIN_LENGTH = 2
LOCATION_MAX_LENGTH = 100

# Lines scanned for a title when no pattern produced one
TITLE_SCAN_LINES = 10


@dataclass(frozen=True)
class ExtractedMetadata:
    """Header-level facts about a posting, with overrides already applied."""

    title: str
    company: str
    location: str
    work_arrangement: WorkArrangement
    salary_range: SalaryRange | None
    posted_date: str | None
    application_deadline: str | None
    company_tier: CompanyTier


def extract_metadata(text: str, posting: RawPosting | None = None) -> ExtractedMetadata:
    """
    Extract all header-level metadata from posting text.

    Args:
        text: Normalized posting text
        posting: Raw posting whose non-empty overrides take precedence

    Returns:
        ExtractedMetadata with sentinels for anything not found
    """
    posting = posting or RawPosting(text=text)

    title = _override(posting.title) or extract_title(text)
    company = _override(posting.company) or extract_company(text)
    location = _override(posting.location) or extract_location(text)

    posted_date = None
    if _override(posting.posted_date):
        parsed = parse_date(posting.posted_date)
        posted_date = parsed.isoformat() if parsed else None
    if posted_date is None:
        posted_date = extract_posted_date(text)

    deadline = None
    if _override(posting.application_deadline):
        parsed = parse_date(posting.application_deadline)
        deadline = parsed.isoformat() if parsed else None
    if deadline is None:
        deadline = extract_deadline(text)

    return ExtractedMetadata(
        title=title,
        company=company,
        location=location,
        work_arrangement=extract_work_arrangement(text),
        salary_range=extract_salary(text),
        posted_date=posted_date,
        application_deadline=deadline,
        company_tier=determine_company_tier(company),
    )


def _override(value: str | None) -> str | None:
    if value is None:
        return None
    stripped = value.strip()
    return stripped or None


# =============================================================================
# TITLE AND COMPANY
# =============================================================================


def extract_title(text: str) -> str:
    """Extract job title, or UNKNOWN_TITLE."""
    for pattern in TITLE_PATTERNS:
        match = pattern.search(text)
        if match:
            candidate = clean_title(match.group(1))
            if _is_valid_title(candidate):
                return candidate

    # Any early line that reads like a job title
    for line in text.strip().splitlines()[:TITLE_SCAN_LINES]:
        candidate = clean_title(line)
        if _is_valid_title(candidate):
            return candidate

    return UNKNOWN_TITLE


def _is_valid_title(candidate: str) -> bool:
    if not TITLE_MIN_LENGTH <= len(candidate) <= TITLE_MAX_LENGTH:
        return False
    return first_term(candidate, TITLE_KEYWORDS) is not None


def extract_company(text: str) -> str:
    """Extract hiring company name, or UNKNOWN_COMPANY."""
    for pattern in COMPANY_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        candidate = clean_company_name(match.group(1))
        if (
            COMPANY_MIN_LENGTH <= len(candidate) <= COMPANY_MAX_LENGTH
            and len(candidate.split()) <= COMPANY_MAX_WORDS
        ):
            return candidate

    return UNKNOWN_COMPANY


def clean_company_name(name: str) -> str:
    """
    Strip legal suffixes and trailing punctuation from a company name.

    Example:
        >>> clean_company_name("TechStartup Inc.")
        "TechStartup"
    """
    cleaned = CompanyPatterns.LEGAL_SUFFIX.sub("", name.strip())
    cleaned = cleaned.rstrip(",. ")
    return re.sub(r"\s+", " ", cleaned).strip()


def determine_company_tier(company: str) -> CompanyTier:
    """Tier from the built-in company lists; unrecognized real names are startups."""
    if first_term(company, TOP_TIER_COMPANIES):
        return "top_tier"
    if first_term(company, UNICORN_COMPANIES):
        return "unicorn"
    if first_term(company, ESTABLISHED_COMPANIES):
        return "established"
    if company == UNKNOWN_COMPANY or len(company.strip()) < 3:
        return "unknown"
    return "startup"


# =============================================================================
# LOCATION AND WORK ARRANGEMENT
# =============================================================================


def extract_location(text: str) -> str:
    """
    Extract location, or UNKNOWN_LOCATION.

    Explicit full-remote phrasing wins over any office address, since
    "Fully remote (HQ in Austin, TX)" describes a remote job.
    """
    if LocationPatterns.FULLY_REMOTE.search(text):
        return "Remote"

    for pattern in LOCATION_PATTERNS:
        match = pattern.search(text)
        if not match:
            continue
        if pattern is LocationPatterns.REMOTE:
            return "Remote"
        if pattern is LocationPatterns.HYBRID:
            return "Hybrid"
        candidate = clean_location(match.group(1))
        if LOCATION_MIN_LENGTH <= len(candidate) <= LOCATION_MAX_LENGTH:
            return candidate

    for city in KNOWN_CITIES:
        if city in text:
            return city

    if LocationPatterns.ANY_REMOTE.search(text):
        return "Remote"

    return UNKNOWN_LOCATION


def extract_work_arrangement(text: str) -> WorkArrangement:
    """Work arrangement, or "unknown" when no indicator is present."""
    if WorkArrangementPatterns.REMOTE.search(text):
        return "remote"
    if WorkArrangementPatterns.HYBRID.search(text):
        return "hybrid"
    if WorkArrangementPatterns.ONSITE.search(text):
        return "onsite"
    if WorkArrangementPatterns.BARE_REMOTE.search(
        text
    ) and not WorkArrangementPatterns.NEGATED_REMOTE.search(text):
        return "remote"
    return "unknown"


# =============================================================================
# SALARY
# =============================================================================


def extract_salary(text: str) -> SalaryRange | None:
    """
    Extract an annual salary range in USD.

    Figures written in thousands ("120k", or a bare "120" next to other k
    figures) are scaled up. A minimum outside the sane annual bound rejects
    the match; a maximum below the minimum or above the bound is dropped.
    Figures followed by an hourly marker ("/hr", "per hour") are skipped.
    """
    for pattern in SALARY_PATTERNS:
        for match in pattern.finditer(text):
            if SalaryPatterns.HOURLY_SUFFIX.match(text, match.end()):
                continue
            salary = _salary_from_match(match)
            if salary is not None:
                return salary
    return None


def _salary_from_match(match: re.Match) -> SalaryRange | None:
    low = _to_int(match.group(1))
    if low is None:
        return None
    high = _to_int(match.group(2)) if match.re.groups >= 2 else None

    in_thousands = "k" in match.group(0).lower() or 20 < low < 1000
    if in_thousands:
        low = low * 1000 if low < 1000 else low
        if high is not None and high < 1000:
            high *= 1000

    if not SALARY_MIN_ANNUAL <= low <= SALARY_MAX_ANNUAL:
        return None
    if high is not None and not low <= high <= SALARY_MAX_ANNUAL:
        high = None

    return SalaryRange(min=low, max=high, currency="USD")


def _to_int(value: str | None) -> int | None:
    if not value:
        return None
    digits = value.replace(",", "")
    return int(digits) if digits.isdigit() else None


# =============================================================================
# DATES
# =============================================================================


def extract_posted_date(text: str) -> str | None:
    """Posted date as a date-only ISO string, or None."""
    match = DatePatterns.POSTED_DAYS_AGO.search(text)
    if match:
        return (today() - timedelta(days=int(match.group(1)))).isoformat()

    match = DatePatterns.POSTED_RELATIVE.search(text)
    if match:
        offset = 1 if match.group(1).lower() == "yesterday" else 0
        return (today() - timedelta(days=offset)).isoformat()

    return _first_date(text, POSTED_DATE_PATTERNS)


def extract_deadline(text: str) -> str | None:
    """Application deadline as a date-only ISO string, or None."""
    return _first_date(text, DEADLINE_PATTERNS)


def _first_date(text: str, patterns: list[re.Pattern]) -> str | None:
    for pattern in patterns:
        match = pattern.search(text)
        if match:
            parsed = _parse_written_date(match.group(1))
            if parsed:
                return parsed
    return None


def _parse_written_date(value: str) -> str | None:
    """Parse "2025-03-05", "2025/03/05" or "March 5, 2025" to "2025-03-05"."""
    iso = parse_date(value.replace("/", "-"))
    if iso:
        return iso.isoformat()

    cleaned = re.sub(r"\s+", " ", value.strip())
    for fmt in LONG_DATE_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).date().isoformat()
        except ValueError:
            continue
    return None
