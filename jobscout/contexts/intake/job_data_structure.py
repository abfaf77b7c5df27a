"""
Job posting data structures for the Intake context.

RawPosting is what callers hand in; ParsedJob is the canonical structured
record every downstream context consumes. ParsedJob is frozen: re-parsing
or updating produces a new instance via with_updates().

Parse results are reported as a tagged outcome (ParsedOk, ParsedFallback,
ParseRejected) so callers can tell a clean parse from a degraded one and
from rejected input without catching exceptions.
"""

from dataclasses import asdict, dataclass, field, replace
from typing import Any, ClassVar, Literal, Optional, Union

from jobscout.exceptions import JobDiscoveryError
from jobscout.utils.timestamp import now_exact

Importance = Literal["critical", "nice_to_have"]
Seniority = Literal["entry", "mid", "senior", "lead"]
WorkArrangement = Literal["remote", "hybrid", "onsite", "unknown"]
ParseQuality = Literal["high", "medium", "low"]
ParseOutcomeKind = Literal["ok", "fallback"]
CompanyTier = Literal["top_tier", "unicorn", "established", "startup", "unknown"]

JOB_SOURCES = ("manual_paste", "email_forward", "api")

UNKNOWN_TITLE = "Unknown Position"
UNKNOWN_COMPANY = "Unknown Company"
UNKNOWN_LOCATION = "Location Not Specified"


@dataclass(frozen=True)
class RawPosting:
    """
    Free-text job posting plus optional user-supplied overrides.

    Overrides always win over anything extracted from the text.
    """

    text: str
    title: Optional[str] = None
    company: Optional[str] = None
    location: Optional[str] = None
    job_url: Optional[str] = None
    posted_date: Optional[str] = None
    application_deadline: Optional[str] = None
    source: str = "manual_paste"
    language: Optional[str] = None


@dataclass(frozen=True)
class EvidenceSpan:
    """Verbatim quote supporting an extracted item, with character offsets into raw text."""

    quote: str
    start: int
    end: int
    confidence: float = 0.9


@dataclass(frozen=True)
class ExtractedField:
    """
    A skill or tool extracted from the posting.

    importance is set only by the section the item was found in:
    required section -> critical, preferred section -> nice_to_have.
    """

    value: str
    importance: Importance
    evidence: list[EvidenceSpan] = field(default_factory=list)

    @property
    def normalized_name(self) -> str:
        return self.value.lower()


@dataclass(frozen=True)
class JobRequirements:
    required_skills: list[ExtractedField] = field(default_factory=list)
    preferred_skills: list[ExtractedField] = field(default_factory=list)
    required_tools: list[ExtractedField] = field(default_factory=list)
    preferred_tools: list[ExtractedField] = field(default_factory=list)
    seniority_expected: Seniority = "mid"
    years_experience_min: Optional[int] = None
    years_experience_max: Optional[int] = None
    education: list[str] = field(default_factory=list)
    certifications: list[str] = field(default_factory=list)
    domain_keywords: list[str] = field(default_factory=list)
    extraction_confidence: float = 0.0
    extraction_method: str = "heuristic"

    def required_names(self) -> list[str]:
        """Display names of all required skills and tools."""
        return [item.value for item in self.required_skills + self.required_tools]


@dataclass(frozen=True)
class SalaryRange:
    min: Optional[int] = None
    max: Optional[int] = None
    currency: str = "USD"


@dataclass(frozen=True)
class JobMetadata:
    parse_quality: ParseQuality = "low"
    confidence: int = 0
    source: str = "manual_paste"
    posted_date: Optional[str] = None
    application_deadline: Optional[str] = None
    company_tier: CompanyTier = "unknown"
    company_size: Optional[str] = None
    industry: Optional[str] = None
    language: Optional[str] = None
    # "fallback" when full extraction failed; fallback_reason names the error
    parse_outcome: ParseOutcomeKind = "ok"
    fallback_reason: Optional[str] = None


@dataclass(frozen=True)
class ParsedJob:
    """Canonical structured job posting. Created once per parse call."""

    job_id: str
    canonical_id: str
    title: str
    company: str
    location: str
    raw_text: str
    requirements: JobRequirements
    responsibilities: list[str] = field(default_factory=list)
    benefits: list[str] = field(default_factory=list)
    work_arrangement: WorkArrangement = "unknown"
    salary_range: Optional[SalaryRange] = None
    metadata: JobMetadata = field(default_factory=JobMetadata)
    job_url: Optional[str] = None
    created_at: str = field(default_factory=now_exact)
    updated_at: str = field(default_factory=now_exact)

    def with_updates(self, **changes: Any) -> "ParsedJob":
        """Return a copy with changes applied and a fresh updated_at."""
        return replace(self, updated_at=now_exact(), **changes)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# PARSE OUTCOME
# =============================================================================


@dataclass(frozen=True)
class ParsedOk:
    kind: ClassVar[str] = "ok"
    job: ParsedJob

    def unwrap(self) -> ParsedJob:
        return self.job


@dataclass(frozen=True)
class ParsedFallback:
    """Full extraction failed; job is the minimal low-confidence record."""

    kind: ClassVar[str] = "fallback"
    job: ParsedJob
    reason: str

    def unwrap(self) -> ParsedJob:
        return self.job


@dataclass(frozen=True)
class ParseRejected:
    """Input failed validation; no extraction was attempted."""

    kind: ClassVar[str] = "rejected"
    error: JobDiscoveryError

    def unwrap(self) -> ParsedJob:
        raise self.error


ParseOutcome = Union[ParsedOk, ParsedFallback, ParseRejected]
