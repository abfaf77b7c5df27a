"""
Fit Adapter: boundary to the external Fit Oracle.

The Fit Oracle is any callable (resume_text, ParsedJob) -> FitResult | None.
FitAdapter calls it and never lets its failures escape: an exception is
logged and reported as None, and callers substitute NEUTRAL_FIT_SCORE.

When no oracle is configured the adapter produces a degraded estimate from
keyword overlap between the resume text and the posting's requirements.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Literal, Optional, Protocol

from jobscout.contexts.intake.job_data_structure import ExtractedField, ParsedJob
from jobscout.contexts.matching.logger import _log_debug, _log_warning
from jobscout.utils.text_processing import contains_term

Alignment = Literal["aligned", "underqualified", "overqualified"]

NEUTRAL_FIT_SCORE = 50

# Share of required items assumed matched when there is no resume text
ASSUMED_SKILL_MATCH = 0.6
ASSUMED_TOOL_MATCH = 0.5
POINTS_PER_SKILL = 15
POINTS_PER_TOOL = 20
QUALITY_FACTORS = {"high": 1.0, "medium": 0.9, "low": 0.8}
DEFAULT_EXPERIENCE_COVERAGE = 70
NEUTRAL_INDUSTRY_MATCH = 50

ALIGNMENT_SCORES = {"aligned": 100, "overqualified": 80, "underqualified": 60}

# "7 years", "10+ yrs"
RESUME_YEARS = re.compile(r"(\d{1,2})\+?\s*(?:years?|yrs?)", re.IGNORECASE)


# =============================================================================
# FIT RESULT
# =============================================================================


@dataclass(frozen=True)
class SkillGap:
    matched: list[str] = field(default_factory=list)
    critical_missing: list[str] = field(default_factory=list)
    nice_to_have_missing: list[str] = field(default_factory=list)
    match_percentage: float = 0.0


@dataclass(frozen=True)
class ExperienceGap:
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    coverage_percentage: float = 0.0


@dataclass(frozen=True)
class SeniorityGap:
    alignment: Alignment = "aligned"
    gap_years: float = 0
    candidate_years: Optional[float] = None
    job_level: str = "mid"


@dataclass(frozen=True)
class IndustryGap:
    matched: list[str] = field(default_factory=list)
    missing: list[str] = field(default_factory=list)
    match_percentage: float = 0.0


@dataclass(frozen=True)
class GapAnalysis:
    """Per-dimension matched/missing breakdown between a candidate and a job."""

    skills: SkillGap = field(default_factory=SkillGap)
    tools: SkillGap = field(default_factory=SkillGap)
    experience: ExperienceGap = field(default_factory=ExperienceGap)
    seniority: SeniorityGap = field(default_factory=SeniorityGap)
    industry: IndustryGap = field(default_factory=IndustryGap)
    transferable_skills: list[str] = field(default_factory=list)

    @property
    def critical_missing(self) -> list[str]:
        return self.skills.critical_missing + self.tools.critical_missing

    @property
    def matched(self) -> list[str]:
        return self.skills.matched + self.tools.matched


@dataclass(frozen=True)
class FitResult:
    fit_score: float
    gap_analysis: GapAnalysis
    source: Literal["oracle", "estimate"] = "oracle"


class FitOracle(Protocol):
    def __call__(self, resume_text: str, job: ParsedJob) -> Optional[FitResult]: ...


# =============================================================================
# ADAPTER
# =============================================================================


class FitAdapter:
    """
    Calls the configured Fit Oracle with graceful degradation.

    Args:
        oracle: External fit scorer; None selects the degraded estimate
    """

    def __init__(self, oracle: Optional[FitOracle] = None):
        self.oracle = oracle

    def analyze(self, resume_text: str, job: ParsedJob) -> Optional[FitResult]:
        """
        Fit of a resume to a job.

        Returns:
            FitResult, or None when the oracle failed or had no answer
        """
        if self.oracle is None:
            return estimate_fit(resume_text, job)

        try:
            result = self.oracle(resume_text, job)
        except Exception as e:
            _log_warning(
                f"Fit Oracle failed for {job.title} at {job.company}: "
                f"{type(e).__name__}: {e}; using neutral fit score"
            )
            return None

        if result is None:
            _log_debug(f"Fit Oracle returned no result for {job.title} at {job.company}")
        return result


# =============================================================================
# DEGRADED ESTIMATE
# =============================================================================


def estimate_fit(resume_text: str, job: ParsedJob) -> FitResult:
    """
    Keyword-overlap fit estimate used when no oracle is configured.

    With resume text, a required item counts as matched when the resume
    mentions it. Without resume text, 60% of required skills and 50% of
    required tools are assumed matched. Each matched skill is worth 15
    points and each matched tool 20 (capped at 100 per kind); the mean is
    scaled by a parse-quality factor.
    """
    requirements = job.requirements
    resume = resume_text or ""

    skills = _skill_gap(
        resume, requirements.required_skills, requirements.preferred_skills, ASSUMED_SKILL_MATCH
    )
    tools = _skill_gap(
        resume, requirements.required_tools, requirements.preferred_tools, ASSUMED_TOOL_MATCH
    )

    skills_score = min(100, POINTS_PER_SKILL * len(skills.matched))
    tools_score = min(100, POINTS_PER_TOOL * len(tools.matched))
    factor = QUALITY_FACTORS.get(job.metadata.parse_quality, QUALITY_FACTORS["low"])
    fit_score = round((skills_score + tools_score) / 2 * factor)

    preferred = requirements.preferred_skills + requirements.preferred_tools
    transferable = [
        item.value for item in preferred if resume and contains_term(resume, item.value)
    ]

    gap = GapAnalysis(
        skills=skills,
        tools=tools,
        experience=ExperienceGap(coverage_percentage=DEFAULT_EXPERIENCE_COVERAGE),
        seniority=_seniority_gap(resume, job),
        industry=_industry_gap(resume, requirements.domain_keywords),
        transferable_skills=transferable,
    )
    return FitResult(fit_score=fit_score, gap_analysis=gap, source="estimate")


def fit_score_from_gaps(gap: GapAnalysis) -> int:
    """
    Fit score implied by a gap analysis.

    Half technical match (mean of skill and tool percentages), a quarter
    seniority alignment, a quarter experience coverage.
    """
    technical = (gap.skills.match_percentage + gap.tools.match_percentage) / 2
    seniority = ALIGNMENT_SCORES.get(gap.seniority.alignment, ALIGNMENT_SCORES["aligned"])
    return round(technical * 0.5 + seniority * 0.25 + gap.experience.coverage_percentage * 0.25)


def _skill_gap(
    resume: str,
    required: list[ExtractedField],
    preferred: list[ExtractedField],
    assumed_share: float,
) -> SkillGap:
    names = [item.value for item in required]
    if resume.strip():
        matched = [name for name in names if contains_term(resume, name)]
    else:
        matched = names[: math.floor(assumed_share * len(names))]

    missing = [name for name in names if name not in matched]
    percentage = round(len(matched) / len(names) * 100) if names else 100
    return SkillGap(
        matched=matched,
        critical_missing=missing,
        nice_to_have_missing=[
            item.value for item in preferred if not (resume and contains_term(resume, item.value))
        ],
        match_percentage=percentage,
    )


def _seniority_gap(resume: str, job: ParsedJob) -> SeniorityGap:
    level = job.requirements.seniority_expected
    mentioned = [int(years) for years in RESUME_YEARS.findall(resume)]
    job_min = job.requirements.years_experience_min
    if not mentioned or job_min is None:
        return SeniorityGap(alignment="aligned", gap_years=0, job_level=level)

    candidate_years = max(mentioned)
    job_max = job.requirements.years_experience_max or job_min + 2
    if candidate_years < job_min:
        return SeniorityGap("underqualified", job_min - candidate_years, candidate_years, level)
    if candidate_years > job_max + 2:
        return SeniorityGap("overqualified", 0, candidate_years, level)
    return SeniorityGap("aligned", 0, candidate_years, level)


def _industry_gap(resume: str, domain_keywords: list[str]) -> IndustryGap:
    if not resume.strip() or not domain_keywords:
        return IndustryGap(missing=list(domain_keywords), match_percentage=NEUTRAL_INDUSTRY_MATCH)
    matched = [kw for kw in domain_keywords if contains_term(resume, kw)]
    missing = [kw for kw in domain_keywords if kw not in matched]
    return IndustryGap(
        matched=matched,
        missing=missing,
        match_percentage=round(len(matched) / len(domain_keywords) * 100),
    )
