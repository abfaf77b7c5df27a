"""
Priority scoring for job ranking.

The final ranking score is a weighted sum of four 0-100 components (fit,
preference match, freshness, urgency) plus a flat category bonus, minus
itemized penalties, clamped at zero. The priority tier is a separate blend
so that a job the candidate should not apply to is always low priority
regardless of its score.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Literal, Optional

from jobscout.config.schema import (
    FreshnessConfig,
    JobDiscoveryConfig,
    RankingConfig,
    UrgencyConfig,
)
from jobscout.contexts.assessment.scam_detector import ScamDetectionResult, is_scam_job
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.matching.preferences import Category, UserPreferences
from jobscout.utils.timestamp import days_since, days_until

Priority = Literal["high", "medium", "low"]


@dataclass(frozen=True)
class ScorePenalty:
    code: str
    amount: float
    reason: str


@dataclass(frozen=True)
class ScoreBreakdown:
    fit_component: float
    preference_component: float
    freshness_component: float
    category_component: float
    urgency_component: float
    raw_score: float
    final_score: float
    penalties: list[ScorePenalty] = field(default_factory=list)


@dataclass(frozen=True)
class JobFlags:
    dream_job: bool = False
    applied: bool = False
    rejected: bool = False
    expired: bool = False
    new: bool = False
    scam_risk: bool = False


def _round1(value: float) -> float:
    return round(value, 1)


# =============================================================================
# COMPONENT SCORES
# =============================================================================


def calculate_urgency_score(
    posted_date: Optional[str],
    application_deadline: Optional[str],
    created_at: str,
    config: UrgencyConfig,
    reference: Optional[date] = None,
) -> float:
    """
    Urgency (0-100) from deadline proximity and posting recency.

    Without a posted date, recency falls back to when the job was saved,
    using the coarser saved-date buckets.
    """
    deadline_scores = config.deadline_scores
    remaining = days_until(application_deadline, reference)
    if remaining is None:
        deadline_score = deadline_scores.no_deadline
    elif remaining < 0:
        deadline_score = deadline_scores.expired
    elif remaining <= 3:
        deadline_score = deadline_scores.within_3_days
    elif remaining <= 7:
        deadline_score = deadline_scores.within_7_days
    elif remaining <= 14:
        deadline_score = deadline_scores.within_14_days
    elif remaining <= 30:
        deadline_score = deadline_scores.within_30_days
    else:
        deadline_score = deadline_scores.beyond_30_days

    recency = config.recency_scores
    age = days_since(posted_date, reference)
    if age is not None:
        if age <= 3:
            recency_score = recency.within_3_days
        elif age <= 7:
            recency_score = recency.within_7_days
        elif age <= 14:
            recency_score = recency.within_14_days
        elif age <= 30:
            recency_score = recency.within_30_days
        else:
            recency_score = recency.beyond_30_days
    else:
        saved_age = days_since(created_at, reference)
        if saved_age is not None and saved_age <= 1:
            recency_score = recency.within_1_day_saved
        elif saved_age is not None and saved_age <= 7:
            recency_score = recency.within_7_days_saved
        else:
            recency_score = recency.beyond_7_days_saved

    urgency = deadline_score * config.weights.deadline + recency_score * config.weights.recency
    return _round1(urgency)


def calculate_freshness_score(
    posted_date: Optional[str],
    created_at: str,
    config: FreshnessConfig,
    reference: Optional[date] = None,
) -> float:
    """Freshness (0-100) from the posted date, or the saved date when there is none."""
    scores = config.scores
    age = days_since(posted_date or created_at, reference)
    if age is None:
        return scores.beyond_30_days
    if age <= 1:
        return scores.within_1_day
    if age <= 3:
        return scores.within_3_days
    if age <= 7:
        return scores.within_7_days
    if age <= 14:
        return scores.within_14_days
    if age <= 30:
        return scores.within_30_days
    return scores.beyond_30_days


def calculate_preference_match(
    job: ParsedJob, preferences: UserPreferences, salary_soft_floor_ratio: float
) -> int:
    """
    Share (0-100) of applicable soft preference checks that pass.

    Checks: work arrangement, location (only when not strict), and salary
    minimum against the posted minimum with a soft floor. 100 when no
    check applies.
    """
    total = 0
    matched = 0

    if preferences.work_arrangement:
        total += 1
        if job.work_arrangement in preferences.work_arrangement:
            matched += 1

    if preferences.locations and not preferences.strict_location:
        total += 1
        if _location_matches(job.location, preferences.locations):
            matched += 1

    salary_min = job.salary_range.min if job.salary_range else None
    if preferences.salary_minimum and salary_min:
        total += 1
        if salary_min >= preferences.salary_minimum * salary_soft_floor_ratio:
            matched += 1

    if total == 0:
        return 100
    return round(matched / total * 100)


def _location_matches(location: str, wanted: list[str]) -> bool:
    lowered = location.lower()
    return any(place.lower() in lowered for place in wanted)


# =============================================================================
# BREAKDOWN
# =============================================================================


def calculate_score_breakdown(
    fit_score: float,
    category: Category,
    preference_match: float,
    freshness: float,
    urgency: float,
    job: ParsedJob,
    preferences: UserPreferences,
    scam: ScamDetectionResult,
    config: RankingConfig,
    reference: Optional[date] = None,
) -> ScoreBreakdown:
    """
    Weighted components, category bonus and itemized penalties.

    final_score = max(0, raw_score + sum of penalty amounts)
    """
    weights = config.weights
    fit_component = fit_score * weights.fit_score
    preference_component = preference_match * weights.preference_match
    freshness_component = freshness * weights.freshness
    urgency_component = urgency * weights.urgency
    category_component = config.category_bonuses.for_category(category)

    raw_score = (
        fit_component
        + preference_component
        + freshness_component
        + category_component
        + urgency_component
    )

    amounts = config.penalties
    penalties = []

    if preferences.locations and not _location_matches(job.location, preferences.locations):
        penalties.append(
            ScorePenalty(
                "location_mismatch",
                amounts.location_mismatch,
                f"Location '{job.location}' not in preferences",
            )
        )

    salary_max = job.salary_range.max if job.salary_range else None
    if preferences.salary_minimum and salary_max and salary_max < preferences.salary_minimum:
        penalties.append(
            ScorePenalty(
                "salary_low",
                amounts.salary_low,
                f"Salary ${salary_max} below minimum ${preferences.salary_minimum}",
            )
        )

    if scam.risk_level in ("medium", "high"):
        amount = amounts.scam_risk_high if scam.risk_level == "high" else amounts.scam_risk_medium
        penalties.append(
            ScorePenalty(
                "scam_risk", amount, f"Job shows red flags ({scam.red_flag_count} detected)"
            )
        )

    remaining = days_until(job.metadata.application_deadline, reference)
    if remaining is not None and remaining < 0:
        penalties.append(ScorePenalty("expired", amounts.expired, "Application deadline passed"))

    final_score = max(0.0, raw_score + sum(p.amount for p in penalties))

    return ScoreBreakdown(
        fit_component=_round1(fit_component),
        preference_component=_round1(preference_component),
        freshness_component=_round1(freshness_component),
        category_component=_round1(category_component),
        urgency_component=_round1(urgency_component),
        raw_score=_round1(raw_score),
        final_score=_round1(final_score),
        penalties=penalties,
    )


# =============================================================================
# PRIORITY AND FLAGS
# =============================================================================


def determine_priority(
    fit_score: float,
    category: Category,
    should_apply: bool,
    freshness: float,
    urgency: float,
    flags: JobFlags,
    config: JobDiscoveryConfig,
) -> Priority:
    """
    Priority tier from a second weighted blend.

    fit x 0.4 + category bonus + freshness x 0.15 + urgency x 0.15, plus
    flat bonuses for dream/new jobs and a flat penalty for scam risk.
    """
    if not should_apply:
        return "low"

    blend = config.priority_blend
    score = (
        fit_score * blend.fit
        + blend.category_bonuses.for_category(category)
        + freshness * blend.freshness
        + urgency * blend.urgency
    )

    ranking = config.ranking
    if flags.dream_job:
        score += ranking.priority_bonuses.dream_job
    if flags.new:
        score += ranking.priority_bonuses.new
    if flags.scam_risk:
        score += ranking.priority_penalties.scam_risk

    thresholds = config.priority_thresholds
    if score >= thresholds.high:
        return "high"
    if score >= thresholds.medium:
        return "medium"
    return "low"


def determine_job_flags(
    job: ParsedJob,
    fit_score: float,
    scam: ScamDetectionResult,
    config: JobDiscoveryConfig,
    applied_job_ids: Optional[list[str]] = None,
    rejected_job_ids: Optional[list[str]] = None,
    reference: Optional[date] = None,
) -> JobFlags:
    applied_ids = set(applied_job_ids or [])
    rejected_ids = set(rejected_job_ids or [])

    age = days_since(job.metadata.posted_date or job.created_at, reference)
    remaining = days_until(job.metadata.application_deadline, reference)

    return JobFlags(
        dream_job=(
            fit_score >= config.ranking.dream_job_min_fit
            and job.metadata.company_tier in ("top_tier", "unicorn")
        ),
        applied=job.canonical_id in applied_ids or job.job_id in applied_ids,
        rejected=job.canonical_id in rejected_ids or job.job_id in rejected_ids,
        expired=remaining is not None and remaining < 0,
        new=age is not None and age <= config.freshness.new_job_days,
        scam_risk=is_scam_job(scam),
    )
