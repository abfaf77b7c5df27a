"""
Job ranking.

rank_job() runs the whole per-job pipeline: fit, category, component
scores, constraints, apply decision, breakdown, flags, priority, career
capital, scam risk and insights. rank_jobs() fans that out over a thread
pool, then sorts once by final score and numbers the results. Input
records are never mutated; ranks are set on new RankedJob instances.

Portfolio helpers (grouping, summary, top recommendations, insights and
filters) operate on an already-ranked list.
"""

import time
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass, field, replace
from datetime import date
from typing import Any, Optional, Sequence

from jobscout.config.schema import JobDiscoveryConfig
from jobscout.contexts.assessment.career_capital import (
    CareerCapitalResult,
    calculate_career_capital,
)
from jobscout.contexts.assessment.logger import log_career_capital, log_scam_detection
from jobscout.contexts.assessment.scam_detector import ScamDetectionResult, detect_scam
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.matching.categorizer import (
    categorize_job,
    check_hard_constraints,
    should_user_apply,
)
from jobscout.contexts.matching.fit_adapter import NEUTRAL_FIT_SCORE, FitAdapter, FitResult
from jobscout.contexts.matching.insights import generate_job_insights
from jobscout.contexts.matching.logger import log_batch_ranked, log_ranked_job
from jobscout.contexts.matching.preferences import (
    CATEGORIES,
    CandidateProfile,
    Category,
    JobFilters,
    UserPreferences,
)
from jobscout.contexts.matching.priority_scorer import (
    JobFlags,
    Priority,
    ScoreBreakdown,
    calculate_freshness_score,
    calculate_preference_match,
    calculate_score_breakdown,
    calculate_urgency_score,
    determine_job_flags,
    determine_priority,
)

MAX_TOP_RECOMMENDATIONS = 5
MAX_PORTFOLIO_INSIGHTS = 6


@dataclass(frozen=True)
class RankedJob:
    job: ParsedJob
    fit_score: float
    fit_analysis: Optional[FitResult]
    category: Category
    category_reasoning: str
    priority_score: float
    score_breakdown: ScoreBreakdown
    flags: JobFlags
    should_apply: bool
    apply_reasoning: str
    application_priority: Priority
    career_capital: CareerCapitalResult
    scam_detection: ScamDetectionResult
    rank: int = 0
    quick_insights: list[str] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)
    green_flags: list[str] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class JobListSummary:
    total_jobs: int
    reach_count: int
    target_count: int
    safety_count: int
    avoid_count: int
    average_fit_score: int
    applied_count: int
    new_count: int


@dataclass(frozen=True)
class JobListResult:
    jobs: dict[str, list[RankedJob]]
    summary: JobListSummary
    top_recommendations: list[RankedJob]
    insights: list[str]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


# =============================================================================
# RANKING
# =============================================================================


def rank_job(
    job: ParsedJob,
    profile: CandidateProfile,
    preferences: UserPreferences,
    config: JobDiscoveryConfig,
    fit_adapter: Optional[FitAdapter] = None,
    reference: Optional[date] = None,
) -> RankedJob:
    """
    Rank a single job for a candidate.

    Args:
        job: Parsed posting
        profile: Resume text, experience, known skills, applied/rejected ids
        preferences: Hard and soft job preferences
        config: Loaded engine configuration
        fit_adapter: Fit Oracle boundary; defaults to the degraded estimate
        reference: Date treated as "today" for freshness and urgency

    Returns:
        RankedJob with rank 0; rank_jobs() assigns the final rank
    """
    adapter = fit_adapter or FitAdapter()
    fit = adapter.analyze(profile.resume_text, job)
    fit_score = fit.fit_score if fit else NEUTRAL_FIT_SCORE
    gaps = fit.gap_analysis if fit else None

    decision = categorize_job(fit_score, gaps, config.categorization)

    urgency = calculate_urgency_score(
        job.metadata.posted_date,
        job.metadata.application_deadline,
        job.created_at,
        config.urgency,
        reference,
    )
    freshness = calculate_freshness_score(
        job.metadata.posted_date, job.created_at, config.freshness, reference
    )
    preference_match = calculate_preference_match(
        job, preferences, config.ranking.salary_soft_floor_ratio
    )

    constraints = check_hard_constraints(job, preferences)
    apply = should_user_apply(
        fit_score, decision.category, config.apply_decision, constraints.passed
    )

    job_label = f"{job.title} at {job.company}"
    scam = detect_scam(job, config.scam_detection)
    log_scam_detection(job_label, scam)

    breakdown = calculate_score_breakdown(
        fit_score,
        decision.category,
        preference_match,
        freshness,
        urgency,
        job,
        preferences,
        scam,
        config.ranking,
        reference,
    )

    flags = determine_job_flags(
        job,
        fit_score,
        scam,
        config,
        profile.applied_job_ids,
        profile.rejected_job_ids,
        reference,
    )
    priority = determine_priority(
        fit_score, decision.category, apply.should_apply, freshness, urgency, flags, config
    )

    career_capital = calculate_career_capital(
        job, config.career_capital, profile.years_experience, profile.current_skills
    )
    log_career_capital(job_label, career_capital)
    insights = generate_job_insights(job, fit, decision.category, career_capital)

    ranked = RankedJob(
        job=job,
        fit_score=fit_score,
        fit_analysis=fit,
        category=decision.category,
        category_reasoning=decision.reasoning,
        priority_score=breakdown.final_score,
        score_breakdown=breakdown,
        flags=flags,
        should_apply=apply.should_apply,
        apply_reasoning=apply.reasoning,
        application_priority=priority,
        career_capital=career_capital,
        scam_detection=scam,
        quick_insights=insights.quick_insights,
        red_flags=insights.red_flags,
        green_flags=insights.green_flags,
    )
    log_ranked_job(ranked)
    return ranked


def rank_jobs(
    jobs: Sequence[ParsedJob],
    profile: CandidateProfile,
    preferences: UserPreferences,
    config: JobDiscoveryConfig,
    fit_adapter: Optional[FitAdapter] = None,
    reference: Optional[date] = None,
    max_workers: Optional[int] = None,
) -> list[RankedJob]:
    """
    Rank a batch of jobs, best first.

    Per-job ranking runs concurrently; results are collected in input
    order so that the stable sort keeps input order among equal scores.
    """
    if not jobs:
        return []

    start = time.perf_counter()
    adapter = fit_adapter or FitAdapter()

    with ThreadPoolExecutor(max_workers=max_workers) as pool:
        futures = [
            pool.submit(rank_job, job, profile, preferences, config, adapter, reference)
            for job in jobs
        ]
        ranked = [future.result() for future in futures]

    ranked.sort(key=lambda r: r.priority_score, reverse=True)
    result = [replace(r, rank=index) for index, r in enumerate(ranked, start=1)]

    log_batch_ranked(len(result), (time.perf_counter() - start) * 1000)
    return result


# =============================================================================
# PORTFOLIO
# =============================================================================


def group_jobs_by_category(ranked_jobs: Sequence[RankedJob]) -> dict[str, list[RankedJob]]:
    """Split a ranked list into the four categories, keeping rank order within each."""
    return {
        category: [r for r in ranked_jobs if r.category == category] for category in CATEGORIES
    }


def calculate_summary(
    ranked_jobs: Sequence[RankedJob], grouped: dict[str, list[RankedJob]]
) -> JobListSummary:
    fit_scores = [r.fit_score for r in ranked_jobs]
    average = round(sum(fit_scores) / len(fit_scores)) if fit_scores else 0
    return JobListSummary(
        total_jobs=len(ranked_jobs),
        reach_count=len(grouped["reach"]),
        target_count=len(grouped["target"]),
        safety_count=len(grouped["safety"]),
        avoid_count=len(grouped["avoid"]),
        average_fit_score=average,
        applied_count=sum(1 for r in ranked_jobs if r.flags.applied),
        new_count=sum(1 for r in ranked_jobs if r.flags.new),
    )


def get_top_recommendations(
    ranked_jobs: Sequence[RankedJob], max_count: int = MAX_TOP_RECOMMENDATIONS
) -> list[RankedJob]:
    """Best-ranked jobs worth applying to that are not applied to or expired."""
    eligible = [
        r for r in ranked_jobs if r.should_apply and not r.flags.applied and not r.flags.expired
    ]
    return eligible[:max_count]


def generate_portfolio_insights(
    ranked_jobs: Sequence[RankedJob], summary: JobListSummary
) -> list[str]:
    insights = []

    average = summary.average_fit_score
    if average >= 70:
        insights.append(f"Strong portfolio with {average}/100 average fit score")
    elif average >= 50:
        insights.append(
            f"Moderate portfolio quality ({average}/100 avg fit) - consider better-matched roles"
        )
    else:
        insights.append(f"Low average fit ({average}/100) - reconsider job search criteria")

    if summary.target_count >= 3:
        insights.append(f"{summary.target_count} target jobs provide solid interview opportunities")
    if summary.safety_count >= 2:
        insights.append(f"{summary.safety_count} safety options available as backups")
    if 2 <= summary.reach_count <= 4:
        insights.append(f"{summary.reach_count} reach positions for growth - good balance")
    elif summary.reach_count > 4:
        insights.append(
            f"Many reach positions ({summary.reach_count}) - add more realistic targets"
        )

    if summary.new_count > 0:
        plural = "s" if summary.new_count > 1 else ""
        insights.append(
            f"{summary.new_count} new job{plural} added recently - prioritize fresh listings"
        )

    pending_targets = sum(1 for r in ranked_jobs if r.category == "target" and not r.flags.applied)
    if pending_targets > 0:
        insights.append(f"{pending_targets} target jobs still waiting for applications")

    high_risk = sum(1 for r in ranked_jobs if r.scam_detection.risk_level == "high")
    if high_risk > 0:
        verb = "jobs show" if high_risk > 1 else "job shows"
        insights.append(f"Warning: {high_risk} {verb} high scam risk - review carefully")

    return insights[:MAX_PORTFOLIO_INSIGHTS]


def generate_job_list_result(
    jobs: Sequence[ParsedJob],
    profile: CandidateProfile,
    preferences: UserPreferences,
    config: JobDiscoveryConfig,
    fit_adapter: Optional[FitAdapter] = None,
    reference: Optional[date] = None,
) -> JobListResult:
    """Rank a batch and build the grouped, summarized list."""
    ranked = rank_jobs(jobs, profile, preferences, config, fit_adapter, reference)
    grouped = group_jobs_by_category(ranked)
    summary = calculate_summary(ranked, grouped)
    return JobListResult(
        jobs=grouped,
        summary=summary,
        top_recommendations=get_top_recommendations(ranked),
        insights=generate_portfolio_insights(ranked, summary),
    )


def apply_filters(result: JobListResult, filters: JobFilters) -> JobListResult:
    """
    Narrow the grouped jobs of a list result.

    Summary, recommendations and insights describe the unfiltered batch.
    Expired and rejected jobs are dropped unless the filters include them.
    """

    def keep(ranked: RankedJob) -> bool:
        if filters.category and ranked.category != filters.category:
            return False
        if filters.min_fit_score is not None and ranked.fit_score < filters.min_fit_score:
            return False
        if filters.max_fit_score is not None and ranked.fit_score > filters.max_fit_score:
            return False
        if filters.only_should_apply and not ranked.should_apply:
            return False
        if not filters.include_expired and ranked.flags.expired:
            return False
        if not filters.include_rejected and ranked.flags.rejected:
            return False
        return True

    grouped = {category: [r for r in jobs if keep(r)] for category, jobs in result.jobs.items()}
    return replace(result, jobs=grouped)
