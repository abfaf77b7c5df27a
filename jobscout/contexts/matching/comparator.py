"""
Side-by-side comparison of 2 to 5 ranked jobs.

Requirement tokens are the lowercased required skills and tools of each
job. Every "best" pick is independent and ties go to the earlier job.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Iterable, Optional, Sequence

from jobscout.contexts.intake.job_data_structure import SalaryRange
from jobscout.contexts.matching.insights import JobSnapshot, generate_comparison_insights
from jobscout.contexts.matching.logger import _log_debug
from jobscout.contexts.matching.preferences import Category
from jobscout.contexts.matching.ranker import RankedJob
from jobscout.exceptions import ErrorCode, create_error
from jobscout.utils.text_processing import format_score

MIN_COMPARE_JOBS = 2
MAX_COMPARE_JOBS = 5


@dataclass(frozen=True)
class SkillsOverlap:
    common_requirements: list[str] = field(default_factory=list)
    unique_per_job: dict[str, list[str]] = field(default_factory=dict)
    your_coverage: int = 100


@dataclass(frozen=True)
class ComparisonDetails:
    fit_scores: list[float]
    categories: list[Category]
    skills_overlap: SkillsOverlap
    seniority_levels: list[str]
    locations: list[str]
    remote_friendly: list[bool]
    salary_ranges: list[SalaryRange]
    your_level: Optional[str] = None


@dataclass(frozen=True)
class JobComparisonResult:
    jobs: list[RankedJob]
    comparison: ComparisonDetails
    best_fit: str
    easiest_to_get: str
    best_for_growth: str
    best_for_brand: str
    best_for_compensation: Optional[str]
    insights: list[str]

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def analyze_skills_overlap(
    jobs: Sequence[RankedJob], user_skills: Iterable[str] = ()
) -> SkillsOverlap:
    """
    Common, unique and covered requirement tokens across jobs.

    Coverage is the share of the union of all tokens that the user has,
    100 when the jobs list no requirements at all.
    """
    per_job: dict[str, list[str]] = {}
    for ranked in jobs:
        requirements = ranked.job.requirements
        items = requirements.required_skills + requirements.required_tools
        per_job[ranked.job.job_id] = list(dict.fromkeys(item.value.lower() for item in items))

    union = list(dict.fromkeys(token for tokens in per_job.values() for token in tokens))
    common = [token for token in union if all(token in tokens for tokens in per_job.values())]

    unique = {}
    for job_id, tokens in per_job.items():
        others = [set(t) for other_id, t in per_job.items() if other_id != job_id]
        unique[job_id] = [token for token in tokens if not any(token in o for o in others)]

    known = {skill.strip().lower() for skill in user_skills}
    coverage = round(sum(1 for t in union if t in known) / len(union) * 100) if union else 100

    return SkillsOverlap(common_requirements=common, unique_per_job=unique, your_coverage=coverage)


def compare_jobs(
    jobs: Sequence[RankedJob],
    user_skills: Iterable[str] = (),
    user_seniority_level: Optional[str] = None,
) -> JobComparisonResult:
    """
    Compare ranked jobs side by side.

    Args:
        jobs: Ranked jobs; only the first MAX_COMPARE_JOBS are compared
        user_skills: Candidate skills for the coverage percentage
        user_seniority_level: Candidate level echoed into the details

    Returns:
        JobComparisonResult

    Raises:
        JobDiscoveryError: COMPARISON_FAILED with fewer than 2 jobs
    """
    if len(jobs) < MIN_COMPARE_JOBS:
        raise create_error(
            ErrorCode.COMPARISON_FAILED,
            {"reason": "Need at least 2 jobs to compare", "providedCount": len(jobs)},
        )

    if len(jobs) > MAX_COMPARE_JOBS:
        _log_debug(f"Comparing first {MAX_COMPARE_JOBS} of {len(jobs)} jobs")
    jobs = list(jobs[:MAX_COMPARE_JOBS])

    comparison = ComparisonDetails(
        fit_scores=[r.fit_score for r in jobs],
        categories=[r.category for r in jobs],
        skills_overlap=analyze_skills_overlap(jobs, user_skills),
        seniority_levels=[r.job.requirements.seniority_expected for r in jobs],
        locations=[r.job.location for r in jobs],
        remote_friendly=[r.job.work_arrangement == "remote" for r in jobs],
        salary_ranges=[r.job.salary_range for r in jobs if r.job.salary_range],
        your_level=user_seniority_level,
    )

    best_fit = max(jobs, key=lambda r: r.fit_score)
    safeties = [r for r in jobs if r.category == "safety"]
    easiest = max(safeties, key=lambda r: r.fit_score) if safeties else best_fit
    growth = max(jobs, key=lambda r: r.career_capital.score)
    brand = max(jobs, key=lambda r: r.career_capital.brand_score)
    paid = [r for r in jobs if r.job.salary_range and r.job.salary_range.max]
    compensation = max(paid, key=lambda r: r.job.salary_range.max) if paid else None

    snapshots = [
        JobSnapshot(
            job_id=r.job.job_id,
            job_title=r.job.title,
            company=r.job.company,
            fit_score=r.fit_score,
            category=r.category,
            required_skills=[item.value for item in r.job.requirements.required_skills],
            career_capital_score=r.career_capital.score,
        )
        for r in jobs
    ]

    return JobComparisonResult(
        jobs=jobs,
        comparison=comparison,
        best_fit=best_fit.job.job_id,
        easiest_to_get=easiest.job.job_id,
        best_for_growth=growth.job.job_id,
        best_for_brand=brand.job.job_id,
        best_for_compensation=compensation.job.job_id if compensation else None,
        insights=generate_comparison_insights(snapshots),
    )


def comparison_summary(result: JobComparisonResult) -> str:
    """Plain-text summary of a comparison."""
    by_id = {r.job.job_id: r for r in result.jobs}
    best = by_id.get(result.best_fit)
    easiest = by_id.get(result.easiest_to_get)
    growth = by_id.get(result.best_for_growth)

    lines = [f"Comparing {len(result.jobs)} jobs:", ""]
    if best:
        lines.append(
            f"Best Fit: {best.job.title} at {best.job.company} "
            f"({format_score(best.fit_score)}/100)"
        )
    if easiest and result.easiest_to_get != result.best_fit:
        lines.append(f"Easiest to Get: {easiest.job.title} at {easiest.job.company}")
    if growth and result.best_for_growth != result.best_fit:
        lines.append(
            f"Best for Growth: {growth.job.title} at {growth.job.company} "
            f"({growth.career_capital.score}/100 career capital)"
        )

    overlap = result.comparison.skills_overlap
    lines.append("")
    lines.append(f"Common requirements: {', '.join(overlap.common_requirements) or 'None'}")
    lines.append(f"Your skills coverage: {overlap.your_coverage}%")
    return "\n".join(lines) + "\n"
