"""
Human-readable insights for a single ranked job and for a comparison set.
"""

from collections import Counter
from dataclasses import dataclass, field
from math import ceil
from typing import Optional, Sequence

from jobscout.contexts.assessment.career_capital import CareerCapitalResult
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.matching.fit_adapter import NEUTRAL_FIT_SCORE, FitResult
from jobscout.contexts.matching.preferences import Category
from jobscout.utils.text_processing import format_salary, format_score

MAX_QUICK_INSIGHTS = 7
MAX_COMPARISON_INSIGHTS = 8

EXCELLENT_FIT = 80
GOOD_FIT = 65
MODERATE_FIT = 50
TOP_BRAND_SCORE = 80
HIGH_GROWTH_SCORE = 75
LARGE_SENIORITY_GAP = 2
WIDE_FIT_SPREAD = 20
CAREER_CAPITAL_LEAD = 20


@dataclass(frozen=True)
class JobInsights:
    quick_insights: list[str] = field(default_factory=list)
    red_flags: list[str] = field(default_factory=list)
    green_flags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class JobSnapshot:
    """The slice of a ranked job that comparison insights look at."""

    job_id: str
    job_title: str
    company: str
    fit_score: float
    category: Category
    required_skills: list[str]
    career_capital_score: float


def generate_job_insights(
    job: ParsedJob,
    fit: Optional[FitResult],
    category: Category,
    career_capital: CareerCapitalResult,
) -> JobInsights:
    """
    Quick insights plus red and green flags for one job.

    Args:
        job: Parsed posting
        fit: Fit result, or None when the Fit Oracle had no answer
        category: Category decided for the job
        career_capital: Career capital result for the job

    Returns:
        JobInsights with at most MAX_QUICK_INSIGHTS quick insights
    """
    insights: list[str] = []
    red: list[str] = []
    green: list[str] = []

    fit_score = fit.fit_score if fit else NEUTRAL_FIT_SCORE
    shown = format_score(fit_score)
    if fit_score >= EXCELLENT_FIT:
        insights.append(f"Excellent match ({shown}/100) - strong alignment with your background")
        green.append("Excellent fit score")
    elif fit_score >= GOOD_FIT:
        insights.append(f"Good fit ({shown}/100) - meets most requirements")
        green.append("Good fit score")
    elif fit_score >= MODERATE_FIT:
        insights.append(f"Moderate fit ({shown}/100) - some gaps but viable")
    else:
        insights.append(f"Weak fit ({shown}/100) - significant gaps present")
        red.append("Low fit score")

    if fit:
        gaps = fit.gap_analysis
        if gaps.skills.matched:
            green.append(f"Strong on: {', '.join(gaps.skills.matched[:3])}")

        missing = gaps.skills.critical_missing[:3]
        if missing:
            insights.append(f"Key gaps: {', '.join(missing)}")
            if len(missing) >= 3:
                red.append(f"Missing {len(missing)}+ critical skills")

        if gaps.transferable_skills:
            insights.append(f"Transferable: {gaps.transferable_skills[0]} experience applies")
            green.append("Has transferable skills")

        seniority = gaps.seniority
        if seniority.alignment == "underqualified":
            gap_years = format_score(seniority.gap_years)
            insights.append(f"Stretch role: {gap_years}+ years experience gap")
            if seniority.gap_years > LARGE_SENIORITY_GAP:
                red.append(f"{gap_years}+ year seniority gap")
        elif seniority.alignment == "overqualified":
            insights.append("May be overqualified for this level")
        else:
            green.append("Seniority well-aligned")

    if career_capital.brand_score >= TOP_BRAND_SCORE:
        insights.append("High-value brand for career growth")
        green.append("Top-tier company")

    if career_capital.skill_growth_score >= HIGH_GROWTH_SCORE:
        insights.append("Strong opportunity for skill development")
        green.append("High growth potential")

    if category == "reach":
        insights.append("Ambitious target - worth the effort if excited")
    elif category == "safety":
        insights.append("Solid backup option with high acceptance probability")
        green.append("Safety option")
    elif category == "avoid":
        red.append("Categorized as avoid - significant mismatches")

    if job.work_arrangement == "remote":
        green.append("Remote position")

    salary = job.salary_range
    if salary and salary.min and salary.max:
        insights.append(f"Salary: ${format_salary(salary.min)} - ${format_salary(salary.max)}")

    if job.metadata.parse_quality == "low":
        red.append("Low parse quality - job details may be incomplete")

    return JobInsights(
        quick_insights=insights[:MAX_QUICK_INSIGHTS], red_flags=red, green_flags=green
    )


def generate_comparison_insights(jobs: Sequence[JobSnapshot]) -> list[str]:
    """Comparative insights across 2+ jobs, at most MAX_COMPARISON_INSIGHTS."""
    if len(jobs) < 2:
        return ["Need at least 2 jobs to compare"]

    insights = []

    by_fit = sorted(jobs, key=lambda j: j.fit_score, reverse=True)
    best = by_fit[0]
    insights.append(
        f"Best fit: {best.job_title} at {best.company} ({format_score(best.fit_score)}/100)"
    )

    spread = best.fit_score - by_fit[-1].fit_score
    if spread > WIDE_FIT_SPREAD:
        insights.append(
            f"Significant fit variation ({format_score(spread)} point spread) - choose carefully"
        )
    else:
        insights.append("Similar fit scores across jobs - consider other factors")

    # Counter keeps first-seen order for equal counts
    counts = Counter(skill for job in jobs for skill in job.required_skills)
    majority = ceil(len(jobs) / 2)
    common = [skill for skill, count in counts.items() if count >= majority][:3]
    if common:
        insights.append(f"Common requirements: {', '.join(common)}")

    for job in jobs[:3]:
        unique = [skill for skill in job.required_skills if counts[skill] == 1][:2]
        if unique:
            insights.append(f"{job.company} uniquely needs: {', '.join(unique)}")

    by_capital = sorted(jobs, key=lambda j: j.career_capital_score, reverse=True)
    best, worst = by_capital[0].career_capital_score, by_capital[-1].career_capital_score
    if best > worst + CAREER_CAPITAL_LEAD:
        insights.append(
            f"Best for career growth: {by_capital[0].company} "
            f"({format_score(by_capital[0].career_capital_score)}/100)"
        )

    categories = {job.category for job in jobs}
    if "reach" in categories and "safety" in categories:
        insights.append("Good mix of ambitious and safe options")
    elif categories == {"reach"}:
        insights.append("All reach positions - consider adding safety options")

    return insights[:MAX_COMPARISON_INSIGHTS]
