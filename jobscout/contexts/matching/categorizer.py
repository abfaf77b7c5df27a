"""
Job categorization and apply decisions.

categorize_job() is an ordered rule cascade, first match wins:
1. Fit below the avoid ceiling -> avoid
2. Too many critical skill/tool gaps -> avoid
3. Safety band, aligned or overqualified, few gaps -> safety
4. Target band with manageable gaps -> target, unless underqualified by
   more than the target gap limit, which re-routes to rule 5
5. Reach band and underqualified -> reach when the gap is within the reach
   limits, otherwise avoid
6-8. Looser fallback bands, ending in score-only bands, so every input
   maps to exactly one category

Safety and target bands are closed intervals; the reach band excludes its
upper bound. Overlaps between bands resolve by rule order.
"""

from dataclasses import dataclass, field
from typing import Optional

from jobscout.config.schema import ApplyDecisionConfig, CategorizationConfig
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.matching.fit_adapter import Alignment, GapAnalysis
from jobscout.contexts.matching.preferences import Category, UserPreferences
from jobscout.utils.text_processing import format_score as _num

# Score-only bands for categorize_by_fit_score()
SCORE_ONLY_BANDS = ((80, "safety"), (60, "target"), (50, "reach"))


@dataclass(frozen=True)
class CategoryDecision:
    category: Category
    reasoning: str


@dataclass(frozen=True)
class ApplyDecision:
    should_apply: bool
    reasoning: str


@dataclass(frozen=True)
class ConstraintCheck:
    passed: bool
    failures: list[str] = field(default_factory=list)

    @property
    def reason(self) -> Optional[str]:
        return self.failures[0] if self.failures else None


# =============================================================================
# CATEGORY
# =============================================================================


def categorize_job(
    fit_score: float,
    gaps: Optional[GapAnalysis],
    config: CategorizationConfig,
    alignment: Optional[Alignment] = None,
) -> CategoryDecision:
    """
    Map a fit score and gap breakdown to reach, target, safety or avoid.

    Args:
        fit_score: 0-100 fit score
        gaps: Gap analysis from the Fit Adapter (None when unavailable)
        config: Category bands and fallback thresholds
        alignment: Seniority alignment override; defaults to the gap analysis value

    Returns:
        CategoryDecision; never raises for any fit score
    """
    bands = config.thresholds
    fallback = config.fallback

    critical = len(gaps.critical_missing) if gaps else 0
    alignment = alignment or (gaps.seniority.alignment if gaps else "aligned")
    gap_years = gaps.seniority.gap_years if gaps else 0
    fit = _num(fit_score)

    # Rule 1
    if fit_score < bands.avoid.max_fit:
        return CategoryDecision(
            "avoid",
            f"Fit score ({fit}) is below threshold ({_num(bands.avoid.max_fit)}) "
            "- significant mismatches",
        )

    # Rule 2
    if critical > bands.avoid.max_critical_missing:
        return CategoryDecision(
            "avoid",
            f"Too many critical skill gaps ({critical} missing) "
            "- would require significant upskilling",
        )

    # Rule 3
    safety = bands.safety
    if (
        safety.min_fit <= fit_score <= safety.max_fit
        and alignment in safety.alignment
        and critical <= safety.max_critical_missing
    ):
        if alignment == "overqualified":
            return CategoryDecision(
                "safety", f"High fit ({fit}) and overqualified - high acceptance probability"
            )
        return CategoryDecision(
            "safety", "Strong alignment with no critical gaps - solid safety option"
        )

    # Rule 4
    target = bands.target
    rerouted = False
    if (
        target.min_fit <= fit_score <= target.max_fit
        and critical <= target.max_critical_missing
    ):
        if alignment == "underqualified" and gap_years > target.max_gap_years:
            rerouted = True
        else:
            return CategoryDecision(
                "target", f"Good fit ({fit}) with {critical} minor gaps - ideal target role"
            )

    # Rule 5
    reach = bands.reach
    if reach.min_fit <= fit_score < reach.max_fit and alignment == "underqualified":
        if gap_years <= reach.max_gap_years and critical <= reach.max_critical_missing:
            if rerouted:
                return CategoryDecision(
                    "reach",
                    f"Good fit ({fit}) but {_num(gap_years)}+ years seniority gap "
                    "- ambitious but possible",
                )
            return CategoryDecision(
                "reach",
                f"Moderate fit ({fit}) with {_num(gap_years)}yr gap "
                "- stretch opportunity worth pursuing",
            )
        return CategoryDecision(
            "avoid",
            f"Fit ({fit}) viable but gap too large ({_num(gap_years)}yrs, "
            f"{critical} critical skills) - too much of a stretch",
        )

    # Rule 6
    if fit_score >= fallback.underqualified_reach_min_fit and alignment == "underqualified":
        return CategoryDecision(
            "reach",
            f"Strong technical fit ({fit}) despite seniority gap - ambitious but achievable",
        )

    # Rule 7
    if (
        fallback.aligned_target_min_fit <= fit_score < fallback.aligned_target_max_fit
        and alignment == "aligned"
    ):
        return CategoryDecision(
            "target",
            f"Moderate fit ({fit}) with good seniority alignment - reasonable target",
        )

    # Rule 8
    if fit_score >= fallback.score_high_fit:
        return CategoryDecision("target", f"High fit score ({fit}) - strong match")
    if fit_score >= fallback.score_target_min_fit:
        return CategoryDecision("target", f"Decent fit score ({fit}) - worth considering")
    if fit_score >= fallback.score_reach_min_fit:
        return CategoryDecision(
            "reach", f"Borderline fit ({fit}) - only if particularly interested"
        )
    return CategoryDecision("avoid", f"Low fit score ({fit}) - not recommended")


def categorize_by_fit_score(fit_score: float) -> Category:
    """Category from the fit score alone, ignoring gaps."""
    for minimum, category in SCORE_ONLY_BANDS:
        if fit_score >= minimum:
            return category
    return "avoid"


# =============================================================================
# APPLY DECISION
# =============================================================================


def should_user_apply(
    fit_score: float,
    category: Category,
    config: ApplyDecisionConfig,
    hard_constraints_passed: bool = True,
) -> ApplyDecision:
    """
    Decide whether applying is worth the candidate's time.

    Holding category and constraints fixed, the decision never flips from
    yes to no as the fit score increases.
    """
    fit = _num(fit_score)

    if fit_score < config.min_fit_any:
        return ApplyDecision(False, f"Fit too low ({fit}/100) - would waste time")

    if category == "avoid":
        return ApplyDecision(False, "Job categorized as 'avoid' due to major mismatches")

    if not hard_constraints_passed:
        return ApplyDecision(False, "Job fails hard constraints (location, salary, etc.)")

    if category == "reach":
        if fit_score < config.min_fit_reach:
            return ApplyDecision(
                False,
                f"Reach position requires fit >= {_num(config.min_fit_reach)} (current: {fit})",
            )
        return ApplyDecision(True, f"Strong reach opportunity ({fit}/100 fit)")

    if category == "target":
        if fit_score >= config.min_fit_target:
            return ApplyDecision(True, f"Good fit ({fit}/100) for target role")
        return ApplyDecision(False, f"Fit ({fit}/100) below threshold for target")

    if fit_score >= config.min_fit_safety:
        return ApplyDecision(True, f"Solid safety option ({fit}/100 fit)")
    return ApplyDecision(False, f"Even for safety, fit too low ({fit}/100)")


def check_hard_constraints(job: ParsedJob, preferences: UserPreferences) -> ConstraintCheck:
    """
    AND over the candidate's hard constraints.

    A job with unknown work arrangement is treated as onsite. The industry
    check uses the metadata industry when present, else the posting's
    domain keywords. Location only counts when strict_location is set.
    """
    failures = []

    if preferences.work_arrangement:
        arrangement = job.work_arrangement if job.work_arrangement != "unknown" else "onsite"
        if arrangement not in preferences.work_arrangement:
            failures.append(f"Work arrangement '{arrangement}' not in preferences")

    salary_max = job.salary_range.max if job.salary_range else None
    if preferences.salary_minimum and salary_max and salary_max < preferences.salary_minimum:
        failures.append(f"Salary ${salary_max} below minimum ${preferences.salary_minimum}")

    if preferences.excluded_industries:
        industries = (
            [job.metadata.industry.lower()]
            if job.metadata.industry
            else [kw.lower() for kw in job.requirements.domain_keywords]
        )
        for industry in industries:
            if any(excluded.lower() in industry for excluded in preferences.excluded_industries):
                failures.append(f"Industry '{industry}' in exclusion list")
                break

    if preferences.strict_location and preferences.locations:
        location = job.location.lower()
        if not any(wanted.lower() in location for wanted in preferences.locations):
            failures.append(f"Location '{job.location}' not in preferences")

    return ConstraintCheck(passed=not failures, failures=failures)
