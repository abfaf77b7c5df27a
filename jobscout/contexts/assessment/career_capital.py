"""
Career capital scoring.

Estimates the long-term career value of taking a job from four
independently computed 0-100 sub-scores, combined by configured weights:
- brand: company tier lookup
- skill growth: required skills/tools the candidate does not know yet,
  plus a bonus for cutting-edge tech
- network: tech hub location and company size, minus a remote penalty
- compensation: salary max against an experience benchmark scaled by a
  location multiplier

Each sub-score also maps to a short human-readable interpretation.
"""

from dataclasses import dataclass, field
from typing import Iterable, Optional

from jobscout.config.schema import CareerCapitalConfig
from jobscout.contexts.intake.job_data_structure import ParsedJob

DEFAULT_YEARS_EXPERIENCE = 5

BRAND_INTERPRETATIONS = (
    (90, "Top-tier company - excellent for career branding"),
    (75, "Well-known company - good resume value"),
    (55, "Established company - solid foundation"),
    (40, "Startup/lesser-known - build your own brand"),
)
SKILL_GROWTH_INTERPRETATIONS = (
    (80, "High growth - many new skills and cutting-edge tech"),
    (60, "Good growth - solid learning opportunities"),
    (40, "Moderate growth - some new skills"),
)
NETWORK_INTERPRETATIONS = (
    (75, "Excellent networking - large company in tech hub"),
    (55, "Good networking - solid opportunities"),
    (35, "Moderate networking - some opportunities"),
)
COMP_INTERPRETATIONS = (
    (85, "Excellent comp - above market rate"),
    (70, "Good comp - competitive offer"),
    (50, "Fair comp - at market rate"),
    (35, "Below market - negotiate or consider"),
)


@dataclass(frozen=True)
class CareerCapitalResult:
    score: int
    brand_score: float
    skill_growth_score: float
    network_score: float
    comp_score: float
    breakdown: dict[str, str] = field(default_factory=dict)


def calculate_career_capital(
    job: ParsedJob,
    config: CareerCapitalConfig,
    years_experience: float = DEFAULT_YEARS_EXPERIENCE,
    current_skills: Optional[Iterable[str]] = None,
) -> CareerCapitalResult:
    """
    Score the career value of a job.

    Args:
        job: Parsed posting
        config: Career capital weights, tier lists and benchmarks
        years_experience: Candidate experience used to pick the salary benchmark
        current_skills: Skills the candidate already has (case-insensitive)

    Returns:
        CareerCapitalResult with the weighted total and interpreted sub-scores
    """
    brand = score_brand(job, config)
    growth = score_skill_growth(job, config, current_skills or [])
    network = score_network(job, config)
    comp = score_compensation(job, config, years_experience)

    weights = config.weights
    total = (
        brand * weights.brand
        + growth * weights.skill_growth
        + network * weights.network
        + comp * weights.compensation
    )

    return CareerCapitalResult(
        score=round(total),
        brand_score=brand,
        skill_growth_score=growth,
        network_score=network,
        comp_score=comp,
        breakdown={
            "brand": _interpret(
                brand, BRAND_INTERPRETATIONS, "Unknown company - verify legitimacy"
            ),
            "skill_growth": _interpret(
                growth, SKILL_GROWTH_INTERPRETATIONS, "Limited growth - mostly existing skills"
            ),
            "network": _interpret(
                network, NETWORK_INTERPRETATIONS, "Limited networking - remote/small company"
            ),
            "comp": _interpret(comp, COMP_INTERPRETATIONS, "Low comp - significant gap"),
        },
    )


def score_brand(job: ParsedJob, config: CareerCapitalConfig) -> float:
    """Tier list score; falls back to the tier resolved at intake."""
    score = config.company_tier_score(job.company)
    if score != config.tier_scores.unknown:
        return score

    tier = job.metadata.company_tier
    if tier == "top_tier":
        return config.tier_scores.tier1
    if tier == "unicorn":
        return config.tier_scores.tier2
    if tier == "established":
        return config.tier_scores.tier3
    return score


def score_skill_growth(
    job: ParsedJob, config: CareerCapitalConfig, current_skills: Iterable[str]
) -> float:
    known = {skill.strip().lower() for skill in current_skills}
    required = job.requirements.required_skills + job.requirements.required_tools

    new_count = sum(1 for item in required if item.normalized_name not in known)
    cutting_edge_count = sum(1 for item in required if config.is_cutting_edge(item.value))

    points = config.scoring
    score = points.skill_growth_base
    score += points.new_skill_bonus(new_count)
    score += points.cutting_edge_bonus(cutting_edge_count)
    return min(100, score)


def score_network(job: ParsedJob, config: CareerCapitalConfig) -> float:
    points = config.scoring
    score = points.network_base

    if config.is_tech_hub(job.location):
        score += points.tech_hub_bonus

    size = (job.metadata.company_size or "").lower()
    if not size:
        score += points.unknown_size_bonus
    elif "1000" in size or "large" in size:
        score += points.large_company_bonus
    elif "100" in size or "medium" in size:
        score += points.medium_company_bonus

    if job.work_arrangement == "remote":
        score -= points.remote_penalty

    return max(0, min(100, score))


def score_compensation(
    job: ParsedJob, config: CareerCapitalConfig, years_experience: float
) -> float:
    salary_max = job.salary_range.max if job.salary_range else None
    if not salary_max:
        return config.scoring.neutral_comp_score

    expected = config.salary_benchmark(years_experience) * config.location_multiplier(job.location)
    return config.scoring.comp_ratio_score(salary_max / expected)


def _interpret(score: float, table: tuple, default: str) -> str:
    for minimum, text in table:
        if score >= minimum:
            return text
    return default
