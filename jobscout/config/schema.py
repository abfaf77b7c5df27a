"""
Structured schema for job discovery configuration.

These dataclasses are handed to OmegaConf.structured() so that loading the
YAML checks keys and types. Fields set to MISSING must be supplied by the
YAML file. Lookup helpers that only read configuration live here as methods,
so scoring code receives one injected object and never reaches for globals.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from omegaconf import MISSING

from jobscout.utils.text_processing import contains_term, first_term

SENIORITY_ORDER = ["entry", "mid", "senior", "lead"]


def step_lookup(table: Dict[str, int], value: float, default: int) -> int:
    """Points for the largest numeric key in table that value reaches."""
    for minimum, points in sorted(
        ((float(key), points) for key, points in table.items()), reverse=True
    ):
        if value >= minimum:
            return points
    return default


# =============================================================================
# PARSING
# =============================================================================


@dataclass
class QualityTier:
    min_words: int = MISSING
    min_skills: int = 0
    min_responsibilities: int = 0


@dataclass
class QualityThresholds:
    high: QualityTier = field(default_factory=QualityTier)
    medium: QualityTier = field(default_factory=QualityTier)
    low: QualityTier = field(default_factory=QualityTier)


@dataclass
class ParsingConfig:
    min_length: int = MISSING
    max_length: int = MISSING
    quality_thresholds: QualityThresholds = field(default_factory=QualityThresholds)


@dataclass
class RequirementsExtractionConfig:
    skill_section_keywords: List[str] = MISSING
    preferred_keywords: List[str] = MISSING
    responsibility_section_keywords: List[str] = MISSING
    benefit_section_keywords: List[str] = MISSING


# =============================================================================
# SENIORITY
# =============================================================================


@dataclass
class SeniorityBand:
    keywords: List[str] = MISSING
    min_years: int = MISSING
    max_years: Optional[int] = None


@dataclass
class SeniorityMappings:
    entry: SeniorityBand = field(default_factory=SeniorityBand)
    mid: SeniorityBand = field(default_factory=SeniorityBand)
    senior: SeniorityBand = field(default_factory=SeniorityBand)
    lead: SeniorityBand = field(default_factory=SeniorityBand)

    def band(self, level: str) -> SeniorityBand:
        return getattr(self, level)

    def keyword_level(self, text: str) -> Optional[str]:
        """
        Seniority named by keywords in text, or None.

        Levels are checked lead > senior > mid > entry so that a senior title
        is not masked by a co-occurring mid-level word.
        """
        for level in reversed(SENIORITY_ORDER):
            if first_term(text, self.band(level).keywords):
                return level
        return None

    def detect_from_years(self, years: float) -> str:
        for level in ("lead", "senior", "mid"):
            if years >= self.band(level).min_years:
                return level
        return "entry"


# =============================================================================
# RANKING AND PRIORITY
# =============================================================================


@dataclass
class RankingWeights:
    fit_score: float = MISSING
    preference_match: float = MISSING
    freshness: float = MISSING
    urgency: float = MISSING


@dataclass
class CategoryValues:
    reach: float = MISSING
    target: float = MISSING
    safety: float = MISSING
    avoid: float = MISSING

    def for_category(self, category: str) -> float:
        return getattr(self, category)


@dataclass
class PriorityBonuses:
    dream_job: float = MISSING
    new: float = MISSING


@dataclass
class PriorityPenalties:
    scam_risk: float = MISSING


@dataclass
class ScorePenalties:
    location_mismatch: float = MISSING
    salary_low: float = MISSING
    scam_risk_medium: float = MISSING
    scam_risk_high: float = MISSING
    expired: float = MISSING


@dataclass
class RankingConfig:
    weights: RankingWeights = field(default_factory=RankingWeights)
    category_bonuses: CategoryValues = field(default_factory=CategoryValues)
    priority_bonuses: PriorityBonuses = field(default_factory=PriorityBonuses)
    priority_penalties: PriorityPenalties = field(default_factory=PriorityPenalties)
    penalties: ScorePenalties = field(default_factory=ScorePenalties)
    dream_job_min_fit: float = MISSING
    salary_soft_floor_ratio: float = MISSING


@dataclass
class PriorityBlendConfig:
    fit: float = MISSING
    freshness: float = MISSING
    urgency: float = MISSING
    category_bonuses: CategoryValues = field(default_factory=CategoryValues)


@dataclass
class PriorityThresholds:
    high: float = MISSING
    medium: float = MISSING


# =============================================================================
# CATEGORIZATION
# =============================================================================


@dataclass
class SafetyBand:
    min_fit: float = MISSING
    max_fit: float = MISSING
    alignment: List[str] = MISSING
    max_critical_missing: int = MISSING


@dataclass
class GapBand:
    min_fit: float = MISSING
    max_fit: float = MISSING
    max_critical_missing: int = MISSING
    max_gap_years: float = MISSING


@dataclass
class AvoidBand:
    max_fit: float = MISSING
    max_critical_missing: int = MISSING


@dataclass
class CategoryThresholds:
    safety: SafetyBand = field(default_factory=SafetyBand)
    target: GapBand = field(default_factory=GapBand)
    reach: GapBand = field(default_factory=GapBand)
    avoid: AvoidBand = field(default_factory=AvoidBand)


@dataclass
class CategoryFallback:
    underqualified_reach_min_fit: float = MISSING
    aligned_target_min_fit: float = MISSING
    aligned_target_max_fit: float = MISSING
    score_high_fit: float = MISSING
    score_target_min_fit: float = MISSING
    score_reach_min_fit: float = MISSING


@dataclass
class CategorizationConfig:
    thresholds: CategoryThresholds = field(default_factory=CategoryThresholds)
    fallback: CategoryFallback = field(default_factory=CategoryFallback)


@dataclass
class ApplyDecisionConfig:
    min_fit_any: float = MISSING
    min_fit_reach: float = MISSING
    min_fit_target: float = MISSING
    min_fit_safety: float = MISSING


# =============================================================================
# URGENCY AND FRESHNESS
# =============================================================================


@dataclass
class FreshnessScores:
    within_1_day: float = MISSING
    within_3_days: float = MISSING
    within_7_days: float = MISSING
    within_14_days: float = MISSING
    within_30_days: float = MISSING
    beyond_30_days: float = MISSING


@dataclass
class FreshnessConfig:
    new_job_days: int = MISSING
    scores: FreshnessScores = field(default_factory=FreshnessScores)


@dataclass
class DeadlineScores:
    no_deadline: float = MISSING
    expired: float = MISSING
    within_3_days: float = MISSING
    within_7_days: float = MISSING
    within_14_days: float = MISSING
    within_30_days: float = MISSING
    beyond_30_days: float = MISSING


@dataclass
class RecencyScores:
    within_3_days: float = MISSING
    within_7_days: float = MISSING
    within_14_days: float = MISSING
    within_30_days: float = MISSING
    beyond_30_days: float = MISSING
    within_1_day_saved: float = MISSING
    within_7_days_saved: float = MISSING
    beyond_7_days_saved: float = MISSING


@dataclass
class UrgencyWeights:
    deadline: float = MISSING
    recency: float = MISSING


@dataclass
class UrgencyConfig:
    deadline_scores: DeadlineScores = field(default_factory=DeadlineScores)
    recency_scores: RecencyScores = field(default_factory=RecencyScores)
    weights: UrgencyWeights = field(default_factory=UrgencyWeights)


# =============================================================================
# CAREER CAPITAL
# =============================================================================


@dataclass
class CareerCapitalWeights:
    brand: float = MISSING
    skill_growth: float = MISSING
    network: float = MISSING
    compensation: float = MISSING


@dataclass
class CompanyTiers:
    tier1: List[str] = MISSING
    tier2: List[str] = MISSING


@dataclass
class TierScores:
    tier1: float = MISSING
    tier2: float = MISSING
    tier3: float = MISSING
    unknown: float = MISSING


@dataclass
class CareerCapitalScoring:
    """Step tables map a minimum (as a string key) to points; the largest key reached wins."""

    skill_growth_base: int = MISSING
    new_skill_bonuses: Dict[str, int] = MISSING
    cutting_edge_bonuses: Dict[str, int] = MISSING
    network_base: int = MISSING
    tech_hub_bonus: int = MISSING
    large_company_bonus: int = MISSING
    medium_company_bonus: int = MISSING
    unknown_size_bonus: int = MISSING
    remote_penalty: int = MISSING
    neutral_comp_score: int = MISSING
    comp_ratio_scores: Dict[str, int] = MISSING
    below_market_comp_score: int = MISSING

    def new_skill_bonus(self, count: int) -> int:
        return step_lookup(self.new_skill_bonuses, count, 0)

    def cutting_edge_bonus(self, count: int) -> int:
        return step_lookup(self.cutting_edge_bonuses, count, 0)

    def comp_ratio_score(self, ratio: float) -> int:
        return step_lookup(self.comp_ratio_scores, ratio, self.below_market_comp_score)


@dataclass
class CareerCapitalConfig:
    weights: CareerCapitalWeights = field(default_factory=CareerCapitalWeights)
    company_tiers: CompanyTiers = field(default_factory=CompanyTiers)
    tier_scores: TierScores = field(default_factory=TierScores)
    scoring: CareerCapitalScoring = field(default_factory=CareerCapitalScoring)
    cutting_edge_tech: List[str] = MISSING
    tech_hub_locations: List[str] = MISSING
    salary_benchmarks: Dict[str, int] = MISSING
    location_multipliers: Dict[str, float] = MISSING

    def company_tier_score(self, company: str) -> float:
        """Brand score for a company name from the tier lists."""
        if first_term(company, self.company_tiers.tier1):
            return self.tier_scores.tier1
        if first_term(company, self.company_tiers.tier2):
            return self.tier_scores.tier2
        return self.tier_scores.unknown

    def is_cutting_edge(self, tech: str) -> bool:
        return first_term(tech, self.cutting_edge_tech) is not None

    def is_tech_hub(self, location: str) -> bool:
        return first_term(location, self.tech_hub_locations) is not None

    def location_multiplier(self, location: str) -> float:
        for key, multiplier in self.location_multipliers.items():
            if key != "default" and contains_term(location, key):
                return multiplier
        return self.location_multipliers.get("default", 1.0)

    def salary_benchmark(self, years_experience: float) -> int:
        """Benchmark for the largest experience bracket not above years_experience."""
        brackets = sorted(
            ((int(years), salary) for years, salary in self.salary_benchmarks.items()),
            reverse=True,
        )
        for years, salary in brackets:
            if years_experience >= years:
                return salary
        return brackets[-1][1]


# =============================================================================
# SCAM DETECTION
# =============================================================================


@dataclass
class RedFlagRules:
    suspicious_keywords: List[str] = MISSING
    unrealistic_salary_threshold: int = MISSING
    min_jd_length: int = MISSING
    max_keyword_hits: int = MISSING
    min_company_length: int = MISSING
    min_title_length: int = MISSING
    max_exclamations: int = MISSING
    max_dollar_signs: int = MISSING
    max_emojis: int = MISSING
    min_urgency_phrases: int = MISSING
    urgency_patterns: List[str] = MISSING
    personal_info_patterns: List[str] = MISSING


@dataclass
class RedFlagWeights:
    no_company: float = MISSING
    short_jd: float = MISSING
    unrealistic_salary: float = MISSING
    suspicious_keywords: float = MISSING
    no_requirements: float = MISSING
    vague_title: float = MISSING
    excessive_punctuation: float = MISSING
    urgency_pressure: float = MISSING
    personal_info_request: float = MISSING


@dataclass
class ScamDetectionConfig:
    red_flags: RedFlagRules = field(default_factory=RedFlagRules)
    weights: RedFlagWeights = field(default_factory=RedFlagWeights)
    scam_threshold: float = MISSING
    high_risk_threshold_offset: float = MISSING


# =============================================================================
# ROOT
# =============================================================================


@dataclass
class PerformanceTargets:
    parse_single_job_ms: int = MISSING
    rank_10_jobs_ms: int = MISSING
    compare_5_jobs_ms: int = MISSING


@dataclass
class JobDiscoveryConfig:
    parsing: ParsingConfig = field(default_factory=ParsingConfig)
    requirements_extraction: RequirementsExtractionConfig = field(
        default_factory=RequirementsExtractionConfig
    )
    seniority_mappings: SeniorityMappings = field(default_factory=SeniorityMappings)
    ranking: RankingConfig = field(default_factory=RankingConfig)
    priority_blend: PriorityBlendConfig = field(default_factory=PriorityBlendConfig)
    priority_thresholds: PriorityThresholds = field(default_factory=PriorityThresholds)
    categorization: CategorizationConfig = field(default_factory=CategorizationConfig)
    apply_decision: ApplyDecisionConfig = field(default_factory=ApplyDecisionConfig)
    freshness: FreshnessConfig = field(default_factory=FreshnessConfig)
    urgency: UrgencyConfig = field(default_factory=UrgencyConfig)
    career_capital: CareerCapitalConfig = field(default_factory=CareerCapitalConfig)
    scam_detection: ScamDetectionConfig = field(default_factory=ScamDetectionConfig)
    performance_targets: PerformanceTargets = field(default_factory=PerformanceTargets)
