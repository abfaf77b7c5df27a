"""
Scam risk detection for job postings.

Nine independent checks each add a configured weight to a running total
when they fire. The total is compared to the configured threshold:
- high: total >= threshold + high_risk_threshold_offset
- medium: total >= threshold
- low: at least one flag fired
- none: no flags

Runs on the parsed posting alone, so a posting the candidate fits well can
still be flagged.
"""

import re
from dataclasses import dataclass, field
from typing import Literal

from jobscout.config.schema import ScamDetectionConfig
from jobscout.contexts.intake.job_data_structure import UNKNOWN_COMPANY, ParsedJob

RiskLevel = Literal["none", "low", "medium", "high"]

VAGUE_TITLE = re.compile(
    r"^work from home|^make money|^earn \$|^hiring now|^urgent|^opportunity$|^position$",
    re.IGNORECASE,
)
EMOJI = re.compile("[\U0001f600-\U0001f64f]")


@dataclass(frozen=True)
class ScamDetectionResult:
    risk_level: RiskLevel
    red_flags: list[str] = field(default_factory=list)
    red_flag_count: int = 0
    score: float = 0.0


def detect_scam(job: ParsedJob, config: ScamDetectionConfig) -> ScamDetectionResult:
    """
    Run every red-flag check against a parsed posting.

    Args:
        job: Parsed posting
        config: Scam detection rules, weights and thresholds

    Returns:
        ScamDetectionResult with one human-readable reason per fired check
        (one per matched phrase for suspicious keywords)
    """
    rules = config.red_flags
    weights = config.weights
    text = job.raw_text
    lowered = text.lower()

    flags: list[str] = []
    total = 0.0

    company = job.company.strip()
    if not company or company == UNKNOWN_COMPANY or len(company) < rules.min_company_length:
        flags.append("Company name is missing or appears suspicious")
        total += weights.no_company

    if len(text) < rules.min_jd_length:
        flags.append(
            f"Job description is very short ({len(text)} chars, "
            f"minimum expected: {rules.min_jd_length})"
        )
        total += weights.short_jd

    salary_max = job.salary_range.max if job.salary_range else None
    if salary_max is not None and salary_max > rules.unrealistic_salary_threshold:
        flags.append(f"Salary (${salary_max:,}) seems unrealistically high")
        total += weights.unrealistic_salary

    keyword_hits = [kw for kw in rules.suspicious_keywords if kw.lower() in lowered]
    for keyword in keyword_hits:
        flags.append(f'Contains suspicious phrase: "{keyword}"')
    total += weights.suspicious_keywords * min(len(keyword_hits), rules.max_keyword_hits)

    if not job.requirements.required_skills and not job.requirements.required_tools:
        flags.append("No specific skills or tools requirements listed")
        total += weights.no_requirements

    title = job.title.strip()
    if VAGUE_TITLE.search(title) or len(title) < rules.min_title_length:
        flags.append("Job title is vague or suspicious")
        total += weights.vague_title

    if (
        text.count("!") > rules.max_exclamations
        or text.count("$") > rules.max_dollar_signs
        or len(EMOJI.findall(text)) > rules.max_emojis
    ):
        flags.append("Excessive use of exclamation marks, dollar signs, or emojis")
        total += weights.excessive_punctuation

    urgency_hits = sum(1 for pattern in rules.urgency_patterns if _search(pattern, text))
    if urgency_hits >= rules.min_urgency_phrases:
        flags.append("Excessive urgency pressure in job posting")
        total += weights.urgency_pressure

    if any(_search(pattern, text) for pattern in rules.personal_info_patterns):
        flags.append("Requests sensitive personal/financial information")
        total += weights.personal_info_request

    return ScamDetectionResult(
        risk_level=_risk_level(total, bool(flags), config),
        red_flags=flags,
        red_flag_count=len(flags),
        score=total,
    )


def _risk_level(total: float, any_flags: bool, config: ScamDetectionConfig) -> RiskLevel:
    if total >= config.scam_threshold + config.high_risk_threshold_offset:
        return "high"
    if total >= config.scam_threshold:
        return "medium"
    if any_flags:
        return "low"
    return "none"


def is_scam_job(result: ScamDetectionResult) -> bool:
    """Medium or high risk postings are treated as likely scams."""
    return result.risk_level in ("medium", "high")


def _search(pattern: str, text: str) -> bool:
    return re.search(pattern, text, re.IGNORECASE) is not None
