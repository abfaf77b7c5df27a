"""
Configuration loading for the job discovery engine.

Loads job_discovery.yaml onto the structured schema, converts it to plain
dataclass instances, and range-checks the values. Callers hold on to the
returned object and pass it into the pipeline; nothing here is cached.
"""

import os
import re
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from omegaconf import OmegaConf
from omegaconf.errors import OmegaConfBaseException

from jobscout.config.schema import SENIORITY_ORDER, JobDiscoveryConfig
from jobscout.exceptions import ErrorCode, create_error

load_dotenv()

DEFAULT_CONFIG_PATH = Path(__file__).parent / "job_discovery.yaml"


def resolve_config_path(config_path: Optional[Path] = None) -> Path:
    """Explicit path, else JOB_DISCOVERY_CONFIG_PATH, else the bundled YAML."""
    if config_path is not None:
        return Path(config_path)
    return Path(os.getenv("JOB_DISCOVERY_CONFIG_PATH", str(DEFAULT_CONFIG_PATH)))


def load_config(config_path: Optional[Path] = None) -> JobDiscoveryConfig:
    """
    Load and validate job discovery configuration.

    Args:
        config_path: Optional YAML path (defaults via resolve_config_path())

    Returns:
        Fully populated JobDiscoveryConfig

    Raises:
        JobDiscoveryError: CONFIG_ERROR if the file is missing, has unknown or
            mistyped keys, leaves a mandatory value unset, or fails range checks
    """
    path = resolve_config_path(config_path)

    try:
        schema = OmegaConf.structured(JobDiscoveryConfig)
        merged = OmegaConf.merge(schema, OmegaConf.load(path))
        config = OmegaConf.to_object(merged)
    except (OSError, OmegaConfBaseException) as e:
        raise create_error(
            ErrorCode.CONFIG_ERROR,
            details={"path": str(path), "reason": str(e)},
        ) from e

    problems = validate_config(config)
    if problems:
        raise create_error(
            ErrorCode.CONFIG_ERROR,
            details={"path": str(path), "problems": problems},
        )

    return config


def validate_config(config: JobDiscoveryConfig) -> list[str]:
    """
    Range checks the type schema cannot express.

    Returns:
        List of human-readable problems (empty when valid)
    """
    problems = []

    def check_unit_weights(section: str, weights: dict) -> None:
        for name, value in weights.items():
            if not 0 <= value <= 1:
                problems.append(f"{section}.{name} must be within [0, 1], got {value}")

    check_unit_weights("ranking.weights", vars(config.ranking.weights))
    check_unit_weights("urgency.weights", vars(config.urgency.weights))
    check_unit_weights("career_capital.weights", vars(config.career_capital.weights))
    check_unit_weights(
        "priority_blend",
        {
            "fit": config.priority_blend.fit,
            "freshness": config.priority_blend.freshness,
            "urgency": config.priority_blend.urgency,
        },
    )

    parsing = config.parsing
    if not 0 < parsing.min_length < parsing.max_length:
        problems.append("parsing.min_length must be positive and below parsing.max_length")

    tiers = parsing.quality_thresholds
    if not tiers.high.min_words >= tiers.medium.min_words >= tiers.low.min_words:
        problems.append("parsing.quality_thresholds min_words must not increase from high to low")

    thresholds = config.categorization.thresholds
    for name in ("safety", "target", "reach"):
        band = getattr(thresholds, name)
        if band.min_fit > band.max_fit:
            problems.append(f"categorization.thresholds.{name}.min_fit exceeds max_fit")

    for alignment in thresholds.safety.alignment:
        if alignment not in ("aligned", "overqualified", "underqualified"):
            problems.append(
                f"categorization.thresholds.safety.alignment has unknown value '{alignment}'"
            )

    if config.priority_thresholds.medium > config.priority_thresholds.high:
        problems.append("priority_thresholds.medium exceeds priority_thresholds.high")

    previous = -1
    for level in SENIORITY_ORDER:
        min_years = config.seniority_mappings.band(level).min_years
        if min_years < previous:
            problems.append(
                f"seniority_mappings.{level}.min_years must not decrease with seniority"
            )
        previous = min_years

    benchmarks = config.career_capital.salary_benchmarks
    if not benchmarks:
        problems.append("career_capital.salary_benchmarks must not be empty")
    for years in benchmarks:
        if not years.isdigit():
            problems.append(
                f"career_capital.salary_benchmarks key '{years}' is not a whole number of years"
            )

    if "default" not in config.career_capital.location_multipliers:
        problems.append("career_capital.location_multipliers must define 'default'")

    scoring = config.career_capital.scoring
    for name in ("new_skill_bonuses", "cutting_edge_bonuses", "comp_ratio_scores"):
        for key in getattr(scoring, name):
            try:
                float(key)
            except ValueError:
                problems.append(f"career_capital.scoring.{name} key '{key}' is not a number")

    rules = config.scam_detection.red_flags
    for name in ("urgency_patterns", "personal_info_patterns"):
        for pattern in getattr(rules, name):
            try:
                re.compile(pattern)
            except re.error as e:
                problems.append(f"scam_detection.red_flags.{name} '{pattern}' is invalid: {e}")

    return problems
