"""
Candidate-side inputs to ranking: preferences, list filters and profile.

All three are plain frozen records. Validation of caller-supplied values
happens in the discovery context before these are built.
"""

from dataclasses import dataclass, field
from typing import Literal, Optional

Category = Literal["reach", "target", "safety", "avoid"]
CATEGORIES: tuple[Category, ...] = ("reach", "target", "safety", "avoid")

WORK_ARRANGEMENTS = ("remote", "hybrid", "onsite")


@dataclass(frozen=True)
class UserPreferences:
    """
    Hard and soft job preferences.

    Empty lists mean "no preference". Locations are only a hard constraint
    when strict_location is set; otherwise they feed the soft preference
    match score.
    """

    work_arrangement: list[str] = field(default_factory=list)
    locations: list[str] = field(default_factory=list)
    salary_minimum: Optional[int] = None
    excluded_industries: list[str] = field(default_factory=list)
    strict_location: bool = False


@dataclass(frozen=True)
class JobFilters:
    """Filters applied to a ranked list. Expired and rejected jobs are dropped unless included."""

    category: Optional[Category] = None
    min_fit_score: Optional[float] = None
    max_fit_score: Optional[float] = None
    only_should_apply: bool = False
    include_expired: bool = False
    include_rejected: bool = False


@dataclass(frozen=True)
class CandidateProfile:
    """What the ranker knows about the candidate beyond preferences."""

    resume_text: str = ""
    years_experience: float = 5
    current_skills: list[str] = field(default_factory=list)
    applied_job_ids: list[str] = field(default_factory=list)
    rejected_job_ids: list[str] = field(default_factory=list)
