"""
Shared fixtures for the job discovery tests.

Posting and resume fixtures live as plain-text files under tests/fixtures/.
Dates in the postings are absolute, so every test that depends on "today"
uses REFERENCE_DATE.
"""

import uuid
from datetime import date
from pathlib import Path

import pytest

from jobscout.config import load_config
from jobscout.contexts.discovery.engine import JobDiscoveryEngine
from jobscout.contexts.intake.job_data_structure import (
    ExtractedField,
    JobMetadata,
    JobRequirements,
    ParsedJob,
    SalaryRange,
)
from jobscout.contexts.matching.fit_adapter import (
    FitAdapter,
    FitResult,
    GapAnalysis,
    SeniorityGap,
    SkillGap,
)
from jobscout.contexts.matching.preferences import CandidateProfile, UserPreferences
from jobscout.contexts.matching.ranker import rank_jobs

FIXTURES_PATH = Path(__file__).parent / "fixtures"
POSTINGS_PATH = FIXTURES_PATH / "postings"

REFERENCE_DATE = date(2026, 3, 5)

USER_SKILLS = [
    "JavaScript",
    "TypeScript",
    "Python",
    "SQL",
    "React",
    "Next.js",
    "Node.js",
    "Express",
    "PostgreSQL",
    "MongoDB",
    "Git",
    "Docker",
    "AWS",
    "GitHub Actions",
    "Jest",
]

BENIGN_TEXT = (
    "Backend Engineer\nCompany: Acme\n\nResponsibilities:\n"
    "• Build and maintain internal services used by the payments team\n"
    "• Collaborate with product managers on roadmap planning\n\n"
    "Requirements:\n• 3+ years of Python experience\n• Experience with PostgreSQL\n\n"
    "We offer a collaborative environment, a learning budget and flexible hours."
)


def read_posting(name: str) -> str:
    return (POSTINGS_PATH / f"{name}.txt").read_text(encoding="utf-8")


@pytest.fixture(scope="session")
def config():
    return load_config()


@pytest.fixture
def engine(config):
    return JobDiscoveryEngine(config, reference_date=REFERENCE_DATE)


@pytest.fixture
def posting():
    """Loader for posting fixtures by file stem, e.g. posting("fullstack_google")."""
    return read_posting


@pytest.fixture
def resume_text():
    return (FIXTURES_PATH / "resume_mid_level_swe.txt").read_text(encoding="utf-8")


@pytest.fixture
def user_skills():
    return list(USER_SKILLS)


@pytest.fixture
def preferences():
    return UserPreferences(
        work_arrangement=["remote", "hybrid"],
        locations=["San Francisco", "Remote"],
        salary_minimum=100000,
        excluded_industries=["gambling", "tobacco"],
    )


def _fields(names, importance):
    return [ExtractedField(value=name, importance=importance) for name in names]


@pytest.fixture
def make_job():
    """Factory for ParsedJob records with only the fields a test cares about."""

    def _make_job(
        title="Backend Engineer",
        company="Acme",
        location="Austin, TX",
        required_skills=(),
        required_tools=(),
        preferred_skills=(),
        work_arrangement="onsite",
        salary=None,
        posted_date=None,
        deadline=None,
        parse_quality="high",
        company_tier="startup",
        company_size=None,
        industry=None,
        domain_keywords=(),
        seniority="mid",
        years=(None, None),
        raw_text=BENIGN_TEXT,
        canonical_id=None,
        job_id=None,
    ):
        return ParsedJob(
            job_id=job_id or str(uuid.uuid4()),
            canonical_id=canonical_id or f"hash:{uuid.uuid4().hex[:16]}",
            title=title,
            company=company,
            location=location,
            raw_text=raw_text,
            requirements=JobRequirements(
                required_skills=_fields(required_skills, "critical"),
                required_tools=_fields(required_tools, "critical"),
                preferred_skills=_fields(preferred_skills, "nice_to_have"),
                seniority_expected=seniority,
                years_experience_min=years[0],
                years_experience_max=years[1],
                domain_keywords=list(domain_keywords),
            ),
            work_arrangement=work_arrangement,
            salary_range=SalaryRange(min=salary[0], max=salary[1]) if salary else None,
            metadata=JobMetadata(
                parse_quality=parse_quality,
                confidence=90,
                posted_date=posted_date,
                application_deadline=deadline,
                company_tier=company_tier,
                company_size=company_size,
                industry=industry,
            ),
            created_at="2026-03-05T09:00:00+00:00",
            updated_at="2026-03-05T09:00:00+00:00",
        )

    return _make_job


@pytest.fixture
def make_fit():
    """Factory for FitResult values with a controllable gap breakdown."""

    def _make_fit(
        fit_score,
        alignment="aligned",
        gap_years=0,
        critical_missing=(),
        matched=(),
        transferable=(),
    ):
        return FitResult(
            fit_score=fit_score,
            gap_analysis=GapAnalysis(
                skills=SkillGap(matched=list(matched), critical_missing=list(critical_missing)),
                seniority=SeniorityGap(alignment=alignment, gap_years=gap_years),
                transferable_skills=list(transferable),
            ),
        )

    return _make_fit


@pytest.fixture
def fixed_oracle(make_fit):
    """Fit Oracle stand-in returning fit scores keyed by company name (default 70)."""

    def _fixed_oracle(scores=None, default=70, **gap_kwargs):
        scores = scores or {}

        def oracle(resume_text, job):
            return make_fit(scores.get(job.company, default), **gap_kwargs)

        return oracle

    return _fixed_oracle


@pytest.fixture
def benign_text():
    """Realistic posting text that trips no scam checks."""
    return BENIGN_TEXT


@pytest.fixture
def rank_with_scores(config, fixed_oracle):
    """Rank jobs against a fixed-score oracle as of REFERENCE_DATE."""

    def _rank(jobs, scores=None, default=70, profile=None, preferences=None, **gap_kwargs):
        adapter = FitAdapter(fixed_oracle(scores, default, **gap_kwargs))
        return rank_jobs(
            jobs,
            profile or CandidateProfile(resume_text="resume"),
            preferences or UserPreferences(),
            config,
            adapter,
            REFERENCE_DATE,
        )

    return _rank
