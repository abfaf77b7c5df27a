"""Unit tests for ranking score components, breakdown, priority and flags."""

from dataclasses import replace
from datetime import date, timedelta

import pytest

from jobscout.contexts.assessment.scam_detector import ScamDetectionResult
from jobscout.contexts.matching.preferences import UserPreferences
from jobscout.contexts.matching.priority_scorer import (
    JobFlags,
    calculate_freshness_score,
    calculate_preference_match,
    calculate_score_breakdown,
    calculate_urgency_score,
    determine_job_flags,
    determine_priority,
)


REFERENCE_DATE = date(2026, 3, 5)
CREATED_AT = "2026-03-05T09:00:00+00:00"
NO_SCAM = ScamDetectionResult(risk_level="none")


def days_ago(n):
    return (REFERENCE_DATE - timedelta(days=n)).isoformat()


def days_ahead(n):
    return (REFERENCE_DATE + timedelta(days=n)).isoformat()


class TestUrgency:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "posted, deadline, expected",
        [
            (days_ago(0), None, 64.0),
            (days_ago(0), days_ahead(2), 100.0),
            (days_ago(0), days_ahead(10), 82.0),
            (days_ago(5), days_ahead(20), 62.0),
            (days_ago(32), days_ago(4), 8.0),
        ],
    )
    def test_deadline_and_recency(self, config, posted, deadline, expected):
        score = calculate_urgency_score(
            posted, deadline, CREATED_AT, config.urgency, REFERENCE_DATE
        )
        assert score == pytest.approx(expected)

    @pytest.mark.unit
    def test_saved_date_fallback(self, config):
        fresh = calculate_urgency_score(None, None, CREATED_AT, config.urgency, REFERENCE_DATE)
        stale = calculate_urgency_score(
            None, None, days_ago(10), config.urgency, REFERENCE_DATE
        )
        assert fresh == pytest.approx(60.0)
        assert stale == pytest.approx(36.0)


class TestFreshness:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "age, expected",
        [(0, 100), (1, 100), (2, 90), (3, 90), (5, 75), (7, 75), (10, 60), (20, 40), (31, 20)],
    )
    def test_buckets(self, config, age, expected):
        score = calculate_freshness_score(
            days_ago(age), CREATED_AT, config.freshness, REFERENCE_DATE
        )
        assert score == expected

    @pytest.mark.unit
    def test_falls_back_to_saved_date(self, config):
        assert calculate_freshness_score(None, CREATED_AT, config.freshness, REFERENCE_DATE) == 100

    @pytest.mark.unit
    def test_unparseable_date_is_oldest_bucket(self, config):
        assert calculate_freshness_score("soon", CREATED_AT, config.freshness, REFERENCE_DATE) == 20


class TestPreferenceMatch:
    @pytest.mark.unit
    def test_all_checks_pass(self, config, make_job, preferences):
        # 95000 clears the 90% soft floor of a 100000 minimum
        job = make_job(work_arrangement="remote", location="Remote", salary=(95000, 120000))
        ratio = config.ranking.salary_soft_floor_ratio
        assert calculate_preference_match(job, preferences, ratio) == 100

    @pytest.mark.unit
    def test_no_checks_pass(self, config, make_job, preferences):
        job = make_job(work_arrangement="onsite", location="Austin, TX", salary=(80000, 90000))
        ratio = config.ranking.salary_soft_floor_ratio
        assert calculate_preference_match(job, preferences, ratio) == 0

    @pytest.mark.unit
    def test_only_applicable_checks_count(self, config, make_job, preferences):
        job = make_job(work_arrangement="hybrid", location="Austin, TX")
        ratio = config.ranking.salary_soft_floor_ratio
        strict = replace(preferences, strict_location=True)

        assert calculate_preference_match(job, preferences, ratio) == 50
        assert calculate_preference_match(job, strict, ratio) == 100

    @pytest.mark.unit
    def test_no_preferences(self, config, make_job):
        ratio = config.ranking.salary_soft_floor_ratio
        assert calculate_preference_match(make_job(), UserPreferences(), ratio) == 100


class TestScoreBreakdown:
    @pytest.mark.unit
    def test_weighted_sum_without_penalties(self, config, make_job, preferences):
        job = make_job(location="San Francisco, CA", salary=(120000, 150000))
        breakdown = calculate_score_breakdown(
            80, "target", 100, 100, 64, job, preferences, NO_SCAM, config.ranking, REFERENCE_DATE
        )

        assert breakdown.fit_component == pytest.approx(40.0)
        assert breakdown.preference_component == pytest.approx(20.0)
        assert breakdown.freshness_component == pytest.approx(10.0)
        assert breakdown.category_component == pytest.approx(10.0)
        assert breakdown.urgency_component == pytest.approx(6.4)
        assert breakdown.raw_score == pytest.approx(86.4)
        assert breakdown.final_score == pytest.approx(86.4)
        assert breakdown.penalties == []

    @pytest.mark.unit
    def test_penalties_itemized_and_clamped(self, config, make_job, preferences):
        job = make_job(location="Austin, TX", salary=(80000, 90000), deadline=days_ago(1))
        scam = ScamDetectionResult(risk_level="high", red_flag_count=5, score=9)
        breakdown = calculate_score_breakdown(
            20, "avoid", 0, 20, 8, job, preferences, scam, config.ranking, REFERENCE_DATE
        )

        assert [p.code for p in breakdown.penalties] == [
            "location_mismatch",
            "salary_low",
            "scam_risk",
            "expired",
        ]
        assert [p.amount for p in breakdown.penalties] == [-10, -15, -30, -50]
        assert breakdown.raw_score < 0
        assert breakdown.final_score == 0

    @pytest.mark.unit
    def test_medium_scam_penalty(self, config, make_job):
        scam = ScamDetectionResult(risk_level="medium", red_flag_count=3, score=4)
        breakdown = calculate_score_breakdown(
            70, "target", 100, 100, 64, make_job(), UserPreferences(), scam, config.ranking
        )
        assert [(p.code, p.amount) for p in breakdown.penalties] == [("scam_risk", -15)]

    @pytest.mark.unit
    def test_low_scam_risk_is_not_penalized(self, config, make_job):
        scam = ScamDetectionResult(risk_level="low", red_flag_count=1, score=1)
        breakdown = calculate_score_breakdown(
            70, "target", 100, 100, 64, make_job(), UserPreferences(), scam, config.ranking
        )
        assert breakdown.penalties == []


class TestPriority:
    @pytest.mark.unit
    def test_should_not_apply_is_low(self, config):
        assert determine_priority(100, "safety", False, 100, 100, JobFlags(), config) == "low"

    @pytest.mark.unit
    def test_tiers(self, config):
        # 80*0.4 + 30 + 100*0.15 + 64*0.15 = 86.6
        assert determine_priority(80, "target", True, 100, 64, JobFlags(), config) == "high"
        # 60*0.4 + 25 + 40*0.15 + 40*0.15 = 61
        assert determine_priority(60, "reach", True, 40, 40, JobFlags(), config) == "medium"
        # 55*0.4 + 20 + 20*0.15 + 20*0.15 = 48
        assert determine_priority(55, "safety", True, 20, 20, JobFlags(), config) == "low"

    @pytest.mark.unit
    def test_flag_adjustments(self, config):
        assert (
            determine_priority(60, "reach", True, 40, 40, JobFlags(dream_job=True), config)
            == "high"
        )
        assert (
            determine_priority(60, "reach", True, 40, 40, JobFlags(scam_risk=True), config)
            == "low"
        )


class TestFlags:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "fit, tier, expected",
        [(85, "top_tier", True), (90, "unicorn", True), (84, "top_tier", False),
         (95, "startup", False)],
    )
    def test_dream_job(self, config, make_job, fit, tier, expected):
        flags = determine_job_flags(
            make_job(company_tier=tier), fit, NO_SCAM, config, reference=REFERENCE_DATE
        )
        assert flags.dream_job is expected

    @pytest.mark.unit
    def test_new_and_expired(self, config, make_job):
        fresh = make_job(posted_date=days_ago(3), deadline=days_ago(1))
        older = make_job(posted_date=days_ago(4))

        fresh_flags = determine_job_flags(fresh, 70, NO_SCAM, config, reference=REFERENCE_DATE)
        older_flags = determine_job_flags(older, 70, NO_SCAM, config, reference=REFERENCE_DATE)

        assert fresh_flags.new and fresh_flags.expired
        assert not older_flags.new and not older_flags.expired

    @pytest.mark.unit
    def test_applied_and_rejected_ids(self, config, make_job):
        job = make_job(canonical_id="hash:0123456789abcdef", job_id="job-7")
        flags = determine_job_flags(
            job,
            70,
            NO_SCAM,
            config,
            applied_job_ids=["hash:0123456789abcdef"],
            rejected_job_ids=["job-7"],
            reference=REFERENCE_DATE,
        )
        assert flags.applied and flags.rejected

    @pytest.mark.unit
    def test_scam_risk_flag(self, config, make_job):
        medium = ScamDetectionResult(risk_level="medium", red_flag_count=2, score=4)
        low = ScamDetectionResult(risk_level="low", red_flag_count=1, score=1)
        assert determine_job_flags(make_job(), 70, medium, config).scam_risk
        assert not determine_job_flags(make_job(), 70, low, config).scam_risk
