"""Unit tests for per-job and comparison insights."""

import pytest

from jobscout.contexts.assessment.career_capital import CareerCapitalResult
from jobscout.contexts.matching.insights import (
    JobSnapshot,
    generate_comparison_insights,
    generate_job_insights,
)


def _capital(brand=40, growth=30):
    return CareerCapitalResult(
        score=50, brand_score=brand, skill_growth_score=growth, network_score=50, comp_score=50
    )


def _snapshot(company, fit, category, skills, capital):
    return JobSnapshot(
        job_id=company.lower(),
        job_title="Engineer",
        company=company,
        fit_score=fit,
        category=category,
        required_skills=skills,
        career_capital_score=capital,
    )


class TestJobInsights:
    @pytest.mark.unit
    def test_strong_fit_at_top_brand(self, make_job, make_fit):
        job = make_job(work_arrangement="remote", salary=(120000, 150000))
        fit = make_fit(85, matched=["Python", "SQL"])
        insights = generate_job_insights(job, fit, "safety", _capital(brand=95, growth=80))

        assert insights.quick_insights[0] == (
            "Excellent match (85/100) - strong alignment with your background"
        )
        assert "High-value brand for career growth" in insights.quick_insights
        assert "Salary: $120K - $150K" in insights.quick_insights
        assert "Strong on: Python, SQL" in insights.green_flags
        assert "Remote position" in insights.green_flags
        assert "Safety option" in insights.green_flags
        assert insights.red_flags == []

    @pytest.mark.unit
    def test_gaps_and_seniority_stretch(self, make_job, make_fit):
        fit = make_fit(
            55,
            alignment="underqualified",
            gap_years=3,
            critical_missing=["Go", "Rust", "Kafka", "Scala"],
        )
        insights = generate_job_insights(make_job(), fit, "reach", _capital())

        assert "Key gaps: Go, Rust, Kafka" in insights.quick_insights
        assert "Stretch role: 3+ years experience gap" in insights.quick_insights
        assert "Ambitious target - worth the effort if excited" in insights.quick_insights
        assert "Missing 3+ critical skills" in insights.red_flags
        assert "3+ year seniority gap" in insights.red_flags

    @pytest.mark.unit
    def test_without_fit_result(self, make_job):
        insights = generate_job_insights(make_job(parse_quality="low"), None, "avoid", _capital())

        assert insights.quick_insights[0] == "Moderate fit (50/100) - some gaps but viable"
        assert "Categorized as avoid - significant mismatches" in insights.red_flags
        assert "Low parse quality - job details may be incomplete" in insights.red_flags

    @pytest.mark.unit
    def test_quick_insights_capped(self, make_job, make_fit):
        fit = make_fit(
            90,
            alignment="overqualified",
            critical_missing=["Go"],
            transferable=["Kotlin"],
        )
        job = make_job(salary=(150000, 200000))
        insights = generate_job_insights(job, fit, "safety", _capital(brand=95, growth=90))
        assert len(insights.quick_insights) == 7


class TestComparisonInsights:
    @pytest.mark.unit
    def test_needs_two_jobs(self):
        assert generate_comparison_insights([]) == ["Need at least 2 jobs to compare"]

    @pytest.mark.unit
    def test_full_comparison(self):
        jobs = [
            _snapshot("Alpha", 85, "safety", ["Python", "SQL"], 80),
            _snapshot("Beta", 55, "reach", ["Python", "Go"], 50),
            _snapshot("Gamma", 70, "target", ["Python", "Rust"], 55),
        ]
        assert generate_comparison_insights(jobs) == [
            "Best fit: Engineer at Alpha (85/100)",
            "Significant fit variation (30 point spread) - choose carefully",
            "Common requirements: Python",
            "Alpha uniquely needs: SQL",
            "Beta uniquely needs: Go",
            "Gamma uniquely needs: Rust",
            "Best for career growth: Alpha (80/100)",
            "Good mix of ambitious and safe options",
        ]

    @pytest.mark.unit
    def test_similar_reach_jobs(self):
        jobs = [
            _snapshot("Alpha", 62, "reach", ["Python"], 60),
            _snapshot("Beta", 58, "reach", ["Python"], 55),
        ]
        insights = generate_comparison_insights(jobs)

        assert "Similar fit scores across jobs - consider other factors" in insights
        assert "Common requirements: Python" in insights
        assert "All reach positions - consider adding safety options" in insights
        assert not any("uniquely needs" in insight for insight in insights)
