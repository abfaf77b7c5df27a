"""Unit tests for batch ranking and portfolio helpers."""

from datetime import date

import pytest

from jobscout.contexts.matching.fit_adapter import FitAdapter
from jobscout.contexts.matching.preferences import CandidateProfile, JobFilters, UserPreferences
from jobscout.contexts.matching.ranker import (
    JobListResult,
    apply_filters,
    calculate_summary,
    generate_portfolio_insights,
    get_top_recommendations,
    group_jobs_by_category,
    rank_job,
    rank_jobs,
)

REFERENCE_DATE = date(2026, 3, 5)
SCORES = {"Alpha": 90, "Beta": 40, "Gamma": 70}


@pytest.fixture
def trio(make_job):
    names = ("Beta", "Gamma", "Alpha")
    return [make_job(company=name, required_skills=["Python"]) for name in names]


def _list_result(ranked):
    grouped = group_jobs_by_category(ranked)
    summary = calculate_summary(ranked, grouped)
    return JobListResult(
        jobs=grouped,
        summary=summary,
        top_recommendations=get_top_recommendations(ranked),
        insights=generate_portfolio_insights(ranked, summary),
    )


class TestRankJobs:
    @pytest.mark.unit
    def test_sorted_and_numbered(self, trio, rank_with_scores):
        ranked = rank_with_scores(trio, SCORES)

        assert [r.job.company for r in ranked] == ["Alpha", "Gamma", "Beta"]
        assert [r.rank for r in ranked] == [1, 2, 3]
        scores = [r.priority_score for r in ranked]
        assert scores == sorted(scores, reverse=True)

    @pytest.mark.unit
    def test_categories_and_apply_decisions(self, trio, rank_with_scores):
        by_company = {r.job.company: r for r in rank_with_scores(trio, SCORES)}

        assert by_company["Alpha"].category == "safety"
        assert by_company["Gamma"].category == "target"
        assert by_company["Beta"].category == "avoid"
        assert by_company["Alpha"].should_apply and by_company["Gamma"].should_apply
        assert not by_company["Beta"].should_apply
        assert by_company["Beta"].application_priority == "low"

    @pytest.mark.unit
    def test_inputs_are_reused_not_copied(self, trio, rank_with_scores):
        ranked = rank_with_scores(trio, SCORES)
        assert {id(r.job) for r in ranked} == {id(job) for job in trio}

    @pytest.mark.unit
    def test_equal_scores_keep_input_order(self, make_job, rank_with_scores):
        jobs = [make_job(company=name) for name in ("Acme One", "Acme Two", "Acme Three")]
        ranked = rank_with_scores(jobs)

        assert len({r.priority_score for r in ranked}) == 1
        assert [r.job.company for r in ranked] == ["Acme One", "Acme Two", "Acme Three"]

    @pytest.mark.unit
    def test_empty_batch(self, config):
        assert rank_jobs([], CandidateProfile(), UserPreferences(), config) == []

    @pytest.mark.unit
    def test_failing_oracle_gives_neutral_fit(self, config, make_job):
        def broken(resume, job):
            raise ConnectionError("oracle down")

        ranked = rank_job(
            make_job(),
            CandidateProfile(resume_text="resume"),
            UserPreferences(),
            config,
            FitAdapter(broken),
            REFERENCE_DATE,
        )
        assert ranked.fit_score == 50
        assert ranked.fit_analysis is None
        assert ranked.rank == 0

    @pytest.mark.unit
    def test_single_job_carries_insights_and_assessments(self, config, make_job):
        job = make_job(
            company="Stripe",
            company_tier="top_tier",
            required_skills=["Python", "Go"],
            salary=(150000, 190000),
        )
        ranked = rank_job(
            job, CandidateProfile(resume_text="Python"), UserPreferences(), config,
            reference=REFERENCE_DATE,
        )

        assert ranked.fit_analysis.source == "estimate"
        assert ranked.career_capital.brand_score == 95
        assert ranked.scam_detection.risk_level == "none"
        assert ranked.quick_insights
        assert "Key gaps: Go" in ranked.quick_insights


class TestPortfolio:
    @pytest.mark.unit
    def test_grouping_and_summary(self, trio, rank_with_scores):
        result = _list_result(rank_with_scores(trio, SCORES))
        summary = result.summary

        assert [r.job.company for r in result.jobs["safety"]] == ["Alpha"]
        assert [r.job.company for r in result.jobs["target"]] == ["Gamma"]
        assert [r.job.company for r in result.jobs["avoid"]] == ["Beta"]
        assert result.jobs["reach"] == []
        assert summary.total_jobs == 3
        assert summary.average_fit_score == 67
        assert summary.new_count == 3

    @pytest.mark.unit
    def test_recommendations_skip_applied(self, trio, rank_with_scores):
        alpha = next(job for job in trio if job.company == "Alpha")
        profile = CandidateProfile(resume_text="resume", applied_job_ids=[alpha.canonical_id])
        ranked = rank_with_scores(trio, SCORES, profile=profile)

        assert [r.job.company for r in get_top_recommendations(ranked)] == ["Gamma"]
        assert calculate_summary(ranked, group_jobs_by_category(ranked)).applied_count == 1

    @pytest.mark.unit
    def test_portfolio_insights(self, trio, rank_with_scores):
        insights = _list_result(rank_with_scores(trio, SCORES)).insights

        assert insights[0] == (
            "Moderate portfolio quality (67/100 avg fit) - consider better-matched roles"
        )
        assert "3 new jobs added recently - prioritize fresh listings" in insights
        assert "1 target jobs still waiting for applications" in insights

    @pytest.mark.unit
    def test_empty_summary(self):
        summary = calculate_summary([], group_jobs_by_category([]))
        assert summary.total_jobs == 0
        assert summary.average_fit_score == 0


class TestFilters:
    @pytest.mark.unit
    @pytest.mark.parametrize(
        "filters, expected",
        [
            (JobFilters(), {"Alpha", "Beta", "Gamma"}),
            (JobFilters(category="target"), {"Gamma"}),
            (JobFilters(min_fit_score=60), {"Alpha", "Gamma"}),
            (JobFilters(max_fit_score=80), {"Beta", "Gamma"}),
            (JobFilters(only_should_apply=True), {"Alpha", "Gamma"}),
        ],
    )
    def test_filters(self, trio, rank_with_scores, filters, expected):
        result = apply_filters(_list_result(rank_with_scores(trio, SCORES)), filters)
        kept = {r.job.company for jobs in result.jobs.values() for r in jobs}
        assert kept == expected

    @pytest.mark.unit
    def test_expired_and_rejected_dropped_by_default(self, make_job, rank_with_scores):
        expired = make_job(company="Expired Co", deadline="2026-03-01")
        rejected = make_job(company="Rejected Co")
        current = make_job(company="Current Co")
        profile = CandidateProfile(resume_text="resume", rejected_job_ids=[rejected.job_id])
        result = _list_result(rank_with_scores([expired, rejected, current], profile=profile))

        def kept(filters):
            filtered = apply_filters(result, filters)
            return {r.job.company for jobs in filtered.jobs.values() for r in jobs}

        assert kept(JobFilters()) == {"Current Co"}
        assert kept(JobFilters(include_expired=True, include_rejected=True)) == {
            "Expired Co",
            "Rejected Co",
            "Current Co",
        }

    @pytest.mark.unit
    def test_summary_describes_unfiltered_batch(self, trio, rank_with_scores):
        result = _list_result(rank_with_scores(trio, SCORES))
        filtered = apply_filters(result, JobFilters(category="safety"))
        assert filtered.summary == result.summary
        assert filtered.insights == result.insights
