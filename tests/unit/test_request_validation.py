"""Unit tests for inbound request validation."""

import pytest

from jobscout.contexts.discovery.request_validation import (
    JobMetadataInput,
    JobPasteRequest,
    validate_filters,
    validate_job_paste_request,
    validate_preferences,
)
from jobscout.contexts.matching.preferences import JobFilters, UserPreferences
from jobscout.exceptions import ErrorCode, JobDiscoveryError

DESCRIPTION = (
    "Backend Engineer at Acme. Build and maintain Python services; "
    "3+ years of experience with PostgreSQL required."
)


def _request(description=DESCRIPTION, user_id="user-1", resume_id="resume-1", **metadata):
    return JobPasteRequest(
        job_description=description,
        user_id=user_id,
        resume_version_id=resume_id,
        metadata=JobMetadataInput(**metadata) if metadata else None,
    )


def _errors(exc_info):
    assert exc_info.value.code == ErrorCode.VALIDATION_ERROR
    return exc_info.value.details["errors"]


class TestJobPasteRequest:
    @pytest.mark.unit
    def test_valid_request_becomes_raw_posting(self, config):
        posting = validate_job_paste_request(
            _request(
                description=f"  {DESCRIPTION}  ",
                job_title="Backend Engineer",
                company="  ",
                job_url="https://acme.com/jobs/1",
                source="email_forward",
            ),
            config.parsing,
        )

        assert posting.text == DESCRIPTION
        assert posting.title == "Backend Engineer"
        assert posting.company is None
        assert posting.job_url == "https://acme.com/jobs/1"
        assert posting.source == "email_forward"

    @pytest.mark.unit
    def test_default_source(self, config):
        assert validate_job_paste_request(_request(), config.parsing).source == "manual_paste"

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "kwargs, code",
        [
            ({"user_id": ""}, ErrorCode.MISSING_USER_ID),
            ({"user_id": "   "}, ErrorCode.MISSING_USER_ID),
            ({"resume_id": ""}, ErrorCode.MISSING_RESUME_ID),
            ({"description": ""}, ErrorCode.MISSING_JOB_DESCRIPTION),
            ({"description": "Too short"}, ErrorCode.JD_TOO_SHORT),
        ],
    )
    def test_specific_codes(self, config, kwargs, code):
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_job_paste_request(_request(**kwargs), config.parsing)
        assert exc_info.value.code == code

    @pytest.mark.unit
    def test_identity_checked_before_description(self, config):
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_job_paste_request(_request(description="", user_id=""), config.parsing)
        assert exc_info.value.code == ErrorCode.MISSING_USER_ID

    @pytest.mark.unit
    def test_field_problems_collected(self, config):
        request = _request(
            job_url="not a url",
            posted_date="yesterday",
            application_deadline="2026-04-01",
            source="fax",
        )
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_job_paste_request(request, config.parsing)

        assert _errors(exc_info) == [
            {"path": "metadata.job_url", "message": "Invalid url"},
            {"path": "metadata.posted_date", "message": "Invalid datetime"},
            {
                "path": "metadata.source",
                "message": "Expected one of manual_paste, email_forward, api",
            },
        ]


class TestPreferencesAndFilters:
    @pytest.mark.unit
    def test_valid_preferences_pass_through(self, preferences):
        assert validate_preferences(preferences) is preferences

    @pytest.mark.unit
    def test_bad_preferences(self):
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_preferences(
                UserPreferences(work_arrangement=["remote", "moon"], salary_minimum=-1)
            )

        assert [e["path"] for e in _errors(exc_info)] == ["work_arrangement.1", "salary_minimum"]

    @pytest.mark.unit
    def test_bad_filters(self):
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_filters(JobFilters(category="dream", min_fit_score=90, max_fit_score=120))

        assert [e["path"] for e in _errors(exc_info)] == ["category", "max_fit_score"]

    @pytest.mark.unit
    def test_inverted_fit_range(self):
        with pytest.raises(JobDiscoveryError) as exc_info:
            validate_filters(JobFilters(min_fit_score=80, max_fit_score=60))
        assert _errors(exc_info) == [
            {"path": "min_fit_score", "message": "Must not exceed max_fit_score"}
        ]

    @pytest.mark.unit
    def test_valid_filters(self):
        filters = JobFilters(category="target", min_fit_score=60, max_fit_score=90)
        assert validate_filters(filters) is filters
