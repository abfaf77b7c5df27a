"""Unit tests for typed errors and their user-facing views."""

import pytest

from jobscout.exceptions import (
    ERROR_MESSAGES,
    ErrorCode,
    JobDiscoveryError,
    create_error,
    get_user_friendly_error,
    is_job_discovery_error,
    log_error,
)


class TestJobDiscoveryError:
    @pytest.mark.unit
    def test_every_code_has_a_message(self):
        assert set(ERROR_MESSAGES) == set(ErrorCode)

    @pytest.mark.unit
    def test_to_dict(self):
        error = create_error(ErrorCode.JD_TOO_SHORT, {"length": 12, "minLength": 50})
        assert error.to_dict() == {
            "code": "JD_TOO_SHORT",
            "message": ERROR_MESSAGES[ErrorCode.JD_TOO_SHORT].message,
            "details": {"length": 12, "minLength": 50},
        }

    @pytest.mark.unit
    def test_custom_message(self):
        error = create_error(ErrorCode.INVALID_INPUT, custom_message="Bad filters")
        assert error.message == "Bad filters"
        assert str(error) == "[INVALID_INPUT] Bad filters"
        assert error.title == "Invalid Input Data"

    @pytest.mark.unit
    def test_to_user_friendly(self):
        friendly = create_error(ErrorCode.DUPLICATE_JOB).to_user_friendly()
        assert friendly == {
            "code": "DUPLICATE_JOB",
            "title": "Duplicate Job",
            "message": "This job has already been added to your list.",
            "suggestion": "You can find the existing job in your saved jobs.",
        }

    @pytest.mark.unit
    def test_raises_as_exception(self):
        with pytest.raises(JobDiscoveryError) as exc_info:
            raise create_error(ErrorCode.TIMEOUT)
        assert exc_info.value.code is ErrorCode.TIMEOUT
        assert exc_info.value.details is None


class TestHelpers:
    @pytest.mark.unit
    def test_is_job_discovery_error(self):
        assert is_job_discovery_error(create_error(ErrorCode.TIMEOUT))
        assert not is_job_discovery_error(ValueError("nope"))

    @pytest.mark.unit
    def test_foreign_errors_do_not_leak(self):
        friendly = get_user_friendly_error(KeyError("internal table name"))
        assert friendly["code"] == "INTERNAL_ERROR"
        assert "internal table name" not in friendly["message"]

    @pytest.mark.unit
    def test_log_error_does_not_raise(self):
        log_error(create_error(ErrorCode.RANKING_FAILED, {"jobs": 3}), "rank")
        log_error(RuntimeError("boom"), "rank")
