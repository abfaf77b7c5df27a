"""
Typed errors for the job discovery engine.

Every error carries a machine-readable code plus a user-facing
title/message/suggestion triple. The facade turns these into the
``error`` member of a response envelope via JobDiscoveryError.to_dict().
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Optional

from loguru import logger


class ErrorCode(str, Enum):
    """Machine-readable error codes, grouped by failure family."""

    # Parsing
    PARSING_FAILED = "PARSING_FAILED"
    JD_TOO_SHORT = "JD_TOO_SHORT"
    JD_TOO_LONG = "JD_TOO_LONG"
    NO_CONTENT_EXTRACTED = "NO_CONTENT_EXTRACTED"
    INCOMPLETE_JD = "INCOMPLETE_JD"

    # Validation
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INVALID_INPUT = "INVALID_INPUT"
    MISSING_USER_ID = "MISSING_USER_ID"
    MISSING_RESUME_ID = "MISSING_RESUME_ID"
    MISSING_JOB_DESCRIPTION = "MISSING_JOB_DESCRIPTION"

    # Analysis
    FIT_ANALYSIS_FAILED = "FIT_ANALYSIS_FAILED"
    RANKING_FAILED = "RANKING_FAILED"
    CATEGORIZATION_FAILED = "CATEGORIZATION_FAILED"
    COMPARISON_FAILED = "COMPARISON_FAILED"

    # Business
    JOB_NOT_FOUND = "JOB_NOT_FOUND"
    STORAGE_FAILED = "STORAGE_FAILED"
    DUPLICATE_JOB = "DUPLICATE_JOB"
    SCAM_DETECTED = "SCAM_DETECTED"

    # Collaborators
    FIT_ORACLE_UNAVAILABLE = "FIT_ORACLE_UNAVAILABLE"
    RESUME_NOT_FOUND = "RESUME_NOT_FOUND"

    # System
    INTERNAL_ERROR = "INTERNAL_ERROR"
    TIMEOUT = "TIMEOUT"
    CONFIG_ERROR = "CONFIG_ERROR"


@dataclass(frozen=True)
class ErrorMessage:
    title: str
    message: str
    suggestion: str


ERROR_MESSAGES: dict[ErrorCode, ErrorMessage] = {
    ErrorCode.PARSING_FAILED: ErrorMessage(
        "Unable to Parse Job Description",
        "We encountered an issue while trying to parse the job description. "
        "The format may be unusual or corrupted.",
        "Try pasting the job description in plain text format. "
        "Remove any special formatting or characters.",
    ),
    ErrorCode.JD_TOO_SHORT: ErrorMessage(
        "Job Description Too Short",
        "The job description you provided is too short to analyze effectively. "
        "We need at least 50 characters.",
        "Paste the full job description including requirements, responsibilities, "
        "and qualifications.",
    ),
    ErrorCode.JD_TOO_LONG: ErrorMessage(
        "Job Description Too Long",
        "The job description exceeds our maximum length of 50,000 characters.",
        "Trim any unnecessary sections like company boilerplate or benefits "
        "that are not relevant to the role.",
    ),
    ErrorCode.NO_CONTENT_EXTRACTED: ErrorMessage(
        "No Content Found",
        "We could not extract any meaningful content from the job description.",
        "Ensure the job description contains actual text and is not just images or links.",
    ),
    ErrorCode.INCOMPLETE_JD: ErrorMessage(
        "Incomplete Job Description",
        "The job description appears to be missing key sections like requirements "
        "or responsibilities.",
        "Include the full job posting with requirements, responsibilities, "
        "and qualifications sections.",
    ),
    ErrorCode.VALIDATION_ERROR: ErrorMessage(
        "Invalid Input",
        "Some of the information provided did not meet our requirements.",
        "Check that all required fields are filled in correctly.",
    ),
    ErrorCode.INVALID_INPUT: ErrorMessage(
        "Invalid Input Data",
        "The provided input data is invalid or malformed.",
        "Please check your inputs and ensure all required information is provided correctly.",
    ),
    ErrorCode.MISSING_USER_ID: ErrorMessage(
        "User ID Required",
        "A user ID is required to process this request.",
        "Please ensure you are logged in and try again.",
    ),
    ErrorCode.MISSING_RESUME_ID: ErrorMessage(
        "Resume Selection Required",
        "Please select a resume to compare against the job.",
        "Upload or select an existing resume before analyzing job fit.",
    ),
    ErrorCode.MISSING_JOB_DESCRIPTION: ErrorMessage(
        "Job Description Required",
        "Please provide a job description to analyze.",
        "Copy and paste the full job description from the job posting.",
    ),
    ErrorCode.FIT_ANALYSIS_FAILED: ErrorMessage(
        "Fit Analysis Error",
        "We encountered an issue while analyzing how well you fit this role.",
        "Please try again. If the problem persists, try a different job.",
    ),
    ErrorCode.RANKING_FAILED: ErrorMessage(
        "Ranking Error",
        "We were unable to rank the jobs properly.",
        "Please try again. If the problem continues, contact support.",
    ),
    ErrorCode.CATEGORIZATION_FAILED: ErrorMessage(
        "Categorization Error",
        "We could not categorize this job (reach/target/safety).",
        "Try providing more complete job information.",
    ),
    ErrorCode.COMPARISON_FAILED: ErrorMessage(
        "Comparison Error",
        "We were unable to compare the selected jobs.",
        "Ensure you have selected at least 2 jobs and try again.",
    ),
    ErrorCode.JOB_NOT_FOUND: ErrorMessage(
        "Job Not Found",
        "The requested job could not be found in your saved jobs.",
        "The job may have been deleted or expired.",
    ),
    ErrorCode.STORAGE_FAILED: ErrorMessage(
        "Storage Error",
        "We were unable to save the job to your account.",
        "Please try again. If the problem persists, contact support.",
    ),
    ErrorCode.DUPLICATE_JOB: ErrorMessage(
        "Duplicate Job",
        "This job has already been added to your list.",
        "You can find the existing job in your saved jobs.",
    ),
    ErrorCode.SCAM_DETECTED: ErrorMessage(
        "Potential Scam Detected",
        "This job posting shows multiple red flags that indicate it may be a scam.",
        "We recommend being cautious. Verify the company through official channels "
        "before applying.",
    ),
    ErrorCode.FIT_ORACLE_UNAVAILABLE: ErrorMessage(
        "Analysis Service Unavailable",
        "The resume fit analysis service is temporarily unavailable.",
        "Please try again in a few minutes. The service should be back shortly.",
    ),
    ErrorCode.RESUME_NOT_FOUND: ErrorMessage(
        "Resume Not Found",
        "The selected resume could not be found.",
        "Select a different resume or upload a new one.",
    ),
    ErrorCode.INTERNAL_ERROR: ErrorMessage(
        "Unexpected Error",
        "Something went wrong on our end. Our team has been notified.",
        "Please try again in a few minutes.",
    ),
    ErrorCode.TIMEOUT: ErrorMessage(
        "Request Timed Out",
        "The request took longer than expected. "
        "This can happen with very long job descriptions.",
        "Try again with a shorter job description.",
    ),
    ErrorCode.CONFIG_ERROR: ErrorMessage(
        "Configuration Error",
        "There was an issue with the system configuration.",
        "Please contact support if this issue persists.",
    ),
}


class JobDiscoveryError(Exception):
    """
    Exception raised by the job discovery engine for every expected failure.

    Attributes:
        code: ErrorCode identifying the failure
        title: Short user-facing headline
        message: User-facing explanation (overridable per raise site)
        suggestion: What the user can do about it
        details: Optional machine-readable context for diagnosis
    """

    def __init__(
        self,
        code: ErrorCode,
        message: Optional[str] = None,
        details: Optional[dict[str, Any]] = None,
    ):
        info = ERROR_MESSAGES[code]
        self.code = code
        self.title = info.title
        self.message = message or info.message
        self.suggestion = info.suggestion
        self.details = details

        super().__init__(f"[{code.value}] {self.message}")

    def to_user_friendly(self) -> dict[str, str]:
        """Presentation view of the error, decoupled from the code."""
        return {
            "code": self.code.value,
            "title": self.title,
            "message": self.message,
            "suggestion": self.suggestion,
        }

    def to_dict(self) -> dict[str, Any]:
        """Envelope view of the error: {code, message, details}."""
        return {
            "code": self.code.value,
            "message": self.message,
            "details": self.details,
        }


def create_error(
    code: ErrorCode,
    details: Optional[dict[str, Any]] = None,
    custom_message: Optional[str] = None,
) -> JobDiscoveryError:
    return JobDiscoveryError(code, message=custom_message, details=details)


def is_job_discovery_error(error: object) -> bool:
    return isinstance(error, JobDiscoveryError)


def get_user_friendly_error(error: BaseException) -> dict[str, str]:
    """
    User-facing triple for any exception.

    Foreign exceptions are reported with the INTERNAL_ERROR wording so that
    internal messages never leak into presentation.
    """
    if isinstance(error, JobDiscoveryError):
        return error.to_user_friendly()

    info = ERROR_MESSAGES[ErrorCode.INTERNAL_ERROR]
    return {
        "code": ErrorCode.INTERNAL_ERROR.value,
        "title": info.title,
        "message": info.message,
        "suggestion": info.suggestion,
    }


def log_error(error: BaseException, context: str) -> None:
    """Log an error with the operation it surfaced from."""
    if isinstance(error, JobDiscoveryError):
        logger.error(f"[{context}] {error.code.value}: {error.message} details={error.details}")
    else:
        logger.error(f"[{context}] Unexpected {type(error).__name__}: {error}")
