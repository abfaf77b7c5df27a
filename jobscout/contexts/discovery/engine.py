"""
Job discovery engine: the public API of the package.

Every envelope-returning operation times itself, logs against its
performance target, and converts failures into an error envelope:
typed errors pass through with their code, anything else is wrapped as
INTERNAL_ERROR with the original message in details["originalError"].

Example:
    engine = JobDiscoveryEngine.from_config_file()
    envelope = engine.parse_and_rank_job(request, resume_text)
    if envelope.success:
        print(envelope.data.category, envelope.data.fit_score)
"""

import math
import time
from dataclasses import replace
from datetime import date
from pathlib import Path
from typing import Callable, Iterable, Mapping, Optional, Sequence, TypeVar, Union

from jobscout.config import JobDiscoveryConfig, load_config
from jobscout.contexts.discovery.envelopes import (
    Envelope,
    elapsed_ms,
    error_envelope,
    success_envelope,
)
from jobscout.contexts.discovery.logger import _log_debug, log_performance
from jobscout.contexts.discovery.request_validation import (
    JobMetadataInput,
    JobPasteRequest,
    validate_filters,
    validate_job_paste_request,
    validate_preferences,
)
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.intake.job_parser import check_duplicate, parse_posting
from jobscout.contexts.matching.comparator import JobComparisonResult, compare_jobs
from jobscout.contexts.matching.fit_adapter import FitAdapter, FitOracle
from jobscout.contexts.matching.preferences import CandidateProfile, JobFilters, UserPreferences
from jobscout.contexts.matching.ranker import (
    JobListResult,
    RankedJob,
    apply_filters,
    generate_job_list_result,
    rank_job,
)
from jobscout.exceptions import (
    ErrorCode,
    JobDiscoveryError,
    create_error,
    log_error,
)

T = TypeVar("T")

ANONYMOUS_USER = "anonymous"
NO_RESUME = "none"
JOBS_PER_RANK_TARGET = 10


class JobDiscoveryEngine:
    """
    Parses, ranks and compares job postings for a candidate.

    Args:
        config: Loaded configuration, shared read-only by every call
        fit_oracle: External fit scorer; None uses the keyword-overlap estimate
        reference_date: Date treated as "today"; None uses the current UTC date
    """

    def __init__(
        self,
        config: JobDiscoveryConfig,
        fit_oracle: Optional[FitOracle] = None,
        reference_date: Optional[date] = None,
    ):
        self.config = config
        self.fit_adapter = FitAdapter(fit_oracle)
        self.reference_date = reference_date

    @classmethod
    def from_config_file(
        cls,
        config_path: Optional[Path] = None,
        fit_oracle: Optional[FitOracle] = None,
        reference_date: Optional[date] = None,
    ) -> "JobDiscoveryEngine":
        """Load and validate configuration once, then build an engine around it."""
        return cls(load_config(config_path), fit_oracle, reference_date)

    # -------------------------------------------------------------------------
    # Envelope operations
    # -------------------------------------------------------------------------

    def parse_and_rank_job(
        self,
        request: JobPasteRequest,
        resume_text: str = "",
        preferences: Optional[UserPreferences] = None,
        existing_canonical_ids: Union[Iterable[str], Mapping[str, str]] = (),
        profile: Optional[CandidateProfile] = None,
    ) -> Envelope[RankedJob]:
        """
        Validate, parse, dedup and rank one posting.

        existing_canonical_ids is either a collection of canonical ids or a
        mapping from canonical id to the stored job id. A match returns
        DUPLICATE_JOB with details {existingJobId, canonicalId}.
        """

        def run() -> RankedJob:
            prefs = validate_preferences(preferences or UserPreferences())
            job = self._parse(request)

            is_duplicate, existing_id = check_duplicate(job.canonical_id, existing_canonical_ids)
            if is_duplicate:
                raise create_error(
                    ErrorCode.DUPLICATE_JOB,
                    {"existingJobId": existing_id, "canonicalId": job.canonical_id},
                )

            return rank_job(
                job,
                _profile(profile, resume_text),
                prefs,
                self.config,
                self.fit_adapter,
                self.reference_date,
            )

        return self._run(
            "parse_and_rank_job", self.config.performance_targets.parse_single_job_ms, run
        )

    def get_ranked_jobs(
        self,
        jobs: Sequence[ParsedJob],
        resume_text: str = "",
        preferences: Optional[UserPreferences] = None,
        filters: Optional[JobFilters] = None,
        applied_job_ids: Sequence[str] = (),
        rejected_job_ids: Sequence[str] = (),
        profile: Optional[CandidateProfile] = None,
    ) -> Envelope[JobListResult]:
        """Rank a batch of parsed jobs into a grouped, summarized and filtered list."""

        def run() -> JobListResult:
            prefs = validate_preferences(preferences or UserPreferences())
            job_filters = validate_filters(filters or JobFilters())
            candidate = replace(
                _profile(profile, resume_text),
                applied_job_ids=list(applied_job_ids)
                or (profile.applied_job_ids if profile else []),
                rejected_job_ids=list(rejected_job_ids)
                or (profile.rejected_job_ids if profile else []),
            )
            result = generate_job_list_result(
                jobs, candidate, prefs, self.config, self.fit_adapter, self.reference_date
            )
            return apply_filters(result, job_filters)

        batches = max(1, math.ceil(len(jobs) / JOBS_PER_RANK_TARGET))
        target = batches * self.config.performance_targets.rank_10_jobs_ms
        return self._run("get_ranked_jobs", target, run)

    def compare_jobs_side_by_side(
        self, ranked_jobs: Sequence[RankedJob], user_skills: Iterable[str] = ()
    ) -> Envelope[JobComparisonResult]:
        """Compare 2-5 ranked jobs; fewer than 2 gives COMPARISON_FAILED."""
        return self._run(
            "compare_jobs",
            self.config.performance_targets.compare_5_jobs_ms,
            lambda: compare_jobs(ranked_jobs, list(user_skills)),
        )

    def quick_parse_job(self, request: JobPasteRequest) -> Envelope[ParsedJob]:
        """Validate and parse one posting without ranking it."""
        return self._run(
            "quick_parse_job",
            self.config.performance_targets.parse_single_job_ms,
            lambda: self._parse(request),
        )

    # -------------------------------------------------------------------------
    # Convenience
    # -------------------------------------------------------------------------

    def parse_job_text(
        self, job_description: str, metadata: Optional[JobMetadataInput] = None
    ) -> ParsedJob:
        """
        Parse bare posting text for an anonymous caller.

        Raises:
            JobDiscoveryError: on invalid text or metadata
        """
        request = JobPasteRequest(
            job_description=job_description,
            user_id=ANONYMOUS_USER,
            resume_version_id=NO_RESUME,
            metadata=metadata,
        )
        return self._parse(request)

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _parse(self, request: JobPasteRequest) -> ParsedJob:
        posting = validate_job_paste_request(request, self.config.parsing)
        return parse_posting(posting, self.config).unwrap()

    def _run(self, operation: str, target_ms: float, fn: Callable[[], T]) -> Envelope[T]:
        started = time.perf_counter()
        try:
            data = fn()
        except JobDiscoveryError as e:
            log_error(e, operation)
            return error_envelope(e, started)
        except Exception as e:
            # Envelope contract: nothing escapes an engine operation
            wrapped = create_error(ErrorCode.INTERNAL_ERROR, {"originalError": str(e)})
            log_error(e, operation)
            return error_envelope(wrapped, started)

        log_performance(operation, elapsed_ms(started), target_ms)
        _log_debug(f"{operation} succeeded")
        return success_envelope(data, started)


def _profile(profile: Optional[CandidateProfile], resume_text: str) -> CandidateProfile:
    if profile is None:
        return CandidateProfile(resume_text=resume_text)
    if resume_text:
        return replace(profile, resume_text=resume_text)
    return profile
