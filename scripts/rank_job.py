#!/usr/bin/env python3
"""
Job Discovery CLI

Parses, ranks and compares job postings saved as plain-text files.

Commands:
    parse   - Extract the structured record from one posting
    rank    - Rank postings against a resume and print a table
    compare - Rank postings and compare them side by side

Examples:\n

    rank_job.py parse data/jobs/acme_backend.txt                   # Show extracted fields

    rank_job.py parse data/jobs/acme_backend.txt --json            # Dump the envelope

    rank_job.py rank data/jobs/*.txt --resume data/resume.txt      # Ranked table

    rank_job.py rank data/jobs/*.txt --remote --min-salary 120000  # With preferences

    rank_job.py compare a.txt b.txt c.txt --skill python --skill aws

    rank_job.py --log-dir outs/logs/rank rank data/jobs/*.txt      # Also log to file
"""

import json
from pathlib import Path
from typing import Optional

import typer
from dotenv import load_dotenv
from typing_extensions import Annotated

from jobscout.contexts.discovery.engine import JobDiscoveryEngine
from jobscout.contexts.discovery.envelopes import Envelope
from jobscout.contexts.discovery.logger import setup_discovery_logger
from jobscout.contexts.discovery.request_validation import JobMetadataInput, JobPasteRequest
from jobscout.contexts.intake.job_data_structure import ParsedJob
from jobscout.contexts.matching.comparator import comparison_summary
from jobscout.contexts.matching.preferences import UserPreferences
from jobscout.contexts.matching.ranker import RankedJob
from jobscout.exceptions import JobDiscoveryError
from jobscout.utils.text_processing import format_score, truncate_display

load_dotenv()

CATEGORY_COLORS = {
    "safety": typer.colors.GREEN,
    "target": typer.colors.CYAN,
    "reach": typer.colors.YELLOW,
    "avoid": typer.colors.RED,
}

app = typer.Typer(
    help="Parse, rank and compare job postings",
    add_completion=False,
    invoke_without_command=True,
)


@app.callback()
def main(
    ctx: typer.Context,
    log_dir: Annotated[
        Optional[Path],
        typer.Option("--log-dir", help="Also write a DEBUG log file to this directory"),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option("--verbose", "-v", help="Echo INFO logs to stderr"),
    ] = False,
):
    """Show help by default when no command is provided."""
    if ctx.invoked_subcommand is None:
        typer.echo(ctx.get_help())
        raise typer.Exit()

    setup_discovery_logger(log_dir, console_level="INFO" if verbose else "WARNING")


def _read(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except OSError as e:
        typer.secho(f"Error: cannot read {path}: {e}", fg=typer.colors.RED, err=True)
        raise typer.Exit(code=1)


def _echo_json(envelope: Envelope) -> None:
    typer.echo(json.dumps(envelope.to_dict(), indent=2, default=str))


def _exit_on_error(envelope: Envelope) -> None:
    if envelope.success:
        return
    error = envelope.error
    typer.secho(f"✗ {error.title}: {error.message}", fg=typer.colors.RED, bold=True, err=True)
    typer.echo(f"  {error.suggestion}", err=True)
    if error.details:
        typer.echo(f"  Details: {error.details}", err=True)
    raise typer.Exit(code=1)


def _parse_files(engine: JobDiscoveryEngine, files: list[Path]) -> list[ParsedJob]:
    jobs = []
    for path in files:
        try:
            jobs.append(engine.parse_job_text(_read(path)))
        except JobDiscoveryError as e:
            typer.secho(f"✗ {path}: {e.title} - {e.message}", fg=typer.colors.RED, err=True)
            raise typer.Exit(code=1)
    return jobs


def _ranked_in_order(grouped: dict[str, list[RankedJob]]) -> list[RankedJob]:
    return sorted((r for jobs in grouped.values() for r in jobs), key=lambda r: r.rank)


@app.command("parse")
def parse_command(
    job_file: Annotated[Path, typer.Argument(help="Plain-text job posting")],
    title: Annotated[Optional[str], typer.Option("--title", help="Override job title")] = None,
    company: Annotated[Optional[str], typer.Option("--company", help="Override company")] = None,
    location: Annotated[
        Optional[str], typer.Option("--location", help="Override location")
    ] = None,
    url: Annotated[Optional[str], typer.Option("--url", help="Job posting URL")] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full envelope")] = False,
):
    """
    Extract the structured record from one posting.

    Examples:\n

        $ rank_job.py parse posting.txt

        $ rank_job.py parse posting.txt --company "Acme Corp" --json
    """
    engine = JobDiscoveryEngine.from_config_file()
    request = JobPasteRequest(
        job_description=_read(job_file),
        user_id="cli",
        resume_version_id="none",
        metadata=JobMetadataInput(job_title=title, company=company, location=location, job_url=url),
    )
    envelope = engine.quick_parse_job(request)

    if as_json:
        _echo_json(envelope)
        raise typer.Exit(code=0 if envelope.success else 1)
    _exit_on_error(envelope)

    job = envelope.data
    requirements = job.requirements
    typer.secho(f"\n{job.title} at {job.company}", fg=typer.colors.BLUE, bold=True)
    typer.echo(f"  Location: {job.location} ({job.work_arrangement})")
    if job.salary_range:
        typer.echo(f"  Salary: {job.salary_range.min} - {job.salary_range.max}")
    typer.echo(f"  Seniority: {requirements.seniority_expected}")
    if requirements.years_experience_min is not None:
        typer.echo(
            f"  Experience: {requirements.years_experience_min}"
            f"-{requirements.years_experience_max} years"
        )
    typer.echo(f"  Quality: {job.metadata.parse_quality} ({job.metadata.confidence}%)")
    if job.metadata.parse_outcome == "fallback":
        typer.echo(f"  Fallback parse: {job.metadata.fallback_reason}")
    typer.echo(f"  Canonical id: {job.canonical_id}")

    typer.echo("\n=== Requirements ===")
    for label, items in (
        ("Required skills", requirements.required_skills),
        ("Preferred skills", requirements.preferred_skills),
        ("Required tools", requirements.required_tools),
        ("Preferred tools", requirements.preferred_tools),
    ):
        names = ", ".join(item.value for item in items) or "(none)"
        typer.echo(f"  {label}: {names}")

    typer.echo(f"\n=== Responsibilities ({len(job.responsibilities)}) ===")
    for responsibility in job.responsibilities:
        typer.echo(f"  - {truncate_display(responsibility, 100)}")
    typer.echo("")


@app.command("rank")
def rank_command(
    job_files: Annotated[list[Path], typer.Argument(help="Plain-text job postings")],
    resume: Annotated[
        Optional[Path], typer.Option("--resume", "-r", help="Plain-text resume")
    ] = None,
    remote: Annotated[bool, typer.Option("--remote", help="Prefer remote roles")] = False,
    location: Annotated[
        Optional[list[str]], typer.Option("--location", "-l", help="Preferred location")
    ] = None,
    min_salary: Annotated[
        Optional[int], typer.Option("--min-salary", help="Minimum acceptable salary", min=0)
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full envelope")] = False,
):
    """
    Rank postings against a resume.

    Examples:\n

        $ rank_job.py rank a.txt b.txt --resume resume.txt

        $ rank_job.py rank jobs/*.txt --remote --min-salary 150000
    """
    engine = JobDiscoveryEngine.from_config_file()
    jobs = _parse_files(engine, job_files)
    preferences = UserPreferences(
        work_arrangement=["remote"] if remote else [],
        locations=location or [],
        salary_minimum=min_salary,
    )
    envelope = engine.get_ranked_jobs(jobs, _read(resume) if resume else "", preferences)

    if as_json:
        _echo_json(envelope)
        raise typer.Exit(code=0 if envelope.success else 1)
    _exit_on_error(envelope)

    result = envelope.data
    typer.secho(f"\nRanked {result.summary.total_jobs} jobs\n", fg=typer.colors.BLUE, bold=True)
    for ranked in _ranked_in_order(result.jobs):
        color = CATEGORY_COLORS.get(ranked.category)
        apply_mark = "✓" if ranked.should_apply else "✗"
        typer.secho(
            f"  {ranked.rank:>2}. [{ranked.category:<6}] "
            f"fit {format_score(ranked.fit_score):>3}  "
            f"score {format_score(ranked.priority_score):>5}  "
            f"{ranked.application_priority:<6} {apply_mark}  "
            f"{truncate_display(f'{ranked.job.title} at {ranked.job.company}', 60)}",
            fg=color,
        )

    if result.insights:
        typer.echo("\nInsights:")
        for insight in result.insights:
            typer.echo(f"  - {insight}")
    typer.echo(f"\n  ({envelope.metadata.processing_time_ms}ms)\n")


@app.command("compare")
def compare_command(
    job_files: Annotated[list[Path], typer.Argument(help="2-5 plain-text job postings")],
    resume: Annotated[
        Optional[Path], typer.Option("--resume", "-r", help="Plain-text resume")
    ] = None,
    skill: Annotated[
        Optional[list[str]], typer.Option("--skill", "-s", help="A skill you have")
    ] = None,
    as_json: Annotated[bool, typer.Option("--json", help="Print the full envelope")] = False,
):
    """
    Rank postings, then compare them side by side.

    Examples:\n

        $ rank_job.py compare a.txt b.txt --skill python --skill docker
    """
    engine = JobDiscoveryEngine.from_config_file()
    jobs = _parse_files(engine, job_files)

    ranked_envelope = engine.get_ranked_jobs(
        jobs, _read(resume) if resume else "", UserPreferences()
    )
    _exit_on_error(ranked_envelope)
    ranked = _ranked_in_order(ranked_envelope.data.jobs)

    envelope = engine.compare_jobs_side_by_side(ranked, skill or [])
    if as_json:
        _echo_json(envelope)
        raise typer.Exit(code=0 if envelope.success else 1)
    _exit_on_error(envelope)

    typer.echo("")
    typer.echo(comparison_summary(envelope.data))
    for insight in envelope.data.insights:
        typer.echo(f"  - {insight}")
    typer.echo("")


if __name__ == "__main__":
    app()
