import logging
import os
import sys

import click

from .config import DEFAULT_PROVIDER, PROVIDERS, REQUEST_TIMEOUT
from .credentials import CredentialStore, resolve_api_key
from .documents import COVER_LETTER_FILENAME, RESUME_FILENAME, read_resume, save_document
from .errors import ResumeFileError
from .matching import analyze_gap
from .models import AnalysisRequest, Notification
from .orchestrator import Orchestrator


def echo_notification(notification: Notification) -> None:
    click.echo(f"Error: {notification.title}. {notification.description}", err=True)


def _read_job_file(path: str) -> str:
    """Read a job description file, exiting with a message on failure."""
    if not os.path.exists(path):
        click.echo(f"Error: Job description file not found: {path}", err=True)
        sys.exit(1)
    try:
        with open(path, "r", encoding="utf-8") as f:
            return f.read()
    except UnicodeDecodeError:
        click.echo(f"Error: Job description file is not UTF-8 text: {path}", err=True)
        sys.exit(1)
    except OSError as e:
        click.echo(f"Error: Could not read job description file: {e}", err=True)
        sys.exit(1)


def _preview(text: str, limit: int = 600) -> str:
    return text if len(text) <= limit else text[:limit].rstrip() + "\n..."


@click.group()
@click.option("--verbose", "-v", is_flag=True, default=False, help="Show debug logging")
def cli(verbose: bool):
    """Resume Maker: tailor your resume and cover letter to a job."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command()
@click.option("--job-text", default="", help="Job description text")
@click.option("--job-file", type=click.Path(), default=None, help="File with the job description")
@click.option("--job-url", default="", help="Job posting URL (sent as-is unless --fetch-url)")
@click.option("--resume", type=click.Path(), default=None, help="Resume file (.txt, .pdf, .doc, .docx)")
@click.option(
    "--provider",
    default=DEFAULT_PROVIDER,
    type=click.Choice(list(PROVIDERS)),
    help=f"LLM provider (default: {DEFAULT_PROVIDER})",
)
@click.option("--api-key", default=None, help="API key for this run only")
@click.option("--out-dir", default=".", type=click.Path(), help="Where to save the generated files")
@click.option("--fetch-url", is_flag=True, default=False, help="Download the job posting page text")
@click.option("--timeout", default=REQUEST_TIMEOUT, type=float, help="Request timeout in seconds")
def analyze(job_text, job_file, job_url, resume, provider, api_key, out_dir, fetch_url, timeout):
    """Generate a tailored resume and cover letter for a job.

    Missing skills are computed locally, then the job description,
    resume and gap are sent to the provider in a single request.
    """
    if job_file:
        job_text = _read_job_file(job_file)

    resume_text = ""
    if resume:
        try:
            resume_text = read_resume(resume)
        except ResumeFileError as e:
            click.echo(f"Error: {e.title}. {e.description}", err=True)
            sys.exit(1)

    store = CredentialStore()
    orchestrator = Orchestrator(
        key_source=lambda: resolve_api_key(provider, store, explicit=api_key),
        provider=provider,
        notify=echo_notification,
        fetch_job_urls=fetch_url,
        timeout=timeout,
    )

    click.echo("=" * 60)
    click.echo("RESUME MAKER")
    click.echo(f"Provider: {provider} | Model: {PROVIDERS[provider]['default_model']}")
    click.echo("=" * 60)

    outcome = orchestrator.analyze(
        AnalysisRequest(job_text=job_text, job_url=job_url, resume_text=resume_text)
    )
    if outcome is None:
        sys.exit(1)

    if outcome.missing_skills:
        click.echo(f"\nMissing skills: {', '.join(outcome.missing_skills)}")
    else:
        click.echo("\nMissing skills: none")

    resume_path = save_document(outcome.resume_content, RESUME_FILENAME, out_dir)
    letter_path = save_document(outcome.cover_letter, COVER_LETTER_FILENAME, out_dir)

    click.echo("\n--- Tailored Resume (preview) ---\n")
    click.echo(_preview(outcome.resume_content))
    click.echo("\n--- Cover Letter (preview) ---\n")
    click.echo(_preview(outcome.cover_letter))

    click.echo(f"\nSaved: {resume_path}")
    click.echo(f"Saved: {letter_path}")


@cli.command()
@click.option("--job-file", required=True, type=click.Path(exists=True), help="File with the job description")
@click.option("--resume", required=True, type=click.Path(), help="Resume file")
def gap(job_file, resume):
    """Show which job keywords are missing from your resume (offline)."""
    job_text = _read_job_file(job_file)
    try:
        resume_text = read_resume(resume)
    except ResumeFileError as e:
        click.echo(f"Error: {e.title}. {e.description}", err=True)
        sys.exit(1)

    result = analyze_gap(job_text, resume_text)

    click.echo(f"Job keywords:    {len(result.job_keywords)}")
    click.echo(f"Matched:         {len(result.matched)} ({result.match_pct}%)")
    click.echo(f"Missing skills:  {', '.join(result.missing) or 'none'}")


@cli.command("set-key")
@click.argument("api_key")
def set_key(api_key: str):
    """Store an API key for later runs."""
    store = CredentialStore()
    store.set(api_key)
    click.echo(f"API key saved to {store.path}")


def main():
    cli()


if __name__ == "__main__":
    main()
