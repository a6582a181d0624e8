"""CLI interface using typer + rich."""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import datetime
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()

import typer
import yaml
from rich.console import Console
from rich.logging import RichHandler
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.table import Table

from resume_builder.clients.llm_client import LLMClient
from resume_builder.config import API_KEY_ENV, AppConfig, get_api_key, load_config
from resume_builder.errors import PdfExportError, ResumeBuilderError
from resume_builder.logging.application_log import ApplicationLog
from resume_builder.logging.models import ApplicationLogEntry
from resume_builder.parsers.job_post_parser import infer_job_post_details
from resume_builder.parsers.profile_parser import (
    compute_years_of_experience,
    get_profile,
    load_profiles,
)
from resume_builder.parsers.text_parser import load_jd_file, parse_corpus
from resume_builder.pipeline.orchestrator import GenerationOrchestrator
from resume_builder.templates.docx_renderer import generate_docx, safe_file_name
from resume_builder.templates.pdf_converter import convert_docx_to_pdf

app = typer.Typer(
    name="resume-builder",
    help="Generate job-tailored resumes from a structured profile.",
    no_args_is_help=True,
)
console = Console()


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=console, show_path=False)],
    )


def _load_config() -> AppConfig:
    try:
        return load_config()
    except (OSError, TypeError, ValueError, yaml.YAMLError) as exc:
        console.print(f"[red]Invalid configuration: {exc}[/red]")
        raise typer.Exit(1)


@app.command()
def generate(
    profile_id: str = typer.Argument(help="Profile id from profiles.json"),
    jd: Path = typer.Option(..., "--jd", help="Job description text file"),
    corpus: Path = typer.Option(None, "--corpus", help="Existing resume (PDF/DOCX/TXT/MD) for grounding"),
    company: str = typer.Option("", "--company", help="Company name (inferred from the posting when omitted)"),
    role: str = typer.Option("", "--role", help="Role title (inferred from the posting when omitted)"),
    job_url: str = typer.Option("", "--job-url", help="Source job posting URL"),
    profiles: Path = typer.Option(None, "--profiles", help="Profiles JSON file (defaults to config)"),
    output: Path = typer.Option(None, "--output", "-o", help="Output JSON path"),
    docx: bool = typer.Option(True, "--docx/--no-docx", help="Also write a .docx resume"),
    pdf: bool = typer.Option(False, "--pdf", help="Convert the .docx resume to PDF with LibreOffice"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Verbose output"),
) -> None:
    """Generate resume content tailored to a job description."""
    _setup_logging(verbose)
    config = _load_config()

    profiles_path = profiles or config.storage.resolved_profiles_path
    if not profiles_path.exists():
        console.print(f"[red]Profiles file not found: {profiles_path}[/red]")
        raise typer.Exit(1)
    if not jd.exists():
        console.print(f"[red]Job description file not found: {jd}[/red]")
        raise typer.Exit(1)
    if corpus is not None and not corpus.exists():
        console.print(f"[red]Resume file not found: {corpus}[/red]")
        raise typer.Exit(1)

    try:
        profile = get_profile(load_profiles(profiles_path), profile_id)
    except KeyError as exc:
        console.print(f"[red]{exc.args[0]}[/red]")
        raise typer.Exit(1)
    except ValueError as exc:
        console.print(f"[red]Invalid profiles file {profiles_path}: {exc}[/red]")
        raise typer.Exit(1)

    try:
        jd_text = load_jd_file(jd)
        corpus_text = parse_corpus(corpus) if corpus is not None else ""
    except (OSError, ValueError) as exc:
        console.print(f"[red]Could not read input: {exc}[/red]")
        raise typer.Exit(1)

    if not (company and role):
        inferred_company, inferred_role = infer_job_post_details(job_url, jd_text)
        company = company or inferred_company
        role = role or inferred_role

    if verbose:
        console.print(f"[dim]Profile: {profile.display_name} ({profile.roles_count} roles)[/dim]")
        console.print(f"[dim]Experience: {compute_years_of_experience(profile)} years[/dim]")
        console.print(f"[dim]Job description: {len(jd_text)} chars[/dim]")
        console.print(f"[dim]Corpus: {len(corpus_text)} chars[/dim]")
        console.print(f"[dim]Posting: {company or '?'} / {role or '?'}[/dim]")

    orchestrator = GenerationOrchestrator.from_config(config, get_api_key())
    log = ApplicationLog(config.storage.resolved_log_db_path)
    entry = ApplicationLogEntry(
        company=company,
        role=role,
        job_url=job_url,
        job_description=jd_text,
        profile_name=profile.display_name,
    )

    try:
        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            console=console,
        ) as progress:
            task = progress.add_task("Generating resume...", total=None)

            def on_phase(phase: str, detail: str) -> None:
                progress.update(task, description=detail)

            result = asyncio.run(
                orchestrator.generate(profile, jd_text, corpus_text, on_phase=on_phase)
            )
    except ResumeBuilderError as exc:
        entry.success = False
        entry.error_message = exc.detail
        log.save(entry)
        console.print(f"[red]Generation failed: {exc.detail}[/red]")
        raise typer.Exit(1)

    if output is None:
        label = "_".join(part for part in (profile.display_name, company, role) if part)
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
        output = config.storage.resolved_output_dir / f"{safe_file_name(label)}_{stamp}.json"

    output.parent.mkdir(parents=True, exist_ok=True)
    output.write_text(
        json.dumps(result.content.model_dump(), ensure_ascii=False, indent=2),
        encoding="utf-8",
    )
    console.print(f"\n[green]Content saved: {output}[/green]")

    resume_path = output
    if docx or pdf:
        resume_path = generate_docx(result.content, profile, output.with_suffix(".docx"))
        console.print(f"[green]DOCX saved: {resume_path}[/green]")
    if pdf:
        try:
            resume_path = convert_docx_to_pdf(resume_path)
            console.print(f"[green]PDF saved: {resume_path}[/green]")
        except PdfExportError as exc:
            console.print(f"[yellow]PDF export unavailable, kept DOCX: {exc.detail}[/yellow]")

    tokens = orchestrator.llm.get_token_summary()
    entry.resume_path = str(resume_path)
    entry.repaired = result.repaired
    entry.input_tokens = tokens["input"]
    entry.output_tokens = tokens["output"]
    log.save(entry)

    console.print(
        Panel(
            f"Roles: {len(result.content.experience)} | Skill lines: {len(result.content.skills)}"
            + f"\nAttempts: {result.attempts}" + (" (repaired)" if result.repaired else "")
            + f"\nTokens: {tokens['input']} in / {tokens['output']} out"
            + f"\nElapsed: {result.elapsed_seconds:.1f}s",
            title="Generation",
        )
    )


@app.command("profiles")
def list_profiles(
    profiles: Path = typer.Option(None, "--profiles", help="Profiles JSON file (defaults to config)"),
) -> None:
    """List the profiles available for generation."""
    config = _load_config()
    path = profiles or config.storage.resolved_profiles_path
    if not path.exists():
        console.print(f"[red]Profiles file not found: {path}[/red]")
        raise typer.Exit(1)
    try:
        loaded = load_profiles(path)
    except ValueError as exc:
        console.print(f"[red]Invalid profiles file {path}: {exc}[/red]")
        raise typer.Exit(1)

    table = Table(title="Profiles")
    table.add_column("Id")
    table.add_column("Name")
    table.add_column("Roles", justify="right")
    table.add_column("Education", justify="right")
    table.add_column("Experience")
    for profile in loaded:
        table.add_row(
            profile.id,
            profile.display_name,
            str(profile.roles_count),
            str(profile.education_count),
            compute_years_of_experience(profile),
        )
    console.print(table)


@app.command()
def history(
    limit: int = typer.Option(20, "--limit", "-n", help="Number of entries to show"),
    search: str = typer.Option("", "--search", "-s", help="Filter by company, role or URL"),
) -> None:
    """Show previously generated applications."""
    config = _load_config()
    log = ApplicationLog(config.storage.resolved_log_db_path)
    entries = log.search(search, limit=limit) if search else log.get_recent(limit=limit)
    if not entries:
        console.print("[yellow]No applications logged yet.[/yellow]")
        return

    table = Table(title=f"Applications ({log.count()} total)")
    table.add_column("When")
    table.add_column("Company")
    table.add_column("Role")
    table.add_column("Profile")
    table.add_column("Status")
    table.add_column("Resume")
    for entry in entries:
        status = "[green]ok[/green]" if entry.success else f"[red]{entry.error_message or 'failed'}[/red]"
        table.add_row(
            entry.timestamp.strftime("%Y-%m-%d %H:%M"),
            entry.company,
            entry.role,
            entry.profile_name,
            status,
            entry.resume_path,
        )
    console.print(table)


@app.command("check-key")
def check_key() -> None:
    """Validate the API key from the environment."""
    api_key = get_api_key()
    if not api_key:
        console.print(f"[red]{API_KEY_ENV} is not set.[/red]")
        raise typer.Exit(1)

    ok, message = asyncio.run(LLMClient(api_key=api_key).validate_api_key())
    if not ok:
        console.print(f"[red]{message}[/red]")
        raise typer.Exit(1)
    console.print("[green]API key is valid.[/green]")


if __name__ == "__main__":
    app()
