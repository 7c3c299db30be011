"""
resumatch Command Line Interface

Provides CLI commands for parsing resumes, scoring them against job
descriptions, importing them into MongoDB and searching stored candidates.
"""

import asyncio
from pathlib import Path
from typing import NoReturn, Optional

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="resumatch",
    help="Resume and job matching CLI",
    add_completion=False,
)
console = Console()

# Resumes and job descriptions may also be given as plain text files
PLAIN_TEXT_SUFFIXES = (".txt", ".md")


@app.callback()
def main():
    """Resume and job matching CLI."""
    from resumatch.utils.logger import setup_logging

    setup_logging()


def _fail(message: str) -> NoReturn:
    console.print(f"[red]Error: {message}[/red]")
    raise typer.Exit(1)


def _read_text(path: Path) -> str:
    """Plain text of a PDF, DOCX or text file."""
    from resumatch.ml.nlp import ExtractorFactory

    if not path.exists():
        _fail(f"File not found: {path}")
    if path.suffix.lower() in PLAIN_TEXT_SUFFIXES:
        return path.read_text(encoding="utf-8")
    return ExtractorFactory.extract_file(path)


def _score_color(score: int) -> str:
    if score >= 75:
        return "green"
    elif score >= 60:
        return "yellow"
    return "red"


@app.command()
def version():
    """Show application version."""
    from resumatch import __app_name__, __version__

    console.print(f"[bold blue]{__app_name__}[/bold blue] version [green]{__version__}[/green]")


@app.command()
def info():
    """Show system information and configuration."""
    from resumatch.utils.config import get_settings

    settings = get_settings()

    table = Table(title="resumatch Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Environment", settings.environment)
    table.add_row("Debug Mode", str(settings.debug))
    table.add_row("Database Host", settings.database.host)
    table.add_row("Database Name", settings.database.name)
    table.add_row("Embedding Model", settings.embedding.model)
    table.add_row("Embedding Dimension", str(settings.embedding.dimension))
    table.add_row("Embedding Device", settings.embedding.device)
    table.add_row("Max Concurrency", str(settings.embedding.max_concurrency))
    table.add_row("Degraded Mode", str(settings.embedding.allow_placeholder))
    table.add_row(
        "Match Weights",
        f"skills {settings.matching.skill_weight} / semantic {settings.matching.semantic_weight}",
    )
    table.add_row("Log Level", settings.logging.level)

    console.print(table)


@app.command()
def parse(
    file: Path = typer.Argument(..., help="Resume file (PDF or DOCX)"),
    as_json: bool = typer.Option(False, "--json", help="Print the parsed profile as JSON"),
):
    """Parse a resume file and show the extracted profile."""
    from resumatch.ml.nlp import ExtractorFactory, get_resume_parser
    from resumatch.utils.exceptions import ResumatchError

    if not file.exists():
        _fail(f"File not found: {file}")

    try:
        text = ExtractorFactory.extract_file(file)
    except ResumatchError as e:
        _fail(e.message)

    profile = get_resume_parser().parse(text, filename=file.name)

    if as_json:
        console.print_json(
            profile.model_dump_json(by_alias=True, exclude={"embedding", "embedding_is_placeholder"})
        )
        return

    table = Table(title=f"Parsed Resume: {file.name}")
    table.add_column("Field", style="cyan")
    table.add_column("Value", style="green")

    table.add_row("Name", profile.name)
    table.add_row("Email", profile.email or "-")
    table.add_row("Phone", profile.phone or "-")
    table.add_row("Skills", ", ".join(profile.skills) or "-")
    table.add_row("Education", "\n".join(profile.education) or "-")
    table.add_row("Word Count", str(profile.word_count))

    console.print(table)


@app.command()
def ats(
    resume_file: Path = typer.Argument(..., help="Resume file (PDF, DOCX or text)"),
    job_file: Path = typer.Argument(..., help="Job description file (PDF, DOCX or text)"),
):
    """Score a resume's ATS readiness against a job description."""
    from resumatch.core.analysis import get_ats_scorer
    from resumatch.utils.exceptions import ResumatchError

    try:
        report = get_ats_scorer().ats_score(_read_text(resume_file), _read_text(job_file))
    except ResumatchError as e:
        _fail(e.message)

    color = _score_color(report.overall_score)
    console.print(
        f"\n[bold]ATS Score:[/bold] [{color}]{report.overall_score}[/{color}] "
        f"(grade [bold]{report.grade}[/bold])\n"
    )

    table = Table(title="Score Breakdown")
    table.add_column("Component", style="cyan")
    table.add_column("Score", justify="right")
    table.add_row("Keywords", str(report.keyword_score))
    table.add_row("Skills", str(report.skill_score))
    table.add_row("Formatting", str(report.formatting_score))
    console.print(table)

    factors = report.factors
    console.print("\n[bold]Formatting Checks:[/bold]")
    for label, passed in (
        ("Email address", factors.has_email),
        ("Phone number", factors.has_phone),
        ("Standard sections", factors.has_standard_sections),
    ):
        mark = "[green]✓[/green]" if passed else "[red]✗[/red]"
        console.print(f"  {mark} {label}")


@app.command()
def keywords(
    resume_file: Path = typer.Argument(..., help="Resume file (PDF, DOCX or text)"),
    job_file: Path = typer.Argument(..., help="Job description file (PDF, DOCX or text)"),
):
    """Show keyword and skill gaps with optimization suggestions."""
    from resumatch.core.analysis import get_keyword_analyzer
    from resumatch.utils.exceptions import ResumatchError

    analyzer = get_keyword_analyzer()
    try:
        analysis = analyzer.analyze(_read_text(resume_file), _read_text(job_file))
    except ResumatchError as e:
        _fail(e.message)

    console.print(
        f"\n[bold]Keyword Match:[/bold] {analysis.match_score}% "
        f"({analysis.total_matched_keywords}/{analysis.total_job_keywords} keywords)\n"
    )

    table = Table(title="Keyword Analysis")
    table.add_column("Category", style="cyan")
    table.add_column("Matched", style="green")
    table.add_column("Missing", style="red")
    table.add_row(
        "Keywords",
        ", ".join(analysis.matched_keywords) or "-",
        ", ".join(analysis.missing_keywords) or "-",
    )
    table.add_row(
        "Skills",
        ", ".join(analysis.matched_skills) or "-",
        ", ".join(analysis.missing_skills) or "-",
    )
    console.print(table)

    console.print("\n[bold]Suggestions:[/bold]")
    for suggestion in analyzer.optimization_suggestions(analysis):
        console.print(f"  • {suggestion}")

    placements = analyzer.keyword_placement(analysis.missing_keywords)
    if placements:
        placement_table = Table(title="Where to Add Missing Keywords")
        placement_table.add_column("Keyword", style="cyan")
        placement_table.add_column("Section")
        for placement in placements:
            placement_table.add_row(placement.keyword, placement.section)
        console.print(placement_table)


@app.command()
def match(
    resume_file: Path = typer.Argument(..., help="Resume file (PDF, DOCX or text)"),
    job_file: Path = typer.Argument(..., help="Job description file (PDF, DOCX or text)"),
    skills: Optional[list[str]] = typer.Option(
        None,
        "--skills",
        "-s",
        help="Required skill (repeatable). Defaults to skills found in the job text",
    ),
    title: Optional[str] = typer.Option(None, "--title", "-t", help="Job title"),
    company: str = typer.Option("Unknown", "--company", "-c", help="Company name"),
):
    """Score one resume against one job description."""
    from resumatch.core.matching import get_match_scorer
    from resumatch.data.models import JobPosting
    from resumatch.ml.embeddings import get_embedding_service
    from resumatch.ml.nlp import get_resume_parser
    from resumatch.utils.exceptions import ResumatchError

    parser = get_resume_parser()
    scorer = get_match_scorer()

    try:
        resume_text = _read_text(resume_file)
        job_text = _read_text(job_file)

        required = skills or parser.extract_skills(job_text)
        if not required:
            _fail("No required skills given and none found in the job description")

        profile = parser.parse(resume_text, filename=resume_file.name)
        job = JobPosting(
            title=title or job_file.stem,
            company=company,
            description=job_text,
            required_skills=required,
        )

        async def embed_both():
            service = get_embedding_service()
            return await asyncio.gather(service.embed_profile(profile), service.embed_job(job))

        with console.status("Embedding resume and job description..."):
            profile, job = asyncio.run(embed_both())
        result = scorer.score(profile, job)
    except ResumatchError as e:
        _fail(e.message)

    color = _score_color(result.match_score)
    console.print(f"\n[bold]Match Score:[/bold] [{color}]{result.match_score}[/{color}]")
    console.print(f"  {scorer.match_explanation(result.match_score)}\n")

    table = Table(title=f"{profile.name} vs {job.title}")
    table.add_column("Component", style="cyan")
    table.add_column("Value")
    table.add_row("Skill Match", f"{result.skill_match_percentage}%")
    table.add_row("Semantic Score", f"{result.semantic_score}%")
    table.add_row("Matched Skills", ", ".join(result.matched_skills) or "-")
    table.add_row("Missing Skills", ", ".join(result.missing_skills) or "-")
    console.print(table)


@app.command()
def import_resumes(
    path: Path = typer.Argument(..., help="Path to resume file or directory"),
    recursive: bool = typer.Option(False, "--recursive", "-r", help="Search recursively"),
    dry_run: bool = typer.Option(
        False, "--dry-run", help="Parse and embed without writing to MongoDB"
    ),
):
    """Import resumes from files or directory."""
    from resumatch.core.importer import ResumeImporter
    from resumatch.data.database import get_database_manager
    from resumatch.data.models import Document
    from resumatch.data.repositories import InMemoryStore, MongoStore
    from resumatch.utils.constants import SUPPORTED_RESUME_FORMATS
    from resumatch.utils.exceptions import ResumatchError

    console.print(f"[yellow]Importing resumes from: {path}[/yellow]")

    if not path.exists():
        _fail(f"Path does not exist: {path}")

    # Collect resume files
    resume_files: list[Path] = []
    if path.is_file():
        if path.suffix.lower() not in SUPPORTED_RESUME_FORMATS:
            console.print(f"[dim]Supported formats: {', '.join(SUPPORTED_RESUME_FORMATS)}[/dim]")
            _fail(f"Unsupported file format: {path.suffix}")
        resume_files.append(path)
    else:
        pattern = "**/*" if recursive else "*"
        for ext in SUPPORTED_RESUME_FORMATS:
            resume_files.extend(sorted(path.glob(f"{pattern}{ext}")))

    if not resume_files:
        console.print("[yellow]No resume files found.[/yellow]")
        raise typer.Exit(0)

    console.print(f"Found [cyan]{len(resume_files)}[/cyan] resume file(s)")

    if dry_run:
        store = InMemoryStore()
    else:
        if not get_database_manager().is_reachable():
            _fail("Could not connect to MongoDB. Run 'init-db' first.")
        store = MongoStore()

    documents = [
        Document(content=f.read_bytes(), format=f.suffix, filename=f.name) for f in resume_files
    ]

    try:
        with console.status("Processing resumes..."):
            report = asyncio.run(ResumeImporter(store).import_documents(documents))
    except ResumatchError as e:
        _fail(e.message)

    console.print()
    console.print("[bold]Import Summary:[/bold]")
    console.print(f"  [green]✓ Imported:[/green] {report.success_count}")
    console.print(f"  [red]✗ Errors:[/red] {report.failure_count}")

    if report.failed:
        console.print("\n[yellow]Errors:[/yellow]")
        for item in report.failed[:10]:
            console.print(f"  [dim]{item.item_id}:[/dim] {item.reason}")
        if len(report.failed) > 10:
            console.print(f"  [dim]... and {len(report.failed) - 10} more errors[/dim]")

    placeholders = sum(1 for p in report.imported if p.embedding_is_placeholder)
    if placeholders:
        console.print(
            f"\n[yellow]{placeholders} resume(s) stored with placeholder embeddings "
            "and will not be ranked until re-embedded.[/yellow]"
        )

    console.print("\n[green]Import completed![/green]")


@app.command()
def search(
    query: str = typer.Argument(..., help="Free-text search query"),
    top_n: int = typer.Option(10, "--top-n", "-n", help="Number of candidates to return"),
):
    """Search stored candidates with a free-text query."""
    from resumatch.core.matching import CandidateSearch, search_stats
    from resumatch.data.database import get_database_manager
    from resumatch.data.repositories import MongoStore
    from resumatch.utils.exceptions import ResumatchError

    if not get_database_manager().is_reachable():
        _fail("Could not connect to MongoDB. Run 'init-db' first.")

    try:
        with console.status("Searching candidates..."):
            response = asyncio.run(CandidateSearch(MongoStore()).search(query, top_n))
    except ResumatchError as e:
        _fail(e.message)

    if not response.results:
        console.print("[yellow]No matching candidates found.[/yellow]")
    else:
        table = Table(title=f"Top {len(response.results)} Candidates")
        table.add_column("Rank", style="dim", width=4)
        table.add_column("Candidate", style="cyan")
        table.add_column("Score", justify="right")
        table.add_column("Similarity", justify="right")
        table.add_column("Matched Skills")
        table.add_column("Missing Skills")

        for i, hit in enumerate(response.results, 1):
            color = _score_color(hit.match_score)
            table.add_row(
                str(i),
                hit.name or hit.id or "-",
                f"[{color}]{hit.match_score}[/{color}]",
                f"{hit.similarity:.3f}",
                ", ".join(hit.matched_skills) or "-",
                ", ".join(hit.missing_skills) or "-",
            )
        console.print(table)

        stats = search_stats(response.results)
        console.print(
            f"\n  Average: {stats.average_match}  Top: {stats.top_match}  "
            f"Bottom: {stats.bottom_match}"
        )

    if response.skipped:
        console.print(
            f"\n[dim]{len(response.skipped)} candidate(s) skipped without a usable embedding[/dim]"
        )


@app.command()
def init_db():
    """Initialize the database with required collections and indexes."""
    from resumatch.data.database import get_database_manager

    console.print("[yellow]Initializing database...[/yellow]")

    try:
        db_manager = get_database_manager()

        # Check connection first
        console.print("  Checking database connection...")
        if not db_manager.is_reachable():
            console.print("[red]Error: Could not connect to MongoDB.[/red]")
            console.print("[dim]Make sure MongoDB is running and connection settings are correct.[/dim]")
            raise typer.Exit(1)

        console.print("  [green]✓[/green] Connected to MongoDB")

        console.print("  Creating indexes...")
        asyncio.run(db_manager.ensure_indexes())
        console.print("  [green]✓[/green] Indexes created")

        console.print("\n[green]Database initialized successfully![/green]")

    except typer.Exit:
        raise
    except Exception as e:
        console.print(f"[red]Error initializing database: {e}[/red]")
        raise typer.Exit(1)


@app.command()
def serve(
    host: Optional[str] = typer.Option(None, "--host", help="Bind address"),
    port: Optional[int] = typer.Option(None, "--port", "-p", help="Bind port"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Run the HTTP API with uvicorn."""
    import uvicorn

    from resumatch.utils.config import get_settings

    settings = get_settings()
    host = host or settings.api.host
    port = port or settings.api.port

    console.print(f"[yellow]Serving resumatch API on http://{host}:{port}[/yellow]")
    uvicorn.run(
        "resumatch.api.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
    )


if __name__ == "__main__":
    app()
