"""CLI for the clinscore assessment scoring engine."""

import json
import logging
import shutil
from collections.abc import Iterator
from datetime import date
from pathlib import Path
from typing import Annotated, Any

import typer
from pydantic import ValidationError
from rich.console import Console
from rich.logging import RichHandler
from rich.progress import Progress, SpinnerColumn, TaskID, TextColumn
from rich.table import Table

from clinscore import __version__
from clinscore.config import (
    GlobalConfig,
    get_clinscore_home,
    get_log_level,
    get_registry_root,
    get_template_registry_path,
    get_template_schema_path,
    save_global_config,
)
from clinscore.io import iter_records, load_document, write_jsonl
from clinscore.reporting.formatting import format_score, get_severity_style
from clinscore.result import ScoreResult
from clinscore.scoring.engine import ScoringEngine, ScoringError
from clinscore.templates.models import AssessmentTemplate
from clinscore.templates.registry import (
    TemplateNotFoundError,
    TemplateRegistry,
    TemplateValidationError,
    validate_template,
)

app = typer.Typer(
    name="clinscore",
    help="Scoring and interpretation engine for clinical assessments.",
    no_args_is_help=True,
)
console = Console()

ALERT_STYLES = {"info": "cyan", "warning": "yellow", "critical": "bold red"}


def version_callback(value: bool) -> None:
    if value:
        console.print(f"clinscore version {__version__}")
        raise typer.Exit()


def configure_logging(level: str) -> None:
    """Send library log records through rich on the CLI console."""
    logging.basicConfig(
        level=level.upper(),
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: Annotated[
        bool | None,
        typer.Option("--version", "-v", callback=version_callback, is_eager=True),
    ] = None,
    log_level: Annotated[
        str | None,
        typer.Option(
            "--log-level",
            envvar="CLINSCORE_LOG_LEVEL",
            help="Logging level (DEBUG, INFO, WARNING, ERROR)",
        ),
    ] = None,
) -> None:
    """clinscore: Scoring and interpretation engine for clinical assessments."""
    configure_logging(log_level or get_log_level())


def _load_template(path: Path) -> AssessmentTemplate:
    """Load a template file, exiting with a message on failure."""
    if not path.exists():
        console.print(f"[red]Error:[/red] Template file not found: {path}")
        raise typer.Exit(1)
    try:
        return AssessmentTemplate.model_validate(load_document(path))
    except (ValueError, ValidationError) as e:
        console.print(f"[red]Error:[/red] Invalid template {path}: {e}")
        raise typer.Exit(1)


def _print_result(template: AssessmentTemplate, result: ScoreResult) -> None:
    """Render a score result as rich tables."""
    interpretation = result.interpretation
    style = get_severity_style(interpretation.severity)

    summary = Table(title=f"{template.name} ({template.abbreviation})", show_header=False)
    summary.add_column("Field", style="bold")
    summary.add_column("Value")
    summary.add_row("Score", format_score(result.raw_score, template.scoring_config.max_score))
    summary.add_row("Interpretation", f"[{style}]{interpretation.category}[/{style}]")
    summary.add_row("Severity", interpretation.severity)
    summary.add_row("Completion", f"{result.completion_percentage}%")
    console.print(summary)

    if result.subscale_scores:
        subscales = Table(title="Subscales")
        subscales.add_column("Subscale")
        subscales.add_column("Score", justify="right")
        max_scores = {s.name: s.max_score for s in template.scoring_config.subscales}
        for name, value in result.subscale_scores.items():
            max_score = max_scores.get(name)
            subscales.add_row(name, format_score(value, max_score) if max_score else str(value))
        console.print(subscales)

    for alert in result.alerts:
        alert_style = ALERT_STYLES.get(alert.type, "white")
        action = " (action required)" if alert.action_required else ""
        console.print(f"[{alert_style}]{alert.type.upper()}:[/{alert_style}] {alert.message}{action}")

    validation = result.validation
    if validation.missing_questions:
        console.print(f"[yellow]Missing:[/yellow] {', '.join(validation.missing_questions)}")
    if validation.invalid_responses:
        console.print(f"[yellow]Invalid:[/yellow] {', '.join(validation.invalid_responses)}")

    console.print()
    console.print(result.narrative)


@app.command()
def score(
    template_path: Annotated[
        Path,
        typer.Argument(help="Path to the template (JSON or YAML)"),
    ],
    responses_path: Annotated[
        Path,
        typer.Argument(help="Path to the response map (JSON or YAML)"),
    ],
    as_json: Annotated[
        bool,
        typer.Option("--json", help="Print the result as JSON"),
    ] = False,
    report_date: Annotated[
        str | None,
        typer.Option("--date", help="ISO date printed on the narrative (default: today)"),
    ] = None,
) -> None:
    """Score one response map against a template."""
    template = _load_template(template_path)

    if not responses_path.exists():
        console.print(f"[red]Error:[/red] Responses file not found: {responses_path}")
        raise typer.Exit(1)
    try:
        responses = load_document(responses_path)
    except ValueError as e:
        console.print(f"[red]Error:[/red] Invalid responses file {responses_path}: {e}")
        raise typer.Exit(1)

    try:
        printed_date = date.fromisoformat(report_date) if report_date else None
    except ValueError:
        console.print(f"[red]Error:[/red] Invalid --date: {report_date}")
        raise typer.Exit(1)

    try:
        result = ScoringEngine(template, responses).evaluate(report_date=printed_date)
    except ScoringError as e:
        console.print(f"[red]Error:[/red] {e}")
        raise typer.Exit(1)

    if as_json:
        console.print_json(result.model_dump_json())
    else:
        _print_result(template, result)


@app.command()
def run(
    input_path: Annotated[
        Path,
        typer.Option("--in", "-i", help="Input JSONL file of response records"),
    ],
    output_path: Annotated[
        Path,
        typer.Option("--out", "-o", help="Output JSONL file path"),
    ],
    template_id: Annotated[
        str,
        typer.Option("--template", "-t", help="Template ID (required)"),
    ],
    template_version: Annotated[
        str | None,
        typer.Option("--template-version", help="Template version (default: latest)"),
    ] = None,
    template_registry: Annotated[
        Path | None,
        typer.Option(
            "--template-registry",
            envvar="CLINSCORE_TEMPLATE_REGISTRY",
            help="Path to template registry",
        ),
    ] = None,
) -> None:
    """Score a batch of response records and write one result per line.

    Each input line is a JSON object with a ``responses`` map and an
    optional ``id`` that is copied to the output.
    """
    if template_registry is None:
        template_registry = get_template_registry_path()

    if not input_path.exists():
        console.print(f"[red]Error:[/red] Input file not found: {input_path}")
        raise typer.Exit(1)

    if not template_registry.exists():
        console.print(f"[red]Error:[/red] Template registry not found: {template_registry}")
        raise typer.Exit(1)

    console.print(f"[bold]clinscore[/bold] v{__version__}")
    console.print(f"  Input: {input_path}")
    console.print(f"  Output: {output_path}")
    console.print(f"  Template: {template_id}@{template_version or 'latest'}")
    console.print(f"  Template Registry: {template_registry}")

    registry = TemplateRegistry(template_registry, schema_path=get_template_schema_path())
    try:
        if template_version:
            template = registry.get(template_id, template_version)
        else:
            template = registry.get_latest(template_id)
    except (TemplateNotFoundError, TemplateValidationError) as e:
        console.print(f"\n[red]Error loading template:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"\n[green]Loaded template:[/green] {template.name} v{template.version}")

    counts = {"scored": 0, "skipped": 0, "incomplete": 0, "alerted": 0}

    def score_records(progress: Progress, task: TaskID) -> Iterator[dict[str, Any]]:
        for line_num, record in iter_records(input_path):
            responses = record.get("responses")
            if not isinstance(responses, dict):
                console.print(f"\n[yellow]Warning:[/yellow] Line {line_num} has no responses map")
                counts["skipped"] += 1
                continue

            result = ScoringEngine(template, responses).evaluate()
            counts["scored"] += 1
            if not result.validation.is_complete:
                counts["incomplete"] += 1
            if result.alerts:
                counts["alerted"] += 1
            progress.update(task, description=f"Scored {counts['scored']} response sets...")

            yield {"id": record.get("id"), **result.model_dump(mode="json")}

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Scoring responses...", total=None)
        try:
            write_jsonl(output_path, score_records(progress, task))
        except ScoringError as e:
            console.print(f"\n[red]Error:[/red] {e}")
            raise typer.Exit(1)
        except ValueError as e:
            console.print(f"\n[red]Error:[/red] {e}")
            raise typer.Exit(1)

    console.print("\n[bold]Summary:[/bold]")
    console.print(f"  [green]Scored:[/green] {counts['scored']}")
    if counts["incomplete"]:
        console.print(f"  [yellow]Incomplete:[/yellow] {counts['incomplete']}")
    if counts["alerted"]:
        console.print(f"  [red]With alerts:[/red] {counts['alerted']}")
    if counts["skipped"]:
        console.print(f"  [yellow]Skipped:[/yellow] {counts['skipped']}")


@app.command()
def validate(
    template_path: Annotated[
        Path,
        typer.Argument(help="Path to the template file"),
    ],
    schema_path: Annotated[
        Path | None,
        typer.Option("--schema", "-s", help="Path to the schema file"),
    ] = None,
) -> None:
    """Validate a template file against the template schema."""
    import jsonschema

    if not template_path.exists():
        console.print(f"[red]Error:[/red] Template file not found: {template_path}")
        raise typer.Exit(1)

    if schema_path is None:
        schema_path = get_template_schema_path()

    if not schema_path.exists():
        console.print(f"[red]Error:[/red] Schema file not found: {schema_path}")
        raise typer.Exit(1)

    try:
        data = load_document(template_path)
    except ValueError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    check = validate_template(data)
    if not check.is_valid:
        for error in check.errors:
            console.print(f"[red]Invalid:[/red] {error}")
        raise typer.Exit(1)

    with open(schema_path) as f:
        schema = json.load(f)

    try:
        jsonschema.validate(data, schema)
    except jsonschema.ValidationError as e:
        console.print(f"[red]Invalid:[/red] {e.message}")
        raise typer.Exit(1)

    try:
        AssessmentTemplate.model_validate(data)
    except ValidationError as e:
        console.print(f"[red]Invalid:[/red] {e}")
        raise typer.Exit(1)

    console.print(f"[green]Valid:[/green] {template_path}")


@app.command()
def init(
    source: Annotated[
        Path | None,
        typer.Option(
            "--from",
            "-f",
            help="Source directory containing template-registry",
        ),
    ] = None,
    force: bool = typer.Option(
        False,
        "--force",
        help="Overwrite an existing registry",
    ),
) -> None:
    """Initialize clinscore configuration and sync the template registry.

    Creates:
      ~/.config/clinscore/config.yaml
      ~/.config/clinscore/registry/template-registry/

    If --from is provided, copies the registry from that directory.
    Otherwise, looks for template-registry in the current directory.
    """
    home = get_clinscore_home()
    registry_root = get_registry_root()
    template_dest = registry_root / "template-registry"

    if source is None:
        source = Path.cwd()

    source_templates = source / "template-registry"
    if not source_templates.exists():
        console.print(f"[red]Error:[/red] template-registry not found at {source_templates}")
        console.print("Use --from to specify source directory")
        raise typer.Exit(1)

    if template_dest.exists() and not force:
        console.print(f"[yellow]Warning:[/yellow] Registry already exists at {template_dest}")
        console.print("Use --force to overwrite")
        raise typer.Exit(1)

    console.print(f"[bold]Initializing clinscore at {home}[/bold]")
    registry_root.mkdir(parents=True, exist_ok=True)

    console.print(f"  Syncing template-registry from {source_templates}...")
    if template_dest.exists():
        shutil.rmtree(template_dest)
    shutil.copytree(source_templates, template_dest)
    template_count = len(list(template_dest.glob("templates/*")))
    console.print(f"    [green]✓[/green] {template_count} templates synced")

    config_path = save_global_config(
        GlobalConfig(default_template_registry_path=str(template_dest))
    )
    console.print(f"  [green]✓[/green] Created config at {config_path}")

    console.print("\n[green]✓ Initialized clinscore[/green]")
    console.print(f"  Home: {home}")
    console.print(f"  Registry: {template_dest}")


if __name__ == "__main__":
    app()
