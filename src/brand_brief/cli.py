"""
Brand Brief Command Line Interface

Main entry point for the brand-brief CLI.
"""

import asyncio
import json
import logging
import sys
from pathlib import Path
from typing import Any, Dict, Optional

import click
from rich.console import Console
from rich.table import Table

from brand_brief.wizard.exceptions import (
    BrandBriefError,
    StepSequenceError,
    StepValidationError,
    get_error_code,
)

console = Console()


def _fail(error: BrandBriefError):
    """Print a Brand Brief error with its remediation and exit."""
    console.print(f"[red]Error:[/red] {error.message}")
    if error.details:
        console.print(f"[dim]{error.details}[/dim]")
    if error.remediation:
        console.print(f"[yellow]To fix:[/yellow] {error.remediation}")
    sys.exit(get_error_code(error))


def _load_config(ctx: click.Context):
    from brand_brief.config import load_config

    config_path = ctx.obj.get("config_path") if ctx.obj else None
    return load_config(Path(config_path) if config_path else None)


def read_accumulator(path: Path) -> Dict[str, Dict[str, Any]]:
    """Read a JSON file of step answers and validate every step.

    Raises:
        StepValidationError: if the file is not an object or a step is invalid
        StepSequenceError: if a step is missing
    """
    from brand_brief.wizard.schemas import validate_step
    from brand_brief.wizard.steps import STEP_KEYS

    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as e:
        raise StepValidationError(f"{path} is not valid JSON", details=str(e)) from e
    if not isinstance(data, dict):
        raise StepValidationError(f"{path} must contain a JSON object keyed by step")

    missing = [key for key in STEP_KEYS if key not in data]
    if missing:
        raise StepSequenceError(
            f"Missing steps in {path}: {', '.join(missing)}",
            step=missing[0],
            remediation="Run 'brand-brief steps' to see every step key"
        )

    accumulator = {}
    for key in STEP_KEYS:
        result = validate_step(key, data[key])
        if not result.ok:
            raise StepValidationError(f"Step '{key}' is invalid", step=key, errors=result.errors)
        accumulator[key] = result.value.model_dump()
    return accumulator


async def replay_accumulator(orchestrator, accumulator: Dict[str, Dict[str, Any]]):
    """Feed every step through the orchestrator; the last one submits."""
    outcome = None
    for step in orchestrator.steps:
        outcome = await orchestrator.continue_step(step.key, accumulator[step.key])
    return outcome


def _show_result(result) -> None:
    if result is None or getattr(result, "dry_run", False):
        console.print("[dim]Dry run: nothing was sent to Google.[/dim]")
        return
    console.print(f"[bold]Documento:[/bold] {result.document_url}")
    console.print(f"[bold]Hoja de cálculo:[/bold] {result.sheet_url}")


def _build_submitter(config, dry_run: bool):
    from brand_brief.services import DryRunSubmitter, build_submission_service

    if dry_run:
        return DryRunSubmitter()
    return build_submission_service(config)


@click.group()
@click.version_option(package_name="brand-brief")
@click.option("--config", "config_path", type=click.Path(exists=True, dir_okay=False), help="Path to brand-brief.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Show detailed output")
@click.pass_context
def main(ctx: click.Context, config_path: Optional[str], verbose: bool):
    """Brand Brief: onboarding wizard for Digit Ads clients"""
    from brand_brief.config import DEFAULT_HOME
    from brand_brief.wizard.logging_config import get_log_path, setup_logging

    if verbose:
        setup_logging(level=logging.DEBUG, log_file=get_log_path(DEFAULT_HOME))
    else:
        setup_logging()
    ctx.ensure_object(dict)
    ctx.obj["config_path"] = config_path


@main.command()
@click.option("--dry-run", is_flag=True, help="Collect and preview the brief without sending it")
@click.option("--pdf", "pdf_path", type=click.Path(dir_okay=False), help="Also render the brief as a PDF")
@click.option("--save", "save_path", type=click.Path(dir_okay=False), help="Save the answers as JSON")
@click.pass_context
def init(ctx: click.Context, dry_run: bool, pdf_path: Optional[str], save_path: Optional[str]):
    """Run the guided Brand Brief wizard.

    Examples:
        brand-brief init                  # Fill and submit a brief
        brand-brief init --dry-run        # Fill a brief without sending it
        brand-brief init --pdf brief.pdf  # Also write a PDF copy
    """
    from brand_brief.wizard import WizardOrchestrator, WizardUI

    try:
        config = _load_config(ctx)
        submitter = _build_submitter(config, dry_run)
    except BrandBriefError as e:
        _fail(e)

    wizard = WizardOrchestrator(submitter, timeout=config.submit_timeout)
    ui = WizardUI(console, total_steps=wizard.total_steps)

    try:
        outcome = asyncio.run(wizard.run(ui))
    except KeyboardInterrupt:
        console.print("\n[yellow]Wizard cancelled. Nothing was sent.[/yellow]")
        sys.exit(130)
    except BrandBriefError as e:
        _fail(e)

    if save_path:
        Path(save_path).write_text(
            json.dumps(wizard.state.accumulator, indent=2, ensure_ascii=False), encoding="utf-8"
        )
        ui.print_success(f"Respuestas guardadas en {save_path}")

    if pdf_path:
        from brand_brief.services.pdf import render_pdf

        render_pdf(wizard.build_payload(), pdf_path)
        ui.print_success(f"PDF generado en {pdf_path}")

    if not outcome.ok:
        sys.exit(get_error_code(outcome.exception) if outcome.exception else 1)

    ui.show_completion_panel(
        "¡Brief enviado!",
        "Gracias por completar el Brand Brief.",
        ["Revisaremos sus respuestas", "Los contactaremos en las próximas 48 horas"]
    )
    _show_result(outcome.result)


@main.command()
@click.pass_context
def auth(ctx: click.Context):
    """Authorize access to Google Docs, Drive and Sheets."""
    from brand_brief.google_auth import run_oauth_flow

    try:
        config = _load_config(ctx)
        run_oauth_flow(config.credentials_path, config.token_path)
    except BrandBriefError as e:
        _fail(e)

    console.print(f"[green]✓[/green] Token saved to {config.token_path}")


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--json", "json_output", is_flag=True, help="Output as JSON")
def preview(input_path: str, json_output: bool):
    """Validate saved answers and show the payload that would be sent."""
    from brand_brief.wizard.normalizer import normalize
    from brand_brief.wizard.ui import WizardUI

    try:
        payload = normalize(read_accumulator(Path(input_path)))
    except BrandBriefError as e:
        _fail(e)

    if json_output:
        print(json.dumps(payload.as_dict(), indent=2, ensure_ascii=False))
        return

    WizardUI(console).show_summary_table("Brand Brief", payload.labelled())


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Validate without sending")
@click.pass_context
def submit(ctx: click.Context, input_path: str, dry_run: bool):
    """Submit saved answers to Google Docs and Sheets."""
    from brand_brief.wizard import WizardOrchestrator

    try:
        accumulator = read_accumulator(Path(input_path))
        config = _load_config(ctx)
        submitter = _build_submitter(config, dry_run)
    except BrandBriefError as e:
        _fail(e)

    wizard = WizardOrchestrator(submitter, timeout=config.submit_timeout)
    outcome = asyncio.run(replay_accumulator(wizard, accumulator))

    if not outcome.ok:
        console.print(f"[red]Error:[/red] {outcome.error}")
        if outcome.exception is not None:
            console.print(f"[dim]{outcome.exception.message}[/dim]")
        sys.exit(get_error_code(outcome.exception) if outcome.exception else 1)

    console.print("[green]✓[/green] Brief submitted")
    _show_result(outcome.result)


@main.command()
@click.argument("input_path", type=click.Path(exists=True, dir_okay=False))
@click.argument("output_path", type=click.Path(dir_okay=False))
def pdf(input_path: str, output_path: str):
    """Render saved answers as a PDF brief."""
    from brand_brief.services.pdf import render_pdf
    from brand_brief.wizard.normalizer import normalize

    try:
        payload = normalize(read_accumulator(Path(input_path)))
    except BrandBriefError as e:
        _fail(e)

    render_pdf(payload, output_path)
    console.print(f"[green]✓[/green] PDF written to {output_path}")


@main.command()
def steps():
    """List the wizard steps in order."""
    from brand_brief.wizard.steps import WIZARD_STEPS

    table = Table(title="Brand Brief Steps", border_style="blue")
    table.add_column("#", style="cyan")
    table.add_column("Key")
    table.add_column("Title", style="bold")
    table.add_column("Description", style="dim")
    for step in WIZARD_STEPS:
        table.add_row(str(step.ordinal), step.key, step.title, step.description)
    console.print(table)


if __name__ == "__main__":
    main()
