"""
credential_plugin CLI.

Command-line interface for running the Google Sign-In prebuild outside the
build orchestrator.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.panel import Panel
from rich.syntax import Syntax
from rich.table import Table

from .core.config import get_config
from .core.exceptions import PipelineError, PluginError
from .core.logging import setup_logging
from .core.types import StepStatus

app = typer.Typer(
    name="credential-plugin",
    help="Inject Google Sign-In (Credential Manager) into an Android project",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    StepStatus.APPLIED: "[green]applied[/green]",
    StepStatus.ALREADY_APPLIED: "[dim]already applied[/dim]",
    StepStatus.SKIPPED: "[yellow]skipped[/yellow]",
    StepStatus.FAILED: "[red]failed[/red]",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"credential-plugin v{__version__}")
        raise typer.Exit()


@app.callback()
def main(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """credential-plugin: Google Sign-In prebuild for Android."""
    pass


@app.command()
def prebuild(
    project_dir: Path = typer.Argument(
        ...,
        help="Project directory containing app.json and the native android/ tree",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    package_name: Optional[str] = typer.Option(
        None,
        "--package",
        "-p",
        help="Android package (overrides app.json)",
    ),
    platform_dir: Optional[str] = typer.Option(
        None,
        "--platform-dir",
        help="Native project directory inside PROJECT_DIR (overrides GSI_PLATFORM_DIR)",
    ),
    report: Optional[Path] = typer.Option(
        None,
        "--report",
        help="Write the run result as JSON to this file",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Patch build.gradle, generate the Kotlin module and register it."""
    from .models.project import PluginProps
    from .orchestration import load_project_config, with_google_credential_manager

    config = get_config()
    overrides: dict[str, object] = {}
    if verbose:
        overrides["log_level"] = "DEBUG"
    if platform_dir:
        overrides["platform"] = config.platform.model_copy(update={"platform_dir": platform_dir})
    # The cached settings are shared, so work on a copy
    config = config.model_copy(update=overrides)
    setup_logging(config)

    try:
        project_config, props = load_project_config(project_dir, config)
    except PluginError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if package_name:
        props = PluginProps(android_package=package_name)

    console.print(Panel.fit(
        "[bold blue]credential-plugin[/bold blue]\n"
        "build.gradle → Kotlin sources → MainApplication.kt",
        border_style="blue",
    ))
    console.print(f"\n[bold]Native root:[/bold] {project_config.mod_request.platform_project_root}")

    error: PluginError | None = None
    try:
        asyncio.run(with_google_credential_manager(project_config, props, settings=config))
    except PipelineError as e:
        error = e
    except PluginError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    if not project_config.plugin_history:
        console.print(f"[yellow]Nothing to do for platform '{project_config.mod_request.platform}'[/yellow]")
        return

    result = project_config.plugin_history[-1]

    table = Table(title=f"Prebuild ({result.android_package})")
    table.add_column("Step", style="cyan")
    table.add_column("Status")
    table.add_column("Target")
    table.add_column("Detail", style="dim")
    for step in result.steps:
        table.add_row(step.step, STATUS_STYLES[step.status], step.target, step.message)
    console.print(table)

    if report:
        report.parent.mkdir(parents=True, exist_ok=True)
        report.write_text(result.model_dump_json(indent=2), encoding="utf-8")
        console.print(f"[dim]Report written to {report}[/dim]")

    if error is not None:
        console.print(f"\n[bold red]✗ Prebuild failed![/bold red]")
        console.print(f"Error: {result.error}")
        console.print(f"Failed at: {result.failed_step}")
        raise typer.Exit(1)

    for warning in result.warnings:
        console.print(f"[yellow]Warning: {warning}[/yellow]")
    state = "changes applied" if result.changed else "already up to date"
    console.print(f"\n[bold green]✓ Prebuild completed ({state})[/bold green]")


@app.command()
def render(
    package_name: str = typer.Argument(..., help="Android package, e.g. com.example.myapp"),
    output_dir: Optional[Path] = typer.Option(
        None,
        "--output",
        "-o",
        help="Write the sources below this directory instead of printing them",
    ),
) -> None:
    """Render the generated Kotlin sources without touching a project."""
    from .services.paths import to_path, validate_package_identifier
    from .services.templates import generate_sources

    try:
        package_name = validate_package_identifier(package_name)
    except PluginError as e:
        console.print(f"[red]Error: {e}[/red]")
        raise typer.Exit(1)

    for generated in generate_sources(package_name):
        if output_dir is None:
            console.print(Panel(
                Syntax(generated.content, "kotlin"),
                title=generated.full_name,
                border_style="blue",
            ))
            continue

        target = output_dir / to_path(package_name) / generated.full_name
        target.parent.mkdir(parents=True, exist_ok=True)
        target.write_text(generated.content, encoding="utf-8")
        console.print(f"  • {target}")


@app.command()
def config() -> None:
    """Show current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Default Android Package", cfg.default_android_package)
    table.add_row("App Config File", cfg.defaults.app_config_file)
    table.add_row("Target Platform", cfg.platform.target)
    table.add_row("Platform Directory", cfg.platform.platform_dir)

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  GSI_LOG_LEVEL, GSI_DEFAULT_ANDROID_PACKAGE, GSI_APP_CONFIG_FILE")
    console.print("  GSI_PLATFORM, GSI_PLATFORM_DIR")


def run() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    run()
