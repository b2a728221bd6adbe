"""
APKForge CLI.

Command-line interface for analyzing, building and converting mobile projects.
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.panel import Panel
from rich.progress import BarColumn, Progress, SpinnerColumn, TextColumn
from rich.table import Table

from .core.config import get_config
from .core.logging import setup_logging
from .models.analysis import Analysis
from .models.build import BuildResult

app = typer.Typer(
    name="apkforge",
    help="Convert mobile project source trees into Android-package-shaped archives",
    add_completion=False,
)

console = Console()


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"APKForge v{__version__}")
        raise typer.Exit()


@app.callback()
def cli(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """APKForge: mobile project to APK-shaped archive converter."""


def _analysis_table(analysis: Analysis) -> Table:
    config = analysis.build_config

    table = Table(title="Project Analysis")
    table.add_column("Property", style="cyan")
    table.add_column("Value")

    table.add_row("Framework", analysis.framework.value)
    table.add_row("Language", analysis.language.value)
    table.add_row("Project Type", analysis.project_type.value)
    table.add_row("App Name", config.app_name)
    table.add_row("Version", config.version)
    table.add_row("Package", config.resolved_package_name(analysis.framework))
    table.add_row("Target SDK", str(config.target_sdk))
    table.add_row("Min SDK", str(config.min_sdk))
    table.add_row("Total Files", str(analysis.project_stats.total_files))
    table.add_row("Source Files", str(analysis.project_stats.source_files))
    table.add_row("Dependencies", str(len(analysis.dependencies)))
    table.add_row("Missing Files", ", ".join(analysis.missing_files) or "None")
    return table


def _print_build_result(result: BuildResult) -> None:
    for line in result.logs:
        console.print(f"  [dim]{line}[/dim]")

    if result.success:
        console.print("\n[bold green]✓ Build completed successfully![/bold green]")
        console.print(f"[bold]Archive:[/bold] {result.apk_path}")
        console.print(f"[bold]Size:[/bold] {result.apk_size} bytes")
    else:
        console.print("\n[bold red]✗ Build failed![/bold red]")
        for error in result.errors:
            console.print(f"  [red]• {error}[/red]")


@app.command()
def analyze(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project root directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    as_json: bool = typer.Option(
        False,
        "--json",
        help="Print the analysis as JSON",
    ),
) -> None:
    """Classify a project and extract its build configuration."""
    setup_logging(get_config())

    from .services.analysis import ProjectAnalyzer

    analysis = asyncio.run(ProjectAnalyzer().analyze(project_path))

    if as_json:
        console.print_json(analysis.model_dump_json())
        return

    console.print(_analysis_table(analysis))

    if analysis.errors:
        console.print("\n[bold yellow]Diagnostics:[/bold yellow]")
        for error in analysis.errors:
            console.print(f"  [yellow]• {error}[/yellow]")


@app.command()
def build(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project root directory",
        exists=True,
        file_okay=False,
        dir_okay=True,
        resolve_path=True,
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        help="Enable verbose logging",
    ),
) -> None:
    """Analyze a project, fill in missing scaffolding and assemble the archive."""
    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    setup_logging(config)

    console.print(f"[bold]Building:[/bold] {project_path}\n")

    async def run_async() -> BuildResult:
        from .orchestration import ApkBuilder
        from .services.analysis import ProjectAnalyzer

        analysis = await ProjectAnalyzer(config).analyze(project_path)
        console.print(f"  [dim]→ Detected {analysis.framework.value}[/dim]")

        with Progress(
            SpinnerColumn(),
            TextColumn("[progress.description]{task.description}"),
            BarColumn(),
            console=console,
        ) as progress:
            task = progress.add_task("Building...", total=100)
            return await ApkBuilder(config).build(
                project_path,
                analysis,
                lambda percent, message: progress.update(task, completed=percent, description=message),
            )

    result = asyncio.run(run_async())
    _print_build_result(result)
    if not result.success:
        raise typer.Exit(1)


@app.command()
def convert(
    archive_path: Path = typer.Argument(
        ...,
        help="Path to the project .zip archive",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
) -> None:
    """Run the full upload, analyze and build flow on a project archive."""
    setup_logging(get_config())

    console.print(Panel.fit(
        "[bold blue]APKForge[/bold blue]\n"
        "Archive → Analysis → APK-shaped package",
        border_style="blue",
    ))

    from .orchestration.flow import convert_project_flow

    with console.status("Converting project..."):
        result = asyncio.run(convert_project_flow(archive_path))

    table = Table(title="Conversion Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Duration")
    for stage in result.stages:
        colour = "green" if stage.status.value == "completed" else "red"
        table.add_row(stage.stage_name, f"[{colour}]{stage.status.value}[/{colour}]", f"{stage.duration_seconds:.2f}s")
    console.print(table)

    console.print(f"[bold]Project ID:[/bold] {result.project_id}")
    if result.build_result is not None:
        _print_build_result(result.build_result)
    elif result.error:
        console.print(f"\n[bold red]✗ Conversion failed at {result.failed_stage}:[/bold red] {result.error}")

    if not result.success:
        raise typer.Exit(1)


@app.command()
def config() -> None:
    """Show the current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Log Format", cfg.log_format)
    table.add_row("Max Scan Depth", str(cfg.scanner.max_depth))
    table.add_row("Ignored Directories", ", ".join(cfg.scanner.ignored_directories))
    table.add_row("Output Path", "/".join(cfg.output_path_parts))
    table.add_row("Flutter Asset Limit", str(cfg.packaging.max_flutter_assets))
    table.add_row("Asset Byte Cap", str(cfg.packaging.max_asset_bytes))
    table.add_row("Storage Path", str(cfg.storage.base_path))

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  APKFORGE_LOG_LEVEL, APKFORGE_LOG_FORMAT, APKFORGE_MAX_DEPTH, APKFORGE_IGNORED_DIRS")
    console.print("  APKFORGE_MAX_FLUTTER_ASSETS, APKFORGE_MAX_ASSET_BYTES, APKFORGE_OUTPUT_PATH")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
