"""
Bundlesmith CLI.

Command-line interface for exporting projects and generating behavior code.
"""

from __future__ import annotations

from pathlib import Path
from typing import Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.progress import Progress, SpinnerColumn, TextColumn
from rich.syntax import Syntax
from rich.table import Table

from .core.config import get_config
from .core.exceptions import BundlesmithError
from .core.logging import setup_logging
from .core.types import StageStatus
from .models.export import ExportTarget, RendererBackend
from .models.project import Project

app = typer.Typer(
    name="bundlesmith",
    help="Game behavior code generation and export bundling",
    add_completion=False,
)

console = Console()

STATUS_STYLES = {
    StageStatus.COMPLETED: "[green]completed[/green]",
    StageStatus.FAILED: "[red]failed[/red]",
    StageStatus.RUNNING: "[yellow]running[/yellow]",
    StageStatus.PENDING: "[dim]pending[/dim]",
}


def version_callback(value: bool) -> None:
    """Show version and exit."""
    if value:
        from . import __version__
        console.print(f"Bundlesmith v{__version__}")
        raise typer.Exit()


@app.callback()
def callback(
    version: bool = typer.Option(
        False,
        "--version",
        "-v",
        callback=version_callback,
        is_eager=True,
        help="Show version and exit",
    ),
) -> None:
    """Bundlesmith: behavior code synthesis and export assembly."""


def _load_method_names(method_names: Optional[Path], project: Project) -> dict[str, dict[str, str]]:
    from .orchestration import identity_method_mangled_names, load_method_mangled_names

    if method_names is not None:
        return load_method_mangled_names(method_names)

    console.print(
        "[yellow]! No --method-names file given, methods keep their declared names[/yellow]"
    )
    return identity_method_mangled_names(project)


@app.command()
def export(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project JSON file",
        exists=True,
        file_okay=True,
        dir_okay=False,
        resolve_path=True,
    ),
    target: Optional[ExportTarget] = typer.Option(
        None,
        "--target",
        "-t",
        help="Export target (defaults to BUNDLESMITH_DEFAULT_TARGET)",
    ),
    output_dir: Path = typer.Option(
        Path("./export"),
        "--output",
        "-o",
        help="Output directory of the bundle",
    ),
    layout: str = typer.Option("", "--layout", "-l", help="Layout to start with (preview)"),
    external_layout: str = typer.Option(
        "", "--external-layout", help="External layout to inject (preview)"
    ),
    method_names: Optional[Path] = typer.Option(
        None,
        "--method-names",
        "-m",
        help="JSON file mapping behavior methods to their implementation names",
        exists=True,
        dir_okay=False,
    ),
    runtime_root: Optional[Path] = typer.Option(
        None,
        "--runtime-root",
        "-r",
        help="Runtime directory (defaults to BUNDLESMITH_RUNTIME_ROOT)",
        exists=True,
        file_okay=False,
    ),
    debug_mode: bool = typer.Option(False, "--debug", help="Show debug information (cocos2d)"),
    verbose: bool = typer.Option(False, "--verbose", help="Enable verbose logging"),
) -> None:
    """Export a project to a deployable bundle."""
    config = get_config()
    if verbose:
        config = config.model_copy(update={"log_level": "DEBUG"})
    setup_logging(config)

    from .orchestration import ExportPipeline, load_project

    try:
        project = load_project(project_path)
        names = _load_method_names(method_names, project)
    except BundlesmithError as e:
        console.print(f"[bold red]✗ {escape(e.message)}[/bold red]")
        raise typer.Exit(1)

    target = target or ExportTarget(config.export.default_target)
    console.print(Panel.fit(
        f"[bold blue]Bundlesmith[/bold blue]\n{project.name} → {target.value}",
        border_style="blue",
    ))

    with Progress(
        SpinnerColumn(),
        TextColumn("[progress.description]{task.description}"),
        console=console,
    ) as progress:
        task = progress.add_task("Exporting...", total=None)
        result = ExportPipeline(config).export(
            project,
            target,
            output_dir,
            layout_name=layout,
            external_layout_name=external_layout,
            method_mangled_names=names,
            runtime_root=runtime_root,
            debug_mode=debug_mode,
        )
        progress.update(task, completed=True)

    table = Table(title="Export Stages")
    table.add_column("Stage", style="cyan")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    for stage in result.stages:
        table.add_row(stage.stage_name, STATUS_STYLES[stage.status], f"{stage.duration_seconds:.3f}s")
    console.print(table)

    for warning in result.warnings:
        console.print(f"[yellow]! {escape(warning)}[/yellow]")
    for diagnostic in result.diagnostics:
        console.print(f"[yellow]! {diagnostic.behavior}: {escape(diagnostic.message)}[/yellow]")

    if not result.success:
        console.print("\n[bold red]✗ Export failed![/bold red]")
        console.print(f"Error: {escape(result.error or '')}")
        if result.failed_stage:
            console.print(f"Failed at: {result.failed_stage}")
        raise typer.Exit(1)

    console.print(
        f"\n[bold green]✓ Exported {len(result.include_files)} files "
        f"in {result.duration_seconds:.1f}s[/bold green]"
    )
    console.print(f"[bold]Bundle:[/bold] {result.export_path}")


@app.command()
def behavior(
    project_path: Path = typer.Argument(
        ...,
        help="Path to the project JSON file",
        exists=True,
        dir_okay=False,
        resolve_path=True,
    ),
    extension_name: str = typer.Argument(..., help="Extension declaring the behavior"),
    behavior_name: str = typer.Argument(..., help="Behavior to generate"),
    namespace: Optional[str] = typer.Option(
        None, "--namespace", "-n", help="JavaScript namespace receiving the behavior"
    ),
    method_names: Optional[Path] = typer.Option(
        None,
        "--method-names",
        "-m",
        help="JSON file mapping behavior methods to their implementation names",
        exists=True,
        dir_okay=False,
    ),
) -> None:
    """Print the generated code of an events-based behavior."""
    config = get_config()
    setup_logging(config)

    from .orchestration import ExportPipeline, load_project

    try:
        project = load_project(project_path)
        generated = ExportPipeline(config).generate_behavior(
            project,
            extension_name,
            behavior_name,
            code_namespace=namespace,
            method_mangled_names=_load_method_names(method_names, project),
        )
    except BundlesmithError as e:
        console.print(f"[bold red]✗ {escape(e.message)}[/bold red]")
        raise typer.Exit(1)

    console.print(Syntax(generated.code, "javascript"))

    if generated.include_files:
        console.print("\n[bold]Include files:[/bold]")
        for include in generated.include_files:
            console.print(f"  • {include}")

    if not generated.clean:
        table = Table(title="Diagnostics")
        table.add_column("Kind", style="yellow")
        table.add_column("Subject", style="cyan")
        table.add_column("Message")
        for diagnostic in generated.diagnostics:
            table.add_row(diagnostic.kind.value, diagnostic.subject, diagnostic.message)
        console.print(table)


@app.command()
def includes(
    backend: RendererBackend = typer.Option(
        RendererBackend.PIXI, "--backend", "-b", help="Rendering backend"
    ),
    debugger: bool = typer.Option(False, "--debugger", help="Add the debugger client files"),
) -> None:
    """Show the baseline runtime includes, in load order."""
    from .services.includes import IncludeResolver

    resolved = IncludeResolver().add_libs_include(backend, websocket_debugger_client=debugger)

    table = Table(title=f"Runtime Includes ({backend.value})")
    table.add_column("#", justify="right", style="dim")
    table.add_column("Include", style="cyan")
    for index, include in enumerate(resolved, start=1):
        table.add_row(str(index), include)
    console.print(table)


@app.command()
def config() -> None:
    """Show the current configuration."""
    cfg = get_config()

    table = Table(title="Current Configuration")
    table.add_column("Setting", style="cyan")
    table.add_column("Value")

    table.add_row("Log Level", cfg.log_level)
    table.add_row("Runtime Root", str(cfg.runtime.runtime_root))
    table.add_row("Code Output Dir", str(cfg.runtime.code_output_dir))
    table.add_row("Default Target", cfg.export.default_target)
    table.add_row("Debugger Client", str(cfg.export.debugger_client))
    table.add_row("Clear Output Dir", str(cfg.export.clear_output_dir))
    table.add_row("Namespace Prefix", cfg.export.code_namespace_prefix)

    console.print(table)

    console.print("\n[dim]Configure via environment variables:[/dim]")
    console.print("  BUNDLESMITH_LOG_LEVEL, BUNDLESMITH_RUNTIME_ROOT, BUNDLESMITH_CODE_OUTPUT_DIR")
    console.print("  BUNDLESMITH_DEFAULT_TARGET, BUNDLESMITH_DEBUGGER_CLIENT")


def main() -> None:
    """Entry point for the CLI."""
    app()


if __name__ == "__main__":
    main()
