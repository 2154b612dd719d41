"""CLI interface for bytecap."""

import logging
import time
from typing import Optional

import typer
from rich.logging import RichHandler

from bytecap import __version__
from bytecap.config import (
    Settings,
    SettingsError,
    load_settings,
    save_settings,
    settings_file,
    update_settings,
)
from bytecap.display import (
    console,
    err_console,
    show_alert,
    show_evaluation,
    show_inventory,
    show_no_project,
    show_settings,
    show_summary,
)
from bytecap.escalator import AlertEscalator
from bytecap.monitor import MonitorReport, WorkspaceMonitor

app = typer.Typer(
    name="bytecap",
    help="Warn before workspace files outgrow an upload size cap",
    add_completion=False,
    no_args_is_help=True,
)
config_app = typer.Typer(help="Show or change stored settings.")
app.add_typer(config_app, name="config")


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        console.print(f"bytecap version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=err_console, show_path=False)],
        force=True,
    )


@app.callback()
def main(
    version: bool = typer.Option(
        None,
        "--version",
        "-v",
        help="Show version and exit.",
        callback=version_callback,
        is_eager=True,
    ),
    verbose: bool = typer.Option(False, "--verbose", help="Show debug logging."),
) -> None:
    """bytecap - workspace size monitor."""
    configure_logging(verbose)


def _load() -> Settings:
    try:
        return load_settings()
    except SettingsError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)


def _effective_settings(
    path: Optional[str],
    project: Optional[str],
    threshold: Optional[int],
    warnings: Optional[bool],
    warn_75: Optional[bool],
    warn_90: Optional[bool],
) -> Settings:
    """Stored settings with command-line overrides applied."""
    settings = _load()
    overrides = {
        "path": path,
        "project": project,
        "threshold_mb": threshold,
        "enable_warnings": warnings,
        "warn_at_75": warn_75,
        "warn_at_90": warn_90,
    }
    try:
        for key, value in overrides.items():
            if value is not None:
                settings = update_settings(settings, key, value)
    except SettingsError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)
    return settings


def _run_once(settings: Settings) -> MonitorReport:
    report = WorkspaceMonitor(settings).refresh()
    if report is None:
        console.print("[yellow]A scan is already running[/yellow]")
        raise typer.Exit(1)
    return report


PathArgument = typer.Argument(None, help="Directory to scan (default: current project)")
ProjectOption = typer.Option(None, "--project", "-p", help="Current project identifier")
ThresholdOption = typer.Option(
    None, "--threshold", "-t", min=1, max=20480, help="Size cap in megabytes"
)
WarningsOption = typer.Option(None, "--warnings/--no-warnings", help="Warn before the cap")
Warn75Option = typer.Option(None, "--warn-75/--no-warn-75", help="Warn at 75% of the cap")
Warn90Option = typer.Option(None, "--warn-90/--no-warn-90", help="Warn at 90% of the cap")


@app.command()
def scan(
    path: Optional[str] = PathArgument,
    project: Optional[str] = ProjectOption,
    threshold: Optional[int] = ThresholdOption,
    warnings: Optional[bool] = WarningsOption,
    warn_75: Optional[bool] = Warn75Option,
    warn_90: Optional[bool] = Warn90Option,
    top: Optional[int] = typer.Option(None, "--top", "-n", min=1, help="Show only the N largest files"),
) -> None:
    """Scan the workspace and report sizes against the threshold."""
    settings = _effective_settings(path, project, threshold, warnings, warn_75, warn_90)
    report = _run_once(settings)

    if report.project_missing:
        show_no_project()
        return

    show_inventory(report.inventory, top=top)
    console.print()
    show_summary(report.inventory, settings)
    console.print()
    show_evaluation(report.result)


@app.command()
def check(
    path: Optional[str] = PathArgument,
    project: Optional[str] = ProjectOption,
    threshold: Optional[int] = ThresholdOption,
    warnings: Optional[bool] = WarningsOption,
    warn_75: Optional[bool] = Warn75Option,
    warn_90: Optional[bool] = Warn90Option,
) -> None:
    """Check the workspace; exits with status 1 if the threshold is exceeded."""
    settings = _effective_settings(path, project, threshold, warnings, warn_75, warn_90)
    report = _run_once(settings)

    if report.project_missing:
        show_no_project()
        return

    show_evaluation(report.result)
    if report.result.has_alerts:
        raise typer.Exit(1)


@app.command()
def watch(
    path: Optional[str] = PathArgument,
    project: Optional[str] = ProjectOption,
    threshold: Optional[int] = ThresholdOption,
    warnings: Optional[bool] = WarningsOption,
    warn_75: Optional[bool] = Warn75Option,
    warn_90: Optional[bool] = Warn90Option,
    interval: Optional[float] = typer.Option(
        None, "--interval", "-i", min=0.1, help="Seconds between rescans"
    ),
    count: int = typer.Option(0, "--count", "-c", min=0, help="Stop after N scans (0 = run until Ctrl-C)"),
) -> None:
    """Rescan periodically and repeat alerts until they are resolved."""
    settings = _effective_settings(path, project, threshold, warnings, warn_75, warn_90)
    rescan_interval = interval or settings.rescan_interval

    escalator = AlertEscalator(show_alert, interval=settings.alert_interval)
    monitor = WorkspaceMonitor(settings, escalator=escalator)

    console.print(
        f"[bold blue]Watching workspace (threshold {settings.threshold_mb} MB, "
        f"rescan every {rescan_interval:g}s)...[/bold blue]"
    )
    scans = 0
    try:
        while True:
            report = monitor.refresh()
            scans += 1
            if report is not None and report.project_missing:
                show_no_project()
            elif report is not None and report.result.is_clear:
                console.print(
                    f"[dim]{report.inventory.file_count} files, "
                    f"{report.inventory.total_size_formatted} - within threshold[/dim]"
                )
            if count and scans >= count:
                break
            time.sleep(rescan_interval)
    except KeyboardInterrupt:
        console.print("\n[yellow]Stopped[/yellow]")
    finally:
        monitor.close()


@config_app.command("show")
def config_show() -> None:
    """Show current settings."""
    show_settings(_load())


@config_app.command("set")
def config_set(
    key: str = typer.Argument(..., help="Setting name, e.g. threshold_mb"),
    value: str = typer.Argument(..., help="New value"),
) -> None:
    """Change one setting."""
    settings = _load()
    try:
        settings = update_settings(settings, key, value)
    except SettingsError as exc:
        console.print(f"[red]Error: {exc}[/red]")
        raise typer.Exit(1)

    path = save_settings(settings)
    console.print(f"[green]✓[/green] {key} = {getattr(settings, key)}")
    console.print(f"[dim]Saved to {path}[/dim]")


@config_app.command("reset")
def config_reset() -> None:
    """Restore default settings."""
    path = save_settings(Settings())
    console.print(f"[green]✓[/green] Settings reset ({path})")


@config_app.command("path")
def config_path() -> None:
    """Print the settings file location."""
    console.print(str(settings_file()))


@app.command()
def tui(
    path: Optional[str] = PathArgument,
    project: Optional[str] = ProjectOption,
) -> None:
    """Launch the interactive monitor."""
    settings = _effective_settings(path, project, None, None, None, None)
    try:
        from bytecap.tui import run_tui
    except ImportError:
        console.print("[red]TUI not available.[/red]")
        console.print("Install with: [bold]pip install bytecap[tui][/bold]")
        raise typer.Exit(1)

    run_tui(settings)


if __name__ == "__main__":
    app()
