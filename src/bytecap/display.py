"""Rich terminal display for bytecap."""

from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from bytecap.config import Settings
from bytecap.models import EvaluationResult, Inventory, Severity, ThresholdAlert

console = Console()
err_console = Console(stderr=True)


def severity_style(severity: Severity) -> str:
    """Get color for a severity."""
    styles = {
        Severity.ERROR: "red",
        Severity.WARNING: "yellow",
    }
    return styles.get(severity, "white")


def show_inventory(inventory: Inventory, top: int | None = None) -> None:
    """Display the scanned files, largest first."""
    if inventory.is_empty:
        console.print(f"[yellow]No files found in {inventory.scan_path or 'workspace'}[/yellow]")
        return

    table = Table(title=f"Files in {inventory.scan_path}", show_header=True, header_style="bold")
    table.add_column("File")
    table.add_column("Size", justify="right")
    table.add_column("", width=3)

    files = inventory.files if top is None else inventory.files[:top]
    for record in files:
        marker = "[cyan]●[/cyan]" if record.name.endswith(inventory.grouped_suffix) else ""
        table.add_row(record.name, record.size_formatted, marker)

    console.print(table)
    if top is not None and inventory.file_count > top:
        console.print(f"[dim]... and {inventory.file_count - top} more files[/dim]")


def show_summary(inventory: Inventory, settings: Settings) -> None:
    """Display totals and the active threshold."""
    table = Table(title="Summary", show_header=False)
    table.add_column("Metric", style="bold")
    table.add_column("Value", justify="right")

    table.add_row("Files", str(inventory.file_count))
    table.add_row("Total size", inventory.total_size_formatted)
    table.add_row(f"{inventory.grouped_suffix} files", str(inventory.grouped_file_count))
    table.add_row(f"Combined {inventory.grouped_suffix} size", inventory.grouped_total_size_formatted)
    table.add_row("Threshold", f"{settings.threshold_mb} MB")

    if settings.enable_warnings and settings.warning_percentages:
        bands = ", ".join(f"{p}%" for p in sorted(settings.warning_percentages))
        table.add_row("Warnings at", bands)
    else:
        table.add_row("Warnings", "[dim]off[/dim]")

    console.print(table)


def show_evaluation(result: EvaluationResult) -> None:
    """Display alerts and warnings from an evaluation."""
    if result.is_clear:
        console.print("[green]✓ All files are within the threshold[/green]")
        return

    for message in result.alerts:
        console.print(f"  [red]✗[/red] {message}")
    for message in result.warnings:
        console.print(f"  [yellow]![/yellow] {message}")


def show_alert(alert: ThresholdAlert, occurrence: int, max_occurrences: int) -> None:
    """Display one escalation of an alert as a panel."""
    style = severity_style(alert.severity)
    title = "Threshold exceeded" if alert.severity == Severity.ERROR else "Approaching threshold"
    console.print(
        Panel(
            alert.message,
            title=f"[bold {style}]{title}[/bold {style}]",
            subtitle=f"{occurrence}/{max_occurrences}",
            border_style=style,
        )
    )


def show_no_project() -> None:
    console.print("[yellow]No project is open and no path was given.[/yellow]")
    console.print("[dim]Pass a PATH, use --project, or run [bold]bytecap config set path <dir>[/bold][/dim]")


def show_settings(settings: Settings) -> None:
    """Display the current settings."""
    table = Table(title="Settings", show_header=True, header_style="bold")
    table.add_column("Key")
    table.add_column("Value")

    for key, value in settings.model_dump().items():
        table.add_row(key, "" if value is None else str(value))

    console.print(table)
