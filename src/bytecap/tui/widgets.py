"""Custom widgets for the bytecap TUI."""

from textual.reactive import reactive
from textual.widgets import Static

from bytecap.analyzer import size_severity
from bytecap.config import Settings
from bytecap.display import severity_style
from bytecap.models import Inventory, Severity, ThresholdAlert


class SummaryBar(Static):
    """Totals of the last scan next to the active threshold."""

    scanning: reactive[bool] = reactive(False)

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.inventory: Inventory | None = None
        self.settings: Settings | None = None
        self.project_missing = False

    def update_summary(
        self, inventory: Inventory, settings: Settings, project_missing: bool = False
    ) -> None:
        self.inventory = inventory
        self.settings = settings
        self.project_missing = project_missing
        self.refresh()

    def render(self) -> str:
        if self.scanning:
            return "[dim]Scanning workspace...[/dim]"
        if self.project_missing:
            return "[yellow]No project is open and no path is configured[/yellow]"
        if not self.inventory or not self.settings:
            return "[dim]No scan yet[/dim]"

        inv = self.inventory
        config = self.settings.threshold_config()
        severity = size_severity(inv.grouped_total_size, config)
        color = severity_style(severity) if severity is not None else "green"
        return (
            f"[bold]{inv.scan_path}[/bold]\n"
            f"{inv.file_count} files, {inv.total_size_formatted} total  |  "
            f"{inv.grouped_file_count} {inv.grouped_suffix} files, "
            f"[{color}]{inv.grouped_total_size_formatted}[/{color}] "
            f"of {config.threshold_label}"
        )


class AlertBanner(Static):
    """Shows the alert currently being escalated."""

    def show_alert(self, alert: ThresholdAlert, occurrence: int, max_occurrences: int) -> None:
        color = "red" if alert.severity == Severity.ERROR else "yellow"
        self.set_class(alert.severity == Severity.ERROR, "error")
        self.set_class(alert.severity == Severity.WARNING, "warning")
        self.update(
            f"[bold {color}]{alert.message}[/bold {color}]  "
            f"[dim]({occurrence}/{max_occurrences}, press i to ignore)[/dim]"
        )
        self.display = True

    def clear_banner(self) -> None:
        self.update("")
        self.remove_class("error", "warning")
        self.display = False
