"""TUI screens for bytecap."""

from textual.app import ComposeResult
from textual.binding import Binding
from textual.containers import Container
from textual.screen import Screen
from textual.widgets import DataTable, Footer, Header, Static

from bytecap.models import ThresholdAlert
from bytecap.monitor import MonitorReport
from bytecap.tui.widgets import AlertBanner, SummaryBar


class MonitorScreen(Screen):
    """Workspace inventory with escalating threshold alerts."""

    BINDINGS = [
        Binding("r", "refresh", "Rescan"),
        Binding("i", "ignore_alert", "Ignore Alert"),
        Binding("x", "clear_alerts", "Clear Alerts"),
        Binding("s", "toggle_sort", "Sort"),
        Binding("w", "toggle_warnings", "Warnings"),
    ]

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.report: MonitorReport | None = None
        self.sort_by_name = False

    def compose(self) -> ComposeResult:
        yield Header()

        with Container(id="main-container"):
            yield SummaryBar(id="summary")
            yield AlertBanner(id="alert-banner")
            yield DataTable(id="file-table")
            yield Static("", id="result-list")

        yield Footer()

    def on_mount(self) -> None:
        table = self.query_one("#file-table", DataTable)
        table.cursor_type = "row"
        table.add_columns("File", "Size")
        self.refresh_data()

    def refresh_data(self) -> None:
        """Rescan in a worker thread unless a scan is already running."""
        if self.app.monitor.scanning:
            self.notify("Scan already in progress", timeout=2)
            return
        self.query_one("#summary", SummaryBar).scanning = True
        self.run_worker(self._load_data, thread=True, exclusive=True)

    def _load_data(self) -> None:
        report = self.app.monitor.refresh()
        if report is not None:
            self.app.call_from_thread(self._update_view, report)

    def _update_view(self, report: MonitorReport) -> None:
        self.report = report
        summary = self.query_one("#summary", SummaryBar)
        summary.scanning = False
        summary.update_summary(report.inventory, self.app.monitor.settings, report.project_missing)
        self._update_table()
        self._update_results()

    def _update_table(self) -> None:
        table = self.query_one("#file-table", DataTable)
        table.clear()
        if not self.report:
            return

        inventory = self.report.inventory
        files = inventory.files
        if self.sort_by_name:
            files = sorted(files, key=lambda f: f.name)
        for record in files:
            name = record.name
            if name.endswith(inventory.grouped_suffix):
                name = f"[cyan]{name}[/cyan]"
            table.add_row(name, record.size_formatted)

    def _update_results(self) -> None:
        results = self.query_one("#result-list", Static)
        if not self.report or self.report.result.is_clear:
            results.update("[green]✓ Within threshold[/green]")
            return

        lines = [f"[red]✗[/red] {m}" for m in self.report.result.alerts]
        lines += [f"[yellow]![/yellow] {m}" for m in self.report.result.warnings]
        results.update("\n".join(lines))

    def show_alert(self, alert: ThresholdAlert, occurrence: int, max_occurrences: int) -> None:
        # Cleared or ignored while this call was queued behind the UI thread
        if not self.app.escalator.is_live(alert):
            return
        self.query_one("#alert-banner", AlertBanner).show_alert(alert, occurrence, max_occurrences)

    def clear_banner(self) -> None:
        self.query_one("#alert-banner", AlertBanner).clear_banner()

    def action_refresh(self) -> None:
        self.refresh_data()

    def action_ignore_alert(self) -> None:
        alert = self.app.escalator.ignore_current()
        self.clear_banner()
        if alert is not None:
            self.notify("Alert ignored until alerts are cleared", timeout=3)

    def action_clear_alerts(self) -> None:
        self.app.monitor.clear_alerts()
        self.notify("Alerts cleared", timeout=2)

    def action_toggle_sort(self) -> None:
        self.sort_by_name = not self.sort_by_name
        self._update_table()

    def action_toggle_warnings(self) -> None:
        monitor = self.app.monitor
        settings = monitor.settings.model_copy(
            update={"enable_warnings": not monitor.settings.enable_warnings}
        )
        monitor.apply_settings(settings)
        state = "on" if settings.enable_warnings else "off"
        self.notify(f"Warnings {state}", timeout=2)
        self.refresh_data()
