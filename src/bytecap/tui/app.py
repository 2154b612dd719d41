"""Main TUI application for bytecap."""

from textual.app import App
from textual.binding import Binding

from bytecap.config import Settings
from bytecap.escalator import AlertEscalator
from bytecap.models import ThresholdAlert
from bytecap.monitor import WorkspaceMonitor
from bytecap.tui.screens import MonitorScreen


class BytecapApp(App):
    """Interactive workspace size monitor."""

    TITLE = "bytecap"
    SUB_TITLE = "Workspace Size Monitor"

    CSS_PATH = "styles.tcss"

    BINDINGS = [
        Binding("q", "quit", "Quit"),
        Binding("?", "help", "Help"),
    ]

    def __init__(self, settings: Settings):
        super().__init__()
        self.escalator = AlertEscalator(
            self._show_alert,
            interval=settings.alert_interval,
            on_clear=self._clear_banner,
        )
        self.monitor = WorkspaceMonitor(settings, escalator=self.escalator)
        self.monitor_screen: MonitorScreen | None = None

    def on_mount(self) -> None:
        """Called when the app is mounted."""
        self.monitor_screen = MonitorScreen()
        self.push_screen(self.monitor_screen)

    def on_unmount(self) -> None:
        self.monitor.close()

    def _show_alert(self, alert: ThresholdAlert, occurrence: int, max_occurrences: int) -> None:
        # Escalations arrive from scan workers and timer threads
        self.call_from_thread(self.monitor_screen.show_alert, alert, occurrence, max_occurrences)

    def _clear_banner(self) -> None:
        if self.monitor_screen is not None:
            self.monitor_screen.clear_banner()

    def action_help(self) -> None:
        """Show help information."""
        self.notify(
            "R rescans, I ignores the shown alert, X clears all alerts, S toggles sort, W toggles warnings",
            title="Help",
            timeout=5,
        )


def run_tui(settings: Settings) -> None:
    """Run the interactive TUI.

    Args:
        settings: Settings to monitor with
    """
    app = BytecapApp(settings)
    app.run()
