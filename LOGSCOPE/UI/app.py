"""
LOGSCOPE Main Application - Log folder browser using Textual
"""
from datetime import datetime
from typing import Optional

from textual import work
from textual.app import App, ComposeResult
from textual.widgets import Footer, Header

from LOGSCOPE.config import Settings, load_settings
from LOGSCOPE.engine import LogScopeError
from LOGSCOPE.log_analysis.alert_manager import AlertManager
from LOGSCOPE.log_analysis.exception_scan import ExceptionScanner, seconds_until_next_run
from LOGSCOPE.UI.views.log_browser import LogBrowserView


class LogScopeApp(App):
    """Log browser with a daily exception scan"""

    TITLE = "LOGSCOPE - Log Browser"

    BINDINGS = [
        ("q", "quit", "Quit"),
        ("e", "scan_exceptions", "Scan exceptions"),
        ("t", "tail_selected", "Tail"),
        ("v", "view_selected", "View"),
    ]

    def __init__(self, settings: Optional[Settings] = None, schedule_scan: bool = True, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings or load_settings()
        self.alert_manager = AlertManager()
        self.scanner = ExceptionScanner(self.settings, self.alert_manager)
        self.schedule_scan = schedule_scan

    def compose(self) -> ComposeResult:
        """Compose the main UI layout"""
        yield Header(show_clock=True)
        yield LogBrowserView(self.settings, id="log-browser-view")
        yield Footer()

    def on_mount(self) -> None:
        if self.schedule_scan:
            self._schedule_next_scan()

    def _schedule_next_scan(self) -> None:
        delay = seconds_until_next_run(datetime.now(), self.settings.alert_time)
        self.set_timer(delay, self._scheduled_scan)

    def _scheduled_scan(self) -> None:
        self.action_scan_exceptions()
        self._schedule_next_scan()

    def action_scan_exceptions(self) -> None:
        self._scan_exceptions()

    @work(exclusive=True, thread=True, group="exception-scan")
    def _scan_exceptions(self) -> None:
        try:
            alerts = self.scanner.run()
        except LogScopeError as e:
            self.call_from_thread(self.notify, f"Exception scan failed: {e}", severity="error")
            return
        severity = "warning" if alerts else "information"
        self.call_from_thread(self.notify, f"Exception scan raised {len(alerts)} alerts", severity=severity)

    def action_tail_selected(self) -> None:
        self.query_one("#log-browser-view", LogBrowserView).handle_tail()

    def action_view_selected(self) -> None:
        self.query_one("#log-browser-view", LogBrowserView).handle_view()


def run_app(settings: Optional[Settings] = None) -> None:
    """Entry point to run the LOGSCOPE application"""
    app = LogScopeApp(settings)
    app.run()


if __name__ == "__main__":
    run_app()
