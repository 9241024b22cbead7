"""
Exception Scan Module - Daily sweep of fresh logs for known exception markers

Handles:
- Selecting logs modified between yesterday and tomorrow (UTC day bounds)
- Fetching every line of those logs through the search engine
- Raising an alert for each line naming a known exception
- Computing the delay until the next daily run
"""
from datetime import datetime, time, timedelta, timezone
from typing import Iterable, List, Optional

from LOGSCOPE.config import Settings
from LOGSCOPE.engine import SearchFilter, SearchHit, search_tree
from LOGSCOPE.log_analysis.alert import ALERT_I, Alert, logger
from LOGSCOPE.log_analysis.alert_manager import AlertManager

DETECTED_BY = "ExceptionScanner"


def scan_window(now: datetime) -> SearchFilter:
    """Recursive filter covering yesterday 00:00 UTC up to tomorrow 00:00 UTC"""
    today = now.astimezone(timezone.utc).date()
    start = datetime.combine(today - timedelta(days=1), time.min, tzinfo=timezone.utc)
    end = datetime.combine(today + timedelta(days=1), time.min, tzinfo=timezone.utc)
    return SearchFilter(modified_from=start, modified_to=end, content_term="", recursive=True)


def matching_lines(hits: Iterable[SearchHit], markers: Iterable[str]) -> List[str]:
    wanted = [marker.lower() for marker in markers]
    return [
        match.text
        for hit in hits
        for match in hit.matches
        if any(marker in match.text.lower() for marker in wanted)
    ]


def seconds_until_next_run(now: datetime, at: time) -> float:
    """Seconds from *now* until the next wall-clock occurrence of *at*"""
    next_run = datetime.combine(now.date(), at, tzinfo=now.tzinfo)
    if next_run <= now:
        next_run += timedelta(days=1)
    return (next_run - now).total_seconds()


class ExceptionScanner:
    def __init__(self, settings: Settings, manager: Optional[AlertManager] = None):
        self.settings = settings
        self.manager = manager or AlertManager()

    def run(self, now: Optional[datetime] = None) -> List[Alert]:
        """
        Scan the configured log path once.

        Returns:
            Alerts raised by this run, also queued on the alert manager
        """
        now = now or datetime.now(timezone.utc)
        logger.info("Scanning %s for exceptions", self.settings.log_path)

        hits = search_tree(
            self.settings.log_path,
            scan_window(now),
            encoding=self.settings.encoding,
            max_workers=self.settings.search_workers,
        )

        alerts = []
        for line in matching_lines(hits, self.settings.alert_markers):
            new_alert = Alert(timestamp=now, alertLevel="ALERT I", message=line, detected_by=DETECTED_BY)
            self.manager.add_alert(new_alert)
            logger.log(ALERT_I, line)
            alerts.append(new_alert)

        logger.info("Exception scan raised %d alerts", len(alerts))
        return alerts
