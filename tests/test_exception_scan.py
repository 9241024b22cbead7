import os
import queue
from datetime import datetime, time, timedelta, timezone

import pytest

from LOGSCOPE.config import Settings
from LOGSCOPE.engine import EntryKind, FileEntry, LineMatch, SearchHit
from LOGSCOPE.log_analysis.alert_manager import AlertManager
from LOGSCOPE.log_analysis.exception_scan import (
    DETECTED_BY,
    ExceptionScanner,
    matching_lines,
    scan_window,
    seconds_until_next_run,
)


def set_mtime(path, when):
    os.utime(path, (when.timestamp(), when.timestamp()))


def test_scan_window_bounds():
    search_filter = scan_window(datetime(2024, 5, 10, 15, 45, tzinfo=timezone.utc))

    assert search_filter.modified_from == datetime(2024, 5, 9, tzinfo=timezone.utc)
    assert search_filter.modified_to == datetime(2024, 5, 11, tzinfo=timezone.utc)
    assert search_filter.content_term == ""
    assert search_filter.recursive


def test_matching_lines_ignores_case(tmp_path):
    entry = FileEntry(name="a.log", container_path=tmp_path, modified_time=datetime.now(timezone.utc),
                      size=1, kind=EntryKind.FILE)
    hit = SearchHit(entry=entry, matches=(
        LineMatch(line_number=1, text="all good"),
        LineMatch(line_number=2, text="caught nullpointerexception"),
        LineMatch(line_number=3, text="FileNotFoundException: x.cfg"),
    ))

    assert matching_lines([hit], ["NullPointerException", "FileNotFoundException"]) == [
        "caught nullpointerexception",
        "FileNotFoundException: x.cfg",
    ]


@pytest.mark.parametrize("now, expected", [
    (datetime(2024, 5, 10, 7, 0, tzinfo=timezone.utc), 30 * 60),
    (datetime(2024, 5, 10, 7, 30, tzinfo=timezone.utc), 24 * 3600),
    (datetime(2024, 5, 10, 8, 0, tzinfo=timezone.utc), 23.5 * 3600),
])
def test_seconds_until_next_run(now, expected):
    assert seconds_until_next_run(now, time(7, 30)) == expected


@pytest.fixture
def scanned_tree(tmp_path, now):
    root = tmp_path / "logs"
    (root / "nested").mkdir(parents=True)
    (root / "nested" / "fresh.log").write_text("ok\nNullPointerException at Foo\n")
    stale = root / "stale.log"
    stale.write_text("NullPointerException long ago\n")
    set_mtime(stale, now - timedelta(days=30))
    return root


def test_run_raises_alerts_for_fresh_logs(scanned_tree, now):
    manager = AlertManager(queue.Queue())
    scanner = ExceptionScanner(Settings(log_path=scanned_tree), manager)

    alerts = scanner.run(now)

    assert [item.message for item in alerts] == ["NullPointerException at Foo"]
    assert alerts[0].detected_by == DETECTED_BY
    assert alerts[0].alertLevel == "ALERT I"
    assert manager.number_of_alerts == 1


def test_run_with_custom_markers(scanned_tree, now):
    manager = AlertManager(queue.Queue())
    settings = Settings(log_path=scanned_tree, alert_markers=["ok"])

    alerts = ExceptionScanner(settings, manager).run(now)

    assert [item.message for item in alerts] == ["ok"]
