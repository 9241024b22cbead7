"""
Log Browser Components Module - UI widgets and panels

Handles:
- Current folder bar with parent navigation and sort controls
- Search form (modified dates, name pattern, content term, recursion)
- File actions (view whole file, tail with optional filter)
- Content pane for file lines and search hits
"""
from datetime import datetime, timezone
from pathlib import Path
from typing import List, Optional

from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, Input, Label, Log, Select

from LOGSCOPE.engine import ConfigurationError, NameMatcher, SearchFilter, SortMethod
from LOGSCOPE.engine.models import MAX_INSTANT, MIN_INSTANT

DATE_FORMAT = "%Y-%m-%d"


def parse_date(value: str) -> Optional[datetime]:
    """Parse a YYYY-MM-DD form value as the start of that day in UTC; blank means unset"""
    value = value.strip()
    if not value:
        return None
    try:
        return datetime.strptime(value, DATE_FORMAT).replace(tzinfo=timezone.utc)
    except ValueError as exc:
        raise ConfigurationError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def build_search_filter(date_from: str = "", date_to: str = "", name_pattern: str = "",
                        regex: bool = False, content_term: str = "", recursive: bool = False) -> SearchFilter:
    """
    Turn raw search form values into a SearchFilter.

    Blank fields leave the matching criterion unset; a blank content term
    means "list entries" rather than "match every line".
    """
    name_matcher = NameMatcher(pattern=name_pattern, regex=regex) if name_pattern else None
    return SearchFilter(
        modified_from=parse_date(date_from) or MIN_INSTANT,
        modified_to=parse_date(date_to) or MAX_INSTANT,
        name_matcher=name_matcher,
        content_term=content_term or None,
        recursive=recursive,
    )


class FolderBar(Horizontal):
    """Current folder with parent navigation and listing order"""

    def compose(self) -> ComposeResult:
        yield Button("⬆ Up", id="parent-btn", variant="default")
        yield Label("", id="current-folder-label")
        yield Select(
            [(method.value.title(), method.value) for method in SortMethod],
            value=SortMethod.FILENAME.value,
            allow_blank=False,
            id="sort-select",
        )
        yield Checkbox("Descending", id="descending-checkbox")

    def show_folder(self, folder: Path) -> None:
        self.query_one("#current-folder-label", Label).update(f"[bold]{folder}[/bold]")


class SearchPanel(Horizontal):
    """Search form mirroring SearchFilter fields"""

    def compose(self) -> ComposeResult:
        yield Input(placeholder="From YYYY-MM-DD", id="date-from-input")
        yield Input(placeholder="To YYYY-MM-DD", id="date-to-input")
        yield Input(placeholder="File name...", id="name-input")
        yield Checkbox("Regex", id="regex-checkbox")
        yield Input(placeholder="Content...", id="content-input")
        yield Checkbox("Recursive", id="recursive-checkbox")
        yield Button("Search", id="search-btn", variant="primary")
        yield Button("Clear", id="clear-search-btn", variant="default")

    def build_filter(self) -> SearchFilter:
        return build_search_filter(
            date_from=self.query_one("#date-from-input", Input).value,
            date_to=self.query_one("#date-to-input", Input).value,
            name_pattern=self.query_one("#name-input", Input).value,
            regex=self.query_one("#regex-checkbox", Checkbox).value,
            content_term=self.query_one("#content-input", Input).value,
            recursive=self.query_one("#recursive-checkbox", Checkbox).value,
        )

    def clear(self) -> None:
        for input_id in ("#date-from-input", "#date-to-input", "#name-input", "#content-input"):
            self.query_one(input_id, Input).value = ""
        self.query_one("#regex-checkbox", Checkbox).value = False
        self.query_one("#recursive-checkbox", Checkbox).value = False


class FileActionPanel(Horizontal):
    """Actions on the selected file"""

    def __init__(self, tail_lines: int = 100, **kwargs):
        super().__init__(**kwargs)
        self.tail_lines = tail_lines

    def compose(self) -> ComposeResult:
        yield Button("View", id="view-btn", variant="primary")
        yield Button("⇊ Tail", id="tail-btn", variant="default")
        yield Input(value=str(self.tail_lines), placeholder="Lines", id="tail-lines-input")
        yield Input(placeholder="Tail filter...", id="tail-term-input")

    def requested_tail_lines(self) -> int:
        value = self.query_one("#tail-lines-input", Input).value.strip()
        try:
            lines = int(value)
        except ValueError as exc:
            raise ConfigurationError(f"Invalid tail line count {value!r}") from exc
        if lines < 1:
            raise ConfigurationError(f"Tail line count must be positive, got {lines}")
        return lines

    def tail_term(self) -> Optional[str]:
        return self.query_one("#tail-term-input", Input).value or None


class ContentPanel(Vertical):
    """File lines, tail windows and search results"""

    def compose(self) -> ComposeResult:
        yield Label("[bold]Content[/bold]", id="content-title", classes="panel-title")
        yield Log(id="content-log")

    def show(self, title: str, lines: List[str]) -> None:
        self.query_one("#content-title", Label).update(f"[bold]{title}[/bold]")
        content = self.query_one("#content-log", Log)
        content.clear()
        content.write_lines(lines)
