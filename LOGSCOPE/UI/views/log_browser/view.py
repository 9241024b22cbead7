"""
Log Browser View Module - Main UI orchestration

Handles:
- Current folder state and navigation (into directories and archives, up to parent)
- Sorted listing of the current folder
- Filtered search over the current folder in a background worker
- Whole-file view and tail of the selected file
"""
import logging
from pathlib import Path
from typing import List, Optional

from textual import on, work
from textual.app import ComposeResult
from textual.containers import Horizontal, Vertical
from textual.widgets import Button, Checkbox, DataTable, Select

from LOGSCOPE.config import Settings
from LOGSCOPE.engine import (
    EntryKind,
    FileEntry,
    LogScopeError,
    SearchFilter,
    SortMethod,
    collect,
    list_entries,
    read_lines,
    search,
    sort_entries,
    tail,
)
from LOGSCOPE.util import parent_folder

from .components import ContentPanel, FileActionPanel, FolderBar, SearchPanel
from .entry_table import EntryTable

logger = logging.getLogger(__name__)


class LogBrowserView(Vertical):
    """
    Browser over a log folder whose entries may be directories, archives or files

    The folder being browsed is plain view state handed to every engine
    call; nothing is shared between views.
    """

    DEFAULT_CSS = """
    LogBrowserView #browser-content {
        height: 1fr;
    }
    LogBrowserView EntryTable {
        width: 45%;
    }
    LogBrowserView ContentPanel {
        width: 55%;
    }
    LogBrowserView FolderBar, LogBrowserView SearchPanel, LogBrowserView FileActionPanel {
        height: auto;
    }
    """

    BINDINGS = [
        ("backspace", "go_parent", "Parent folder"),
    ]

    def __init__(self, settings: Settings, **kwargs):
        super().__init__(**kwargs)
        self.settings = settings
        self.current_folder = Path(settings.log_path)
        self.sort_method = SortMethod.FILENAME
        self.descending = False

    def compose(self) -> ComposeResult:
        yield FolderBar(id="folder-bar")
        yield SearchPanel(id="search-panel")
        with Horizontal(id="browser-content"):
            yield EntryTable(id="entry-table")
            yield ContentPanel(id="content-panel")
        yield FileActionPanel(tail_lines=self.settings.tail_lines, id="file-action-panel")

    def on_mount(self) -> None:
        self.refresh_listing()

    def refresh_listing(self) -> None:
        """List the current folder and show it in display order"""
        self.query_one("#folder-bar", FolderBar).show_folder(self.current_folder)
        try:
            entries = list_entries(self.current_folder)
        except LogScopeError as e:
            self.notify(f"Error listing {self.current_folder}: {e}", severity="error")
            entries = []
        self._show_entries(entries)

    def _show_entries(self, entries: List[FileEntry]) -> None:
        table = self.query_one("#entry-table", EntryTable)
        table.show_entries(sort_entries(entries, self.sort_method, self.descending))

    def navigate(self, folder: Path) -> None:
        logger.info("Browsing %s", folder)
        self.current_folder = Path(folder)
        self.refresh_listing()

    def action_go_parent(self) -> None:
        parent = parent_folder(self.current_folder)
        if parent is not None:
            self.navigate(parent)

    def selected_file(self) -> Optional[FileEntry]:
        entry = self.query_one("#entry-table", EntryTable).get_selected_entry()
        if entry is None or entry.kind is not EntryKind.FILE:
            self.notify("Select a file first", severity="warning")
            return None
        return entry

    # Event Handlers

    def on_data_table_row_selected(self, event: DataTable.RowSelected) -> None:
        """Open directories and archives; view files"""
        if event.data_table.id != "entry-table":
            return
        entry = self.query_one("#entry-table", EntryTable).entry_for_row(event.row_key)
        if entry is None:
            return
        if entry.kind is EntryKind.FILE:
            self.show_file(entry)
        else:
            self.navigate(entry.path)

    @on(Button.Pressed, "#parent-btn")
    def handle_parent(self) -> None:
        self.action_go_parent()

    @on(Select.Changed, "#sort-select")
    def handle_sort_changed(self, event: Select.Changed) -> None:
        if event.value == Select.BLANK:
            return
        self.sort_method = SortMethod(event.value)
        self.refresh_listing()

    @on(Checkbox.Changed, "#descending-checkbox")
    def handle_descending_changed(self, event: Checkbox.Changed) -> None:
        self.descending = event.value
        self.refresh_listing()

    @on(Button.Pressed, "#search-btn")
    def handle_search(self) -> None:
        try:
            search_filter = self.query_one("#search-panel", SearchPanel).build_filter()
        except LogScopeError as e:
            self.notify(str(e), severity="error")
            return
        self._run_search(self.current_folder, search_filter)

    @on(Button.Pressed, "#clear-search-btn")
    def handle_clear_search(self) -> None:
        self.query_one("#search-panel", SearchPanel).clear()
        self.refresh_listing()

    @on(Button.Pressed, "#view-btn")
    def handle_view(self) -> None:
        entry = self.selected_file()
        if entry is not None:
            self.show_file(entry)

    @on(Button.Pressed, "#tail-btn")
    def handle_tail(self) -> None:
        entry = self.selected_file()
        if entry is None:
            return
        panel = self.query_one("#file-action-panel", FileActionPanel)
        try:
            max_lines = panel.requested_tail_lines()
            lines = tail(entry.container_path, entry.name, max_lines, panel.tail_term(),
                         encoding=self.settings.encoding)
        except LogScopeError as e:
            self.notify(str(e), severity="error")
            return
        self.query_one("#content-panel", ContentPanel).show(f"Tail {entry.path}", lines)

    def show_file(self, entry: FileEntry) -> None:
        try:
            lines = list(read_lines(entry.container_path, entry.name, self.settings.encoding,
                                    strict=self.settings.strict_archive_lookup))
        except LogScopeError as e:
            self.notify(str(e), severity="error")
            return
        self.query_one("#content-panel", ContentPanel).show(str(entry.path), lines)

    @work(exclusive=True, thread=True, group="search")
    def _run_search(self, folder: Path, search_filter: SearchFilter) -> None:
        """Collect and search in a background thread, then update the UI"""
        try:
            entries = collect(folder, search_filter)
            hits = None
            if search_filter.content_term is not None:
                hits = search(entries, search_filter.content_term, self.settings.encoding,
                              self.settings.search_workers)
        except LogScopeError as e:
            self.app.call_from_thread(self.notify, f"Search failed: {e}", severity="error")
            return
        self.app.call_from_thread(self._show_search_results, entries, hits)

    def _show_search_results(self, entries: List[FileEntry], hits) -> None:
        self._show_entries(entries)
        if hits is None:
            self.notify(f"{len(entries)} entries match", severity="information")
            return
        lines = [line for hit in hits for line in hit.render()]
        self.query_one("#content-panel", ContentPanel).show(
            f"Search results ({len(hits)} files)", lines or ["No matches"]
        )
