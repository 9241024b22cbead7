"""
Entry Table Module - DataTable listing the entries of the current folder

Handles:
- Name, type, size and modified columns
- Color-coded entry kinds
- Mapping selected rows back to FileEntry values
"""
from typing import Dict, List, Optional

from rich.text import Text
from textual.widgets import DataTable

from LOGSCOPE.engine import EntryKind, FileEntry
from LOGSCOPE.util import display_modified, display_size

COLUMNS = ("Name", "Type", "Size", "Modified")

KIND_STYLES = {
    EntryKind.DIRECTORY: "bold blue",
    EntryKind.ARCHIVE: "magenta",
    EntryKind.FILE: "white",
}


class EntryTable(DataTable):
    """DataTable of FileEntry rows for the folder being browsed"""

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        self.entries: List[FileEntry] = []
        self.entry_map: Dict = {}  # Maps row_key to FileEntry
        self.max_name_length = 80

    def on_mount(self) -> None:
        self.cursor_type = "row"
        self.zebra_stripes = True
        self._ensure_columns()

    def _ensure_columns(self) -> None:
        # the parent view may fill the table before this widget has mounted
        if not self.columns:
            self.add_columns(*COLUMNS)

    def show_entries(self, entries: List[FileEntry]) -> None:
        """Replace the table content with *entries*, keeping their order"""
        self._ensure_columns()
        self.clear()
        self.entry_map.clear()
        self.entries = list(entries)
        for entry in self.entries:
            row_key = self.add_row(*self._format_entry(entry))
            self.entry_map[row_key] = entry

    def _format_entry(self, entry: FileEntry) -> tuple:
        name = entry.name
        if len(name) > self.max_name_length:
            name = "..." + name[-(self.max_name_length - 3):]

        return (
            Text(name, style=KIND_STYLES[entry.kind]),
            entry.kind.value.lower(),
            display_size(entry.size),
            display_modified(entry.modified_time),
        )

    def entry_for_row(self, row_key) -> Optional[FileEntry]:
        return self.entry_map.get(row_key)

    def get_selected_entry(self) -> Optional[FileEntry]:
        if self.row_count == 0:
            return None
        row_key = self.coordinate_to_cell_key(self.cursor_coordinate).row_key
        return self.entry_map.get(row_key)
