"""
Log Browser Package - Folder, archive and file browsing over the engine

Package Structure:
- view: Main view orchestration (LogBrowserView)
- components: UI panels and controls (FolderBar, SearchPanel, FileActionPanel, ContentPanel)
- entry_table: Entry listing widget (EntryTable)
"""

from .view import LogBrowserView

from .components import (
    ContentPanel,
    FileActionPanel,
    FolderBar,
    SearchPanel,
    build_search_filter,
)
from .entry_table import EntryTable

__all__ = [
    # Main view
    'LogBrowserView',

    # UI components
    'FolderBar',
    'SearchPanel',
    'FileActionPanel',
    'ContentPanel',
    'EntryTable',

    # Helpers
    'build_search_filter',
]
