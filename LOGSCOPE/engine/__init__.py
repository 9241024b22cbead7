"""
Engine Package - File/archive-transparent traversal, filtering and search

Package Structure:
- classifier: storage kind of a path (classify)
- archives: format-sniffed archive readers (open_archive, ArchiveReader)
- traverser: uniform listing of directories and archives (list_entries)
- collector: recursive filtered collection (collect)
- content: streamed line access (read_lines)
- search_engine: line-indexed content search (search, flatten, search_tree)
- tail_reader: last N lines read backward (tail)
- sorting: display ordering (sort_entries)
- models / errors: value records and error taxonomy
"""

from .archives import ArchiveMember, ArchiveReader, open_archive
from .classifier import classify
from .collector import collect
from .content import read_lines
from .errors import (
    ArchiveReadError,
    ConfigurationError,
    LogScopeError,
    FileAccessError,
    NotFoundError,
    UnsupportedOperationError,
)
from .models import (
    EntryKind,
    FileEntry,
    LineMatch,
    NameMatcher,
    SearchFilter,
    SearchHit,
    SortMethod,
)
from .search_engine import flatten, search, search_tree
from .sorting import sort_entries
from .tail_reader import TAIL_UNSUPPORTED_MESSAGE, tail
from .traverser import list_entries

__all__ = [
    # Operations
    'classify',
    'list_entries',
    'collect',
    'read_lines',
    'search',
    'flatten',
    'search_tree',
    'tail',
    'sort_entries',
    'open_archive',

    # Data models
    'ArchiveMember',
    'ArchiveReader',
    'EntryKind',
    'FileEntry',
    'LineMatch',
    'NameMatcher',
    'SearchFilter',
    'SearchHit',
    'SortMethod',
    'TAIL_UNSUPPORTED_MESSAGE',

    # Errors
    'LogScopeError',
    'NotFoundError',
    'FileAccessError',
    'ArchiveReadError',
    'UnsupportedOperationError',
    'ConfigurationError',
]
