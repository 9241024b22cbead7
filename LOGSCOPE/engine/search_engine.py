"""
Search Engine Module - Line-indexed content search over collected entries

Handles:
- Case-sensitive substring search of every line of each file entry
- Flattening archives and directories into their file entries
- Optional thread-pool scanning with input order preserved
"""
import logging
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, List, Optional

from .collector import collect
from .content import DEFAULT_ENCODING, read_lines
from .models import EntryKind, FileEntry, LineMatch, SearchFilter, SearchHit

logger = logging.getLogger(__name__)


def scan_entry(entry: FileEntry, term: str, encoding: str = DEFAULT_ENCODING) -> Optional[SearchHit]:
    """
    Scan one file entry for *term*.

    Returns:
        SearchHit with every matching (line number, line) pair, or None when
        no line matched
    """
    matches = tuple(
        LineMatch(line_number=number, text=line)
        for number, line in enumerate(read_lines(entry.container_path, entry.name, encoding), start=1)
        if term in line
    )
    if not matches:
        return None
    return SearchHit(entry=entry, matches=matches)


def search(
    entries: Iterable[FileEntry],
    term: str,
    encoding: str = DEFAULT_ENCODING,
    max_workers: int = 1,
) -> List[SearchHit]:
    """
    Search file entries for a case-sensitive term.

    Only FILE entries are scanned; directories and archives are skipped and
    must be flattened by the caller first. An empty term matches every line.

    Args:
        entries: Entries to scan, typically the output of collect()
        term: Substring every reported line contains
        encoding: Text encoding of the scanned files
        max_workers: Scan entries on a thread pool when greater than one

    Returns:
        Hits in the order of *entries*, only for entries with a match
    """
    files = [entry for entry in entries if entry.kind is EntryKind.FILE]

    if max_workers > 1 and len(files) > 1:
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            results = list(pool.map(lambda entry: scan_entry(entry, term, encoding), files))
    else:
        results = [scan_entry(entry, term, encoding) for entry in files]

    hits = [hit for hit in results if hit is not None]
    logger.info("Search for %r matched %d of %d files", term, len(hits), len(files))
    return hits


def flatten(path) -> List[FileEntry]:
    """All file entries found anywhere under a directory or inside an archive"""
    return [
        entry
        for entry in collect(path, SearchFilter(recursive=True))
        if entry.kind is EntryKind.FILE
    ]


def search_tree(
    root,
    search_filter: SearchFilter,
    encoding: str = DEFAULT_ENCODING,
    max_workers: int = 1,
) -> List[SearchHit]:
    """Collect entries under *root* with the filter, then search them for its content term"""
    entries = collect(root, search_filter)
    return search(entries, search_filter.content_term or "", encoding, max_workers)
