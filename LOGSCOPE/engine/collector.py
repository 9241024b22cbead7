import logging
from pathlib import Path
from typing import List

from .models import EntryKind, FileEntry, SearchFilter
from .traverser import list_entries

logger = logging.getLogger(__name__)


def collect(root, search_filter: SearchFilter) -> List[FileEntry]:
    """
    Walk the tree under *root* top-down and return the entries passing the filter.

    Results are in pre-order: an entry comes before anything collected from
    inside it. With `recursive` set, directories and archives are descended
    into whether or not they pass the filter themselves, so a sub-directory
    with a non-matching name still contributes its matching children.
    """
    results: List[FileEntry] = []
    _collect_into(Path(root), search_filter, results)
    logger.info("Collected %d entries under %s", len(results), root)
    return results


def _collect_into(path: Path, search_filter: SearchFilter, results: List[FileEntry]) -> None:
    for entry in list_entries(path):
        if search_filter.accepts(entry):
            results.append(entry)
        if search_filter.recursive and entry.kind is not EntryKind.FILE:
            _collect_into(entry.path, search_filter, results)
