import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import List

from .archives import open_archive
from .classifier import classify
from .errors import FileAccessError, NotFoundError
from .models import EntryKind, FileEntry

logger = logging.getLogger(__name__)


def entry_from_path(path: Path) -> FileEntry:
    """Build an entry for an on-disk object from its stat metadata"""
    try:
        stat = path.stat()
    except FileNotFoundError as exc:
        raise NotFoundError(f"Path not found: {path}") from exc
    except PermissionError as exc:
        raise FileAccessError(f"Cannot stat {path}: {exc}") from exc

    return FileEntry(
        name=path.name,
        container_path=path.parent,
        modified_time=datetime.fromtimestamp(stat.st_mtime, timezone.utc),
        size=stat.st_size,
        kind=classify(path),
    )


def _list_archive(path: Path) -> List[FileEntry]:
    with open_archive(path) as archive:
        members = archive.list_entries()

    return [
        FileEntry(
            name=member.name,
            container_path=path,
            modified_time=member.modified_time,
            size=member.size,
            kind=classify(path / member.name.lstrip("/")),
        )
        for member in members
    ]


def list_entries(path) -> List[FileEntry]:
    """
    List the immediate children of a directory or the members of an archive.

    A plain file yields a one-element list describing itself. Order follows
    the underlying listing and is not sorted.
    """
    path = Path(path)
    kind = classify(path)

    if kind is EntryKind.ARCHIVE:
        entries = _list_archive(path)
    elif kind is EntryKind.DIRECTORY:
        try:
            children = list(path.iterdir())
        except PermissionError as exc:
            raise FileAccessError(f"Cannot list {path}: {exc}") from exc
        entries = [entry_from_path(child) for child in children]
    else:
        entries = [entry_from_path(path)]

    logger.debug("Listed %d entries in %s", len(entries), path)
    return entries
