import os
from pathlib import Path
from typing import Union

from .models import EntryKind

# Extensions whose formats open_archive can sniff (".gz" also covers ".tar.gz")
ARCHIVE_EXTENSIONS = (
    ".zip",
    ".jar",
    ".7z",
    ".tar",
    ".tgz",
    ".gz",
    ".tbz2",
    ".bz2",
    ".txz",
    ".xz",
)


def is_archive_name(name: str) -> bool:
    return name.lower().endswith(ARCHIVE_EXTENSIONS)


def classify(path: Union[str, os.PathLike]) -> EntryKind:
    """
    Determine the storage kind of a real or virtual (archive member) path.

    Only the directory check touches the filesystem; the archive check looks
    at the name alone.
    """
    path = Path(path)
    if path.is_dir():
        return EntryKind.DIRECTORY
    if is_archive_name(path.name):
        return EntryKind.ARCHIVE
    return EntryKind.FILE
