"""
Content Access Module - Line streaming for files on disk and inside archives

Lines are yielded one at a time with their terminators stripped; blank
lines are kept as empty strings and no file is read into memory whole.
"""
import io
import logging
from pathlib import Path
from typing import BinaryIO, Iterator

from .archives import ARCHIVE_ERRORS, open_archive
from .classifier import classify
from .errors import ArchiveReadError, FileAccessError, NotFoundError
from .models import EntryKind

logger = logging.getLogger(__name__)

DEFAULT_ENCODING = "utf-8"


def _decode_lines(stream: BinaryIO, encoding: str) -> Iterator[str]:
    # newline=None gives universal newlines: \n, \r\n and \r all end a line
    text = io.TextIOWrapper(stream, encoding=encoding, errors="replace", newline=None)
    for line in text:
        yield line[:-1] if line.endswith("\n") else line


def _read_archive_member(path: Path, entry_name: str, encoding: str, strict: bool) -> Iterator[str]:
    wanted = entry_name.lower()
    with open_archive(path) as archive:
        for member in archive.list_entries():
            if member.name.lower() != wanted:
                continue
            with archive.open_entry(member.name) as stream:
                try:
                    yield from _decode_lines(stream, encoding)
                except ARCHIVE_ERRORS as exc:
                    raise ArchiveReadError(f"Unable to read {member.name!r} from {path}: {exc}") from exc
            return

    if strict:
        raise NotFoundError(f"No entry {entry_name!r} in archive {path}")
    logger.debug("No entry %r in archive %s, returning no lines", entry_name, path)


def open_binary(target: Path) -> BinaryIO:
    """Open a plain file for binary reading, mapping OS failures to engine errors"""
    try:
        return open(target, "rb")
    except FileNotFoundError as exc:
        raise NotFoundError(f"File not found: {target}") from exc
    except OSError as exc:
        raise FileAccessError(f"Cannot read {target}: {exc}") from exc


def _read_file(target: Path, encoding: str) -> Iterator[str]:
    with open_binary(target) as handle:
        yield from _decode_lines(handle, encoding)


def read_lines(path, entry_name: str, encoding: str = DEFAULT_ENCODING, strict: bool = False) -> Iterator[str]:
    """
    Yield the text lines of *entry_name* held by *path*.

    Args:
        path: Directory, archive, or the file itself
        entry_name: Child or member name; ignored when *path* is a file
        encoding: Text encoding used to decode the content
        strict: Raise NotFoundError instead of yielding nothing when an
            archive holds no member called *entry_name*

    Yields:
        One string per physical line, in file order
    """
    path = Path(path)
    kind = classify(path)

    if kind is EntryKind.ARCHIVE:
        return _read_archive_member(path, entry_name, encoding, strict)
    if kind is EntryKind.DIRECTORY:
        return _read_file(path / entry_name, encoding)
    return _read_file(path, encoding)
