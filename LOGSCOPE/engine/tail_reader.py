"""
Tail Reader Module - Last N lines of a file read backward from end-of-file

Blocks are read from the end until enough line breaks are buffered, so the
cost depends on the size of the window rather than the size of the file.
"""
import logging
import os
import re
from pathlib import Path
from typing import List, Optional

from .archives import locate_archive
from .classifier import classify
from .content import DEFAULT_ENCODING, open_binary
from .errors import UnsupportedOperationError
from .models import EntryKind

logger = logging.getLogger(__name__)

TAIL_UNSUPPORTED_MESSAGE = UnsupportedOperationError.TAIL_MESSAGE
BLOCK_SIZE = 8192

# Same line boundaries as a universal-newline forward read
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


def _split_lines(text: str) -> List[str]:
    lines = _LINE_BREAK.split(text)
    if lines and lines[-1] == "":
        # a trailing terminator does not start another line
        lines.pop()
    return lines


def read_last_lines(target: Path, max_lines: int, encoding: str = DEFAULT_ENCODING,
                    block_size: int = BLOCK_SIZE) -> List[str]:
    """
    Read the last *max_lines* lines of *target*, oldest first.

    Stops reading once more than *max_lines* line feeds are buffered: the
    extra one marks the start of the oldest wanted line, so any partial line
    before it can be discarded.
    """
    if max_lines <= 0:
        return []

    blocks = []
    newlines = 0
    with open_binary(target) as handle:
        position = handle.seek(0, os.SEEK_END)
        while position > 0 and newlines <= max_lines:
            read_size = min(block_size, position)
            position -= read_size
            handle.seek(position)
            block = handle.read(read_size)
            blocks.append(block)
            newlines += block.count(b"\n")

    buffer = b"".join(reversed(blocks))
    lines = _split_lines(buffer.decode(encoding, errors="replace"))
    return lines[-max_lines:]


def _inside_archive(path: Path) -> bool:
    return not path.exists() and locate_archive(path) is not None


def tail(path, entry_name: str, max_lines: int, term: Optional[str] = None,
         encoding: str = DEFAULT_ENCODING) -> List[str]:
    """
    Return the last *max_lines* lines of a file, in forward order.

    Args:
        path: Directory holding *entry_name*, or the file itself
        entry_name: File name inside *path*; ignored when *path* is a file
        max_lines: Size of the window taken from the end of the file
        term: When given, keep only window lines containing it (any case)
        encoding: Text encoding of the file

    Returns:
        The window lines, or a single sentinel line when the file is
        stored inside an archive
    """
    path = Path(path)
    kind = classify(path)

    if kind is EntryKind.ARCHIVE or _inside_archive(path):
        logger.info("Tail requested for %s in archive %s, not supported", entry_name, path)
        return [TAIL_UNSUPPORTED_MESSAGE]

    target = path / entry_name if kind is EntryKind.DIRECTORY else path
    lines = read_last_lines(target, max_lines, encoding)

    if term:
        wanted = term.lower()
        lines = [line for line in lines if wanted in line.lower()]
    return lines
