"""
Archive Readers Module - Uniform access to archive members

Handles:
- Format sniffing (7z, zip, tar with any compression, single-file gzip, bzip2 and xz)
- Member listing with size and stored timestamp
- Streaming member content by name
- Archives nested inside other archives (opened from memory)
- Releasing every archive and file handle on all exit paths
"""
import bz2
import gzip
import io
import logging
import lzma
import struct
import tarfile
import zipfile
import zlib
from abc import ABC, abstractmethod
from contextlib import ExitStack, contextmanager
from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import BinaryIO, Iterator, List, Optional, Tuple

import py7zr
import py7zr.exceptions

from .classifier import is_archive_name
from .errors import ArchiveReadError, FileAccessError, NotFoundError
from .models import as_utc

logger = logging.getLogger(__name__)

SEVEN_ZIP_SIGNATURE = b"7z\xbc\xaf\x27\x1c"
GZIP_SIGNATURE = b"\x1f\x8b"
BZIP2_SIGNATURE = b"BZh"
XZ_SIGNATURE = b"\xfd7zXZ\x00"
CHUNK_SIZE = 64 * 1024

# Library errors that mean "this stream is not a readable archive"
ARCHIVE_ERRORS = (
    zipfile.BadZipFile,
    tarfile.TarError,
    gzip.BadGzipFile,
    py7zr.exceptions.ArchiveError,
    py7zr.exceptions.PasswordRequired,
    zlib.error,
    lzma.LZMAError,
    EOFError,
    struct.error,
    # bz2 reports bad data as a plain OSError
    OSError,
)


@dataclass(frozen=True)
class ArchiveMember:
    """One entry as stored in an archive"""
    name: str
    size: int
    modified_time: datetime
    is_directory: bool = False


class ArchiveReader(ABC):
    """
    Capability shared by every archive format: list members, read a member.

    Readers wrap an already opened binary source; closing the reader closes
    the format library's handle but never the source itself.
    """

    format_name = "archive"

    def __init__(self, source: BinaryIO, name: str, fallback_time: datetime):
        self.source = source
        self.name = name
        self.fallback_time = fallback_time

    @abstractmethod
    def _members(self) -> List[ArchiveMember]:
        ...

    @abstractmethod
    def _open(self, name: str) -> BinaryIO:
        ...

    def close(self) -> None:
        pass

    def list_entries(self) -> List[ArchiveMember]:
        try:
            return self._members()
        except ARCHIVE_ERRORS as exc:
            raise ArchiveReadError(f"Unable to list archive {self.name}: {exc}") from exc

    def open_entry(self, name: str) -> BinaryIO:
        """Open a member for streaming; raises NotFoundError if it is absent"""
        try:
            return self._open(name)
        except KeyError as exc:
            raise NotFoundError(f"No entry {name!r} in archive {self.name}") from exc
        except ARCHIVE_ERRORS as exc:
            raise ArchiveReadError(f"Unable to read {name!r} from {self.name}: {exc}") from exc

    def read_entry(self, name: str) -> bytes:
        with self.open_entry(name) as stream:
            try:
                return stream.read()
            except ARCHIVE_ERRORS as exc:
                raise ArchiveReadError(f"Unable to read {name!r} from {self.name}: {exc}") from exc

    def member(self, name: str) -> ArchiveMember:
        for member in self.list_entries():
            if member.name == name:
                return member
        raise NotFoundError(f"No entry {name!r} in archive {self.name}")

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.close()


class ZipArchiveReader(ArchiveReader):
    format_name = "zip"

    def __init__(self, source, name, fallback_time):
        super().__init__(source, name, fallback_time)
        self._archive = zipfile.ZipFile(source)

    def _members(self):
        return [
            ArchiveMember(
                name=info.filename,
                size=info.file_size,
                modified_time=self._timestamp(info.date_time),
                is_directory=info.is_dir(),
            )
            for info in self._archive.infolist()
        ]

    def _timestamp(self, date_time) -> datetime:
        # DOS timestamps carry no zone and are written in local time
        try:
            return datetime(*date_time).astimezone(timezone.utc)
        except (ValueError, OverflowError):
            return self.fallback_time

    def _open(self, name):
        return self._archive.open(name)

    def close(self):
        self._archive.close()


class TarArchiveReader(ArchiveReader):
    format_name = "tar"

    def __init__(self, source, name, fallback_time):
        super().__init__(source, name, fallback_time)
        self._archive = tarfile.open(fileobj=source, mode="r:*")

    def _members(self):
        return [
            ArchiveMember(
                name=member.name,
                size=member.size,
                modified_time=datetime.fromtimestamp(member.mtime, timezone.utc),
                is_directory=member.isdir(),
            )
            for member in self._archive.getmembers()
        ]

    def _open(self, name):
        stream = self._archive.extractfile(self._archive.getmember(name))
        if stream is None:
            # directories and special members have no content
            return io.BytesIO(b"")
        return stream

    def close(self):
        self._archive.close()


class CompressedFileReader(ArchiveReader):
    """
    A single compressed file seen as an archive holding one member.

    The member is named after the file with the compression suffix removed,
    so `app.log.1.gz` holds `app.log.1`.
    """

    suffix = ""

    def __init__(self, source, name, fallback_time):
        super().__init__(source, name, fallback_time)
        self._mtime = fallback_time
        if self.suffix and name.lower().endswith(self.suffix):
            self._member_name = name[:-len(self.suffix)]
        else:
            self._member_name = name

    @abstractmethod
    def _decompressed(self) -> BinaryIO:
        ...

    def _uncompressed_size(self) -> int:
        size = 0
        with self._open(self._member_name) as stream:
            for chunk in iter(lambda: stream.read(CHUNK_SIZE), b""):
                size += len(chunk)
        return size

    def _members(self):
        return [ArchiveMember(self._member_name, self._uncompressed_size(), self._mtime)]

    def _open(self, name):
        if name != self._member_name:
            raise KeyError(name)
        self.source.seek(0)
        return self._decompressed()


class GzipArchiveReader(CompressedFileReader):
    format_name = "gzip"
    suffix = ".gz"

    def __init__(self, source, name, fallback_time):
        super().__init__(source, name, fallback_time)
        header = source.read(10)
        if len(header) < 10 or not header.startswith(GZIP_SIGNATURE):
            raise gzip.BadGzipFile(f"Not a gzip stream: {name}")
        (mtime,) = struct.unpack("<I", header[4:8])
        source.seek(-4, io.SEEK_END)
        # ISIZE trailer holds the uncompressed size modulo 2**32
        (self._size,) = struct.unpack("<I", source.read(4))
        source.seek(0)
        if mtime:
            self._mtime = datetime.fromtimestamp(mtime, timezone.utc)

    def _uncompressed_size(self):
        return self._size

    def _decompressed(self):
        return gzip.GzipFile(fileobj=self.source, mode="rb")


class Bz2ArchiveReader(CompressedFileReader):
    format_name = "bzip2"
    suffix = ".bz2"

    def _decompressed(self):
        return bz2.BZ2File(self.source, mode="rb")


class XzArchiveReader(CompressedFileReader):
    format_name = "xz"
    suffix = ".xz"

    def _decompressed(self):
        return lzma.LZMAFile(self.source, mode="rb")


class SevenZipArchiveReader(ArchiveReader):
    format_name = "7z"

    def __init__(self, source, name, fallback_time):
        super().__init__(source, name, fallback_time)
        self._archive = py7zr.SevenZipFile(source, mode="r")

    def _members(self):
        return [
            ArchiveMember(
                name=info.filename,
                size=info.uncompressed or 0,
                modified_time=as_utc(info.creationtime) if info.creationtime else self.fallback_time,
                is_directory=info.is_directory,
            )
            for info in self._archive.list()
        ]

    def _open(self, name):
        if not any(info.filename == name for info in self._archive.list()):
            raise KeyError(name)
        # 7z solid blocks cannot be streamed member by member
        self._archive.reset()
        contents = self._archive.read(targets=[name]) or {}
        self._archive.reset()
        buffer = contents.get(name)
        if buffer is None:
            return io.BytesIO(b"")
        buffer.seek(0)
        return buffer

    def close(self):
        self._archive.close()


def _is_tar(source: BinaryIO) -> bool:
    try:
        return tarfile.is_tarfile(source)
    except ARCHIVE_ERRORS:
        return False
    finally:
        source.seek(0)


def _reader_class(source: BinaryIO, name: str):
    head = source.read(len(SEVEN_ZIP_SIGNATURE))
    source.seek(0)
    if head.startswith(SEVEN_ZIP_SIGNATURE):
        return SevenZipArchiveReader
    is_zip = zipfile.is_zipfile(source)
    source.seek(0)
    if is_zip:
        return ZipArchiveReader
    if _is_tar(source):
        return TarArchiveReader
    if head.startswith(GZIP_SIGNATURE):
        return GzipArchiveReader
    if head.startswith(BZIP2_SIGNATURE):
        return Bz2ArchiveReader
    if head.startswith(XZ_SIGNATURE):
        return XzArchiveReader
    raise ArchiveReadError(f"Unrecognised archive format: {name}")


def locate_archive(path) -> Optional[Tuple[Path, str]]:
    """
    Find the archive enclosing a virtual path such as `logs.zip/a/b.txt`.

    Returns the nearest ancestor named like an archive together with the
    member name relative to it, or None when the path runs into a real
    directory first.
    """
    path = Path(path)
    for parent in path.parents:
        if parent.is_dir():
            return None
        if is_archive_name(parent.name):
            return parent, path.relative_to(parent).as_posix()
    return None


def _open_source(path: Path, stack: ExitStack) -> Tuple[BinaryIO, datetime]:
    if path.is_file():
        handle = stack.enter_context(open(path, "rb"))
        return handle, datetime.fromtimestamp(path.stat().st_mtime, timezone.utc)

    located = locate_archive(path)
    if located is None:
        raise NotFoundError(f"Archive not found: {path}")

    outer_path, member_name = located
    with open_archive(outer_path) as outer:
        member = outer.member(member_name)
        data = outer.read_entry(member_name)
    logger.debug("Loaded nested archive %s (%d bytes) from %s", member_name, len(data), outer_path)
    return io.BytesIO(data), member.modified_time


@contextmanager
def open_archive(path) -> Iterator[ArchiveReader]:
    """
    Open the archive at *path* with the reader matching its signature.

    Raises NotFoundError when neither the file nor an enclosing archive
    exists and ArchiveReadError when the stream is corrupt or unrecognised.
    """
    path = Path(path)
    with ExitStack() as stack:
        try:
            source, fallback_time = _open_source(path, stack)
            reader_class = _reader_class(source, path.name)
            reader = reader_class(source, path.name, fallback_time)
        except FileNotFoundError as exc:
            raise NotFoundError(f"Archive not found: {path}") from exc
        except PermissionError as exc:
            raise FileAccessError(f"Cannot open archive {path}: {exc}") from exc
        except ARCHIVE_ERRORS as exc:
            raise ArchiveReadError(f"Unable to open archive {path}: {exc}") from exc
        stack.callback(reader.close)
        logger.debug("Opened %s archive %s", reader.format_name, path)
        yield reader
