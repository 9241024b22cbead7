import bz2
import lzma
import zipfile
from unittest.mock import patch

import pytest

from LOGSCOPE.engine import ArchiveReadError, FileAccessError, NotFoundError, read_lines


def test_directory_child(log_dir):
    lines = list(read_lines(log_dir, "app.log"))
    assert lines == [f"line {number}" for number in range(1, 11)]


def test_file_ignores_entry_name(log_dir):
    assert list(read_lines(log_dir / "app.log", "whatever.log"))[0] == "line 1"


def test_blank_lines_and_line_endings(tmp_path):
    log = tmp_path / "mixed.log"
    log.write_bytes(b"first\r\n\r\nthird\rfourth\nlast")
    assert list(read_lines(log, "")) == ["first", "", "third", "fourth", "last"]


def test_configured_encoding(tmp_path):
    log = tmp_path / "latin.log"
    log.write_bytes("café\n".encode("latin-1"))
    assert list(read_lines(log, "", encoding="latin-1")) == ["café"]


def test_undecodable_bytes_are_replaced(tmp_path):
    log = tmp_path / "binary.log"
    log.write_bytes(b"ok\n\xff\xfe\n")
    lines = list(read_lines(log, ""))
    assert lines[0] == "ok"
    assert len(lines) == 2


def test_archive_member_case_insensitive(bundle_zip):
    assert list(read_lines(bundle_zip, "A.TXT")) == ["hello", "world"]


def test_seven_zip_member(bundle_7z):
    assert list(read_lines(bundle_7z, "server.log")) == ["started", "NullPointerException at Foo", "stopped"]


def test_tar_member(bundle_tar):
    assert list(read_lines(bundle_tar, "worker.log")) == ["job 1", "job 2"]


def test_gzip_member(rotated_gz):
    assert list(read_lines(rotated_gz, "app.log.1")) == ["rotated one", "rotated two"]


def test_unmatched_archive_member_is_empty(bundle_zip):
    assert list(read_lines(bundle_zip, "c.txt")) == []


def test_unmatched_archive_member_strict(bundle_zip):
    with pytest.raises(NotFoundError):
        list(read_lines(bundle_zip, "c.txt", strict=True))


def test_missing_file(log_dir):
    with pytest.raises(NotFoundError):
        list(read_lines(log_dir, "missing.log"))


def test_streams_lazily(log_dir):
    lines = read_lines(log_dir, "app.log")
    assert next(lines) == "line 1"
    lines.close()


def test_corrupt_member(tmp_path):
    path = tmp_path / "crc.zip"
    with zipfile.ZipFile(path, "w", compression=zipfile.ZIP_STORED) as archive:
        archive.writestr("a.log", "hello world\n")
    data = bytearray(path.read_bytes())
    offset = data.index(b"hello world")
    data[offset] = ord("J")
    path.write_bytes(bytes(data))

    with pytest.raises(ArchiveReadError):
        list(read_lines(path, "a.log"))


@pytest.mark.parametrize("suffix, compress", [(".bz2", bz2.compress), (".xz", lzma.compress)])
def test_single_compressed_log(tmp_path, suffix, compress):
    path = tmp_path / f"app.log{suffix}"
    path.write_bytes(compress(b"first\nsecond\n"))
    assert list(read_lines(path, "app.log")) == ["first", "second"]


def test_directory_in_place_of_file(tmp_path):
    (tmp_path / "sub").mkdir()
    with pytest.raises(FileAccessError):
        list(read_lines(tmp_path, "sub"))


def test_unreadable_file(log_dir):
    denied = PermissionError(13, "Permission denied")
    with patch("LOGSCOPE.engine.content.open", side_effect=denied, create=True):
        with pytest.raises(FileAccessError):
            list(read_lines(log_dir, "app.log"))
