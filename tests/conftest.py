import gzip
import os
import tarfile
import zipfile
from datetime import datetime, timedelta, timezone

import py7zr
import pytest


def set_mtime(path, when: datetime):
    timestamp = when.timestamp()
    os.utime(path, (timestamp, timestamp))


def numbered_lines(count, prefix="line"):
    return "".join(f"{prefix} {number}\n" for number in range(1, count + 1))


@pytest.fixture
def now():
    return datetime.now(timezone.utc)


@pytest.fixture
def log_dir(tmp_path, now):
    """
    logs/
      app.log        10 lines, modified now
      old.log        modified 400 days ago
    """
    logs = tmp_path / "logs"
    logs.mkdir()
    (logs / "app.log").write_text(numbered_lines(10))
    old = logs / "old.log"
    old.write_text("ancient entry\n")
    set_mtime(old, now - timedelta(days=400))
    return logs


@pytest.fixture
def bundle_zip(tmp_path):
    path = tmp_path / "bundle.zip"
    with zipfile.ZipFile(path, "w") as archive:
        archive.writestr("a.txt", "hello\nworld")
        archive.writestr("b.txt", "foo")
    return path


@pytest.fixture
def bundle_7z(tmp_path):
    source = tmp_path / "seven_src"
    source.mkdir()
    (source / "server.log").write_text("started\nNullPointerException at Foo\nstopped\n")
    (source / "notes.txt").write_text("nothing here\n")

    path = tmp_path / "bundle.7z"
    with py7zr.SevenZipFile(path, "w") as archive:
        archive.write(source / "server.log", "server.log")
        archive.write(source / "notes.txt", "notes.txt")
    return path


@pytest.fixture
def bundle_tar(tmp_path):
    source = tmp_path / "tar_src"
    source.mkdir()
    (source / "worker.log").write_text("job 1\njob 2\n")

    path = tmp_path / "bundle.tar.gz"
    with tarfile.open(path, "w:gz") as archive:
        archive.add(source / "worker.log", arcname="worker.log")
    return path


@pytest.fixture
def rotated_gz(tmp_path):
    path = tmp_path / "app.log.1.gz"
    with gzip.open(path, "wb") as handle:
        handle.write(b"rotated one\nrotated two\n")
    return path
