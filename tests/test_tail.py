from unittest.mock import patch

import pytest

from LOGSCOPE.engine import TAIL_UNSUPPORTED_MESSAGE, FileAccessError, NotFoundError, read_lines, tail
from LOGSCOPE.engine.tail_reader import BLOCK_SIZE, read_last_lines


def numbered_lines(count, prefix="line"):
    return "".join(f"{prefix} {number}\n" for number in range(1, count + 1))


def test_last_three_of_ten(log_dir):
    assert tail(log_dir, "app.log", 3) == ["line 8", "line 9", "line 10"]


def test_file_path_ignores_entry_name(log_dir):
    assert tail(log_dir / "app.log", "", 2) == ["line 9", "line 10"]


def test_more_lines_than_file_has(log_dir):
    assert tail(log_dir, "app.log", 50) == [f"line {number}" for number in range(1, 11)]


def test_zero_lines(log_dir):
    assert tail(log_dir, "app.log", 0) == []


def test_empty_file(tmp_path):
    (tmp_path / "empty.log").write_text("")
    assert tail(tmp_path, "empty.log", 5) == []


def test_archive_is_unsupported(bundle_zip):
    assert tail(bundle_zip, "a.txt", 5) == [TAIL_UNSUPPORTED_MESSAGE]


def test_path_inside_archive_is_unsupported(bundle_zip):
    assert tail(bundle_zip / "a.txt", "", 5) == [TAIL_UNSUPPORTED_MESSAGE]


def test_missing_file(log_dir):
    with pytest.raises(NotFoundError):
        tail(log_dir, "missing.log", 5)


def test_term_filters_within_window_only(tmp_path):
    (tmp_path / "app.log").write_text("ERROR early\ninfo\nerror late\ninfo\n")

    assert tail(tmp_path, "app.log", 2, term="Error") == ["error late"]
    assert tail(tmp_path, "app.log", 1, term="error") == []


@pytest.mark.parametrize("block_size", [1, 3, 7, 64, 8192])
@pytest.mark.parametrize("count", [1, 5, 25])
def test_suffix_of_forward_read(tmp_path, block_size, count):
    log = tmp_path / "app.log"
    log.write_text(numbered_lines(40, prefix="entry"))
    forward = list(read_lines(log, ""))

    assert read_last_lines(log, count, block_size=block_size) == forward[-count:]


@pytest.mark.parametrize("content", [
    b"a\nb\nc",
    b"a\r\nb\r\nc\r\n",
    b"\n\nlast\n",
    b"only",
    b"x\n\n\n",
])
def test_line_boundaries_match_forward_read(tmp_path, content):
    log = tmp_path / "odd.log"
    log.write_bytes(content)
    forward = list(read_lines(log, ""))

    for count in range(1, len(forward) + 2):
        assert read_last_lines(log, count, block_size=2) == forward[-count:]


class CountingHandle:
    """Binary file handle recording every byte handed back by read()"""

    def __init__(self, handle):
        self.handle = handle
        self.bytes_read = 0

    def seek(self, *args):
        return self.handle.seek(*args)

    def read(self, size=-1):
        data = self.handle.read(size)
        self.bytes_read += len(data)
        return data

    def __enter__(self):
        return self

    def __exit__(self, *exc_info):
        self.handle.close()


@pytest.fixture
def large_log(tmp_path):
    log = tmp_path / "large.log"
    log.write_text(numbered_lines(100_000, prefix="entry"))
    return log


@pytest.fixture
def counted_opens():
    handles = []
    real_open = open

    def counting_open(*args, **kwargs):
        handle = CountingHandle(real_open(*args, **kwargs))
        handles.append(handle)
        return handle

    with patch("LOGSCOPE.engine.content.open", counting_open, create=True):
        yield handles


def test_short_window_reads_one_block(large_log, counted_opens):
    assert tail(large_log, "", 5) == [f"entry {number}" for number in range(99_996, 100_001)]
    assert len(counted_opens) == 1
    assert counted_opens[0].bytes_read <= BLOCK_SIZE


def test_read_grows_with_window_not_file(large_log, counted_opens):
    lines = tail(large_log, "", 2_000)
    window_bytes = sum(len(line) + 1 for line in lines)

    assert len(lines) == 2_000
    assert lines[-1] == "entry 100000"
    assert counted_opens[0].bytes_read <= window_bytes + 2 * BLOCK_SIZE
    assert counted_opens[0].bytes_read < large_log.stat().st_size // 10


def test_directory_in_place_of_file(tmp_path):
    (tmp_path / "sub").mkdir()
    with pytest.raises(FileAccessError):
        tail(tmp_path, "sub", 3)
