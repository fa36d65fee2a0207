import io

import pytest

from core.exceptions import ShortReadError
from core.io_utils import (
    CHUNK_SIZE,
    copy_region,
    describe_size_delta,
    make_part_filenames,
    manifest_path_for,
    output_path_for,
    part_path_for,
    read_exact,
    resize_buffer,
    sort_part_filenames,
)

SMALL_CHUNK = 16


def _data(size: int) -> bytes:
    return (bytes(range(251)) * (size // 251 + 1))[:size]


@pytest.mark.parametrize(
    "length",
    [0, 1, SMALL_CHUNK - 1, SMALL_CHUNK, SMALL_CHUNK + 1, 10 * SMALL_CHUNK],
)
def test_chunked_copy_matches_one_shot(length):
    data = _data(10 * SMALL_CHUNK + 50)
    start = 7
    dst = io.BytesIO()
    buf = bytearray()

    copied = copy_region(io.BytesIO(data), dst, start, start + length, buf, chunk_size=SMALL_CHUNK)

    assert copied == length
    assert dst.getvalue() == data[start:start + length]
    assert len(buf) <= SMALL_CHUNK


def test_chunked_copy_default_chunk_size():
    length = CHUNK_SIZE + 1
    data = _data(length)
    dst = io.BytesIO()
    buf = bytearray()

    copy_region(io.BytesIO(data), dst, 0, length, buf)

    assert dst.getvalue() == data
    # the last chunk shrinks the buffer to the remaining single byte
    assert len(buf) == 1


def test_copy_region_short_source():
    with pytest.raises(ShortReadError):
        copy_region(io.BytesIO(b"abc"), io.BytesIO(), 1, 10, bytearray(), chunk_size=4)


def test_resize_buffer_grows_and_truncates():
    buf = bytearray(b"stale-data")
    resize_buffer(buf, 3)
    assert buf == b"sta"
    resize_buffer(buf, 6)
    assert len(buf) == 6
    assert buf[:3] == b"sta"
    resize_buffer(buf, 0)
    assert buf == b""


def test_stale_bytes_do_not_leak_into_smaller_write():
    buf = bytearray()
    src = io.BytesIO(b"A" * 20 + b"bb")
    dst = io.BytesIO()
    copy_region(src, dst, 0, 20, buf, chunk_size=32)
    copy_region(src, dst, 20, 22, buf, chunk_size=32)
    assert dst.getvalue() == b"A" * 20 + b"bb"


def test_read_exact_fills_buffer():
    buf = bytearray(4)
    read_exact(io.BytesIO(b"wxyz!"), buf)
    assert buf == b"wxyz"


def test_read_exact_short():
    buf = bytearray(4)
    with pytest.raises(ShortReadError) as excinfo:
        read_exact(io.BytesIO(b"ab"), buf, "src.bin")
    assert excinfo.value.details == {"wanted": 4, "got": 2}
    assert isinstance(excinfo.value, OSError)


def test_naming():
    assert manifest_path_for("dir/file.img") == "dir/file.img.spec"
    assert part_path_for("dir/file.img", 3) == "dir/file.img.part.3"
    assert output_path_for("dir/file.img") == "dir/file.img.new"
    assert make_part_filenames("f", 2) == ["f.part.0", "f.part.1"]


def test_sort_part_filenames():
    names = ["f.part.10", "f.part.2", "f.part.0"]
    assert sort_part_filenames(names) == ["f.part.0", "f.part.2", "f.part.10"]


def test_describe_size_delta():
    assert describe_size_delta(10, 10) == "same size"
    assert describe_size_delta(10, 15) == "+5 bytes"
    assert describe_size_delta(10, 5) == "-5 bytes"
