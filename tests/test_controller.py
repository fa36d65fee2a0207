from pathlib import Path

import pytest

from controller import ChunkEditController
from core.base import ByteRange
from core.exceptions import RangeParseError


def _controller(tmp_path: Path, size: int = 100) -> ChunkEditController:
    src = tmp_path / "src.bin"
    src.write_bytes(bytes(size))
    c = ChunkEditController()
    info = c.set_source(src)
    assert info['size'] == size
    assert info['has_manifest'] is False
    return c


def test_add_ranges_kept_sorted(tmp_path):
    c = _controller(tmp_path)
    c.add_range("50-60")
    c.add_range(" 10-20 ")
    assert c.ranges == [ByteRange(10, 20), ByteRange(50, 60)]
    assert c.selected_bytes() == 20


def test_add_range_rejects_overlap_and_out_of_bounds(tmp_path):
    c = _controller(tmp_path)
    c.add_range("10-20")
    with pytest.raises(RangeParseError):
        c.add_range("15-25")
    with pytest.raises(RangeParseError):
        c.add_range("90-101")
    with pytest.raises(RangeParseError):
        c.add_range("nonsense")
    c.add_range("20-30")
    assert c.get_range_count() == 2


def test_remove_and_clear(tmp_path):
    c = _controller(tmp_path)
    c.add_range("0-1")
    c.add_range("5-6")
    assert c.remove_range(0)
    assert not c.remove_range(5)
    assert c.ranges == [ByteRange(5, 6)]
    c.clear_ranges()
    assert c.get_range_count() == 0


def test_validate_split_request(tmp_path):
    c = ChunkEditController()
    ok, _ = c.validate_split_request()
    assert not ok
    c = _controller(tmp_path)
    ok, _ = c.validate_split_request()
    assert not ok
    c.add_range("1-2")
    assert c.validate_split_request() == (True, "OK")
    assert c.manifest_path() == Path(str(tmp_path / "src.bin") + ".spec")


def test_set_source_missing(tmp_path):
    with pytest.raises(FileNotFoundError):
        ChunkEditController().set_source(tmp_path / "missing.bin")
