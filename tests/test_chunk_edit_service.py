from pathlib import Path

from core.base import ByteRange
from core.io_utils import part_path_for
from services.chunk_edit_service import ChunkEditService
from services.operation_report import OperationReport


def _prepare(tmp_path: Path) -> Path:
    src = tmp_path / "disk.img"
    src.write_bytes(bytes(range(200)))
    ChunkEditService().split(src, [ByteRange(10, 20), ByteRange(100, 150)])
    return src


def test_inspect_unchanged(tmp_path: Path):
    src = _prepare(tmp_path)
    info = ChunkEditService().inspect(str(src) + ".spec")

    assert info["source_size"] == 200
    assert info["problems"] == []
    assert [p["delta"] for p in info["parts"]] == ["same size", "same size"]
    assert info["expected_output_size"] == 200


def test_inspect_edited_and_missing(tmp_path: Path):
    src = _prepare(tmp_path)
    Path(part_path_for(src, 0)).write_bytes(b"abc")
    service = ChunkEditService()

    info = service.inspect(str(src) + ".spec")
    assert info["parts"][0]["current_size"] == 3
    assert info["parts"][0]["delta"] == "-7 bytes"
    assert info["expected_output_size"] == 193

    Path(part_path_for(src, 1)).unlink()
    info = service.inspect(str(src) + ".spec")
    assert info["parts"][1]["exists"] is False
    assert info["parts"][1]["delta"] == "missing"
    assert info["expected_output_size"] is None


def test_inspect_missing_source(tmp_path: Path):
    src = _prepare(tmp_path)
    src.unlink()
    info = ChunkEditService().inspect(str(src) + ".spec")
    assert info["source_exists"] is False
    assert info["expected_output_size"] is None


def test_combine_and_report(tmp_path: Path):
    src = _prepare(tmp_path)
    Path(part_path_for(src, 1)).write_bytes(b"Z" * 60)
    service = ChunkEditService()

    out = service.combine(str(src) + ".spec")
    stats = service.last_combine_stats
    assert out.stat().st_size == 210
    assert stats["deltas"] == {0: 0, 1: 10}

    report = tmp_path / "combine.log"
    OperationReport.write_combine_report(report, Path(str(src) + ".spec"), out, stats)
    text = report.read_text(encoding="utf-8")
    assert "COMBINE REPORT" in text
    assert "disk.img.part.1" in text
    assert "+10 bytes" in text
    assert "210 bytes" in text


def test_inspect_reports_stray_parts(tmp_path: Path):
    src = _prepare(tmp_path)
    Path(part_path_for(src, 5)).write_bytes(b"old")
    Path(part_path_for(src, 2)).write_bytes(b"old")

    info = ChunkEditService().inspect(str(src) + ".spec")

    assert [p.name for p in info["stray_parts"]] == ["disk.img.part.2", "disk.img.part.5"]
