import logging
from pathlib import Path

import pytest

pytest.importorskip("PySide6")

from core.base import ByteRange, OperationStatus
from core.io_utils import part_path_for
from workers.combine_worker import CombineWorker
from workers.split_worker import SplitWorker


def test_split_and_combine_workers(tmp_path: Path):
    src = tmp_path / "data.bin"
    data = bytes(i % 256 for i in range(300))
    src.write_bytes(data)

    results = []
    split = SplitWorker(src, [ByteRange(0, 10), ByteRange(100, 200)])
    split.finished.connect(results.append)
    split.run()

    assert results[0].success
    assert results[0].stats["parts_count"] == 2
    assert results[0].output_files[0] == Path(str(src) + ".spec")

    Path(part_path_for(src, 1)).write_bytes(b"new content")
    report = tmp_path / "report.txt"
    logs = []
    combine = CombineWorker(Path(str(src) + ".spec"), report_path=report)
    combine.finished.connect(results.append)
    combine.log_written.connect(logs.append)
    combine.run()

    result = results[1]
    assert result.status == OperationStatus.COMPLETED
    assert result.output_files[0].read_bytes() == data[:100] + b"new content" + data[200:]
    assert result.stats["deltas"] == {0: 0, 1: -89}
    assert report.exists()
    assert any("-89 bytes" in line for line in logs)


def test_combine_worker_failure(tmp_path: Path):
    results = []
    errors = []
    worker = CombineWorker(tmp_path / "missing.spec")
    worker.finished.connect(results.append)
    worker.error.connect(errors.append)
    worker.run()

    assert results[0].success is False
    assert results[0].status == OperationStatus.FAILED
    assert errors and "missing.spec" in errors[0]


def test_combine_worker_warns_when_report_fails(tmp_path: Path):
    src = tmp_path / "data.bin"
    src.write_bytes(bytes(50))
    SplitWorker(src, [ByteRange(5, 10)]).run()

    results, logs = [], []
    combine = CombineWorker(Path(str(src) + ".spec"), report_path=tmp_path / "missing" / "report.txt")
    combine.finished.connect(results.append)
    combine.log_written.connect(logs.append)
    combine.run()

    assert results[0].success
    assert any("Не удалось записать отчет" in line for line in logs)


def test_combine_worker_logs_through_module_logger(tmp_path: Path, caplog):
    with caplog.at_level(logging.ERROR, logger="workers.combine_worker"):
        CombineWorker(tmp_path / "missing.spec").run()

    assert [r.name for r in caplog.records if r.levelno == logging.ERROR] == ["workers.combine_worker"]
