from pathlib import Path

import pytest

from main import cli_mode


def test_cli_split_then_combine(tmp_path: Path):
    src = tmp_path / "video.bin"
    data = bytes(i % 256 for i in range(500))
    src.write_bytes(data)

    assert cli_mode(["split", str(src), "10-20", "300-400"]) == 0
    assert Path(str(src) + ".spec").exists()
    assert Path(str(src) + ".part.1").read_bytes() == data[300:400]

    Path(str(src) + ".part.0").write_bytes(b"")
    report = tmp_path / "report.txt"
    assert cli_mode(["combine", str(src) + ".spec", "--chunk-size", "64", "--report", str(report)]) == 0

    assert Path(str(src) + ".new").read_bytes() == data[:10] + data[20:]
    assert report.exists()


def test_cli_combine_output_option(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(b"0123456789")
    assert cli_mode(["split", str(src), "2-4"]) == 0
    out = tmp_path / "b.bin"
    assert cli_mode(["combine", str(src) + ".spec", "-o", str(out)]) == 0
    assert out.read_bytes() == b"0123456789"


def test_cli_bad_range_is_usage_error(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(b"abc")
    with pytest.raises(SystemExit) as excinfo:
        cli_mode(["split", str(src), "abc-5"])
    assert excinfo.value.code == 2
    assert not Path(str(src) + ".spec").exists()


def test_cli_unsorted_ranges(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(bytes(100))
    assert cli_mode(["split", "--check-order", str(src), "50-60", "10-20"]) == 1
    assert not Path(str(src) + ".spec").exists()
    assert cli_mode(["split", str(src), "50-60", "10-20"]) == 0
    assert cli_mode(["combine", str(src) + ".spec"]) == 1
    assert cli_mode(["combine", "--no-validate", str(src) + ".spec"]) == 0


def test_cli_missing_manifest(tmp_path: Path):
    assert cli_mode(["combine", str(tmp_path / "nope.spec")]) == 1


def test_cli_status(tmp_path: Path, capsys):
    src = tmp_path / "a.bin"
    src.write_bytes(bytes(100))
    assert cli_mode(["split", str(src), "10-20"]) == 0
    Path(str(src) + ".part.0").write_bytes(b"12")
    capsys.readouterr()

    assert cli_mode(["status", str(src) + ".spec"]) == 0
    out = capsys.readouterr().out
    assert "part.0  10-20  10 -> 2  (-8 bytes)" in out
    assert "combined size: 92 bytes" in out


def test_cli_combine_output_cannot_be_source(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(b"0123456789")
    assert cli_mode(["split", str(src), "2-4"]) == 0

    assert cli_mode(["combine", str(src) + ".spec", "-o", str(src)]) == 1
    assert src.read_bytes() == b"0123456789"


def test_cli_unwritable_log_file(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(b"abc")
    log_file = tmp_path / "no" / "such" / "dir" / "run.log"

    assert cli_mode(["--log-file", str(log_file), "split", str(src), "0-1"]) == 1


def test_cli_unwritable_report(tmp_path: Path):
    src = tmp_path / "a.bin"
    src.write_bytes(b"0123456789")
    assert cli_mode(["split", str(src), "2-4"]) == 0
    report = tmp_path / "missing" / "report.txt"

    assert cli_mode(["combine", str(src) + ".spec", "--report", str(report)]) == 1
    # the combined file is still written
    assert Path(str(src) + ".new").read_bytes() == b"0123456789"
