#!/usr/bin/env python3
import sys
import logging
import argparse
from pathlib import Path
from typing import List, Optional

from core.exceptions import ChunkEditError, RangeParseError
from core.ranges import parse_range
from core.settings import CombineSettings, SplitSettings
from utils.logger import setup_logger

logger = logging.getLogger(__name__)


def _range_arg(token: str):
    try:
        return parse_range(token)
    except RangeParseError as e:
        raise argparse.ArgumentTypeError(str(e)) from e


def _positive_int(value: str) -> int:
    n = int(value)
    if n < 1:
        raise argparse.ArgumentTypeError("must be at least 1")
    return n


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="edit-chunks",
        description="Split out chunks of a large file for editing, then put them back together again.",
    )
    parser.add_argument("--log-file", help="also write diagnostics to this file")
    parser.add_argument("--json-log", action="store_true", help="JSON formatted log records")
    parser.add_argument("-v", "--verbose", action="store_true")
    sub = parser.add_subparsers(dest="cmd", required=True)

    sp = sub.add_parser("split", help="split a file")
    sp.add_argument("path", type=Path)
    sp.add_argument("ranges", nargs="+", type=_range_arg, metavar="START-END")
    sp.add_argument(
        "--check-order",
        action="store_true",
        help="reject unsorted or overlapping ranges (combine rejects them unless --no-validate)",
    )

    cb = sub.add_parser("combine", help="combine a previously split file again")
    cb.add_argument("spec", type=Path)
    cb.add_argument("-o", "--output", type=Path, help="output file (default: <source>.new)")
    cb.add_argument("--chunk-size", type=_positive_int, help="copy chunk size in bytes")
    cb.add_argument("--no-validate", action="store_true", help="trust the manifest range order")
    cb.add_argument("--report", type=Path, help="write a combine report to this file (exit 1 if it cannot be written)")

    st = sub.add_parser("status", help="show the state of the part files of a split")
    st.add_argument("spec", type=Path)
    return parser


def _print_status(info: dict) -> None:
    size = info["source_size"]
    print(f"source: {info['source']} ({'missing' if size is None else f'{size} bytes'})")
    for part in info["parts"]:
        current = "-" if part["current_size"] is None else part["current_size"]
        print(f"  part.{part['index']}  {part['range']}  {part['original_size']} -> {current}  ({part['delta']})")
    for problem in info["problems"]:
        print(f"  problem: {problem}")
    for stray in info["stray_parts"]:
        print(f"  stray part file: {stray.name}")
    if info["expected_output_size"] is not None:
        print(f"combined size: {info['expected_output_size']} bytes")


def cli_mode(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    from services.chunk_edit_service import ChunkEditService
    from services.operation_report import OperationReport

    try:
        setup_logger(args.log_file, structured=args.json_log, verbose=args.verbose)
        if args.cmd == "split":
            service = ChunkEditService(split_settings=SplitSettings(validate_ranges=args.check_order))
            parts = service.split(args.path, args.ranges)
            logger.info(f"Split done: {len(parts)} parts")
        elif args.cmd == "combine":
            settings = CombineSettings(validate_manifest=not args.no_validate, output_path=args.output)
            if args.chunk_size:
                settings.chunk_size = args.chunk_size
            service = ChunkEditService(combine_settings=settings)
            out = service.combine(args.spec)
            OperationReport.log_combine_summary(service.last_combine_stats)
            if args.report and not OperationReport.write_combine_report(
                args.report, args.spec, out, service.last_combine_stats
            ):
                return 1
            logger.info(f"Combine done: {out}")
        else:
            _print_status(ChunkEditService().inspect(args.spec))
        return 0
    except (ChunkEditError, OSError) as e:
        logger.error(f"Error ({args.cmd}): {e}")
        return 1


def gui_mode() -> int:
    from PySide6.QtWidgets import QApplication
    from gui.windows.main_window import ChunkEditWindow

    setup_logger()
    app = QApplication(sys.argv)
    app.setApplicationName("edit-chunks")
    app.setStyle("Fusion")

    window = ChunkEditWindow()
    window.show()
    exit_code = app.exec()
    logger.info(f"Application finished with exit code: {exit_code}")
    return exit_code


def main():
    if len(sys.argv) > 1:
        sys.exit(cli_mode())
    sys.exit(gui_mode())


if __name__ == "__main__":
    main()
