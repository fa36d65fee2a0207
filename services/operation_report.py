# services/operation_report.py

from pathlib import Path
from typing import Dict
from datetime import datetime
import logging

from core.base import EditedSegment, OriginalSegment
from core.io_utils import describe_size_delta, part_path_for

logger = logging.getLogger(__name__)


class OperationReport:
    """Writes a human-readable report of a combine run"""

    @staticmethod
    def write_combine_report(log_path: Path, manifest_path: Path, output_path: Path, stats: Dict) -> bool:
        """Report file with the segment layout and per-part size changes"""
        try:
            with open(log_path, 'w', encoding='utf-8') as f:
                OperationReport._write_header(f, manifest_path, stats)
                OperationReport._write_segments(f, stats)
                OperationReport._write_output(f, output_path, stats)
                OperationReport._write_footer(f)

            logger.info(f"Combine report created: {log_path}")
            return True

        except OSError as e:
            logger.error(f"Error writing combine report: {e}")
            return False

    @staticmethod
    def _write_header(f, manifest_path: Path, stats: Dict):
        f.write("=" * 80 + "\n")
        f.write("COMBINE REPORT - edit-chunks\n")
        f.write("=" * 80 + "\n")
        f.write(f"Date: {datetime.now().strftime('%Y-%m-%d %H:%M:%S')}\n")
        f.write(f"Manifest: {manifest_path}\n")
        f.write(f"Source: {stats['source']}\n")
        f.write(f"Source size: {stats['source_size']:,} bytes\n")
        f.write("\n")

    @staticmethod
    def _write_segments(f, stats: Dict):
        f.write("SEGMENTS\n")
        f.write("-" * 40 + "\n")
        for n, segment in enumerate(stats["segments"]):
            r = segment.range
            if isinstance(segment, OriginalSegment):
                f.write(f"{n:>4}  original  {r.start}-{r.end} ({r.length:,} bytes)\n")
            elif isinstance(segment, EditedSegment):
                delta = stats["deltas"].get(segment.index, 0)
                new_len = r.length + delta
                part_name = Path(part_path_for(stats["source"], segment.index)).name
                f.write(
                    f"{n:>4}  edited    {r.start}-{r.end} <- {part_name} "
                    f"({new_len:,} bytes, {describe_size_delta(r.length, new_len)})\n"
                )
        f.write("\n")

    @staticmethod
    def _write_output(f, output_path: Path, stats: Dict):
        f.write("OUTPUT\n")
        f.write("-" * 40 + "\n")
        f.write(f"File: {output_path}\n")
        f.write(f"Size: {stats['output_size']:,} bytes "
                f"({describe_size_delta(stats['source_size'], stats['output_size'])} vs source)\n")
        f.write("\n")

    @staticmethod
    def _write_footer(f):
        f.write("=" * 80 + "\n")

    @staticmethod
    def log_combine_summary(stats: Dict):
        """Short summary into the regular log"""
        edited = sum(1 for s in stats["segments"] if isinstance(s, EditedSegment))
        changed = sum(1 for d in stats["deltas"].values() if d != 0)
        logger.info(f"Segments: {len(stats['segments'])} ({edited} edited, {changed} resized)")
        logger.info(f"Output size: {stats['output_size']:,} bytes (source {stats['source_size']:,})")
