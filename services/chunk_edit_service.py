import glob
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from core.base import ByteRange, OriginalSegment
from core.combiner import RangeCombiner, build_segments
from core.io_utils import describe_size_delta, make_part_filenames, sort_part_filenames
from core.manifest import load_manifest
from core.settings import CombineSettings, SplitSettings
from core.splitter import RangeSplitter
from core.validator import RangeValidator


class ChunkEditService:
    """Business logic for splitting ranges out and combining them back."""

    def __init__(
        self,
        split_settings: Optional[SplitSettings] = None,
        combine_settings: Optional[CombineSettings] = None,
    ):
        self.splitter = RangeSplitter(split_settings)
        self.combiner = RangeCombiner(combine_settings)

    def inspect(self, manifest_path: Union[str, Path]) -> dict:
        """Describe the current state of a split: source size and every part."""
        manifest = load_manifest(manifest_path)
        source = Path(manifest.path)
        source_size = source.stat().st_size if source.exists() else None
        problems = RangeValidator().find_problems(manifest.ranges, source_size)

        part_names = make_part_filenames(manifest.path, len(manifest.ranges))
        parts = []
        for i, (r, name) in enumerate(zip(manifest.ranges, part_names)):
            part_path = Path(name)
            exists = part_path.exists()
            current = part_path.stat().st_size if exists else None
            parts.append({
                "index": i,
                "range": r,
                "file": part_path,
                "exists": exists,
                "original_size": r.length,
                "current_size": current,
                "delta": describe_size_delta(r.length, current) if exists else "missing",
            })

        expected_size = None
        if source_size is not None and not problems and all(p["exists"] for p in parts):
            segments = build_segments(manifest.ranges, source_size)
            expected_size = sum(s.range.length for s in segments if isinstance(s, OriginalSegment))
            expected_size += sum(p["current_size"] for p in parts)

        # part files left over from an earlier split with more ranges
        expected_names = {Path(n).name for n in part_names}
        found = sort_part_filenames([str(p) for p in source.parent.glob(glob.escape(source.name) + ".part.*")])
        stray_parts = [Path(p) for p in found if Path(p).name not in expected_names]

        return {
            "source": source,
            "source_exists": source_size is not None,
            "source_size": source_size,
            "parts": parts,
            "problems": problems,
            "stray_parts": stray_parts,
            "expected_output_size": expected_size,
        }

    def split(
        self,
        source_path: Union[str, Path],
        ranges: Sequence[ByteRange],
        *,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> List[Path]:
        return self.splitter.split(source_path, ranges, progress_callback=progress_callback)

    def combine(
        self,
        manifest_path: Union[str, Path],
        *,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> Path:
        return self.combiner.combine(manifest_path, progress_callback=progress_callback)

    @property
    def last_combine_stats(self) -> dict:
        return self.combiner.last_stats
