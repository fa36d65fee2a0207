import logging
import os
from pathlib import Path
from typing import Callable, Dict, List, Optional, Sequence, Union

from .base import ByteRange, EditedSegment, Manifest, OriginalSegment, Segment
from .exceptions import ChunkEditError, ManifestFormatError, ShortReadError
from .io_utils import copy_region, describe_size_delta, make_part_filenames, output_path_for, part_path_for
from .manifest import load_manifest
from .settings import CombineSettings
from .validator import RangeValidator

logger = logging.getLogger(__name__)


def build_segments(ranges: Sequence[ByteRange], file_len: int) -> List[Segment]:
    """Partition ``[0, file_len)`` into original gaps and edited ranges.

    ``ranges`` must be ascending and non-overlapping. A trailing original
    segment is always emitted, even when it is empty.
    """
    segments: List[Segment] = []
    last_end = 0
    for i, r in enumerate(ranges):
        if r.start > last_end:
            segments.append(OriginalSegment(ByteRange(last_end, r.start)))
        segments.append(EditedSegment(i, r))
        last_end = r.end
    segments.append(OriginalSegment(ByteRange(last_end, file_len)))
    return segments


class RangeCombiner:
    """Rebuilds a file from its manifest, substituting the edited part files."""

    def __init__(self, settings: Optional[CombineSettings] = None):
        self.settings = settings or CombineSettings()
        self.validator = RangeValidator()
        self.last_stats: Dict = {}

    def load(self, manifest_path: Union[str, Path]) -> Manifest:
        manifest = load_manifest(manifest_path)
        if self.settings.validate_manifest:
            ok, msg = self.validator.validate_order(manifest.ranges)
            if not ok:
                raise ManifestFormatError(msg, filepath=str(manifest_path))
        return manifest

    def combine(
        self,
        manifest_path: Union[str, Path],
        *,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> Path:
        ok, msg = self.settings.validate()
        if not ok:
            raise ValueError(msg)

        manifest = self.load(manifest_path)
        source = manifest.path
        out_path = Path(self.settings.output_path or output_path_for(source))
        self._check_output_path(out_path, manifest_path, source, len(manifest.ranges))

        with open(source, "rb") as in_file:
            file_len = os.fstat(in_file.fileno()).st_size
            if self.settings.validate_manifest:
                ok, msg = self.validator.validate_bounds(manifest.ranges, file_len)
                if not ok:
                    raise ShortReadError(msg, filepath=source, details={"file_len": file_len})
            segments = build_segments(manifest.ranges, file_len)
            logger.info(f"combining {source} ({file_len} bytes, {len(segments)} segments) into {out_path}")

            stats = {
                "source": source,
                "source_size": file_len,
                "segments": segments,
                "deltas": {},
                "part_sizes": {},
                "output_size": 0,
            }
            buf = bytearray()
            with open(out_path, "wb") as out_file:
                for n, segment in enumerate(segments):
                    if isinstance(segment, OriginalSegment):
                        written = self._copy_original(in_file, out_file, segment, buf, source)
                    elif isinstance(segment, EditedSegment):
                        written = self._copy_edited(out_file, segment, buf, source)
                        stats["deltas"][segment.index] = written - segment.range.length
                        stats["part_sizes"][segment.index] = (segment.range.length, written)
                    else:
                        raise TypeError(f"unknown segment type: {segment!r}")
                    stats["output_size"] += written

                    if progress_callback:
                        progress_callback(int((n + 1) / len(segments) * 100), f"segment {n + 1}/{len(segments)}")

        self.last_stats = stats
        logger.info("done")
        return out_path

    @staticmethod
    def _check_output_path(out_path: Path, manifest_path, source: str, parts_count: int) -> None:
        """The output may not replace the source, the manifest or a part file."""
        target = out_path.resolve()
        for name in [source, str(manifest_path)] + make_part_filenames(source, parts_count):
            if Path(name).resolve() == target:
                raise ChunkEditError(
                    f"output {out_path} would overwrite input file {name}",
                    filepath=str(out_path),
                )

    def _copy_original(self, in_file, out_file, segment: OriginalSegment, buf: bytearray, source: str) -> int:
        return copy_region(
            in_file,
            out_file,
            segment.range.start,
            segment.range.end,
            buf,
            chunk_size=self.settings.chunk_size,
            name=source,
        )

    def _copy_edited(self, out_file, segment: EditedSegment, buf: bytearray, source: str) -> int:
        part_path = part_path_for(source, segment.index)
        with open(part_path, "rb") as part_file:
            del buf[:]
            buf += part_file.read()

        new_len = len(buf)
        diff = describe_size_delta(segment.range.length, new_len)
        logger.info(f"copying {new_len} bytes from {part_path} ({diff})...")
        out_file.write(buf)
        return new_len
