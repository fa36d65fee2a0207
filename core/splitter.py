import logging
import os
from pathlib import Path
from typing import Callable, List, Optional, Sequence, Union

from .base import ByteRange, Manifest
from .exceptions import ManifestFormatError, ShortReadError
from .io_utils import manifest_path_for, part_path_for, read_exact, resize_buffer
from .manifest import save_manifest
from .settings import SplitSettings
from .validator import RangeValidator

logger = logging.getLogger(__name__)


class RangeSplitter:
    """Writes selected byte ranges of a file into standalone part files.

    The manifest (``<source>.spec``) is written before any part file, so a
    run that fails halfway still leaves the record of what was requested.
    """

    def __init__(self, settings: Optional[SplitSettings] = None):
        self.settings = settings or SplitSettings()
        self.validator = RangeValidator()

    def split(
        self,
        source_path: Union[str, Path],
        ranges: Sequence[ByteRange],
        *,
        progress_callback: Optional[Callable[[int, str], None]] = None,
    ) -> List[Path]:
        ok, msg = self.settings.validate()
        if not ok:
            raise ValueError(msg)
        if self.settings.validate_ranges:
            ok, msg = self.validator.validate_order(ranges)
            if not ok:
                raise ManifestFormatError(msg, filepath=str(source_path))

        source = str(source_path)
        manifest = Manifest(path=source, ranges=list(ranges))
        part_paths: List[Path] = []

        with open(source, "rb") as in_file:
            if self.settings.check_bounds:
                file_len = os.fstat(in_file.fileno()).st_size
                ok, msg = self.validator.validate_bounds(manifest.ranges, file_len)
                if not ok:
                    raise ShortReadError(msg, filepath=source, details={"file_len": file_len})

            manifest_path = manifest_path_for(source)
            logger.info(f"writing specification to {manifest_path}...")
            save_manifest(manifest, manifest_path)

            buf = bytearray()
            total = len(manifest.ranges)
            for i, r in enumerate(manifest.ranges):
                part_path = part_path_for(source, i)
                logger.info(f"writing bytes {r.start}-{r.end} to file {part_path}...")
                resize_buffer(buf, r.length)
                in_file.seek(r.start)
                read_exact(in_file, buf, source)
                with open(part_path, "wb") as part_file:
                    part_file.write(buf)
                part_paths.append(Path(part_path))

                if progress_callback:
                    progress_callback(int((i + 1) / total * 100), f"part {i}")

        logger.info("done")
        return part_paths
