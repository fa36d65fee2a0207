# controller.py

from pathlib import Path
from typing import Dict, List, Optional
import logging

from core.base import ByteRange
from core.exceptions import RangeParseError
from core.io_utils import manifest_path_for
from core.ranges import parse_range

logger = logging.getLogger(__name__)


class ChunkEditController:

    def __init__(self):
        from services.chunk_edit_service import ChunkEditService

        self.service = ChunkEditService()

        self.source: Optional[Path] = None
        self.source_size: int = 0
        self.ranges: List[ByteRange] = []

    def set_source(self, filepath: Path) -> Dict:
        filepath = Path(filepath)
        if not filepath.is_file():
            raise FileNotFoundError(str(filepath))

        self.source = filepath
        self.source_size = filepath.stat().st_size
        self.ranges.clear()
        logger.info(f"Source selected: {filepath.name} ({self.source_size} bytes)")
        return {
            'path': filepath,
            'name': filepath.name,
            'size': self.source_size,
            'size_mb': self.source_size / (1024 * 1024),
            'has_manifest': Path(manifest_path_for(filepath)).exists(),
        }

    def add_range(self, token: str) -> ByteRange:
        """Parse ``token`` and insert it keeping the list sorted by start."""
        r = parse_range(token.strip())
        if self.source is not None and r.end > self.source_size:
            raise RangeParseError(
                f"Range {r} ends beyond the file size {self.source_size}",
                filepath=self.source,
            )
        for existing in self.ranges:
            if r.start < existing.end and existing.start < r.end:
                raise RangeParseError(f"Range {r} overlaps {existing}", filepath=self.source)
            if r == existing:
                raise RangeParseError(f"Range {r} is already selected", filepath=self.source)

        self.ranges.append(r)
        self.ranges.sort(key=lambda x: (x.start, x.end))
        logger.info(f"Added range {r}")
        return r

    def remove_range(self, index: int) -> bool:
        if 0 <= index < len(self.ranges):
            removed = self.ranges.pop(index)
            logger.info(f"Removed range {removed}")
            return True
        return False

    def clear_ranges(self):
        self.ranges.clear()
        logger.info("All ranges cleared")

    def get_range_count(self) -> int:
        return len(self.ranges)

    def selected_bytes(self) -> int:
        return sum(r.length for r in self.ranges)

    def validate_split_request(self) -> tuple[bool, str]:
        if self.source is None:
            return False, "Не выбран исходный файл"
        if not self.ranges:
            return False, "Не добавлено ни одного диапазона"
        return True, "OK"

    def manifest_path(self) -> Optional[Path]:
        if self.source is None:
            return None
        return Path(manifest_path_for(self.source))

    def inspect_manifest(self, manifest_path: Path) -> Dict:
        info = self.service.inspect(manifest_path)
        logger.info(f"Manifest inspected: {manifest_path.name}, {len(info['parts'])} parts")
        return info
