# core/settings.py
"""
Settings for split and combine operations.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from .io_utils import CHUNK_SIZE


@dataclass
class SplitSettings:
    """Settings for splitting ranges out of a source file"""
    validate_ranges: bool = False
    check_bounds: bool = True

    def validate(self) -> tuple[bool, str]:
        return True, "OK"


@dataclass
class CombineSettings:
    """Settings for combining part files back into the source"""
    chunk_size: int = CHUNK_SIZE
    validate_manifest: bool = True
    output_path: Optional[Path] = None

    def validate(self) -> tuple[bool, str]:
        if self.chunk_size < 1:
            return False, "Chunk size must be at least 1 byte"
        if self.chunk_size > 1024 * 1024 * 1024:
            return False, "Chunk size must not exceed 1 GiB"
        return True, "OK"
