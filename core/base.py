# core/base.py

from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Dict, List, Union


class OperationStatus(Enum):
    PENDING = "pending"
    PROCESSING = "processing"
    COMPLETED = "completed"
    FAILED = "failed"


@dataclass(frozen=True)
class ByteRange:
    """Half-open byte interval ``[start, end)`` of the source file."""
    start: int
    end: int

    @property
    def length(self) -> int:
        return self.end - self.start

    def to_dict(self) -> Dict[str, int]:
        return {"start": self.start, "end": self.end}

    def __str__(self) -> str:
        return f"{self.start}-{self.end}"


@dataclass
class Manifest:
    """Source path plus the ranges that were split out of it.

    ``ranges[i]`` belongs to part file ``i``.
    """
    path: str
    ranges: List[ByteRange] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return {"path": self.path, "ranges": [r.to_dict() for r in self.ranges]}


@dataclass(frozen=True)
class OriginalSegment:
    """Bytes copied verbatim from the current source file."""
    range: ByteRange


@dataclass(frozen=True)
class EditedSegment:
    """Manifest range whose content now comes from part file ``index``."""
    index: int
    range: ByteRange


Segment = Union[OriginalSegment, EditedSegment]


@dataclass
class OperationResult:
    """Результат операции split/combine"""
    success: bool
    output_files: list[Path]
    stats: Dict[str, Any]
    errors: list[str] = None
    status: OperationStatus = OperationStatus.COMPLETED

    def __post_init__(self):
        if self.errors is None:
            self.errors = []
