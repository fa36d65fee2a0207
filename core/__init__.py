from .base import (
    ByteRange,
    EditedSegment,
    Manifest,
    OperationResult,
    OperationStatus,
    OriginalSegment,
    Segment,
)
from .exceptions import ChunkEditError, ManifestFormatError, RangeParseError, ShortReadError
from .ranges import parse_range
from .manifest import load_manifest, save_manifest
from .settings import SplitSettings, CombineSettings
from .splitter import RangeSplitter
from .combiner import RangeCombiner, build_segments

__all__ = [
    "ByteRange",
    "EditedSegment",
    "Manifest",
    "OperationResult",
    "OperationStatus",
    "OriginalSegment",
    "Segment",
    "ChunkEditError",
    "ManifestFormatError",
    "RangeParseError",
    "ShortReadError",
    "parse_range",
    "load_manifest",
    "save_manifest",
    "SplitSettings",
    "CombineSettings",
    "RangeSplitter",
    "RangeCombiner",
    "build_segments",
]
