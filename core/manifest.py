import json
import logging
from pathlib import Path
from typing import Any, Union

from .base import ByteRange, Manifest
from .exceptions import ManifestFormatError
from .ranges import U64_MAX

logger = logging.getLogger(__name__)


def save_manifest(manifest: Manifest, manifest_path: Union[str, Path]) -> None:
    """Write ``manifest`` as compact JSON; errors opening/writing propagate."""
    with open(manifest_path, "w", encoding="utf-8") as f:
        json.dump(manifest.to_dict(), f, ensure_ascii=False, separators=(",", ":"))


def _offset(value: Any, field_name: str, idx: int, manifest_path) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int) or not 0 <= value <= U64_MAX:
        raise ManifestFormatError(
            f"range {idx}: {field_name!r} must be an unsigned 64-bit integer, got {value!r}",
            filepath=manifest_path,
        )
    return value


def manifest_from_dict(data: Any, manifest_path=None) -> Manifest:
    if not isinstance(data, dict):
        raise ManifestFormatError("manifest must be a JSON object", filepath=manifest_path)
    path = data.get("path")
    if not isinstance(path, str):
        raise ManifestFormatError("manifest field 'path' must be a string", filepath=manifest_path)
    raw_ranges = data.get("ranges")
    if not isinstance(raw_ranges, list):
        raise ManifestFormatError("manifest field 'ranges' must be a list", filepath=manifest_path)

    ranges = []
    for idx, item in enumerate(raw_ranges):
        if not isinstance(item, dict):
            raise ManifestFormatError(f"range {idx} must be an object", filepath=manifest_path)
        start = _offset(item.get("start"), "start", idx, manifest_path)
        end = _offset(item.get("end"), "end", idx, manifest_path)
        if start > end:
            raise ManifestFormatError(
                f"range {idx}: start {start} is after end {end}", filepath=manifest_path
            )
        ranges.append(ByteRange(start, end))
    return Manifest(path=path, ranges=ranges)


def load_manifest(manifest_path: Union[str, Path]) -> Manifest:
    """Read a manifest written by :func:`save_manifest`.

    A missing or unreadable file raises ``OSError``; content that is not a
    valid manifest raises :class:`ManifestFormatError`.
    """
    with open(manifest_path, "rb") as f:
        raw = f.read()
    try:
        data = json.loads(raw.decode("utf-8"))
    except (UnicodeDecodeError, json.JSONDecodeError) as e:
        raise ManifestFormatError(
            f"manifest {manifest_path} is not valid JSON: {e}", filepath=manifest_path
        ) from e
    manifest = manifest_from_dict(data, manifest_path)
    logger.debug(f"Loaded manifest {manifest_path}: {len(manifest.ranges)} ranges")
    return manifest
