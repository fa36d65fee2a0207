import hashlib
import logging
import re
from pathlib import Path
from typing import BinaryIO, List, Union

from .exceptions import ShortReadError

logger = logging.getLogger(__name__)

CHUNK_SIZE = 16 * 1024 * 1024
MANIFEST_SUFFIX = ".spec"
PART_SUFFIX_FMT = ".part.{idx}"
OUTPUT_SUFFIX = ".new"

PathLike = Union[str, Path]


def manifest_path_for(source_path: PathLike) -> str:
    return str(source_path) + MANIFEST_SUFFIX


def part_path_for(source_path: PathLike, idx: int) -> str:
    return str(source_path) + PART_SUFFIX_FMT.format(idx=idx)


def output_path_for(source_path: PathLike) -> str:
    return str(source_path) + OUTPUT_SUFFIX


def make_part_filenames(source_path: PathLike, parts_count: int) -> List[str]:
    return [part_path_for(source_path, i) for i in range(parts_count)]


def sort_part_filenames(file_list: List[str]) -> List[str]:
    """
    Sort part files by their ``.part.N`` index.
    Example: file.bin.part.10, file.bin.part.2 -> [part.2, part.10]
    """
    pattern = re.compile(r"\.part\.(\d+)$")

    def extract_idx(fname):
        m = pattern.search(fname)
        if m:
            return int(m.group(1))
        return float('inf')
    return sorted(file_list, key=extract_idx)


def resize_buffer(buf: bytearray, new_size: int) -> None:
    """Grow or truncate ``buf`` in place so that ``len(buf) == new_size``."""
    buf_len = len(buf)
    if buf_len < new_size:
        buf.extend(bytes(new_size - buf_len))
    elif buf_len > new_size:
        del buf[new_size:]


def read_exact(f: BinaryIO, buf: bytearray, name: str = "") -> None:
    """Fill the whole of ``buf`` from ``f`` or raise :class:`ShortReadError`."""
    filled = 0
    wanted = len(buf)
    with memoryview(buf) as view:
        while filled < wanted:
            n = f.readinto(view[filled:])
            if not n:
                raise ShortReadError(
                    f"short read from {name or f}: got {filled} of {wanted} bytes",
                    filepath=name or None,
                    details={"wanted": wanted, "got": filled},
                )
            filled += n


def copy_region(
    src: BinaryIO,
    dst: BinaryIO,
    start: int,
    end: int,
    buf: bytearray,
    *,
    chunk_size: int = CHUNK_SIZE,
    name: str = "",
) -> int:
    """Copy ``src[start:end]`` to ``dst`` through ``buf`` in bounded chunks.

    Returns the number of bytes copied.
    """
    src.seek(start)
    remaining = end - start
    chunks = -(-remaining // chunk_size)
    idx = 0
    copied = 0
    while remaining > 0:
        next_chunk = min(remaining, chunk_size)
        resize_buffer(buf, next_chunk)
        read_exact(src, buf, name)
        dst.write(buf)
        idx += 1
        logger.info(f"copying {next_chunk} bytes from {name} (chunk {idx}/{chunks})...")
        remaining -= next_chunk
        copied += next_chunk
    return copied


def describe_size_delta(old_len: int, new_len: int) -> str:
    if old_len == new_len:
        return "same size"
    if old_len < new_len:
        return f"+{new_len - old_len} bytes"
    return f"-{old_len - new_len} bytes"


def md5_file(path: PathLike, chunk_size: int = 1024 * 1024) -> str:
    h = hashlib.md5()
    with open(path, "rb") as f:
        for chunk in iter(lambda: f.read(chunk_size), b""):
            h.update(chunk)
    return h.hexdigest()
