import re

from .base import ByteRange
from .exceptions import RangeParseError

U64_MAX = 2 ** 64 - 1

_UINT_RE = re.compile(r"[0-9]+")


def _parse_offset(text: str, token: str) -> int:
    if not _UINT_RE.fullmatch(text):
        raise RangeParseError(
            f"invalid range {token!r}: {text!r} is not an unsigned integer",
            details={"token": token},
        )
    value = int(text)
    if value > U64_MAX:
        raise RangeParseError(
            f"invalid range {token!r}: {value} does not fit in 64 bits",
            details={"token": token},
        )
    return value


def parse_range(token: str) -> ByteRange:
    """Parse a ``START-END`` token into a :class:`ByteRange`.

    Both offsets are decimal byte positions; ``END`` is exclusive.
    """
    halves = token.split("-")
    if len(halves) != 2:
        raise RangeParseError(
            f"invalid range {token!r}: expected exactly one '-' between START and END",
            details={"token": token},
        )
    start = _parse_offset(halves[0], token)
    end = _parse_offset(halves[1], token)
    if start > end:
        raise RangeParseError(
            f"invalid range {token!r}: start {start} is after end {end}",
            details={"token": token},
        )
    return ByteRange(start, end)
