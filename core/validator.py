import logging
from typing import List, Optional, Sequence, Tuple

from .base import ByteRange

logger = logging.getLogger(__name__)


class RangeValidator:

    def validate_order(self, ranges: Sequence[ByteRange]) -> Tuple[bool, Optional[str]]:
        """Ranges must be ascending by start and must not overlap.

        Adjacent ranges (``a.end == b.start``) and empty ranges are allowed.
        """
        last_end = 0
        for i, r in enumerate(ranges):
            if r.start > r.end:
                return False, f"Range {i} ({r}) has start after end"
            if r.start < last_end:
                if i > 0 and r.start < ranges[i - 1].start:
                    return False, f"Range {i} ({r}) is not sorted after range {i - 1} ({ranges[i - 1]})"
                return False, f"Range {i} ({r}) overlaps range {i - 1} ({ranges[i - 1]})"
            last_end = r.end
        return True, None

    def validate_bounds(self, ranges: Sequence[ByteRange], file_len: int) -> Tuple[bool, Optional[str]]:
        for i, r in enumerate(ranges):
            if r.end > file_len:
                return False, f"Range {i} ({r}) ends beyond the source length {file_len}"
        return True, None

    def find_problems(self, ranges: Sequence[ByteRange], file_len: Optional[int] = None) -> List[str]:
        problems = []
        ok, msg = self.validate_order(ranges)
        if not ok:
            problems.append(msg)
        if file_len is not None:
            ok, msg = self.validate_bounds(ranges, file_len)
            if not ok:
                problems.append(msg)
        for problem in problems:
            logger.debug(problem)
        return problems
