# matchtally/utils/counters.py
from typing import Optional

UINT32_MAX = 2**32 - 1
UINT64_MAX = 2**64 - 1


def checked_add(current: int, increment: int, limit: int) -> Optional[int]:
    """Adds two non-negative counts, returning None if the sum exceeds `limit`."""
    total = current + increment
    if total > limit:
        return None
    return total
