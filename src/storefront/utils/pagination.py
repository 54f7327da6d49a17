import math


def clamp_limit(limit: int | None, default: int, maximum: int) -> int:
    """Return ``limit`` bounded to ``1..maximum``, or ``default`` when absent."""
    if limit is None:
        return default
    return max(1, min(int(limit), maximum))


def offset_for(page: int, limit: int) -> int:
    return (max(1, int(page)) - 1) * limit


def total_pages(total: int, limit: int) -> int:
    return math.ceil(total / limit) if limit else 0
