from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal


def attendance_rate(present: int, total: int) -> int:
    """Whole percentage of present over total, rounded half up; 0 when total is 0."""
    if total <= 0:
        return 0
    ratio = Decimal(int(present) * 100) / Decimal(int(total))
    return int(ratio.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
