"""
Fractional display ordering.

Moving an item up or down shifts its ``order`` by 1.5, which jumps past the
adjacent integer-spaced neighbour without resequencing the whole list. Only
the relative order of the resulting values is meaningful.
"""

ORDER_STEP = 1.5


def shift_order(current: float, direction: str) -> float:
    if direction == "up":
        return current - ORDER_STEP
    if direction == "down":
        return current + ORDER_STEP
    raise ValueError(f"Unknown direction: {direction}")
