from __future__ import annotations

from typing import Optional

from ..data.models import AllocationResult


def allocate(
    requested_quantity: int,
    buy: int,
    get: int,
    available_promotional_stock: Optional[int] = None,
) -> AllocationResult:
    """Split a requested quantity into paid and free units under a buy/get promotion.

    Paid units are counted one at a time; every time the paid count reaches a
    multiple of `buy`, `get` free units are earned. Counting stops as soon as
    paid + free units cover `requested_quantity`, so the last group may be
    earned but not fully taken (the caller turns that into an upsell).

    Free units actually honored are capped by `available_promotional_stock`;
    None means unlimited.

    Example:
        allocate(5, buy=2, get=1, available_promotional_stock=10)
        -> normal_units=4, eligible_free_units=2, honored_free_units=2
    """
    if requested_quantity < 0:
        raise ValueError(f"Requested quantity must not be negative: {requested_quantity}")
    if buy <= 0 or get <= 0:
        raise ValueError(f"Buy and get counts must be positive: buy={buy}, get={get}")

    normal_units = 0
    eligible_free_units = 0
    while normal_units + eligible_free_units < requested_quantity:
        normal_units += 1
        if normal_units % buy == 0:
            eligible_free_units += get

    honored = eligible_free_units
    if available_promotional_stock is not None:
        honored = max(0, min(eligible_free_units, available_promotional_stock))

    return AllocationResult(
        normal_units=normal_units,
        eligible_free_units=eligible_free_units,
        honored_free_units=honored,
    )
