from __future__ import annotations

from decimal import ROUND_DOWN, Decimal
from typing import Iterable

from ..data.models import FreeLine, LineStatus, PurchaseLineResult, Receipt, ReceiptLine, ReceiptTotals


def membership_discount(lines: Iterable[PurchaseLineResult], rate: float, cap: int) -> int:
    """Flat-rate discount on the amount not covered by promotion groups, capped at `cap`."""
    uncovered = sum(line.unit_price * (line.requested_quantity - line.promotion_covered_units) for line in lines)
    discount = (Decimal(uncovered) * Decimal(str(rate))).to_integral_value(rounding=ROUND_DOWN)
    return min(cap, int(discount))


def compose_receipt(
    lines: Iterable[PurchaseLineResult],
    membership: bool,
    rate: float,
    cap: int,
) -> Receipt:
    """Build receipt numbers from completed purchase lines."""
    lines = list(lines)
    for line in lines:
        if line.status is not LineStatus.COMPLETE:
            raise ValueError(f"Line for '{line.product_name}' is still pending")

    purchased = [
        ReceiptLine(name=line.product_name, quantity=line.requested_quantity, amount=line.gross_amount)
        for line in lines
        if line.requested_quantity > 0
    ]
    free = [FreeLine(name=line.product_name, quantity=line.free_units) for line in lines if line.free_units > 0]

    subtotal = sum(line.gross_amount for line in lines)
    promotion = sum(line.unit_price * line.free_units for line in lines)
    member = membership_discount(lines, rate, cap) if membership else 0

    return Receipt(
        purchased=purchased,
        free=free,
        totals=ReceiptTotals(
            total_quantity=sum(line.requested_quantity for line in lines),
            subtotal=subtotal,
            promotion_discount=promotion,
            membership_discount=member,
            final_amount=subtotal - promotion - member,
        ),
    )
