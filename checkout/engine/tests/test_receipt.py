from datetime import date

import pytest

from checkout.data.models import LineStatus, PurchaseLineResult
from checkout.engine.receipt import compose_receipt, membership_discount

TODAY = date(2024, 6, 1)


def line(name, price, quantity, free=0, covered=0, status=LineStatus.COMPLETE):
    return PurchaseLineResult(
        product_name=name,
        requested_quantity=quantity,
        today=TODAY,
        status=status,
        unit_price=price,
        charge=price * (quantity - free),
        free_units=free,
        promotion_covered_units=covered,
        normal_stock_used=quantity,
    )


def test_plain_purchase_totals():
    receipt = compose_receipt(
        [line("vitamin_water", 1500, 3), line("water", 500, 2), line("lunch_box", 6400, 2)],
        membership=False,
        rate=0.3,
        cap=8000,
    )
    assert receipt.totals.total_quantity == 7
    assert receipt.totals.subtotal == 18300
    assert receipt.totals.final_amount == 18300
    assert receipt.free == []


def test_promotion_and_membership_discounts():
    receipt = compose_receipt(
        [line("water", 500, 3), line("cola", 1000, 6, free=2, covered=6)],
        membership=True,
        rate=0.3,
        cap=8000,
    )
    assert [(p.name, p.quantity, p.amount) for p in receipt.purchased] == [("water", 3, 1500), ("cola", 6, 6000)]
    assert [(f.name, f.quantity) for f in receipt.free] == [("cola", 2)]
    assert receipt.totals.subtotal == 7500
    assert receipt.totals.promotion_discount == 2000
    assert receipt.totals.membership_discount == 450
    assert receipt.totals.final_amount == 5050


def test_membership_discount_excludes_promotion_groups_only():
    """Units outside completed promotion groups still earn the membership discount."""
    assert membership_discount([line("cola", 1000, 5, free=1, covered=3)], rate=0.3, cap=8000) == 600


def test_membership_discount_is_capped():
    assert membership_discount([line("lunch_box", 6400, 5)], rate=0.3, cap=8000) == 8000


def test_pending_lines_are_rejected():
    pending = line("cola", 1000, 5, status=LineStatus.UPSELL_OFFER)
    with pytest.raises(ValueError):
        compose_receipt([pending], membership=False, rate=0.3, cap=8000)
