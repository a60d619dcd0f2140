from __future__ import annotations

from typing import Callable

from ..data.models import Receipt
from ..engine.catalog import Catalog


class OutputView:
    """Console rendering of the inventory, errors and receipts."""

    def __init__(self, writer: Callable[[str], None] = print) -> None:
        self.writer = writer

    def welcome(self) -> None:
        self.writer("Welcome to the convenience store.\nHere is what we have in stock.\n")

    def show_inventory(self, catalog: Catalog) -> None:
        for record in catalog.records:
            stock = f"{record.quantity:,}" if record.quantity > 0 else "out of stock"
            tag = f" {record.promotion}" if record.promotion else ""
            self.writer(f"- {record.name} {record.price:,} {stock}{tag}")

    def show_error(self, error: Exception) -> None:
        self.writer(f"[ERROR] {error}")

    def show_receipt(self, receipt: Receipt) -> None:
        self.writer("==============STORE================")
        self.writer(f"{'product':<16}{'qty':>6}{'amount':>12}")
        for line in receipt.purchased:
            self.writer(f"{line.name:<16}{line.quantity:>6}{line.amount:>12,}")
        if receipt.free:
            self.writer("=============FREE==================")
            for line in receipt.free:
                self.writer(f"{line.name:<16}{line.quantity:>6}")
        totals = receipt.totals
        self.writer("====================================")
        self.writer(f"{'total':<16}{totals.total_quantity:>6}{totals.subtotal:>12,}")
        self.writer(f"{'promotion':<22}{-totals.promotion_discount:>12,}")
        self.writer(f"{'membership':<22}{-totals.membership_discount:>12,}")
        self.writer(f"{'to pay':<22}{totals.final_amount:>12,}")
