"""
app.py

Console checkout loop: shows the inventory, takes a purchase request, walks
each line through the promotion dialogue, prints the receipt and saves the
updated product snapshot.

Run:
  python -m checkout.app [--data-dir sample_data] [--date 2026-11-15]
"""
from __future__ import annotations

import argparse
from datetime import date
from typing import Callable, List, Optional

from .config import AppConfig, get_config
from .console.input_view import InputView
from .console.output_view import OutputView
from .data.backends.csv_backend import CsvSnapshotStore
from .data.interface import SnapshotStore
from .data.models import PurchaseLineResult
from .engine.catalog import Catalog
from .engine.pricing import PricingOrchestrator
from .engine.promotions import PromotionRegistry
from .engine.receipt import compose_receipt
from .errors import (
    CatalogValidationError,
    InsufficientStockError,
    ProductNotFoundError,
    PromotionValidationError,
)
from .logging import get_logger


class CheckoutSession:
    """One register session over a loaded catalog and promotion registry."""

    def __init__(
        self,
        catalog: Catalog,
        promotions: PromotionRegistry,
        store: SnapshotStore,
        config: AppConfig,
        input_view: Optional[InputView] = None,
        output_view: Optional[OutputView] = None,
        today: Callable[[], date] = date.today,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.config = config
        self.input_view = input_view or InputView()
        self.output_view = output_view or OutputView()
        self.today = today
        self.orchestrator = PricingOrchestrator(catalog, promotions)
        self.logger = get_logger(__name__)

    def run(self) -> None:
        self.output_view.welcome()
        while True:
            self.purchase_once()
            if not self.input_view.confirm_continue():
                return

    def purchase_once(self) -> None:
        self.output_view.show_inventory(self.catalog)
        lines = self._take_order()
        for line in lines:
            self.orchestrator.commit(line)

        membership = self.input_view.confirm_membership()
        receipt = compose_receipt(
            lines,
            membership=membership,
            rate=self.config.membership_discount_rate,
            cap=self.config.membership_discount_cap,
        )
        self.output_view.show_receipt(receipt)
        self.store.save_catalog(self.catalog)
        self.logger.info(f"Purchase of {len(lines)} lines completed, paid {receipt.totals.final_amount}")

    def _take_order(self) -> List[PurchaseLineResult]:
        while True:
            items = self.input_view.read_purchase()
            today = self.today()
            try:
                return [
                    self.orchestrator.settle(item.name, item.quantity, today, self.input_view.confirm_line)
                    for item in items
                ]
            except (ProductNotFoundError, InsufficientStockError) as exc:
                self.logger.warning(f"Purchase request rejected: {exc}")
                self.output_view.show_error(exc)


def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()
    logger = get_logger(__name__)

    parser = argparse.ArgumentParser(description="Convenience store checkout.")
    parser.add_argument("--data-dir", type=str, default=config.data_dir)
    parser.add_argument("--date", type=date.fromisoformat, default=None, help="YYYY-MM-DD (defaults to today)")
    args = parser.parse_args(argv)

    store = CsvSnapshotStore(
        data_dir=args.data_dir,
        products_file=config.products_file,
        promotions_file=config.promotions_file,
    )
    try:
        catalog = Catalog(store.load_product_rows())
        promotions = PromotionRegistry(store.load_promotion_rows())
    except (CatalogValidationError, PromotionValidationError) as exc:
        logger.error(f"Snapshot rejected: {exc}")
        print(f"[ERROR] {exc}")
        return 1

    fixed_day = args.date
    session = CheckoutSession(
        catalog,
        promotions,
        store,
        config,
        today=(lambda: fixed_day) if fixed_day else date.today,
    )
    session.run()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
