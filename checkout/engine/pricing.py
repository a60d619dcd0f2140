from __future__ import annotations

from datetime import date
from typing import Callable, Optional

from ..data.models import (
    AllocationResult,
    LineStatus,
    ProductRecord,
    PromotionRecord,
    PurchaseLineResult,
)
from ..errors import InsufficientStockError, ProductNotFoundError
from ..logging import get_logger
from .allocation import allocate
from .catalog import Catalog
from .promotions import PromotionRegistry

# Answers a pending line: True to accept the offer/notice, False to decline.
Prompt = Callable[[PurchaseLineResult], bool]


class PricingOrchestrator:
    """
    Prices purchase lines against a Catalog and a PromotionRegistry.

    Pricing is a small state machine. `price_line` returns either a COMPLETE
    line or a pending one (SHORTFALL_NOTIFY / UPSELL_OFFER); `confirm` feeds
    the customer's answer back and returns the next state. Stock only changes
    in `commit`, which accepts COMPLETE lines only.
    """

    def __init__(self, catalog: Catalog, promotions: PromotionRegistry) -> None:
        self.catalog = catalog
        self.promotions = promotions
        self.logger = get_logger(__name__)

    # ---------- state machine ----------

    def price_line(self, product_name: str, requested_quantity: int, today: date) -> PurchaseLineResult:
        return self._evaluate(product_name, requested_quantity, today, shortfall_accepted=False)

    def confirm(self, result: PurchaseLineResult, accepted: bool) -> PurchaseLineResult:
        """Apply the customer's yes/no answer to a pending line."""
        name, quantity, today = result.product_name, result.requested_quantity, result.today
        if result.status is LineStatus.SHORTFALL_NOTIFY:
            if accepted:
                return self._evaluate(name, quantity, today, shortfall_accepted=True)
            return self._evaluate(name, max(0, quantity - result.shortfall), today, shortfall_accepted=False)
        if result.status is LineStatus.UPSELL_OFFER:
            if accepted:
                return self._evaluate(name, quantity + result.shortfall, today, shortfall_accepted=False)
            normal, promo, promotion = self._lookup(name, today)
            return self._finalize(normal, promo, promotion, quantity, today, result.allocation)
        raise ValueError(f"Line for '{name}' is not awaiting confirmation")

    def settle(self, product_name: str, requested_quantity: int, today: date, prompt: Prompt) -> PurchaseLineResult:
        """Run a line to completion, asking `prompt` at every pending state."""
        result = self.price_line(product_name, requested_quantity, today)
        while result.status is not LineStatus.COMPLETE:
            result = self.confirm(result, prompt(result))
        return result

    def commit(self, result: PurchaseLineResult) -> None:
        """Deduct the stock a completed line draws, for both listings at once."""
        if result.status is not LineStatus.COMPLETE:
            raise ValueError(f"Cannot commit pending line for '{result.product_name}'")
        self.catalog.deduct_line(
            result.product_name,
            normal_amount=result.normal_stock_used,
            promotional_amount=result.promotional_stock_used,
        )
        self.logger.info(
            f"Committed {result.requested_quantity} x '{result.product_name}' "
            f"(charge={result.charge}, free={result.free_units})"
        )

    # ---------- evaluation ----------

    def _lookup(self, name: str, today: date) -> tuple[ProductRecord, Optional[ProductRecord], Optional[PromotionRecord]]:
        normal = self.catalog.find_normal(name)
        try:
            promo = self.catalog.find_promotional(name)
        except ProductNotFoundError:
            return normal, None, None
        return normal, promo, self.promotions.active_promotion_for(promo.promotion, today)

    def _evaluate(self, name: str, quantity: int, today: date, shortfall_accepted: bool) -> PurchaseLineResult:
        if quantity < 0:
            raise ValueError(f"Requested quantity must not be negative: {quantity}")
        normal, promo, promotion = self._lookup(name, today)

        if promotion is None:
            if quantity > 0 and (not self.catalog.is_available(name) or quantity > normal.quantity):
                raise InsufficientStockError(name, quantity, normal.quantity)
            self.logger.debug(f"'{name}' x{quantity}: no active promotion on {today}")
            return PurchaseLineResult(
                product_name=name,
                requested_quantity=quantity,
                today=today,
                status=LineStatus.COMPLETE,
                unit_price=normal.price,
                charge=normal.price * quantity,
                normal_stock_used=quantity,
            )

        sellable = normal.quantity + promo.quantity
        if quantity > sellable:
            raise InsufficientStockError(name, quantity, sellable)

        allocation = allocate(quantity, promotion.buy, promotion.get, promo.quantity)
        if shortfall_accepted:
            return self._finalize(normal, promo, promotion, quantity, today, allocation)

        if allocation.honored_free_units < allocation.eligible_free_units:
            self.logger.info(
                f"'{name}' x{quantity}: promotional stock covers {allocation.honored_free_units} "
                f"of {allocation.eligible_free_units} free units"
            )
            return self._pending(normal, promotion, quantity, today, allocation,
                                 LineStatus.SHORTFALL_NOTIFY, allocation.shortfall)

        remainder = quantity % promotion.group_size
        if remainder:
            extra = promotion.group_size - remainder
            earned = min(allocation.honored_free_units, (quantity // promotion.group_size) * promotion.get)
            upsold = allocate(quantity + extra, promotion.buy, promotion.get, promo.quantity)
            # Only offer units that bring at least one more honored free unit.
            if quantity + extra <= sellable and upsold.honored_free_units > earned:
                self.logger.info(f"'{name}' x{quantity}: offering {extra} more to complete a group")
                return self._pending(normal, promotion, quantity, today, allocation,
                                     LineStatus.UPSELL_OFFER, extra)

        return self._finalize(normal, promo, promotion, quantity, today, allocation)

    @staticmethod
    def _pending(
        normal: ProductRecord,
        promotion: PromotionRecord,
        quantity: int,
        today: date,
        allocation: AllocationResult,
        status: LineStatus,
        shortfall: int,
    ) -> PurchaseLineResult:
        return PurchaseLineResult(
            product_name=normal.name,
            requested_quantity=quantity,
            today=today,
            status=status,
            unit_price=normal.price,
            promotion_name=promotion.name,
            allocation=allocation,
            shortfall=shortfall,
        )

    def _finalize(
        self,
        normal: ProductRecord,
        promo: Optional[ProductRecord],
        promotion: Optional[PromotionRecord],
        quantity: int,
        today: date,
        allocation: Optional[AllocationResult],
    ) -> PurchaseLineResult:
        if promotion is None or promo is None or allocation is None:
            return PurchaseLineResult(
                product_name=normal.name,
                requested_quantity=quantity,
                today=today,
                status=LineStatus.COMPLETE,
                unit_price=normal.price,
                charge=normal.price * quantity,
                normal_stock_used=quantity,
            )

        # Free units only come from groups completed inside the final quantity.
        completed_groups = quantity // promotion.group_size
        free_units = min(allocation.honored_free_units, completed_groups * promotion.get)
        covered_groups = -(-free_units // promotion.get)
        promotional_used = min(quantity, promo.quantity)

        result = PurchaseLineResult(
            product_name=normal.name,
            requested_quantity=quantity,
            today=today,
            status=LineStatus.COMPLETE,
            unit_price=normal.price,
            promotion_name=promotion.name,
            allocation=allocation,
            charge=normal.price * (quantity - free_units),
            free_units=free_units,
            promotion_covered_units=min(quantity, covered_groups * promotion.group_size),
            normal_stock_used=quantity - promotional_used,
            promotional_stock_used=promotional_used,
        )
        self.logger.debug(f"'{normal.name}' x{quantity}: charge={result.charge}, free={free_units}")
        return result
