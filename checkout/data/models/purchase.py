from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from .allocation import AllocationResult


class LineStatus(str, Enum):
    """Where a purchase line stands in the pricing dialogue."""
    COMPLETE = "complete"
    SHORTFALL_NOTIFY = "shortfall_notify"
    UPSELL_OFFER = "upsell_offer"


class PurchaseItem(BaseModel):
    """A single `[name-quantity]` entry of a purchase request."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Requested product name")
    quantity: int = Field(gt=0, description="Requested quantity")


class PurchaseLineResult(BaseModel):
    """Outcome of pricing one purchase line.

    A pending line (SHORTFALL_NOTIFY or UPSELL_OFFER) carries the unit count
    the customer has to confirm in `shortfall`; charge and free units are only
    meaningful once the line is COMPLETE.
    """
    model_config = ConfigDict(frozen=True)

    product_name: str = Field(description="Product name")
    requested_quantity: int = Field(ge=0, description="Quantity this evaluation priced")
    today: date = Field(description="Date the promotion eligibility was evaluated for")
    status: LineStatus = Field(description="Pricing state")
    unit_price: int = Field(gt=0, description="Unit price of the product")
    promotion_name: Optional[str] = Field(default=None, description="Active promotion, if any")
    allocation: Optional[AllocationResult] = Field(default=None, description="Buy/get split, if a promotion applied")
    charge: int = Field(default=0, ge=0, description="Amount owed for the line")
    free_units: int = Field(default=0, ge=0, description="Free units granted")
    shortfall: Optional[int] = Field(default=None, description="Units awaiting customer confirmation")
    promotion_covered_units: int = Field(default=0, ge=0, description="Units inside promotion groups")
    normal_stock_used: int = Field(default=0, ge=0, description="Units drawn from the normal listing on commit")
    promotional_stock_used: int = Field(default=0, ge=0, description="Units drawn from the promotional listing on commit")

    @property
    def success(self) -> bool:
        return self.status is LineStatus.COMPLETE

    @property
    def gross_amount(self) -> int:
        return self.unit_price * self.requested_quantity
