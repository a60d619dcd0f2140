from __future__ import annotations

from typing import List

from pydantic import BaseModel, Field


class ReceiptLine(BaseModel):
    """A purchased product line."""
    name: str = Field(description="Product name")
    quantity: int = Field(description="Units taken")
    amount: int = Field(description="Unit price times units taken")


class FreeLine(BaseModel):
    """A product line handed out for free by a promotion."""
    name: str = Field(description="Product name")
    quantity: int = Field(description="Free units")


class ReceiptTotals(BaseModel):
    """Receipt totals."""
    total_quantity: int = Field(description="Units taken across all lines")
    subtotal: int = Field(description="Amount before discounts")
    promotion_discount: int = Field(description="Value of free units")
    membership_discount: int = Field(description="Membership discount")
    final_amount: int = Field(description="Amount to pay")


class Receipt(BaseModel):
    """Numbers behind a printed receipt."""
    purchased: List[ReceiptLine] = Field(default_factory=list, description="Purchased lines")
    free: List[FreeLine] = Field(default_factory=list, description="Promotion lines")
    totals: ReceiptTotals = Field(description="Totals")
