from .products import ProductRecord, NO_PROMOTION, PRODUCT_COLUMNS
from .promotions import PromotionRecord, PROMOTION_COLUMNS
from .allocation import AllocationResult
from .purchase import LineStatus, PurchaseItem, PurchaseLineResult
from .receipt import (
    ReceiptLine,
    FreeLine,
    ReceiptTotals,
    Receipt,
)

__all__ = [
    # Snapshot records
    "ProductRecord",
    "PromotionRecord",
    "NO_PROMOTION",
    "PRODUCT_COLUMNS",
    "PROMOTION_COLUMNS",
    # Pricing models
    "AllocationResult",
    "LineStatus",
    "PurchaseItem",
    "PurchaseLineResult",
    # Receipt models
    "ReceiptLine",
    "FreeLine",
    "ReceiptTotals",
    "Receipt",
]
