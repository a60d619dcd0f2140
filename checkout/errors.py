"""Error taxonomy for the checkout engine.

Validation errors are raised while a Catalog or PromotionRegistry is being
built and are fatal for that construction. Lookup, stock and input errors are
raised per purchase line; the purchase loop reports them and asks again.
"""
from __future__ import annotations

from datetime import date
from typing import Any, Optional


class CheckoutError(Exception):
    """Base class for every error raised by the checkout package."""


# ---- Catalog construction ----

class CatalogValidationError(CheckoutError):
    """Raised when product records cannot form a valid catalog."""


class IllegalRecordTypeError(CatalogValidationError):
    """A product record field does not parse as its semantic type."""

    def __init__(self, field: str, value: Any, row: Optional[int] = None) -> None:
        self.field = field
        self.value = value
        self.row = row
        where = f" in row {row}" if row is not None else ""
        super().__init__(f"Illegal value {value!r} for product field '{field}'{where}")


class MissingNormalListingError(CatalogValidationError):
    """A product has a promotional listing but no normal listing."""

    def __init__(self, name: str) -> None:
        self.name = name
        super().__init__(
            f"Product '{name}' has a promotional listing without a normal listing; "
            "list the normal product with quantity 0 if it is out of stock"
        )


class DuplicateListingError(CatalogValidationError):
    """A product has more than one normal or more than one promotional listing."""

    def __init__(self, name: str, promotional: bool) -> None:
        self.name = name
        self.promotional = promotional
        kind = "promotional" if promotional else "normal"
        super().__init__(f"Product '{name}' has more than one {kind} listing")


# ---- Promotion registry construction ----

class PromotionValidationError(CheckoutError):
    """Raised when promotion records cannot form a valid registry."""


class IllegalPromotionTypeError(PromotionValidationError):
    """A promotion record field does not parse as its semantic type."""

    def __init__(self, field: str, value: Any, row: Optional[int] = None) -> None:
        self.field = field
        self.value = value
        self.row = row
        where = f" in row {row}" if row is not None else ""
        super().__init__(f"Illegal value {value!r} for promotion field '{field}'{where}")


class InvalidDateRangeError(PromotionValidationError):
    """A promotion ends before it starts."""

    def __init__(self, name: str, start_date: date, end_date: date) -> None:
        self.name = name
        self.start_date = start_date
        self.end_date = end_date
        super().__init__(f"Promotion '{name}' ends ({end_date}) before it starts ({start_date})")


class OverlappingPromotionPeriodError(PromotionValidationError):
    """Two promotions with the same name run on a common day."""

    def __init__(self, name: str, first: tuple[date, date], second: tuple[date, date]) -> None:
        self.name = name
        self.first = first
        self.second = second
        super().__init__(
            f"Promotion '{name}' has overlapping periods "
            f"{first[0]}..{first[1]} and {second[0]}..{second[1]}"
        )


# ---- Purchase line ----

class ProductNotFoundError(CheckoutError):
    """No listing exists for the requested product."""

    def __init__(self, name: str, promotional: bool = False) -> None:
        self.name = name
        self.promotional = promotional
        kind = "promotional listing" if promotional else "product"
        super().__init__(f"No {kind} named '{name}'")


class InsufficientStockError(CheckoutError):
    """The requested quantity exceeds the stock that can be sold."""

    def __init__(self, name: str, requested: int, available: int) -> None:
        self.name = name
        self.requested = requested
        self.available = available
        super().__init__(
            f"Cannot take {requested} of '{name}': only {available} in stock"
        )


class InputFormatError(CheckoutError):
    """Console input does not follow the expected format."""

    def __init__(self, text: str, expected: str) -> None:
        self.text = text
        self.expected = expected
        super().__init__(f"Invalid input {text!r}: expected {expected}")
