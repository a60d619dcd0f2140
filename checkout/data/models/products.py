from __future__ import annotations

from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...errors import IllegalRecordTypeError
from .fields import parse_count

# Snapshot token for a normal (non-promotional) listing
NO_PROMOTION = "null"

PRODUCT_COLUMNS = ["name", "price", "quantity", "promotion"]


class ProductRecord(BaseModel):
    """One catalog listing: the normal listing of a product or its promotional one."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Product name")
    price: int = Field(gt=0, description="Unit price")
    quantity: int = Field(ge=0, description="Units in stock for this listing")
    promotion: Optional[str] = Field(default=None, description="Promotion tag, None for the normal listing")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("price", "quantity", mode="before")
    @classmethod
    def _parse_count(cls, value: Any) -> int:
        return parse_count(value)

    @field_validator("promotion", mode="before")
    @classmethod
    def _parse_promotion(cls, value: Any) -> Any:
        if value is None:
            return None
        if isinstance(value, str):
            value = value.strip()
            if value == NO_PROMOTION:
                return None
            if not value:
                raise ValueError("promotion tag is empty")
        return value

    @property
    def is_promotional(self) -> bool:
        return self.promotion is not None

    def to_row(self) -> dict[str, str]:
        return {
            "name": self.name,
            "price": str(self.price),
            "quantity": str(self.quantity),
            "promotion": self.promotion if self.promotion is not None else NO_PROMOTION,
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any], index: Optional[int] = None) -> "ProductRecord":
        """Build a record from a snapshot row, raising IllegalRecordTypeError on bad fields."""
        for column in PRODUCT_COLUMNS:
            if column not in row:
                raise IllegalRecordTypeError(column, None, index)
        try:
            return cls(**{column: row[column] for column in PRODUCT_COLUMNS})
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "record"
            raise IllegalRecordTypeError(field, row.get(field), index) from exc
