from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from ...errors import IllegalPromotionTypeError
from .fields import parse_count, parse_date

PROMOTION_COLUMNS = ["name", "buy", "get", "start_date", "end_date"]


class PromotionRecord(BaseModel):
    """A buy/get promotion running over an inclusive date range."""
    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Promotion name, referenced by promotional listings")
    buy: int = Field(gt=0, description="Paid units per group")
    get: int = Field(gt=0, description="Free units per group")
    start_date: date = Field(description="First day the promotion applies")
    end_date: date = Field(description="Last day the promotion applies")

    @field_validator("name", mode="before")
    @classmethod
    def _strip_name(cls, value: Any) -> Any:
        return value.strip() if isinstance(value, str) else value

    @field_validator("buy", "get", mode="before")
    @classmethod
    def _parse_count(cls, value: Any) -> int:
        return parse_count(value)

    @field_validator("start_date", "end_date", mode="before")
    @classmethod
    def _parse_date(cls, value: Any) -> date:
        return parse_date(value)

    @property
    def group_size(self) -> int:
        return self.buy + self.get

    @property
    def period(self) -> tuple[date, date]:
        return (self.start_date, self.end_date)

    def covers(self, day: date) -> bool:
        return self.start_date <= day <= self.end_date

    def overlaps(self, other: "PromotionRecord") -> bool:
        return self.start_date <= other.end_date and other.start_date <= self.end_date

    def to_row(self) -> dict[str, str]:
        return {
            "name": self.name,
            "buy": str(self.buy),
            "get": str(self.get),
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
        }

    @classmethod
    def from_row(cls, row: Mapping[str, Any], index: Optional[int] = None) -> "PromotionRecord":
        """Build a record from a snapshot row, raising IllegalPromotionTypeError on bad fields."""
        for column in PROMOTION_COLUMNS:
            if column not in row:
                raise IllegalPromotionTypeError(column, None, index)
        try:
            return cls(**{column: row[column] for column in PROMOTION_COLUMNS})
        except ValidationError as exc:
            error = exc.errors()[0]
            field = str(error["loc"][0]) if error["loc"] else "record"
            raise IllegalPromotionTypeError(field, row.get(field), index) from exc
