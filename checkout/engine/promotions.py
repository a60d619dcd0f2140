from __future__ import annotations

from collections import OrderedDict
from datetime import date
from itertools import combinations
from typing import Iterable, List, Mapping, Optional, Union

from ..data.models import PromotionRecord
from ..errors import InvalidDateRangeError, OverlappingPromotionPeriodError
from ..logging import get_logger

PromotionRow = Union[PromotionRecord, Mapping[str, object]]


class PromotionRegistry:
    """Immutable table of buy/get promotions, validated at construction."""

    def __init__(self, records: Iterable[PromotionRow]) -> None:
        self.logger = get_logger(__name__)
        self._records: tuple[PromotionRecord, ...] = tuple(self.validate(records))
        self.logger.info(f"Promotion registry loaded with {len(self._records)} promotions")

    @staticmethod
    def validate(records: Iterable[PromotionRow]) -> List[PromotionRecord]:
        """Parse and check promotion rows.

        Raises:
            IllegalPromotionTypeError: buy/get is not a positive integer or a date does not parse.
            InvalidDateRangeError: end date precedes start date.
            OverlappingPromotionPeriodError: two same-named promotions share a day.
        """
        parsed: List[PromotionRecord] = []
        for index, record in enumerate(records):
            if not isinstance(record, PromotionRecord):
                record = PromotionRecord.from_row(record, index)
            if record.end_date < record.start_date:
                raise InvalidDateRangeError(record.name, record.start_date, record.end_date)
            parsed.append(record)

        by_name: "OrderedDict[str, List[PromotionRecord]]" = OrderedDict()
        for record in parsed:
            by_name.setdefault(record.name, []).append(record)

        for name, periods in by_name.items():
            for first, second in combinations(periods, 2):
                if first.overlaps(second):
                    raise OverlappingPromotionPeriodError(name, first.period, second.period)
        return parsed

    @property
    def records(self) -> tuple[PromotionRecord, ...]:
        return self._records

    def active_promotion_for(self, promotion_name: str, today: date) -> Optional[PromotionRecord]:
        """Return the promotion named `promotion_name` running on `today`, if any."""
        for record in self._records:
            if record.name == promotion_name and record.covers(today):
                return record
        return None
