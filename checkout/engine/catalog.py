from __future__ import annotations

from collections import OrderedDict
from typing import Iterable, List, Mapping, Optional, Union

import pandas as pd

from ..data.models import PRODUCT_COLUMNS, ProductRecord
from ..errors import (
    DuplicateListingError,
    InsufficientStockError,
    MissingNormalListingError,
    ProductNotFoundError,
)
from ..logging import get_logger

ProductRow = Union[ProductRecord, Mapping[str, object]]


class Catalog:
    """
    In-memory product table.
    - Validated once at construction; an invalid table never exists.
    - Each product name has exactly one normal listing and at most one promotional listing.
    - Stock changes only through `deduct` / `deduct_line`.
    """

    def __init__(self, records: Iterable[ProductRow]) -> None:
        self.logger = get_logger(__name__)
        self._records: List[ProductRecord] = self.validate(records)
        self.logger.info(f"Catalog loaded with {len(self._records)} listings")

    # ---------- validation ----------

    @staticmethod
    def validate(records: Iterable[ProductRow]) -> List[ProductRecord]:
        """Parse and check product rows.

        Raises:
            IllegalRecordTypeError: a field does not parse as its type.
            DuplicateListingError: a name has two normal or two promotional listings.
            MissingNormalListingError: a name has only a promotional listing.
        """
        parsed: List[ProductRecord] = []
        for index, record in enumerate(records):
            if not isinstance(record, ProductRecord):
                record = ProductRecord.from_row(record, index)
            parsed.append(record)

        by_name: "OrderedDict[str, List[ProductRecord]]" = OrderedDict()
        for record in parsed:
            by_name.setdefault(record.name, []).append(record)

        for name, listings in by_name.items():
            normal = [r for r in listings if not r.is_promotional]
            promotional = [r for r in listings if r.is_promotional]
            if len(normal) > 1:
                raise DuplicateListingError(name, promotional=False)
            if len(promotional) > 1:
                raise DuplicateListingError(name, promotional=True)
            if not normal:
                raise MissingNormalListingError(name)
        return parsed

    # ---------- lookups ----------

    @property
    def records(self) -> tuple[ProductRecord, ...]:
        return tuple(self._records)

    def product_names(self) -> List[str]:
        return list(OrderedDict.fromkeys(r.name for r in self._records))

    def listings(self, name: str) -> List[ProductRecord]:
        return [r for r in self._records if r.name == name]

    def is_available(self, name: str) -> bool:
        """True when the normal listing of `name` has stock.

        Promotional stock is not consulted here.
        """
        index = self._index_of(name, promotional=False)
        return index is not None and self._records[index].quantity > 0

    def find_normal(self, name: str) -> ProductRecord:
        return self._find(name, promotional=False)

    def find_promotional(self, name: str) -> ProductRecord:
        return self._find(name, promotional=True)

    def _find(self, name: str, promotional: bool) -> ProductRecord:
        index = self._index_of(name, promotional)
        if index is None:
            raise ProductNotFoundError(name, promotional=promotional)
        return self._records[index]

    def _index_of(self, name: str, promotional: bool) -> Optional[int]:
        for index, record in enumerate(self._records):
            if record.name == name and record.is_promotional == promotional:
                return index
        return None

    # ---------- stock ----------

    def deduct(self, name: str, amount: int, from_promotional: bool = False) -> ProductRecord:
        """Take `amount` units from one listing; nothing changes if stock is short."""
        if from_promotional:
            _, promo = self.deduct_line(name, normal_amount=0, promotional_amount=amount)
            return promo
        normal, _ = self.deduct_line(name, normal_amount=amount)
        return normal

    def deduct_line(self, name: str, normal_amount: int, promotional_amount: int = 0) -> tuple[ProductRecord, Optional[ProductRecord]]:
        """Take units from both listings of a product as one step.

        Every check runs before any write, so on failure neither listing changes.

        Returns:
            tuple: the updated normal listing and promotional listing (None if absent).
        """
        if normal_amount < 0 or promotional_amount < 0:
            raise ValueError("Deducted amounts must not be negative")

        normal_index = self._index_of(name, promotional=False)
        promo_index = self._index_of(name, promotional=True)
        if normal_index is None:
            raise ProductNotFoundError(name)
        if promo_index is None and promotional_amount > 0:
            raise ProductNotFoundError(name, promotional=True)

        normal = self._records[normal_index]
        if normal.quantity < normal_amount:
            raise InsufficientStockError(name, normal_amount, normal.quantity)
        promo = self._records[promo_index] if promo_index is not None else None
        if promo is not None and promo.quantity < promotional_amount:
            raise InsufficientStockError(name, promotional_amount, promo.quantity)

        normal = normal.model_copy(update={"quantity": normal.quantity - normal_amount})
        self._records[normal_index] = normal
        if promo is not None and promotional_amount:
            promo = promo.model_copy(update={"quantity": promo.quantity - promotional_amount})
            self._records[promo_index] = promo

        self.logger.debug(
            f"Deducted {normal_amount} normal / {promotional_amount} promotional units of '{name}'"
        )
        return normal, promo

    # ---------- snapshot ----------

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([r.to_row() for r in self._records], columns=PRODUCT_COLUMNS)

    def serialize(self) -> str:
        """Snapshot text: header `name,price,quantity,promotion` then one row per listing."""
        return self.to_frame().to_csv(index=False, lineterminator="\n")
