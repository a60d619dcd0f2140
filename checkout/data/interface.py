# checkout/data/interface.py
from __future__ import annotations

from typing import Dict, List, Protocol, TYPE_CHECKING

if TYPE_CHECKING:
    from ..engine.catalog import Catalog


# ---- Snapshot access protocol ----

class SnapshotStore(Protocol):
    """
    Backend-agnostic contract for the catalog and promotion snapshots.

    Rows come back as raw strings; parsing and validation belong to the
    Catalog and PromotionRegistry.
    """

    def load_product_rows(self) -> List[Dict[str, str]]:
        """Rows of the product snapshot (`name,price,quantity,promotion`)."""
        ...

    def load_promotion_rows(self) -> List[Dict[str, str]]:
        """Rows of the promotion snapshot (`name,buy,get,start_date,end_date`)."""
        ...

    def save_catalog(self, catalog: "Catalog") -> None:
        """Overwrite the product snapshot with the catalog's current stock."""
        ...
