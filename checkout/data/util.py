from __future__ import annotations

from typing import Literal

from ..config import get_config
from .backends.csv_backend import CsvSnapshotStore
from .interface import SnapshotStore


def get_snapshot_store(kind: Literal["csv"] = "csv") -> SnapshotStore:
    if kind == "csv":
        # Reads from configured snapshot folder
        config = get_config()
        return CsvSnapshotStore(
            data_dir=config.data_dir,
            products_file=config.products_file,
            promotions_file=config.promotions_file,
        )
    raise ValueError(f"Unknown snapshot store kind: {kind}")
