from __future__ import annotations

from pathlib import Path
from typing import Dict, List, TYPE_CHECKING

import pandas as pd

from ...config import get_config
from ...logging import get_logger
from ..interface import SnapshotStore
from ..models import PRODUCT_COLUMNS, PROMOTION_COLUMNS

if TYPE_CHECKING:
    from ...engine.catalog import Catalog


class CsvSnapshotStore(SnapshotStore):
    """
    CSV-backed snapshot store.
    - Reads the product and promotion snapshots from `data_dir` on every load call.
    - `save_catalog` overwrites the product snapshot in place.
    """

    def __init__(
        self,
        data_dir: str | Path = None,
        products_file: str = None,
        promotions_file: str = None,
    ) -> None:
        config = get_config()
        if data_dir is None:
            data_dir = config.data_dir
        self.products_file = products_file or config.products_file
        self.promotions_file = promotions_file or config.promotions_file
        self.logger = get_logger(__name__)

        self.data_dir = Path(data_dir)

        # If the path is relative, make it relative to the repository root
        if not self.data_dir.is_absolute():
            current = Path.cwd()
            repo_root = None

            # Look up the directory tree for pyproject.toml
            for parent in [current] + list(current.parents):
                if (parent / "pyproject.toml").exists():
                    repo_root = parent
                    break

            if repo_root:
                self.data_dir = repo_root / self.data_dir
            else:
                # Fallback to current directory
                self.data_dir = current / self.data_dir

    @property
    def products_path(self) -> Path:
        return self.data_dir / self.products_file

    @property
    def promotions_path(self) -> Path:
        return self.data_dir / self.promotions_file

    # ---------- loading helpers ----------

    def _read_rows(self, path: Path, columns: List[str]) -> List[Dict[str, str]]:
        if not path.exists():
            raise FileNotFoundError(
                f"Snapshot file not found: {path}\n"
                f"Please either:\n"
                f"  1. Generate sample data: python -m checkout.seed_data\n"
                f"  2. Set DATA_DIR environment variable to point to your data directory\n"
                f"  3. Create a .env file with DATA_DIR=/path/to/your/data"
            )

        try:
            df = pd.read_csv(path, dtype=str, keep_default_na=False)
        except Exception as e:
            raise RuntimeError(
                f"Error reading snapshot {path}: {e}\n"
                f"Please check that the file is valid comma-separated text."
            ) from e

        header = [str(c).strip() for c in df.columns]
        if header != columns:
            raise RuntimeError(
                f"Unexpected header in {path}:\n"
                f"  Found: {','.join(header)}\n"
                f"  Expected: {','.join(columns)}"
            )
        df.columns = header
        for column in header:
            df[column] = df[column].str.strip()

        self.logger.debug(f"Read {len(df)} rows from {path}")
        return df.to_dict(orient="records")

    # ---------- interface implementation ----------

    def load_product_rows(self) -> List[Dict[str, str]]:
        return self._read_rows(self.products_path, PRODUCT_COLUMNS)

    def load_promotion_rows(self) -> List[Dict[str, str]]:
        return self._read_rows(self.promotions_path, PROMOTION_COLUMNS)

    def save_catalog(self, catalog: "Catalog") -> None:
        self.data_dir.mkdir(parents=True, exist_ok=True)
        self.products_path.write_text(catalog.serialize(), encoding="utf-8")
        self.logger.info(f"Saved {len(catalog.records)} listings to {self.products_path}")
