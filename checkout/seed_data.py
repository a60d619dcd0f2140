#!/usr/bin/env python3
"""
seed_data.py

Writes the sample convenience-store snapshots to a local folder (default: sample_data).

Files:
- products.md    name,price,quantity,promotion
- promotions.md  name,buy,get,start_date,end_date

Run:
  python -m checkout.seed_data --output-dir sample_data
"""

from __future__ import annotations
import argparse
import csv
import os
import sys
from typing import Dict, List, Optional

from .config import get_config
from .data.models import PRODUCT_COLUMNS, PROMOTION_COLUMNS, NO_PROMOTION

# -----------------------------
# Sample snapshot rows
# -----------------------------

PRODUCTS: List[Dict[str, str]] = [
    {"name": name, "price": str(price), "quantity": str(quantity), "promotion": promotion}
    for name, price, quantity, promotion in [
        ("cola", 1000, 10, "carbonated_2+1"),
        ("cola", 1000, 10, NO_PROMOTION),
        ("cider", 1000, 8, "carbonated_2+1"),
        ("cider", 1000, 7, NO_PROMOTION),
        ("orange_juice", 1800, 9, "md_pick"),
        ("orange_juice", 1800, 0, NO_PROMOTION),
        ("sparkling_water", 1200, 5, "carbonated_2+1"),
        ("sparkling_water", 1200, 0, NO_PROMOTION),
        ("water", 500, 10, NO_PROMOTION),
        ("vitamin_water", 1500, 6, NO_PROMOTION),
        ("potato_chips", 1500, 5, "flash_sale"),
        ("potato_chips", 1500, 5, NO_PROMOTION),
        ("chocolate_bar", 1200, 5, "md_pick"),
        ("chocolate_bar", 1200, 5, NO_PROMOTION),
        ("energy_bar", 2000, 5, NO_PROMOTION),
        ("lunch_box", 6400, 8, NO_PROMOTION),
        ("cup_noodles", 1700, 1, "md_pick"),
        ("cup_noodles", 1700, 10, NO_PROMOTION),
    ]
]

PROMOTIONS: List[Dict[str, str]] = [
    {"name": "carbonated_2+1", "buy": "2", "get": "1", "start_date": "2026-01-01", "end_date": "2026-12-31"},
    {"name": "md_pick", "buy": "1", "get": "1", "start_date": "2026-01-01", "end_date": "2026-12-31"},
    {"name": "flash_sale", "buy": "1", "get": "1", "start_date": "2026-11-01", "end_date": "2026-11-30"},
]


def ensure_dir(path: str) -> None:
    if not os.path.exists(path):
        os.makedirs(path, exist_ok=True)


def write_csv(path: str, rows: List[Dict], headers: List[str]) -> None:
    with open(path, "w", newline="", encoding="utf-8") as f:
        w = csv.DictWriter(f, fieldnames=headers, lineterminator="\n")
        w.writeheader()
        for r in rows:
            w.writerow(r)


# -----------------------------
# Main
# -----------------------------

def main(argv: Optional[List[str]] = None) -> int:
    config = get_config()

    parser = argparse.ArgumentParser(description="Write sample catalog and promotion snapshots.")
    parser.add_argument("--output-dir", type=str, default=config.data_dir)
    parser.add_argument("--no-overwrite", action="store_true", help="Fail if snapshots already exist.")
    args = parser.parse_args(argv)

    outdir = args.output_dir
    ensure_dir(outdir)

    files = {
        "products": os.path.join(outdir, config.products_file),
        "promotions": os.path.join(outdir, config.promotions_file),
    }
    if args.no_overwrite:
        for p in files.values():
            if os.path.exists(p):
                print(f"Refusing to overwrite existing file: {p}", file=sys.stderr)
                return 2

    write_csv(files["products"], PRODUCTS, PRODUCT_COLUMNS)
    write_csv(files["promotions"], PROMOTIONS, PROMOTION_COLUMNS)

    print(f"Wrote sample snapshots to {outdir}")
    print(f" products: {len(PRODUCTS)} | promotions: {len(PROMOTIONS)}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
