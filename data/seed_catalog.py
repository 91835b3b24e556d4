#!/usr/bin/env python3
"""
Load a product price CSV into the local products table.

Usage:
    python data/seed_catalog.py path/to/sku_prices.csv

Expected columns:
  - InternalReference   SKU
  - market_final_price  customer price
  - is_available        optional, "true"/"false"/"1"/"0" (default true)
  - Description         optional

Existing SKUs are updated in place. Rows without a SKU or a positive price are skipped.
"""

import csv
import sys
from pathlib import Path

# Add project root to path
project_root = Path(__file__).parent.parent
sys.path.insert(0, str(project_root))

_FALSE_VALUES = {"false", "0", "no", "n"}


def parse_bool(value, default: bool = True) -> bool:
    if value is None or not str(value).strip():
        return default
    return str(value).strip().lower() not in _FALSE_VALUES


def parse_price(value):
    try:
        return float(str(value).replace(",", "").strip())
    except (TypeError, ValueError):
        return None


def read_catalog_csv(csv_path: Path) -> list:
    """Rows as {sku, market_final_price, is_available, description} dicts."""
    rows = []
    skipped = 0
    with open(csv_path, newline="", encoding="utf-8-sig") as f:
        reader = csv.DictReader(f)
        for raw in reader:
            sku = (raw.get("InternalReference") or "").strip()
            price = parse_price(raw.get("market_final_price"))
            if not sku or price is None or price <= 0:
                skipped += 1
                continue
            rows.append({
                "sku": sku,
                "market_final_price": price,
                "is_available": parse_bool(raw.get("is_available")),
                "description": (raw.get("Description") or "").strip() or None,
            })
    if skipped:
        print(f"  Skipped {skipped} rows without a SKU or positive price")
    return rows


def load_products(rows: list, session_factory=None) -> dict:
    """Upsert rows into the products table. Returns {"created": n, "updated": n}."""
    from tankquote import models
    from tankquote.database import Base, engine, SessionLocal

    if session_factory is None:
        Base.metadata.create_all(bind=engine)
        session_factory = SessionLocal

    db = session_factory()
    created = updated = 0
    try:
        for row in rows:
            product = db.query(models.Product).filter(models.Product.sku == row["sku"]).first()
            if product is None:
                db.add(models.Product(**row))
                created += 1
            else:
                product.market_final_price = row["market_final_price"]
                product.is_available = row["is_available"]
                product.description = row["description"]
                updated += 1
        db.commit()
    except Exception as e:
        db.rollback()
        print(f"  ERROR loading products: {e}")
        raise
    finally:
        db.close()

    return {"created": created, "updated": updated}


def main(argv=None):
    argv = sys.argv[1:] if argv is None else argv
    if not argv:
        print(__doc__)
        return 1

    csv_path = Path(argv[0])
    if not csv_path.exists():
        print(f"File {csv_path} does not exist, nothing to load")
        return 1

    print(f"Reading {csv_path}...")
    rows = read_catalog_csv(csv_path)
    print(f"  {len(rows)} priced products parsed")

    result = load_products(rows)
    print("\n--- Summary ---")
    print(f"Created: {result['created']}")
    print(f"Updated: {result['updated']}")
    print("Done.")
    return 0


if __name__ == "__main__":
    sys.exit(main())
