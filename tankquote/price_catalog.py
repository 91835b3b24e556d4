"""
Price catalog: SKU -> market price, loaded from a read-only product store.

Two sources:
    RestCatalogSource:     PostgREST / Supabase `products` table over HTTP, paginated
    DatabaseCatalogSource: local `products` table through SQLAlchemy

PriceCache holds the last good catalog for a fixed TTL. A failed load degrades
to an empty catalog (everything falls back to the default price) and is not
cached, so the next request retries.

Cold-cache callers are not de-duplicated: two requests arriving together may
both trigger a fetch. Acceptable for a low-traffic quoting tool.
"""

import http.client
import json
import logging
import math
import urllib.parse
import urllib.request
from datetime import datetime, timezone
from types import MappingProxyType
from typing import Callable, Iterable, Optional

from sqlalchemy.exc import SQLAlchemyError

from .models import Product

logger = logging.getLogger(__name__)

CATALOG_COLUMNS = "sku,market_final_price,is_available,description"


class CatalogFetchError(RuntimeError):
    """The catalog source could not be read."""


def normalize_sku(sku: str) -> str:
    return str(sku).strip().upper()


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class PriceCatalog:
    """Read-only SKU -> price mapping. Keys are normalized to uppercase."""

    def __init__(self, prices: dict, loaded_at: datetime, descriptions: dict = None):
        self._prices = MappingProxyType(dict(prices))
        self._descriptions = MappingProxyType(dict(descriptions or {}))
        self.loaded_at = loaded_at
        self._casefold_index = None

    @classmethod
    def empty(cls, loaded_at: datetime = None) -> "PriceCatalog":
        return cls({}, loaded_at or utcnow())

    @classmethod
    def from_rows(cls, rows: Iterable[dict], loaded_at: datetime = None) -> "PriceCatalog":
        """Build from {sku, market_final_price, description} rows. Bad rows are skipped."""
        prices = {}
        descriptions = {}
        skipped = 0
        for row in rows:
            if not isinstance(row, dict):
                skipped += 1
                continue
            sku = (row.get("sku") or "").strip()
            try:
                price = float(row.get("market_final_price"))
            except (TypeError, ValueError):
                price = 0.0
            if not sku or not math.isfinite(price) or price <= 0:
                skipped += 1
                continue
            key = normalize_sku(sku)
            prices[key] = price
            if row.get("description"):
                descriptions[key] = row["description"]
        if skipped:
            logger.info("Catalog: skipped %d rows without a SKU or positive price", skipped)
        return cls(prices, loaded_at or utcnow(), descriptions)

    @property
    def prices(self):
        return self._prices

    def __len__(self):
        return len(self._prices)

    def __contains__(self, sku):
        return sku in self._prices

    def get(self, sku: str) -> Optional[float]:
        return self._prices.get(sku)

    def sorted_keys(self) -> list:
        return sorted(self._prices)

    def find_casefold(self, sku: str) -> Optional[str]:
        """Catalog key equal to sku ignoring case, or None."""
        if self._casefold_index is None:
            self._casefold_index = {}
            for key in sorted(self._prices):
                self._casefold_index.setdefault(key.casefold(), key)
        return self._casefold_index.get(sku.casefold())

    def search(self, pattern: str, limit: int = 50) -> list:
        """SKUs containing pattern (case-insensitive), sorted."""
        needle = pattern.strip().casefold()
        if not needle:
            return []
        hits = [key for key in self.sorted_keys() if needle in key.casefold()]
        return [
            {"sku": key, "price": self._prices[key], "description": self._descriptions.get(key)}
            for key in hits[:limit]
        ]


# --- Sources ---

class RestCatalogSource:
    """
    Paginated read of a PostgREST table. Only available rows with a
    positive market price are requested. Stops on an empty or short page,
    or after max_pages.
    """

    def __init__(self, base_url: str, api_key: str = "", table: str = "products",
                 page_size: int = 1000, max_pages: int = 50, timeout: float = 30,
                 opener: Callable = None):
        self.base_url = base_url.rstrip("/")
        self.api_key = api_key
        self.table = table
        self.page_size = page_size
        self.max_pages = max_pages
        self.timeout = timeout
        self._open = opener or urllib.request.urlopen

    def _page_request(self, offset: int) -> urllib.request.Request:
        query = urllib.parse.urlencode({
            "select": CATALOG_COLUMNS,
            "is_available": "eq.true",
            "market_final_price": "gt.0",
        })
        headers = {
            "Accept": "application/json",
            "Range-Unit": "items",
            "Range": f"{offset}-{offset + self.page_size - 1}",
        }
        if self.api_key:
            headers["apikey"] = self.api_key
            headers["Authorization"] = f"Bearer {self.api_key}"
        return urllib.request.Request(
            f"{self.base_url}/rest/v1/{self.table}?{query}",
            headers=headers,
            method="GET",
        )

    def fetch_rows(self) -> list:
        rows = []
        for page in range(self.max_pages):
            offset = page * self.page_size
            req = self._page_request(offset)
            try:
                with self._open(req, timeout=self.timeout) as response:
                    batch = json.loads(response.read())
            except (OSError, ValueError, http.client.HTTPException) as e:  # URLError, timeouts, truncated body, bad JSON
                raise CatalogFetchError(f"Catalog page at offset {offset} failed: {e}") from e

            if not isinstance(batch, list):
                raise CatalogFetchError(f"Catalog page at offset {offset} is not a list")
            if not all(isinstance(row, dict) for row in batch):
                raise CatalogFetchError(f"Catalog page at offset {offset} holds non-object rows")
            if not batch:
                break
            rows.extend(batch)
            logger.info("Catalog: loaded page %d (%d rows, %d so far)", page + 1, len(batch), len(rows))
            if len(batch) < self.page_size:
                break
        else:
            logger.warning("Catalog: stopped after %d pages (%d rows); raise PRICE_CATALOG_MAX_PAGES",
                           self.max_pages, len(rows))
        return rows


class DatabaseCatalogSource:
    """Reads the local products table."""

    def __init__(self, session_factory: Callable):
        self.session_factory = session_factory

    def fetch_rows(self) -> list:
        db = self.session_factory()
        try:
            products = (
                db.query(Product)
                .filter(Product.is_available.is_(True), Product.market_final_price > 0)
                .all()
            )
            return [
                {
                    "sku": p.sku,
                    "market_final_price": p.market_final_price,
                    "is_available": p.is_available,
                    "description": p.description,
                }
                for p in products
            ]
        except SQLAlchemyError as e:
            raise CatalogFetchError(f"Product table read failed: {e}") from e
        finally:
            db.close()


def source_from_settings(settings, session_factory: Callable = None):
    """REST source when PRICE_CATALOG_URL is set, local database otherwise."""
    if settings.PRICE_CATALOG_URL:
        return RestCatalogSource(
            settings.PRICE_CATALOG_URL,
            api_key=settings.PRICE_CATALOG_API_KEY,
            table=settings.PRICE_CATALOG_TABLE,
            page_size=settings.PRICE_CATALOG_PAGE_SIZE,
            max_pages=settings.PRICE_CATALOG_MAX_PAGES,
            timeout=settings.PRICE_CATALOG_TIMEOUT,
        )
    if session_factory is None:
        from .database import SessionLocal
        session_factory = SessionLocal
    return DatabaseCatalogSource(session_factory)


# --- Cache ---

class PriceCache:
    """
    Holds the last loaded PriceCatalog for ttl_seconds.

    clock is injected so tests can move time; it must return aware datetimes.
    """

    def __init__(self, source, ttl_seconds: float = 300.0, clock: Callable[[], datetime] = utcnow):
        self.source = source
        self.ttl_seconds = ttl_seconds
        self.clock = clock
        self._catalog: Optional[PriceCatalog] = None

    def _age_seconds(self) -> Optional[float]:
        if self._catalog is None:
            return None
        return (self.clock() - self._catalog.loaded_at).total_seconds()

    def is_fresh(self) -> bool:
        age = self._age_seconds()
        return age is not None and age < self.ttl_seconds

    def get(self) -> PriceCatalog:
        if self.is_fresh():
            logger.debug("Catalog cache hit (%d SKUs)", len(self._catalog))
            return self._catalog
        return self._load()

    def _load(self) -> PriceCatalog:
        now = self.clock()
        try:
            rows = self.source.fetch_rows()
        except CatalogFetchError as e:
            logger.warning("Catalog load failed, pricing with fallback only: %s", e)
            return PriceCatalog.empty(now)

        catalog = PriceCatalog.from_rows(rows, loaded_at=now)
        if not len(catalog):
            logger.warning("Catalog source returned no priced products")
            return catalog
        self._catalog = catalog
        logger.info("Catalog loaded: %d SKUs", len(catalog))
        return catalog

    def invalidate(self) -> None:
        self._catalog = None
        logger.info("Catalog cache invalidated")

    def refresh(self) -> PriceCatalog:
        self.invalidate()
        return self.get()

    def status(self) -> dict:
        age = self._age_seconds()
        fresh = self.is_fresh()
        return {
            "cached": fresh,
            "item_count": len(self._catalog) if self._catalog is not None else 0,
            "age_seconds": round(age, 3) if age is not None else None,
            "expires_in_seconds": round(self.ttl_seconds - age, 3) if fresh else None,
            "loaded_at": self._catalog.loaded_at if self._catalog is not None else None,
        }
