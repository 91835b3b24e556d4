"""
Pricing engine: draft BOM + price catalog -> priced BOM.

The draft is never modified; a priced copy is returned.
Pure math once the catalog is loaded: quantity x unit price, summed per BOM.
"""

import copy
import logging

from .calculators.base import SECTIONS
from .calculators.registry import calculate_draft_bom
from .price_catalog import PriceCatalog
from .price_resolver import PriceResolver, DEFAULT_FALLBACK_PRICE

logger = logging.getLogger(__name__)


class PricingEngine:
    """
    Enriches a draft BOM with catalog prices.

    Unresolved SKUs get the fallback price and needs_review=True, and are
    listed in the BOM assumptions for manual pricing.
    """

    def __init__(self, catalog: PriceCatalog, fallback_price: float = DEFAULT_FALLBACK_PRICE,
                 currency: str = None):
        self.catalog = catalog
        self.resolver = PriceResolver(catalog, fallback_price)
        self.currency = currency

    def price_bom(self, draft: dict) -> dict:
        bom = copy.deepcopy(draft)
        fallback_skus = []
        total_cost = 0.0

        for section in SECTIONS:
            for item in bom.get(section, []):
                match = self.resolver.resolve(item["sku"])
                item["unit_price"] = round(match.price, 2)
                item["line_total"] = round(match.price * item["quantity"], 2)
                item["price_source"] = match.strategy
                item["matched_sku"] = match.matched_sku
                item["needs_review"] = match.is_fallback
                total_cost += item["line_total"]
                if match.is_fallback and item["sku"] not in fallback_skus:
                    fallback_skus.append(item["sku"])

        summary = bom["summary"]
        summary["total_cost"] = round(total_cost, 2)
        summary["fallback_priced_items"] = sum(
            1 for section in SECTIONS for item in bom.get(section, []) if item["needs_review"]
        )
        summary["currency"] = self.currency
        summary["catalog_loaded_at"] = self.catalog.loaded_at if len(self.catalog) else None

        if fallback_skus:
            bom["assumptions"].append(
                f"{len(fallback_skus)} SKU(s) not in the price catalog, priced at "
                f"{self.resolver.fallback_price:.2f} for manual review: {', '.join(fallback_skus)}"
            )
        logger.info(
            "Priced BOM: %d line items, total %.2f %s, %d at fallback price",
            summary["line_items"], summary["total_cost"], self.currency or "",
            summary["fallback_priced_items"],
        )
        return bom


def generate_bom(spec, catalog: PriceCatalog, fallback_price: float = DEFAULT_FALLBACK_PRICE,
                 currency: str = None) -> dict:
    """TankSpecification -> priced BOM dict."""
    draft = calculate_draft_bom(spec)
    return PricingEngine(catalog, fallback_price, currency).price_bom(draft)
