"""
SKU -> price resolution with ordered fallbacks.

Steel SKUs: exact, then case-insensitive. Nothing looser; a wrong steel
thickness or material is worse than a flagged fallback price.

FRP SKUs (contain "-FRP"), first hit wins:
    1. exact
    2. corner suffix stripped           3B30-FRP-BCL -> 3B30-FRP
    3. positional suffix variants       -B -> anchor, -A ; -A -> anchor ; -AB -> anchor, -A
    4. truncate at the -FRP anchor
    5. case-insensitive scan
    6. non-ASCII symbols stripped       (φ and friends)
    7. partial: same first segment and an FRP key

Otherwise the fallback price is returned and the miss is logged with the
nearest catalog keys.
"""

import logging
import re
from dataclasses import dataclass
from typing import Optional

from .price_catalog import PriceCatalog, normalize_sku
from .sku import CornerSuffix, FrpSku, FRP_MARKER, is_frp_sku

logger = logging.getLogger(__name__)

DEFAULT_FALLBACK_PRICE = 150.0
NEAREST_KEYS_SHOWN = 5

_NON_ASCII = re.compile(r"[^\x00-\x7F]")


@dataclass(frozen=True)
class PriceMatch:
    sku: str
    price: float
    matched_sku: Optional[str]
    strategy: str

    @property
    def is_fallback(self) -> bool:
        return self.matched_sku is None

    def to_dict(self) -> dict:
        return {
            "sku": self.sku,
            "price": self.price,
            "matched_sku": self.matched_sku,
            "strategy": self.strategy,
            "is_fallback": self.is_fallback,
        }


def _frp_suffix_candidates(key: str):
    """(strategy, candidate) pairs from the structured FRP grammar."""
    parsed = FrpSku.parse(key)
    if parsed is None or parsed.suffix is None:
        return
    if parsed.suffix.is_corner:
        yield "corner_suffix_stripped", parsed.with_suffix(None).format()
        return
    anchor = parsed.with_suffix(None).format()
    yield "suffix_stripped", anchor
    if parsed.suffix in (CornerSuffix.B, CornerSuffix.AB):
        yield "suffix_as_a", parsed.with_suffix(CornerSuffix.A).format()


class PriceResolver:
    """Resolves SKUs against one immutable PriceCatalog."""

    def __init__(self, catalog: PriceCatalog, fallback_price: float = DEFAULT_FALLBACK_PRICE):
        self.catalog = catalog
        self.fallback_price = fallback_price

    def resolve(self, sku: str) -> PriceMatch:
        if not sku or not str(sku).strip():
            logger.warning("Price lookup without a SKU, using fallback %.2f", self.fallback_price)
            return PriceMatch(sku=sku or "", price=self.fallback_price, matched_sku=None, strategy="fallback")

        if not len(self.catalog):
            logger.warning("Price catalog is empty, %s priced at fallback %.2f", sku, self.fallback_price)
            return PriceMatch(sku=sku, price=self.fallback_price, matched_sku=None, strategy="fallback")

        key = normalize_sku(sku)
        hit = self._exact(key)
        if hit is not None:
            return self._match(sku, hit, "exact")

        if is_frp_sku(key):
            strategies = self._frp_strategies(key)
        else:
            strategies = [("case_insensitive", self._casefold)]

        for name, strategy in strategies:
            hit = strategy(key)
            if hit is not None:
                logger.debug("Price match %s -> %s (%s)", sku, hit, name)
                return self._match(sku, hit, name)

        nearest = [k for k in self.catalog.sorted_keys() if k.startswith(key[:3])][:NEAREST_KEYS_SHOWN]
        logger.warning(
            "No price for SKU %s, using fallback %.2f. Catalog keys starting %r: %s",
            sku, self.fallback_price, key[:3], nearest,
        )
        return PriceMatch(sku=sku, price=self.fallback_price, matched_sku=None, strategy="fallback")

    def price(self, sku: str) -> float:
        return self.resolve(sku).price

    # --- strategies: each returns a catalog key or None ---

    def _match(self, sku: str, key: str, strategy: str) -> PriceMatch:
        return PriceMatch(sku=sku, price=self.catalog.get(key), matched_sku=key, strategy=strategy)

    def _exact(self, key: str) -> Optional[str]:
        return key if key in self.catalog else None

    def _casefold(self, key: str) -> Optional[str]:
        return self.catalog.find_casefold(key)

    def _frp_strategies(self, key: str) -> list:
        strategies = []
        for name, candidate in _frp_suffix_candidates(key):
            strategies.append((name, lambda _k, c=candidate: self._exact(c)))
        strategies.extend([
            ("frp_anchor", self._frp_anchor),
            ("case_insensitive", self._casefold),
            ("ascii_only", self._ascii_only),
            ("partial_frp", self._partial_frp),
        ])
        return strategies

    def _frp_anchor(self, key: str) -> Optional[str]:
        end = key.find(FRP_MARKER)
        if end < 0:
            return None
        return self._exact(key[:end + len(FRP_MARKER)])

    def _ascii_only(self, key: str) -> Optional[str]:
        stripped = _NON_ASCII.sub("", key)
        if stripped == key:
            return None
        return self._exact(stripped) or self._casefold(stripped)

    def _partial_frp(self, key: str) -> Optional[str]:
        """First catalog key (sorted) sharing the first segment and containing FRP."""
        head = key.split("-")[0]
        for candidate in self.catalog.sorted_keys():
            if candidate.split("-")[0] == head and "FRP" in candidate:
                return candidate
        return None


def resolve_price(catalog: PriceCatalog, sku: str,
                  fallback_price: float = DEFAULT_FALLBACK_PRICE) -> PriceMatch:
    return PriceResolver(catalog, fallback_price).resolve(sku)
