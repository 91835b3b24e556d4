"""
SKU -> price resolution and its fallback chain.
"""

from tankquote.price_catalog import PriceCatalog
from tankquote.price_resolver import PriceResolver, resolve_price, DEFAULT_FALLBACK_PRICE


# ============================================================
# Exact and steel
# ============================================================

def test_exact_match(catalog):
    match = resolve_price(catalog, "3S30-FRP-A")
    assert match.price == 250.0
    assert match.strategy == "exact"
    assert match.matched_sku == "3S30-FRP-A"
    assert not match.is_fallback


def test_sku_case_and_whitespace_are_normalized(catalog):
    match = resolve_price(catalog, "  2b6-M-s2 ")
    assert match.price == 720.0
    assert match.matched_sku == "2B6-M-S2"


def test_steel_sku_never_strips_suffixes(catalog):
    """A steel miss goes straight to the fallback price."""
    match = resolve_price(catalog, "2B6-m-S2-BCR")
    assert match.strategy == "fallback"
    assert match.price == DEFAULT_FALLBACK_PRICE
    assert match.is_fallback


# ============================================================
# FRP chain
# ============================================================

def test_frp_corner_suffix_stripped(catalog):
    """3S30-FRP-BCL is priced as 3S30-FRP."""
    match = resolve_price(catalog, "3S30-FRP-BCL")
    assert match.price == 260.0
    assert match.matched_sku == "3S30-FRP"
    assert match.strategy == "corner_suffix_stripped"


def test_frp_positional_suffix_falls_back_to_anchor(catalog):
    match = resolve_price(catalog, "3S30-FRP-B")
    assert match.matched_sku == "3S30-FRP"
    assert match.strategy == "suffix_stripped"


def test_frp_b_suffix_tries_a_variant():
    catalog = PriceCatalog.from_rows([{"sku": "3S25-FRP-A", "market_final_price": 199.0}])
    match = resolve_price(catalog, "3S25-FRP-B")
    assert match.price == 199.0
    assert match.strategy == "suffix_as_a"


def test_frp_a_suffix_stripped(catalog):
    match = resolve_price(catalog, "3B30-FRP-A")
    assert match.matched_sku == "3B30-FRP"
    assert match.price == 240.0
    assert match.strategy == "suffix_stripped"


def test_frp_ab_suffix_stripped_first(catalog):
    """-AB prefers the bare anchor when it exists."""
    match = resolve_price(catalog, "3S30-FRP-AB")
    assert match.matched_sku == "3S30-FRP"
    assert match.strategy == "suffix_stripped"


def test_frp_ab_suffix_tries_a_variant():
    catalog = PriceCatalog.from_rows([{"sku": "4S25-FRP-A", "market_final_price": 205.0}])
    match = resolve_price(catalog, "4S25-FRP-AB")
    assert match.matched_sku == "4S25-FRP-A"
    assert match.price == 205.0
    assert match.strategy == "suffix_as_a"


def test_frp_abl_abr_corner_suffix_stripped(catalog):
    for sku in ("3B30-FRP-ABL", "3B30-FRP-ABR"):
        match = resolve_price(catalog, sku)
        assert match.matched_sku == "3B30-FRP", sku
        assert match.strategy == "corner_suffix_stripped", sku


def test_frp_unknown_suffix_truncated_at_anchor(catalog):
    """Anything after -FRP that is not a known suffix is cut off."""
    match = resolve_price(catalog, "3S30-FRP-XYZ")
    assert match.matched_sku == "3S30-FRP"
    assert match.price == 260.0
    assert match.strategy == "frp_anchor"


def test_frp_non_ascii_symbols_stripped(catalog):
    match = resolve_price(catalog, "3S30φ-FRP")
    assert match.matched_sku == "3S30-FRP"
    assert match.strategy == "ascii_only"


def test_frp_partial_match_on_first_segment(catalog):
    """3PF30-FRP has no direct row; the first sorted key sharing 3PF30 wins."""
    match = resolve_price(catalog, "3PF30-FRP")
    assert match.matched_sku == "3PF30-FRP-A"
    assert match.strategy == "partial_frp"


def test_frp_unknown_falls_back_with_log(catalog, caplog):
    match = PriceResolver(catalog, fallback_price=99.0).resolve("9ZZ99-FRP-A")
    assert match.price == 99.0
    assert match.strategy == "fallback"
    assert "No price for SKU 9ZZ99-FRP-A" in caplog.text


# ============================================================
# Degenerate input
# ============================================================

def test_empty_catalog_always_falls_back():
    match = resolve_price(PriceCatalog.empty(), "3S30-FRP")
    assert match.is_fallback
    assert match.price == DEFAULT_FALLBACK_PRICE


def test_blank_sku_falls_back(catalog):
    assert resolve_price(catalog, "").strategy == "fallback"
    assert resolve_price(catalog, "   ").price == DEFAULT_FALLBACK_PRICE


def test_resolution_is_repeatable(catalog):
    """Same catalog, same SKU, same answer; the catalog is not touched."""
    resolver = PriceResolver(catalog)
    before = dict(catalog.prices)
    first = [resolver.resolve(s) for s in ("3S30-FRP-BCL", "3PF30-FRP", "XYZ")]
    second = [resolver.resolve(s) for s in ("3S30-FRP-BCL", "3PF30-FRP", "XYZ")]
    assert first == second
    assert dict(catalog.prices) == before


def test_price_match_to_dict(catalog):
    assert resolve_price(catalog, "CA-30-FRP").to_dict() == {
        "sku": "CA-30-FRP",
        "price": 55.0,
        "matched_sku": "CA-30-FRP",
        "strategy": "exact",
        "is_fallback": False,
    }
