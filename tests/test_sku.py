"""
SKU grammar: thickness codes, steel and FRP parse / format.
"""

from tankquote.models import Material, PanelType
from tankquote.sku import (
    CornerSuffix, SteelSku, FrpSku, format_thickness_code, map_thickness_to_available,
    steel_panel_sku, frp_panel_sku, material_code, is_frp_sku,
)


# ============================================================
# Thickness codes
# ============================================================

def test_thickness_code_formatting():
    """Whole numbers drop the decimal, fractions drop the point."""
    assert format_thickness_code(3.0) == "3"
    assert format_thickness_code(2.5) == "25"
    assert format_thickness_code(6.0) == "6"
    assert format_thickness_code(1.5) == "15"


def test_thickness_substitution_for_pricing():
    """4.5 -> 4.0 and 5.0 -> 6.0; everything else unchanged."""
    assert map_thickness_to_available(4.5) == 4.0
    assert map_thickness_to_available(5.0) == 6.0
    assert map_thickness_to_available(3.0) == 3.0
    assert map_thickness_to_available(2.5) == 2.5


def test_steel_sku_thickness_codes_after_substitution():
    """3.0 -> '3', 2.5 -> '25', 4.5 -> '4', 5.0 -> '6' in the emitted SKU."""
    def code(thk):
        return SteelSku.parse(steel_panel_sku(1, "A", thk, PanelType.METRIC, Material.SS316)).thickness_code

    assert code(3.0) == "3"
    assert code(2.5) == "25"
    assert code(4.5) == "4"
    assert code(5.0) == "6"


# ============================================================
# Steel grammar
# ============================================================

def test_steel_panel_sku_layout():
    """<variant><location><thickness>-<size>-<material>."""
    assert steel_panel_sku(2, "B", 3.0, PanelType.METRIC, Material.SS316) == "2B3-m-S2"
    assert steel_panel_sku(1, "BCL", 5.0, PanelType.IMPERIAL, Material.HDG) == "1BCL6-i-HDG"
    assert steel_panel_sku(2, "R", 1.5, PanelType.METRIC, Material.SS304, substitute=False) == "2R15-m-S1"


def test_material_codes():
    assert material_code(Material.SS316) == "S2"
    assert material_code(Material.SS304) == "S1"
    assert material_code(Material.HDG) == "HDG"
    assert material_code(Material.MS) == "MS"


def test_steel_sku_parse_round_trip_special_locations():
    """Locations with brackets and φ survive parse -> format, including after uppercasing."""
    for text in ["2R(AV)15-m-S2", "1MH15-i-MS", "2Cφ3-m-S2", "1Bφ25-i-S1", "2BCR4-m-HDG"]:
        parsed = SteelSku.parse(text)
        assert parsed is not None, text
        assert parsed.format() == text
        assert SteelSku.parse(text.upper()).format() == text


def test_steel_sku_parse_longest_location_wins():
    """BCL is not read as B + 'CL'."""
    parsed = SteelSku.parse("1BCL3-m-S2")
    assert parsed.location == "BCL"
    assert parsed.thickness_code == "3"
    assert parsed.suffix is None


def test_steel_sku_parse_optional_suffix():
    parsed = SteelSku.parse("2B3-m-S2-BCR")
    assert parsed.suffix is CornerSuffix.BCR
    assert parsed.format() == "2B3-m-S2-BCR"


def test_steel_sku_parse_rejects_garbage():
    assert SteelSku.parse("3S30-FRP-A") is None
    assert SteelSku.parse("BN300ABNM10025") is None
    assert SteelSku.parse("9B3-m-S2") is None


# ============================================================
# FRP grammar
# ============================================================

def test_frp_sku_parse():
    parsed = FrpSku.parse("3S30-FRP-BCL")
    assert parsed.fiber_code == "3"
    assert parsed.location == "S"
    assert parsed.depth_code == "30"
    assert parsed.suffix is CornerSuffix.BCL
    assert parsed.suffix.is_corner
    assert parsed.anchor == "3S30-FRP"


def test_frp_sku_multi_letter_location():
    parsed = FrpSku.parse("4PF25-FRP-A")
    assert parsed.location == "PF"
    assert parsed.depth_code == "25"
    assert parsed.with_suffix(None).format() == "4PF25-FRP"


def test_frp_panel_sku_builder():
    assert frp_panel_sku("3", "B", "30") == "3B30-FRP"
    assert frp_panel_sku("3", "B", "30", CornerSuffix.AB) == "3B30-FRP-AB"
    assert frp_panel_sku("4", "D", "15", CornerSuffix.A) == "4D15-FRP-A"


def test_corner_suffix_classes():
    """BCL/BCR/ABL/ABR are corners; AB/A/B are positional."""
    assert {s for s in CornerSuffix if s.is_corner} == {
        CornerSuffix.BCL, CornerSuffix.BCR, CornerSuffix.ABL, CornerSuffix.ABR,
    }


def test_is_frp_sku():
    assert is_frp_sku("3S30-FRP-A")
    assert is_frp_sku("ca-30-frp")
    assert not is_frp_sku("2B3-m-S2")
