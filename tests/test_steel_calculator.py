"""
Steel tank calculator: panel counts per section, cleats, bolts, assumptions.

Tests:
1-4.   Base classification (closed form vs cell walk)
5-9.   5 x 5 x 3 BSI reference tank
10-12. Partitions, tiny tanks, zero-quantity omission
13-15. Registry and specification validation
"""

import pytest
from pydantic import ValidationError

from conftest import make_spec, items_by_sku
from tankquote.calculators.base import SECTIONS, PANEL_SECTIONS
from tankquote.calculators.panels import (
    classify_base_cells, classify_base_cells_by_walk, roof_allocation,
)
from tankquote.calculators.registry import (
    calculate_draft_bom, get_calculator, has_calculator, list_calculators,
)
from tankquote.calculators.steel_tank import SteelTankCalculator
from tankquote.calculators.frp_tank import FRPTankCalculator


# ============================================================
# Base classification
# ============================================================

def test_base_classification_matches_cell_walk():
    """Closed-form counts equal the cell-by-cell walk for every small grid."""
    for length in range(1, 8):
        for width in range(1, 8):
            assert classify_base_cells(length, width) == classify_base_cells_by_walk(length, width), (length, width)


def test_base_classification_sums_to_grid():
    for length in range(1, 8):
        for width in range(1, 8):
            cells = classify_base_cells(length, width)
            assert cells.total == length * width
            assert cells.interior == max(0, length - 2) * max(0, width - 2)


def test_base_classification_degenerate_grids():
    """1x1 has one corner, a 1xN strip two, anything larger four."""
    assert classify_base_cells(1, 1).corners == 1
    assert classify_base_cells(1, 5).corners == 2
    assert classify_base_cells(5, 1).edges == 3
    assert classify_base_cells(2, 2).corners == 4
    with pytest.raises(ValueError):
        classify_base_cells(0, 3)


def test_roof_allocation_never_over_reserves():
    """Manholes first, then vents; a 1x1 roof is a single manhole."""
    assert roof_allocation(5, 5, 2, 2) == {"total": 25, "manholes": 2, "air_vents": 2, "field": 21}
    assert roof_allocation(1, 1, 2, 2) == {"total": 1, "manholes": 1, "air_vents": 0, "field": 0}
    assert roof_allocation(1, 3, 2, 2) == {"total": 3, "manholes": 2, "air_vents": 1, "field": 0}


# ============================================================
# 5 x 5 x 3 BSI reference tank
# ============================================================

@pytest.fixture
def bsi_bom():
    return SteelTankCalculator().calculate(make_spec(build_standard="BSI"))


def test_bsi_reference_grid_and_tiers(bsi_bom):
    """5x5x3 metric: 3 tiers, all 5.0mm."""
    assert bsi_bom["grid"]["length_panels"] == 5
    assert bsi_bom["grid"]["height_panels"] == 3
    assert [t["thickness_mm"] for t in bsi_bom["tiers"]] == [5.0, 5.0, 5.0]
    assert bsi_bom["material"] == "SS316"
    assert bsi_bom["build_standard"] == "BSI"


def test_bsi_reference_base(bsi_bom):
    """12 edges, 2+2 corners, 9 interior; 5.0mm priced as 6mm SKUs."""
    assert items_by_sku(bsi_bom["base"]) == {
        "2B6-m-S2": 12,
        "2BCL6-m-S2": 2,
        "2BCR6-m-S2": 2,
        "2A6-m-S2": 9,
    }
    assert all(item["thickness_mm"] == 5.0 for item in bsi_bom["base"])


def test_bsi_reference_walls_and_roof(bsi_bom):
    """Perimeter 20 per tier; roof 21 field + 2 vents + 2 manholes."""
    assert items_by_sku(bsi_bom["walls"]) == {
        "2B6-m-S2": 4 + 16,     # bottom corners + top field
        "2A6-m-S2": 16 + 20,    # bottom field + middle ring
        "2C6-m-S2": 4,          # top corners
    }
    assert items_by_sku(bsi_bom["roof"]) == {
        "2R15-m-S2": 21,
        "2R(AV)15-m-S2": 2,
        "2MH15-m-S2": 2,
    }
    assert bsi_bom["partition"] == []
    assert bsi_bom["supports"] == []


def test_bsi_reference_bolts_and_summary(bsi_bom):
    """110 panels x 4 x 16 / 2 x 1.2 = 4224 SS316 bolts."""
    bolts = bsi_bom["accessories"][0]
    assert bolts["sku"] == "BN300ABNM10025"
    assert bolts["quantity"] == 4224
    assert bolts["breakdown"]["total_panels"] == 110
    assert bolts["breakdown"]["bolts_per_side"] == 16

    summary = bsi_bom["summary"]
    assert summary["total_panels"] == 110
    assert summary["total_cost"] == 0.0
    assert summary["volume_m3"] == 75.0
    assert summary["effective_volume_m3"] == 70.0
    assert summary["line_items"] == sum(len(bsi_bom[s]) for s in SECTIONS)
    assert summary["total_panels"] == sum(
        item["quantity"] for s in PANEL_SECTIONS for item in bsi_bom[s]
    )


def test_bsi_reference_cleats_and_assumptions(bsi_bom):
    """Variant 2, no partition: plain edge cleats only, 12 corner cleats."""
    assert items_by_sku(bsi_bom["cleats"]) == {
        "CleatE25-SS316": 48,
        "CleatA-18-SS316": 8,
        "CleatAL-18-SS316": 6,
        "CC-18-SS316": 12,
    }
    assert bsi_bom["assumptions"][0].startswith("Build standard: BSI")
    assert any("5mm panels priced with 6mm SKUs" in a for a in bsi_bom["assumptions"])


def test_draft_has_no_prices(bsi_bom):
    for section in SECTIONS:
        for item in bsi_bom[section]:
            assert item["unit_price"] == 0.0
            assert item["line_total"] == 0.0


# ============================================================
# Partitions, small tanks
# ============================================================

def test_sans_partitioned_tank():
    """6x4x2 SANS, one partition across the 4-panel side."""
    bom = calculate_draft_bom(make_spec(length=6, width=4, height=2, partition_count=1))
    assert [t["thickness_mm"] for t in bom["tiers"]] == [3.0, 3.0]
    assert items_by_sku(bom["base"])["2AB3-m-S2"] == 1
    assert items_by_sku(bom["partition"]) == {"2Cφ3-m-S2": 4, "2Bφ3-m-S2": 4}
    assert bom["summary"]["total_panels"] == 24 + 40 + 1 + 8 + 24


def test_single_panel_tank_omits_zero_quantities():
    """1x1x1: one base corner, walls are corners only, roof is one manhole."""
    bom = calculate_draft_bom(make_spec(length=1, width=1, height=1, build_standard="BSI", freeboard=0.1))
    for section in SECTIONS:
        for item in bom[section]:
            assert item["quantity"] > 0, item
    assert items_by_sku(bom["base"]) == {"2BCL6-m-S2": 1}
    assert items_by_sku(bom["walls"]) == {"2B6-m-S2": 4}
    assert items_by_sku(bom["roof"]) == {"2MH15-m-S2": 1}


def test_imperial_hdg_variant_one():
    """Imperial HDG, variant 1: SKUs carry -i-HDG and the 1 prefix."""
    bom = calculate_draft_bom(make_spec(length=4.88, width=3.66, height=2.44, material="HDG",
                                        panel_type="i", panel_variant=1))
    base = items_by_sku(bom["base"])
    assert "1BCL3-i-HDG" in base
    assert bom["accessories"][0]["sku"] == "BN300FBNM10025"
    assert "CleatCC2-HDG" in items_by_sku(bom["cleats"])


def test_sans_fallback_height_is_flagged():
    """Out-of-table SANS height: single 3mm tier plus an assumption note."""
    bom = calculate_draft_bom(make_spec(height=2.5))
    assert len(bom["tiers"]) == 1
    assert any("verify with engineering" in a for a in bom["assumptions"])


# ============================================================
# Registry and validation
# ============================================================

def test_registry_maps_materials():
    assert isinstance(get_calculator("SS316"), SteelTankCalculator)
    assert isinstance(get_calculator("MS"), SteelTankCalculator)
    assert isinstance(get_calculator("FRP"), FRPTankCalculator)
    assert has_calculator("HDG")
    assert not has_calculator("GRP")
    assert set(list_calculators()) == {"SS316", "SS304", "HDG", "MS", "FRP"}
    with pytest.raises(ValueError):
        get_calculator("GRP")


def test_spec_defaults_build_standard_by_material():
    assert make_spec().build_standard.value == "SANS"
    assert make_spec(material="FRP").build_standard.value == "MS1390"


@pytest.mark.parametrize("overrides", [
    {"material": "SS316", "build_standard": "MS1390"},
    {"material": "FRP", "build_standard": "BSI"},
    {"length": 0},
    {"height": 1, "freeboard": 1.0},
    {"partition_count": -1},
    {"panel_variant": 3},
])
def test_spec_rejects_invalid_input(overrides):
    with pytest.raises(ValidationError):
        make_spec(**overrides)
