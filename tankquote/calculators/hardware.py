"""
Bolt & nut estimate for panel connections.

Approximate by design: every panel has 4 bolted sides, neighbouring panels
share an edge (÷2), and a flat 20% covers perimeter and corner doubling.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from .base import make_line_item
from .grid import PanelGrid
from ..models import Material, PanelType

logger = logging.getLogger(__name__)

SIDES_PER_PANEL = 4
SHARED_EDGE_DIVISOR = 2
BUFFER = 1.2

BOLTS_PER_SIDE = {
    Material.SS316: {PanelType.METRIC: 16, PanelType.IMPERIAL: 20},
    Material.SS304: {PanelType.METRIC: 16, PanelType.IMPERIAL: 20},
    Material.HDG: {PanelType.METRIC: 13, PanelType.IMPERIAL: 16},
    Material.MS: {PanelType.METRIC: 13, PanelType.IMPERIAL: 16},
    Material.FRP: {PanelType.METRIC: 13, PanelType.IMPERIAL: 13},
}

BOLT_SKUS = {
    Material.SS316: "BN300ABNM10025",   # SS316 Bolts & Nuts M10 x 25MM
    Material.SS304: "BN300BBNM10025",   # SS304 Bolts & Nuts M10 x 25MM
}
DEFAULT_BOLT_SKU = "BN300FBNM10025"     # HDG, also used for MS and FRP


def bolts_per_side(material: Material, panel_type: PanelType) -> int:
    return BOLTS_PER_SIDE[Material(material)][PanelType(panel_type)]


def bolt_sku(material: Material) -> str:
    return BOLT_SKUS.get(Material(material), DEFAULT_BOLT_SKU)


def total_panels_for_bolting(grid: PanelGrid) -> int:
    """Base + roof + one wall ring per tier."""
    base = grid.base_cells
    roof = grid.base_cells
    walls = grid.perimeter * grid.height_panels
    return base + roof + walls


def _round_half_up(value: float) -> int:
    return int(Decimal(str(value)).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def estimate_bolts(grid: PanelGrid, material: Material, panel_type: PanelType) -> dict:
    """
    Returns the bolt & nut line item with an audit breakdown.

    5 x 5 x 3 SS316 metric: 110 panels x 4 x 16 / 2 x 1.2 = 4224
    """
    per_side = bolts_per_side(material, panel_type)
    total_panels = total_panels_for_bolting(grid)
    shared_edge = total_panels * SIDES_PER_PANEL * per_side / SHARED_EDGE_DIVISOR
    total_bolts = _round_half_up(shared_edge * BUFFER)
    sku = bolt_sku(material)

    logger.debug(
        "Bolts %s/%s: %d panels x %d x %d / %d x %.1f = %d (%s)",
        Material(material).value, PanelType(panel_type).value, total_panels,
        SIDES_PER_PANEL, per_side, SHARED_EDGE_DIVISOR, BUFFER, total_bolts, sku,
    )

    return make_line_item(
        sku,
        "Bolts & Nuts M10x25mm for Panel Connections",
        total_bolts,
        "accessories",
        breakdown={
            "total_panels": total_panels,
            "base_panels": grid.base_cells,
            "roof_panels": grid.base_cells,
            "wall_panels": grid.perimeter * grid.height_panels,
            "bolts_per_side": per_side,
            "shared_edge_bolts": shared_edge,
            "with_buffer": total_bolts,
        },
    )
