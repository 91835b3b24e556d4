"""
Support structure sizing: internal tie-rods (stays) or external I-beam bracing.

Internal: bottom tier takes Ø18mm stays, every tier above takes Ø14mm at the
same per-axis counts. External: I-beams on the wall seams, each carrying a fixed
kit of bend angles, base plates and M12 bolt sets.
"""

import math

from .base import add_item
from .grid import PanelGrid
from ..models import PanelType

DEFAULT_IBEAM_SIZE = "150x75"

# Per I-beam hardware
BEND_ANGLES_PER_BEAM = 4
BASE_PLATES_PER_BEAM = 2
BOLT_SETS_PER_BEAM = 8


def _cm(meters: float) -> int:
    return int(round(meters * 100))


def internal_stays(grid: PanelGrid, panel_type: PanelType, mat_code: str,
                   partition_count: int = 0) -> list:
    """
    Steel tie-rods.

    Stays spanning the length axis: width_panels - 1 per tier.
    Stays spanning the width axis: length_panels - 1 per tier.
    Partition stays are keyed to the shorter side.
    """
    items = []
    size = panel_type.size_m
    length_m = grid.length_panels * size
    width_m = grid.width_panels * size
    length_stays = grid.width_panels - 1
    width_stays = grid.length_panels - 1
    upper_tiers = grid.height_panels - 1

    add_item(items, f"STAY-18-{_cm(length_m)}L-{mat_code}",
             f"Tie Rod Ø18mm x {length_m:.2f}m - Bottom Tier (length axis)",
             length_stays, "internal_support")
    add_item(items, f"STAY-18-{_cm(width_m)}L-{mat_code}",
             f"Tie Rod Ø18mm x {width_m:.2f}m - Bottom Tier (width axis)",
             width_stays, "internal_support")

    if upper_tiers >= 1:
        add_item(items, f"STAY-14-{_cm(length_m)}L-{mat_code}",
                 f"Tie Rod Ø14mm x {length_m:.2f}m - Upper Tiers (length axis)",
                 length_stays * upper_tiers, "internal_support")
        add_item(items, f"STAY-14-{_cm(width_m)}L-{mat_code}",
                 f"Tie Rod Ø14mm x {width_m:.2f}m - Upper Tiers (width axis)",
                 width_stays * upper_tiers, "internal_support")

    if partition_count > 0:
        partition_m = min(length_m, width_m)
        partition_stays = min(grid.length_panels, grid.width_panels) - 1
        add_item(items, f"STAY-P-18-{_cm(partition_m)}L-{mat_code}",
                 f"Partition Tie Rod Ø18mm x {partition_m:.2f}m - Bottom",
                 partition_stays * partition_count, "internal_support")
        if upper_tiers >= 1:
            add_item(items, f"STAY-P-14-{_cm(partition_m)}L-{mat_code}",
                     f"Partition Tie Rod Ø14mm x {partition_m:.2f}m - Upper",
                     partition_stays * partition_count * upper_tiers, "internal_support")
    return items


def ibeam_count(grid: PanelGrid) -> int:
    return 2 * (grid.length_panels - 1) + 2 * (grid.width_panels - 1)


def ibeam_length_m(height_m: float) -> float:
    """Beam length rounds UP to the next 0.1m."""
    return math.ceil(round(height_m * 10, 6)) / 10


def external_ibeams(grid: PanelGrid, height_m: float, panel_type: PanelType,
                    ibeam_size: str = DEFAULT_IBEAM_SIZE) -> list:
    items = []
    beams = ibeam_count(grid)
    beam_m = ibeam_length_m(height_m)
    size_mm = panel_type.size_mm

    add_item(items, f"IBEAM-{ibeam_size}-{int(round(beam_m * 1000))}L-HDG",
             f"I-Beam {ibeam_size} x {beam_m:g}m HDG", beams, "external_support")
    add_item(items, f"BA-EB-{size_mm}-HDG",
             f"Bend Angle {size_mm}mm for I-Beam Connection",
             beams * BEND_ANGLES_PER_BEAM, "external_support")
    add_item(items, f"BASEPLATE-{ibeam_size}-HDG",
             f"Base Plate for I-Beam {ibeam_size}",
             beams * BASE_PLATES_PER_BEAM, "external_support")
    add_item(items, "BN-M12-50-HDG", "Bolt & Nut M12x50mm HDG for I-Beam",
             beams * BOLT_SETS_PER_BEAM, "external_support")
    return items


# --- FRP ---

def frp_corner_angles(depth_code: str) -> list:
    items = []
    add_item(items, f"CA-{depth_code}-FRP",
             f"FRP Corner Angle {int(depth_code) / 10:.1f}m Height", 4, "structural")
    return items


def frp_internal_tie_rods(grid: PanelGrid) -> list:
    """SS304 tie-rods through every FRP tier. FRP panels are always 1m."""
    items = []
    length_m = grid.length_panels
    width_m = grid.width_panels
    add_item(items, f"TR-FRP-{length_m}M-SS304",
             f"FRP Tie Rod SS304 x {length_m:.1f}m - Length Direction",
             (grid.width_panels - 1) * grid.height_panels, "internal_support")
    add_item(items, f"TR-FRP-{width_m}M-SS304",
             f"FRP Tie Rod SS304 x {width_m:.1f}m - Width Direction",
             (grid.length_panels - 1) * grid.height_panels, "internal_support")
    return items


def frp_partition_tie_rods(grid: PanelGrid, partition_count: int) -> list:
    items = []
    add_item(items, "TR-FRP-P-SS304", "Partition End Fix Tie Rod M10 SS304 - FRP Tank",
             2 * grid.partition_span * partition_count, "internal_support")
    return items


def frp_external_brackets(grid: PanelGrid) -> list:
    items = []
    add_item(items, "ES-FRP-BRACKET", "FRP External Support Bracket (ABS)",
             2 * grid.perimeter, "external_support")
    return items
