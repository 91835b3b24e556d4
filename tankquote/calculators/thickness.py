"""
Wall thickness tiers per build standard.

SANS 10329:2020: fixed height bins (mm) per panel type, explicit tier lists.
BSI / LPCB: one tier per panel of height; 6mm bottom tier from 4 panels up.
MS1390 / SS245: FRP has no steel tiers; depth code + fibreglass content instead.
"""

import logging
import math
from dataclasses import dataclass
from typing import List, Optional

from ..models import BuildStandard, PanelType
from .grid import panels_along, PANEL_SIZES

logger = logging.getLogger(__name__)

ROOF_THICKNESS_MM = 1.5
SANS_FALLBACK_THICKNESS_MM = 3.0


@dataclass(frozen=True)
class ThicknessTier:
    tier_index: int                 # 1 = bottom
    thickness_mm: Optional[float]   # None for FRP tiers
    code: str                       # A / C (steel), B / A (FRP field panel)
    position: str                   # bottom / middle / top / single / half

    def to_dict(self) -> dict:
        return {
            "tier_index": self.tier_index,
            "thickness_mm": self.thickness_mm,
            "code": self.code,
            "position": self.position,
        }


@dataclass(frozen=True)
class ThicknessPlan:
    tiers: List[ThicknessTier]
    base_mm: float
    roof_mm: float = ROOF_THICKNESS_MM
    is_fallback: bool = False


# (min_mm, max_mm, [(thickness, code), ...]), bottom tier first
SANS_BINS = {
    PanelType.METRIC: [
        (1000, 1020, [(3.0, "A")]),
        (2000, 2040, [(3.0, "A"), (3.0, "A")]),
        (3000, 3060, [(4.5, "A"), (3.0, "A"), (3.0, "C")]),
        (4000, 4080, [(5.0, "A"), (4.5, "A"), (3.0, "A"), (3.0, "C")]),
    ],
    PanelType.IMPERIAL: [
        (1200, 1220, [(2.5, "A")]),
        (2400, 2440, [(3.0, "A"), (2.5, "A")]),
        (3600, 3660, [(4.0, "A"), (3.0, "A"), (2.5, "C")]),
    ],
}


def _position(index: int, count: int) -> str:
    if count == 1:
        return "single"
    if index == 1:
        return "bottom"
    if index == count:
        return "top"
    return "middle"


def _make_tiers(rows) -> List[ThicknessTier]:
    count = len(rows)
    return [
        ThicknessTier(tier_index=i, thickness_mm=thk, code=code, position=_position(i, count))
        for i, (thk, code) in enumerate(rows, start=1)
    ]


def sans_tiers(height_m: float, panel_type: PanelType) -> ThicknessPlan:
    height_mm = round(height_m * 1000, 6)
    for low, high, rows in SANS_BINS[panel_type]:
        if low <= height_mm <= high:
            return ThicknessPlan(tiers=_make_tiers(rows), base_mm=rows[0][0])

    logger.warning(
        "SANS: no thickness bin for %.0fmm (%s panels), using single %.1fmm tier",
        height_mm, panel_type.value, SANS_FALLBACK_THICKNESS_MM,
    )
    return ThicknessPlan(
        tiers=_make_tiers([(SANS_FALLBACK_THICKNESS_MM, "A")]),
        base_mm=SANS_FALLBACK_THICKNESS_MM,
        is_fallback=True,
    )


def bsi_tiers(height_panels: int) -> ThicknessPlan:
    """BSI and LPCB share thickness rules."""
    rows = []
    for i in range(1, height_panels + 1):
        code = "C" if i == height_panels else "A"
        if height_panels >= 4 and i == 1:
            rows.append((6.0, "A"))
        else:
            rows.append((5.0, code))
    return ThicknessPlan(tiers=_make_tiers(rows), base_mm=rows[0][0])


def plan_thickness(height_m: float, panel_type: PanelType,
                   build_standard: BuildStandard) -> ThicknessPlan:
    """Tier plan for a steel tank."""
    standard = BuildStandard(build_standard)
    if standard in (BuildStandard.BSI, BuildStandard.LPCB):
        return bsi_tiers(panels_along(height_m, PANEL_SIZES[panel_type]))
    if standard is BuildStandard.SANS:
        return sans_tiers(height_m, panel_type)
    raise ValueError(
        f"No steel thickness rules for build standard: {standard.value}. "
        f"Available: {[BuildStandard.SANS.value, BuildStandard.BSI.value, BuildStandard.LPCB.value]}"
    )


# --- FRP ---

HALF_TIER_MIN = 0.4
HALF_TIER_MAX = 0.6


def frp_depth_code(height_m: float) -> str:
    """Tank depth in decimeters, rounded UP to the next multiple of 5. 3.0m -> '30', 2.2m -> '25'."""
    decimeters = math.ceil(round(height_m * 10, 6))
    return "%02d" % (math.ceil(decimeters / 5) * 5)


def frp_fiber_code(build_standard: BuildStandard) -> str:
    """'4' = 40% fibreglass (SS245), '3' = 35% (MS1390)."""
    return "4" if BuildStandard(build_standard) is BuildStandard.SS245 else "3"


def has_half_tier(height_m: float) -> bool:
    fraction = round(height_m % 1, 6)
    return HALF_TIER_MIN <= fraction <= HALF_TIER_MAX


def frp_tiers(height_m: float) -> List[ThicknessTier]:
    """
    FRP wall tiers: full 1m tiers, plus a 0.5m half tier for x.5m tanks.
    Bottom full tier uses structural 'B' field panels, the rest 'A'.
    """
    half = has_half_tier(height_m)
    full = math.floor(height_m) if half else panels_along(height_m, 1.0)
    tiers = []
    for i in range(1, full + 1):
        tiers.append(ThicknessTier(
            tier_index=i,
            thickness_mm=None,
            code="B" if i == 1 else "A",
            position=_position(i, full + (1 if half else 0)),
        ))
    if half:
        tiers.append(ThicknessTier(tier_index=full + 1, thickness_mm=None, code="A", position="half"))
    return tiers
