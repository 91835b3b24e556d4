"""
Tank accessories: water level indicator, ladders, safety cage, pipe fittings,
and the FRP-only roof / tag extras.
"""

import math
import re

from .base import add_item
from ..models import BuildStandard

SAFETY_CAGE_MIN_HEIGHT_M = 3.0
FRP_LADDER_MIN_HEIGHT_M = 2.0
FRP_LARGE_VENT_VOLUME_M3 = 50
FRP_TWIN_VENT_VOLUME_M3 = 20


def _sku_token(text: str) -> str:
    """'S/F Nozzle' -> 'SFNOZZLE', 'JIS 10k' -> 'JIS10K'."""
    return re.sub(r"[^A-Z0-9]", "", str(text).upper())


def pipe_fitting_sku(item: str, flange_type: str, size_mm: int, material: str) -> str:
    return f"PF-{_sku_token(item)}-{_sku_token(flange_type)}-{int(size_mm)}-{_sku_token(material)}"


def pipe_fitting_items(fittings) -> list:
    """Each fitting is an outside item plus an inside item."""
    items = []
    for fitting in fittings:
        for side, item, material in (
            ("Outside", fitting.outside_item, fitting.outside_material),
            ("Inside", fitting.inside_item, fitting.inside_material),
        ):
            add_item(
                items,
                pipe_fitting_sku(item, fitting.flange_type, fitting.size_mm, material),
                f"{fitting.opening} {side} {item} {fitting.flange_type} DN{fitting.size_mm} {material}",
                fitting.quantity,
                "pipe_fittings",
            )
    return items


def lpcb_vortex_notes(spec) -> list:
    """LPCB outlets need a vortex inhibitor. The UI enforces it; here we only remind."""
    if spec.build_standard is not BuildStandard.LPCB:
        return []
    notes = []
    for fitting in spec.pipe_fittings:
        if fitting.opening.lower() != "outlet":
            continue
        if "vortex" in fitting.inside_item.lower():
            continue
        notes.append(
            f"LPCB: outlet DN{fitting.size_mm} has no vortex inhibitor "
            f"(inside item is {fitting.inside_item})"
        )
    return notes


def general_accessories(spec) -> list:
    items = []
    if spec.wli_material and spec.wli_material.lower() != "none":
        add_item(items, f"WLI-{spec.wli_material}", f"Water Level Indicator - {spec.wli_material}",
                 1, "accessories")

    add_item(items, f"LADDER-INT-{spec.internal_ladder_material}",
             f"Internal Ladder - {spec.internal_ladder_material}",
             spec.internal_ladder_qty, "accessories")
    add_item(items, f"LADDER-EXT-{spec.external_ladder_material}",
             f"External Ladder - {spec.external_ladder_material}",
             spec.external_ladder_qty, "accessories")

    if spec.external_ladder_qty > 0 and (spec.safety_cage or spec.height > SAFETY_CAGE_MIN_HEIGHT_M):
        add_item(items, f"CAGE-{spec.external_ladder_material}",
                 f"Safety Cage - {spec.external_ladder_material}",
                 spec.external_ladder_qty, "accessories")

    items.extend(pipe_fitting_items(spec.pipe_fittings))
    return items


# --- FRP ---

def frp_air_vents(volume_m3: float) -> list:
    items = []
    large = volume_m3 > FRP_LARGE_VENT_VOLUME_M3
    add_item(
        items,
        "OA200G001" if large else "OA200B001",
        f"Dia Ø{100 if large else 50} Air Vent FRP (Grey)(ABS) c/w Gasket - SS304 Mesh",
        2 if volume_m3 > FRP_TWIN_VENT_VOLUME_M3 else 1,
        "accessories",
    )
    return items


def frp_internal_ladder(height_m: float) -> list:
    """Ladder length rounds UP to the next 0.5m. 2.2m tank -> IL-FRP-25M."""
    items = []
    if height_m >= FRP_LADDER_MIN_HEIGHT_M:
        ladder_m = math.ceil(round(height_m / 0.5, 6)) * 0.5
        add_item(items, f"IL-FRP-{int(round(ladder_m * 10))}M",
                 f"FRP Internal Ladder {ladder_m:g}M", 1, "accessories")
    return items


def frp_tank_tag() -> list:
    items = []
    add_item(items, "SI600S003", "FRP Tank Tag 1.6MM x 100MM (L) x 50MM (H)", 1, "accessories")
    return items
