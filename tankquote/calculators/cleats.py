"""
Cleat quantities for steel tanks.

Edge cleats sit at "+" junctions where four panels meet. Tanks of 4+ panels
high use welded edge cleats on the base perimeter and the bottom wall level.
"""

from .base import add_item
from .grid import PanelGrid
from ..models import Material


def edge_cleats(L: int, W: int, H: int, variant: int, partition_count: int = 0) -> dict:
    """Returns {"plain": n, "welded": n}."""
    base_junctions = (L - 1) * (W - 1)
    interior_base = max(0, (L - 3) * (W - 3))
    perimeter_base = base_junctions - interior_base
    wall_level = 2 * (L - 1) + 2 * (W - 1)

    if H >= 4:
        return {
            "welded": perimeter_base + wall_level,
            "plain": interior_base + wall_level * (H - 2),
        }

    adjustment = 1 if (variant == 1 and partition_count > 0) else 0
    return {
        "welded": 0,
        "plain": max(0, base_junctions + wall_level * (H - 1) - adjustment),
    }


def cleat_a(L: int, partition_count: int) -> int:
    """Panel joint cleats."""
    return 2 * (L - 1) if partition_count == 0 else 9


def cleat_al(L: int, variant: int, partition_count: int) -> int:
    """Angle cleats at the horizontal stays."""
    if variant == 1:
        return 6 + 2 * partition_count
    if partition_count == 0:
        return 6
    return 8 if L >= 6 else 4


def corner_cleats(variant: int, partition_count: int) -> dict:
    if variant == 1:
        return {
            "c1_rubber": max(0, 24 - 2 * partition_count),
            "c2": 24,
            "partition": 7 * partition_count,
        }
    return {"cc": 12 + 6 * partition_count}


def edge_cleat_sku(material: Material, welded: bool) -> str:
    material = Material(material)
    if material.is_stainless:
        return f"CleatE3-{material.value}" if welded else f"CleatE25-{material.value}"
    return f"CleatEW-{material.value}" if welded else f"CleatE-{material.value}"


def calculate_cleats(grid: PanelGrid, material: Material, variant: int,
                     partition_count: int = 0) -> list:
    L, W, H = grid.length_panels, grid.width_panels, grid.height_panels
    mat = Material(material).value
    items = []

    edges = edge_cleats(L, W, H, variant, partition_count)
    add_item(items, edge_cleat_sku(material, welded=True), "Cleat E Welded - 6mm",
             edges["welded"], "cleats")
    add_item(items, edge_cleat_sku(material, welded=False), "Cleat E - 5mm",
             edges["plain"], "cleats")
    add_item(items, f"CleatA-18-{mat}", "Cleat A (CA)", cleat_a(L, partition_count), "cleats")
    add_item(items, f"CleatAL-18-{mat}", "Cleat AL - Angle",
             cleat_al(L, variant, partition_count), "cleats")

    corners = corner_cleats(variant, partition_count)
    if variant == 1:
        add_item(items, "CL200I001", "Cleat C (CC)(C1 Rubber)", corners["c1_rubber"], "cleats")
        add_item(items, f"CleatCC2-{mat}", "Cleat C (CC)(C2)", corners["c2"], "cleats")
        add_item(items, f"CleatCCP-{mat}", "Cleat C Partition", corners["partition"], "cleats")
    else:
        add_item(items, f"CC-18-{mat}", "Corner Cleat C", corners["cc"], "cleats")
    return items
