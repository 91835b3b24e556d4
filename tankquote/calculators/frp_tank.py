"""
FRP (fibreglass) sectional tank calculator.

Always 1m metric panels, variant 2. No steel thickness tiers: panels are keyed
by fibreglass content (3 = 35% MS1390, 4 = 40% SS245) and tank depth code.

  base       <fc>B<d>-FRP interior, -BCL / -BCR corners, -AB edges
  walls      <fc>S<d>-FRP-B bottom tier field, -A upper tiers, BCL/BCR x2 each per tier
             <fc>D15-FRP half panels for x.5m tanks, <fc>S<d>-FRP-AB partition joints
  partition  <fc>PF<d>-FRP-A field, <fc>P<d>-FRP-A corners
  roof       <fc>F00-FRP field, 2R00-FRP air vent positions, TP000G009 manhole
"""

import logging

from .base import BaseCalculator
from .grid import grid_for
from .thickness import frp_depth_code, frp_fiber_code, frp_tiers
from .panels import (
    classify_base_cells, partition_field_panels, partition_base_supports, roof_allocation,
)
from .supports import (
    frp_corner_angles, frp_internal_tie_rods, frp_partition_tie_rods, frp_external_brackets,
)
from .hardware import estimate_bolts
from .accessories import (
    general_accessories, lpcb_vortex_notes, frp_air_vents, frp_internal_ladder, frp_tank_tag,
)
from ..sku import CornerSuffix, frp_panel_sku
from ..models import SupportMode, BUILD_STANDARD_NAMES

logger = logging.getLogger(__name__)

HALF_PANEL_DEPTH = "15"
ROOF_MANHOLES = 1
ROOF_AIR_VENTS = 2
FIBER_LABELS = {"3": "35%", "4": "40%"}


class FRPTankCalculator(BaseCalculator):

    def calculate(self, spec) -> dict:
        logger.info(
            "FRP BOM: %sm x %sm x %sm, %s, %d partitions",
            spec.length, spec.width, spec.height, spec.build_standard.value, spec.partition_count,
        )
        grid = grid_for(spec)
        fc = frp_fiber_code(spec.build_standard)
        depth = frp_depth_code(spec.height)
        tiers = frp_tiers(spec.height)
        sections = self.empty_sections()
        assumptions = [
            f"Build standard: {BUILD_STANDARD_NAMES[spec.build_standard]}",
            f"FRP panels: {FIBER_LABELS[fc]} fibreglass content, depth code {depth}",
        ]
        if any(t.position == "half" for t in tiers):
            assumptions.append(f"{spec.height}m height uses a half tier of D15 panels")

        self._base_panels(spec, grid, fc, depth, sections["base"])
        self._wall_panels(spec, grid, fc, depth, tiers, sections["walls"])
        if spec.partition_count > 0:
            self._partition_panels(spec, grid, fc, depth, len(tiers), sections["partition"])
        self._roof_panels(grid, fc, sections["roof"])

        supports = sections["supports"]
        supports.extend(frp_corner_angles(depth))
        if spec.support_mode is SupportMode.INTERNAL:
            supports.extend(frp_internal_tie_rods(grid))
        elif spec.support_mode is SupportMode.EXTERNAL:
            supports.extend(frp_external_brackets(grid))
        if spec.partition_count > 0:
            supports.extend(frp_partition_tie_rods(grid, spec.partition_count))

        accessories = sections["accessories"]
        accessories.append(estimate_bolts(grid, spec.material, spec.panel_type))
        accessories.extend(frp_air_vents(spec.volume_m3))
        accessories.extend(frp_internal_ladder(spec.height))
        accessories.extend(frp_tank_tag())
        accessories.extend(general_accessories(spec))
        assumptions.extend(lpcb_vortex_notes(spec))

        return self.make_bom(spec, grid, tiers, sections, assumptions,
                             depth_code=depth, fiber_code=fc)

    def _base_panels(self, spec, grid, fc: str, depth: str, base: list):
        cells = classify_base_cells(grid.length_panels, grid.width_panels)
        label = f"B{depth} ({FIBER_LABELS[fc]})"
        self.add_item(base, frp_panel_sku(fc, "B", depth), f"FRP Base Panel - {label}",
                      cells.interior, "base")
        self.add_item(base, frp_panel_sku(fc, "B", depth, CornerSuffix.BCL),
                      f"FRP Base Corner Panel - {label} - BCL", cells.corners_left, "base")
        self.add_item(base, frp_panel_sku(fc, "B", depth, CornerSuffix.BCR),
                      f"FRP Base Corner Panel - {label} - BCR", cells.corners_right, "base")
        self.add_item(base, frp_panel_sku(fc, "B", depth, CornerSuffix.AB),
                      f"FRP Base Edge Panel - {label} - AB", cells.edges, "base")
        if spec.partition_count > 0:
            self.add_item(base, frp_panel_sku(fc, "B", depth, CornerSuffix.AB),
                          f"FRP Base Panel - {label} - Partition Support",
                          partition_base_supports(grid.partition_span) * spec.partition_count,
                          "base")

    def _wall_panels(self, spec, grid, fc: str, depth: str, tiers: list, walls: list):
        field = grid.perimeter - 4
        for tier in tiers:
            if tier.position == "half":
                location, tier_depth, code = "D", HALF_PANEL_DEPTH, CornerSuffix.A
                label = f"D{HALF_PANEL_DEPTH} - Half Tier"
            else:
                location, tier_depth = "S", depth
                code = CornerSuffix.B if tier.code == "B" else CornerSuffix.A
                label = f"S{depth} - Tier {tier.tier_index}"
            self.add_item(walls, frp_panel_sku(fc, location, tier_depth, code),
                          f"FRP Sidewall {label}", field, "walls")
            self.add_item(walls, frp_panel_sku(fc, location, tier_depth, CornerSuffix.BCL),
                          f"FRP Sidewall {label} Corner Left", 2, "walls")
            self.add_item(walls, frp_panel_sku(fc, location, tier_depth, CornerSuffix.BCR),
                          f"FRP Sidewall {label} Corner Right", 2, "walls")

        if spec.partition_count > 0:
            self.add_item(walls, frp_panel_sku(fc, "S", depth, CornerSuffix.AB),
                          f"FRP Sidewall S{depth}-AB - Partition Joint",
                          2 * spec.partition_count * len(tiers), "walls")

    def _partition_panels(self, spec, grid, fc: str, depth: str, tier_count: int, partition: list):
        count = spec.partition_count
        self.add_item(partition, frp_panel_sku(fc, "PF", depth, CornerSuffix.A),
                      f"FRP Partition Panel PF{depth}-A",
                      partition_field_panels(grid.partition_span) * tier_count * count, "partition")
        self.add_item(partition, frp_panel_sku(fc, "P", depth, CornerSuffix.A),
                      f"FRP Partition Corner P{depth}-A",
                      2 * tier_count * count, "partition")

    def _roof_panels(self, grid, fc: str, roof: list):
        slots = roof_allocation(grid.length_panels, grid.width_panels, ROOF_MANHOLES, ROOF_AIR_VENTS)
        self.add_item(roof, frp_panel_sku(fc, "F", "00"),
                      f"FRP Flat Roof Panel ({FIBER_LABELS[fc]})", slots["field"], "roof")
        self.add_item(roof, frp_panel_sku("2", "R", "00"),
                      "FRP Roof Panel - Air Vent Position", slots["air_vents"], "roof")
        self.add_item(roof, "TP000G009", "FRP Manhole Panel with Cover", slots["manholes"], "roof")
