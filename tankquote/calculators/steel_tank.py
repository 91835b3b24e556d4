"""
Steel sectional tank calculator (SS316, SS304, HDG, MS).

Panel SKUs: <variant><location><thickness>-<m|i>-<material>
  base    B = edge, BCL / BCR = corners, A = interior, AB = partition support
  walls   bottom tier: B corners + A field; top tier: C corners + B field; middle: A field
  roof    R field, R(AV) air vent, MH manhole (1.5mm)
"""

import logging

from .base import BaseCalculator
from .grid import grid_for
from .thickness import plan_thickness
from .panels import (
    classify_base_cells, partition_field_panels, partition_base_supports, roof_allocation,
)
from .supports import internal_stays, external_ibeams
from .hardware import estimate_bolts
from .cleats import calculate_cleats
from .accessories import general_accessories, lpcb_vortex_notes
from ..sku import steel_panel_sku, map_thickness_to_available, material_code
from ..models import SupportMode, BUILD_STANDARD_NAMES

logger = logging.getLogger(__name__)

ROOF_MANHOLES = 2
ROOF_AIR_VENTS = 2


class SteelTankCalculator(BaseCalculator):

    def calculate(self, spec) -> dict:
        logger.info(
            "Steel BOM: %sm x %sm x %sm, %s, %s, panel %s type %d, %d partitions",
            spec.length, spec.width, spec.height, spec.material.value,
            spec.build_standard.value, spec.panel_type.value, spec.panel_variant,
            spec.partition_count,
        )
        grid = grid_for(spec)
        plan = plan_thickness(spec.height, spec.panel_type, spec.build_standard)
        sections = self.empty_sections()
        assumptions = [f"Build standard: {BUILD_STANDARD_NAMES[spec.build_standard]}"]

        if plan.is_fallback:
            assumptions.append(
                f"SANS 10329 has no thickness table for {spec.height}m "
                f"({spec.panel_type.value} panels); single 3.0mm tier assumed, verify with engineering"
            )

        self._base_panels(spec, grid, plan.base_mm, sections["base"])
        self._wall_panels(spec, grid, plan.tiers, sections["walls"])
        if spec.partition_count > 0:
            self._partition_panels(spec, grid, plan, sections)
        self._roof_panels(spec, grid, sections["roof"])

        mat_code = material_code(spec.material)
        if spec.support_mode is SupportMode.INTERNAL:
            sections["supports"] = internal_stays(grid, spec.panel_type, mat_code, spec.partition_count)
        elif spec.support_mode is SupportMode.EXTERNAL:
            sections["supports"] = external_ibeams(grid, spec.height, spec.panel_type, spec.ibeam_size)

        sections["cleats"] = calculate_cleats(grid, spec.material, spec.panel_variant, spec.partition_count)

        sections["accessories"].append(estimate_bolts(grid, spec.material, spec.panel_type))
        sections["accessories"].extend(general_accessories(spec))

        used = {plan.base_mm} | {t.thickness_mm for t in plan.tiers}
        for thk in sorted(used):
            mapped = map_thickness_to_available(thk)
            if mapped != thk:
                logger.warning("Thickness %.1fmm priced as %.1fmm (not stocked)", thk, mapped)
                assumptions.append(
                    f"{thk:g}mm panels priced with {mapped:g}mm SKUs; engineering thickness unchanged"
                )
        assumptions.extend(lpcb_vortex_notes(spec))

        return self.make_bom(spec, grid, plan.tiers, sections, assumptions)

    def _panel_sku(self, spec, location: str, thickness_mm: float) -> str:
        return steel_panel_sku(spec.panel_variant, location, thickness_mm,
                               spec.panel_type, spec.material)

    def _base_panels(self, spec, grid, thk: float, base: list):
        cells = classify_base_cells(grid.length_panels, grid.width_panels)
        self.add_item(base, self._panel_sku(spec, "B", thk), f"Base Panel - {thk}mm",
                      cells.edges, "base", thickness_mm=thk)
        self.add_item(base, self._panel_sku(spec, "BCL", thk), f"Base Corner Left - {thk}mm",
                      cells.corners_left, "base", thickness_mm=thk)
        self.add_item(base, self._panel_sku(spec, "BCR", thk), f"Base Corner Right - {thk}mm",
                      cells.corners_right, "base", thickness_mm=thk)
        self.add_item(base, self._panel_sku(spec, "A", thk), f"Interior Base Panel - {thk}mm",
                      cells.interior, "base", thickness_mm=thk)
        if spec.partition_count > 0:
            self.add_item(base, self._panel_sku(spec, "AB", thk), f"Partition Base Support - {thk}mm",
                          partition_base_supports(grid.partition_span) * spec.partition_count,
                          "base", thickness_mm=thk)

    def _wall_panels(self, spec, grid, tiers: list, walls: list):
        field = grid.perimeter - 4
        last = len(tiers)
        for tier in tiers:
            thk = tier.thickness_mm
            label = f"Tier {tier.tier_index} - {thk}mm"
            if tier.tier_index == 1:
                self.add_item(walls, self._panel_sku(spec, "B", thk), f"Wall Corner Bottom - {label}",
                              4, "walls", thickness_mm=thk)
                self.add_item(walls, self._panel_sku(spec, "A", thk), f"Wall Panel - {label}",
                              field, "walls", thickness_mm=thk)
            elif tier.tier_index == last:
                self.add_item(walls, self._panel_sku(spec, "C", thk), f"Wall Corner Top - {label}",
                              4, "walls", thickness_mm=thk)
                self.add_item(walls, self._panel_sku(spec, "B", thk), f"Wall Panel Top - {label}",
                              field, "walls", thickness_mm=thk)
            else:
                self.add_item(walls, self._panel_sku(spec, "A", thk), f"Wall Panel - {label}",
                              grid.perimeter, "walls", thickness_mm=thk)

    def _partition_panels(self, spec, grid, plan, sections):
        count = spec.partition_count
        for tier in plan.tiers:
            thk = tier.thickness_mm
            label = f"Tier {tier.tier_index} - {thk}mm"
            self.add_item(sections["partition"], self._panel_sku(spec, "Cφ", thk),
                          f"Partition Corner - {label}", 2 * count, "partition", thickness_mm=thk)
            self.add_item(sections["partition"], self._panel_sku(spec, "Bφ", thk),
                          f"Partition Wall - {label}",
                          partition_field_panels(grid.partition_span) * count,
                          "partition", thickness_mm=thk)

    def _roof_panels(self, spec, grid, roof: list):
        thk = spec.roof_thickness

        def roof_sku(location):
            return steel_panel_sku(spec.panel_variant, location, thk, spec.panel_type,
                                   spec.material, substitute=False)

        slots = roof_allocation(grid.length_panels, grid.width_panels, ROOF_MANHOLES, ROOF_AIR_VENTS)
        self.add_item(roof, roof_sku("R"), f"Roof Panel - {thk}mm",
                      slots["field"], "roof", thickness_mm=thk)
        self.add_item(roof, roof_sku("R(AV)"), f"Roof Air Vent - {thk}mm",
                      slots["air_vents"], "roof", thickness_mm=thk)
        self.add_item(roof, roof_sku("MH"), f"Manhole - {thk}mm",
                      slots["manholes"], "roof", thickness_mm=thk)
