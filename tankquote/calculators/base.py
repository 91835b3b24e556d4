"""
Abstract base class for tank calculators.

Input: validated TankSpecification
Output: draft BOM dict (sections of line items, unpriced)
"""

import logging
from abc import ABC, abstractmethod

from .grid import PanelGrid

logger = logging.getLogger(__name__)

SECTIONS = ("base", "walls", "partition", "roof", "supports", "cleats", "accessories")
PANEL_SECTIONS = ("base", "walls", "partition", "roof")


def make_line_item(sku: str, description: str, quantity: int, category: str,
                   thickness_mm: float = None, breakdown: dict = None) -> dict:
    """Build an unpriced BOM line item dict."""
    item = {
        "sku": sku,
        "description": description,
        "quantity": int(quantity),
        "category": category,
        "unit_price": 0.0,
        "line_total": 0.0,
    }
    if thickness_mm is not None:
        item["thickness_mm"] = thickness_mm
    if breakdown is not None:
        item["breakdown"] = breakdown
    return item


def add_item(section: list, sku: str, description: str, quantity: int,
             category: str, **extra) -> None:
    """Append a line item. Zero quantities are skipped, negatives are a bug."""
    if quantity < 0:
        raise ValueError(f"Negative quantity {quantity} for {sku}")
    if quantity == 0:
        return
    section.append(make_line_item(sku, description, quantity, category, **extra))


class BaseCalculator(ABC):
    """All tank calculators inherit from this."""

    @abstractmethod
    def calculate(self, spec) -> dict:
        """
        Takes a validated TankSpecification.
        Returns a draft BOM dict; every line item carries unit_price 0.
        """
        pass

    # --- Helper methods for all calculators ---

    def add_item(self, section: list, sku: str, description: str, quantity: int,
                 category: str, **extra) -> None:
        add_item(section, sku, description, quantity, category, **extra)

    def empty_sections(self) -> dict:
        return {name: [] for name in SECTIONS}

    def make_bom(self, spec, grid: PanelGrid, tiers: list, sections: dict,
                 assumptions: list = None, **extra) -> dict:
        """Build the draft BOM dict."""
        total_panels = sum(
            item["quantity"] for name in PANEL_SECTIONS for item in sections.get(name, [])
        )
        line_items = sum(len(sections.get(name, [])) for name in SECTIONS)
        bom = {
            "material": spec.material.value,
            "build_standard": spec.build_standard.value,
            "panel_type": spec.panel_type.value,
            "grid": grid.to_dict(),
            "tiers": [t.to_dict() for t in tiers],
        }
        bom.update(extra)
        for name in SECTIONS:
            bom[name] = sections.get(name, [])
        bom["summary"] = {
            "total_panels": total_panels,
            "total_cost": 0.0,
            "line_items": line_items,
            "fallback_priced_items": 0,
            "volume_m3": round(spec.volume_m3, 3),
            "effective_volume_m3": round(spec.effective_volume_m3, 3),
            "currency": None,
            "catalog_loaded_at": None,
        }
        bom["assumptions"] = list(assumptions or [])
        logger.info(
            "Draft BOM %s/%s: %d line items, %d panels",
            bom["material"], bom["build_standard"], line_items, total_panels,
        )
        return bom
