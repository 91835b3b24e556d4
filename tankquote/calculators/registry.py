"""
Calculator registry: maps tank materials to calculator classes.
"""

from .steel_tank import SteelTankCalculator
from .frp_tank import FRPTankCalculator
from .base import BaseCalculator
from ..models import Material

CALCULATOR_REGISTRY: dict[str, type] = {
    Material.SS316.value: SteelTankCalculator,
    Material.SS304.value: SteelTankCalculator,
    Material.HDG.value: SteelTankCalculator,
    Material.MS.value: SteelTankCalculator,
    Material.FRP.value: FRPTankCalculator,
}


def get_calculator(material) -> BaseCalculator:
    """Returns an instance of the calculator for a material, or raises ValueError."""
    key = getattr(material, "value", material)
    if key not in CALCULATOR_REGISTRY:
        raise ValueError(
            f"No calculator registered for material: {key}. "
            f"Available: {list(CALCULATOR_REGISTRY.keys())}"
        )
    return CALCULATOR_REGISTRY[key]()


def has_calculator(material) -> bool:
    """Check if a calculator exists for a material."""
    return getattr(material, "value", material) in CALCULATOR_REGISTRY


def list_calculators() -> list[str]:
    """List all registered materials."""
    return list(CALCULATOR_REGISTRY.keys())


def calculate_draft_bom(spec) -> dict:
    """Unpriced BOM for a validated TankSpecification."""
    return get_calculator(spec.material).calculate(spec)
