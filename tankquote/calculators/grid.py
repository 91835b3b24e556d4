"""
Panel grid: physical tank dimensions to whole-panel counts.
"""

import math
from dataclasses import dataclass

from ..models import PanelType, PartitionDirection


class InvalidDimension(ValueError):
    """Raised when a tank dimension is missing, non-numeric or not positive."""


PANEL_SIZES = {PanelType.METRIC: 1.0, PanelType.IMPERIAL: 1.22}


@dataclass(frozen=True)
class PanelGrid:
    length_panels: int
    width_panels: int
    height_panels: int
    partition_span: int

    @property
    def perimeter(self) -> int:
        return 2 * (self.length_panels + self.width_panels)

    @property
    def base_cells(self) -> int:
        return self.length_panels * self.width_panels

    def to_dict(self) -> dict:
        return {
            "length_panels": self.length_panels,
            "width_panels": self.width_panels,
            "height_panels": self.height_panels,
            "perimeter": self.perimeter,
            "partition_span": self.partition_span,
        }


def panels_along(dimension: float, panel_size: float) -> int:
    """
    Panels needed to cover one axis. Always rounds UP.

    Rounded to 6 places first so float noise (3.6600000000000001 / 1.22)
    does not add a phantom panel.
    """
    return max(1, math.ceil(round(dimension / panel_size, 6)))


def _check_dimension(name: str, value) -> float:
    if value is None:
        raise InvalidDimension(f"{name} is required")
    try:
        number = float(value)
    except (TypeError, ValueError):
        raise InvalidDimension(f"{name} must be a number, got {value!r}")
    if math.isnan(number) or number <= 0:
        raise InvalidDimension(f"{name} must be greater than zero, got {value!r}")
    return number


def compute_grid(length, width, height, panel_size,
                 partition_direction=PartitionDirection.AUTO) -> PanelGrid:
    """
    Convert meters to panel counts.

    panel_size may be a PanelType or the raw panel edge in meters (1.0 / 1.22).
    Raises InvalidDimension for missing or non-positive input.
    """
    length = _check_dimension("length", length)
    width = _check_dimension("width", width)
    height = _check_dimension("height", height)

    if isinstance(panel_size, PanelType):
        size = PANEL_SIZES[panel_size]
    else:
        size = _check_dimension("panel_size", panel_size)
        if size not in PANEL_SIZES.values():
            raise InvalidDimension(
                f"Unknown panel size {panel_size!r}. Available: {sorted(PANEL_SIZES.values())}"
            )

    length_panels = panels_along(length, size)
    width_panels = panels_along(width, size)
    height_panels = panels_along(height, size)

    direction = PartitionDirection(partition_direction)
    if direction is PartitionDirection.WIDTH:
        span = width_panels
    elif direction is PartitionDirection.LENGTH:
        span = length_panels
    else:
        span = min(length_panels, width_panels)

    return PanelGrid(
        length_panels=length_panels,
        width_panels=width_panels,
        height_panels=height_panels,
        partition_span=span,
    )


def grid_for(spec) -> PanelGrid:
    """Grid for a validated TankSpecification."""
    return compute_grid(spec.length, spec.width, spec.height,
                        spec.panel_type, spec.partition_direction)
