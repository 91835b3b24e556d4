"""
Panel position classification.

Base cells split into corners (two hands, BCL / BCR), border edges and interior.
Counts are closed-form; classify_base_cells_by_walk() enumerates every cell and
exists so the two can be checked against each other.
"""

from dataclasses import dataclass


@dataclass(frozen=True)
class BaseClassification:
    corners_left: int
    corners_right: int
    edges: int
    interior: int

    @property
    def corners(self) -> int:
        return self.corners_left + self.corners_right

    @property
    def total(self) -> int:
        return self.corners + self.edges + self.interior


def classify_base_cells(length_panels: int, width_panels: int) -> BaseClassification:
    """
    Closed-form base classification.

    1x1 grid -> 1 corner. 1xN strip -> 2 corners. Otherwise 4 corners.
    Left-hand corners take the first two, right-hand the rest.
    """
    if length_panels < 1 or width_panels < 1:
        raise ValueError(f"Grid must be at least 1x1, got {length_panels}x{width_panels}")

    if length_panels == 1 and width_panels == 1:
        corners = 1
    elif length_panels == 1 or width_panels == 1:
        corners = 2
    else:
        corners = 4

    interior = max(0, length_panels - 2) * max(0, width_panels - 2)
    edges = length_panels * width_panels - corners - interior
    left = min(corners, 2)
    return BaseClassification(
        corners_left=left,
        corners_right=corners - left,
        edges=edges,
        interior=interior,
    )


def classify_base_cells_by_walk(length_panels: int, width_panels: int) -> BaseClassification:
    """Cell-by-cell classification. Diagonal corners share a hand."""
    left = right = edges = interior = 0
    last_row = width_panels - 1
    last_col = length_panels - 1
    for row in range(width_panels):
        for col in range(length_panels):
            on_row_end = row in (0, last_row)
            on_col_end = col in (0, last_col)
            if on_row_end and on_col_end:
                if (row == 0 and col == 0) or (row == last_row and col == last_col):
                    left += 1
                else:
                    right += 1
            elif on_row_end or on_col_end:
                edges += 1
            else:
                interior += 1
    return BaseClassification(corners_left=left, corners_right=right, edges=edges, interior=interior)


def partition_field_panels(span: int) -> int:
    """Field panels in one partition wall tier: the span less its two corners, at least 1."""
    return max(1, span - 2)


def partition_base_supports(span: int) -> int:
    """Base support panels under one partition, at least 1."""
    return max(1, span - 4)


def roof_allocation(length_panels: int, width_panels: int,
                    manholes: int, air_vents: int) -> dict:
    """
    Split the roof grid into manhole, air-vent and plain field positions.

    Manholes are placed first, then vents, so small roofs never
    reserve more positions than they have.
    """
    total = length_panels * width_panels
    manhole_qty = min(manholes, total)
    vent_qty = min(air_vents, total - manhole_qty)
    return {
        "total": total,
        "manholes": manhole_qty,
        "air_vents": vent_qty,
        "field": total - manhole_qty - vent_qty,
    }
