"""
SKU grammar for tank panels.

Steel:  <variant><location><thickness>-<m|i>-<material>[-<suffix>]   e.g. 2B3-m-S2, 1BCL6-i-HDG
FRP:    <fiber><location><depth>-FRP[-<suffix>]                     e.g. 3B30-FRP-BCL, 4S25-FRP-A

Every panel SKU the calculators emit is built here, and the price resolver
parses with the same patterns, so the two never drift apart.
"""

import enum
import re
from dataclasses import dataclass, replace
from typing import Optional

from .models import Material, PanelType

FRP_MARKER = "-FRP"


class CornerSuffix(str, enum.Enum):
    BCL = "BCL"     # corner, left hand
    BCR = "BCR"     # corner, right hand
    ABL = "ABL"
    ABR = "ABR"
    AB = "AB"       # edge / partition joint
    A = "A"         # standard field panel
    B = "B"         # structural (bottom tier) field panel

    @property
    def is_corner(self) -> bool:
        return self in (CornerSuffix.BCL, CornerSuffix.BCR, CornerSuffix.ABL, CornerSuffix.ABR)


MATERIAL_CODES = {
    Material.SS316: "S2",
    Material.SS304: "S1",
    Material.HDG: "HDG",
    Material.MS: "MS",
}

# Catalog only stocks 2.0 / 2.5 / 3.0 / 4.0 / 6.0mm panels.
THICKNESS_SUBSTITUTES = {4.5: 4.0, 5.0: 6.0}

_SUFFIX = "|".join(s.value for s in sorted(CornerSuffix, key=lambda s: -len(s.value)))

_STEEL_RE = re.compile(
    r"^(?P<variant>[12])"
    r"(?P<location>BCL|BCR|AB|R\(AV\)|MH|Cφ|Bφ|A|B|C|R)"
    r"(?P<thickness>\d+)"
    r"-(?P<size>[mi])"
    r"-(?P<material>S1|S2|HDG|MS)"
    r"(?:-(?P<suffix>" + _SUFFIX + r"))?$",
    re.IGNORECASE,
)

_FRP_RE = re.compile(
    r"^(?P<fiber>\d)"
    r"(?P<location>[A-Z]+?)"
    r"(?P<depth>\d+)"
    r"-FRP"
    r"(?:-(?P<suffix>" + _SUFFIX + r"))?$",
    re.IGNORECASE,
)


def format_thickness_code(thickness_mm: float) -> str:
    """3.0 -> '3', 2.5 -> '25', 1.5 -> '15'."""
    return ("%g" % thickness_mm).replace(".", "")


def map_thickness_to_available(thickness_mm: float) -> float:
    """Nearest catalog-stocked thickness. Only used for SKU / price lookup."""
    return THICKNESS_SUBSTITUTES.get(thickness_mm, thickness_mm)


def material_code(material: Material) -> str:
    return MATERIAL_CODES[Material(material)]


def _suffix(value: Optional[str]) -> Optional[CornerSuffix]:
    return CornerSuffix(value.upper()) if value else None


@dataclass(frozen=True)
class SteelSku:
    variant: int
    location: str
    thickness_code: str
    size: str
    material_code: str
    suffix: Optional[CornerSuffix] = None

    @classmethod
    def parse(cls, text: str) -> Optional["SteelSku"]:
        m = _STEEL_RE.match(text.strip())
        if not m:
            return None
        return cls(
            variant=int(m.group("variant")),
            location=m.group("location").upper().replace("Φ", "φ"),
            thickness_code=m.group("thickness"),
            size=m.group("size").lower(),
            material_code=m.group("material").upper(),
            suffix=_suffix(m.group("suffix")),
        )

    def format(self) -> str:
        sku = f"{self.variant}{self.location}{self.thickness_code}-{self.size}-{self.material_code}"
        if self.suffix is not None:
            sku += f"-{self.suffix.value}"
        return sku

    def __str__(self):
        return self.format()


@dataclass(frozen=True)
class FrpSku:
    fiber_code: str
    location: str
    depth_code: str
    suffix: Optional[CornerSuffix] = None

    @classmethod
    def parse(cls, text: str) -> Optional["FrpSku"]:
        m = _FRP_RE.match(text.strip())
        if not m:
            return None
        return cls(
            fiber_code=m.group("fiber"),
            location=m.group("location").upper(),
            depth_code=m.group("depth"),
            suffix=_suffix(m.group("suffix")),
        )

    @property
    def anchor(self) -> str:
        """SKU up to and including the -FRP marker."""
        return f"{self.fiber_code}{self.location}{self.depth_code}{FRP_MARKER}"

    def with_suffix(self, suffix: Optional[CornerSuffix]) -> "FrpSku":
        return replace(self, suffix=suffix)

    def format(self) -> str:
        if self.suffix is None:
            return self.anchor
        return f"{self.anchor}-{self.suffix.value}"

    def __str__(self):
        return self.format()


def steel_panel_sku(variant: int, location: str, thickness_mm: float,
                    panel_type: PanelType, material: Material,
                    substitute: bool = True) -> str:
    """
    Build a steel panel SKU.

    substitute=True remaps unstocked thicknesses (4.5 -> 4.0, 5.0 -> 6.0) first.
    Roof panels pass substitute=False; 1.5mm is always stocked.
    """
    thickness = map_thickness_to_available(thickness_mm) if substitute else thickness_mm
    return SteelSku(
        variant=int(variant),
        location=location,
        thickness_code=format_thickness_code(thickness),
        size=PanelType(panel_type).value,
        material_code=material_code(material),
    ).format()


def frp_panel_sku(fiber_code: str, location: str, depth_code: str,
                  suffix: Optional[CornerSuffix] = None) -> str:
    return FrpSku(fiber_code=fiber_code, location=location,
                  depth_code=depth_code, suffix=suffix).format()


def is_frp_sku(sku: str) -> bool:
    return FRP_MARKER in sku.upper()
