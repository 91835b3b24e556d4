from pydantic import BaseModel, Field, model_validator
from typing import Optional, List, Literal
from datetime import datetime
from .models import (
    Material, BuildStandard, PanelType, SupportMode, PartitionDirection,
    FRP_STANDARDS, STEEL_STANDARDS, default_standard_for,
)


class PipeFitting(BaseModel):
    opening: str = "Outlet"          # Inlet / Outlet / Overflow/Warning / Drain / Balancing
    flange_type: str = "PN16"        # PN16 / Table E / ANSI / JIS 10k / JAMNUT
    size_mm: int = Field(150, gt=0)
    outside_material: str = "SS316"
    outside_item: str = "Flange"     # Flange / S/F Nozzle / D/F Nozzle / Socket
    inside_material: str = "SS316"
    inside_item: str = "Socket"      # ... or Vortex Inhibitor
    quantity: int = Field(1, ge=1)

    class Config:
        frozen = True


class TankSpecification(BaseModel):
    """
    Everything the engine needs to build one tank's BOM.

    Validated once here; calculators trust it afterwards.
    FRP always uses 1m metric panels and panel variant 2.
    build_standard defaults per material (steel -> SANS, FRP -> MS1390).
    """
    length: float = Field(..., gt=0)      # meters
    width: float = Field(..., gt=0)
    height: float = Field(..., gt=0)
    panel_type: PanelType = PanelType.METRIC
    panel_variant: Literal[1, 2] = 2
    material: Material = Material.SS316
    build_standard: Optional[BuildStandard] = None
    partition_count: int = Field(0, ge=0)
    partition_direction: PartitionDirection = PartitionDirection.AUTO
    freeboard: float = Field(0.2, ge=0)   # meters
    support_mode: SupportMode = SupportMode.NONE
    ibeam_size: str = "150x75"
    roof_thickness: float = Field(1.5, gt=0)
    pipe_fittings: List[PipeFitting] = []

    # Accessories
    wli_material: Optional[str] = None
    internal_ladder_qty: int = Field(0, ge=0)
    internal_ladder_material: str = "HDG"
    external_ladder_qty: int = Field(0, ge=0)
    external_ladder_material: str = "HDG"
    safety_cage: bool = False

    class Config:
        frozen = True

    @model_validator(mode="before")
    @classmethod
    def _apply_material_rules(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        try:
            material = Material(data.get("material", Material.SS316))
        except ValueError:
            return data  # field validation reports the bad material
        if material is Material.FRP:
            data["panel_type"] = PanelType.METRIC
            data["panel_variant"] = 2
        if data.get("build_standard") in (None, ""):
            data["build_standard"] = default_standard_for(material)
        return data

    @model_validator(mode="after")
    def _check_consistency(self):
        allowed = FRP_STANDARDS if self.material is Material.FRP else STEEL_STANDARDS
        if self.build_standard not in allowed:
            raise ValueError(
                f"Build standard {self.build_standard.value} does not apply to {self.material.value} tanks. "
                f"Available: {[s.value for s in allowed]}"
            )
        if self.freeboard >= self.height:
            raise ValueError("freeboard must be less than the tank height")
        return self

    @property
    def panel_size(self) -> float:
        return self.panel_type.size_m

    @property
    def volume_m3(self) -> float:
        return self.length * self.width * self.height

    @property
    def effective_volume_m3(self) -> float:
        """Usable water volume once the freeboard is left empty."""
        return self.length * self.width * (self.height - self.freeboard)


class BOMLineItem(BaseModel):
    sku: str
    description: str
    quantity: int = Field(..., ge=0)
    category: str
    unit_price: float = Field(0.0, ge=0)
    line_total: float = 0.0
    price_source: Optional[str] = None
    matched_sku: Optional[str] = None
    needs_review: bool = False
    thickness_mm: Optional[float] = None
    breakdown: Optional[dict] = None


class PanelGridOut(BaseModel):
    length_panels: int
    width_panels: int
    height_panels: int
    perimeter: int
    partition_span: int


class ThicknessTierOut(BaseModel):
    tier_index: int
    thickness_mm: Optional[float] = None  # None for FRP tiers
    code: str
    position: str


class BOMSummary(BaseModel):
    total_panels: int
    total_cost: float
    line_items: int
    fallback_priced_items: int = 0
    volume_m3: float
    effective_volume_m3: float
    currency: Optional[str] = None
    catalog_loaded_at: Optional[datetime] = None


class BillOfMaterials(BaseModel):
    material: Material
    build_standard: BuildStandard
    panel_type: PanelType
    grid: PanelGridOut
    tiers: List[ThicknessTierOut] = []
    depth_code: Optional[str] = None     # FRP only
    fiber_code: Optional[str] = None     # FRP only
    base: List[BOMLineItem] = []
    walls: List[BOMLineItem] = []
    partition: List[BOMLineItem] = []
    roof: List[BOMLineItem] = []
    supports: List[BOMLineItem] = []
    cleats: List[BOMLineItem] = []
    accessories: List[BOMLineItem] = []
    summary: BOMSummary
    assumptions: List[str] = []


class BuildStandardOut(BaseModel):
    code: BuildStandard
    name: str


class PriceMatchOut(BaseModel):
    sku: str
    price: float
    matched_sku: Optional[str] = None
    strategy: str
    is_fallback: bool


class CatalogStatus(BaseModel):
    cached: bool
    item_count: int
    age_seconds: Optional[float] = None
    expires_in_seconds: Optional[float] = None
    loaded_at: Optional[datetime] = None
