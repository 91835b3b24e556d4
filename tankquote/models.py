from sqlalchemy import Column, Integer, String, Float, DateTime, Text, Boolean
from datetime import datetime
from .database import Base
import enum


# --- Enums ---

class Material(str, enum.Enum):
    SS316 = "SS316"
    SS304 = "SS304"
    HDG = "HDG"
    MS = "MS"
    FRP = "FRP"

    @property
    def is_steel(self) -> bool:
        return self is not Material.FRP

    @property
    def is_stainless(self) -> bool:
        return self in (Material.SS316, Material.SS304)


class BuildStandard(str, enum.Enum):
    SANS = "SANS"        # SANS 10329:2020 (South African)
    BSI = "BSI"          # British Standard
    LPCB = "LPCB"        # Loss Prevention Certification Board
    MS1390 = "MS1390"    # MS1390:2010 (Malaysian, SPAN approved), FRP only
    SS245 = "SS245"      # SS245:2014 (Singapore), FRP only


class PanelType(str, enum.Enum):
    METRIC = "m"      # 1.0m x 1.0m
    IMPERIAL = "i"    # 4ft x 4ft = 1.22m x 1.22m

    @property
    def size_m(self) -> float:
        return 1.0 if self is PanelType.METRIC else 1.22

    @property
    def size_mm(self) -> int:
        return 1000 if self is PanelType.METRIC else 1220


class SupportMode(str, enum.Enum):
    NONE = "none"
    INTERNAL = "internal"
    EXTERNAL = "external"


class PartitionDirection(str, enum.Enum):
    AUTO = "auto"        # partition spans the shorter side
    WIDTH = "width"
    LENGTH = "length"


# Standards are tied to material family. Steel panels follow SANS/BSI/LPCB
# thickness rules; FRP panels follow MS1390/SS245 fibre-content rules.
STEEL_STANDARDS = [BuildStandard.BSI, BuildStandard.LPCB, BuildStandard.SANS]
FRP_STANDARDS = [BuildStandard.MS1390, BuildStandard.SS245]

BUILD_STANDARD_NAMES = {
    BuildStandard.BSI: "BSI (British Standard)",
    BuildStandard.LPCB: "LPCB (Loss Prevention Certification Board)",
    BuildStandard.SANS: "SANS 10329:2020 (South African Standard)",
    BuildStandard.MS1390: "MS1390:2010 (Malaysian - SPAN Approved)",
    BuildStandard.SS245: "SS245:2014 (Singapore Standard)",
}


def build_standards_for(material: Material) -> list:
    """Build standards that apply to a material, as [{code, name}] dicts."""
    standards = FRP_STANDARDS if material is Material.FRP else STEEL_STANDARDS
    return [{"code": s.value, "name": BUILD_STANDARD_NAMES[s]} for s in standards]


def default_standard_for(material: Material) -> BuildStandard:
    return BuildStandard.MS1390 if material is Material.FRP else BuildStandard.SANS


# --- Tables ---

class Product(Base):
    """Local mirror of the remote product catalog. Read-only for the engine."""
    __tablename__ = "products"

    id = Column(Integer, primary_key=True, index=True)
    sku = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    market_final_price = Column(Float, nullable=True)
    is_available = Column(Boolean, default=True)
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)
