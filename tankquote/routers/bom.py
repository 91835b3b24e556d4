from typing import List

from fastapi import APIRouter, Depends, HTTPException

from .. import models, schemas
from ..config import settings
from ..calculators.grid import InvalidDimension
from ..calculators.registry import calculate_draft_bom
from ..price_catalog import PriceCache
from ..pricing_engine import PricingEngine
from .prices import get_price_cache

router = APIRouter(prefix="/bom", tags=["bom"])


def _draft(spec: schemas.TankSpecification) -> dict:
    try:
        return calculate_draft_bom(spec)
    except InvalidDimension as e:
        raise HTTPException(status_code=422, detail=str(e))


@router.post("/calculate", response_model=schemas.BillOfMaterials)
def calculate_bom(spec: schemas.TankSpecification, cache: PriceCache = Depends(get_price_cache)):
    """Priced BOM for one tank."""
    draft = _draft(spec)
    engine = PricingEngine(cache.get(), settings.FALLBACK_UNIT_PRICE, settings.CURRENCY)
    return engine.price_bom(draft)


@router.post("/draft", response_model=schemas.BillOfMaterials)
def draft_bom(spec: schemas.TankSpecification):
    """Quantities only, no prices."""
    return _draft(spec)


@router.get("/build-standards", response_model=List[schemas.BuildStandardOut])
def build_standards(material: models.Material = models.Material.SS316):
    return models.build_standards_for(material)
