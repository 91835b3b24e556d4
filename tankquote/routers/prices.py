from fastapi import APIRouter, Depends, Query, Request

from .. import schemas
from ..config import settings
from ..price_catalog import PriceCache, source_from_settings
from ..price_resolver import PriceResolver

router = APIRouter(prefix="/prices", tags=["prices"])


def get_price_cache(request: Request) -> PriceCache:
    """One PriceCache per app, created on first use and kept on app.state."""
    cache = getattr(request.app.state, "price_cache", None)
    if cache is None:
        cache = PriceCache(source_from_settings(settings), ttl_seconds=settings.PRICE_CACHE_TTL_SECONDS)
        request.app.state.price_cache = cache
    return cache


@router.get("/status", response_model=schemas.CatalogStatus)
def catalog_status(cache: PriceCache = Depends(get_price_cache)):
    return cache.status()


@router.post("/refresh", response_model=schemas.CatalogStatus)
def refresh_catalog(cache: PriceCache = Depends(get_price_cache)):
    """Drop the cached catalog and reload it from the source."""
    cache.refresh()
    return cache.status()


@router.get("/resolve/{sku:path}", response_model=schemas.PriceMatchOut)
def resolve_sku(sku: str, cache: PriceCache = Depends(get_price_cache)):
    """Never 404s: unknown SKUs come back at the fallback price."""
    resolver = PriceResolver(cache.get(), settings.FALLBACK_UNIT_PRICE)
    return resolver.resolve(sku).to_dict()


@router.get("/search")
def search_catalog(pattern: str = Query(..., min_length=1), limit: int = Query(50, ge=1, le=500),
                   cache: PriceCache = Depends(get_price_cache)):
    return cache.get().search(pattern, limit=limit)
