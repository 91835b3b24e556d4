from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
import logging

from .config import settings
from .database import engine, Base
from .routers import bom, prices

logger = logging.getLogger("tankquote")

# Create tables (local product mirror for the database catalog source)
Base.metadata.create_all(bind=engine)

app = FastAPI(
    title="Tank Quote",
    description="Sectional water tank BOM and pricing engine",
    version="1.0.0"
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# API routes
app.include_router(bom.router, prefix="/api")
app.include_router(prices.router, prefix="/api")


@app.get("/health")
def health():
    return {"status": "ok", "app": "tankquote", "company": settings.COMPANY_NAME}


@app.on_event("startup")
def log_catalog_source():
    source = "REST %s" % settings.PRICE_CATALOG_URL if settings.PRICE_CATALOG_URL else "local products table"
    logger.info("Price catalog source: %s (cache TTL %ss)", source, settings.PRICE_CACHE_TTL_SECONDS)
