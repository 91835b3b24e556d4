from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./tankquote.db"
    COMPANY_NAME: str = "Sunnik Tank"
    CURRENCY: str = "MYR"

    # Remote price catalog (PostgREST / Supabase). Empty URL = read the local products table.
    PRICE_CATALOG_URL: str = ""
    PRICE_CATALOG_API_KEY: str = ""
    PRICE_CATALOG_TABLE: str = "products"
    PRICE_CATALOG_PAGE_SIZE: int = 1000
    PRICE_CATALOG_MAX_PAGES: int = 50
    PRICE_CATALOG_TIMEOUT: int = 30

    # Price cache + resolution
    PRICE_CACHE_TTL_SECONDS: float = 300.0
    FALLBACK_UNIT_PRICE: float = 150.0

    class Config:
        env_file = ".env"


settings = Settings()
