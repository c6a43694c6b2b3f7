from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )

    # Catalog document (served as a static file next to the storefront)
    CATALOG_URL: str = "http://localhost:3000/real_ebay_deals.json"
    CATALOG_FETCH_TIMEOUT_SECONDS: float = 10.0
    CATALOG_EXPORT_FILENAME: str = "real_ebay_deals.json"

    # Local durable store: one SQLite file per browser profile
    STORE_URL: str = "sqlite:///luxury_deals.db"
    STORE_NAMESPACE: str = "luxury_deals"

    # Bootstrap admin: seeded once when no account collection exists
    DEFAULT_ADMIN_USERNAME: str = "admin"
    DEFAULT_ADMIN_PASSWORD: str = "admin123"
    DEFAULT_ADMIN_EMAIL: str = "admin@luxurydeals.com"

    # App
    APP_NAME: str = "Luxury Deals Store"
    LOG_LEVEL: str = "INFO"
    DEBUG: bool = False  # echoes SQL when True


settings = Settings()
