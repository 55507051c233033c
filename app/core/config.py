from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import field_validator

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "local"
    APP_NAME: str = "RentBuy Antalya"
    # Comma-separated origins for CORS (e.g. https://rentbuyantalya.com,https://admin.rentbuyantalya.com). If empty, uses localhost defaults.
    CORS_ORIGINS: str = ""
    LOG_LEVEL: str = "INFO"

    SECRET_KEY: str
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    REFRESH_TOKEN_EXPIRE_DAYS: int = 7

    DATABASE_URL: str
    # Elevated credential used by admin and storage routes. Same database as DATABASE_URL when empty.
    SERVICE_DATABASE_URL: str = ""

    @field_validator("DATABASE_URL", "SERVICE_DATABASE_URL", mode="after")
    @classmethod
    def normalize_database_url(cls, v: str) -> str:
        """Render and others give postgres://; SQLAlchemy expects postgresql+psycopg2://."""
        if v and v.startswith("postgres://"):
            return "postgresql+psycopg2://" + v[11:]
        return v

    DEFAULT_LOCALE: str = "tr"
    PUBLIC_BASE_URL: str = ""  # e.g. https://rentbuyantalya.com - prefix for public storage URLs

    # Object storage: local directory or Google Cloud Storage (one GCS bucket per logical bucket)
    STORAGE_BACKEND: str = "local"  # local|gcs
    STORAGE_LOCAL_DIR: str = "./data/storage"
    GCS_BUCKET_PREFIX: str = ""  # e.g. rentbuy- -> rentbuy-listings
    STORAGE_MAX_BYTES: int = 10 * 1024 * 1024

    ADMIN_COOKIE_NAME: str = "admin_token"
    CUSTOMER_COOKIE_NAME: str = "customer_token"
    COOKIE_SECURE: bool = False

    # First super_admin created by the seed; nothing is seeded when the password is empty.
    SEED_ADMIN_EMAIL: str = ""
    SEED_ADMIN_PASSWORD: str = ""
    SEED_ADMIN_NAME: str = "Admin"

    WHATSAPP_NUMBER: str = ""
    INSTAGRAM_URL: str = ""
    MAPS_URL: str = ""


settings = Settings()
