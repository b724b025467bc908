from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import List

class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=True,
        extra="ignore",
    )

    APP_ENV: str = "local"
    APP_NAME: str = "wishes-admin"

    ADMIN_JWT_SECRET: str = "change_me_admin"

    CORS_ORIGINS: str = "http://localhost:3000,http://localhost:3001"

    DATABASE_URL: str

    # Listing / export limits shared by every admin collection
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100
    EXPORT_MAX_ROWS: int = 50000

    # Legacy document store, read by the export command only
    MONGODB_URI: str = "mongodb://127.0.0.1:27017"
    MONGODB_DB: str = "eventwishes"

    @property
    def cors_origins_list(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
