from pydantic_settings import BaseSettings, SettingsConfigDict
from typing import Optional

class Settings(BaseSettings):
    # API Configuration
    APP_NAME: str = "SafePhone DR"
    VERSION: str = "1.0.0"
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # Local report store (on-device SQLite file)
    DATABASE_URL: str = "sqlite:///./safephone.db"

    # Community report sync (optional, best-effort)
    APP_REPORTS_ENDPOINT: Optional[str] = None
    SYNC_TIMEOUT: int = 10
    SYNC_ON_STARTUP: bool = True

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=True)

settings = Settings()
