from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import List, Optional
import os

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    # External language model (leave OPENAI_API_KEY empty to use rule-based suggestions only)
    openai_api_key: str = ""
    openai_model: str = "gpt-3.5-turbo"
    openai_timeout: float = 60.0

    # Career suggestion tuning
    career_temp: float = 0.0
    career_max_tokens: int = 800
    career_fallback_cache_ttl: int = 3600  # seconds

    # Rate limiting
    rate_limit_enabled: bool = True
    career_rate_limit: str = "30/minute"

    # Database - Railway provides DATABASE_URL, fallback to SQLite for local
    database_url: Optional[str] = None

    # Auth - bearer tokens issued by the Udaan auth service
    jwt_secret: str = "changeme"

    # App Settings
    app_name: str = "Udaan"
    app_version: str = "1.0.0"
    environment: str = "development"
    debug: bool = False
    log_level: str = "INFO"

    # CORS
    frontend_url: str = ""

    # API Settings
    backend_host: str = "0.0.0.0"
    backend_port: int = int(os.getenv("PORT", "5000"))

    def __init__(self, **kwargs):
        super().__init__(**kwargs)
        # Async SQLAlchemy needs an async driver in the URL
        if not self.database_url:
            self.database_url = "sqlite+aiosqlite:///./udaan.db"
        elif self.database_url.startswith("postgres://"):
            self.database_url = self.database_url.replace("postgres://", "postgresql+asyncpg://", 1)
        elif self.database_url.startswith("postgresql://"):
            self.database_url = self.database_url.replace("postgresql://", "postgresql+asyncpg://", 1)

    @property
    def allowed_origins(self) -> List[str]:
        origins = [self.frontend_url, "http://localhost:5173", "http://localhost:3000"]
        return [origin.strip() for origin in origins if origin and origin.strip()]

@lru_cache()
def get_settings() -> Settings:
    return Settings()
