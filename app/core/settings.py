from __future__ import annotations
from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

class Settings(BaseSettings):
    # App
    APP_ENV: str = Field("dev")
    APP_TITLE: str = "catalog-api"
    APP_VERSION: str = "0.1.0"
    LOG_LEVEL: str = "INFO"

    # HTTP
    HOST: str = "0.0.0.0"
    PORT: int = 3001
    API_PREFIX: str = "/api"
    ROOT_PATH: Optional[str] = None
    DISABLE_DOCS: bool = False

    # CORS: "*" sau listă separată prin virgulă
    CORS_ORIGINS: str = "*"

    # Alembic
    ALEMBIC_CONFIG: str = "alembic.ini"
    ALEMBIC_VERSION_TABLE: str = "alembic_version"

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False, extra="ignore")

    @property
    def cors_origins(self) -> List[str]:
        return [o.strip() for o in self.CORS_ORIGINS.split(",") if o.strip()]

settings = Settings()
