from pydantic_settings import BaseSettings
from typing import List, Optional, Union
from pydantic import field_validator
import json


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # API Settings
    API_PREFIX: str = "/api"
    PROJECT_NAME: str = "ConnectCut API"
    ENVIRONMENT: str = "development"

    # Logging
    LOG_LEVEL: str = "INFO"
    JSON_LOGS: bool = False

    # Storage backend: "memory" keeps everything in process, "sql" uses SQLAlchemy
    STORAGE_BACKEND: str = "memory"

    # Database Settings (used when STORAGE_BACKEND=sql)
    POSTGRES_USER: str = "user"
    POSTGRES_PASSWORD: str = "password"
    POSTGRES_SERVER: str = "localhost"
    POSTGRES_PORT: str = "5432"
    POSTGRES_DB: str = "connectcut"
    SQLALCHEMY_DATABASE_URI: Optional[str] = None
    CREATE_TABLES_ON_STARTUP: bool = False

    @property
    def DATABASE_URL(self) -> str:
        if self.SQLALCHEMY_DATABASE_URI:
            return self.SQLALCHEMY_DATABASE_URI
        return f"postgresql://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"

    # Session Settings: "memory" or "redis"
    SESSION_BACKEND: str = "memory"
    SESSION_COOKIE_NAME: str = "session_id"
    SESSION_TTL_SECONDS: int = 86400

    # Redis Settings (used when SESSION_BACKEND=redis)
    REDIS_HOST: str = "localhost"
    REDIS_PORT: int = 6379
    REDIS_DB: int = 0

    @property
    def REDIS_URL(self) -> str:
        return f"redis://{self.REDIS_HOST}:{self.REDIS_PORT}/{self.REDIS_DB}"

    # Seed the demo creator, editor and jobs on startup
    SEED_DEMO_DATA: bool = False

    # CORS Settings - can be set as JSON string in .env
    BACKEND_CORS_ORIGINS: Union[List[str], str] = ["http://localhost:5000", "http://localhost:5173"]

    @property
    def is_production(self) -> bool:
        return self.ENVIRONMENT.lower() == "production"

    @field_validator("BACKEND_CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v: Union[List[str], str]) -> List[str]:
        """Parse CORS origins from JSON string or list"""
        if isinstance(v, str):
            try:
                return json.loads(v)
            except json.JSONDecodeError:
                # If not valid JSON, split by comma
                return [origin.strip() for origin in v.split(",")]
        return v

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
