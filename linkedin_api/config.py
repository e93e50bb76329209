"""
Configuration Management
Environment-based settings for the HTTP gateway, database and sessions
"""

from functools import lru_cache
from pathlib import Path
from typing import Optional, Tuple

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# Vite dev server
DEV_CLIENT_ORIGIN = "http://localhost:5173"

PRODUCTION = "production"


class Settings(BaseSettings):
    """Process-lifetime settings, read once at startup"""

    # Service info
    app_name: str = "LinkedIn Clone API"
    service_name: str = "linkedin-api"

    # HTTP
    host: str = "0.0.0.0"
    port: int = 5000
    node_env: str = "development"
    client_url: Optional[str] = None
    static_root: Path = Field(default_factory=lambda: Path.cwd() / "frontend" / "dist")
    max_body_size: int = 5 * 1024 * 1024

    # Database
    database_url: Optional[str] = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_db: str = "linkedin"
    postgres_user: str = "linkedin"
    postgres_password: str = "linkedin"
    db_pool_min_size: int = 1
    db_pool_max_size: int = 10
    db_command_timeout: int = 30

    # Sessions
    jwt_secret: str = "change_me_linkedin_jwt_secret"
    jwt_algorithm: str = "HS256"
    jwt_expires_days: int = 3

    # Logging
    log_level: str = "INFO"
    log_json: bool = False

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",
        frozen=True,
    )

    @field_validator("port", "postgres_port")
    @classmethod
    def validate_port(cls, v):
        if not 1 <= v <= 65535:
            raise ValueError("Port must be between 1 and 65535")
        return v

    @field_validator("node_env")
    @classmethod
    def normalize_node_env(cls, v):
        return v.strip().lower()

    @property
    def is_production(self) -> bool:
        """True when the frontend bundle should be served"""
        return self.node_env == PRODUCTION

    @property
    def allowed_origins(self) -> Tuple[str, ...]:
        """Development origin plus any configured client origin(s), empties dropped"""
        configured = (self.client_url or "").split(",")
        origins = [DEV_CLIENT_ORIGIN] + [origin.strip() for origin in configured]
        return tuple(dict.fromkeys(origin for origin in origins if origin))

    @property
    def dsn(self) -> str:
        """Build PostgreSQL connection string"""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql://{self.postgres_user}:{self.postgres_password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )


@lru_cache
def get_settings() -> Settings:
    """Get the settings instance for this process"""
    return Settings()
