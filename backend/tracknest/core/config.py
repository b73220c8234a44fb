"""
Application configuration and environment settings.
"""
from pydantic_settings import BaseSettings
from pydantic import field_validator
from typing import List, Optional, Union


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # Application
    APP_NAME: str = "TrackNest"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"
    HOST: str = "0.0.0.0"
    PORT: int = 8080

    # Database
    DATABASE_URL: str = "sqlite:///./tracknest.db"
    DB_ECHO: bool = False

    # JWT
    SECRET_KEY: str = "your-secret-key-change-in-production"
    ALGORITHM: str = "HS256"
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 60
    TOKEN_ISSUER: str = "tracknest"

    # Password hashing (bcrypt work factor)
    BCRYPT_ROUNDS: int = 12

    # CORS
    CORS_ORIGINS: Union[List[str], str] = ["http://localhost:5173"]

    # Bootstrap
    BOOTSTRAP_ADMIN_USERNAME: str = "admin"
    BOOTSTRAP_ADMIN_PASSWORD: Optional[str] = None  # No admin is created unless set
    SEED_FIXTURES: bool = False

    @field_validator("CORS_ORIGINS", mode="before")
    @classmethod
    def parse_cors_origins(cls, v):
        """Parse CORS_ORIGINS from comma-separated string or list."""
        if isinstance(v, str):
            return [origin.strip() for origin in v.split(",") if origin.strip()]
        return v

    @field_validator("SECRET_KEY")
    @classmethod
    def check_secret_key(cls, v: str) -> str:
        if not v or not v.strip():
            raise ValueError("SECRET_KEY must not be empty")
        return v

    @field_validator("ALGORITHM")
    @classmethod
    def check_algorithm(cls, v: str) -> str:
        # Only shared-secret signing is supported
        if v not in ("HS256", "HS384", "HS512"):
            raise ValueError(f"Unsupported token algorithm: {v}")
        return v

    @field_validator("BCRYPT_ROUNDS")
    @classmethod
    def check_bcrypt_rounds(cls, v: int) -> int:
        if not 4 <= v <= 31:
            raise ValueError("BCRYPT_ROUNDS must be between 4 and 31")
        return v

    @field_validator("LOG_LEVEL")
    @classmethod
    def check_log_level(cls, v: str) -> str:
        level = v.upper()
        if level not in ("CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"):
            raise ValueError(f"Unknown LOG_LEVEL: {v}")
        return level

    class Config:
        env_file = ".env"
        case_sensitive = True


settings = Settings()
