"""
Application configuration using Pydantic settings.

Usage:
    from core.config import get_settings
    settings = get_settings()
"""

from functools import lru_cache
from typing import List, Optional

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Unified application settings loaded from environment variables and .env file.

    Required for production:
        - JWT_SECRET_KEY (min 32 chars)
        - AUTH0_DOMAIN / AUTH0_CLIENT_ID / AUTH0_CLIENT_SECRET (for login)
        - CLOUDINARY_CLOUD_NAME / CLOUDINARY_UPLOAD_PRESET (for image upload)
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # App settings
    app_name: str = "Student Profiles"
    api_prefix: str = "/api"
    debug: bool = Field(default=False)
    env: str = Field(default="development", validation_alias="ENV")

    # Database
    database_url: str = Field(default="sqlite:///student_profiles.db", validation_alias="DATABASE_URL")
    db_pool_size: int = Field(default=10, validation_alias="DB_POOL_SIZE")
    db_max_overflow: int = Field(default=20, validation_alias="DB_MAX_OVERFLOW")
    db_pool_pre_ping: bool = Field(default=True, validation_alias="DB_POOL_PRE_PING")
    # Local development convenience; production schema is managed by Alembic
    auto_create_tables: bool = Field(default=False, validation_alias="AUTO_CREATE_TABLES")

    # Identity provider (OpenID Connect, Auth0-style)
    auth0_domain: str = Field(default="", validation_alias="AUTH0_DOMAIN")
    auth0_client_id: str = Field(default="", validation_alias="AUTH0_CLIENT_ID")
    auth0_client_secret: str = Field(default="", validation_alias="AUTH0_CLIENT_SECRET")
    auth0_redirect_uri: Optional[str] = Field(default=None, validation_alias="AUTH0_REDIRECT_URI")
    auth0_scope: str = Field(default="openid profile email")
    oauth_state_ttl: int = Field(default=600, validation_alias="OAUTH_STATE_TTL")

    # Session tokens
    jwt_secret_key: str = Field(default="CHANGE_ME", validation_alias="JWT_SECRET_KEY")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 24)

    # Frontend / CORS
    frontend_url: str = Field(default="http://localhost:3000", validation_alias="FRONTEND_URL")
    cors_allowed_origins: str = Field(default="http://localhost:3000", validation_alias="CORS_ALLOWED_ORIGINS")
    max_request_size_mb: int = Field(default=10, validation_alias="MAX_REQUEST_SIZE_MB")

    # Redis
    redis_enabled: bool = Field(default=True, validation_alias="REDIS_ENABLED")
    redis_host: str = Field(default="localhost", validation_alias="REDIS_HOST")
    redis_port: int = Field(default=6379, validation_alias="REDIS_PORT")
    redis_db: int = Field(default=0, validation_alias="REDIS_DB")
    redis_password: Optional[str] = Field(default=None, validation_alias="REDIS_PASSWORD")
    profile_cache_ttl: int = Field(default=300, validation_alias="PROFILE_CACHE_TTL")

    @property
    def redis_url(self) -> str:
        """Construct Redis URL from components."""
        auth = f":{self.redis_password}@" if self.redis_password else ""
        return f"redis://{auth}{self.redis_host}:{self.redis_port}/{self.redis_db}"

    # Media host (Cloudinary)
    cloudinary_cloud_name: str = Field(default="", validation_alias="CLOUDINARY_CLOUD_NAME")
    cloudinary_api_key: str = Field(default="", validation_alias="CLOUDINARY_API_KEY")
    cloudinary_api_secret: str = Field(default="", validation_alias="CLOUDINARY_API_SECRET")
    cloudinary_upload_preset: str = Field(default="", validation_alias="CLOUDINARY_UPLOAD_PRESET")
    max_upload_size_mb: int = Field(default=5, validation_alias="MAX_UPLOAD_SIZE_MB")

    @field_validator("jwt_secret_key")
    @classmethod
    def validate_jwt_secret(cls, v: str) -> str:
        """Validate JWT secret - warns in dev, errors in production."""
        import os
        import warnings

        env = os.getenv("ENV", "development")
        is_production = env.lower() in ("production", "prod")

        forbidden_values = [
            "CHANGE_ME", "changeme", "secret", "your-secret-key",
            "jwt-secret", "supersecret", "development", "test",
        ]

        is_forbidden = v.lower() in [fv.lower() for fv in forbidden_values]
        is_too_short = len(v) < 32

        if is_production:
            if is_forbidden:
                raise ValueError(
                    f"JWT_SECRET_KEY cannot be a default value ('{v}') in production. "
                    "Generate a secure key with: python -c \"import secrets; print(secrets.token_urlsafe(48))\""
                )
            if is_too_short:
                raise ValueError(
                    f"JWT_SECRET_KEY must be at least 32 characters in production (got {len(v)})."
                )
        elif is_forbidden:
            warnings.warn(
                f"JWT_SECRET_KEY is set to a default value ('{v}'). "
                "This is insecure - set a proper key for production.",
                UserWarning,
                stacklevel=2,
            )

        return v

    @property
    def is_production(self) -> bool:
        return self.env.lower() in ("production", "prod")

    @property
    def cors_origins_list(self) -> List[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_allowed_origins.split(",") if origin.strip()]

    def validate_production_config(self) -> tuple[List[str], List[str]]:
        """
        Validate configuration for production deployment.

        Returns:
            Tuple of (errors, warnings) - errors are fatal, warnings are advisory
        """
        errors = []
        warnings = []

        if self.jwt_secret_key == "CHANGE_ME":
            errors.append("JWT_SECRET_KEY must be set for production")
        elif len(self.jwt_secret_key) < 32:
            errors.append("JWT_SECRET_KEY must be at least 32 characters")

        if not self.auth0_domain:
            errors.append("AUTH0_DOMAIN is required for login")
        if not self.auth0_client_id or not self.auth0_client_secret:
            errors.append("AUTH0_CLIENT_ID and AUTH0_CLIENT_SECRET are required for login")

        if not self.cloudinary_cloud_name or not self.cloudinary_upload_preset:
            warnings.append(
                "CLOUDINARY_CLOUD_NAME / CLOUDINARY_UPLOAD_PRESET not set - image upload is disabled"
            )
        if not self.cloudinary_api_key or not self.cloudinary_api_secret:
            warnings.append(
                "CLOUDINARY_API_KEY / CLOUDINARY_API_SECRET not set - image deletion will fail"
            )
        if not self.redis_enabled:
            warnings.append("REDIS_ENABLED=false - login and profile caching are unavailable")

        return errors, warnings


@lru_cache
def get_settings() -> Settings:
    """Get cached application settings."""
    return Settings()


__all__ = ["Settings", "get_settings"]
