"""Application Configuration — environment-driven settings via pydantic-settings.

Invariants:
    - All secrets come from environment variables (never hardcoded, never logged)
    - get_settings() is cached (lru_cache): single instance per process
    - Components receive values from Settings through constructor arguments;
      nothing else reads the environment

Design Decisions:
    - token_secret is a SecretStr with no default: startup fails without TOKEN_SECRET,
      and repr/str and JSON dumps mask it
    - RATE_LIMIT_PER_MINUTE and TOKEN_SECRET keep the variable names the
      service has always been deployed with
"""

from functools import lru_cache

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from notes_api.core.domain_types import RateLimitPolicy


class Settings(BaseSettings):
    """Application settings from environment variables."""

    model_config = SettingsConfigDict(env_file=".env", case_sensitive=False)

    # Database
    database_url: str = "sqlite+aiosqlite:///./database.sqlite"

    @field_validator("database_url", mode="before")
    @classmethod
    def convert_postgres_url(cls, v: str) -> str:
        """Hosted Postgres URLs come as postgresql:// but asyncpg needs postgresql+asyncpg://."""
        if isinstance(v, str) and v.startswith("postgresql://"):
            return v.replace("postgresql://", "postgresql+asyncpg://", 1)
        return v

    database_pool_size: int = 20
    database_max_overflow: int = 10
    database_auto_create: bool = True

    # Session tokens
    token_secret: SecretStr

    @field_validator("token_secret")
    @classmethod
    def reject_blank_secret(cls, v: SecretStr) -> SecretStr:
        if not v.get_secret_value().strip():
            raise ValueError("TOKEN_SECRET must not be blank")
        return v

    token_algorithm: str = "HS256"
    # None disables the exp claim
    token_expire_minutes: int | None = Field(60, ge=1)

    @field_validator("token_expire_minutes", mode="before")
    @classmethod
    def parse_disabled_expiry(cls, v):
        """Empty, "none" or "null" from the environment means non-expiring tokens."""
        if isinstance(v, str) and v.strip().lower() in ("", "none", "null"):
            return None
        return v

    token_require_existing_user: bool = False

    # Passwords
    bcrypt_rounds: int = Field(10, ge=4, le=31)

    # Rate limiting
    rate_limit_per_minute: int = Field(60, ge=0)
    rate_window_seconds: float = Field(60.0, gt=0)
    rate_limit_policy: RateLimitPolicy = RateLimitPolicy.KEYED
    # Enable only behind a proxy that overwrites X-Forwarded-For
    trust_forwarded_for: bool = False

    # API
    cors_origins: list[str] = ["http://localhost:3000"]

    # Observability
    log_level: str = "INFO"
    log_format: str = "json"


@lru_cache
def get_settings() -> Settings:
    return Settings()
