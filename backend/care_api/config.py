import re
from datetime import timedelta
from functools import lru_cache

from pydantic import AliasChoices, Field, ValidationError
from pydantic_settings import BaseSettings

from care_api.exceptions import ConfigurationError

_DURATION_RE = re.compile(r"^\s*(\d+)\s*([smhd]?)\s*$", re.IGNORECASE)
_DURATION_UNITS = {"": 1, "s": 1, "m": 60, "h": 3600, "d": 86400}


def parse_duration(value: str) -> timedelta:
    """Parse '2h', '30m', '45s', '1d' or a bare number of seconds."""
    match = _DURATION_RE.match(str(value))
    if not match:
        raise ValueError(f"Invalid duration: {value!r}")
    amount, unit = match.groups()
    return timedelta(seconds=int(amount) * _DURATION_UNITS[unit.lower()])


class Settings(BaseSettings):
    """Application settings."""

    # Required at startup
    port: int
    secret_key: str = Field(min_length=1)
    database_url: str = Field(
        validation_alias=AliasChoices("database_url", "neon_database_url"),
    )
    frontend_url: str

    environment: str = "development"

    # Auth
    salt_rounds: int = Field(default=10, ge=4, le=31)
    jwt_expires_in: str = "2h"
    jwt_algorithm: str = "HS256"
    check_active_on_verify: bool = False

    # Database pool
    db_pool_size: int = 20
    db_pool_timeout: float = 2.0
    database_ssl: bool = False

    # Logging
    log_level: str = "INFO"
    log_format: str = "console"

    class Config:
        env_file = ".env"
        case_sensitive = False
        extra = "ignore"

    @property
    def is_production(self) -> bool:
        return self.environment.lower() == "production"

    @property
    def token_ttl(self) -> timedelta:
        return parse_duration(self.jwt_expires_in)

    @property
    def async_database_url(self) -> str:
        """DATABASE_URL with the async driver filled in for Postgres URLs."""
        url = self.database_url
        for prefix in ("postgres://", "postgresql://"):
            if url.startswith(prefix):
                return "postgresql+asyncpg://" + url[len(prefix):]
        return url


REQUIRED_VARIABLES = ("PORT", "SECRET_KEY", "DATABASE_URL", "FRONTEND_URL")


def load_settings(**overrides) -> Settings:
    """Build settings, turning missing required variables into a ConfigurationError."""
    try:
        return Settings(**overrides)
    except ValidationError as e:
        problems = sorted({str(err["loc"][0]).upper() for err in e.errors() if err.get("loc")})
        missing = [name for name in REQUIRED_VARIABLES if name in problems]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}"
            ) from e
        raise ConfigurationError(f"Invalid configuration: {', '.join(problems)}") from e


@lru_cache()
def get_settings() -> Settings:
    """Get cached settings instance."""
    return load_settings()
