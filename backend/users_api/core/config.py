from functools import lru_cache
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

DEMO_JWT_SECRET = "ThisIsADemoSecretKey_change_in_prod"


class Settings(BaseSettings):
    """
    Immutable runtime configuration, built once at startup.

    Every field can be overridden with a ``USERS_API_``-prefixed env var
    (or a line in ``.env``).  The JWT defaults are for local demos only –
    production deployments must set ``USERS_API_JWT_SECRET``.
    """
    model_config = SettingsConfigDict(env_prefix="USERS_API_", env_file=".env", frozen=True)

    database_url: str = "sqlite+aiosqlite:///./users.db"
    jwt_secret: str = Field(DEMO_JWT_SECRET, min_length=32)
    jwt_issuer: str = "UsersApiDemo"
    jwt_audience: str = "UsersApiClients"
    jwt_expires: int = Field(6 * 60 * 60, gt=0)      # seconds
    environment: str = "development"
    log_level: str = "INFO"

    @property
    def uses_demo_secret(self) -> bool:
        return self.jwt_secret == DEMO_JWT_SECRET


@lru_cache
def get_settings() -> Settings: return Settings()
