from pydantic import AnyUrl
from pydantic_settings import BaseSettings, SettingsConfigDict
from functools import lru_cache
from typing import Literal

class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    ENV: str = "dev"
    SERVICE_PORT: int = 8080
    MAX_REQUEST_SIZE: int = 65536
    LOG_JSON: bool = True
    LOG_LEVEL: str = "INFO"
    # Store backend selection: "memory" or "redis"
    STORE_ADAPTER: Literal["memory", "redis"] = "memory"
    REDIS_URL: AnyUrl | None = None
    REDIS_HASH_KEY: str = "eventstore:events"

@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
