from pydantic_settings import BaseSettings
from functools import lru_cache


class Settings(BaseSettings):
    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_JSON: bool = False  # True for production (structured JSON), False for dev (colored)

    # Messages
    DEFAULT_LOCALE: str = "en"

    # Plugins
    STRICT_PLUGINS: bool = False  # Raise on plugin/validator mismatch instead of warning

    class Config:
        env_prefix = "FIELDRULES_"
        env_file = ".env"
        extra = "ignore"


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
