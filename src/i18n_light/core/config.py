from functools import lru_cache
from typing import Literal

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_EXTENSION = ".js"


def normalize_extension(v: str | None) -> str:
    """Normalize a dictionary file extension so it is always dot-prefixed.

    "json" -> ".json", ".json" -> ".json", "" / None -> DEFAULT_EXTENSION
    """
    if v is None:
        return DEFAULT_EXTENSION
    v = v.strip()
    if not v:
        return DEFAULT_EXTENSION
    return v if v.startswith(".") else f".{v}"


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_prefix="I18N_",
        env_file=".env",
        env_ignore_empty=True,
        extra="ignore",
    )

    DEBUG: bool = False
    ENVIRONMENT: Literal["local", "staging", "production"] = "local"
    # Overrides the DEBUG-derived level when set
    LOG_LEVEL: Literal["DEBUG", "INFO", "WARNING", "ERROR"] | None = None

    DEFAULT_LOCALE: str = "en"
    DIRECTORY: str | None = None
    EXTENSION: str = DEFAULT_EXTENSION

    FALLBACK: bool = True
    CACHE: bool = True
    # Reload an already cached locale every time it is switched to
    REFRESH: bool = False

    @field_validator("EXTENSION", mode="after")
    @classmethod
    def validate_extension(cls, v: str) -> str:
        return normalize_extension(v)


@lru_cache
def get_settings() -> Settings:
    return Settings()


settings = get_settings()
