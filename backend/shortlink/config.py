import string
from typing import Literal, Optional

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings

from .core.generator import validate_alphabet, validate_length


class Settings(BaseSettings):
    """Application settings"""

    # Database
    DATABASE_URL: str = "sqlite:///./shortlinks.db"
    DB_TIMEOUT: int = 30  # seconds

    # Domain
    BASE_URL: str = "http://localhost:8000"
    SHORT_PATH_PREFIX: str = "s"

    # Short codes
    SHORT_CODE_LENGTH: int = 7  # 62^7 ~ 3.5e12 combinations
    CODE_ALPHABET: str = string.ascii_letters + string.digits  # base62
    CODE_GENERATOR: Literal["random", "hash"] = "random"
    HASH_SECRET: str = "shortlink-hash-secret-change-in-production"
    MAX_ATTEMPTS: int = 5

    # Rate Limiting
    RATE_LIMIT_ENABLED: bool = True
    RATE_LIMIT_PER_HOUR: int = 60

    # Redirects are immutable, so edges may cache them
    REDIRECT_CACHE_SECONDS: int = 60 * 60 * 24

    # Logging
    LOG_LEVEL: str = "INFO"
    LOG_FILE: Optional[str] = None

    class Config:
        env_file = ".env"

    @field_validator("SHORT_CODE_LENGTH")
    @classmethod
    def check_code_length(cls, value: int) -> int:
        return validate_length(value)

    @field_validator("CODE_ALPHABET")
    @classmethod
    def check_code_alphabet(cls, value: str) -> str:
        return validate_alphabet(value)

    @field_validator("MAX_ATTEMPTS")
    @classmethod
    def check_max_attempts(cls, value: int) -> int:
        if value < 1:
            raise ValueError("MAX_ATTEMPTS must be at least 1")
        return value

    @model_validator(mode="after")
    def check_hash_secret(self):
        if self.CODE_GENERATOR == "hash" and not self.HASH_SECRET:
            raise ValueError("HASH_SECRET is required when CODE_GENERATOR is 'hash'")
        return self


settings = Settings()
