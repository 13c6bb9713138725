"""
Markov Trie Service Configuration
"""

from typing import List, Optional
from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class ConfigurationError(ValueError):
    """Raised for invalid user-supplied settings (kind, seed, order)."""


class Settings(BaseSettings):
    """Application settings loaded from environment variables"""

    # ===== Service =====
    SERVICE_NAME: str = Field(default="markov-trie-service", env="SERVICE_NAME")  # type: ignore
    SERVICE_VERSION: str = Field(default="1.0.0", env="SERVICE_VERSION")  # type: ignore
    HOST: str = Field(default="0.0.0.0", env="HOST")  # type: ignore
    PORT: int = Field(default=8000, env="PORT")  # type: ignore
    LOG_LEVEL: str = Field(default="info", env="LOG_LEVEL")  # type: ignore
    DEBUG: bool = Field(default=False, env="DEBUG")  # type: ignore

    # ===== CORS =====
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:8080"], env="CORS_ORIGINS"  # type: ignore
    )

    # ===== Markov chain defaults (CLI) =====
    MARKOV_ORDER: int = Field(default=5, env="MARKOV_ORDER")  # type: ignore
    MARKOV_FILE: str = Field(default="in.txt", env="MARKOV_FILE")  # type: ignore
    MARKOV_KIND: str = Field(default="word", env="MARKOV_KIND")  # type: ignore
    MARKOV_SEED: str = Field(default="", env="MARKOV_SEED")  # type: ignore
    MARKOV_AMOUNT: int = Field(default=8, env="MARKOV_AMOUNT")  # type: ignore
    MARKOV_RANDOM_SEED: Optional[int] = Field(default=None, env="MARKOV_RANDOM_SEED")  # type: ignore

    # ===== API limits =====
    MARKOV_MAX_ORDER: int = Field(default=12, env="MARKOV_MAX_ORDER")  # type: ignore
    MARKOV_MAX_AMOUNT: int = Field(default=1000, env="MARKOV_MAX_AMOUNT")  # type: ignore
    MARKOV_MAX_MODELS: int = Field(default=32, env="MARKOV_MAX_MODELS")  # type: ignore

    # >>> pydantic v2 settings config <<<
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",  # ignore unrelated .env variables
    )


settings = Settings()
