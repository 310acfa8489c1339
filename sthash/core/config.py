# Service settings: environment variables and .env file
# The hash key is never defaulted; callers either configure HASH_KEY or pass a key per request.

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field
from typing import Optional

class Settings(BaseSettings):
    PROJECT_NAME: str = "sthash"
    VERSION: str = "0.2.0"
    BRIEF_DESCRIPTION: str = "Privacy-preserving spacetime hash tokens for approximate co-location matching."

    ENV: str = Field("development", description="Application environment (e.g., production, development)")
    LOG_LEVEL: str = Field("INFO", description="Root log level (DEBUG shows one event per hashed record)")

    # --- Hashing ---
    HASH_KEY: Optional[str] = Field(None, description="HMAC secret used when a request does not carry its own key")
    TIME_STEP_MINUTES: float = Field(5, description="Duration quantization step in minutes")
    LATLNG_PRECISION: int = Field(-3, description="Decimal position to truncate coordinates at (-3 is ~100m)")
    SPREAD_OUT: int = Field(1, description="Half-width of the perimeter square, in grid cells")

    # --- Execution ---
    # 0 hashes sequentially in the request thread
    HASH_WORKERS: int = Field(0, description="Thread pool size for per-timestamp hashing")
    MAX_RECORDS_PER_REQUEST: int = Field(1000, description="Upper bound on records accepted by one API call")
    MAX_TOKENS_PER_REQUEST: int = Field(200_000, description="Upper bound on tokens one API call may produce, checked before hashing")

    # Pydantic configuration
    model_config = SettingsConfigDict(
        env_file=".env",
        extra="ignore"
    )

settings = Settings()
