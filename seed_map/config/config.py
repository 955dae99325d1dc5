from pathlib import Path
from dotenv import dotenv_values
from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

import os

# Explicitly load .env for local/dev environments only if values are missing from the environment
BASE_DIR = Path(__file__).resolve().parent.parent.parent
env_file = BASE_DIR / ".env"

if env_file.exists():
    file_env = dotenv_values(env_file)
    missing_keys = {k: v for k, v in file_env.items() if k not in os.environ and v is not None}
    for k, v in missing_keys.items():
        os.environ[k] = v


class Settings(BaseSettings):
    """Application settings pulled from SEED_MAP_* environment variables."""

    model_config = SettingsConfigDict(
        env_prefix="SEED_MAP_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Logging Configuration
    log_level: str = Field(default="INFO", description="Logging level")
    log_format: str = Field(default="plain", description="Logging format (plain or json)")

    # Map Generation Configuration
    default_map_size: int = Field(default=200, description="Default map side length in cells")
    max_map_size: int = Field(default=2048, description="Max allowed map side length")

    # Default biome ratios (percent of the map); plains take the remainder
    default_ocean_ratio: float = Field(default=30.0, ge=0, description="Ocean target percentage")
    default_desert_ratio: float = Field(default=20.0, ge=0, description="Desert target percentage")
    default_village_ratio: float = Field(default=5.0, ge=0, description="Village target percentage")

    # Output Configuration
    output_dir: str = Field(default=".", description="Directory for rendered sample maps")


# Instantiate singleton settings object
settings = Settings()
