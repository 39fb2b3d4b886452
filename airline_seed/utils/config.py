"""
Environment configuration loader with validation for the airline seeder.
"""

import os
from typing import Optional, Dict, Any
from pydantic import BaseModel, Field, field_validator
from dotenv import load_dotenv


class SeedConfig(BaseModel):
    """Configuration model for a seeding run with validation."""

    # Database Configuration
    database_url: Optional[str] = Field(
        default=None,
        description="Async SQLAlchemy database URL (built from DB_* variables when unset)",
    )
    echo_sql: bool = Field(default=False, description="Log every SQL statement")

    # Target counts
    airport_count: int = Field(default=20, ge=0, description="Airports to have in the database")
    plane_count: int = Field(default=20, ge=0, description="Planes to have in the database")
    passenger_count: int = Field(
        default=20000, ge=0, description="Passengers to have in the database"
    )
    flight_count: int = Field(default=2500, ge=0, description="Flights to have in the database")

    # Throughput
    passenger_batch_size: int = Field(
        default=2000, ge=1, description="Passengers per bulk insert"
    )
    flight_batch_size: int = Field(
        default=50, ge=1, description="Flights created concurrently per batch"
    )

    # Reproducibility and logging
    seed_value: Optional[int] = Field(
        default=None, description="Seed for the fake data generator"
    )
    log_level: str = Field(default="INFO", description="Logging level")

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        """Validate log level is one of the standard levels."""
        valid_levels = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]
        if v.upper() not in valid_levels:
            raise ValueError(f"Log level must be one of: {valid_levels}")
        return v.upper()


def _env_bool(name: str, default: str = "false") -> bool:
    return os.getenv(name, default).lower() in ("true", "1", "yes", "on")


def _env_optional_int(name: str) -> Optional[int]:
    value = os.getenv(name)
    if value is None or value.strip() == "":
        return None
    return int(value)


def load_config(env_file: Optional[str] = None) -> SeedConfig:
    """
    Load configuration from environment variables and .env file.

    Args:
        env_file: Optional path to .env file. If None, looks for .env in current directory.

    Returns:
        SeedConfig: Validated configuration object

    Raises:
        ValueError: If configuration is missing or invalid
    """
    if env_file is None:
        env_file = ".env"

    if os.path.exists(env_file):
        load_dotenv(env_file)

    try:
        config_data: Dict[str, Any] = {
            "database_url": os.getenv("DATABASE_URL") or None,
            "echo_sql": _env_bool("SEED_ECHO_SQL"),
            "airport_count": int(os.getenv("AIRPORT_COUNT", "20")),
            "plane_count": int(os.getenv("PLANE_COUNT", "20")),
            "passenger_count": int(os.getenv("PASSENGER_COUNT", "20000")),
            "flight_count": int(os.getenv("FLIGHT_COUNT", "2500")),
            "passenger_batch_size": int(os.getenv("PASSENGER_BATCH_SIZE", "2000")),
            "flight_batch_size": int(os.getenv("FLIGHT_BATCH_SIZE", "50")),
            "seed_value": _env_optional_int("SEED_VALUE"),
            "log_level": os.getenv("SEED_LOG_LEVEL", "INFO"),
        }
        return SeedConfig(**config_data)
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")


def apply_overrides(config: SeedConfig, **overrides: Any) -> SeedConfig:
    """
    Return a new validated config with the non-None overrides applied.

    Used by the CLI so that command-line options win over the environment.
    """
    updates = {key: value for key, value in overrides.items() if value is not None}
    if not updates:
        return config

    try:
        return SeedConfig(**{**config.model_dump(), **updates})
    except Exception as e:
        raise ValueError(f"Configuration validation failed: {e}")
