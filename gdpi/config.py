"""
Configuration management with Pydantic Settings
Loads from .env file (GDPI_ prefix) with validation and defaults
"""

import math

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings

# Results never carry more vendor questions than this
MAX_VENDOR_QUESTIONS = 3


class Settings(BaseSettings):
    """Analysis settings with validation"""

    # Environment
    environment: str = Field(default="development", description="Environment")
    log_level: str = Field(default="INFO", description="Log level")
    log_json: bool = Field(default=True, description="Render logs as JSON")

    # Torsion spring benchmarks (standard 16x7 door, scheduled work)
    springs_only_ceiling: float = Field(
        default=675.0,
        description="Oil-tempered springs-only red flag ceiling, USD"
    )
    springs_plus_parts_ceiling: float = Field(
        default=700.0,
        description="Springs plus any other torsion-system part red flag ceiling, USD"
    )
    small_wire_springs_cap: float = Field(
        default=600.0,
        description="Prompt benchmark for springs with wire size <= 0.250, USD"
    )

    # After-hours pricing multiplier quoted to the model
    after_hours_multiplier_low: float = Field(default=1.4, description="After-hours multiplier, low end")
    after_hours_multiplier_high: float = Field(default=2.0, description="After-hours multiplier, high end")

    # Result shaping
    max_vendor_questions: int = Field(default=3, description="Max vendor questions in a result")

    @field_validator("environment")
    @classmethod
    def validate_environment(cls, v):
        if v not in ["development", "production", "testing"]:
            raise ValueError("Environment must be development, production, or testing")
        return v

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, v):
        v = v.upper()
        if v not in ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]:
            raise ValueError("Invalid log level")
        return v

    @field_validator("springs_only_ceiling", "springs_plus_parts_ceiling", "small_wire_springs_cap")
    @classmethod
    def validate_ceiling(cls, v):
        if not math.isfinite(v) or v <= 0:
            raise ValueError("Benchmark ceilings must be positive and finite")
        return v

    @field_validator("max_vendor_questions")
    @classmethod
    def validate_max_vendor_questions(cls, v):
        if not 1 <= v <= MAX_VENDOR_QUESTIONS:
            raise ValueError(f"max_vendor_questions must be between 1 and {MAX_VENDOR_QUESTIONS}")
        return v

    model_config = {
        "extra": "ignore",  # Ignore extra fields from .env
        "env_file": ".env",
        "env_prefix": "GDPI_",
        "case_sensitive": False
    }


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings"""
    return settings
