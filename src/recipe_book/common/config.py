"""Configuration management using Pydantic Settings"""
from pathlib import Path

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_UNITS_PATH = Path(__file__).resolve().parent.parent / "quantities" / "data" / "units.json"


class QuantityConfig(BaseSettings):
    """Quantity engine configuration"""
    units_path: Path = Field(default=DEFAULT_UNITS_PATH, alias="UNITS_PATH")
    significant_digits: int = Field(default=4, alias="QUANTITY_SIGNIFICANT_DIGITS")
    decimal_places: int = Field(default=2, alias="QUANTITY_DECIMAL_PLACES")

    @field_validator("significant_digits")
    @classmethod
    def validate_significant_digits(cls, v: int) -> int:
        if not 1 <= v <= 15:
            raise ValueError("QUANTITY_SIGNIFICANT_DIGITS must be between 1 and 15")
        return v

    @field_validator("decimal_places")
    @classmethod
    def validate_decimal_places(cls, v: int) -> int:
        if not 0 <= v <= 6:
            raise ValueError("QUANTITY_DECIMAL_PLACES must be between 0 and 6")
        return v

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


class Settings(BaseSettings):
    """Global settings"""
    quantity: QuantityConfig = Field(default_factory=QuantityConfig)

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")


# Global settings instance
settings = Settings()
