# =============================================================================
# Codec Configuration
# =============================================================================
# Pydantic Settings model for codec-wide defaults:
# - geometry_field: name of the geometry-bearing record field
# - default_dimension: dimension emitted for geometries with no coordinates
# - warn_on_duplicate_properties: log when a source repeats a property name
# =============================================================================

from functools import lru_cache

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

__all__ = ["CodecSettings", "get_settings"]


class CodecSettings(BaseSettings):
    """
    Configuration for feature/record conversion.

    Maps environment variables with prefix "GEORECORD_":
    - GEORECORD_GEOMETRY_FIELD → geometry_field
    - GEORECORD_DEFAULT_DIMENSION → default_dimension
    - GEORECORD_WARN_ON_DUPLICATE_PROPERTIES → warn_on_duplicate_properties

    Attributes:
        geometry_field: Record field that carries the feature geometry when it
            cannot be recognised from its type (default: "geometry")
        default_dimension: Coordinate dimension announced for geometries that
            hold no coordinates, e.g. an empty MultiPoint (default: 2)
        warn_on_duplicate_properties: Log a warning when a feature repeats a
            property name (default: True)
    """

    geometry_field: str = Field(
        "geometry",
        validation_alias="GEORECORD_GEOMETRY_FIELD",
        description="Name of the geometry-bearing record field",
    )
    default_dimension: int = Field(
        2,
        validation_alias="GEORECORD_DEFAULT_DIMENSION",
        description="Dimension emitted for geometries without coordinates",
    )
    warn_on_duplicate_properties: bool = Field(
        True,
        validation_alias="GEORECORD_WARN_ON_DUPLICATE_PROPERTIES",
        description="Log a warning for repeated property names",
    )

    model_config = SettingsConfigDict(
        env_file=".env",
        case_sensitive=False,
        extra="ignore",  # Ignore unrelated env vars from shared .env files
    )

    @field_validator("default_dimension")
    @classmethod
    def validate_dimension(cls, v: int) -> int:
        if v not in (2, 3):
            raise ValueError(f"default_dimension must be 2 or 3, got {v}")
        return v


@lru_cache
def get_settings() -> CodecSettings:
    """Get cached settings instance."""
    return CodecSettings()
