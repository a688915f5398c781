# =============================================================================
# Feature Model
# =============================================================================
# A geometry paired with an ordered property bag: the unit of exchange with
# the geometry processing engine.
# =============================================================================

from typing import Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

from .geometry import Geometry
from .properties import PropertyValue

__all__ = ["Feature"]


class Feature(BaseModel):
    """
    A single feature.

    Property keys are unique and keep the order in which the source emitted
    them. Features are immutable once built.

    Attributes:
        geometry: The feature geometry, or None for a geometry-less feature
        properties: Property name to value mapping (insertion ordered)
    """

    model_config = ConfigDict(frozen=True)

    geometry: Optional[Geometry] = Field(None, description="Feature geometry")
    properties: Dict[str, PropertyValue] = Field(
        default_factory=dict,
        description="Ordered property mapping",
    )

    def get(self, name: str, default: Any = None) -> Any:
        """Return a property value, or default if absent."""
        return self.properties.get(name, default)

    def __contains__(self, name: str) -> bool:
        return name in self.properties
