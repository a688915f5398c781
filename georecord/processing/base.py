# =============================================================================
# Processor Interfaces
# =============================================================================
# Abstract callback interfaces for the push-based event protocol spoken by
# geometry processing engines, and the datasource protocol that drives them.
# =============================================================================

from abc import ABC, abstractmethod
from typing import Any, Optional, Protocol, Union, runtime_checkable

from ..models.geometry import GeometryKind

__all__ = [
    "GeometryProcessor",
    "PropertyProcessor",
    "FeatureProcessor",
    "Datasource",
]


class GeometryProcessor(ABC):
    """
    Receiver of geometry events.

    A geometry arrives as a nested sequence of begin/end events with
    coordinates in between. Sources must deliver events strictly in order.
    """

    @abstractmethod
    def begin_geometry(
        self,
        kind: Union[GeometryKind, str],
        part_count: int,
        dimension: int = 2,
    ) -> None:
        """
        Start a geometry or a nested part.

        Args:
            kind: Geometry kind (a LineString nested in a Polygon is a ring)
            part_count: Coordinates for Point/LineString, rings for Polygon,
                parts for Multi* and GeometryCollection
            dimension: Coordinate dimension, 2 or 3
        """
        pass

    @abstractmethod
    def coordinate(self, x: float, y: float, z: Optional[float] = None) -> None:
        """Add one coordinate to the innermost Point or LineString."""
        pass

    @abstractmethod
    def end_geometry(self) -> None:
        """Close the innermost open geometry."""
        pass


class PropertyProcessor(ABC):
    """Receiver of named property values."""

    @abstractmethod
    def property(self, name: str, value: Any) -> None:
        pass


class FeatureProcessor(GeometryProcessor, PropertyProcessor):
    """
    Receiver of whole features.

    Each feature is framed by begin_feature/end_feature and holds any number
    of property events plus at most one geometry sub-stream.
    """

    @abstractmethod
    def begin_feature(self) -> None:
        pass

    @abstractmethod
    def end_feature(self) -> None:
        pass


@runtime_checkable
class Datasource(Protocol):
    """Anything that can push its features into a FeatureProcessor."""

    def process(self, processor: FeatureProcessor) -> None:
        ...
