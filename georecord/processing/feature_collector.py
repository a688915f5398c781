# =============================================================================
# Feature Collector
# =============================================================================
# Consumes begin_feature/property/geometry/end_feature events and produces
# one Feature per framed sequence. Geometry events are delegated to a
# GeometryBuilder owned by the feature in progress.
# =============================================================================

import logging
from contextlib import contextmanager
from typing import Any, Callable, Dict, Iterable, Iterator, List, Optional, Union

from ..config import CodecSettings, get_settings
from ..errors import GeoRecordError, NestingMismatch
from ..models.feature import Feature
from ..models.properties import normalize_property_value
from .base import Datasource, FeatureProcessor
from .events import Event, drive
from .geometry_builder import GeometryBuilder

__all__ = ["FeatureCollector", "iter_features", "collect_features"]

logger = logging.getLogger(__name__)


class FeatureCollector(FeatureProcessor):
    """
    Event consumer producing Features.

    Completed features are handed to ``on_feature`` as soon as their
    end_feature event arrives and are not retained. Without a callback the
    collector keeps them in ``features``.

    Errors discard the feature in progress and carry the index of that
    feature (``feature_index``).

    Args:
        on_feature: Callback receiving each completed Feature
        settings: Codec settings (default: cached environment settings)

    Example:
        >>> collector = FeatureCollector()
        >>> source.process(collector)
        >>> collector.features[0].properties["name"]
        'Berlin'
    """

    def __init__(
        self,
        on_feature: Optional[Callable[[Feature], None]] = None,
        settings: Optional[CodecSettings] = None,
    ):
        self.features: List[Feature] = []
        self.on_feature = on_feature or self.features.append
        self.settings = settings or get_settings()
        self.feature_count = 0

        self._properties: Optional[Dict[str, Any]] = None
        self._geometry = GeometryBuilder()

    @property
    def in_feature(self) -> bool:
        return self._properties is not None

    def _discard(self) -> None:
        self._properties = None
        self._geometry.reset()

    @contextmanager
    def _traversal(self):
        try:
            yield
        except GeoRecordError as e:
            self._discard()
            raise e.at_feature(self.feature_count)

    def _require_feature(self, event: str) -> None:
        if self._properties is None:
            raise NestingMismatch(f"{event} outside of a feature")

    # -------------------------------------------------------------------------
    # Feature events
    # -------------------------------------------------------------------------

    def begin_feature(self) -> None:
        with self._traversal():
            if self._properties is not None:
                raise NestingMismatch("begin_feature inside an unfinished feature")
            self._properties = {}
            self._geometry.reset()

    def property(self, name: str, value: Any) -> None:
        with self._traversal():
            self._require_feature("property")
            value = normalize_property_value(value, name)
            if name in self._properties and self.settings.warn_on_duplicate_properties:
                logger.warning(
                    f"Feature {self.feature_count}: duplicate property {name!r}, "
                    f"keeping the last value"
                )
            self._properties[name] = value

    def end_feature(self) -> None:
        with self._traversal():
            self._require_feature("end_feature")
            if self._geometry.in_progress:
                raise NestingMismatch("end_feature while a geometry is still open")

            feature = Feature(
                geometry=self._geometry.take_geometry(),
                properties=self._properties,
            )
            self._properties = None
            self.on_feature(feature)

        logger.debug(f"Completed feature {self.feature_count}")
        self.feature_count += 1

    def finish(self) -> None:
        """Check that the stream did not stop inside a feature."""
        with self._traversal():
            if self._properties is not None:
                raise NestingMismatch("Stream ended inside an unfinished feature")

    # -------------------------------------------------------------------------
    # Geometry events
    # -------------------------------------------------------------------------

    def begin_geometry(self, kind, part_count: int, dimension: int = 2) -> None:
        with self._traversal():
            self._require_feature("begin_geometry")
            self._geometry.begin_geometry(kind, part_count, dimension)

    def coordinate(self, x: float, y: float, z: Optional[float] = None) -> None:
        with self._traversal():
            self._require_feature("coordinate")
            self._geometry.coordinate(x, y, z)

    def end_geometry(self) -> None:
        with self._traversal():
            self._require_feature("end_geometry")
            self._geometry.end_geometry()


def iter_features(
    events: Iterable[Event],
    settings: Optional[CodecSettings] = None,
) -> Iterator[Feature]:
    """
    Lazily yield features from an event iterable.

    Each step pulls events until the next feature completes. Nothing is
    buffered beyond the feature in progress, and the underlying iterator is
    consumed as the generator advances.
    """
    ready: List[Feature] = []
    collector = FeatureCollector(on_feature=ready.append, settings=settings)
    for event in events:
        event.dispatch(collector)
        if ready:
            yield ready.pop()
    collector.finish()


def collect_features(
    source: Union[Datasource, Iterable[Event]],
    settings: Optional[CodecSettings] = None,
) -> List[Feature]:
    """Collect every feature of a datasource or event iterable."""
    collector = FeatureCollector(settings=settings)
    drive(source, collector)
    collector.finish()
    return collector.features
