# =============================================================================
# Event Records
# =============================================================================
# Value objects for each protocol event, a sink that records them and a
# datasource that replays them. Used to capture engine output, to replay
# it into consumers and to assert on emitted streams.
# =============================================================================

from typing import Any, Iterable, Iterator, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict

from ..models.geometry import GeometryKind
from .base import Datasource, FeatureProcessor, GeometryProcessor

__all__ = [
    "BeginFeature",
    "EndFeature",
    "Property",
    "BeginGeometry",
    "Coordinate",
    "EndGeometry",
    "Event",
    "EventRecorder",
    "EventStream",
    "drive",
]


class _Event(BaseModel):
    model_config = ConfigDict(frozen=True)


class BeginFeature(_Event):
    event: Literal["begin_feature"] = "begin_feature"

    def dispatch(self, processor: FeatureProcessor) -> None:
        processor.begin_feature()


class EndFeature(_Event):
    event: Literal["end_feature"] = "end_feature"

    def dispatch(self, processor: FeatureProcessor) -> None:
        processor.end_feature()


class Property(_Event):
    event: Literal["property"] = "property"
    name: str
    value: Any = None

    def dispatch(self, processor: FeatureProcessor) -> None:
        processor.property(self.name, self.value)


class BeginGeometry(_Event):
    event: Literal["begin_geometry"] = "begin_geometry"
    kind: Union[GeometryKind, str]
    part_count: int
    dimension: int = 2

    def dispatch(self, processor: GeometryProcessor) -> None:
        processor.begin_geometry(self.kind, self.part_count, self.dimension)


class Coordinate(_Event):
    event: Literal["coordinate"] = "coordinate"
    x: float
    y: float
    z: Optional[float] = None

    def dispatch(self, processor: GeometryProcessor) -> None:
        if self.z is None:
            processor.coordinate(self.x, self.y)
        else:
            processor.coordinate(self.x, self.y, self.z)


class EndGeometry(_Event):
    event: Literal["end_geometry"] = "end_geometry"

    def dispatch(self, processor: GeometryProcessor) -> None:
        processor.end_geometry()


Event = Union[BeginFeature, EndFeature, Property, BeginGeometry, Coordinate, EndGeometry]


class EventRecorder(FeatureProcessor):
    """
    Sink that records every event it receives, in order.

    Example:
        >>> recorder = EventRecorder()
        >>> process_geometry(Point(coord=(1.0, 2.0)), recorder)
        >>> recorder.events
        [BeginGeometry(kind=<GeometryKind.POINT: 'Point'>, ...), Coordinate(...), EndGeometry(...)]
    """

    def __init__(self):
        self.events: List[Event] = []

    def begin_feature(self) -> None:
        self.events.append(BeginFeature())

    def end_feature(self) -> None:
        self.events.append(EndFeature())

    def property(self, name: str, value: Any) -> None:
        self.events.append(Property(name=name, value=value))

    def begin_geometry(self, kind, part_count: int, dimension: int = 2) -> None:
        self.events.append(BeginGeometry(kind=kind, part_count=part_count, dimension=dimension))

    def coordinate(self, x: float, y: float, z: Optional[float] = None) -> None:
        self.events.append(Coordinate(x=x, y=y, z=z))

    def end_geometry(self) -> None:
        self.events.append(EndGeometry())

    def replay(self) -> "EventStream":
        """Return a datasource that replays the recorded events."""
        return EventStream(self.events)


class EventStream:
    """Datasource replaying a fixed sequence of events."""

    def __init__(self, events: Iterable[Event]):
        self.events = list(events)

    def process(self, processor: FeatureProcessor) -> None:
        for event in self.events:
            event.dispatch(processor)

    def __iter__(self) -> Iterator[Event]:
        return iter(self.events)

    def __len__(self) -> int:
        return len(self.events)


def drive(source: Union[Datasource, Iterable[Event]], processor: FeatureProcessor) -> None:
    """
    Push all events of a source into a processor.

    Args:
        source: A datasource with a process() method, or an iterable of events
        processor: Receiver of the events
    """
    if isinstance(source, Datasource):
        source.process(processor)
        return
    for event in source:
        event.dispatch(processor)
