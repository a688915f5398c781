# =============================================================================
# Event Processing
# =============================================================================
# Push-based processors for the geometry/feature event protocol.
# =============================================================================

"""
Event processing for georecord.

This package provides:
- GeometryProcessor / FeatureProcessor: callback interfaces
- GeometryBuilder: events -> geometry value
- GeometryEmitter: geometry value -> events
- FeatureCollector: events -> Features
- Event records, EventRecorder and EventStream for capture and replay
"""

from .base import Datasource, FeatureProcessor, GeometryProcessor, PropertyProcessor
from .events import (
    BeginFeature,
    BeginGeometry,
    Coordinate,
    EndFeature,
    EndGeometry,
    Event,
    EventRecorder,
    EventStream,
    Property,
    drive,
)
from .geometry_builder import GeometryBuilder
from .geometry_emitter import GeometryEmitter, process_geometry
from .feature_collector import FeatureCollector, collect_features, iter_features

__all__ = [
    # Interfaces
    "Datasource",
    "FeatureProcessor",
    "GeometryProcessor",
    "PropertyProcessor",
    # Events
    "BeginFeature",
    "BeginGeometry",
    "Coordinate",
    "EndFeature",
    "EndGeometry",
    "Event",
    "EventRecorder",
    "EventStream",
    "Property",
    "drive",
    # Geometry
    "GeometryBuilder",
    "GeometryEmitter",
    "process_geometry",
    # Features
    "FeatureCollector",
    "collect_features",
    "iter_features",
]
