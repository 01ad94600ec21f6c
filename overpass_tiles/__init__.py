"""
Overpass Tiles

Client library for Overpass-style OSM endpoints:
- Geometry: points, sizes and query boundaries (box, area, polygon)
- Tiling: splitting large regions into requestable tiles
- OSM: response parsing, graph assembly and per-tile result merging
"""

from .exceptions import OverpassError, NotSupportedError, TransportError, ResponseError
from .geometry import Point, Size, Bounds, Box, Area, Polygon, Unconstrained
from .osm import Node, Way, Relation, OverpassResult, OverpassCollector

__all__ = [
    "OverpassError",
    "NotSupportedError",
    "TransportError",
    "ResponseError",
    "Point",
    "Size",
    "Bounds",
    "Box",
    "Area",
    "Polygon",
    "Unconstrained",
    "Node",
    "Way",
    "Relation",
    "OverpassResult",
    "OverpassCollector",
]

__version__ = "0.1.0"
