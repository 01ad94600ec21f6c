"""
Geometry primitives

Point and size in lat/lon coordinate space. Coordinates are treated as a
flat plane: distances are Euclidean in degrees, not geodesic.
"""

import math
from dataclasses import dataclass


@dataclass(frozen=True)
class Point:
    """Point in lat/lon coordinate space"""
    lat: float
    lon: float

    def distance(self, to: "Point") -> float:
        """Euclidean distance to another point (same units as coordinates)"""
        return math.sqrt((self.lat - to.lat) ** 2 + (self.lon - to.lon) ** 2)

    def __str__(self) -> str:
        return f"point {self.lat}; {self.lon}"


@dataclass(frozen=True)
class Size:
    """Extent in lat/lon coordinate space"""
    lat: float
    lon: float

    def __str__(self) -> str:
        return f"size {self.lat}; {self.lon}"
