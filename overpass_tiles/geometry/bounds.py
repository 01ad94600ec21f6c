"""
Query boundaries

A boundary describes the region of a request and of its result. Shapes:
- Box: south/west/north/east edges
- Area: center point and radius
- Polygon: ordered outline points
- Unconstrained: matches everything

Containment and touch tests are implemented per shape; shapes without an
algorithm raise NotSupportedError. Difference is only implemented for
box minus box and returns an empty list for every other combination.
"""

import math
from dataclasses import dataclass
from typing import List, Optional, Tuple

from loguru import logger

from .primitives import Point, Size
from ..exceptions import NotSupportedError


class Bounds:
    """Base class for all boundary shapes"""

    @staticmethod
    def box_from(point: Point, size: Size) -> "Box":
        """
        Construct a box from its top-left (north-west) corner and size

        Args:
            point: north-west corner
            size: extent in the same coordinate space

        Returns:
            Box spanning point.lat - size.lat .. point.lat and
            point.lon .. point.lon + size.lon
        """
        return Box(s=point.lat - size.lat, w=point.lon, n=point.lat, e=point.lon + size.lon)

    @property
    def diameter(self) -> float:
        return math.inf

    def contains(self, point: Point) -> bool:
        raise NotSupportedError(f"contains is not supported for {self}")

    def touches(self, point: Point) -> bool:
        raise NotSupportedError(f"touches is not supported for {self}")

    def difference(self, other: "Bounds") -> List["Bounds"]:
        """
        Areas of self that are not covered by other

        Only box minus box is implemented, every other combination
        returns an empty list.
        """
        logger.debug(f"Difference of {self} and {other} is not implemented, returning no tiles")
        return []


@dataclass(frozen=True)
class Box(Bounds):
    """Rectangular boundary, s < n and w < e expected"""
    s: float
    w: float
    n: float
    e: float

    @property
    def south_west(self) -> Point:
        return Point(lat=self.s, lon=self.w)

    @property
    def north_east(self) -> Point:
        return Point(lat=self.n, lon=self.e)

    @property
    def size(self) -> Size:
        return Size(lat=self.n - self.s, lon=self.e - self.w)

    @property
    def diameter(self) -> float:
        return self.south_west.distance(self.north_east)

    def contains(self, point: Point) -> bool:
        """
        Check if box contains point.

        A point must be strictly inside one pair of opposing edges and
        inside-or-on the other pair: points on an edge are contained,
        corners are not (see touches).
        """
        return (
            (self.s < point.lat < self.n and self.w <= point.lon <= self.e)
            or (self.s <= point.lat <= self.n and self.w < point.lon < self.e)
        )

    def touches(self, point: Point) -> bool:
        """Check if point sits exactly on a corner of the box"""
        return (point.lat == self.s or point.lat == self.n) and (point.lon == self.w or point.lon == self.e)

    def difference(self, other: Bounds) -> List[Bounds]:
        if isinstance(other, Box):
            return _box_minus_box(self, other)
        return super().difference(other)

    def __str__(self) -> str:
        return f"box ({self.s}, {self.w}, {self.n}, {self.e})"


@dataclass(frozen=True)
class Area(Bounds):
    """Circular boundary around a center point"""
    center: Point
    radius: float

    @property
    def diameter(self) -> float:
        return self.radius

    def contains(self, point: Point) -> bool:
        return point.distance(self.center) < self.radius

    def touches(self, point: Point) -> bool:
        return point.distance(self.center) == self.radius

    def __str__(self) -> str:
        return f"area ({self.center}, {self.radius})"


@dataclass(frozen=True)
class Polygon(Bounds):
    """Polygon boundary given by its outline points"""
    points: Tuple[Point, ...]

    def __post_init__(self):
        object.__setattr__(self, "points", tuple(self.points))

    def __str__(self) -> str:
        return "poly ({})".format(", ".join(str(p) for p in self.points))


@dataclass(frozen=True)
class Unconstrained(Bounds):
    """No boundary, matches every point"""

    def contains(self, point: Point) -> bool:
        return True

    def touches(self, point: Point) -> bool:
        return False

    def __str__(self) -> str:
        return "arbitrary"


def _same_rect(a: Tuple[Point, Point], b: Tuple[Point, Point]) -> bool:
    """Check if two diagonal corner pairs describe the same rectangle"""
    if a == b or a == (b[1], b[0]):
        return True

    # the other diagonal of b
    c = Point(lat=b[0].lat, lon=b[1].lon)
    d = Point(lat=b[1].lat, lon=b[0].lon)
    return a == (c, d) or a == (d, c)


def _box_minus_box(lhs: Box, rhs: Box) -> List[Bounds]:
    """
    Split the part of lhs not covered by rhs into boxes

    Grid points are formed from every edge of both boxes. Points that lie
    in or on lhs but not inside rhs are paired with their nearest point
    differing in both coordinates, and every pair spans one result box.

    The pairing is a nearest-neighbour heuristic: result boxes may
    overlap and are not guaranteed to cover the whole difference.
    """
    lons = sorted([lhs.e, lhs.w, rhs.e, rhs.w])
    lats = sorted([lhs.n, lhs.s, rhs.n, rhs.s])

    points: List[Point] = []
    for lon in lons:
        for lat in lats:
            point = Point(lat=lat, lon=lon)
            if (lhs.contains(point) or lhs.touches(point)) and not rhs.contains(point):
                points.append(point)

    rects: List[Tuple[Point, Point]] = []
    for point in points:
        by_distance = sorted(points, key=point.distance)
        closest: Optional[Point] = next(
            (p for p in by_distance if p.lat != point.lat and p.lon != point.lon),
            None
        )
        if closest is None:
            continue

        pair = (point, closest)
        if not any(_same_rect(rect, pair) for rect in rects):
            rects.append(pair)

    bounds: List[Bounds] = []
    for a, b in rects:
        bound = Box(
            s=min(a.lat, b.lat),
            w=min(a.lon, b.lon),
            n=max(a.lat, b.lat),
            e=max(a.lon, b.lon),
        )
        if bound != rhs:
            bounds.append(bound)

    logger.debug(f"{lhs} minus {rhs}: {len(bounds)} boxes from {len(points)} grid points")
    return bounds
