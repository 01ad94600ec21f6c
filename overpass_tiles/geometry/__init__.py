"""
Geometry for query regions

Points and sizes in lat/lon space, boundary shapes and tiling helpers.
"""

from .primitives import Point, Size
from .bounds import Bounds, Box, Area, Polygon, Unconstrained
from .tiling import split_box, missing_tiles

__all__ = [
    "Point",
    "Size",
    "Bounds",
    "Box",
    "Area",
    "Polygon",
    "Unconstrained",
    "split_box",
    "missing_tiles",
]
