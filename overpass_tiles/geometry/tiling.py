"""
Region tiling

Splits request regions into tiles small enough for a single Overpass
request, and computes the tiles still missing when part of a region has
already been fetched.
"""

import math
from typing import List, Optional

from loguru import logger

from .bounds import Bounds, Box
from .primitives import Size

_STEP_TOLERANCE = 1e-9


def split_box(box: Box, tile_size: Size) -> List[Box]:
    """
    Split a box into a grid of tiles no larger than tile_size

    Tiles are laid out row by row from the north-west corner; the last
    row and column are clipped to the box edges.

    Args:
        box: region to split
        tile_size: maximum tile extent

    Returns:
        List of tiles in north-to-south, west-to-east order
    """
    if tile_size.lat <= 0 or tile_size.lon <= 0:
        raise ValueError(f"Tile size must be positive, got {tile_size}")

    if box.n <= box.s or box.e <= box.w:
        return [box]

    rows = _steps(box.n - box.s, tile_size.lat)
    cols = _steps(box.e - box.w, tile_size.lon)

    tiles = []
    for row in range(rows):
        north = box.n - row * tile_size.lat
        south = box.s if row == rows - 1 else box.n - (row + 1) * tile_size.lat
        for col in range(cols):
            west = box.w + col * tile_size.lon
            east = box.e if col == cols - 1 else box.w + (col + 1) * tile_size.lon
            tiles.append(Box(s=south, w=west, n=north, e=east))

    return tiles


def _steps(extent: float, step: float) -> int:
    # a remainder within rounding error of a whole step adds no tile
    return max(1, math.ceil(extent / step - _STEP_TOLERANCE))


def missing_tiles(bounds: Bounds, known: Bounds, tile_size: Optional[Size] = None) -> List[Bounds]:
    """
    Tiles covering the part of bounds that is not covered by known

    Uses Bounds.difference, so only box-on-box input produces tiles. Every
    resulting box larger than tile_size is split further.

    Args:
        bounds: requested region
        known: region already fetched
        tile_size: optional maximum tile extent

    Returns:
        List of tiles (empty when nothing is missing or the shapes are
        not supported)
    """
    pieces = bounds.difference(known)
    if not pieces and not isinstance(bounds, Box):
        logger.warning(f"Cannot compute missing tiles of {bounds} against {known}")

    if tile_size is None:
        return pieces

    tiles: List[Bounds] = []
    for piece in pieces:
        if isinstance(piece, Box):
            tiles.extend(split_box(piece, tile_size))
        else:
            tiles.append(piece)
    return tiles
