"""
Main Overpass Collector

Orchestrates tiling, fetching, graph assembly and merging
"""

from typing import List, Optional, Sequence

from loguru import logger

from .api_client import OverpassAPIClient
from .assembler import GraphAssembler
from .cache import OverpassCache
from .merge import fold_results
from .models import OverpassResult
from .parser import OverpassResponseParser
from .query import Statement, build_bounds_query
from ..config import OverpassConfig, get_config
from ..geometry import Bounds, Box, Size, split_box, missing_tiles


class OverpassCollector:
    """
    Collect OSM elements for a region from an Overpass endpoint

    Regions larger than the configured tile size are split into tiles,
    each tile is requested separately and the per-tile results are merged
    in tile order.

    Supports caching raw responses to disk for debugging and reuse.
    """

    def __init__(
        self,
        cache_dir: Optional[str] = None,
        api_client: Optional[OverpassAPIClient] = None,
        config: Optional[OverpassConfig] = None
    ):
        self.config = config or get_config()
        self.api_client = api_client or OverpassAPIClient(self.config.api)
        self.cache = OverpassCache(cache_dir if cache_dir is not None else self.config.cache_dir)
        self.tile_size = Size(lat=self.config.tiling.max_tile_lat, lon=self.config.tiling.max_tile_lon)
        self.element_types = list(self.config.tiling.element_types)

    def plan_tiles(self, bounds: Bounds, exclude: Optional[Bounds] = None) -> List[Bounds]:
        """
        Tiles to request for bounds

        Args:
            bounds: requested region
            exclude: region already fetched, only the remainder is tiled

        Returns:
            List of tiles in request order
        """
        if exclude is not None:
            return missing_tiles(bounds, exclude, self.tile_size)
        if isinstance(bounds, Box):
            return split_box(bounds, self.tile_size)
        return [bounds]

    def fetch_tile(self, tile: Bounds, filters: Sequence[Statement] = ()) -> OverpassResult:
        """
        Fetch and assemble a single tile

        A response is cached only once it parses and carries no remark,
        so failed and partial answers are requested again next time.

        Raises:
            TransportError: if the request fails
            ResponseError: if the response is not valid XML
        """
        cache_path = self.cache.get_cache_path(tile, self.element_types) if not filters else None
        data = self.cache.load(cache_path) if cache_path else None
        if data is not None:
            return GraphAssembler.assemble_response(data, tile)

        query = build_bounds_query(
            tile,
            self.element_types,
            timeout=self.config.api.query_timeout,
            element_limit=self.config.api.element_limit,
            filters=filters,
        )
        data = self.api_client.query(query)
        records, remarks = OverpassResponseParser.parse_response(data)

        if cache_path:
            if remarks:
                logger.warning(f"Not caching {tile}, response may be incomplete: {remarks[0]}")
            else:
                self.cache.save(cache_path, data)

        return GraphAssembler.assemble(records, tile)

    def fetch(
        self,
        bounds: Bounds,
        exclude: Optional[Bounds] = None,
        filters: Sequence[Statement] = ()
    ) -> OverpassResult:
        """
        Fetch every element within bounds

        Args:
            bounds: requested region
            exclude: region already fetched, skipped when tiling
            filters: extra query statements applied to every tile

        Returns:
            Merged result carrying bounds
        """
        tiles = self.plan_tiles(bounds, exclude)
        logger.info(f"Fetching {bounds} in {len(tiles)} tiles")

        results = []
        for index, tile in enumerate(tiles, start=1):
            logger.debug(f"Tile {index}/{len(tiles)}: {tile}")
            try:
                results.append(self.fetch_tile(tile, filters))
            except Exception as e:
                logger.error(f"Tile {tile} failed: {e}")
                raise

        merged = fold_results(results, bounds)
        if merged is None:
            merged = OverpassResult(bounds=bounds)

        logger.info(f"Fetched {len(merged.relations)} relations, {len(merged.ways)} ways, "
                    f"{len(merged.lone_nodes)} lone nodes")
        return merged
