"""
Overpass response caching

Stores raw Overpass responses on disk, one file per tile boundary and
element selection.
"""

import os
import hashlib
from typing import Optional, Sequence

from loguru import logger

from ..geometry import Bounds


class OverpassCache:
    """Handles caching of raw Overpass responses to disk"""

    def __init__(self, cache_dir: Optional[str] = None):
        self.cache_dir = cache_dir

    def get_cache_path(self, bounds: Bounds, element_types: Sequence[str] = ()) -> Optional[str]:
        """Get cache file path for a tile query"""
        if not self.cache_dir:
            return None
        cache_key = f"{bounds}|{','.join(element_types)}"
        cache_hash = hashlib.md5(cache_key.encode()).hexdigest()[:8]
        return os.path.join(self.cache_dir, f"overpass_{cache_hash}.xml")

    def load(self, cache_path: str) -> Optional[bytes]:
        """Load response from cache if exists"""
        if os.path.exists(cache_path):
            try:
                with open(cache_path, "rb") as f:
                    data = f.read()
                logger.info(f"Loaded Overpass response from cache: {cache_path}")
                return data
            except OSError as e:
                logger.warning(f"Failed to load cache {cache_path}: {e}")
        return None

    def save(self, cache_path: str, data: bytes):
        """Save response to cache"""
        if not self.cache_dir:
            return
        try:
            os.makedirs(os.path.dirname(cache_path), exist_ok=True)
            with open(cache_path, "wb") as f:
                f.write(data)
            logger.info(f"Saved Overpass response to cache: {cache_path}")
        except OSError as e:
            logger.warning(f"Failed to save cache {cache_path}: {e}")
