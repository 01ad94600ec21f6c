"""
Configuration settings for Overpass Tiles
"""

from dataclasses import dataclass, field
from typing import List, Optional
import os


@dataclass
class APIConfig:
    """Overpass endpoint and request configuration"""
    # Options: overpass-api.de (main), lz4.overpass-api.de, z.overpass-api.de
    overpass_url: str = field(default_factory=lambda: os.environ.get(
        "OVERPASS_URL", "https://overpass-api.de/api/interpreter"
    ))

    # Server-side limits written into <osm-script>
    query_timeout: int = 10  # seconds
    element_limit: int = 50000

    # HTTP settings
    request_timeout: int = 30
    min_request_interval: float = 1.0  # seconds between consecutive requests

    user_agent: str = field(default_factory=lambda: os.environ.get(
        "OVERPASS_USER_AGENT", "OverpassTiles/0.1"
    ))


@dataclass
class TilingConfig:
    """Region splitting configuration"""
    # Largest tile extent (degrees) sent in a single request
    max_tile_lat: float = 0.05
    max_tile_lon: float = 0.05

    # Element kinds requested for every tile
    element_types: List[str] = field(default_factory=lambda: ["node", "way", "relation"])


@dataclass
class OverpassConfig:
    """Top-level configuration"""
    api: APIConfig = field(default_factory=APIConfig)
    tiling: TilingConfig = field(default_factory=TilingConfig)

    # Directory for cached raw responses (None disables caching)
    cache_dir: Optional[str] = None


# Global config instance
config = OverpassConfig()


def get_config() -> OverpassConfig:
    """Get global configuration"""
    return config


def validate_config(config: OverpassConfig) -> None:
    """
    Validate that all required configuration values are set.
    Raises ValueError if any required value is missing or invalid.
    """
    errors = []

    if config.api is None:
        errors.append("api configuration is required but not set")
    else:
        if not config.api.overpass_url:
            errors.append("api.overpass_url is required but not set")
        if config.api.query_timeout <= 0:
            errors.append(f"api.query_timeout must be positive, got {config.api.query_timeout}")
        if config.api.element_limit <= 0:
            errors.append(f"api.element_limit must be positive, got {config.api.element_limit}")
        if config.api.min_request_interval < 0:
            errors.append(
                f"api.min_request_interval must not be negative, got {config.api.min_request_interval}"
            )

    if config.tiling is None:
        errors.append("tiling configuration is required but not set")
    else:
        if config.tiling.max_tile_lat <= 0 or config.tiling.max_tile_lon <= 0:
            errors.append(
                f"tiling tile size must be positive, got "
                f"({config.tiling.max_tile_lat}, {config.tiling.max_tile_lon})"
            )
        unknown = [t for t in config.tiling.element_types if t not in ("node", "way", "relation")]
        if unknown:
            errors.append(f"tiling.element_types has unknown entries: {unknown}")
        elif not config.tiling.element_types:
            errors.append("tiling.element_types must not be empty")

    if errors:
        error_msg = "Configuration validation failed:\n" + "\n".join(f"  - {e}" for e in errors)
        raise ValueError(error_msg)
