"""
OpenStreetMap element handling

Modular Overpass client with separate components for:
- Models: Node, Way, Relation, OverpassResult
- Parser: Overpass XML response parsing
- Assembler: flat records to element graph
- Merge: combining per-tile results
- Query: Overpass XML query building
- API client: Overpass API communication
- Cache: Caching functionality
- Collector: Main orchestrator class
"""

from .models import Node, Way, Relation, OverpassResult
from .assembler import GraphAssembler
from .merge import merge_ways, merge_relations, merge_results, fold_results
from .collector import OverpassCollector

__all__ = [
    "Node",
    "Way",
    "Relation",
    "OverpassResult",
    "GraphAssembler",
    "merge_ways",
    "merge_relations",
    "merge_results",
    "fold_results",
    "OverpassCollector",
]
