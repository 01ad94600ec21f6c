"""
OSM data models

Data classes for nodes, ways, relations and request results, plus the
interim records produced by the response parser.

Elements compare and hash by id only: two elements with the same id are
the same element regardless of their other fields.
"""

from dataclasses import dataclass, field
from typing import Dict, List, Optional, Tuple

from ..geometry import Bounds, Point


class _Element:
    """Identity semantics shared by all elements"""
    id: str

    def __eq__(self, other):
        if not isinstance(other, type(self)):
            return NotImplemented
        return self.id == other.id

    def __hash__(self):
        return hash(self.id)


@dataclass(eq=False)
class Node(_Element):
    """Represents an OSM node (point)"""
    id: str
    location: Point

    @property
    def lat(self) -> float:
        return self.location.lat

    @property
    def lon(self) -> float:
        return self.location.lon


@dataclass(eq=False)
class Way(_Element):
    """Represents an OSM way; nodes are in path order"""
    id: str
    nodes: List[Node] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> Optional[str]:
        return self.tags.get(key)

    def get_coordinates(self) -> List[List[float]]:
        """Get coordinates as [lon, lat] list"""
        return [[n.lon, n.lat] for n in self.nodes]


@dataclass(eq=False)
class Relation(_Element):
    """Represents an OSM relation with its member ways and nodes"""
    id: str
    ways: List[Way] = field(default_factory=list)
    nodes: List[Node] = field(default_factory=list)
    tags: Dict[str, str] = field(default_factory=dict)

    def tag(self, key: str) -> Optional[str]:
        return self.tags.get(key)


@dataclass
class RawNode:
    """Node record as read from the response"""
    id: str
    lat: float
    lon: float

    def elevate(self) -> Node:
        return Node(id=self.id, location=Point(lat=self.lat, lon=self.lon))


@dataclass
class RawWay:
    """Way record with unresolved node ids"""
    id: str
    tags: Dict[str, str] = field(default_factory=dict)
    node_refs: List[str] = field(default_factory=list)

    def elevate(self, nodes: List[Node]) -> Way:
        return Way(id=self.id, nodes=nodes, tags=self.tags)


@dataclass
class RawRelation:
    """Relation record with unresolved (way id, role) and node id members"""
    id: str
    tags: Dict[str, str] = field(default_factory=dict)
    way_refs: List[Tuple[str, str]] = field(default_factory=list)
    node_refs: List[str] = field(default_factory=list)

    def elevate(self, ways: List[Way], nodes: List[Node]) -> Relation:
        return Relation(id=self.id, ways=ways, nodes=nodes, tags=self.tags)


@dataclass
class OverpassResult:
    """
    Parsed response of one or more requests

    Only top-level elements are listed: ways owned by a relation are
    reachable through that relation, nodes owned by a way or relation
    through their owner. lone_nodes holds the remaining nodes.
    """
    bounds: Bounds
    relations: List[Relation] = field(default_factory=list)
    ways: List[Way] = field(default_factory=list)
    lone_nodes: List[Node] = field(default_factory=list)

    def expanded(self, other: "OverpassResult", new_bounds: Optional[Bounds] = None) -> "OverpassResult":
        """
        Expand result with another result

        Elements with the same id are merged, self takes precedence on
        tags and node order.

        Args:
            other: result to merge in
            new_bounds: bounds of the merged result, other.bounds if omitted

        Returns:
            New merged result
        """
        from .merge import merge_results

        return merge_results(self, other, new_bounds)

    def __add__(self, other: "OverpassResult") -> "OverpassResult":
        if not isinstance(other, OverpassResult):
            return NotImplemented
        return self.expanded(other)

    def __str__(self) -> str:
        return (
            f"result({self.bounds}, relations {len(self.relations)}, "
            f"ways {len(self.ways)}, loneNodes {len(self.lone_nodes)})"
        )
