"""
Pydantic models for exported results

JSON structure written by the command line interface
"""

from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from .geometry import Bounds
from .osm import Node, Way, Relation, OverpassResult


class NodeExport(BaseModel):
    id: str
    lat: float
    lon: float


class WayExport(BaseModel):
    id: str
    tags: Dict[str, str] = Field(default_factory=dict)
    nodes: List[NodeExport] = Field(default_factory=list)


class RelationExport(BaseModel):
    id: str
    tags: Dict[str, str] = Field(default_factory=dict)
    ways: List[WayExport] = Field(default_factory=list)
    nodes: List[NodeExport] = Field(default_factory=list)


class ResultSummary(BaseModel):
    bounds: str
    relations: int
    ways: int
    lone_nodes: int
    tiles: Optional[int] = None


class ResultExport(BaseModel):
    summary: ResultSummary
    relations: List[RelationExport] = Field(default_factory=list)
    ways: List[WayExport] = Field(default_factory=list)
    lone_nodes: List[NodeExport] = Field(default_factory=list)


class TilePlan(BaseModel):
    bounds: str
    tiles: List[str]


def export_node(node: Node) -> NodeExport:
    return NodeExport(id=node.id, lat=node.lat, lon=node.lon)


def export_way(way: Way) -> WayExport:
    return WayExport(id=way.id, tags=dict(way.tags), nodes=[export_node(n) for n in way.nodes])


def export_relation(relation: Relation) -> RelationExport:
    return RelationExport(
        id=relation.id,
        tags=dict(relation.tags),
        ways=[export_way(w) for w in relation.ways],
        nodes=[export_node(n) for n in relation.nodes],
    )


def export_result(result: OverpassResult, tiles: Optional[int] = None) -> ResultExport:
    """Convert a result into its JSON export model"""
    return ResultExport(
        summary=ResultSummary(
            bounds=str(result.bounds),
            relations=len(result.relations),
            ways=len(result.ways),
            lone_nodes=len(result.lone_nodes),
            tiles=tiles,
        ),
        relations=[export_relation(r) for r in result.relations],
        ways=[export_way(w) for w in result.ways],
        lone_nodes=[export_node(n) for n in result.lone_nodes],
    )


def export_tiles(bounds: Bounds, tiles: List[Bounds]) -> TilePlan:
    return TilePlan(bounds=str(bounds), tiles=[str(t) for t in tiles])
