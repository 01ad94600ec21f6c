"""
Element graph assembler

Turns the flat list of raw records of one response into an
OverpassResult: nodes are attached to the ways that reference them, ways
and nodes to the relations that reference them, and whatever is left
unowned stays at the top level.
"""

from typing import Dict, Iterable, List, Set

from loguru import logger

from .models import Node, Way, Relation, RawNode, RawWay, RawRelation, OverpassResult
from .parser import OverpassResponseParser, RawRecord
from ..geometry import Bounds


class GraphAssembler:
    """Builds the element graph of a single response"""

    @staticmethod
    def assemble(records: Iterable[RawRecord], bounds: Bounds) -> OverpassResult:
        """
        Resolve raw records into an OverpassResult

        Duplicate ids of the same kind overwrite earlier records.
        References to ids missing from the records are dropped.

        Args:
            records: raw records of one response, in any order
            bounds: bounds of the request the records answer

        Returns:
            OverpassResult with relations, top-level ways and lone nodes
        """
        node_map: Dict[str, Node] = {}
        raw_ways: Dict[str, RawWay] = {}
        raw_relations: Dict[str, RawRelation] = {}

        for record in records:
            if isinstance(record, RawNode):
                node_map[record.id] = record.elevate()
            elif isinstance(record, RawWay):
                raw_ways[record.id] = record
            elif isinstance(record, RawRelation):
                raw_relations[record.id] = record

        way_map: Dict[str, Way] = {}
        referenced_node_ids: Set[str] = set()
        referenced_way_ids: Set[str] = set()

        for raw_way in raw_ways.values():
            nodes = [node_map[ref] for ref in raw_way.node_refs if ref in node_map]
            way_map[raw_way.id] = raw_way.elevate(nodes)
            referenced_node_ids.update(node.id for node in nodes)

        relations: List[Relation] = []
        for raw_relation in raw_relations.values():
            ways = [way_map[ref] for ref, _role in raw_relation.way_refs if ref in way_map]
            nodes = [node_map[ref] for ref in raw_relation.node_refs if ref in node_map]
            relations.append(raw_relation.elevate(ways, nodes))
            referenced_way_ids.update(way.id for way in ways)
            referenced_node_ids.update(node.id for node in nodes)

        # leave only lone ways and nodes at the top level
        for way_id in referenced_way_ids:
            way_map.pop(way_id, None)
        for node_id in referenced_node_ids:
            node_map.pop(node_id, None)

        result = OverpassResult(
            bounds=bounds,
            relations=relations,
            ways=list(way_map.values()),
            lone_nodes=list(node_map.values()),
        )
        logger.debug(f"Assembled {result}")
        return result

    @staticmethod
    def assemble_response(data: bytes, bounds: Bounds) -> OverpassResult:
        """Parse a raw Overpass XML response and assemble it"""
        return GraphAssembler.assemble(OverpassResponseParser.parse_records(data), bounds)
