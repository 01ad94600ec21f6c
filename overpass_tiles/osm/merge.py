"""
Result merging

Combines per-tile results into one. Elements are matched by id; when both
sides hold the same element the left operand wins on tags and node order,
so merging is not commutative. Results from several tiles must be folded
in tile order to get a deterministic outcome.
"""

from typing import Callable, Iterable, List, Optional, Tuple, TypeVar

from loguru import logger

from .models import Node, Way, Relation, OverpassResult
from ..geometry import Bounds

T = TypeVar("T", Way, Relation)


def merge_ways(a: Way, b: Way) -> Way:
    """
    Merge two copies of the same way

    Keeps a's nodes in order and appends b's nodes not already in a.
    Tags come from a. If the ids differ a is returned unchanged.
    """
    if a.id != b.id:
        return a

    known = {node.id for node in a.nodes}
    return Way(
        id=a.id,
        nodes=a.nodes + [node for node in b.nodes if node.id not in known],
        tags=a.tags,
    )


def merge_relations(a: Relation, b: Relation) -> Relation:
    """
    Merge two copies of the same relation

    Member ways are merged by id, member nodes are unioned by id, tags come
    from a. If the ids differ a is returned unchanged.
    """
    if a.id != b.id:
        return a

    return Relation(
        id=a.id,
        ways=_merge_by_id(a.ways, b.ways, merge_ways),
        nodes=_union_nodes(a.nodes, b.nodes),
        tags=a.tags,
    )


def merge_results(lhs: OverpassResult, rhs: OverpassResult, new_bounds: Optional[Bounds] = None) -> OverpassResult:
    """
    Merge two results

    Args:
        lhs: left result, takes precedence for shared elements
        rhs: right result
        new_bounds: bounds of the merged result, rhs.bounds if omitted

    An element that is top-level in one operand may be owned in the
    other, e.g. a way lone in one tile and a relation member in the next.
    Such ways move under their relations and such nodes stop being lone.

    Returns:
        New result, neither input is modified
    """
    bounds = rhs.bounds if new_bounds is None else new_bounds
    relations, ways, lone_nodes = _drop_owned(
        _merge_by_id(lhs.relations, rhs.relations, merge_relations),
        _merge_by_id(lhs.ways, rhs.ways, merge_ways),
        _union_nodes(lhs.lone_nodes, rhs.lone_nodes),
    )
    return OverpassResult(bounds=bounds, relations=relations, ways=ways, lone_nodes=lone_nodes)


def fold_results(results: Iterable[OverpassResult], bounds: Optional[Bounds] = None) -> Optional[OverpassResult]:
    """
    Merge results left to right

    Args:
        results: results in tile order
        bounds: bounds of the final result, last result's bounds if omitted

    Returns:
        Merged result, or None for an empty input
    """
    merged: Optional[OverpassResult] = None
    for result in results:
        merged = result if merged is None else merge_results(merged, result)

    if merged is None:
        return None

    if bounds is not None:
        merged = OverpassResult(
            bounds=bounds,
            relations=merged.relations,
            ways=merged.ways,
            lone_nodes=merged.lone_nodes,
        )

    logger.debug(f"Folded into {merged}")
    return merged


def _merge_by_id(lhs: List[T], rhs: List[T], merge: Callable[[T, T], T]) -> List[T]:
    rhs_by_id = {}
    for element in rhs:
        rhs_by_id.setdefault(element.id, element)

    merged = [merge(element, rhs_by_id[element.id]) if element.id in rhs_by_id else element for element in lhs]

    present = {element.id for element in merged}
    for element in rhs:
        if element.id not in present:
            merged.append(element)
            present.add(element.id)
    return merged


def _union_nodes(lhs: List[Node], rhs: List[Node]) -> List[Node]:
    seen = set()
    nodes = []
    for node in lhs + rhs:
        if node.id not in seen:
            seen.add(node.id)
            nodes.append(node)
    return nodes


def _drop_owned(
    relations: List[Relation], ways: List[Way], lone_nodes: List[Node]
) -> Tuple[List[Relation], List[Way], List[Node]]:
    top_level = {way.id: way for way in ways}
    owned_way_ids = {way.id for relation in relations for way in relation.ways}

    # the member copy absorbs nodes only the top-level copy had
    if owned_way_ids & top_level.keys():
        relations = [
            Relation(
                id=relation.id,
                ways=[merge_ways(way, top_level[way.id]) if way.id in top_level else way for way in relation.ways],
                nodes=relation.nodes,
                tags=relation.tags,
            )
            for relation in relations
        ]
        ways = [way for way in ways if way.id not in owned_way_ids]

    owned_node_ids = {node.id for relation in relations for node in relation.nodes}
    for way in ways + [way for relation in relations for way in relation.ways]:
        owned_node_ids.update(node.id for node in way.nodes)

    return relations, ways, [node for node in lone_nodes if node.id not in owned_node_ids]
