"""
Overpass XML query builder

A query is a tree of statements serialised to an <osm-script> document.
A statement with an empty name contributes its children directly to its
parent.
"""

import xml.etree.ElementTree as ET
from dataclasses import dataclass, field
from typing import Dict, List, Optional, Sequence

from ..geometry import Bounds, Box, Area, Polygon

QUERY_TYPES = {
    "node": "node",
    "way": "way",
    "relation": "rel",
    "area": "area",
}

RECURSE_TYPES = ("up", "up-rel", "down", "down-rel")

PRINT_MODES = ("body", "skeleton", "ids_only", "meta")


@dataclass
class Statement:
    """Single statement of an Overpass XML query"""
    name: str
    properties: Dict[str, str] = field(default_factory=dict)
    contents: List["Statement"] = field(default_factory=list)

    def append_to(self, parent: ET.Element):
        if not self.name:
            for child in self.contents:
                child.append_to(parent)
            return

        element = ET.SubElement(parent, self.name, self.properties)
        for child in self.contents:
            child.append_to(element)

    def to_xml(self) -> str:
        root = ET.Element(self.name, self.properties)
        for child in self.contents:
            child.append_to(root)
        return ET.tostring(root, encoding="unicode")


def script(contents: Sequence[Statement], timeout: int = 10, element_limit: int = 50000) -> Statement:
    return Statement("osm-script", {"timeout": str(timeout), "element-limit": str(element_limit)}, list(contents))


def union(contents: Sequence[Statement], into: Optional[str] = None) -> Statement:
    return Statement("union", {"into": into} if into else {}, list(contents))


def query(element_type: str, contents: Sequence[Statement] = (), into: str = "_") -> Statement:
    if element_type not in QUERY_TYPES:
        raise ValueError(f"Unknown query type: {element_type}")
    return Statement("query", {"type": QUERY_TYPES[element_type], "into": into}, list(contents))


def has_kv(key: str, value: Optional[str] = None, regex: Optional[str] = None, negate: bool = False) -> Statement:
    """Tag filter; key only, exact value or regex value"""
    properties = {"k": key}
    if value is not None:
        properties["v"] = value
    elif regex is not None:
        properties["regv"] = regex
    if negate and len(properties) > 1:
        properties["modv"] = "not"
    return Statement("has-kv", properties)


def bounding(bounds: Bounds) -> Statement:
    """Spatial filter for a boundary; unconstrained bounds filter nothing"""
    if isinstance(bounds, Box):
        return Statement("bbox-query", {
            "s": repr(bounds.s),
            "w": repr(bounds.w),
            "n": repr(bounds.n),
            "e": repr(bounds.e),
        })
    if isinstance(bounds, Area):
        return Statement("around", {
            "lat": repr(bounds.center.lat),
            "lon": repr(bounds.center.lon),
            "radius": repr(bounds.radius),
        })
    if isinstance(bounds, Polygon):
        return Statement("polygon-query", {
            "bounds": " ".join(f"{p.lat!r} {p.lon!r}" for p in bounds.points),
        })
    return Statement("")


def recurse(direction: str = "down") -> Statement:
    if direction not in RECURSE_TYPES:
        raise ValueError(f"Unknown recurse type: {direction}")
    return Statement("recurse", {"type": direction})


def id_query(element_type: str, ref: str, contents: Sequence[Statement] = ()) -> Statement:
    """Select a single element by id"""
    if element_type not in QUERY_TYPES:
        raise ValueError(f"Unknown query type: {element_type}")
    return Statement("id-query", {"type": QUERY_TYPES[element_type], "ref": str(ref)}, list(contents))


def item(set_name: str = "_") -> Statement:
    return Statement("item", {"set": set_name} if set_name != "_" else {})


def print_statement(mode: str = "body", from_set: str = "_") -> Statement:
    if mode not in PRINT_MODES:
        raise ValueError(f"Unknown print mode: {mode}")
    return Statement("print", {"mode": mode, "from": from_set})


def build_bounds_query(
    bounds: Bounds,
    element_types: Sequence[str] = ("node", "way", "relation"),
    timeout: int = 10,
    element_limit: int = 50000,
    filters: Sequence[Statement] = (),
) -> str:
    """
    Build a query for every element of the given types within bounds

    Ways and relations are recursed down so the response also lists the
    nodes and ways they reference.

    Args:
        bounds: request region
        element_types: any of "node", "way", "relation"
        timeout: server-side timeout in seconds
        element_limit: server-side element limit
        filters: extra statements (e.g. has_kv) added to every query

    Returns:
        Serialised <osm-script> document
    """
    queries = [
        query(element_type, [bounding(bounds), *filters])
        for element_type in element_types
    ]
    return script(
        [
            union(queries),
            union([item(), recurse("down")]),
            print_statement("body"),
        ],
        timeout=timeout,
        element_limit=element_limit,
    ).to_xml()
