"""
Overpass response parser

Parses Overpass XML responses into raw node, way and relation records.

Parsing is best-effort: an element missing a required attribute (id,
coordinates, member ref) is skipped on its own, only an unreadable
document raises.
"""

import xml.etree.ElementTree as ET
from typing import Dict, List, Optional, Tuple, Union

from loguru import logger

from .models import RawNode, RawWay, RawRelation
from ..exceptions import ResponseError

RawRecord = Union[RawNode, RawWay, RawRelation]


class OverpassResponseParser:
    """Parses Overpass API responses"""

    @staticmethod
    def parse_records(data: bytes) -> List[RawRecord]:
        """
        Parse Overpass XML response into raw records

        Args:
            data: response body

        Returns:
            List of RawNode, RawWay and RawRelation in document order

        Raises:
            ResponseError: if the body is not well-formed XML
        """
        records, _remarks = OverpassResponseParser.parse_response(data)
        return records

    @staticmethod
    def parse_response(data: bytes) -> Tuple[List[RawRecord], List[str]]:
        """
        Parse Overpass XML response into raw records and remarks

        Overpass reports runtime errors (timeouts, memory) as <remark>
        elements in an otherwise successful response. The records next to
        a remark may be incomplete.

        Returns:
            Tuple of (records in document order, remark texts)

        Raises:
            ResponseError: if the body is not well-formed XML
        """
        try:
            root = ET.fromstring(data)
        except ET.ParseError as e:
            raise ResponseError("Overpass response is not valid XML", {"error": str(e)}) from e

        records: List[RawRecord] = []
        remarks: List[str] = []
        skipped = 0

        for child in root:
            record: Optional[RawRecord] = None
            if child.tag == "node":
                record = OverpassResponseParser._parse_node(child)
            elif child.tag == "way":
                record = OverpassResponseParser._parse_way(child)
            elif child.tag == "relation":
                record = OverpassResponseParser._parse_relation(child)
            elif child.tag == "remark":
                remark = (child.text or "").strip()
                logger.warning(f"Overpass remark: {remark}")
                remarks.append(remark)
                continue
            else:
                continue

            if record is None:
                skipped += 1
            else:
                records.append(record)

        if skipped:
            logger.warning(f"Skipped {skipped} malformed elements in Overpass response")

        return records, remarks

    @staticmethod
    def _parse_node(element: ET.Element) -> Optional[RawNode]:
        node_id = element.get("id")
        if node_id is None:
            return None
        try:
            lat = float(element.get("lat"))
            lon = float(element.get("lon"))
        except (TypeError, ValueError):
            return None
        return RawNode(id=node_id, lat=lat, lon=lon)

    @staticmethod
    def _parse_way(element: ET.Element) -> Optional[RawWay]:
        way_id = element.get("id")
        if way_id is None:
            return None

        tags: Dict[str, str] = {}
        node_refs: List[str] = []
        for way_child in element:
            if way_child.tag == "tag":
                OverpassResponseParser._read_tag(way_child, tags)
            elif way_child.tag == "nd":
                ref = way_child.get("ref")
                if ref is not None:
                    node_refs.append(ref)

        return RawWay(id=way_id, tags=tags, node_refs=node_refs)

    @staticmethod
    def _parse_relation(element: ET.Element) -> Optional[RawRelation]:
        relation_id = element.get("id")
        if relation_id is None:
            return None

        tags: Dict[str, str] = {}
        way_refs = []
        node_refs: List[str] = []
        for rel_child in element:
            if rel_child.tag == "tag":
                OverpassResponseParser._read_tag(rel_child, tags)
            elif rel_child.tag == "member":
                member_type = rel_child.get("type")
                ref = rel_child.get("ref")
                if ref is None:
                    continue
                if member_type == "way":
                    role = rel_child.get("role")
                    if role is not None:
                        way_refs.append((ref, role))
                elif member_type == "node":
                    node_refs.append(ref)

        return RawRelation(id=relation_id, tags=tags, way_refs=way_refs, node_refs=node_refs)

    @staticmethod
    def _read_tag(element: ET.Element, tags: Dict[str, str]):
        k = element.get("k")
        v = element.get("v")
        if k is not None and v is not None:
            tags[k] = v
