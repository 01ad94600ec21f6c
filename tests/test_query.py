"""
Unit tests for the Overpass XML query builder.
"""

import xml.etree.ElementTree as ET
import pytest

from overpass_tiles.geometry import Box, Area, Polygon, Point, Unconstrained
from overpass_tiles.osm.query import (
    build_bounds_query, has_kv, id_query, print_statement, query, recurse, union, Statement
)


class TestBuildBoundsQuery:
    """Test suite for build_bounds_query."""

    def test_box_query_structure(self):
        xml = build_bounds_query(Box(s=51.5, w=-0.13, n=51.52, e=-0.11), timeout=25, element_limit=1000)
        root = ET.fromstring(xml)

        assert root.tag == "osm-script"
        assert root.attrib == {"timeout": "25", "element-limit": "1000"}

        first_union, recurse_union, print_element = list(root)
        assert first_union.tag == "union"
        assert [q.get("type") for q in first_union] == ["node", "way", "rel"]
        bbox = first_union[0][0]
        assert bbox.tag == "bbox-query"
        assert bbox.attrib == {"s": "51.5", "w": "-0.13", "n": "51.52", "e": "-0.11"}

        assert [child.tag for child in recurse_union] == ["item", "recurse"]
        assert recurse_union[1].get("type") == "down"
        assert print_element.tag == "print"
        assert print_element.get("mode") == "body"

    def test_area_query(self):
        xml = build_bounds_query(Area(center=Point(lat=1.5, lon=2.5), radius=100.0), element_types=["node"])
        around = ET.fromstring(xml)[0][0][0]

        assert around.tag == "around"
        assert around.attrib == {"lat": "1.5", "lon": "2.5", "radius": "100.0"}

    def test_polygon_query(self):
        polygon = Polygon([Point(lat=1.0, lon=2.0), Point(lat=3.0, lon=4.0), Point(lat=5.0, lon=6.0)])
        xml = build_bounds_query(polygon, element_types=["way"])
        polygon_query = ET.fromstring(xml)[0][0][0]

        assert polygon_query.tag == "polygon-query"
        assert polygon_query.get("bounds") == "1.0 2.0 3.0 4.0 5.0 6.0"

    def test_unconstrained_adds_no_spatial_filter(self):
        xml = build_bounds_query(Unconstrained(), element_types=["node"], filters=[has_kv("amenity")])
        node_query = ET.fromstring(xml)[0][0]

        assert [child.tag for child in node_query] == ["has-kv"]

    def test_filters_added_to_every_query(self):
        xml = build_bounds_query(
            Box(s=0.0, w=0.0, n=1.0, e=1.0),
            element_types=["way", "relation"],
            filters=[has_kv("building", "yes")],
        )
        for element_query in ET.fromstring(xml)[0]:
            assert [child.tag for child in element_query] == ["bbox-query", "has-kv"]
            assert element_query[1].attrib == {"k": "building", "v": "yes"}


class TestStatements:
    """Individual statement helpers."""

    def test_has_kv_variants(self):
        assert has_kv("name").properties == {"k": "name"}
        assert has_kv("highway", regex="^(primary|secondary)$").properties == {
            "k": "highway", "regv": "^(primary|secondary)$"
        }
        assert has_kv("access", "private", negate=True).properties == {
            "k": "access", "v": "private", "modv": "not"
        }

    def test_unknown_query_type(self):
        with pytest.raises(ValueError):
            query("changeset")

    def test_nameless_statement_inlines_children(self):
        statement = union([Statement("", contents=[query("node", into="a")])], into="b")
        root = ET.fromstring(statement.to_xml())

        assert root.attrib == {"into": "b"}
        assert [child.tag for child in root] == ["query"]
        assert root[0].attrib == {"type": "node", "into": "a"}

    def test_id_query(self):
        root = ET.fromstring(union([id_query("relation", "62422"), recurse("down")]).to_xml())

        assert [child.tag for child in root] == ["id-query", "recurse"]
        assert root[0].attrib == {"type": "rel", "ref": "62422"}

    def test_id_query_unknown_type(self):
        with pytest.raises(ValueError):
            id_query("changeset", "1")

    def test_recurse_types(self):
        for direction in ("up", "up-rel", "down", "down-rel"):
            assert recurse(direction).properties == {"type": direction}
        with pytest.raises(ValueError):
            recurse("sideways")

    def test_print_modes(self):
        assert print_statement("ids_only", "a").properties == {"mode": "ids_only", "from": "a"}
        assert print_statement("skeleton").properties == {"mode": "skeleton", "from": "_"}
        with pytest.raises(ValueError):
            print_statement("geom")
