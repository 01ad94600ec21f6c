"""
Unit tests for OSM element models.
"""

from overpass_tiles.geometry import Box, Point
from overpass_tiles.osm.models import Node, Way, Relation, OverpassResult


class TestIdentity:
    """Elements compare and hash by id only."""

    def test_nodes_equal_by_id(self):
        a = Node(id="1", location=Point(lat=0, lon=0))
        b = Node(id="1", location=Point(lat=5, lon=5))
        assert a == b
        assert len({a, b}) == 1

    def test_ways_equal_by_id(self):
        a = Way(id="1", tags={"name": "A"})
        b = Way(id="1", tags={"name": "B"})
        assert a == b
        assert hash(a) == hash(b)
        assert a != Way(id="2", tags={"name": "A"})

    def test_kinds_never_equal(self):
        assert Way(id="1") != Relation(id="1")
        assert Node(id="1", location=Point(lat=0, lon=0)) != Way(id="1")

    def test_tag_accessor(self):
        way = Way(id="1", tags={"highway": "primary"})
        relation = Relation(id="2", tags={"type": "route"})
        assert way.tag("highway") == "primary"
        assert way.tag("name") is None
        assert relation.tag("type") == "route"

    def test_way_coordinates(self):
        way = Way(id="1", nodes=[
            Node(id="a", location=Point(lat=1, lon=2)),
            Node(id="b", location=Point(lat=3, lon=4)),
        ])
        assert way.get_coordinates() == [[2, 1], [4, 3]]


class TestResult:
    """OverpassResult helpers."""

    def test_str(self):
        result = OverpassResult(bounds=Box(s=0, w=0, n=1, e=1), ways=[Way(id="1")])
        assert str(result) == "result(box (0, 0, 1, 1), relations 0, ways 1, loneNodes 0)"
