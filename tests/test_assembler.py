"""
Unit tests for the element graph assembler.
"""

from overpass_tiles.geometry import Box, Point
from overpass_tiles.osm.assembler import GraphAssembler
from overpass_tiles.osm.models import Node, RawNode, RawWay, RawRelation

BOUNDS = Box(s=0, w=0, n=10, e=10)


class TestGraphAssembler:
    """Test suite for GraphAssembler."""

    def test_node_attached_to_way(self):
        records = [
            RawNode(id="n1", lat=1, lon=1),
            RawWay(id="w1", node_refs=["n1"]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [w.id for w in result.ways] == ["w1"]
        assert result.ways[0].nodes == [Node(id="n1", location=Point(lat=1, lon=1))]
        assert result.ways[0].nodes[0].location == Point(lat=1, lon=1)
        assert result.lone_nodes == []
        assert result.bounds == BOUNDS

    def test_unreferenced_node_is_lone(self):
        result = GraphAssembler.assemble([RawNode(id="n1", lat=1, lon=1)], BOUNDS)

        assert [n.id for n in result.lone_nodes] == ["n1"]
        assert result.ways == []
        assert result.relations == []

    def test_way_node_order_preserved(self):
        records = [
            RawNode(id="n3", lat=3, lon=3),
            RawNode(id="n1", lat=1, lon=1),
            RawNode(id="n2", lat=2, lon=2),
            RawWay(id="w1", node_refs=["n1", "n2", "n3", "n1"]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [n.id for n in result.ways[0].nodes] == ["n1", "n2", "n3", "n1"]

    def test_missing_references_are_dropped(self):
        records = [
            RawNode(id="n1", lat=1, lon=1),
            RawWay(id="w1", node_refs=["n0", "n1", "n9"]),
            RawRelation(id="r1", way_refs=[("w1", "outer"), ("w404", "inner")], node_refs=["n404"]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        relation = result.relations[0]
        assert [w.id for w in relation.ways] == ["w1"]
        assert [n.id for n in relation.ways[0].nodes] == ["n1"]
        assert relation.nodes == []

    def test_relation_owned_way_not_top_level(self):
        records = [
            RawNode(id="n1", lat=1, lon=1),
            RawNode(id="n2", lat=2, lon=2),
            RawNode(id="n3", lat=3, lon=3),
            RawWay(id="w1", node_refs=["n1", "n2"], tags={"building": "yes"}),
            RawWay(id="w2", node_refs=["n3"]),
            RawRelation(id="r1", tags={"type": "multipolygon"}, way_refs=[("w1", "outer")]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [w.id for w in result.ways] == ["w2"]
        owned = {w.id for r in result.relations for w in r.ways}
        assert owned == {"w1"}
        assert not owned & {w.id for w in result.ways}
        assert result.relations[0].ways[0].tag("building") == "yes"
        assert result.lone_nodes == []

    def test_relation_owned_node_not_lone(self):
        records = [
            RawNode(id="n1", lat=1, lon=1),
            RawNode(id="n2", lat=2, lon=2),
            RawRelation(id="r1", node_refs=["n1"]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [n.id for n in result.relations[0].nodes] == ["n1"]
        assert [n.id for n in result.lone_nodes] == ["n2"]

    def test_way_shared_by_two_relations(self):
        records = [
            RawWay(id="w1"),
            RawRelation(id="r1", way_refs=[("w1", "outer")]),
            RawRelation(id="r2", way_refs=[("w1", "")]),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [[w.id for w in r.ways] for r in result.relations] == [["w1"], ["w1"]]
        assert result.ways == []

    def test_duplicate_ids_last_wins(self):
        records = [
            RawNode(id="n1", lat=1, lon=1),
            RawNode(id="n1", lat=5, lon=5),
            RawWay(id="w1", tags={"name": "old"}),
            RawWay(id="w1", tags={"name": "new"}),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert len(result.lone_nodes) == 1
        assert result.lone_nodes[0].location == Point(lat=5, lon=5)
        assert len(result.ways) == 1
        assert result.ways[0].tag("name") == "new"

    def test_record_order_irrelevant(self):
        records = [
            RawRelation(id="r1", way_refs=[("w1", "outer")]),
            RawWay(id="w1", node_refs=["n1"]),
            RawNode(id="n1", lat=1, lon=1),
        ]

        result = GraphAssembler.assemble(records, BOUNDS)

        assert [n.id for n in result.relations[0].ways[0].nodes] == ["n1"]
        assert result.ways == []
        assert result.lone_nodes == []

    def test_assemble_response(self, sample_response):
        result = GraphAssembler.assemble_response(sample_response, BOUNDS)

        assert [w.id for w in result.ways] == ["10"]
        assert result.ways[0].tag("name") == "Baker Street"
        assert result.ways[0].tag("surface") is None
        assert [r.id for r in result.relations] == ["100"]
        assert [w.id for w in result.relations[0].ways] == ["11"]
        assert [n.id for n in result.relations[0].nodes] == ["5"]
        assert result.lone_nodes == []
