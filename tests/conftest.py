"""
Shared fixtures for Overpass Tiles tests
"""

import pytest

from overpass_tiles.config import OverpassConfig


SAMPLE_RESPONSE = b"""<?xml version="1.0" encoding="UTF-8"?>
<osm version="0.6" generator="Overpass API">
  <note>The data included in this document is from www.openstreetmap.org.</note>
  <node id="1" lat="51.5010" lon="-0.1200"/>
  <node id="2" lat="51.5020" lon="-0.1210"/>
  <node id="3" lat="51.5030" lon="-0.1220"/>
  <node id="4" lat="51.5040" lon="-0.1230"/>
  <node id="5" lat="51.5050" lon="-0.1240"/>
  <way id="10">
    <nd ref="1"/>
    <nd ref="2"/>
    <tag k="highway" v="residential"/>
    <tag k="name" v="Baker Street"/>
  </way>
  <way id="11">
    <nd ref="3"/>
    <nd ref="4"/>
    <tag k="building" v="yes"/>
  </way>
  <relation id="100">
    <member type="way" ref="11" role="outer"/>
    <member type="node" ref="5" role="label"/>
    <tag k="type" v="multipolygon"/>
  </relation>
</osm>
"""


@pytest.fixture
def sample_response():
    return SAMPLE_RESPONSE


@pytest.fixture
def test_config():
    """Fresh configuration without rate limiting"""
    config = OverpassConfig()
    config.api.min_request_interval = 0.0
    config.api.overpass_url = "https://overpass.example.org/api/interpreter"
    return config
