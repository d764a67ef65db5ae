"""Unit tests for the renderers."""

import json

import pytest

from shower_map.forest.model import Forest
from shower_map.particles import ParticleDefinition, TrackData
from shower_map.renderers import (
    ASCIIRenderer,
    JSONRenderer,
    OutputFormat,
    TextRenderer,
    describe_node,
    format_payload,
    format_quantity,
    render_forest,
)


class TestFormatting:
    def test_format_payload(self):
        payload = TrackData(ParticleDefinition("e-"), 0.1)
        assert format_payload(payload) == "(e-, 0.1000)"
        assert format_payload(payload, precision=1) == "(e-, 0.1)"

    def test_format_non_float_quantity(self):
        assert format_quantity(3) == "3"

    def test_describe_node(self, shower):
        line = describe_node(shower.forest.node(2))
        assert line == (
            "id: 2 = (e-, 0.2000) ; parent id: 1 ; first child id: 3 ; next sibling id: 0"
        )

    def test_describe_root(self, shower):
        assert "parent id: 0" in describe_node(shower.forest.node(1))


class TestRenderers:
    def test_text_one_line_per_node(self, shower):
        output = TextRenderer().render(shower.forest)
        lines = output.splitlines()
        assert len(lines) == 9
        assert lines[0].startswith("id: 1 = (e-, 0.1000)")
        assert lines[-1].startswith("id: 9 = (p, 0.9000)")

    def test_text_empty_forest(self, shower):
        shower.clear()
        assert TextRenderer().render(shower.forest) == ""

    def test_json_flat_nodes(self, shower):
        data = json.loads(JSONRenderer().render(shower.forest, precision=2))
        assert data["root_ids"] == [1]
        assert list(data["nodes"]) == [str(i) for i in range(1, 10)]
        root = data["nodes"]["1"]
        assert root["particle"] == "e-"
        assert root["quantity"] == 0.1
        assert root["parent"] is None
        assert data["nodes"]["2"]["children"] == [3, 4, 5, 9]
        assert data["nodes"]["8"]["parent"] == 5

    def test_ascii_contains_labels(self, shower):
        output = ASCIIRenderer().render(shower.forest, precision=1)
        assert "1 e- 0.1" in output
        assert "8 e+ 0.8" in output
        assert output.index("4 p 0.4") < output.index("6 p 0.6")

    def test_ascii_depth_limit(self, shower):
        output = ASCIIRenderer().render(shower.forest, depth=1)
        assert "2 e-" in output
        assert "3 e+" not in output
        assert "4 children not shown" in output

    def test_ascii_multiple_roots(self, shower, particles):
        shower.insert(100, None, particles.get("p"), 1.0)
        output = ASCIIRenderer().render(shower.forest)
        assert "100 p" in output

    @pytest.mark.parametrize("fmt", list(OutputFormat))
    def test_render_forest_dispatch(self, shower, fmt):
        output = render_forest(shower.forest, format=fmt)
        assert "e-" in output

    def test_render_forest_accepts_string_format(self, shower):
        output = render_forest(shower.forest, format="json")
        assert json.loads(output)["root_ids"] == [1]


class TestDeepForest:
    """Chains deeper than the interpreter recursion limit."""

    @pytest.fixture
    def chain(self, particles):
        forest = Forest()
        pdef = particles.get("p")
        for node_id in range(1, 2001):
            forest.insert(node_id, node_id - 1, TrackData(pdef, 1.0))
        return forest

    def test_ascii_caps_depth_to_width(self, chain):
        output = ASCIIRenderer().render(chain, width=120)
        assert "21 p 1.0000" in output
        assert "22 p" not in output
        assert "1 children not shown" in output

    def test_json_renders_every_node(self, chain):
        data = json.loads(JSONRenderer().render(chain))
        assert len(data["nodes"]) == 2000
        assert data["nodes"]["2000"]["parent"] == 1999

    def test_text_renders_every_node(self, chain):
        assert len(TextRenderer().render(chain).splitlines()) == 2000
