"""Unit tests for JsonRenderer."""

import json

import pytest

from scidoc.ast import NodeFactory
from scidoc.exceptions import InvalidOptionsError
from scidoc.options import JsonExportOptions, TextExportOptions
from scidoc.renderers import JsonRenderer


def text(content: str) -> dict:
    return {"type": "text", "content": content}


@pytest.mark.unit
class TestJsonRendering:
    """Test conversion of nodes back to tagged data."""

    def test_leaf(self, factory: NodeFactory) -> None:
        """Test that leaves return a copy of their data."""
        node = factory.create_node({"type": "text", "content": "Hello", "styles": ["bold"]})
        assert JsonRenderer().render_to_list([node]) == [{"type": "text", "content": "Hello", "styles": ["bold"]}]

    def test_section_round_trips(self, factory: NodeFactory, section_data) -> None:
        """Test that an unedited tree reproduces its source data."""
        node = factory.create_node(section_data)
        assert JsonRenderer().render_node(node) == section_data

    def test_edits_are_reflected(self, factory: NodeFactory, section_data) -> None:
        """Test that removed children disappear from the output."""
        node = factory.create_node(section_data)
        node.remove_child(node.children[-1])
        rendered = JsonRenderer().render_node(node)
        assert [item["type"] for item in rendered["content"]] == ["text", "ref"]
        assert rendered["title"] == [text("Introduction")]

    def test_empty_children_become_none(self, factory: NodeFactory) -> None:
        """Test that containers without children serialize content as None."""
        node = factory.create_node({"type": "group", "content": []})
        assert JsonRenderer().render_node(node)["content"] is None

    def test_string_payload_kept(self, factory: NodeFactory) -> None:
        """Test that scalar content on a container kind is kept verbatim."""
        node = factory.create_node({"type": "equation", "content": "x^2", "display": "block"})
        assert JsonRenderer().render_node(node) == {"type": "equation", "content": "x^2", "display": "block"}

    def test_equation_row_columns(self, factory: NodeFactory) -> None:
        """Test that row cells are regrouped into columns."""
        data = {
            "type": "equation_array",
            "name": "align",
            "content": [{"type": "row", "content": [[text("a")], [text("= b"), text(" + c")]]}],
        }
        node = factory.create_node(data)
        assert JsonRenderer().render_node(node) == data

    def test_tabular_grid(self, factory: NodeFactory) -> None:
        """Test that tabular output keeps the raw grid shape."""
        data = {
            "type": "tabular",
            "content": [
                [{"content": [text("a")], "colspan": 2}],
                [{"content": [text("b")], "styles": ["bold"]}, {"content": [text("c")], "rowspan": 3}],
            ],
        }
        node = factory.create_node(data)
        assert JsonRenderer().render_node(node) == data

    def test_asset_path_resolved(self, factory: NodeFactory) -> None:
        """Test that asset paths pass through the resolver."""
        node = factory.create_node({"type": "includegraphics", "path": "a.png"})
        renderer = JsonRenderer(JsonExportOptions(asset_path_resolver=lambda path: "out/" + path))
        assert renderer.render_node(node)["path"] == "out/a.png"

    def test_paper_serializes(self, factory: NodeFactory, paper_data) -> None:
        """Test that a full document serializes to valid JSON."""
        nodes = factory.create_nodes(paper_data)
        parsed = json.loads(JsonRenderer().render_to_string(nodes))
        assert [item["type"] for item in parsed] == ["abstract", "section", "figure", "bibliography"]


@pytest.mark.unit
class TestJsonOptions:
    """Test JSON options."""

    def test_indented_output(self, factory: NodeFactory) -> None:
        """Test default indentation."""
        node = factory.create_node(text("a"))
        output = JsonRenderer().render_to_string([node])
        assert "\n  {" in output

    def test_compact_output(self, factory: NodeFactory) -> None:
        """Test compact output when indent is None."""
        node = factory.create_node(text("a"))
        output = JsonRenderer(JsonExportOptions(indent=None)).render_to_string([node])
        assert output == '[{"type": "text", "content": "a"}]'

    def test_non_ascii_kept(self, factory: NodeFactory) -> None:
        """Test that non-ASCII text is not escaped."""
        node = factory.create_node(text("Erdős"))
        assert "Erdős" in JsonRenderer(JsonExportOptions(indent=None)).render_to_string([node])

    def test_wrong_options_type(self) -> None:
        """Test that options for another format are rejected."""
        with pytest.raises(InvalidOptionsError):
            JsonRenderer(TextExportOptions())  # type: ignore[arg-type]
