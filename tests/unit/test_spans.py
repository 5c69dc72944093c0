"""Unit tests for span tracking and nested span reconciliation."""

import pytest

from scidoc.ast import NodeFactory
from scidoc.renderers import LatexRenderer, PlainTextRenderer
from scidoc.spans import RenderResult, SpanInfo, SpanTracker, find_missing_child_spans


@pytest.mark.unit
class TestSpanPrimitives:
    """Test SpanInfo, SpanTracker and RenderResult."""

    def test_span_width_and_contains(self) -> None:
        """Test half-open containment."""
        span = SpanInfo(2, 5, "text")
        assert span.width == 3
        assert span.contains(2)
        assert span.contains(4)
        assert not span.contains(5)
        assert not span.contains(1)

    def test_tracker_records(self) -> None:
        """Test cursor advance and span recording."""
        tracker = SpanTracker()
        tracker.advance(4)
        tracker.record("n", 0, tracker.position, "text")
        assert tracker.position == 4
        assert tracker.spans == {"n": SpanInfo(0, 4, "text")}

    def test_trackers_are_independent(self) -> None:
        """Test that each tracker owns its span map."""
        first = SpanTracker()
        first.record("n", 0, 1, "text")
        assert SpanTracker().spans == {}

    def test_render_result_slice(self) -> None:
        """Test slicing node output from the content."""
        result = RenderResult("Hello World", {"a": SpanInfo(0, 6, "text"), "b": SpanInfo(6, 11, "text")})
        assert result.slice("a") == "Hello "
        assert result.slice("b") == "World"
        assert result.slice("missing") is None


@pytest.mark.unit
class TestTopLevelTracking:
    """Test spans recorded by the render loop."""

    def test_adjacent_text_spans(self, factory: NodeFactory) -> None:
        """Test spans of two inline text nodes."""
        nodes = factory.create_nodes(
            [{"type": "text", "content": "Hello "}, {"type": "text", "content": "World"}]
        )
        result = LatexRenderer().render_with_spans(nodes)
        assert result.content == "Hello World"
        assert result.spans[nodes[0].id] == SpanInfo(0, 6, "text")
        assert result.spans[nodes[1].id] == SpanInfo(6, 11, "text")

    def test_separator_excluded_from_spans(self, factory: NodeFactory) -> None:
        """Test that the block separator lies between spans, not inside them."""
        nodes = factory.create_nodes(
            [
                {"type": "equation", "content": "a", "display": "block"},
                {"type": "equation", "content": "b", "display": "block"},
            ]
        )
        result = LatexRenderer().render_with_spans(nodes)
        first = result.spans[nodes[0].id]
        second = result.spans[nodes[1].id]
        assert result.content[first.end : second.start] == "\n"
        assert result.slice(nodes[0].id) == "$$\na\n$$"
        assert result.slice(nodes[1].id) == "$$\nb\n$$"

    def test_every_slice_matches_node_render(self, factory: NodeFactory, paper_data) -> None:
        """Test that top-level slices reproduce each node's own output."""
        renderer = LatexRenderer()
        nodes = factory.create_nodes(paper_data)
        result = renderer.render_with_spans(nodes)
        for node in nodes:
            assert result.slice(node.id) == renderer.render_node(node)

    def test_renders_are_independent(self, factory: NodeFactory) -> None:
        """Test that a second render starts a fresh tracker."""
        renderer = LatexRenderer()
        nodes = factory.create_nodes([{"type": "text", "content": "abc"}])
        first = renderer.render_with_spans(nodes)
        second = renderer.render_with_spans(nodes)
        assert first.spans == second.spans
        assert first.spans is not second.spans


@pytest.mark.unit
class TestMissingChildSpans:
    """Test recovery of nested spans by searching inside the parent span."""

    def test_nested_children_located(self, factory: NodeFactory, section_data) -> None:
        """Test that section children are found left to right inside the section."""
        node = factory.create_node(section_data)
        result = LatexRenderer().render_with_spans([node])
        section = result.spans["sec"]
        previous_end = section.start
        for child in node.children:
            span = result.spans[child.id]
            assert section.start <= span.start <= span.end <= section.end
            assert span.start >= previous_end
            previous_end = span.end
        assert result.slice("sec/content-1") == "\\ref{fig:1}"

    def test_fallback_render_used(self, factory: NodeFactory) -> None:
        """Test that copy-text output locates children the primary render cannot."""
        node = factory.create_node(
            {
                "type": "list",
                "content": [
                    {
                        "type": "item",
                        "title": [{"type": "text", "content": "x_1"}],
                        "content": [{"type": "text", "content": "One"}],
                    }
                ],
            },
            "lst",
        )
        result = LatexRenderer().render_with_spans([node])
        assert "\\item[x_1] One" in result.content
        item = node.children[0]
        title_child = item.children[0]
        assert result.slice(title_child.id) == "x_1"
        assert result.slice(item.children[1].id) == "One"

    def test_unfound_children_left_unmapped(self, factory: NodeFactory) -> None:
        """Test that children whose output cannot be found get no span."""
        node = factory.create_node(
            {"type": "group", "content": [{"type": "text", "content": "abc"}]}, "g"
        )
        spans = {"g": SpanInfo(0, 3, "group")}
        find_missing_child_spans([node], "abc", spans, lambda n: "zzz", lambda n: "yyy")
        assert list(spans) == ["g"]

    def test_empty_output_not_mapped(self, factory: NodeFactory) -> None:
        """Test that children rendering to nothing are skipped."""
        node = factory.create_node({"type": "group", "content": [{"type": "text", "content": ""}]}, "g")
        spans = {"g": SpanInfo(0, 0, "group")}
        find_missing_child_spans([node], "", spans, PlainTextRenderer().render_node)
        assert list(spans) == ["g"]

    def test_roots_without_span_ignored(self, factory: NodeFactory) -> None:
        """Test that unmapped roots are not searched."""
        node = factory.create_node({"type": "group", "content": [{"type": "text", "content": "abc"}]}, "g")
        spans: dict = {}
        find_missing_child_spans([node], "abc", spans, PlainTextRenderer().render_node)
        assert spans == {}

    def test_search_limited_to_parent_span(self, factory: NodeFactory) -> None:
        """Test that a child's text outside its parent's span is not matched."""
        node = factory.create_node({"type": "group", "content": [{"type": "text", "content": "abc"}]}, "g")
        spans = {"g": SpanInfo(0, 4, "group")}
        find_missing_child_spans([node], "xxxxabc", spans, PlainTextRenderer().render_node)
        assert node.children[0].id not in spans

    def test_repeated_text_matched_in_order(self, factory: NodeFactory) -> None:
        """Test that identical siblings map to successive occurrences."""
        node = factory.create_node(
            {
                "type": "group",
                "content": [{"type": "text", "content": "ab"}, {"type": "text", "content": "ab"}],
            },
            "g",
        )
        spans = {"g": SpanInfo(0, 4, "group")}
        find_missing_child_spans([node], "abab", spans, PlainTextRenderer().render_node)
        assert spans["g/content-0"] == SpanInfo(0, 2, "text")
        assert spans["g/content-1"] == SpanInfo(2, 4, "text")
