"""Unit tests for SpanMatcher point and excerpt queries."""

import pytest

from scidoc.matching import MatchResult, NodeSpan, SpanMatcher, create_latex_normalizer
from scidoc.spans import RenderResult, SpanInfo


@pytest.fixture
def hello_matcher() -> SpanMatcher:
    """Matcher over "Hello World" split into two text nodes."""
    spans = {"n0": SpanInfo(0, 6, "text"), "n1": SpanInfo(6, 11, "text")}
    return SpanMatcher(spans, "Hello World")


@pytest.fixture
def nested_matcher() -> SpanMatcher:
    """Matcher with a 20-character outer span around a 5-character inner span."""
    spans = {"outer": SpanInfo(0, 20, "section"), "inner": SpanInfo(5, 10, "text")}
    return SpanMatcher(spans, "x" * 20)


@pytest.mark.unit
class TestPointQueries:
    """Test position lookups."""

    def test_innermost_wins(self, nested_matcher: SpanMatcher) -> None:
        """Test that the narrowest containing span is returned."""
        found = nested_matcher.find_node_at_position(7)
        assert found == NodeSpan("inner", 5, 10, "text")

    def test_outer_only(self, nested_matcher: SpanMatcher) -> None:
        """Test positions covered only by the outer span."""
        assert nested_matcher.find_node_at_position(2).node_id == "outer"
        assert nested_matcher.find_node_at_position(10).node_id == "outer"

    def test_outside_every_span(self, nested_matcher: SpanMatcher) -> None:
        """Test that positions outside all spans return None."""
        assert nested_matcher.find_node_at_position(20) is None
        assert nested_matcher.find_node_at_position(-1) is None

    def test_all_nodes_innermost_first(self, nested_matcher: SpanMatcher) -> None:
        """Test that all containing spans are ordered by width."""
        assert [span.node_id for span in nested_matcher.find_all_nodes_at_position(7)] == ["inner", "outer"]
        assert nested_matcher.find_all_nodes_at_position(25) == []

    def test_equal_width_prefers_earliest_start(self) -> None:
        """Test tie-breaking between overlapping spans of equal width."""
        matcher = SpanMatcher({"late": SpanInfo(3, 8, "text"), "early": SpanInfo(0, 5, "text")}, "x" * 10)
        assert matcher.find_node_at_position(4).node_id == "early"

    def test_identical_spans_prefer_latest_recorded(self) -> None:
        """Test tie-breaking between identical spans."""
        matcher = SpanMatcher({"parent": SpanInfo(0, 5, "group"), "child": SpanInfo(0, 5, "text")}, "abcde")
        assert matcher.find_node_at_position(2).node_id == "child"
        assert [span.node_id for span in matcher.find_all_nodes_at_position(2)] == ["child", "parent"]


@pytest.mark.unit
class TestExcerptQueries:
    """Test excerpt matching and range classification."""

    def test_match_across_boundary(self, hello_matcher: SpanMatcher) -> None:
        """Test an excerpt that starts in one node and ends in the next."""
        results = hello_matcher.match_excerpt("lo Wo")
        assert len(results) == 2
        assert MatchResult("n0", "text", "start", 3) in results
        assert MatchResult("n1", "text", "end", 2) in results

    def test_match_inside_one_node(self, hello_matcher: SpanMatcher) -> None:
        """Test an excerpt held entirely by one node."""
        assert hello_matcher.match_excerpt("orl") == [MatchResult("n1", "text", "single", 1)]

    def test_contains_row(self, nested_matcher: SpanMatcher) -> None:
        """Test that nodes inside the matched range are reported as contained."""
        results = nested_matcher.match_range(2, 15)
        assert results == [
            MatchResult("inner", "text", "contains"),
            MatchResult("outer", "section", "single", 2),
        ]

    def test_not_found(self, hello_matcher: SpanMatcher) -> None:
        """Test that a missing excerpt yields no results."""
        assert hello_matcher.match_excerpt("Goodbye") == []

    def test_empty_excerpt(self, hello_matcher: SpanMatcher) -> None:
        """Test that an empty excerpt yields no results."""
        assert hello_matcher.match_excerpt("") == []

    def test_find_all_occurrences(self) -> None:
        """Test reporting every occurrence of a repeated excerpt."""
        matcher = SpanMatcher({"t": SpanInfo(0, 6, "text")}, "abcabc")
        assert matcher.match_excerpt("abc") == [MatchResult("t", "text", "single", 0)]
        assert matcher.match_excerpt("abc", find_all=True) == [
            MatchResult("t", "text", "single", 0),
            MatchResult("t", "text", "single", 3),
        ]

    def test_find_all_overlapping_occurrences(self) -> None:
        """Test that overlapping occurrences are each reported."""
        matcher = SpanMatcher({"t": SpanInfo(0, 4, "text")}, "aaaa")
        assert len(matcher.match_excerpt("aa", find_all=True)) == 3


@pytest.mark.unit
class TestNormalizedMatching:
    """Test excerpt matching through a normalizer."""

    @pytest.fixture
    def matcher(self) -> SpanMatcher:
        """Matcher over LaTeX with a label and irregular whitespace."""
        content = "Hello\\label{x} World"
        return SpanMatcher({"t": SpanInfo(0, len(content), "text")}, content, create_latex_normalizer())

    def test_normalized_by_default(self, matcher: SpanMatcher) -> None:
        """Test that a configured normalizer is used unless disabled."""
        assert matcher.match_excerpt("Hello World") == [MatchResult("t", "text", "single", 0)]

    def test_normalization_disabled(self, matcher: SpanMatcher) -> None:
        """Test exact matching when normalization is switched off."""
        assert matcher.match_excerpt("Hello World", use_normalization=False) == []

    def test_offsets_map_to_original(self, matcher: SpanMatcher) -> None:
        """Test that offsets refer to the original text."""
        assert matcher.match_excerpt("World") == [MatchResult("t", "text", "single", 15)]

    def test_excerpt_normalizing_to_nothing(self, matcher: SpanMatcher) -> None:
        """Test that an excerpt made only of removable text matches nothing."""
        assert matcher.match_excerpt("\\label{y}") == []

    def test_normalization_requested_without_normalizer(self, hello_matcher: SpanMatcher) -> None:
        """Test that requesting normalization without a normalizer searches exactly."""
        assert hello_matcher.match_excerpt("World", use_normalization=True) == [
            MatchResult("n1", "text", "single", 0)
        ]


@pytest.mark.unit
class TestLookups:
    """Test direct span lookups."""

    def test_node_text_and_span(self, hello_matcher: SpanMatcher) -> None:
        """Test text and span retrieval by id."""
        assert hello_matcher.get_node_text("n0") == "Hello "
        assert hello_matcher.get_span("n1") == SpanInfo(6, 11, "text")
        assert hello_matcher.get_node_text("missing") is None
        assert hello_matcher.get_span("missing") is None

    def test_from_result(self) -> None:
        """Test building a matcher from a render result."""
        result = RenderResult("abc", {"t": SpanInfo(0, 3, "text")})
        matcher = SpanMatcher.from_result(result)
        assert matcher.full_text == "abc"
        assert matcher.get_node_text("t") == "abc"
