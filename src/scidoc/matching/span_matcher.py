#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/span_matcher.py
"""Map text excerpts and offsets back to the nodes that produced them.

A :class:`SpanMatcher` is built from the output of a span-tracked render
(``to_latex_with_spans`` / ``to_markdown_with_spans``): the rendered string
and the ``node_id -> SpanInfo`` mapping. It answers two kinds of query:

- point queries: which node(s) produced the character at an offset
- excerpt queries: where does an excerpt occur, and how does that range
  relate to each overlapping node (starts in it, ends in it, lies inside
  it, or covers it entirely)

An optional :class:`TextNormalizer` lets excerpts match despite format noise
such as ``\\label`` commands or differing whitespace; matches found in
normalized space are mapped back to offsets in the original string.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Mapping, Optional, Protocol

from scidoc.constants import MatchType
from scidoc.matching.normalize import NormalizationResult, identity_map
from scidoc.spans import RenderResult, SpanInfo

logger = logging.getLogger(__name__)


class TextNormalizer(Protocol):
    """Format-specific text transform that preserves a map to original offsets."""

    def normalize(self, text: str) -> NormalizationResult: ...


@dataclass(frozen=True)
class NodeSpan:
    """A node id together with its span."""

    node_id: str
    start: int
    end: int
    kind: str

    @property
    def width(self) -> int:
        return self.end - self.start


@dataclass(frozen=True)
class MatchResult:
    """How a matched range relates to one node.

    Parameters
    ----------
    node_id : str
        Id of the overlapping node
    node_kind : str
        Kind of the overlapping node
    match_type : {"single", "start", "end", "contains"}
        ``single`` when the node holds the whole range, ``start``/``end``
        when it holds only that end, ``contains`` when the range covers the
        node entirely
    offset : int, optional
        Offset of the range start (``single``, ``start``) or range end
        (``end``) relative to the node's start. None for ``contains``.

    """

    node_id: str
    node_kind: str
    match_type: MatchType
    offset: Optional[int] = None


class SpanMatcher:
    """Locate nodes by position or by text excerpt.

    Parameters
    ----------
    spans : Mapping[str, SpanInfo]
        Node spans from a span-tracked render
    full_text : str
        The rendered string the spans refer to
    normalizer : TextNormalizer, optional
        Used by :meth:`match_excerpt` to search in normalized space

    Examples
    --------
        >>> result = to_latex_with_spans(nodes)
        >>> matcher = SpanMatcher(result.spans, result.content, create_latex_normalizer())
        >>> matcher.match_excerpt("some text")
        [MatchResult(node_id='...', node_kind='text', match_type='single', offset=0)]

    """

    def __init__(
        self,
        spans: Mapping[str, SpanInfo],
        full_text: str,
        normalizer: Optional[TextNormalizer] = None,
    ):
        self._spans = dict(spans)
        self.full_text = full_text
        self.normalizer = normalizer
        self._normalized: Optional[NormalizationResult] = None

        # Most specific first: narrowest, then earliest, then most recently recorded
        indexed = [
            (index, NodeSpan(node_id, span.start, span.end, span.kind))
            for index, (node_id, span) in enumerate(self._spans.items())
        ]
        indexed.sort(key=lambda item: (item[1].width, item[1].start, -item[0]))
        self._ordered: list[NodeSpan] = [node_span for _, node_span in indexed]

    @classmethod
    def from_result(cls, result: RenderResult, normalizer: Optional[TextNormalizer] = None) -> SpanMatcher:
        """Build a matcher from a :class:`RenderResult`."""
        return cls(result.spans, result.content, normalizer)

    # ------------------------------------------------------------------
    # Point queries
    # ------------------------------------------------------------------

    def find_node_at_position(self, pos: int) -> Optional[NodeSpan]:
        """Return the smallest span containing ``pos``, or None."""
        for node_span in self._ordered:
            if node_span.start <= pos < node_span.end:
                return node_span
        return None

    def find_all_nodes_at_position(self, pos: int) -> list[NodeSpan]:
        """Return every span containing ``pos``, innermost first."""
        return [node_span for node_span in self._ordered if node_span.start <= pos < node_span.end]

    # ------------------------------------------------------------------
    # Excerpt queries
    # ------------------------------------------------------------------

    def _normalized_text(self) -> NormalizationResult:
        if self._normalized is None:
            if self.normalizer is not None:
                self._normalized = self.normalizer.normalize(self.full_text)
            else:
                self._normalized = NormalizationResult(self.full_text, identity_map(len(self.full_text)))
        return self._normalized

    def match_excerpt(
        self,
        excerpt: str,
        use_normalization: Optional[bool] = None,
        find_all: bool = False,
    ) -> list[MatchResult]:
        """Find ``excerpt`` in the rendered text and classify the overlapping nodes.

        Parameters
        ----------
        excerpt : str
            Text to search for
        use_normalization : bool, optional
            Search in normalized space. Defaults to True when a normalizer
            is configured.
        find_all : bool, default False
            Report every occurrence instead of only the first

        Returns
        -------
        list[MatchResult]
            Rows for each occurrence, narrowest node first. Empty when the
            excerpt is empty or not found.

        """
        if not excerpt:
            return []
        if use_normalization is None:
            use_normalization = self.normalizer is not None
        use_normalization = use_normalization and self.normalizer is not None

        if use_normalization:
            search_excerpt = self.normalizer.normalize(excerpt).normalized
            normalized = self._normalized_text()
            search_text = normalized.normalized
            pos_map = normalized.pos_map
        else:
            search_excerpt = excerpt
            search_text = self.full_text
            pos_map = None

        if not search_excerpt:
            return []

        results: list[MatchResult] = []
        search_start = 0
        while True:
            index = search_text.find(search_excerpt, search_start)
            if index == -1:
                break
            if pos_map is not None:
                start = pos_map[index]
                end = pos_map[index + len(search_excerpt) - 1] + 1
            else:
                start = index
                end = index + len(search_excerpt)
            results.extend(self.match_range(start, end))
            if not find_all:
                break
            search_start = index + 1

        if not results:
            logger.debug("Excerpt not found (normalized=%s): %r", use_normalization, excerpt[:60])
        return results

    def match_range(self, start: int, end: int) -> list[MatchResult]:
        """Classify every node overlapping ``[start, end)``.

        Parameters
        ----------
        start : int
            Range start in the original text
        end : int
            Range end (exclusive)

        Returns
        -------
        list[MatchResult]
            One row per overlapping node, narrowest first

        """
        results: list[MatchResult] = []
        for node_span in self._ordered:
            if not (node_span.start < end and node_span.end > start):
                continue

            contains_start = node_span.start <= start < node_span.end
            contains_end = node_span.start < end <= node_span.end

            if contains_start and contains_end:
                results.append(MatchResult(node_span.node_id, node_span.kind, "single", start - node_span.start))
            elif contains_start:
                results.append(MatchResult(node_span.node_id, node_span.kind, "start", start - node_span.start))
            elif contains_end:
                results.append(MatchResult(node_span.node_id, node_span.kind, "end", end - node_span.start))
            else:
                results.append(MatchResult(node_span.node_id, node_span.kind, "contains"))
        return results

    # ------------------------------------------------------------------
    # Lookups
    # ------------------------------------------------------------------

    def get_node_text(self, node_id: str) -> Optional[str]:
        """Return the text a node produced, or None for unknown ids."""
        span = self._spans.get(node_id)
        if span is None:
            return None
        return self.full_text[span.start : span.end]

    def get_span(self, node_id: str) -> Optional[SpanInfo]:
        return self._spans.get(node_id)
