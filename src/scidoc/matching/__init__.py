#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/__init__.py
"""Excerpt matching over span-tracked renders.

- span_matcher: :class:`SpanMatcher`, point and excerpt queries
- normalize, latex, markdown: position-tracked normalizers
- fuzzy: LCS similarity, fuzzy window search and the fallback pipeline

Examples
--------
    >>> from scidoc import to_latex_with_spans
    >>> from scidoc.matching import SpanMatcher, create_latex_normalizer, match_excerpt_with_fallback
    >>> result = to_latex_with_spans(nodes)
    >>> matcher = SpanMatcher(result.spans, result.content, create_latex_normalizer())
    >>> match_excerpt_with_fallback(matcher, "an excerpt ... from the text", result.content)

"""

from scidoc.matching.fuzzy import (
    FuzzyMatch,
    build_matches_from_range,
    build_position_map,
    filter_to_leaf_range,
    find_fuzzy_match,
    match_excerpt_with_fallback,
    normalize_for_comparison,
    similarity,
    split_on_ellipsis,
)
from scidoc.matching.latex import LatexNormalizer, create_latex_normalizer
from scidoc.matching.markdown import MarkdownNormalizer, create_markdown_normalizer
from scidoc.matching.normalize import (
    NormalizationResult,
    NormalizerOptions,
    apply_removals,
    apply_replacements,
    normalize_whitespace,
)
from scidoc.matching.span_matcher import MatchResult, NodeSpan, SpanMatcher, TextNormalizer

__all__ = [
    "FuzzyMatch",
    "LatexNormalizer",
    "MarkdownNormalizer",
    "MatchResult",
    "NodeSpan",
    "NormalizationResult",
    "NormalizerOptions",
    "SpanMatcher",
    "TextNormalizer",
    "apply_removals",
    "apply_replacements",
    "build_matches_from_range",
    "build_position_map",
    "create_latex_normalizer",
    "create_markdown_normalizer",
    "filter_to_leaf_range",
    "find_fuzzy_match",
    "match_excerpt_with_fallback",
    "normalize_for_comparison",
    "normalize_whitespace",
    "similarity",
    "split_on_ellipsis",
]
