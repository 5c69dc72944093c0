#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/fuzzy.py
"""Fuzzy excerpt matching and the multi-stage fallback pipeline.

Excerpts handed to a matcher are often imprecise: paraphrased punctuation,
elided passages (``...``), different line wrapping. This module provides a
last-resort matcher that compares alphanumeric-only streams with a longest
common subsequence (LCS) ratio, and :func:`match_excerpt_with_fallback`,
which tries progressively looser strategies:

1. exact (or normalized, if the matcher has a normalizer) match
2. exact match of each ellipsis-separated fragment
3. fuzzy match of the whole excerpt
4. fuzzy match of each fragment

Every successful stage is reduced by :func:`filter_to_leaf_range` to at most
a start node and an end node.

"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import Optional, Sequence

from scidoc.constants import (
    DEFAULT_FUZZY_THRESHOLD,
    ELLIPSIS_PATTERN,
    FUZZY_EARLY_EXIT_SCORE,
    FUZZY_MIN_ANCHOR_WORD_LENGTH,
    FUZZY_MIN_EXCERPT_LENGTH,
    FUZZY_START_TOLERANCE,
    FUZZY_STEP_DIVISOR,
    FUZZY_WINDOW_TOLERANCE,
    LEAF_NODE_KINDS,
    MIN_ELLIPSIS_FRAGMENT_LENGTH,
)
from scidoc.matching.normalize import NormalizationResult
from scidoc.matching.span_matcher import MatchResult, SpanMatcher

logger = logging.getLogger(__name__)

_ALNUM = frozenset("abcdefghijklmnopqrstuvwxyz0123456789")
_ELLIPSIS_RE = re.compile(ELLIPSIS_PATTERN)


@dataclass(frozen=True)
class FuzzyMatch:
    """Best fuzzy alignment of an excerpt: ``[start, end)`` in the original content."""

    start: int
    end: int
    score: float


# =============================================================================
# Comparison text
# =============================================================================


def _comparison_scan(text: str) -> tuple[list[str], list[int]]:
    # Lowercase ASCII alphanumerics are kept, whitespace runs between them
    # become one space and everything else is dropped.
    chars: list[str] = []
    pos_map: list[int] = []
    pending_space: Optional[int] = None

    for i, char in enumerate(text):
        lowered = char.lower()
        if len(lowered) == 1 and lowered in _ALNUM:
            if pending_space is not None and chars:
                chars.append(" ")
                pos_map.append(pending_space)
            pending_space = None
            chars.append(lowered)
            pos_map.append(i)
        elif char.isspace() and pending_space is None:
            pending_space = i
    return chars, pos_map


def normalize_for_comparison(text: str) -> str:
    """Lowercase, drop non-alphanumerics, collapse whitespace and trim.

    Examples
    --------
        >>> normalize_for_comparison("  Hello,   World!  ")
        'hello world'

    """
    chars, _ = _comparison_scan(text)
    return "".join(chars)


def build_position_map(text: str) -> NormalizationResult:
    """Return :func:`normalize_for_comparison` output with its position map."""
    chars, pos_map = _comparison_scan(text)
    return NormalizationResult("".join(chars), pos_map)


# =============================================================================
# Similarity
# =============================================================================


def _lcs_length(a: str, b: str) -> int:
    # Bit-parallel LCS (Hyyro): one bit per character of the shorter string.
    if len(a) < len(b):
        a, b = b, a
    masks: dict[str, int] = {}
    for i, char in enumerate(b):
        masks[char] = masks.get(char, 0) | (1 << i)

    full = (1 << len(b)) - 1
    v = full
    for char in a:
        u = v & masks.get(char, 0)
        v = ((v + u) | (v - u)) & full
    return len(b) - bin(v).count("1")


def similarity(a: str, b: str) -> float:
    """LCS similarity ratio ``2 * LCS / (len(a) + len(b))``.

    Returns 1.0 for identical non-empty strings and 0.0 when either string
    is empty. The measure is symmetric.

    Examples
    --------
        >>> similarity("abc", "abc")
        1.0
        >>> similarity("abc", "")
        0.0

    """
    if not a or not b:
        return 0.0
    if a == b:
        return 1.0
    return 2 * _lcs_length(a, b) / (len(a) + len(b))


# =============================================================================
# Fuzzy search
# =============================================================================


def find_fuzzy_match(content: str, excerpt: str, threshold: float = DEFAULT_FUZZY_THRESHOLD) -> Optional[FuzzyMatch]:
    """Find the window of ``content`` that best aligns with ``excerpt``.

    Both strings are reduced to their comparison form. Windows whose length
    is within 30% of the excerpt's are slid across the content in steps of a
    tenth of the window size and scored with :func:`similarity`. The search
    stops early once a window scores above 0.95.

    The winning window is mapped back to original offsets. Its start is then
    moved forward onto the excerpt's first word when that word (at least
    three characters long) occurs at most 20 characters further on.

    Non-ASCII letters are not part of the comparison form, so a match on text
    that begins with one (``"Ärger über ..."``) can start a character late,
    and the first-word alignment does not move it back.

    Parameters
    ----------
    content : str
        Rendered text to search
    excerpt : str
        Text to locate
    threshold : float, default 0.7
        Minimum similarity for a match

    Returns
    -------
    FuzzyMatch or None
        None when the excerpt is too short (under 10 comparison characters)
        or no window reaches ``threshold``.

    """
    norm_excerpt = normalize_for_comparison(excerpt)
    if len(norm_excerpt) < FUZZY_MIN_EXCERPT_LENGTH:
        return None

    mapped = build_position_map(content)
    norm_content = mapped.normalized
    pos_map = mapped.pos_map

    window_size = len(norm_excerpt)
    tolerance = int(window_size * FUZZY_WINDOW_TOLERANCE)

    best_score = 0.0
    best_start = -1
    best_end = -1

    for size in range(window_size - tolerance, window_size + tolerance + 1):
        if size <= 0 or size > len(norm_content):
            continue
        step = max(1, size // FUZZY_STEP_DIVISOR)
        for i in range(0, len(norm_content) - size + 1, step):
            score = similarity(norm_excerpt, norm_content[i : i + size])
            if score > best_score:
                best_score = score
                best_start = i
                best_end = i + size
            if score > FUZZY_EARLY_EXIT_SCORE:
                break
        if best_score > FUZZY_EARLY_EXIT_SCORE:
            break

    logger.debug("Fuzzy match best score %.3f for excerpt %r", best_score, excerpt[:60])
    if best_start < 0 or best_score < threshold:
        return None

    start = pos_map[best_start]
    end = pos_map[best_end - 1] + 1

    words = excerpt.split()
    first_word = words[0] if words else ""
    if len(first_word) >= FUZZY_MIN_ANCHOR_WORD_LENGTH:
        refined = content.find(first_word, start)
        if 0 <= refined < end and refined - start <= FUZZY_START_TOLERANCE:
            start = refined

    return FuzzyMatch(start, end, best_score)


# =============================================================================
# Fallback pipeline
# =============================================================================


def split_on_ellipsis(excerpt: str) -> list[str]:
    """Split on ``...`` or ``…`` and keep stripped fragments of 20+ characters."""
    fragments = (part.strip() for part in _ELLIPSIS_RE.split(excerpt))
    return [part for part in fragments if len(part) >= MIN_ELLIPSIS_FRAGMENT_LENGTH]


def build_matches_from_range(matcher: SpanMatcher, start: int, end: int) -> list[MatchResult]:
    """Describe ``[start, end)`` by the innermost nodes at its two ends.

    The innermost node at ``start`` becomes a ``start`` row and the innermost
    node at ``end - 1`` an ``end`` row. When both are the same node a single
    ``single`` row is returned.
    """
    start_node = matcher.find_node_at_position(start)
    end_node = matcher.find_node_at_position(end - 1 if end > 0 else end)

    if start_node is not None and end_node is not None and start_node.node_id == end_node.node_id:
        return [MatchResult(start_node.node_id, start_node.kind, "single", start - start_node.start)]

    results: list[MatchResult] = []
    if start_node is not None:
        results.append(MatchResult(start_node.node_id, start_node.kind, "start", start - start_node.start))
    if end_node is not None:
        results.append(MatchResult(end_node.node_id, end_node.kind, "end", end - end_node.start))
    return results


def filter_to_leaf_range(matches: Sequence[MatchResult]) -> list[MatchResult]:
    """Reduce raw match rows to at most a start row and an end row.

    ``contains`` rows are dropped. Rows of leaf kinds (text, equation,
    equation_array, code, ref, citation) are preferred when any exist. The
    result is the first ``start``/``single`` row plus the first ``end`` row
    of a different node, or the first candidate when neither exists.

    Examples
    --------
        >>> rows = [
        ...     MatchResult("t1", "text", "single", 42),
        ...     MatchResult("s1", "section", "contains"),
        ... ]
        >>> filter_to_leaf_range(rows)
        [MatchResult(node_id='t1', node_kind='text', match_type='single', offset=42)]

    """
    bounded = [match for match in matches if match.match_type != "contains"]
    if not bounded:
        return []

    leaves = [match for match in bounded if match.node_kind in LEAF_NODE_KINDS]
    candidates = leaves or bounded

    start_row = next((m for m in candidates if m.match_type in ("start", "single")), None)
    end_row = next((m for m in candidates if m.match_type == "end"), None)

    if start_row is not None and end_row is not None and start_row.node_id != end_row.node_id:
        return [start_row, end_row]
    if start_row is not None:
        return [start_row]
    return [candidates[0]]


def match_excerpt_with_fallback(
    matcher: SpanMatcher,
    excerpt: str,
    content: Optional[str] = None,
) -> list[MatchResult]:
    """Locate ``excerpt`` with progressively looser strategies.

    Parameters
    ----------
    matcher : SpanMatcher
        Matcher over a span-tracked render
    excerpt : str
        Text to locate
    content : str, optional
        Full rendered text for the fuzzy stages; they are skipped when omitted

    Returns
    -------
    list[MatchResult]
        At most a start row and an end row; empty when every stage fails

    """
    exact = matcher.match_excerpt(excerpt)
    if exact:
        return filter_to_leaf_range(exact)

    fragments = split_on_ellipsis(excerpt)
    for fragment in fragments:
        partial = matcher.match_excerpt(fragment)
        if partial:
            return filter_to_leaf_range(partial)

    if not content:
        return []

    for candidate in [excerpt, *fragments]:
        fuzzy = find_fuzzy_match(content, candidate)
        if fuzzy is None:
            continue
        matches = build_matches_from_range(matcher, fuzzy.start, fuzzy.end)
        if matches:
            return filter_to_leaf_range(matches)

    logger.debug("No match for excerpt %r", excerpt[:60])
    return []
