#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/normalize.py
"""Position-tracked text normalization primitives.

Every normalization step returns the transformed text together with a
position map: ``pos_map[i]`` is the offset in the *original* text of the
character at offset ``i`` of the normalized text. Steps compose by feeding
the map of one step into the next, so the final map always points into the
untouched original.

The primitives are:

- :func:`apply_removals` deletes regex matches; its map is exact.
- :func:`apply_replacements` substitutes regex matches; where the
  replacement differs from the source the map is approximate.
- :func:`normalize_whitespace` collapses or strips whitespace.

"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Iterable, Optional, Pattern, Sequence, Union

RegexLike = Union[str, Pattern[str]]


@dataclass(frozen=True)
class NormalizationResult:
    """Normalized text and its map back to original offsets.

    Parameters
    ----------
    normalized : str
        The transformed text
    pos_map : list[int]
        Original offset of every normalized character. Always has the same
        length as ``normalized`` and never decreases.

    """

    normalized: str
    pos_map: list[int] = field(default_factory=list)


@dataclass(frozen=True)
class NormalizerOptions:
    """Options shared by the built-in normalizers.

    Parameters
    ----------
    strip_all_whitespace : bool, default False
        Remove whitespace entirely instead of collapsing runs to one space.
        Useful when the excerpt and the rendered text wrap lines differently.

    """

    strip_all_whitespace: bool = field(
        default=False,
        metadata={"help": "Remove all whitespace for aggressive matching", "importance": "advanced"},
    )


def _compile(pattern: RegexLike) -> Pattern[str]:
    return pattern if isinstance(pattern, re.Pattern) else re.compile(pattern)


def identity_map(length: int) -> list[int]:
    """Return the position map of an untransformed text."""
    return list(range(length))


def apply_removals(text: str, patterns: Iterable[RegexLike]) -> NormalizationResult:
    """Delete every match of ``patterns`` from ``text``.

    All patterns are matched against the original text; overlapping or
    adjacent matches are merged. The returned map is exact.

    Parameters
    ----------
    text : str
        Original text
    patterns : iterable of str or compiled pattern
        Regular expressions whose matches are removed

    Returns
    -------
    NormalizationResult
        Text with the matches removed and its position map

    Examples
    --------
        >>> apply_removals("A\\\\label{x}B", [r"\\\\label\\{[^}]*\\}"])
        NormalizationResult(normalized='AB', pos_map=[0, 10])

    """
    keep = [True] * len(text)
    for pattern in patterns:
        for match in _compile(pattern).finditer(text):
            for i in range(match.start(), match.end()):
                keep[i] = False

    pos_map = [i for i, kept in enumerate(keep) if kept]
    return NormalizationResult("".join(text[i] for i in pos_map), pos_map)


def apply_replacements(
    text: str,
    pos_map: Sequence[int],
    patterns: Iterable[tuple[RegexLike, str]],
) -> NormalizationResult:
    """Apply regex substitutions, carrying the position map along.

    When a substitution changes the length of the text, the map is rebuilt by
    walking both versions character by character: matching characters keep
    their original offset, inserted or altered characters inherit the offset
    of the current source character. The result is approximate inside
    replaced regions and exact elsewhere.

    Parameters
    ----------
    text : str
        Text produced by an earlier step
    pos_map : sequence of int
        Map of ``text`` back to the original
    patterns : iterable of (pattern, replacement)
        Substitutions in ``re.sub`` syntax, applied in order

    Returns
    -------
    NormalizationResult

    """
    current = text
    current_map = list(pos_map)

    for pattern, replacement in patterns:
        previous = current
        current = _compile(pattern).sub(replacement, previous)
        if len(current) == len(previous):
            continue

        fallback = current_map[-1] if current_map else 0
        new_map: list[int] = []
        src = 0
        for char in current:
            if src < len(previous) and char == previous[src]:
                new_map.append(current_map[src])
                src += 1
            elif current_map:
                new_map.append(current_map[min(src, len(current_map) - 1)])
            else:
                new_map.append(fallback)
        current_map = new_map

    return NormalizationResult(current, current_map)


def normalize_whitespace(
    text: str,
    pos_map: Sequence[int],
    strip_all: bool = False,
) -> NormalizationResult:
    """Collapse (or strip) whitespace runs.

    Each run of whitespace becomes a single space mapped to the first
    character of the run. With ``strip_all`` the runs are deleted.

    Parameters
    ----------
    text : str
        Text produced by an earlier step
    pos_map : sequence of int
        Map of ``text`` back to the original
    strip_all : bool, default False
        Delete whitespace instead of collapsing it

    Returns
    -------
    NormalizationResult

    """
    chars: list[str] = []
    new_map: list[int] = []
    last_was_space = False

    for i, char in enumerate(text):
        if char.isspace():
            if not strip_all and not last_was_space:
                chars.append(" ")
                new_map.append(pos_map[i])
                last_was_space = True
            continue
        chars.append(char)
        new_map.append(pos_map[i])
        last_was_space = False

    return NormalizationResult("".join(chars), new_map)


def normalize_pipeline(
    text: str,
    removals: Iterable[RegexLike] = (),
    replacements: Iterable[tuple[RegexLike, str]] = (),
    options: Optional[NormalizerOptions] = None,
) -> NormalizationResult:
    """Run removals, then replacements, then whitespace normalization."""
    options = options or NormalizerOptions()
    result = apply_removals(text, removals)
    result = apply_replacements(result.normalized, result.pos_map, replacements)
    return normalize_whitespace(result.normalized, result.pos_map, strip_all=options.strip_all_whitespace)
