#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/latex.py
r"""Text normalizer for LaTeX output.

Removes the parts of LaTeX source a reader never sees in an excerpt
(``\label`` commands, comments), unifies display math delimiters and
collapses whitespace.
"""

from __future__ import annotations

import re
from typing import Optional

from scidoc.constants import LATEX_REMOVAL_PATTERNS, LATEX_REPLACEMENT_PATTERNS
from scidoc.matching.normalize import NormalizationResult, NormalizerOptions, normalize_pipeline

_REMOVALS = tuple(re.compile(pattern) for pattern in LATEX_REMOVAL_PATTERNS)
_REPLACEMENTS = tuple((re.compile(pattern), replacement) for pattern, replacement in LATEX_REPLACEMENT_PATTERNS)


class LatexNormalizer:
    r"""Normalize LaTeX for excerpt matching.

    Steps, in order:

    1. remove ``\label{...}`` and ``%`` comments (an escaped ``\%`` is kept)
    2. rewrite ``$$x$$`` as ``\[x\]``
    3. collapse whitespace runs to one space (or strip them, see options)

    Parameters
    ----------
    options : NormalizerOptions, optional
        Whitespace handling

    Examples
    --------
        >>> LatexNormalizer().normalize("A\\label{x}B").normalized
        'AB'

    """

    def __init__(self, options: Optional[NormalizerOptions] = None):
        self.options = options or NormalizerOptions()

    def normalize(self, text: str) -> NormalizationResult:
        return normalize_pipeline(text, _REMOVALS, _REPLACEMENTS, self.options)


def create_latex_normalizer(options: Optional[NormalizerOptions] = None) -> LatexNormalizer:
    """Create a LaTeX normalizer with the given options."""
    return LatexNormalizer(options)
