#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/matching/markdown.py
"""Text normalizer for Markdown output."""

from __future__ import annotations

import re
from typing import Optional

from scidoc.constants import MARKDOWN_REMOVAL_PATTERNS
from scidoc.matching.normalize import NormalizationResult, NormalizerOptions, normalize_pipeline

_REMOVALS = tuple(re.compile(pattern) for pattern in MARKDOWN_REMOVAL_PATTERNS)


class MarkdownNormalizer:
    """Normalize Markdown for excerpt matching.

    HTML comments and reference-style link definitions (``[id]: url``) are
    removed, then whitespace runs are collapsed.

    Parameters
    ----------
    options : NormalizerOptions, optional
        Whitespace handling

    """

    def __init__(self, options: Optional[NormalizerOptions] = None):
        self.options = options or NormalizerOptions()

    def normalize(self, text: str) -> NormalizationResult:
        return normalize_pipeline(text, _REMOVALS, (), self.options)


def create_markdown_normalizer(options: Optional[NormalizerOptions] = None) -> MarkdownNormalizer:
    """Create a Markdown normalizer with the given options."""
    return MarkdownNormalizer(options)
