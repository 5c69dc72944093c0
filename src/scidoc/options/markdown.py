#  Copyright (c) 2025 Tom Villani, Ph.D.

# scidoc/options/markdown.py
"""Configuration options for Markdown rendering."""

from __future__ import annotations

from dataclasses import dataclass, field

from scidoc.constants import DEFAULT_MARKDOWN_MATH
from scidoc.options.base import BaseExportOptions


@dataclass(frozen=True)
class MarkdownExportOptions(BaseExportOptions):
    r"""Configuration options for node-to-Markdown rendering.

    Parameters
    ----------
    math : bool, default False
        Render as if inside a math block: anchors are not emitted, equations
        lose their ``$$`` fences and references render as ``[\text{Ref ...}]``.
        Equations switch this on for their own children.

    """

    math: bool = field(
        default=DEFAULT_MARKDOWN_MATH,
        metadata={
            "help": "Math-safe output: no anchors, inline reference form",
            "importance": "advanced",
        },
    )
