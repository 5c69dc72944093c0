#  Copyright (c) 2025 Tom Villani, Ph.D.

# scidoc/options/latex.py
"""Configuration options for LaTeX rendering."""

from __future__ import annotations

from dataclasses import dataclass

from scidoc.options.base import BaseExportOptions


@dataclass(frozen=True)
class LatexExportOptions(BaseExportOptions):
    r"""Configuration options for node-to-LaTeX rendering.

    LaTeX output has no settings beyond the shared ones; the class exists so
    renderers can validate that they received LaTeX options.

    Examples
    --------
    Render without text decorations:
        >>> options = LatexExportOptions(skip_styles=True)

    """
