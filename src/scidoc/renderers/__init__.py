#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/__init__.py
"""Renderers converting node trees to output formats.

Text renderers (LaTeX, Markdown, plain copy-text) share the recursive render
loop of :class:`BaseRenderer` and can record per-node spans. The JSON
renderer produces tagged data instead of text.
"""

from scidoc.renderers.base import BaseRenderer
from scidoc.renderers.json import JsonRenderer
from scidoc.renderers.latex import LatexRenderer
from scidoc.renderers.markdown import MarkdownRenderer
from scidoc.renderers.plaintext import PlainTextRenderer

__all__ = [
    "BaseRenderer",
    "JsonRenderer",
    "LatexRenderer",
    "MarkdownRenderer",
    "PlainTextRenderer",
]
