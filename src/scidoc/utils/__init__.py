#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/utils/__init__.py
"""Utility modules for the scidoc package.

This package contains escaping, style decoration and raw token helpers
shared by the node catalog and the renderers.
"""

from scidoc.utils.escape import escape_latex
from scidoc.utils.styles import wrap_styles_latex, wrap_styles_markdown
from scidoc.utils.tokens import tokens_to_text

__all__ = [
    "escape_latex",
    "tokens_to_text",
    "wrap_styles_latex",
    "wrap_styles_markdown",
]
