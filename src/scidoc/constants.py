#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/constants.py
"""Constants and default values for the scidoc library.

This module centralizes literal types, separators, style tables and the
tuning values used by the matching subsystem.

Constants are organized by category:
1. Type Definitions - All Literal types and type aliases
2. Rendering - Block separators and style mappings
3. Node Kinds - Inline and leaf classifications
4. Matching - Normalization patterns and fuzzy search tuning
"""

from __future__ import annotations

from typing import Literal

# =============================================================================
# Type Definitions - All Literal Types and Type Aliases
# =============================================================================

ExportFormat = Literal["text", "markdown", "latex", "json"]
MatchType = Literal["start", "end", "single", "contains"]

SUPPORTED_EXPORT_FORMATS: tuple[str, ...] = ("text", "markdown", "latex", "json")

# =============================================================================
# Rendering
# =============================================================================

LATEX_BLOCK_SEPARATOR = "\n"
MARKDOWN_BLOCK_SEPARATOR = "\n\n"
TEXT_BLOCK_SEPARATOR = "\n"

DEFAULT_JSON_INDENT = 2
DEFAULT_SKIP_STYLES = False
DEFAULT_MARKDOWN_MATH = False
DEFAULT_INCLUDE_CHILDREN = True

# Characters escaped with a leading backslash in LaTeX text
LATEX_SPECIAL_CHARS = frozenset("&%#_{}~^\\")

# Section level -> LaTeX sectioning command
LATEX_SECTION_COMMANDS: dict[int, str] = {
    1: "section",
    2: "subsection",
    3: "subsubsection",
    4: "paragraph",
    5: "subparagraph",
}

# Sections at or beyond this level are not numbered
UNNUMBERED_SECTION_LEVEL = 4

STYLE_TO_LATEX: dict[str, str] = {
    "bold": "textbf",
    "italic": "emph",
    "small-caps": "textsc",
    "sans-serif": "textsf",
    "monospace": "texttt",
    "normal": "textup",
    "xx-small": "texttiny",
    "x-small": "textscriptsize",
    "small": "textsmall",
    "medium": "textnormal",
    "large": "textlarge",
    "xx-large": "texthuge",
    "superscript": "textsuperscript",
    "subscript": "textsubscript",
    "underline": "underline",
    "double-underline": "uuline",
    "overline": "overline",
    "line-through": "sout",
    "uppercase": "uppercase",
    "lowercase": "lowercase",
}

# Markdown wrappers, applied in this order
MARKDOWN_STYLE_ORDER: tuple[str, ...] = (
    "monospace",
    "bold",
    "italic",
    "underline",
    "double-underline",
    "line-through",
    "superscript",
    "subscript",
)

MARKDOWN_STYLE_WRAPPERS: dict[str, tuple[str, str]] = {
    "monospace": ("`", "`"),
    "bold": ("**", "**"),
    "italic": ("*", "*"),
    "underline": ("<u>", "</u>"),
    "double-underline": ('<u style="text-decoration: underline double">', "</u>"),
    "line-through": ("~~", "~~"),
    "superscript": ("<sup>", "</sup>"),
    "subscript": ("<sub>", "</sub>"),
}

# =============================================================================
# Node Kinds
# =============================================================================

# Kinds that never get a block separator before them
INLINE_NODE_KINDS = frozenset({"text", "citation", "ref", "url", "footnote", "command"})

# Kinds that cannot be subdivided further for excerpt matching
LEAF_NODE_KINDS = frozenset({"text", "equation", "equation_array", "code", "ref", "citation"})

METADATA_NODE_KINDS = frozenset({"email", "affiliation", "address", "keywords", "thanks"})

# =============================================================================
# Matching
# =============================================================================

LATEX_REMOVAL_PATTERNS: tuple[str, ...] = (
    r"\\label\{[^}]*\}",
    r"(?<!\\)%[^\n]*",
)

LATEX_REPLACEMENT_PATTERNS: tuple[tuple[str, str], ...] = ((r"\$\$([\s\S]*?)\$\$", r"\\[\1\\]"),)

MARKDOWN_REMOVAL_PATTERNS: tuple[str, ...] = (
    r"<!--[\s\S]*?-->",
    r"(?m)^\s*\[[^\]]+\]:\s+\S+(?:\s+\"[^\"]*\")?$",
)

ELLIPSIS_PATTERN = r"\.{3,}|\u2026"

DEFAULT_FUZZY_THRESHOLD = 0.7
FUZZY_MIN_EXCERPT_LENGTH = 10
FUZZY_WINDOW_TOLERANCE = 0.3
FUZZY_STEP_DIVISOR = 10
FUZZY_EARLY_EXIT_SCORE = 0.95
FUZZY_START_TOLERANCE = 20
FUZZY_MIN_ANCHOR_WORD_LENGTH = 3
MIN_ELLIPSIS_FRAGMENT_LENGTH = 20
