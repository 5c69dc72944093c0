"""scidoc - A typed document AST for scientific documents.

scidoc models sections, equations, figures, tables, citations and the rest
of a scientific paper as a tree of typed nodes, and renders that tree to
LaTeX, Markdown, plain copy-text and JSON. While rendering it can record the
character span every node produced, and it can run the reverse query: given
a text excerpt, find the node(s) that produced it.

Key Features
------------
- Node tree built from raw tagged data through a single node factory
- Visitor-based renderers sharing one recursive render loop
- Per-node span tracking for LaTeX and Markdown output
- Excerpt matching: exact, normalized, ellipsis-aware and fuzzy (LCS)

Requirements
------------
- Python 3.10+

Examples
--------
Rendering raw data:

    >>> from scidoc import DocumentExporter, NodeFactory
    >>> exporter = DocumentExporter(NodeFactory())
    >>> exporter.to_markdown([{"type": "text", "content": "bold", "styles": ["bold"]}])
    '**bold**'

Locating an excerpt:

    >>> from scidoc import SpanMatcher, create_latex_normalizer, to_latex_with_spans
    >>> result = to_latex_with_spans(nodes)
    >>> matcher = SpanMatcher(result.spans, result.content, create_latex_normalizer())
    >>> matcher.match_excerpt("some excerpt")

See Also
--------
scidoc.ast : Node definitions and the node factory
scidoc.matching : Span matcher, normalizers and fuzzy matching

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

# Check Python version before any imports
import sys

if sys.version_info < (3, 10):
    raise ImportError(
        "scidoc requires Python 3.10 or later. "
        f"You are using Python {sys.version_info.major}.{sys.version_info.minor}."
    )

__version__ = "0.1.0"

import logging

from scidoc.api import (
    DocumentExporter,
    export,
    to_json,
    to_latex,
    to_latex_with_spans,
    to_markdown,
    to_markdown_with_spans,
    to_text,
    tokens_to_text,
)
from scidoc.ast import Node, NodeFactory, NodeKind, NodeRole, NodeVisitor
from scidoc.exceptions import (
    FactoryRequiredError,
    FormatError,
    InvalidOptionsError,
    ScidocError,
    ValidationError,
)
from scidoc.matching import (
    MatchResult,
    SpanMatcher,
    create_latex_normalizer,
    create_markdown_normalizer,
    match_excerpt_with_fallback,
)
from scidoc.options import (
    JsonExportOptions,
    LatexExportOptions,
    MarkdownExportOptions,
    TextExportOptions,
)
from scidoc.spans import RenderResult, SpanInfo

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # API
    "DocumentExporter",
    "export",
    "to_json",
    "to_latex",
    "to_latex_with_spans",
    "to_markdown",
    "to_markdown_with_spans",
    "to_text",
    "tokens_to_text",
    # AST
    "Node",
    "NodeFactory",
    "NodeKind",
    "NodeRole",
    "NodeVisitor",
    # Spans and matching
    "MatchResult",
    "RenderResult",
    "SpanInfo",
    "SpanMatcher",
    "create_latex_normalizer",
    "create_markdown_normalizer",
    "match_excerpt_with_fallback",
    # Options
    "JsonExportOptions",
    "LatexExportOptions",
    "MarkdownExportOptions",
    "TextExportOptions",
    # Exceptions
    "FactoryRequiredError",
    "FormatError",
    "InvalidOptionsError",
    "ScidocError",
    "ValidationError",
]
