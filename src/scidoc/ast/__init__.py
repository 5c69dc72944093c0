#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/__init__.py
"""Typed document AST for scientific documents.

The module consists of several components:

- nodes: the :class:`Node` base class, container bases and enumerations
- content, document, technical, references, lists, figures, tabular,
  metadata: the concrete node kinds
- factory: :class:`NodeFactory`, which builds nodes from raw tagged data
- visitors: the :class:`NodeVisitor` base class renderers derive from

Examples
--------
Basic usage:

    >>> from scidoc.ast import NodeFactory
    >>> factory = NodeFactory()
    >>> section = factory.create_node({
    ...     "type": "section",
    ...     "level": 1,
    ...     "numbering": "1",
    ...     "title": [{"type": "text", "content": "Introduction"}],
    ...     "content": [{"type": "text", "content": "Hello"}],
    ... })
    >>> section.get_anchor_id()
    'sec-1'

"""

from __future__ import annotations

from scidoc.ast.content import FLOAT_NODE_KINDS, CaptionNode, QuoteNode, TextNode
from scidoc.ast.document import (
    AbstractNode,
    AppendixNode,
    DocumentNode,
    EnvironmentNode,
    GroupNode,
    MakeTitleNode,
    MathEnvNode,
    SectionNode,
    TitleNode,
)
from scidoc.ast.factory import NodeFactory
from scidoc.ast.figures import (
    AssetNode,
    DiagramNode,
    FigureNode,
    IncludeGraphicsNode,
    IncludePdfNode,
    SubFigureNode,
    SubTableNode,
    TableFigureNode,
    TableNode,
)
from scidoc.ast.lists import ListItemNode, ListNode
from scidoc.ast.metadata import AuthorNode, MetadataNode
from scidoc.ast.nodes import (
    BibFormat,
    ContainerNode,
    DisplayType,
    ListType,
    Node,
    NodeFactoryProtocol,
    NodeKind,
    NodeRole,
    TitledNode,
)
from scidoc.ast.references import (
    BibItemNode,
    BibliographyNode,
    CitationNode,
    FootnoteNode,
    ReferenceNode,
    UrlNode,
)
from scidoc.ast.tabular import TableCellNode, TableRowNode, TabularNode
from scidoc.ast.technical import (
    AlgorithmicNode,
    AlgorithmNode,
    CodeNode,
    CommandNode,
    EquationArrayNode,
    EquationNode,
    EquationRowNode,
)
from scidoc.ast.visitors import NodeVisitor

__all__ = [
    # Base classes and enumerations
    "BibFormat",
    "ContainerNode",
    "DisplayType",
    "ListType",
    "Node",
    "NodeFactory",
    "NodeFactoryProtocol",
    "NodeKind",
    "NodeRole",
    "NodeVisitor",
    "TitledNode",
    "FLOAT_NODE_KINDS",
    # Node kinds
    "AbstractNode",
    "AlgorithmNode",
    "AlgorithmicNode",
    "AppendixNode",
    "AssetNode",
    "AuthorNode",
    "BibItemNode",
    "BibliographyNode",
    "CaptionNode",
    "CitationNode",
    "CodeNode",
    "CommandNode",
    "DiagramNode",
    "DocumentNode",
    "EnvironmentNode",
    "EquationArrayNode",
    "EquationNode",
    "EquationRowNode",
    "FigureNode",
    "FootnoteNode",
    "GroupNode",
    "IncludeGraphicsNode",
    "IncludePdfNode",
    "ListItemNode",
    "ListNode",
    "MakeTitleNode",
    "MathEnvNode",
    "MetadataNode",
    "QuoteNode",
    "ReferenceNode",
    "SectionNode",
    "SubFigureNode",
    "SubTableNode",
    "TableCellNode",
    "TableFigureNode",
    "TableNode",
    "TableRowNode",
    "TabularNode",
    "TextNode",
    "TitleNode",
    "UrlNode",
]
