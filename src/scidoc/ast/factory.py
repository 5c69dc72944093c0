#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/factory.py
"""Node factory: builds typed nodes from raw tagged data.

The factory owns the single mapping from :class:`NodeKind` to node class.
Container nodes receive the factory so they can build their own children.

Examples
--------
    >>> factory = NodeFactory()
    >>> node = factory.create_node({"type": "text", "content": "Hello"})
    >>> node.kind
    <NodeKind.TEXT: 'text'>

"""

from __future__ import annotations

import logging
from typing import Any, Iterable, Mapping, Optional

from scidoc.ast.content import CaptionNode, QuoteNode, TextNode
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
from scidoc.ast.figures import (
    DiagramNode,
    FigureNode,
    IncludeGraphicsNode,
    IncludePdfNode,
    SubFigureNode,
    SubTableNode,
    TableNode,
)
from scidoc.ast.lists import ListItemNode, ListNode
from scidoc.ast.metadata import AuthorNode, MetadataNode
from scidoc.ast.nodes import Node, NodeFactoryProtocol, NodeKind
from scidoc.ast.references import (
    BibItemNode,
    BibliographyNode,
    CitationNode,
    FootnoteNode,
    ReferenceNode,
    UrlNode,
)
from scidoc.ast.tabular import TabularNode
from scidoc.ast.technical import (
    AlgorithmicNode,
    AlgorithmNode,
    CodeNode,
    CommandNode,
    EquationArrayNode,
    EquationNode,
    EquationRowNode,
)

logger = logging.getLogger(__name__)

__all__ = ["NodeFactory", "NodeFactoryProtocol"]

_NODE_CLASSES: dict[NodeKind, type[Node]] = {
    NodeKind.DOCUMENT: DocumentNode,
    NodeKind.TITLE: TitleNode,
    NodeKind.SECTION: SectionNode,
    NodeKind.ABSTRACT: AbstractNode,
    NodeKind.APPENDIX: AppendixNode,
    NodeKind.COMMAND: CommandNode,
    NodeKind.MAKETITLE: MakeTitleNode,
    NodeKind.TEXT: TextNode,
    NodeKind.QUOTE: QuoteNode,
    NodeKind.ENVIRONMENT: EnvironmentNode,
    NodeKind.MATH_ENV: MathEnvNode,
    NodeKind.GROUP: GroupNode,
    NodeKind.FIGURE: FigureNode,
    NodeKind.SUBFIGURE: SubFigureNode,
    NodeKind.TABLE: TableNode,
    NodeKind.SUBTABLE: SubTableNode,
    NodeKind.TABULAR: TabularNode,
    NodeKind.CAPTION: CaptionNode,
    NodeKind.INCLUDEGRAPHICS: IncludeGraphicsNode,
    NodeKind.INCLUDEPDF: IncludePdfNode,
    NodeKind.DIAGRAM: DiagramNode,
    NodeKind.LIST: ListNode,
    NodeKind.ITEM: ListItemNode,
    NodeKind.EQUATION: EquationNode,
    NodeKind.EQUATION_ARRAY: EquationArrayNode,
    NodeKind.ROW: EquationRowNode,
    NodeKind.CODE: CodeNode,
    NodeKind.ALGORITHM: AlgorithmNode,
    NodeKind.ALGORITHMIC: AlgorithmicNode,
    NodeKind.CITATION: CitationNode,
    NodeKind.REF: ReferenceNode,
    NodeKind.URL: UrlNode,
    NodeKind.FOOTNOTE: FootnoteNode,
    NodeKind.BIBLIOGRAPHY: BibliographyNode,
    NodeKind.BIBITEM: BibItemNode,
    NodeKind.AUTHOR: AuthorNode,
    NodeKind.EMAIL: MetadataNode,
    NodeKind.AFFILIATION: MetadataNode,
    NodeKind.ADDRESS: MetadataNode,
    NodeKind.KEYWORDS: MetadataNode,
    NodeKind.THANKS: MetadataNode,
}


class NodeFactory:
    """Create nodes from raw tagged mappings.

    Parameters
    ----------
    excluded_kinds : Iterable[NodeKind or str], optional
        Kinds for which :meth:`create_node` returns None. Excluded kinds are
        dropped together with their subtrees.

    Notes
    -----
    ``table_row`` and ``table_cell`` are built by their tabular parent, never
    from tagged data; the factory treats them as unknown.

    """

    def __init__(self, excluded_kinds: Optional[Iterable[NodeKind | str]] = None):
        self.excluded_kinds: frozenset[NodeKind] = frozenset(NodeKind(kind) for kind in excluded_kinds or ())

    def create_node(self, data: Mapping[str, Any], node_id: Optional[str] = None) -> Optional[Node]:
        """Build one node (and, for containers, its subtree).

        Parameters
        ----------
        data : Mapping[str, Any]
            Raw tagged data with a ``type`` key
        node_id : str, optional
            Explicit id for the new node

        Returns
        -------
        Node or None
            The node, or None when the tag is missing, unknown or excluded

        """
        if not isinstance(data, Mapping):
            logger.warning("Skipping non-mapping node data of type %s", type(data).__name__)
            return None

        type_tag = data.get("type")
        try:
            kind = NodeKind(type_tag)
        except ValueError:
            logger.warning("Skipping node with unknown type %r", type_tag)
            return None

        if kind in self.excluded_kinds:
            logger.debug("Skipping excluded node kind '%s'", kind.value)
            return None

        node_class = _NODE_CLASSES.get(kind)
        if node_class is None:
            logger.warning("No node class registered for type '%s'", kind.value)
            return None

        return node_class(data, node_id, self)

    def create_nodes(self, items: Iterable[Mapping[str, Any]]) -> list[Node]:
        """Build a list of top-level nodes, skipping items that fail.

        Each node's id is the item's own ``id`` or ``export-{index}``.
        """
        nodes: list[Node] = []
        for i, item in enumerate(items):
            node_id = item.get("id") if isinstance(item, Mapping) else None
            node = self.create_node(item, node_id or f"export-{i}")
            if node is not None:
                nodes.append(node)
        return nodes
