#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/visitors.py
"""Visitor pattern base class for AST traversal.

Each concrete node's ``accept`` calls exactly one ``visit_*`` method on the
visitor. Renderers are visitors; the recursion over children is driven by
the visitor, not by the nodes.

"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
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
    from scidoc.ast.figures import DiagramNode, IncludeGraphicsNode, IncludePdfNode, TableFigureNode
    from scidoc.ast.lists import ListItemNode, ListNode
    from scidoc.ast.metadata import MetadataNode
    from scidoc.ast.nodes import Node
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

logger = logging.getLogger(__name__)


class NodeVisitor(ABC):
    """Abstract base class for AST node visitors.

    Subclasses implement one ``visit_*`` method per node family. Node classes
    that are not part of the built-in catalog may call :meth:`generic_visit`
    from their ``accept``.

    Examples
    --------
    Collecting every equation expression:

        >>> class EquationCollector(NodeVisitor):
        ...     def visit_equation(self, node):
        ...         return [node.expression]
        ...     # ... remaining visit_* methods return [] or recurse

    """

    # Document structure

    @abstractmethod
    def visit_document(self, node: DocumentNode) -> Any:
        """Visit the root ``document`` node."""

    @abstractmethod
    def visit_title(self, node: TitleNode) -> Any:
        """Visit a document title."""

    @abstractmethod
    def visit_maketitle(self, node: MakeTitleNode) -> Any:
        """Visit a title block."""

    @abstractmethod
    def visit_section(self, node: SectionNode) -> Any:
        """Visit a section.

        Parameters
        ----------
        node : SectionNode
            The section, with title children first

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_abstract(self, node: AbstractNode) -> Any:
        """Visit the abstract."""

    @abstractmethod
    def visit_appendix(self, node: AppendixNode) -> Any:
        """Visit the appendices block."""

    @abstractmethod
    def visit_group(self, node: GroupNode) -> Any:
        """Visit a transparent group."""

    @abstractmethod
    def visit_environment(self, node: EnvironmentNode) -> Any:
        """Visit a generic named environment."""

    @abstractmethod
    def visit_math_env(self, node: MathEnvNode) -> Any:
        """Visit a theorem-like environment."""

    @abstractmethod
    def visit_command(self, node: CommandNode) -> Any:
        """Visit a bare command."""

    # Text

    @abstractmethod
    def visit_text(self, node: TextNode) -> Any:
        """Visit a text run.

        Parameters
        ----------
        node : TextNode
            The text node to visit

        Returns
        -------
        Any
            Result of processing this node

        """

    @abstractmethod
    def visit_quote(self, node: QuoteNode) -> Any:
        """Visit a quotation."""

    # Math and technical

    @abstractmethod
    def visit_equation(self, node: EquationNode) -> Any:
        """Visit an inline or block equation."""

    @abstractmethod
    def visit_equation_array(self, node: EquationArrayNode) -> Any:
        """Visit a multi-line math environment."""

    @abstractmethod
    def visit_equation_row(self, node: EquationRowNode) -> Any:
        """Visit one row of an equation array."""

    @abstractmethod
    def visit_code(self, node: CodeNode) -> Any:
        """Visit inline code or a listing."""

    @abstractmethod
    def visit_algorithm(self, node: AlgorithmNode) -> Any:
        """Visit an algorithm float."""

    @abstractmethod
    def visit_algorithmic(self, node: AlgorithmicNode) -> Any:
        """Visit pseudocode source."""

    # References

    @abstractmethod
    def visit_citation(self, node: CitationNode) -> Any:
        """Visit a citation."""

    @abstractmethod
    def visit_ref(self, node: ReferenceNode) -> Any:
        """Visit a cross reference."""

    @abstractmethod
    def visit_url(self, node: UrlNode) -> Any:
        """Visit a URL."""

    @abstractmethod
    def visit_footnote(self, node: FootnoteNode) -> Any:
        """Visit a footnote."""

    @abstractmethod
    def visit_bibliography(self, node: BibliographyNode) -> Any:
        """Visit the bibliography."""

    @abstractmethod
    def visit_bibitem(self, node: BibItemNode) -> Any:
        """Visit one bibliography entry."""

    # Lists

    @abstractmethod
    def visit_list(self, node: ListNode) -> Any:
        """Visit a list."""

    @abstractmethod
    def visit_list_item(self, node: ListItemNode) -> Any:
        """Visit a list item."""

    # Figures and tables

    @abstractmethod
    def visit_table_figure(self, node: TableFigureNode) -> Any:
        """Visit a figure, sub-figure, table or sub-table float."""

    @abstractmethod
    def visit_caption(self, node: CaptionNode) -> Any:
        """Visit a caption."""

    @abstractmethod
    def visit_includegraphics(self, node: IncludeGraphicsNode) -> Any:
        """Visit an included image."""

    @abstractmethod
    def visit_includepdf(self, node: IncludePdfNode) -> Any:
        """Visit an included PDF."""

    @abstractmethod
    def visit_diagram(self, node: DiagramNode) -> Any:
        """Visit a diagram."""

    @abstractmethod
    def visit_tabular(self, node: TabularNode) -> Any:
        """Visit a tabular grid."""

    @abstractmethod
    def visit_table_row(self, node: TableRowNode) -> Any:
        """Visit a tabular row."""

    @abstractmethod
    def visit_table_cell(self, node: TableCellNode) -> Any:
        """Visit a tabular cell."""

    # Metadata

    @abstractmethod
    def visit_metadata(self, node: MetadataNode) -> Any:
        """Visit an author, email, affiliation, address, keywords or thanks node."""

    def generic_visit(self, node: Node) -> Any:
        """Fallback for node classes without a dedicated visit method.

        The default implementation logs a warning and returns None.

        Parameters
        ----------
        node : Node
            The node to visit

        Returns
        -------
        Any
            Result of processing (default: None)

        """
        logger.warning("No visit method for node kind '%s' (%s)", node.kind.value, type(node).__name__)
        return None
