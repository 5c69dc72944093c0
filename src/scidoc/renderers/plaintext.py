#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/plaintext.py
"""Plain copy-text rendering of node trees.

Copy-text is what a user gets when copying a node to the clipboard: text
runs without escaping or styles, titles above their bodies, and LaTeX source
for nodes that have no better textual form (equations, citations, commands).
It also serves as the fallback when locating nested nodes in rendered output.

"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

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
from scidoc.ast.nodes import Node, NodeRole, TitledNode
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
from scidoc.constants import TEXT_BLOCK_SEPARATOR
from scidoc.options.plaintext import TextExportOptions
from scidoc.renderers.base import BaseRenderer

if TYPE_CHECKING:
    from scidoc.renderers.latex import LatexRenderer


class PlainTextRenderer(BaseRenderer):
    """Render nodes to plain copy-text.

    Parameters
    ----------
    options : TextExportOptions or None, default = None
        Copy-text rendering options

    Examples
    --------
        >>> from scidoc.renderers.plaintext import PlainTextRenderer
        >>> PlainTextRenderer().render_to_string(nodes)

    """

    block_separator = TEXT_BLOCK_SEPARATOR

    def __init__(self, options: TextExportOptions | None = None):
        """Initialize the copy-text renderer with options."""
        BaseRenderer._validate_options_type(options, TextExportOptions, "text")
        options = options or TextExportOptions()
        BaseRenderer.__init__(self, options)
        self.options: TextExportOptions = options
        self._latex: Optional[LatexRenderer] = None

    def _latex_renderer(self) -> LatexRenderer:
        """LaTeX renderer for nodes whose copy-text is their LaTeX source."""
        if self._latex is None:
            from scidoc.renderers.latex import LatexRenderer

            self._latex = LatexRenderer()
        return self._latex

    def _content(self, node: Node) -> str:
        if not self.options.include_children:
            return ""
        return self.render_children(node, NodeRole.CONTENT)

    def _titled(self, node: TitledNode) -> str:
        title = self.render_children(node, NodeRole.TITLE)
        content = self._content(node)
        if title:
            return f"{title}\n\n{content}"
        return content

    # Text

    def visit_text(self, node: TextNode) -> str:
        text = node.text
        n = len(text)
        if n == 0:
            return ""
        start = self.options.start_offset if self.options.start_offset is not None else 0
        end = self.options.end_offset if self.options.end_offset is not None else n
        start = max(0, min(start, n))
        end = max(0, min(end, n))
        return text[start:end]

    def visit_quote(self, node: QuoteNode) -> str:
        return f"`\n{self._content(node)}\n`"

    def visit_caption(self, node: CaptionNode) -> str:
        return self._content(node) + "\n"

    # Document structure

    def visit_document(self, node: DocumentNode) -> str:
        return self._content(node)

    def visit_title(self, node: TitleNode) -> str:
        return self._content(node)

    def visit_maketitle(self, node: MakeTitleNode) -> str:
        return self._content(node)

    def visit_group(self, node: GroupNode) -> str:
        return self._content(node)

    def visit_environment(self, node: EnvironmentNode) -> str:
        return self._content(node)

    def visit_appendix(self, node: AppendixNode) -> str:
        return self._content(node)

    def visit_section(self, node: SectionNode) -> str:
        return self._titled(node)

    def visit_abstract(self, node: AbstractNode) -> str:
        return self._titled(node)

    def visit_math_env(self, node: MathEnvNode) -> str:
        heading = node.display_name
        if node.numbering:
            heading += f" {node.numbering}"
        title = self.render_children(node, NodeRole.TITLE)
        if title:
            heading += f": {title}"
        return f"{heading}\n\n{self._content(node)}"

    def visit_command(self, node: CommandNode) -> str:
        return node.latex_command

    # Math and technical

    def visit_equation(self, node: EquationNode) -> str:
        return self._latex_renderer().render_node(node)

    def visit_equation_array(self, node: EquationArrayNode) -> str:
        return self._latex_renderer().render_node(node)

    def visit_equation_row(self, node: EquationRowNode) -> str:
        return self._latex_renderer().render_node(node)

    def visit_code(self, node: CodeNode) -> str:
        return node.code

    def visit_algorithm(self, node: AlgorithmNode) -> str:
        return self._content(node)

    def visit_algorithmic(self, node: AlgorithmicNode) -> str:
        return node.source

    # References

    def visit_citation(self, node: CitationNode) -> str:
        return self._latex_renderer().render_node(node)

    def visit_ref(self, node: ReferenceNode) -> str:
        if self.options.label_resolver is None:
            return self._latex_renderer().render_node(node)
        texts = []
        for label in node.targets:
            resolved = self._resolve_label(label)
            get_text = getattr(resolved, "get_reference_text", None)
            texts.append((get_text() if callable(get_text) else None) or label)
        return ", ".join(texts)

    def visit_url(self, node: UrlNode) -> str:
        return node.path

    def visit_footnote(self, node: FootnoteNode) -> str:
        return self._latex_renderer().render_node(node)

    def visit_bibliography(self, node: BibliographyNode) -> str:
        return "\n".join(self.render_node(item) for item in node.items)

    def visit_bibitem(self, node: BibItemNode) -> str:
        return node.get_content_str()

    # Lists

    def visit_list(self, node: ListNode) -> str:
        return self._content(node)

    def visit_list_item(self, node: ListItemNode) -> str:
        return self._content(node)

    # Figures and tables

    def visit_table_figure(self, node: TableFigureNode) -> str:
        return self._content(node)

    def visit_includegraphics(self, node: IncludeGraphicsNode) -> str:
        return node.path or ""

    def visit_includepdf(self, node: IncludePdfNode) -> str:
        return node.path or ""

    def visit_diagram(self, node: DiagramNode) -> str:
        return node.path or ""

    def visit_tabular(self, node: TabularNode) -> str:
        return "\n".join(self.render_node(row) for row in node.rows)

    def visit_table_row(self, node: TableRowNode) -> str:
        return " ".join(self.render_node(cell) for cell in node.cells)

    def visit_table_cell(self, node: TableCellNode) -> str:
        return self.render_children(node).strip()

    # Metadata

    def visit_metadata(self, node: MetadataNode) -> str:
        return self._content(node)
