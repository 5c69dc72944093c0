#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/latex.py
r"""LaTeX rendering of node trees.

This module provides the LatexRenderer class which converts document nodes
back to LaTeX source. Text is escaped and decorated with style commands,
environments are reopened around their children and every labelled block
re-emits its ``\label`` commands.

"""

from __future__ import annotations

from typing import Optional

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
from scidoc.ast.nodes import Node, NodeRole
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
from scidoc.constants import LATEX_BLOCK_SEPARATOR, LATEX_SECTION_COMMANDS
from scidoc.options.base import resolve_asset_path
from scidoc.options.latex import LatexExportOptions
from scidoc.options.plaintext import TextExportOptions
from scidoc.renderers.base import BaseRenderer
from scidoc.renderers.plaintext import PlainTextRenderer
from scidoc.utils.escape import escape_latex
from scidoc.utils.styles import wrap_styles_latex
from scidoc.utils.tokens import tokens_to_text


class LatexRenderer(BaseRenderer):
    r"""Render document nodes to LaTeX source.

    Parameters
    ----------
    options : LatexExportOptions or None, default = None
        LaTeX rendering options

    Examples
    --------
    Basic usage:

        >>> from scidoc.ast import NodeFactory
        >>> from scidoc.renderers.latex import LatexRenderer
        >>> node = NodeFactory().create_node({"type": "text", "content": "bold text", "styles": ["bold"]})
        >>> LatexRenderer().render_to_string([node])
        '\\textbf{bold text}'

    """

    block_separator = LATEX_BLOCK_SEPARATOR

    def __init__(self, options: LatexExportOptions | None = None):
        """Initialize the LaTeX renderer with options."""
        BaseRenderer._validate_options_type(options, LatexExportOptions, "latex")
        options = options or LatexExportOptions()
        BaseRenderer.__init__(self, options)
        self.options: LatexExportOptions = options
        self._copy = PlainTextRenderer()

    def _create_fallback_renderer(self) -> Optional[BaseRenderer]:
        return PlainTextRenderer(
            TextExportOptions(
                asset_path_resolver=self.options.asset_path_resolver,
                label_resolver=self.options.label_resolver,
            )
        )

    def _content(self, node: Node) -> str:
        return self.render_children(node, NodeRole.CONTENT)

    def _environment(self, name: str, node: Node, content: Optional[str] = None, header: str = "") -> str:
        if content is None:
            content = self._content(node)
        return f"\\begin{{{name}}}{header}\n{node.get_labels_latex()}{content}\n\\end{{{name}}}\n"

    # Text

    def visit_text(self, node: TextNode) -> str:
        text = node.text
        if not text:
            return ""
        content = escape_latex(text).replace("\n", "\n\n")
        if node.styles and not self.options.skip_styles:
            content = wrap_styles_latex(content, node.styles)
        return content

    def visit_quote(self, node: QuoteNode) -> str:
        return self._environment("quote", node)

    def visit_caption(self, node: CaptionNode) -> str:
        return f"\\caption{{{self._content(node)}}}"

    # Document structure

    def visit_document(self, node: DocumentNode) -> str:
        return self._environment("document", node)

    def visit_title(self, node: TitleNode) -> str:
        return f"\\title{{{self._content(node)}}}"

    def visit_maketitle(self, node: MakeTitleNode) -> str:
        return f"{self._content(node)}\n\\maketitle\n"

    def visit_group(self, node: GroupNode) -> str:
        return self._content(node)

    def visit_environment(self, node: EnvironmentNode) -> str:
        return self._environment(node.name or "environment", node)

    def visit_section(self, node: SectionNode) -> str:
        command = LATEX_SECTION_COMMANDS.get(node.level, "section")
        title = self.render_children(node, NodeRole.TITLE)
        return f"\\{command}{{{title}}}\n{node.get_labels_latex()}{self._content(node)}\n"

    def visit_abstract(self, node: AbstractNode) -> str:
        return f"\\begin{{abstract}}\n{node.get_labels_latex()}{self._content(node)}\n\\end{{abstract}}"

    def visit_appendix(self, node: AppendixNode) -> str:
        return self._environment("appendices", node)

    def visit_math_env(self, node: MathEnvNode) -> str:
        title = self.render_children(node, NodeRole.TITLE)
        header = f"[{title}]" if title else ""
        return self._environment(node.name.lower(), node, header=header)

    def visit_command(self, node: CommandNode) -> str:
        return node.latex_command

    # Math and technical

    def visit_equation(self, node: EquationNode) -> str:
        expression = node.expression
        if expression is None:
            expression = "".join(self._copy.render_node(child) for child in node.children)
        expression = expression.strip()

        if node.is_inline:
            return f"${expression}$"
        labels = node.get_labels_latex()
        if node.numbering:
            return f"\\begin{{equation}}\n{labels}{expression}\n\\end{{equation}}"
        return f"$$\n{labels}{expression}\n$$"

    def visit_equation_array(self, node: EquationArrayNode) -> str:
        content = " \\\\ \n".join(self.render_node(row) for row in node.rows)
        args = "".join(f"{{{arg}}}" for arg in node.args)
        return f"\\begin{{{node.name}}}{args}\n{content.strip()}\n\\end{{{node.name}}}\n"

    def visit_equation_row(self, node: EquationRowNode) -> str:
        cells = []
        for column in node.columns:
            # Math mode: text is emitted verbatim
            cells.append(
                "".join(child.text if isinstance(child, TextNode) else self.render_node(child) for child in column)
            )
        return " & ".join(cells).strip()

    def visit_code(self, node: CodeNode) -> str:
        if node.is_inline:
            return f"\\verb|{node.code}|"
        header = f"[{node.language}]" if node.language else ""
        return f"\\begin{{lstlisting}}{header}\n{node.code}\n\\end{{lstlisting}}\n"

    def visit_algorithm(self, node: AlgorithmNode) -> str:
        return self._environment("algorithm", node)

    def visit_algorithmic(self, node: AlgorithmicNode) -> str:
        return self._environment("algorithmic", node, content=node.source)

    # References

    def visit_citation(self, node: CitationNode) -> str:
        note = node.title_text.strip()
        note = f"[{note}]" if note else ""
        return f"\\cite{note}{{{','.join(node.keys)}}}"

    def visit_ref(self, node: ReferenceNode) -> str:
        note = node.title_text.strip()
        note = f"[{note}]" if note else ""
        return f"\\ref{note}{{{','.join(node.targets)}}}"

    def visit_url(self, node: UrlNode) -> str:
        return f"\\url{{{node.path}}}"

    def visit_footnote(self, node: FootnoteNode) -> str:
        content = node.content
        text = tokens_to_text(content) if isinstance(content, list) else str(content or "")
        return f"\\footnote{{{text}}}"

    def visit_bibliography(self, node: BibliographyNode) -> str:
        return self._environment("thebibliography", node, header="{99}")

    def visit_bibitem(self, node: BibItemNode) -> str:
        bibtex = node.get_bibtex_str()
        if bibtex:
            return bibtex
        return f"\\bibitem{{{node.key}}}\n{node.get_content_str()}"

    # Lists

    def visit_list(self, node: ListNode) -> str:
        name = node.list_type.value
        labels = "" if node.is_inline else node.get_labels_latex()
        return f"\\begin{{{name}}}\n{labels}{self._content(node)}\n\\end{{{name}}}\n"

    def visit_list_item(self, node: ListItemNode) -> str:
        title = self._copy.render_nodes(node.title_children)
        bullet = f"[{title}]" if title else ""
        return f"\\item{bullet} {self._content(node)}"

    # Figures and tables

    def visit_table_figure(self, node: TableFigureNode) -> str:
        name = node.environment_name.lower()
        return f"\\begin{{{name}}}\n{self._content(node).strip()}\n\\end{{{name}}}\n"

    def visit_includegraphics(self, node: IncludeGraphicsNode) -> str:
        if not node.path:
            return ""
        return f"\\includegraphics{{{resolve_asset_path(node.path, self.options)}}}"

    def visit_includepdf(self, node: IncludePdfNode) -> str:
        if not node.path:
            return ""
        return f"\\includepdf{{{resolve_asset_path(node.path, self.options)}}}"

    def visit_diagram(self, node: DiagramNode) -> str:
        if not node.path:
            return node.code
        path = resolve_asset_path(node.path, self.options)
        if path.lower().endswith(".svg"):
            include = f"\\includesvg{{{path[:-4]}}}"
        else:
            include = f"\\includegraphics{{{path}}}"
        return f"\n% Alternatively use path: \n% {include}\n{node.code}"

    def visit_tabular(self, node: TabularNode) -> str:
        content = " \\\\ \n".join(self.render_node(row) for row in node.rows)
        return f"\\begin{{tabular}}\n{content}\n\\end{{tabular}}\n"

    def visit_table_row(self, node: TableRowNode) -> str:
        return " & ".join(self.render_node(cell) for cell in node.cells)

    def visit_table_cell(self, node: TableCellNode) -> str:
        content = ""
        if node.has_children():
            content = self.render_children(node).strip()
            if len(content) > 1 and len(node.children) > 1:
                content = f"\\makecell{{{content}}}"
        output = content.strip()
        if node.rowspan > 1:
            output = f"\\multirow{{{node.rowspan}}}{{*}}{{{output}}}"
        if node.colspan > 1:
            output = f"\\multicolumn{{{node.colspan}}}{{*}}{{{output}}}"
        return output

    # Metadata

    def visit_metadata(self, node: MetadataNode) -> str:
        return f"\\{node.kind.value}{{{self._content(node)}}}"
