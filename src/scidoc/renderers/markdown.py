#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/markdown.py
"""Markdown rendering of node trees.

This module provides the MarkdownRenderer class which converts document
nodes to Markdown with KaTeX-compatible math. Block nodes that can be
referenced get an HTML anchor (``<a id="..."></a>``) so that cross
references render as in-page links.

Inside math (equation bodies, equation array rows) the renderer switches to
``math`` mode: anchors are suppressed and references use a math-safe
``[\\text{Ref ...}]`` form.

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
from scidoc.ast.figures import AssetNode, DiagramNode, IncludeGraphicsNode, IncludePdfNode, TableFigureNode
from scidoc.ast.lists import ListItemNode, ListNode
from scidoc.ast.metadata import MetadataNode
from scidoc.ast.nodes import ListType, Node, NodeRole
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
from scidoc.constants import MARKDOWN_BLOCK_SEPARATOR
from scidoc.options.base import resolve_asset_path
from scidoc.options.markdown import MarkdownExportOptions
from scidoc.options.plaintext import TextExportOptions
from scidoc.renderers.base import BaseRenderer
from scidoc.renderers.plaintext import PlainTextRenderer
from scidoc.utils.styles import wrap_styles_markdown


class MarkdownRenderer(BaseRenderer):
    r"""Render document nodes to Markdown.

    Parameters
    ----------
    options : MarkdownExportOptions or None, default = None
        Markdown rendering options

    Examples
    --------
        >>> from scidoc.ast import NodeFactory
        >>> from scidoc.renderers.markdown import MarkdownRenderer
        >>> node = NodeFactory().create_node({"type": "citation", "content": ["knuth84"]})
        >>> MarkdownRenderer().render_to_string([node])
        '[\\[knuth84\\]](#bib-knuth84)'

    """

    block_separator = MARKDOWN_BLOCK_SEPARATOR

    def __init__(self, options: MarkdownExportOptions | None = None):
        """Initialize the Markdown renderer with options."""
        BaseRenderer._validate_options_type(options, MarkdownExportOptions, "markdown")
        options = options or MarkdownExportOptions()
        BaseRenderer.__init__(self, options)
        self.options: MarkdownExportOptions = options
        self._math: Optional[MarkdownRenderer] = self if options.math else None

    def _math_renderer(self) -> MarkdownRenderer:
        """Renderer sharing these options with ``math`` switched on."""
        if self._math is None:
            self._math = MarkdownRenderer(self.options.create_updated(math=True))
        return self._math

    def _create_fallback_renderer(self) -> Optional[BaseRenderer]:
        return PlainTextRenderer(
            TextExportOptions(
                asset_path_resolver=self.options.asset_path_resolver,
                label_resolver=self.options.label_resolver,
            )
        )

    def _anchor(self, node: Node) -> str:
        if self.options.math:
            return ""
        anchor_id = node.get_anchor_id()
        return f'<a id="{anchor_id}"></a>\n\n' if anchor_id else ""

    def _content(self, node: Node) -> str:
        return self.render_children(node, NodeRole.CONTENT)

    @staticmethod
    def _quote_lines(text: str) -> str:
        return "> " + text.replace("\n", "  \n> ")

    # Text

    def visit_text(self, node: TextNode) -> str:
        text = node.text
        if not text:
            return ""
        content = text.replace("\n", "\n\n")
        if node.styles and not self.options.skip_styles:
            content = wrap_styles_markdown(content, node.styles)
        return content

    def visit_quote(self, node: QuoteNode) -> str:
        return f"{self._anchor(node)}{self._quote_lines(self._content(node))}"

    def visit_caption(self, node: CaptionNode) -> str:
        return f"Caption: *{self._content(node)}*"

    # Document structure

    def visit_document(self, node: DocumentNode) -> str:
        return self._content(node)

    def visit_title(self, node: TitleNode) -> str:
        return f"{self._anchor(node)}# {self._content(node)}"

    def visit_maketitle(self, node: MakeTitleNode) -> str:
        return self._content(node)

    def visit_group(self, node: GroupNode) -> str:
        return self._content(node)

    def visit_environment(self, node: EnvironmentNode) -> str:
        return self._content(node)

    def visit_section(self, node: SectionNode) -> str:
        title = self.render_children(node, NodeRole.TITLE)
        hashes = "#" * min(node.level + 1, 6)
        if node.numbering:
            title = f"{node.numbering}: {title}"
        return f"{self._anchor(node)}{hashes} {title}\n---\n\n{self._content(node)}"

    def visit_abstract(self, node: AbstractNode) -> str:
        return f"{self._anchor(node)}## Abstract\n\n{self._quote_lines(self._content(node))}"

    def visit_appendix(self, node: AppendixNode) -> str:
        return f"# Appendix\n\n{self._content(node)}"

    def visit_math_env(self, node: MathEnvNode) -> str:
        heading = node.display_name
        if node.numbering:
            heading += f" {node.numbering}"
        title = self.render_children(node, NodeRole.TITLE)
        if title:
            heading += f": {title}"
        return f"{self._anchor(node)}<u><b>{heading}</b></u>\n\n{self._content(node)}"

    def visit_command(self, node: CommandNode) -> str:
        return node.latex_command

    # Math and technical

    @staticmethod
    def _tag(numbering: Optional[str], is_inline: bool) -> str:
        if numbering:
            return f" \\tag{{{numbering}}}"
        return "" if is_inline else " \\notag"

    def visit_equation(self, node: EquationNode) -> str:
        expression = node.expression
        if expression is None:
            math = self._math_renderer()
            expression = "".join(math.render_node(child) for child in node.children)
        if not expression.strip():
            return ""
        expression += self._tag(node.numbering, node.is_inline)

        if node.is_inline:
            # Padded so the delimiters are not glued to adjacent words
            return f" ${expression}$ "
        if self.options.math:
            return expression
        return f"{self._anchor(node)}$$\n{expression}\n$$\n\n"

    def visit_equation_array(self, node: EquationArrayNode) -> str:
        math = self._math_renderer()
        content = " \\\\\n".join(math.render_node(row) for row in node.rows)
        body = f"\\begin{{{node.name}}}\n{content}\n\\end{{{node.name}}}"
        if self.options.math:
            return body + "\n"
        return f"$$\n{body}\n$$"

    def visit_equation_row(self, node: EquationRowNode) -> str:
        math = self._math_renderer()
        cells = ["".join(math.render_node(child) for child in column) for column in node.columns]
        return " & ".join(cells) + self._tag(node.numbering, False)

    def visit_code(self, node: CodeNode) -> str:
        if node.is_inline:
            return f"`{node.code}`"
        return f"{self._anchor(node)}```{node.language}\n{node.code}\n```"

    def visit_algorithm(self, node: AlgorithmNode) -> str:
        heading = f"Algorithm {node.numbering}" if node.numbering else "Algorithm"
        return f"{self._anchor(node)}<u><b>{heading}</b></u>\n\n{self._content(node)}"

    def visit_algorithmic(self, node: AlgorithmicNode) -> str:
        return f"{self._anchor(node)}```pseudocode\n{node.source}\n```"

    # References

    def visit_citation(self, node: CitationNode) -> str:
        note = node.title_text.strip()
        return ", ".join(f"[\\[{note or key}\\]](#bib-{key})" for key in node.keys)

    def visit_ref(self, node: ReferenceNode) -> str:
        links = []
        for label in node.targets:
            text = label
            anchor = label
            resolved = self._resolve_label(label)
            if resolved is not None:
                get_text = getattr(resolved, "get_reference_text", None)
                get_anchor = getattr(resolved, "get_anchor_id", None)
                text = (get_text() if callable(get_text) else None) or label
                anchor = (get_anchor() if callable(get_anchor) else None) or label
            if self.options.math:
                links.append(f"[\\text{{Ref {text}}}]")
            else:
                links.append(f"[{text}](#{anchor})")
        return ", ".join(links)

    def visit_url(self, node: UrlNode) -> str:
        return node.path

    def visit_footnote(self, node: FootnoteNode) -> str:
        return f"`footnote:{self._content(node)}`"

    def visit_bibliography(self, node: BibliographyNode) -> str:
        return f"{self._anchor(node)}## References\n\n{self._content(node)}"

    def visit_bibitem(self, node: BibItemNode) -> str:
        anchor = "" if self.options.math else f'<a id="{node.get_anchor_id()}"></a>'
        return f"- {anchor}[{node.key}] {node.get_content_str()}"

    # Lists

    def visit_list(self, node: ListNode) -> str:
        return f"{self._anchor(node)}{self._content(node)}"

    def visit_list_item(self, node: ListItemNode) -> str:
        parent = node.parent_list
        marker = "-"
        indentation = ""
        if parent is not None:
            indentation = "  " * parent.compute_depth()
            if parent.list_type is ListType.ENUMERATE:
                marker = f"{parent.get_item_index(node) + 1}."
            elif parent.list_type is ListType.DESCRIPTION:
                title = self.render_children(node, NodeRole.TITLE)
                return f"{indentation}**{title}**: {self._content(node)}"
        return f"{indentation}{marker} {self._content(node).strip()}"

    # Figures and tables

    def visit_table_figure(self, node: TableFigureNode) -> str:
        heading = node.environment_name
        if node.numbering:
            heading += f" {node.numbering}"
        return f"{self._anchor(node)}<u><b>{heading}</b></u>\n\n{self._content(node)}"

    def _asset(self, node: AssetNode) -> str:
        if not node.path:
            return ""
        return f"![ ]({resolve_asset_path(node.path, self.options)})"

    def visit_includegraphics(self, node: IncludeGraphicsNode) -> str:
        return self._asset(node)

    def visit_includepdf(self, node: IncludePdfNode) -> str:
        return self._asset(node)

    def visit_diagram(self, node: DiagramNode) -> str:
        return self._asset(node)

    def visit_tabular(self, node: TabularNode) -> str:
        rows = node.rows
        if not rows:
            return ""
        if node.has_spans():
            return self._html_table(node)

        lines = []
        for index, row in enumerate(rows):
            row_content = self.render_node(row).strip()
            if not row_content:
                continue
            lines.append(f"| {row_content} |")
            if index == 0:
                lines.append("| " + " | ".join("---" for _ in row.cells) + " |")
        return "\n".join(lines) + "\n" if lines else ""

    def _html_table(self, node: TabularNode) -> str:
        lines = ["<table>"]
        for row in node.rows:
            cells = []
            for cell in row.cells:
                attrs = ""
                if cell.rowspan > 1:
                    attrs += f' rowspan="{cell.rowspan}"'
                if cell.colspan > 1:
                    attrs += f' colspan="{cell.colspan}"'
                cells.append(f"<td{attrs}>{self.render_node(cell)}</td>")
            lines.append(f"<tr>{''.join(cells)}</tr>")
        lines.append("</table>")
        return "\n".join(lines) + "\n"

    def visit_table_row(self, node: TableRowNode) -> str:
        return " | ".join(self.render_node(cell) for cell in node.cells)

    def visit_table_cell(self, node: TableCellNode) -> str:
        return self.render_children(node).strip()

    # Metadata

    def visit_metadata(self, node: MetadataNode) -> str:
        return f"{node.type_label}: *{self._content(node)}*"
