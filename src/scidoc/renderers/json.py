#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/json.py
"""JSON rendering of node trees.

This module provides the JsonRenderer class which converts nodes back to the
tagged data they were built from. Each node's source data is copied and its
``title``/``content`` lists are replaced by the JSON of the child nodes, so
that edits made to the tree (removed or re-parented children) are reflected
in the output. This is useful for:
- Persisting an edited tree
- Debugging and inspecting document structure
- Handing a subtree to a tool that consumes raw tokens

Unlike the text renderers there is no separator or span tracking; the output
is a list of mappings that ``json.dumps`` can serialize.
"""

from __future__ import annotations

import json
from typing import Any, Iterable

from scidoc.ast.figures import AssetNode
from scidoc.ast.nodes import Node, NodeRole
from scidoc.ast.tabular import TableCellNode, TableRowNode, TabularNode
from scidoc.ast.technical import EquationRowNode
from scidoc.ast.visitors import NodeVisitor
from scidoc.options.base import resolve_asset_path
from scidoc.options.json import JsonExportOptions
from scidoc.renderers.base import BaseRenderer


class JsonRenderer(NodeVisitor):
    """Render nodes to JSON-compatible data.

    Parameters
    ----------
    options : JsonExportOptions or None, default = None
        JSON rendering options

    Examples
    --------
    Basic usage:
        >>> from scidoc.ast import NodeFactory
        >>> from scidoc.renderers.json import JsonRenderer
        >>> node = NodeFactory().create_node({"type": "text", "content": "Hello"})
        >>> JsonRenderer().render_to_list([node])
        [{'type': 'text', 'content': 'Hello'}]

    Compact JSON output:
        >>> from scidoc.options.json import JsonExportOptions
        >>> renderer = JsonRenderer(JsonExportOptions(indent=None))
        >>> json_str = renderer.render_to_string([node])

    """

    def __init__(self, options: JsonExportOptions | None = None):
        """Initialize the JSON renderer with options."""
        BaseRenderer._validate_options_type(options, JsonExportOptions, "json")
        self.options: JsonExportOptions = options or JsonExportOptions()

    def render_node(self, node: Node) -> dict[str, Any]:
        """Render a single node to a mapping."""
        result = node.accept(self)
        return result if result is not None else {}

    def render_to_list(self, nodes: Iterable[Node]) -> list[dict[str, Any]]:
        """Render sibling nodes to a list of mappings."""
        return [self.render_node(node) for node in nodes]

    def render_to_string(self, nodes: Iterable[Node]) -> str:
        """Render sibling nodes to a JSON string.

        Parameters
        ----------
        nodes : iterable of Node
            Nodes to render

        Returns
        -------
        str
            JSON array, indented according to ``options.indent``

        """
        return json.dumps(self.render_to_list(nodes), indent=self.options.indent, ensure_ascii=False)

    # ------------------------------------------------------------------
    # Shared serializers
    # ------------------------------------------------------------------

    def _children_json(self, node: Node, role: NodeRole) -> list[dict[str, Any]] | None:
        children = self.render_to_list(node.get_children(role))
        return children or None

    def _visit_container(self, node: Node) -> dict[str, Any]:
        data = dict(node.data)
        # Scalar payloads (string content or title) are kept verbatim
        if isinstance(node.title, list):
            data["title"] = self._children_json(node, NodeRole.TITLE)
        if isinstance(node.content, list):
            data["content"] = self._children_json(node, NodeRole.CONTENT)
        return data

    def _visit_leaf(self, node: Node) -> dict[str, Any]:
        return dict(node.data)

    def _visit_asset(self, node: AssetNode) -> dict[str, Any]:
        data = dict(node.data)
        if node.path:
            data["path"] = resolve_asset_path(node.path, self.options)
        return data

    # Containers
    visit_document = _visit_container
    visit_title = _visit_container
    visit_maketitle = _visit_container
    visit_section = _visit_container
    visit_abstract = _visit_container
    visit_appendix = _visit_container
    visit_group = _visit_container
    visit_environment = _visit_container
    visit_math_env = _visit_container
    visit_command = _visit_container
    visit_quote = _visit_container
    visit_equation = _visit_container
    visit_equation_array = _visit_container
    visit_algorithm = _visit_container
    visit_footnote = _visit_container
    visit_bibliography = _visit_container
    visit_list = _visit_container
    visit_list_item = _visit_container
    visit_table_figure = _visit_container
    visit_caption = _visit_container
    visit_metadata = _visit_container

    # Leaves
    visit_text = _visit_leaf
    visit_code = _visit_leaf
    visit_algorithmic = _visit_leaf
    visit_citation = _visit_leaf
    visit_ref = _visit_leaf
    visit_url = _visit_leaf
    visit_bibitem = _visit_leaf

    # Assets
    visit_includegraphics = _visit_asset
    visit_includepdf = _visit_asset
    visit_diagram = _visit_asset

    def visit_equation_row(self, node: EquationRowNode) -> dict[str, Any]:
        data = dict(node.data)
        data["content"] = [self.render_to_list(column) for column in node.columns]
        return data

    def visit_tabular(self, node: TabularNode) -> dict[str, Any]:
        data = dict(node.data)
        data["content"] = [self.visit_table_row(row)["content"] for row in node.rows]
        return data

    def visit_table_row(self, node: TableRowNode) -> dict[str, Any]:
        return {"type": node.kind.value, "content": [self.visit_table_cell(cell) for cell in node.cells]}

    def visit_table_cell(self, node: TableCellNode) -> dict[str, Any]:
        cell: dict[str, Any] = {"content": self.render_to_list(node.children)}
        if node.rowspan > 1:
            cell["rowspan"] = node.rowspan
        if node.colspan > 1:
            cell["colspan"] = node.colspan
        if node.styles:
            cell["styles"] = list(node.styles)
        return cell
