#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/content.py
"""Text-bearing node kinds: text runs, quotes and captions."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from scidoc.ast.nodes import ContainerNode, Node, NodeFactoryProtocol, NodeKind

FLOAT_NODE_KINDS = frozenset({NodeKind.FIGURE, NodeKind.SUBFIGURE, NodeKind.TABLE, NodeKind.SUBTABLE})


class TextNode(Node):
    """A run of text with optional styles.

    Parameters
    ----------
    data : Mapping[str, Any]
        ``{"type": "text", "content": str, "styles": [...]}``

    """

    @property
    def text(self) -> str:
        content = self.content
        return content if isinstance(content, str) else ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_text(self)


class QuoteNode(ContainerNode):
    """A quotation block."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_quote(self)


class CaptionNode(ContainerNode):
    """Caption of a figure or table.

    Captions never carry styles of their own. The reference text combines the
    counter name (or the enclosing float's environment name) with the full
    numbering, e.g. ``Figure 2.1`` for a caption numbered ``1`` inside a
    sub-figure of figure ``2``.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        self.styles = []

    @property
    def counter_name(self) -> Optional[str]:
        return self._data.get("counter_name")

    def get_parent_float(self) -> Optional[Node]:
        """Return the nearest enclosing figure, table or sub-float."""
        return self.find_parent_matching(lambda node: node.kind in FLOAT_NODE_KINDS)

    def get_full_numbering(self) -> Optional[str]:
        if not self.numbering:
            return None
        parent = self.get_parent_float()
        if parent is None:
            return self.numbering
        top = parent.find_parent_matching(lambda node: node.kind in FLOAT_NODE_KINDS)
        if top is None or not top.numbering:
            return self.numbering
        return f"{top.numbering}.{self.numbering}"

    def get_reference_text(self) -> Optional[str]:
        numbering = self.get_full_numbering()
        if not numbering:
            return None
        name = self.counter_name
        if not name:
            parent = self.get_parent_float()
            if parent is None:
                return None
            name = getattr(parent, "environment_name", parent.kind.value)
        return f"{name[:1].upper()}{name[1:]} {numbering}"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_caption(self)
