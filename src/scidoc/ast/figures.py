#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/figures.py
"""Figure, table and graphics node kinds.

Floats (figure, table and their sub-variants) share one base that knows
its environment name and anchor prefix. Asset nodes point at external
files through a ``path`` that renderers pass through the configured
asset path resolver.
"""

from __future__ import annotations

from typing import Any, ClassVar, Mapping, Optional

from scidoc.ast.content import FLOAT_NODE_KINDS, CaptionNode
from scidoc.ast.nodes import ContainerNode, Node, NodeFactoryProtocol


class TableFigureNode(ContainerNode):
    """Common base of figure, sub-figure, table and sub-table floats."""

    environment_name: ClassVar[str] = "Figure"
    anchor_prefix: ClassVar[str] = "fig"

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        self.styles = []

    def get_anchor_id(self) -> Optional[str]:
        anchor_id = super().get_anchor_id()
        if anchor_id:
            return anchor_id
        if self.numbering:
            return f"{self.anchor_prefix}-{self.numbering}"
        if self.labels:
            return f"{self.anchor_prefix}-{self.labels[0]}"
        return f"{self.anchor_prefix}-{self.id}"

    def get_captions(self, top_level_only: bool = True) -> list[CaptionNode]:
        """Return captions in this float, skipping nested floats when ``top_level_only``."""
        captions: list[CaptionNode] = []
        stack = list(reversed(self._children))
        while stack:
            node = stack.pop()
            if isinstance(node, CaptionNode):
                captions.append(node)
            if top_level_only and node.kind in FLOAT_NODE_KINDS:
                continue
            stack.extend(reversed(node.children))
        return captions

    def get_first_caption(self) -> Optional[CaptionNode]:
        captions = self.get_captions()
        return captions[0] if captions else None

    def get_reference_text(self) -> Optional[str]:
        caption = self.get_first_caption()
        if caption is not None:
            ref_text = caption.get_reference_text()
            if ref_text:
                return ref_text
        if not self.numbering:
            parent = self.find_parent_matching(lambda node: node.kind in FLOAT_NODE_KINDS)
            if parent is not None:
                return parent.get_reference_text()
            return None
        return f"{self.environment_name} {self.numbering}"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_figure(self)


class FigureNode(TableFigureNode):
    environment_name = "Figure"
    anchor_prefix = "fig"


class SubFigureNode(TableFigureNode):
    environment_name = "Figure"
    anchor_prefix = "subfig"


class TableNode(TableFigureNode):
    environment_name = "Table"
    anchor_prefix = "tab"


class SubTableNode(TableFigureNode):
    environment_name = "Table"
    anchor_prefix = "subtab"


class AssetNode(Node):
    """Base of nodes referencing an external file."""

    @property
    def path(self) -> Optional[str]:
        path = self._data.get("path")
        return str(path) if path else None

    @property
    def width(self) -> int:
        return int(self._data.get("width") or 0)

    @property
    def height(self) -> int:
        return int(self._data.get("height") or 0)


class IncludeGraphicsNode(AssetNode):
    """An ``\\includegraphics`` image."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_includegraphics(self)


class IncludePdfNode(AssetNode):
    """An ``\\includepdf`` page insert."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_includepdf(self)


class DiagramNode(AssetNode):
    """A drawn diagram (tikzpicture, picture, ...) with an optional rendered image."""

    @property
    def name(self) -> str:
        return str(self._data.get("name") or "")

    @property
    def code(self) -> str:
        content = self.content
        return content if isinstance(content, str) else ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_diagram(self)
