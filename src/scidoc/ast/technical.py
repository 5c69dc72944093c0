#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/technical.py
"""Math and technical node kinds: equations, code, algorithms and commands."""

from __future__ import annotations

from typing import Any, Mapping, Optional

from scidoc.ast.nodes import ContainerNode, DisplayType, Node, NodeFactoryProtocol, NodeKind, NodeRole


class EquationNode(ContainerNode):
    """An inline or block equation.

    The payload is either a LaTeX string or a token list (e.g. text with
    embedded references); in the latter case the tokens become children.
    """

    @property
    def display(self) -> DisplayType:
        return DisplayType.BLOCK if self._data.get("display") == DisplayType.BLOCK.value else DisplayType.INLINE

    @property
    def expression(self) -> Optional[str]:
        """The LaTeX source when the payload is a plain string."""
        content = self.content
        return content if isinstance(content, str) else None

    def get_reference_text(self) -> Optional[str]:
        return f"({self.numbering})" if self.numbering else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_equation(self)


class EquationArrayNode(ContainerNode):
    """Multi-line math environment (align, array, matrix, ...) made of rows."""

    @property
    def name(self) -> str:
        return str(self._data.get("name") or "align")

    @property
    def args(self) -> list[str]:
        return [str(arg) for arg in self._data.get("args") or []]

    @property
    def rows(self) -> list[Node]:
        return [child for child in self._children if child.kind is NodeKind.ROW]

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_equation_array(self)


class EquationRowNode(Node):
    """One row of an equation array.

    Raw row content is a list of columns, each a list of tokens. All cell
    nodes become children of the row; :attr:`columns` regroups them.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        self._columns: list[list[Node]] = []
        for col_index, column in enumerate(self.content or []):
            cells = self._build_children(column, NodeRole.CONTENT, id_prefix=f"col-{col_index}")
            for child in cells:
                self.add_child(child)
            self._columns.append(cells)

    @property
    def columns(self) -> list[list[Node]]:
        """Cell nodes grouped by column, restricted to current children."""
        return [[node for node in column if node.parent is self] for column in self._columns]

    @property
    def is_inline(self) -> bool:
        parent = self.parent
        return parent is not None and parent.kind in (NodeKind.EQUATION_ARRAY, NodeKind.EQUATION)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_equation_row(self)


class CodeNode(Node):
    """Inline code or a code listing."""

    @property
    def code(self) -> str:
        content = self.content
        return content if isinstance(content, str) else ""

    @property
    def language(self) -> str:
        return str(self._data.get("language") or self._data.get("title") or "")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_code(self)


class AlgorithmNode(ContainerNode):
    """Floating ``algorithm`` environment."""

    def get_reference_text(self) -> Optional[str]:
        return f"Algorithm {self.numbering}" if self.numbering else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_algorithm(self)


class AlgorithmicNode(Node):
    """Pseudocode body of an algorithm, kept as raw source."""

    @property
    def source(self) -> str:
        content = self.content
        return content if isinstance(content, str) else ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_algorithmic(self)


class CommandNode(ContainerNode):
    """A bare LaTeX command such as ``\\and`` or ``\\today``."""

    @property
    def command(self) -> str:
        return str(self._data.get("command") or "")

    @property
    def latex_command(self) -> str:
        command = self.command
        return command if command.startswith("\\") else "\\" + command

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_command(self)
