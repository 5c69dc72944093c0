#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/tabular.py
"""Tabular grid nodes.

Raw tabular data is a list of rows, each a list of cell mappings
``{"content": [...tokens], "rowspan": int, "colspan": int, "styles": [...]}``.
Rows and cells are not tagged in the raw data; the tabular node builds them
directly and they get the synthetic kinds ``table_row`` and ``table_cell``.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from scidoc.ast.nodes import Node, NodeFactoryProtocol, NodeKind, NodeRole


class TabularNode(Node):
    """A ``tabular`` grid of rows and cells."""

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        rows = self.content if isinstance(self.content, list) else []
        for row_index, row in enumerate(rows):
            self.add_child(TableRowNode(row, f"{self.id}/row-{row_index}", factory))

    @property
    def rows(self) -> list[TableRowNode]:
        return [child for child in self._children if isinstance(child, TableRowNode)]

    @property
    def column_count(self) -> int:
        return max((row.total_cols for row in self.rows), default=0)

    def has_spans(self) -> bool:
        """Whether any cell spans more than one row or column."""
        return any(cell.rowspan > 1 or cell.colspan > 1 for row in self.rows for cell in row.cells)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_tabular(self)


class TableRowNode(Node):
    """One row of a tabular grid."""

    def __init__(self, cells: Any, node_id: str, factory: Optional[NodeFactoryProtocol] = None):
        super().__init__({"type": NodeKind.TABLE_ROW.value, "content": None}, node_id, factory)
        for cell_index, cell in enumerate(cells if isinstance(cells, list) else []):
            if isinstance(cell, Mapping):
                self.add_child(TableCellNode(cell, f"{self.id}/cell-{cell_index}", factory))

    @property
    def cells(self) -> list[TableCellNode]:
        return [child for child in self._children if isinstance(child, TableCellNode)]

    @property
    def total_cols(self) -> int:
        return sum(cell.colspan for cell in self.cells)

    def is_empty(self) -> bool:
        return all(not cell.has_children() for cell in self.cells)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_row(self)


class TableCellNode(Node):
    """One cell; its content tokens become children."""

    def __init__(self, cell: Mapping[str, Any], node_id: str, factory: Optional[NodeFactoryProtocol] = None):
        super().__init__({"type": NodeKind.TABLE_CELL.value, "content": None}, node_id, factory)
        self.styles = list(cell.get("styles") or [])
        self._rowspan = max(1, int(cell.get("rowspan") or 1))
        self._colspan = max(1, int(cell.get("colspan") or 1))
        for child in self._build_children(cell.get("content"), NodeRole.CONTENT, id_prefix="cell"):
            self.add_child(child)

    @property
    def rowspan(self) -> int:
        return self._rowspan

    @property
    def colspan(self) -> int:
        return self._colspan

    def get_cell_color(self) -> Optional[str]:
        for style in self.styles:
            if style.startswith("color="):
                return style.split("=", 1)[1]
        return None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_table_cell(self)
