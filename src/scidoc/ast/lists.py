#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/lists.py
"""List node kinds."""

from __future__ import annotations

from typing import Any, Optional

from scidoc.ast.nodes import ContainerNode, ListType, Node, TitledNode


class ListNode(ContainerNode):
    """An itemize, enumerate or description list."""

    @property
    def list_type(self) -> ListType:
        try:
            return ListType(self._data.get("name") or ListType.ITEMIZE.value)
        except ValueError:
            return ListType.ITEMIZE

    @property
    def is_inline(self) -> bool:
        return bool(self._data.get("inline", False))

    @property
    def items(self) -> list[ListItemNode]:
        return [child for child in self._children if isinstance(child, ListItemNode)]

    def compute_depth(self) -> int:
        """Return the number of enclosing lists."""
        depth = 0
        node = self.find_parent_matching(lambda candidate: isinstance(candidate, ListNode))
        while node is not None:
            depth += 1
            node = node.find_parent_matching(lambda candidate: isinstance(candidate, ListNode))
        return depth

    def get_item_index(self, item: Node) -> int:
        for i, candidate in enumerate(self.items):
            if candidate is item:
                return i
        return -1

    def has_custom_bullets(self) -> bool:
        return any(item.title_children for item in self.items)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list(self)


class ListItemNode(TitledNode):
    """An ``\\item``; title children hold a custom bullet or description term."""

    @property
    def parent_list(self) -> Optional[ListNode]:
        return self.parent if isinstance(self.parent, ListNode) else None

    def get_reference_text(self) -> Optional[str]:
        title = self.get_title_str(include_numbering=False)
        if title:
            return f"Item {title}"
        parent = self.parent_list
        if parent is None:
            return None
        index = parent.get_item_index(self)
        if index == -1:
            return None
        if parent.list_type is ListType.ENUMERATE and parent.compute_depth() >= 1:
            return f"Item {chr(ord('a') + index)}"
        return f"Item {index + 1}"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_list_item(self)
