#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/metadata.py
"""Front-matter metadata node kinds (author, email, affiliation, ...)."""

from __future__ import annotations

from typing import Any

from scidoc.ast.nodes import ContainerNode, Node


class MetadataNode(ContainerNode):
    """A metadata command whose name is the node kind, e.g. ``\\email{...}``."""

    @property
    def is_inline(self) -> bool:
        return False

    @property
    def type_label(self) -> str:
        name = self.kind.value
        return name[:1].upper() + name[1:]

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_metadata(self)


class AuthorNode(MetadataNode):
    """Author list; individual authors are separated by ``\\and`` commands."""

    @property
    def type_label(self) -> str:
        return "Authors"

    def get_authors(self) -> list[list[Node]]:
        """Split children into one group per author."""
        authors: list[list[Node]] = []
        group: list[Node] = []
        for child in self._children:
            if child.kind.value == "command" and str(child.data.get("command", "")).lower().lstrip("\\") == "and":
                if group:
                    authors.append(group)
                    group = []
            else:
                group.append(child)
        if group:
            authors.append(group)
        return authors
