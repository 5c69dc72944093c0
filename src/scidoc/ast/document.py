#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/document.py
"""Document structure node kinds.

Sections, environments and the document-level containers. Sections and
theorem-like environments carry ``title`` children that renderers emit
before the body.
"""

from __future__ import annotations

from typing import Any, Optional

from scidoc.ast.nodes import ContainerNode, TitledNode
from scidoc.constants import UNNUMBERED_SECTION_LEVEL


class DocumentNode(ContainerNode):
    """Root ``document`` environment."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_document(self)


class TitleNode(ContainerNode):
    """Document title (``\\title``)."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_title(self)


class MakeTitleNode(ContainerNode):
    """Title block contents followed by ``\\maketitle``."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_maketitle(self)


class GroupNode(ContainerNode):
    """Transparent grouping of nodes; renders as its children."""

    def get_reference_text(self) -> Optional[str]:
        first = self.first_child
        return first.get_reference_text() if first is not None else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_group(self)


class EnvironmentNode(ContainerNode):
    """Generic named LaTeX environment."""

    @property
    def name(self) -> str:
        return str(self._data.get("name") or "")

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_environment(self)


class SectionNode(TitledNode):
    """Sectioning unit with a title and a level between 1 and 5.

    Levels at or beyond 4 (paragraphs) are never numbered.
    """

    @property
    def level(self) -> int:
        try:
            return int(self._data.get("level") or 1)
        except (TypeError, ValueError):
            return 1

    @property
    def numbering(self) -> Optional[str]:
        if self.level >= UNNUMBERED_SECTION_LEVEL:
            return None
        return super().numbering

    def get_reference_text(self) -> Optional[str]:
        return f"Section {self.numbering}" if self.numbering else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_section(self)


class AbstractNode(TitledNode):
    """The ``abstract`` environment."""

    anchor_prefix = "abstract"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_abstract(self)


class AppendixNode(ContainerNode):
    """The appendices block."""

    def get_anchor_id(self) -> Optional[str]:
        return super().get_anchor_id() or "appendix"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_appendix(self)


class MathEnvNode(TitledNode):
    """Theorem-like environment (theorem, lemma, definition, ...)."""

    anchor_prefix = "env"

    @property
    def name(self) -> str:
        return str(self._data.get("name") or "theorem")

    @property
    def display_name(self) -> str:
        name = self.name
        return name[:1].upper() + name[1:]

    def get_reference_text(self) -> Optional[str]:
        return f"{self.name} {self.numbering}" if self.numbering else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_math_env(self)
