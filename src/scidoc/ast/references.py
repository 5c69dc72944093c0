#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/references.py
"""Reference node kinds: citations, cross references, links, footnotes and
bibliography entries.
"""

from __future__ import annotations

from typing import Any, Mapping, Optional

from scidoc.ast.nodes import BibFormat, ContainerNode, Node, NodeFactoryProtocol
from scidoc.utils.tokens import tokens_to_text


def _title_text(title: Any) -> str:
    if not title:
        return ""
    if isinstance(title, list):
        return tokens_to_text(title)
    return str(title)


class CitationNode(Node):
    """A ``\\cite`` of one or more bibliography keys.

    Raw content is the list of keys; ``title`` holds optional note tokens.
    """

    @property
    def keys(self) -> list[str]:
        content = self.content
        if isinstance(content, str):
            return [content]
        return [str(key) for key in content or [] if key]

    @property
    def title_text(self) -> str:
        return _title_text(self.title)

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_citation(self)


class ReferenceNode(Node):
    """A ``\\ref`` to one or more labels elsewhere in the document."""

    @property
    def targets(self) -> list[str]:
        content = self.content
        if isinstance(content, str):
            return [content]
        return [str(label) for label in content or [] if label]

    @property
    def title_text(self) -> str:
        return _title_text(self.title)

    def get_reference_text(self) -> Optional[str]:
        targets = self.targets
        return targets[0] if targets else None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_ref(self)


class UrlNode(Node):
    """A URL; ``content`` is the address."""

    @property
    def path(self) -> str:
        content = self.content
        return content if isinstance(content, str) else ""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_url(self)


class FootnoteNode(ContainerNode):
    """Footnote text, rendered inline at its call site."""

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_footnote(self)


class BibItemNode(Node):
    """One bibliography entry.

    Entries are stored either as raw BibTeX (``format == "bibtex"``, usually
    with parsed ``fields``) or as free-form ``\\bibitem`` content.
    """

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        self._cached_content: Optional[str] = None

    @property
    def key(self) -> str:
        return str(self._data.get("key") or "")

    @property
    def label(self) -> Optional[str]:
        return self._data.get("label")

    @property
    def format(self) -> BibFormat:
        return BibFormat.BIBTEX if self._data.get("format") == BibFormat.BIBTEX.value else BibFormat.BIBITEM

    @property
    def fields(self) -> dict[str, str]:
        return dict(self._data.get("fields") or {})

    def is_bibtex(self) -> bool:
        return self.format is BibFormat.BIBTEX

    def get_bibtex_str(self) -> Optional[str]:
        """Return the raw BibTeX entry, if this item is stored as BibTeX."""
        if self.is_bibtex() and isinstance(self.content, str):
            return self.content
        return None

    def get_content_str(self) -> str:
        """Return a readable one-line form of the entry.

        BibTeX entries with parsed fields are formatted title first:
        ``Title. Authors (Year) Journal, vol. N``. Otherwise the raw content
        is flattened to text.
        """
        if self._cached_content is not None:
            return self._cached_content

        fields = self.fields
        if self.is_bibtex() and fields:
            result = _format_fields(fields)
        elif isinstance(self.content, str):
            result = self.content
        elif isinstance(self.content, list):
            result = tokens_to_text(self.content)
        else:
            result = ""
        self._cached_content = result
        return result

    def get_anchor_id(self) -> Optional[str]:
        return f"bib-{self.key}"

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_bibitem(self)


def _format_fields(fields: Mapping[str, str]) -> str:
    parts: list[str] = []
    title = (fields.get("title") or "").strip()
    if title:
        parts.append(f"{title}.")

    authors = (fields.get("author") or fields.get("authors") or "?").strip()
    year = (fields.get("year") or "").strip()
    author_year = " ".join(part for part in (authors, f"({year})" if year else "") if part)
    if author_year:
        parts.append(author_year)

    journal = (fields.get("journal") or "").strip()
    if journal:
        volume = (fields.get("volume") or "").strip()
        parts.append(f"{journal}, vol. {volume}" if volume else journal)

    return " ".join(parts)


class BibliographyNode(ContainerNode):
    """The bibliography list."""

    @property
    def items(self) -> list[BibItemNode]:
        return [child for child in self._children if isinstance(child, BibItemNode)]

    def get_bibitem_by_key(self, key: str) -> Optional[BibItemNode]:
        for item in self.items:
            if item.key == key:
                return item
        return None

    def accept(self, visitor: Any) -> Any:
        return visitor.visit_bibliography(self)

