#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/ast/nodes.py
"""Base node classes for the scientific document AST.

This module defines the node base class shared by every concrete node kind,
the enumerations describing node kinds and roles, and the container bases
that build their children from raw token data through a node factory.

Nodes are built from immutable tagged data (mappings with a ``type`` key).
Each node copies the mapping it was built from, owns its children and keeps
a back-reference to its parent. The structure is a strict tree: adding a
node to a new parent detaches it from the old one.

Node Hierarchy
--------------
All nodes inherit from :class:`Node` and support the visitor pattern.

Leaf nodes carry scalar content:
    - TextNode, CodeNode, CommandNode, UrlNode, CitationNode, ReferenceNode,
      BibItemNode, AlgorithmicNode, asset nodes

Container nodes (:class:`ContainerNode`) build children from list content:
    - DocumentNode, GroupNode, QuoteNode, CaptionNode, FootnoteNode, ...

Titled containers (:class:`TitledNode`) additionally build ``title`` children:
    - SectionNode, AbstractNode, MathEnvNode, ListItemNode

"""

from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from enum import Enum
from types import MappingProxyType
from typing import Any, Callable, Iterator, Mapping, Optional, Protocol

from scidoc.constants import INLINE_NODE_KINDS
from scidoc.exceptions import ValidationError
from scidoc.utils.tokens import tokens_to_text

logger = logging.getLogger(__name__)


class NodeKind(str, Enum):
    """Discriminator tag of a node, as found in the ``type`` key of raw data."""

    # Document structure
    DOCUMENT = "document"
    TITLE = "title"
    SECTION = "section"
    ABSTRACT = "abstract"
    APPENDIX = "appendix"
    COMMAND = "command"
    MAKETITLE = "maketitle"

    # Text
    TEXT = "text"
    QUOTE = "quote"

    # Environments
    ENVIRONMENT = "environment"
    MATH_ENV = "math_env"
    GROUP = "group"

    # Tables and figures
    FIGURE = "figure"
    SUBFIGURE = "subfigure"
    TABLE = "table"
    SUBTABLE = "subtable"
    TABULAR = "tabular"
    TABLE_ROW = "table_row"
    TABLE_CELL = "table_cell"
    CAPTION = "caption"

    # Graphics
    INCLUDEGRAPHICS = "includegraphics"
    INCLUDEPDF = "includepdf"
    DIAGRAM = "diagram"

    # Lists
    LIST = "list"
    ITEM = "item"

    # Math and technical
    EQUATION = "equation"
    EQUATION_ARRAY = "equation_array"
    ROW = "row"
    CODE = "code"
    ALGORITHM = "algorithm"
    ALGORITHMIC = "algorithmic"

    # References and links
    CITATION = "citation"
    REF = "ref"
    URL = "url"
    FOOTNOTE = "footnote"

    # Bibliography
    BIBLIOGRAPHY = "bibliography"
    BIBITEM = "bibitem"

    # Metadata
    AUTHOR = "author"
    EMAIL = "email"
    AFFILIATION = "affiliation"
    ADDRESS = "address"
    KEYWORDS = "keywords"
    THANKS = "thanks"


class NodeRole(str, Enum):
    """Role of a child within its parent container."""

    CONTENT = "content"
    TITLE = "title"


class DisplayType(str, Enum):
    """Inline or block display of equations, code and similar nodes."""

    INLINE = "inline"
    BLOCK = "block"


class ListType(str, Enum):
    """LaTeX list environment names."""

    ENUMERATE = "enumerate"
    ITEMIZE = "itemize"
    DESCRIPTION = "description"


class BibFormat(str, Enum):
    """Storage format of a bibliography entry."""

    BIBTEX = "bibtex"
    BIBITEM = "bibitem"


class NodeFactoryProtocol(Protocol):
    """Structural interface nodes use to build their children."""

    def create_node(self, data: Mapping[str, Any], node_id: Optional[str] = None) -> Optional["Node"]: ...


class Node(ABC):
    """Base class for all document nodes.

    Parameters
    ----------
    data : Mapping[str, Any]
        Raw tagged data. Must contain a ``type`` key naming a :class:`NodeKind`.
        The mapping is copied; later changes to it do not affect the node.
    node_id : str, optional
        Explicit id. Defaults to ``data["id"]``, then to a generated id.
    factory : NodeFactoryProtocol, optional
        Factory used by container nodes to build their children.

    Attributes
    ----------
    parent : Node or None
        Owning node, None for roots
    role : NodeRole
        Title or content role within the parent
    labels : list[str]
        Cross-reference labels attached to this node
    styles : list[str]
        Text decorations (bold, italic, ...)

    Raises
    ------
    ValueError
        If ``data["type"]`` is not a known node kind

    """

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        self._data: dict[str, Any] = dict(data)
        self._kind = NodeKind(self._data.get("type"))
        self._id: str = node_id or self._data.get("id") or uuid.uuid4().hex
        self._factory = factory
        self._children: list[Node] = []
        self.parent: Optional[Node] = None
        self.role: NodeRole = NodeRole.CONTENT
        self.labels: list[str] = list(self._data.get("labels") or [])
        self.styles: list[str] = list(self._data.get("styles") or [])

    def __repr__(self) -> str:
        return f"{type(self).__name__}(id={self._id!r}, children={len(self._children)})"

    @abstractmethod
    def accept(self, visitor: Any) -> Any:
        """Accept a visitor for processing this node.

        Parameters
        ----------
        visitor : Any
            A visitor object with visit_* methods

        Returns
        -------
        Any
            Result of the visitor's processing

        """
        ...

    # ------------------------------------------------------------------
    # Identity and data
    # ------------------------------------------------------------------

    @property
    def id(self) -> str:
        """Stable identifier of this node."""
        return self._id

    @property
    def kind(self) -> NodeKind:
        """Kind discriminator; fixed at construction."""
        return self._kind

    @property
    def data(self) -> Mapping[str, Any]:
        """Read-only view of the raw data this node was built from."""
        return MappingProxyType(self._data)

    @property
    def content(self) -> Any:
        """Raw ``content`` payload: a string, a token list or None."""
        return self._data.get("content")

    @property
    def title(self) -> Any:
        """Raw ``title`` payload, if any."""
        return self._data.get("title")

    @property
    def numbering(self) -> Optional[str]:
        """Display numbering such as ``"2.1"``, if the node is numbered."""
        numbering = self._data.get("numbering")
        return str(numbering) if numbering is not None else None

    @property
    def is_inline(self) -> bool:
        """Whether this node flows inline with its siblings.

        Inline nodes never get a block separator inserted before them.
        """
        if self._kind is NodeKind.EQUATION:
            return self._data.get("display") != DisplayType.BLOCK.value
        return self._data.get("display") == DisplayType.INLINE.value or self._kind.value in INLINE_NODE_KINDS

    # ------------------------------------------------------------------
    # Children
    # ------------------------------------------------------------------

    @property
    def children(self) -> list[Node]:
        """Copy of the ordered child list."""
        return list(self._children)

    def get_children(self, role: Optional[NodeRole] = None) -> list[Node]:
        """Return children, optionally restricted to one role."""
        if role is None:
            return list(self._children)
        return [child for child in self._children if child.role == role]

    def add_child(self, child: Node) -> None:
        """Append a child, detaching it from any previous parent.

        Raises
        ------
        ValidationError
            If this node holds literal string content, or if adding the
            child would create a cycle.

        """
        self.insert_child(len(self._children), child)

    def insert_child(self, index: int, child: Node) -> None:
        """Insert a child at ``index``, detaching it from any previous parent.

        Raises
        ------
        ValidationError
            If this node holds literal string content, or if adding the
            child would create a cycle.

        """
        if isinstance(self.content, str):
            raise ValidationError(
                f"{type(self).__name__} '{self._id}' holds literal content and cannot have children",
                parameter_name="child",
                parameter_value=child.id,
            )
        ancestor: Optional[Node] = self
        while ancestor is not None:
            if ancestor is child:
                raise ValidationError(
                    f"Adding '{child.id}' under '{self._id}' would create a cycle",
                    parameter_name="child",
                    parameter_value=child.id,
                )
            ancestor = ancestor.parent
        if child.parent is not None:
            child.parent.remove_child(child)
        child.parent = self
        self._children.insert(index, child)

    def remove_child(self, child: Node) -> bool:
        """Remove ``child``; return False if it was not a child of this node."""
        for i, existing in enumerate(self._children):
            if existing is child:
                del self._children[i]
                child.parent = None
                return True
        return False

    def clear_children(self) -> None:
        """Detach every child."""
        for child in self._children:
            child.parent = None
        self._children.clear()

    def has_children(self) -> bool:
        return bool(self._children)

    def is_root(self) -> bool:
        return self.parent is None

    def is_leaf(self) -> bool:
        return not self._children

    @property
    def first_child(self) -> Optional[Node]:
        return self._children[0] if self._children else None

    @property
    def last_child(self) -> Optional[Node]:
        return self._children[-1] if self._children else None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def get_root(self) -> Node:
        """Return the topmost ancestor (self for roots)."""
        node = self
        while node.parent is not None:
            node = node.parent
        return node

    def get_depth(self) -> int:
        """Return the number of ancestors above this node."""
        depth = 0
        node = self.parent
        while node is not None:
            depth += 1
            node = node.parent
        return depth

    def find_parent_matching(self, predicate: Callable[[Node], bool]) -> Optional[Node]:
        """Return the nearest ancestor satisfying ``predicate``."""
        node = self.parent
        while node is not None:
            if predicate(node):
                return node
            node = node.parent
        return None

    def get_first_leaf(self) -> Node:
        node = self
        while node._children:
            node = node._children[0]
        return node

    def get_last_leaf(self) -> Node:
        node = self
        while node._children:
            node = node._children[-1]
        return node

    @property
    def next_sibling(self) -> Optional[Node]:
        return self._sibling(1)

    @property
    def previous_sibling(self) -> Optional[Node]:
        return self._sibling(-1)

    def _sibling(self, step: int) -> Optional[Node]:
        if self.parent is None:
            return None
        siblings = self.parent._children
        for i, node in enumerate(siblings):
            if node is self:
                j = i + step
                return siblings[j] if 0 <= j < len(siblings) else None
        return None

    def walk(self) -> Iterator[Node]:
        """Yield this node and all descendants in depth-first pre-order."""
        stack: list[Node] = [self]
        while stack:
            node = stack.pop()
            yield node
            stack.extend(reversed(node._children))

    def find_by_id(self, node_id: str) -> Optional[Node]:
        """Return the node with ``node_id`` in this subtree, if any."""
        for node in self.walk():
            if node._id == node_id:
                return node
        return None

    def find_by_label(self, label: str) -> Optional[Node]:
        """Return the first node in this subtree carrying ``label``.

        Because nodes expose ``get_reference_text`` and ``get_anchor_id``,
        ``root.find_by_label`` can be passed directly as a label resolver.
        """
        for node in self.walk():
            if label in node.labels:
                return node
        return None

    # ------------------------------------------------------------------
    # Cross references
    # ------------------------------------------------------------------

    def get_anchor_id(self) -> Optional[str]:
        """Return the HTML anchor id used when rendering to Markdown."""
        anchor_id = self._data.get("anchor_id")
        return str(anchor_id) if anchor_id else None

    def get_reference_text(self) -> Optional[str]:
        """Return the text a ``\\ref`` to this node displays, if any."""
        return None

    def get_labels_latex(self) -> str:
        r"""Return ``\label{...}`` lines for every label, each ending in a newline."""
        return "".join(f"\\label{{{label}}}\n" for label in self.labels)

    def to_plain_object(self) -> dict[str, Any]:
        """Return a JSON-friendly summary of this subtree's structure."""
        return {
            "id": self._id,
            "type": self._kind.value,
            "role": self.role.value,
            "labels": list(self.labels),
            "children": [child.to_plain_object() for child in self._children],
        }

    # ------------------------------------------------------------------
    # Construction helpers
    # ------------------------------------------------------------------

    def _build_children(self, items: Any, role: NodeRole, id_prefix: Optional[str] = None) -> list[Node]:
        """Build child nodes from a raw token list.

        Generated ids take the form ``{parent_id}/{id_prefix or role}-{index}``.
        Items without a usable kind are skipped; one malformed token does not
        abort the surrounding tree.
        """
        if not isinstance(items, list) or not items:
            return []
        if self._factory is None:
            logger.warning("No node factory for %s '%s'; %d child tokens skipped", self._kind.value, self._id, len(items))
            return []

        nodes: list[Node] = []
        for i, item in enumerate(items):
            if not isinstance(item, Mapping):
                continue
            child_id = item.get("id") or f"{self._id}/{id_prefix or role.value}-{i}"
            child = self._factory.create_node(item, child_id)
            if child is None:
                continue
            child.role = role
            nodes.append(child)
        return nodes


class ContainerNode(Node):
    """Node whose list-valued ``content`` becomes its children."""

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        for child in self._build_children(self.content, NodeRole.CONTENT):
            self.add_child(child)

    @property
    def content_children(self) -> list[Node]:
        return self.get_children(NodeRole.CONTENT)


class TitledNode(ContainerNode):
    """Container that also builds ``title`` children, placed first.

    Subclasses set ``anchor_prefix`` for their generated Markdown anchors.
    """

    anchor_prefix = "sec"

    def __init__(
        self,
        data: Mapping[str, Any],
        node_id: Optional[str] = None,
        factory: Optional[NodeFactoryProtocol] = None,
    ):
        super().__init__(data, node_id, factory)
        for i, child in enumerate(self._build_children(self.title, NodeRole.TITLE)):
            self.insert_child(i, child)

    @property
    def title_children(self) -> list[Node]:
        return self.get_children(NodeRole.TITLE)

    def get_title_str(self, include_numbering: bool = True) -> str:
        """Return the flattened title text, optionally prefixed by its numbering."""
        title = self.title
        if not title:
            return ""
        title_str = tokens_to_text(title) if isinstance(title, list) else str(title)
        if include_numbering and self.numbering:
            title_str = f"{self.numbering}. {title_str}"
        return title_str.strip()

    def get_anchor_id(self) -> Optional[str]:
        anchor_id = super().get_anchor_id()
        if anchor_id:
            return anchor_id
        if self.numbering:
            return f"{self.anchor_prefix}-{self.numbering}"
        if self.labels:
            return f"{self.anchor_prefix}-{self.labels[0]}"
        return f"{self.anchor_prefix}-{self._id}"
