#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/spans.py
"""Character spans recorded while rendering a node tree.

A :class:`SpanTracker` is handed to a renderer's top-level render loop. It
records, for every node visited by that loop, the half-open range
``[start, end)`` the node's output occupies in the final string. Nodes
rendered inside another node's own visit method are not tracked directly;
:func:`find_missing_child_spans` recovers them afterwards by searching each
child's output within its parent's span.

"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Callable, Iterable, Optional

if TYPE_CHECKING:
    from scidoc.ast.nodes import Node

logger = logging.getLogger(__name__)

NodeRender = Callable[["Node"], str]


@dataclass(frozen=True)
class SpanInfo:
    """Half-open range ``[start, end)`` produced by one node.

    Parameters
    ----------
    start : int
        Offset of the first character
    end : int
        Offset one past the last character
    kind : str
        Kind of the node that produced the range

    """

    start: int
    end: int
    kind: str

    @property
    def width(self) -> int:
        return self.end - self.start

    def contains(self, pos: int) -> bool:
        """Whether ``pos`` lies inside this span."""
        return self.start <= pos < self.end


@dataclass
class SpanTracker:
    """Cursor and span map scoped to a single render."""

    position: int = 0
    spans: dict[str, SpanInfo] = field(default_factory=dict)

    def advance(self, length: int) -> None:
        self.position += length

    def record(self, node_id: str, start: int, end: int, kind: str) -> None:
        self.spans[node_id] = SpanInfo(start, end, kind)


@dataclass
class RenderResult:
    """Rendered content together with the span of every mapped node."""

    content: str
    spans: dict[str, SpanInfo] = field(default_factory=dict)

    def slice(self, node_id: str) -> Optional[str]:
        """Return the text a node produced, or None if the node is unmapped."""
        span = self.spans.get(node_id)
        if span is None:
            return None
        return self.content[span.start : span.end]


def find_missing_child_spans(
    nodes: Iterable[Node],
    content: str,
    spans: dict[str, SpanInfo],
    render: NodeRender,
    fallback_render: Optional[NodeRender] = None,
) -> None:
    """Locate children without a span inside their parent's span.

    For each node that has a span, every child lacking one is searched for as
    a substring of the parent's range, first using ``render`` and then
    ``fallback_render``. A cursor advances past each located child so that
    siblings are matched left to right. Located children are recorded in
    ``spans`` (in place) and their own children are processed in turn.

    Children whose output is empty or cannot be found are left unmapped.

    Parameters
    ----------
    nodes : iterable of Node
        Top-level nodes of the render
    content : str
        The rendered string the spans refer to
    spans : dict[str, SpanInfo]
        Span map to complete
    render : callable
        Renders a single node in the primary format
    fallback_render : callable, optional
        Alternate single-node render, typically plain copy-text

    """
    for node in nodes:
        if node.id in spans:
            _reconcile_children(node, content, spans, render, fallback_render)


def _reconcile_children(
    parent: Node,
    content: str,
    spans: dict[str, SpanInfo],
    render: NodeRender,
    fallback_render: Optional[NodeRender],
) -> None:
    parent_span = spans[parent.id]
    cursor = parent_span.start

    for child in parent.children:
        existing = spans.get(child.id)
        if existing is not None:
            cursor = max(cursor, existing.end)
        else:
            found = _search_child(child, content, cursor, parent_span.end, render, fallback_render)
            if found is None:
                logger.debug("No span found for %s node '%s' inside '%s'", child.kind.value, child.id, parent.id)
                continue
            start, end = found
            spans[child.id] = SpanInfo(start, end, child.kind.value)
            cursor = end

        if child.has_children():
            _reconcile_children(child, content, spans, render, fallback_render)


def _search_child(
    child: Node,
    content: str,
    cursor: int,
    limit: int,
    render: NodeRender,
    fallback_render: Optional[NodeRender],
) -> Optional[tuple[int, int]]:
    renders = (render, fallback_render) if fallback_render is not None else (render,)
    for render_fn in renders:
        text = render_fn(child)
        if not text:
            continue
        pos = content.find(text, cursor, limit)
        if pos >= 0:
            return pos, pos + len(text)
    return None
