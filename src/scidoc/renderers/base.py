#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/renderers/base.py
"""Base class for text renderers.

This module owns the recursive render loop shared by every text format.
Per-kind ``visit_*`` methods only produce the output of their own node and
call :meth:`BaseRenderer.render_nodes` for their children; separator
insertion between siblings and span tracking happen here and nowhere else.

"""

from __future__ import annotations

import logging
from abc import ABC
from typing import Any, ClassVar, Iterable, Optional

from scidoc.ast.nodes import Node, NodeRole
from scidoc.ast.visitors import NodeVisitor
from scidoc.exceptions import InvalidOptionsError
from scidoc.options.base import BaseExportOptions
from scidoc.spans import RenderResult, SpanTracker, find_missing_child_spans

logger = logging.getLogger(__name__)


class BaseRenderer(NodeVisitor, ABC):
    """Abstract base class for node-tree-to-text renderers.

    Parameters
    ----------
    options : BaseExportOptions
        Format-specific rendering options

    Examples
    --------
    Rendering a list of sibling nodes:

        >>> from scidoc.renderers.latex import LatexRenderer
        >>> renderer = LatexRenderer()
        >>> renderer.render_to_string(nodes)

    Rendering with spans:

        >>> result = renderer.render_with_spans(nodes)
        >>> result.content[result.spans[nodes[0].id].start:]

    """

    block_separator: ClassVar[str] = "\n"

    def __init__(self, options: BaseExportOptions):
        """Initialize the renderer with validated options."""
        self.options = options

    @staticmethod
    def _validate_options_type(options: BaseExportOptions | None, expected_type: type, renderer_name: str) -> None:
        """Validate that options are of the correct type for this renderer.

        Parameters
        ----------
        options : BaseExportOptions or None
            The options object to validate
        expected_type : type
            The expected options class type
        renderer_name : str
            Name of the renderer (for error messages)

        Raises
        ------
        InvalidOptionsError
            If options are not None and not an instance of expected_type

        """
        if options is not None and not isinstance(options, expected_type):
            raise InvalidOptionsError(
                renderer_name=renderer_name,
                expected_type=expected_type,
                received_type=type(options),
            )

    # ------------------------------------------------------------------
    # Render loop
    # ------------------------------------------------------------------

    def render_node(self, node: Node) -> str:
        """Render one node through its visit method and the ``on_node`` hook.

        This never tracks spans; nested output is mapped afterwards by
        :func:`scidoc.spans.find_missing_child_spans`.
        """
        text = node.accept(self)
        if text is None:
            text = ""
        if self.options.on_node is not None:
            text = self.options.on_node(node, text)
        return text

    def render_nodes(self, nodes: Iterable[Node], *, tracker: Optional[SpanTracker] = None) -> str:
        """Render sibling nodes, inserting the block separator before block nodes.

        Parameters
        ----------
        nodes : iterable of Node
            Siblings in document order
        tracker : SpanTracker, optional
            When given, the span of every node at this level is recorded and
            the tracker's cursor is advanced past the output

        Returns
        -------
        str
            Concatenated output

        """
        separator = self.block_separator
        parts: list[str] = []
        has_output = False

        for node in nodes:
            if has_output and not node.is_inline:
                parts.append(separator)
                if tracker is not None:
                    tracker.advance(len(separator))

            start = tracker.position if tracker is not None else 0
            text = self.render_node(node)
            parts.append(text)
            has_output = has_output or bool(text)

            if tracker is not None:
                tracker.advance(len(text))
                tracker.record(node.id, start, tracker.position, node.kind.value)

        return "".join(parts)

    def render_children(self, node: Node, role: Optional[NodeRole] = None) -> str:
        """Render a node's children (optionally of one role) through the render loop."""
        return self.render_nodes(node.get_children(role))

    def render_to_string(self, nodes: Iterable[Node]) -> str:
        """Render nodes without span tracking."""
        return self.render_nodes(nodes)

    def render_with_spans(self, nodes: Iterable[Node]) -> RenderResult:
        """Render nodes and return the content together with per-node spans.

        Top-level nodes are tracked by the render loop. Spans for nested nodes
        are located afterwards inside their parent's span, using this
        renderer's single-node output and then the copy-text output.

        Returns
        -------
        RenderResult
            Content and a node-id to span mapping

        """
        node_list = list(nodes)
        tracker = SpanTracker()
        content = self.render_nodes(node_list, tracker=tracker)

        fallback = self._create_fallback_renderer()
        find_missing_child_spans(
            node_list,
            content,
            tracker.spans,
            self.render_node,
            fallback.render_node if fallback is not None else None,
        )
        return RenderResult(content, tracker.spans)

    def _create_fallback_renderer(self) -> Optional[BaseRenderer]:
        """Return the renderer used when a child's primary output is not found."""
        return None

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------

    def _resolve_label(self, label: str) -> Any:
        resolver = self.options.label_resolver
        return resolver(label) if resolver is not None else None

    def generic_visit(self, node: Node) -> str:
        super().generic_visit(node)
        return ""
