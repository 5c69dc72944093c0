"""The main exported API functions for rendering node trees."""

#  Copyright (c) 2025 Tom Villani, Ph.D.
# src/scidoc/api.py
from __future__ import annotations

import logging
from dataclasses import fields
from typing import Any, Mapping, Optional, Sequence, TypeVar, Union

from scidoc.ast.nodes import Node, NodeFactoryProtocol
from scidoc.constants import SUPPORTED_EXPORT_FORMATS, ExportFormat
from scidoc.exceptions import FactoryRequiredError, FormatError
from scidoc.options.base import BaseExportOptions
from scidoc.options.json import JsonExportOptions
from scidoc.options.latex import LatexExportOptions
from scidoc.options.markdown import MarkdownExportOptions
from scidoc.options.plaintext import TextExportOptions
from scidoc.renderers.json import JsonRenderer
from scidoc.renderers.latex import LatexRenderer
from scidoc.renderers.markdown import MarkdownRenderer
from scidoc.renderers.plaintext import PlainTextRenderer
from scidoc.spans import RenderResult
from scidoc.utils.tokens import tokens_to_text

logger = logging.getLogger(__name__)

OptionsT = TypeVar("OptionsT", bound=BaseExportOptions)

ExportInput = Sequence[Union[Node, Mapping[str, Any]]]


def _create_options_from_kwargs(
    options_class: type[OptionsT],
    options: Optional[OptionsT] = None,
    **kwargs: Any,
) -> Optional[OptionsT]:
    """Merge keyword arguments into an options object.

    Parameters
    ----------
    options_class : type[OptionsT]
        The options class for the target format
    options : OptionsT, optional
        Base options; a fresh ``options_class()`` is used when omitted
    **kwargs
        Option field overrides. Names that are not fields of
        ``options_class`` are skipped with a debug message.

    Returns
    -------
    OptionsT or None
        ``options`` unchanged when there are no valid overrides

    """
    if not kwargs:
        return options

    option_names = {field.name for field in fields(options_class)}
    valid_kwargs = {k: v for k, v in kwargs.items() if k in option_names}
    missing = [k for k in kwargs if k not in valid_kwargs]
    if missing:
        logger.debug(f"Skipping unknown {options_class.__name__} options: {missing}")
    if not valid_kwargs:
        return options
    if options is None:
        return options_class(**valid_kwargs)
    return options.create_updated(**valid_kwargs)


class DocumentExporter:
    """Render nodes, or raw tagged data, to every supported format.

    Parameters
    ----------
    factory : NodeFactoryProtocol, optional
        Factory used to build nodes when raw mappings are passed in. Without
        one, passing raw data raises :class:`FactoryRequiredError`.

    Examples
    --------
    Exporting raw data:

        >>> from scidoc import DocumentExporter, NodeFactory
        >>> exporter = DocumentExporter(NodeFactory())
        >>> exporter.to_latex([{"type": "text", "content": "Hello World"}])
        'Hello World'

    Choosing the format at run time:

        >>> exporter.export(items, "markdown")

    """

    def __init__(self, factory: Optional[NodeFactoryProtocol] = None):
        self.factory = factory

    def ensure_nodes(self, items: ExportInput) -> list[Node]:
        """Return ``items`` as nodes, building raw mappings with the factory.

        Raw items get the id ``item["id"]`` or ``export-{index}``. Items the
        factory cannot build are skipped.

        Raises
        ------
        FactoryRequiredError
            If a raw mapping is present and no factory was configured

        """
        nodes: list[Node] = []
        for i, item in enumerate(items):
            if isinstance(item, Node):
                nodes.append(item)
                continue
            if not isinstance(item, Mapping) or not item:
                continue
            if self.factory is None:
                raise FactoryRequiredError("DocumentExporter: a node factory is required to convert raw data to nodes")
            node = self.factory.create_node(item, item.get("id") or f"export-{i}")
            if node is not None:
                nodes.append(node)
        return nodes

    def to_latex(self, items: ExportInput, options: Optional[LatexExportOptions] = None, **kwargs: Any) -> str:
        """Render to LaTeX."""
        options = _create_options_from_kwargs(LatexExportOptions, options, **kwargs)
        return LatexRenderer(options).render_to_string(self.ensure_nodes(items))

    def to_markdown(self, items: ExportInput, options: Optional[MarkdownExportOptions] = None, **kwargs: Any) -> str:
        """Render to Markdown."""
        options = _create_options_from_kwargs(MarkdownExportOptions, options, **kwargs)
        return MarkdownRenderer(options).render_to_string(self.ensure_nodes(items))

    def to_text(self, items: ExportInput, options: Optional[TextExportOptions] = None, **kwargs: Any) -> str:
        """Render to plain copy-text."""
        options = _create_options_from_kwargs(TextExportOptions, options, **kwargs)
        return PlainTextRenderer(options).render_to_string(self.ensure_nodes(items))

    def to_json(
        self, items: ExportInput, options: Optional[JsonExportOptions] = None, **kwargs: Any
    ) -> list[dict[str, Any]]:
        """Render to JSON-compatible data (one mapping per top-level node)."""
        options = _create_options_from_kwargs(JsonExportOptions, options, **kwargs)
        return JsonRenderer(options).render_to_list(self.ensure_nodes(items))

    def to_latex_with_spans(
        self, items: ExportInput, options: Optional[LatexExportOptions] = None, **kwargs: Any
    ) -> RenderResult:
        """Render to LaTeX and record the span of every located node."""
        options = _create_options_from_kwargs(LatexExportOptions, options, **kwargs)
        return LatexRenderer(options).render_with_spans(self.ensure_nodes(items))

    def to_markdown_with_spans(
        self, items: ExportInput, options: Optional[MarkdownExportOptions] = None, **kwargs: Any
    ) -> RenderResult:
        """Render to Markdown and record the span of every located node."""
        options = _create_options_from_kwargs(MarkdownExportOptions, options, **kwargs)
        return MarkdownRenderer(options).render_with_spans(self.ensure_nodes(items))

    def export(
        self,
        items: ExportInput,
        fmt: ExportFormat,
        options: Optional[BaseExportOptions] = None,
        **kwargs: Any,
    ) -> Union[str, list[dict[str, Any]]]:
        """Render to the format named by ``fmt``.

        Parameters
        ----------
        items : sequence of Node or mapping
            Nodes or raw tagged data
        fmt : {"text", "markdown", "latex", "json"}
            Output format
        options : BaseExportOptions, optional
            Options matching ``fmt``
        **kwargs
            Option field overrides

        Returns
        -------
        str or list[dict]
            Rendered text, or JSON-compatible data for ``"json"``

        Raises
        ------
        FormatError
            If ``fmt`` is not a supported format
        InvalidOptionsError
            If ``options`` do not belong to ``fmt``

        """
        if fmt == "text":
            return self.to_text(items, options, **kwargs)  # type: ignore[arg-type]
        if fmt == "markdown":
            return self.to_markdown(items, options, **kwargs)  # type: ignore[arg-type]
        if fmt == "latex":
            return self.to_latex(items, options, **kwargs)  # type: ignore[arg-type]
        if fmt == "json":
            return self.to_json(items, options, **kwargs)  # type: ignore[arg-type]
        raise FormatError(str(fmt), SUPPORTED_EXPORT_FORMATS)


_default_exporter = DocumentExporter()


def to_latex(nodes: Sequence[Node], options: Optional[LatexExportOptions] = None, **kwargs: Any) -> str:
    """Render nodes to LaTeX.

    Parameters
    ----------
    nodes : sequence of Node
        Sibling nodes to render
    options : LatexExportOptions, optional
        Rendering options
    **kwargs
        Option field overrides, e.g. ``skip_styles=True``

    Returns
    -------
    str
        LaTeX source

    """
    return _default_exporter.to_latex(nodes, options, **kwargs)


def to_markdown(nodes: Sequence[Node], options: Optional[MarkdownExportOptions] = None, **kwargs: Any) -> str:
    """Render nodes to Markdown."""
    return _default_exporter.to_markdown(nodes, options, **kwargs)


def to_text(nodes: Sequence[Node], options: Optional[TextExportOptions] = None, **kwargs: Any) -> str:
    """Render nodes to plain copy-text."""
    return _default_exporter.to_text(nodes, options, **kwargs)


def to_json(nodes: Sequence[Node], options: Optional[JsonExportOptions] = None, **kwargs: Any) -> list[dict[str, Any]]:
    """Render nodes to JSON-compatible data."""
    return _default_exporter.to_json(nodes, options, **kwargs)


def export(
    nodes: Sequence[Node],
    fmt: ExportFormat,
    options: Optional[BaseExportOptions] = None,
    **kwargs: Any,
) -> Union[str, list[dict[str, Any]]]:
    """Render nodes to the format named by ``fmt``; see :meth:`DocumentExporter.export`."""
    return _default_exporter.export(nodes, fmt, options, **kwargs)


def to_latex_with_spans(
    nodes: Sequence[Node], options: Optional[LatexExportOptions] = None, **kwargs: Any
) -> RenderResult:
    """Render nodes to LaTeX with per-node spans.

    Examples
    --------
        >>> result = to_latex_with_spans(nodes)
        >>> result.slice(nodes[0].id)

    """
    return _default_exporter.to_latex_with_spans(nodes, options, **kwargs)


def to_markdown_with_spans(
    nodes: Sequence[Node], options: Optional[MarkdownExportOptions] = None, **kwargs: Any
) -> RenderResult:
    """Render nodes to Markdown with per-node spans."""
    return _default_exporter.to_markdown_with_spans(nodes, options, **kwargs)


__all__ = [
    "DocumentExporter",
    "export",
    "to_json",
    "to_latex",
    "to_latex_with_spans",
    "to_markdown",
    "to_markdown_with_spans",
    "to_text",
    "tokens_to_text",
]
