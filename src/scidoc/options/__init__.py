#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for scidoc renderers.

Each output format has its own frozen Options dataclass. All of them share
the resolvers and hooks defined on ``BaseExportOptions``.
"""

from __future__ import annotations

from scidoc.options.base import (
    AssetPathResolver,
    BaseExportOptions,
    CloneFrozenMixin,
    LabelResolver,
    NodeHook,
    ResolvedLabel,
    resolve_asset_path,
)
from scidoc.options.json import JsonExportOptions
from scidoc.options.latex import LatexExportOptions
from scidoc.options.markdown import MarkdownExportOptions
from scidoc.options.plaintext import TextExportOptions

__all__ = [
    "AssetPathResolver",
    "BaseExportOptions",
    "CloneFrozenMixin",
    "JsonExportOptions",
    "LabelResolver",
    "LatexExportOptions",
    "MarkdownExportOptions",
    "NodeHook",
    "ResolvedLabel",
    "TextExportOptions",
    "resolve_asset_path",
]
