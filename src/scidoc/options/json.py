#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/options/json.py
"""Configuration options for JSON export."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scidoc.constants import DEFAULT_JSON_INDENT
from scidoc.options.base import BaseExportOptions


@dataclass(frozen=True)
class JsonExportOptions(BaseExportOptions):
    """Configuration for JSON export.

    Parameters
    ----------
    indent : int or None, default 2
        JSON indentation used by ``render_to_string``. None for compact output.

    """

    indent: Optional[int] = field(
        default=DEFAULT_JSON_INDENT,
        metadata={"help": "JSON indentation (None for compact)", "type": int, "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate indentation."""
        super().__post_init__()
        if self.indent is not None and self.indent < 0:
            raise ValueError(f"indent must be non-negative, got {self.indent}")
