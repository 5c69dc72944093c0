#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Configuration options for plain copy-text rendering.

Copy-text is the clipboard-friendly rendering of a node: no markup except
where a node has no better textual form (citations, commands).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from scidoc.constants import DEFAULT_INCLUDE_CHILDREN
from scidoc.options.base import BaseExportOptions


@dataclass(frozen=True)
class TextExportOptions(BaseExportOptions):
    """Configuration options for plain copy-text rendering.

    Parameters
    ----------
    start_offset : int, optional
        Slice text nodes starting at this character offset.
    end_offset : int, optional
        Slice text nodes up to this character offset (exclusive).
    include_children : bool, default True
        Whether container nodes include the text of their children.

    """

    start_offset: Optional[int] = field(
        default=None,
        metadata={"help": "Start offset applied to text node content", "type": int, "importance": "advanced"},
    )
    end_offset: Optional[int] = field(
        default=None,
        metadata={"help": "End offset applied to text node content", "type": int, "importance": "advanced"},
    )
    include_children: bool = field(
        default=DEFAULT_INCLUDE_CHILDREN,
        metadata={"help": "Include child text of container nodes", "importance": "core"},
    )

    def __post_init__(self) -> None:
        """Validate offsets.

        Raises
        ------
        ValueError
            If an offset is negative or the range is inverted.

        """
        super().__post_init__()
        if self.start_offset is not None and self.start_offset < 0:
            raise ValueError(f"start_offset must be non-negative, got {self.start_offset}")
        if self.end_offset is not None and self.end_offset < 0:
            raise ValueError(f"end_offset must be non-negative, got {self.end_offset}")
        if self.start_offset is not None and self.end_offset is not None and self.end_offset < self.start_offset:
            raise ValueError(
                f"end_offset ({self.end_offset}) must not be smaller than start_offset ({self.start_offset})"
            )
