"""Base classes for export options.

This module defines the foundation classes shared by every format-specific
options dataclass, together with the resolver protocols the renderers call
back into for cross references and asset paths.
"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, replace
from typing import TYPE_CHECKING, Any, Callable, Optional, Protocol

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from scidoc.constants import DEFAULT_SKIP_STYLES

if TYPE_CHECKING:
    from scidoc.ast.nodes import Node


class ResolvedLabel(Protocol):
    """Object returned by a label resolver for a cross-reference label.

    Both methods are optional in practice; renderers look them up with
    ``getattr`` and fall back to the raw label when missing.
    """

    def get_reference_text(self) -> Optional[str]: ...

    def get_anchor_id(self) -> Optional[str]: ...


LabelResolver = Callable[[str], Optional[ResolvedLabel]]
AssetPathResolver = Callable[[str], str]
NodeHook = Callable[["Node", str], str]


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities.

    This mixin adds the ability to create modified copies of frozen dataclass
    instances, which is useful for immutable configuration objects.
    """

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class BaseExportOptions(CloneFrozenMixin):
    """Base class for all export options.

    Parameters
    ----------
    asset_path_resolver : callable, optional
        Maps an asset path stored on a node (figure, pdf, diagram) to the path
        written into the output.
    label_resolver : callable, optional
        Maps a cross-reference label to an object exposing
        ``get_reference_text()`` and ``get_anchor_id()``. A node tree's
        ``find_by_label`` satisfies this contract.
    skip_styles : bool, default False
        Emit text without style decorations (bold, italic, ...).
    on_node : callable, optional
        Hook ``(node, text) -> text`` applied to the output of every node
        rendered through the recursive render loop.

    Notes
    -----
    Subclasses should define format-specific options as frozen dataclass fields.

    """

    asset_path_resolver: Optional[AssetPathResolver] = field(
        default=None,
        metadata={"help": "Callable mapping stored asset paths to output paths", "importance": "advanced"},
    )
    label_resolver: Optional[LabelResolver] = field(
        default=None,
        metadata={"help": "Callable resolving reference labels to their targets", "importance": "core"},
    )
    skip_styles: bool = field(
        default=DEFAULT_SKIP_STYLES,
        metadata={"help": "Render text without style decorations", "importance": "core"},
    )
    on_node: Optional[NodeHook] = field(
        default=None,
        metadata={"help": "Post-processing hook applied to each rendered node", "importance": "advanced"},
    )

    def __post_init__(self) -> None:
        """Validate callable fields.

        Raises
        ------
        ValueError
            If a resolver or hook is set to a non-callable value.

        """
        for name in ("asset_path_resolver", "label_resolver", "on_node"):
            value = getattr(self, name)
            if value is not None and not callable(value):
                raise ValueError(f"{name} must be callable or None, got {type(value).__name__}")


def resolve_asset_path(path: str, options: BaseExportOptions | None) -> str:
    """Apply the configured asset path resolver, if any."""
    if options is not None and options.asset_path_resolver is not None:
        return options.asset_path_resolver(path)
    return path
