#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/utils/styles.py
"""Text style decoration helpers for LaTeX and Markdown output."""

from __future__ import annotations

from typing import Sequence

from scidoc.constants import MARKDOWN_STYLE_ORDER, MARKDOWN_STYLE_WRAPPERS, STYLE_TO_LATEX


def wrap_styles_latex(text: str, styles: Sequence[str]) -> str:
    r"""Wrap text in LaTeX style commands.

    The last style in ``styles`` becomes the innermost command. Unknown
    style names are ignored.

    Examples
    --------
        >>> wrap_styles_latex("x", ["bold", "italic"])
        '\\textbf{\\emph{x}}'

    """
    out = text
    for style in reversed(styles):
        command = STYLE_TO_LATEX.get(style)
        if command:
            out = f"\\{command}{{{out}}}"
    return out


def wrap_styles_markdown(text: str, styles: Sequence[str]) -> str:
    """Wrap text in Markdown (or inline HTML) style markers.

    Styles are applied in a fixed order regardless of their order in
    ``styles`` so that combinations nest the same way every time. Text is
    stripped first when any style is present, since ``** bold**`` is not
    emphasis in Markdown. Case transforms are applied last.

    Parameters
    ----------
    text : str
        Text to decorate
    styles : sequence of str
        Style names attached to the node

    Returns
    -------
    str
        Decorated text

    """
    if not styles:
        return text

    result = text.strip()
    for style in MARKDOWN_STYLE_ORDER:
        if style in styles:
            opening, closing = MARKDOWN_STYLE_WRAPPERS[style]
            result = f"{opening}{result}{closing}"

    if "uppercase" in styles:
        result = result.upper()
    elif "lowercase" in styles:
        result = result.lower()

    return result
