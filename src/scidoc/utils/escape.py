#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/utils/escape.py
"""Format-specific text escaping utilities.

"""

from __future__ import annotations

from scidoc.constants import LATEX_SPECIAL_CHARS


def escape_latex(text: str) -> str:
    r"""Escape LaTeX special characters in text content.

    Each of ``& % # _ { } ~ ^ \`` is prefixed with a backslash unless it is
    already escaped, i.e. immediately preceded by an odd number of
    backslashes in the input. The backslash is itself a special character,
    so a lone ``\`` is doubled.

    Parameters
    ----------
    text : str
        Text to escape

    Returns
    -------
    str
        Escaped text safe for LaTeX

    Examples
    --------
        >>> escape_latex("snake_case & co")
        'snake\\_case \\& co'
        >>> escape_latex("50\\%")
        '50\\\\%'

    """
    if not text:
        return text

    parts: list[str] = []
    run = 0  # consecutive backslashes immediately before the current character
    for char in text:
        if char in LATEX_SPECIAL_CHARS and run % 2 == 0:
            parts.append("\\" + char)
        else:
            parts.append(char)
        run = run + 1 if char == "\\" else 0
    return "".join(parts)
