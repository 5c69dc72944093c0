#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/scidoc/utils/tokens.py
"""Helpers operating on raw token data (the mappings nodes are built from)."""

from __future__ import annotations

from typing import Any, Iterable, Mapping, Union

RawToken = Mapping[str, Any]
RawItem = Union[RawToken, str, None]


def tokens_to_text(tokens: Iterable[RawItem] | None) -> str:
    """Flatten raw tokens to a plain string.

    Strings are concatenated as-is, string ``content`` is taken verbatim and
    list ``content`` is flattened recursively. A non-block equation whose
    content is a token list is wrapped in ``$...$``.

    Parameters
    ----------
    tokens : iterable of mapping or str
        Raw token data

    Returns
    -------
    str
        Concatenated text

    Examples
    --------
        >>> tokens_to_text([{"type": "text", "content": "a "}, "b"])
        'a b'

    """
    if not tokens:
        return ""

    parts: list[str] = []
    for token in tokens:
        if not token:
            continue
        if isinstance(token, str):
            parts.append(token)
            continue
        content = token.get("content")
        if not content:
            continue
        if isinstance(content, str):
            parts.append(content)
            continue
        content_str = tokens_to_text(content) if isinstance(content, list) else ""
        if token.get("type") == "equation" and token.get("display") != "block":
            content_str = f"${content_str}$"
        parts.append(content_str)
    return "".join(parts)
