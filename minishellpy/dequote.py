"""Removal of quotes from tokens."""

from __future__ import annotations

from collections.abc import Iterable

from minishellpy.tokens import Token, TokenType, join_tokens


def remove_quotes(text: str) -> str:
    """Drop quote pairs from ``text``, keeping what they enclose.

    A quote inside the other kind of quotes is kept; an unclosed quote
    runs to the end of the text.
    """
    parts: list[str] = []
    pos = 0
    while pos < len(text):
        char = text[pos]
        if char in "'\"":
            end = text.find(char, pos + 1)
            if end == -1:
                parts.append(text[pos + 1:])
                break
            parts.append(text[pos + 1:end])
            pos = end + 1
        else:
            parts.append(char)
            pos += 1
    return "".join(parts)


def dequotize(tokens: Iterable[Token]) -> list[Token]:
    """Unquote every text token, make it a word and join glued tokens."""
    tokens = list(tokens)
    for token in tokens:
        if token.type.is_text:
            token.text = remove_quotes(token.text)
            token.type = TokenType.WORD
    return join_tokens(tokens)