"""Splitting an input line into shell tokens."""

from __future__ import annotations

from dataclasses import dataclass, replace
from enum import IntEnum


class TokenType(IntEnum):
    """Kinds of token produced by the tokenizer."""

    WORD = 0
    SINGLE_QUOTED = 1
    DOUBLE_QUOTED = 2
    PIPE = 3
    REDIRECT_OUT = 4
    APPEND = 5
    REDIRECT_IN = 6
    HEREDOC = 7

    @property
    def is_redirection(self) -> bool:
        """True for the four redirection operators."""
        return TokenType.REDIRECT_OUT <= self <= TokenType.HEREDOC

    @property
    def is_text(self) -> bool:
        """True for plain words and quoted strings."""
        return self <= TokenType.DOUBLE_QUOTED


@dataclass
class Token:
    """One token of an input line.

    ``join`` marks a token that is glued to the one after it with no
    whitespace in between; ``expand`` marks one holding a ``$`` to expand.
    """

    text: str
    type: TokenType
    join: bool = False
    expand: bool = False


class UnclosedQuoteError(ValueError):
    """Raised when a quote has no matching closing quote."""

    def __init__(self, quote: str) -> None:
        self.quote = quote
        super().__init__(
            f"minishell: syntax error while looking for matching `{quote}'"
        )


_WORD_STOP = frozenset('"<>| ')
_JOIN_STOP = frozenset("<>| ")
_REDIRECTIONS = {
    "<": (TokenType.REDIRECT_IN, TokenType.HEREDOC),
    ">": (TokenType.REDIRECT_OUT, TokenType.APPEND),
}
_QUOTE_TYPES = {
    "'": TokenType.SINGLE_QUOTED,
    '"': TokenType.DOUBLE_QUOTED,
}


def _glued(line: str, pos: int) -> bool:
    return pos < len(line) and line[pos] not in _JOIN_STOP


def _quoted(line: str, start: int, tokens: list[Token]) -> int:
    quote = line[start]
    end = line.find(quote, start + 1)
    if end == -1:
        raise UnclosedQuoteError(quote)
    tokens.append(
        Token(line[start:end + 1], _QUOTE_TYPES[quote], join=_glued(line, end + 1))
    )
    return end + 1


def _word(line: str, start: int, tokens: list[Token]) -> int:
    end = start
    while end < len(line) and line[end] not in _WORD_STOP:
        end += 1
    tokens.append(Token(line[start:end], TokenType.WORD, join=_glued(line, end)))
    return end


def tokenize(line: str) -> list[Token]:
    """Split ``line`` into tokens, keeping quotes in the token text.

    Raises UnclosedQuoteError when a quote is left open.
    """
    tokens: list[Token] = []
    pos = 0
    while pos < len(line):
        char = line[pos]
        if char in " \t":
            pos += 1
        elif char in _QUOTE_TYPES:
            pos = _quoted(line, pos, tokens)
        elif char in _REDIRECTIONS:
            single, double = _REDIRECTIONS[char]
            if line.startswith(char * 2, pos):
                tokens.append(Token(char * 2, double))
                pos += 2
            else:
                tokens.append(Token(char, single))
                pos += 1
        elif char == "|":
            tokens.append(Token("|", TokenType.PIPE))
            pos += 1
        else:
            pos = _word(line, pos, tokens)
    return tokens


def join_tokens(tokens: list[Token]) -> list[Token]:
    """Merge every text token marked ``join`` with the token after it."""
    result: list[Token] = []
    for token in tokens:
        if result and result[-1].join and result[-1].type < TokenType.PIPE:
            previous = result[-1]
            previous.text += token.text
            previous.join = token.join
        else:
            result.append(replace(token))
    return result