"""Expansion of ``$NAME`` references in tokens and here-documents."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from minishellpy.shell import Shell
from minishellpy.tokens import Token, TokenType

_NAME_STOP = frozenset("<>| $'\"")


def _is_alpha(char: str) -> bool:
    return ("a" <= char <= "z") or ("A" <= char <= "Z")


def _is_name_char(char: str) -> bool:
    return char == "_" or _is_alpha(char) or "0" <= char <= "9"


def getenv(env: Iterable[str], name: str) -> str | None:
    """Return the value of ``name`` in ``env``, or None if it has no value."""
    prefix = name + "="
    for entry in env:
        if entry.startswith(prefix):
            return entry[len(prefix):]
    return None


def mark_expansions(tokens: Iterable[Token]) -> bool:
    """Flag every token holding a ``$`` outside single quotes.

    Returns True when at least one token was flagged.
    """
    found = False
    for token in tokens:
        if "$" in token.text and token.type is not TokenType.SINGLE_QUOTED:
            token.expand = True
            found = True
    return found


def _name_end(text: str, start: int) -> int:
    end = start
    while end < len(text) and text[end] not in _NAME_STOP:
        end += 1
    return end


def _expand_text(text: str, env: Sequence[str], status: int | None) -> str:
    """Expand references, always at the first ``$`` left in ``text``.

    Expansion stops when that ``$`` is followed by a space or a double
    quote, or by ``?`` when no exit status is given.
    """
    while text:
        dollar = text.find("$")
        if dollar == -1:
            break
        start = dollar + 1
        following = text[start:start + 1]
        if following in (" ", '"'):
            break
        if following == "?":
            if status is None:
                break
            text = text[:dollar] + str(status) + text[start + 1:]
            continue
        end = _name_end(text, start)
        value = getenv(env, text[start:end]) or ""
        text = text[:dollar] + value + text[end:]
    return text


def expand_token(token: Token, env: Sequence[str]) -> str:
    """Replace the ``$NAME`` references in ``token`` and return its new text.

    Unset names expand to nothing; ``$?`` is left in place.
    """
    token.text = _expand_text(token.text, env, None)
    return token.text


def expand_variables(shell: Shell) -> None:
    """Expand every flagged token of ``shell``, ``$?`` included."""
    for token in shell.tokens:
        if token.expand:
            token.text = _expand_text(token.text, shell.env, shell.last_exit_status)


def expand_heredoc(text: str, env: Sequence[str]) -> str:
    """Expand ``$NAME`` in a here-document line.

    Only a ``$`` followed by a letter starts a name; any other ``$`` is
    kept as it is.
    """
    parts: list[str] = []
    pos = 0
    while pos < len(text):
        if text[pos] == "$" and pos + 1 < len(text) and _is_alpha(text[pos + 1]):
            start = pos + 1
            end = start
            while end < len(text) and _is_name_char(text[end]):
                end += 1
            parts.append(getenv(env, text[start:end]) or "")
            pos = end
        else:
            end = text.find("$", pos + 1)
            if end == -1:
                end = len(text)
            parts.append(text[pos:end])
            pos = end
    return "".join(parts)