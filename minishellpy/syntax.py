"""Syntax checks on a token list."""

from __future__ import annotations

from collections.abc import Sequence

from minishellpy.shell import Shell
from minishellpy.tokens import Token, TokenType

PIPE_ERROR = "minishell: syntax error near unexpected token `|'"
REDIRECTION_ERROR = "minishell: syntax error near redirection"


class ShellSyntaxError(ValueError):
    """Raised when a line's tokens do not form a valid command."""


def check_pipes(tokens: Sequence[Token]) -> None:
    """Reject a pipe at either end of the line or two pipes in a row."""
    if not tokens:
        return
    if tokens[0].type is TokenType.PIPE or tokens[-1].type is TokenType.PIPE:
        raise ShellSyntaxError(PIPE_ERROR)
    for current, following in zip(tokens, tokens[1:]):
        if current.type is TokenType.PIPE and following.type is TokenType.PIPE:
            raise ShellSyntaxError(PIPE_ERROR)


def check_redirections(tokens: Sequence[Token]) -> None:
    """Require every redirection to be followed by a word or quoted string."""
    for index, token in enumerate(tokens):
        if not token.type.is_redirection:
            continue
        following = tokens[index + 1] if index + 1 < len(tokens) else None
        if following is None or not following.type.is_text:
            raise ShellSyntaxError(REDIRECTION_ERROR)


def check_syntax(shell: Shell) -> None:
    """Check the shell's tokens.

    On an error the tokens are dropped, the exit status is set to 2 and
    the ShellSyntaxError is raised again for the caller to report.
    """
    try:
        check_pipes(shell.tokens)
        check_redirections(shell.tokens)
    except ShellSyntaxError:
        shell.tokens = []
        shell.exit_status = 2
        raise