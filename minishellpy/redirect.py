"""Recording redirections on a command and reading here-documents."""

from __future__ import annotations

import os
import sys
from collections.abc import Callable, Sequence

from minishellpy.expand import expand_heredoc
from minishellpy.shell import Command, Shell
from minishellpy.tokens import TokenType

_FILE_MODE = 0o644


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _prepare_output(command: Command, target: str, flags: int) -> None:
    try:
        fd = os.open(target, flags, _FILE_MODE)
    except OSError:
        command.exit_status = 1
        _error(f"minishell: {target}: Permission denied")
        return
    try:
        os.close(fd)
    except OSError:
        command.exit_status = 1
        _error("minishell: Error closing file")


def process_redirection(
    shell: Shell, command: Command, operator: TokenType, target: str
) -> None:
    """Record a redirection on ``command``.

    Input files are checked for reading and output files are created
    (and truncated for ``>``) at once; a failure marks the command with
    status 1. The shell's exit status follows the command's.
    """
    if operator is TokenType.REDIRECT_IN:
        command.infile = target
        if not os.access(target, os.R_OK):
            command.exit_status = 1
            _error(f"minishell: {target}: No such file or directory")
    elif operator is TokenType.REDIRECT_OUT:
        command.outfile = target
        command.append = False
        _prepare_output(command, target, os.O_WRONLY | os.O_CREAT | os.O_TRUNC)
    elif operator is TokenType.APPEND:
        command.outfile = target
        command.append = True
        _prepare_output(command, target, os.O_WRONLY | os.O_CREAT | os.O_APPEND)
    elif operator is TokenType.HEREDOC:
        command.delimiter = target
        command.heredoc = True
    else:
        raise ValueError(f"not a redirection: {operator!r}")
    shell.exit_status = 1 if command.exit_status == 1 else 0


def read_heredoc(
    delimiter: str, env: Sequence[str], reader: Callable[[str], str | None]
) -> str:
    """Read lines with ``reader`` until ``delimiter`` or end of input.

    Each line has its ``$NAME`` references expanded and ends with a newline.
    """
    lines: list[str] = []
    while True:
        try:
            line = reader("> ")
        except EOFError:
            break
        if line is None or line == delimiter:
            break
        lines.append(expand_heredoc(line, env) + "\n")
    return "".join(lines)