"""Commands the shell runs itself: echo, cd, pwd, export, unset, env, exit."""

from __future__ import annotations

import os
import sys
from collections.abc import Iterable, Sequence
from itertools import dropwhile
from typing import TextIO

from minishellpy.environment import (
    export_listing,
    is_valid_identifier,
    remove_env,
    set_env,
)
from minishellpy.expand import getenv
from minishellpy.shell import Shell

BUILTINS = frozenset({"echo", "cd", "pwd", "export", "unset", "env", "exit"})

_GETCWD_ERROR = (
    "minishell: cd: error retrieving current directory: "
    "getcwd: cannot access parent directories: No such file or directory"
)

_CURRENT_KEY = "PWD"
_PREVIOUS_KEY = "OLDPWD"


class ShellExit(Exception):
    """Raised by ``exit`` to end the shell with ``status``."""

    def __init__(self, status: int) -> None:
        self.status = status
        super().__init__(f"exit {status}")


def is_builtin(name: str) -> bool:
    """True when ``name`` is a command the shell runs itself."""
    return name in BUILTINS


def is_n_flag(arg: str) -> bool:
    """True for ``-n``, ``-nn`` and so on."""
    return len(arg) > 1 and arg[0] == "-" and all(char == "n" for char in arg[1:])


def is_numeric(text: str) -> bool:
    """True when ``text`` is an optional sign followed only by digits."""
    body = text[1:] if text[:1] in ("-", "+") else text
    return all("0" <= char <= "9" for char in body)


def _to_int(text: str) -> int:
    negative = text[:1] == "-"
    body = text[1:] if text[:1] in ("-", "+") else text
    value = int(body) if body else 0
    return -value if negative else value


def _error(message: str) -> None:
    print(message, file=sys.stderr)


def _cwd() -> str | None:
    try:
        return os.getcwd()
    except OSError:
        return None


def _chdir(path: str) -> bool:
    try:
        os.chdir(path)
    except OSError as exc:
        _error(f"minishell: cd: {exc.strerror}")
        return False
    return True


def _record(shell: Shell, key: str, directory: str) -> None:
    set_env(shell.env, f"{key}={directory}")


def run_echo(args: Sequence[str], out: TextIO) -> int:
    """Print the arguments separated by spaces; ``-n`` drops the newline."""
    words = list(args[1:])
    rest = list(dropwhile(is_n_flag, words))
    newline = len(rest) == len(words)
    out.write(" ".join(rest) + ("\n" if newline else ""))
    return 0


def run_env(env: Iterable[str], out: TextIO) -> int:
    """Print every environment entry that has a value."""
    for entry in env:
        if "=" in entry:
            out.write(entry + "\n")
    return 0


def run_pwd(out: TextIO) -> int:
    """Print the current directory."""
    try:
        cwd = os.getcwd()
    except OSError as exc:
        _error(f"pwd: {exc.strerror}")
        return 1
    out.write(cwd + "\n")
    return 0


def run_export(shell: Shell, args: Sequence[str], out: TextIO) -> int:
    """Set environment entries, or list them all when given no arguments."""
    if len(args) < 2:
        for line in export_listing(shell.env):
            out.write(line + "\n")
        return 0
    status = 0
    for arg in args[1:]:
        if is_valid_identifier(arg):
            set_env(shell.env, arg)
        else:
            out.write(f"minishell: export: {arg}: not a valid identifier\n")
            shell.exit_status = 1
            status = 1
    return status


def run_unset(shell: Shell, args: Sequence[str], out: TextIO) -> int:
    """Remove environment entries by name."""
    status = 0
    for arg in args[1:]:
        if is_valid_identifier(arg):
            remove_env(shell.env, arg)
        else:
            out.write(f"minishell: unset: {arg}: not a valid identifier\n")
            shell.exit_status = 1
            status = 1
    return status


def _cd_path(shell: Shell, path: str) -> int:
    previous = _cwd()
    if previous is None:
        _error(_GETCWD_ERROR)
        shell.exit_status = 1
        return 1
    if not _chdir(path):
        shell.exit_status = 1
        return 1
    current = _cwd()
    if current is None:
        _record(shell, _CURRENT_KEY, "")
        shell.exit_status = 1
        return 1
    _record(shell, _PREVIOUS_KEY, previous)
    _record(shell, _CURRENT_KEY, current)
    shell.exit_status = 0
    return 0


def _cd_home(shell: Shell, out: TextIO) -> int:
    home = getenv(shell.env, "HOME")
    if home is None:
        out.write("minishell: cd: HOME not set\n")
        shell.exit_status = 1
        return 1
    previous = _cwd()
    if not _chdir(home):
        shell.exit_status = 1
        return 1
    current = _cwd() or home
    if previous is not None:
        _record(shell, _PREVIOUS_KEY, previous)
    _record(shell, _CURRENT_KEY, current)
    shell.exit_status = 0
    return 0


def _cd_oldpwd(shell: Shell, out: TextIO) -> int:
    target = getenv(shell.env, _PREVIOUS_KEY)
    if target is None:
        out.write("minishell: cd: OLDPWD not set\n")
        shell.exit_status = 1
        return 1
    out.write(target + "\n")
    return _cd_path(shell, target)


def run_cd(shell: Shell, args: Sequence[str], out: TextIO) -> int:
    """Change directory: to HOME with no argument or ``~``, to OLDPWD with ``-``."""
    path = args[1] if len(args) > 1 else None
    if path is None or path == "~":
        return _cd_home(shell, out)
    if path == "-":
        return _cd_oldpwd(shell, out)
    return _cd_path(shell, path)


def run_exit(shell: Shell, args: Sequence[str], out: TextIO) -> int:
    """Leave the shell by raising ShellExit.

    With more than one argument nothing happens except an error and a
    status of 1; a non-numeric argument exits with status 2.
    """
    status = 0
    if len(args) > 1:
        arg = args[1]
        if not is_numeric(arg):
            out.write(f"minishell: exit: {arg}: numeric arg required\n")
            raise ShellExit(2)
        status = _to_int(arg) % 256
        if len(args) > 2:
            out.write("minishell: exit: too many arguments\n")
            shell.last_exit_status = 1
            return 1
    out.write("exit\n")
    raise ShellExit(status & 0xFF)